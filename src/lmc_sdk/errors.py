"""
LMC SDK Error Hierarchy
=======================

This module defines the exception hierarchy for the whole LMC SDK.
All exceptions inherit from LMCError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
LMCError (base)
├── AssemblerError (assembler-related)
│   ├── AssemblySyntaxError - malformed line (too many words, no mnemonic)
│   ├── OperandError - missing, forbidden or out-of-range operand
│   ├── CapacityError - program does not fit in 100 cells
│   ├── ResolutionError - operand cannot be resolved in the second pass
│   │   └── UndefinedLabelError - reference to a label that was never defined
│   ├── AssemblyFailedError - raised once after both passes if anything failed
│   └── TooManyErrors - error limit reached
└── MachineError (execution-related)
    ├── MemoryImageError - image cannot be loaded into the 100-cell memory
    └── InputError - INP could not obtain a value
        ├── InvalidInputError - input text is not an integer
        └── InputExhaustedError - no more input values

Design Philosophy
-----------------
Assembly errors capture source location information (filename, line, column)
so they can be reported together after a run, in this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LMCError(Exception):
    """
    Base exception for all LMC SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            assembler.assemble_file("program.lmc")
        except LMCError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(LMCError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Source line number, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            add.lmc:3:5: error: label "fiv" was not found
                ADD fiv
                    ^
            hint: did you mean 'five'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    A line does not follow the ``[label] mnemonic [operand]`` shape.

    Examples:
        - More words than the line shape allows
        - A label that is not followed by a mnemonic
        - A lone word that is not a mnemonic
    """
    pass


class OperandError(AssemblerError):
    """
    Operand present where forbidden, missing where required, or a DAT
    literal outside 0-999.

    Example:
        OUT 5      ; Error: OUT does not accept a parameter
        LDA        ; Error: LDA requires a parameter
        DAT 1000   ; Error: DAT supports numbers between 0 and 999
    """
    pass


class CapacityError(AssemblerError):
    """
    The program needs more than the 100 memory cells of the machine.

    The offending line allocates nothing; assembly continues so that the
    remaining lines are still checked.
    """
    pass


class ResolutionError(AssemblerError):
    """
    A pending operand could not be folded into its instruction word.

    Raised during the second pass for numeric operands that are too large
    and for labels whose cell lies outside the addressable 0-99 range.
    """
    pass


class UndefinedLabelError(ResolutionError):
    """
    Reference to a label that is not defined anywhere in the source.

    The resolver suggests similarly-named labels when this error occurs,
    helping to catch typos.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_labels: Optional[list[str]] = None,
    ):
        self.label = label
        self.similar_labels = similar_labels or []

        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f'label "{label}" was not found',
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AssemblyFailedError(AssemblerError):
    """
    Raised once both passes are done if any error was recorded.

    The individual diagnostics are available in ``errors``; the message
    is the full formatted report.
    """

    def __init__(self, errors: list[AssemblerError], report: str):
        self.errors = list(errors)
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"assembly failed with {count} {noun}:\n\n{report}")

    def _format_message(self) -> str:
        # The report already carries per-error locations
        return self.message

    @property
    def error_count(self) -> int:
        return len(self.errors)


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered.

    This prevents a badly broken source file from flooding the report.
    """

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)


# =============================================================================
# Machine Exceptions
# =============================================================================

class MachineError(LMCError):
    """Base exception for errors raised while loading or running a program."""
    pass


class MemoryImageError(MachineError):
    """
    A memory image cannot be loaded.

    Raised when an image has more than 100 words or holds a value outside
    the 0-999 word range.
    """
    pass


class InputError(MachineError):
    """INP could not obtain a value from the input device."""
    pass


class InvalidInputError(InputError):
    """
    The operator supplied text that is not an integer.

    Attributes:
        text: The rejected input text
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid input {text!r}: expected an integer")


class InputExhaustedError(InputError):
    """
    INP was executed but the input source has no values left.

    Only raised when the emulator is configured with
    ``on_input_exhausted="error"`` (the default).
    """

    def __init__(self, message: str = "input exhausted: no value available for INP"):
        super().__init__(message)


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The assembler uses this to continue processing after encountering
    an error, collecting every diagnostic before reporting them together.
    This helps users fix multiple issues without repeated assembly runs.

    Example:
        collector = ErrorCollector(max_errors=100)
        collector.add(OperandError("the OUT instruction does not accept a parameter"))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Args:
            error: The error to add

        Raises:
            TooManyErrors: If max_errors errors are already collected; the
                new error is dropped
        """
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")
        self.errors.append(error)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors and warnings, ending with a
            summary line such as "found 2 errors, 0 warnings".
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"found {len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
