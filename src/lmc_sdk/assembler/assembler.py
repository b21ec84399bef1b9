"""
LMC Assembler - Main Interface
==============================

This module provides the main Assembler class, the primary interface for
assembling Little Man Computer source code. It drives the code generator
(pass 1 and the label resolver) and exposes the result as an
``AssembledProgram``: a 100-word memory image plus the number of cells
the source allocated.

Example Usage
-------------
>>> from lmc_sdk.assembler import Assembler
>>>
>>> asm = Assembler()
>>> program = asm.assemble_string('''
...         LDA A
...         ADD B
...         OUT
...         HLT
... A       DAT 5
... B       DAT 7
... ''')
>>> program.image
(404, 105, 900, 0, 5, 7)
>>> print(asm.get_dump())
  0:    404
  1:    105
  2:    900
  3:    0
  4:    5
  5:    7

Command-Line Usage
------------------
    $ lmc -s add.lmc       # assemble and dump
    $ lmc add.lmc          # assemble and run

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from lmc_sdk.assembler.codegen import AssemblyContext, CodeGenerator, ListingEntry
from lmc_sdk.cpu import MEMORY_SIZE
from lmc_sdk.errors import AssemblerError, AssemblyFailedError

logger = logging.getLogger(__name__)


# =============================================================================
# Assembly Result
# =============================================================================

@dataclass(frozen=True)
class AssembledProgram:
    """
    The output of a successful assembly.

    Attributes:
        memory: All 100 cells; cells past ``length`` are 0
        length: Number of cells allocated by the source
        labels: Label table (name -> cell)
        listing: Allocated cells with the statements that produced them
        warnings: Non-fatal diagnostics (e.g. redefined labels)
        filename: Source name
    """
    memory: tuple[int, ...]
    length: int
    labels: dict[str, int] = field(default_factory=dict)
    listing: tuple[ListingEntry, ...] = ()
    warnings: tuple[str, ...] = ()
    filename: str = "<input>"

    @property
    def image(self) -> tuple[int, ...]:
        """The meaningful part of memory (the first ``length`` cells)."""
        return self.memory[:self.length]

    @classmethod
    def from_context(cls, context: AssemblyContext) -> "AssembledProgram":
        return cls(
            memory=tuple(context.memory),
            length=context.pc,
            labels={name: sym.address for name, sym in context.labels.items()},
            listing=tuple(context.listing),
            warnings=tuple(context.errors.warnings),
            filename=context.filename,
        )

    def dump(self) -> str:
        """
        One ``address:    value`` line per assembled cell.

        The address is right-aligned to three columns.
        """
        return "\n".join(
            f"{address:3d}:    {value}" for address, value in enumerate(self.image)
        )

    def listing_text(self) -> str:
        """
        Assembly listing: address, word and source text per cell, followed
        by the label table sorted by address.
        """
        lines = []
        for entry in self.listing:
            word = self.memory[entry.address]
            lines.append(f"{entry.address:3d}  {word:03d}  {entry.statement.source_line.strip()}")

        if self.labels:
            lines.append("")
            lines.append("Labels:")
            for name, address in sorted(self.labels.items(), key=lambda item: (item[1], item[0])):
                lines.append(f"  {name:<16} {address:3d}")

        return "\n".join(lines)


# =============================================================================
# Assembler
# =============================================================================

class Assembler:
    """
    Main LMC assembler class.

    Each call to an assemble method is an independent run: the memory
    image, label table and diagnostics of one run never leak into the
    next, so the same Assembler can be reused.

    Attributes:
        verbose: If True, log progress at INFO level
        max_errors: Stop collecting diagnostics after this many errors
    """

    def __init__(self, verbose: bool = False, max_errors: int = 100):
        """
        Initialize the assembler.

        Args:
            verbose: Enable progress messages
            max_errors: Maximum errors collected per run
        """
        self._verbose = verbose
        self._codegen = CodeGenerator(max_errors=max_errors)
        self._program: Optional[AssembledProgram] = None
        self._errors: list[AssemblerError] = []
        self._error_report = ""

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: str, filename: str = "<input>") -> AssembledProgram:
        """Assemble source code (alias for assemble_string)."""
        return self.assemble_string(source, filename)

    def assemble_string(self, source: str, filename: str = "<input>") -> AssembledProgram:
        """
        Assemble source code from a string.

        Args:
            source: LMC assembly source
            filename: Virtual filename for error messages

        Returns:
            The assembled program

        Raises:
            AssemblyFailedError: If any line or reference failed; the
                exception carries every diagnostic of the run
        """
        self._program = None
        self._errors = []
        self._error_report = ""

        if self._verbose:
            logger.info("Assembling %s...", filename)

        try:
            context = self._codegen.generate(source, filename)
        except AssemblyFailedError as e:
            self._errors = e.errors
            self._error_report = str(e)
            raise

        self._program = AssembledProgram.from_context(context)

        if self._verbose:
            logger.info(
                "Assembled %d of %d cells, %d labels",
                self._program.length, MEMORY_SIZE, len(self._program.labels),
            )
            for warning in self._program.warnings:
                logger.warning(warning)

        return self._program

    def assemble_file(self, filepath: str | Path) -> AssembledProgram:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to the LMC source file

        Returns:
            The assembled program

        Raises:
            AssemblyFailedError: If assembly fails
            FileNotFoundError: If the source file does not exist
        """
        filepath = Path(filepath)
        source = filepath.read_text(encoding="ascii", errors="replace")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_program(self) -> AssembledProgram:
        """
        Get the last successfully assembled program.

        Raises:
            AssemblerError: If nothing has been assembled successfully
        """
        if self._program is None:
            raise AssemblerError("no program has been assembled")
        return self._program

    def get_memory(self) -> list[int]:
        """Get a copy of the full 100-cell memory image."""
        return list(self.get_program().memory)

    def get_length(self) -> int:
        """Get the number of assembled cells."""
        return self.get_program().length

    def get_symbols(self) -> dict[str, int]:
        """Get the label table (name -> cell)."""
        return dict(self.get_program().labels)

    def get_dump(self) -> str:
        """Get the ``address:    value`` dump of the assembled cells."""
        return self.get_program().dump()

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return self.get_program().listing_text()

    def get_warnings(self) -> list[str]:
        """Get warnings from the last successful run."""
        return list(self.get_program().warnings)

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """True if the last run failed."""
        return bool(self._errors)

    def get_errors(self) -> list[AssemblerError]:
        """Diagnostics of the last failed run (empty after a success)."""
        return list(self._errors)

    def get_error_report(self) -> str:
        """Formatted report of the last failed run (empty after a success)."""
        return self._error_report


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> AssembledProgram:
    """
    Convenience function to assemble source code.

    Raises:
        AssemblyFailedError: If assembly fails
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> AssembledProgram:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblyFailedError: If assembly fails
        FileNotFoundError: If the file does not exist
    """
    return Assembler().assemble_file(filepath)
