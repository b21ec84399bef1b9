"""
LMC Code Generator
==================

This module turns LMC source text into a 100-word memory image. It
implements the first of the two assembly passes and drives the second
one (see ``resolver.py``):

Pass 1 (Allocation)
-------------------
- Tokenize and classify every line
- Bind labels to the next free cell
- Allocate exactly one cell per instruction or DAT line
- Store opcode bases and DAT literals directly
- Queue a pending reference for every address operand

Pass 2 (Resolution)
-------------------
- Fold each pending operand (number or label address) into its cell

Both passes collect errors instead of stopping at the first one, so a
single run reports every problem in the source. All state lives in an
``AssemblyContext`` owned by one ``generate()`` call; nothing is shared
between runs.

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass, field
import logging

from lmc_sdk.errors import (
    AssemblerError,
    AssemblyFailedError,
    CapacityError,
    ErrorCollector,
    OperandError,
    SourceLocation,
    TooManyErrors,
)
from lmc_sdk.assembler.lexer import Lexer, Token, is_number
from lmc_sdk.assembler.parser import Statement, parse_line
from lmc_sdk.assembler.resolver import LabelResolver
from lmc_sdk.cpu import MAX_WORD, MEMORY_SIZE, Opcode

logger = logging.getLogger(__name__)


# =============================================================================
# Assembly State
# =============================================================================

@dataclass
class Symbol:
    """
    Label table entry.

    Attributes:
        name: Label name (case-sensitive)
        address: Cell the label is bound to
        location: Where the label was defined
    """
    name: str
    address: int
    location: SourceLocation


@dataclass
class PendingReference:
    """
    An address operand waiting for the second pass.

    Attributes:
        cell: Cell holding the opcode base to patch
        operand: The operand token (a number or a label name)
        source_line: Source text of the referencing line
    """
    cell: int
    operand: Token
    source_line: str = ""

    @property
    def text(self) -> str:
        return self.operand.text

    @property
    def location(self) -> SourceLocation:
        return self.operand.location


@dataclass
class ListingEntry:
    """One allocated cell and the statement that produced it."""
    address: int
    statement: Statement


@dataclass
class AssemblyContext:
    """
    Everything one assembly run reads and writes.

    Attributes:
        filename: Source name used in diagnostics
        memory: The 100-cell image being built
        pc: Next free cell (equals the assembled length when done)
        labels: Label table (name -> Symbol); later definitions win
        pending: Pending references keyed by cell
        listing: Allocated cells in order, for listings
        errors: Collected diagnostics
    """
    filename: str = "<input>"
    memory: list[int] = field(default_factory=lambda: [0] * MEMORY_SIZE)
    pc: int = 0
    labels: dict[str, Symbol] = field(default_factory=dict)
    pending: dict[int, PendingReference] = field(default_factory=dict)
    listing: list[ListingEntry] = field(default_factory=list)
    errors: ErrorCollector = field(default_factory=ErrorCollector)

    def allocate(self, value: int, statement: Statement) -> int:
        """Store value in the next free cell and return that cell."""
        cell = self.pc
        self.memory[cell] = value
        self.listing.append(ListingEntry(cell, statement))
        self.pc += 1
        return cell


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates an LMC memory image from source text.

    Usage:
        codegen = CodeGenerator()
        context = codegen.generate(source, "add.lmc")
        image = context.memory[:context.pc]
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the code generator.

        Args:
            max_errors: Stop collecting after this many errors
        """
        self._max_errors = max_errors

    def generate(self, source: str, filename: str = "<input>") -> AssemblyContext:
        """
        Run both passes over source.

        Args:
            source: LMC assembly source
            filename: Name used in diagnostics

        Returns:
            The finished AssemblyContext

        Raises:
            AssemblyFailedError: If any error was recorded in either pass
        """
        context = AssemblyContext(
            filename=filename,
            errors=ErrorCollector(max_errors=self._max_errors),
        )

        try:
            self._pass1(context, source)
            LabelResolver(context).resolve()
        except TooManyErrors as e:
            context.errors.add_warning(e.message)

        if context.errors.has_errors():
            logger.debug(
                "%s: assembly failed with %d error(s)",
                filename, context.errors.error_count(),
            )
            raise AssemblyFailedError(context.errors.errors, context.errors.report())

        logger.debug(
            "%s: assembled %d cell(s), %d label(s)",
            filename, context.pc, len(context.labels),
        )
        return context

    # =========================================================================
    # Pass 1
    # =========================================================================

    def _pass1(self, context: AssemblyContext, source: str) -> None:
        """First pass: classify lines, bind labels, allocate cells."""
        for _, raw, tokens in Lexer(source, context.filename).lines():
            if not tokens:
                continue
            try:
                statement = parse_line(tokens, raw)
                self._pass1_statement(context, statement)
            except AssemblerError as e:
                context.errors.add(e)

        logger.debug(
            "pass 1: %d cell(s), %d pending reference(s)",
            context.pc, len(context.pending),
        )

    def _pass1_statement(self, context: AssemblyContext, stmt: Statement) -> None:
        """Process a single statement in pass 1."""
        if stmt.label is not None:
            self._define_label(context, stmt.label)

        if context.pc >= MEMORY_SIZE:
            raise CapacityError(
                f"program too long; limit is {MEMORY_SIZE} instructions/data",
                location=stmt.mnemonic.location,
                source_line=stmt.source_line,
            )

        opcode = stmt.opcode
        if opcode is Opcode.DAT:
            self._emit_data(context, stmt)
        elif opcode.takes_address:
            self._emit_addressed(context, stmt)
        else:
            self._emit_inherent(context, stmt)

    def _define_label(self, context: AssemblyContext, label: Token) -> None:
        """Bind a label to the next free cell, replacing any earlier binding."""
        existing = context.labels.get(label.text)
        if existing is not None:
            context.errors.add_warning(
                f"{label.location}: label \"{label.text}\" redefined "
                f"(previously defined at {existing.location})"
            )

        context.labels[label.text] = Symbol(label.text, context.pc, label.location)
        logger.debug("label %r -> %d", label.text, context.pc)

    def _emit_inherent(self, context: AssemblyContext, stmt: Statement) -> None:
        """HLT, INP, OUT: no operand, the base is the final word."""
        if stmt.operand is not None:
            raise OperandError(
                f"the {stmt.opcode.name} instruction does not accept a parameter",
                location=stmt.operand.location,
                source_line=stmt.source_line,
            )
        context.allocate(stmt.opcode.base, stmt)

    def _emit_addressed(self, context: AssemblyContext, stmt: Statement) -> None:
        """ADD..BRP: store the base now, fold the address in pass 2."""
        if stmt.operand is None:
            raise OperandError(
                f"the {stmt.opcode.name} instruction requires a parameter (label reference)",
                location=stmt.mnemonic.location,
                source_line=stmt.source_line,
            )
        cell = context.allocate(stmt.opcode.base, stmt)
        context.pending[cell] = PendingReference(cell, stmt.operand, stmt.source_line)

    def _emit_data(self, context: AssemblyContext, stmt: Statement) -> None:
        """DAT: optional literal 0-999 stored as is."""
        if stmt.operand is None:
            context.allocate(0, stmt)
            return

        text = stmt.operand.text
        if not is_number(text) or int(text) > MAX_WORD:
            raise OperandError(
                f"DAT supports numbers between 0 and {MAX_WORD}",
                location=stmt.operand.location,
                source_line=stmt.source_line,
                hint=None if is_number(text) else f"'{text}' is not a decimal number",
            )
        context.allocate(int(text), stmt)
