"""
LMC Label Resolver (Pass 2)
===========================

After the first pass every address operand is parked as a pending
reference: the cell already holds its opcode base (100, 200, ... 700) and
the operand text is waiting to be turned into an address. The resolver
folds each operand into its cell.

Operand Grammar
---------------
- All ASCII digits: a literal address. Values above 999 can never fit a
  word; values 100-999 fit a word but not an address. Both are errors.
- Anything else: a label name, looked up case-sensitively in the label
  table built by pass 1. A label bound past cell 99 (possible only when a
  label prefixes a line that overflowed memory) cannot be addressed.

Because the first rule wins, a label spelled only with digits can be
defined but never referenced.

Error Policy
------------
A reference that fails to resolve is reported and its cell is left
untouched; resolution carries on with the next reference. Each reference
patches a different cell, so the order in which references are resolved
does not affect the result.
"""

from difflib import get_close_matches
from typing import TYPE_CHECKING
import logging

from lmc_sdk.assembler.lexer import is_number
from lmc_sdk.cpu import MAX_ADDRESS, MAX_WORD
from lmc_sdk.errors import AssemblerError, ResolutionError, UndefinedLabelError

if TYPE_CHECKING:
    from lmc_sdk.assembler.codegen import AssemblyContext, PendingReference

logger = logging.getLogger(__name__)


class LabelResolver:
    """
    Second assembly pass over an AssemblyContext.

    Usage:
        LabelResolver(context).resolve()
    """

    def __init__(self, context: "AssemblyContext"):
        self._context = context

    def resolve(self) -> int:
        """
        Resolve every pending reference of the context.

        Errors are added to the context's collector.

        Returns:
            Number of references successfully folded
        """
        resolved = 0
        for cell in sorted(self._context.pending):
            ref = self._context.pending[cell]
            try:
                address = self.resolve_operand(ref)
            except AssemblerError as e:
                self._context.errors.add(e)
                continue
            self._context.memory[cell] += address
            resolved += 1

        logger.debug(
            "pass 2: resolved %d of %d reference(s)",
            resolved, len(self._context.pending),
        )
        return resolved

    def resolve_operand(self, ref: "PendingReference") -> int:
        """
        Turn one operand into an address.

        Args:
            ref: The pending reference

        Returns:
            The address (0-99) to add into the referencing cell

        Raises:
            ResolutionError: If the number or the label address is out of range
            UndefinedLabelError: If the label does not exist
        """
        text = ref.text

        if is_number(text):
            value = int(text)
            if value > MAX_WORD:
                raise ResolutionError(
                    f'label "{text}" is too large a number',
                    location=ref.location,
                    source_line=ref.source_line,
                )
            if value > MAX_ADDRESS:
                raise ResolutionError(
                    f'address "{text}" is out of range',
                    location=ref.location,
                    source_line=ref.source_line,
                    hint=f"memory addresses go from 0 to {MAX_ADDRESS}",
                )
            return value

        symbol = self._context.labels.get(text)
        if symbol is None:
            raise UndefinedLabelError(
                text,
                location=ref.location,
                source_line=ref.source_line,
                similar_labels=self.similar_labels(text),
            )

        if symbol.address > MAX_ADDRESS:
            raise ResolutionError(
                f'offset of label "{text}" is too large ({symbol.address})',
                location=ref.location,
                source_line=ref.source_line,
                hint=f"'{text}' is defined at {symbol.location}, past the end of memory",
            )

        return symbol.address

    def similar_labels(self, name: str) -> list[str]:
        """Defined labels whose spelling is close to name (best first)."""
        labels = list(self._context.labels)
        # Labels are case-sensitive, so a case-only mismatch is the likeliest typo
        same_case = [label for label in labels if label.lower() == name.lower()]
        close = get_close_matches(name, labels, n=3, cutoff=0.6)
        return same_case + [label for label in close if label not in same_case]
