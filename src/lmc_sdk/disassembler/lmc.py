"""
LMC Disassembler
================

Turns LMC memory words back into assembly text. This is the inverse of the
assembler's encoding, with one wrinkle: instruction lines can only produce
``000``, ``800``, ``900`` and ``1xx``-``7xx``, so any other word
(``0xx``, ``8xx`` or ``9xx`` with a non-zero address) must have come from
a DAT line, and is shown as one.

Symbols
-------
When a symbol table (address -> label) is supplied, address operands are
shown by name and labelled cells get their label in the comment column,
which makes disassembly of an assembled program read like its source.

Usage:
    disasm = Disassembler()

    # Disassemble a whole image
    words = disasm.disassemble(program.image)

    # Disassemble a single word
    instr = disasm.disassemble_one(105, address=1)
    print(instr.text)        # ADD 5

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from lmc_sdk.cpu import INHERENT_OPCODES, MEMORY_SIZE, Opcode, decode


@dataclass(frozen=True)
class DisassembledWord:
    """
    A single disassembled memory word.

    Attributes:
        address: Cell holding the word
        word: The raw word (0-999)
        mnemonic: Instruction mnemonic, or "DAT"
        operand: Formatted operand ("" for HLT, INP and OUT)
        label: Label bound to this cell, if known
    """
    address: int
    word: int
    mnemonic: str
    operand: str = ""
    label: str = ""

    @property
    def text(self) -> str:
        """Assembly text without address or label, e.g. ``ADD 5``."""
        if self.operand:
            return f"{self.mnemonic} {self.operand}"
        return self.mnemonic

    def __str__(self) -> str:
        """Format as listing line: ADDRESS: WORD  TEXT  ; LABEL"""
        line = f"{self.address:3d}: {self.word:03d}  {self.text}"
        if self.label:
            return f"{line:<24} ; {self.label}"
        return line

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": self.address,
            "word": self.word,
            "mnemonic": self.mnemonic,
            "operand": self.operand,
            "text": self.text,
            "label": self.label,
        }


class Disassembler:
    """
    Disassembler for LMC memory words.

    Attributes:
        _symbol_table: Optional address -> label map for annotation
    """

    def __init__(self, symbol_table: Optional[dict[int, str]] = None):
        """
        Initialize the disassembler.

        Args:
            symbol_table: Optional dict mapping addresses to label names
        """
        self._symbol_table = dict(symbol_table or {})

    @classmethod
    def from_labels(cls, labels: dict[str, int]) -> "Disassembler":
        """
        Build a disassembler from an assembler label table (name -> cell).

        When several labels share a cell the alphabetically first is used.
        """
        symbols: dict[int, str] = {}
        for name in sorted(labels):
            symbols.setdefault(labels[name], name)
        return cls(symbols)

    def add_symbol(self, address: int, name: str) -> None:
        self._symbol_table[address] = name

    def disassemble_one(self, word: int, address: int = 0) -> DisassembledWord:
        """
        Disassemble a single word.

        Args:
            word: Word value (0-999)
            address: Cell the word lives in

        Returns:
            DisassembledWord

        Raises:
            ValueError: If word is not 0-999
        """
        if not 0 <= word <= 999:
            raise ValueError(f"word out of range: {word}")

        label = self._symbol_table.get(address, "")
        op, operand = decode(word)
        opcode = Opcode(op)

        if opcode in INHERENT_OPCODES:
            if operand != 0:
                return DisassembledWord(address, word, "DAT", str(word), label)
            return DisassembledWord(address, word, opcode.name, "", label)

        target = self._symbol_table.get(operand, str(operand))
        return DisassembledWord(address, word, opcode.name, target, label)

    def disassemble(
        self,
        memory: Sequence[int],
        start: int = 0,
        count: Optional[int] = None,
    ) -> list[DisassembledWord]:
        """
        Disassemble consecutive cells.

        Args:
            memory: Memory words, indexed by address
            start: First address
            count: Number of words (None = to the end of memory)

        Returns:
            List of DisassembledWord objects
        """
        end = min(len(memory), MEMORY_SIZE)
        if count is not None:
            end = min(end, start + count)
        return [self.disassemble_one(memory[address], address) for address in range(start, end)]

    def disassemble_to_text(
        self,
        memory: Sequence[int],
        start: int = 0,
        count: Optional[int] = None,
    ) -> str:
        """Disassemble and return a multi-line listing."""
        return "\n".join(str(w) for w in self.disassemble(memory, start, count))
