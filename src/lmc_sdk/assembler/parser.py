"""
LMC Assembly Language Parser
============================

This module classifies a tokenized source line as a statement of the form::

    [label] mnemonic [operand]

There are no directives or expressions in LMC assembly, so a statement is
fully described by its three optional/required words.

Label Detection
---------------
A line has a label exactly when its first word is *not* a mnemonic. The
mnemonic test is case-insensitive; labels and operands are not. As a
consequence a label can never be spelled like a mnemonic (``add``,
``Hlt``...), and an all-digit label can never be referenced because an
all-digit operand is always read as a number.

Shape Rules
-----------
- ``mnemonic`` and ``mnemonic operand`` (at most 2 words)
- ``label mnemonic`` and ``label mnemonic operand`` (at most 3 words)

Anything else raises AssemblySyntaxError.

Example
-------
>>> from lmc_sdk.assembler.lexer import tokenize_line
>>> from lmc_sdk.assembler.parser import parse_line
>>> stmt = parse_line(tokenize_line("five DAT 5"), "five DAT 5")
>>> stmt.label.text, stmt.opcode.name, stmt.operand.text
('five', 'DAT', '5')
"""

from dataclasses import dataclass
from typing import Optional

from lmc_sdk.assembler.lexer import Token
from lmc_sdk.cpu import Opcode, lookup_mnemonic
from lmc_sdk.errors import AssemblySyntaxError, SourceLocation


@dataclass(frozen=True)
class Statement:
    """
    A parsed source line.

    Attributes:
        opcode: The instruction (or DAT)
        mnemonic: The mnemonic token as written
        label: Label token, if the line defines one
        operand: Operand token, if present
        source_line: The raw source text (for listings and error context)
    """
    opcode: Opcode
    mnemonic: Token
    label: Optional[Token] = None
    operand: Optional[Token] = None
    source_line: str = ""

    @property
    def location(self) -> SourceLocation:
        """Location of the first word of the line."""
        first = self.label or self.mnemonic
        return first.location

    @property
    def line(self) -> int:
        return self.mnemonic.line


def parse_line(tokens: list[Token], source_line: str = "") -> Statement:
    """
    Classify one non-empty tokenized line.

    Args:
        tokens: Words of the line (must not be empty)
        source_line: The raw text, attached to the statement and to errors

    Returns:
        The parsed Statement

    Raises:
        AssemblySyntaxError: If the line does not have a valid shape
    """
    if not tokens:
        raise ValueError("parse_line() needs at least one token")

    first = tokens[0]
    opcode = lookup_mnemonic(first.text)

    if opcode is not None:
        if len(tokens) > 2:
            raise AssemblySyntaxError(
                "more than two words on the line is not legal",
                location=tokens[2].location,
                source_line=source_line,
                hint="a mnemonic can be followed by at most one parameter",
            )
        operand = tokens[1] if len(tokens) == 2 else None
        return Statement(opcode, first, None, operand, source_line)

    if len(tokens) < 2:
        raise AssemblySyntaxError(
            "a word by itself, which is not a mnemonic, is not legal",
            location=first.location,
            source_line=source_line,
        )

    second = tokens[1]
    opcode = lookup_mnemonic(second.text)
    if opcode is None:
        raise AssemblySyntaxError(
            "a label must be followed by a mnemonic",
            location=second.location,
            source_line=source_line,
        )

    if len(tokens) > 3:
        raise AssemblySyntaxError(
            "a mnemonic can be followed by at most one parameter",
            location=tokens[3].location,
            source_line=source_line,
        )

    operand = tokens[2] if len(tokens) == 3 else None
    return Statement(opcode, second, first, operand, source_line)
