"""
LMC Assembly Language Lexer
===========================

This module splits LMC source lines into words. The LMC grammar has no
operators, strings or punctuation: a line is a sequence of words separated
by whitespace, optionally ended by a comment.

Words
-----
A word is a maximal run of characters that are neither ASCII whitespace
nor a comment marker. Words keep their original spelling; case folding is
applied later, and only to the mnemonic position.

Comments
--------
Any of ``#``, ``/`` or ``;`` starts a comment, wherever it appears on the
line (even directly after a word). Everything from the marker to the end of
the line is discarded.

Example
-------
>>> from lmc_sdk.assembler.lexer import tokenize_line
>>> [t.text for t in tokenize_line("loop  LDA count ; fetch counter")]
['loop', 'LDA', 'count']
>>> tokenize_line("   # nothing here")
[]
"""

from dataclasses import dataclass
from typing import Iterator
import string

from lmc_sdk.errors import SourceLocation


# Characters that start a comment anywhere on a line
COMMENT_CHARS = frozenset("#/;")

# ASCII whitespace (space, tab, LF, VT, FF, CR)
WHITESPACE_CHARS = frozenset(" \t\n\v\f\r")

DIGIT_CHARS = frozenset(string.digits)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    One word of a source line.

    Attributes:
        text: The word exactly as written
        line: Line number in source (1-indexed)
        column: Column of the first character (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Tokenizer
# =============================================================================

def is_comment(char: str) -> bool:
    """Return True if char starts a comment."""
    return char in COMMENT_CHARS


def is_number(text: str) -> bool:
    """
    Return True if text is a plain decimal literal (ASCII digits only).

    An all-digit word in operand position is always a number, never a
    label reference.
    """
    return bool(text) and all(c in DIGIT_CHARS for c in text)


def tokenize_line(text: str, line: int = 1, filename: str = "<input>") -> list[Token]:
    """
    Split one source line into word tokens.

    Args:
        text: The line (a trailing newline is allowed)
        line: Line number used for token locations
        filename: File name used for token locations

    Returns:
        Tokens in order of appearance; empty for blank or comment-only lines
    """
    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while True:
        while pos < length and text[pos] in WHITESPACE_CHARS:
            pos += 1
        if pos >= length or is_comment(text[pos]):
            return tokens

        start = pos
        while pos < length and text[pos] not in WHITESPACE_CHARS and not is_comment(text[pos]):
            pos += 1
        tokens.append(Token(text[start:pos], line, start + 1, filename))


class Lexer:
    """
    Tokenizes a whole LMC source text, line by line.

    Usage:
        lexer = Lexer(source_text, "count.lmc")
        for line_number, raw_line, tokens in lexer.lines():
            ...

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def lines(self) -> Iterator[tuple[int, str, list[Token]]]:
        """
        Yield ``(line_number, raw_line, tokens)`` for every source line.

        Blank and comment-only lines are included with an empty token list
        so callers can keep line numbers aligned with the file. Only LF ends
        a line; a CR before it is whitespace and is dropped with it.
        """
        for number, raw in enumerate(self.source.split("\n"), start=1):
            raw = raw.rstrip("\r")
            yield number, raw, tokenize_line(raw, number, self.filename)

    def tokenize(self) -> Iterator[Token]:
        """Yield every word token in the source, in order."""
        for _, _, tokens in self.lines():
            yield from tokens
