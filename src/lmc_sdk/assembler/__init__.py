"""
LMC Assembler
=============

This package provides a two-pass assembler for the Little Man Computer.
It converts LMC assembly source into a 100-word memory image that can be
dumped, listed, or loaded into the emulator.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **Lexer / tokenize_line**: Split source lines into words, dropping comments
- **parse_line**: Classify a line as ``[label] mnemonic [operand]``
- **CodeGenerator**: First pass, allocates cells and binds labels
- **LabelResolver**: Second pass, folds operands into instruction words

Assembly Process
----------------
1. **Pass 1 (CodeGenerator)**:
   - Tokenize each line and classify it
   - Bind labels to the next free cell
   - Store opcode bases and DAT literals, queue address operands

2. **Pass 2 (LabelResolver)**:
   - Resolve each queued operand to a number or a label's cell
   - Add it into the opcode base already stored in the cell

Errors from both passes are collected and reported together; the run
fails as a whole if there was at least one.

Example Usage
-------------
>>> from lmc_sdk.assembler import Assembler
>>> asm = Assembler()
>>> program = asm.assemble_string('''
... loop    INP
...         BRZ done
...         OUT
...         BRA loop
... done    HLT
... ''')
>>> program.image
(800, 604, 900, 500, 0)

Source Syntax
-------------
- One statement per line: ``[label] mnemonic [operand]``
- Mnemonics are case-insensitive; labels and operands are not
- ``#``, ``/`` and ``;`` start a comment anywhere on a line
- Operands are decimal addresses (0-99) or label names
- ``DAT [value]`` reserves one cell holding 0-999

Copyright (c) 2026 LMC SDK Contributors
"""

from lmc_sdk.assembler.assembler import (
    Assembler,
    AssembledProgram,
    assemble,
    assemble_file,
)
from lmc_sdk.assembler.lexer import Lexer, Token, tokenize_line, is_comment, is_number
from lmc_sdk.assembler.parser import Statement, parse_line
from lmc_sdk.assembler.codegen import (
    AssemblyContext,
    CodeGenerator,
    ListingEntry,
    PendingReference,
    Symbol,
)
from lmc_sdk.assembler.resolver import LabelResolver

__all__ = [
    # Main class and functions
    "Assembler",
    "AssembledProgram",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "tokenize_line",
    "is_comment",
    "is_number",
    # Parser
    "Statement",
    "parse_line",
    # Code generator (pass 1)
    "AssemblyContext",
    "CodeGenerator",
    "ListingEntry",
    "PendingReference",
    "Symbol",
    # Label resolver (pass 2)
    "LabelResolver",
]
