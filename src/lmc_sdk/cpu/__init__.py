"""
LMC SDK CPU Package
===================

This package contains the Little Man Computer architecture definitions
shared by the assembler, the disassembler and the emulator, so all three
agree on mnemonics and on the word encoding.

Modules:
    isa: Opcodes, the mnemonic table, machine geometry and word
         encode/decode helpers.

Usage:
    from lmc_sdk.cpu import Opcode, lookup_mnemonic, encode

    assert lookup_mnemonic("lda") is Opcode.LDA
    assert encode(Opcode.LDA, 4) == 404
"""

from lmc_sdk.cpu.isa import (
    # Core types
    Opcode,
    # Machine geometry
    MEMORY_SIZE,
    WORD_MODULUS,
    MAX_WORD,
    MAX_ADDRESS,
    # Instruction set reference sets
    MNEMONICS,
    ADDRESSED_OPCODES,
    INHERENT_OPCODES,
    BRANCH_OPCODES,
    # Lookup and encoding functions
    lookup_mnemonic,
    is_mnemonic,
    is_valid_word,
    encode,
    decode,
)

__all__ = [
    "Opcode",
    "MEMORY_SIZE",
    "WORD_MODULUS",
    "MAX_WORD",
    "MAX_ADDRESS",
    "MNEMONICS",
    "ADDRESSED_OPCODES",
    "INHERENT_OPCODES",
    "BRANCH_OPCODES",
    "lookup_mnemonic",
    "is_mnemonic",
    "is_valid_word",
    "encode",
    "decode",
]
