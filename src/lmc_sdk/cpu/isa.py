"""
Little Man Computer Instruction Set
===================================

This module defines the fixed eleven-entry LMC instruction set, the
mnemonic lookup used by the assembler and the word encoding shared by
the assembler, the disassembler and the emulator.

Word Encoding
-------------
Every memory cell holds a 3-digit decimal word (0-999). An instruction is
packed as ``base + address`` where ``base`` is the opcode times 100 and
``address`` is a 2-digit cell number (0-99):

| Mnemonic | Base | Operand            | Effect                             |
|----------|------|--------------------|------------------------------------|
| HLT      |  000 | none               | stop                               |
| ADD      |  100 | address            | acc += mem[address]                |
| SUB      |  200 | address            | acc -= mem[address]                |
| STA      |  300 | address            | mem[address] = acc                 |
| LDA      |  400 | address            | acc = mem[address]                 |
| BRA      |  500 | address            | pc = address                       |
| BRZ      |  600 | address            | pc = address if acc == 0           |
| BRP      |  700 | address            | pc = address if no overflow        |
| INP      |  800 | none               | acc = input                        |
| OUT      |  900 | none               | output acc                         |
| DAT      |    - | optional literal   | raw data word                      |

DAT is not an instruction: it reserves one cell holding a literal value.
"""

from enum import IntEnum
from string import ascii_lowercase, ascii_uppercase
from typing import Optional


# =============================================================================
# Machine Geometry
# =============================================================================

MEMORY_SIZE = 100     # Cells 0-99
WORD_MODULUS = 1000   # Words are 0-999
MAX_WORD = WORD_MODULUS - 1
MAX_ADDRESS = MEMORY_SIZE - 1


# =============================================================================
# Opcode Enumeration
# =============================================================================

class Opcode(IntEnum):
    """
    LMC opcodes.

    The value of each member is the hundreds digit of the packed word,
    except for DAT, which has no encoding of its own.
    """
    HLT = 0
    ADD = 1
    SUB = 2
    STA = 3
    LDA = 4
    BRA = 5
    BRZ = 6
    BRP = 7
    INP = 8
    OUT = 9
    DAT = 10

    @property
    def base(self) -> int:
        """Packed word for this opcode with a zero address (HLT=0 ... OUT=900)."""
        if self is Opcode.DAT:
            raise ValueError("DAT has no opcode base")
        return self.value * 100

    @property
    def takes_address(self) -> bool:
        """True for opcodes whose operand is a memory address."""
        return self in ADDRESSED_OPCODES


# Opcodes that require an address operand (resolved in the second pass)
ADDRESSED_OPCODES = frozenset({
    Opcode.ADD, Opcode.SUB, Opcode.STA, Opcode.LDA,
    Opcode.BRA, Opcode.BRZ, Opcode.BRP,
})

# Opcodes that must not have an operand
INHERENT_OPCODES = frozenset({Opcode.HLT, Opcode.INP, Opcode.OUT})

# Branch opcodes (write pc instead of the accumulator)
BRANCH_OPCODES = frozenset({Opcode.BRA, Opcode.BRZ, Opcode.BRP})

# Mnemonic table: canonical spelling -> opcode
MNEMONICS: dict[str, Opcode] = {op.name: op for op in Opcode}

# ASCII-only case folding; non-ASCII letters pass through unchanged
_ASCII_UPPER = str.maketrans(ascii_lowercase, ascii_uppercase)


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup_mnemonic(word: str) -> Optional[Opcode]:
    """
    Look up a mnemonic, ignoring ASCII case.

    Args:
        word: Candidate mnemonic text (e.g. "lda", "Brz")

    Returns:
        The matching Opcode, or None if the word is not a mnemonic
    """
    return MNEMONICS.get(word.translate(_ASCII_UPPER))


def is_mnemonic(word: str) -> bool:
    """Return True if word spells one of the eleven mnemonics."""
    return lookup_mnemonic(word) is not None


def is_valid_word(value: int) -> bool:
    """Return True if value fits in one memory cell."""
    return 0 <= value <= MAX_WORD


def encode(opcode: Opcode, address: int = 0) -> int:
    """
    Pack an opcode and an address into a word.

    Args:
        opcode: Any opcode except DAT
        address: Cell number 0-99 (must be 0 for HLT/INP/OUT)

    Returns:
        The packed word

    Raises:
        ValueError: If the address is out of range or not allowed
    """
    if not 0 <= address <= MAX_ADDRESS:
        raise ValueError(f"address {address} out of range 0-{MAX_ADDRESS}")
    if address and opcode in INHERENT_OPCODES:
        raise ValueError(f"{opcode.name} does not take an address")
    return opcode.base + address


def decode(word: int) -> tuple[int, int]:
    """
    Split a word into its (opcode digit, address) pair.

    This is the split the machine performs on every fetch; it does not
    check that the opcode digit names a real instruction.
    """
    return word // 100, word % 100
