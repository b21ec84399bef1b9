"""
LMC SDK - Assembler and Emulator for the Little Man Computer
============================================================

This package provides a toolchain for the Little Man Computer (LMC), the
classic teaching machine with 100 decimal memory cells, an accumulator
and ten instructions.

Main Components
---------------
- **assembler**: Two-pass LMC assembler
    Converts assembly source (.lmc) to a memory image of up to 100 words

- **emulator**: LMC emulator
    Runs memory images with breakpoints, watchpoints and tracing

- **disassembler**: Word-to-text disassembler
    Used for listings and execution traces

- **cli**: The ``lmc`` command
    Assembles a source file, then dumps, lists or runs it

Quick Start
-----------
Assemble and run a program:
    >>> from lmc_sdk import assemble, Emulator
    >>> program = assemble('''
    ...         LDA a
    ...         ADD b
    ...         OUT
    ...         HLT
    ... a       DAT 5
    ... b       DAT 7
    ... ''')
    >>> print(program.dump())
      0:    404
      1:    105
      2:    900
      3:    0
      4:    5
      5:    7
    >>> emu = Emulator()
    >>> emu.load_program(program)
    >>> emu.run().reason
    <BreakReason.HALTED: 1>
    >>> emu.outputs
    [12]

Or use the command-line tool:
    $ lmc -s add.lmc          # print the memory dump
    $ lmc -i 3 -i 4 sum.lmc   # run with two input values

Version History
---------------
1.0.0 - Initial release with assembler, emulator, disassembler and CLI

Copyright (c) 2026 LMC SDK Contributors
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from lmc_sdk.assembler import Assembler, AssembledProgram, assemble, assemble_file
from lmc_sdk.emulator import (
    Emulator,
    EmulatorConfig,
    LMC,
    MachineState,
    Memory,
    BreakEvent,
    BreakReason,
    BreakpointManager,
)
from lmc_sdk.disassembler import Disassembler, DisassembledWord
from lmc_sdk.cpu import Opcode, MEMORY_SIZE, MAX_WORD, encode, decode
from lmc_sdk.errors import (
    LMCError,
    SourceLocation,
    AssemblerError,
    AssemblySyntaxError,
    OperandError,
    CapacityError,
    ResolutionError,
    UndefinedLabelError,
    AssemblyFailedError,
    MachineError,
    MemoryImageError,
    InputError,
    InvalidInputError,
    InputExhaustedError,
    ErrorCollector,
)

__all__ = [
    # Version
    "__version__",
    # Assembler
    "Assembler",
    "AssembledProgram",
    "assemble",
    "assemble_file",
    # Emulator
    "Emulator",
    "EmulatorConfig",
    "LMC",
    "MachineState",
    "Memory",
    "BreakEvent",
    "BreakReason",
    "BreakpointManager",
    # Disassembler
    "Disassembler",
    "DisassembledWord",
    # Instruction set
    "Opcode",
    "MEMORY_SIZE",
    "MAX_WORD",
    "encode",
    "decode",
    # Errors
    "LMCError",
    "SourceLocation",
    "AssemblerError",
    "AssemblySyntaxError",
    "OperandError",
    "CapacityError",
    "ResolutionError",
    "UndefinedLabelError",
    "AssemblyFailedError",
    "MachineError",
    "MemoryImageError",
    "InputError",
    "InvalidInputError",
    "InputExhaustedError",
    "ErrorCollector",
]
