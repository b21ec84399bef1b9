"""
LMC Emulator
============

An emulator for the Little Man Computer: a decimal machine with 100
three-digit memory cells, one accumulator, a program counter and an
overflow flag.

This package provides:

- **LMC CPU**: The ten-instruction fetch-decode-execute cycle
- **Memory**: The 100-cell store, loaded from memory images
- **Devices**: Queued and interactive input, collecting and echoing output
- **Debugging**: Breakpoints, write watchpoints, single stepping, tracing

Quick Start
-----------

Basic usage::

    >>> from lmc_sdk import assemble
    >>> from lmc_sdk.emulator import Emulator
    >>> emu = Emulator(inputs=[3, 4])
    >>> emu.load_program(assemble("INP\\nSTA 9\\nINP\\nADD 9\\nOUT\\nHLT"))
    >>> emu.run().reason
    <BreakReason.HALTED: 1>
    >>> emu.outputs
    [7]

With debugging::

    >>> emu.reset()
    >>> emu.feed_input(3, 4)
    >>> emu.breakpoints.add_write_watchpoint(9)
    >>> event = emu.run()
    >>> event.reason, event.value
    (<BreakReason.MEMORY_WRITE: 3>, 3)

Module Structure
----------------

- `emulator.py`: Main Emulator class (high-level API) and EmulatorConfig
- `cpu.py`: LMC CPU implementation
- `memory.py`: 100-cell memory
- `devices.py`: Input and output devices
- `breakpoints.py`: Debugging support

Copyright (c) 2026 LMC SDK Contributors
"""

from lmc_sdk.emulator.breakpoints import Breakpoint, BreakEvent, BreakpointManager, BreakReason
from lmc_sdk.emulator.cpu import LMC, MachineState
from lmc_sdk.emulator.devices import (
    EXHAUSTION_POLICIES,
    CollectingOutput,
    EchoOutput,
    InputDevice,
    InteractiveInput,
    OutputDevice,
    QueuedInput,
    parse_input,
)
from lmc_sdk.emulator.emulator import Emulator, EmulatorConfig
from lmc_sdk.emulator.memory import Memory

__all__ = [
    # Main API
    "Emulator",
    "EmulatorConfig",
    # CPU
    "LMC",
    "MachineState",
    # Memory
    "Memory",
    # Devices
    "InputDevice",
    "OutputDevice",
    "QueuedInput",
    "InteractiveInput",
    "CollectingOutput",
    "EchoOutput",
    "EXHAUSTION_POLICIES",
    "parse_input",
    # Debugging
    "Breakpoint",
    "BreakpointManager",
    "BreakEvent",
    "BreakReason",
]
