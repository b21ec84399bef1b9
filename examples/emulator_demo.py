#!/usr/bin/env python3
"""
Little Man Computer Emulator Demo
=================================

This script demonstrates how to use the LMC SDK to:
1. Assemble a program and inspect the result
2. Run it with queued input
3. Debug it with breakpoints, watchpoints and single stepping

Usage:
    python examples/emulator_demo.py
"""

from pathlib import Path

from lmc_sdk import assemble_file
from lmc_sdk.disassembler import Disassembler
from lmc_sdk.emulator import Emulator, EmulatorConfig


def main():
    here = Path(__file__).parent

    # ==========================================================================
    # 1. Assemble
    # ==========================================================================
    program = assemble_file(here / "countdown.lmc")

    print("Memory dump:")
    print(program.dump())

    print("\nDisassembly:")
    print(Disassembler.from_labels(program.labels).disassemble_to_text(program.image))

    # ==========================================================================
    # 2. Run with queued input
    # ==========================================================================
    emu = Emulator(EmulatorConfig(max_steps=1000), inputs=[3])
    emu.load_program(program)
    event = emu.run()
    print(f"\n{event}: outputs {emu.outputs}")

    # ==========================================================================
    # 3. Debug
    # ==========================================================================
    # Stop every time the loop comes back round to OUT
    emu.reset()
    emu.feed_input(2)
    emu.breakpoints.add_breakpoint(program.labels["loop"])

    while not emu.is_halted:
        event = emu.run()
        state = emu.get_state()
        print(f"  {event}: acc={state.acc:03d} outputs={emu.outputs}")

    # Single step the addition program
    add = assemble_file(here / "add.lmc")
    emu = Emulator(inputs=[20, 22])
    emu.load_program(add)
    emu.breakpoints.add_write_watchpoint(add.labels["first"])
    print(f"\n{emu.run()}")
    while not emu.is_halted:
        print(f"  {emu.step()}  {emu.get_state()}")
    print(f"Result: {emu.outputs}")


if __name__ == "__main__":
    main()
