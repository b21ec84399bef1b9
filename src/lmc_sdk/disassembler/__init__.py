"""
LMC SDK Disassembler Module
===========================

Disassembly of LMC memory words, used for execution traces and for
inspecting memory images.

Usage:
    from lmc_sdk.disassembler import Disassembler

    disasm = Disassembler.from_labels(program.labels)
    print(disasm.disassemble_to_text(program.image))
"""

from lmc_sdk.disassembler.lmc import Disassembler, DisassembledWord

__all__ = [
    "Disassembler",
    "DisassembledWord",
]
