"""
LMC CPU Emulator
================

The Little Man Computer has one accumulator, a program counter and an
overflow flag. Every instruction is a single decimal word: the hundreds
digit selects the operation and the last two digits are the address.

Registers
---------
- acc: accumulator, always 0-999
- pc: program counter, 0-99; incremented after every fetch and wrapping
  from 99 back to 0
- overflow: set by ADD when the sum exceeded 999 and by SUB when the
  result went below 0; cleared by any ADD or SUB that stays in range.
  BRP branches only while it is clear.

Instruction Semantics
---------------------
=====  ====  ==========================================================
Word   Op    Effect
=====  ====  ==========================================================
000    HLT   stop
1xx    ADD   acc = (acc + M[xx]) mod 1000
2xx    SUB   acc = (acc - M[xx]) mod 1000 (floored, 0 - 5 gives 995)
3xx    STA   M[xx] = acc
4xx    LDA   acc = M[xx]
5xx    BRA   pc = xx
6xx    BRZ   pc = xx if acc == 0
7xx    BRP   pc = xx if not overflow
800    INP   acc = input mod 1000
900    OUT   output acc
=====  ====  ==========================================================

The address digits of HLT, INP and OUT are ignored when executing, so
words like 042 or 917 still halt or output.

Instrumentation Hooks
---------------------
- ``on_instruction(pc, word) -> bool``: called before each instruction
  run by ``execute()``; returning False stops before it executes
- ``on_memory_write(address, value) -> bool``: called after each STA;
  returning False stops ``execute()`` after the instruction completes

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass
from typing import Callable, Optional
import logging

from lmc_sdk.cpu import MEMORY_SIZE, WORD_MODULUS, Opcode, decode
from lmc_sdk.emulator.devices import CollectingOutput, InputDevice, OutputDevice, QueuedInput
from lmc_sdk.emulator.memory import Memory
from lmc_sdk.errors import MachineError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MachineState:
    """
    Snapshot of the machine registers.

    Attributes:
        acc: Accumulator (0-999)
        pc: Address of the next instruction (0-99)
        overflow: Overflow flag from the last ADD or SUB
        halted: True once HLT has executed
        steps: Instructions executed since the last reset
    """
    acc: int = 0
    pc: int = 0
    overflow: bool = False
    halted: bool = False
    steps: int = 0


class LMC:
    """
    Little Man Computer CPU.

    The CPU owns its registers and executes against a Memory and a pair of
    I/O devices.

    Example:
        >>> from lmc_sdk.emulator.memory import Memory
        >>> cpu = LMC(Memory([404, 105, 900, 0, 5, 7]))
        >>> cpu.execute()
        4
        >>> cpu.output.values
        [12]
    """

    def __init__(
        self,
        memory: Optional[Memory] = None,
        input_device: Optional[InputDevice] = None,
        output_device: Optional[OutputDevice] = None,
    ):
        self.memory = memory if memory is not None else Memory()
        self.input: InputDevice = input_device if input_device is not None else QueuedInput()
        self.output: OutputDevice = output_device if output_device is not None else CollectingOutput()

        self.acc = 0
        self.pc = 0
        self.overflow = False
        self.halted = False
        self.steps = 0

        # on_instruction(pc, word) -> bool: return False to stop execution
        self.on_instruction: Optional[Callable[[int, int], bool]] = None
        # on_memory_write(address, value) -> bool: return False to stop execution
        self.on_memory_write: Optional[Callable[[int, int], bool]] = None

        self._memory_break_requested = False

    # =========================================================================
    # State
    # =========================================================================

    def reset(self) -> None:
        """Reset registers to power-on state. Memory is left untouched."""
        self.acc = 0
        self.pc = 0
        self.overflow = False
        self.halted = False
        self.steps = 0
        self._memory_break_requested = False

    def get_state(self) -> MachineState:
        """Return a snapshot of the registers."""
        return MachineState(self.acc, self.pc, self.overflow, self.halted, self.steps)

    def __repr__(self) -> str:
        status = "halted" if self.halted else "running"
        return f"LMC(acc={self.acc:03d}, pc={self.pc:02d}, overflow={self.overflow}, {status})"

    # =========================================================================
    # Execution
    # =========================================================================

    def step(self) -> None:
        """
        Execute exactly one instruction.

        The on_instruction hook is not consulted.

        Raises:
            MachineError: If the machine is halted
            InputError: If INP cannot obtain a value
        """
        if self.halted:
            raise MachineError("machine is halted; reset it before stepping")
        self._execute_instruction(self.memory.read(self.pc))
        self._memory_break_requested = False

    def execute(self, max_steps: Optional[int] = None) -> int:
        """
        Run until HLT, a hook stops execution, or max_steps instructions.

        Args:
            max_steps: Maximum instructions to execute (None for no limit)

        Returns:
            Number of instructions executed

        Raises:
            InputError: If INP cannot obtain a value
        """
        executed = 0

        while not self.halted:
            if max_steps is not None and executed >= max_steps:
                break

            word = self.memory.read(self.pc)
            if self.on_instruction:
                if not self.on_instruction(self.pc, word):
                    # Hook returned False - stop before executing (breakpoint hit)
                    break

            self._execute_instruction(word)
            executed += 1

            # Check if a memory watchpoint was triggered
            if self._memory_break_requested:
                self._memory_break_requested = False
                break

        return executed

    def _write(self, address: int, value: int) -> None:
        self.memory.write(address, value)
        if self.on_memory_write:
            if not self.on_memory_write(address, value):
                self._memory_break_requested = True

    def _execute_instruction(self, word: int) -> None:
        """Decode and execute one word; pc is advanced before the effect."""
        op, address = decode(word)
        self.pc = (self.pc + 1) % MEMORY_SIZE
        self.steps += 1

        match op:
            case Opcode.HLT:
                self.halted = True
                logger.debug("HLT after %d step(s)", self.steps)
            case Opcode.ADD:
                total = self.acc + self.memory.read(address)
                self.overflow = total >= WORD_MODULUS
                self.acc = total % WORD_MODULUS
            case Opcode.SUB:
                operand = self.memory.read(address)
                self.overflow = self.acc < operand
                self.acc = (self.acc - operand) % WORD_MODULUS
            case Opcode.STA:
                self._write(address, self.acc)
            case Opcode.LDA:
                self.acc = self.memory.read(address)
            case Opcode.BRA:
                self.pc = address
            case Opcode.BRZ:
                if self.acc == 0:
                    self.pc = address
            case Opcode.BRP:
                if not self.overflow:
                    self.pc = address
            case Opcode.INP:
                self.acc = self.input.read() % WORD_MODULUS
            case Opcode.OUT:
                self.output.write(self.acc)
