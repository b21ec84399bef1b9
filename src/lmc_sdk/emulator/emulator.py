"""
LMC Emulator - Main Orchestrator
================================

This module provides the main `Emulator` class that ties the CPU, memory,
I/O devices and breakpoint manager together behind a small high-level API.

The Emulator class:
- Loads raw memory images or assembled programs
- Supports execution control (run, step, reset)
- Integrates breakpoints and watchpoints for debugging
- Collects OUT values
- Optionally traces every executed instruction at DEBUG level

Example usage:
    >>> from lmc_sdk import assemble
    >>> from lmc_sdk.emulator import Emulator, EmulatorConfig
    >>> program = assemble('''
    ...         INP
    ...         STA n
    ...         ADD n
    ...         OUT
    ...         HLT
    ... n       DAT
    ... ''')
    >>> emu = Emulator(EmulatorConfig(max_steps=1000), inputs=[21])
    >>> emu.load_program(program)
    >>> emu.run().reason
    <BreakReason.HALTED: 1>
    >>> emu.outputs
    [42]

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import os

from lmc_sdk.cpu import MEMORY_SIZE
from lmc_sdk.disassembler import Disassembler
from lmc_sdk.emulator.breakpoints import BreakEvent, BreakpointManager, BreakReason
from lmc_sdk.emulator.cpu import LMC, MachineState
from lmc_sdk.emulator.devices import (
    EXHAUSTION_POLICIES,
    CollectingOutput,
    ExhaustionPolicy,
    InputDevice,
    QueuedInput,
)
from lmc_sdk.emulator.memory import Memory
from lmc_sdk.errors import MachineError

logger = logging.getLogger(__name__)


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class EmulatorConfig:
    """
    Configuration for emulator initialization.

    Attributes:
        max_steps: Default instruction limit for run() (None = unlimited)
        on_input_exhausted: What INP does when no input is left,
            "error" (raise InputExhaustedError) or "zero" (read 0)
        input_prompt: Prompt shown by interactive input
        trace: Log every executed instruction at DEBUG level

    Example:
        >>> config = EmulatorConfig(max_steps=10_000, on_input_exhausted="zero")
    """
    max_steps: Optional[int] = None
    on_input_exhausted: ExhaustionPolicy = "error"
    input_prompt: str = "lmc> "
    trace: bool = False

    def __post_init__(self):
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {self.max_steps}")
        if self.on_input_exhausted not in EXHAUSTION_POLICIES:
            raise ValueError(
                f"on_input_exhausted must be one of {', '.join(EXHAUSTION_POLICIES)}, "
                f"got {self.on_input_exhausted!r}"
            )

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            LMC_MAX_STEPS: Instruction limit (non-negative integer)
            LMC_INPUT_EXHAUSTED: "error" or "zero"
            LMC_TRACE: "1"/"true"/"yes"/"on" or "0"/"false"/"no"/"off"

        Invalid values are ignored and the default is kept.

        Returns:
            EmulatorConfig with values from environment variables
        """
        kwargs: dict = {}

        # Step limit override
        if max_steps := os.environ.get("LMC_MAX_STEPS"):
            try:
                value = int(max_steps)
            except ValueError:
                value = -1
            if value >= 0:
                kwargs["max_steps"] = value

        # Input exhaustion policy
        if policy := os.environ.get("LMC_INPUT_EXHAUSTED"):
            if policy.lower() in EXHAUSTION_POLICIES:
                kwargs["on_input_exhausted"] = policy.lower()

        # Instruction trace
        if (trace := os.environ.get("LMC_TRACE")) is not None:
            if trace.lower() in _TRUE_VALUES:
                kwargs["trace"] = True
            elif trace.lower() in _FALSE_VALUES:
                kwargs["trace"] = False

        return cls(**kwargs)


class Emulator:
    """
    Little Man Computer emulator with instrumentation support.

    This is the main entry point for running programs. The CPU's hooks are
    connected to the breakpoint manager, so breakpoints and watchpoints
    work for every run() call.

    A program stopped at a breakpoint resumes past it on the next run().

    Attributes:
        config: The EmulatorConfig used to initialize this instance
        cpu: The LMC CPU instance (accessible for low-level control)
        memory: The 100-cell memory
        input: Input device read by INP
        output: Output device written by OUT
        breakpoints: The breakpoint/watchpoint manager

    Example:
        >>> emu = Emulator(inputs=[5])
        >>> emu.load([800, 900, 0])
        >>> emu.breakpoints.add_breakpoint(1)
        Breakpoint(address=1, enabled=True, hit_count=0)
        >>> str(emu.run())
        'Breakpoint at 01'
        >>> str(emu.run())
        'Halted at 02'
        >>> emu.outputs
        [5]
    """

    def __init__(
        self,
        config: Optional[EmulatorConfig] = None,
        inputs: Optional[Iterable[int]] = None,
        input_device: Optional[InputDevice] = None,
        output_device: Optional[CollectingOutput] = None,
    ):
        """
        Initialize the emulator.

        Args:
            config: EmulatorConfig; defaults to EmulatorConfig()
            inputs: Values for INP, served in order. Ignored when
                input_device is given.
            input_device: Custom input device (e.g. InteractiveInput)
            output_device: Custom output device (e.g. EchoOutput)
        """
        self.config = config or EmulatorConfig()

        self.memory = Memory()
        if input_device is None:
            input_device = QueuedInput(inputs or (), on_exhausted=self.config.on_input_exhausted)
        self.input = input_device
        self.output = output_device if output_device is not None else CollectingOutput()

        self.cpu = LMC(self.memory, self.input, self.output)
        self.breakpoints = BreakpointManager()

        self.cpu.on_instruction = self._instruction_hook
        self.cpu.on_memory_write = self._memory_write_hook

        self._image: tuple[int, ...] = ()
        self._disassembler = Disassembler()
        self._last_event: Optional[BreakEvent] = None
        # Breakpoint address to step over on the next run()
        self._resume_from: Optional[int] = None

    def _instruction_hook(self, pc: int, word: int) -> bool:
        """
        Internal hook called before each CPU instruction.

        Returns:
            True to continue execution, False to stop (breakpoint hit)
        """
        resuming = self._resume_from == pc
        self._resume_from = None

        if not resuming and not self.breakpoints.check_instruction(pc, word):
            return False

        if self.config.trace:
            self._trace(pc, word)
        return True

    def _memory_write_hook(self, address: int, value: int) -> bool:
        """
        Internal hook called after each memory write.

        Returns:
            True to continue execution, False to stop (watchpoint hit)
        """
        return self.breakpoints.check_memory_write(address, value)

    def _trace(self, pc: int, word: int) -> None:
        instr = self._disassembler.disassemble_one(word, pc)
        logger.debug(
            "%02d: %03d  %-12s acc=%03d overflow=%d",
            pc, word, instr.text, self.cpu.acc, self.cpu.overflow,
        )

    # =========================================================================
    # Program Loading
    # =========================================================================

    def load(self, image: Iterable[int]) -> None:
        """
        Load a raw memory image and reset the machine.

        Cells past the end of the image are cleared. Breakpoints are kept.

        Raises:
            MemoryImageError: If the image is longer than 100 words or holds
                a value outside 0-999
        """
        words = tuple(image)
        self.memory.load(words)
        self._image = words
        self._disassembler = Disassembler()
        self._reset_state()
        logger.debug("loaded %d word(s)", len(words))

    def load_program(self, program) -> None:
        """
        Load an AssembledProgram.

        The program's labels are used to annotate traces and disassembly.
        """
        self.load(program.image)
        self._disassembler = Disassembler.from_labels(program.labels)

    # =========================================================================
    # Execution Control
    # =========================================================================

    def _reset_state(self) -> None:
        self.cpu.reset()
        self.output.clear()
        self.breakpoints.clear_last_event()
        self._last_event = None
        self._resume_from = None

    def reset(self) -> None:
        """
        Reset to the state just after the last load.

        Memory is restored from the loaded image (undoing any STA), the
        registers are cleared and collected output is discarded.
        Breakpoints and the input device are left alone.
        """
        self.memory.load(self._image)
        self._reset_state()

    def step(self) -> BreakEvent:
        """
        Execute a single instruction, ignoring breakpoints.

        Returns:
            BreakEvent with reason HALTED if the instruction was HLT (or the
            machine was already halted), otherwise STEP with the new PC

        Raises:
            InputError: If INP cannot obtain a value
        """
        if self.cpu.halted:
            return self._halted_event()

        pc = self.cpu.pc
        word = self.memory.read(pc)
        if self.config.trace:
            self._trace(pc, word)

        self._resume_from = None
        self._run_guarded(self.cpu.step)

        if self.cpu.halted:
            event = self._halted_event()
        else:
            event = BreakEvent(
                BreakReason.STEP,
                address=self.cpu.pc,
                message=f"Step at {self.cpu.pc:02d}",
            )
        self._last_event = event
        return event

    def run(self, max_steps: Optional[int] = None) -> BreakEvent:
        """
        Run until HLT, a breakpoint or watchpoint, or the step limit.

        Args:
            max_steps: Instruction limit for this call; defaults to
                config.max_steps (None = unlimited)

        Returns:
            BreakEvent describing why execution stopped

        Raises:
            InputError: If INP cannot obtain a value. last_event is set to
                an ERROR event before the exception propagates.
        """
        if max_steps is None:
            max_steps = self.config.max_steps

        if self.cpu.halted:
            return self._halted_event()

        self.breakpoints.clear_last_event()
        executed = self._run_guarded(lambda: self.cpu.execute(max_steps))

        if self.breakpoints.last_event is not None:
            event = self.breakpoints.last_event
            if event.reason is BreakReason.PC_BREAKPOINT:
                self._resume_from = event.address
            logger.debug("stopped after %d step(s): %s", executed, event)
        elif self.cpu.halted:
            event = self._halted_event()
        else:
            event = BreakEvent(
                BreakReason.MAX_STEPS,
                address=self.cpu.pc,
                message=f"Reached max steps ({max_steps})",
            )
            logger.debug(str(event))

        self._last_event = event
        return event

    def _run_guarded(self, action):
        try:
            return action()
        except MachineError as e:
            self._last_event = BreakEvent(BreakReason.ERROR, address=self.cpu.pc, message=str(e))
            logger.debug("runtime error at %02d: %s", self.cpu.pc, e)
            raise

    def _halted_event(self) -> BreakEvent:
        # pc has already moved past the HLT
        address = (self.cpu.pc - 1) % MEMORY_SIZE
        return BreakEvent(BreakReason.HALTED, address=address, message=f"Halted at {address:02d}")

    # =========================================================================
    # Input / Output
    # =========================================================================

    def feed_input(self, *values: int) -> None:
        """
        Queue more INP values.

        Raises:
            TypeError: If the input device is not a QueuedInput
        """
        if not isinstance(self.input, QueuedInput):
            raise TypeError(f"cannot feed values to {type(self.input).__name__}")
        self.input.feed(*values)

    @property
    def outputs(self) -> list[int]:
        """Values written by OUT since the last load or reset."""
        return list(self.output.values)

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def last_event(self) -> Optional[BreakEvent]:
        """The event returned by the last run() or step(), or an ERROR event."""
        return self._last_event

    @property
    def is_halted(self) -> bool:
        return self.cpu.halted

    def get_state(self) -> MachineState:
        """Snapshot of the CPU registers."""
        return self.cpu.get_state()

    def read_word(self, address: int) -> int:
        return self.memory.read(address)

    def write_word(self, address: int, value: int) -> None:
        """Poke a word into memory (no watchpoint check)."""
        self.memory.write(address, value)

    def disassemble_at(self, address: int, count: int = 10) -> list[str]:
        """Disassemble count words of live memory starting at address."""
        words = self.memory.snapshot()
        return [str(w) for w in self._disassembler.disassemble(words, address, count)]

    def __repr__(self) -> str:
        return f"Emulator({self.cpu!r})"
