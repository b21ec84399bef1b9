"""
Breakpoint and Watchpoint System for the LMC Emulator
=====================================================

Provides the debugging controls used by the Emulator:
- PC breakpoints (break before the instruction at an address executes)
- Write watchpoints (break after STA stores to an address)
- Single-step mode

Breakpoints can be disabled without being removed, and each one counts
how many times it has been hit.

This module is wired to the CPU via its instruction and memory-write
hooks. The BreakpointManager records why execution stopped in a
BreakEvent that the Emulator returns to the caller.

Example usage:

    >>> from lmc_sdk.emulator import Emulator, BreakReason
    >>> emu = Emulator()
    >>> emu.load([901, 500])
    >>> emu.breakpoints.add_breakpoint(1)
    Breakpoint(address=1, enabled=True, hit_count=0)
    >>> emu.run(max_steps=10).reason
    <BreakReason.PC_BREAKPOINT: 2>
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from lmc_sdk.cpu import MEMORY_SIZE


class BreakReason(Enum):
    """
    Enumeration of reasons why execution stopped.

    Used in BreakEvent to indicate what triggered the break.
    """
    HALTED = auto()         # HLT executed
    PC_BREAKPOINT = auto()  # PC reached a breakpoint address
    MEMORY_WRITE = auto()   # Memory write watchpoint triggered
    MAX_STEPS = auto()      # Step limit reached
    STEP = auto()           # Single-step mode
    ERROR = auto()          # Runtime error occurred


@dataclass
class BreakEvent:
    """
    Information about why execution stopped.

    Attributes:
        reason: Why execution stopped
        address: PC or memory address involved (if applicable)
        value: Word written (for MEMORY_WRITE)
        message: Human-readable description
    """
    reason: BreakReason
    address: Optional[int] = None
    value: Optional[int] = None
    message: str = ""

    def __str__(self) -> str:
        """Return human-readable description."""
        if self.message:
            return self.message
        match self.reason:
            case BreakReason.HALTED:
                return "Halted"
            case BreakReason.PC_BREAKPOINT:
                return f"Breakpoint at {self.address:02d}" if self.address is not None else "Breakpoint"
            case BreakReason.MEMORY_WRITE:
                if self.address is None:
                    return "Memory write"
                return f"Write {self.value:03d} to {self.address:02d}"
            case BreakReason.MAX_STEPS:
                return "Maximum steps reached"
            case BreakReason.STEP:
                return "Single step"
            case BreakReason.ERROR:
                return "Runtime error"
            case _:
                return "Unknown"


@dataclass
class Breakpoint:
    """
    A PC breakpoint.

    Attributes:
        address: Cell the breakpoint is set on (0-99)
        enabled: Disabled breakpoints are kept but never trigger
        hit_count: Number of times execution stopped here
    """
    address: int
    enabled: bool = True
    hit_count: int = 0


def _check_address(address: int) -> int:
    if not 0 <= address < MEMORY_SIZE:
        raise ValueError(f"address out of range: {address} (expected 0-{MEMORY_SIZE - 1})")
    return address


class BreakpointManager:
    """
    Manages breakpoints and write watchpoints.

    The manager integrates with the CPU via hooks:
    - check_instruction: Called before each instruction
    - check_memory_write: Called after each memory write

    Example:
        >>> mgr = BreakpointManager()
        >>> mgr.add_breakpoint(10)
        Breakpoint(address=10, enabled=True, hit_count=0)
        >>> mgr.add_write_watchpoint(99)
        >>> # Hooks are called by the CPU during execution
        >>> cpu.on_instruction = mgr.check_instruction
    """

    def __init__(self):
        """Initialize empty breakpoint manager."""
        self._breakpoints: dict[int, Breakpoint] = {}
        self._write_watchpoints: set[int] = set()

        # Last break event (for inspection after break)
        self._last_event: Optional[BreakEvent] = None

        self._step_mode: bool = False

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def last_event(self) -> Optional[BreakEvent]:
        """Get the last break event that occurred."""
        return self._last_event

    @property
    def step_mode(self) -> bool:
        """Check if step mode is active."""
        return self._step_mode

    @step_mode.setter
    def step_mode(self, value: bool) -> None:
        self._step_mode = value

    @property
    def breakpoint_count(self) -> int:
        """Number of enabled PC breakpoints."""
        return sum(1 for bp in self._breakpoints.values() if bp.enabled)

    @property
    def watchpoint_count(self) -> int:
        """Number of write watchpoints."""
        return len(self._write_watchpoints)

    # =========================================================================
    # PC Breakpoints
    # =========================================================================

    def add_breakpoint(self, address: int) -> Breakpoint:
        """
        Add (or re-enable) a PC breakpoint at address.

        Execution will stop when PC reaches this address, before the
        instruction at that address is executed.

        Raises:
            ValueError: If address is not 0-99
        """
        _check_address(address)
        bp = self._breakpoints.get(address)
        if bp is None:
            bp = self._breakpoints[address] = Breakpoint(address)
        bp.enabled = True
        return bp

    def remove_breakpoint(self, address: int) -> None:
        """Remove the PC breakpoint at address, if any."""
        self._breakpoints.pop(address, None)

    def enable_breakpoint(self, address: int) -> None:
        """
        Enable an existing breakpoint.

        Raises:
            KeyError: If no breakpoint is set at address
        """
        self._breakpoints[address].enabled = True

    def disable_breakpoint(self, address: int) -> None:
        """
        Disable an existing breakpoint without removing it.

        Raises:
            KeyError: If no breakpoint is set at address
        """
        self._breakpoints[address].enabled = False

    def has_breakpoint(self, address: int) -> bool:
        """True if an enabled breakpoint exists at address."""
        bp = self._breakpoints.get(address)
        return bp is not None and bp.enabled

    def get_breakpoint(self, address: int) -> Optional[Breakpoint]:
        """Return the breakpoint at address (enabled or not)."""
        return self._breakpoints.get(address)

    def clear_breakpoints(self) -> None:
        """Remove all PC breakpoints."""
        self._breakpoints.clear()

    def list_breakpoints(self) -> list[Breakpoint]:
        """Get all breakpoints sorted by address."""
        return [self._breakpoints[a] for a in sorted(self._breakpoints)]

    # =========================================================================
    # Memory Watchpoints
    # =========================================================================

    def add_write_watchpoint(self, address: int) -> None:
        """
        Add watchpoint that triggers on memory write.

        Execution will stop after the instruction that writes this address.

        Raises:
            ValueError: If address is not 0-99
        """
        self._write_watchpoints.add(_check_address(address))

    def remove_write_watchpoint(self, address: int) -> None:
        """Remove write watchpoint at address."""
        self._write_watchpoints.discard(address)

    def clear_watchpoints(self) -> None:
        """Remove all watchpoints."""
        self._write_watchpoints.clear()

    def list_write_watchpoints(self) -> list[int]:
        """Get sorted list of write watchpoint addresses."""
        return sorted(self._write_watchpoints)

    # =========================================================================
    # Break Control
    # =========================================================================

    def clear_last_event(self) -> None:
        self._last_event = None

    def clear_all(self) -> None:
        """Remove all breakpoints and watchpoints and leave step mode."""
        self.clear_breakpoints()
        self.clear_watchpoints()
        self._step_mode = False
        self._last_event = None

    # =========================================================================
    # Check Functions (called by CPU hooks)
    # =========================================================================

    def check_instruction(self, pc: int, word: int) -> bool:
        """
        Check if we should break before executing the instruction at pc.

        Args:
            pc: Current program counter
            word: Word about to be executed

        Returns:
            True to continue execution, False to break
        """
        if self._step_mode:
            self._step_mode = False
            self._last_event = BreakEvent(
                BreakReason.STEP,
                address=pc,
                message=f"Step at {pc:02d}",
            )
            return False

        bp = self._breakpoints.get(pc)
        if bp is not None and bp.enabled:
            bp.hit_count += 1
            self._last_event = BreakEvent(
                BreakReason.PC_BREAKPOINT,
                address=pc,
                value=word,
                message=f"Breakpoint at {pc:02d}",
            )
            return False

        return True

    def check_memory_write(self, address: int, value: int) -> bool:
        """
        Check if we should break on memory write.

        Args:
            address: Address being written
            value: Value written

        Returns:
            True to continue execution, False to break
        """
        if address in self._write_watchpoints:
            self._last_event = BreakEvent(
                BreakReason.MEMORY_WRITE,
                address=address,
                value=value,
                message=f"Write {value:03d} to {address:02d}",
            )
            return False
        return True
