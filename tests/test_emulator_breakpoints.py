"""
Breakpoint System Tests
=======================

Tests for the LMC debugging subsystem:
- PC breakpoints (add, remove, enable, disable, hit counts)
- Write watchpoints
- Step mode
- BreakEvent formatting
- Integration with the Emulator run loop
"""

import pytest
from lmc_sdk.emulator import (
    BreakEvent,
    BreakpointManager,
    BreakReason,
    Emulator,
)


@pytest.fixture
def mgr():
    """Empty breakpoint manager."""
    return BreakpointManager()


# =============================================================================
# Breakpoint Manager Tests
# =============================================================================

class TestPCBreakpoints:
    """Test PC breakpoint bookkeeping."""

    def test_add_and_has(self, mgr):
        bp = mgr.add_breakpoint(10)
        assert bp.address == 10
        assert mgr.has_breakpoint(10)
        assert not mgr.has_breakpoint(11)
        assert mgr.breakpoint_count == 1

    def test_add_twice_keeps_one(self, mgr):
        first = mgr.add_breakpoint(10)
        assert mgr.add_breakpoint(10) is first
        assert len(mgr.list_breakpoints()) == 1

    def test_remove(self, mgr):
        mgr.add_breakpoint(10)
        mgr.remove_breakpoint(10)
        mgr.remove_breakpoint(11)  # Missing breakpoints are ignored
        assert not mgr.has_breakpoint(10)

    def test_disable_and_enable(self, mgr):
        mgr.add_breakpoint(10)
        mgr.disable_breakpoint(10)
        assert not mgr.has_breakpoint(10)
        assert mgr.get_breakpoint(10) is not None
        assert mgr.breakpoint_count == 0
        assert mgr.check_instruction(10, 900) is True
        mgr.enable_breakpoint(10)
        assert mgr.check_instruction(10, 900) is False

    def test_disable_missing(self, mgr):
        with pytest.raises(KeyError):
            mgr.disable_breakpoint(3)

    def test_list_sorted(self, mgr):
        for address in (30, 5, 17):
            mgr.add_breakpoint(address)
        assert [bp.address for bp in mgr.list_breakpoints()] == [5, 17, 30]

    @pytest.mark.parametrize("address", [-1, 100])
    def test_address_range(self, mgr, address):
        with pytest.raises(ValueError):
            mgr.add_breakpoint(address)
        with pytest.raises(ValueError):
            mgr.add_write_watchpoint(address)

    def test_hit_count_and_event(self, mgr):
        mgr.add_breakpoint(4)
        assert mgr.check_instruction(3, 900) is True
        assert mgr.check_instruction(4, 105) is False
        assert mgr.get_breakpoint(4).hit_count == 1
        event = mgr.last_event
        assert event.reason is BreakReason.PC_BREAKPOINT
        assert (event.address, event.value) == (4, 105)

    def test_clear_all(self, mgr):
        mgr.add_breakpoint(1)
        mgr.add_write_watchpoint(2)
        mgr.step_mode = True
        mgr.clear_all()
        assert mgr.list_breakpoints() == []
        assert mgr.list_write_watchpoints() == []
        assert not mgr.step_mode


class TestWatchpoints:
    """Test write watchpoints."""

    def test_write_watchpoint(self, mgr):
        mgr.add_write_watchpoint(50)
        assert mgr.watchpoint_count == 1
        assert mgr.check_memory_write(49, 1) is True
        assert mgr.check_memory_write(50, 7) is False
        assert mgr.last_event.reason is BreakReason.MEMORY_WRITE
        assert str(mgr.last_event) == "Write 007 to 50"

    def test_remove_watchpoint(self, mgr):
        mgr.add_write_watchpoint(50)
        mgr.remove_write_watchpoint(50)
        assert mgr.check_memory_write(50, 7) is True


class TestStepMode:
    """Test single-step mode."""

    def test_step_mode_breaks_once(self, mgr):
        mgr.step_mode = True
        assert mgr.check_instruction(0, 900) is False
        assert mgr.last_event.reason is BreakReason.STEP
        assert not mgr.step_mode
        assert mgr.check_instruction(1, 900) is True


class TestBreakEvent:
    """Test BreakEvent descriptions."""

    def test_message_wins(self):
        assert str(BreakEvent(BreakReason.ERROR, message="boom")) == "boom"

    @pytest.mark.parametrize("event,text", [
        (BreakEvent(BreakReason.HALTED), "Halted"),
        (BreakEvent(BreakReason.PC_BREAKPOINT, address=7), "Breakpoint at 07"),
        (BreakEvent(BreakReason.PC_BREAKPOINT, address=0), "Breakpoint at 00"),
        (BreakEvent(BreakReason.MEMORY_WRITE, address=9, value=12), "Write 012 to 09"),
        (BreakEvent(BreakReason.MAX_STEPS), "Maximum steps reached"),
        (BreakEvent(BreakReason.STEP), "Single step"),
    ])
    def test_default_descriptions(self, event, text):
        assert str(event) == text


# =============================================================================
# Emulator Integration Tests
# =============================================================================

# Counts 3, 2, 1, 0 to the output
COUNTDOWN = [406, 900, 207, 306, 700, 0, 3, 1]


class TestEmulatorBreakpoints:
    """Test breakpoints through the Emulator run loop."""

    @pytest.fixture
    def emu(self):
        emu = Emulator()
        emu.load(COUNTDOWN)
        return emu

    def test_breakpoint_stops_before_instruction(self, emu):
        emu.breakpoints.add_breakpoint(1)
        event = emu.run()
        assert event.reason is BreakReason.PC_BREAKPOINT
        assert event.address == 1
        assert emu.get_state().pc == 1
        assert emu.outputs == []

    def test_resume_past_breakpoint(self, emu):
        emu.breakpoints.add_breakpoint(1)
        emu.run()
        event = emu.run()
        # Stops again on the next loop iteration, after one OUT
        assert event.reason is BreakReason.PC_BREAKPOINT
        assert emu.outputs == [3]
        assert emu.breakpoints.get_breakpoint(1).hit_count == 2

    def test_run_to_completion_through_breakpoints(self, emu):
        emu.breakpoints.add_breakpoint(1)
        stops = 0
        while emu.run().reason is BreakReason.PC_BREAKPOINT:
            stops += 1
        assert stops == 4
        assert emu.outputs == [3, 2, 1, 0]

    def test_watchpoint_stops_after_store(self, emu):
        emu.breakpoints.add_write_watchpoint(6)
        event = emu.run()
        assert event.reason is BreakReason.MEMORY_WRITE
        assert (event.address, event.value) == (6, 2)
        assert emu.get_state().pc == 4
        assert emu.read_word(6) == 2

    def test_step_mode(self, emu):
        emu.run(max_steps=2)
        emu.breakpoints.step_mode = True
        event = emu.run()
        assert event.reason is BreakReason.STEP
        assert event.address == 2

    def test_disabled_breakpoint_ignored(self, emu):
        emu.breakpoints.add_breakpoint(1)
        emu.breakpoints.disable_breakpoint(1)
        assert emu.run().reason is BreakReason.HALTED
