"""
LMC Emulator Integration Tests
==============================

End-to-end tests that assemble real programs and run them on the
Emulator, plus tests of the Emulator API itself:
- Program loading, reset and re-running
- Input handling and the exhaustion policies
- Step limits, single stepping and runtime errors
- EmulatorConfig and environment overrides
- Instruction tracing
"""

import logging

import pytest

from lmc_sdk import assemble
from lmc_sdk.emulator import (
    BreakReason,
    Emulator,
    EmulatorConfig,
    InteractiveInput,
    MachineState,
)
from lmc_sdk.errors import InputExhaustedError, InvalidInputError, MemoryImageError


# =============================================================================
# Test Programs
# =============================================================================

ADD_PROGRAM = """
        LDA A
        ADD B
        OUT
        HLT
A       DAT 5
B       DAT 7
"""

OVERFLOW_PROGRAM = """
        SUB five      ; 0 - 5 wraps to 995 and sets overflow
        BRP target    ; not taken: overflow is set
        BRZ target    ; not taken: acc is 995
        OUT
        HLT
target  LDA one
        OUT
        HLT
five    DAT 5
one     DAT 1
"""

SUM_PROGRAM = """
; Read numbers until a zero, then print their sum
loop    INP
        BRZ done
        ADD total
        STA total
        BRA loop
done    LDA total
        OUT
        HLT
total   DAT 0
"""

ECHO_PROGRAM = """
loop    INP
        OUT
        BRA loop
"""


def run_program(source: str, inputs=(), **config) -> Emulator:
    """Helper: assemble source, run it to a stop, return the emulator."""
    emu = Emulator(EmulatorConfig(**config), inputs=inputs)
    emu.load_program(assemble(source))
    emu.run()
    return emu


# =============================================================================
# Program Scenarios
# =============================================================================

class TestPrograms:
    """Run complete assembled programs."""

    def test_addition(self):
        emu = run_program(ADD_PROGRAM)
        assert emu.outputs == [12]
        assert emu.is_halted
        assert emu.last_event.reason is BreakReason.HALTED
        assert emu.last_event.address == 3

    def test_overflow_suppresses_brp_and_brz(self):
        emu = run_program(OVERFLOW_PROGRAM)
        assert emu.outputs == [995]
        state = emu.get_state()
        assert state.overflow is True
        assert state.acc == 995

    def test_sum_until_zero(self):
        emu = run_program(SUM_PROGRAM, inputs=[10, 20, 30, 0])
        assert emu.outputs == [60]

    def test_sum_wraps_past_999(self):
        emu = run_program(SUM_PROGRAM, inputs=[600, 500, 0])
        assert emu.outputs == [100]

    def test_self_modifying_code(self):
        source = """
                LDA outop
                STA slot
        slot    HLT
                HLT
        outop   OUT
        """
        emu = run_program(source)
        assert emu.outputs == [900]

    def test_empty_program_halts_immediately(self):
        emu = Emulator()
        emu.load([])
        event = emu.run()
        assert event.reason is BreakReason.HALTED
        assert emu.get_state().steps == 1

    def test_running_off_the_end_wraps(self):
        """Execution continues at cell 0 after cell 99."""
        emu = Emulator()
        emu.load([900] * 100)
        event = emu.run(max_steps=150)
        assert event.reason is BreakReason.MAX_STEPS
        assert len(emu.outputs) == 150
        assert emu.get_state().pc == 50


# =============================================================================
# Input Handling
# =============================================================================

class TestInput:
    """Test INP sources and exhaustion policies."""

    def test_exhausted_input_raises_by_default(self):
        emu = Emulator(inputs=[1, 2])
        emu.load_program(assemble(ECHO_PROGRAM))
        with pytest.raises(InputExhaustedError):
            emu.run()
        assert emu.outputs == [1, 2]
        assert emu.last_event.reason is BreakReason.ERROR

    def test_exhausted_input_zero_policy(self):
        emu = run_program(SUM_PROGRAM, inputs=[4, 5], on_input_exhausted="zero")
        assert emu.outputs == [9]

    def test_feed_input(self):
        emu = Emulator()
        emu.load_program(assemble(SUM_PROGRAM))
        emu.feed_input(7, 8, 0)
        emu.run()
        assert emu.outputs == [15]

    def test_feed_input_requires_queue(self):
        emu = Emulator(input_device=InteractiveInput())
        with pytest.raises(TypeError):
            emu.feed_input(1)

    def test_invalid_interactive_input(self, monkeypatch):
        monkeypatch.setattr("click.prompt", lambda text, **kwargs: "twelve")
        emu = Emulator(input_device=InteractiveInput())
        emu.load_program(assemble(ECHO_PROGRAM))
        with pytest.raises(InvalidInputError):
            emu.run()

    def test_interactive_input(self, monkeypatch):
        answers = iter(["3", "4", "0"])
        monkeypatch.setattr("click.prompt", lambda text, **kwargs: next(answers))
        emu = Emulator(input_device=InteractiveInput())
        emu.load_program(assemble(SUM_PROGRAM))
        emu.run()
        assert emu.outputs == [7]


# =============================================================================
# Execution Control
# =============================================================================

class TestExecutionControl:
    """Test run limits, stepping, reset and loading."""

    def test_max_steps_from_config(self):
        emu = Emulator(EmulatorConfig(max_steps=10))
        emu.load([500])
        event = emu.run()
        assert event.reason is BreakReason.MAX_STEPS
        assert str(event) == "Reached max steps (10)"
        assert emu.get_state().steps == 10

    def test_max_steps_argument_overrides_config(self):
        emu = Emulator(EmulatorConfig(max_steps=10))
        emu.load([500])
        emu.run(max_steps=3)
        assert emu.get_state().steps == 3

    def test_run_after_halt(self):
        emu = run_program(ADD_PROGRAM)
        event = emu.run()
        assert event.reason is BreakReason.HALTED
        assert emu.outputs == [12]

    def test_step(self):
        emu = Emulator()
        emu.load_program(assemble(ADD_PROGRAM))
        event = emu.step()
        assert event.reason is BreakReason.STEP
        assert event.address == 1
        assert emu.get_state() == MachineState(acc=5, pc=1, overflow=False, halted=False, steps=1)
        for _ in range(3):
            event = emu.step()
        assert event.reason is BreakReason.HALTED
        assert emu.step().reason is BreakReason.HALTED

    def test_reset_restores_memory(self):
        emu = run_program(SUM_PROGRAM, inputs=[5, 0])
        assert emu.outputs == [5]
        emu.reset()
        assert emu.outputs == []
        assert emu.read_word(8) == 0
        emu.feed_input(2, 0)
        emu.run()
        assert emu.outputs == [2]

    def test_load_resets_machine(self):
        emu = run_program(ADD_PROGRAM)
        emu.load([900, 0])
        assert emu.get_state() == MachineState()
        assert emu.outputs == []
        assert emu.read_word(2) == 0

    def test_load_rejects_bad_image(self):
        emu = Emulator()
        with pytest.raises(MemoryImageError):
            emu.load([1000])
        with pytest.raises(MemoryImageError):
            emu.load([0] * 101)

    def test_write_word(self):
        emu = Emulator()
        emu.load([400])
        emu.write_word(0, 900)
        emu.run()
        assert emu.outputs == [0]

    def test_disassemble_at_uses_labels(self):
        emu = Emulator()
        emu.load_program(assemble(ADD_PROGRAM))
        lines = emu.disassemble_at(0, 2)
        assert lines[0].split()[:4] == ["0:", "404", "LDA", "A"]
        assert lines[1].split()[:4] == ["1:", "105", "ADD", "B"]


# =============================================================================
# Configuration
# =============================================================================

class TestEmulatorConfig:
    """Test EmulatorConfig validation and environment overrides."""

    def test_defaults(self):
        config = EmulatorConfig()
        assert config.max_steps is None
        assert config.on_input_exhausted == "error"
        assert config.input_prompt == "lmc> "
        assert config.trace is False

    def test_frozen(self):
        with pytest.raises(AttributeError):
            EmulatorConfig().trace = True

    def test_validation(self):
        with pytest.raises(ValueError):
            EmulatorConfig(max_steps=-1)
        with pytest.raises(ValueError):
            EmulatorConfig(on_input_exhausted="block")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LMC_MAX_STEPS", "500")
        monkeypatch.setenv("LMC_INPUT_EXHAUSTED", "ZERO")
        monkeypatch.setenv("LMC_TRACE", "yes")
        config = EmulatorConfig.from_env()
        assert config == EmulatorConfig(max_steps=500, on_input_exhausted="zero", trace=True)

    def test_from_env_ignores_invalid(self, monkeypatch):
        monkeypatch.setenv("LMC_MAX_STEPS", "lots")
        monkeypatch.setenv("LMC_INPUT_EXHAUSTED", "block")
        monkeypatch.setenv("LMC_TRACE", "maybe")
        assert EmulatorConfig.from_env() == EmulatorConfig()

    def test_from_env_empty(self, monkeypatch):
        for name in ("LMC_MAX_STEPS", "LMC_INPUT_EXHAUSTED", "LMC_TRACE"):
            monkeypatch.delenv(name, raising=False)
        assert EmulatorConfig.from_env() == EmulatorConfig()


# =============================================================================
# Tracing
# =============================================================================

class TestTrace:
    """Test instruction tracing."""

    def test_trace_logs_each_instruction(self, caplog):
        caplog.set_level(logging.DEBUG, logger="lmc_sdk.emulator")
        run_program(ADD_PROGRAM, trace=True)
        traced = [r.getMessage() for r in caplog.records if r.name == "lmc_sdk.emulator.emulator"
                  and "acc=" in r.getMessage()]
        assert len(traced) == 4
        assert traced[0].startswith("00: 404  LDA A")
        assert "acc=005" in traced[1]

    def test_no_trace_by_default(self, caplog):
        caplog.set_level(logging.DEBUG, logger="lmc_sdk.emulator")
        run_program(ADD_PROGRAM)
        assert not any("acc=" in r.getMessage() for r in caplog.records)
