"""
Tests for the error hierarchy and the ErrorCollector.
"""

import pytest

from lmc_sdk.errors import (
    AssemblerError,
    AssemblyFailedError,
    AssemblySyntaxError,
    ErrorCollector,
    InputExhaustedError,
    InvalidInputError,
    LMCError,
    MachineError,
    OperandError,
    SourceLocation,
    TooManyErrors,
    UndefinedLabelError,
)


class TestSourceLocation:
    """Test location formatting."""

    def test_with_column(self):
        assert str(SourceLocation("add.lmc", 3, 5)) == "add.lmc:3:5"

    def test_without_column(self):
        assert str(SourceLocation("<input>", 7)) == "<input>:7"


class TestAssemblerError:
    """Test diagnostic formatting."""

    def test_message_only(self):
        assert str(AssemblerError("bad thing")) == "error: bad thing"

    def test_location_source_and_caret(self):
        error = OperandError(
            "the OUT instruction does not accept a parameter",
            location=SourceLocation("prog.lmc", 2, 5),
            source_line="OUT 5",
        )
        assert str(error).splitlines() == [
            "prog.lmc:2:5: error: the OUT instruction does not accept a parameter",
            "    OUT 5",
            "        ^",
        ]
        assert error.line == 2

    def test_hint(self):
        error = UndefinedLabelError(
            "fiv",
            location=SourceLocation("add.lmc", 3, 5),
            source_line="ADD fiv",
            similar_labels=["five"],
        )
        assert str(error).splitlines()[-1] == "hint: did you mean 'five'?"
        assert error.label == "fiv"

    def test_hint_lists_at_most_three(self):
        error = UndefinedLabelError("a", similar_labels=["a1", "a2", "a3", "a4"])
        assert error.hint == "did you mean 'a1', 'a2', 'a3'?"

    def test_no_suggestions(self):
        error = UndefinedLabelError("zzz")
        assert error.hint is None
        assert str(error) == 'error: label "zzz" was not found'

    def test_hierarchy(self):
        assert issubclass(AssemblySyntaxError, AssemblerError)
        assert issubclass(AssemblerError, LMCError)
        assert issubclass(InvalidInputError, MachineError)
        assert issubclass(InputExhaustedError, MachineError)

    def test_assembly_failed(self):
        errors = [AssemblerError("one"), AssemblerError("two")]
        failed = AssemblyFailedError(errors, "REPORT")
        assert failed.error_count == 2
        assert str(failed).startswith("assembly failed with 2 errors:")
        assert str(failed).endswith("REPORT")

    def test_assembly_failed_has_no_error_prefix(self):
        failed = AssemblyFailedError([AssemblerError("one")], "REPORT")
        assert str(failed) == "assembly failed with 1 error:\n\nREPORT"

    def test_invalid_input(self):
        error = InvalidInputError("abc")
        assert error.text == "abc"
        assert str(error) == "invalid input 'abc': expected an integer"


class TestErrorCollector:
    """Test error collection and reporting."""

    def test_empty(self):
        collector = ErrorCollector()
        assert not collector.has_errors()
        assert collector.report() == "found 0 errors, 0 warnings"

    def test_report(self):
        collector = ErrorCollector()
        collector.add(AssemblerError("first"))
        collector.add_warning("label \"x\" redefined")
        report = collector.report()
        assert "error: first" in report
        assert "Warnings:" in report
        assert report.endswith("found 1 error, 1 warning")
        assert collector.error_count() == 1
        assert collector.warning_count() == 1

    def test_limit_is_inclusive(self):
        collector = ErrorCollector(max_errors=3)
        for n in range(3):
            collector.add(AssemblerError(str(n)))
        assert collector.error_count() == 3
        assert collector.warning_count() == 0

    def test_too_many_errors(self):
        collector = ErrorCollector(max_errors=3)
        for n in range(3):
            collector.add(AssemblerError(str(n)))
        with pytest.raises(TooManyErrors, match=r"Too many errors \(3\), stopping"):
            collector.add(AssemblerError("3"))
        assert collector.error_count() == 3

    def test_clear(self):
        collector = ErrorCollector()
        collector.add(AssemblerError("x"))
        collector.add_warning("w")
        collector.clear()
        assert not collector.has_errors()
        assert collector.warning_count() == 0
