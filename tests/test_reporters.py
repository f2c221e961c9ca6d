"""Tests for the in-memory RecordingReporter."""

from assertkit.assertions.compare import greater
from assertkit.reporters import RecordingReporter


def _helper_probe(reporter: RecordingReporter) -> None:
    reporter.helper()


class TestRecordingReporter:
    def test_starts_clean(self) -> None:
        reporter = RecordingReporter()
        assert reporter.failed is False
        assert reporter.output() == ""
        assert reporter.name is None

    def test_records_errors(self) -> None:
        reporter = RecordingReporter(name="case")
        reporter.error("first")
        reporter.error("second")
        assert reporter.failed is True
        assert reporter.output() == "firstsecond"

    def test_helper_records_qualified_caller(self) -> None:
        reporter = RecordingReporter()
        _helper_probe(reporter)
        assert any(h.endswith("._helper_probe") for h in reporter.helpers)

    def test_first_lines(self) -> None:
        reporter = RecordingReporter()
        greater(reporter, 1, 2)
        greater(reporter, "a", "b")
        assert reporter.first_lines() == [
            '"1" is not greater than "2"',
            '"a" is not greater than "b"',
        ]
