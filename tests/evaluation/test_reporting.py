"""
Tests for diagnostic line reporters.
"""

import io
import logging

from classbench.evaluation.reporting import (
    CollectingReporter,
    LoggingReporter,
    StreamReporter,
    default_reporter,
)


class TestStreamReporter:
    """Test StreamReporter."""

    def test_writes_lines(self):
        stream = io.StringIO()
        reporter = StreamReporter(stream)

        reporter.report(1, "SUMMARY: ok")
        reporter.report(2, "\tx: \n\t\t--- FALSE NEGATIVE: A")

        assert stream.getvalue() == "SUMMARY: ok\n\tx: \n\t\t--- FALSE NEGATIVE: A\n"

    def test_default_is_current_stdout(self, capsys):
        default_reporter().report(1, "hello")
        assert capsys.readouterr().out == "hello\n"


class TestLoggingReporter:
    """Test LoggingReporter."""

    def test_summary_level_logged_at_info(self, caplog):
        caplog.set_level(logging.DEBUG, logger="classbench.test_reporting")
        reporter = LoggingReporter(logging.getLogger("classbench.test_reporting"))

        reporter.report(1, "SUMMARY: Accuracy=1/1=100%")

        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
            (logging.INFO, "SUMMARY: Accuracy=1/1=100%"),
        ]

    def test_detail_levels_logged_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="classbench.test_reporting")
        reporter = LoggingReporter(logging.getLogger("classbench.test_reporting"))

        reporter.report(2, "explanation")
        reporter.report(3, "FULL RESULTS:")

        assert [r.levelno for r in caplog.records] == [logging.DEBUG, logging.DEBUG]

    def test_debug_hidden_at_info(self, caplog):
        caplog.set_level(logging.INFO, logger="classbench.evaluation.reporting")
        reporter = LoggingReporter()

        reporter.report(1, "summary")
        reporter.report(2, "detail")

        assert caplog.messages == ["summary"]


class TestCollectingReporter:
    """Test CollectingReporter."""

    def test_keeps_levels_and_lines(self):
        reporter = CollectingReporter()
        reporter.report(1, "a")
        reporter.report(3, "b")

        assert reporter.messages == [(1, "a"), (3, "b")]
        assert reporter.lines == ["a", "b"]

        reporter.clear()
        assert reporter.messages == []

    def test_default_reporter_passthrough(self):
        reporter = CollectingReporter()
        assert default_reporter(reporter) is reporter
