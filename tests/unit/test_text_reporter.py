"""Unit tests for text and JSON reporters and diagnostic sinks."""

import json
import logging
import threading

from comment_guard.reporters import (
    CollectingSink,
    LoggingSink,
    format_diagnostic,
    format_json,
    format_text,
)
from comment_guard.rules.base import Diagnostic, SourcePosition
from comment_guard.rules.engine import RuleEngineResult, ScanError


def make_diagnostic(line: int = 3, message: str = "later") -> Diagnostic:
    return Diagnostic(
        code="Found",
        template='Comment contains a discouraged keyword "%s"',
        data=(message,),
        position=SourcePosition("app.py", line, 4),
        keyword="TODO",
        message=message,
        rule_id="COMMENTING.FIND_KEYWORD",
    )


class TestFormatDiagnostic:
    """Tests for format_diagnostic()."""

    def test_format(self):
        assert format_diagnostic(make_diagnostic()) == (
            'app.py:3:5: warning: Comment contains a discouraged keyword "later" '
            "[COMMENTING.FIND_KEYWORD.Found]"
        )

    def test_without_position(self):
        diagnostic = Diagnostic(code="Found", template="Plain", rule_id="A.RULE")
        assert format_diagnostic(diagnostic) == "-: warning: Plain [A.RULE.Found]"


class TestFormatText:
    """Tests for format_text()."""

    def test_one_line_per_diagnostic(self):
        result = RuleEngineResult(
            diagnostics=[make_diagnostic(1, "one"), make_diagnostic(2, "two")]
        )
        lines = format_text(result).splitlines()

        assert len(lines) == 2
        assert lines[0].startswith("app.py:1:5:")
        assert lines[1].endswith('"two" [COMMENTING.FIND_KEYWORD.Found]')

    def test_empty_result(self):
        assert format_text(RuleEngineResult()) == ""


class TestFormatJson:
    """Tests for format_json()."""

    def test_document(self):
        result = RuleEngineResult(
            diagnostics=[make_diagnostic()],
            errors=[ScanError(file_path="bad.py", error_message="unreadable")],
            files_scanned=2,
        )
        data = json.loads(format_json(result))

        assert data["files_scanned"] == 2
        assert data["diagnostics"][0]["message"] == "later"
        assert data["diagnostics"][0]["position"]["line"] == 3
        assert data["errors"][0]["file_path"] == "bad.py"
        assert data["summary"]["total_diagnostics"] == 1


class TestCollectingSink:
    """Tests for CollectingSink."""

    def test_keeps_arrival_order(self):
        sink = CollectingSink()
        first, second = make_diagnostic(1), make_diagnostic(2)
        sink.add(first)
        sink.add(second)

        assert sink.diagnostics == [first, second]
        assert len(sink) == 2

    def test_diagnostics_returns_copy(self):
        sink = CollectingSink()
        sink.add(make_diagnostic())
        sink.diagnostics.clear()
        assert len(sink) == 1

    def test_concurrent_adds(self):
        """Test adds from several threads are all kept."""
        sink = CollectingSink()

        def worker():
            for _ in range(100):
                sink.add(make_diagnostic())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(sink) == 400


class TestLoggingSink:
    """Tests for LoggingSink."""

    def test_logs_warning(self, caplog):
        target = logging.getLogger("test.sink")
        sink = LoggingSink(target)

        with caplog.at_level(logging.WARNING, logger="test.sink"):
            sink.add(make_diagnostic())

        assert len(caplog.records) == 1
        assert "app.py:3:5" in caplog.records[0].getMessage()
        assert "[COMMENTING.FIND_KEYWORD]" in caplog.records[0].getMessage()
