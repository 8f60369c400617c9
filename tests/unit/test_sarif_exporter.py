"""Unit tests for SARIF exporter."""

import json

import pytest

from comment_guard import __version__
from comment_guard.reporters.sarif import SARIFConfig, SARIFExporter
from comment_guard.rules.base import Diagnostic, Severity, SourcePosition
from comment_guard.rules.commenting import FindKeywordRule
from comment_guard.rules.engine import RuleEngineResult


def make_diagnostic(
    rule_id: str = "COMMENTING.FIND_KEYWORD",
    severity: Severity = Severity.LOW,
    position: SourcePosition | None = None,
) -> Diagnostic:
    return Diagnostic(
        code="Found",
        template='Comment contains a discouraged keyword "%s"',
        data=("refactor this",),
        position=position or SourcePosition("src/app.py", 4, 2),
        keyword="TODO",
        message="refactor this",
        rule_id=rule_id,
        severity=severity,
    )


class TestSARIFConfig:
    """Tests for SARIFConfig dataclass."""

    def test_default_config(self):
        """Test default SARIF config values."""
        config = SARIFConfig()

        assert config.tool_name == "comment-guard"
        assert config.tool_version == __version__

    def test_custom_config(self):
        config = SARIFConfig(tool_name="custom-tool", tool_version="2.0.0")

        assert config.tool_name == "custom-tool"
        assert config.tool_version == "2.0.0"


class TestSARIFExporter:
    """Tests for SARIFExporter class."""

    @pytest.fixture
    def exporter(self):
        return SARIFExporter(rules=[FindKeywordRule()])

    def test_export_empty_result(self, exporter):
        """Test exporting a scan without diagnostics."""
        doc = exporter.export(RuleEngineResult())

        assert doc["version"] == "2.1.0"
        assert "$schema" in doc
        assert len(doc["runs"]) == 1
        assert doc["runs"][0]["results"] == []
        assert doc["runs"][0]["tool"]["driver"]["rules"] == []

    def test_export_with_diagnostic(self, exporter):
        doc = exporter.export(RuleEngineResult(diagnostics=[make_diagnostic()]))
        result = doc["runs"][0]["results"][0]

        assert result["ruleId"] == "COMMENTING.FIND_KEYWORD"
        assert result["ruleIndex"] == 0
        assert result["level"] == "warning"
        assert result["message"]["text"] == (
            'Comment contains a discouraged keyword "refactor this"'
        )
        assert result["properties"] == {"code": "Found", "keyword": "TODO"}

    def test_location_info(self, exporter):
        """Test SARIF columns are 1-based."""
        doc = exporter.export(RuleEngineResult(diagnostics=[make_diagnostic()]))
        location = doc["runs"][0]["results"][0]["locations"][0]["physicalLocation"]

        assert location["artifactLocation"]["uri"] == "src/app.py"
        assert location["region"] == {"startLine": 4, "startColumn": 3}

    def test_diagnostic_without_position(self, exporter):
        diagnostic = Diagnostic(code="Found", template="t", rule_id="A.RULE")
        doc = exporter.export(RuleEngineResult(diagnostics=[diagnostic]))

        assert "locations" not in doc["runs"][0]["results"][0]

    def test_rule_definitions(self, exporter):
        doc = exporter.export(RuleEngineResult(diagnostics=[make_diagnostic()]))
        rule = doc["runs"][0]["tool"]["driver"]["rules"][0]

        assert rule["id"] == "COMMENTING.FIND_KEYWORD"
        assert rule["name"] == "Discouraged Keyword Detection"
        assert "hack, todo, fixme" in rule["fullDescription"]["text"]
        assert rule["defaultConfiguration"]["level"] == "warning"

    def test_unknown_rule_metadata(self):
        """Test rules not passed to the exporter still get a definition."""
        doc = SARIFExporter().export(
            RuleEngineResult(diagnostics=[make_diagnostic(rule_id="OTHER.RULE")])
        )
        rule = doc["runs"][0]["tool"]["driver"]["rules"][0]

        assert rule["id"] == "OTHER.RULE"
        assert rule["name"] == "Other Rule"

    def test_severity_mapping(self, exporter):
        diagnostics = [
            make_diagnostic(severity=severity)
            for severity in (
                Severity.LOW,
                Severity.MEDIUM,
                Severity.HIGH,
                Severity.CRITICAL,
            )
        ]
        doc = exporter.export(RuleEngineResult(diagnostics=diagnostics))
        levels = [r["level"] for r in doc["runs"][0]["results"]]

        assert levels == ["warning", "warning", "error", "error"]

    def test_rule_index_assignment(self, exporter):
        diagnostics = [
            make_diagnostic(rule_id="B.RULE"),
            make_diagnostic(rule_id="A.RULE"),
            make_diagnostic(rule_id="B.RULE"),
        ]
        doc = exporter.export(RuleEngineResult(diagnostics=diagnostics))

        assert [r["ruleIndex"] for r in doc["runs"][0]["results"]] == [0, 1, 0]
        assert [r["id"] for r in doc["runs"][0]["tool"]["driver"]["rules"]] == [
            "B.RULE",
            "A.RULE",
        ]

    def test_export_json_is_valid(self, exporter):
        text = exporter.export_json(RuleEngineResult(diagnostics=[make_diagnostic()]))
        assert json.loads(text)["runs"][0]["results"][0]["ruleIndex"] == 0

    def test_export_creates_parent_dirs(self, exporter, tmp_path):
        """Test writing the SARIF file into a new directory."""
        output_path = tmp_path / "reports" / "scan.sarif"
        exporter.export(RuleEngineResult(diagnostics=[make_diagnostic()]), output_path)

        assert output_path.exists()
        data = json.loads(output_path.read_text())
        assert len(data["runs"][0]["results"]) == 1
