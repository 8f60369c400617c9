"""SARIF exporter for comment diagnostics.

This module exports diagnostics to SARIF (Static Analysis Results
Interchange Format) for integration with code scanning dashboards and
IDE annotations.

SARIF Specification: https://docs.oasis-open.org/sarif/sarif/v2.1.0/
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .. import __version__
from ..rules.base import Severity

if TYPE_CHECKING:
    from ..rules.base import BaseRule, Diagnostic
    from ..rules.engine import RuleEngineResult


@dataclass
class SARIFConfig:
    """Configuration for SARIF output."""

    tool_name: str = "comment-guard"
    tool_version: str = __version__
    tool_information_uri: str = "https://pypi.org/project/comment-guard/"


class SARIFExporter:
    """Exports diagnostics to SARIF format.

    SARIF (Static Analysis Results Interchange Format) is an OASIS
    standard for representing static analysis results.
    """

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"

    def __init__(
        self,
        config: SARIFConfig | None = None,
        rules: "list[BaseRule] | None" = None,
    ):
        """Initialize the SARIF exporter.

        Args:
            config: Optional export configuration.
            rules: Registered rules, used for rule descriptions.
        """
        self.config = config or SARIFConfig()
        self._rules = {rule.rule_id: rule for rule in rules or []}

    def export(
        self,
        result: "RuleEngineResult",
        output_path: Path | None = None,
    ) -> dict[str, Any]:
        """Export diagnostics to SARIF format.

        Args:
            result: Scan result to export.
            output_path: Optional path to write SARIF file.

        Returns:
            SARIF document as dictionary.
        """
        sarif_doc = self._build_sarif_document(result.diagnostics)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w") as f:
                json.dump(sarif_doc, f, indent=2)

        return sarif_doc

    def export_json(self, result: "RuleEngineResult") -> str:
        """Export diagnostics to a SARIF JSON string."""
        return json.dumps(self.export(result), indent=2)

    def _build_sarif_document(
        self, diagnostics: "list[Diagnostic]"
    ) -> dict[str, Any]:
        """Build complete SARIF document structure.

        Args:
            diagnostics: Diagnostics to include.

        Returns:
            SARIF document dictionary.
        """
        # Keep first-seen order so output is stable across runs
        rule_ids = list(dict.fromkeys(d.rule_id for d in diagnostics))
        rule_index = {rule_id: idx for idx, rule_id in enumerate(rule_ids)}

        results = [
            self._build_result(diagnostic, rule_index[diagnostic.rule_id])
            for diagnostic in diagnostics
        ]

        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": self.config.tool_name,
                            "version": self.config.tool_version,
                            "informationUri": self.config.tool_information_uri,
                            "rules": self._build_rule_definitions(rule_ids),
                        }
                    },
                    "results": results,
                }
            ],
        }

    def _build_rule_definitions(self, rule_ids: list[str]) -> list[dict[str, Any]]:
        """Build SARIF rule definitions from unique rule IDs."""
        definitions = []
        for rule_id in rule_ids:
            rule = self._rules.get(rule_id)
            definition: dict[str, Any] = {
                "id": rule_id,
                "name": rule.name if rule else rule_id.replace(".", " ").title(),
                "shortDescription": {"text": rule.name if rule else f"Rule {rule_id}"},
                "fullDescription": {
                    "text": rule.description if rule else f"Comment rule: {rule_id}"
                },
                "defaultConfiguration": {
                    "level": self._severity_to_sarif_level(
                        rule.default_severity if rule else Severity.LOW
                    )
                },
            }
            definitions.append(definition)
        return definitions

    def _build_result(
        self, diagnostic: "Diagnostic", rule_index: int
    ) -> dict[str, Any]:
        """Build SARIF result object from a Diagnostic."""
        result: dict[str, Any] = {
            "ruleId": diagnostic.rule_id,
            "ruleIndex": rule_index,
            "level": self._severity_to_sarif_level(diagnostic.severity),
            "message": {"text": diagnostic.text},
            "properties": {
                "code": diagnostic.code,
                "keyword": diagnostic.keyword,
            },
        }

        location = self._build_location(diagnostic.position)
        if location:
            result["locations"] = [location]

        return result

    def _build_location(self, position: Any) -> dict[str, Any] | None:
        """Build SARIF location from a SourcePosition-like object."""
        if position is None or not hasattr(position, "file_path"):
            return None

        return {
            "physicalLocation": {
                "artifactLocation": {"uri": Path(position.file_path).as_posix()},
                "region": {
                    "startLine": position.line,
                    "startColumn": position.column + 1,
                },
            }
        }

    def _severity_to_sarif_level(self, severity: Severity) -> str:
        """Map Severity to SARIF level (error/warning/note)."""
        mapping = {
            Severity.CRITICAL: "error",
            Severity.HIGH: "error",
            Severity.MEDIUM: "warning",
            Severity.LOW: "warning",
        }
        return mapping.get(severity, "warning")


__all__ = [
    "SARIFConfig",
    "SARIFExporter",
]
