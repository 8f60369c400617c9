"""Plain-text and JSON renderings of scan results."""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..rules.base import Diagnostic
    from ..rules.engine import RuleEngineResult


def format_diagnostic(diagnostic: "Diagnostic") -> str:
    """Render one diagnostic as ``path:line:col: warning: text [rule]``."""
    location = str(diagnostic.position) if diagnostic.position is not None else "-"
    return f"{location}: warning: {diagnostic.text} [{diagnostic.rule_id}.{diagnostic.code}]"


def format_text(result: "RuleEngineResult") -> str:
    """Render all diagnostics of a scan, one per line.

    Args:
        result: Scan result

    Returns:
        Newline-separated diagnostics (empty string when there are none)
    """
    return "\n".join(format_diagnostic(d) for d in result.diagnostics)


def format_json(result: "RuleEngineResult") -> str:
    """Render a scan result as a JSON document."""
    return json.dumps(result.to_dict(), indent=2)
