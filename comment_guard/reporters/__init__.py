"""Reporters for comment diagnostics.

This package provides diagnostic sinks and output formatters,
including plain text, JSON and SARIF for code scanning integration.
"""

from .sarif import SARIFConfig, SARIFExporter
from .sinks import CollectingSink, DiagnosticSink, LoggingSink
from .text import format_diagnostic, format_json, format_text

__all__ = [
    "CollectingSink",
    "DiagnosticSink",
    "LoggingSink",
    "SARIFConfig",
    "SARIFExporter",
    "format_diagnostic",
    "format_json",
    "format_text",
]
