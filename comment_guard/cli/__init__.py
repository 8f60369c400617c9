"""CLI utilities package for the comment guard.

This package provides centralized output management and error handling
for the command line interface.

Modules:
    output: OutputManager for consistent CLI output with color/quiet support
    errors: Structured error types with recovery suggestions
"""

from .errors import (
    ConfigurationError,
    ErrorCategory,
    GuardError,
    InvalidKeywordPatternError,
    SourceReadError,
    ValidationError,
    handle_exception,
)
from .output import OutputConfig, OutputManager, should_use_color

__all__ = [
    # Output
    "OutputConfig",
    "OutputManager",
    "should_use_color",
    # Errors
    "GuardError",
    "ErrorCategory",
    "ConfigurationError",
    "InvalidKeywordPatternError",
    "SourceReadError",
    "ValidationError",
    "handle_exception",
]
