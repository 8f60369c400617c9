"""Structured error types with recovery suggestions.

This module provides a consistent error handling framework for the
guard and its CLI, with categorized error types and actionable
recovery suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of guard errors for organization and handling."""

    CONFIGURATION = "configuration"  # Invalid rule settings
    FILE_SYSTEM = "file_system"  # Unreadable files
    VALIDATION = "validation"  # Invalid arguments
    TOKENIZE = "tokenize"  # Source could not be tokenized
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class GuardError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ConfigurationError(GuardError):
    """Error in rule or engine settings."""

    def __init__(
        self,
        message: str,
        rule_id: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check the rule parameters passed to the guard"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"rule": rule_id} if rule_id else None,
            exit_code=2,
        )


class InvalidKeywordPatternError(ConfigurationError):
    """Keywords that do not form a valid search pattern."""

    def __init__(self, keywords: tuple[str, ...] | list[str], reason: str):
        super().__init__(
            message=f"Keywords do not form a valid pattern: {reason}",
            suggestion=(
                "Keywords are used as regular expression alternatives; "
                "escape characters such as ( ) [ ] * + ? |"
            ),
        )
        self.details = {"keywords": ", ".join(keywords)}
        self.keywords = tuple(keywords)


class SourceReadError(GuardError):
    """Error reading or tokenizing a source file."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        tokenize_failure: bool = False,
    ):
        if tokenize_failure:
            category = ErrorCategory.TOKENIZE
            suggestion = "Check that the file is valid Python source"
        else:
            category = ErrorCategory.FILE_SYSTEM
            suggestion = "Verify the file exists and is readable as UTF-8 text"
        super().__init__(
            category=category,
            message=message,
            suggestion=suggestion,
            details={"file": file_path} if file_path else None,
            exit_code=1,
        )
        self.file_path = file_path


class ValidationError(GuardError):
    """Error for invalid CLI arguments or input."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion or "Check the command syntax with --help",
            exit_code=2,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    if isinstance(error, GuardError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {str(error)}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    return message, exit_code
