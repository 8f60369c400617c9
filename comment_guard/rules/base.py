"""
Base classes and types for the comment rule engine.

This module provides the foundational abstractions shared by every
comment rule: the token categories a rule can listen for, the comment
tokens handed to rules, and the diagnostics rules hand back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..cli.errors import ConfigurationError

if TYPE_CHECKING:
    from .config import RuleConfig


class Severity(Enum):
    """Severity levels for diagnostics."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"  # Advisory, never blocks

    def __lt__(self, other: "Severity") -> bool:
        order = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]
        return order.index(self) < order.index(other)

    def __le__(self, other: "Severity") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Severity") -> bool:
        return not self <= other

    def __ge__(self, other: "Severity") -> bool:
        return not self < other


class TokenCategory(Enum):
    """Token categories a rule can register for."""

    COMMENT = "comment"  # Line comments (# ..., // ...)
    DOC_COMMENT = "doc_comment"  # Docstrings and doc blocks


COMMENT_TOKENS = frozenset({TokenCategory.COMMENT, TokenCategory.DOC_COMMENT})


@dataclass(frozen=True)
class SourcePosition:
    """Where a token starts in its source file (1-indexed line, 0-indexed column)."""

    file_path: str
    line: int
    column: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
        }

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column + 1}"


@dataclass(frozen=True)
class CommentToken:
    """A comment token produced by a token source.

    The position is opaque to rules; they only pass it through to the
    diagnostics they create.
    """

    content: str
    position: Any = None
    category: TokenCategory = TokenCategory.COMMENT


@dataclass(frozen=True)
class Diagnostic:
    """A warning produced by a rule for a single token."""

    code: str
    template: str
    data: tuple[str, ...] = ()
    position: Any = None
    keyword: str = ""
    message: str = ""
    remark: str = ""
    rule_id: str = ""
    severity: Severity = Severity.LOW

    @property
    def text(self) -> str:
        """Render the template with its parameters."""
        if not self.data:
            return self.template
        return self.template % self.data

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        position = self.position
        if hasattr(position, "to_dict"):
            position = position.to_dict()
        return {
            "rule_id": self.rule_id,
            "code": self.code,
            "severity": self.severity.value,
            "text": self.text,
            "keyword": self.keyword,
            "message": self.message,
            "remark": self.remark,
            "position": position,
        }


class BaseRule(ABC):
    """Abstract base class for all comment rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'COMMENTING.FIND_KEYWORD').

        Format: CATEGORY.RULE_NAME where CATEGORY is uppercase and
        RULE_NAME uses UPPER_SNAKE_CASE.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category, e.g. commenting."""

    @property
    @abstractmethod
    def default_severity(self) -> Severity:
        """Default severity level for diagnostics from this rule."""

    @property
    def registered_tokens(self) -> frozenset[TokenCategory]:
        """Token categories this rule wants to be invoked for.

        Read once by the engine when the rule is registered.
        """
        return COMMENT_TOKENS

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return f"Rule {self.rule_id}: {self.name}"

    @abstractmethod
    def process(self, token: CommentToken) -> Diagnostic | None:
        """Inspect one token and return at most one diagnostic.

        Args:
            token: CommentToken whose category this rule registered for

        Returns:
            Diagnostic for the token, or None if nothing was found.
        """

    def get_severity(self, config: "RuleConfig | None") -> Severity:
        """Get severity from config or use default.

        Args:
            config: Optional rule-specific configuration

        Returns:
            Severity level to use for diagnostics

        Raises:
            ConfigurationError: If the override is not a known severity.
        """
        if config and config.severity_override:
            try:
                return Severity(config.severity_override)
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown severity '{config.severity_override}' for rule {self.rule_id}",
                    rule_id=self.rule_id,
                    suggestion="Use one of: "
                    + ", ".join(s.value for s in Severity),
                ) from e
        return self.default_severity
