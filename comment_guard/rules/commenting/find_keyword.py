"""
Discouraged keyword detection rule.

Flags comments that contain marker words such as "hack", "todo" or
"fixme" and reports the keyword together with the remark that follows it.
"""

import logging
import re
import sys
from collections.abc import Sequence
from typing import Any

from ...cli.errors import ConfigurationError, InvalidKeywordPatternError
from ..base import BaseRule, CommentToken, Diagnostic, Severity
from ..config import RuleConfig

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS: tuple[str, ...] = ("hack", "todo", "fixme")



def _numeric_ranges() -> str:
    """Character-class ranges for numeric characters that are not letters.

    ``\\w`` also matches numbers outside ``\\d`` (superscripts, fractions,
    Roman numerals), which are not letters and must count as boundaries.
    """
    ranges = []
    start = None
    for code in range(sys.maxunicode + 2):
        char = chr(code) if code <= sys.maxunicode else ""
        numeric = bool(char) and char.isnumeric() and not char.isalpha()
        if numeric and start is None:
            start = code
        elif not numeric and start is not None:
            ranges.append(f"\\U{start:08x}-\\U{code - 1:08x}")
            start = None
    return "".join(ranges)


# Anything that is not a Unicode letter (str.isalpha()).
NON_LETTER = r"[\W_%s]" % _numeric_ranges()

# trim() whitespace, then comment punctuation around the message.
WHITESPACE_CHARS = " \t\n\r\0\x0b"
PUNCTUATION_CHARS = "-:[](). "

WARNING_TEXT = "Comment contains a discouraged keyword"


class FindKeywordRule(BaseRule):
    """Detect discouraged keywords in comments."""

    RULE_ID = "COMMENTING.FIND_KEYWORD"
    CODE = "Found"

    def __init__(
        self,
        keywords: Sequence[str] | None = None,
        config: RuleConfig | None = None,
    ):
        """Initialize the rule.

        Args:
            keywords: Words to search for, matched case-insensitively.
                Used as regular expression alternatives without escaping.
            config: Optional rule configuration; a "keywords" parameter
                takes precedence over the keywords argument.

        Raises:
            InvalidKeywordPatternError: If the keywords do not form a
                valid pattern.
        """
        if config and "keywords" in config.parameters:
            keywords = config.parameters["keywords"]
        if keywords is None:
            keywords = DEFAULT_KEYWORDS
        if isinstance(keywords, str):
            raise ConfigurationError(
                f"Keywords must be a list of words, got the string {keywords!r}",
                rule_id=self.RULE_ID,
                suggestion=f'Use ["{keywords}"] for a single keyword',
            )

        self._keywords: tuple[str, ...] = tuple(keywords)
        self._severity = self.get_severity(config)
        self._pattern = self._compile(self._keywords)

    @staticmethod
    def _compile(keywords: tuple[str, ...]) -> "re.Pattern[str] | None":
        if not keywords:
            return None

        search = "|".join(keywords)
        try:
            return re.compile(
                r"(?:\A|%s+)(%s)(%s+(.*)|\Z)" % (NON_LETTER, search, NON_LETTER),
                re.IGNORECASE,
            )
        except re.error as e:
            raise InvalidKeywordPatternError(keywords, str(e)) from e

    @property
    def rule_id(self) -> str:
        return self.RULE_ID

    @property
    def name(self) -> str:
        return "Discouraged Keyword Detection"

    @property
    def category(self) -> str:
        return "commenting"

    @property
    def default_severity(self) -> Severity:
        return Severity.LOW

    @property
    def description(self) -> str:
        return (
            "Detects comments containing discouraged keywords "
            f"({', '.join(self._keywords) or 'none configured'}) and "
            "reports the remark that follows the keyword."
        )

    @property
    def keywords(self) -> tuple[str, ...]:
        return self._keywords

    def process(self, token: CommentToken) -> Diagnostic | None:
        return self.evaluate(token.content, token.position)

    def evaluate(self, content: str, position: Any = None) -> Diagnostic | None:
        """Check one comment's text for a discouraged keyword.

        Only the leftmost keyword is reported.

        Args:
            content: Raw comment text, delimiters included
            position: Opaque position, copied to the diagnostic

        Returns:
            Diagnostic for the first keyword found, or None.
        """
        if self._pattern is None:
            return None

        match = self._pattern.search(content)
        if match is None:
            return None

        keyword = match.group(1)
        trailing = match.group(2)
        remark = (keyword + trailing).strip(WHITESPACE_CHARS)
        message = trailing.strip(WHITESPACE_CHARS).strip(PUNCTUATION_CHARS)

        if message:
            template = WARNING_TEXT + ' "%s"'
            data: tuple[str, ...] = (message,)
        else:
            template = WARNING_TEXT
            data = ()

        logger.debug(f"Keyword {keyword!r} found at {position}")

        return Diagnostic(
            code=self.CODE,
            template=template,
            data=data,
            position=position,
            keyword=keyword,
            message=message,
            remark=remark,
            rule_id=self.rule_id,
            severity=self._severity,
        )
