"""
Commenting rules.

Rules in this module:
- COMMENTING.FIND_KEYWORD - Detects hack/todo/fixme keywords in comments
"""

from .find_keyword import DEFAULT_KEYWORDS, FindKeywordRule

__all__ = ["DEFAULT_KEYWORDS", "FindKeywordRule"]
