"""Comment token sources.

Produces CommentToken values, in file order, for the rule engine. Python
sources are split with the standard tokenize module: ``#`` comments become
COMMENT tokens and module, class and function docstrings become
DOC_COMMENT tokens.
"""

import ast
import io
import logging
import tokenize
from collections.abc import Iterator, Sequence
from pathlib import Path

from .cli.errors import SourceReadError
from .rules.base import CommentToken, SourcePosition, TokenCategory

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = frozenset({".py", ".pyi"})


def is_supported(file_path: Path) -> bool:
    """Check whether comment tokens can be extracted from a file."""
    return file_path.suffix.lower() in SUPPORTED_SUFFIXES


def _collect_docstring_starts(source: str) -> set[tuple[int, int]]:
    """Get (line, column) of every docstring expression in the source.

    Columns are character offsets, matching tokenize. Returns an empty
    set when the source does not parse; its comments are still tokenized.
    """
    try:
        module = ast.parse(source)
    except (SyntaxError, ValueError):
        return set()

    lines = io.StringIO(source).readlines()
    starts: set[tuple[int, int]] = set()
    for node in ast.walk(module):
        if not isinstance(
            node, (ast.Module, ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)
        ):
            continue
        docstring_expr = _leading_docstring_expression(node.body)
        if docstring_expr is None:
            continue
        # ast reports UTF-8 byte offsets
        line = lines[docstring_expr.lineno - 1].encode("utf-8")
        column = len(line[: docstring_expr.col_offset].decode("utf-8", errors="replace"))
        starts.add((docstring_expr.lineno, column))
    return starts


def _leading_docstring_expression(statements: Sequence[ast.stmt]) -> ast.Expr | None:
    if not statements:
        return None
    first = statements[0]
    if (
        isinstance(first, ast.Expr)
        and isinstance(first.value, ast.Constant)
        and isinstance(first.value.value, str)
    ):
        return first
    return None


def python_comment_tokens(
    source: str, file_path: str = "<string>"
) -> Iterator[CommentToken]:
    """Yield comment and docstring tokens from Python source.

    Args:
        source: Python source text
        file_path: Path recorded in each token's position

    Yields:
        CommentToken values in file order.

    Raises:
        SourceReadError: If the source cannot be tokenized.
    """
    docstring_starts = _collect_docstring_starts(source)

    try:
        for token in tokenize.generate_tokens(io.StringIO(source).readline):
            if token.type == tokenize.COMMENT:
                category = TokenCategory.COMMENT
            elif token.type == tokenize.STRING and token.start in docstring_starts:
                category = TokenCategory.DOC_COMMENT
            else:
                continue

            line, column = token.start
            yield CommentToken(
                content=token.string,
                position=SourcePosition(file_path=file_path, line=line, column=column),
                category=category,
            )
    except (tokenize.TokenError, SyntaxError) as e:
        raise SourceReadError(
            f"Could not tokenize {file_path}: {e}",
            file_path=file_path,
            tokenize_failure=True,
        ) from e


def read_comment_tokens(file_path: Path) -> list[CommentToken]:
    """Read a source file and return its comment tokens.

    Args:
        file_path: Path to a supported source file

    Returns:
        List of CommentToken values in file order.

    Raises:
        SourceReadError: If the file cannot be read or tokenized.
    """
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(
            f"Could not read {file_path}: {e}", file_path=str(file_path)
        ) from e

    tokens = list(python_comment_tokens(source, str(file_path)))
    logger.debug(f"Extracted {len(tokens)} comment tokens from {file_path}")
    return tokens
