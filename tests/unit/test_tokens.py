"""Unit tests for comment token extraction."""

from pathlib import Path

import pytest

from comment_guard.cli.errors import ErrorCategory, SourceReadError
from comment_guard.rules.base import SourcePosition, TokenCategory
from comment_guard.tokens import (
    is_supported,
    python_comment_tokens,
    read_comment_tokens,
)


class TestIsSupported:
    """Tests for file type detection."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("module.py", True),
            ("stubs.pyi", True),
            ("UPPER.PY", True),
            ("notes.txt", False),
            ("script", False),
        ],
    )
    def test_suffixes(self, name, expected):
        assert is_supported(Path(name)) is expected


class TestPythonCommentTokens:
    """Tests for python_comment_tokens()."""

    def test_sample_source_tokens(self, sample_source):
        """Test comments and docstrings are yielded in file order."""
        tokens = list(python_comment_tokens(sample_source, "sample.py"))

        assert [(t.position.line, t.category) for t in tokens] == [
            (1, TokenCategory.DOC_COMMENT),
            (3, TokenCategory.COMMENT),
            (7, TokenCategory.DOC_COMMENT),
            (9, TokenCategory.COMMENT),
            (13, TokenCategory.DOC_COMMENT),
            (15, TokenCategory.COMMENT),
        ]

    def test_plain_strings_are_not_tokens(self, sample_source):
        tokens = list(python_comment_tokens(sample_source))
        assert not any("not a comment" in t.content for t in tokens)

    def test_comment_content_keeps_delimiter(self):
        tokens = list(python_comment_tokens("x = 1  # TODO: later\n", "a.py"))

        assert len(tokens) == 1
        assert tokens[0].content == "# TODO: later"
        assert tokens[0].position == SourcePosition("a.py", 1, 7)

    def test_multiline_docstring(self):
        source = 'def f():\n    """Summary.\n\n    TODO: more.\n    """\n'
        tokens = list(python_comment_tokens(source))

        assert len(tokens) == 1
        assert tokens[0].category == TokenCategory.DOC_COMMENT
        assert tokens[0].position.line == 2
        assert "TODO: more." in tokens[0].content

    def test_async_function_and_class_docstrings(self):
        source = (
            "class A:\n"
            "    '''Class doc.'''\n"
            "    async def run(self):\n"
            "        '''Run doc.'''\n"
        )
        tokens = list(python_comment_tokens(source))
        assert [t.category for t in tokens] == [TokenCategory.DOC_COMMENT] * 2

    def test_second_string_is_not_docstring(self):
        source = '"""Doc."""\n"""Not a docstring."""\n'
        tokens = list(python_comment_tokens(source))
        assert [t.content for t in tokens] == ['"""Doc."""']

    def test_docstring_column_after_non_ascii(self):
        """Test docstring columns are character offsets."""
        source = 'def é(): "é docstring"\n'
        tokens = list(python_comment_tokens(source))

        assert len(tokens) == 1
        assert tokens[0].position.column == 9

    def test_comments_kept_when_source_does_not_parse(self):
        source = "def broken:\n    pass  # fixme\n"
        tokens = list(python_comment_tokens(source))
        assert [t.content for t in tokens] == ["# fixme"]

    def test_tokenize_error(self):
        with pytest.raises(SourceReadError) as exc_info:
            list(python_comment_tokens("value = (1,\n", "broken.py"))

        assert exc_info.value.category == ErrorCategory.TOKENIZE
        assert exc_info.value.file_path == "broken.py"

    def test_empty_source(self):
        assert list(python_comment_tokens("")) == []


class TestReadCommentTokens:
    """Tests for read_comment_tokens()."""

    def test_reads_file(self, source_tree):
        path = source_tree / "sample.py"
        tokens = read_comment_tokens(path)

        assert len(tokens) == 6
        assert tokens[0].position.file_path == str(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.py"
        path.write_bytes(b"# caf\xe9\n")

        with pytest.raises(SourceReadError) as exc_info:
            read_comment_tokens(path)

        assert exc_info.value.category == ErrorCategory.FILE_SYSTEM
        assert exc_info.value.file_path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            read_comment_tokens(tmp_path / "missing.py")
