"""
Unit tests for mapping model findings to review comments.
"""

import logging

import pytest

from ai_review_action.github.parser import parse_diff
from ai_review_action.models.review import ReviewFinding, ReviewComment
from ai_review_action.review.mapper import CommentMapper, coerce_line_number

from diff_samples import MODIFIED_FILE_DIFF


def finding(line, body="Consider handling errors"):
    return ReviewFinding.model_validate({"lineNumber": line, "reviewComment": body})


class TestCoerceLineNumber:
    """Unit tests for line number coercion."""

    @pytest.mark.parametrize("value, expected", [
        ("5", 5),
        (" 12 ", 12),
        ("7.0", 7),
        (9, 9),
        ("abc", None),
        ("", None),
        ("3.5", None),
        ("nan", None),
        ("inf", None),
        (None, None),
        (True, None),
    ])
    def test_coercion(self, value, expected):
        assert coerce_line_number(value) == expected


class TestCommentMapper:
    """Unit tests for CommentMapper."""

    def setup_method(self):
        self.mapper = CommentMapper()
        self.file = parse_diff(MODIFIED_FILE_DIFF)[0]
        self.hunk = self.file.hunks[0]

    def test_map_findings(self):
        comments = self.mapper.map(self.file, self.hunk, [finding(2, "Unused import"), finding("5", "Document exit codes")])

        assert comments == [
            ReviewComment(path="src/main.py", line=2, body="Unused import"),
            ReviewComment(path="src/main.py", line=5, body="Document exit codes"),
        ]

    def test_no_findings(self):
        assert self.mapper.map(self.file, self.hunk, []) == []

    def test_out_of_range_line_passes_through(self, caplog):
        """Lines outside the hunk are kept and logged."""
        with caplog.at_level(logging.WARNING, logger="ai_review_action.review.mapper"):
            comments = self.mapper.map(self.file, self.hunk, [finding(120)])

        assert comments[0].line == 120
        assert "outside" in caplog.text

    def test_non_numeric_line_is_kept(self):
        comments = self.mapper.map(self.file, self.hunk, [finding("around the import")])

        assert len(comments) == 1
        assert comments[0].line is None
        assert comments[0].path == "src/main.py"

    def test_null_line_is_kept(self):
        comments = self.mapper.map(self.file, self.hunk, [finding(None, "Add a docstring"), finding(2, "Unused import")])

        assert comments == [
            ReviewComment(path="src/main.py", line=None, body="Add a docstring"),
            ReviewComment(path="src/main.py", line=2, body="Unused import"),
        ]
