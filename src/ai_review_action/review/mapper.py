"""
Comment Mapper

Turns model findings for a hunk into inline review comments.
"""

import logging
import math
from typing import Iterable, List, Optional

from ..models.pull_request import DiffFile, Hunk
from ..models.review import ReviewComment, ReviewFinding


logger = logging.getLogger(__name__)


def coerce_line_number(value) -> Optional[int]:
    """
    Convert a model-reported line number to an int.

    ``"12"``, ``" 12 "``, ``"12.0"`` and ``12`` all give 12; anything that
    is not a whole number gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None

    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


class CommentMapper:
    """
    Maps findings onto the file they were reported for.

    Findings are never dropped. Line numbers outside the hunk's new side
    are passed through and logged.
    """

    def map(self, file: DiffFile, hunk: Hunk, findings: Iterable[ReviewFinding]) -> List[ReviewComment]:
        """
        Args:
            file: File the hunk belongs to
            hunk: Hunk the findings were reported for
            findings: Model findings

        Returns:
            One ReviewComment per finding, in order
        """
        valid_lines = set(hunk.new_line_numbers)
        comments = []

        for finding in findings:
            line = coerce_line_number(finding.line_number)

            if line is None:
                logger.warning(f"{file.target_path}: model returned non-numeric line {finding.line_number!r}")
            elif line not in valid_lines:
                logger.warning(f"{file.target_path}: line {line} is outside {hunk.header}")

            comments.append(ReviewComment(
                path=file.target_path,
                line=line,
                body=finding.review_comment,
            ))

        return comments
