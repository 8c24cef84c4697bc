"""
PR Diff Parser

Parses unified diff text into files, hunks and line changes, and filters
out files the review should not look at.
"""

import logging
from typing import Iterable, List, Optional

from unidiff import PatchSet, UnidiffParseError
from wcmatch import glob

from ..errors import DiffParseError
from ..models.pull_request import DEV_NULL, DiffFile, Hunk, LineChange


logger = logging.getLogger(__name__)

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB


def parse_diff(diff_text: str) -> List[DiffFile]:
    """
    Parse unified diff text into structured DiffFile objects.

    Args:
        diff_text: Raw unified diff as returned by GitHub

    Returns:
        Files in diff order; empty for empty text

    Raises:
        DiffParseError: If the text is not a valid unified diff
    """
    if not diff_text or not diff_text.strip():
        return []

    try:
        patch = PatchSet(diff_text)
    except UnidiffParseError as e:
        raise DiffParseError(f"Failed to parse diff: {e}") from e

    files = [_convert_file(patched_file) for patched_file in patch]
    logger.info(f"Parsed diff: {len(files)} files, {sum(len(f.hunks) for f in files)} hunks")
    return files


def _convert_file(patched_file) -> DiffFile:
    return DiffFile(
        source_path=_strip_prefix(patched_file.source_file, 'a/'),
        target_path=_strip_prefix(patched_file.target_file, 'b/'),
        hunks=[_convert_hunk(hunk) for hunk in patched_file],
    )


def _convert_hunk(hunk) -> Hunk:
    header = (
        f"@@ -{hunk.source_start},{hunk.source_length} "
        f"+{hunk.target_start},{hunk.target_length} @@ {hunk.section_header}"
    ).rstrip()

    changes = []
    for line in hunk:
        if line.is_added:
            kind = 'add'
        elif line.is_removed:
            kind = 'delete'
        elif line.is_context:
            kind = 'context'
        else:
            # "\ No newline at end of file"
            continue

        value = line.value.rstrip('\n')
        changes.append(LineChange(
            kind=kind,
            content=f"{line.line_type}{value}",
            old_line_no=line.source_line_no,
            new_line_no=line.target_line_no,
        ))

    return Hunk(header=header, changes=changes)


def _strip_prefix(path: Optional[str], prefix: str) -> Optional[str]:
    if path is None or path == DEV_NULL:
        return path
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


class DiffFilter:
    """
    Drops files that should not be reviewed.

    Patterns are path globs matched against the whole new-side path of each
    file: `*` stays inside one directory, `**` crosses directories, and
    braces and extglobs are expanded. Dotfiles only match explicit dots.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        """
        Initialize diff filter.

        Args:
            patterns: Glob patterns; blank entries are ignored
        """
        self.patterns = [p.strip() for p in patterns if p and p.strip()]

    @classmethod
    def from_string(cls, exclude: Optional[str]) -> "DiffFilter":
        """Build from a comma-separated pattern list."""
        return cls((exclude or "").split(','))

    def matching_pattern(self, path: Optional[str]) -> Optional[str]:
        """Return the first pattern matching ``path``, if any."""
        if not path:
            return None
        for pattern in self.patterns:
            if glob.globmatch(path, pattern, flags=GLOB_FLAGS):
                return pattern
        return None

    def is_excluded(self, path: Optional[str]) -> bool:
        return self.matching_pattern(path) is not None

    def apply(self, files: List[DiffFile]) -> List[DiffFile]:
        """
        Filter files relevant for review.

        Args:
            files: Parsed diff files

        Returns:
            Files that are not deleted, have hunks and match no pattern
        """
        relevant_files = []

        for diff_file in files:
            if diff_file.is_deleted:
                logger.debug(f"Skipping deleted file {diff_file.source_path}")
                continue

            if not diff_file.hunks:
                logger.debug(f"Skipping {diff_file.target_path}: no hunks")
                continue

            pattern = self.matching_pattern(diff_file.target_path)
            if pattern is not None:
                logger.debug(f"Excluding {diff_file.target_path} (matches {pattern!r})")
                continue

            relevant_files.append(diff_file)

        logger.info(f"Filtered to {len(relevant_files)} of {len(files)} files")
        return relevant_files
