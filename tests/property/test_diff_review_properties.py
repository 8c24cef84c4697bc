"""
Property-based tests for diff filtering, prompt rendering and line mapping.
"""

from hypothesis import given, settings, strategies as st

from ai_review_action.github.parser import DiffFilter, parse_diff
from ai_review_action.llm.prompts import PromptBuilder
from ai_review_action.models.pull_request import DiffFile, Hunk, LineChange, PRContext
from ai_review_action.models.review import ReviewFinding
from ai_review_action.review.mapper import CommentMapper, coerce_line_number


path_segments = st.sampled_from(["src", "lib", "docs", "dist", "tests", "vendor", "app"])
file_names = st.sampled_from([
    "main.py", "README.md", "bundle.js", "package-lock.json", "util.ts", "guide.md", "setup.cfg",
])
paths = st.builds(
    lambda dirs, name: "/".join(dirs + [name]),
    st.lists(path_segments, max_size=3),
    file_names,
)
patterns = st.sampled_from([
    "*.md", "dist/**", "package-lock.json", "**/*.ts", "docs/*", "vendor/", "*.cfg", "",
])

safe_text = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=80)


def make_file(path, line_count=1):
    changes = [
        LineChange(kind='add', content=f"+line {i}", new_line_no=i)
        for i in range(1, line_count + 1)
    ]
    return DiffFile(source_path=path, target_path=path, hunks=[Hunk(header=f"@@ -0,0 +1,{line_count} @@", changes=changes)])


def deleted_file_diff(path):
    return "\n".join([
        f"diff --git a/{path} b/{path}",
        "deleted file mode 100644",
        "index 3b18e51..0000000",
        f"--- a/{path}",
        "+++ /dev/null",
        "@@ -1 +0,0 @@",
        "-gone",
    ]) + "\n"


class TestDiffFilterProperties:
    """Property tests for exclusion filtering."""

    @given(file_paths=st.lists(paths, max_size=15), exclude=st.lists(patterns, max_size=5))
    def test_filter_partitions_files(self, file_paths, exclude):
        """
        Property: dropped files match some pattern, kept files match none.
        """
        diff_filter = DiffFilter(exclude)
        files = [make_file(p) for p in file_paths]

        kept = diff_filter.apply(files)
        kept_ids = {id(f) for f in kept}

        for diff_file in files:
            if id(diff_file) in kept_ids:
                assert diff_filter.matching_pattern(diff_file.target_path) is None
            else:
                assert diff_filter.matching_pattern(diff_file.target_path) in diff_filter.patterns

    @given(file_paths=st.lists(paths, max_size=10))
    def test_no_patterns_keeps_everything(self, file_paths):
        files = [make_file(p) for p in file_paths]

        assert DiffFilter.from_string("").apply(files) == files

    @given(file_paths=st.lists(paths, min_size=1, max_size=5, unique=True))
    @settings(max_examples=25)
    def test_deleted_files_never_reviewed(self, file_paths):
        """
        Property: a diff made only of deleted files leaves nothing to review.
        """
        diff_text = "".join(deleted_file_diff(p) for p in file_paths)

        files = parse_diff(diff_text)

        assert len(files) == len(file_paths)
        assert DiffFilter().apply(files) == []


class TestPromptProperties:
    """Property tests for prompt rendering."""

    @given(title=safe_text, description=safe_text, path=paths, line_count=st.integers(min_value=0, max_value=20))
    def test_render_is_pure(self, title, description, path, line_count):
        """
        Property: identical inputs always render the identical prompt.
        """
        pr = PRContext(owner="octo", repo="widgets", pull_number=1, title=title, description=description)
        diff_file = make_file(path, line_count)
        hunk = diff_file.hunks[0]

        first = PromptBuilder().render(diff_file, hunk, pr)
        second = PromptBuilder().render(diff_file, hunk, pr)

        assert first == second
        assert f'"{path}"' in first
        assert f"Pull request title: {title}" in first
        for change in hunk.changes:
            assert f"{change.line_no} {change.content}" in first


class TestLineMappingProperties:
    """Property tests for comment mapping."""

    @given(number=st.integers(min_value=1, max_value=10 ** 6))
    def test_integer_text_round_trips(self, number):
        assert coerce_line_number(str(number)) == number
        assert coerce_line_number(f" {number} ") == number

    @given(lines=st.lists(st.integers(min_value=1, max_value=500), max_size=10), path=paths)
    def test_one_comment_per_finding(self, lines, path):
        """
        Property: mapping never drops or reorders findings.
        """
        diff_file = make_file(path, 3)
        findings = [
            ReviewFinding.model_validate({"lineNumber": n, "reviewComment": f"comment {i}"})
            for i, n in enumerate(lines)
        ]

        comments = CommentMapper().map(diff_file, diff_file.hunks[0], findings)

        assert [c.line for c in comments] == lines
        assert [c.body for c in comments] == [f"comment {i}" for i in range(len(lines))]
        assert all(c.path == path for c in comments)
