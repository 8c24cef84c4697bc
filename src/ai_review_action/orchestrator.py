"""
Review Orchestrator

Drives one review run, from the triggering event to the submitted
GitHub review:

1. Resolve the PR from the webhook event
2. Fetch the diff for the event's action
3. Parse it and drop excluded files
4. Review every hunk with the LLM
5. Submit all comments as a single review
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .github.client import GitHubClient, REVIEW_EVENT_COMMENT
from .github.event import ACTION_OPENED, ACTION_SYNCHRONIZE, WebhookEvent
from .github.parser import DiffFilter, parse_diff
from .llm.client import ReviewClient
from .llm.prompts import PromptBuilder
from .models.pull_request import DiffFile, Hunk, PRContext
from .models.review import ReviewComment
from .review.mapper import CommentMapper


logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    """Terminal state of a review run"""
    SKIPPED = "skipped"
    NO_COMMENTS = "no_comments"
    SUBMITTED = "submitted"


@dataclass
class ReviewRunResult:
    """Result of a review run."""
    status: RunStatus
    pr: Optional[PRContext] = None
    comments: List[ReviewComment] = field(default_factory=list)
    files_reviewed: int = 0
    hunks_reviewed: int = 0
    failed_hunks: int = 0
    reason: Optional[str] = None
    processing_time: float = 0.0


class ReviewOrchestrator:
    """
    Runs the review pipeline for a single pull request event.

    Any exception raised by the GitHub client or the diff parser aborts
    the run before anything is submitted.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        review_client: ReviewClient,
        diff_filter: Optional[DiffFilter] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        comment_mapper: Optional[CommentMapper] = None,
        max_workers: int = 1,
    ):
        """
        Initialize orchestrator.

        Args:
            github_client: Client for the GitHub REST API
            review_client: Client for the inference endpoint
            diff_filter: Exclusion filter (default excludes nothing)
            prompt_builder: Prompt builder
            comment_mapper: Finding to comment mapper
            max_workers: Concurrent inference requests; 1 reviews hunks sequentially
        """
        self.github_client = github_client
        self.review_client = review_client
        self.diff_filter = diff_filter or DiffFilter()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.comment_mapper = comment_mapper or CommentMapper()
        self.max_workers = max(1, max_workers)

    def run(self, event: WebhookEvent) -> ReviewRunResult:
        """
        Review the pull request referenced by ``event``.

        Args:
            event: Triggering webhook event

        Returns:
            ReviewRunResult describing how the run ended
        """
        start_time = time.monotonic()

        pr = self.resolve_pull_request(event)

        diff = self.fetch_diff(event, pr)
        if diff is None:
            logger.info(f"Unsupported event: {event.event_name or 'pull_request'} action={event.action!r}, skipping")
            return self._finish(start_time, RunStatus.SKIPPED, pr, reason=f"unsupported action {event.action!r}")

        if not diff.strip():
            logger.info("No diff found, skipping")
            return self._finish(start_time, RunStatus.SKIPPED, pr, reason="empty diff")

        files = self.diff_filter.apply(parse_diff(diff))

        comments, hunks_reviewed, failed_hunks = self.analyze(files, pr)

        if not comments:
            logger.info(f"No review comments for {pr.full_name}")
            return self._finish(
                start_time, RunStatus.NO_COMMENTS, pr,
                files_reviewed=len(files), hunks_reviewed=hunks_reviewed, failed_hunks=failed_hunks,
            )

        self.github_client.create_review(
            pr.owner, pr.repo, pr.pull_number, comments, event=REVIEW_EVENT_COMMENT,
        )
        logger.info(f"Submitted review with {len(comments)} comments to {pr.full_name}")

        return self._finish(
            start_time, RunStatus.SUBMITTED, pr, comments=comments,
            files_reviewed=len(files), hunks_reviewed=hunks_reviewed, failed_hunks=failed_hunks,
        )

    def resolve_pull_request(self, event: WebhookEvent) -> PRContext:
        """Fetch PR title and description for the event's pull request."""
        pr_data = self.github_client.get_pull_request(event.owner, event.repo, event.number)
        return PRContext.from_api(event.owner, event.repo, event.number, pr_data)

    def fetch_diff(self, event: WebhookEvent, pr: PRContext) -> Optional[str]:
        """
        Fetch the diff to review for the event's action.

        Returns:
            Diff text, or None when the action is not reviewed
        """
        if event.action == ACTION_OPENED:
            return self.github_client.get_pull_request_diff(pr.owner, pr.repo, pr.pull_number)

        if event.action == ACTION_SYNCHRONIZE:
            return self.github_client.compare_commits_diff(pr.owner, pr.repo, event.before, event.after)

        return None

    def analyze(self, files: List[DiffFile], pr: PRContext) -> Tuple[List[ReviewComment], int, int]:
        """
        Review every hunk of every file.

        Args:
            files: Filtered diff files
            pr: Pull request context

        Returns:
            Tuple of (comments in file-then-hunk order, hunks reviewed, failed hunks)
        """
        units = [
            (diff_file, hunk)
            for diff_file in files
            if diff_file.target_path
            for hunk in diff_file.hunks
        ]
        logger.info(f"Reviewing {len(units)} hunks in {len(files)} files")

        if self.max_workers > 1 and len(units) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(lambda unit: self._review_hunk(*unit, pr), units))
        else:
            results = [self._review_hunk(diff_file, hunk, pr) for diff_file, hunk in units]

        comments = []
        failed_hunks = 0
        for hunk_comments, ok in results:
            comments.extend(hunk_comments)
            if not ok:
                failed_hunks += 1

        if failed_hunks:
            logger.warning(f"{failed_hunks} of {len(units)} hunks could not be reviewed")

        return comments, len(units), failed_hunks

    def _review_hunk(self, diff_file: DiffFile, hunk: Hunk, pr: PRContext) -> Tuple[List[ReviewComment], bool]:
        prompt = self.prompt_builder.render(diff_file, hunk, pr)
        outcome = self.review_client.review(prompt)
        if not outcome.findings:
            return [], outcome.ok

        comments = self.comment_mapper.map(diff_file, hunk, outcome.findings)
        logger.debug(f"{diff_file.target_path} {hunk.header}: {len(comments)} comments")
        return comments, outcome.ok

    def _finish(self, start_time: float, status: RunStatus, pr: PRContext, **kwargs) -> ReviewRunResult:
        return ReviewRunResult(
            status=status,
            pr=pr,
            processing_time=time.monotonic() - start_time,
            **kwargs,
        )
