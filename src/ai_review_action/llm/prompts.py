"""
Prompt Builder

Builds the per-hunk review prompt sent to the chat completion endpoint.
The prompt pins down a JSON answer format so the response can be
validated before it is turned into review comments.
"""

import logging
from typing import Dict

from ..models.pull_request import DiffFile, Hunk, PRContext


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a code review assistant."


class PromptBuilder:
    """
    Builds structured prompts for LLM review generation.

    Rendering is a pure function of the file, hunk and PR context.
    """

    def __init__(self):
        """Initialize prompt builder."""
        self.templates = self._load_templates()

    def render(self, file: DiffFile, hunk: Hunk, pr: PRContext) -> str:
        """
        Build the review prompt for a single hunk.

        Args:
            file: File the hunk belongs to
            hunk: Hunk to review
            pr: Pull request title and description

        Returns:
            Complete prompt string
        """
        logger.debug(f"Building review prompt for {file.target_path} {hunk.header}")

        template = self.templates

        sections = [
            template["instructions"],
            "",
            template["task"].format(path=file.target_path),
            "",
            template["pull_request"].format(title=pr.title, description=pr.description),
            "",
            "Git diff to review:",
            "",
            "```diff",
            self.format_hunk(hunk),
            "```",
            "",
        ]

        return "\n".join(sections)

    def format_hunk(self, hunk: Hunk) -> str:
        """Hunk header followed by each line prefixed with its line number."""
        lines = [hunk.header]
        lines.extend(f"{change.line_no} {change.content}" for change in hunk.changes)
        return "\n".join(lines)

    def _load_templates(self) -> Dict[str, str]:
        """Load prompt templates."""
        return {
            "instructions": """Your task is to review pull requests. Instructions:
- Provide the response in following JSON format: {"reviews": [{"lineNumber": <line_number>, "reviewComment": "<review comment>"}]}
- Do not give positive comments or compliments.
- Provide comments and suggestions ONLY if there is something to improve, otherwise "reviews" should be an empty array.
- Write the comment in GitHub Markdown format.
- IMPORTANT: NEVER suggest adding comments to the code.""",

            "task": """Review the following code diff in the file "{path}" and take the pull request title and description into account when writing the response.""",

            "pull_request": """Pull request title: {title}
Pull request description:
---
{description}
---""",
        }
