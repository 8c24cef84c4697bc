"""
AI Review Action

LLM-backed inline code review for GitHub pull requests, run from a
workflow on pull_request events.
"""

__version__ = "1.0.0"

from .orchestrator import ReviewOrchestrator, ReviewRunResult, RunStatus

__all__ = ["ReviewOrchestrator", "ReviewRunResult", "RunStatus"]
