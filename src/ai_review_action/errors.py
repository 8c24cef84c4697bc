"""
Error types

Everything raised here is fatal for a review run; recoverable inference
failures never leave the review client.
"""

from typing import Dict, Optional


class ReviewActionError(Exception):
    """Base class for review run errors"""


class ConfigurationError(ReviewActionError):
    """Invalid or incomplete configuration"""


class EventPayloadError(ReviewActionError):
    """Webhook event payload missing, unreadable or malformed"""


class DiffParseError(ReviewActionError):
    """Unified diff text could not be parsed"""


class GitHubAPIError(ReviewActionError):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data
