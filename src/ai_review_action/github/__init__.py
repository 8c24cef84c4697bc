"""
GitHub Integration Layer

This module provides GitHub API integration for PR details, diff retrieval,
webhook event loading and review submission.
"""

from .client import GitHubClient
from .event import WebhookEvent, load_event
from .parser import DiffFilter, parse_diff

__all__ = ['GitHubClient', 'WebhookEvent', 'load_event', 'DiffFilter', 'parse_diff']
