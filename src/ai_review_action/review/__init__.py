"""
Review Processing

This module maps model findings to GitHub inline review comments.
"""

from .mapper import CommentMapper, coerce_line_number

__all__ = ['CommentMapper', 'coerce_line_number']
