"""
Data Models

리뷰 파이프라인의 핵심 데이터 모델들
"""

from .pull_request import DEV_NULL, PRContext, DiffFile, Hunk, LineChange
from .review import ReviewFinding, ReviewEnvelope, ReviewOutcome, ReviewComment

__all__ = [
    "DEV_NULL",
    "PRContext",
    "DiffFile",
    "Hunk",
    "LineChange",
    "ReviewFinding",
    "ReviewEnvelope",
    "ReviewOutcome",
    "ReviewComment",
]
