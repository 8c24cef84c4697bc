"""
Review Data Models

코드 리뷰 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewFinding(BaseModel):
    """One entry of the model's ``reviews`` array"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    line_number: Optional[str] = Field(default=None, alias="lineNumber")
    review_comment: str = Field(alias="reviewComment")

    @field_validator('line_number', mode='before')
    @classmethod
    def stringify_line_number(cls, v):
        # Kept textual until mapping; anything that is not a scalar has no line
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float, bool)):
            return str(v)
        return None


class ReviewEnvelope(BaseModel):
    """JSON envelope the model is asked to answer with"""
    reviews: List[ReviewFinding] = Field(default_factory=list)

    @field_validator('reviews', mode='before')
    @classmethod
    def null_means_empty(cls, v):
        return [] if v is None else v


@dataclass
class ReviewOutcome:
    """
    Result of a single inference call.

    A failed call and a clean hunk both carry no findings; ``error``
    tells them apart.
    """
    findings: List[ReviewFinding] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, reason: str) -> "ReviewOutcome":
        return cls(findings=[], error=reason)


@dataclass
class ReviewComment:
    """GitHub PR 인라인 코멘트 형식"""
    path: str
    line: Optional[int]
    body: str

    def to_github(self) -> Dict[str, Any]:
        """Entry of the ``comments`` array of a create-review request"""
        return {
            'path': self.path,
            'line': self.line,
            'body': self.body,
        }
