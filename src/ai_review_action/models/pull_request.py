"""
Pull Request Data Models

Pull Request 컨텍스트와 diff 관련 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


DEV_NULL = "/dev/null"


@dataclass(frozen=True)
class PRContext:
    """리뷰 대상 Pull Request 정보"""
    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""

    def __post_init__(self):
        """데이터 검증"""
        if self.pull_number <= 0:
            raise ValueError("PR number must be positive")
        if not self.owner or not self.repo:
            raise ValueError("Owner and repo are required")

    @classmethod
    def from_api(cls, owner: str, repo: str, pull_number: int, pr_data: Dict) -> "PRContext":
        """GitHub PR 응답에서 생성"""
        return cls(
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            title=pr_data.get('title') or "",
            description=pr_data.get('body') or "",
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pull_number}"


@dataclass
class LineChange:
    """Hunk 안의 개별 라인"""
    kind: str  # 'add', 'delete', 'context'
    content: str
    old_line_no: Optional[int] = None
    new_line_no: Optional[int] = None

    def __post_init__(self):
        """데이터 검증"""
        valid_kinds = {'add', 'delete', 'context'}
        if self.kind not in valid_kinds:
            raise ValueError(f"Invalid kind: {self.kind}")
        if self.old_line_no is None and self.new_line_no is None:
            raise ValueError("A line change needs an old or new line number")

    @property
    def line_no(self) -> int:
        """New-side number, or the old-side one for removed lines"""
        return self.new_line_no if self.new_line_no is not None else self.old_line_no


@dataclass
class Hunk:
    """Diff의 개별 hunk"""
    header: str
    changes: List[LineChange] = field(default_factory=list)

    @property
    def new_line_numbers(self) -> List[int]:
        """Lines of the new side that a review comment may point at"""
        return [c.new_line_no for c in self.changes if c.new_line_no is not None]


@dataclass
class DiffFile:
    """파일 단위 변경사항"""
    source_path: Optional[str]
    target_path: Optional[str]
    hunks: List[Hunk] = field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        return self.target_path == DEV_NULL

    @property
    def is_added(self) -> bool:
        return self.source_path == DEV_NULL
