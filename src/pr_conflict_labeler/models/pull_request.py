"""
Pull Request Data Models

Pull request, 라벨, 저장소 스냅샷 데이터 모델들
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MergeableState(str, Enum):
    """GraphQL MergeableState; UNKNOWN while GitHub is still computing it"""
    MERGEABLE = "MERGEABLE"
    CONFLICTING = "CONFLICTING"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Label:
    """저장소 라벨"""
    id: str
    name: str

    def __post_init__(self):
        if not self.id:
            raise ValueError("Label id cannot be empty")


@dataclass
class PullRequest:
    """한 번의 쿼리로 받은 열린 Pull Request"""
    id: str
    number: int
    author_login: Optional[str]
    mergeable: MergeableState
    potential_merge_commit_oid: Optional[str] = None
    labels: List[Label] = field(default_factory=list)

    def __post_init__(self):
        """데이터 검증 및 중복 라벨 제거 (id 기준)"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")
        if not self.id:
            raise ValueError("PR id cannot be empty")

        seen = set()
        unique = []
        for label in self.labels:
            if label.id not in seen:
                seen.add(label.id)
                unique.append(label)
        self.labels = unique

    @property
    def is_conflicting(self) -> bool:
        return self.mergeable is MergeableState.CONFLICTING

    @property
    def is_mergeable(self) -> bool:
        return self.mergeable is MergeableState.MERGEABLE

    @property
    def is_pending(self) -> bool:
        """병합 가능 여부가 아직 계산되지 않음"""
        return self.mergeable is MergeableState.UNKNOWN

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

    def has_label(self, name: str) -> bool:
        return name in self.label_names


@dataclass(frozen=True)
class LabelableRef:
    """라벨 id와 라벨을 붙일 노드 (PR 또는 이슈) 쌍"""
    label_id: str
    labelable_id: str


@dataclass(frozen=True)
class RepoContext:
    """저장소 좌표"""
    owner: str
    repo: str

    def __post_init__(self):
        if not self.owner or not self.owner.strip():
            raise ValueError("Repository owner cannot be empty")
        if not self.repo or not self.repo.strip():
            raise ValueError("Repository name cannot be empty")

    @classmethod
    def from_slug(cls, slug: str) -> "RepoContext":
        """``owner/repo`` 문자열에서 생성"""
        parts = slug.strip().split('/')
        if len(parts) != 2:
            raise ValueError("Repository must be in format 'owner/repo'")
        return cls(owner=parts[0], repo=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def pull_request_url(self, number: int) -> str:
        return f"https://github.com/{self.owner}/{self.repo}/pull/{number}"
