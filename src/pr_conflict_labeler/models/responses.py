"""
GitHub Response Models

GitHub 쿼리 응답 구조 데이터 모델들

Pydantic records mirroring the shape of each query response. Every field
the queries select is required, so a payload missing one fails validation
instead of surfacing later as a KeyError.
"""

import logging
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .pull_request import Label, MergeableState, PullRequest


logger = logging.getLogger(__name__)

VALID_FILE_STATUSES = {'added', 'removed', 'modified', 'renamed', 'copied', 'changed', 'unchanged'}


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LabelNode(_WireModel):
    id: str
    name: str

    def to_label(self) -> Label:
        return Label(id=self.id, name=self.name)


class LabelEdge(_WireModel):
    node: LabelNode


class LabelConnection(_WireModel):
    edges: List[LabelEdge]

    def to_labels(self) -> List[Label]:
        return [edge.node.to_label() for edge in self.edges]


class Author(_WireModel):
    login: str


class CommitRef(_WireModel):
    oid: str


class PullRequestNode(_WireModel):
    """``PullRequest`` node with the field set both PR queries select"""
    id: str
    number: int
    # null when the author account has been deleted
    author: Optional[Author]
    mergeable: MergeableState
    potential_merge_commit: Optional[CommitRef] = Field(alias='potentialMergeCommit')
    labels: LabelConnection

    def to_pull_request(self) -> PullRequest:
        return PullRequest(
            id=self.id,
            number=self.number,
            author_login=self.author.login if self.author else None,
            mergeable=self.mergeable,
            potential_merge_commit_oid=self.potential_merge_commit.oid if self.potential_merge_commit else None,
            labels=self.labels.to_labels(),
        )


class PullRequestEdge(_WireModel):
    node: PullRequestNode


class PageInfo(_WireModel):
    end_cursor: Optional[str] = Field(alias='endCursor')
    has_next_page: bool = Field(alias='hasNextPage')


class PullRequestConnection(_WireModel):
    edges: List[PullRequestEdge]
    page_info: PageInfo = Field(alias='pageInfo')

    @property
    def nodes(self) -> List[PullRequest]:
        return [edge.node.to_pull_request() for edge in self.edges]


class PullRequestsRepository(_WireModel):
    pull_requests: PullRequestConnection = Field(alias='pullRequests')


class PullRequestPageResponse(_WireModel):
    """열린 Pull Request 페이지 쿼리 응답"""
    repository: PullRequestsRepository


class SinglePullRequestRepository(_WireModel):
    pull_request: PullRequestNode = Field(alias='pullRequest')


class SinglePullRequestResponse(_WireModel):
    """번호로 조회한 Pull Request 쿼리 응답"""
    repository: SinglePullRequestRepository


class LabelsRepository(_WireModel):
    labels: LabelConnection


class LabelSearchResponse(_WireModel):
    """라벨 검색 쿼리 응답"""
    repository: LabelsRepository


class FileChange(BaseModel):
    """
    One file of a pull request or commit diff.

    Extra members of the REST payload are kept so ``raw`` returns the
    payload as received. Statuses GitHub adds later pass through with a
    warning.
    """
    model_config = ConfigDict(extra='allow')

    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: Optional[str] = None
    previous_filename: Optional[str] = None
    sha: Optional[str] = None
    blob_url: Optional[str] = None

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        if v not in VALID_FILE_STATUSES:
            logger.warning(f"Unrecognized file status '{v}', keeping it as received")
        return v

    @field_validator('additions', 'deletions', 'changes')
    @classmethod
    def validate_counts(cls, v):
        if v < 0:
            raise ValueError('Counts must be non-negative')
        return v

    @property
    def raw(self) -> Dict[str, Any]:
        return {**self.model_dump(exclude_unset=True), **(self.model_extra or {})}
