"""
Data Models

충돌 라벨러가 읽는 GitHub 객체 데이터 모델들
"""

from .pull_request import Label, LabelableRef, MergeableState, PullRequest, RepoContext
from .responses import FileChange, PageInfo, PullRequestConnection

__all__ = [
    "Label",
    "LabelableRef",
    "MergeableState",
    "PullRequest",
    "RepoContext",
    "FileChange",
    "PageInfo",
    "PullRequestConnection",
]
