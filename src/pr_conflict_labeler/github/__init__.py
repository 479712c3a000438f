"""
GitHub Integration Layer

GraphQL and REST wrappers for pull request mergeability, labels,
comments and changed files.
"""

from .client import (
    GitHubAPIError,
    GitHubClient,
    GraphQLError,
    MissingCommitFilesError,
    RateLimitExceeded,
    ResponseShapeError,
)
from .changes import fetch_commit_changes, fetch_pull_request_changes
from .labels import add_comment, add_label, fetch_labels, find_label, remove_label
from .pull_requests import fetch_all_open_pull_requests, fetch_pull_request

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'GraphQLError',
    'MissingCommitFilesError',
    'RateLimitExceeded',
    'ResponseShapeError',
    'fetch_all_open_pull_requests',
    'fetch_pull_request',
    'fetch_labels',
    'find_label',
    'add_label',
    'add_comment',
    'remove_label',
    'fetch_pull_request_changes',
    'fetch_commit_changes',
]
