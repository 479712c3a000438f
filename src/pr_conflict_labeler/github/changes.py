"""
Changed file extraction for pull requests and commits.
"""

import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from ..models.pull_request import RepoContext
from ..models.responses import FileChange
from .client import MissingCommitFilesError, ResponseShapeError
from .queries import PULL_REQUEST_FILES_PAGE_SIZE


logger = logging.getLogger(__name__)

_file_list = TypeAdapter(List[FileChange])


def _decode_files(payload, what: str) -> List[FileChange]:
    try:
        return _file_list.validate_python(payload)
    except ValidationError as e:
        raise ResponseShapeError(f"Unexpected {what} file list: {e}") from e


def fetch_pull_request_changes(client, repo: RepoContext, number: int) -> List[FileChange]:
    """
    List files changed by a pull request.

    Only the first page is requested. GitHub lists at most 3000 files for
    a pull request but this returns no more than the first 300 of them.
    """
    logger.info(f"Fetching PR files for {repo.full_name}#{number}")

    files = client.rest_get(
        f'/repos/{repo.owner}/{repo.repo}/pulls/{number}/files',
        {'per_page': PULL_REQUEST_FILES_PAGE_SIZE},
    )
    changes = _decode_files(files, f'pull request #{number}')

    if len(changes) >= PULL_REQUEST_FILES_PAGE_SIZE:
        logger.warning(f"PR {repo.full_name}#{number} lists {len(changes)} files; later pages are not fetched")
    return changes


def fetch_commit_changes(client, repo: RepoContext, sha: str) -> List[FileChange]:
    """
    List files changed by a commit.

    Raises:
        MissingCommitFilesError: If the commit detail carries no ``files``
    """
    logger.info(f"Fetching commit files for {repo.full_name}@{sha}")

    commit = client.rest_get(f'/repos/{repo.owner}/{repo.repo}/commits/{sha}')
    if not isinstance(commit, dict) or commit.get('files') is None:
        raise MissingCommitFilesError(sha)

    return _decode_files(commit['files'], f'commit {sha}')
