"""
Pull request queries.

Both fetchers accept any client exposing ``graphql(query, variables)``;
errors raised by the client propagate unchanged.
"""

import logging
from typing import List, Optional

from ..models.pull_request import PullRequest, RepoContext
from ..models.responses import (
    PullRequestConnection,
    PullRequestPageResponse,
    SinglePullRequestResponse,
)
from .client import ResponseShapeError
from .queries import PULL_REQUEST_PAGE_QUERY, PULL_REQUEST_QUERY, decode_response


logger = logging.getLogger(__name__)


def fetch_pull_request_page(client, repo: RepoContext, cursor: Optional[str] = None) -> PullRequestConnection:
    """Fetch one page of up to 100 open pull requests after ``cursor``."""
    data = client.graphql(PULL_REQUEST_PAGE_QUERY, {
        'owner': repo.owner,
        'repo': repo.repo,
        'after': cursor,
    })
    response = decode_response(PullRequestPageResponse, data, 'pull request page')
    return response.repository.pull_requests


def fetch_all_open_pull_requests(client, repo: RepoContext) -> List[PullRequest]:
    """
    Fetch every open pull request of ``repo``.

    Pages are requested one after another, each passing the previous
    page's end cursor, until GitHub reports no next page. A page that
    claims a successor without moving the cursor forward is rejected.

    Args:
        client: GraphQL-capable GitHub client
        repo: Repository coordinates

    Returns:
        Pull requests in the order GitHub returned them

    Raises:
        ResponseShapeError: When a page has a next page but no new end cursor
    """
    pull_requests: List[PullRequest] = []
    cursor: Optional[str] = None
    pages = 0

    while True:
        page = fetch_pull_request_page(client, repo, cursor)
        pages += 1
        pull_requests.extend(page.nodes)
        if not page.page_info.has_next_page:
            break
        end_cursor = page.page_info.end_cursor
        if end_cursor is None or end_cursor == cursor:
            raise ResponseShapeError(
                f"Pull request page {pages} reports a next page but did not advance the cursor ({end_cursor!r})"
            )
        cursor = end_cursor

    logger.info(f"Fetched {len(pull_requests)} open pull requests for {repo.full_name} in {pages} page(s)")
    return pull_requests


def fetch_pull_request(client, repo: RepoContext, number: int) -> PullRequest:
    """
    Fetch mergeability and labels of a single pull request.

    Raises:
        ResponseShapeError: If the pull request does not exist
    """
    logger.info(f"Fetching PR {repo.full_name}#{number}")

    data = client.graphql(PULL_REQUEST_QUERY, {
        'owner': repo.owner,
        'repo': repo.repo,
        'number': number,
    })
    response = decode_response(SinglePullRequestResponse, data, f'pull request #{number}')
    return response.repository.pull_request.to_pull_request()
