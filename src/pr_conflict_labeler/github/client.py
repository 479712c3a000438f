"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Exposes the two capabilities the conflict operations depend on:
GraphQL query/mutation execution and REST listing.
"""

import time
import logging
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
import requests


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GraphQLError(GitHubAPIError):
    """GraphQL response carrying an ``errors`` array"""
    def __init__(self, errors: List[Dict]):
        messages = '; '.join(e.get('message', 'Unknown error') for e in errors)
        super().__init__(f"GraphQL error: {messages}", status_code=200, response_data={'errors': errors})
        self.errors = errors


class ResponseShapeError(GitHubAPIError):
    """A response is missing a field the caller requires"""


class MissingCommitFilesError(ResponseShapeError):
    """Commit detail returned without its file list"""
    def __init__(self, sha: str):
        super().__init__("merge commit with an unknown diff!")
        self.sha = sha


class GitHubClient:
    """
    GitHub API client with authentication and rate limit tracking.

    Requests are sent exactly once; failures surface as GitHubAPIError
    subclasses and are never retried here.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: float = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token or workflow token
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request transport timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'PR-Conflict-Labeler/1.0'
        })
        return session

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _check_rate_limit(self) -> None:
        """Refuse to send when the remaining budget is nearly spent."""
        if self.rate_limit_remaining <= 10 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            if wait_time > 0:
                logger.warning(f"Rate limit low ({self.rate_limit_remaining}), resets in {wait_time:.1f}s")
                raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {method} {url}: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        if response.status_code == 429:
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                # proxies answer 502/504 with HTML
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query or mutation.

        Args:
            query: GraphQL document
            variables: Variables referenced by the document

        Returns:
            The ``data`` member of the response

        Raises:
            GraphQLError: When the response carries an ``errors`` array
        """
        response = self._make_request('POST', '/graphql', json={'query': query, 'variables': variables or {}})
        body = response.json()

        if body.get('errors'):
            logger.error(f"GraphQL query failed: {body['errors']}")
            raise GraphQLError(body['errors'])

        return body.get('data') or {}

    def rest_get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a REST endpoint and return the parsed JSON body.

        Args:
            endpoint: API endpoint, e.g. ``/repos/{owner}/{repo}/commits/{sha}``
            params: Query string parameters
        """
        response = self._make_request('GET', endpoint, params=params)
        return response.json()

    def test_authentication(self) -> Tuple[bool, Dict]:
        """
        Test GitHub API authentication.

        Returns:
            Tuple of (success, user_info)
        """
        try:
            response = self._make_request('GET', '/user')
        except GitHubAPIError as e:
            logger.error(f"Authentication failed: {e}")
            return False, {}

        user_data = response.json()
        logger.info(f"Authentication successful for user: {user_data.get('login')}")
        return True, user_data

    def get_rate_limit_status(self) -> Dict:
        """
        Get current rate limit status.

        Falls back to the locally tracked budget when the endpoint fails.
        """
        try:
            response = self._make_request('GET', '/rate_limit')
            return response.json()
        except GitHubAPIError as e:
            logger.error(f"Failed to get rate limit status: {e}")
            return {
                'rate': {
                    'remaining': self.rate_limit_remaining,
                    'reset': int(self.rate_limit_reset.timestamp())
                }
            }
