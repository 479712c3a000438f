"""
Unit tests for the GitHub API client.
"""

import time

import pytest
import requests
from unittest.mock import Mock, patch

from pr_conflict_labeler.github.client import (
    GitHubAPIError,
    GitHubClient,
    GraphQLError,
    RateLimitExceeded,
)


def make_response(status_code=200, json_data=None, headers=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data if json_data is not None else {}
    response.content = b'{}' if json_data is not None else b''
    response.headers = headers or {}
    return response


class TestGitHubClient:
    """Unit tests for GitHubClient class."""

    def setup_method(self):
        self.client = GitHubClient("test_token")

    def test_client_initialization(self):
        assert self.client.token == "test_token"
        assert self.client.base_url == "https://api.github.com"
        assert self.client.headers["Authorization"] == "token test_token"
        assert self.client.headers["Accept"] == "application/vnd.github.v3+json"

    def test_client_requires_token(self):
        with pytest.raises(ValueError):
            GitHubClient("")

        with pytest.raises(ValueError):
            GitHubClient(None)

    def test_base_url_trailing_slash(self):
        client = GitHubClient("t", base_url="https://ghe.example.com/api/v3/")
        assert client.base_url == "https://ghe.example.com/api/v3"

    @patch('requests.Session.request')
    def test_graphql_posts_query_and_variables(self, mock_request):
        mock_request.return_value = make_response(json_data={"data": {"repository": {"id": "R_1"}}})

        data = self.client.graphql("query { viewer { login } }", {"owner": "o"})

        assert data == {"repository": {"id": "R_1"}}
        method, url = mock_request.call_args[0]
        assert method == "POST"
        assert url == "https://api.github.com/graphql"
        assert mock_request.call_args[1]["json"] == {
            "query": "query { viewer { login } }",
            "variables": {"owner": "o"},
        }
        assert mock_request.call_args[1]["timeout"] == 30

    @patch('requests.Session.request')
    def test_graphql_errors_raise(self, mock_request):
        mock_request.return_value = make_response(json_data={
            "data": None,
            "errors": [{"message": "Could not resolve to a Repository"}],
        })

        with pytest.raises(GraphQLError) as exc_info:
            self.client.graphql("query { x }")

        assert "Could not resolve to a Repository" in str(exc_info.value)
        assert exc_info.value.errors[0]["message"] == "Could not resolve to a Repository"

    @patch('requests.Session.request')
    def test_rest_get_passes_params(self, mock_request):
        mock_request.return_value = make_response(json_data=[{"filename": "a.py"}])

        result = self.client.rest_get("/repos/o/r/pulls/1/files", {"per_page": 300})

        assert result == [{"filename": "a.py"}]
        assert mock_request.call_args[0] == ("GET", "https://api.github.com/repos/o/r/pulls/1/files")
        assert mock_request.call_args[1]["params"] == {"per_page": 300}

    @patch('requests.Session.request')
    def test_http_error_raises_api_error(self, mock_request):
        mock_request.return_value = make_response(404, json_data={"message": "Not Found"})

        with pytest.raises(GitHubAPIError) as exc_info:
            self.client.rest_get("/repos/o/r/commits/abc")

        assert exc_info.value.status_code == 404
        assert "Not Found" in str(exc_info.value)

    @patch('requests.Session.request')
    def test_rate_limit_response(self, mock_request):
        mock_request.return_value = make_response(
            429, headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": str(int(time.time()) + 60)}
        )

        with pytest.raises(RateLimitExceeded):
            self.client.graphql("query { x }")

    @patch('requests.Session.request')
    def test_low_budget_refuses_next_request(self, mock_request):
        mock_request.return_value = make_response(
            json_data={"data": {}},
            headers={"X-RateLimit-Remaining": "3", "X-RateLimit-Reset": str(int(time.time()) + 600)},
        )

        self.client.graphql("query { x }")
        assert self.client.rate_limit_remaining == 3

        with pytest.raises(RateLimitExceeded):
            self.client.graphql("query { x }")
        assert mock_request.call_count == 1

    @patch('requests.Session.request')
    def test_transport_error_is_not_retried(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("connection reset")

        with pytest.raises(GitHubAPIError) as exc_info:
            self.client.graphql("query { x }")

        assert "connection reset" in str(exc_info.value)
        assert mock_request.call_count == 1

    @patch('requests.Session.request')
    def test_authentication_success(self, mock_request):
        mock_request.return_value = make_response(json_data={"login": "testuser", "id": 12345})

        success, user_info = self.client.test_authentication()

        assert success is True
        assert user_info["login"] == "testuser"

    @patch('requests.Session.request')
    def test_authentication_failure(self, mock_request):
        mock_request.return_value = make_response(401, json_data={"message": "Bad credentials"})

        success, user_info = self.client.test_authentication()

        assert success is False
        assert user_info == {}

    @patch('requests.Session.request')
    def test_rate_limit_status_fallback(self, mock_request):
        mock_request.return_value = make_response(500, json_data={"message": "boom"})

        status = self.client.get_rate_limit_status()

        assert status["rate"]["remaining"] == self.client.rate_limit_remaining
