"""
Unit tests for the Slack notifier and conflict message policy.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from pr_conflict_labeler.models.pull_request import RepoContext
from pr_conflict_labeler.notify.messages import MessagePolicy, MessageTemplate
from pr_conflict_labeler.notify.slack import SlackNotificationError, SlackNotifier


class TestSlackNotifier:
    """Unit tests for SlackNotifier class."""

    def test_requires_url_and_channel(self):
        with pytest.raises(ValueError):
            SlackNotifier("", "#dev")

        with pytest.raises(ValueError):
            SlackNotifier("https://hooks.slack.com/services/x", "")

    def test_payload(self):
        notifier = SlackNotifier("https://hooks.slack.com/services/x", "#dev")

        assert notifier.build_payload("hello") == {
            "channel": "#dev",
            "text": "hello",
            "username": "PR Conflicts Bot",
            "icon_emoji": ":warning:",
        }

    @patch('pr_conflict_labeler.notify.slack.requests.post')
    def test_post(self, mock_post):
        mock_post.return_value = Mock(ok=True, status_code=200, text="ok")
        notifier = SlackNotifier("https://hooks.slack.com/services/x", "#dev", timeout=5)

        notifier.post("hello")

        mock_post.assert_called_once_with(
            "https://hooks.slack.com/services/x",
            json=notifier.build_payload("hello"),
            timeout=5,
        )

    @patch('pr_conflict_labeler.notify.slack.requests.post')
    def test_post_rejected(self, mock_post):
        mock_post.return_value = Mock(ok=False, status_code=404, text="channel_not_found")
        notifier = SlackNotifier("https://hooks.slack.com/services/x", "#nope")

        with pytest.raises(SlackNotificationError) as exc_info:
            notifier.post("hello")

        assert exc_info.value.status_code == 404
        assert "channel_not_found" in str(exc_info.value)

    @patch('pr_conflict_labeler.notify.slack.requests.post')
    def test_post_transport_failure(self, mock_post):
        mock_post.side_effect = requests.Timeout("timed out")
        notifier = SlackNotifier("https://hooks.slack.com/services/x", "#dev")

        with pytest.raises(SlackNotificationError):
            notifier.post("hello")


class TestMessagePolicy:
    """Unit tests for conflict message wording."""

    def setup_method(self):
        self.repo = RepoContext("octo-org", "hello-world")
        self.policy = MessagePolicy.with_release_bot()

    def test_release_bot_messages(self):
        messages = self.policy.compose(self.repo, 12, "githubys")

        assert messages.slack == (
            "There's a *backmerge* conflict on "
            "<https://github.com/octo-org/hello-world/pull/12|This Pull Request> (hello-world). "
            "Please fix it before it lands on the release mgmt process."
        )
        assert messages.comment == (
            ":warning: There is a backmerge conflict on this PR. "
            "Please fix it before it lands on the release mgmt process."
        )

    def test_human_author_messages(self):
        messages = self.policy.compose(self.repo, 12, "octocat")

        assert messages.slack == (
            "There's a conflict on "
            "<https://github.com/octo-org/hello-world/pull/12|This Pull Request> (hello-world). "
            "If you are the author (@octocat), please fix it."
        )
        assert messages.comment == (
            ":warning: There is a conflict on this PR. @octocat as you are the author, please fix it."
        )

    def test_custom_release_bot_login(self):
        policy = MessagePolicy.with_release_bot("release-robot")

        assert "backmerge" in policy.compose(self.repo, 1, "release-robot").slack
        assert "backmerge" not in policy.compose(self.repo, 1, "githubys").slack

    def test_deleted_author(self):
        messages = self.policy.compose(self.repo, 3, None)
        assert "@ghost" in messages.comment

    def test_from_dict(self):
        policy = MessagePolicy.from_dict({
            "renovate[bot]": {"slack": "Dependency PR {number} conflicts", "comment": "Rebase please"},
            "default": {"slack": "{owner}/{repo}#{number} conflicts", "comment": "@{author} fix it"},
        })

        assert policy.compose(self.repo, 9, "renovate[bot]").slack == "Dependency PR 9 conflicts"
        assert policy.compose(self.repo, 9, "octocat").slack == "octo-org/hello-world#9 conflicts"
        assert policy.compose(self.repo, 9, "octocat").comment == "@octocat fix it"

    def test_template_lookup(self):
        template = MessageTemplate(slack="s", comment="c")
        policy = MessagePolicy(templates={"bot": template})

        assert policy.template_for("bot") is template
        assert policy.template_for("someone") is policy.default
