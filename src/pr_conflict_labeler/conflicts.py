"""
Conflict Labeling Flow

충돌 Pull Request 알림 및 라벨 관리

Notifies and labels conflicting pull requests and clears the label once a
pull request becomes mergeable again.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .github.labels import add_comment, add_label, fetch_labels, find_label, remove_label
from .github.pull_requests import fetch_all_open_pull_requests, fetch_pull_request
from .models.pull_request import Label, LabelableRef, PullRequest, RepoContext
from .notify.messages import MessagePolicy
from .notify.slack import SlackNotifier


logger = logging.getLogger(__name__)


class LabelNotFoundError(Exception):
    """The configured conflict label does not exist in the repository"""
    def __init__(self, label_name: str, repo: RepoContext):
        super().__init__(f"Label '{label_name}' not found in {repo.full_name}")
        self.label_name = label_name


def notify_conflict(
    client,
    labelable: LabelableRef,
    pr_number: int,
    pr_author: Optional[str],
    repo: RepoContext,
    notifier: SlackNotifier,
    policy: MessagePolicy,
) -> Dict[str, Any]:
    """
    Announce a conflict on Slack, label the pull request and comment on it.

    The three calls run strictly in that order and the first failure aborts
    the rest; nothing already sent is undone.

    Returns:
        Result of the add-comment mutation
    """
    messages = policy.compose(repo, pr_number, pr_author)

    notifier.post(messages.slack)
    add_label(client, labelable)
    return add_comment(client, labelable.labelable_id, messages.comment)


@dataclass
class RunSummary:
    """PR numbers grouped by what a run did to them"""
    labelled: List[int] = field(default_factory=list)
    unlabelled: List[int] = field(default_factory=list)
    pending: List[int] = field(default_factory=list)
    unchanged: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.labelled) + len(self.unlabelled) + len(self.pending) + len(self.unchanged) + len(self.failed)


class ConflictLabeler:
    """
    Applies the conflict label decision to open pull requests.

    - conflicting and unlabelled: notify, label, comment
    - mergeable and labelled: remove the label
    - mergeability unknown: leave alone until a later run
    """

    def __init__(
        self,
        client,
        repo: RepoContext,
        notifier: SlackNotifier,
        policy: MessagePolicy,
        label_name: str,
        continue_on_error: bool = False,
    ):
        self.client = client
        self.repo = repo
        self.notifier = notifier
        self.policy = policy
        self.label_name = label_name
        self.continue_on_error = continue_on_error

    def resolve_label(self) -> Label:
        label = find_label(fetch_labels(self.client, self.repo, self.label_name), self.label_name)
        if label is None:
            raise LabelNotFoundError(self.label_name, self.repo)
        return label

    def process(self, pull_request: PullRequest, label: Label, summary: RunSummary) -> None:
        labelled = pull_request.has_label(label.name)
        labelable = LabelableRef(label_id=label.id, labelable_id=pull_request.id)

        if pull_request.is_pending:
            logger.info(f"PR #{pull_request.number} mergeability not computed yet, skipping")
            summary.pending.append(pull_request.number)
        elif pull_request.is_conflicting and not labelled:
            logger.info(f"PR #{pull_request.number} by {pull_request.author_login} has conflicts")
            notify_conflict(
                self.client,
                labelable,
                pull_request.number,
                pull_request.author_login,
                self.repo,
                self.notifier,
                self.policy,
            )
            summary.labelled.append(pull_request.number)
        elif pull_request.is_mergeable and labelled:
            logger.info(f"PR #{pull_request.number} no longer conflicts, removing '{label.name}'")
            remove_label(self.client, labelable)
            summary.unlabelled.append(pull_request.number)
        else:
            summary.unchanged.append(pull_request.number)

    def _process_all(self, pull_requests: List[PullRequest], label: Label) -> RunSummary:
        summary = RunSummary()
        first_error: Optional[Exception] = None

        for pull_request in pull_requests:
            try:
                self.process(pull_request, label, summary)
            except Exception as e:
                if not self.continue_on_error:
                    raise
                logger.error(f"Failed to process PR #{pull_request.number}: {e}")
                summary.failed.append(pull_request.number)
                first_error = first_error or e

        logger.info(
            f"Conflict check on {self.repo.full_name}: {len(summary.labelled)} labelled, "
            f"{len(summary.unlabelled)} unlabelled, {len(summary.pending)} pending, "
            f"{len(summary.failed)} failed"
        )
        if first_error is not None:
            raise first_error
        return summary

    def run(self) -> RunSummary:
        """Check every open pull request."""
        label = self.resolve_label()
        return self._process_all(fetch_all_open_pull_requests(self.client, self.repo), label)

    def run_single(self, number: int) -> RunSummary:
        """Check one pull request, e.g. from a pull_request event."""
        label = self.resolve_label()
        return self._process_all([fetch_pull_request(self.client, self.repo, number)], label)
