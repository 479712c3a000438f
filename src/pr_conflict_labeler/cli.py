"""
Command line entry point.

Usage:
    pr-conflict-labeler check [--pr NUMBER] [--config FILE]
    pr-conflict-labeler changes (--pr NUMBER | --sha SHA) [--config FILE]

``--config`` is also accepted before the subcommand.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AppConfig, ConfigManager, get_config
from .conflicts import ConflictLabeler
from .github.changes import fetch_commit_changes, fetch_pull_request_changes
from .github.client import GitHubClient
from .models.pull_request import RepoContext
from .notify.slack import SlackNotifier


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pr-conflict-labeler',
        description='Label and announce pull requests with merge conflicts',
    )
    config_help = 'YAML config file (default: environment variables)'
    parser.add_argument('--config', help=config_help)

    # a subcommand-level --config must not reset one given before the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', default=argparse.SUPPRESS, help=config_help)

    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', parents=[common], help='Check open pull requests for conflicts')
    check.add_argument('--pr', type=int, help='Only check this pull request')

    changes = subparsers.add_parser('changes', parents=[common], help='List files changed by a pull request or commit')
    target = changes.add_mutually_exclusive_group(required=True)
    target.add_argument('--pr', type=int, help='Pull request number')
    target.add_argument('--sha', help='Commit SHA')

    return parser


def load_config(path: Optional[str]) -> AppConfig:
    if path:
        return ConfigManager(AppConfig.from_yaml(path)).config
    return get_config()


def run_check(config: AppConfig, client: GitHubClient, repo: RepoContext, pr_number: Optional[int]) -> None:
    notifier = SlackNotifier(
        webhook_url=config.slack.webhook_url,
        channel=config.slack.channel,
        username=config.slack.username,
        icon_emoji=config.slack.icon_emoji,
        timeout=config.slack.timeout_seconds,
    )
    labeler = ConflictLabeler(
        client,
        repo,
        notifier,
        config.labeler.message_policy(),
        config.labeler.conflict_label,
        continue_on_error=config.labeler.continue_on_error,
    )

    summary = labeler.run_single(pr_number) if pr_number is not None else labeler.run()
    print(
        f"labelled: {summary.labelled} unlabelled: {summary.unlabelled} "
        f"pending: {summary.pending} unchanged: {len(summary.unchanged)}"
    )


def run_changes(client: GitHubClient, repo: RepoContext, pr_number: Optional[int], sha: Optional[str]) -> None:
    if pr_number is not None:
        changes = fetch_pull_request_changes(client, repo, pr_number)
    else:
        changes = fetch_commit_changes(client, repo, sha)

    for change in changes:
        print(f"{change.status}\t{change.filename}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        client = GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        )
        repo = RepoContext.from_slug(config.github.repository)

        if args.command == 'check':
            run_check(config, client, repo, args.pr)
        else:
            run_changes(client, repo, args.pr, args.sha)
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
