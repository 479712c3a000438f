"""
Conflict Message Templates

Chooses the Slack and pull request comment wording per PR author. The
default policy frames conflicts on release bot PRs as backmerge conflicts
and mentions the author everywhere else.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ..models.pull_request import RepoContext


DEFAULT_RELEASE_BOT_LOGIN = 'githubys'


@dataclass(frozen=True)
class MessageTemplate:
    """
    A pair of ``str.format`` templates.

    Placeholders: ``{url}``, ``{owner}``, ``{repo}``, ``{number}``, ``{author}``.
    """
    slack: str
    comment: str


@dataclass(frozen=True)
class ConflictMessages:
    slack: str
    comment: str


STANDARD_TEMPLATE = MessageTemplate(
    slack="There's a conflict on <{url}|This Pull Request> ({repo}). If you are the author (@{author}), please fix it.",
    comment=":warning: There is a conflict on this PR. @{author} as you are the author, please fix it.",
)

BACKMERGE_TEMPLATE = MessageTemplate(
    slack=(
        "There's a *backmerge* conflict on <{url}|This Pull Request> ({repo}). "
        "Please fix it before it lands on the release mgmt process."
    ),
    comment=":warning: There is a backmerge conflict on this PR. Please fix it before it lands on the release mgmt process.",
)


@dataclass
class MessagePolicy:
    """Maps author logins to templates, with a fallback for everyone else."""
    templates: Dict[str, MessageTemplate] = field(default_factory=dict)
    default: MessageTemplate = STANDARD_TEMPLATE

    @classmethod
    def with_release_bot(cls, login: str = DEFAULT_RELEASE_BOT_LOGIN) -> "MessagePolicy":
        return cls(templates={login: BACKMERGE_TEMPLATE})

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, str]]) -> "MessagePolicy":
        """
        Build from config: ``{login: {slack: ..., comment: ...}}``; the
        ``default`` key replaces the fallback template.
        """
        templates = {login: MessageTemplate(**spec) for login, spec in data.items() if login != 'default'}
        if 'default' in data:
            return cls(templates=templates, default=MessageTemplate(**data['default']))
        return cls(templates=templates)

    def template_for(self, author: Optional[str]) -> MessageTemplate:
        if author is not None and author in self.templates:
            return self.templates[author]
        return self.default

    def compose(self, repo: RepoContext, number: int, author: Optional[str]) -> ConflictMessages:
        template = self.template_for(author)
        values = {
            'url': repo.pull_request_url(number),
            'owner': repo.owner,
            'repo': repo.repo,
            'number': number,
            # deleted accounts show up as "ghost" on github.com
            'author': author or 'ghost',
        }
        return ConflictMessages(
            slack=template.slack.format(**values),
            comment=template.comment.format(**values),
        )
