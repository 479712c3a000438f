"""
PR Conflict Labeler

Labels open pull requests that have merge conflicts, announces them on
Slack and lists files changed by a pull request or commit.
"""

__version__ = "1.0.0"

from .conflicts import ConflictLabeler, LabelNotFoundError, RunSummary, notify_conflict

__all__ = ["ConflictLabeler", "LabelNotFoundError", "RunSummary", "notify_conflict"]
