"""
Notification Layer

Slack webhook delivery and conflict message wording.
"""

from .messages import ConflictMessages, MessagePolicy, MessageTemplate
from .slack import SlackNotificationError, SlackNotifier

__all__ = ['ConflictMessages', 'MessagePolicy', 'MessageTemplate', 'SlackNotificationError', 'SlackNotifier']
