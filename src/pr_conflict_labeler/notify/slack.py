"""
Slack Webhook Notifier

Posts plain text messages to an incoming webhook.
"""

import logging
from typing import Dict, Optional
import requests


logger = logging.getLogger(__name__)

DEFAULT_USERNAME = 'PR Conflicts Bot'
DEFAULT_ICON_EMOJI = ':warning:'


class SlackNotificationError(Exception):
    """Webhook POST failed"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SlackNotifier:
    """Incoming-webhook client bound to one channel."""

    def __init__(
        self,
        webhook_url: str,
        channel: str,
        username: str = DEFAULT_USERNAME,
        icon_emoji: str = DEFAULT_ICON_EMOJI,
        timeout: float = 10,
    ):
        if not webhook_url:
            raise ValueError("Slack webhook URL is required")
        if not channel:
            raise ValueError("Slack webhook channel is required")

        self.webhook_url = webhook_url
        self.channel = channel
        self.username = username
        self.icon_emoji = icon_emoji
        self.timeout = timeout

    def build_payload(self, text: str) -> Dict[str, str]:
        return {
            'channel': self.channel,
            'text': text,
            'username': self.username,
            'icon_emoji': self.icon_emoji,
        }

    def post(self, text: str) -> None:
        """
        Send ``text`` to the configured channel.

        Raises:
            SlackNotificationError: On transport failure or a non-2xx reply
        """
        try:
            response = requests.post(self.webhook_url, json=self.build_payload(text), timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Slack webhook request failed: {e}")
            raise SlackNotificationError(f"Slack webhook request failed: {e}") from e

        if not response.ok:
            raise SlackNotificationError(
                f"Slack webhook error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        logger.info(f"Posted conflict notification to {self.channel}")
