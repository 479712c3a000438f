"""
Configuration Management

GitHub 클라이언트, Slack 웹훅, 라벨러 동작, 로깅 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler

from .notify.messages import DEFAULT_RELEASE_BOT_LOGIN, MessagePolicy
from .notify.slack import DEFAULT_ICON_EMOJI, DEFAULT_USERNAME


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    repository: Optional[str] = None  # owner/repo


@dataclass
class SlackConfig:
    """Slack 웹훅 설정"""
    webhook_url: Optional[str] = None
    channel: Optional[str] = None
    username: str = DEFAULT_USERNAME
    icon_emoji: str = DEFAULT_ICON_EMOJI
    timeout_seconds: int = 10


@dataclass
class LabelerConfig:
    """충돌 라벨링 설정"""
    conflict_label: str = "conflict"
    release_bot_login: str = DEFAULT_RELEASE_BOT_LOGIN
    continue_on_error: bool = False
    # login -> {slack, comment}; replaces the release bot default when set
    message_templates: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def message_policy(self) -> MessagePolicy:
        if self.message_templates:
            return MessagePolicy.from_dict(self.message_templates)
        return MessagePolicy.with_release_bot(self.release_bot_login)


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig
    slack: SlackConfig
    labeler: LabelerConfig
    logging: LoggingConfig
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", "30")),
                repository=os.getenv("GITHUB_REPOSITORY"),
            ),
            slack=SlackConfig(
                webhook_url=os.getenv("SLACK_WEBHOOK_URL"),
                channel=os.getenv("SLACK_WEBHOOK_CHANNEL"),
                username=os.getenv("SLACK_USERNAME", DEFAULT_USERNAME),
                icon_emoji=os.getenv("SLACK_ICON_EMOJI", DEFAULT_ICON_EMOJI),
                timeout_seconds=int(os.getenv("SLACK_TIMEOUT", "10")),
            ),
            labeler=LabelerConfig(
                conflict_label=os.getenv("CONFLICT_LABEL", "conflict"),
                release_bot_login=os.getenv("RELEASE_BOT_LOGIN", DEFAULT_RELEASE_BOT_LOGIN),
                continue_on_error=_env_flag("CONTINUE_ON_ERROR"),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=_env_flag("DEBUG"),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드 (시크릿은 환경 변수에서 보완)"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        github = GitHubConfig(**config_data.get('github', {}))
        slack = SlackConfig(**config_data.get('slack', {}))
        github.token = github.token or os.getenv("GITHUB_TOKEN")
        github.repository = github.repository or os.getenv("GITHUB_REPOSITORY")
        slack.webhook_url = slack.webhook_url or os.getenv("SLACK_WEBHOOK_URL")

        return cls(
            github=github,
            slack=slack,
            labeler=LabelerConfig(**config_data.get('labeler', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if not self.github.token:
            errors.append("GitHub token is required")

        if not self.github.repository:
            errors.append("GitHub repository is required")
        elif len(self.github.repository.split('/')) != 2:
            errors.append("Repository must be in format 'owner/repo'")

        if not self.slack.webhook_url:
            errors.append("Slack webhook URL is required")

        if not self.slack.channel:
            errors.append("Slack webhook channel is required")

        if not self.labeler.conflict_label.strip():
            errors.append("Conflict label name cannot be empty")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환 (시크릿 제외)"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                'repository': self.github.repository,
            },
            'slack': {
                'channel': self.slack.channel,
                'username': self.slack.username,
                'icon_emoji': self.slack.icon_emoji,
                'timeout_seconds': self.slack.timeout_seconds,
            },
            'labeler': {
                'conflict_label': self.labeler.conflict_label,
                'release_bot_login': self.labeler.release_bot_login,
                'continue_on_error': self.labeler.continue_on_error,
                'message_templates': self.labeler.message_templates,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        return self._config

    def _setup_logging(self) -> None:
        level = "DEBUG" if self._config.debug else self._config.logging.level.upper()
        logging.basicConfig(
            level=getattr(logging, level),
            format=self._config.logging.format,
        )

        if self._config.logging.file_path:
            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))
            logging.getLogger().addHandler(handler)


_config_manager: Optional[ConfigManager] = None


def get_config() -> AppConfig:
    """현재 설정 반환 (최초 호출 시 환경 변수에서 로드)"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config
