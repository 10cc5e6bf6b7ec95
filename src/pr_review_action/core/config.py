"""
Action Configuration

Inputs arrive as GitHub Actions ``INPUT_*`` environment variables (or a local
``.env`` file). ``ActionSettings`` reads them as raw strings, and
``to_config()`` validates required inputs and resolves defaults into one
immutable ``ActionConfig`` that is passed down explicitly.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_review_action.exceptions import MissingConfigurationException
from pr_review_action.utils.logging import get_logger
from pr_review_action.utils.retry import (
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    RetryPolicy,
)

logger = get_logger(__name__)

DEFAULT_MODEL_NAME = "claude-3-5-sonnet-20241022"
DEFAULT_TEMPERATURE = 0.0
DEFAULT_MAX_TOKENS = 4096
DEFAULT_GITHUB_API_URL = "https://api.github.com"


class ReviewMode(str, Enum):
    """Whether a file is reviewed as one diff or hunk by hunk."""
    FILE = "file"
    CHUNK = "chunk"


class PublishMode(str, Enum):
    """Whether reviews are posted as individual comments or one batch review."""
    COMMENT = "comment"
    REVIEW = "review"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ActionConfig(BaseModel):
    """Resolved, immutable configuration for one review run."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    github_token: str
    anthropic_api_key: str
    model_name: str = DEFAULT_MODEL_NAME
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    max_tokens: int = DEFAULT_MAX_TOKENS
    exclude_patterns: Tuple[str, ...] = ()
    review_mode: ReviewMode = ReviewMode.FILE
    publish_mode: PublishMode = PublishMode.COMMENT
    fail_fast: bool = False
    run_timeout_seconds: Optional[float] = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    log_level: LogLevel = LogLevel.INFO
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)


class ActionSettings(BaseSettings):
    """Raw action inputs, all strings exactly as the runner provides them."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="INPUT_",
        extra="ignore",
        protected_namespaces=(),
    )

    github_token: str = ""
    anthropic_api_key: str = ""
    model_name: str = ""
    model_temperature: str = ""
    exclude_files: str = ""
    review_mode: str = ""
    publish_mode: str = ""
    fail_fast: str = ""
    max_retries: str = ""
    run_timeout_seconds: str = ""
    github_api_url: str = ""
    log_level: str = ""

    def to_config(self) -> ActionConfig:
        """
        Validate required inputs and resolve defaults.

        Raises:
            MissingConfigurationException: If github_token or anthropic_api_key is empty
        """
        if not self.github_token.strip():
            raise MissingConfigurationException("github_token")
        if not self.anthropic_api_key.strip():
            raise MissingConfigurationException("anthropic_api_key")

        return ActionConfig(
            github_token=self.github_token.strip(),
            anthropic_api_key=self.anthropic_api_key.strip(),
            model_name=self.model_name.strip() or DEFAULT_MODEL_NAME,
            temperature=parse_temperature(self.model_temperature),
            exclude_patterns=tuple(parse_exclude_patterns(self.exclude_files)),
            review_mode=_parse_enum(ReviewMode, self.review_mode, ReviewMode.FILE),
            publish_mode=_parse_enum(PublishMode, self.publish_mode, PublishMode.COMMENT),
            fail_fast=parse_bool(self.fail_fast),
            run_timeout_seconds=_parse_timeout(self.run_timeout_seconds),
            github_api_url=self.github_api_url.strip() or DEFAULT_GITHUB_API_URL,
            log_level=_parse_enum(LogLevel, self.log_level.upper(), LogLevel.INFO),
            retry_policy=RetryPolicy(
                max_attempts=_parse_positive_int(self.max_retries, DEFAULT_MAX_ATTEMPTS),
                initial_delay=DEFAULT_INITIAL_DELAY,
                growth_factor=DEFAULT_GROWTH_FACTOR,
                jitter=True,
            ),
        )


# ============================================================================
# INPUT PARSING HELPERS
# ============================================================================

def parse_exclude_patterns(raw: str) -> List[str]:
    """Split a comma-separated glob list; blank entries are dropped."""
    return [pattern.strip() for pattern in raw.split(",") if pattern.strip()]


def parse_temperature(raw: str) -> float:
    """Parse model_temperature, falling back to the default when empty or invalid."""
    if not raw.strip():
        return DEFAULT_TEMPERATURE
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid model_temperature '{raw}', using {DEFAULT_TEMPERATURE}")
        return DEFAULT_TEMPERATURE
    if not 0.0 <= value <= 1.0:
        logger.warning(f"model_temperature {value} out of range, using {DEFAULT_TEMPERATURE}")
        return DEFAULT_TEMPERATURE
    return value


def parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"true", "1", "yes", "on"}


def _parse_positive_int(raw: str, default: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _parse_timeout(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _parse_enum(enum_cls, raw: str, default):
    try:
        return enum_cls(raw.strip())
    except ValueError:
        if raw.strip():
            logger.warning(f"Unknown {enum_cls.__name__} '{raw}', using {default.value}")
        return default


def load_config() -> ActionConfig:
    """Read action inputs from the environment and resolve them."""
    return ActionSettings().to_config()
