"""Configuration management for you."""

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

YOU_HOME = Path(os.environ.get("YOU_HOME", Path.home() / ".you"))
CONFIG_FILE = YOU_HOME / "config" / "you.conf"
LOG_DIR = YOU_HOME / "logs"

DEFAULT_TRACKER_URL = "https://st-api.yandex-team.ru"
DEFAULT_TRACKER_API_VERSION = "v3"
DEFAULT_LLM_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"

TRACKER_TOKEN_ENV = "TRACKER_OAUTH_TOKEN"
LLM_TOKEN_ENV = "OPEN_ROUTER_TOKEN"
PROXY_ENV = "YOU_PROXY"


class Language(Enum):
    """Localization of tracker API responses (Accept-Language)."""

    RUSSIAN = "ru"
    ENGLISH = "en"

    @classmethod
    def parse(cls, value: str) -> "Language":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigError(f"Unsupported tracker language: {value!r} (expected 'ru' or 'en')")


def parse_proxy(raw: str | None) -> str | None:
    """
    Normalize a proxy setting.

    Blank or missing means no proxy. A value without a scheme gets
    `http://` prepended. Pure function - no environment access.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    if any(c.isspace() for c in value):
        raise ConfigError(f"Invalid proxy URL (contains whitespace): {raw!r}")

    if "://" not in value:
        value = f"http://{value}"

    scheme, _, rest = value.partition("://")
    if not scheme or not rest.strip("/"):
        raise ConfigError(f"Invalid proxy URL: {raw!r}")
    return value


def _require_env(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise ConfigError(f"{name} environment variable not set")
    return value


def _optional_env(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def _header_value(name: str, value: str | None) -> str | None:
    """Values sent as HTTP headers must be latin-1 encodable."""
    if value is None:
        return None
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise ConfigError(f"{name} contains characters that cannot be sent in an HTTP header")
    return value


@dataclass(frozen=True)
class TrackerConfig:
    """Connection settings for the tracker API. Immutable; builders return copies."""

    oauth_token: str
    base_url: str = DEFAULT_TRACKER_URL
    api_version: str = DEFAULT_TRACKER_API_VERSION
    org_id: str | None = None
    language: Language = Language.RUSSIAN
    timeout: float = 30.0
    proxy: str | None = None

    def with_org_id(self, org_id: str) -> "TrackerConfig":
        return replace(self, org_id=org_id)

    def with_language(self, language: Language) -> "TrackerConfig":
        return replace(self, language=language)

    def with_base_url(self, base_url: str) -> "TrackerConfig":
        return replace(self, base_url=base_url)

    def with_api_version(self, api_version: str) -> "TrackerConfig":
        return replace(self, api_version=api_version)

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build from TRACKER_* variables. Raises ConfigError without a token."""
        config = cls(
            oauth_token=_header_value(TRACKER_TOKEN_ENV, _require_env(TRACKER_TOKEN_ENV)),
            org_id=_header_value("TRACKER_ORG_ID", _optional_env("TRACKER_ORG_ID")),
            proxy=parse_proxy(os.environ.get(PROXY_ENV)),
        )
        if base_url := _optional_env("TRACKER_BASE_URL"):
            config = config.with_base_url(base_url)
        if api_version := _optional_env("TRACKER_API_VERSION"):
            config = config.with_api_version(api_version)
        if language := _optional_env("TRACKER_LANGUAGE"):
            config = config.with_language(Language.parse(language))
        logger.debug(f"Tracker config loaded from environment ({config.base_url}/{config.api_version})")
        return config


@dataclass(frozen=True)
class LlmConfig:
    """Connection settings for the OpenRouter-compatible LLM API."""

    api_key: str
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_LLM_URL
    timeout: float = 120.0
    site_url: str | None = None
    app_name: str | None = None
    proxy: str | None = None

    @classmethod
    def from_env(cls, model: str = DEFAULT_MODEL) -> "LlmConfig":
        """Build from OPEN_ROUTER_TOKEN and LLM_* variables."""
        config = cls(
            api_key=_header_value(LLM_TOKEN_ENV, _require_env(LLM_TOKEN_ENV)),
            model=model,
            base_url=_optional_env("LLM_BASE_URL") or DEFAULT_LLM_URL,
            site_url=_header_value("LLM_SITE_URL", _optional_env("LLM_SITE_URL")),
            app_name=_header_value("LLM_APP_NAME", _optional_env("LLM_APP_NAME")),
            proxy=parse_proxy(os.environ.get(PROXY_ENV)),
        )
        logger.debug(f"LLM config loaded from environment (model={model})")
        return config


@dataclass
class Config:
    """Application settings (not credentials)."""

    llm_model: str = DEFAULT_MODEL
    tracker_link_base: str = "https://st.yandex-team.ru"
    plan_query: str = "Assignee: me() Resolution: empty()"
    plan_limit: int = 50
    log_level: str = "WARNING"


def load_config(path: Path | None = None) -> Config:
    """Load configuration from you.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Quoted values may carry an inline comment after the closing quote
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "llm_model":
                config.llm_model = value
            case "tracker_link_base":
                config.tracker_link_base = value.rstrip("/")
            case "plan_query":
                config.plan_query = value
            case "plan_limit":
                try:
                    config.plan_limit = int(value)
                except ValueError:
                    logger.warning(f"Ignoring non-integer PLAN_LIMIT: {value!r}")
            case "log_level":
                if isinstance(logging.getLevelName(value.upper()), int):
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Ignoring unknown LOG_LEVEL: {value!r}")
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
