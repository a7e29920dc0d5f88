"""Environment-derived configuration for every sample."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from foundry_samples.common.constants import (
    DEFAULT_AI_SEARCH_CONNECTION,
    DEFAULT_AI_SEARCH_INDEX,
    DEFAULT_INDEX_NAME,
    DEFAULT_INDEX_VERSION,
    DEFAULT_OPENAI_API_VERSION,
    POLL_BACKOFF,
    POLL_INTERVAL_SECS,
    POLL_MAX_ATTEMPTS,
    POLL_MAX_INTERVAL_SECS,
    PROJECT_ROOT,
)
from foundry_samples.common.errors import ConfigurationError
from foundry_samples.runner.polling import PollPolicy


def load_dotenv(env_path: Path | None = None) -> bool:
    """Load variables from a .env file into os.environ (no overwrite).

    Returns True when a file was found and read.
    """
    env_path = env_path or PROJECT_ROOT / ".env"
    if not env_path.is_file():
        return False
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export "):].strip()
            value = value.strip().strip("\"'")
            os.environ.setdefault(key, value)
    return True


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_number(name: str, default: float, cast: type = float):
    raw = _env(name)
    if not raw:
        return cast(default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(
            message=f"{name} must be a number, got {raw!r}"
        ) from None


@dataclass(frozen=True)
class Settings:
    """Resolved sample configuration.

    Every field maps to one environment variable (see ``ENV_NAMES``); empty
    strings mean "not set".
    """

    endpoint: str = ""
    model_deployment_name: str = ""
    deployment_name: str = ""
    connection_name: str = ""
    index_name: str = DEFAULT_INDEX_NAME
    index_version: str = DEFAULT_INDEX_VERSION
    ai_search_connection_name: str = DEFAULT_AI_SEARCH_CONNECTION
    ai_search_index_name: str = DEFAULT_AI_SEARCH_INDEX
    openai_endpoint: str = ""
    openai_api_version: str = DEFAULT_OPENAI_API_VERSION
    poll_interval: float = POLL_INTERVAL_SECS
    poll_max_attempts: int = POLL_MAX_ATTEMPTS
    log_level: str = "INFO"
    log_format: str = "console"

    def require(self, *names: str) -> Settings:
        """Raise ConfigurationError listing every unset variable in *names*.

        *names* are environment variable names, e.g. ``"AZURE_AI_ENDPOINT"``.
        """
        by_env = {env: field for field, env in ENV_NAMES.items()}
        missing = [n for n in names if not getattr(self, by_env[n])]
        if missing:
            raise ConfigurationError(missing)
        return self


# dataclass field -> environment variable
ENV_NAMES: dict[str, str] = {
    "endpoint": "AZURE_AI_ENDPOINT",
    "model_deployment_name": "MODEL_DEPLOYMENT_NAME",
    "deployment_name": "DEPLOYMENT_NAME",
    "connection_name": "CONNECTION_NAME",
    "index_name": "INDEX_NAME",
    "index_version": "INDEX_VERSION",
    "ai_search_connection_name": "AI_SEARCH_CONNECTION_NAME",
    "ai_search_index_name": "AI_SEARCH_INDEX_NAME",
    "openai_endpoint": "AZURE_OPENAI_ENDPOINT",
    "openai_api_version": "AZURE_OPENAI_API_VERSION",
    "poll_interval": "POLL_INTERVAL_SECS",
    "poll_max_attempts": "POLL_MAX_ATTEMPTS",
    "log_level": "LOG_LEVEL",
    "log_format": "LOG_FORMAT",
}


def resource_root(endpoint: str) -> str:
    """Scheme and host of a project endpoint, e.g. ``https://res.services.ai.azure.com``."""
    if not endpoint:
        return ""
    parts = urlsplit(endpoint)
    return f"{parts.scheme}://{parts.netloc}" if parts.netloc else ""


def load_settings(*, dotenv: bool = True) -> Settings:
    """Read the process environment (and optionally .env) into Settings."""
    if dotenv:
        load_dotenv()

    defaults = Settings()
    endpoint = _env("AZURE_AI_ENDPOINT")
    model = _env("MODEL_DEPLOYMENT_NAME")
    return Settings(
        endpoint=endpoint,
        model_deployment_name=model,
        deployment_name=_env("DEPLOYMENT_NAME", model),
        connection_name=_env("CONNECTION_NAME"),
        index_name=_env("INDEX_NAME", defaults.index_name),
        index_version=_env("INDEX_VERSION", defaults.index_version),
        ai_search_connection_name=_env(
            "AI_SEARCH_CONNECTION_NAME", defaults.ai_search_connection_name
        ),
        ai_search_index_name=_env("AI_SEARCH_INDEX_NAME", defaults.ai_search_index_name),
        openai_endpoint=_env("AZURE_OPENAI_ENDPOINT", resource_root(endpoint)),
        openai_api_version=_env("AZURE_OPENAI_API_VERSION", defaults.openai_api_version),
        poll_interval=_env_number("POLL_INTERVAL_SECS", defaults.poll_interval),
        poll_max_attempts=_env_number("POLL_MAX_ATTEMPTS", defaults.poll_max_attempts, int),
        log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
        log_format=_env("LOG_FORMAT", defaults.log_format).lower(),
    )


def poll_policy(settings: Settings) -> PollPolicy:
    """Build the shared PollPolicy from configuration."""
    return PollPolicy(
        interval=settings.poll_interval,
        backoff=POLL_BACKOFF,
        max_interval=max(POLL_MAX_INTERVAL_SECS, settings.poll_interval),
        max_attempts=settings.poll_max_attempts,
    )
