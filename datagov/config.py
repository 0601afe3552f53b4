# =============================================================================
# datagov/config.py - Runtime settings from the environment
# =============================================================================
#
# All settings come from environment variables, optionally loaded from a
# .env file with python-dotenv.  Every default reproduces the fixed
# behaviour of the server: catalog.data.gov, no timeout, INFO logging.
#
#   DATAGOV_API_BASE_URL   CKAN API base        (https://catalog.data.gov/api/3)
#   DATAGOV_HTTP_TIMEOUT   seconds per request  (unset = no timeout)
#   DATAGOV_USER_AGENT     outbound User-Agent  (datagov-mcp-server/0.1.0)
#   DATAGOV_LOG_LEVEL      stderr log level     (INFO)
#   DATAGOV_AGENT_MODEL    LiteLlm model string (openrouter/openai/gpt-4o)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from datagov.errors import ConfigError

SERVER_NAME = "datagov-mcp-server"
SERVER_VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://catalog.data.gov/api/3"
DEFAULT_USER_AGENT = f"{SERVER_NAME}/{SERVER_VERSION}"
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Everything the server and the assistant read at startup."""

    base_url: str = DEFAULT_BASE_URL
    http_timeout: Optional[float] = None   # None disables the timeout
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    agent_model: str = DEFAULT_AGENT_MODEL


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"DATAGOV_HTTP_TIMEOUT must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"DATAGOV_HTTP_TIMEOUT must be positive, got {raw!r}")
    return value


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"DATAGOV_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {raw!r}")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of ``os.environ``.  When omitted,
            a ``.env`` file in the working directory is loaded first
            (existing variables win).

    Raises:
        ConfigError: If a variable holds an unusable value.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    base_url = (environ.get("DATAGOV_API_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigError(f"DATAGOV_API_BASE_URL must be an http(s) URL, got {base_url!r}")

    return Settings(
        base_url=base_url,
        http_timeout=_parse_timeout(environ.get("DATAGOV_HTTP_TIMEOUT")),
        user_agent=(environ.get("DATAGOV_USER_AGENT") or DEFAULT_USER_AGENT).strip(),
        log_level=_parse_log_level(environ.get("DATAGOV_LOG_LEVEL")),
        agent_model=(environ.get("DATAGOV_AGENT_MODEL") or DEFAULT_AGENT_MODEL).strip(),
    )
