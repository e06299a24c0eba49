# =============================================================================
# core/config.py  —  Settings
# =============================================================================
#
# All configuration comes from environment variables.  A .env file in the
# working directory is loaded first (python-dotenv) so local development
# doesn't need exported shell variables; real env vars still win.
#
#   HAMIBOT_PERSONAL_ACCESS_TOKEN   required: sent as X-API-Key
#   HAMIBOT_API_BASE_URL            optional: defaults to the public API
#   HAMIBOT_API_TIMEOUT             optional: seconds per request (float);
#                                   unset means no timeout
#   HAMIBOT_LOG_LEVEL               optional: CRITICAL, ERROR, WARNING,
#                                   INFO or DEBUG (any case)
#
# Settings are read ONCE at startup and never re-read.
# =============================================================================

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from hamibot_mcp.core.errors import ConfigurationError


TOKEN_ENV = "HAMIBOT_PERSONAL_ACCESS_TOKEN"
BASE_URL_ENV = "HAMIBOT_API_BASE_URL"
TIMEOUT_ENV = "HAMIBOT_API_TIMEOUT"
LOG_LEVEL_ENV = "HAMIBOT_LOG_LEVEL"

DEFAULT_BASE_URL = "https://api.hamibot.com/v2"
DEFAULT_TIMEOUT: Optional[float] = None
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, immutable once loaded."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return (
            f"Settings(token='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, log_level={self.log_level!r})"
        )


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be positive, got {raw!r}")
    return timeout


def _parse_log_level(raw: Optional[str]) -> str:
    if raw is None or not raw.strip():
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.
        dotenv: Whether to load a .env file into os.environ first.  Only
                applies when reading from os.environ.

    Returns:
        A frozen Settings instance.

    Raises:
        ConfigurationError: If the access token is missing or a value is malformed.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    token = (environ.get(TOKEN_ENV) or "").strip()
    if not token:
        raise ConfigurationError(f"{TOKEN_ENV} environment variable is required")

    base_url = (environ.get(BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL

    return Settings(
        token=token,
        base_url=base_url.rstrip("/"),
        timeout=_parse_timeout(environ.get(TIMEOUT_ENV)),
        log_level=_parse_log_level(environ.get(LOG_LEVEL_ENV)),
    )
