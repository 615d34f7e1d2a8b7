"""NoteTube configuration — loads settings from .env file or environment.

Config is loaded from (in priority order):
  1. Environment variables (highest priority)
  2. .env file in current directory
  3. .notetube/.env file
  4. Defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_loaded = False


def _parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file (KEY=VALUE, one per line)."""
    values: dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip().strip("\"'")
        values[key] = value
    return values


def load_config() -> None:
    """Load config from .env files into os.environ (if not already set)."""
    global _loaded
    if _loaded:
        return
    _loaded = True

    candidates = [
        Path.cwd() / ".env",
        Path.cwd() / ".notetube" / ".env",
    ]

    for env_path in candidates:
        values = _parse_env_file(env_path)
        if values:
            logger.debug("Loaded config from %s", env_path)
            for key, value in values.items():
                if key not in os.environ:  # env vars take priority
                    os.environ[key] = value
            break  # use first found


def get(key: str, default: str = "") -> str:
    """Get a config value (loads .env on first call)."""
    load_config()
    return os.environ.get(key, default)


def _get_float(key: str, default: float) -> float:
    raw = get(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None


class Settings(BaseModel):
    """Process-wide settings, built once at startup and passed down explicitly."""

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    llm_timeout: float = 60.0
    yt_dlp: str = "yt-dlp"
    download_timeout: float = 60.0
    list_timeout: float = 30.0
    temp_dir: Optional[str] = None  # None: system temp dir

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "No completion API key configured. Set NOTETUBE_LLM_API_KEY or OPENAI_API_KEY."
            )
        return self.api_key


def load_settings() -> Settings:
    """Build Settings from config (.env file or env vars)."""
    return Settings(
        api_key=get("NOTETUBE_LLM_API_KEY") or get("OPENAI_API_KEY") or None,
        base_url=get("NOTETUBE_LLM_BASE_URL") or None,
        model=get("NOTETUBE_LLM_MODEL", "gpt-4o-mini"),
        llm_timeout=_get_float("NOTETUBE_LLM_TIMEOUT", 60.0),
        yt_dlp=get("NOTETUBE_YT_DLP", "yt-dlp"),
        download_timeout=_get_float("NOTETUBE_DOWNLOAD_TIMEOUT", 60.0),
        list_timeout=_get_float("NOTETUBE_LIST_TIMEOUT", 30.0),
        temp_dir=get("NOTETUBE_TEMP_DIR") or None,
    )
