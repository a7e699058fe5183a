"""Runtime configuration read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _env_csv(name: str, default: str = "") -> list[str]:
    value = os.getenv(name, default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _valid_timezone_name(value: str, fallback: str = "UTC") -> str:
    candidate = (value or fallback).strip() or fallback
    try:
        ZoneInfo(candidate)
        return candidate
    except (ZoneInfoNotFoundError, ValueError):
        return fallback


def _default_home() -> str:
    return os.getenv("SOULSYNC_HOME", str(Path.home() / ".soulsync"))


@dataclass
class Settings:
    """Process-wide settings.  Every field can be overridden by env var."""

    home: str = field(default_factory=_default_home)
    timezone: str = field(
        default_factory=lambda: _valid_timezone_name(os.getenv("SOULSYNC_TIMEZONE", "UTC"))
    )
    client_urls: list[str] = field(
        default_factory=lambda: _env_csv("CLIENT_URL", "http://localhost:5173")
    )
    anthropic_api_key: str = field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""))
    llm_model: str = field(
        default_factory=lambda: os.getenv("SOULSYNC_LLM_MODEL", "claude-haiku-3-5-20241022")
    )
    log_level: str = field(default_factory=lambda: os.getenv("SOULSYNC_LOG_LEVEL", "INFO"))
    session_hours: int = field(
        default_factory=lambda: int(os.getenv("SOULSYNC_SESSION_HOURS", "720"))
    )

    @property
    def home_path(self) -> Path:
        return Path(self.home).expanduser()

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def data_dir(self, name: str) -> Path:
        """Return ``<home>/<name>``, the storage directory for one store."""
        return self.home_path / name


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings` instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
