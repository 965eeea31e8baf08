# oztail/config/settings.py
"""
Centralized settings for talking to the OzTAM tail service.

- Single source of truth for credentials, endpoint and logging options
- Honors these env vars:
    OZTAIL_USERNAME, OZTAIL_PASSWORD, OZTAIL_HOST, OZTAIL_DEBUG,
    OZTAIL_TIMEOUT, OZTAIL_SESSIONS_ROOT, OZTAIL_LOG_FILE, OZTAIL_LOG_LEVEL
- Misconfiguration surfaces as ValueError when settings are loaded
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_HOST = "oztam.com.au"
DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


# ---------- Environment parsing ----------

def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_timeout() -> float:
    raw = os.getenv("OZTAIL_TIMEOUT")
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"OZTAIL_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"OZTAIL_TIMEOUT must be positive, got {raw!r}")
    return timeout


def _env_log_level() -> int:
    raw = os.getenv("OZTAIL_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"OZTAIL_LOG_LEVEL is not a logging level: {raw!r}")
    return level


# ---------- Core dataclass ----------

@dataclass(frozen=True)
class Settings:
    """
    Canonical settings container.

    Most callers should obtain the cached instance via get_settings().
    """
    username: str = ""
    password: str = ""
    host: str = DEFAULT_HOST
    debug: bool = False
    timeout: float = DEFAULT_TIMEOUT
    sessions_root: Path = Path("sessions")
    log_file: Optional[str] = None
    log_level: int = logging.INFO

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            username=os.getenv("OZTAIL_USERNAME", ""),
            password=os.getenv("OZTAIL_PASSWORD", ""),
            host=os.getenv("OZTAIL_HOST", DEFAULT_HOST),
            debug=_env_flag("OZTAIL_DEBUG"),
            timeout=_env_timeout(),
            sessions_root=Path(os.getenv("OZTAIL_SESSIONS_ROOT", "sessions")),
            log_file=os.getenv("OZTAIL_LOG_FILE") or None,
            log_level=_env_log_level(),
        )

    # ----- endpoint helpers -----

    @property
    def subdomain(self) -> str:
        # "stail" is the staging tail service
        return "stail" if self.debug else "tail"

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.{self.host}"

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def override(self, **changes: object) -> "Settings":
        """Return a copy with every non-None value in ``changes`` applied."""
        applied = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **applied) if applied else self


# ---------- Singleton access ----------

_settings_singleton: Optional[Settings] = None

def get_settings(force_refresh: bool = False) -> Settings:
    """
    Return a cached Settings instance built from the environment.
    """
    global _settings_singleton
    if force_refresh or _settings_singleton is None:
        _settings_singleton = Settings.from_env()
    return _settings_singleton


__all__ = ["DEFAULT_HOST", "DEFAULT_TIMEOUT", "Settings", "get_settings"]
