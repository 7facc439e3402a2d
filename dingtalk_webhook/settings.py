"""Optional configuration helpers for robot credentials and transport settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from .signing import DEFAULT_ENDPOINT

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True)
class Settings:
    """Container for configuration values loaded from environment variables."""

    access_token: Optional[str]
    secret: Optional[str]
    endpoint: str
    timeout: float
    connect_timeout: float
    verify_tls: bool


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float, got {raw!r}") from exc


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got {raw!r}")


def load_env_file(path: Union[str, Path] = ".env") -> Dict[str, str]:
    """Export the variables of a ``.env`` file into ``os.environ``.

    Existing variables are overridden. Returns the values that were loaded.
    """

    loaded = {key: value if value is not None else "" for key, value in dotenv_values(path).items()}
    os.environ.update(loaded)
    get_settings.cache_clear()
    return loaded


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read and memoise :class:`Settings` from environment variables."""

    return Settings(
        access_token=os.getenv("DINGTALK_ACCESS_TOKEN") or None,
        secret=os.getenv("DINGTALK_SECRET") or None,
        endpoint=os.getenv("DINGTALK_ENDPOINT", DEFAULT_ENDPOINT),
        timeout=_read_float("DINGTALK_TIMEOUT", 30.0),
        connect_timeout=_read_float("DINGTALK_CONNECT_TIMEOUT", 5.0),
        verify_tls=_read_bool("DINGTALK_VERIFY_TLS", True),
    )


__all__ = ["Settings", "get_settings", "load_env_file"]
