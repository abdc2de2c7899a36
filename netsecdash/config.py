from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Central configuration, read once from NETSECDASH_* environment variables."""

    records: str = "output.json"
    fetch_timeout: float = 10.0

    # Dashboard presentation
    top_sources: int = 25
    fill_hours: bool = False
    max_fill_hours: int = 2160


def _env_str(name: str, default: str) -> str:
    v = os.environ.get(name)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _env_int(name: str, default: int) -> int:
    v = os.environ.get(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    v = os.environ.get(name)
    if v is None or v == "":
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    v = os.environ.get(name)
    if v is None or v == "":
        return default
    v = v.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def load_settings() -> Settings:
    return Settings(
        records=_env_str("NETSECDASH_RECORDS", "output.json"),
        fetch_timeout=_env_float("NETSECDASH_FETCH_TIMEOUT", 10.0),
        top_sources=_env_int("NETSECDASH_TOP_SOURCES", 25),
        fill_hours=_env_bool("NETSECDASH_FILL_HOURS", False),
        max_fill_hours=_env_int("NETSECDASH_MAX_FILL_HOURS", 2160),
    )


SETTINGS = load_settings()
