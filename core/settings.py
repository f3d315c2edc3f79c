# core/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from schemas.students_schema import SortDirection

log = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080/api/students"
DEFAULT_FOOTER_TEXT = "© {year} Student Management System. All rights reserved."


@dataclass(frozen=True)
class ApiSettings:
    base_url: str = DEFAULT_API_URL
    timeout: float = 10.0


@dataclass(frozen=True)
class UiSettings:
    page_size: int = 10
    sort: str = "name"
    direction: SortDirection = SortDirection.ASC
    footer_text: str = DEFAULT_FOOTER_TEXT


@dataclass(frozen=True)
class Settings:
    api: ApiSettings = field(default_factory=ApiSettings)
    ui: UiSettings = field(default_factory=UiSettings)
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value <= 0:
        log.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default
    if value <= 0:
        log.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


def _env_direction(name: str) -> SortDirection:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return SortDirection.ASC
    try:
        return SortDirection(raw)
    except ValueError:
        log.warning(f"Ignoring {name}={raw!r}: expected ASC or DESC")
        return SortDirection.ASC


def load_settings() -> Settings:
    """Read settings from the environment (and a local .env, if present)."""
    load_dotenv()

    api = ApiSettings(
        base_url=(os.getenv("STUDENTS_API_URL") or DEFAULT_API_URL).rstrip("/"),
        timeout=_env_float("STUDENTS_API_TIMEOUT", 10.0),
    )
    ui = UiSettings(
        page_size=_env_int("STUDENTS_PAGE_SIZE", 10),
        sort=(os.getenv("STUDENTS_SORT") or "name").strip(),
        direction=_env_direction("STUDENTS_SORT_DIRECTION"),
        footer_text=os.getenv("STUDENTS_FOOTER_TEXT") or DEFAULT_FOOTER_TEXT,
    )
    return Settings(
        api=api,
        ui=ui,
        log_level=(os.getenv("STUDENTS_LOG_LEVEL") or "INFO").upper(),
    )
