"""Environment-driven settings for the chart engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .errors import InvalidSettingError


@dataclass(frozen=True)
class Settings:
    ayanamsha: str = "lahiri"
    log_level: str = "INFO"
    log_json: bool = False


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _log_level(name: str, default: str = "INFO") -> str:
    level = os.getenv(name, default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise InvalidSettingError(name, level)
    return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings from the environment (and a local .env file, if any)."""

    load_dotenv()
    return Settings(
        ayanamsha=os.getenv("ASTRO_AYANAMSHA", "lahiri").strip().lower(),
        log_level=_log_level("ASTRO_LOG_LEVEL"),
        log_json=_flag("ASTRO_LOG_JSON"),
    )
