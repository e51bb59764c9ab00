from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


# Defaults
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_DIAGNOSTIC_SOURCE = 'leek-ls'


def str_from_env(var: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_log_level() -> int:
    name = str_from_env('LEEK_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_log_file() -> Optional[Path]:
    raw = str_from_env('LEEK_LOG_FILE')
    return Path(raw) if raw else None


def get_diagnostic_source() -> str:
    return str_from_env('LEEK_DIAGNOSTIC_SOURCE', _DEFAULT_DIAGNOSTIC_SOURCE)
