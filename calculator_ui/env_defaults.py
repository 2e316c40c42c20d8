"""Read defaults for the calculator UI tests from .env.defaults.

Environment variables always win; `.env.defaults` at the repository root
only fills in what the environment leaves unset.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

ENV_DEFAULTS_FILE = Path(__file__).resolve().parents[1] / ".env.defaults"


def parse_env_defaults(text: str) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not ENV_DEFAULTS_FILE.exists():
        return {}
    return parse_env_defaults(ENV_DEFAULTS_FILE.read_text(encoding="utf-8"))


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)


def env(key: str, fallback: str | None = None) -> str | None:
    """Return the environment value for key, then the .env.defaults value, then fallback."""
    value = os.getenv(key)
    if value:
        return value
    default = get_env_default(key)
    if default is not None:
        return default
    return fallback
