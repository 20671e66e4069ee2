# dls_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

from dls_api.categories import MatchCategory

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Match defaults
# -------------------------
# Category used when a new match does not name one (see dls_api.categories)
DEFAULT_CATEGORY: str = _get_env("DLS_DEFAULT_CATEGORY", "icc_full_member").lower()

# Upper bound on matches held by the in-process registry
MAX_MATCHES: int = _get_env_int("DLS_MAX_MATCHES", 500)


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _get_env("DLS_LOG_LEVEL", "INFO").upper()

# Optional file name under logs/ (empty = console only)
LOG_FILE: str = _get_env("DLS_LOG_FILE")


def validate_config() -> None:
    valid = {c.value for c in MatchCategory}
    if DEFAULT_CATEGORY not in valid:
        raise RuntimeError(
            f"DLS_DEFAULT_CATEGORY must be one of {sorted(valid)}, got {DEFAULT_CATEGORY!r}"
        )

    if MAX_MATCHES <= 0:
        raise RuntimeError("DLS_MAX_MATCHES must be positive")

    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"DLS_LOG_LEVEL is not a logging level: {LOG_LEVEL}")
