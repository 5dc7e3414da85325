"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_optional_int_env(name: str, default: int | None) -> int | None:
    """
    Read an optional integer; an empty value explicitly disables the setting.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    stripped = raw_value.strip()
    if not stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        return default


@dataclass(frozen=True)
class RecordImportSettings:
    """
    Runtime settings for bulk record imports.

    ``default_actor_id`` is only consulted by the HTTP boundary when a request
    carries no actor header; the pipeline itself always receives an explicit
    actor id. ``unassigned_contact_id`` is the sentinel stored for rows with
    no usable contact reference; None makes such rows fail validation.
    """

    log_row_errors: bool = True
    default_actor_id: int | None = None
    unassigned_contact_id: int | None = 0


@lru_cache(maxsize=1)
def get_record_import_settings() -> RecordImportSettings:
    """
    Return cached record import settings from environment variables.
    """

    return RecordImportSettings(
        log_row_errors=_get_bool_env("IMPORT_LOG_ROW_ERRORS", True),
        default_actor_id=_get_optional_int_env("IMPORT_DEFAULT_ACTOR_ID", None),
        unassigned_contact_id=_get_optional_int_env("IMPORT_UNASSIGNED_CONTACT_ID", 0),
    )
