from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import paths


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw.strip())


@dataclass(frozen=True)
class Settings:
    # Storage
    data_dir: Path
    store_name: str
    persist_to_disk: bool

    # Version reported to the version tracker on startup
    app_version: int

    # Debug
    debug_log_writes: bool


def get_settings() -> Settings:
    raw_dir = os.getenv("PREFSTORE_DATA_DIR", "").strip()
    resolved_dir = Path(raw_dir).expanduser() if raw_dir else paths.data_dir()

    store_name = os.getenv("PREFSTORE_STORE_NAME", "preferences").strip() or "preferences"

    # Settings files are expected to survive restarts; allow opting out for tests/ephemeral hosts.
    persist_to_disk = _env_bool("PREFSTORE_PERSIST_TO_DISK", True)

    app_version = _env_int("PREFSTORE_APP_VERSION", 0)

    debug_log_writes = _env_bool("PREFSTORE_DEBUG_LOG_WRITES", False)

    return Settings(
        data_dir=resolved_dir,
        store_name=store_name,
        persist_to_disk=persist_to_disk,
        app_version=app_version,
        debug_log_writes=debug_log_writes,
    )
