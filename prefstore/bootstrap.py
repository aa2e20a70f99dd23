from __future__ import annotations

import logging

from dotenv import load_dotenv

from .disk_store import DiskFlatStore
from .gate import PreferencesGate
from .interfaces import FlatStore
from .memory_store import MemoryFlatStore
from .paths import store_path
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> FlatStore:
    if not settings.persist_to_disk:
        return MemoryFlatStore()
    path = store_path(settings.data_dir, settings.store_name)
    logger.debug("Opening preferences at %s", path)
    return DiskFlatStore(path)


def create_gate(env_file: str | None = "local.env") -> PreferencesGate:
    """Load the dotenv file, read settings and return the gate for the configured store."""
    if env_file:
        load_dotenv(env_file)

    settings = get_settings()
    return PreferencesGate(
        create_store(settings),
        app_version=settings.app_version,
        log_writes=settings.debug_log_writes,
    )
