from __future__ import annotations

import logging
import threading

from .interfaces import Codec, FlatStore
from .preferences import Preferences

logger = logging.getLogger(__name__)


class PreferencesGate:
    """
    Lazily builds the one Preferences instance for a store.

    Build a gate once at startup and pass it (or the instance from get())
    to consumers. Concurrent first calls to get() construct exactly once.
    """

    def __init__(
        self,
        store: FlatStore,
        *,
        app_version: int = 0,
        codec: Codec | None = None,
        log_writes: bool = False,
    ) -> None:
        self._store = store
        self._app_version = app_version
        self._codec = codec
        self._log_writes = log_writes
        self._lock = threading.Lock()
        self._instance: Preferences | None = None

    def get(self) -> Preferences:
        instance = self._instance
        if instance is None:
            with self._lock:
                instance = self._instance
                if instance is None:
                    instance = Preferences(
                        self._store,
                        app_version=self._app_version,
                        codec=self._codec,
                        log_writes=self._log_writes,
                    )
                    self._instance = instance
                    logger.debug("Bound preferences to %r", self._store)
        return instance
