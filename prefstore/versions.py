"""Version-transition tracking across application runs."""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .values import Int32

if TYPE_CHECKING:
    from .preferences import Preferences

logger = logging.getLogger(__name__)

APP_VERSION_KEY = "__prefstore_app_version__"
DRIVE_VERSION_KEY = "__prefstore_drive_version__"
NO_VERSION = -1

UpgradeCallback = Callable[["Preferences", int, int], None]


@dataclass(frozen=True)
class Versions:
    """Version seen on the previous run and the one running now."""

    previous: int
    current: int

    @property
    def is_updated(self) -> bool:
        return self.previous < self.current


class VersionState(enum.Enum):
    FRESH = "fresh"
    CONSUMED = "consumed"


class VersionTracker:
    """
    Holds the Versions computed at startup and reports them once.

    The first check_update() returns the real (previous, current) pair and
    moves to CONSUMED; later calls return (current, current).
    """

    def __init__(self, versions: Versions) -> None:
        self._lock = threading.Lock()
        self._versions = versions
        self._state = VersionState.FRESH

    @property
    def state(self) -> VersionState:
        return self._state

    def check_update(self) -> Versions:
        with self._lock:
            if self._state is VersionState.CONSUMED:
                return Versions(self._versions.current, self._versions.current)
            self._state = VersionState.CONSUMED
            return self._versions


def open_tracker(prefs: "Preferences", current: int) -> VersionTracker:
    """Compare the stored app version with ``current`` and persist the new one."""
    previous = prefs.read_int32(APP_VERSION_KEY, NO_VERSION)
    if previous != current:
        prefs.write(APP_VERSION_KEY, Int32(current))
        logger.info("App version %s -> %s", "unset" if previous < 0 else previous, current)
    if previous < 0:
        # first run is never an update
        previous = current
    return VersionTracker(Versions(previous, current))


def drive_upgrade(prefs: "Preferences", version: int, on_upgrade: UpgradeCallback) -> None:
    """
    Track a caller-defined data version.

    Persists ``version`` when it differs from the stored one. When a version
    was stored before, ``on_upgrade(prefs, previous, version)`` runs to
    completion before this returns.
    """
    previous = prefs.read_int32(DRIVE_VERSION_KEY, NO_VERSION)
    if previous != version:
        prefs.write(DRIVE_VERSION_KEY, Int32(version))
        logger.info("Drive version %s -> %s", "unset" if previous < 0 else previous, version)
    if previous >= 0:
        logger.debug("Running upgrade callback %s -> %s", previous, version)
        on_upgrade(prefs, previous, version)
