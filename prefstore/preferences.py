from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from .batch import BatchWriter, pairs_from_flat
from .codec import DEFAULT_CODEC
from .exceptions import DecodeError, IllegalUseError
from .interfaces import Codec, FlatStore
from .locks import STORE_BINDINGS, binding_key
from .values import INT32_MAX, INT32_MIN, Int32
from .versions import (
    APP_VERSION_KEY,
    DRIVE_VERSION_KEY,
    NO_VERSION,
    UpgradeCallback,
    VersionTracker,
    Versions,
    drive_upgrade,
    open_tracker,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


class Preferences:
    """
    Typed reads and writes over a FlatStore.

    Primitive values keep their physical kind (bool, int32, float32, int64,
    string) and must be read back with the matching accessor. Enum members
    are stored by name. Everything else is stored as codec text and read back
    with read(descriptor, name).

    One instance owns one store medium: binding it twice (for disk stores,
    any second store on the same file), copying or pickling the instance
    raises IllegalUseError. close() gives the medium up.
    """

    def __init__(
        self,
        store: FlatStore,
        *,
        app_version: int = 0,
        codec: Codec | None = None,
        log_writes: bool = False,
    ) -> None:
        self._binding_key = binding_key(store)
        STORE_BINDINGS.claim(self._binding_key, self)
        try:
            self._store = store
            self._codec = codec or DEFAULT_CODEC
            self._writer = BatchWriter(store, self._codec, log_writes=log_writes)
            self._tracker: VersionTracker = open_tracker(self, app_version)
        except BaseException:
            STORE_BINDINGS.release(self._binding_key, self)
            raise

    def __copy__(self) -> "Preferences":
        raise IllegalUseError("Preferences is bound to a single store and cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> "Preferences":
        raise IllegalUseError("Preferences is bound to a single store and cannot be copied")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise IllegalUseError("Preferences is not serializable")

    def close(self) -> None:
        """Release the store so another instance may bind it. Do not use this instance afterwards."""
        STORE_BINDINGS.release(self._binding_key, self)

    @property
    def store(self) -> FlatStore:
        return self._store

    # -- primitives -----------------------------------------------------

    def read_bool(self, name: str, default: bool = False) -> bool:
        return self._store.get_bool(name, default)

    def read_int32(self, name: str, default: int = 0) -> int:
        return self._store.get_int32(name, default)

    def read_float32(self, name: str, default: float = 0.0) -> float:
        return self._store.get_float32(name, default)

    def read_int64(self, name: str, default: int = 0) -> int:
        return self._store.get_int64(name, default)

    def read_string(self, name: str, default: str | None = None) -> str | None:
        return self._store.get_string(name, default)

    def contains(self, name: str, *names: str) -> bool:
        """True when every given name has an entry."""
        return all(self._store.contains(n) for n in (name, *names))

    # -- structured -----------------------------------------------------

    def read(self, descriptor: Any, name: str) -> Any:
        """
        Read a codec-encoded entry as ``descriptor``.

        Returns None when the entry is absent. An entry holding the empty
        string reads as an empty collection, or a no-argument instance of
        ``descriptor`` (None if it cannot be built).
        """
        text = self._store.get_string(name, None)
        if text is None:
            return None
        if text == "":
            return self._codec.empty_value(descriptor)
        try:
            return self._codec.decode(text, descriptor)
        except DecodeError as e:
            e.name = name
            raise

    def read_string_set(self, name: str) -> set[str] | None:
        return self.read(set[str], name)

    def read_integer_set(self, name: str) -> set[int] | None:
        return self.read(set[int], name)

    def read_string_list(self, name: str) -> list[str] | None:
        return self.read(list[str], name)

    def read_integer_list(self, name: str) -> list[int] | None:
        return self.read(list[int], name)

    def read_string_map(self, name: str) -> dict[str, str] | None:
        return self.read(dict[str, str], name)

    def read_integer_map(self, name: str) -> dict[str, int] | None:
        return self.read(dict[str, int], name)

    def read_enum(self, enum_type: type[E], name: str, default: E) -> E:
        text = self._store.get_string(name, None)
        if text is None:
            return default
        try:
            return enum_type[text]
        except KeyError as e:
            raise DecodeError(f"{text!r} is not a member of {enum_type.__name__}", name=name) from e

    # -- writes ---------------------------------------------------------

    def write(self, *args: Any) -> None:
        """
        Write entries in one batch.

        Accepts ``write(name, value)``, ``write({name: value, ...})`` or a
        flat ``write(name1, value1, name2, value2, ...)`` list. A None value
        removes the entry.
        """
        if len(args) == 1 and isinstance(args[0], Mapping):
            pairs = args[0]
        else:
            pairs = pairs_from_flat(args)
        self._writer.write_all(pairs)

    def increment(self, name: str, default: int = 0) -> int:
        """Add one to an int32 entry, stopping at the 32-bit maximum."""
        value = self.read_int32(name, default)
        if value < INT32_MAX:
            value += 1
        self.write(name, Int32(value))
        return value

    def decrement(self, name: str, default: int = 0) -> int:
        """Subtract one from an int32 entry, stopping at the 32-bit minimum."""
        value = self.read_int32(name, default)
        if value > INT32_MIN:
            value -= 1
        self.write(name, Int32(value))
        return value

    def delete(self, *names: str) -> None:
        self._writer.write_all({name: None for name in names})

    def format(self) -> None:
        """Remove every entry, keeping the version entries that were set."""
        kept: dict[str, Any] = {}
        for key in (APP_VERSION_KEY, DRIVE_VERSION_KEY):
            version = self._store.get_int32(key, NO_VERSION)
            if version >= 0:
                kept[key] = Int32(version)
        self._writer.replace_all(kept)
        logger.debug("Formatted store, restored %s", sorted(kept))

    # -- versions -------------------------------------------------------

    def check_update(self) -> Versions:
        """
        Return the app version change detected at startup.

        Only the first call per process sees the previous version; later
        calls report (current, current).
        """
        return self._tracker.check_update()

    def drive_upgrade(self, version: int, on_upgrade: UpgradeCallback) -> None:
        drive_upgrade(self, version, on_upgrade)
