from __future__ import annotations

import logging
import threading
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .exceptions import InvalidArgumentError, TypeMismatchError
from .values import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, ValueKind

logger = logging.getLogger(__name__)


class StoredEntry(BaseModel):
    """One physical entry: the kind tag plus its raw value."""

    model_config = ConfigDict(frozen=True)

    kind: ValueKind
    value: bool | int | float | str

    @model_validator(mode="after")
    def _value_matches_kind(self) -> "StoredEntry":
        value = self.value
        if self.kind is ValueKind.BOOL:
            ok = isinstance(value, bool)
        elif self.kind is ValueKind.INT32:
            ok = type(value) is int and INT32_MIN <= value <= INT32_MAX
        elif self.kind is ValueKind.INT64:
            ok = type(value) is int and INT64_MIN <= value <= INT64_MAX
        elif self.kind is ValueKind.FLOAT32:
            ok = isinstance(value, float)
        else:
            ok = isinstance(value, str)
        if not ok:
            raise ValueError(f"{value!r} is not a valid {self.kind.value} value")
        return self


class StagedEditor:
    """
    Collects puts/removes and hands them to the store in one commit.

    A staged clear() wipes the store before the other changes of the same
    batch are applied. The last change for a given name wins.
    """

    def __init__(self, store: "MemoryFlatStore") -> None:
        self._store = store
        self._clear = False
        self._changes: dict[str, StoredEntry | None] = {}

    def _put(self, name: str, kind: ValueKind, value: Any) -> "StagedEditor":
        try:
            self._changes[name] = StoredEntry(kind=kind, value=value)
        except ValidationError as e:
            raise InvalidArgumentError(f"{name!r}: {e.errors()[0]['msg']}") from e
        return self

    def put_bool(self, name: str, value: bool) -> "StagedEditor":
        return self._put(name, ValueKind.BOOL, bool(value))

    def put_int32(self, name: str, value: int) -> "StagedEditor":
        return self._put(name, ValueKind.INT32, int(value))

    def put_float32(self, name: str, value: float) -> "StagedEditor":
        return self._put(name, ValueKind.FLOAT32, float(value))

    def put_int64(self, name: str, value: int) -> "StagedEditor":
        return self._put(name, ValueKind.INT64, int(value))

    def put_string(self, name: str, value: str) -> "StagedEditor":
        return self._put(name, ValueKind.STRING, str(value))

    def remove(self, name: str) -> "StagedEditor":
        self._changes[name] = None
        return self

    def clear(self) -> "StagedEditor":
        self._clear = True
        return self

    def apply(self) -> None:
        self._store._commit(self._clear, dict(self._changes))


class MemoryFlatStore:
    """
    Process-local flat store.

    Readers always see a complete snapshot: a commit builds the next entry
    table aside and swaps it in only after _publish() succeeded.
    """

    def __init__(self, entries: Mapping[str, StoredEntry] | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, StoredEntry] = dict(entries or {})

    @property
    def binding_key(self) -> tuple[str, int]:
        return ("memory", id(self))

    def _get(self, name: str, kind: ValueKind, default: Any) -> Any:
        entry = self._entries.get(name)
        if entry is None:
            return default
        if entry.kind != kind:
            raise TypeMismatchError(name, expected=kind.value, actual=entry.kind.value)
        return entry.value

    def get_bool(self, name: str, default: bool) -> bool:
        return self._get(name, ValueKind.BOOL, default)

    def get_int32(self, name: str, default: int) -> int:
        return self._get(name, ValueKind.INT32, default)

    def get_float32(self, name: str, default: float) -> float:
        return self._get(name, ValueKind.FLOAT32, default)

    def get_int64(self, name: str, default: int) -> int:
        return self._get(name, ValueKind.INT64, default)

    def get_string(self, name: str, default: str | None) -> str | None:
        return self._get(name, ValueKind.STRING, default)

    def contains(self, name: str) -> bool:
        return name in self._entries

    def names(self) -> list[str]:
        return sorted(self._entries)

    def edit(self) -> StagedEditor:
        return StagedEditor(self)

    def _commit(self, clear: bool, changes: dict[str, StoredEntry | None]) -> None:
        with self._lock:
            nxt: dict[str, StoredEntry] = {} if clear else dict(self._entries)
            for name, entry in changes.items():
                if entry is None:
                    nxt.pop(name, None)
                else:
                    nxt[name] = entry
            self._publish(nxt)
            self._entries = nxt
        logger.debug("Applied %d change(s) (clear=%s)", len(changes), clear)

    def _publish(self, entries: dict[str, StoredEntry]) -> None:
        """Hook for durable subclasses; raising here discards the whole batch."""
        return None
