from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .exceptions import InvalidArgumentError
from .interfaces import Codec, Editor, FlatStore
from .values import Bool, Encoded, EnumName, Float32, Int32, Int64, Str, StoredValue, to_stored_value

logger = logging.getLogger(__name__)


def pairs_from_flat(names_values: Sequence[Any]) -> dict[str, Any]:
    """Turn ``("a", 1, "b", 2)`` into ``{"a": 1, "b": 2}``."""
    if len(names_values) % 2 != 0:
        raise InvalidArgumentError("names_values must be a name/value argument list")
    pairs: dict[str, Any] = {}
    for i in range(0, len(names_values), 2):
        name = names_values[i]
        if not isinstance(name, str):
            raise InvalidArgumentError(f"name at position {i} must be a str, got {type(name).__name__}")
        pairs[name] = names_values[i + 1]
    return pairs


def _stage(editor: Editor, name: str, value: StoredValue | None) -> None:
    if value is None:
        editor.remove(name)
    elif isinstance(value, Bool):
        editor.put_bool(name, value.value)
    elif isinstance(value, Int32):
        editor.put_int32(name, value.value)
    elif isinstance(value, Float32):
        editor.put_float32(name, value.value)
    elif isinstance(value, Int64):
        editor.put_int64(name, value.value)
    elif isinstance(value, (Str, EnumName, Encoded)):
        editor.put_string(name, value.value)
    else:
        raise InvalidArgumentError(f"unsupported stored value {value!r}")


class BatchWriter:
    """
    Writes a whole name -> value mapping through one editor apply().

    Every value is converted (and encoded) before the editor is opened, so
    a conversion failure leaves the store untouched.
    """

    def __init__(self, store: FlatStore, codec: Codec, *, log_writes: bool = False) -> None:
        self._store = store
        self._codec = codec
        self._log_writes = log_writes

    def _convert(self, pairs: Mapping[str, Any]) -> list[tuple[str, StoredValue | None]]:
        converted: list[tuple[str, StoredValue | None]] = []
        for name, value in pairs.items():
            if not isinstance(name, str):
                raise InvalidArgumentError(f"entry names must be str, got {type(name).__name__}")
            converted.append((name, to_stored_value(value, self._codec.encode)))
        return converted

    def write_all(self, pairs: Mapping[str, Any]) -> None:
        if not pairs:
            return
        staged = self._convert(pairs)
        editor = self._store.edit()
        for name, value in staged:
            _stage(editor, name, value)
        editor.apply()
        if self._log_writes:
            logger.info("Wrote %s", ", ".join(name for name, _ in staged))

    def replace_all(self, pairs: Mapping[str, Any]) -> None:
        """Clear the store and write ``pairs`` in the same batch."""
        staged = self._convert(pairs)
        editor = self._store.edit()
        editor.clear()
        for name, value in staged:
            _stage(editor, name, value)
        editor.apply()
        if self._log_writes:
            logger.info("Cleared store, kept %d entr(ies)", len(staged))
