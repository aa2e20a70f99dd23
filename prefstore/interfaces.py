from __future__ import annotations

from typing import Any, Protocol


class Editor(Protocol):
    """
    Staged set of changes against a FlatStore, made visible by apply().
    """

    def put_bool(self, name: str, value: bool) -> "Editor": ...
    def put_int32(self, name: str, value: int) -> "Editor": ...
    def put_float32(self, name: str, value: float) -> "Editor": ...
    def put_int64(self, name: str, value: int) -> "Editor": ...
    def put_string(self, name: str, value: str) -> "Editor": ...
    def remove(self, name: str) -> "Editor": ...
    def clear(self) -> "Editor": ...

    def apply(self) -> None:
        """Publish every staged change at once, or none of them on failure."""
        ...


class FlatStore(Protocol):
    """
    Flat name -> value medium with five physical kinds.

    Typed getters return ``default`` for absent names and raise
    TypeMismatchError when the entry holds another kind.
    """

    def get_bool(self, name: str, default: bool) -> bool: ...
    def get_int32(self, name: str, default: int) -> int: ...
    def get_float32(self, name: str, default: float) -> float: ...
    def get_int64(self, name: str, default: int) -> int: ...
    def get_string(self, name: str, default: str | None) -> str | None: ...
    def contains(self, name: str) -> bool: ...
    def edit(self) -> Editor: ...


class Codec(Protocol):
    def encode(self, value: Any) -> str: ...
    def decode(self, text: str, descriptor: Any) -> Any: ...
    def empty_value(self, descriptor: Any) -> Any: ...
