"""Exception hierarchy for prefstore."""

from __future__ import annotations


class PrefStoreError(Exception):
    """Base exception for all prefstore errors."""


class TypeMismatchError(PrefStoreError, TypeError):
    """A stored entry was read with an accessor for a different physical kind."""

    def __init__(self, name: str, *, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"entry {name!r} holds a {actual!r} value, not {expected!r}")


class CodecError(PrefStoreError, ValueError):
    """Structured value could not be converted to or from its text form."""

    def __init__(self, message: str, *, name: str = "") -> None:
        self.name = name
        super().__init__(message)


class DecodeError(CodecError):
    """Stored text could not be parsed into the requested type (or enum name is unknown)."""


class EncodeError(CodecError):
    """Value has no structured text encoding."""


class InvalidArgumentError(PrefStoreError, ValueError):
    """Malformed write arguments (odd name/value list, out of range number, ...)."""


class IllegalUseError(PrefStoreError, RuntimeError):
    """Programming error against the single-owner instance.

    Raised when a store is bound a second time, or when the bound
    instance is copied or pickled.
    """
