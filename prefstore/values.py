"""Closed set of values the flat store can physically hold.

Callers may hand ``Preferences.write`` plain Python objects; they are mapped
onto one of these variants before reaching the store. Passing a variant
directly forces the physical kind (``Int64(5)`` instead of the default
``Int32`` for small ints).
"""

from __future__ import annotations

import enum
import math
import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import InvalidArgumentError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(str, enum.Enum):
    BOOL = "bool"
    INT32 = "int32"
    FLOAT32 = "float32"
    INT64 = "int64"
    STRING = "string"


def to_float32(value: float) -> float:
    """Round a Python float to single precision."""
    if math.isnan(value) or math.isinf(value):
        return float(value)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as e:
        raise InvalidArgumentError(f"{value!r} is out of range for a 32-bit float") from e


@dataclass(frozen=True)
class Bool:
    value: bool

    kind = ValueKind.BOOL


@dataclass(frozen=True)
class Int32:
    value: int

    kind = ValueKind.INT32

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise InvalidArgumentError(f"{self.value} does not fit in a 32-bit integer")


@dataclass(frozen=True)
class Float32:
    value: float

    kind = ValueKind.FLOAT32

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", to_float32(float(self.value)))


@dataclass(frozen=True)
class Int64:
    value: int

    kind = ValueKind.INT64

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise InvalidArgumentError(f"{self.value} does not fit in a 64-bit integer")


@dataclass(frozen=True)
class Str:
    value: str

    kind = ValueKind.STRING


@dataclass(frozen=True)
class EnumName:
    """Symbolic name of an enum member, stored as a string."""

    value: str

    kind = ValueKind.STRING


@dataclass(frozen=True)
class Encoded:
    """Structured value already serialized by the codec."""

    value: str

    kind = ValueKind.STRING


StoredValue = Union[Bool, Int32, Float32, Int64, Str, EnumName, Encoded]

_VARIANTS = (Bool, Int32, Float32, Int64, Str, EnumName, Encoded)


def to_stored_value(value: Any, encode: Callable[[Any], str]) -> StoredValue | None:
    """Map a runtime value onto its physical variant.

    ``None`` means "remove the entry". Enum members are checked before the
    primitives so ``IntEnum``/``StrEnum`` members keep their symbolic name.
    """
    if value is None:
        return None
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, enum.Enum):
        return EnumName(value.name)
    # bool is an int subclass
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return Int32(value)
        return Int64(value)
    if isinstance(value, float):
        return Float32(value)
    if isinstance(value, str):
        return Str(value)
    return Encoded(encode(value))
