from __future__ import annotations

from .bootstrap import create_gate, create_store
from .codec import PydanticCodec
from .disk_store import DiskFlatStore
from .exceptions import (
    CodecError,
    DecodeError,
    EncodeError,
    IllegalUseError,
    InvalidArgumentError,
    PrefStoreError,
    TypeMismatchError,
)
from .gate import PreferencesGate
from .interfaces import Codec, Editor, FlatStore
from .memory_store import MemoryFlatStore
from .preferences import Preferences
from .values import Bool, Encoded, EnumName, Float32, Int32, Int64, Str, ValueKind
from .versions import Versions, VersionState

__all__ = [
    "Preferences",
    "PreferencesGate",
    "create_gate",
    "create_store",
    "FlatStore",
    "Editor",
    "Codec",
    "MemoryFlatStore",
    "DiskFlatStore",
    "PydanticCodec",
    "Versions",
    "VersionState",
    "ValueKind",
    "Bool",
    "Int32",
    "Float32",
    "Int64",
    "Str",
    "EnumName",
    "Encoded",
    "PrefStoreError",
    "TypeMismatchError",
    "CodecError",
    "DecodeError",
    "EncodeError",
    "InvalidArgumentError",
    "IllegalUseError",
]
