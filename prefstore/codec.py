"""Structured value codec backed by pydantic."""

from __future__ import annotations

import collections.abc
import functools
import logging
import typing
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from .exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Abstract collection shapes and the concrete empty value they read back as.
_EMPTY_FACTORIES: dict[Any, type] = {
    set: set,
    frozenset: frozenset,
    list: list,
    tuple: tuple,
    dict: dict,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
}


@functools.lru_cache(maxsize=256)
def _adapter(descriptor: Any) -> TypeAdapter[Any]:
    return TypeAdapter(descriptor)


class PydanticCodec:
    """
    encode() turns any pydantic-serializable value (models, dataclasses,
    sets, enums, nested containers) into JSON text. decode() validates JSON
    text against a type descriptor such as ``dict[str, Person]``.
    """

    def encode(self, value: Any) -> str:
        try:
            return to_json(value).decode("utf-8")
        except PydanticSerializationError as e:
            raise EncodeError(f"cannot encode {type(value).__name__}: {e}") from e

    def decode(self, text: str, descriptor: Any) -> Any:
        try:
            adapter = _adapter(descriptor)
        except TypeError:
            # unhashable descriptor, build one-off
            adapter = TypeAdapter(descriptor)
        try:
            return adapter.validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"cannot decode {descriptor!r}: {e.errors()[0]['msg']}") from e

    def empty_value(self, descriptor: Any) -> Any:
        """
        Value for an entry holding the empty string.

        Collection shapes give an empty container. Other types are built
        with no arguments; if that fails the result is None.
        """
        origin = typing.get_origin(descriptor) or descriptor
        factory = _EMPTY_FACTORIES.get(origin)
        if factory is not None:
            return factory()
        try:
            return origin()
        except Exception as e:
            logger.debug("No empty instance for %r (%s); reading as None", descriptor, e)
            return None


DEFAULT_CODEC = PydanticCodec()
