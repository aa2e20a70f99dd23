from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from prefstore.codec import PydanticCodec
from prefstore.exceptions import DecodeError, EncodeError


class Person(BaseModel):
    name: str
    age: int


class Counter(BaseModel):
    hits: int = 0


@dataclass
class Point:
    x: int
    y: int


codec = PydanticCodec()


def test_nested_models_decode_from_descriptor():
    parents = {"Father": Person(name="Jack", age=40), "Mother": Person(name="Annie", age=35)}
    text = codec.encode(parents)
    assert codec.decode(text, dict[str, Person]) == parents


def test_dataclass_and_set_encode():
    assert codec.decode(codec.encode(Point(1, 2)), Point) == Point(1, 2)
    assert codec.decode(codec.encode({"a", "b"}), set[str]) == {"a", "b"}


def test_decode_errors_are_wrapped():
    with pytest.raises(DecodeError):
        codec.decode("not json", list[int])
    with pytest.raises(DecodeError):
        codec.decode('{"name": "x"}', Person)


def test_unserializable_value_raises_encode_error():
    with pytest.raises(EncodeError):
        codec.encode(object())


def test_empty_value_for_collections():
    assert codec.empty_value(set[str]) == set()
    assert codec.empty_value(list[int]) == []
    assert codec.empty_value(dict[str, Person]) == {}
    assert codec.empty_value(Mapping[str, int]) == {}


def test_empty_value_for_objects():
    assert codec.empty_value(Counter) == Counter()
    # required fields: cannot be built without arguments
    assert codec.empty_value(Person) is None
    assert codec.empty_value(Point) is None
