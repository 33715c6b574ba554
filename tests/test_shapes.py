"""Tests for shape classification and record introspection."""

from __future__ import annotations

import weakref
from collections import ChainMap, defaultdict
from dataclasses import dataclass
from types import MappingProxyType, SimpleNamespace
from typing import ClassVar, Optional

import pytest
from pydantic import BaseModel, Field

from mutator import Shape, shape_of, type_field_key
from mutator import shapes


@dataclass
class Node:
    name: str
    parent: Optional[Node] = None


@dataclass(frozen=True)
class FrozenNode:
    name: str


class Model(BaseModel):
    token: str
    retries: int = 3


class Plain:
    limit: ClassVar[int] = 10
    owner: str

    def __init__(self):
        self.owner = "ops"
        self._cache = {}


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self):
        self.a = 1


@pytest.mark.parametrize(
    "value, expected",
    [
        ("text", Shape.LEAF),
        (b"bytes", Shape.LEAF),
        (3, Shape.LEAF),
        (None, Shape.LEAF),
        ([1, 2], Shape.LEAF),
        ((1, 2), Shape.LEAF),
        ({1, 2}, Shape.LEAF),
        (len, Shape.LEAF),
        (Node, Shape.LEAF),
        (Model, Shape.LEAF),
        (pytest, Shape.LEAF),
        (lambda: None, Shape.LEAF),
        ({}, Shape.MAPPING),
        (defaultdict(list), Shape.MAPPING),
        (ChainMap({}), Shape.MAPPING),
        (MappingProxyType({}), Shape.READONLY_MAPPING),
        (Node("n"), Shape.RECORD),
        (Model(token="t"), Shape.RECORD),
        (Plain(), Shape.RECORD),
        (Slotted(), Shape.RECORD),
        (SimpleNamespace(a=1), Shape.RECORD),
        (object(), Shape.LEAF),
    ],
)
def test_shape_of(value, expected):
    assert shape_of(value) is expected


def test_weak_reference_shape():
    node = Node("n")
    ref = weakref.ref(node)

    assert shape_of(ref) is Shape.REFERENCE
    assert shapes.deref(ref) is node


def test_only_containers_are_addressable():
    assert shapes.is_addressable(Node("n"))
    assert shapes.is_addressable({})
    assert not shapes.is_addressable("interned")
    assert not shapes.is_addressable(1)


def test_iter_members_in_declaration_order():
    node = Node("child", Node("root"))

    assert [name for name, _ in shapes.iter_members(node)] == ["name", "parent"]
    assert list(shapes.iter_members(Model(token="t"))) == [("token", "t"), ("retries", 3)]


def test_iter_members_skips_private_and_unset_slots():
    assert list(shapes.iter_members(Plain())) == [("owner", "ops")]
    assert list(shapes.iter_members(Slotted())) == [("a", 1)]


def test_settable():
    assert shapes.is_settable(Node("n"))
    assert not shapes.is_settable(FrozenNode("n"))
    assert shapes.is_settable(Model(token="t"))
    assert shapes.is_settable(Plain())


def test_declared_types():
    assert shapes.declared_types(Node("n")) == {"name": str, "parent": Optional[Node]}
    assert shapes.declared_types(Model(token="t")) == {"token": str, "retries": int}
    assert shapes.declared_types(Plain()) == {"owner": str}


def test_type_field_key():
    expected = f"{Node.__module__}.Node.name"

    assert type_field_key(Node, "name") == expected
    assert type_field_key(Node("n"), "name") == expected


def test_type_field_key_of_nested_class():
    class Inner:
        pass

    assert type_field_key(Inner, "x") == f"{__name__}.{Inner.__qualname__}.x"


def test_declared_types_of_malformed_annotation():
    class Broken:
        token: "Dict[str,"

        def __init__(self):
            self.token = "t"

    assert shapes.declared_types(Broken()) == {}


def test_frozen_pydantic_fields_are_not_members():
    class Partial(BaseModel):
        token: str = Field(frozen=True)
        retries: int = 3

    assert list(shapes.iter_members(Partial(token="t"))) == [("retries", 3)]
