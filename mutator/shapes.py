r"""Structural accessor over arbitrary Python values.

The mutation engine never inspects values directly. It asks this module which
shape a value has and which of its members may be read and written:

\dot
digraph Shapes {
    rankdir=LR;
    node [shape=rectangle];
    "value" -> "RECORD";
    "value" -> "MAPPING";
    "value" -> "REFERENCE";
    "value" -> "LEAF";
}
\enddot

Records are pydantic models, dataclass instances and plain objects carrying
``__dict__`` or ``__slots__``. Mappings are mutable mappings. References are
``weakref.ref`` objects. Everything else is a leaf.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import weakref
from collections.abc import Mapping, MutableMapping
from functools import lru_cache
from inspect import isclass, isfunction, ismethod, ismodule, isroutine
from typing import Any, ClassVar, Dict, Iterator, List, Tuple, get_origin, get_type_hints

from pydantic import BaseModel

from .utils import get_full_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "Shape",
    "shape_of",
    "is_addressable",
    "is_settable",
    "iter_members",
    "deref",
    "declared_types",
    "type_field_key",
]


class Shape(enum.Enum):
    RECORD = "record"
    MAPPING = "mapping"
    READONLY_MAPPING = "readonly_mapping"
    REFERENCE = "reference"
    LEAF = "leaf"


_LEAF_TYPES: Tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    bool,
    list,
    tuple,
    set,
    frozenset,
    range,
    memoryview,
    type(None),
)


def _has_instance_state(value: Any) -> bool:
    if hasattr(value, "__dict__"):
        return True
    return bool(_slot_names(type(value)))


def shape_of(value: Any) -> Shape:
    """Classify `value` into one of the shapes the engine understands."""
    if isinstance(value, _LEAF_TYPES):
        return Shape.LEAF
    if isinstance(value, weakref.ref):
        return Shape.REFERENCE
    if isinstance(value, MutableMapping):
        return Shape.MAPPING
    if isinstance(value, Mapping):
        return Shape.READONLY_MAPPING
    if isinstance(value, BaseModel) or dataclasses.is_dataclass(value):
        return Shape.LEAF if isclass(value) else Shape.RECORD
    if (
        isclass(value)
        or ismodule(value)
        or isfunction(value)
        or ismethod(value)
        or isroutine(value)
    ):
        return Shape.LEAF
    if _has_instance_state(value):
        return Shape.RECORD
    return Shape.LEAF


def is_addressable(value: Any) -> bool:
    """Return True if `value` is a location tracked for cycle detection."""
    return shape_of(value) in (Shape.RECORD, Shape.MAPPING, Shape.READONLY_MAPPING)


def deref(value: Any) -> Any:
    """Dereference a weak reference; a dead reference yields ``None``."""
    return value()


# -----------------------------------------------------------------------------
# Record members
# -----------------------------------------------------------------------------


def _is_exported(name: str) -> bool:
    return not name.startswith("_")


@lru_cache(maxsize=None)
def _slot_names(cls: type) -> Tuple[str, ...]:
    names: List[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return tuple(names)


def is_settable(record: Any) -> bool:
    """Return False for frozen records whose members cannot be reassigned."""
    if isinstance(record, BaseModel):
        return not type(record).model_config.get("frozen", False)
    if dataclasses.is_dataclass(record):
        params = getattr(type(record), "__dataclass_params__", None)
        return not getattr(params, "frozen", False)
    return True


def _frozen_fields(cls: type) -> Tuple[str, ...]:
    return tuple(name for name, field in cls.model_fields.items() if field.frozen)


def _member_names(record: Any) -> List[str]:
    if isinstance(record, BaseModel):
        return list(type(record).model_fields)
    if dataclasses.is_dataclass(record):
        names = [f.name for f in dataclasses.fields(record)]
        extra = [n for n in getattr(record, "__dict__", {}) if n not in names]
        return names + extra

    names = list(getattr(record, "__dict__", {}))
    for slot in _slot_names(type(record)):
        if slot not in names and hasattr(record, slot):
            names.append(slot)
    return names


def iter_members(record: Any) -> Iterator[Tuple[str, Any]]:
    """Yield ``(name, value)`` for every exported member of `record`.

    The member list is snapshotted up front so hooks that reassign members do
    not disturb the iteration. Pydantic fields declared frozen are skipped.
    """
    frozen_fields = _frozen_fields(type(record)) if isinstance(record, BaseModel) else ()
    for name in _member_names(record):
        if not _is_exported(name) or name in frozen_fields:
            continue
        try:
            value = getattr(record, name)
        except AttributeError:
            continue
        yield name, value


@lru_cache(maxsize=None)
def _class_type_hints(cls: type) -> Dict[str, Any]:
    try:
        hints = get_type_hints(cls)
    except Exception as e:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Could not resolve annotations of %s: %s", cls, e)
        return {}
    return {
        name: hint for name, hint in hints.items() if get_origin(hint) is not ClassVar
    }


def declared_types(record: Any) -> Dict[str, Any]:
    """Return the resolved annotation of each declared member of `record`."""
    if isinstance(record, BaseModel):
        return {
            name: field.annotation
            for name, field in type(record).model_fields.items()
            if field.annotation is not None
        }
    return _class_type_hints(type(record))


def type_field_key(owner: Any, field: str) -> str:
    """Build the type-qualified lookup key ``"<module>.<qualname>.<field>"``.

    `owner` may be either the record type or an instance of it.
    """
    cls = owner if isclass(owner) else type(owner)
    return f"{get_full_type_name(cls)}.{field}"
