r"""Mutation engine: walk a value graph and apply hooks in place.

The engine visits every reachable record member and mapping entry of a
target value, depth-first and pre-order. At each member or entry it derives a
lookup key and consults its `HookChain`:

  - on a hit, the hook's result is written into the location and the engine
    does not descend into it;
  - on a miss, the engine descends into the value.

Cycles are cut with a visited set of object identities that lives for one
`Mutator.execute` call. Unsettable, private and unsupported locations are
skipped silently. The only error surfaced to the caller is a `MutationError`
when a hook result cannot be assigned to a record member.

Usage::

    m = new_field_match_mutator()
    m.hook.add("password", PasswordDefaultMutator())
    m.execute(credentials)
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

from typeguard import TypeCheckError, check_type

from . import shapes
from .hooks import HookChain, call_hook
from .shapes import Shape
from .utils import MutationError, get_type_name

if TYPE_CHECKING:
    from .config import MutatorSettings

logger = logging.getLogger(__name__)

_EXHAUSTED = object()

__all__ = [
    "MatchType",
    "Mutator",
    "new_mutator",
    "new_field_match_mutator",
    "new_type_and_field_match_mutator",
]


class MatchType(enum.IntEnum):
    """How a lookup key is derived from a record member."""

    TYPE_QUALIFIED = 1
    FIELD_NAME = 2

    @classmethod
    def parse(cls, value: Union[str, int, "MatchType"]) -> "MatchType":
        """Accept a member, its value, or its name in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper().replace("-", "_")
            if name in cls.__members__:
                return cls[name]
            raise ValueError(f"Unknown match type: {value!r}")
        return cls(value)


class Mutator:
    """Applies registered hooks to matching members of a value graph.

    The match type is fixed at construction. The hook chain persists across
    `execute` calls and may be edited between or during them.
    """

    def __init__(
        self,
        match_type: Union[MatchType, str, int] = MatchType.FIELD_NAME,
        *,
        check_types: bool = True,
    ) -> None:
        self._match_type = MatchType.parse(match_type)
        self._check_types = check_types
        self._hook = HookChain()

    @classmethod
    def from_settings(cls, settings: Optional["MutatorSettings"] = None) -> "Mutator":
        """Build a mutator from `MutatorSettings`, reading the environment if omitted."""
        if settings is None:
            from .config import MutatorSettings

            settings = MutatorSettings.from_env()
        return cls(settings.match_type, check_types=settings.check_types)

    @property
    def hook(self) -> HookChain:
        return self._hook

    @property
    def match_type(self) -> MatchType:
        return self._match_type

    @property
    def check_types(self) -> bool:
        return self._check_types

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(match_type={self._match_type.name}, "
            f"hooks={len(self._hook)})"
        )

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def execute(self, target: Any) -> None:
        """Mutate `target` in place, applying hooks to every matching location.

        Traversal runs on an explicit stack of member iterators, so depth is
        bounded by memory rather than by the interpreter's recursion limit.
        """
        visited: Dict[int, Any] = {}
        stack: List[Iterator[Any]] = [self._enter(target, visited)]
        while stack:
            child = next(stack[-1], _EXHAUSTED)
            if child is _EXHAUSTED:
                stack.pop()
            else:
                stack.append(self._enter(child, visited))

    def _enter(self, value: Any, visited: Dict[int, Any]) -> Iterator[Any]:
        """Return an iterator over the children of `value` left to traverse."""
        if self._already_visited(value, visited):
            return iter(())

        shape = shapes.shape_of(value)
        if shape is Shape.RECORD:
            if not shapes.is_settable(value):
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Skipping frozen record %s", get_type_name(type(value)))
                return iter(())
            return self._walk_record(value)
        if shape is Shape.MAPPING:
            return self._walk_mapping(value)
        if shape is Shape.REFERENCE:
            referent = shapes.deref(value)
            return iter(()) if referent is None else iter((referent,))
        if shape is Shape.READONLY_MAPPING and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Skipping read-only mapping %s", get_type_name(type(value)))
        return iter(())

    def _walk_record(self, record: Any) -> Iterator[Any]:
        """Apply hooks to `record`'s members; yield unmatched member values."""
        for name, current in list(shapes.iter_members(record)):
            if self._match_type is MatchType.TYPE_QUALIFIED:
                key = shapes.type_field_key(record, name)
            else:
                key = name

            hook, found = self._hook.get(key)
            if found:
                new_value = call_hook(hook, record, current)
                self._assign(record, name, new_value)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Applied hook for %r on %s", key, get_type_name(type(record))
                    )
            else:
                yield current

    def _walk_mapping(self, mapping: Any) -> Iterator[Any]:
        """Write hook results back into `mapping`; yield unmatched values."""
        for key in list(mapping.keys()):
            try:
                current = mapping[key]
            except KeyError:
                continue

            hook, found = self._hook.get(key)
            if found:
                mapping[key] = call_hook(hook, None, current)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Applied hook for mapping key %r", key)
            else:
                yield current

    def _assign(self, record: Any, name: str, new_value: Any) -> None:
        """Write `new_value` into `record.name`, faulting on a type mismatch."""
        if self._check_types:
            expected = shapes.declared_types(record).get(name)
            if expected is not None:
                try:
                    check_type(new_value, expected)
                except TypeCheckError as e:
                    raise MutationError(
                        f"Hook result for '{name}' does not match its declared type",
                        [
                            "Return a value assignable to the original field type",
                            "Return `current` unchanged for values the hook does not handle",
                        ],
                        {
                            "operation": "assign",
                            "record_type": get_type_name(type(record), qualname=True),
                            "field": name,
                            "expected_type": repr(expected),
                            "actual_type": get_type_name(type(new_value)),
                        },
                    ) from e

        try:
            setattr(record, name, new_value)
        except Exception as e:
            raise MutationError(
                f"Could not assign hook result to '{name}': {e}",
                ["Return a value the record accepts for this field"],
                {
                    "operation": "assign",
                    "record_type": get_type_name(type(record), qualname=True),
                    "field": name,
                    "actual_type": get_type_name(type(new_value)),
                },
            ) from e

    @staticmethod
    def _already_visited(value: Any, visited: Dict[int, Any]) -> bool:
        """Record `value` as visited; return True if it was seen before."""
        if not shapes.is_addressable(value):
            return False

        addr = id(value)
        if addr in visited:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Cycle detected at %s@%#x", get_type_name(type(value)), addr
                )
            return True

        visited[addr] = value
        return False


def new_mutator(match_type: Union[MatchType, str, int], **kwargs: Any) -> Mutator:
    """Create a mutator with the given match type."""
    return Mutator(match_type, **kwargs)


def new_field_match_mutator(**kwargs: Any) -> Mutator:
    """Create a mutator that matches record members by bare field name."""
    return new_mutator(MatchType.FIELD_NAME, **kwargs)


def new_type_and_field_match_mutator(**kwargs: Any) -> Mutator:
    """Create a mutator that matches record members by ``<type>.<field>``."""
    return new_mutator(MatchType.TYPE_QUALIFIED, **kwargs)
