r"""Mutate hook contract and the thread-safe hook registry.

A hook computes the replacement value for a matched record member or mapping
entry. Hooks are registered in a `HookChain` under an arbitrary hashable key:
a bare field name, a mapping key, or a type-qualified field name such as
``"app.models.Smtp.password"``.

Behavior:
  - `HookChain.add` registers or overwrites a hook and returns the chain.
  - `HookChain.remove` drops a key; removing an absent key is a no-op.
  - `HookChain.get` returns ``(hook, found)`` and never raises.

All access to the backing mapping is guarded by an `RLock`, so registration
from other threads never corrupts a concurrent lookup.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Tuple, Union

from typing_extensions import Protocol, runtime_checkable

from .utils import ConformanceError, RegistryError, get_func_name, get_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "MutateHook",
    "HookType",
    "HookChain",
    "call_hook",
]


@runtime_checkable
class MutateHook(Protocol):
    """Contract for objects producing a replacement value.

    ``owner`` is the enclosing record for record members and ``None`` for
    mapping entries. ``current`` is the value being replaced.
    """

    def mutate(self, owner: Any, current: Any) -> Any: ...


HookType = Union[MutateHook, Callable[[Any, Any], Any]]


def call_hook(hook: HookType, owner: Any, current: Any) -> Any:
    """Invoke either a `MutateHook` object or a plain callable hook."""
    if isinstance(hook, MutateHook):
        return hook.mutate(owner, current)
    return hook(owner, current)


def _hook_name(hook: Any) -> str:
    if isinstance(hook, MutateHook) or not callable(hook):
        return get_type_name(type(hook))
    return get_func_name(hook, qualname=True)


class HookChain:
    """Lock-guarded mapping from lookup keys to mutate hooks."""

    def __init__(self) -> None:
        self._hooks: Dict[Hashable, HookType] = {}
        self._lock = RLock()

    def add(self, key: Hashable, hook: HookType) -> "HookChain":
        """Register `hook` under `key`, replacing any previous hook.

        Raises:
            RegistryError: if `key` is not hashable.
            ConformanceError: if `hook` is neither a `MutateHook` nor callable.
        """
        try:
            hash(key)
        except TypeError as e:
            raise RegistryError(
                f"Hook key {key!r} is not hashable",
                [
                    "Use a field name, a mapping key or a type-qualified field name",
                    "Convert lists to tuples before using them as keys",
                ],
                {
                    "operation": "add",
                    "key_type": get_type_name(type(key)),
                    "registry_size": len(self),
                },
            ) from e

        if not isinstance(hook, MutateHook) and not callable(hook):
            raise ConformanceError(
                f"Hook for key {key!r} must implement mutate(owner, current)",
                [
                    "Define a mutate(self, owner, current) method on the hook class",
                    "Or register a plain callable taking (owner, current)",
                ],
                {
                    "operation": "add",
                    "key": str(key),
                    "expected_type": "MutateHook | Callable[[Any, Any], Any]",
                    "actual_type": get_type_name(type(hook)),
                },
            )

        with self._lock:
            self._hooks[key] = hook

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Registered hook %s for key %r", _hook_name(hook), key)
        return self

    def remove(self, key: Hashable) -> "HookChain":
        """Remove the hook registered under `key`, if any."""
        with self._lock:
            try:
                removed = self._hooks.pop(key, None)
            except TypeError:
                removed = None

        if removed is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Removed hook for key %r", key)
        return self

    def get(self, key: Any) -> Tuple[Optional[HookType], bool]:
        """Return ``(hook, True)`` if `key` is registered, else ``(None, False)``."""
        with self._lock:
            try:
                hook = self._hooks.get(key)
            except TypeError:
                return None, False
        return hook, hook is not None

    def keys(self) -> List[Hashable]:
        """Return a snapshot of the registered keys."""
        with self._lock:
            return list(self._hooks.keys())

    def clear(self) -> None:
        with self._lock:
            self._hooks.clear()

    def __contains__(self, key: object) -> bool:
        return self.get(key)[1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._hooks)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keys()!r})"
