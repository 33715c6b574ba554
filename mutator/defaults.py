"""Ready-made mutate hooks."""

from __future__ import annotations

from typing import Any, Callable

from .utils import ConformanceError, get_func_name, get_type_name

__all__ = [
    "DEFAULT_MASK",
    "MaskHook",
    "PasswordDefaultMutator",
    "FunctionHook",
]

DEFAULT_MASK = "********"


class MaskHook:
    """Replace string values with a fixed mask.

    Non-string values are returned unchanged so the hook never changes the
    type stored at a location.
    """

    def __init__(self, mask: str = DEFAULT_MASK) -> None:
        if not isinstance(mask, str):
            raise ConformanceError(
                "Mask must be a string",
                ["Pass a literal such as '********' or '[REDACTED]'"],
                {"expected_type": "str", "actual_type": get_type_name(type(mask))},
            )
        self.mask = mask

    def mutate(self, owner: Any, current: Any) -> Any:
        if not isinstance(current, str):
            return current
        return self.mask

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mask={self.mask!r})"


class PasswordDefaultMutator(MaskHook):
    """Mask hook fixed to the default ``"********"`` mask."""

    def __init__(self) -> None:
        super().__init__(DEFAULT_MASK)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FunctionHook:
    """Adapt a plain ``(owner, current) -> value`` callable to `MutateHook`."""

    def __init__(self, func: Callable[[Any, Any], Any]) -> None:
        if not callable(func):
            raise ConformanceError(
                f"{func!r} is not callable",
                ["Pass a function taking (owner, current)"],
                {"actual_type": get_type_name(type(func))},
            )
        self.func = func

    def mutate(self, owner: Any, current: Any) -> Any:
        return self.func(owner, current)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({get_func_name(self.func, qualname=True)})"
