"""Utility exceptions and helpers for the mutator package.

This module defines a small hierarchy of rich exceptions used by the hook
registry, the mutation engine and the settings layer, plus naming helpers.

Exceptions:
    MutatorError: Base class carrying `suggestions` and `context` metadata.
    RegistryError: Raised when a hook cannot be registered under a key.
    ConformanceError: Raised when a hook object violates the hook contract.
    MutationError: Raised when a hook result cannot be assigned to a field.
    ConfigurationError: Raised for invalid settings or unsupported input.

Helpers:
    get_type_name(cls, qualname=False): Return a human-readable type name.
    get_func_name(func, qualname=False): Return a human-readable callable name.
    get_full_type_name(cls): Return the module-qualified name of a type.
"""

from __future__ import annotations

from inspect import isclass
from typing import Any, Callable, Dict, List, Optional

__all__ = [
    "MutatorError",
    "RegistryError",
    "ConformanceError",
    "MutationError",
    "ConfigurationError",
    "get_type_name",
    "get_func_name",
    "get_full_type_name",
]


class MutatorError(Exception):
    """Base exception with structured context.

    Attributes:
        message: Human-readable error text.
        suggestions: List of short, imperative hints for remediation.
        context: Free-form key/value details safe to log and render.
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}
        super().__init__(self._build_enhanced_message())

    def _build_enhanced_message(self) -> str:
        """Embed key context and suggestions into the exception string."""
        lines = [self.message]

        if self.context:
            if "expected_type" in self.context and "actual_type" in self.context:
                lines.append(f"  Expected: {self.context['expected_type']}")
                lines.append(f"  Actual: {self.context['actual_type']}")
            if "field" in self.context:
                lines.append(f"  Field: {self.context['field']}")

        if self.suggestions:
            lines.append("  Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"    • {suggestion}")

        return "\n".join(lines)


class RegistryError(MutatorError):
    """Raised for key-related hook registry errors."""


class ConformanceError(MutatorError):
    """Raised when a hook does not conform to the mutate hook contract."""


class MutationError(MutatorError):
    """Raised when a hook result cannot be assigned into its location."""


class ConfigurationError(MutatorError):
    """Raised for invalid settings values or unsupported input documents."""


def get_type_name(cls: type, qualname: bool = False) -> str:
    """Return a readable name for a type.

    Args:
        cls: The class or type object.
        qualname: If True, return the qualified name when available.

    Returns:
        The type's `__qualname__`, `__name__`, or a string fallback.
    """
    if not isclass(cls):
        raise MutatorError(f"{cls} is not a class")
    if qualname and hasattr(cls, "__qualname__"):
        return getattr(cls, "__qualname__")
    elif hasattr(cls, "__name__"):
        return getattr(cls, "__name__")
    else:
        return str(cls)


def get_full_type_name(cls: type) -> str:
    """Return `<module>.<qualname>` for a type, dropping the builtins module."""
    name = get_type_name(cls, qualname=True)
    module = getattr(cls, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name


def get_func_name(func: Callable[..., Any], qualname: bool = False) -> str:
    """Return a readable name for a function.

    Args:
        func: The function object.
        qualname: If True, return the qualified name when available.

    Returns:
        The function's `__qualname__`, `__name__`, or a string fallback.
    """
    if not callable(func):
        raise MutatorError(f"{func} is not callable")
    while hasattr(func, "__wrapped__"):
        func = getattr(func, "__wrapped__")
    return getattr(func, "__qualname__" if qualname else "__name__", repr(func))
