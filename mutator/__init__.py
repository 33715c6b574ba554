"""In-place mutation of fields and mapping entries inside nested values.

Register hooks by field name (or ``<type>.<field>``) and by mapping key, then
let a `Mutator` walk any value graph and replace every match in place::

    from mutator import PasswordDefaultMutator, new_field_match_mutator

    m = new_field_match_mutator()
    m.hook.add("password", PasswordDefaultMutator())
    m.execute(payload)
"""

from ._version import __version__
from .config import MutatorSettings, configure_logging
from .defaults import DEFAULT_MASK, FunctionHook, MaskHook, PasswordDefaultMutator
from .engine import (
    MatchType,
    Mutator,
    new_field_match_mutator,
    new_mutator,
    new_type_and_field_match_mutator,
)
from .hooks import HookChain, HookType, MutateHook, call_hook
from .shapes import Shape, shape_of, type_field_key
from .utils import (
    ConfigurationError,
    ConformanceError,
    MutationError,
    MutatorError,
    RegistryError,
)

__all__ = [
    "Mutator",
    "MatchType",
    "new_mutator",
    "new_field_match_mutator",
    "new_type_and_field_match_mutator",
    "HookChain",
    "HookType",
    "MutateHook",
    "call_hook",
    "MaskHook",
    "PasswordDefaultMutator",
    "FunctionHook",
    "DEFAULT_MASK",
    "Shape",
    "shape_of",
    "type_field_key",
    "MutatorSettings",
    "configure_logging",
    "MutatorError",
    "RegistryError",
    "ConformanceError",
    "MutationError",
    "ConfigurationError",
    "__version__",
]
