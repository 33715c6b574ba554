"""Tests for the ready-made hooks."""

import pytest

from mutator import (
    DEFAULT_MASK,
    ConformanceError,
    FunctionHook,
    MaskHook,
    MutateHook,
    PasswordDefaultMutator,
    new_field_match_mutator,
)


def test_password_default_mutator_masks_strings(password_hook):
    assert password_hook.mutate(None, "Master#123") == "********"
    assert password_hook.mask == DEFAULT_MASK


@pytest.mark.parametrize("value", [1234, None, b"raw", ["a"], {"k": "v"}])
def test_mask_hook_passes_non_strings_through(value):
    assert MaskHook("#").mutate(None, value) is value


def test_mask_hook_custom_mask():
    hook = MaskHook("[REDACTED]")

    assert hook.mutate(object(), "token") == "[REDACTED]"
    assert repr(hook) == "MaskHook(mask='[REDACTED]')"


def test_mask_must_be_a_string():
    with pytest.raises(ConformanceError):
        MaskHook(0)  # type: ignore[arg-type]


def test_function_hook_adapts_callables():
    hook = FunctionHook(lambda owner, current: (owner, current))

    assert isinstance(hook, MutateHook)
    assert hook.mutate("owner", "current") == ("owner", "current")


def test_function_hook_requires_callable():
    with pytest.raises(ConformanceError):
        FunctionHook("not callable")  # type: ignore[arg-type]


def test_function_hook_in_mutator():
    def last_four(owner, current):
        return "*" * (len(current) - 4) + current[-4:]

    m = new_field_match_mutator()
    m.hook.add("card", FunctionHook(last_four))
    payload = {"card": "4111111111111111"}

    m.execute(payload)

    assert payload["card"] == "************1111"
    assert repr(m.hook.get("card")[0]).startswith("FunctionHook(")


def test_each_password_mutator_is_independent():
    assert PasswordDefaultMutator().mask == PasswordDefaultMutator().mask == DEFAULT_MASK
