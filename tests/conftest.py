"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from mutator import (
    Mutator,
    PasswordDefaultMutator,
    new_field_match_mutator,
    new_type_and_field_match_mutator,
)

# =============================================================================
# Fixtures: Hooks
# =============================================================================


class RecordingHook:
    """Hook that records every call and returns a fixed replacement."""

    def __init__(self, replacement: Any = "<hooked>"):
        self.replacement = replacement
        self.calls: List[Tuple[Any, Any]] = []

    def mutate(self, owner: Any, current: Any) -> Any:
        self.calls.append((owner, current))
        return self.replacement


@pytest.fixture
def password_hook() -> PasswordDefaultMutator:
    return PasswordDefaultMutator()


@pytest.fixture
def recording_hook() -> RecordingHook:
    return RecordingHook()


# =============================================================================
# Fixtures: Fresh Mutators
# =============================================================================


@pytest.fixture
def field_mutator(password_hook) -> Mutator:
    """Field-name mutator masking both `password` spellings."""
    m = new_field_match_mutator()
    m.hook.add("Password", password_hook).add("password", password_hook)
    return m


@pytest.fixture
def type_mutator() -> Mutator:
    """Type-qualified mutator with no hooks registered."""
    return new_type_and_field_match_mutator()


@pytest.fixture
def make_recording_hook():
    """Factory for additional `RecordingHook` instances."""
    return RecordingHook
