"""Tests for the hook registry and hook dispatch."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from mutator import (
    ConformanceError,
    HookChain,
    MutateHook,
    PasswordDefaultMutator,
    RegistryError,
    call_hook,
)


@pytest.fixture
def chain():
    return HookChain()


def test_add_and_get(chain, password_hook):
    chain.add("password", password_hook)

    hook, found = chain.get("password")

    assert found
    assert hook is password_hook


def test_get_missing_key(chain):
    assert chain.get("password") == (None, False)


def test_add_and_remove_chain(chain, password_hook):
    result = chain.add("a", password_hook).add("b", password_hook).remove("a")

    assert result is chain
    assert chain.keys() == ["b"]


def test_add_overwrites(chain, password_hook):
    replacement = PasswordDefaultMutator()
    chain.add("password", password_hook).add("password", replacement)

    assert chain.get("password")[0] is replacement
    assert len(chain) == 1


def test_remove_absent_key_is_noop(chain, password_hook):
    chain.add("password", password_hook)

    chain.remove("token").remove(["unhashable"])

    assert list(chain) == ["password"]


def test_keys_can_be_any_hashable(chain, password_hook):
    chain.add(1, password_hook).add(("app", "password"), password_hook)

    assert 1 in chain
    assert ("app", "password") in chain
    assert "1" not in chain


def test_unhashable_key_is_rejected(chain, password_hook):
    with pytest.raises(RegistryError) as excinfo:
        chain.add(["password"], password_hook)

    assert excinfo.value.context["key_type"] == "list"
    assert excinfo.value.suggestions


def test_unhashable_lookup_reports_missing(chain):
    assert chain.get({"a": 1}) == (None, False)
    assert {"a": 1} not in chain


def test_non_callable_hook_is_rejected(chain):
    with pytest.raises(ConformanceError) as excinfo:
        chain.add("password", "********")

    assert "mutate(owner, current)" in str(excinfo.value)


def test_clear(chain, password_hook):
    chain.add("a", password_hook).add("b", password_hook)

    chain.clear()

    assert len(chain) == 0


def test_call_hook_dispatch(password_hook):
    assert isinstance(password_hook, MutateHook)
    assert call_hook(password_hook, None, "secret") == "********"
    assert call_hook(lambda owner, current: current.upper(), None, "abc") == "ABC"


def test_concurrent_registration(chain, password_hook):
    keys = [f"key-{i}" for i in range(500)]

    def register(key):
        chain.add(key, password_hook)
        assert chain.get(key)[1]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(register, keys))

    assert sorted(chain.keys()) == sorted(keys)


def test_concurrent_add_remove_and_lookup(chain, password_hook):
    def churn(i):
        key = f"key-{i % 10}"
        if i % 2:
            chain.add(key, password_hook)
        else:
            chain.remove(key)
        hook, found = chain.get(key)
        assert (hook is None) != found

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(churn, range(1000)))

    assert len(chain) <= 10
