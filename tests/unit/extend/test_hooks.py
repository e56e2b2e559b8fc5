"""Unit tests for extend/hooks.py"""

import pytest

from mdpost.extend.hooks import HookRegistry


@pytest.fixture(name="hooks")
def hooks_fixture():
    return HookRegistry()


@pytest.mark.asyncio
async def test_run_without_hooks_returns_payload(hooks):
    """Running an unknown hook name returns the payload unchanged."""
    payload = {"a": 1}
    assert await hooks.run("nothing", payload) is payload


@pytest.mark.asyncio
async def test_run_priority_order(hooks):
    """Lower priority runs first; equal priorities keep registration order."""
    order = []
    hooks.register("h", lambda p: order.append("late"), priority=20)
    hooks.register("h", lambda p: order.append("first"), priority=5)
    hooks.register("h", lambda p: order.append("second"))
    hooks.register("h", lambda p: order.append("third"))
    await hooks.run("h", None)
    assert order == ["first", "second", "third", "late"]


@pytest.mark.asyncio
async def test_run_return_value_replaces_payload(hooks):
    """A non-None return value is passed to later hooks and returned."""
    hooks.register("h", lambda p: p + 1)
    hooks.register("h", lambda p: None)
    hooks.register("h", lambda p: p * 10)
    assert await hooks.run("h", 1) == 20


@pytest.mark.asyncio
async def test_run_async_hook_and_args(hooks):
    """Async hooks are awaited and extra args are forwarded."""
    async def hook(payload, flag):
        return f"{payload}:{flag}"

    hooks.register("h", hook)
    assert await hooks.run("h", "p", True) == "p:True"


@pytest.mark.asyncio
async def test_run_hook_error_propagates(hooks):
    """An exception in a hook stops dispatch and reaches the caller."""
    calls = []

    def boom(p):
        raise RuntimeError("boom")

    hooks.register("h", boom)
    hooks.register("h", lambda p: calls.append(p))
    with pytest.raises(RuntimeError, match="boom"):
        await hooks.run("h", 1)
    assert calls == []


def test_unregister(hooks):
    """unregister removes only the given function."""
    def a(p): ...
    def b(p): ...
    hooks.register("h", a)
    hooks.register("h", b)
    hooks.unregister("h", a)
    assert hooks.list("h") == [b]


def test_register_rejects_non_callable(hooks):
    """Registering something that is not callable is a TypeError."""
    with pytest.raises(TypeError):
        hooks.register("h", "not callable")
