"""
Tests for the single-shot completion handle.
"""

import asyncio

import pytest

from prequest.services.completion import CompletionHandle


def run(coro):
    return asyncio.run(coro)


class TestSettlement:

    def test_resolve_once(self):
        async def scenario():
            handle = CompletionHandle()
            assert handle.resolve("first") is True
            assert handle.resolve("second") is False
            assert handle.reject(RuntimeError("late")) is False
            return await handle

        assert run(scenario()) == "first"

    def test_reject_once(self):
        async def scenario():
            handle = CompletionHandle()
            assert handle.reject(ValueError("first")) is True
            assert handle.resolve("late") is False
            await handle

        with pytest.raises(ValueError, match="first"):
            run(scenario())

    def test_rejected_constructor(self):
        async def scenario():
            handle = CompletionHandle.rejected(KeyError("k"))
            assert handle.settled
            assert isinstance(handle.exception(), KeyError)
            return handle

        handle = run(scenario())
        assert "rejected" in repr(handle)

    def test_pending_until_settled(self):
        async def scenario():
            handle = CompletionHandle()
            assert not handle.settled
            assert repr(handle) == "<CompletionHandle pending>"
            asyncio.get_running_loop().call_soon(handle.resolve, 7)
            return await handle

        assert run(scenario()) == 7

    def test_done_callback_receives_handle(self):
        async def scenario():
            handle = CompletionHandle()
            seen = []
            handle.add_done_callback(seen.append)
            handle.resolve(1)
            await asyncio.sleep(0)
            return handle, seen

        handle, seen = run(scenario())
        assert seen == [handle]
        assert handle.result() == 1

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            CompletionHandle()
