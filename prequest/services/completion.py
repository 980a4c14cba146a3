"""
Single-shot completion handle.

A CompletionHandle is settled exactly once, either resolved with a value or
rejected with an exception. Settlement attempts after the first are ignored,
so competing producers (normal completion and premature close) can both try
to settle it and the first one wins.
"""

import asyncio
from typing import Any, Callable, Generator, Generic, TypeVar


T = TypeVar("T")


class CompletionHandle(Generic[T]):
    """Awaitable, write-once result cell bound to an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        if loop is None:
            loop = asyncio.get_running_loop()
        self._future: asyncio.Future[T] = loop.create_future()
        self._task: asyncio.Task[Any] | None = None

    @classmethod
    def rejected(cls, error: BaseException) -> "CompletionHandle[Any]":
        """Create a handle that is already rejected with ``error``."""
        handle: CompletionHandle[Any] = cls()
        handle.reject(error)
        return handle

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, value: T) -> bool:
        """
        Resolve the handle with ``value``.

        Returns:
            True if this call settled the handle, False if it was already settled
        """
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def reject(self, error: BaseException) -> bool:
        """
        Reject the handle with ``error``.

        Returns:
            True if this call settled the handle, False if it was already settled
        """
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True

    def attach(self, task: "asyncio.Task[Any]") -> None:
        """Keep a reference to the task producing this handle's value."""
        self._task = task

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> T:
        return self._future.result()

    def exception(self) -> BaseException | None:
        return self._future.exception()

    def add_done_callback(self, callback: Callable[["CompletionHandle[T]"], Any]) -> None:
        self._future.add_done_callback(lambda _: callback(self))

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    def __repr__(self) -> str:
        if not self._future.done():
            state = "pending"
        elif self._future.exception() is not None:
            state = f"rejected {self._future.exception()!r}"
        else:
            state = "resolved"
        return f"<CompletionHandle {state}>"
