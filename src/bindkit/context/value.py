"""Helpers for values that may or may not be awaitable."""
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar, Union

_T = TypeVar("_T")
_R = TypeVar("_R")

ValueOrAwaitable = Union[_T, Awaitable[_T]]


def is_awaitable(value: Any) -> bool:
    return inspect.isawaitable(value)


def discard(value: Any) -> None:
    """Release an awaitable that will never be awaited."""
    close = getattr(value, "close", None)
    if callable(close):
        close()


class _Then:
    """``fn`` applied to an awaitable, once it is awaited."""

    def __init__(self, source: Awaitable[_T], fn: Callable[[_T], ValueOrAwaitable[_R]]) -> None:
        self._source = source
        self._fn = fn

    def __await__(self):
        return self._run().__await__()

    async def _run(self):
        result = self._fn(await self._source)
        if is_awaitable(result):
            result = await result
        return result

    def close(self) -> None:
        discard(self._source)


class _AllOf:
    """The results of several awaitables, in order."""

    def __init__(self, awaitables: Iterable[Awaitable[Any]]) -> None:
        self._awaitables = list(awaitables)

    def __await__(self):
        return self._run().__await__()

    async def _run(self):
        return await asyncio.gather(*self._awaitables)

    def close(self) -> None:
        for awaitable in self._awaitables:
            discard(awaitable)


class SharedAwaitable:
    """
    An awaitable that can be awaited any number of times.

    The source is scheduled once, on the first await; every awaiter gets
    the same result. ``release`` is called when the source fails or is
    discarded before it was ever awaited.
    """

    def __init__(self, source: Awaitable[Any], release: Optional[Callable[[], None]] = None) -> None:
        self._source = source
        self._release = release
        self._future: Optional[asyncio.Future] = None

    def __await__(self):
        return self._run().__await__()

    async def _run(self):
        if self._future is None:
            self._future = asyncio.ensure_future(self._source)
            self._future.add_done_callback(self._on_done)
        return await asyncio.shield(self._future)

    def _on_done(self, future: asyncio.Future) -> None:
        if future.cancelled() or future.exception() is not None:
            self._do_release()

    def _do_release(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()

    @property
    def resolved(self) -> bool:
        future = self._future
        return (
            future is not None
            and future.done()
            and not future.cancelled()
            and future.exception() is None
        )

    def result(self) -> Any:
        return self._future.result()

    def close(self) -> None:
        # once scheduled, other awaiters may depend on the source
        if self._future is None:
            discard(self._source)
            self._do_release()


def all_of(awaitables: Iterable[Awaitable[Any]]) -> Awaitable[list]:
    """Await several awaitables concurrently."""
    return _AllOf(awaitables)


def then(
        value: ValueOrAwaitable[_T],
        fn: Callable[[_T], ValueOrAwaitable[_R]]
) -> ValueOrAwaitable[_R]:
    """
    Apply ``fn`` to ``value``, waiting for it first if it is awaitable.

    Stays synchronous as long as every step is synchronous. The awaitable
    returned otherwise can be closed without being awaited.
    """
    if not is_awaitable(value):
        return fn(value)
    return _Then(value, fn)
