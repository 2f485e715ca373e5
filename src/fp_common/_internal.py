"""Small helpers shared by the container types and the combinators."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable

__all__ = ['ExceptionSource', 'build_exception', 'close_iterator', 'resolve']

type ExceptionSource = BaseException | Callable[[], BaseException]


def build_exception(source: ExceptionSource) -> BaseException:
    """Return the exception instance, calling the factory if one was given."""
    if isinstance(source, BaseException):
        return source
    return source()


async def resolve[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it as is.

    Lets async combinators accept both plain and coroutine callbacks.
    """
    if inspect.isawaitable(value):
        return await value
    return value  # type: ignore[return-value]


async def close_iterator(iterator: object) -> None:
    """Close a sync or async iterator that supports it, such as a generator."""
    aclose = getattr(iterator, 'aclose', None)
    if aclose is not None:
        await aclose()
        return
    close = getattr(iterator, 'close', None)
    if close is not None:
        close()
