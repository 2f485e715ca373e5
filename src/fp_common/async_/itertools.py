"""Option- and Result-aware combinators over asynchronous iterables.

Mirrors `fp_common.iterables`. Every function accepts either an
`AsyncIterable` or a plain `Iterable` as its source, and every selector or
action may be a plain function or a coroutine function: awaitable return
values are awaited before use. Processing is sequential and in source order,
suspending only while waiting for the next element or for a callback,
except for `async_iter_parallel` and `async_collect`.

Example:
    ```python
    async def lookup(user_id: int) -> Result[User]:
        ...

    users = await async_traverse_result(stream_ids(), lookup)
    ```
"""

from __future__ import annotations

import functools
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable
from contextlib import aclosing

import aiologic
import anyio

from fp_common._internal import close_iterator, resolve
from fp_common.error import Error
from fp_common.option import Nothing, NothingType, Option, Some
from fp_common.result import Failure, Result, Success
from fp_common.runtime.cancellation import CancellationToken
from fp_common.runtime.parallel import resolve_parallelism, run_parallel

__all__ = [
    'AsyncReiterable',
    'async_choose',
    'async_collect',
    'async_head',
    'async_iter_all',
    'async_iter_parallel',
    'async_pick',
    'async_single_or_none',
    'async_tap',
    'async_traverse_option',
    'async_traverse_result',
    'async_unzip',
]

type Source[T] = AsyncIterable[T] | Iterable[T]
type MaybeAwaitable[T] = T | Awaitable[T]


class AsyncReiterable[T]:
    """An async iterable that starts a fresh pass every time it is iterated.

    Async counterpart of `fp_common.iterables.Reiterable`.
    """

    __slots__ = ('_args', '_factory')

    def __init__(self, factory: Callable[..., AsyncIterator[T]], *args: object) -> None:
        self._factory = factory
        self._args = args

    def __aiter__(self) -> AsyncIterator[T]:
        return self._factory(*self._args)


async def _iterate[T](source: Source[T]) -> AsyncIterator[T]:
    """Yield from a sync or async source, closing the source's iterator on exit."""
    iterator = aiter(source) if isinstance(source, AsyncIterable) else iter(source)
    try:
        if isinstance(iterator, AsyncIterator):
            async for item in iterator:
                yield item
        else:
            for item in iterator:
                yield item
    finally:
        await close_iterator(iterator)


def _check(cancellation: CancellationToken | None) -> None:
    if cancellation is not None:
        cancellation.raise_if_cancelled()


async def _take[T](source: Source[T], count: int) -> list[T]:
    """Pull at most `count` elements, then close the source."""
    taken: list[T] = []
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            taken.append(item)
            if len(taken) >= count:
                break
    return taken


async def async_head[T](source: Source[T]) -> Some[T] | NothingType:
    """Return the first element, pulling nothing beyond it."""
    match await _take(source, 1):
        case [item]:
            return Some(item)
        case _:
            return Nothing


async def async_single_or_none[T](source: Source[T]) -> Some[T] | NothingType:
    """Return Some(x) if the source holds exactly one element, else Nothing."""
    match await _take(source, 2):
        case [item]:
            return Some(item)
        case _:
            return Nothing


async def _choose[T, U](source: Source[T], selector: Callable[[T], MaybeAwaitable[Option[U]]]) -> AsyncIterator[U]:
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            match await resolve(selector(item)):
                case Some(value):
                    yield value


def async_choose[T, U](
    source: Source[T],
    selector: Callable[[T], MaybeAwaitable[Option[U]]],
) -> AsyncReiterable[U]:
    """Filter and map lazily, keeping the values where selector returns Some.

    Order is preserved even when the selector suspends.
    """
    return AsyncReiterable(_choose, source, selector)


async def async_pick[T, U](
    source: Source[T],
    selector: Callable[[T], MaybeAwaitable[Option[U]]],
    *,
    cancellation: CancellationToken | None = None,
) -> Some[U] | NothingType:
    """Return the first Some produced by selector, without looking further."""
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            _check(cancellation)
            option = await resolve(selector(item))
            if option.is_some():
                return option
    return Nothing


async def async_traverse_result[T, U](
    source: Source[T],
    selector: Callable[[T], MaybeAwaitable[Success[U] | Failure]],
    *,
    cancellation: CancellationToken | None = None,
) -> Success[tuple[U, ...]] | Failure:
    """Apply a Result-returning selector to every element, accumulating all errors.

    Returns:
        Success(tuple of values) if every element succeeded, otherwise a
        Failure combining every element error in source order.

    Raises:
        CancelledError: If the token is cancelled mid-traversal.
    """
    values: list[U] = []
    errors: list[Error] = []

    async def collect(item: T) -> None:
        match await resolve(selector(item)):
            case Success(value):
                values.append(value)
            case Failure(error):
                errors.append(error)

    await async_iter_all(source, collect, cancellation=cancellation)

    if errors:
        return Failure(functools.reduce(lambda first, second: first + second, errors))
    return Success(tuple(values))


async def async_traverse_option[T, U](
    source: Source[T],
    selector: Callable[[T], MaybeAwaitable[Option[U]]],
    *,
    cancellation: CancellationToken | None = None,
) -> Some[tuple[U, ...]] | NothingType:
    """Apply an Option-returning selector to every element, stopping at the first Nothing."""
    values: list[U] = []
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            _check(cancellation)
            match await resolve(selector(item)):
                case Some(value):
                    values.append(value)
                case _:
                    return Nothing
    return Some(tuple(values))


async def async_unzip[A, B](
    pairs: Source[tuple[A, B]],
    *,
    cancellation: CancellationToken | None = None,
) -> tuple[tuple[A, ...], tuple[B, ...]]:
    """Split a stream of pairs into two tuples of equal length."""
    firsts: list[A] = []
    seconds: list[B] = []
    async with aclosing(_iterate(pairs)) as items:
        async for first, second in items:
            _check(cancellation)
            firsts.append(first)
            seconds.append(second)
    return tuple(firsts), tuple(seconds)


async def async_iter_all[T](
    source: Source[T],
    action: Callable[[T], MaybeAwaitable[object]],
    *,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run an action on each element, in order, awaiting it when it is async.

    Raises:
        CancelledError: If the token is cancelled; no further element is processed.
    """
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            _check(cancellation)
            await resolve(action(item))


async def async_iter_parallel[T](
    source: Source[T],
    action: Callable[[T], MaybeAwaitable[object]],
    *,
    max_degree_of_parallelism: Option[int] | int = Nothing,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run an action on each element with bounded concurrency.

    Workers are tasks in an anyio task group, so async actions interleave
    on the current event loop; a synchronous action blocks its worker while
    it runs. Completion order is not guaranteed.

    Args:
        source: Elements to process (sync or async iterable).
        action: Plain or coroutine function called once per element.
        max_degree_of_parallelism: Optional cap on concurrent actions;
            Nothing uses the configured default concurrency.
        cancellation: Polled before each dispatch.

    Raises:
        Exception: The first exception raised by an action; nothing new is
            dispatched after it.
        CancelledError: If the token was cancelled before the source was drained.
        ValueError: If the cap is smaller than 1.
    """
    workers = resolve_parallelism(max_degree_of_parallelism)
    await run_parallel(source, action, workers=workers, cancellation=cancellation)


async def _tap[T](source: Source[T], action: Callable[[T], MaybeAwaitable[object]]) -> AsyncIterator[T]:
    async with aclosing(_iterate(source)) as items:
        async for item in items:
            await resolve(action(item))
            yield item


def async_tap[T](source: Source[T], action: Callable[[T], MaybeAwaitable[object]]) -> AsyncReiterable[T]:
    """Pass elements through unchanged, running action on each as it is consumed."""
    return AsyncReiterable(_tap, source, action)


async def async_collect[T](
    awaitables: Iterable[Awaitable[Result[T]]],
    *,
    limit: int | None = None,
) -> Success[tuple[T, ...]] | Failure:
    """Await Result-producing awaitables concurrently and gather the outcome.

    Like `async_traverse_result`, every awaitable runs to completion and all
    errors are combined in the order of the input, not of completion.

    Note:
        The awaitables iterable is eagerly materialized into a list before
        processing.

    Args:
        awaitables: Awaitables that produce Result values.
        limit: Maximum number of concurrently running awaitables. None means unlimited.

    Returns:
        Success(tuple of values) if all succeeded, otherwise the combined Failure.

    Raises:
        ValueError: If limit is smaller than 1.

    Example:
        ```python
        async def fetch(id: int) -> Result[dict]:
            return success({'id': id})

        await async_collect([fetch(i) for i in range(10)], limit=3)
        ```
    """
    if limit is not None and limit < 1:
        msg = f'limit must be at least 1, got {limit}'
        raise ValueError(msg)

    awaitable_list = list(awaitables)
    results: list[Result[T] | None] = [None] * len(awaitable_list)
    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

    async def run_one(i: int, aw: Awaitable[Result[T]]) -> None:
        if limiter is None:
            results[i] = await aw
            return
        async with limiter:
            results[i] = await aw

    async with anyio.create_task_group() as tg:
        for i, aw in enumerate(awaitable_list):
            tg.start_soon(run_one, i, aw)

    return await async_traverse_result(results, lambda result: result)  # type: ignore[arg-type, return-value]
