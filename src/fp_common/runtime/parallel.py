"""Bounded worker pool behind iter_parallel and async_iter_parallel.

A fixed number of workers share one source and each pulls the next element
as soon as it is free, so at most `workers` actions are ever in flight and
no element is dispatched after the pool stops. The pool stops when the
source is exhausted, when an action (or the source itself) faults, or when
the cancellation token is set. Actions already running are allowed to
finish; the first fault is then re-raised unchanged, otherwise a
cancellation surfaces as `CancelledError`.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable, Iterator
import aiologic
import anyio
from structlog.stdlib import BoundLogger

from fp_common._internal import close_iterator, resolve
from fp_common.option import Nothing, NothingType, Option, Some
from fp_common.runtime._config import get_config
from fp_common.runtime._logging import get_logger
from fp_common.runtime.cancellation import CancellationToken
from fp_common.runtime.errors import CancelledError

__all__ = ['resolve_parallelism', 'run_parallel']

logger = get_logger(__name__)


def resolve_parallelism(max_degree_of_parallelism: Option[int] | int) -> int:
    """Turn an optional parallelism cap into a concrete worker count.

    Args:
        max_degree_of_parallelism: `Some(k)` or a bare `k` caps the pool at k
            workers; `Nothing` uses the configured default concurrency.

    Returns:
        The number of workers to start.

    Raises:
        ValueError: If the cap is smaller than 1.
    """
    match max_degree_of_parallelism:
        case NothingType():
            return get_config().concurrency
        case Some(value) | (int() as value):
            if value < 1:
                msg = f'max_degree_of_parallelism must be at least 1, got {value}'
                raise ValueError(msg)
            return value
        case _:
            msg = f'max_degree_of_parallelism must be an Option[int] or int, got {max_degree_of_parallelism!r}'
            raise TypeError(msg)


class _SharedSource[T]:
    """Serializes pulls from a sync or async source across workers."""

    __slots__ = ('_async_iterator', '_exhausted', '_iterator', '_lock')

    def __init__(self, source: Iterable[T] | AsyncIterable[T]) -> None:
        self._lock = aiologic.Lock()
        self._exhausted = False
        self._iterator: Iterator[T] | None = None
        self._async_iterator: AsyncIterator[T] | None = None
        if isinstance(source, AsyncIterable):
            self._async_iterator = aiter(source)
        else:
            self._iterator = iter(source)

    async def pull(self) -> Some[T] | NothingType:
        async with self._lock:
            if self._exhausted:
                return Nothing
            try:
                if self._async_iterator is not None:
                    item = await anext(self._async_iterator)
                else:
                    item = next(self._iterator)  # type: ignore[arg-type]
            except (StopIteration, StopAsyncIteration):
                self._exhausted = True
                return Nothing
            return Some(item)

    async def aclose(self) -> None:
        """Close the underlying iterator once no worker is pulling from it."""
        self._exhausted = True
        await close_iterator(self._async_iterator if self._async_iterator is not None else self._iterator)


class _PoolState:
    __slots__ = ('cancelled', 'fault', 'log')

    def __init__(self, log: BoundLogger) -> None:
        self.log = log
        self.fault: Exception | None = None
        self.cancelled = False

    @property
    def stopped(self) -> bool:
        return self.fault is not None or self.cancelled

    def fail(self, exc: Exception) -> None:
        if self.fault is None:
            self.fault = exc
            self.log.debug('parallel_iteration.fault', error=repr(exc))


async def run_parallel[T](
    source: Iterable[T] | AsyncIterable[T],
    action: Callable[[T], object] | Callable[[T], Awaitable[object]],
    *,
    workers: int,
    cancellation: CancellationToken | None = None,
    in_thread: bool = False,
) -> None:
    """Run `action` over `source` with at most `workers` concurrent calls.

    Args:
        source: Elements to process; sync and async iterables are accepted.
        action: Called once per element. Awaitable results are awaited.
        workers: Pool size, already validated by resolve_parallelism.
        cancellation: Token polled before every pull and dispatch.
        in_thread: Run each (synchronous) action in a worker thread.

    Raises:
        Exception: The first fault raised by an action or by the source.
        CancelledError: If the token was cancelled before the source was drained.
    """
    shared = _SharedSource(source)
    log = logger.bind(workers=workers, in_thread=in_thread)
    state = _PoolState(log)
    limiter = anyio.CapacityLimiter(workers) if in_thread else None

    def observe_cancellation() -> bool:
        if cancellation is not None and cancellation.is_cancelled:
            if not state.cancelled:
                log.debug('parallel_iteration.cancelled', reason=cancellation.reason)
            state.cancelled = True
        return state.stopped

    async def invoke(item: T) -> None:
        if in_thread:
            await anyio.to_thread.run_sync(action, item, limiter=limiter)
        else:
            await resolve(action(item))

    async def worker() -> None:
        while not observe_cancellation():
            try:
                next_item = await shared.pull()
                if next_item.is_none() or observe_cancellation():
                    return
                await invoke(next_item.value)
            except Exception as exc:
                state.fail(exc)
                return

    log.debug('parallel_iteration.started')
    try:
        async with anyio.create_task_group() as tg:
            for _ in range(workers):
                tg.start_soon(worker)
    finally:
        await shared.aclose()

    if state.fault is not None:
        raise state.fault
    if state.cancelled:
        raise CancelledError(cancellation.reason if cancellation is not None else None)
