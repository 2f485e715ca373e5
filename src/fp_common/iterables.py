"""Option- and Result-aware combinators over synchronous iterables.

Everything here pulls lazily and in source order. `choose` and `tap` return
re-iterable views, every other function consumes its source when called.
The only exception to sequential processing is `iter_parallel`.

Example:
    ```python
    from fp_common import Nothing, Some, choose, pick, traverse_result

    evens = list(choose([1, 2, 3, 4], lambda x: Some(x) if x % 2 == 0 else Nothing))
    # [2, 4]

    first_even = pick([1, 3, 8, 9], lambda x: Some(x) if x % 2 == 0 else Nothing)
    # Some(value=8)
    ```
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator

import anyio

from fp_common.error import Error
from fp_common.option import Nothing, NothingType, Option, Some
from fp_common.result import Failure, Success
from fp_common.runtime.cancellation import CancellationToken
from fp_common.runtime.parallel import resolve_parallelism, run_parallel

__all__ = [
    'Reiterable',
    'choose',
    'head',
    'iter_all',
    'iter_parallel',
    'pick',
    'single_or_none',
    'tap',
    'traverse_option',
    'traverse_result',
    'unzip',
]


class Reiterable[T]:
    """An iterable that starts a fresh pass every time it is iterated.

    Wraps a generator function and its arguments. Nothing runs until
    iteration begins, and each `iter()` call re-runs the generator, so side
    effects are repeated rather than memoised.
    """

    __slots__ = ('_args', '_factory')

    def __init__(self, factory: Callable[..., Iterator[T]], *args: object) -> None:
        self._factory = factory
        self._args = args

    def __iter__(self) -> Iterator[T]:
        return self._factory(*self._args)


_MISSING = object()


def _check(cancellation: CancellationToken | None) -> None:
    if cancellation is not None:
        cancellation.raise_if_cancelled()


def head[T](source: Iterable[T]) -> Some[T] | NothingType:
    """Return the first element, pulling nothing beyond it.

    Safe on infinite iterators.
    """
    for item in source:
        return Some(item)
    return Nothing


def single_or_none[T](source: Iterable[T]) -> Some[T] | NothingType:
    """Return Some(x) if the source holds exactly one element, else Nothing.

    Pulls at most two elements.
    """
    iterator = iter(source)
    first = next(iterator, _MISSING)
    if first is _MISSING or next(iterator, _MISSING) is not _MISSING:
        return Nothing
    return Some(first)  # type: ignore[arg-type]


def _choose[T, U](source: Iterable[T], selector: Callable[[T], Option[U]]) -> Iterator[U]:
    for item in source:
        match selector(item):
            case Some(value):
                yield value


def choose[T, U](source: Iterable[T], selector: Callable[[T], Option[U]]) -> Reiterable[U]:
    """Filter and map in one pass, keeping the values where selector returns Some.

    Args:
        source: Elements to scan.
        selector: Returns Some(value) to keep value, Nothing to drop the element.

    Returns:
        A lazy view over the kept values, in source order.
    """
    return Reiterable(_choose, source, selector)


def pick[T, U](source: Iterable[T], selector: Callable[[T], Option[U]]) -> Some[U] | NothingType:
    """Return the first Some produced by selector.

    The selector is not called on any element after the first match.

    Returns:
        The first Some, or Nothing if no element (or no element at all) matches.
    """
    for item in source:
        option = selector(item)
        if option.is_some():
            return option
    return Nothing


def traverse_result[T, U](
    source: Iterable[T],
    selector: Callable[[T], Success[U] | Failure],
    *,
    cancellation: CancellationToken | None = None,
) -> Success[tuple[U, ...]] | Failure:
    """Apply a Result-returning selector to every element and gather the outcome.

    Unlike `traverse_option`, this never stops early: every element is
    evaluated so that all failures are reported together, which is what
    validation code wants.

    Args:
        source: Elements to validate or transform.
        selector: Returns Success(value) or Failure(error) per element.
        cancellation: Checked before each element.

    Returns:
        Success(tuple of values) if every element succeeded, otherwise a
        Failure whose error is the `+` of every element error in source order.

    Raises:
        CancelledError: If the token is cancelled mid-traversal.

    Example:
        ```python
        traverse_result([1, 2, 3], success)  # Success(value=(1, 2, 3))
        traverse_result(['1', 'x', 'y'], parse)  # Failure with both messages
        ```
    """
    values: list[U] = []
    errors: list[Error] = []

    def collect(item: T) -> None:
        match selector(item):
            case Success(value):
                values.append(value)
            case Failure(error):
                errors.append(error)

    iter_all(source, collect, cancellation=cancellation)

    if errors:
        return Failure(functools.reduce(lambda first, second: first + second, errors))
    return Success(tuple(values))


def traverse_option[T, U](
    source: Iterable[T],
    selector: Callable[[T], Option[U]],
    *,
    cancellation: CancellationToken | None = None,
) -> Some[tuple[U, ...]] | NothingType:
    """Apply an Option-returning selector to every element, stopping at the first Nothing.

    Returns:
        Some(tuple of values) if every element produced Some, otherwise Nothing.

    Raises:
        CancelledError: If the token is cancelled mid-traversal.
    """
    values: list[U] = []
    for item in source:
        _check(cancellation)
        match selector(item):
            case Some(value):
                values.append(value)
            case _:
                return Nothing
    return Some(tuple(values))


def unzip[A, B](pairs: Iterable[tuple[A, B]]) -> tuple[tuple[A, ...], tuple[B, ...]]:
    """Split an iterable of pairs into two tuples of equal length.

    Example:
        ```python
        unzip([(1, 'a'), (2, 'b')])  # ((1, 2), ('a', 'b'))
        ```
    """
    firsts: list[A] = []
    seconds: list[B] = []
    for first, second in pairs:
        firsts.append(first)
        seconds.append(second)
    return tuple(firsts), tuple(seconds)


def iter_all[T](
    source: Iterable[T],
    action: Callable[[T], object],
    *,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run a side-effecting action on each element, in order.

    Raises:
        CancelledError: If the token is cancelled; no further element is processed.
    """
    for item in source:
        _check(cancellation)
        action(item)


def iter_parallel[T](
    source: Iterable[T],
    action: Callable[[T], object],
    *,
    max_degree_of_parallelism: Option[int] | int = Nothing,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run a side-effecting action on each element in worker threads.

    At most `max_degree_of_parallelism` actions run at once; Nothing uses
    the configured default (see `fp_common.runtime.init`). Completion order
    is not guaranteed. Blocks until all dispatched actions have finished.

    This starts its own event loop, so it must not be called from a
    coroutine; use `async_iter_parallel` there instead.

    Args:
        source: Elements to process.
        action: Synchronous callable; shared state it touches must be thread-safe.
        max_degree_of_parallelism: Optional cap on concurrent actions.
        cancellation: Polled before each dispatch.

    Raises:
        Exception: The first exception raised by an action; nothing new is
            dispatched after it.
        CancelledError: If the token was cancelled before the source was drained.
        ValueError: If the cap is smaller than 1.
    """
    workers = resolve_parallelism(max_degree_of_parallelism)
    anyio.run(
        functools.partial(
            run_parallel,
            source,
            action,
            workers=workers,
            cancellation=cancellation,
            in_thread=True,
        )
    )


def _tap[T](source: Iterable[T], action: Callable[[T], object]) -> Iterator[T]:
    for item in source:
        action(item)
        yield item


def tap[T](source: Iterable[T], action: Callable[[T], object]) -> Reiterable[T]:
    """Pass elements through unchanged, running action on each as it is consumed.

    Handy for logging or counting without disturbing a pipeline. The action
    runs again on every iteration of the returned view.
    """
    return Reiterable(_tap, source, action)
