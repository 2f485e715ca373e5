"""@do and @do_async decorators for generator-based query syntax.

Inside a decorated generator, `x = yield container` binds the value held by
a Some, Success or Right to `x`. Yielding Nothing, a Failure or a Left
stops the block and returns that container unchanged. The generator's
return value is lifted into the success variant of the family it yielded
(Some, Success or Right); a block that yields no container lifts into
Success. Yielding plain values is allowed and sends them straight back.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any

import wrapt

from fp_common.either import Left, Right
from fp_common.option import NothingType, Some
from fp_common.result import Failure, Success
from fp_common.unit import unit

__all__ = ['do', 'do_async']

type _Container = Some[Any] | NothingType | Success[Any] | Failure | Right[Any] | Left[Any]

_SHORT_CIRCUIT = (NothingType, Failure, Left)
_HOLDS_VALUE = (Some, Success, Right)
_FAMILIES: dict[type, type] = {
    Some: Some,
    NothingType: Some,
    Success: Success,
    Failure: Success,
    Right: Right,
    Left: Right,
}


class _Binder:
    """Tracks which container family a single run of a do-block uses."""

    __slots__ = ('lift',)

    def __init__(self) -> None:
        self.lift: type | None = None

    def join(self, yielded: object) -> None:
        family = _FAMILIES.get(type(yielded))
        if family is None:
            return
        if self.lift is None:
            self.lift = family
        elif self.lift is not family:
            msg = f'cannot mix {self.lift.__name__} and {family.__name__} containers in one do-block'
            raise TypeError(msg)

    def wrap(self, value: object) -> Any:
        return (self.lift or Success)(value)


def _unwrap(yielded: object) -> object:
    return yielded.value if isinstance(yielded, _HOLDS_VALUE) else yielded


def do[**P, T](
    func: Callable[P, Generator[_Container, Any, T]],
) -> Callable[P, Any]:
    """Decorator for generator-based query syntax over Option, Result and Either.

    Args:
        func: A generator function that yields containers and returns the
            final plain value.

    Returns:
        A function that returns the lifted final value, or the first
        Nothing, Failure or Left the generator yielded.

    Raises:
        TypeError: If one run yields containers of different families.

    Example:
        ```python
        @do
        def total(prices: dict[str, int]) -> Generator[Option[int], int, int]:
            apple = yield find(prices, 'apple')   # Nothing stops the block
            pear = yield find(prices, 'pear')
            return apple + pear

        total({'apple': 2, 'pear': 3})  # Some(value=5)
        total({'apple': 2})  # Nothing
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Generator[_Container, Any, T]],
        instance: Any,  # noqa: ARG001
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        gen = wrapped(*args, **kwargs)
        binder = _Binder()
        try:
            yielded = next(gen)
            while True:
                binder.join(yielded)
                if isinstance(yielded, _SHORT_CIRCUIT):
                    return yielded
                yielded = gen.send(_unwrap(yielded))
        except StopIteration as stop:
            return binder.wrap(stop.value)
        finally:
            gen.close()

    return wrapper(func)


def do_async[**P](
    func: Callable[P, AsyncGenerator[_Container, Any]],
) -> Callable[P, Any]:
    """Async decorator for generator-based query syntax.

    Async generators cannot return a value, so the last Some, Success or
    Right yielded is the result. A block that yields no such container
    returns the success variant of its family holding `unit`.

    Example:
        ```python
        @do_async
        async def profile(user_id: int):
            user = yield await fetch_user(user_id)
            avatar = yield await fetch_avatar(user)
            yield Success((user, avatar))
        ```
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, AsyncGenerator[_Container, Any]],
        instance: Any,  # noqa: ARG001
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        gen = wrapped(*args, **kwargs)
        binder = _Binder()
        last: object | None = None
        try:
            yielded = await gen.asend(None)
            while True:
                binder.join(yielded)
                if isinstance(yielded, _SHORT_CIRCUIT):
                    return yielded
                if isinstance(yielded, _HOLDS_VALUE):
                    last = yielded
                yielded = await gen.asend(_unwrap(yielded))
        except StopAsyncIteration:
            return last if last is not None else binder.wrap(unit)
        finally:
            await gen.aclose()

    return wrapper(func)
