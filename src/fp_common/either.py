"""Either type: Left[L] | Right[R].

Both sides are first-class; by convention `map` and `bind` act on Right and
pass Left through untouched.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import NoReturn, TypeIs

import msgspec

from fp_common._internal import ExceptionSource, build_exception

__all__ = ['Either', 'Left', 'Right']


class Left[L](msgspec.Struct, frozen=True, gc=False):
    """Left variant of Either.

    Examples:
        >>> Left('missing').map(lambda x: x + 1)
        Left(value='missing')
        >>> Left('missing').if_left(len)
        7
    """

    value: L

    def is_left(self) -> TypeIs[Left[L]]:
        return True

    def is_right(self) -> TypeIs[Right[object]]:
        return False

    def match[U](self, on_left: Callable[[L], U], on_right: Callable[[object], U]) -> U:  # noqa: ARG002
        """Case analysis: call `on_left` with the value."""
        return on_left(self.value)

    def map[R, U](self, _f: Callable[[R], U]) -> Left[L]:
        return self

    def bind[R, U](self, _f: Callable[[R], Left[L] | Right[U]]) -> Left[L]:
        return self

    def if_left[R](self, f: Callable[[L], R]) -> R:
        """Collapse to the right type by converting the left value."""
        return f(self.value)

    def if_right(self, _f: Callable[[object], L]) -> L:
        return self.value

    def if_left_raise(self, exception: ExceptionSource) -> NoReturn:
        """Raise the given exception (or the one its factory builds)."""
        raise build_exception(exception)

    def if_right_raise(self, _exception: ExceptionSource) -> L:
        return self.value

    def iter[R](self, _action: Callable[[R], object]) -> None:
        """Do nothing; actions only run on Right."""

    async def iter_task[R](self, _action: Callable[[R], Awaitable[object]]) -> None:
        """Do nothing; actions only run on Right."""


class Right[R](msgspec.Struct, frozen=True, gc=False):
    """Right variant of Either.

    Examples:
        >>> Right(2).map(lambda x: x + 1)
        Right(value=3)
        >>> Right(2).bind(lambda x: Left('too small') if x < 5 else Right(x))
        Left(value='too small')
    """

    value: R

    def is_left(self) -> TypeIs[Left[object]]:
        return False

    def is_right(self) -> TypeIs[Right[R]]:
        return True

    def match[U](self, on_left: Callable[[object], U], on_right: Callable[[R], U]) -> U:  # noqa: ARG002
        """Case analysis: call `on_right` with the value."""
        return on_right(self.value)

    def map[U](self, f: Callable[[R], U]) -> Right[U]:
        """Apply a function to the right value."""
        return Right(f(self.value))

    def bind[L, U](self, f: Callable[[R], Left[L] | Right[U]]) -> Left[L] | Right[U]:
        """Apply an Either-returning function to the right value."""
        return f(self.value)

    def if_left(self, _f: Callable[[object], R]) -> R:
        return self.value

    def if_right[L](self, f: Callable[[R], L]) -> L:
        """Collapse to the left type by converting the right value."""
        return f(self.value)

    def if_left_raise(self, _exception: ExceptionSource) -> R:
        return self.value

    def if_right_raise(self, exception: ExceptionSource) -> NoReturn:
        """Raise the given exception (or the one its factory builds)."""
        raise build_exception(exception)

    def iter(self, action: Callable[[R], object]) -> None:
        """Run a side-effecting action with the right value."""
        action(self.value)

    async def iter_task(self, action: Callable[[R], Awaitable[object]]) -> None:
        """Await an async side-effecting action with the right value."""
        await action(self.value)


type Either[L, R] = Left[L] | Right[R]
