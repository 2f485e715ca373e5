"""Option type: Some[T] | Nothing for optional values."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

from fp_common._internal import ExceptionSource, build_exception

if TYPE_CHECKING:
    from fp_common.error import ErrorLike
    from fp_common.result import Failure, Success

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'from_optional']


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. It wraps a value that can be
    transformed, filtered, or extracted through a chain of Option-returning
    operations. `Some(None)` is a legitimate Some; use `from_optional` to
    treat Python's `None` as absence.

    Examples:
        >>> Some(21).map(lambda x: x * 2)
        Some(value=42)
        >>> Some(3).where(lambda x: x > 5)
        NothingType()
        >>> Some(42).if_none(lambda: 0)
        42
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def match[U](self, some: Callable[[T], U], none: Callable[[], U]) -> U:
        """Case analysis: call `some` with the value.

        Args:
            some: Called with the contained value.
            none: Ignored for Some.

        Returns:
            Whatever `some` returns.
        """
        return some(self.value)

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def bind[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or and_then.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def where(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Keep the value only if it satisfies the predicate.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def if_none(self, _f: Callable[[], T]) -> T:
        """Return the contained value; the fallback is never called."""
        return self.value

    def if_none_option(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        """Return self unchanged; the fallback is never called."""
        return self

    def if_none_raise(self, _exception: ExceptionSource) -> T:
        """Return the contained value; the exception is never built."""
        return self.value

    def iter(self, action: Callable[[T], object]) -> None:
        """Run a side-effecting action with the contained value."""
        action(self.value)

    async def iter_task(self, action: Callable[[T], Awaitable[object]]) -> None:
        """Await an async side-effecting action with the contained value."""
        await action(self.value)

    def to_optional(self) -> T:
        """Return the contained value (the `None`-based escape hatch)."""
        return self.value

    def to_result(self, _error: Callable[[], ErrorLike]) -> Success[T]:
        """Convert to Result, returning Success(value).

        Args:
            _error: Ignored error factory.

        Returns:
            Success containing the value.
        """
        from fp_common.result import Success

        return Success(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Every operation on Nothing returns Nothing or evaluates the supplied
    fallback. Fallbacks are zero-argument callables, so they are evaluated
    only here and never for Some.

    This is a singleton - use the `Nothing` constant instead of
    instantiating directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.if_none(lambda: 0)
        0
    """

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def match[T, U](self, some: Callable[[T], U], none: Callable[[], U]) -> U:  # noqa: ARG002
        """Case analysis: call `none`."""
        return none()

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def bind[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def where[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def if_none[T](self, f: Callable[[], T]) -> T:
        """Compute and return a fallback value since this is Nothing."""
        return f()

    def if_none_option[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Compute and return a fallback Option since this is Nothing."""
        return f()

    def if_none_raise(self, exception: ExceptionSource) -> NoReturn:
        """Raise the given exception, or the one built by the given factory.

        Args:
            exception: An exception instance or a zero-argument factory.

        Raises:
            BaseException: Always.
        """
        raise build_exception(exception)

    def iter[T](self, _action: Callable[[T], object]) -> None:
        """Do nothing since there's no value."""

    async def iter_task[T](self, _action: Callable[[T], Awaitable[object]]) -> None:
        """Do nothing since there's no value."""

    def to_optional(self) -> None:
        """Return `None`."""
        return None

    def to_result(self, error: Callable[[], ErrorLike]) -> Failure:
        """Convert to Result, computing the error.

        Args:
            error: Factory producing a message, exception or Error.

        Returns:
            Failure containing the computed error.
        """
        from fp_common.error import Error
        from fp_common.result import Failure

        return Failure(Error.of(error()))

    def __str__(self) -> str:
        return 'None'


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def from_optional[T](value: T | None) -> Some[T] | NothingType:
    """Lift a `None`-able value into an Option.

    Examples:
        >>> from_optional(None)
        NothingType()
        >>> from_optional(0)
        Some(value=0)
    """
    if value is None:
        return Nothing
    return Some(value)
