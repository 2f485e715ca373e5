"""Result type: Success[T] | Failure for explicit error handling.

The error channel always carries an `Error`, so failures from different
sources combine with `+` and convert to exceptions in one place
(`Error.to_exception`).

Example:
    ```python
    from fp_common import Error, failure, success

    def parse_port(raw: str) -> Result[int]:
        if not raw.isdigit():
            return failure(f'Not a number: {raw!r}')
        return success(int(raw))

    parse_port('8080').map(lambda port: port + 1)  # Success(value=8081)
    parse_port('http').if_error(lambda _: 80)  # 80
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, NoReturn, TypeIs

import msgspec

from fp_common.error import Error, ErrorLike

if TYPE_CHECKING:
    from fp_common.option import NothingType, Some

__all__ = ['Failure', 'Result', 'Success', 'failure', 'success']


class Success[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Success(42).map(lambda x: x * 2)
        Success(value=84)
        >>> Success(42).to_option()
        Some(value=42)
    """

    value: T

    def is_success(self) -> TypeIs[Success[T]]:
        """Return True since this is Success."""
        return True

    def is_error(self) -> TypeIs[Failure]:
        """Return False since this is Success."""
        return False

    def match[U](self, on_success: Callable[[T], U], on_error: Callable[[Error], U]) -> U:  # noqa: ARG002
        """Case analysis: call `on_success` with the value."""
        return on_success(self.value)

    def map[U](self, f: Callable[[T], U]) -> Success[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Success value.

        Returns:
            Success containing the result of applying f to the value.
        """
        return Success(f(self.value))

    def map_error(self, _f: Callable[[Error], Error]) -> Success[T]:
        """Return self unchanged since this is Success."""
        return self

    def bind[U](self, f: Callable[[T], Success[U] | Failure]) -> Success[U] | Failure:
        """Apply a function that returns a Result to the contained value.

        Args:
            f: Function that takes T and returns Result[U].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    async def map_task[U](self, f: Callable[[T], Awaitable[U]]) -> Success[U]:
        """Await an async function on the contained value and wrap the outcome."""
        return Success(await f(self.value))

    async def bind_task[U](self, f: Callable[[T], Awaitable[Success[U] | Failure]]) -> Success[U] | Failure:
        """Await an async Result-returning function on the contained value."""
        return await f(self.value)

    def if_error(self, _f: Callable[[Error], T]) -> T:
        """Return the contained value; the fallback is never called."""
        return self.value

    def if_error_result(self, _f: Callable[[Error], Success[T] | Failure]) -> Success[T]:
        """Return self unchanged; the fallback is never called."""
        return self

    def if_error_raise(self) -> T:
        """Return the contained value."""
        return self.value

    def iter(self, action: Callable[[T], object]) -> None:
        """Run a side-effecting action with the contained value."""
        action(self.value)

    async def iter_task(self, action: Callable[[T], Awaitable[object]]) -> None:
        """Await an async side-effecting action with the contained value."""
        await action(self.value)

    def to_option(self) -> Some[T]:
        """Convert to Option, returning Some(value)."""
        from fp_common.option import Some

        return Some(self.value)


class Failure(msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result carrying an `Error`.

    Examples:
        >>> result = Failure(Error.from_messages('boom'))
        >>> result.is_error()
        True
        >>> result.if_error(lambda error: str(error))
        'boom'
    """

    error: Error

    def is_success(self) -> TypeIs[Success[object]]:
        """Return False since this is Failure."""
        return False

    def is_error(self) -> TypeIs[Failure]:
        """Return True since this is Failure."""
        return True

    def match[T, U](self, on_success: Callable[[T], U], on_error: Callable[[Error], U]) -> U:  # noqa: ARG002
        """Case analysis: call `on_error` with the error."""
        return on_error(self.error)

    def map[T, U](self, _f: Callable[[T], U]) -> Failure:
        """Return self unchanged since this is Failure."""
        return self

    def map_error(self, f: Callable[[Error], Error]) -> Failure:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error.

        Returns:
            Failure containing the transformed error.
        """
        return Failure(f(self.error))

    def bind[T, U](self, _f: Callable[[T], Success[U] | Failure]) -> Failure:
        """Return self unchanged since this is Failure."""
        return self

    async def map_task[T, U](self, _f: Callable[[T], Awaitable[U]]) -> Failure:
        """Return self unchanged since this is Failure."""
        return self

    async def bind_task[T, U](self, _f: Callable[[T], Awaitable[Success[U] | Failure]]) -> Failure:
        """Return self unchanged since this is Failure."""
        return self

    def if_error[T](self, f: Callable[[Error], T]) -> T:
        """Compute a fallback value from the error."""
        return f(self.error)

    def if_error_result[T](self, f: Callable[[Error], Success[T] | Failure]) -> Success[T] | Failure:
        """Recover by computing a new Result from the error."""
        return f(self.error)

    def if_error_raise(self) -> NoReturn:
        """Raise the exception derived from the error.

        Raises:
            BaseException: `self.error.to_exception()`, which is the original
                exception for an exceptional error, an `OperationFailedError`
                for a single message or an `ExceptionGroup` otherwise.
        """
        raise self.error.to_exception()

    def iter[T](self, _action: Callable[[T], object]) -> None:
        """Do nothing since there's no value."""

    async def iter_task[T](self, _action: Callable[[T], Awaitable[object]]) -> None:
        """Do nothing since there's no value."""

    def to_option(self) -> NothingType:
        """Convert to Option, discarding the error."""
        from fp_common.option import Nothing

        return Nothing


type Result[T] = Success[T] | Failure


def success[T](value: T) -> Success[T]:
    """Shortcut for `Success(value)`."""
    return Success(value)


def failure(error: ErrorLike) -> Failure:
    """Build a Failure from a message, an exception or an Error.

    Examples:
        >>> failure('boom') == Failure(Error.from_messages('boom'))
        True
    """
    return Failure(Error.of(error))
