"""Error type: an immutable set of messages, optionally backed by an exception."""

from __future__ import annotations

import msgspec

from fp_common.runtime.errors import OperationFailedError

__all__ = ['Error', 'ErrorLike', 'Exceptional']

type ErrorLike = str | BaseException | Error


class Error(msgspec.Struct, frozen=True):
    """An error carrying one or more human-readable messages.

    Messages form a set: order is irrelevant and duplicates collapse.
    Build instances through the factories rather than the constructor.

    Errors combine with `+`, which unions the message sets. The error with
    no messages is the identity element, so folding a list of errors with
    `+` starting from `Error.from_messages()` is always safe.

    Examples:
        >>> error = Error.from_messages('A') + Error.from_messages('B')
        >>> sorted(error.messages)
        ['A', 'B']
        >>> Error.from_messages() + error == error
        True
    """

    messages: frozenset[str]

    @classmethod
    def from_messages(cls, *messages: str) -> Error:
        """Create a plain error from zero or more messages."""
        return Error(frozenset(messages))

    @classmethod
    def from_exception(cls, exception: BaseException) -> Exceptional:
        """Create an error wrapping an exception.

        The message set holds exactly one entry, `str(exception)`.
        """
        return Exceptional(frozenset((str(exception),)), exception)

    @classmethod
    def of(cls, value: ErrorLike) -> Error:
        """Coerce a message, an exception or an existing error into an Error.

        Raises:
            TypeError: If value is none of the accepted kinds.
        """
        match value:
            case Error():
                return value
            case str():
                return cls.from_messages(value)
            case BaseException():
                return cls.from_exception(value)
            case _:
                raise TypeError(f'Cannot build an Error from {type(value).__name__}: {value!r}')

    def to_exception(self) -> BaseException:
        """Translate the error into an exception for raise-based code.

        A single message becomes an `OperationFailedError`; several messages
        become an `ExceptionGroup` holding one `OperationFailedError` per
        message, sorted by message.
        """
        match sorted(self.messages):
            case [message]:
                return OperationFailedError(message)
            case []:
                return OperationFailedError('Operation failed')
            case messages:
                return ExceptionGroup(
                    f'{len(messages)} errors occurred',
                    [OperationFailedError(message) for message in messages],
                )

    def __add__(self, other: Error) -> Error:
        if not isinstance(other, Error):
            return NotImplemented
        if not self.messages:
            return other
        if not other.messages:
            return self
        return Error(self.messages | other.messages)

    def __str__(self) -> str:
        return '; '.join(sorted(self.messages))


class Exceptional(Error, frozen=True):
    """Error wrapping an exception.

    Two exceptional errors are equal only when they wrap the same exception;
    sharing a message is not enough. `to_exception()` hands back the original
    exception object. Combining with another non-empty error via `+` keeps
    the messages but drops the exception.
    """

    exception: BaseException

    def to_exception(self) -> BaseException:
        """Return the wrapped exception unchanged."""
        return self.exception
