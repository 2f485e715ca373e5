"""Runtime error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'Cancelled',
    'CancelledError',
    'OperationFailedError',
]


class OperationFailedError(Exception):
    """Generic failure raised when an `Error` crosses into raise-based code.

    `Error.to_exception()` produces one of these per message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# --- Cancellation ---


class Cancelled(msgspec.Struct, frozen=True, gc=False):
    """Operation was cancelled - struct variant."""

    reason: str | None = None

    def to_exception(self) -> CancelledError:
        """Convert to exception for raise-based code."""
        return CancelledError(self.reason)


class CancelledError(Exception):
    """Operation was cancelled - exception variant.

    Raised by iteration helpers once a `CancellationToken` is observed as
    cancelled. It is a plain `Exception` so it never interferes with the
    event loop's own cancellation machinery.
    """

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or 'Operation cancelled')

    def to_struct(self) -> Cancelled:
        """Convert to struct for Result-based code."""
        return Cancelled(self.reason)
