"""Cooperative cancellation shared between threads and coroutines."""

from __future__ import annotations

import aiologic

from fp_common.runtime.errors import CancelledError

__all__ = ['CancellationToken']


class CancellationToken:
    """A one-shot cancellation flag.

    Iteration helpers poll the token before pulling or dispatching each
    element and raise `CancelledError` once it is set. Work that is already
    running is never interrupted; actions that want to stop early can check
    the token themselves. Backed by `aiologic.Event`, so `cancel()` may be
    called from any thread while coroutines `await token.wait()`.

    Example:
        ```python
        token = CancellationToken()

        def action(item):
            if item == 'stop':
                token.cancel('stop marker reached')

        iter_all(items, action, cancellation=token)  # raises CancelledError
        ```
    """

    __slots__ = ('_event', '_reason')

    def __init__(self) -> None:
        self._event = aiologic.Event()
        self._reason: str | None = None

    @classmethod
    def none(cls) -> CancellationToken:
        """Return a fresh token that nobody holds, so it is never cancelled."""
        return cls()

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Later calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if cancellation was requested.

        Raises:
            CancelledError: If cancel() has been called.
        """
        if self._event.is_set():
            raise CancelledError(self._reason)

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        await self._event

    def __repr__(self) -> str:
        state = 'cancelled' if self.is_cancelled else 'active'
        return f'CancellationToken({state})'
