"""Cooperative cancellation for store operations.

A token is checked once when an operation is entered. It can be cancelled
explicitly or carry a deadline on the monotonic clock.
"""

import time

from custom_identity.exceptions import OperationCancelledError


class CancellationToken:
    """Cancellation signal shared between a caller and the store."""

    def __init__(self, deadline: float | None = None):
        self._cancelled = False
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that counts as cancelled after ``seconds``."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def is_cancellation_requested(self) -> bool:
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def cancel(self) -> None:
        self._cancelled = True

    def raise_if_cancellation_requested(self) -> None:
        if self.is_cancellation_requested:
            raise OperationCancelledError()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancellation_requested})"
