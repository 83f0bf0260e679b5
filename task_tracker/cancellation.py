"""Cooperative cancellation for in-flight operations."""

from __future__ import annotations

from threading import Event, Timer
from typing import Optional

from task_tracker.exceptions import OperationCancelledError


class CancellationToken:
    """Signal shared between a caller and a running operation.

    The caller calls :meth:`cancel`; the operation checks the token with
    :meth:`raise_if_cancelled` before it starts work.
    """

    def __init__(self) -> None:
        self._event = Event()
        self._timer: Optional[Timer] = None

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        """Create a token that cancels itself after ``seconds``."""
        token = cls()
        if seconds <= 0:
            token.cancel()
            return token
        token._timer = Timer(seconds, token.cancel)
        token._timer.daemon = True
        token._timer.start()
        return token

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()

    def raise_if_cancelled(self, operation: Optional[str] = None) -> None:
        """Raise :class:`OperationCancelledError` if cancellation was requested."""
        if self._event.is_set():
            raise OperationCancelledError(operation)


def check_cancelled(token: Optional[CancellationToken], operation: Optional[str] = None) -> None:
    """Raise if ``token`` is set and cancelled; a missing token never cancels."""
    if token is not None:
        token.raise_if_cancelled(operation)
