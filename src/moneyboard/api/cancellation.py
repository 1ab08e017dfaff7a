#!/usr/bin/env python3
"""
Cancellation Tokens

A CancellationToken lets a caller say "I no longer care about this result".
Requests that have not been sent yet are not sent; requests already in
flight still run to completion and their results are still applied to
shared state, but the caller is no longer notified about them.
"""

from collections.abc import Callable

from .errors import OperationCancelledError


class CancellationToken:
    """Cooperative, one-way cancellation flag."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark the token cancelled. Calling it again has no effect."""
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation (immediately if already cancelled)."""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def raise_if_cancelled(self, operation: str) -> None:
        if self._cancelled:
            raise OperationCancelledError(f"{operation} cancelled before dispatch")


def is_cancelled(token: CancellationToken | None) -> bool:
    """True if a token was given and has been cancelled."""
    return token is not None and token.cancelled
