#!/usr/bin/env python3
"""
Session State

The Session owns the bearer credential. It is created once by the
application, handed to the gateway at construction time and is the only
place the credential is stored or cleared.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Session:
    """
    Authenticated user session.

    Listeners registered with ``on_invalidate`` are called whenever an
    authenticated session is ended, either by ``logout`` or because the
    server rejected the credential.
    """

    def __init__(self, token: str | None = None, user_name: str | None = None, user_email: str | None = None):
        self.token = token or None
        self.user_name = user_name
        self.user_email = user_email
        self._listeners: list[Callable[["Session"], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def authenticate(self, token: str, user_name: str | None = None, user_email: str | None = None) -> None:
        """Store a freshly issued credential."""
        if not token:
            raise ValueError("Cannot authenticate with an empty token")
        self.token = token
        self.user_name = user_name
        self.user_email = user_email
        logger.info("Session authenticated for %s", user_email or user_name or "unknown user")

    def invalidate(self, reason: str = "logout") -> None:
        """
        Discard the credential and notify listeners.

        Invalidating a session that is already unauthenticated does nothing,
        so concurrent 401 responses end the session exactly once.
        """
        if not self.is_authenticated:
            return

        self.token = None
        self.user_name = None
        self.user_email = None
        logger.info("Session invalidated (%s)", reason)

        for listener in list(self._listeners):
            listener(self)

    def logout(self) -> None:
        self.invalidate("logout")

    def on_invalidate(self, listener: Callable[["Session"], None]) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def authorization_header(self) -> dict[str, str]:
        """Headers to attach to an authenticated request."""
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        state = "authenticated" if self.is_authenticated else "anonymous"
        return f"Session({state}, user={self.user_name!r})"
