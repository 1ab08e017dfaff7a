#!/usr/bin/env python3
"""
Gateway Error Taxonomy

Every failure crossing the HTTP boundary is reported as a GatewayError
subclass so callers can branch on the kind of failure without inspecting
httpx types.
"""


class GatewayError(Exception):
    """
    Base class for remote API failures.

    Attributes:
        status_code: HTTP status, when a response was received
        server_message: Message supplied by the server, shown verbatim to users
        retryable: Whether repeating the same call may succeed
    """

    retryable = False

    def __init__(self, message: str, status_code: int | None = None, server_message: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message

    def user_message(self, fallback: str) -> str:
        """The server's own message if it sent one, otherwise the fallback."""
        return self.server_message or fallback


class AuthorizationError(GatewayError):
    """The server rejected the credential (HTTP 401); the session has ended."""


class ServerError(GatewayError):
    """Any other non-success HTTP response, including validation failures."""

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code is not None and self.status_code >= 500


class GatewayTimeoutError(GatewayError):
    """The request did not complete within the configured timeout."""

    retryable = True


class GatewayConnectionError(GatewayError):
    """The request could not be delivered (DNS, refused connection, reset)."""

    retryable = True


class MalformedRecordError(GatewayError):
    """A record returned by the server cannot be canonicalized."""


class OperationCancelledError(GatewayError):
    """The caller cancelled the operation before it was dispatched."""
