"""
Remote API Package

Async gateway to the moneyboard HTTP API, the Session that owns the bearer
credential, cancellation tokens and the gateway error taxonomy.
"""

from .cancellation import CancellationToken, is_cancelled
from .errors import (
    AuthorizationError,
    GatewayConnectionError,
    GatewayError,
    GatewayTimeoutError,
    MalformedRecordError,
    OperationCancelledError,
    ServerError,
)
from .gateway import AuthResponse, TransactionGateway, extract_server_message
from .session import Session

__all__ = [
    "AuthResponse",
    "AuthorizationError",
    "CancellationToken",
    "GatewayConnectionError",
    "GatewayError",
    "GatewayTimeoutError",
    "MalformedRecordError",
    "OperationCancelledError",
    "ServerError",
    "Session",
    "TransactionGateway",
    "extract_server_message",
    "is_cancelled",
]
