#!/usr/bin/env python3
"""
Remote Transaction Gateway

Stateless async client for the moneyboard HTTP API. Each method maps one
domain operation onto one HTTP call, attaches the session's bearer
credential and translates transport and HTTP failures into the
GatewayError taxonomy.

Transactions are returned raw (as the server sent them); normalizing them
is the canonicalizer's job, not the gateway's.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..core.config import get_config
from ..core.models import Account, AccountType, Category, TransactionFormData
from ..core.money import Money
from .cancellation import CancellationToken
from .errors import (
    AuthorizationError,
    GatewayConnectionError,
    GatewayError,
    GatewayTimeoutError,
    MalformedRecordError,
    ServerError,
)
from .session import Session

logger = logging.getLogger(__name__)

TRANSACTIONS_PATH = "/api/transactions"
CATEGORY_PATH = "/api/category"
ACCOUNT_PATH = "/api/account"
LOGIN_PATH = "/api/auth/login"
REGISTER_PATH = "/api/auth/register"
ANALYZE_PATH = "/api/Analyze/ask-ia"

# Keys the server uses for a human-readable failure reason
_MESSAGE_KEYS = ("error", "message", "detail", "title")

# Keys an analysis answer may be wrapped in
_ANSWER_KEYS = ("resposta", "response", "answer", "message")


@dataclass
class AuthResponse:
    """Credential and profile returned by login and register."""

    token: str
    name: str
    email: str


def extract_server_message(response: httpx.Response) -> str | None:
    """
    Pull the server's own error message out of a failed response.

    Accepts a JSON object with an ``error``/``message``/``detail``/``title``
    key, a bare JSON string, or short plain text.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text if text and len(text) <= 500 else None

    if isinstance(body, str):
        return body or None
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _extract_id(body: Any, operation: str) -> str:
    """Creation endpoints answer with the new id, bare or wrapped."""
    if isinstance(body, (str, int)) and str(body):
        return str(body)
    if isinstance(body, dict):
        for key in ("id", "Id", "ID"):
            if body.get(key):
                return str(body[key])
    raise MalformedRecordError(f"{operation}: response did not contain an id")


def _extract_list(body: Any, operation: str, *keys: str) -> list[dict[str, Any]]:
    """Accept a bare JSON array or an object wrapping one."""
    if isinstance(body, list):
        items = body
    elif isinstance(body, dict):
        for key in (*keys, "data", "items"):
            if isinstance(body.get(key), list):
                items = body[key]
                break
        else:
            raise MalformedRecordError(f"{operation}: expected a list, got an object")
    else:
        raise MalformedRecordError(f"{operation}: expected a list, got {type(body).__name__}")

    for item in items:
        if not isinstance(item, dict):
            raise MalformedRecordError(f"{operation}: expected objects, got {type(item).__name__}")
    return items


class TransactionGateway:
    """
    Async HTTP client for the remote API.

    The gateway holds a reference to the Session; it reads the credential on
    every call and invalidates the session when the server answers 401.

    Example:
        session = Session()
        async with TransactionGateway(session) as gateway:
            await gateway.login("me@example.com", "secret")
            raw = await gateway.list_transactions()
    """

    def __init__(
        self,
        session: Session,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None or timeout is None:
            api_config = get_config().api
            base_url = base_url or api_config.base_url
            timeout = timeout if timeout is not None else api_config.timeout

        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "TransactionGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: Any = None,
        authenticated: bool = True,
        cancel_token: CancellationToken | None = None,
    ) -> httpx.Response:
        """Send one request and map every failure to a GatewayError."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(operation)

        headers: dict[str, str] = {}
        if authenticated:
            if not self.session.is_authenticated:
                raise AuthorizationError(f"{operation}: not authenticated")
            headers.update(self.session.authorization_header())

        logger.debug("%s %s (%s)", method, path, operation)

        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("%s timed out after %.1fs", operation, self.timeout)
            raise GatewayTimeoutError(f"{operation} timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            logger.warning("%s failed: %s", operation, e)
            raise GatewayConnectionError(f"{operation} failed: {e}") from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            server_message = extract_server_message(response)
            if authenticated:
                self.session.invalidate("unauthorized")
            raise AuthorizationError(f"{operation}: unauthorized", 401, server_message)

        if not response.is_success:
            server_message = extract_server_message(response)
            logger.warning("%s failed with HTTP %d: %s", operation, response.status_code, server_message)
            raise ServerError(
                f"{operation} failed with HTTP {response.status_code}",
                response.status_code,
                server_message,
            )

        return response

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedRecordError(f"{operation}: response is not valid JSON") from e

    # Authentication

    async def _authenticate(self, path: str, body: dict[str, Any], operation: str) -> AuthResponse:
        response = await self._request("POST", path, operation, json=body, authenticated=False)
        data = self._json(response, operation)
        if not isinstance(data, dict) or not data.get("token"):
            raise MalformedRecordError(f"{operation}: response did not contain a token")

        auth = AuthResponse(token=data["token"], name=data.get("name", ""), email=data.get("email", ""))
        self.session.authenticate(auth.token, auth.name, auth.email)
        return auth

    async def login(self, email: str, password: str) -> AuthResponse:
        """Exchange credentials for a token and store it in the session."""
        return await self._authenticate(LOGIN_PATH, {"email": email, "password": password}, "login")

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        """Create an account and store the issued token in the session."""
        return await self._authenticate(
            REGISTER_PATH, {"name": name, "email": email, "password": password}, "register"
        )

    async def validate_session(self, cancel_token: CancellationToken | None = None) -> bool:
        """
        Check the stored credential against the server.

        Returns False (never raises) for any failure; a 401 also ends the
        session.
        """
        if not self.session.is_authenticated:
            return False
        try:
            await self._request("GET", TRANSACTIONS_PATH, "validate session", cancel_token=cancel_token)
        except GatewayError as e:
            logger.info("Session validation failed: %s", e)
            return False
        return True

    # Transactions

    async def list_transactions(self, cancel_token: CancellationToken | None = None) -> list[dict[str, Any]]:
        """Fetch every transaction as raw server records."""
        response = await self._request("GET", TRANSACTIONS_PATH, "list transactions", cancel_token=cancel_token)
        return _extract_list(self._json(response, "list transactions"), "list transactions", "transactions")

    async def create_transaction(
        self, data: TransactionFormData, cancel_token: CancellationToken | None = None
    ) -> dict[str, Any] | None:
        """Create a transaction; returns the server's record if it sent one."""
        response = await self._request(
            "POST", TRANSACTIONS_PATH, "create transaction", json=data.to_payload(), cancel_token=cancel_token
        )
        return self._json(response, "create transaction")

    async def update_transaction(
        self, transaction_id: str, data: TransactionFormData, cancel_token: CancellationToken | None = None
    ) -> dict[str, Any] | None:
        """Replace a transaction; returns the server's record if it sent one."""
        response = await self._request(
            "PUT",
            f"{TRANSACTIONS_PATH}/{transaction_id}",
            "update transaction",
            json=data.to_payload(),
            cancel_token=cancel_token,
        )
        return self._json(response, "update transaction")

    async def delete_transaction(self, transaction_id: str, cancel_token: CancellationToken | None = None) -> None:
        await self._request(
            "DELETE", f"{TRANSACTIONS_PATH}/{transaction_id}", "delete transaction", cancel_token=cancel_token
        )

    # Categories

    async def list_categories(self, cancel_token: CancellationToken | None = None) -> list[Category]:
        response = await self._request("GET", CATEGORY_PATH, "list categories", cancel_token=cancel_token)
        records = _extract_list(self._json(response, "list categories"), "list categories", "categories")
        return [Category.from_dict(record) for record in records]

    async def create_category(self, category_name: str, cancel_token: CancellationToken | None = None) -> str:
        """Create a category and return its server-assigned id."""
        response = await self._request(
            "POST",
            CATEGORY_PATH,
            "create category",
            json={"categoryName": category_name},
            cancel_token=cancel_token,
        )
        return _extract_id(self._json(response, "create category"), "create category")

    # Accounts

    async def list_accounts(self, cancel_token: CancellationToken | None = None) -> list[Account]:
        response = await self._request("GET", ACCOUNT_PATH, "list accounts", cancel_token=cancel_token)
        records = _extract_list(self._json(response, "list accounts"), "list accounts", "accounts")
        return [Account.from_dict(record) for record in records]

    async def create_account(
        self,
        name: str,
        initial_balance: Money,
        account_type: AccountType,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Create an account and return its server-assigned id."""
        body = {"name": name, "initialBalance": initial_balance.to_float(), "type": account_type.value}
        response = await self._request("POST", ACCOUNT_PATH, "create account", json=body, cancel_token=cancel_token)
        return _extract_id(self._json(response, "create account"), "create account")

    # Analysis

    async def ask_ai(self, prompt: str, cancel_token: CancellationToken | None = None) -> str:
        """
        Ask the server's analysis assistant a question about the user's finances.

        The prompt is sent as a bare JSON string. The answer may come back as
        a JSON string or wrapped in an object (``resposta``/``response``/
        ``answer``/``message``).

        Raises:
            ValueError: If ``prompt`` is blank (nothing is sent)
            MalformedRecordError: If the response carries no answer text
            GatewayError: On any remote failure
        """
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Prompt is required")

        response = await self._request(
            "POST", ANALYZE_PATH, "ask assistant", json=prompt, cancel_token=cancel_token
        )
        body = self._json(response, "ask assistant")

        if isinstance(body, str):
            return body
        if isinstance(body, dict):
            for key in _ANSWER_KEYS:
                if isinstance(body.get(key), str):
                    return body[key]
        raise MalformedRecordError("ask assistant: response did not contain an answer")
