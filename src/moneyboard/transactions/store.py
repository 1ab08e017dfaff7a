#!/usr/bin/env python3
"""
Transaction Store

Owns the authoritative in-memory transaction collection together with its
loading and error state, and drives create/update/delete round-trips
through the gateway.

Consistency model:
- The server is the single source of truth. Every successful mutation is
  followed by a full reload; the collection is never patched locally.
- Overlapping fetches are not deduplicated. Whichever response resolves
  last replaces the collection (last-write-wins). The store is not the
  system of record, so a stale window lasts at most until the next fetch.
- Mutations are not queued or locked against each other; callers disable
  duplicate submission of the same action themselves.
- A cancelled CancellationToken stops notifications to that caller, but a
  request that was already dispatched still completes and its result is
  still applied to the shared collection.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from ..analysis.aggregation import compute_totals
from ..api.cancellation import CancellationToken, is_cancelled
from ..api.errors import AuthorizationError, GatewayError, MalformedRecordError, OperationCancelledError
from ..api.gateway import TransactionGateway
from ..core.models import (
    Account,
    AccountType,
    Category,
    FilterCriteria,
    Transaction,
    TransactionFormData,
    TransactionTotals,
)
from ..core.money import Money
from .canonicalizer import canonicalize_transaction, canonicalize_transactions
from .filters import filter_transactions

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to load transactions"
CREATE_FAILED = "Failed to create transaction"
UPDATE_FAILED = "Failed to update transaction"
DELETE_FAILED = "Failed to delete transaction"
CREATED = "Transaction created successfully!"
UPDATED = "Transaction updated successfully!"
DELETED = "Transaction deleted successfully!"


class Notifier(Protocol):
    """Receives user-facing messages (levels: "success", "error", "info")."""

    def notify(self, message: str, level: str) -> None: ...


class LoggingNotifier:
    """Default notifier: routes user-facing messages to the log."""

    def notify(self, message: str, level: str) -> None:
        if level == "error":
            logger.error(message)
        else:
            logger.info(message)


@dataclass(frozen=True)
class StoreState:
    """Immutable snapshot of the store, handed to subscribers."""

    transactions: tuple[Transaction, ...]
    is_loading: bool
    error: str | None


StateListener = Callable[[StoreState], None]


def _returned_transaction(result: Any) -> Transaction | None:
    """The server's copy of a mutated transaction, when the response carries one."""
    if not isinstance(result, dict):
        return None
    try:
        return canonicalize_transaction(result)
    except MalformedRecordError:
        logger.debug("Mutation response did not include a transaction record")
        return None


class TransactionStore:
    """
    Authoritative transaction collection backed by the remote API.

    Example:
        store = TransactionStore(gateway)
        await store.fetch()
        await store.create(form_data)  # reloads from the server
        visible = store.filtered(FilterCriteria(search_term="rent"))
    """

    def __init__(self, gateway: TransactionGateway, notifier: Notifier | None = None):
        self._gateway = gateway
        self._notifier = notifier or LoggingNotifier()
        self._transactions: tuple[Transaction, ...] = ()
        self._error: str | None = None
        self._in_flight = 0
        self._listeners: list[StateListener] = []

    # State

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def state(self) -> StoreState:
        return StoreState(transactions=self._transactions, is_loading=self.is_loading, error=self._error)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        """Deliver a snapshot to every listener; a failing listener never breaks the store."""
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def _notify(self, message: str, level: str, cancel_token: CancellationToken | None) -> None:
        if is_cancelled(cancel_token):
            logger.debug("Suppressed %s notification for cancelled caller: %s", level, message)
            return
        self._notifier.notify(message, level)

    # Derived views

    def filtered(self, criteria: FilterCriteria) -> list[Transaction]:
        return filter_transactions(self._transactions, criteria)

    def totals(self) -> TransactionTotals:
        return compute_totals(self._transactions)

    # Loading

    async def fetch(self, cancel_token: CancellationToken | None = None) -> None:
        """
        Reload the whole collection from the server.

        Never raises for remote failures: the message is stored in ``error``
        and surfaced through the notifier. A token cancelled before the
        request is sent skips the request entirely.
        """
        await self._load(cancel_token, dispatch_token=cancel_token)

    async def _load(
        self, cancel_token: CancellationToken | None, dispatch_token: CancellationToken | None
    ) -> None:
        try:
            self._in_flight += 1
            self._error = None
            self._emit()

            records = await self._gateway.list_transactions(cancel_token=dispatch_token)
            transactions = canonicalize_transactions(records)
        except OperationCancelledError:
            logger.debug("Fetch cancelled before dispatch")
        except AuthorizationError:
            # Session already ended by the gateway; this is not an error banner
            logger.info("Fetch rejected as unauthorized; clearing transactions")
            self._transactions = ()
        except GatewayError as e:
            self._error = e.user_message(FETCH_FAILED)
            logger.warning("Fetching transactions failed: %s", e)
            self._notify(self._error, "error", cancel_token)
        else:
            self._transactions = tuple(transactions)
            logger.info("Loaded %d transactions", len(transactions))
        finally:
            self._in_flight -= 1
            self._emit()

    # Mutations

    async def _mutate(
        self,
        call: Callable[[], Awaitable[Any]],
        fallback_message: str,
        success_message: str,
        cancel_token: CancellationToken | None,
    ) -> Any:
        try:
            result = await call()
        except (OperationCancelledError, AuthorizationError):
            raise
        except GatewayError as e:
            self._notify(e.user_message(fallback_message), "error", cancel_token)
            raise
        except ValueError as e:
            self._notify(str(e) or fallback_message, "error", cancel_token)
            raise

        # Dispatched writes always resynchronize, even for a caller that stopped listening
        await self._load(cancel_token, dispatch_token=None)
        self._notify(success_message, "success", cancel_token)
        return result

    async def create(
        self, data: TransactionFormData, cancel_token: CancellationToken | None = None
    ) -> Transaction | None:
        """
        Create a transaction, then reload the collection.

        Returns:
            The server's copy of the new transaction, if the response included it

        Raises:
            GatewayError: On any remote failure (after notifying)
            ValueError: If ``data`` does not validate
        """
        result = await self._mutate(
            lambda: self._gateway.create_transaction(data, cancel_token=cancel_token),
            CREATE_FAILED,
            CREATED,
            cancel_token,
        )
        return _returned_transaction(result)

    async def update(
        self, transaction_id: str, data: TransactionFormData, cancel_token: CancellationToken | None = None
    ) -> Transaction | None:
        """Update a transaction, then reload the collection."""
        result = await self._mutate(
            lambda: self._gateway.update_transaction(transaction_id, data, cancel_token=cancel_token),
            UPDATE_FAILED,
            UPDATED,
            cancel_token,
        )
        return _returned_transaction(result)

    async def delete(self, transaction_id: str, cancel_token: CancellationToken | None = None) -> None:
        """Delete a transaction, then reload the collection."""
        await self._mutate(
            lambda: self._gateway.delete_transaction(transaction_id, cancel_token=cancel_token),
            DELETE_FAILED,
            DELETED,
            cancel_token,
        )

    # Accounts and categories referenced by the transaction form

    async def load_reference_data(self) -> tuple[list[Account], list[Category]]:
        """Fetch accounts and categories concurrently."""
        accounts, categories = await asyncio.gather(self._gateway.list_accounts(), self._gateway.list_categories())
        return accounts, categories

    async def ensure_category(self, category_name: str, known: Sequence[Category] | None = None) -> str:
        """
        Id of the category named ``category_name``, creating it if needed.

        The category exists on the server (with a server-assigned id) before
        this returns, so a transaction referencing it can be submitted.
        Failures propagate so the dependent transaction is not submitted.
        """
        name = category_name.strip()
        if not name:
            raise ValueError("Category name is required")

        categories = known if known is not None else await self._gateway.list_categories()
        for category in categories:
            if category.category_name.casefold() == name.casefold():
                return category.id

        try:
            category_id = await self._gateway.create_category(name)
        except GatewayError as e:
            if not isinstance(e, AuthorizationError):
                self._notifier.notify(e.user_message("Failed to create category"), "error")
            raise
        logger.info("Created category %r (%s)", name, category_id)
        return category_id

    async def ensure_account(
        self,
        name: str,
        initial_balance: Money | None = None,
        account_type: AccountType = AccountType.BANK,
        known: Sequence[Account] | None = None,
    ) -> str:
        """Id of the account named ``name``, creating it if needed."""
        name = name.strip()
        if not name:
            raise ValueError("Account name is required")

        accounts = known if known is not None else await self._gateway.list_accounts()
        for account in accounts:
            if account.name.casefold() == name.casefold():
                return account.id

        try:
            account_id = await self._gateway.create_account(name, initial_balance or Money.zero(), account_type)
        except GatewayError as e:
            if not isinstance(e, AuthorizationError):
                self._notifier.notify(e.user_message("Failed to create account"), "error")
            raise
        logger.info("Created account %r (%s)", name, account_id)
        return account_id
