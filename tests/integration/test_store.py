#!/usr/bin/env python3
"""
Integration tests for the transaction store.

The store runs against the real gateway and the in-memory API, so every
mutation is verified by the reload it triggers rather than by local state.
"""

import asyncio

import httpx
import pytest

from moneyboard.api.cancellation import CancellationToken
from moneyboard.api.errors import AuthorizationError, OperationCancelledError, ServerError
from moneyboard.core.models import (
    Category,
    FilterCriteria,
    TransactionFormData,
    TransactionStatus,
    TransactionType,
)
from moneyboard.core.money import Money
from moneyboard.transactions.store import (
    CREATED,
    DELETED,
    FETCH_FAILED,
    UPDATED,
    TransactionStore,
)


class RecordingNotifier:
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, message: str, level: str) -> None:
        self.messages.append((level, message))


def _form(**overrides) -> TransactionFormData:
    values = dict(
        amount=Money.from_cents(1999),
        date="2024-02-15",
        description="Books",
        type=TransactionType.EXPENSE,
        account_id="acc-1",
        category_id="cat-1",
        status=TransactionStatus.COMPLETED,
    )
    values.update(overrides)
    return TransactionFormData(**values)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.mark.integration
@pytest.mark.store
class TestFetch:
    """Test loading the collection."""

    @pytest.mark.asyncio
    async def test_fetch_loads_canonical_transactions(self, make_gateway, notifier):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()

        assert [t.id for t in store.transactions] == ["1", "2", "3"]
        assert store.transactions[0].type is TransactionType.INCOME
        assert store.transactions[2].status is TransactionStatus.PENDING
        assert store.error is None
        assert not store.is_loading
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_subscribers_see_loading_transitions(self, make_gateway):
        snapshots = []

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            unsubscribe = store.subscribe(snapshots.append)
            await store.fetch()
            unsubscribe()
            await store.fetch()

        assert [s.is_loading for s in snapshots] == [True, False]
        assert len(snapshots[-1].transactions) == 3

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_stick_loading(self, make_gateway):
        snapshots = []

        def broken(snapshot):
            raise RuntimeError("listener exploded")

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            store.subscribe(broken)
            store.subscribe(snapshots.append)
            await store.fetch()

        assert not store.is_loading
        assert len(store.transactions) == 3
        assert [s.is_loading for s in snapshots] == [True, False]

    @pytest.mark.asyncio
    async def test_derived_views(self, make_gateway):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            await store.fetch()

        totals = store.totals()
        assert totals.income == Money.from_dollars("1000")
        assert totals.expense == Money.from_dollars("300")
        assert totals.balance == Money.from_dollars("700")
        assert [t.description for t in store.filtered(FilterCriteria(search_term="rent"))] == ["Rent"]

    @pytest.mark.asyncio
    async def test_server_failure_sets_error_and_notifies(self, fake_api, make_gateway, notifier):
        fake_api.responses[("GET", "/api/transactions")] = httpx.Response(503, json={"error": "Maintenance"})

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()

        assert store.error == "Maintenance"
        assert store.transactions == []
        assert not store.is_loading
        assert notifier.messages == [("error", "Maintenance")]

    @pytest.mark.asyncio
    async def test_failure_without_server_message_uses_fallback(self, fake_api, make_gateway, notifier):
        fake_api.responses[("GET", "/api/transactions")] = httpx.Response(200, json=[{"description": "no id"}])

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()

        assert store.error == FETCH_FAILED

    @pytest.mark.asyncio
    async def test_failed_fetch_keeps_previous_collection(self, fake_api, make_gateway):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            await store.fetch()
            fake_api.responses[("GET", "/api/transactions")] = httpx.Response(500)
            await store.fetch()

        assert len(store.transactions) == 3
        assert store.error == FETCH_FAILED

    @pytest.mark.asyncio
    async def test_unauthorized_clears_without_error(self, fake_api, make_gateway, notifier, session):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()
            fake_api.responses[("GET", "/api/transactions")] = httpx.Response(401)
            await store.fetch()

        assert store.transactions == []
        assert store.error is None
        assert notifier.messages == []
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_cancelled_fetch_is_not_sent(self, fake_api, make_gateway):
        token = CancellationToken()
        token.cancel()

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            await store.fetch(cancel_token=token)

        assert fake_api.requests == []
        assert not store.is_loading
        assert store.error is None

    @pytest.mark.asyncio
    async def test_overlapping_fetches_last_response_wins(self, fake_api, make_gateway, api_records):
        first_sent = asyncio.Event()
        release_first = asyncio.Event()

        async def respond(request):
            if not first_sent.is_set():
                first_sent.set()
                await release_first.wait()
                return httpx.Response(200, json=api_records[:1])
            return httpx.Response(200, json=api_records)

        fake_api.responses[("GET", "/api/transactions")] = respond

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            first = asyncio.create_task(store.fetch())
            await first_sent.wait()
            await store.fetch()

            assert len(store.transactions) == 3
            assert store.is_loading

            release_first.set()
            await first

        assert [t.id for t in store.transactions] == ["1"]
        assert not store.is_loading


@pytest.mark.integration
@pytest.mark.store
class TestMutations:
    """Test create/update/delete round-trips."""

    @pytest.mark.asyncio
    async def test_create_reloads_and_contains_server_id(self, fake_api, make_gateway, notifier):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()
            created = await store.create(_form())

        assert created is not None
        assert created.id == "101"
        assert "101" in [t.id for t in store.transactions]
        assert len(fake_api.requests_to("GET", "/api/transactions")) == 2
        assert notifier.messages == [("success", CREATED)]

    @pytest.mark.asyncio
    async def test_create_with_empty_response_body(self, fake_api, make_gateway):
        def accept(request):
            fake_api.transactions.append({"id": 500, "description": "Books", "type": 1, "amount": 19.99})
            return httpx.Response(204)

        fake_api.responses[("POST", "/api/transactions")] = accept

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            created = await store.create(_form())

        assert created is None
        assert "500" in [t.id for t in store.transactions]

    @pytest.mark.asyncio
    async def test_create_failure_notifies_and_raises(self, fake_api, make_gateway, notifier):
        fake_api.responses[("POST", "/api/transactions")] = httpx.Response(
            400, json={"error": "Account not found"}
        )

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            with pytest.raises(ServerError):
                await store.create(_form())

        assert notifier.messages == [("error", "Account not found")]
        assert fake_api.requests_to("GET", "/api/transactions") == []

    @pytest.mark.asyncio
    async def test_invalid_form_notifies_and_raises(self, fake_api, make_gateway, notifier):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            with pytest.raises(ValueError):
                await store.create(_form(date="not a date"))

        assert notifier.messages[0][0] == "error"
        assert "date" in notifier.messages[0][1]
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_update_and_delete(self, fake_api, make_gateway, notifier):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.fetch()
            await store.update("2", _form(description="Rent (adjusted)"))
            await store.delete("3")

        assert [t.description for t in store.transactions] == ["Salary", "Rent (adjusted)"]
        assert notifier.messages == [("success", UPDATED), ("success", DELETED)]

    @pytest.mark.asyncio
    async def test_unauthorized_mutation_raises_without_notice(self, fake_api, make_gateway, notifier):
        fake_api.responses[("DELETE", "/api/transactions/1")] = httpx.Response(401)

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            with pytest.raises(AuthorizationError):
                await store.delete("1")

        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_cancelled_before_dispatch(self, fake_api, make_gateway, notifier):
        token = CancellationToken()
        token.cancel()

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            with pytest.raises(OperationCancelledError):
                await store.create(_form(), cancel_token=token)

        assert fake_api.requests == []
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_cancelled_in_flight_still_applies_but_stays_quiet(self, fake_api, make_gateway, notifier):
        token = CancellationToken()

        def create_then_cancel(request):
            fake_api.transactions.append({"id": 900, "description": "Books", "type": 1, "amount": 19.99})
            token.cancel()
            return httpx.Response(201, json={"id": 900})

        fake_api.responses[("POST", "/api/transactions")] = create_then_cancel

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            await store.create(_form(), cancel_token=token)

        assert "900" in [t.id for t in store.transactions]
        assert notifier.messages == []


@pytest.mark.integration
@pytest.mark.store
class TestReferenceData:
    """Test category and account lookup/creation."""

    @pytest.mark.asyncio
    async def test_ensure_category_reuses_existing(self, fake_api, make_gateway):
        fake_api.categories.append({"id": "c-food", "categoryName": "Food"})

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            category_id = await store.ensure_category("  food ")

        assert category_id == "c-food"
        assert fake_api.requests_to("POST", "/api/category") == []

    @pytest.mark.asyncio
    async def test_ensure_category_creates_missing(self, fake_api, make_gateway):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            category_id = await store.ensure_category("Travel", known=[Category(id="c1", category_name="Food")])

        assert category_id == "101"
        assert fake_api.categories == [{"id": "101", "categoryName": "Travel"}]
        assert fake_api.requests_to("GET", "/api/category") == []

    @pytest.mark.asyncio
    async def test_ensure_category_failure_propagates(self, fake_api, make_gateway, notifier):
        fake_api.responses[("POST", "/api/category")] = httpx.Response(409, json={"error": "Duplicate category"})

        async with make_gateway() as gateway:
            store = TransactionStore(gateway, notifier)
            with pytest.raises(ServerError):
                await store.ensure_category("Travel", known=[])

        assert notifier.messages == [("error", "Duplicate category")]

    @pytest.mark.asyncio
    async def test_ensure_category_requires_name(self, make_gateway):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            with pytest.raises(ValueError):
                await store.ensure_category("   ")

    @pytest.mark.asyncio
    async def test_ensure_account_creates_then_reuses(self, fake_api, make_gateway):
        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            first = await store.ensure_account("Main Checking", initial_balance=Money.from_cents(50000))
            second = await store.ensure_account("main checking")

        assert first == second == "101"
        assert len(fake_api.requests_to("POST", "/api/account")) == 1
        assert fake_api.accounts[0]["initialBalance"] == 500.0
        assert fake_api.accounts[0]["type"] == 0

    @pytest.mark.asyncio
    async def test_load_reference_data(self, fake_api, make_gateway):
        fake_api.categories.append({"id": "c1", "categoryName": "Food"})
        fake_api.accounts.append({"id": "a1", "name": "Wallet", "initialBalance": 0, "type": 2})

        async with make_gateway() as gateway:
            store = TransactionStore(gateway)
            accounts, categories = await store.load_reference_data()

        assert [a.name for a in accounts] == ["Wallet"]
        assert [c.category_name for c in categories] == ["Food"]
