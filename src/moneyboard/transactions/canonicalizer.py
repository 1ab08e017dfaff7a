#!/usr/bin/env python3
"""
Transaction Canonicalizer

Maps a loosely-typed transaction record from the API into the canonical
Transaction model. The server has sent the same field under several key
spellings over time; every accepted spelling is listed in FIELD_KEYS so
this module is the only place that knows about them.

Rules:
- amount: parsed as a number, missing/unparseable becomes 0
- type: numeric code passes through, known aliases are mapped, anything
  else is EXPENSE (unrecognized money is assumed to leave the balance)
- status: numeric code passes through, known aliases are mapped, anything
  else is PENDING (unrecognized transactions are never shown as settled)
- text fields default to ""
- is_recurring is coerced to bool
- a record without an id is rejected
"""

from collections.abc import Iterable
from typing import Any

from ..api.errors import MalformedRecordError
from ..core.models import Transaction, TransactionStatus, TransactionType
from ..core.money import Money

FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "id": ("id", "Id", "ID"),
    "date": ("date", "Date"),
    "description": ("description", "Description"),
    "category_name": ("categoryName", "CategoryName", "category_name", "category"),
    "type": ("type", "Type"),
    "amount": ("amount", "Amount"),
    "status": ("status", "Status"),
    "is_recurring": ("isRecurring", "IsRecurring", "is_recurring"),
    "notes": ("notes", "Notes"),
}

TYPE_ALIASES: dict[str, TransactionType] = {
    "entrada": TransactionType.INCOME,
    "income": TransactionType.INCOME,
    "saída": TransactionType.EXPENSE,
    "saida": TransactionType.EXPENSE,
    "expense": TransactionType.EXPENSE,
}

STATUS_ALIASES: dict[str, TransactionStatus] = {
    "paid": TransactionStatus.COMPLETED,
    "completed": TransactionStatus.COMPLETED,
    "concluída": TransactionStatus.COMPLETED,
    "concluida": TransactionStatus.COMPLETED,
    "pending": TransactionStatus.PENDING,
    "pendente": TransactionStatus.PENDING,
}

_TRUE_STRINGS = {"true", "1", "yes", "sim"}


def _lookup(record: dict[str, Any], field: str) -> Any:
    """First non-None value among the accepted keys for ``field``."""
    for key in FIELD_KEYS[field]:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _as_code(value: Any) -> int | None:
    """Numeric enum code, if the value is one (bools are not codes)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_transaction_type(value: Any) -> TransactionType:
    """Map a numeric code or textual alias to a TransactionType; default EXPENSE."""
    code = _as_code(value)
    if code is not None:
        try:
            return TransactionType(code)
        except ValueError:
            return TransactionType.EXPENSE
    if isinstance(value, TransactionType):
        return value
    if isinstance(value, str):
        return TYPE_ALIASES.get(value.strip().lower(), TransactionType.EXPENSE)
    return TransactionType.EXPENSE


def parse_transaction_status(value: Any) -> TransactionStatus:
    """Map a numeric code or textual alias to a TransactionStatus; default PENDING."""
    code = _as_code(value)
    if code is not None:
        try:
            return TransactionStatus(code)
        except ValueError:
            return TransactionStatus.PENDING
    if isinstance(value, TransactionStatus):
        return value
    if isinstance(value, str):
        return STATUS_ALIASES.get(value.strip().lower(), TransactionStatus.PENDING)
    return TransactionStatus.PENDING


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def canonicalize_transaction(record: dict[str, Any]) -> Transaction:
    """
    Normalize one raw API record into a Transaction.

    Args:
        record: Transaction dict as returned by the API

    Returns:
        Canonical Transaction

    Raises:
        MalformedRecordError: If the record is not a dict or has no usable id
    """
    if not isinstance(record, dict):
        raise MalformedRecordError(f"Transaction record must be an object, got {type(record).__name__}")

    raw_id = _lookup(record, "id")
    if raw_id is None or isinstance(raw_id, bool) or not str(raw_id).strip():
        raise MalformedRecordError(f"Transaction record has no id: keys={sorted(record)}")

    raw_date = _lookup(record, "date")

    return Transaction(
        id=str(raw_id),
        date=raw_date if isinstance(raw_date, str) else "",
        description=_as_text(_lookup(record, "description")),
        category_name=_as_text(_lookup(record, "category_name")),
        type=parse_transaction_type(_lookup(record, "type")),
        amount=Money.from_amount(_lookup(record, "amount")),
        status=parse_transaction_status(_lookup(record, "status")),
        is_recurring=_as_bool(_lookup(record, "is_recurring")),
        notes=_as_text(_lookup(record, "notes")),
    )


def canonicalize_transactions(records: Iterable[dict[str, Any]]) -> list[Transaction]:
    """
    Normalize a whole response.

    Fails on the first malformed record; a partially keyed collection is
    never returned.
    """
    return [canonicalize_transaction(record) for record in records]
