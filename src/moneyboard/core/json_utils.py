#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON formatting with consistent pretty-printing.
Domain values (Money, FinancialDate, enums) are serialized through
``to_jsonable`` so every `--json` CLI output uses the same shapes.
"""

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .money import Money


def to_jsonable(value: Any) -> Any:
    """Convert domain objects into plain JSON-compatible values."""
    if isinstance(value, Money):
        return value.to_float()
    if isinstance(value, FinancialDate):
        return value.to_iso_string()
    if isinstance(value, Enum):
        return value.name
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format (domain objects are converted first)
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(to_jsonable(data), indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys)
