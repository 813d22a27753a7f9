"""
Field-level parsers for receipt documents.

Each parser takes the raw decoded JSON value and either returns the
validated domain value or raises ``PydanticCustomError``:

* ``malformed_field`` – the value is not a JSON string at all;
* ``invalid_format``  – the string does not satisfy its grammar.

They are bound to the schema types via ``BeforeValidator`` so a
``Receipt`` can only be built from input that passed every check.
"""
from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from receipt_processor.errors import (
    InvalidFormatError,
    MalformedFieldError,
    ReceiptValidationError,
)

# \w and \s are ASCII-only: letters, digits, underscore / space, \t\n\r\f\v
RETAILER_PATTERN = re.compile(r"[\w\s&-]+", re.ASCII)
DESCRIPTION_PATTERN = re.compile(r"[\w\s-]+", re.ASCII)
AMOUNT_PATTERN = re.compile(r"(\d+)\.(\d{2})", re.ASCII)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)


def _require_string(value: Any, kind: str) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError(
            "malformed_field",
            "{kind} must be a string",
            {"kind": kind},
        )
    return value


def _invalid(message: str, value: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_format", message, {"value": value})


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

def parse_retailer(value: Any) -> str:
    text = _require_string(value, "retailer")
    if not RETAILER_PATTERN.fullmatch(text):
        raise _invalid("Invalid retailer name", text)
    return text


def parse_description(value: Any) -> str:
    text = _require_string(value, "shortDescription")
    if not DESCRIPTION_PATTERN.fullmatch(text):
        raise _invalid("Invalid item description", text)
    return text


def parse_purchase_date(value: Any) -> date:
    """``YYYY-MM-DD``; the calendar decides whether the day exists."""
    text = _require_string(value, "purchaseDate")
    if not DATE_PATTERN.fullmatch(text):
        raise _invalid("Invalid date format", text)
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise _invalid("Invalid date format", text) from None


def parse_purchase_time(value: Any) -> time:
    """24-hour ``HH:MM``."""
    text = _require_string(value, "purchaseTime")
    if not TIME_PATTERN.fullmatch(text):
        raise _invalid("Invalid time format", text)
    try:
        return datetime.strptime(text, "%H:%M").time()
    except ValueError:
        raise _invalid("Invalid time format", text) from None


def parse_amount(value: Any) -> int:
    """Parse ``"35.35"`` into integer cents (``3535``)."""
    text = _require_string(value, "amount")
    match = AMOUNT_PATTERN.fullmatch(text)
    if match is None:
        raise _invalid("Invalid amount", text)
    dollars, cents = match.groups()
    return int(dollars) * 100 + int(cents)


def format_amount(cents: int) -> str:
    return f"{cents // 100}.{cents % 100:02d}"


def format_date(value: date) -> str:
    return value.isoformat()


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------

def to_receipt_error(exc: ValidationError) -> ReceiptValidationError:
    """Collapse a pydantic ``ValidationError`` to its first failure.

    Grammar failures become ``InvalidFormatError``; everything else
    (wrong JSON type, missing key, non-list items, ...) is a
    ``MalformedFieldError``.
    """
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    if first["type"] == "invalid_format":
        return InvalidFormatError(field, first["msg"])
    return MalformedFieldError(field, first["msg"])
