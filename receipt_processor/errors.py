"""
Error taxonomy for receipt processing.

Validation failures and misses are recoverable at the HTTP boundary;
``CorruptRecordError`` signals a broken store invariant.
"""
from __future__ import annotations


class ReceiptError(Exception):
    """Base class for every receipt processing failure."""

    detail = "Receipt processing failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.detail)


class ReceiptValidationError(ReceiptError):
    detail = "The receipt is invalid."

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field


class MalformedFieldError(ReceiptValidationError):
    """A field is missing or is not a JSON string / expected container."""


class InvalidFormatError(ReceiptValidationError):
    """A string field failed its grammar (pattern, date, time or amount)."""


class ReceiptNotFoundError(ReceiptError):
    detail = "No receipt found for that ID."

    def __init__(self, receipt_id: str):
        super().__init__(f"No receipt with id {receipt_id!r}")
        self.receipt_id = receipt_id


class CorruptRecordError(ReceiptError):
    detail = "Stored receipt record is malformed."

    def __init__(self, receipt_id: str):
        super().__init__(f"Receipt with id {receipt_id!r} was malformed")
        self.receipt_id = receipt_id
