"""
Stored receipt record.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from receipt_processor.schemas import Receipt


class ReceiptRecord(BaseModel):
    """Immutable row: identifier, validated receipt and its score at insert time."""
    model_config = ConfigDict(frozen=True)

    id: str
    receipt: Receipt
    points: int
    created_at: datetime
