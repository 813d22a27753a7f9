"""
API request / response envelopes.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from receipt_processor.schemas.receipt import Receipt


class ProcessReceiptResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class ReceiptRecordResponse(BaseModel):
    id: str
    points: int
    created_at: datetime
    receipt: Receipt


class ErrorResponse(BaseModel):
    detail: str
