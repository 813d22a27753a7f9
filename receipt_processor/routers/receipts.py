"""
Receipt Processor API endpoints.

POST /receipts/process        — validate + score a receipt, return its id
GET  /receipts/{id}/points    — points awarded to a stored receipt
GET  /receipts/{id}           — the stored record
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from receipt_processor.database import ReceiptStore, get_store
from receipt_processor.pipeline import process_receipt
from receipt_processor.schemas import (
    ErrorResponse,
    PointsResponse,
    ProcessReceiptResponse,
    ReceiptRecordResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

EXAMPLE_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
    ],
    "total": "35.35",
}


# ── POST /receipts/process ───────────────────────────────────────────────
@router.post(
    "/receipts/process",
    response_model=ProcessReceiptResponse,
    responses={400: {"model": ErrorResponse, "description": "The receipt is invalid."}},
)
def submit_receipt(
    payload: Any = Body(..., examples=[EXAMPLE_RECEIPT]),
    store: ReceiptStore = Depends(get_store),
):
    receipt_id = process_receipt(payload, store)
    return ProcessReceiptResponse(id=receipt_id)


# ── GET /receipts/{receipt_id}/points ────────────────────────────────────
@router.get(
    "/receipts/{receipt_id}/points",
    response_model=PointsResponse,
    responses={404: {"model": ErrorResponse, "description": "No receipt found for that ID."}},
)
def get_receipt_points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    logger.info("Fetching points: %s", receipt_id)
    return PointsResponse(points=store.lookup(receipt_id))


# ── GET /receipts/{receipt_id} ───────────────────────────────────────────
@router.get(
    "/receipts/{receipt_id}",
    response_model=ReceiptRecordResponse,
    responses={404: {"model": ErrorResponse, "description": "No receipt found for that ID."}},
)
def get_receipt(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    record = store.get(receipt_id)
    return ReceiptRecordResponse(
        id=record.id,
        points=record.points,
        created_at=record.created_at,
        receipt=record.receipt,
    )
