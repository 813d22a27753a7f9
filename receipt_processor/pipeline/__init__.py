"""
Receipt processing pipeline.

Orchestrates: validate document → score → store.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from receipt_processor.errors import ReceiptValidationError
from receipt_processor.schemas import Receipt
from receipt_processor.validators import to_receipt_error

if TYPE_CHECKING:
    from receipt_processor.database import ReceiptStore

logger = logging.getLogger(__name__)


def parse_receipt(payload: Any) -> Receipt:
    """Validate a decoded JSON document into a ``Receipt``.

    Raises ``MalformedFieldError`` or ``InvalidFormatError`` for the first
    failing field; no partially valid receipt is ever returned.
    """
    try:
        return Receipt.model_validate(payload)
    except ValidationError as exc:
        raise to_receipt_error(exc) from exc


def process_receipt(payload: Any, store: ReceiptStore) -> str:
    """Run the full submit path and return the new receipt id."""
    started = time.perf_counter()
    try:
        receipt = parse_receipt(payload)
    except ReceiptValidationError as exc:
        logger.info("Rejected receipt (%s): %s", type(exc).__name__, exc)
        raise
    logger.debug("Pipeline — validated in %.2f ms", (time.perf_counter() - started) * 1000)

    started = time.perf_counter()
    receipt_id = store.insert(receipt)
    logger.debug("Pipeline — scored and stored in %.2f ms", (time.perf_counter() - started) * 1000)
    return receipt_id
