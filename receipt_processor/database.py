"""
In-memory receipt table.

A single ``ReceiptStore`` lives for the lifetime of the process. It is
created in the application lifespan and handed to request handlers
through the ``get_store`` dependency.
"""
from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from fastapi import Request

from receipt_processor.errors import CorruptRecordError, ReceiptNotFoundError
from receipt_processor.models import ReceiptRecord
from receipt_processor.pipeline.scoring import score_breakdown, score_receipt
from receipt_processor.schemas import Receipt

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Waiting writers block new readers so a steady stream of lookups
    cannot starve inserts.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ReceiptStore:
    """Write-once table of ``ReceiptRecord`` keyed by generated id."""

    def __init__(self) -> None:
        self._records: dict[str, ReceiptRecord] = {}
        self._lock = ReadWriteLock()

    def insert(self, receipt: Receipt) -> str:
        """Score ``receipt``, store it under a fresh UUID and return the id."""
        receipt_id = str(uuid.uuid4())
        record = ReceiptRecord(
            id=receipt_id,
            receipt=receipt,
            points=score_receipt(receipt),
            created_at=datetime.now(timezone.utc),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Score breakdown for %s: %s", receipt_id, score_breakdown(receipt))

        with self._lock.write_locked():
            self._records[receipt_id] = record
        logger.info("Stored receipt %s (%d points)", receipt_id, record.points)
        return receipt_id

    def get(self, receipt_id: str) -> ReceiptRecord:
        with self._lock.read_locked():
            if receipt_id not in self._records:
                logger.warning("Receipt not found: %s", receipt_id)
                raise ReceiptNotFoundError(receipt_id)
            record = self._records[receipt_id]

        if not isinstance(record, ReceiptRecord):
            logger.error("Receipt %s has unexpected type %s", receipt_id, type(record).__name__)
            raise CorruptRecordError(receipt_id)
        return record

    def lookup(self, receipt_id: str) -> int:
        """Return the points stored for ``receipt_id``."""
        return self.get(receipt_id).points

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock.read_locked():
            return receipt_id in self._records


def get_store(request: Request) -> ReceiptStore:
    """Store dependency — the instance created at application startup."""
    return request.app.state.store
