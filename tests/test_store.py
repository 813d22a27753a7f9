"""
Tests for the in-memory receipt store and its readers-writer lock.
"""
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from receipt_processor.database import ReadWriteLock
from receipt_processor.errors import CorruptRecordError, ReceiptNotFoundError
from receipt_processor.models import ReceiptRecord
from receipt_processor.pipeline import parse_receipt, process_receipt
from receipt_processor.pipeline.scoring import score_receipt


class TestReceiptStore:
    def test_insert_then_lookup(self, store, target_payload):
        receipt = parse_receipt(target_payload)
        rid = store.insert(receipt)
        assert store.lookup(rid) == score_receipt(receipt) == 28

    def test_ids_are_canonical_uuids(self, store, target_payload):
        rid = store.insert(parse_receipt(target_payload))
        assert str(uuid.UUID(rid)) == rid

    def test_get_returns_record(self, store, mm_payload):
        receipt = parse_receipt(mm_payload)
        rid = store.insert(receipt)
        record = store.get(rid)
        assert isinstance(record, ReceiptRecord)
        assert record.id == rid
        assert record.receipt == receipt
        assert record.points == 109
        assert record.created_at.tzinfo is not None

    def test_same_receipt_twice_gets_two_ids(self, store, target_payload):
        receipt = parse_receipt(target_payload)
        assert store.insert(receipt) != store.insert(receipt)
        assert len(store) == 2

    def test_unknown_id(self, store, target_payload):
        store.insert(parse_receipt(target_payload))
        with pytest.raises(ReceiptNotFoundError) as exc_info:
            store.lookup("nonexistent")
        assert exc_info.value.receipt_id == "nonexistent"

    def test_not_found_error_carries_id_only(self):
        exc = ReceiptNotFoundError("abc")
        assert str(exc) == "No receipt with id 'abc'"
        assert exc.detail == "No receipt found for that ID."
        assert not hasattr(exc, "message")

    def test_contains(self, store, target_payload):
        rid = store.insert(parse_receipt(target_payload))
        assert rid in store
        assert str(uuid.uuid4()) not in store

    def test_stored_none_is_corrupt(self, store):
        store._records["empty"] = None
        with pytest.raises(CorruptRecordError):
            store.lookup("empty")

    def test_corrupt_entry(self, store):
        store._records["broken"] = {"points": 5}
        with pytest.raises(CorruptRecordError):
            store.lookup("broken")

    def test_process_receipt(self, store, mm_payload):
        rid = process_receipt(mm_payload, store)
        assert store.lookup(rid) == 109


class TestConcurrency:
    def test_concurrent_inserts(self, store):
        payloads = [
            {
                "retailer": f"Store {n}",
                "purchaseDate": "2022-01-01",
                "purchaseTime": "15:00",
                "items": [],
                "total": f"{n}.00",
            }
            for n in range(100)
        ]
        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(lambda p: process_receipt(p, store), payloads))

        assert len(set(ids)) == len(payloads)
        assert len(store) == len(payloads)
        for rid, payload in zip(ids, payloads):
            assert store.lookup(rid) == score_receipt(parse_receipt(payload))

    def test_concurrent_lookups_during_inserts(self, store, target_payload):
        receipt = parse_receipt(target_payload)
        rid = store.insert(receipt)

        def work(n):
            if n % 4 == 0:
                store.insert(receipt)
            return store.lookup(rid)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(200)))
        assert results == [28] * 200
        assert len(store) == 51


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        both_inside = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read_locked():
                both_inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert not any(t.is_alive() for t in threads)

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        writer_inside = threading.Event()
        release_writer = threading.Event()
        reader_done = threading.Event()

        def writer():
            with lock.write_locked():
                writer_inside.set()
                release_writer.wait(timeout=5)

        def reader():
            with lock.read_locked():
                reader_done.set()

        w = threading.Thread(target=writer)
        w.start()
        assert writer_inside.wait(timeout=5)
        r = threading.Thread(target=reader)
        r.start()
        assert not reader_done.wait(timeout=0.2)
        release_writer.set()
        assert reader_done.wait(timeout=5)
        w.join(timeout=5)
        r.join(timeout=5)

    def test_released_on_error(self):
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            with lock.write_locked():
                raise RuntimeError("boom")
        with lock.read_locked():
            pass
        with lock.write_locked():
            pass

    def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        order = []
        first_reader_inside = threading.Event()
        release_first_reader = threading.Event()

        def first_reader():
            with lock.read_locked():
                first_reader_inside.set()
                release_first_reader.wait(timeout=5)

        def writer():
            with lock.write_locked():
                order.append("w")

        def second_reader():
            with lock.read_locked():
                order.append("r2")

        r1 = threading.Thread(target=first_reader)
        r1.start()
        assert first_reader_inside.wait(timeout=5)

        w = threading.Thread(target=writer)
        w.start()
        deadline = time.monotonic() + 5
        while lock._writers_waiting == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert lock._writers_waiting == 1

        r2 = threading.Thread(target=second_reader)
        r2.start()
        time.sleep(0.2)
        assert order == []

        release_first_reader.set()
        for t in (r1, w, r2):
            t.join(timeout=5)
        assert order == ["w", "r2"]

    def test_writers_never_overlap(self):
        lock = ReadWriteLock()
        inside = 0
        peak = 0
        counter_guard = threading.Lock()

        def writer():
            nonlocal inside, peak
            for _ in range(50):
                with lock.write_locked():
                    with counter_guard:
                        inside += 1
                        peak = max(peak, inside)
                    time.sleep(0.0005)
                    with counter_guard:
                        inside -= 1

        threads = [threading.Thread(target=writer) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        assert not any(t.is_alive() for t in threads)
        assert peak == 1
