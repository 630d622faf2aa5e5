"""
Tests for the in‑memory store and its shared/exclusive lock.
"""

import threading
import time

import pytest

from razor_tracker_api.app.core.exceptions import BackendUnavailableError
from razor_tracker_api.app.storage import MemoryBackend
from razor_tracker_api.app.storage.locking import ReadWriteLock

from tests.helpers import make_blade, make_razor, make_usage


class TestSeedData:

    def test_seeded_store_contents(self):
        backend = MemoryBackend()

        razors, razor_total = backend.list_razors(0, 10)
        blades, blade_total = backend.list_blades(0, 10)
        records, record_total = backend.list_usage_records(0, 10)

        assert (razor_total, blade_total, record_total) == (2, 2, 1)
        assert [r.model for r in razors] == ["Fusion 5", "OneBlade Pro"]
        assert [b.id for b in blades] == [1, 2]
        assert records[0].rating == 4
        assert records[0].blade_usage_count == 5
        assert records[0].razor.id == 1
        assert records[0].blade.id == 1

    def test_next_ids_follow_seed(self):
        backend = MemoryBackend()

        assert backend.create_razor(make_razor("Merkur", "34C")).id == 3
        assert backend.create_blade(make_blade("Astra", "Superior Platinum")).id == 3
        assert backend.create_usage_record(make_usage()).id == 2

    def test_unseeded_store_is_empty(self, memory_backend):
        assert memory_backend.list_razors(0, 10) == ([], 0)
        assert memory_backend.statistics().total_usage == 0


class TestRazorMutation:

    def test_update_razor_unavailable(self):
        backend = MemoryBackend()
        razor = backend.get_razor(1)
        razor.notes = "changed"

        with pytest.raises(BackendUnavailableError):
            backend.update_razor(razor)
        assert backend.get_razor(1).notes == "Classic five blade razor"

    def test_delete_razor_unavailable(self):
        backend = MemoryBackend()

        with pytest.raises(BackendUnavailableError):
            backend.delete_razor(1)
        assert backend.get_razor(1).id == 1

    def test_capability_flag(self):
        assert MemoryBackend.supports_razor_mutation is False


class TestConcurrency:

    def test_concurrent_creates_get_unique_ids(self, memory_backend):
        ids = []
        ids_lock = threading.Lock()

        def worker():
            for _ in range(25):
                blade = memory_backend.create_blade(make_blade())
                with ids_lock:
                    ids.append(blade.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(ids) == 200
        assert sorted(ids) == list(range(1, 201))
        assert memory_backend.list_blades(0, 1)[1] == 200


class TestReadWriteLock:

    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=2)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=3)

        assert not any(thread.is_alive() for thread in threads)

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        writer_holding = threading.Event()

        def writer():
            with lock.write():
                writer_holding.set()
                time.sleep(0.1)
                events.append("write done")

        def reader():
            writer_holding.wait()
            with lock.read():
                events.append("read")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=3)

        assert events == ["write done", "read"]
