"""Tests for per-owner locking."""

import threading

import pytest
from storefront.errors import Unavailable
from storefront.ordering.locks import OwnerLocks


class TestOwnerLocks:
    def test_entries_released_after_use(self):
        locks = OwnerLocks(timeout=1.0)
        with locks.hold("acc-1"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_released_on_error(self):
        locks = OwnerLocks(timeout=1.0)
        with pytest.raises(RuntimeError):
            with locks.hold("acc-1"):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_different_owners_do_not_block(self):
        locks = OwnerLocks(timeout=0.1)
        with locks.hold("acc-1"):
            with locks.hold("acc-2"):
                assert len(locks) == 2

    def test_contended_owner_times_out(self):
        locks = OwnerLocks(timeout=0.05)
        held = threading.Event()
        release = threading.Event()

        def holder():
            with locks.hold("acc-1"):
                held.set()
                release.wait(timeout=2)

        thread = threading.Thread(target=holder)
        thread.start()
        try:
            assert held.wait(timeout=2)
            with pytest.raises(Unavailable):
                with locks.hold("acc-1"):
                    pass
        finally:
            release.set()
            thread.join()

        assert len(locks) == 0

    def test_same_owner_is_serialized(self):
        locks = OwnerLocks(timeout=2.0)
        inside = []
        overlaps = []

        def worker():
            with locks.hold("acc-1"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(True)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert overlaps == []
