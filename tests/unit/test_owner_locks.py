"""Unit tests for the owner lock table"""

import threading
import time

from backoffice.utils.owner_locks import OwnerLockTable


class TestOwnerLockTable:
    """Test per-owner mutual exclusion"""

    def test_same_owner_is_serialized(self):
        """Test two holders of the same owner never overlap"""
        locks = OwnerLockTable()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("owner-1"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(True)
                time.sleep(0.01)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []

    def test_different_owners_do_not_block(self):
        """Test a held owner lock does not block another owner"""
        locks = OwnerLockTable()
        entered = threading.Event()

        def other_owner():
            with locks.hold("owner-2"):
                entered.set()

        with locks.hold("owner-1"):
            thread = threading.Thread(target=other_owner)
            thread.start()
            assert entered.wait(timeout=2)
            thread.join()

    def test_entries_are_released(self):
        """Test the table is empty once nobody holds a lock"""
        locks = OwnerLockTable()
        with locks.hold("owner-1"):
            assert list(locks._locks) == ["owner-1"]
        assert locks._locks == {}
        assert locks._waiters == {}

    def test_lock_released_on_error(self):
        """Test an exception inside the block releases the lock"""
        locks = OwnerLockTable()
        try:
            with locks.hold("owner-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert locks._locks == {}
        with locks.hold("owner-1"):
            pass
