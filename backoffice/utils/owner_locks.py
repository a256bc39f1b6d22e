"""
Owner Lock Table
================

Owner-keyed mutual exclusion for workflows that touch several records
belonging to the same owner (e.g. the default bank account flag).

Commands for the same owner run one at a time; commands for different
owners never share a lock. Entries are dropped as soon as no thread holds
or waits on them, so the table does not grow with the number of owners seen.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class OwnerLockTable:
    """Thread-safe table of per-owner locks."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @contextmanager
    def hold(self, owner_id: str) -> Iterator[None]:
        """Hold the lock for owner_id for the duration of the with-block."""
        with self._guard:
            lock = self._locks.setdefault(owner_id, threading.Lock())
            self._waiters[owner_id] = self._waiters.get(owner_id, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[owner_id] -= 1
                if self._waiters[owner_id] == 0:
                    del self._waiters[owner_id]
                    del self._locks[owner_id]
