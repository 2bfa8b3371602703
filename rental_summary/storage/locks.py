"""
Exclusion discipline for the detail and summary stores.

Three kinds of hold:

- ``shared()``: readers and inserts. Any number at once.
- ``category(name)``: a shared hold plus a per-category mutex. Two inserts into
  the same category run one after the other; different categories run in
  parallel.
- ``exclusive()``: a full refresh. Waits for every shared holder to leave and
  keeps new ones out until it is done. A waiting exclusive holder blocks new
  shared holders so a steady stream of inserts cannot starve a refresh.

Holds are not re-entrant.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Generator


class StoreGuard:
    """Readers-writer lock with per-category serialization for inserts."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._category_locks: Dict[str, threading.Lock] = {}
        self._category_locks_mutex = threading.Lock()

    def _category_lock(self, name: str) -> threading.Lock:
        with self._category_locks_mutex:
            lock = self._category_locks.get(name)
            if lock is None:
                lock = self._category_locks[name] = threading.Lock()
            return lock

    @contextmanager
    def shared(self) -> Generator[None, None, None]:
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
    def exclusive(self) -> Generator[None, None, None]:
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

    @contextmanager
    def category(self, name: str) -> Generator[None, None, None]:
        with self.shared():
            with self._category_lock(name):
                yield


__all__ = ["StoreGuard"]
