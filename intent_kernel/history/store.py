"""
Intent History Store — owns every user's priority history.

Written by: Intent History Tracker (learn)
Read by: Intent History Tracker (predict, consistency)

Lifecycle: starts empty, grows for the lifetime of the process. Entries
are append-only and kept in arrival order. Only appends register a user;
reads of an unknown user see an empty history and leave no trace.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence

from intent_kernel.models.priority import PriorityVector


class IntentHistoryStore:
    """
    In-memory per-user history with one lock per user id.

    Calls for distinct users never contend; the registry lock is held only
    long enough to look up or create a user's lock.
    """

    def __init__(self):
        self._histories: Dict[str, List[PriorityVector]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    def _existing_lock(self, user_id: str) -> Optional[threading.Lock]:
        with self._registry_lock:
            return self._locks.get(user_id)

    @contextmanager
    def reading(self, user_id: str) -> Iterator[Sequence[PriorityVector]]:
        """
        Exclusive read access to one user's history.

        Yields an empty tuple for users that have never been written.
        """
        lock = self._existing_lock(user_id)
        if lock is None:
            yield ()
            return
        with lock:
            yield self._histories.get(user_id, ())

    def append(self, user_id: str, vector: PriorityVector) -> int:
        """Append a vector to a user's history. Returns the new size."""
        with self._lock_for(user_id):
            history = self._histories.setdefault(user_id, [])
            history.append(vector)
            return len(history)

    def snapshot(self, user_id: str) -> List[PriorityVector]:
        """Copy of a user's full history, oldest first."""
        with self.reading(user_id) as history:
            return list(history)

    def size(self, user_id: str) -> int:
        with self.reading(user_id) as history:
            return len(history)

    def users(self) -> List[str]:
        """User ids with at least one recorded vector."""
        with self._registry_lock:
            return list(self._locks)

    def registered_count(self) -> int:
        with self._registry_lock:
            return len(self._locks)
