"""
Adapter: Per-client in-process locks.

Implements ClientLockPort.
Serializes risk-limit adjustments for the same client inside one
process. Cross-process safety comes from the optimistic check in
InvestmentRepositoryAdapter.
"""

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator

from app.domain.advisory.ports import ClientLockPort


class ClientLockRegistry(ClientLockPort):
    """Hands out one lock per client ID, created on first use.

    Locks are held weakly: a client's lock is dropped once nobody holds
    or waits for it, so the registry only keeps clients in flight.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[int, threading.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, client_id: int) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(client_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[client_id] = lock
            return lock

    @contextmanager
    def hold(self, client_id: int) -> Iterator[None]:
        """Block until the client's lock is free and hold it for the block."""
        lock = self._lock_for(client_id)
        with lock:
            yield
