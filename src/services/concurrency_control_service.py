"""
Concurrency Control Service for the CardParty game

Hands out the per-room locks that serialize everything touching a room:
socket events, membership changes and round clock ticks.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict

logger = logging.getLogger(__name__)


class ConcurrencyControlService:
    """Manages per-room locking."""

    def __init__(self):
        # Per-room locks for fine-grained control
        self._room_locks: Dict[str, threading.RLock] = {}
        # Lock for managing room locks themselves
        self._locks_lock = threading.Lock()

    def get_room_lock(self, room_id: str) -> threading.RLock:
        """Get or create a lock for a specific room."""
        with self._locks_lock:
            if room_id not in self._room_locks:
                self._room_locks[room_id] = threading.RLock()
            return self._room_locks[room_id]

    def cleanup_room_lock(self, room_id: str):
        """
        Clean up lock for a deleted room.

        Callers must hold the room lock, so a lock is only ever dropped by its owner.
        """
        with self._locks_lock:
            if room_id in self._room_locks:
                del self._room_locks[room_id]

    def _is_registered(self, room_id: str, room_lock) -> bool:
        with self._locks_lock:
            return self._room_locks.get(room_id) is room_lock

    @contextmanager
    def room_operation(self, room_id: str):
        """
        Context manager for thread-safe room operations.

        A waiter that wakes up on a lock dropped while it was blocked retries
        with the lock now registered for the room.
        """
        while True:
            room_lock = self.get_room_lock(room_id)
            room_lock.acquire()
            if self._is_registered(room_id, room_lock):
                break
            room_lock.release()
            logger.debug(f"Lock for room {room_id} was replaced while waiting, retrying")

        try:
            yield
        finally:
            room_lock.release()
