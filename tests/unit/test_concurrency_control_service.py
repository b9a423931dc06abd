"""
Concurrency Control Service Unit Tests
Tests per-room locks and what happens to waiters when a room's lock is dropped.
"""

import threading
import time

from src.services.concurrency_control_service import ConcurrencyControlService


class TestConcurrencyControlService:

    def setup_method(self):
        self.service = ConcurrencyControlService()

    def test_same_room_same_lock(self):
        assert self.service.get_room_lock('r1') is self.service.get_room_lock('r1')
        assert self.service.get_room_lock('r1') is not self.service.get_room_lock('r2')

    def test_cleanup_mints_fresh_lock(self):
        old = self.service.get_room_lock('r1')

        self.service.cleanup_room_lock('r1')
        self.service.cleanup_room_lock('r1')

        assert self.service.get_room_lock('r1') is not old

    def test_room_operation_is_reentrant(self):
        with self.service.room_operation('r1'):
            with self.service.room_operation('r1'):
                pass

        assert self.service.get_room_lock('r1').acquire(blocking=False)
        self.service.get_room_lock('r1').release()

    def test_waiter_on_dropped_lock_takes_registered_lock(self):
        stale = self.service.get_room_lock('r1')
        inside = threading.Event()
        finish = threading.Event()

        def operation():
            with self.service.room_operation('r1'):
                inside.set()
                finish.wait(2)

        stale.acquire()
        worker = threading.Thread(target=operation)
        worker.start()
        time.sleep(0.05)
        self.service.cleanup_room_lock('r1')
        stale.release()

        try:
            assert inside.wait(2)
            current = self.service.get_room_lock('r1')
            assert current is not stale
            # The waiter holds the lock other requests for the room will queue on
            assert current.acquire(blocking=False) is False
        finally:
            finish.set()
            worker.join(2)
