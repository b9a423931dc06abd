"""
Round Clock - Countdown that drives automatic stage transitions.

One clock belongs to one game session. Arming it replaces whatever countdown
was running; ticks run under the session lock so they are serialized with
player commands and membership changes.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ThreadingTickScheduler:
    """Schedules callbacks on timer threads (green threads under eventlet)."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        """Run ``callback`` once after ``delay`` seconds; returns a cancellable handle."""
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class RoundClock:
    """Replaceable countdown that ticks once per interval and signals expiry."""

    def __init__(self, scheduler, lock, on_tick: Callable[[int], None], on_expire: Callable[[], None],
                 should_broadcast: Callable[[], bool], interval: float = 1.0):
        """Initialize the round clock.

        Args:
            scheduler: Object exposing call_later(delay, callback) -> handle with cancel()
            lock: The owning session's lock, held while a tick runs
            on_tick: Receives the remaining time whenever a tick is broadcast
            on_expire: Called once when the countdown reaches zero
            should_broadcast: Tells whether the current tick is emitted
            interval: Seconds between ticks
        """
        self._scheduler = scheduler
        self._lock = lock
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._should_broadcast = should_broadcast
        self.interval = interval

        self._remaining = 0
        self._handle = None
        # Bumped on every arm/cancel; callbacks from older schedules see a mismatch and do nothing
        self._generation = 0
        self._armed = False

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_armed(self) -> bool:
        return self._armed

    def arm(self, duration: int):
        """Start a new countdown, replacing any running one.

        The first tick fires synchronously so observers see the new value at
        once rather than one interval later.
        """
        with self._lock:
            self.cancel()
            self._remaining = duration
            self._armed = True
            generation = self._generation
            logger.debug(f"Clock armed for {duration} ticks (generation {generation})")

            self._broadcast()
            if self._remaining <= 0:
                self._expire()
                return

            self._schedule_next(generation)

    def cancel(self):
        """Stop ticking. Safe to call when nothing is armed."""
        with self._lock:
            self._generation += 1
            self._armed = False
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None

    def _schedule_next(self, generation: int):
        self._handle = self._scheduler.call_later(self.interval, lambda: self._tick(generation))

    def _tick(self, generation: int):
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Dropping tick from superseded clock generation {generation}")
                return

            self._handle = None
            self._remaining -= 1
            self._broadcast()

            if self._remaining <= 0:
                self._expire()
                return

            self._schedule_next(generation)

    def _broadcast(self):
        if self._should_broadcast():
            self._on_tick(self._remaining)

    def _expire(self):
        self._generation += 1
        self._armed = False
        self._handle = None
        logger.debug("Clock expired")
        self._on_expire()
