"""
Deterministic tick scheduler for round clock tests.

Callbacks only run when the test advances the fake clock.
"""


class ManualHandle:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTickScheduler:
    """Drop-in for ThreadingTickScheduler driven by advance()."""

    def __init__(self):
        self.now = 0.0
        self._pending = []

    def call_later(self, delay, callback):
        handle = ManualHandle(self.now + delay, callback)
        self._pending.append(handle)
        return handle

    @property
    def pending(self):
        return [handle for handle in self._pending if not handle.cancelled]

    def advance(self, seconds):
        """Move time forward, running due callbacks in order (including ones they schedule)."""
        target = self.now + seconds
        while True:
            due = [handle for handle in self.pending if handle.due <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            self._pending.remove(handle)
            self.now = handle.due
            handle.callback()
        self.now = target

    def run_ticks(self, count, interval=1.0):
        for _ in range(count):
            self.advance(interval)
