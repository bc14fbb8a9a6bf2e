"""
Single-threaded UI event loop model.

Deferred callbacks are queued with ``call_later`` and run when the loop's
clock is advanced past their due time. There is no cancellation; callbacks
that mutate shared state simply overwrite each other in the order they run.
"""

import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class UILoop:
    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def call_later(self, delay, callback, *args):
        """Schedule ``callback(*args)`` to run ``delay`` seconds from now."""
        due = self.now + max(0.0, float(delay))
        heapq.heappush(self._queue, (due, next(self._seq), callback, args))

    @property
    def pending(self):
        return len(self._queue)

    def advance(self, seconds):
        """
        Move the clock forward, running every callback that falls due.

        Callbacks scheduled while advancing run too if they fall inside the
        window.

        Returns:
            int: Number of callbacks run
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback, args = heapq.heappop(self._queue)
            self.now = due
            callback(*args)
            ran += 1
        self.now = target
        return ran

    def run_until_idle(self, limit=10000):
        """Run queued callbacks in due order until none remain."""
        ran = 0
        while self._queue:
            if ran >= limit:
                logger.warning(f"UI loop still busy after {limit} callbacks")
                break
            due, _, callback, args = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            callback(*args)
            ran += 1
        return ran
