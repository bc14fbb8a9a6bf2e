"""
Bounded retry on the UI loop.
"""

import logging

logger = logging.getLogger(__name__)

PENDING = 'pending'
SUCCEEDED = 'succeeded'
FAILED = 'failed'


class RetryTask:
    """
    Poll ``probe`` until it returns truthy, at most ``attempts`` times,
    ``interval`` seconds apart.

    The first attempt runs synchronously in ``start``. ``on_success`` receives
    the probe's result; ``on_failure`` runs once after the last attempt fails.
    """

    def __init__(self, loop, probe, on_success, on_failure=None,
                 attempts=10, interval=0.3, name='task'):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.loop = loop
        self.probe = probe
        self.on_success = on_success
        self.on_failure = on_failure
        self.attempts = attempts
        self.interval = interval
        self.name = name
        self.attempts_made = 0
        self.state = PENDING

    def start(self):
        self._attempt()
        return self

    def _attempt(self):
        if self.state != PENDING:
            return
        self.attempts_made += 1
        result = self.probe()
        if result:
            self.state = SUCCEEDED
            self.on_success(result)
            return

        if self.attempts_made >= self.attempts:
            self.state = FAILED
            logger.warning(f"{self.name}: gave up after {self.attempts_made} attempts")
            if self.on_failure is not None:
                self.on_failure()
            return

        logger.debug(f"{self.name}: attempt {self.attempts_made} failed, retrying in {self.interval}s")
        self.loop.call_later(self.interval, self._attempt)
