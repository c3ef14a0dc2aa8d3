"""Randomized, human-paced delays between page interactions"""

import random

from loguru import logger

from .config import LEG_ADVANCE_MAX_DELAY, LEG_ADVANCE_MIN_DELAY


class DelayPolicy:
    """
    Picks a uniformly random pause within [min_ms, max_ms].

    Injected into the search flow so tests can use ``DelayPolicy.none()``.
    """

    def __init__(
        self,
        min_ms: float = LEG_ADVANCE_MIN_DELAY,
        max_ms: float = LEG_ADVANCE_MAX_DELAY,
    ):
        if min_ms < 0 or max_ms < 0:
            raise ValueError("Delay bounds must be non-negative")
        if max_ms < min_ms:
            raise ValueError(f"Maximum delay {max_ms}ms is below minimum {min_ms}ms")
        self.min_ms = min_ms
        self.max_ms = max_ms

    @classmethod
    def none(cls) -> "DelayPolicy":
        return cls(0, 0)

    def next_delay(self) -> float:
        return random.uniform(self.min_ms, self.max_ms)

    async def wait(self, browser) -> float:
        """Pause the page for a random interval; returns the interval in ms"""
        delay_ms = self.next_delay()
        if delay_ms > 0:
            logger.debug(f"Waiting {delay_ms / 1000:.1f}s before next step")
            await browser.delay(delay_ms)
        return delay_ms

    def __repr__(self) -> str:
        return f"DelayPolicy(min_ms={self.min_ms}, max_ms={self.max_ms})"
