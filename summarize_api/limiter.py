# GPL-3.0-only
# summarize_api/limiter.py

from __future__ import annotations
import asyncio
import time
from typing import Optional, Set

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from loguru import logger


class RateLimiter:
    """Moving-window request limiter keyed by client identifier.

    A request is allowed while fewer than `max_requests` hits for the
    identifier fall inside the trailing `window_seconds`; denied requests are
    not recorded and never wait.

    Counters live in this process's memory storage only. Behind several
    instances the effective limit is approximate.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: int = 60,
        sweep_interval_seconds: float = 300.0,
        enabled: bool = True,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = int(window_seconds)
        self.sweep_interval_seconds = sweep_interval_seconds
        self.enabled = enabled
        self.item = RateLimitItemPerSecond(max_requests, self.window_seconds)
        self._storage = MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)
        self._identifiers: Set[str] = set()
        self._sweep_task: Optional[asyncio.Task] = None

    def allow(self, identifier: str) -> bool:
        """Record a request for `identifier` if it fits in the window."""
        if not self.enabled:
            return True
        self._identifiers.add(identifier)
        if self._strategy.hit(self.item, identifier):
            return True
        logger.debug("Rate limit hit for {}", identifier)
        return False

    def remaining(self, identifier: str) -> int:
        stats = self._strategy.get_window_stats(self.item, identifier)
        return max(stats.remaining, 0)

    def retry_after(self, identifier: str) -> float:
        """Seconds until `identifier` may send another request."""
        stats = self._strategy.get_window_stats(self.item, identifier)
        if stats.remaining > 0:
            return 0.0
        return max(stats.reset_time - time.time(), 0.0)

    def sweep(self) -> int:
        """Forget identifiers with no hits left inside the window."""
        removed = 0
        for identifier in list(self._identifiers):
            if self.remaining(identifier) >= self.max_requests:
                self._strategy.clear(self.item, identifier)
                self._identifiers.discard(identifier)
                removed += 1
        if removed:
            logger.debug("Rate limiter sweep removed {} identifiers", removed)
        return removed

    def reset(self) -> None:
        self._storage.reset()
        self._identifiers.clear()

    def __len__(self) -> int:
        return len(self._identifiers)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._identifiers

    # ----- lifecycle -----

    @property
    def running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            self.sweep()

    def start(self) -> None:
        """Launch the periodic sweep on the running event loop."""
        if self.running:
            return
        self._sweep_task = asyncio.create_task(
            self._sweep_loop(),
            name="rate-limiter-sweep",
        )
        logger.info(
            "Rate limiter started: {}, sweep every {}s",
            self.item,
            self.sweep_interval_seconds,
        )

    async def stop(self) -> None:
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Rate limiter stopped")
