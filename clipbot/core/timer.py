"""Cancellable asyncio delay."""

import asyncio
import time
from typing import Optional


class CancellableDelay:
    """
    A sleep that another task can cut short.

    ``wait()`` returns True when the full delay elapsed and False when
    ``cancel()`` was called first. Waiting never blocks a thread.
    """

    def __init__(self, seconds: float):
        self.seconds = seconds
        self._cancelled = asyncio.Event()
        self.started_at: Optional[float] = None
        self.finished_at: Optional[float] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def cancel(self) -> None:
        self._cancelled.set()

    async def wait(self) -> bool:
        self.started_at = time.monotonic()
        try:
            if self.cancelled:
                return False
            if self.seconds <= 0:
                return True
            try:
                await asyncio.wait_for(self._cancelled.wait(), timeout=self.seconds)
            except asyncio.TimeoutError:
                return True
            return False
        finally:
            self.finished_at = time.monotonic()
