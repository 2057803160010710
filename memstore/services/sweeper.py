"""Background task that drives countdown expiration."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..schemas.sessions import SweepReport

SweepCallable = Callable[[], Awaitable[SweepReport]]

logger = logging.getLogger(__name__)


class Sweeper:
    """Run ``sweep`` every ``interval`` seconds until stopped."""

    def __init__(self, sweep: SweepCallable, interval: float) -> None:
        if interval <= 0:
            raise ValueError("Sweep interval must be positive")
        self._sweep = sweep
        self.interval = interval
        self._task: Optional[asyncio.Task[None]] = None
        self.cycles = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""

        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info("Session sweeper started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""

        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
        # wait() lets cancellation of the caller propagate.
        await asyncio.wait([task])
        if not task.cancelled():
            task.result()
        logger.info("Session sweeper stopped after %d cycle(s)", self.cycles)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                report = await self._sweep()
            except Exception:
                logger.exception("Session sweep failed")
                continue
            self.cycles += 1
            logger.debug(
                "Sweep cycle %d: checked=%d evicted=%d remaining=%d",
                self.cycles,
                report.checked,
                report.evicted,
                report.remaining,
            )
