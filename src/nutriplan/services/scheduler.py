"""Recurring asyncio trigger for the deadline auto-assignment job."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

from nutriplan.services.auto_assignment import AutoAssignmentService
from nutriplan.services.selection import Clock, SelectionWindowPolicy

_logger = logging.getLogger(__name__)


@dataclass
class AutoAssignmentScheduler:
    """Sleep until each selection deadline, then run the auto-assignment job."""

    service: AutoAssignmentService
    policy: SelectionWindowPolicy
    clock: Clock
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _last_deadline: datetime | None = field(default=None, init=False, repr=False)

    def start(self) -> None:
        """Start the background loop on the running event loop."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self.run_forever())
        _logger.info("Auto-assignment scheduler started")

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        _logger.info("Auto-assignment scheduler stopped")

    async def run_forever(self) -> None:
        while True:
            await self.run_next()

    async def run_next(self) -> None:
        """Wait for the next deadline and run one sweep."""
        now = self.clock.now()
        # An early wake-up must not fire the same deadline twice.
        reference = now
        if self._last_deadline is not None and self._last_deadline > now:
            reference = self._last_deadline
        deadline = self.policy.next_deadline_after(reference)
        self._last_deadline = deadline
        delay = max((deadline - now).total_seconds(), 0.0)
        _logger.info(
            "Next auto-assignment at %s (in %.0f seconds)", deadline.isoformat(), delay
        )
        await self.sleep(delay)
        try:
            await asyncio.to_thread(self.service.run_auto_assignment, deadline)
        except Exception:
            _logger.exception("Auto-assignment run failed")
