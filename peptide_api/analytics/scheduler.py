# -*- coding: utf-8 -*-
"""Analytics — midnight reset of the in-memory daily counters."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .recorder import DailyCounters

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


def seconds_until_midnight(now: Optional[datetime] = None) -> float:
    """Seconds from ``now`` (local time) to the next local midnight."""
    now = now or datetime.now()
    midnight = (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
    return max((midnight - now).total_seconds(), 0.0)


class CounterResetScheduler:
    """Resets ``DailyCounters`` at every local midnight until stopped.

    Only the in-memory counters are touched, never the ledger file.
    """

    def __init__(
        self,
        counters: DailyCounters,
        *,
        now: Callable[[], datetime] = datetime.now,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._counters = counters
        self._now = now
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._arm()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _arm(self) -> None:
        delay = seconds_until_midnight(self._now())
        timer = self._timer_factory(delay, self._fire)
        timer.daemon = True
        timer.start()
        self._timer = timer
        logger.debug("Next analytics counter reset in %.0fs", delay)

    def _fire(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._counters.reset()
            logger.info("Daily analytics counters reset")
            self._arm()
