# -*- coding: utf-8 -*-
"""Analytics — process-wide service object.

Built once at startup and injected into request handlers. ``start`` arms the
midnight counter reset; ``shutdown`` cancels it.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Union

from ..config import Settings
from . import queries
from .models import DayRecord, SummaryReport, TodaySnapshot
from .recorder import DailyCounters, EventKind, EventPayload, EventRecorder
from .scheduler import CounterResetScheduler
from .storage import Clock, LedgerStore, utc_now

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(
        self,
        store: LedgerStore,
        *,
        clock: Optional[Clock] = None,
        scheduler_factory: Callable[[DailyCounters], CounterResetScheduler] = CounterResetScheduler,
    ) -> None:
        self.store = store
        self._clock = clock or utc_now
        self.counters = DailyCounters()
        self.recorder = EventRecorder(store, self.counters, clock=self._clock)
        self.scheduler = scheduler_factory(self.counters)

    @classmethod
    def from_settings(cls, cfg: Settings, *, clock: Optional[Clock] = None) -> "AnalyticsService":
        store = LedgerStore(cfg.analytics_file, retention_days=cfg.retention_days, clock=clock)
        return cls(store, clock=clock)

    # lifecycle

    def start(self) -> None:
        self.scheduler.start()
        logger.info("Analytics service started (ledger=%s)", self.store.path)

    def shutdown(self) -> None:
        self.scheduler.stop()
        logger.info("Analytics service stopped")

    # writes

    def record(self, kind: Union[EventKind, str], payload: EventPayload = None) -> DayRecord:
        return self.recorder.record(kind, payload)

    def log_goal_selection(self, goal: str) -> DayRecord:
        return self.recorder.log_goal_selection(goal)

    def log_successful_request(self, payload: EventPayload = None) -> DayRecord:
        return self.recorder.log_successful_request(payload)

    def log_failed_request(self, payload: EventPayload = None) -> DayRecord:
        return self.recorder.log_failed_request(payload)

    # reads

    def today(self) -> str:
        return self._clock().date().isoformat()

    def get_day(self, day: str) -> DayRecord:
        return queries.get_day(self.store.load(), day)

    def get_range(self, start: str, end: str) -> Dict[str, DayRecord]:
        return queries.get_range(self.store.load(), start, end)

    def get_summary(self, days: int = 7) -> SummaryReport:
        return queries.get_summary(self.store.load(), days, self._clock().date())

    def today_snapshot(self) -> TodaySnapshot:
        today = self.today()
        return TodaySnapshot(date=today, data=self.get_day(today), current_counters=self.counters.snapshot())
