# -*- coding: utf-8 -*-
"""Daily analytics: event recorder, JSON ledger store, and range/summary queries.

The ledger file is the source of truth. In-memory counters only mirror the
current day and are reset at local midnight.
"""

from .models import DayRecord, ErrorEntry, GoalPopularity, RequestEvent, SummaryReport
from .recorder import DailyCounters, EventKind, EventRecorder
from .service import AnalyticsService
from .storage import LedgerStore, LedgerWriteError

__all__ = [
    "AnalyticsService",
    "DailyCounters",
    "DayRecord",
    "ErrorEntry",
    "EventKind",
    "EventRecorder",
    "GoalPopularity",
    "LedgerStore",
    "LedgerWriteError",
    "RequestEvent",
    "SummaryReport",
]
