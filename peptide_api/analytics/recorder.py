# -*- coding: utf-8 -*-
"""Analytics — event recorder.

Each event bumps the in-memory daily counters, is written to the analytics
log, and is applied to the persisted ledger before ``record`` returns.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..logging_setup import ANALYTICS_LOGGER_NAME
from .models import DayRecord, ErrorEntry, RequestEvent
from .storage import Clock, LedgerStore, utc_now

analytics_log = logging.getLogger(ANALYTICS_LOGGER_NAME)

UNKNOWN_CALLER = "unknown"
UNKNOWN_ERROR = "Unknown error"

EventPayload = Union[RequestEvent, Mapping[str, Any], str, None]


class EventKind(str, Enum):
    GOAL_SELECTION = "goal_selection"
    SUCCESSFUL_REQUEST = "successful_request"
    FAILED_REQUEST = "failed_request"

    @classmethod
    def _missing_(cls, value: object) -> Optional["EventKind"]:
        # Also accept "GoalSelection", "successfulRequest", "FAILED_REQUEST" ...
        if isinstance(value, str):
            wanted = value.replace("_", "").replace("-", "").lower()
            for member in cls:
                if member.value.replace("_", "") == wanted:
                    return member
        return None


@dataclass
class DailyCounters:
    """Process-local mirror of today's activity. Not authoritative."""

    requests: int = 0
    errors: int = 0
    successful_requests: int = 0
    goal_selections: Dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_goal(self, goal: str) -> None:
        with self._lock:
            self.goal_selections[goal] = self.goal_selections.get(goal, 0) + 1

    def add_success(self) -> None:
        with self._lock:
            self.requests += 1
            self.successful_requests += 1

    def add_failure(self) -> None:
        with self._lock:
            self.requests += 1
            self.errors += 1

    def reset(self) -> None:
        with self._lock:
            self.requests = 0
            self.errors = 0
            self.successful_requests = 0
            self.goal_selections = {}

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "requests": self.requests,
                "goalSelections": dict(self.goal_selections),
                "errors": self.errors,
                "successfulRequests": self.successful_requests,
            }


def _iso(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_event(payload: EventPayload) -> RequestEvent:
    if payload is None:
        return RequestEvent()
    if isinstance(payload, RequestEvent):
        return payload
    if isinstance(payload, Mapping):
        return RequestEvent.model_validate(dict(payload))
    raise TypeError(f"Unsupported request event payload: {type(payload).__name__}")


class EventRecorder:
    """Single writer of the analytics ledger."""

    def __init__(
        self,
        store: LedgerStore,
        counters: Optional[DailyCounters] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.counters = counters if counters is not None else DailyCounters()
        self._clock = clock or utc_now

    def record(self, kind: Union[EventKind, str], payload: EventPayload = None) -> DayRecord:
        kind = EventKind(kind)
        if kind is EventKind.GOAL_SELECTION:
            if isinstance(payload, str) or payload is None:
                goal = payload
            else:
                goal = _coerce_event(payload).goal
            return self.log_goal_selection(goal or "")
        event = _coerce_event(payload)
        if kind is EventKind.SUCCESSFUL_REQUEST:
            return self.log_successful_request(event)
        return self.log_failed_request(event)

    def log_goal_selection(self, goal: str) -> DayRecord:
        if not goal:
            raise ValueError("goal must be a non-empty string")
        now = self._clock()
        day, ts = now.date().isoformat(), _iso(now)

        self.counters.add_goal(goal)
        analytics_log.info(
            "goal_selection",
            extra={"event": EventKind.GOAL_SELECTION.value, "goal": goal, "date": day, "timestamp": ts},
        )

        return self.store.apply_and_persist(day, lambda record: record.add_goal(goal))

    def log_successful_request(self, payload: EventPayload = None) -> DayRecord:
        event = _coerce_event(payload)
        now = self._clock()
        day, ts = now.date().isoformat(), _iso(now)

        self.counters.add_success()
        analytics_log.info(
            "successful_request",
            extra={"event": EventKind.SUCCESSFUL_REQUEST.value, **event.log_fields(), "date": day, "timestamp": ts},
        )

        def mutate(record: DayRecord) -> None:
            record.total_requests += 1
            record.successful_requests += 1
            self._touch(record, event, ts)

        return self.store.apply_and_persist(day, mutate)

    def log_failed_request(self, payload: EventPayload = None) -> DayRecord:
        event = _coerce_event(payload)
        now = self._clock()
        day, ts = now.date().isoformat(), _iso(now)

        self.counters.add_failure()
        analytics_log.info(
            "failed_request",
            extra={"event": EventKind.FAILED_REQUEST.value, **event.log_fields(), "date": day, "timestamp": ts},
        )

        def mutate(record: DayRecord) -> None:
            record.total_requests += 1
            record.failed_requests += 1
            record.errors.append(
                ErrorEntry(
                    message=event.error_message or UNKNOWN_ERROR,
                    timestamp=ts,
                    request_id=event.request_id,
                )
            )
            self._touch(record, event, ts)

        return self.store.apply_and_persist(day, mutate)

    @staticmethod
    def _touch(record: DayRecord, event: RequestEvent, ts: str) -> None:
        record.add_caller(event.caller_id or UNKNOWN_CALLER)
        record.mark_request(ts)
        if event.response_time_ms is not None:
            record.add_response_time(event.response_time_ms)
