# -*- coding: utf-8 -*-
"""Analytics — Pydantic models.

Field names are snake_case in Python and camelCase on the wire and in the
ledger file (``totalRequests``, ``uniqueCallers`` ...).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from ..schemas import CamelModel


class ErrorEntry(CamelModel):
    message: str
    timestamp: str
    request_id: Optional[str] = None


class DayRecord(CamelModel):
    """Aggregate of one calendar day, keyed by its ISO date in the ledger."""

    date: str
    total_requests: int = Field(0, ge=0)
    successful_requests: int = Field(0, ge=0)
    failed_requests: int = Field(0, ge=0)
    goal_selections: Dict[str, int] = Field(default_factory=dict)
    errors: List[ErrorEntry] = Field(default_factory=list)
    # Serialized as a JSON array; first-seen order, no duplicates.
    unique_callers: List[str] = Field(default_factory=list)
    first_request_at: Optional[str] = None
    last_request_at: Optional[str] = None
    average_response_time: float = Field(0.0, ge=0)
    timed_requests: int = Field(0, ge=0)

    @field_validator("unique_callers")
    @classmethod
    def _dedupe_callers(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _check_totals(self) -> "DayRecord":
        self.check_consistency()
        return self

    def check_consistency(self) -> None:
        if self.total_requests != self.successful_requests + self.failed_requests:
            raise ValueError(
                f"totalRequests ({self.total_requests}) != successfulRequests "
                f"({self.successful_requests}) + failedRequests ({self.failed_requests})"
            )
        if any(count < 0 for count in self.goal_selections.values()):
            raise ValueError("goalSelections counts must be non-negative")

    def add_goal(self, goal: str) -> None:
        self.goal_selections[goal] = self.goal_selections.get(goal, 0) + 1

    def add_caller(self, caller_id: str) -> None:
        if caller_id not in self.unique_callers:
            self.unique_callers.append(caller_id)

    def mark_request(self, timestamp: str) -> None:
        self.last_request_at = timestamp
        if self.first_request_at is None:
            self.first_request_at = timestamp

    def add_response_time(self, millis: float) -> None:
        self.timed_requests += 1
        self.average_response_time += (millis - self.average_response_time) / self.timed_requests
        self.average_response_time = round(self.average_response_time, 3)


class RequestEvent(CamelModel):
    """Payload of a successful or failed request event.

    Accepts either snake_case or camelCase keys (``request_id``/``requestId``).
    """

    request_id: Optional[str] = None
    caller_id: Optional[str] = None
    age: Optional[int] = None
    goal: Optional[str] = None
    suggestions_count: Optional[int] = None
    error_message: Optional[str] = None
    response_time_ms: Optional[float] = Field(None, ge=0)

    def log_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class GoalPopularity(CamelModel):
    goal: str
    count: int
    percentage: str


class SummaryTotals(CamelModel):
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    success_rate: str = "0"
    unique_users: int = 0
    popular_goals: List[GoalPopularity] = Field(default_factory=list)


class SummaryReport(CamelModel):
    period: str
    start_date: str
    end_date: str
    summary: SummaryTotals
    daily_data: Dict[str, DayRecord] = Field(default_factory=dict)


class DayResponse(CamelModel):
    date: str
    data: DayRecord


class TodaySnapshot(CamelModel):
    date: str
    data: DayRecord
    current_counters: Dict[str, Any]
