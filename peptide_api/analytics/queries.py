# -*- coding: utf-8 -*-
"""Analytics — read-only queries over a ledger snapshot."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, Iterator

from .models import DayRecord, GoalPopularity, SummaryReport, SummaryTotals
from .storage import Ledger, empty_day, parse_date


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _percent(part: int, whole: int) -> str:
    if whole <= 0:
        return "0.0"
    return f"{part / whole * 100:.1f}"


def get_day(ledger: Ledger, day: str) -> DayRecord:
    """Stored record for ``day`` or an empty one; unknown dates are not an error."""
    parse_date(day)
    record = ledger.get(day)
    if record is None:
        return empty_day(day)
    return record.model_copy(deep=True)


def get_range(ledger: Ledger, start: str, end: str) -> Dict[str, DayRecord]:
    """Every date in ``[start, end]`` inclusive; empty when ``start > end``."""
    start_date, end_date = parse_date(start), parse_date(end)
    return {d.isoformat(): get_day(ledger, d.isoformat()) for d in iter_dates(start_date, end_date)}


def get_summary(ledger: Ledger, days: int, today: date) -> SummaryReport:
    """Aggregate ``[today - days, today]``.

    Goals are ranked by count, descending; equal counts keep the order in
    which the goal was first seen walking the range oldest to newest.
    """
    if days < 0:
        raise ValueError("days must be >= 0")
    start = (today - timedelta(days=days)).isoformat()
    end = today.isoformat()
    daily = get_range(ledger, start, end)

    total = successful = failed = 0
    goals: Dict[str, int] = {}
    callers: Dict[str, None] = {}
    for record in daily.values():
        total += record.total_requests
        successful += record.successful_requests
        failed += record.failed_requests
        for goal, count in record.goal_selections.items():
            goals[goal] = goals.get(goal, 0) + count
        callers.update(dict.fromkeys(record.unique_callers))

    ranked = sorted(goals.items(), key=lambda item: -item[1])
    popular = [GoalPopularity(goal=goal, count=count, percentage=_percent(count, total)) for goal, count in ranked]

    return SummaryReport(
        period=f"{days} days",
        start_date=start,
        end_date=end,
        summary=SummaryTotals(
            total_requests=total,
            successful_requests=successful,
            failed_requests=failed,
            success_rate=_percent(successful, total) if total > 0 else "0",
            unique_users=len(callers),
            popular_goals=popular,
        ),
        daily_data=daily,
    )
