# -*- coding: utf-8 -*-
"""Analytics — API endpoints (read-only)."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from .models import DayRecord, DayResponse, SummaryReport, TodaySnapshot
from .service import AnalyticsService

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


def get_analytics(request: Request) -> AnalyticsService:
    return request.app.state.analytics


@router.get("", response_model=TodaySnapshot, summary="Today's analytics and live counters")
def today_analytics(analytics: AnalyticsService = Depends(get_analytics)):
    return analytics.today_snapshot()


@router.get("/day/{day}", response_model=DayResponse, summary="Analytics for one day")
def day_analytics(day: str, analytics: AnalyticsService = Depends(get_analytics)):
    try:
        record = analytics.get_day(day)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DayResponse(date=day, data=record)


@router.get("/range", response_model=Dict[str, DayRecord], summary="Analytics for a date range")
def range_analytics(
    start: str = Query(..., description="YYYY-MM-DD"),
    end: str = Query(..., description="YYYY-MM-DD"),
    analytics: AnalyticsService = Depends(get_analytics),
):
    try:
        return analytics.get_range(start, end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/summary", response_model=SummaryReport, summary="Summary over the last N days")
def summary_analytics(
    days: int = Query(7, ge=1, le=365),
    analytics: AnalyticsService = Depends(get_analytics),
):
    return analytics.get_summary(days)
