# -*- coding: utf-8 -*-
"""Suggestions — API endpoints."""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from ..analytics.api import get_analytics
from ..analytics.models import RequestEvent
from ..analytics.service import AnalyticsService
from ..analytics.storage import LedgerWriteError
from ..auth.security import get_optional_user
from ..history.storage import save_suggestion
from .models import GoalsResponse, PdfExportRequest, SuggestionsMeta, SuggestionsRequest, SuggestionsResponse
from .pdf import render_suggestions_pdf
from .service import UnknownGoalError, available_goals, get_age_group, get_suggestions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["Suggestions"])

GENERIC_FAILURE_MESSAGE = "An internal error occurred while processing your request. Please try again."


def _caller_id(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@router.post("", response_model=SuggestionsResponse, summary="Get personalized peptide suggestions")
def create_suggestions(
    body: SuggestionsRequest,
    request: Request,
    analytics: AnalyticsService = Depends(get_analytics),
    user: Optional[dict] = Depends(get_optional_user),
):
    request_id = str(uuid4())
    started = time.perf_counter()
    caller_id = _caller_id(request)
    logger.info(
        "Processing suggestions request",
        extra={"request_id": request_id, "age": body.age, "goal": body.goal, "caller_id": caller_id},
    )

    def failure(status_code: int, error: str, message: str) -> HTTPException:
        return HTTPException(
            status_code=status_code,
            detail={"error": error, "message": message, "requestId": request_id},
        )

    try:
        # Resolve the goal before counting it so unknown goals never reach goalSelections.
        suggestions = get_suggestions(body.age, body.goal)
        analytics.log_goal_selection(body.goal)
        analytics.log_successful_request(
            RequestEvent(
                request_id=request_id,
                caller_id=caller_id,
                age=body.age,
                goal=body.goal,
                suggestions_count=len(suggestions),
                response_time_ms=(time.perf_counter() - started) * 1000,
            )
        )
    except LedgerWriteError as exc:
        # Counters already hold this request; it is not recorded again as a failure.
        logger.error(
            "Analytics ledger write failed",
            exc_info=True,
            extra={"request_id": request_id, "goal": body.goal},
        )
        raise failure(500, "Failed to generate suggestions", GENERIC_FAILURE_MESSAGE) from exc
    except Exception as exc:
        logger.error(
            "Error generating suggestions",
            exc_info=not isinstance(exc, UnknownGoalError),
            extra={"request_id": request_id, "age": body.age, "goal": body.goal, "error": str(exc)},
        )
        analytics.log_failed_request(
            RequestEvent(
                request_id=request_id,
                caller_id=caller_id,
                age=body.age,
                goal=body.goal,
                error_message=str(exc),
                response_time_ms=(time.perf_counter() - started) * 1000,
            )
        )
        if isinstance(exc, UnknownGoalError):
            raise failure(400, "Unknown health goal", str(exc)) from exc
        raise failure(500, "Failed to generate suggestions", GENERIC_FAILURE_MESSAGE) from exc

    if user:
        save_suggestion(
            user_id=user["id"],
            age=body.age,
            health_goal=body.goal,
            suggestions=[s.model_dump(by_alias=True) for s in suggestions],
        )

    logger.info(
        "Successfully generated suggestions",
        extra={"request_id": request_id, "suggestions_count": len(suggestions)},
    )
    return SuggestionsResponse(
        request_id=request_id,
        suggestions=suggestions,
        meta=SuggestionsMeta(
            generated_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            goal_category=body.goal,
            age_group=get_age_group(body.age),
        ),
    )


@router.get("/goals", response_model=GoalsResponse, summary="List available health goals")
def list_goals():
    return GoalsResponse(goals=available_goals())


@router.post("/export-pdf", summary="Export suggestions as PDF")
def export_pdf(body: PdfExportRequest):
    suggestions = body.suggestions
    if suggestions is None:
        try:
            suggestions = get_suggestions(body.age, body.goal)
        except UnknownGoalError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info("Generating PDF export", extra={"age": body.age, "goal": body.goal})
    pdf = render_suggestions_pdf(body.age, body.goal, suggestions)
    slug = re.sub(r"[^a-z0-9_-]+", "-", body.goal.lower()).strip("-") or "export"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="peptide-suggestions-{slug}.pdf"'},
    )
