# -*- coding: utf-8 -*-
"""Suggestion history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from .models import HistoryItem, HistoryResponse
from .storage import list_suggestions

router = APIRouter(prefix="/api/history", tags=["History"])


@router.get("", response_model=HistoryResponse, summary="List the current user's saved suggestions")
def list_history(
    limit: int = Query(10, ge=1, le=100),
    user: dict = Depends(get_current_user),
):
    items = list_suggestions(user_id=user["id"], limit=limit)
    return HistoryResponse(items=[HistoryItem(**item) for item in items])
