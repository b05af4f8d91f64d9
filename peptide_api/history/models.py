# -*- coding: utf-8 -*-
"""Suggestion history — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class HistoryItem(BaseModel):
    id: str
    age: int
    health_goal: str
    suggestions: List[Dict[str, Any]]
    created_at: str


class HistoryResponse(BaseModel):
    items: List[HistoryItem]
