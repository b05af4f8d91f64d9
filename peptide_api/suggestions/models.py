# -*- coding: utf-8 -*-
"""Suggestions — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..schemas import CamelModel

MIN_AGE = 18
MAX_AGE = 120


class SuggestionsRequest(CamelModel):
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    goal: str = Field(..., min_length=1, max_length=64)


class AgeRange(CamelModel):
    min: int
    max: int


class Suggestion(CamelModel):
    name: str
    description: str
    dosage: str
    timing: str
    age_recommendation: AgeRange
    benefits: List[str] = Field(default_factory=list)
    personalized_note: Optional[str] = None


class SuggestionsMeta(CamelModel):
    generated_at: str
    goal_category: str
    age_group: str


class SuggestionsResponse(CamelModel):
    success: bool = True
    request_id: str
    suggestions: List[Suggestion]
    meta: SuggestionsMeta


class GoalOption(CamelModel):
    value: str
    label: str
    description: str


class GoalsResponse(CamelModel):
    success: bool = True
    goals: List[GoalOption]


class PdfExportRequest(SuggestionsRequest):
    # When omitted the suggestions are recomputed from age and goal.
    suggestions: Optional[List[Suggestion]] = None
