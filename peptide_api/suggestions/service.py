# -*- coding: utf-8 -*-
"""Suggestions — catalog lookup filtered by age."""

from __future__ import annotations

import logging
from typing import List

from .catalog import DEFAULT_NOTE, GOALS, PEPTIDES, PERSONALIZED_NOTES
from .models import AgeRange, GoalOption, Suggestion

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


class UnknownGoalError(LookupError):
    def __init__(self, goal: str) -> None:
        super().__init__(f"No peptides found for goal: {goal}")
        self.goal = goal


def get_age_group(age: int) -> str:
    if age < 35:
        return "young"
    if age < 55:
        return "middle"
    return "mature"


def get_personalized_note(age: int, goal: str) -> str:
    return PERSONALIZED_NOTES.get(get_age_group(age), {}).get(goal, DEFAULT_NOTE)


def available_goals() -> List[GoalOption]:
    return [GoalOption(**goal) for goal in GOALS]


def get_suggestions(age: int, goal: str) -> List[Suggestion]:
    """Up to three peptides for ``goal`` whose age range includes ``age``.

    When no peptide fits the age, every peptide of the goal is considered.
    """
    logger.info("Generating suggestions", extra={"age": age, "goal": goal})
    candidates = PEPTIDES.get(goal) or []
    if not candidates:
        raise UnknownGoalError(goal)

    suitable = [
        p for p in candidates
        if p["age_recommendation"]["min"] <= age <= p["age_recommendation"]["max"]
    ]
    selected = suitable or candidates
    note = get_personalized_note(age, goal)

    return [
        Suggestion(
            name=p["name"],
            description=p["description"],
            dosage=p["dosage"],
            timing=p["timing"],
            age_recommendation=AgeRange(**p["age_recommendation"]),
            benefits=list(p["benefits"]),
            personalized_note=note,
        )
        for p in selected[:MAX_SUGGESTIONS]
    ]
