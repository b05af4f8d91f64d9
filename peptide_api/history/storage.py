# -*- coding: utf-8 -*-
"""Suggestion history storage helpers (SQLite)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_item(row: Dict[str, Any]) -> Dict[str, Any]:
    try:
        suggestions = json.loads(row.get("suggestions_json") or "[]")
    except json.JSONDecodeError:
        suggestions = []
    return {
        "id": row.get("id"),
        "age": row.get("age"),
        "health_goal": row.get("health_goal"),
        "suggestions": suggestions,
        "created_at": row.get("created_at"),
    }


def save_suggestion(
    *,
    user_id: str,
    age: int,
    health_goal: str,
    suggestions: List[Dict[str, Any]],
) -> Dict[str, Any]:
    item_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO user_suggestions (id, user_id, age, health_goal, suggestions_json, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (item_id, user_id, age, health_goal, json.dumps(suggestions, ensure_ascii=False), now),
        )
    logger.info("Suggestion saved", extra={"user_id": user_id, "suggestion_id": item_id})
    return {
        "id": item_id,
        "age": age,
        "health_goal": health_goal,
        "suggestions": suggestions,
        "created_at": now,
    }


def list_suggestions(*, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT * FROM user_suggestions
            WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (user_id, limit),
        ).fetchall()
    return [_row_to_item(dict(r)) for r in rows]
