# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _norm_email(email: str) -> str:
    return email.lower().strip()


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (_norm_email(email),)).fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None


def create_user(
    *,
    email: str,
    password_hash: str,
    first_name: str = "",
    last_name: str = "",
) -> Dict[str, Any]:
    user_id = str(uuid4())
    now = _utc_now()
    email_norm = _norm_email(email)
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                """
                INSERT INTO users (id, email, password_hash, first_name, last_name, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (user_id, email_norm, password_hash, first_name, last_name, now, now),
            )
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="Email already registered") from exc
    logger.info("User created", extra={"user_id": user_id})
    return {
        "id": user_id,
        "email": email_norm,
        "password_hash": password_hash,
        "first_name": first_name,
        "last_name": last_name,
        "created_at": now,
        "updated_at": now,
    }


def update_user(
    user_id: str,
    *,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> Dict[str, Any]:
    fields = []
    params: list[Any] = []
    if first_name is not None:
        fields.append("first_name = ?")
        params.append(first_name)
    if last_name is not None:
        fields.append("last_name = ?")
        params.append(last_name)
    if email is not None:
        fields.append("email = ?")
        params.append(_norm_email(email))
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")

    fields.append("updated_at = ?")
    params.extend([_utc_now(), user_id])

    with db_conn(settings.app_db_path) as conn:
        if email is not None:
            taken = conn.execute(
                "SELECT id FROM users WHERE email = ? AND id != ?",
                (_norm_email(email), user_id),
            ).fetchone()
            if taken:
                raise HTTPException(status_code=400, detail="Email is already taken")
        cur = conn.execute(f"UPDATE users SET {', '.join(fields)} WHERE id = ?", params)
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    logger.info("User updated", extra={"user_id": user_id})
    return dict(row)


def set_password_hash(user_id: str, password_hash: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
            (password_hash, _utc_now(), user_id),
        )
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
    logger.info("Password changed", extra={"user_id": user_id})


def delete_user(user_id: str) -> None:
    """Delete the user and their suggestion history in one transaction."""
    with db_conn(settings.app_db_path) as conn:
        conn.execute("DELETE FROM user_suggestions WHERE user_id = ?", (user_id,))
        cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if cur.rowcount == 0:
            raise HTTPException(status_code=404, detail="User not found")
    logger.info("User deleted", extra={"user_id": user_id})
