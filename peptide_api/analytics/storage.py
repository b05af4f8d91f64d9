# -*- coding: utf-8 -*-
"""Analytics — JSON ledger storage.

The ledger is one JSON object keyed by ``YYYY-MM-DD``. Every write loads the
whole file, updates one day, prunes days outside the retention window and
overwrites the file. Writes in this process are serialized by a lock; there is
no protection against other processes writing the same file.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .models import DayRecord

logger = logging.getLogger(__name__)

Ledger = Dict[str, DayRecord]
Mutation = Callable[[DayRecord], None]
Clock = Callable[[], datetime]

DEFAULT_RETENTION_DAYS = 90

# Keys written by earlier versions of the ledger file.
_LEGACY_DAY_KEYS = {
    "uniqueIPs": "uniqueCallers",
    "firstRequest": "firstRequestAt",
    "lastRequest": "lastRequestAt",
}


class LedgerWriteError(RuntimeError):
    """The ledger file could not be written; the event was not persisted."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string. Raises ValueError otherwise."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return datetime.strptime(value, "%Y-%m-%d").date()


def is_iso_date(value: str) -> bool:
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def empty_day(day: str) -> DayRecord:
    return DayRecord(date=day)


def _parse_day(day: str, raw: Any) -> DayRecord:
    if not isinstance(raw, dict):
        raise TypeError(f"expected an object, got {type(raw).__name__}")
    data = dict(raw)
    for old, new in _LEGACY_DAY_KEYS.items():
        if old in data and new not in data:
            data[new] = data.pop(old)
    errors = data.get("errors")
    if isinstance(errors, list):
        data["errors"] = [
            {**e, "message": e.get("error") or ""} if isinstance(e, dict) and "message" not in e else e
            for e in errors
        ]
    data["date"] = day
    return DayRecord.model_validate(data)


class LedgerStore:
    """File-backed mapping from ISO date to :class:`DayRecord`."""

    def __init__(
        self,
        path: Path | str,
        *,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        clock: Optional[Clock] = None,
    ) -> None:
        if retention_days < 1:
            raise ValueError("retention_days must be >= 1")
        self.path = Path(path)
        self.retention_days = int(retention_days)
        self._clock = clock or utc_now
        self._lock = threading.Lock()

    def today(self) -> date:
        return self._clock().date()

    def cutoff(self, today: Optional[date] = None) -> date:
        """Oldest date kept: the window holds exactly ``retention_days`` dates ending today."""
        return (today or self.today()) - timedelta(days=self.retention_days - 1)

    def load(self) -> Ledger:
        """Read the ledger. A missing, unreadable or corrupt file reads as empty."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Analytics ledger %s unreadable, starting empty: %s", self.path, exc)
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Analytics ledger %s is not valid JSON, starting empty: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Analytics ledger %s is not a JSON object, starting empty", self.path)
            return {}

        ledger: Ledger = {}
        for day, raw_day in data.items():
            if not is_iso_date(day):
                logger.warning("Dropping ledger entry with invalid date key %r", day)
                continue
            try:
                ledger[day] = _parse_day(day, raw_day)
            except (TypeError, ValueError) as exc:
                logger.warning("Dropping unreadable ledger entry %s: %s", day, exc)
        return ledger

    def save(self, ledger: Ledger) -> None:
        """Overwrite the ledger file with ``ledger``.

        The JSON is written to a sibling temp file and renamed over the target,
        so a reader sees either the old or the new document.
        """
        payload = {
            day: record.model_dump(mode="json", by_alias=True)
            for day, record in sorted(ledger.items())
        }
        text = json.dumps(payload, ensure_ascii=False, indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise LedgerWriteError(f"Failed to write analytics ledger {self.path}: {exc}") from exc

    def prune(self, ledger: Ledger, today: Optional[date] = None) -> List[str]:
        """Remove dates older than the retention window in place; return removed keys."""
        cutoff = self.cutoff(today).isoformat()
        removed = [day for day in ledger if not is_iso_date(day) or day < cutoff]
        for day in removed:
            del ledger[day]
        return removed

    def apply_and_persist(self, day: str, mutation: Mutation) -> DayRecord:
        """Load, mutate the record for ``day``, prune, save. Returns the updated record."""
        parse_date(day)
        with self._lock:
            ledger = self.load()
            record = ledger.get(day)
            if record is None:
                record = empty_day(day)
            mutation(record)
            record.check_consistency()
            ledger[day] = record

            removed = self.prune(ledger)
            if removed:
                logger.info("Pruned %d analytics day(s) older than %s", len(removed), self.cutoff())
            self.save(ledger)
            return record.model_copy(deep=True)
