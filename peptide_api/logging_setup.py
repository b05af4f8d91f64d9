# -*- coding: utf-8 -*-
"""Logging setup: console + combined/error/analytics log files (JSON lines)."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from .config import Settings

ANALYTICS_LOGGER_NAME = "peptide_api.analytics"

# Attributes present on every LogRecord; anything else came in via `extra=`.
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

_HANDLER_TAG = "_peptide_api_handler"


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    handler.setFormatter(JsonLogFormatter())
    return handler


def _remove_tagged(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(cfg: Settings) -> None:
    """Attach the app's handlers to the ``peptide_api`` logger tree.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.
    """
    cfg.log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("peptide_api")
    analytics = logging.getLogger(ANALYTICS_LOGGER_NAME)
    _remove_tagged(root)
    _remove_tagged(analytics)

    root.setLevel(getattr(logging, cfg.log_level, logging.INFO))

    console = _tagged(logging.StreamHandler(sys.stdout))
    root.addHandler(console)

    combined = _tagged(logging.FileHandler(cfg.log_dir / "combined.log", encoding="utf-8"))
    root.addHandler(combined)

    errors = _tagged(logging.FileHandler(cfg.log_dir / "error.log", encoding="utf-8"))
    errors.setLevel(logging.ERROR)
    root.addHandler(errors)

    analytics_file = _tagged(logging.FileHandler(cfg.log_dir / "analytics.log", encoding="utf-8"))
    analytics.addHandler(analytics_file)
