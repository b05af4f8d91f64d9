# -*- coding: utf-8 -*-
"""
Peptide suggestions API

Suggestions by health goal and age, daily analytics, optional user accounts.
"""

from __future__ import annotations

import logging
import time
import traceback
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .analytics.api import router as analytics_router
from .analytics.service import AnalyticsService
from .app_db import init_app_db
from .auth.api import router as auth_router
from .config import settings
from .history.api import router as history_router
from .logging_setup import configure_logging
from .middleware import FixedWindowLimiter, RateLimitMiddleware, SecurityHeadersMiddleware
from .suggestions.api import router as suggestions_router

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


app = FastAPI(
    title="Peptide Suggestions API",
    description="Personalized peptide suggestions with daily analytics",
    version=settings.version,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(GZipMiddleware, minimum_size=1024)
app.add_middleware(
    RateLimitMiddleware,
    limiter=FixedWindowLimiter(settings.rate_limit_max, settings.rate_limit_window_seconds),
)
# Added last so it is outermost and also covers 429 responses.
app.add_middleware(SecurityHeadersMiddleware)

# Shared services
app.state.analytics = AnalyticsService.from_settings(settings)

# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


@app.on_event("startup")
def _startup() -> None:
    configure_logging(settings)
    settings.data_root.mkdir(parents=True, exist_ok=True)
    init_app_db(settings.app_db_path)
    app.state.analytics.start()
    logger.info(
        "Server started",
        extra={"environment": settings.environment, "port": settings.port},
    )


@app.on_event("shutdown")
def _shutdown() -> None:
    app.state.analytics.shutdown()
    logger.info("Server shutting down")


@app.middleware("http")
async def _log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "HTTP Request",
        extra={
            "method": request.method,
            "url": request.url.path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            "user_agent": request.headers.get("user-agent"),
            "ip": request.client.host if request.client else None,
        },
    )
    return response


@app.get("/health", summary="Health check")
def health() -> dict:
    return {
        "status": "healthy",
        "timestamp": _utc_iso(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "version": settings.version,
    }


app.include_router(suggestions_router)
app.include_router(analytics_router)
app.include_router(auth_router)
app.include_router(history_router)


@app.exception_handler(404)
async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    detail = getattr(exc, "detail", None)
    if detail and detail != "Not Found":
        # Raised by a route (e.g. "User not found"), keep its detail.
        return JSONResponse(status_code=404, content={"detail": detail})
    return JSONResponse(
        status_code=404,
        content={
            "error": "Endpoint not found",
            "message": f"The requested endpoint {request.method} {request.url.path} does not exist",
        },
    )


@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    error_id = str(uuid4())
    logger.error(
        "Server Error",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "url": request.url.path,
            "method": request.method,
            "ip": request.client.host if request.client else None,
        },
    )
    error = {
        "message": "Internal Server Error",
        "errorId": error_id,
        "timestamp": _utc_iso(),
    }
    if settings.is_development:
        error["message"] = str(exc) or error["message"]
        error["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content={"success": False, "error": error})
