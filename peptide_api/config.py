from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the peptide suggestions backend."""

    def __init__(self) -> None:
        cwd = Path.cwd()
        self.data_root: Path = Path(
            os.environ.get("PEPTIDE_DATA_ROOT") or (cwd / "data")
        ).expanduser()
        self.analytics_file: Path = Path(
            os.environ.get("PEPTIDE_ANALYTICS_FILE") or (self.data_root / "analytics.json")
        ).expanduser()
        self.retention_days: int = int(os.environ.get("PEPTIDE_RETENTION_DAYS") or "90")
        self.app_db_path: Path = Path(
            os.environ.get("PEPTIDE_DB_PATH") or (self.data_root / "peptide.db")
        ).expanduser()

        self.log_dir: Path = Path(os.environ.get("PEPTIDE_LOG_DIR") or (cwd / "logs")).expanduser()
        self.log_level: str = (os.environ.get("PEPTIDE_LOG_LEVEL") or "INFO").upper()

        # In production you MUST set PEPTIDE_JWT_SECRET. The dev fallback keeps local
        # demos easy but is not safe for public deployments.
        self.jwt_secret: str = os.environ.get("PEPTIDE_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("PEPTIDE_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("PEPTIDE_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}

        self.environment: str = os.environ.get("PEPTIDE_ENV") or "production"
        self.host: str = os.environ.get("PEPTIDE_HOST") or "0.0.0.0"
        self.port: int = int(os.environ.get("PEPTIDE_PORT") or "3001")
        self.version: str = "1.0.0"

        # Per-client-IP fixed window; 0 disables the limiter.
        self.rate_limit_max: int = int(os.environ.get("PEPTIDE_RATE_LIMIT_MAX") or "100")
        self.rate_limit_window_seconds: int = int(os.environ.get("PEPTIDE_RATE_LIMIT_WINDOW_SECONDS") or "900")

        cors = os.environ.get("PEPTIDE_CORS_ORIGINS", "http://localhost:3000")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
