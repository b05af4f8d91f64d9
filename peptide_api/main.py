from __future__ import annotations

import uvicorn

from .config import settings


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "peptide_api.api:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
