#!/usr/bin/env python3
"""Serve the API under uvicorn, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from tavern.config import Settings
from tavern.util.logging import setup_logging
from tavern.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Before anything else so import errors in the app are captured
    setup_logging(settings)
    configure_logfire(settings)

    data_root = settings.storage.data_root
    try:
        data_root.mkdir(parents=True, exist_ok=True)
        logfire.info(
            "Starting community API",
            host=settings.api.host,
            port=settings.api.port,
            data_root=str(data_root.resolve()),
        )
        uvicorn.run(
            "tavern.interface.api.app:app",
            host=settings.api.host,
            port=settings.api.port,
            reload=settings.environment == "development",
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.exception("Community API failed to start", error_type=type(e).__name__)
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
