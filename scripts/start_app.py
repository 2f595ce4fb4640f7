#!/usr/bin/env python3
"""Serve the invitation API with uvicorn."""

import sys

import logfire
import uvicorn

from twinship.config import Settings
from twinship.util.logging import setup_logging
from twinship.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Serving invitation API",
        environment=settings.environment,
        host=settings.host,
        port=settings.port,
    )
    try:
        uvicorn.run(
            "twinship.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        # Record the failure before the process exits
        logfire.exception("Invitation API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
