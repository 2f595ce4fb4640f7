"""Stdlib logging for adapters that talk to external transports."""

import logging
import sys

from twinship.config import Settings

# Libraries that log every request at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosmtplib")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging to stdout.

    Engine events go through logfire; this covers the SMTP and SMS
    adapters plus third-party libraries.
    """
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("twinship").setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging ready for %s at %s", settings.environment, logging.getLevelName(level)
    )


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
