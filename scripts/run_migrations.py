#!/usr/bin/env python3
"""Upgrade the key-value store schema to the latest revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from twinship.config import Settings
from twinship.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    settings = Settings()
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception:
            # Fail the deploy rather than serve against a stale schema
            logfire.exception("Key-value store migration failed", revision=revision)
            raise
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
