#!/usr/bin/env python3
"""Upgrade the database schema.

Usage: run_migrations.py [revision]   (defaults to ``head``)
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from tavern.config import Settings
from tavern.util.logging import setup_logging
from tavern.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception:
            # Fail the deploy rather than serve against a half-migrated schema
            logfire.exception("Database migration failed", revision=revision)
            raise
        logfire.info("Database at revision", revision=revision)

    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
