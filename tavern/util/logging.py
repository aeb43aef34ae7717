"""Stdlib logging setup for library output.

Application events are emitted through logfire. This only decides what
uvicorn, SQLAlchemy, alembic and python-multipart print to stdout.
"""

import logging
import sys

from tavern.config import Settings

_NOISY_LOGGERS = ("multipart", "asyncio", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Send library logs to stdout at a level matching the environment.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # create_engine(echo=...) logs through this logger at INFO
    sql_level = logging.INFO if settings.database.echo else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
