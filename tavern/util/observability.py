"""Logfire setup.

Services open spans named ``<service>.<operation>`` and log with
structured attributes:

    with logfire.span("comment_service.delete_thread", comment_id=comment.id):
        logfire.info("Comment thread deleted", deleted_count=count)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from tavern.config import SERVICE_NAME, VERSION, Settings

# The session cookie must never end up in span attributes
_SCRUB_PATTERNS = ["auth_token"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Telemetry stays on the console unless a token is configured or sending
    is forced on.

    Args:
        settings: Application settings
    """
    observability = settings.observability

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=VERSION,
        environment=settings.environment,
        send_to_logfire=observability.should_send,
        token=observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=observability.should_send,
    )


def _request_area(request, attributes):
    """Tag each request span with the part of the site it hit."""
    path = request.url.path
    if path.startswith("/api/forum"):
        area = "forum"
    elif path.startswith("/api/public-characters"):
        area = "characters"
    else:
        area = "other"
    return {**attributes, "area": area}


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests, skipping health checks.

    Headers are not captured because the cookie carries the auth token.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_area,
        excluded_urls=["/health"],
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
