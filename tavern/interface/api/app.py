"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tavern.config import VERSION, Settings
from tavern.interface.api.errors import register_error_handlers
from tavern.interface.api.routes import characters, forum, health
from tavern.util.di.container import create_container
from tavern.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this; ``scripts/start_app.py``
    does so in production.

    Args:
        container: DI container to serve requests from. Defaults to the
            production container; tests pass one built with in-memory
            infrastructure.
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        # Disposes the database engine
        await container.close()

    app_instance = FastAPI(
        title="Tavern Community API",
        description="Community forum and public character card gallery for the Tavern chat front-end",
        version=VERSION,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    # The front-end authenticates with a cookie, so credentials must be allowed
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.frontend_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With", "X-CSRF-Token"],
        max_age=600,
    )

    setup_dishka(container, app_instance)
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(forum.router)
    app_instance.include_router(characters.router)

    return app_instance


# Imported by uvicorn; Logfire must already be configured
app = create_app()
