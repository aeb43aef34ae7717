"""Unit tests for rolling back requests answered with an HTTP error."""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import DishkaRoute, FastapiProvider, FromDishka, setup_dishka
from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tavern.domain.error import NotFoundError
from tavern.interface.api.errors import register_error_handlers, to_http_exception
from tavern.persistence.error import StoreError
from tavern.util.di import ProdConfigProvider, ProdPersistenceProvider


class RecordingSession:
    """Session stand-in that records how the request ended."""

    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def commit(self) -> None:
        self.log.append("commit")

    async def rollback(self) -> None:
        self.log.append("rollback")


class RecordingSessionProvider(Provider):
    scope = Scope.APP

    def __init__(self, log: list[str]) -> None:
        super().__init__()
        self.log = log

    @provide
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: RecordingSession(self.log)


router = APIRouter(route_class=DishkaRoute)


@router.get("/ok")
async def ok(session: FromDishka[AsyncSession]) -> dict:
    return {"ok": True}


@router.get("/missing")
async def missing(session: FromDishka[AsyncSession]) -> dict:
    try:
        raise NotFoundError("Character", "c1")
    except Exception as e:
        raise to_http_exception(e, "get character") from e


@router.get("/store-failure")
async def store_failure(session: FromDishka[AsyncSession]) -> dict:
    try:
        raise StoreError("comment.delete_many", RuntimeError("boom"))
    except Exception as e:
        raise to_http_exception(e, "delete comment") from e


@router.get("/redirect")
async def redirect(session: FromDishka[AsyncSession]) -> dict:
    raise HTTPException(status_code=304)


@router.get("/crash")
async def crash(session: FromDishka[AsyncSession]) -> dict:
    raise RuntimeError("boom")


@pytest.fixture
def session_log() -> list[str]:
    return []


@pytest.fixture
def client(session_log):
    """Serve the routes above with the real session provider and a recording factory."""
    container = make_async_container(
        ProdConfigProvider(),
        ProdPersistenceProvider(),
        RecordingSessionProvider(session_log),
        FastapiProvider(),
    )
    app = FastAPI()
    setup_dishka(container, app)
    register_error_handlers(app)
    app.include_router(router)
    return TestClient(app, raise_server_exceptions=False)


class TestErrorRollback:
    """A request's writes commit only when it succeeds."""

    def test_success_commits(self, client, session_log):
        response = client.get("/ok")

        assert response.status_code == 200
        assert session_log == ["commit"]

    def test_domain_error_rolls_back(self, client, session_log):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"detail": "Character not found: c1"}
        assert session_log == ["rollback"]

    def test_store_error_rolls_back(self, client, session_log):
        response = client.get("/store-failure")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to delete comment"}
        assert session_log == ["rollback"]

    def test_non_error_status_commits(self, client, session_log):
        response = client.get("/redirect")

        assert response.status_code == 304
        assert session_log == ["commit"]

    def test_unhandled_exception_rolls_back(self, client, session_log):
        response = client.get("/crash")

        assert response.status_code == 500
        assert session_log == ["rollback"]
