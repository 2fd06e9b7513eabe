"""Shared fixtures: an in-process fake of the TalkQL query service."""

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from talkql.configs.config import AppConfig
from talkql.configs.system import ServiceConfig
from talkql.core.session import QueryServiceClient, RecordingNavigator

BASE_URL = "http://talkql.test"


@dataclass
class FakeServiceState:
    """Canned replies and a record of what the fake service received."""

    connection_reply: dict[str, Any] = field(
        default_factory=lambda: {
            "is_connected": True,
            "db_type": "postgres",
            "database_name": "shop",
        }
    )
    query_status: int = 200
    query_reply: dict[str, Any] = field(
        default_factory=lambda: {
            "query_used": "SELECT * FROM users;",
            "query_result": "Found 3 rows in **Users**.",
        }
    )
    disconnect_status: int = 200
    check_calls: int = 0
    disconnect_calls: int = 0
    queries: list[dict[str, Any]] = field(default_factory=list)


def build_fake_service(state: FakeServiceState) -> FastAPI:
    app = FastAPI()

    @app.get("/check-connection")
    async def check_connection():
        state.check_calls += 1
        return state.connection_reply

    @app.post("/query")
    async def query(request: Request):
        state.queries.append(await request.json())
        return JSONResponse(status_code=state.query_status, content=state.query_reply)

    @app.post("/disconnect-database")
    async def disconnect():
        state.disconnect_calls += 1
        if state.disconnect_status != 200:
            return JSONResponse(
                status_code=state.disconnect_status,
                content={"detail": "Failed to disconnect"},
            )
        return {"message": "Disconnected"}

    return app


def failing_transport(message: str = "Connection refused") -> httpx.MockTransport:
    """Transport whose every request fails before reaching a server."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def service_state() -> FakeServiceState:
    return FakeServiceState()


@pytest.fixture
def transport(service_state: FakeServiceState) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=build_fake_service(service_state))


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(service=ServiceConfig(base_url=BASE_URL))


@pytest_asyncio.fixture
async def client(app_config: AppConfig, transport: httpx.ASGITransport):
    async with QueryServiceClient(app_config.service, transport=transport) as c:
        yield c


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def broken_transport() -> httpx.MockTransport:
    return failing_transport()
