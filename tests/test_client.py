"""Tests for the query service client against the in-process fake service."""

import httpx
import pytest

from talkql.configs.system import ServiceConfig
from talkql.core.session import (
    ConnectionUnavailable,
    DisconnectFailed,
    QueryServiceClient,
    RequestFailed,
    TurnRequest,
)


def _client(transport: httpx.AsyncBaseTransport) -> QueryServiceClient:
    config = ServiceConfig(base_url="http://talkql.test")
    return QueryServiceClient(config, transport=transport)


def _json_transport(status: int, body) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


class TestCheckConnection:
    @pytest.mark.asyncio
    async def test_parses_status(self, client, service_state):
        status = await client.check_connection()
        assert status.is_connected is True
        assert status.db_type == "postgres"
        assert status.database_name == "shop"
        assert service_state.check_calls == 1

    @pytest.mark.asyncio
    async def test_network_error(self, broken_transport):
        async with _client(broken_transport) as client:
            with pytest.raises(ConnectionUnavailable):
                await client.check_connection()

    @pytest.mark.asyncio
    async def test_malformed_reply(self):
        async with _client(_json_transport(200, "<html>oops</html>")) as client:
            with pytest.raises(ConnectionUnavailable, match="Malformed"):
                await client.check_connection()

    @pytest.mark.asyncio
    async def test_missing_flag_is_malformed(self):
        async with _client(_json_transport(200, {"db_type": "mysql"})) as client:
            with pytest.raises(ConnectionUnavailable):
                await client.check_connection()


class TestQuery:
    @pytest.mark.asyncio
    async def test_sends_wire_body(self, client, service_state):
        await client.query(
            TurnRequest(text="how many users", visualization_enabled=True)
        )
        assert service_state.queries == [
            {"query": "how many users", "vizEnabled": True, "tabularMode": False}
        ]

    @pytest.mark.asyncio
    async def test_parses_reply(self, client):
        response = await client.query(TurnRequest(text="how many users"))
        assert response.query_used == "SELECT * FROM users;"
        assert response.query_result == "Found 3 rows in **Users**."

    @pytest.mark.asyncio
    async def test_error_status_carries_detail(self, client, service_state):
        service_state.query_status = 400
        service_state.query_reply = {"detail": "Table 'foo' does not exist"}
        with pytest.raises(RequestFailed) as exc_info:
            await client.query(TurnRequest(text="select foo"))
        assert exc_info.value.detail == "Table 'foo' does not exist"
        assert "HTTP 400" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_error_status_without_detail(self, client, service_state):
        service_state.query_status = 500
        service_state.query_reply = {"error": "boom"}
        with pytest.raises(RequestFailed) as exc_info:
            await client.query(TurnRequest(text="anything"))
        assert exc_info.value.detail is None

    @pytest.mark.asyncio
    async def test_error_status_with_non_json_body(self):
        async with _client(_json_transport(502, "Bad Gateway")) as client:
            with pytest.raises(RequestFailed) as exc_info:
                await client.query(TurnRequest(text="anything"))
        assert exc_info.value.detail is None

    @pytest.mark.asyncio
    async def test_network_error(self, broken_transport):
        async with _client(broken_transport) as client:
            with pytest.raises(RequestFailed) as exc_info:
                await client.query(TurnRequest(text="anything"))
        assert exc_info.value.detail is None

    @pytest.mark.asyncio
    async def test_malformed_success_reply(self, client, service_state):
        service_state.query_reply = {"query_used": "SELECT 1"}
        with pytest.raises(RequestFailed, match="Malformed"):
            await client.query(TurnRequest(text="anything"))


class TestDisconnect:
    @pytest.mark.asyncio
    async def test_success(self, client, service_state):
        await client.disconnect()
        assert service_state.disconnect_calls == 1

    @pytest.mark.asyncio
    async def test_error_status(self, client, service_state):
        service_state.disconnect_status = 500
        with pytest.raises(DisconnectFailed) as exc_info:
            await client.disconnect()
        assert exc_info.value.detail == "Failed to disconnect"

    @pytest.mark.asyncio
    async def test_network_error(self, broken_transport):
        async with _client(broken_transport) as client:
            with pytest.raises(DisconnectFailed):
                await client.disconnect()
