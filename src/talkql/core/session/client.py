"""API client for the TalkQL query service."""

import logging

import httpx
from pydantic import ValidationError

from talkql.configs.system import ServiceConfig

from .exceptions import (
    ConnectionUnavailable,
    DisconnectFailed,
    RequestFailed,
)
from .models import ConnectionStatus, TurnRequest, TurnResponse

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str | None:
    """Pull ``detail`` out of a non-2xx reply, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if detail:
            return str(detail)
    return None


class QueryServiceClient:
    """Client for the three endpoints of the query service.

    Every call is a single attempt. Transport errors, non-2xx statuses and
    malformed replies are all raised as the matching ``QueryServiceError``
    subclass so callers only ever handle one family of exceptions.
    """

    def __init__(
        self,
        config: ServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the API client.

        Parameters
        ----------
        config
            Service endpoint settings.
        transport
            Optional transport override (e.g. ``httpx.ASGITransport``).
        """
        self.config = config
        self.client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def check_connection(self) -> ConnectionStatus:
        """Ask the service whether a data source is connected."""
        try:
            response = await self.client.get(self.config.check_connection_path)
            logger.debug(f"Response status: {response.status_code}")
            return ConnectionStatus.model_validate(response.json())
        except httpx.HTTPError as e:
            raise ConnectionUnavailable(f"Connection check failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise ConnectionUnavailable(
                f"Malformed connection status reply: {e}"
            ) from e

    async def query(self, request: TurnRequest) -> TurnResponse:
        """Send one query turn and return the parsed reply."""
        payload = request.to_payload()
        logger.debug(f"Making request to {self.config.query_path} with payload: {payload}")

        try:
            response = await self.client.post(self.config.query_path, json=payload)
        except httpx.HTTPError as e:
            raise RequestFailed(f"Query request failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")

        if not response.is_success:
            detail = _error_detail(response)
            raise RequestFailed(
                f"HTTP {response.status_code}: {detail or response.reason_phrase}",
                detail=detail,
            )

        try:
            return TurnResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RequestFailed(f"Malformed query reply: {e}") from e

    async def disconnect(self) -> None:
        """Tell the service to drop the current data source."""
        try:
            response = await self.client.post(self.config.disconnect_path)
        except httpx.HTTPError as e:
            raise DisconnectFailed(f"Disconnect request failed: {e}") from e

        if not response.is_success:
            detail = _error_detail(response)
            raise DisconnectFailed(
                f"HTTP {response.status_code}: {detail or response.reason_phrase}",
                detail=detail,
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "QueryServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
