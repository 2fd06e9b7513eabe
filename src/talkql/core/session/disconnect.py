"""Terminates the connection to the data source."""

import logging

from talkql.infra.telemetry import ATTR_DISCONNECT_OK, SPAN_DISCONNECT, start_span

from .client import QueryServiceClient
from .exceptions import DisconnectFailed
from .models import DisconnectOutcome, SessionState
from .navigation import NavigationPort

logger = logging.getLogger(__name__)


class DisconnectCoordinator:
    """Drops the connection and ends the session.

    On success the session state is reset and the host is asked to leave.
    On failure nothing changes; the failure is logged and reported back.
    """

    def __init__(
        self,
        state: SessionState,
        client: QueryServiceClient,
        navigation: NavigationPort,
        tracing: bool = True,
    ):
        self.state = state
        self.client = client
        self.navigation = navigation
        self.tracing = tracing

    async def disconnect(self) -> DisconnectOutcome:
        with start_span(SPAN_DISCONNECT, self.tracing) as span:
            try:
                await self.client.disconnect()
            except DisconnectFailed as e:
                logger.warning(f"Error disconnecting: {e}")
                span.set_attribute(ATTR_DISCONNECT_OK, False)
                return DisconnectOutcome(ok=False, error=str(e))

            span.set_attribute(ATTR_DISCONNECT_OK, True)

        self.state.connection = None
        self.state.transcript.clear()
        self.state.awaiting_response = False
        self.state.has_shown_welcome = False
        logger.info("Disconnected from data source")
        self.navigation.leave_session()
        return DisconnectOutcome(ok=True)
