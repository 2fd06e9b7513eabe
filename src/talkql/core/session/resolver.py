"""Resolves which data source a new session is attached to."""

import logging

from talkql.configs.system import SessionConfig
from talkql.infra.telemetry import (
    ATTR_CONNECTION_DEEP_LINK,
    ATTR_CONNECTION_SOURCE,
    SPAN_CHECK_CONNECTION,
    start_span,
)

from .client import QueryServiceClient
from .exceptions import ConnectionUnavailable
from .models import NOT_CONNECTED, ConnectionInfo, NotConnected, SessionStartParams
from .navigation import NavigationPort

logger = logging.getLogger(__name__)


class ConnectionResolver:
    """Determines the active data source once, at session start.

    Explicit start parameters win and cost no network call. Otherwise the
    service is asked; anything other than a positive answer makes the host
    leave the session.
    """

    def __init__(
        self,
        client: QueryServiceClient,
        navigation: NavigationPort,
        start_params: SessionStartParams | None = None,
        config: SessionConfig | None = None,
        tracing: bool = True,
    ):
        self.client = client
        self.navigation = navigation
        self.start_params = start_params or SessionStartParams()
        self.config = config or SessionConfig()
        self.tracing = tracing

    async def resolve(self) -> ConnectionInfo | NotConnected:
        params = self.start_params
        if params.is_complete:
            logger.debug(f"Using hand-off connection {params.db_type}/{params.db_name}")
            return ConnectionInfo(source_type=params.db_type, source_name=params.db_name)

        with start_span(SPAN_CHECK_CONNECTION, self.tracing) as span:
            span.set_attribute(ATTR_CONNECTION_DEEP_LINK, False)
            try:
                status = await self.client.check_connection()
            except ConnectionUnavailable:
                logger.exception("Error checking connection")
                self.navigation.leave_session()
                return NOT_CONNECTED

            if not status.is_connected or not status.db_type:
                logger.info("No data source connected, leaving session")
                self.navigation.leave_session()
                return NOT_CONNECTED

            span.set_attribute(ATTR_CONNECTION_SOURCE, status.db_type)
            return ConnectionInfo(
                source_type=status.db_type,
                source_name=status.database_name or self.config.default_source_name,
            )
