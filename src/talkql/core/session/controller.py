"""Query session controller: owns the transcript and runs query turns."""

import logging

from talkql.configs.config import AppConfig
from talkql.infra.telemetry import (
    ATTR_QUERY_LEN,
    ATTR_QUERY_STATUS,
    ATTR_QUERY_TABULAR,
    ATTR_QUERY_VIZ,
    SPAN_QUERY_TURN,
    start_span,
)

from .client import QueryServiceClient
from .disconnect import DisconnectCoordinator
from .exceptions import RequestFailed
from .formatter import format_response
from .models import (
    ROLE_ASSISTANT,
    ROLE_USER,
    TURN_STATUS_ANSWERED,
    TURN_STATUS_BUSY,
    TURN_STATUS_FAILED,
    ConnectionInfo,
    DisconnectOutcome,
    SessionStartParams,
    SessionState,
    TranscriptEntry,
    TurnOutcome,
    TurnRequest,
)
from .navigation import NavigationPort
from .resolver import ConnectionResolver

logger = logging.getLogger(__name__)


class QuerySessionController:
    """Single owner of :class:`SessionState`.

    The state is only changed through the command methods below. A session
    is either Idle or AwaitingResponse (``state.awaiting_response``); a
    ``send_message`` issued while a turn is in flight is rejected with a
    ``busy`` outcome and leaves the transcript untouched.
    """

    def __init__(
        self,
        client: QueryServiceClient,
        navigation: NavigationPort,
        config: AppConfig,
        start_params: SessionStartParams | None = None,
    ):
        self.client = client
        self.navigation = navigation
        self.config = config
        self.state = SessionState()
        tracing = config.tracing.enabled
        self.resolver = ConnectionResolver(
            client,
            navigation,
            start_params=start_params,
            config=config.session,
            tracing=tracing,
        )
        self.coordinator = DisconnectCoordinator(
            self.state, client, navigation, tracing=tracing
        )

    @property
    def transcript(self) -> list[TranscriptEntry]:
        return self.state.transcript

    @property
    def connection(self) -> ConnectionInfo | None:
        return self.state.connection

    @property
    def awaiting_response(self) -> bool:
        return self.state.awaiting_response

    async def resolve_connection(self) -> ConnectionInfo | None:
        """Resolve the data source; ``None`` means the host was told to leave."""
        result = await self.resolver.resolve()
        if isinstance(result, ConnectionInfo):
            self.state.connection = result
            logger.info(
                f"Session attached to {result.source_type} database {result.source_name!r}"
            )
            return result
        return None

    def set_visualization(self, enabled: bool) -> None:
        self.state.visualization_enabled = enabled

    def set_tabular_mode(self, enabled: bool) -> None:
        self.state.tabular_mode_enabled = enabled

    async def send_message(self, text: str) -> TurnOutcome:
        """Run one query turn.

        Appends the user entry, dispatches the query and appends exactly one
        assistant entry, whether the call succeeded or not.
        """
        if not text or not text.strip():
            raise ValueError("Message text must not be empty")

        state = self.state
        if state.awaiting_response:
            logger.warning("Query already in flight, rejecting overlapping message")
            return TurnOutcome(status=TURN_STATUS_BUSY)

        state.transcript.append(TranscriptEntry(role=ROLE_USER, content=text))
        state.awaiting_response = True
        state.has_shown_welcome = True

        request = TurnRequest(
            text=text,
            visualization_enabled=state.visualization_enabled,
            tabular_mode_enabled=state.tabular_mode_enabled,
        )

        with start_span(SPAN_QUERY_TURN, self.config.tracing.enabled) as span:
            span.set_attribute(ATTR_QUERY_LEN, len(text))
            span.set_attribute(ATTR_QUERY_VIZ, request.visualization_enabled)
            span.set_attribute(ATTR_QUERY_TABULAR, request.tabular_mode_enabled)
            try:
                try:
                    response = await self.client.query(request)
                    entry = format_response(
                        response,
                        request.visualization_enabled,
                        request.tabular_mode_enabled,
                        self.config.session,
                    )
                    status = TURN_STATUS_ANSWERED
                except RequestFailed as e:
                    logger.error(f"Error querying database: {e}")
                    entry = TranscriptEntry(
                        role=ROLE_ASSISTANT,
                        content=e.detail or self.config.session.query_fallback_error,
                    )
                    status = TURN_STATUS_FAILED
                state.transcript.append(entry)
            finally:
                state.awaiting_response = False
            span.set_attribute(ATTR_QUERY_STATUS, status)

        return TurnOutcome(status=status, entry=entry)

    async def disconnect(self) -> DisconnectOutcome:
        return await self.coordinator.disconnect()
