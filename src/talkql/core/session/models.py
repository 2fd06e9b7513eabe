"""Session domain models: connection, turns, transcript and state."""

from typing import Any, Literal
from urllib.parse import parse_qs

from pydantic import BaseModel, ConfigDict, Field

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

TURN_STATUS_ANSWERED = "answered"
TURN_STATUS_FAILED = "failed"
TURN_STATUS_BUSY = "busy"


class ConnectionInfo(BaseModel):
    """Identity of the data source the session talks to."""

    model_config = ConfigDict(frozen=True)

    source_type: str = Field(description="Database engine, e.g. 'postgres'")
    source_name: str = Field(description="Display name of the database")


class SessionStartParams(BaseModel):
    """Hand-off parameters from a prior connection step (deep link)."""

    model_config = ConfigDict(frozen=True)

    db_type: str | None = None
    db_name: str | None = None

    @classmethod
    def from_query_string(cls, query: str) -> "SessionStartParams":
        """Parse ``dbType``/``dbName`` out of a URL query string."""
        values = parse_qs(query.lstrip("?"))
        return cls(
            db_type=values.get("dbType", [None])[0],
            db_name=values.get("dbName", [None])[0],
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.db_type and self.db_name)


class ConnectionStatus(BaseModel):
    """Reply of ``GET /check-connection``."""

    is_connected: bool
    db_type: str | None = None
    database_name: str | None = None


class TurnRequest(BaseModel):
    """One user query together with the display toggles active at send time."""

    model_config = ConfigDict(frozen=True)

    text: str
    visualization_enabled: bool = False
    tabular_mode_enabled: bool = False

    def to_payload(self) -> dict[str, Any]:
        """Wire body for ``POST /query``."""
        return {
            "query": self.text,
            "vizEnabled": self.visualization_enabled,
            "tabularMode": self.tabular_mode_enabled,
        }


class TurnResponse(BaseModel):
    """Successful reply of ``POST /query``."""

    query_used: str | None = None
    query_result: str
    viz_result: Any | None = None


class TranscriptEntry(BaseModel):
    """A single rendered message in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    visualization_payload: Any | None = None
    visualization_was_enabled: bool | None = None
    tabular_mode_was_enabled: bool | None = None


class SessionState(BaseModel):
    """Everything the session controller owns.

    Only the controller and the disconnect coordinator write to it.
    ``awaiting_response`` is true strictly between dispatching a query and
    its settlement.
    """

    connection: ConnectionInfo | None = None
    transcript: list[TranscriptEntry] = Field(default_factory=list)
    awaiting_response: bool = False
    has_shown_welcome: bool = False
    visualization_enabled: bool = False
    tabular_mode_enabled: bool = False


class TurnOutcome(BaseModel):
    """Result of a ``send_message`` command."""

    status: Literal["answered", "failed", "busy"]
    entry: TranscriptEntry | None = Field(
        default=None, description="Assistant entry appended for this turn"
    )


class DisconnectOutcome(BaseModel):
    """Result of a ``disconnect`` command."""

    ok: bool
    error: str | None = None


class NotConnected:
    """Sentinel returned by the resolver when no data source is connected."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_CONNECTED"

    def __bool__(self) -> bool:
        return False


NOT_CONNECTED = NotConnected()
