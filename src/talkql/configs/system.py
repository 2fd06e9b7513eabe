from pydantic import BaseModel, Field


class ServiceConfig(BaseModel):
    """Remote query service endpoints."""

    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the query service",
    )
    check_connection_path: str = Field(
        default="/check-connection",
        description="Path of the connection status endpoint",
    )
    query_path: str = Field(
        default="/query",
        description="Path of the natural language query endpoint",
    )
    disconnect_path: str = Field(
        default="/disconnect-database",
        description="Path of the disconnect endpoint",
    )
    timeout_seconds: float = Field(
        default=300.0, description="Transport timeout for a single call"
    )


class SessionConfig(BaseModel):
    """Texts and defaults used while building the transcript."""

    default_source_name: str = Field(
        default="Database",
        description="Display name when the service reports none",
    )
    query_fallback_error: str = Field(
        default="Sorry, I encountered an error processing your query.",
        description="Assistant message when a failed turn carries no detail",
    )
    query_label: str = Field(default="SQL Query Used:")
    query_placeholder: str = Field(default="Query not available")
    result_label: str = Field(default="Result:")
    welcome_prompt: str = Field(
        default=(
            "Start by asking a question about your tables "
            "or request a quick visualization."
        ),
        description="Placeholder shown until the first message is sent",
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=False, description="Emit JSON lines instead of plain text"
    )


class TracingConfig(BaseModel):
    """OpenTelemetry span settings."""

    enabled: bool = Field(
        default=True, description="Wrap service calls in OpenTelemetry spans"
    )
    service_name: str = Field(default="talkql")
