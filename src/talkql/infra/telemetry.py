"""OpenTelemetry span helpers.

Only the OTEL API is used here. Without an SDK ``TracerProvider`` installed
by the embedding application every span is a no-op.

Usage::

    from talkql.infra.telemetry import SPAN_QUERY_TURN, start_span

    with start_span(SPAN_QUERY_TURN, enabled=True) as span:
        ...
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator

from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN, Span

tracer = trace.get_tracer("talkql")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHECK_CONNECTION = "session.check_connection"
SPAN_QUERY_TURN = "session.query_turn"
SPAN_DISCONNECT = "session.disconnect"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_QUERY_LEN = "query.len"
ATTR_QUERY_VIZ = "query.viz_enabled"
ATTR_QUERY_TABULAR = "query.tabular_mode"
ATTR_QUERY_STATUS = "query.status"
ATTR_CONNECTION_SOURCE = "connection.source_type"
ATTR_CONNECTION_DEEP_LINK = "connection.deep_link"
ATTR_DISCONNECT_OK = "disconnect.ok"


@contextlib.contextmanager
def start_span(name: str, enabled: bool = True) -> Iterator[Span]:
    """Start a current span, or yield the invalid span when tracing is off."""
    if not enabled:
        yield INVALID_SPAN
        return
    with tracer.start_as_current_span(name) as span:
        yield span

