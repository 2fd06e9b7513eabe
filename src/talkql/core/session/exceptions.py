"""Failures raised by the query service client."""

from __future__ import annotations


class QueryServiceError(Exception):
    """Base class for any failed call to the query service."""

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class ConnectionUnavailable(QueryServiceError):
    """No data source is connected, or the status check itself failed."""


class RequestFailed(QueryServiceError):
    """A query turn failed (network, non-2xx status or malformed reply).

    ``detail`` carries the server-provided explanation when there is one.
    """


class DisconnectFailed(QueryServiceError):
    """The disconnect call did not succeed."""
