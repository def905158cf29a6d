"""HTTP transport abstraction -- the only seam where the client touches the network.

The request executor depends on the TransportAdapter ABC, never on an HTTP
library directly. The plugin can inject its own adapter; HttpxTransport is
the default implementation built on httpx.Client.

Contract: send() performs exactly one request and returns the raw status and
body, whatever the status. Failures that prevent a response (connection
refused, DNS, timeouts) raise TransportError with the transport's message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from src.zoom_webservice.core.exceptions import TransportError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of one HTTP request."""

    status_code: int
    body: str


class TransportAdapter(ABC):
    """Abstract interface for performing a single HTTP request.

    Methods:
        send: Perform one request, return status and body text.
        close: Release any held connections.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        body: str | None = None,
    ) -> TransportResponse:
        """Perform one request; raise TransportError if no response arrives."""
        ...

    def close(self) -> None:
        """Release transport resources. Default is a no-op."""


class HttpxTransport(TransportAdapter):
    """TransportAdapter backed by a synchronous httpx.Client.

    Args:
        timeout: Per-request timeout in seconds.
        client: Optional pre-built httpx.Client (tests pass one wired to
            httpx.MockTransport). When omitted, one is created and owned.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        body: str | None = None,
    ) -> TransportResponse:
        try:
            response = self._client.request(
                method,
                url,
                headers=headers,
                params=params,
                content=body,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "zoom.transport_failed",
                method=method,
                url=url,
                error=str(exc),
            )
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["HttpxTransport", "TransportAdapter", "TransportResponse"]
