"""Tests for the httpx-backed transport.

Uses httpx.MockTransport so requests never leave the process.
"""

from __future__ import annotations

import httpx
import pytest

from src.zoom_webservice.core.exceptions import TransportError
from src.zoom_webservice.schemas import Credentials
from src.zoom_webservice.transport import HttpxTransport, TransportResponse
from src.zoom_webservice.webservice.executor import RequestExecutor


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Tests for HttpxTransport.send."""

    def test_returns_status_and_body(self):
        transport = _transport(lambda request: httpx.Response(404, json={"message": "User not found"}))

        response = transport.send("GET", "https://api.zoom.us/v2/users/x", {})

        assert isinstance(response, TransportResponse)
        assert response.status_code == 404
        assert "User not found" in response.body

    def test_sends_method_headers_params_and_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.content
            return httpx.Response(204)

        transport = _transport(handler)
        transport.send(
            "PATCH",
            "https://api.zoom.us/v2/users/u1",
            {"Authorization": "Bearer t", "Content-Type": "application/json"},
            params={"page_number": 2},
            body='{"type": 1}',
        )

        assert seen["method"] == "PATCH"
        assert seen["url"] == "https://api.zoom.us/v2/users/u1?page_number=2"
        assert seen["auth"] == "Bearer t"
        assert seen["body"] == b'{"type": 1}'

    def test_connection_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(TransportError, match="Connection refused"):
            _transport(handler).send("GET", "https://api.zoom.us/v2/users", {})

    def test_timeout_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            _transport(handler).send("GET", "https://api.zoom.us/v2/users", {})

    def test_injected_client_not_closed(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        transport.close()

        assert client.is_closed is False
        client.close()

    def test_owned_client_closed(self):
        transport = HttpxTransport(timeout=5.0)

        transport.close()

        assert transport._client.is_closed is True

    def test_executor_over_httpx(self):
        """Executor and HttpxTransport together decode a JSON response."""
        transport = _transport(lambda request: httpx.Response(200, json={"token": "zak"}))
        executor = RequestExecutor(Credentials(key="k", secret="s"), transport)

        assert executor.call("users/u1/token") == {"token": "zak"}
