"""Shared fixtures for webservice tests.

Provides:
- FakeTransport: in-memory TransportAdapter that records every request and
  answers from a queue of scripted responses or a routing function
- Credential constants and a fixed clock
- A RequestExecutor and ZoomWebservice wired to the fake transport
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from src.zoom_webservice.transport import TransportAdapter, TransportResponse
from src.zoom_webservice.schemas import Credentials
from src.zoom_webservice.webservice.client import ZoomWebservice
from src.zoom_webservice.webservice.executor import API_URL, RequestExecutor

API_KEY = "test-api-key"
API_SECRET = "test-api-secret"
FIXED_NOW = 1_700_000_000


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, Any] | None
    body: str | None

    @property
    def path(self) -> str:
        return self.url[len(API_URL):]

    @property
    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


@dataclass
class FakeTransport(TransportAdapter):
    """Scripted transport; ``router`` wins over the ``responses`` queue."""

    responses: list[TransportResponse] = field(default_factory=list)
    router: Callable[[RecordedRequest], TransportResponse] | None = None
    requests: list[RecordedRequest] = field(default_factory=list)
    closed: bool = False

    @staticmethod
    def response(status_code: int, payload: Any = None) -> TransportResponse:
        return json_response(status_code, payload)

    def queue(self, status_code: int, payload: Any = None) -> None:
        self.responses.append(json_response(status_code, payload))

    def send(self, method, url, headers, params=None, body=None) -> TransportResponse:
        request = RecordedRequest(
            method=method,
            url=url,
            headers=dict(headers),
            params=dict(params) if params is not None else None,
            body=body,
        )
        self.requests.append(request)
        if self.router is not None:
            return self.router(request)
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


def json_response(status_code: int, payload: Any = None) -> TransportResponse:
    body = "" if payload is None else json.dumps(payload)
    return TransportResponse(status_code=status_code, body=body)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def executor(transport) -> RequestExecutor:
    return RequestExecutor(
        Credentials(key=API_KEY, secret=API_SECRET),
        transport,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def webservice(transport) -> ZoomWebservice:
    """Client without license recycling."""
    return ZoomWebservice(
        api_key=API_KEY,
        api_secret=API_SECRET,
        transport=transport,
        timezone="America/Los_Angeles",
        clock=lambda: FIXED_NOW,
    )
