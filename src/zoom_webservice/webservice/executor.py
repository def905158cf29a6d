"""Request executor -- one authenticated REST call against the Zoom API.

Wraps a TransportAdapter: builds the URL, signs a fresh JWT for every call,
serializes the body, decodes the JSON response, and turns HTTP failures into
ApiError. There is no retry at this layer; callers decide what to do with a
failure.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from typing import Any

import structlog

from src.zoom_webservice.core.exceptions import ApiError
from src.zoom_webservice.core.security import sign_token
from src.zoom_webservice.schemas import Credentials
from src.zoom_webservice.transport import TransportAdapter

logger = structlog.get_logger(__name__)

API_URL = "https://api.zoom.us/v2/"

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})


class RequestExecutor:
    """Performs single authenticated calls against the Zoom REST API.

    Args:
        credentials: API key and secret used to sign each request.
        transport: The HTTP transport performing the request.
        base_url: API root the call path is appended to.
        clock: Returns the current epoch time; injectable for tests.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: TransportAdapter,
        base_url: str = API_URL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._credentials = credentials
        self._transport = transport
        self._base_url = base_url
        self._clock = clock

    def _auth_headers(self) -> dict[str, str]:
        token = sign_token(
            self._credentials.key,
            self._credentials.secret,
            int(self._clock()),
        )
        return {"Authorization": f"Bearer {token}"}

    def call(self, path: str, data: Any = None, method: str = "GET") -> Any:
        """Make a REST call and return the decoded JSON response.

        Args:
            path: Path relative to the API root, e.g. ``users/abc/settings``.
            data: Query parameters for GET; request body otherwise. Dicts and
                lists are JSON-encoded, strings are sent as-is.
            method: One of GET, POST, PATCH, DELETE (case-insensitive).

        Returns:
            The parsed JSON value, or None when the body is empty.

        Raises:
            TransportError: The transport could not complete the request.
            ApiError: The response status was 400 or above.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._base_url + path
        headers = self._auth_headers()
        params: dict[str, Any] | None = None
        body: str | None = None

        if method == "GET":
            params = data or None
        else:
            headers["Content-Type"] = "application/json"
            if isinstance(data, (dict, list)):
                body = json.dumps(data)
            elif data is not None:
                body = str(data)

        logger.debug("zoom.request", method=method, path=path)
        response = self._transport.send(method, url, headers, params=params, body=body)

        payload = self._decode(response.body, path)

        if response.status_code >= 400:
            error = self._build_error(response.status_code, payload)
            logger.warning(
                "zoom.request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=error.message,
            )
            raise error

        return payload

    @staticmethod
    def _decode(body: str, path: str) -> Any:
        if not body or not body.strip():
            return None
        try:
            return json.loads(body)
        except ValueError:
            logger.warning("zoom.response_not_json", path=path, length=len(body))
            return None

    @staticmethod
    def _build_error(status_code: int, payload: Any) -> ApiError:
        if isinstance(payload, dict) and payload.get("message"):
            code = payload.get("code")
            return ApiError(
                str(payload["message"]),
                status_code=status_code,
                code=code if isinstance(code, int) else None,
            )
        return ApiError(f"HTTP Status {status_code}", status_code=status_code)


__all__ = ["API_URL", "RequestExecutor"]
