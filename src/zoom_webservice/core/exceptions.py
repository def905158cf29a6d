"""Error taxonomy for the Zoom webservice client.

Every failure the client raises derives from ZoomWebserviceError:

- ConfigurationError: a required credential or policy setting is missing at
  construction time. No call is attempted.
- TransportError: the HTTP transport could not complete the request.
- ApiError: the API answered with status >= 400.
- LicenseRecyclingError: the seat limit is reached and no paid user can be
  demoted to make room for the host.

Two call sites turn specific ApiErrors into sentinel return values instead
of raising: user autocreation ("user already exists") and lookup by email
("user not found"). The classifiers below drive those decisions. Upstream
error codes are preferred; the message substrings are the fallback for
responses that carry no code.
"""

from __future__ import annotations


# Upstream error codes
ZOOM_ERROR_USER_NOT_EXIST = 1001
ZOOM_ERROR_USER_ALREADY_EXISTS = 1005

USER_NOT_FOUND_PATTERNS = (
    "not exist",
    "not found",
    "not belong to this account",
)
USER_ALREADY_EXISTS_PATTERNS = ("User already in the account",)


class ZoomWebserviceError(Exception):
    """Base class for all errors raised by the webservice client.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ZoomWebserviceError):
    """Raised when a required setting is missing or invalid."""


class TransportError(ZoomWebserviceError):
    """Raised when the transport fails before an HTTP status is available."""


class ApiError(ZoomWebserviceError):
    """Raised when the API responds with an HTTP status of 400 or above.

    Attributes:
        message: The upstream ``message`` field, or ``HTTP Status <code>``.
        status_code: The HTTP status, when known.
        code: The upstream numeric error code, when the body carried one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: int | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class LicenseRecyclingError(ZoomWebserviceError):
    """Raised when no paid user can give up a seat for a basic host."""


def _matches(error: ApiError, codes: tuple[int, ...], patterns: tuple[str, ...]) -> bool:
    if error.code is not None and error.code in codes:
        return True
    return any(pattern in error.message for pattern in patterns)


def is_user_not_found_error(error: ApiError) -> bool:
    """Whether the error means the requested user does not exist."""
    return _matches(error, (ZOOM_ERROR_USER_NOT_EXIST,), USER_NOT_FOUND_PATTERNS)


def is_user_already_exists_error(error: ApiError) -> bool:
    """Whether the error means the user is already in the account."""
    return _matches(error, (ZOOM_ERROR_USER_ALREADY_EXISTS,), USER_ALREADY_EXISTS_PATTERNS)
