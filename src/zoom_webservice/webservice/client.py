"""Zoom webservice facade used by the meeting plugin.

ZoomWebservice is the one object the plugin talks to. It validates its
configuration up front, then exposes meeting/webinar CRUD, user directory
helpers, and report listings on top of the request executor and paginator.
Meeting creation runs the license recycling policy first when it is enabled.

All calls are synchronous and sequential. Nothing is retried; every failure
propagates except at the two documented sentinel call sites
(autocreate_user and get_user_by_email).
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog

from src.zoom_webservice.config import Settings, get_settings
from src.zoom_webservice.core.exceptions import (
    ApiError,
    ConfigurationError,
    is_user_already_exists_error,
    is_user_not_found_error,
)
from src.zoom_webservice.core.security import generate_password
from src.zoom_webservice.schemas import (
    Credentials,
    LicensePolicy,
    MeetingRecord,
    UserInfo,
    ZoomUser,
    ZoomUserType,
)
from src.zoom_webservice.transport import HttpxTransport, TransportAdapter
from src.zoom_webservice.webservice.directory import UserDirectoryCache
from src.zoom_webservice.webservice.executor import API_URL, RequestExecutor
from src.zoom_webservice.webservice.field_mapping import to_api_payload
from src.zoom_webservice.webservice.licenses import LicenseRecyclingPolicy
from src.zoom_webservice.webservice.paginator import MAX_RECORDS_PER_CALL, Paginator

logger = structlog.get_logger(__name__)


def _meeting_path(meeting: MeetingRecord) -> str:
    if meeting.meeting_id is None:
        raise ValueError("Meeting record has no meeting_id")
    return f"{meeting.resource}/{meeting.meeting_id}"


class ZoomWebservice:
    """Client for the Zoom v2 REST API with optional license recycling.

    Args:
        api_key: Zoom JWT app key. Required.
        api_secret: Zoom JWT app secret. Required.
        recycle_licenses: Whether meeting creation recycles paid licenses.
        licenses_count: Paid seat limit. Required when recycling.
        transport: HTTP transport; defaults to an HttpxTransport.
        base_url: API root.
        page_size: Records requested per page on paginated calls.
        timezone: Site timezone for meeting payloads; empty uses the
            process timezone.
        clock: Epoch time source for token signing.

    Raises:
        ConfigurationError: A required value is missing or invalid.
    """

    def __init__(
        self,
        api_key: str | None,
        api_secret: str | None,
        recycle_licenses: bool = False,
        licenses_count: int | None = None,
        transport: TransportAdapter | None = None,
        base_url: str = API_URL,
        page_size: int = MAX_RECORDS_PER_CALL,
        timezone: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Zoom API key is missing")
        if not api_secret:
            raise ConfigurationError("Zoom API secret is missing")
        if recycle_licenses and not licenses_count:
            raise ConfigurationError("Zoom licenses count is missing")
        try:
            self._policy_config = LicensePolicy(
                enabled=bool(recycle_licenses),
                seat_limit=licenses_count if recycle_licenses else None,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid license policy: {exc}") from exc

        self._credentials = Credentials(key=api_key, secret=api_secret)
        self._transport = transport if transport is not None else HttpxTransport()
        self._timezone = timezone or None

        self._executor = RequestExecutor(
            self._credentials,
            self._transport,
            base_url=base_url,
            clock=clock,
        )
        self._paginator = Paginator(self._executor, page_size=page_size)
        self._directory = UserDirectoryCache(self._paginator)
        self._license_policy: LicenseRecyclingPolicy | None = None
        if self._policy_config.enabled:
            self._license_policy = LicenseRecyclingPolicy(
                self._executor,
                self._directory,
                self._policy_config.seat_limit,
            )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: TransportAdapter | None = None,
    ) -> ZoomWebservice:
        """Build a client from environment-driven Settings."""
        settings = settings or get_settings()
        if transport is None:
            transport = HttpxTransport(timeout=settings.ZOOM_REQUEST_TIMEOUT)
        return cls(
            api_key=settings.ZOOM_API_KEY,
            api_secret=settings.ZOOM_API_SECRET,
            recycle_licenses=settings.ZOOM_RECYCLE_LICENSES,
            licenses_count=settings.ZOOM_LICENSES_COUNT,
            transport=transport,
            base_url=settings.ZOOM_API_URL,
            page_size=settings.ZOOM_MAX_RECORDS_PER_CALL,
            timezone=settings.TIMEZONE,
        )

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> ZoomWebservice:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def license_policy(self) -> LicenseRecyclingPolicy | None:
        """The recycling policy, or None when recycling is disabled."""
        return self._license_policy

    # ── Users ────────────────────────────────────────────────────────────────

    def autocreate_user(self, user: UserInfo) -> bool:
        """Autocreate a licensed user on Zoom.

        Returns:
            True if the user was created, False if it already existed.

        Raises:
            ApiError: Any failure other than "user already exists".
        """
        data = {
            "action": "autocreate",
            "user_info": {
                "email": user.email,
                "type": int(ZoomUserType.PRO),
                "first_name": user.first_name,
                "last_name": user.last_name,
                "password": generate_password(),
            },
        }
        try:
            self._executor.call("users", data, "POST")
        except ApiError as error:
            if is_user_already_exists_error(error):
                logger.info("zoom.user_already_exists", email=user.email)
                return False
            raise

        logger.info("zoom.user_autocreated", email=user.email)
        return True

    def list_users(self) -> list[ZoomUser]:
        """All users on the account, fetched once per client."""
        return self._directory.list_users()

    def get_user(self, user_id: str) -> ZoomUser:
        return ZoomUser.model_validate(self._executor.call(f"users/{user_id}"))

    def get_user_settings(self, user_id: str) -> dict[str, Any]:
        return self._executor.call(f"users/{user_id}/settings")

    def get_user_by_email(self, email: str) -> ZoomUser | None:
        """Find a user by email.

        Returns:
            The user, or None when Zoom reports that it does not exist.

        Raises:
            ApiError: Any failure other than "user not found".
        """
        try:
            user = self._executor.call(f"users/{email}")
        except ApiError as error:
            if is_user_not_found_error(error):
                return None
            raise
        return ZoomUser.model_validate(user)

    def get_user_token(self, user_id: str) -> str:
        """The user's ZAK token."""
        return self._executor.call(f"users/{user_id}/token")["token"]

    # ── Meetings & Webinars ──────────────────────────────────────────────────

    def create_meeting(self, meeting: MeetingRecord) -> dict[str, Any]:
        """Create a meeting or webinar for ``meeting.host_id``.

        Recycles a paid license for the host first when recycling is
        enabled. A failure anywhere aborts the creation.

        Returns:
            The created meeting as returned by Zoom.

        Raises:
            ValueError: The record has no host_id.
        """
        if not meeting.host_id:
            raise ValueError("Meeting record has no host_id")
        if self._license_policy is not None:
            self._license_policy.ensure_seat(meeting.host_id)

        path = f"users/{meeting.host_id}/{meeting.resource}"
        created = self._executor.call(path, to_api_payload(meeting, self._timezone), "POST")
        logger.info(
            "zoom.meeting_created",
            host_id=meeting.host_id,
            resource=meeting.resource,
            meeting_id=(created or {}).get("id"),
        )
        return created

    def update_meeting(self, meeting: MeetingRecord) -> None:
        self._executor.call(_meeting_path(meeting), to_api_payload(meeting, self._timezone), "PATCH")

    def delete_meeting(self, meeting: MeetingRecord) -> None:
        self._executor.call(_meeting_path(meeting), None, "DELETE")
        logger.info(
            "zoom.meeting_deleted",
            resource=meeting.resource,
            meeting_id=meeting.meeting_id,
        )

    def get_meeting_info(self, meeting: MeetingRecord) -> dict[str, Any]:
        return self._executor.call(_meeting_path(meeting))

    # ── Reports ──────────────────────────────────────────────────────────────

    def get_user_report(self, user_id: str, from_: str, to: str) -> list[dict[str, Any]]:
        """Ended meetings of a user between two YYYY-MM-DD dates."""
        return self._paginator.call(
            f"report/users/{user_id}/meetings",
            {"from": from_, "to": to},
            "meetings",
        )

    def list_webinar_uuids(self, user_id: str) -> list[str]:
        webinars = self._paginator.call(f"users/{user_id}/webinars", None, "webinars")
        return [webinar["uuid"] for webinar in webinars]

    def list_webinar_attendees(self, uuid: str) -> list[dict[str, Any]]:
        """Registrants of one webinar session."""
        return self._paginator.call(f"webinars/{uuid}/registrants", None, "registrants")

    def get_metrics_webinar_detail(self, uuid: str) -> dict[str, Any]:
        return self._executor.call(f"webinars/{uuid}")


__all__ = ["ZoomWebservice"]
