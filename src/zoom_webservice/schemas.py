"""Pydantic v2 schemas for the Zoom webservice client.

Defines the records exchanged with the surrounding plugin (credentials,
license policy, meeting records, user info for autocreation) and the
user records read back from the API.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ── Enums ────────────────────────────────────────────────────────────────────


class ZoomUserType(IntEnum):
    """Zoom user types. Anything other than BASIC consumes a paid seat."""

    BASIC = 1
    PRO = 2
    CORP = 3


class MeetingType(IntEnum):
    """Zoom meeting and webinar type codes."""

    SCHEDULED_MEETING = 2
    RECURRING_MEETING = 3
    SCHEDULED_WEBINAR = 5
    RECURRING_WEBINAR = 6


class AudioOption(str, Enum):
    """Audio options accepted in meeting settings."""

    BOTH = "both"
    TELEPHONY = "telephony"
    VOIP = "voip"


# ── Configuration Records ────────────────────────────────────────────────────


class Credentials(BaseModel):
    """Zoom JWT app credentials, fixed for the lifetime of a client."""

    model_config = ConfigDict(frozen=True)

    key: str
    secret: str = Field(repr=False)


class LicensePolicy(BaseModel):
    """License recycling switch and paid-seat cap.

    ``seat_limit`` is only required when recycling is enabled.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    seat_limit: int | None = None

    @model_validator(mode="after")
    def _check_seat_limit(self) -> LicensePolicy:
        if self.enabled and (self.seat_limit is None or self.seat_limit <= 0):
            raise ValueError("seat_limit must be a positive integer when recycling is enabled")
        return self


# ── User Models ──────────────────────────────────────────────────────────────


class ZoomUser(BaseModel):
    """A user as returned by the Zoom users endpoints.

    Unknown fields from the API are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    email: str = ""
    type: int = ZoomUserType.BASIC
    first_name: str | None = None
    last_name: str | None = None
    last_login_time: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.type != ZoomUserType.BASIC


class UserInfo(BaseModel):
    """Identity of a user to autocreate on Zoom."""

    email: str
    first_name: str = ""
    last_name: str = ""


# ── Meeting Record ───────────────────────────────────────────────────────────


class MeetingRecord(BaseModel):
    """Internal representation of a meeting or webinar.

    Built by the caller for a single operation; the client never keeps it.
    ``start_time`` is epoch seconds and ``duration`` is in seconds.
    """

    name: str
    intro: str | None = None
    webinar: bool = False
    recurring: bool = False
    host_id: str = ""
    start_time: int = 0
    duration: int = 0
    option_audio: AudioOption = AudioOption.BOTH
    option_host_video: bool = False
    option_jbh: bool = False
    option_participants_video: bool = False
    enforce_login: bool = False
    password: str | None = None
    meeting_id: int | str | None = None

    @property
    def resource(self) -> str:
        """Endpoint namespace for this record: ``webinars`` or ``meetings``."""
        return "webinars" if self.webinar else "meetings"
