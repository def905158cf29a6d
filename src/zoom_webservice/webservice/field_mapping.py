"""Meeting record to Zoom API payload mapping.

Defines:
- meeting_type(): Picks one of the four meeting/webinar type codes.
- local_timezone_name(): IANA zone ID of the running process.
- to_api_payload(): Converts a MeetingRecord to the create/update request body.

The record and the API use different field names and formats for the same
information; to_api_payload() is the single place that reconciles them. It is
pure: the same record and timezone always give the same payload.
"""

from __future__ import annotations

import math
import os
from datetime import datetime, timezone as dt_timezone
from typing import Any

from bs4 import BeautifulSoup
from tzlocal import get_localzone_name

from src.zoom_webservice.schemas import MeetingRecord, MeetingType

SCHEDULED_TYPES = frozenset({MeetingType.SCHEDULED_MEETING, MeetingType.SCHEDULED_WEBINAR})

# The API insists on a trailing Z for UTC.
START_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def meeting_type(meeting: MeetingRecord) -> MeetingType:
    """Type code for a record from its webinar and recurring flags."""
    if meeting.webinar:
        return MeetingType.RECURRING_WEBINAR if meeting.recurring else MeetingType.SCHEDULED_WEBINAR
    return MeetingType.RECURRING_MEETING if meeting.recurring else MeetingType.SCHEDULED_MEETING


def local_timezone_name() -> str:
    """IANA zone ID of the process, such as ``America/Los_Angeles``.

    A zone name in ``TZ`` wins; otherwise the system configuration is read.
    Falls back to ``UTC`` when no zone ID is configured.
    """
    configured = os.environ.get("TZ", "").lstrip(":")
    # TZ may also hold a path to a zone file, which is not a zone ID.
    if configured and not configured.startswith("/"):
        return configured
    return get_localzone_name() or "UTC"


def strip_html(text: str) -> str:
    """Plain text content of an HTML fragment."""
    return BeautifulSoup(text, "html.parser").get_text()


def to_api_payload(meeting: MeetingRecord, timezone: str | None = None) -> dict[str, Any]:
    """Convert a MeetingRecord to a Zoom meeting/webinar request body.

    Args:
        meeting: The record to convert.
        timezone: Site timezone. Empty or None falls back to the process zone.

    Returns:
        Dict suitable as the JSON body of a create or update call.
    """
    data: dict[str, Any] = {
        "topic": meeting.name,
        "settings": {
            "host_video": bool(meeting.option_host_video),
            "audio": meeting.option_audio.value,
            "enforce_login": bool(meeting.enforce_login),
        },
    }
    if meeting.intro is not None:
        data["agenda"] = strip_html(meeting.intro)
    data["timezone"] = timezone if timezone else local_timezone_name()
    if meeting.password is not None:
        data["password"] = meeting.password

    data["type"] = int(meeting_type(meeting))
    if not meeting.webinar:
        data["settings"]["join_before_host"] = bool(meeting.option_jbh)
        data["settings"]["participant_video"] = bool(meeting.option_participants_video)

    if data["type"] in SCHEDULED_TYPES:
        start = datetime.fromtimestamp(meeting.start_time, tz=dt_timezone.utc)
        data["start_time"] = start.strftime(START_TIME_FORMAT)
        data["duration"] = int(math.ceil(meeting.duration / 60))

    return data


__all__ = ["local_timezone_name", "meeting_type", "strip_html", "to_api_payload"]
