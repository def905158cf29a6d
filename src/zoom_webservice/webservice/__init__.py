"""Zoom REST API client layer.

Provides:
- ZoomWebservice: Facade used by the meeting plugin
- RequestExecutor: One authenticated call, JSON in and out
- Paginator: Page-count-following listing with identity merge
- UserDirectoryCache: Per-client memo of the user list
- LicenseRecyclingPolicy: Paid seat recycling at meeting creation
- to_api_payload: MeetingRecord to API request body
"""

from src.zoom_webservice.webservice.client import ZoomWebservice
from src.zoom_webservice.webservice.directory import UserDirectoryCache
from src.zoom_webservice.webservice.executor import API_URL, RequestExecutor
from src.zoom_webservice.webservice.field_mapping import meeting_type, to_api_payload
from src.zoom_webservice.webservice.licenses import LicenseRecyclingPolicy
from src.zoom_webservice.webservice.paginator import MAX_RECORDS_PER_CALL, Paginator

__all__ = [
    "API_URL",
    "MAX_RECORDS_PER_CALL",
    "LicenseRecyclingPolicy",
    "Paginator",
    "RequestExecutor",
    "UserDirectoryCache",
    "ZoomWebservice",
    "meeting_type",
    "to_api_payload",
]
