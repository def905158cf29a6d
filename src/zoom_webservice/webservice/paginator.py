"""Paginated GET calls with a moving page count.

Zoom list endpoints return ``page_count`` with every page. The loop bound is
re-read after each call instead of being fixed up front, so records created
while we are paging (for example a user added between two calls) are still
picked up. Records are merged by identity rather than concatenated, which
absorbs duplicates when the listing shifts between calls. Neither property
amounts to a consistent snapshot.
"""

from __future__ import annotations

import json
from typing import Any

import structlog

from src.zoom_webservice.core.exceptions import ApiError
from src.zoom_webservice.webservice.executor import RequestExecutor

logger = structlog.get_logger(__name__)

MAX_RECORDS_PER_CALL = 300

# Checked in order; meeting report rows share ``id`` across occurrences but not ``uuid``.
IDENTITY_FIELDS = ("uuid", "id")


def record_key(record: Any) -> Any:
    """Identity of a listed record used to merge pages."""
    if isinstance(record, dict):
        for field in IDENTITY_FIELDS:
            value = record.get(field)
            if value is not None:
                return (field, value)
    return ("record", json.dumps(record, sort_keys=True, default=str))


class Paginator:
    """Drives a RequestExecutor across numbered pages.

    Args:
        executor: Executor performing each page request.
        page_size: Value sent as ``page_size`` on every call.
    """

    def __init__(self, executor: RequestExecutor, page_size: int = MAX_RECORDS_PER_CALL) -> None:
        self._executor = executor
        self._page_size = page_size

    def call(self, path: str, data: dict[str, Any] | None, result_field: str) -> list[Any]:
        """Fetch every page of ``path`` and merge the ``result_field`` arrays.

        Args:
            path: Path relative to the API root.
            data: Extra query parameters; not modified.
            result_field: Name of the array to collect from each page.

        Returns:
            The merged records, in first-seen order.

        Raises:
            ApiError: A page body is not a JSON object.
        """
        params = dict(data or {})
        params["page_size"] = self._page_size

        merged: dict[Any, Any] = {}
        current_page = 1
        num_pages = 1
        # page_number is 1-indexed
        while current_page <= num_pages:
            result = self._executor.call(path, {**params, "page_number": current_page}) or {}
            if not isinstance(result, dict):
                raise ApiError(f"Unexpected page body for {path}: {type(result).__name__}")

            for record in result.get(result_field) or []:
                merged[record_key(record)] = record

            num_pages = result.get("page_count") or 0
            current_page += 1

        logger.debug(
            "zoom.paginated_call",
            path=path,
            result_field=result_field,
            pages=current_page - 1,
            count=len(merged),
        )
        return list(merged.values())


__all__ = ["MAX_RECORDS_PER_CALL", "Paginator", "record_key"]
