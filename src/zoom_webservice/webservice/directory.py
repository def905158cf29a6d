"""Per-client cache of the Zoom user directory.

The full user list is fetched through the paginator once, on first access,
and kept for the lifetime of the owning client. There is no invalidation;
construct a new client to see a fresh directory. The cache is plain
instance state with no locking, so share a client across threads only
under external synchronization.
"""

from __future__ import annotations

import structlog

from src.zoom_webservice.schemas import ZoomUser
from src.zoom_webservice.webservice.paginator import Paginator

logger = structlog.get_logger(__name__)


class UserDirectoryCache:
    """Lazily loaded mapping of user id to ZoomUser.

    Args:
        paginator: Paginator used for the one-time ``users`` listing.
    """

    def __init__(self, paginator: Paginator) -> None:
        self._paginator = paginator
        self._users: dict[str, ZoomUser] | None = None

    @property
    def loaded(self) -> bool:
        return self._users is not None

    def users(self) -> dict[str, ZoomUser]:
        """The id -> user mapping, fetched on first call."""
        if self._users is None:
            records = self._paginator.call("users", None, "users")
            self._users = {}
            for record in records:
                user = ZoomUser.model_validate(record)
                self._users[user.id] = user
            logger.info("zoom.user_directory_loaded", count=len(self._users))
        return self._users

    def list_users(self) -> list[ZoomUser]:
        return list(self.users().values())

    def set_type(self, user_id: str, user_type: int) -> None:
        """Record a type change made through the API on a cached user.

        Does nothing when the directory has not been loaded yet or the user
        is not in it.
        """
        if self._users is None:
            return
        user = self._users.get(user_id)
        if user is not None:
            self._users[user_id] = user.model_copy(update={"type": int(user_type)})


__all__ = ["UserDirectoryCache"]
