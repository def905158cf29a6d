"""License recycling -- keep paid seats under the configured cap.

Runs synchronously before a meeting is created for a host. When the host is
on a basic (free) account and the account already uses every paid seat, the
paid user with the oldest last login is demoted to basic and the host is
promoted. The limit check and the two patches are not atomic: another client
working on the same Zoom account can race with us, and a failure between
the demote and the promote is not compensated.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from src.zoom_webservice.core.exceptions import LicenseRecyclingError
from src.zoom_webservice.schemas import ZoomUser, ZoomUserType
from src.zoom_webservice.webservice.directory import UserDirectoryCache
from src.zoom_webservice.webservice.executor import RequestExecutor

logger = structlog.get_logger(__name__)


def _epoch(moment: datetime) -> float:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


class LicenseRecyclingPolicy:
    """Demotes the least recently active paid user to make room for a host.

    Args:
        executor: Executor used for the user lookups and type patches.
        directory: Per-client user directory cache.
        seat_limit: Maximum number of paid users on the account.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        directory: UserDirectoryCache,
        seat_limit: int,
    ) -> None:
        self._executor = executor
        self._directory = directory
        self._seat_limit = seat_limit

    @property
    def seat_limit(self) -> int:
        return self._seat_limit

    def paid_user_limit_reached(self) -> bool:
        """Whether the number of paid users has reached the seat limit.

        Counting stops as soon as the limit is hit.
        """
        num_users = 0
        for user in self._directory.list_users():
            if user.is_paid:
                num_users += 1
                if num_users >= self._seat_limit:
                    return True
        return False

    def least_recently_active_paid_user_id(self) -> str | None:
        """Id of the paid user with the oldest recorded last login.

        Users without a last login time are ignored. When several users share
        the oldest time, the first one scanned wins; callers must not rely on
        that order. Returns None when no paid user has a last login time.
        """
        oldest: ZoomUser | None = None
        for user in self._directory.list_users():
            if not user.is_paid or user.last_login_time is None:
                continue
            if oldest is None or _epoch(user.last_login_time) < _epoch(oldest.last_login_time):
                oldest = user
        return oldest.id if oldest is not None else None

    def _set_user_type(self, user_id: str, user_type: ZoomUserType) -> None:
        self._executor.call(f"users/{user_id}", {"type": int(user_type)}, "PATCH")
        self._directory.set_type(user_id, user_type)

    def ensure_seat(self, host_id: str) -> None:
        """Free a paid seat for ``host_id`` if the account is at its limit.

        Does nothing when the host is already paid or the limit is not
        reached. Any API failure propagates; a demote that succeeded before
        a failed promote is left in place.

        Raises:
            LicenseRecyclingError: The limit is reached and no paid user has
                a last login time. Nothing is patched.
        """
        host = ZoomUser.model_validate(self._executor.call(f"users/{host_id}"))
        if host.is_paid:
            return

        if not self.paid_user_limit_reached():
            return

        victim_id = self.least_recently_active_paid_user_id()
        if victim_id is None:
            logger.warning(
                "zoom.license_no_recyclable_user",
                host_id=host_id,
                seat_limit=self._seat_limit,
            )
            raise LicenseRecyclingError(
                f"No recyclable paid user to free a license for {host_id}"
            )

        # Frees the victim's license for the host.
        self._set_user_type(victim_id, ZoomUserType.BASIC)
        self._set_user_type(host_id, ZoomUserType.PRO)
        logger.info(
            "zoom.license_recycled",
            host_id=host_id,
            demoted_user_id=victim_id,
            seat_limit=self._seat_limit,
        )


__all__ = ["LicenseRecyclingPolicy"]
