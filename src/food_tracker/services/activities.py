"""Activity logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from food_tracker.domain.errors import NotFoundError, PersistenceError
from food_tracker.domain.logs import (
    ActivityLog,
    ActivityLogDraft,
    ActivityLogUpdate,
    ActivityType,
)

_logger = logging.getLogger(__name__)


class ActivityLogRepository(Protocol):
    """Persistence interface for activity logs."""

    def create_activity_log(self, draft: ActivityLogDraft) -> UUID:
        """Create an activity log and return its id."""

    def list_activity_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ActivityLog]:
        """Return activity logs in the inclusive range, newest first."""

    def update_activity_log(
        self, user_id: UUID, activity_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        """Replace fields of the user's activity log; False when no row matched."""

    def delete_activity_log(self, user_id: UUID, activity_log_id: UUID) -> bool:
        """Delete the user's activity log; False when no row matched."""


@dataclass
class ActivityLogService:
    """Service for manually logged activities."""

    repository: ActivityLogRepository

    def save_activity(  # noqa: PLR0913
        self,
        user_id: UUID,
        activity_type: ActivityType,
        timestamp: datetime | None = None,
        duration: float | None = None,
        calories_burned: float | None = None,
        distance: float | None = None,
        notes: str | None = None,
    ) -> ActivityLog:
        """Persist an activity log."""
        draft = ActivityLogDraft(
            user_id=user_id,
            timestamp=timestamp or datetime.now(tz=UTC),
            activity_type=activity_type,
            duration=duration,
            calories_burned=calories_burned,
            distance=distance,
            notes=notes or None,
        )
        try:
            activity_id = self.repository.create_activity_log(draft)
        except Exception as exc:
            _logger.exception(
                "Failed to save activity log", extra={"user_id": user_id}
            )
            raise PersistenceError("Failed to save activity log") from exc
        _logger.info("Activity log saved: id=%s", activity_id)
        return ActivityLog(id=activity_id, **vars(draft))

    def list_activity_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ActivityLog]:
        """Return the user's activity logs in the range, newest first."""
        try:
            return self.repository.list_activity_logs(user_id, start, end)
        except Exception as exc:
            _logger.exception(
                "Failed to get activity logs", extra={"user_id": user_id}
            )
            raise PersistenceError("Failed to get activity logs") from exc

    def update_activity_log(
        self, user_id: UUID, activity_log_id: UUID, update: ActivityLogUpdate
    ) -> None:
        """Apply a partial update to one of the user's activity logs."""
        changes = {name: getattr(update, name) for name in update.model_fields_set}
        if not changes:
            return
        try:
            updated = self.repository.update_activity_log(
                user_id, activity_log_id, changes
            )
        except Exception as exc:
            _logger.exception(
                "Failed to update activity log",
                extra={"activity_log_id": activity_log_id},
            )
            raise PersistenceError("Failed to update activity log") from exc
        if not updated:
            raise NotFoundError("Activity log not found")

    def delete_activity_log(self, user_id: UUID, activity_log_id: UUID) -> None:
        """Delete one of the user's activity logs."""
        try:
            deleted = self.repository.delete_activity_log(user_id, activity_log_id)
        except Exception as exc:
            _logger.exception(
                "Failed to delete activity log",
                extra={"activity_log_id": activity_log_id},
            )
            raise PersistenceError("Failed to delete activity log") from exc
        if not deleted:
            raise NotFoundError("Activity log not found")
