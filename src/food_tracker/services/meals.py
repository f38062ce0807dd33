"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from food_tracker.domain.errors import NotFoundError, PersistenceError
from food_tracker.domain.logs import MealLog, MealLogDraft, MealLogUpdate, MealType
from food_tracker.domain.nutrition import FoodAnalysis, FoodItem
from food_tracker.services.accumulator import accumulate
from food_tracker.services.meal_types import classify_meal_type

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_meal_log(self, draft: MealLogDraft) -> UUID:
        """Create a meal log and return its id."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return meal logs in the inclusive range, newest first."""

    def update_meal_log(
        self, user_id: UUID, meal_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        """Replace fields of the user's meal log; False when no row matched."""

    def delete_meal_log(self, user_id: UUID, meal_log_id: UUID) -> bool:
        """Delete the user's meal log; False when no row matched."""


@dataclass
class MealLogService:
    """Service that totals and persists meal logs."""

    repository: MealLogRepository
    timezone_name: str = "UTC"

    def save_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_items: list[FoodItem],
        timestamp: datetime | None = None,
        meal_type: MealType | None = None,
        image_url: str | None = None,
        notes: str | None = None,
    ) -> MealLog:
        """Compute totals for the items and persist a meal log.

        The meal type is inferred from the local hour of ``timestamp`` when
        not given.
        """
        logged_at = timestamp or datetime.now(tz=UTC)
        resolved_type = meal_type or classify_meal_type(
            logged_at, ZoneInfo(self.timezone_name)
        )
        totals = accumulate(food_items)
        draft = MealLogDraft(
            user_id=user_id,
            timestamp=logged_at,
            meal_type=resolved_type,
            food_items=list(food_items),
            total_calories=totals.total_calories,
            total_nutrients=totals.total_nutrients,
            image_url=image_url or None,
            notes=notes or None,
        )
        try:
            meal_id = self.repository.create_meal_log(draft)
        except Exception as exc:
            _logger.exception("Failed to save meal log", extra={"user_id": user_id})
            raise PersistenceError("Failed to save meal log") from exc
        _logger.info("Meal log saved: id=%s", meal_id)
        return MealLog(id=meal_id, **vars(draft))

    def save_analysis(  # noqa: PLR0913
        self,
        user_id: UUID,
        analysis: FoodAnalysis,
        timestamp: datetime | None = None,
        meal_type: MealType | None = None,
        image_url: str | None = None,
        notes: str | None = None,
    ) -> MealLog:
        """Persist the items of a food image analysis as a meal log."""
        return self.save_meal(
            user_id=user_id,
            food_items=analysis.food_items,
            timestamp=timestamp,
            meal_type=meal_type,
            image_url=image_url,
            notes=notes,
        )

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return the user's meal logs in the range, newest first."""
        try:
            return self.repository.list_meal_logs(user_id, start, end)
        except Exception as exc:
            _logger.exception("Failed to get meal logs", extra={"user_id": user_id})
            raise PersistenceError("Failed to get meal logs") from exc

    def update_meal_log(
        self, user_id: UUID, meal_log_id: UUID, update: MealLogUpdate
    ) -> None:
        """Apply a partial update to one of the user's meal logs.

        Replacing the food items also replaces the stored totals. Raises
        ``NotFoundError`` when the log does not exist or belongs to someone
        else.
        """
        changes = _explicit_fields(update)
        if update.food_items is not None:
            totals = accumulate(update.food_items)
            changes["total_calories"] = totals.total_calories
            changes["total_nutrients"] = totals.total_nutrients
        if not changes:
            return
        try:
            updated = self.repository.update_meal_log(user_id, meal_log_id, changes)
        except Exception as exc:
            _logger.exception(
                "Failed to update meal log", extra={"meal_log_id": meal_log_id}
            )
            raise PersistenceError("Failed to update meal log") from exc
        if not updated:
            raise NotFoundError("Meal log not found")

    def delete_meal_log(self, user_id: UUID, meal_log_id: UUID) -> None:
        """Delete one of the user's meal logs."""
        try:
            deleted = self.repository.delete_meal_log(user_id, meal_log_id)
        except Exception as exc:
            _logger.exception(
                "Failed to delete meal log", extra={"meal_log_id": meal_log_id}
            )
            raise PersistenceError("Failed to delete meal log") from exc
        if not deleted:
            raise NotFoundError("Meal log not found")


def _explicit_fields(update: MealLogUpdate) -> dict[str, object]:
    return {name: getattr(update, name) for name in update.model_fields_set}
