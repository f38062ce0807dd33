"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_tracker.domain.logs import MealLog, MealLogDraft, MealType
from food_tracker.domain.nutrition import FoodItem, NutritionInfo
from food_tracker.services.meals import MealLogRepository

_COLUMNS = (
    "id, user_id, timestamp, meal_type, food_items, total_calories, "
    "total_nutrients, image_url, notes"
)


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create_meal_log(self, draft: MealLogDraft) -> UUID:
        """Create a meal log row and return its id."""
        payload: dict[str, object] = {
            "user_id": str(draft.user_id),
            "timestamp": draft.timestamp.isoformat(),
            "meal_type": draft.meal_type.value,
            "food_items": _dump_items(draft.food_items),
            "total_calories": draft.total_calories,
            "total_nutrients": _dump_nutrients(draft.total_nutrients),
        }
        if draft.image_url:
            payload["image_url"] = draft.image_url
        if draft.notes:
            payload["notes"] = draft.notes
        response = self.client.table("meal_logs").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return UUID(response.data[0]["id"])

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return meal logs in the inclusive range, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("timestamp", start.isoformat())
            .lte("timestamp", end.isoformat())
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_meal_log(
        self, user_id: UUID, meal_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        """Update the given columns of the user's meal log."""
        payload: dict[str, object] = {}
        for name, value in changes.items():
            if name == "timestamp" and isinstance(value, datetime):
                payload[name] = value.isoformat()
            elif name == "meal_type" and isinstance(value, MealType):
                payload[name] = value.value
            elif name == "food_items" and isinstance(value, list):
                payload[name] = _dump_items(value)
            elif name == "total_nutrients" and isinstance(value, NutritionInfo):
                payload[name] = _dump_nutrients(value)
            else:
                payload[name] = value
        response = (
            self.client.table("meal_logs")
            .update(payload)
            .eq("id", str(meal_log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def delete_meal_log(self, user_id: UUID, meal_log_id: UUID) -> bool:
        """Delete the user's meal log row."""
        response = (
            self.client.table("meal_logs")
            .delete()
            .eq("id", str(meal_log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _dump_items(items: list[FoodItem]) -> list[dict[str, object]]:
    return [
        item.model_dump(mode="json", by_alias=True, exclude_none=True)
        for item in items
    ]


def _dump_nutrients(nutrients: NutritionInfo) -> dict[str, object]:
    return nutrients.model_dump(mode="json", by_alias=True, exclude_none=True)


def _parse_row(row: dict[str, object]) -> MealLog:
    return MealLog(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        timestamp=datetime.fromisoformat(row["timestamp"]),
        meal_type=MealType(row["meal_type"]),
        food_items=[
            FoodItem.model_validate(item) for item in row.get("food_items") or []
        ],
        total_calories=float(row.get("total_calories") or 0.0),
        total_nutrients=NutritionInfo.model_validate(
            row.get("total_nutrients") or {}
        ),
        image_url=row.get("image_url"),
        notes=row.get("notes"),
    )
