"""Supabase repository for activity logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_tracker.domain.logs import ActivityLog, ActivityLogDraft, ActivityType
from food_tracker.services.activities import ActivityLogRepository

_COLUMNS = (
    "id, user_id, timestamp, activity_type, duration, calories_burned, "
    "distance, notes"
)


@dataclass
class SupabaseActivityLogRepository(ActivityLogRepository):
    """Supabase implementation for activity logs."""

    client: Client

    def create_activity_log(self, draft: ActivityLogDraft) -> UUID:
        """Create an activity log row and return its id."""
        payload: dict[str, object] = {
            "user_id": str(draft.user_id),
            "timestamp": draft.timestamp.isoformat(),
            "activity_type": draft.activity_type.value,
        }
        if draft.duration is not None:
            payload["duration"] = draft.duration
        if draft.calories_burned is not None:
            payload["calories_burned"] = draft.calories_burned
        if draft.distance is not None:
            payload["distance"] = draft.distance
        if draft.notes:
            payload["notes"] = draft.notes
        response = self.client.table("activity_logs").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create activity log")
        return UUID(response.data[0]["id"])

    def list_activity_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ActivityLog]:
        """Return activity logs in the inclusive range, newest first."""
        response = (
            self.client.table("activity_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("timestamp", start.isoformat())
            .lte("timestamp", end.isoformat())
            .order("timestamp", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_activity_log(
        self, user_id: UUID, activity_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        """Update the given columns of the user's activity log."""
        payload: dict[str, object] = {}
        for name, value in changes.items():
            if isinstance(value, datetime):
                payload[name] = value.isoformat()
            elif isinstance(value, ActivityType):
                payload[name] = value.value
            else:
                payload[name] = value
        response = (
            self.client.table("activity_logs")
            .update(payload)
            .eq("id", str(activity_log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def delete_activity_log(self, user_id: UUID, activity_log_id: UUID) -> bool:
        """Delete the user's activity log row."""
        response = (
            self.client.table("activity_logs")
            .delete()
            .eq("id", str(activity_log_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> ActivityLog:
    return ActivityLog(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        timestamp=datetime.fromisoformat(row["timestamp"]),
        activity_type=ActivityType(row["activity_type"]),
        duration=_optional_float(row.get("duration")),
        calories_burned=_optional_float(row.get("calories_burned")),
        distance=_optional_float(row.get("distance")),
        notes=row.get("notes"),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
