"""Calendar grouping of meal and activity logs."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from food_tracker.domain.logs import ActivityLog, DayLog, MealLog
from food_tracker.services.activities import ActivityLogService
from food_tracker.services.meals import MealLogService
from food_tracker.services.timezones import local_date


@dataclass
class DayLogService:
    """Builds calendar day logs for a user and time range."""

    meal_log_service: MealLogService
    activity_log_service: ActivityLogService

    def get_day_logs(
        self, user_id: UUID, start: datetime, end: datetime, timezone_name: str
    ) -> list[DayLog]:
        """Return non-empty days in the range, most recent first."""
        tz = ZoneInfo(timezone_name)
        meals = self.meal_log_service.list_meal_logs(user_id, start, end)
        activities = self.activity_log_service.list_activity_logs(
            user_id, start, end
        )
        return group_day_logs(meals, activities, tz)


def group_day_logs(
    meals: Sequence[MealLog], activities: Sequence[ActivityLog], tz: ZoneInfo
) -> list[DayLog]:
    """Group logs by local calendar date in ``tz``.

    Days without any log are not emitted. Days are ordered most recent
    first; within a day, logs keep the order they were supplied in.
    """
    meals_by_day: dict[date, list[MealLog]] = {}
    activities_by_day: dict[date, list[ActivityLog]] = {}
    for meal in meals:
        meals_by_day.setdefault(local_date(meal.timestamp, tz), []).append(meal)
    for activity in activities:
        activities_by_day.setdefault(local_date(activity.timestamp, tz), []).append(
            activity
        )

    days = sorted(meals_by_day.keys() | activities_by_day.keys(), reverse=True)
    result: list[DayLog] = []
    for day in days:
        day_meals = meals_by_day.get(day, [])
        day_activities = activities_by_day.get(day, [])
        result.append(
            DayLog(
                date=day,
                meals=day_meals,
                activities=day_activities,
                total_calories_consumed=sum(
                    meal.total_calories for meal in day_meals
                ),
                total_calories_burned=sum(
                    activity.calories_burned or 0.0 for activity in day_activities
                ),
            )
        )
    return result
