"""Meal type inference from the time of day."""

from datetime import datetime
from zoneinfo import ZoneInfo

from food_tracker.domain.logs import MealType
from food_tracker.services.timezones import local_time

BREAKFAST_START_HOUR = 5
LUNCH_START_HOUR = 11
DINNER_START_HOUR = 15
DINNER_END_HOUR = 22


def classify_meal_type(timestamp: datetime, tz: ZoneInfo | None = None) -> MealType:
    """Return the meal type for the local hour of a timestamp.

    The hour is read in ``tz`` when given, otherwise from the timestamp's own
    wall clock. Naive timestamps are read as UTC when ``tz`` is given.
    """
    local = local_time(timestamp, tz) if tz is not None else timestamp
    hour = local.hour
    if BREAKFAST_START_HOUR <= hour < LUNCH_START_HOUR:
        return MealType.BREAKFAST
    if LUNCH_START_HOUR <= hour < DINNER_START_HOUR:
        return MealType.LUNCH
    if DINNER_START_HOUR <= hour < DINNER_END_HOUR:
        return MealType.DINNER
    return MealType.SNACK
