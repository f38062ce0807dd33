"""Domain models for meal and activity logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from food_tracker.domain.nutrition import FoodItem, NutritionInfo


class MealType(StrEnum):
    """Eating occasion of a meal log."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ActivityType(StrEnum):
    """Kind of logged physical activity."""

    WORKOUT = "workout"
    RUN = "run"
    WALK = "walk"
    GYM = "gym"
    OTHER = "other"


@dataclass(frozen=True)
class MealLogDraft:
    """Meal log fields before the store assigns an id."""

    user_id: UUID
    timestamp: datetime
    meal_type: MealType
    food_items: list[FoodItem]
    total_calories: float
    total_nutrients: NutritionInfo
    image_url: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class MealLog:
    """Persisted meal log."""

    id: UUID
    user_id: UUID
    timestamp: datetime
    meal_type: MealType
    food_items: list[FoodItem]
    total_calories: float
    total_nutrients: NutritionInfo
    image_url: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ActivityLogDraft:
    """Activity log fields before the store assigns an id."""

    user_id: UUID
    timestamp: datetime
    activity_type: ActivityType
    duration: float | None = None
    calories_burned: float | None = None
    distance: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ActivityLog:
    """Persisted activity log."""

    id: UUID
    user_id: UUID
    timestamp: datetime
    activity_type: ActivityType
    duration: float | None = None
    calories_burned: float | None = None
    distance: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DayLog:
    """Meals and activities of one local calendar day."""

    date: date
    meals: list[MealLog] = field(default_factory=list)
    activities: list[ActivityLog] = field(default_factory=list)
    total_calories_consumed: float = 0.0
    total_calories_burned: float = 0.0


def _require_value(value: object) -> object:
    if value is None:
        raise ValueError("must not be null")
    return value


class MealLogUpdate(BaseModel):
    """Partial meal log update; only explicitly set fields are written.

    Totals are derived from the food items and cannot be set directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    timestamp: datetime | None = None
    meal_type: MealType | None = None
    food_items: list[FoodItem] | None = None
    image_url: str | None = None
    notes: str | None = None

    @field_validator("timestamp", "meal_type", "food_items")
    @classmethod
    def _not_null(cls, value: object) -> object:
        return _require_value(value)


class ActivityLogUpdate(BaseModel):
    """Partial activity log update; only explicitly set fields are written."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    timestamp: datetime | None = None
    activity_type: ActivityType | None = None
    duration: float | None = Field(default=None, ge=0)
    calories_burned: float | None = Field(default=None, ge=0)
    distance: float | None = Field(default=None, ge=0)
    notes: str | None = None

    @field_validator("timestamp", "activity_type")
    @classmethod
    def _not_null(cls, value: object) -> object:
        return _require_value(value)
