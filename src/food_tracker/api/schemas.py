"""Request and response bodies for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from food_tracker.domain.auth import AuthResult
from food_tracker.domain.logs import ActivityType, MealType
from food_tracker.domain.nutrition import FoodItem, NutritionInfo


class ApiModel(BaseModel):
    """Base model with camelCase wire names."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class AnalyzeRequest(ApiModel):
    image_base64: str = Field(min_length=1)
    mime_type: str = "image/jpeg"


class MealLogCreate(ApiModel):
    food_items: list[FoodItem]
    timestamp: datetime | None = None
    meal_type: MealType | None = None
    image_url: str | None = None
    notes: str | None = None


class ActivityLogCreate(ApiModel):
    activity_type: ActivityType
    timestamp: datetime | None = None
    duration: float | None = Field(default=None, ge=0)
    calories_burned: float | None = Field(default=None, ge=0)
    distance: float | None = Field(default=None, ge=0)
    notes: str | None = None


class MealLogOut(ApiModel):
    id: UUID
    user_id: UUID
    timestamp: datetime
    meal_type: MealType
    food_items: list[FoodItem]
    total_calories: float
    total_nutrients: NutritionInfo
    image_url: str | None = None
    notes: str | None = None


class ActivityLogOut(ApiModel):
    id: UUID
    user_id: UUID
    timestamp: datetime
    activity_type: ActivityType
    duration: float | None = None
    calories_burned: float | None = None
    distance: float | None = None
    notes: str | None = None


class DayLogOut(ApiModel):
    date: date
    meals: list[MealLogOut]
    activities: list[ActivityLogOut]
    total_calories_consumed: float
    total_calories_burned: float


class ProfileOut(ApiModel):
    user_id: UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    photo_url: str | None = None
    full_name: str
    initials: str


class AvatarUrlUpdate(ApiModel):
    photo_url: AnyHttpUrl


class AuthResponse(ApiModel):
    success: bool
    user_id: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        session = result.session
        return cls(
            success=result.success,
            user_id=session.user_id if session else None,
            access_token=session.access_token if session else None,
            refresh_token=session.refresh_token if session else None,
            error=result.error,
        )
