"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from food_tracker.config import Settings
from food_tracker.containers import AppContainer
from food_tracker.domain.auth import AuthSession
from food_tracker.domain.logs import (
    ActivityLog,
    ActivityLogDraft,
    MealLog,
    MealLogDraft,
)
from food_tracker.domain.profiles import UserProfile
from food_tracker.services.activities import (
    ActivityLogRepository,
    ActivityLogService,
)
from food_tracker.services.analyzer import FoodImageAnalyzer, InferenceClient
from food_tracker.services.auth import AuthProvider, AuthService
from food_tracker.services.day_logs import DayLogService
from food_tracker.services.meals import MealLogRepository, MealLogService
from food_tracker.services.profiles import ProfileRepository, ProfileService

APPLE_REPLY = """Here is the analysis:
```json
{
  "foodItems": [
    {
      "name": "Apple",
      "calories": 95,
      "quantity": "1 medium",
      "nutrients": {"protein": 0.5, "carbohydrates": 25, "fat": 0.3, "fiber": 4.4}
    }
  ]
}
```
Enjoy your meal!"""


@dataclass
class FakeInferenceClient(InferenceClient):
    """Fake inference client returning a fixed reply."""

    reply: str | None = APPLE_REPLY
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        image_base64: str,
        mime_type: str,
    ) -> str | None:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_base64": image_base64,
                "mime_type": mime_type,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    meals: dict[UUID, MealLog] = field(default_factory=dict)
    fail: bool = False

    def create_meal_log(self, draft: MealLogDraft) -> UUID:
        self._check()
        meal_id = uuid4()
        self.meals[meal_id] = MealLog(id=meal_id, **vars(draft))
        return meal_id

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        self._check()
        matching = [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and start <= meal.timestamp <= end
        ]
        return sorted(matching, key=lambda meal: meal.timestamp, reverse=True)

    def update_meal_log(
        self, user_id: UUID, meal_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        self._check()
        meal = self.meals.get(meal_log_id)
        if meal is None or meal.user_id != user_id:
            return False
        self.meals[meal_log_id] = MealLog(**(vars(meal) | changes))
        return True

    def delete_meal_log(self, user_id: UUID, meal_log_id: UUID) -> bool:
        self._check()
        meal = self.meals.get(meal_log_id)
        if meal is None or meal.user_id != user_id:
            return False
        del self.meals[meal_log_id]
        return True

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("store unavailable")


@dataclass
class InMemoryActivityLogRepository(ActivityLogRepository):
    """In-memory activity log repository for tests."""

    activities: dict[UUID, ActivityLog] = field(default_factory=dict)
    fail: bool = False

    def create_activity_log(self, draft: ActivityLogDraft) -> UUID:
        self._check()
        activity_id = uuid4()
        self.activities[activity_id] = ActivityLog(id=activity_id, **vars(draft))
        return activity_id

    def list_activity_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[ActivityLog]:
        self._check()
        matching = [
            activity
            for activity in self.activities.values()
            if activity.user_id == user_id and start <= activity.timestamp <= end
        ]
        return sorted(matching, key=lambda activity: activity.timestamp, reverse=True)

    def update_activity_log(
        self, user_id: UUID, activity_log_id: UUID, changes: dict[str, object]
    ) -> bool:
        self._check()
        activity = self.activities.get(activity_log_id)
        if activity is None or activity.user_id != user_id:
            return False
        self.activities[activity_log_id] = ActivityLog(**(vars(activity) | changes))
        return True

    def delete_activity_log(self, user_id: UUID, activity_log_id: UUID) -> bool:
        self._check()
        activity = self.activities.get(activity_log_id)
        if activity is None or activity.user_id != user_id:
            return False
        del self.activities[activity_log_id]
        return True

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("store unavailable")


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    fail: bool = False

    def upsert_profile(self, profile: UserProfile) -> None:
        if self.fail:
            raise ConnectionError("store unavailable")
        self.profiles[profile.user_id] = profile

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        if self.fail:
            raise ConnectionError("store unavailable")
        return self.profiles.get(user_id)

    def update_photo_url(self, user_id: UUID, photo_url: str) -> bool:
        if self.fail:
            raise ConnectionError("store unavailable")
        profile = self.profiles.get(user_id)
        if profile is None:
            return False
        self.profiles[user_id] = replace(profile, photo_url=photo_url)
        return True


@dataclass
class FakeAuthProvider(AuthProvider):
    """Fake auth provider with a static token table."""

    tokens: dict[str, str] = field(default_factory=dict)
    users: dict[str, str] = field(default_factory=dict)
    reset_emails: list[str] = field(default_factory=list)
    signed_out: list[str] = field(default_factory=list)

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthSession:
        if email in self.users:
            raise ValueError("User already registered")
        user_id = str(uuid4())
        self.users[email] = password
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return AuthSession(user_id=user_id, access_token=token, refresh_token=None)

    def sign_in(self, email: str, password: str) -> AuthSession:
        if self.users.get(email) != password:
            raise ValueError("Invalid login credentials")
        user_id = str(uuid4())
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return AuthSession(user_id=user_id, access_token=token, refresh_token="r")

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.tokens.pop(access_token, None)

    def send_password_reset(self, email: str) -> None:
        self.reset_emails.append(email)

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        if code != "123456":
            raise ValueError("Token has expired or is invalid")
        self.users[email] = new_password

    def get_user_id(self, access_token: str) -> str | None:
        return self.tokens.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
        environment="test",
    )


@pytest.fixture
def inference_client() -> FakeInferenceClient:
    return FakeInferenceClient()


@pytest.fixture
def meal_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityLogRepository:
    return InMemoryActivityLogRepository()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def auth_headers(auth_provider: FakeAuthProvider, user_id: UUID) -> dict[str, str]:
    auth_provider.tokens["valid-token"] = str(user_id)
    return {"Authorization": "Bearer valid-token"}


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    inference_client: FakeInferenceClient,
    meal_repository: InMemoryMealLogRepository,
    activity_repository: InMemoryActivityLogRepository,
    auth_provider: FakeAuthProvider,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    meal_log_service = MealLogService(repository=meal_repository)
    activity_log_service = ActivityLogService(activity_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(auth_provider),
        food_image_analyzer=FoodImageAnalyzer(
            client=inference_client, model=settings.openai_model
        ),
        meal_log_service=meal_log_service,
        activity_log_service=activity_log_service,
        day_log_service=DayLogService(
            meal_log_service=meal_log_service,
            activity_log_service=activity_log_service,
        ),
        profile_service=ProfileService(profile_repository),
        close_resources=close_resources,
    )
