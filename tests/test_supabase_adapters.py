"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import SimpleNamespace
from uuid import uuid4

from food_tracker.adapters.supabase_activity_log_repository import (
    SupabaseActivityLogRepository,
)
from food_tracker.adapters.supabase_auth_provider import SupabaseAuthProvider
from food_tracker.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from food_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from food_tracker.domain.logs import (
    ActivityLogDraft,
    ActivityType,
    MealLogDraft,
    MealType,
)
from food_tracker.domain.nutrition import FoodItem, NutritionInfo
from food_tracker.domain.profiles import UserProfile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "upsert": [],
            "update": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _meal_draft() -> MealLogDraft:
    return MealLogDraft(
        user_id=uuid4(),
        timestamp=datetime(2026, 8, 1, 12, 0, tzinfo=UTC),
        meal_type=MealType.LUNCH,
        food_items=[
            FoodItem(
                name="Apple",
                calories=95,
                quantity="1 medium",
                nutrients=NutritionInfo(protein=0.5, carbohydrates=25, vitamin_c=8.4),
            )
        ],
        total_calories=95,
        total_nutrients=NutritionInfo(protein=0.5, carbohydrates=25, vitamin_c=8.4),
    )


def test_meal_log_repository_create_serializes_camel_case() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    meal_id = str(uuid4())
    table.queue("insert", [{"id": meal_id}])

    repository = SupabaseMealLogRepository(client)
    created = repository.create_meal_log(_meal_draft())

    assert str(created) == meal_id
    payload = table.last_payload
    assert payload["meal_type"] == "lunch"
    assert payload["timestamp"] == "2026-08-01T12:00:00+00:00"
    assert payload["food_items"][0]["nutrients"]["vitaminC"] == 8.4
    assert "fiber" not in payload["food_items"][0]["nutrients"]
    assert "image_url" not in payload
    assert "notes" not in payload


def test_meal_log_repository_lists_range_newest_first() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "timestamp": "2026-08-01T19:00:00+00:00",
                "meal_type": "dinner",
                "food_items": [
                    {"name": "Pasta", "calories": 600, "nutrients": {"protein": 20}}
                ],
                "total_calories": 600,
                "total_nutrients": {"protein": 20, "fiber": 0},
                "image_url": None,
                "notes": "homemade",
            }
        ],
    )

    repository = SupabaseMealLogRepository(client)
    start = datetime(2026, 8, 1, tzinfo=UTC)
    end = datetime(2026, 8, 2, tzinfo=UTC)
    meals = repository.list_meal_logs(user_id, start, end)

    assert meals[0].meal_type == MealType.DINNER
    assert meals[0].food_items[0].name == "Pasta"
    assert meals[0].total_nutrients.fiber == 0
    assert meals[0].notes == "homemade"
    assert ("gte", "timestamp", start.isoformat()) in table.last_filters
    assert ("lte", "timestamp", end.isoformat()) in table.last_filters
    assert table.last_order == ("timestamp", True)


def test_meal_log_repository_update_and_delete_are_scoped_to_owner() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    meal_id = uuid4()
    user_id = uuid4()
    table.queue("update", [{"id": str(meal_id)}])

    repository = SupabaseMealLogRepository(client)
    updated = repository.update_meal_log(
        user_id,
        meal_id,
        {
            "meal_type": MealType.SNACK,
            "total_nutrients": NutritionInfo(protein=3),
            "notes": "edited",
        },
    )

    assert updated is True
    assert table.last_payload == {
        "meal_type": "snack",
        "total_nutrients": {"protein": 3.0, "carbohydrates": 0.0, "fat": 0.0},
        "notes": "edited",
    }
    assert ("eq", "id", str(meal_id)) in table.last_filters
    assert ("eq", "user_id", str(user_id)) in table.last_filters

    table.last_filters.clear()
    deleted = repository.delete_meal_log(user_id, meal_id)

    assert deleted is False
    assert table.actions == ["update", "delete"]
    assert table.last_filters == [
        ("eq", "id", str(meal_id)),
        ("eq", "user_id", str(user_id)),
    ]


def test_activity_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("activity_logs")
    activity_id = str(uuid4())
    user_id = uuid4()
    table.queue("insert", [{"id": activity_id}])
    table.queue(
        "select",
        [
            {
                "id": activity_id,
                "user_id": str(user_id),
                "timestamp": "2026-08-01T07:00:00+00:00",
                "activity_type": "run",
                "duration": 30,
                "calories_burned": 300,
                "distance": None,
                "notes": None,
            }
        ],
    )

    repository = SupabaseActivityLogRepository(client)
    created = repository.create_activity_log(
        ActivityLogDraft(
            user_id=user_id,
            timestamp=datetime(2026, 8, 1, 7, 0, tzinfo=UTC),
            activity_type=ActivityType.RUN,
            duration=30,
            calories_burned=300,
        )
    )
    insert_payload = table.last_payload
    listed = repository.list_activity_logs(
        user_id, datetime(2026, 8, 1, tzinfo=UTC), datetime(2026, 8, 2, tzinfo=UTC)
    )

    assert str(created) == activity_id
    assert insert_payload["activity_type"] == "run"
    assert "distance" not in insert_payload
    assert listed[0].calories_burned == 300.0
    assert listed[0].distance is None


def test_activity_log_repository_update_serializes_values() -> None:
    client = FakeSupabaseClient()
    table = client.table("activity_logs")
    user_id = uuid4()
    activity_id = uuid4()
    table.queue("update", [{"id": str(activity_id)}])

    repository = SupabaseActivityLogRepository(client)
    updated = repository.update_activity_log(
        user_id,
        activity_id,
        {
            "activity_type": ActivityType.GYM,
            "timestamp": datetime(2026, 8, 2, 6, 0, tzinfo=UTC),
        },
    )

    assert updated is True
    assert table.last_payload == {
        "activity_type": "gym",
        "timestamp": "2026-08-02T06:00:00+00:00",
    }
    assert ("eq", "user_id", str(user_id)) in table.last_filters


def test_activity_log_repository_delete_reports_missing_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("activity_logs")
    user_id = uuid4()
    activity_id = uuid4()

    repository = SupabaseActivityLogRepository(client)

    assert repository.delete_activity_log(user_id, activity_id) is False
    assert table.last_filters == [
        ("eq", "id", str(activity_id)),
        ("eq", "user_id", str(user_id)),
    ]


def test_profile_repository_reads_and_updates_users_table() -> None:
    client = FakeSupabaseClient()
    table = client.table("users")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "id": str(user_id),
                "email": "ana@example.com",
                "first_name": "Ana",
                "last_name": "Lopez",
                "photo_url": None,
            }
        ],
    )

    repository = SupabaseProfileRepository(client)
    repository.upsert_profile(
        UserProfile(
            user_id=user_id,
            email="ana@example.com",
            first_name="Ana",
            last_name="Lopez",
        )
    )
    upserted = table.last_payload
    profile = repository.get_profile(user_id)
    updated = repository.update_photo_url(user_id, "https://cdn.example.com/a.jpg")

    assert upserted == {
        "id": str(user_id),
        "email": "ana@example.com",
        "first_name": "Ana",
        "last_name": "Lopez",
    }
    assert profile is not None
    assert profile.full_name == "Ana Lopez"
    assert profile.photo_url is None
    assert table.last_limit == 1
    assert updated is False
    assert table.last_payload == {"photo_url": "https://cdn.example.com/a.jpg"}
    assert table.actions == ["upsert", "select", "update"]


class _FakeAuthApi:
    def __init__(self, calls: list[tuple[str, object]]) -> None:
        self.calls = calls
        self.admin = SimpleNamespace(
            sign_out=lambda token: self.calls.append(("admin.sign_out", token)),
            update_user_by_id=lambda uid, attrs: self.calls.append(
                ("admin.update_user_by_id", (uid, attrs))
            ),
        )

    def sign_in_with_password(self, credentials):  # type: ignore[no-untyped-def]
        self.calls.append(("sign_in_with_password", credentials))
        return SimpleNamespace(
            user=SimpleNamespace(id="user-1"),
            session=SimpleNamespace(access_token="access", refresh_token="refresh"),
        )

    def verify_otp(self, params):  # type: ignore[no-untyped-def]
        self.calls.append(("verify_otp", params))
        return SimpleNamespace(user=SimpleNamespace(id="user-1"), session=None)

    def get_user(self, jwt):  # type: ignore[no-untyped-def]
        return SimpleNamespace(user=SimpleNamespace(id="user-1"))


@dataclass
class _AuthClientFactory:
    calls: list[tuple[str, object]] = field(default_factory=list)
    created: list[SimpleNamespace] = field(default_factory=list)

    def __call__(self) -> SimpleNamespace:
        client = SimpleNamespace(auth=_FakeAuthApi(self.calls))
        self.created.append(client)
        return client


def test_supabase_auth_provider_calls_client() -> None:
    factory = _AuthClientFactory()
    provider = SupabaseAuthProvider(factory)

    session = provider.sign_in("ana@example.com", "Secret#123")
    provider.reset_password("ana@example.com", "123456", "Better#456")
    provider.sign_out("access")

    assert session.user_id == "user-1"
    assert session.access_token == "access"
    assert provider.get_user_id("access") == "user-1"
    recovery = {"email": "ana@example.com", "token": "123456", "type": "recovery"}
    assert ("verify_otp", recovery) in factory.calls
    assert (
        "admin.update_user_by_id",
        ("user-1", {"password": "Better#456"}),
    ) in factory.calls
    assert ("admin.sign_out", "access") in factory.calls


def test_supabase_auth_provider_never_reuses_a_signed_in_client() -> None:
    factory = _AuthClientFactory()
    provider = SupabaseAuthProvider(factory)

    provider.sign_in("ana@example.com", "Secret#123")
    provider.reset_password("ana@example.com", "123456", "Better#456")

    assert len(factory.created) == 3
    assert len({id(client) for client in factory.created}) == 3
