"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from food_tracker.adapters.openai_inference_client import OpenAIInferenceClient
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
from food_tracker.config import Settings
from food_tracker.services.activities import ActivityLogService
from food_tracker.services.analyzer import FoodImageAnalyzer
from food_tracker.services.auth import AuthService
from food_tracker.services.day_logs import DayLogService
from food_tracker.services.meals import MealLogService
from food_tracker.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    food_image_analyzer: FoodImageAnalyzer
    meal_log_service: MealLogService
    activity_log_service: ActivityLogService
    day_log_service: DayLogService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    inference_client = OpenAIInferenceClient.create(resolved_settings.openai_api_key)
    food_image_analyzer = FoodImageAnalyzer(
        client=inference_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        timezone_name=resolved_settings.default_timezone,
    )
    activity_log_service = ActivityLogService(
        SupabaseActivityLogRepository(supabase_client)
    )
    day_log_service = DayLogService(
        meal_log_service=meal_log_service,
        activity_log_service=activity_log_service,
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))

    def auth_client() -> Client:
        return create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_service_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    auth_service = AuthService(SupabaseAuthProvider(auth_client))

    async def close_resources() -> None:
        await inference_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        food_image_analyzer=food_image_analyzer,
        meal_log_service=meal_log_service,
        activity_log_service=activity_log_service,
        day_log_service=day_log_service,
        profile_service=profile_service,
        close_resources=close_resources,
    )
