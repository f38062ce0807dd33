"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from food_tracker.api.schemas import (
    ActivityLogCreate,
    ActivityLogOut,
    AnalyzeRequest,
    AuthResponse,
    AvatarUrlUpdate,
    DayLogOut,
    MealLogCreate,
    MealLogOut,
    ProfileOut,
)
from food_tracker.app_logging import configure_logging
from food_tracker.containers import AppContainer
from food_tracker.domain.auth import (
    AuthResult,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
)
from food_tracker.domain.errors import (
    AnalysisError,
    NotFoundError,
    PersistenceError,
)
from food_tracker.domain.logs import ActivityLogUpdate, MealLogUpdate
from food_tracker.domain.nutrition import FoodAnalysis


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the bearer token from the Authorization header."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return token.strip()


def current_user_id(
    token: str = Depends(bearer_token),
    container: AppContainer = Depends(get_container),
) -> UUID:
    """Resolve the signed-in user from the bearer token."""
    user_id = container.auth_service.get_user_id(token)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(
        request: Request, exc: AnalysisError
    ) -> JSONResponse:
        logger.error("Food analysis failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": _format_analysis_error(container, exc)},
        )

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(
        request: Request, exc: NotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/auth/sign-up", response_model=AuthResponse)
    async def sign_up(
        body: SignUpRequest, state: AppContainer = Depends(get_container)
    ) -> JSONResponse | AuthResponse:
        """Create an account and its profile."""
        result = state.auth_service.sign_up(body)
        if result.success and result.session is not None:
            state.profile_service.create_profile(
                UUID(result.session.user_id),
                body.email,
                body.first_name,
                body.last_name,
            )
        return _auth_response(result)

    @app.post("/auth/sign-in", response_model=AuthResponse)
    async def sign_in(
        body: SignInRequest, state: AppContainer = Depends(get_container)
    ) -> JSONResponse | AuthResponse:
        """Sign in with email and password."""
        return _auth_response(state.auth_service.sign_in(body))

    @app.post("/auth/sign-out", response_model=AuthResponse)
    async def sign_out(
        token: str = Depends(bearer_token),
        state: AppContainer = Depends(get_container),
    ) -> JSONResponse | AuthResponse:
        """Sign the current session out."""
        return _auth_response(state.auth_service.sign_out(token))

    @app.post("/auth/forgot-password", response_model=AuthResponse)
    async def forgot_password(
        body: ForgotPasswordRequest, state: AppContainer = Depends(get_container)
    ) -> JSONResponse | AuthResponse:
        """Send a password reset email."""
        return _auth_response(state.auth_service.send_password_reset(body))

    @app.post("/auth/reset-password", response_model=AuthResponse)
    async def reset_password(
        body: ResetPasswordRequest, state: AppContainer = Depends(get_container)
    ) -> JSONResponse | AuthResponse:
        """Reset a password with the emailed code."""
        return _auth_response(state.auth_service.reset_password(body))

    @app.post("/analyze", response_model=FoodAnalysis)
    async def analyze(
        body: AnalyzeRequest,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> FoodAnalysis:
        """Estimate nutrition for a meal photo."""
        return await state.food_image_analyzer.analyze(
            body.image_base64, body.mime_type
        )

    @app.post(
        "/meals", response_model=MealLogOut, status_code=status.HTTP_201_CREATED
    )
    async def create_meal(
        body: MealLogCreate,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> MealLogOut:
        """Save a meal log; totals are computed from the items."""
        meal = state.meal_log_service.save_meal(
            user_id=user_id,
            food_items=body.food_items,
            timestamp=body.timestamp,
            meal_type=body.meal_type,
            image_url=body.image_url,
            notes=body.notes,
        )
        return MealLogOut.model_validate(meal)

    @app.get("/meals", response_model=list[MealLogOut])
    async def list_meals(
        start: datetime,
        end: datetime,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> list[MealLogOut]:
        """Return meal logs in a time range, newest first."""
        meals = state.meal_log_service.list_meal_logs(user_id, start, end)
        return [MealLogOut.model_validate(meal) for meal in meals]

    @app.patch("/meals/{meal_log_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def update_meal(
        meal_log_id: UUID,
        body: MealLogUpdate,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Replace any subset of a meal log's fields."""
        state.meal_log_service.update_meal_log(user_id, meal_log_id, body)

    @app.delete("/meals/{meal_log_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_meal(
        meal_log_id: UUID,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Delete a meal log."""
        state.meal_log_service.delete_meal_log(user_id, meal_log_id)

    @app.post(
        "/activities",
        response_model=ActivityLogOut,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_activity(
        body: ActivityLogCreate,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> ActivityLogOut:
        """Save an activity log."""
        activity = state.activity_log_service.save_activity(
            user_id=user_id,
            activity_type=body.activity_type,
            timestamp=body.timestamp,
            duration=body.duration,
            calories_burned=body.calories_burned,
            distance=body.distance,
            notes=body.notes,
        )
        return ActivityLogOut.model_validate(activity)

    @app.get("/activities", response_model=list[ActivityLogOut])
    async def list_activities(
        start: datetime,
        end: datetime,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> list[ActivityLogOut]:
        """Return activity logs in a time range, newest first."""
        activities = state.activity_log_service.list_activity_logs(
            user_id, start, end
        )
        return [ActivityLogOut.model_validate(activity) for activity in activities]

    @app.patch(
        "/activities/{activity_log_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def update_activity(
        activity_log_id: UUID,
        body: ActivityLogUpdate,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Replace any subset of an activity log's fields."""
        state.activity_log_service.update_activity_log(
            user_id, activity_log_id, body
        )

    @app.delete(
        "/activities/{activity_log_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def delete_activity(
        activity_log_id: UUID,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Delete an activity log."""
        state.activity_log_service.delete_activity_log(
            user_id, activity_log_id
        )

    @app.get("/calendar", response_model=list[DayLogOut])
    async def calendar(
        start: datetime,
        end: datetime,
        timezone: str | None = None,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> list[DayLogOut]:
        """Return per-day meals and activities, most recent day first."""
        timezone_name = timezone or state.settings.default_timezone
        if not _is_valid_timezone(timezone_name):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown timezone: {timezone_name}",
            )
        days = state.day_log_service.get_day_logs(
            user_id, start, end, timezone_name
        )
        return [DayLogOut.model_validate(day) for day in days]

    @app.get("/me", response_model=ProfileOut)
    async def get_profile(
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> ProfileOut:
        """Return the signed-in user's profile."""
        return ProfileOut.model_validate(state.profile_service.get_profile(user_id))

    @app.put("/me/avatar-url", response_model=ProfileOut)
    async def update_avatar_url(
        body: AvatarUrlUpdate,
        user_id: UUID = Depends(current_user_id),
        state: AppContainer = Depends(get_container),
    ) -> ProfileOut:
        """Point the avatar at an already uploaded image."""
        profile = state.profile_service.update_photo_url(user_id, str(body.photo_url))
        return ProfileOut.model_validate(profile)

    return app


def _auth_response(result: AuthResult) -> JSONResponse | AuthResponse:
    """Return the auth result, as a 400 response when it failed."""
    response = AuthResponse.from_result(result)
    if result.success:
        return response
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(mode="json", by_alias=True),
    )


def _format_analysis_error(state_container: AppContainer, exc: Exception) -> str:
    """Return the user-facing analysis error with local debug info."""
    fallback = AnalysisError.USER_MESSAGE
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback


def _is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
