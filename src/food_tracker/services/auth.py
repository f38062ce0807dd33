"""Authentication over the remote auth provider."""

import logging
from dataclasses import dataclass
from typing import Protocol

from food_tracker.domain.auth import (
    AuthResult,
    AuthSession,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
)

_logger = logging.getLogger(__name__)


class AuthProvider(Protocol):
    """Interface for the hosted auth provider."""

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> AuthSession:
        """Create an account and return its session."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    def send_password_reset(self, email: str) -> None:
        """Email a password reset code."""

    def reset_password(self, email: str, code: str, new_password: str) -> None:
        """Set a new password using an emailed reset code."""

    def get_user_id(self, access_token: str) -> str | None:
        """Return the user id for a valid access token."""


@dataclass
class AuthService:
    """Wraps provider calls into success/error results."""

    provider: AuthProvider

    def sign_up(self, request: SignUpRequest) -> AuthResult:
        """Create an account."""
        try:
            session = self.provider.sign_up(
                request.email,
                request.password,
                {"first_name": request.first_name, "last_name": request.last_name},
            )
        except Exception as exc:
            _logger.warning("Sign up failed: %s", exc)
            return AuthResult(
                success=False,
                error=_message(exc, "An error occurred during sign up"),
            )
        return AuthResult(success=True, session=session)

    def sign_in(self, request: SignInRequest) -> AuthResult:
        """Sign a user in."""
        try:
            session = self.provider.sign_in(request.email, request.password)
        except Exception as exc:
            _logger.warning("Sign in failed: %s", exc)
            return AuthResult(
                success=False,
                error=_message(exc, "An error occurred during sign in"),
            )
        return AuthResult(success=True, session=session)

    def sign_out(self, access_token: str) -> AuthResult:
        """Sign the session out."""
        try:
            self.provider.sign_out(access_token)
        except Exception as exc:
            _logger.warning("Sign out failed: %s", exc)
            return AuthResult(
                success=False,
                error=_message(exc, "An error occurred during sign out"),
            )
        return AuthResult(success=True)

    def send_password_reset(self, request: ForgotPasswordRequest) -> AuthResult:
        """Send a password reset email."""
        try:
            self.provider.send_password_reset(request.email)
        except Exception as exc:
            _logger.warning("Password reset email failed: %s", exc)
            return AuthResult(
                success=False,
                error=_message(
                    exc, "An error occurred while sending password reset email"
                ),
            )
        return AuthResult(success=True)

    def reset_password(self, request: ResetPasswordRequest) -> AuthResult:
        """Reset a password with a verification code."""
        try:
            self.provider.reset_password(
                request.email, request.code, request.new_password
            )
        except Exception as exc:
            _logger.warning("Password reset failed: %s", exc)
            return AuthResult(
                success=False,
                error=_message(exc, "An error occurred while resetting password"),
            )
        return AuthResult(success=True)

    def get_user_id(self, access_token: str) -> str | None:
        """Resolve an access token to a user id, or None when invalid."""
        try:
            return self.provider.get_user_id(access_token)
        except Exception as exc:
            _logger.warning("Token lookup failed: %s", exc)
            return None


def _message(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback
