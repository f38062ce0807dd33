"""Auth request and result models."""

import re
from dataclasses import dataclass
from typing import Self

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

_NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter!"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter!"),
    (re.compile(r"[0-9]"), "Password must contain at least one number!"),
    (
        re.compile(r"[!@#$%^&*]"),
        "Password must contain at least one special character!",
    ),
)


def _check_password(password: str) -> str:
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password


class _AuthRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignUpRequest(_AuthRequest):
    """New account details."""

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=20)
    password_confirm: str = Field(min_length=8)

    @field_validator("first_name", "last_name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        if not _NAME_PATTERN.match(value):
            raise ValueError("Name contains invalid characters!")
        return value

    @field_validator("password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        return _check_password(value)

    @model_validator(mode="after")
    def _passwords_match(self) -> Self:
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match!")
        return self


class SignInRequest(_AuthRequest):
    """Email and password credentials."""

    email: EmailStr
    password: str = Field(min_length=1)


class ForgotPasswordRequest(_AuthRequest):
    """Account to send a password reset email to."""

    email: EmailStr


class ResetPasswordRequest(_AuthRequest):
    """Password reset with the emailed verification code."""

    email: EmailStr
    code: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=20)

    @field_validator("new_password")
    @classmethod
    def _strong_password(cls, value: str) -> str:
        return _check_password(value)


@dataclass(frozen=True)
class AuthSession:
    """Tokens for a signed-in user."""

    user_id: str
    access_token: str | None
    refresh_token: str | None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an auth operation; ``error`` is set when it failed."""

    success: bool
    session: AuthSession | None = None
    error: str | None = None
