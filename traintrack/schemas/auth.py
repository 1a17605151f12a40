"""Request/response schemas for auth endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from traintrack.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from traintrack.schemas.user import UserRead
from traintrack.schemas.validators import normalize_email, validate_language


class RegisterRequest(BaseModel):
    """Public self-registration. The role is always 'user'."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    language: str = Field(default="en")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        return normalize_email(v)

    @field_validator("language")
    @classmethod
    def check_language(cls, v: str) -> str:
        return validate_language(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        return normalize_email(v)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Most recently issued refresh token")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        return normalize_email(v)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Token received by mail")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class TokenResponse(BaseModel):
    """Token pair returned after login, registration or refresh."""

    message: str
    access_token: str = Field(..., description="JWT access token")
    access_token_expires: datetime
    refresh_token: str = Field(..., description="JWT refresh token")
    refresh_token_expires: datetime
    token_type: str = Field(default="bearer", description="Token type")


class RegisterResponse(TokenResponse):
    user: UserRead


class CurrentUser(BaseModel):
    """Authenticated principal attached to the request by the token gate."""

    id: int
    name: str
    email: str
    language: str
    role: str | None
    session_id: str
    studio_ids: list[int] = Field(default_factory=list)
