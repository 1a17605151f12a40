"""Schemas for the users resource."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from traintrack.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from traintrack.schemas.validators import normalize_email, validate_language


class UserCreate(BaseModel):
    """Admin-created account; unlike registration the role can be chosen."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    language: str = "en"
    role_id: int

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        return normalize_email(v)

    @field_validator("language")
    @classmethod
    def check_language(cls, v: str) -> str:
        return validate_language(v)


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    language: str | None = None
    role_id: int | None = None

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> Any:
        return normalize_email(v)

    @field_validator("language")
    @classmethod
    def check_language(cls, v: str | None) -> str | None:
        return None if v is None else validate_language(v)


class UserRead(BaseModel):
    """User without password or reset-token material."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    language: str
    role_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
