"""Schemas for studios and licences."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class LicenceRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    max_machines: int
    price: Decimal


class StudioCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    street: str | None = Field(default=None, max_length=255)
    house_number: str | None = Field(default=None, max_length=32)
    city: str | None = Field(default=None, max_length=255)
    zip: str | None = Field(default=None, max_length=16)
    licence_id: int


class StudioUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    street: str | None = Field(default=None, max_length=255)
    house_number: str | None = Field(default=None, max_length=32)
    city: str | None = Field(default=None, max_length=255)
    zip: str | None = Field(default=None, max_length=16)
    licence_id: int | None = None


class StudioRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    street: str | None = None
    house_number: str | None = None
    city: str | None = None
    zip: str | None = None
    licence_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
