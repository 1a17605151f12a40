"""Schemas for units, training sessions, training entries and training data."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class UnitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class UnitUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)


class UnitRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class TrainingSessionCreate(BaseModel):
    session_start: datetime
    session_end: datetime | None = None

    @model_validator(mode="after")
    def check_order(self) -> "TrainingSessionCreate":
        if self.session_end is not None and self.session_end < self.session_start:
            raise ValueError("session_end must not be before session_start")
        return self


class TrainingSessionUpdate(BaseModel):
    session_start: datetime | None = None
    session_end: datetime | None = None


class TrainingSessionRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    session_start: datetime
    session_end: datetime | None = None
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TrainingEntryCreate(BaseModel):
    value: str = Field(..., min_length=1, max_length=255)
    unit_id: int
    machine_id: int
    session_id: int


class TrainingEntryUpdate(BaseModel):
    value: str | None = Field(default=None, min_length=1, max_length=255)
    unit_id: int | None = None
    machine_id: int | None = None
    session_id: int | None = None


class TrainingEntryRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    value: str
    unit_id: int
    machine_id: int
    session_id: int
    user_id: int
    unit: UnitRead | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TrainingDataCreate(BaseModel):
    value: str = Field(..., min_length=1, max_length=255)
    unit_id: int
    machine_category_id: int
    session_id: int


class TrainingDataUpdate(BaseModel):
    value: str | None = Field(default=None, min_length=1, max_length=255)
    unit_id: int | None = None
    machine_category_id: int | None = None
    session_id: int | None = None


class TrainingDataRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    value: str
    unit_id: int
    machine_category_id: int
    session_id: int
    user_id: int
    unit: UnitRead | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
