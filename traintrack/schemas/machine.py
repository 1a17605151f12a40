"""Schemas for machine categories, NFC tags and machines."""

from datetime import datetime

from pydantic import BaseModel, Field


class MachineCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class MachineCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)


class MachineCategoryRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class NFCTagCreate(BaseModel):
    nfc_id: str = Field(..., min_length=1, max_length=255, description="Identifier printed on the tag")
    studio_id: int


class NFCTagUpdate(BaseModel):
    nfc_id: str | None = Field(default=None, min_length=1, max_length=255)


class NFCTagRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    nfc_id: str
    studio_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MachineCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    machine_category_id: int
    nfc_tag_id: int
    studio_id: int


class MachineUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    machine_category_id: int | None = None
    nfc_tag_id: int | None = None
    studio_id: int | None = None


class MachineRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    machine_category_id: int
    nfc_tag_id: int
    studio_id: int
    nfc_tag: NFCTagRead | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
