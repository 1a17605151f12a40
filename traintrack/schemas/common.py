"""Response envelopes shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Pagination(BaseModel):
    """Page metadata for list endpoints."""

    model_config = {"populate_by_name": True}

    current_page: int = Field(alias="currentPage", description="Current page number (1-based)")
    total_pages: int = Field(alias="totalPages", description="Number of pages for the given limit")
    total_number: int = Field(alias="totalNumber", description="Total number of items")


class DataResponse(BaseModel, Generic[T]):
    """Success envelope: {httpCode, message, data, pagination?}."""

    model_config = {"populate_by_name": True}

    http_code: int = Field(alias="httpCode")
    message: str
    data: T | None = None
    pagination: Pagination | None = None


class MessageResponse(BaseModel):
    """Success envelope without a payload."""

    model_config = {"populate_by_name": True}

    http_code: int = Field(alias="httpCode")
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope produced by the exception handlers (documentation only)."""

    model_config = {"populate_by_name": True}

    name: str
    http_code: int = Field(alias="httpCode")
    message: str
    errors: list[str] | None = None


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation or constraint failure"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or revoked token"},
    403: {"model": ErrorResponse, "description": "Authenticated but not entitled"},
    404: {"model": ErrorResponse, "description": "Entity not found"},
    409: {"model": ErrorResponse, "description": "Unique value already taken (email, name, NFC tag)"},
}
