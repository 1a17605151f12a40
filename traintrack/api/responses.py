"""Builders for the success envelopes."""

from typing import Any

from fastapi import Query, status

from traintrack.schemas.common import DataResponse, MessageResponse, Pagination
from traintrack.services.crud import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def data_response(
    data: Any,
    message: str,
    http_code: int = status.HTTP_200_OK,
    pagination: Pagination | None = None,
) -> DataResponse:
    return DataResponse(http_code=http_code, message=message, data=data, pagination=pagination)


def message_response(message: str, http_code: int = status.HTTP_200_OK) -> MessageResponse:
    return MessageResponse(http_code=http_code, message=message)


class PageParams:
    """Query parameters ?page=&limit= shared by list endpoints."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="1-based page number"),
        limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    ) -> None:
        self.page = page
        self.limit = limit
