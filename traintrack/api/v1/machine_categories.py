"""Machine categories: readable by everyone, managed by admins."""

import logging

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOnly, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.models import MachineCategory
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.machine import MachineCategoryCreate, MachineCategoryRead, MachineCategoryUpdate
from traintrack.services import crud

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DataResponse[list[MachineCategoryRead]])
def list_machine_categories(_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(MachineCategory).order_by(MachineCategory.id), page.page, page.limit)
    logger.info("Retrieved %s machine categories", pagination.total_number)
    return data_response(
        [MachineCategoryRead.model_validate(c) for c in rows],
        "Machine categories retrieved",
        pagination=pagination,
    )


@router.get("/{category_id}", response_model=DataResponse[MachineCategoryRead])
def get_machine_category(category_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    category = crud.get_or_404(db, MachineCategory, category_id, "Machine category")
    return data_response(MachineCategoryRead.model_validate(category), "Machine category retrieved")


@router.post("", response_model=DataResponse[MachineCategoryRead], status_code=status.HTTP_201_CREATED)
def create_machine_category(body: MachineCategoryCreate, _admin: AdminOnly, db: DbSession) -> DataResponse:
    category = crud.save(db, MachineCategory(name=body.name))
    logger.info("Machine category created: %s", category.name)
    return data_response(
        MachineCategoryRead.model_validate(category), "Machine category created", status.HTTP_201_CREATED
    )


@router.put("/{category_id}", response_model=DataResponse[MachineCategoryRead])
def update_machine_category(
    category_id: int, body: MachineCategoryUpdate, _admin: AdminOnly, db: DbSession
) -> DataResponse:
    category = crud.get_or_404(db, MachineCategory, category_id, "Machine category")
    category = crud.save(db, crud.apply_changes(category, body))
    logger.info("Machine category updated: %s", category.name)
    return data_response(MachineCategoryRead.model_validate(category), "Machine category updated")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_machine_category(category_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    category = crud.get_or_404(db, MachineCategory, category_id, "Machine category")
    crud.delete(db, category)
    logger.info("Machine category deleted: %s", category_id)
    return message_response("Machine category deleted")
