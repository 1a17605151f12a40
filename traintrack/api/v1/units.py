"""Units of measurement: readable by everyone, managed by admins; names are unique."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from traintrack.api.deps import AdminOnly, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.core.errors import ConflictError
from traintrack.models import Unit
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.training import UnitCreate, UnitRead, UnitUpdate
from traintrack.services import crud

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_name_available(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Unit).filter(Unit.name == name)
    if exclude_id is not None:
        query = query.filter(Unit.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("A unit with this name already exists")


@router.get("", response_model=DataResponse[list[UnitRead]])
def list_units(_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(Unit).order_by(Unit.id), page.page, page.limit)
    return data_response([UnitRead.model_validate(u) for u in rows], "Units retrieved", pagination=pagination)


@router.get("/{unit_id}", response_model=DataResponse[UnitRead])
def get_unit(unit_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    unit = crud.get_or_404(db, Unit, unit_id, "Unit")
    return data_response(UnitRead.model_validate(unit), "Unit retrieved")


@router.post("", response_model=DataResponse[UnitRead], status_code=status.HTTP_201_CREATED)
def create_unit(body: UnitCreate, _admin: AdminOnly, db: DbSession) -> DataResponse:
    _ensure_name_available(db, body.name)
    unit = crud.save(db, Unit(name=body.name))
    logger.info("Unit created: %s", unit.name)
    return data_response(UnitRead.model_validate(unit), "Unit created", status.HTTP_201_CREATED)


@router.put("/{unit_id}", response_model=DataResponse[UnitRead])
def update_unit(unit_id: int, body: UnitUpdate, _admin: AdminOnly, db: DbSession) -> DataResponse:
    unit = crud.get_or_404(db, Unit, unit_id, "Unit")
    if body.name is not None:
        _ensure_name_available(db, body.name, exclude_id=unit.id)
    unit = crud.save(db, crud.apply_changes(unit, body))
    logger.info("Unit updated: %s", unit.name)
    return data_response(UnitRead.model_validate(unit), "Unit updated")


@router.delete("/{unit_id}", response_model=MessageResponse)
def delete_unit(unit_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    unit = crud.get_or_404(db, Unit, unit_id, "Unit")
    crud.delete(db, unit)
    logger.info("Unit deleted: %s", unit_id)
    return message_response("Unit deleted")
