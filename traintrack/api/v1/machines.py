"""Machines: bound to one NFC tag and one studio, capped by the studio's licence."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from traintrack.api.deps import AdminOrStudioOwner, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.core.errors import BadRequestError, ConflictError
from traintrack.models import Machine, MachineCategory, NFCTag, Studio
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.machine import MachineCreate, MachineRead, MachineUpdate
from traintrack.services import crud
from traintrack.services.permissions import check_permission

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_capacity(db: Session, studio: Studio) -> None:
    """Raise when the studio already holds as many machines as its licence allows."""
    count = db.query(Machine).filter(Machine.studio_id == studio.id).count()
    if count >= studio.licence.max_machines:
        raise BadRequestError(
            f"Licence '{studio.licence.name}' allows at most {studio.licence.max_machines} machines"
        )


def _check_nfc_tag(db: Session, nfc_tag_id: int, studio_id: int, machine_id: int | None = None) -> None:
    tag = crud.get_or_404(db, NFCTag, nfc_tag_id, "NFC tag")
    if tag.studio_id != studio_id:
        raise BadRequestError("NFC tag belongs to a different studio")
    bound = db.query(Machine).filter(Machine.nfc_tag_id == nfc_tag_id)
    if machine_id is not None:
        bound = bound.filter(Machine.id != machine_id)
    if bound.first() is not None:
        raise ConflictError("NFC tag is already bound to another machine")


@router.get("", response_model=DataResponse[list[MachineRead]])
def list_machines(_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(Machine).order_by(Machine.id), page.page, page.limit)
    logger.info("Retrieved %s machines", len(rows))
    return data_response([MachineRead.model_validate(m) for m in rows], "Machines retrieved", pagination=pagination)


@router.get("/{machine_id}", response_model=DataResponse[MachineRead])
def get_machine(machine_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    machine = crud.get_or_404(db, Machine, machine_id, "Machine")
    return data_response(MachineRead.model_validate(machine), "Machine retrieved")


@router.post("", response_model=DataResponse[MachineRead], status_code=status.HTTP_201_CREATED)
def create_machine(body: MachineCreate, current_user: AdminOrStudioOwner, db: DbSession) -> DataResponse:
    studio = crud.get_or_404(db, Studio, body.studio_id, "Studio")
    check_permission(current_user, studio_id=studio.id)
    crud.get_or_404(db, MachineCategory, body.machine_category_id, "Machine category")
    _check_nfc_tag(db, body.nfc_tag_id, studio.id)
    _ensure_capacity(db, studio)
    machine = crud.save(db, Machine(**body.model_dump()))
    logger.info("Machine created: %s", machine.name)
    return data_response(MachineRead.model_validate(machine), "Machine created", status.HTTP_201_CREATED)


@router.put("/{machine_id}", response_model=DataResponse[MachineRead])
def update_machine(
    machine_id: int, body: MachineUpdate, current_user: AdminOrStudioOwner, db: DbSession
) -> DataResponse:
    machine = crud.get_or_404(db, Machine, machine_id, "Machine")
    check_permission(current_user, studio_id=machine.studio_id)

    target_studio_id = body.studio_id if body.studio_id is not None else machine.studio_id
    if target_studio_id != machine.studio_id:
        # Moving a machine needs rights on, and room in, the target studio too.
        studio = crud.get_or_404(db, Studio, target_studio_id, "Studio")
        check_permission(current_user, studio_id=studio.id)
        _ensure_capacity(db, studio)
    if body.machine_category_id is not None:
        crud.get_or_404(db, MachineCategory, body.machine_category_id, "Machine category")
    if body.nfc_tag_id is not None or target_studio_id != machine.studio_id:
        nfc_tag_id = body.nfc_tag_id if body.nfc_tag_id is not None else machine.nfc_tag_id
        _check_nfc_tag(db, nfc_tag_id, target_studio_id, machine_id=machine.id)

    machine = crud.save(db, crud.apply_changes(machine, body))
    logger.info("Machine updated: %s", machine.name)
    return data_response(MachineRead.model_validate(machine), "Machine updated")


@router.delete("/{machine_id}", response_model=MessageResponse)
def delete_machine(machine_id: int, current_user: AdminOrStudioOwner, db: DbSession) -> MessageResponse:
    machine = crud.get_or_404(db, Machine, machine_id, "Machine")
    check_permission(current_user, studio_id=machine.studio_id)
    crud.delete(db, machine)
    logger.info("Machine deleted: %s", machine_id)
    return message_response("Machine deleted")
