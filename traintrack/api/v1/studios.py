"""Studios resource and the studio-owner association."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from traintrack.api.deps import AdminOnly, AdminOrStudioOwner, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.core.errors import BadRequestError, ConflictError, NotFoundError
from traintrack.models import Licence, Studio, User
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.studio import StudioCreate, StudioRead, StudioUpdate
from traintrack.services import crud
from traintrack.services.permissions import Role, check_permission

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_name_available(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Studio).filter(Studio.name == name)
    if exclude_id is not None:
        query = query.filter(Studio.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("A studio with this name already exists")


@router.get("", response_model=DataResponse[list[StudioRead]])
def list_studios(_admin: AdminOnly, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(Studio).order_by(Studio.id), page.page, page.limit)
    logger.info("Retrieved %s studios", len(rows))
    return data_response([StudioRead.model_validate(s) for s in rows], "Studios retrieved", pagination=pagination)


@router.get("/{studio_id}", response_model=DataResponse[StudioRead])
def get_studio(studio_id: int, _user: AnyRole, db: DbSession) -> DataResponse:
    studio = crud.get_or_404(db, Studio, studio_id, "Studio")
    return data_response(StudioRead.model_validate(studio), "Studio retrieved")


@router.post("", response_model=DataResponse[StudioRead], status_code=status.HTTP_201_CREATED)
def create_studio(body: StudioCreate, current_user: AdminOrStudioOwner, db: DbSession) -> DataResponse:
    """Create a studio. A studio owner creating it becomes one of its owners."""
    _ensure_name_available(db, body.name)
    crud.get_or_404(db, Licence, body.licence_id, "Licence")
    studio = Studio(**body.model_dump())
    if current_user.role == Role.STUDIO_OWNER:
        studio.owners.append(db.get(User, current_user.id))
    studio = crud.save(db, studio)
    logger.info("Studio created: studio_id=%s", studio.id)
    return data_response(StudioRead.model_validate(studio), "Studio created", status.HTTP_201_CREATED)


@router.put("/{studio_id}", response_model=DataResponse[StudioRead])
def update_studio(studio_id: int, body: StudioUpdate, current_user: AdminOrStudioOwner, db: DbSession) -> DataResponse:
    studio = crud.get_or_404(db, Studio, studio_id, "Studio")
    check_permission(current_user, studio_id=studio.id)
    if body.name is not None:
        _ensure_name_available(db, body.name, exclude_id=studio.id)
    if body.licence_id is not None and body.licence_id != studio.licence_id:
        licence = crud.get_or_404(db, Licence, body.licence_id, "Licence")
        if len(studio.machines) > licence.max_machines:
            raise BadRequestError(
                f"Licence '{licence.name}' allows {licence.max_machines} machines; studio has {len(studio.machines)}"
            )
    studio = crud.save(db, crud.apply_changes(studio, body))
    logger.info("Studio updated: studio_id=%s", studio.id)
    return data_response(StudioRead.model_validate(studio), "Studio updated")


@router.delete("/{studio_id}", response_model=MessageResponse)
def delete_studio(studio_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    studio = crud.get_or_404(db, Studio, studio_id, "Studio")
    crud.delete(db, studio)
    logger.info("Studio deleted: studio_id=%s", studio_id)
    return message_response("Studio deleted")


@router.post("/{studio_id}/owners/{user_id}", response_model=MessageResponse)
def add_studio_owner(studio_id: int, user_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    """Scope a studio-owner account to this studio (admin only)."""
    studio = crud.get_or_404(db, Studio, studio_id, "Studio")
    user = crud.get_or_404(db, User, user_id, "User")
    if user.role_name != Role.STUDIO_OWNER:
        raise BadRequestError("User does not have the studio_owner role")
    if user in studio.owners:
        raise ConflictError("User already owns this studio")
    studio.owners.append(user)
    db.commit()
    logger.info("Studio owner added: studio_id=%s user_id=%s", studio_id, user_id)
    return message_response("Studio owner added")


@router.delete("/{studio_id}/owners/{user_id}", response_model=MessageResponse)
def remove_studio_owner(studio_id: int, user_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    studio = crud.get_or_404(db, Studio, studio_id, "Studio")
    user = crud.get_or_404(db, User, user_id, "User")
    if user not in studio.owners:
        raise NotFoundError("User does not own this studio")
    studio.owners.remove(user)
    db.commit()
    logger.info("Studio owner removed: studio_id=%s user_id=%s", studio_id, user_id)
    return message_response("Studio owner removed")
