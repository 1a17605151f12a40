"""Training entries: values recorded on a concrete machine within a session."""

import logging

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOnly, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.models import Machine, TrainingEntry, Unit
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.training import TrainingEntryCreate, TrainingEntryRead, TrainingEntryUpdate
from traintrack.services import crud
from traintrack.services.permissions import check_permission
from traintrack.services.training import require_own_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DataResponse[list[TrainingEntryRead]])
def list_training_entries(_admin: AdminOnly, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(TrainingEntry).order_by(TrainingEntry.id), page.page, page.limit)
    logger.info("Retrieved %s training entries", len(rows))
    return data_response(
        [TrainingEntryRead.model_validate(e) for e in rows], "Training entries retrieved", pagination=pagination
    )


@router.get("/user", response_model=DataResponse[list[TrainingEntryRead]])
def list_own_training_entries(current_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    query = db.query(TrainingEntry).filter(TrainingEntry.user_id == current_user.id).order_by(TrainingEntry.id)
    rows, pagination = crud.paginate(query, page.page, page.limit)
    return data_response(
        [TrainingEntryRead.model_validate(e) for e in rows], "Training entries retrieved", pagination=pagination
    )


@router.get("/{entry_id}", response_model=DataResponse[TrainingEntryRead])
def get_training_entry(entry_id: int, current_user: AnyRole, db: DbSession) -> DataResponse:
    entry = crud.get_or_404(db, TrainingEntry, entry_id, "Training entry")
    check_permission(current_user, user_id=entry.user_id)
    return data_response(TrainingEntryRead.model_validate(entry), "Training entry retrieved")


@router.post("", response_model=DataResponse[TrainingEntryRead], status_code=status.HTTP_201_CREATED)
def create_training_entry(body: TrainingEntryCreate, current_user: AnyRole, db: DbSession) -> DataResponse:
    require_own_session(db, current_user, body.session_id)
    crud.get_or_404(db, Unit, body.unit_id, "Unit")
    crud.get_or_404(db, Machine, body.machine_id, "Machine")
    entry = crud.save(db, TrainingEntry(**body.model_dump(), user_id=current_user.id))
    logger.info("Training entry created: entry_id=%s session_id=%s", entry.id, entry.session_id)
    return data_response(TrainingEntryRead.model_validate(entry), "Training entry created", status.HTTP_201_CREATED)


@router.put("/{entry_id}", response_model=DataResponse[TrainingEntryRead])
def update_training_entry(
    entry_id: int, body: TrainingEntryUpdate, current_user: AnyRole, db: DbSession
) -> DataResponse:
    entry = crud.get_or_404(db, TrainingEntry, entry_id, "Training entry")
    check_permission(current_user, user_id=entry.user_id)
    if body.session_id is not None and body.session_id != entry.session_id:
        require_own_session(db, current_user, body.session_id)
    if body.unit_id is not None:
        crud.get_or_404(db, Unit, body.unit_id, "Unit")
    if body.machine_id is not None:
        crud.get_or_404(db, Machine, body.machine_id, "Machine")
    entry = crud.save(db, crud.apply_changes(entry, body))
    return data_response(TrainingEntryRead.model_validate(entry), "Training entry updated")


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_training_entry(entry_id: int, current_user: AnyRole, db: DbSession) -> MessageResponse:
    entry = crud.get_or_404(db, TrainingEntry, entry_id, "Training entry")
    check_permission(current_user, user_id=entry.user_id)
    crud.delete(db, entry)
    logger.info("Training entry deleted: entry_id=%s", entry_id)
    return message_response("Training entry deleted")
