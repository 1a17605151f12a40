"""Training data: values recorded against a machine category within a session."""

import logging

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOnly, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.models import MachineCategory, TrainingData, Unit
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.training import TrainingDataCreate, TrainingDataRead, TrainingDataUpdate
from traintrack.services import crud
from traintrack.services.permissions import check_permission
from traintrack.services.training import require_own_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DataResponse[list[TrainingDataRead]])
def list_training_data(_admin: AdminOnly, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    rows, pagination = crud.paginate(db.query(TrainingData).order_by(TrainingData.id), page.page, page.limit)
    logger.info("Retrieved %s training data rows", len(rows))
    return data_response(
        [TrainingDataRead.model_validate(d) for d in rows], "Training data retrieved", pagination=pagination
    )


@router.get("/user", response_model=DataResponse[list[TrainingDataRead]])
def list_own_training_data(current_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    query = db.query(TrainingData).filter(TrainingData.user_id == current_user.id).order_by(TrainingData.id)
    rows, pagination = crud.paginate(query, page.page, page.limit)
    return data_response(
        [TrainingDataRead.model_validate(d) for d in rows], "Training data retrieved", pagination=pagination
    )


@router.get("/{data_id}", response_model=DataResponse[TrainingDataRead])
def get_training_data(data_id: int, current_user: AnyRole, db: DbSession) -> DataResponse:
    row = crud.get_or_404(db, TrainingData, data_id, "Training data")
    check_permission(current_user, user_id=row.user_id)
    return data_response(TrainingDataRead.model_validate(row), "Training data retrieved")


@router.post("", response_model=DataResponse[TrainingDataRead], status_code=status.HTTP_201_CREATED)
def create_training_data(body: TrainingDataCreate, current_user: AnyRole, db: DbSession) -> DataResponse:
    require_own_session(db, current_user, body.session_id)
    crud.get_or_404(db, Unit, body.unit_id, "Unit")
    crud.get_or_404(db, MachineCategory, body.machine_category_id, "Machine category")
    row = crud.save(db, TrainingData(**body.model_dump(), user_id=current_user.id))
    logger.info("Training data created: data_id=%s session_id=%s", row.id, row.session_id)
    return data_response(TrainingDataRead.model_validate(row), "Training data created", status.HTTP_201_CREATED)


@router.put("/{data_id}", response_model=DataResponse[TrainingDataRead])
def update_training_data(
    data_id: int, body: TrainingDataUpdate, current_user: AnyRole, db: DbSession
) -> DataResponse:
    row = crud.get_or_404(db, TrainingData, data_id, "Training data")
    check_permission(current_user, user_id=row.user_id)
    if body.session_id is not None and body.session_id != row.session_id:
        require_own_session(db, current_user, body.session_id)
    if body.unit_id is not None:
        crud.get_or_404(db, Unit, body.unit_id, "Unit")
    if body.machine_category_id is not None:
        crud.get_or_404(db, MachineCategory, body.machine_category_id, "Machine category")
    row = crud.save(db, crud.apply_changes(row, body))
    return data_response(TrainingDataRead.model_validate(row), "Training data updated")


@router.delete("/{data_id}", response_model=MessageResponse)
def delete_training_data(data_id: int, current_user: AnyRole, db: DbSession) -> MessageResponse:
    row = crud.get_or_404(db, TrainingData, data_id, "Training data")
    check_permission(current_user, user_id=row.user_id)
    crud.delete(db, row)
    logger.info("Training data deleted: data_id=%s", data_id)
    return message_response("Training data deleted")
