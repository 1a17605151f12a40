"""Training sessions: owned by the user who starts them."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOnly, AnyRole, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.core.errors import BadRequestError
from traintrack.models import TrainingSession
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.training import TrainingSessionCreate, TrainingSessionRead, TrainingSessionUpdate
from traintrack.services import crud
from traintrack.services.permissions import check_permission

logger = logging.getLogger(__name__)

router = APIRouter()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@router.get("", response_model=DataResponse[list[TrainingSessionRead]])
def list_sessions(_admin: AdminOnly, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    """All sessions of all users (admin only)."""
    query = db.query(TrainingSession).order_by(TrainingSession.session_start.desc())
    rows, pagination = crud.paginate(query, page.page, page.limit)
    logger.info("Retrieved %s sessions", len(rows))
    return data_response(
        [TrainingSessionRead.model_validate(s) for s in rows], "Sessions retrieved", pagination=pagination
    )


@router.get("/user", response_model=DataResponse[list[TrainingSessionRead]])
def list_own_sessions(current_user: AnyRole, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    query = (
        db.query(TrainingSession)
        .filter(TrainingSession.user_id == current_user.id)
        .order_by(TrainingSession.session_start.desc())
    )
    rows, pagination = crud.paginate(query, page.page, page.limit)
    return data_response(
        [TrainingSessionRead.model_validate(s) for s in rows], "Sessions retrieved", pagination=pagination
    )


@router.get("/{session_id}", response_model=DataResponse[TrainingSessionRead])
def get_session(session_id: int, current_user: AnyRole, db: DbSession) -> DataResponse:
    session = crud.get_or_404(db, TrainingSession, session_id, "Session")
    check_permission(current_user, user_id=session.user_id)
    return data_response(TrainingSessionRead.model_validate(session), "Session retrieved")


@router.post("", response_model=DataResponse[TrainingSessionRead], status_code=status.HTTP_201_CREATED)
def create_session(body: TrainingSessionCreate, current_user: AnyRole, db: DbSession) -> DataResponse:
    """Start a session for the caller; user_id is always taken from the token."""
    session = crud.save(db, TrainingSession(**body.model_dump(), user_id=current_user.id))
    logger.info("Session created: session_id=%s user_id=%s", session.id, current_user.id)
    return data_response(TrainingSessionRead.model_validate(session), "Session created", status.HTTP_201_CREATED)


@router.put("/{session_id}", response_model=DataResponse[TrainingSessionRead])
def update_session(
    session_id: int, body: TrainingSessionUpdate, current_user: AnyRole, db: DbSession
) -> DataResponse:
    session = crud.get_or_404(db, TrainingSession, session_id, "Session")
    check_permission(current_user, user_id=session.user_id)
    changes = body.model_dump(exclude_unset=True)
    if "session_start" in changes and changes["session_start"] is None:
        raise BadRequestError("session_start must not be null")
    start = changes.get("session_start", session.session_start)
    end = changes.get("session_end", session.session_end)
    if end is not None and _as_utc(end) < _as_utc(start):
        raise BadRequestError("session_end must not be before session_start")
    session = crud.save(db, crud.apply_changes(session, changes))
    return data_response(TrainingSessionRead.model_validate(session), "Session updated")


@router.delete("/{session_id}", response_model=MessageResponse)
def delete_session(session_id: int, current_user: AnyRole, db: DbSession) -> MessageResponse:
    """Delete a session together with its entries and data."""
    session = crud.get_or_404(db, TrainingSession, session_id, "Session")
    check_permission(current_user, user_id=session.user_id)
    crud.delete(db, session)
    logger.info("Session deleted: session_id=%s", session_id)
    return message_response("Session deleted")
