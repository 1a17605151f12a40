"""Ownership rules shared by training entries and training data."""

import logging

from sqlalchemy.orm import Session

from traintrack.core.errors import ForbiddenError
from traintrack.models import TrainingSession
from traintrack.schemas.auth import CurrentUser
from traintrack.services import crud

logger = logging.getLogger(__name__)


def require_own_session(db: Session, principal: CurrentUser, session_id: int) -> TrainingSession:
    """
    Load the training session a new row will hang off.

    The row is stored under the caller's id, so the session must be the
    caller's too, whatever the caller's role.
    """
    session = crud.get_or_404(db, TrainingSession, session_id, "Session")
    if session.user_id != principal.id:
        logger.warning(
            "Session %s does not belong to user_id=%s", session_id, principal.id
        )
        raise ForbiddenError("Session does not belong to the current user")
    return session
