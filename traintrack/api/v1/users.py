"""Users resource: admin management plus self-service read/update."""

import logging

from fastapi import APIRouter, Depends, status

from traintrack.api.deps import AdminOnly, AnyRole, AppSettings, DbSession
from traintrack.api.responses import PageParams, data_response, message_response
from traintrack.core.errors import ForbiddenError
from traintrack.core.security import hash_password
from traintrack.models import Role, User
from traintrack.schemas.common import DataResponse, MessageResponse
from traintrack.schemas.user import UserCreate, UserRead, UserUpdate
from traintrack.services import crud
from traintrack.services.auth import ensure_email_available
from traintrack.services.permissions import Role as RoleName
from traintrack.services.permissions import check_permission

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DataResponse[list[UserRead]])
def list_users(_admin: AdminOnly, db: DbSession, page: PageParams = Depends()) -> DataResponse:
    """List all users (admin only)."""
    rows, pagination = crud.paginate(db.query(User).order_by(User.id), page.page, page.limit)
    logger.info("Retrieved %s users", len(rows))
    return data_response([UserRead.model_validate(u) for u in rows], "Users retrieved", pagination=pagination)


@router.get("/{user_id}", response_model=DataResponse[UserRead])
def get_user(user_id: int, current_user: AnyRole, db: DbSession) -> DataResponse:
    user = crud.get_or_404(db, User, user_id, "User")
    check_permission(current_user, user_id=user.id)
    return data_response(UserRead.model_validate(user), "User retrieved")


@router.post("", response_model=DataResponse[UserRead], status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, _admin: AdminOnly, db: DbSession, settings: AppSettings) -> DataResponse:
    """Create an account with any role (admin only)."""
    ensure_email_available(db, body.email)
    crud.get_or_404(db, Role, body.role_id, "Role")
    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password, settings.BCRYPT_ROUNDS),
        language=body.language,
        role_id=body.role_id,
    )
    user = crud.save(db, user)
    logger.info("User created: user_id=%s", user.id)
    return data_response(UserRead.model_validate(user), "User created", status.HTTP_201_CREATED)


@router.put("/{user_id}", response_model=DataResponse[UserRead])
def update_user(user_id: int, body: UserUpdate, current_user: AnyRole, db: DbSession) -> DataResponse:
    """Update profile fields. Only admins may change role_id."""
    user = crud.get_or_404(db, User, user_id, "User")
    check_permission(current_user, user_id=user.id)
    if body.role_id is not None and body.role_id != user.role_id:
        if current_user.role != RoleName.ADMIN:
            raise ForbiddenError("Only admins may change roles")
        crud.get_or_404(db, Role, body.role_id, "Role")
    if body.email is not None:
        ensure_email_available(db, body.email, exclude_user_id=user.id)
    user = crud.save(db, crud.apply_changes(user, body))
    logger.info("User updated: user_id=%s", user.id)
    return data_response(UserRead.model_validate(user), "User updated")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, _admin: AdminOnly, db: DbSession) -> MessageResponse:
    user = crud.get_or_404(db, User, user_id, "User")
    crud.delete(db, user)
    logger.info("User deleted: user_id=%s", user_id)
    return message_response("User deleted")
