"""Request dependencies: bearer-token gate and role checks."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from traintrack.core.config import Settings, get_settings
from traintrack.core.database import get_db
from traintrack.core.errors import ForbiddenError, UnauthorizedError
from traintrack.schemas.auth import CurrentUser
from traintrack.services.permissions import PERMISSION_DENIED, Role, has_role
from traintrack.services.tokens import authenticate_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Raw token from 'Authorization: Bearer <token>'; 401 when absent."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized: No token provided")
    return credentials.credentials


def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    db: DbSession,
    settings: AppSettings,
) -> CurrentUser:
    """Dependency: verify signature, session record and digest; return the principal."""
    try:
        user, record, payload = authenticate_access_token(db, token, settings)
    except UnauthorizedError as e:
        logger.warning("Token rejected: %s", e.message)
        raise
    return CurrentUser(
        id=user.id,
        name=user.name,
        email=user.email,
        language=user.language,
        role=payload.get("role"),
        session_id=record.session_id,
        studio_ids=user.studio_ids,
    )


Principal = Annotated[CurrentUser, Depends(get_current_user)]


def require_roles(*roles: Role) -> Callable[[CurrentUser], CurrentUser]:
    """Dependency factory: 403 unless the principal has one of the given roles."""

    def checker(current_user: Principal) -> CurrentUser:
        if not has_role(current_user, *roles):
            logger.warning(
                "Role check failed: user_id=%s role=%s allowed=%s",
                current_user.id,
                current_user.role,
                [r.value for r in roles],
            )
            raise ForbiddenError(PERMISSION_DENIED)
        return current_user

    return checker


ALL_ROLES = (Role.ADMIN, Role.STUDIO_OWNER, Role.USER)

AnyRole = Annotated[CurrentUser, Depends(require_roles(*ALL_ROLES))]
AdminOnly = Annotated[CurrentUser, Depends(require_roles(Role.ADMIN))]
AdminOrStudioOwner = Annotated[CurrentUser, Depends(require_roles(Role.ADMIN, Role.STUDIO_OWNER))]
StudioOwnerOnly = Annotated[CurrentUser, Depends(require_roles(Role.STUDIO_OWNER))]
