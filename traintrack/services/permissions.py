"""Role and ownership checks for protected resources."""

import logging
from enum import Enum

from traintrack.core.errors import ForbiddenError
from traintrack.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

PERMISSION_DENIED = "You do not have permission to access this resource"


class Role(str, Enum):
    """Role names as stored in the roles table and embedded in tokens."""

    ADMIN = "admin"
    STUDIO_OWNER = "studio_owner"
    USER = "user"


def check_permission(
    principal: CurrentUser,
    *,
    user_id: int | None = None,
    studio_id: int | None = None,
) -> bool:
    """
    Authorize access to a resource owned by user_id and/or studio_id.

    ADMIN is always allowed. STUDIO_OWNER is allowed when studio_id is one of
    its studios; for resources scoped to a user only (no studio_id) it is
    treated like USER. USER is allowed when user_id is its own id. Anything
    else raises ForbiddenError.
    """
    role = principal.role
    if role == Role.ADMIN:
        return True
    if role == Role.STUDIO_OWNER:
        if studio_id is not None:
            if studio_id in principal.studio_ids:
                return True
        elif user_id is not None and user_id == principal.id:
            return True
    elif role == Role.USER:
        if user_id is not None and user_id == principal.id:
            return True
    logger.warning(
        "Permission denied: user_id=%s role=%s resource_user_id=%s resource_studio_id=%s",
        principal.id,
        role,
        user_id,
        studio_id,
    )
    raise ForbiddenError(PERMISSION_DENIED)


def has_role(principal: CurrentUser, *roles: Role) -> bool:
    return principal.role in {r.value for r in roles}
