"""Account flows: registration, credential check and the two-phase password reset."""

import logging
from typing import TYPE_CHECKING

import jwt
from sqlalchemy.orm import Session

from traintrack.core.errors import ConflictError, NotFoundError, UnauthorizedError
from traintrack.core.security import (
    decode_token,
    encode_token,
    hash_password,
    hash_token,
    token_matches,
    verify_password,
)
from traintrack.models import Role, User
from traintrack.schemas.auth import RegisterRequest
from traintrack.services.permissions import Role as RoleName
from traintrack.services.tokens import IssuedTokens, issue_session, revoke_all_sessions

if TYPE_CHECKING:
    from traintrack.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_RESET_TOKEN = "Invalid or expired password reset token"


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def ensure_email_available(db: Session, email: str, exclude_user_id: int | None = None) -> None:
    """Raise ConflictError when another account already uses the email."""
    query = db.query(User).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    if query.first() is not None:
        raise ConflictError("Email already in use")


def register_user(
    db: Session,
    data: RegisterRequest,
    settings: "Settings",
) -> tuple[User, IssuedTokens]:
    """Create a 'user' account and start its first session."""
    ensure_email_available(db, data.email)
    role = db.query(Role).filter(Role.name == RoleName.USER.value).first()
    if role is None:
        raise NotFoundError("Role 'user' is not configured")

    user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password, settings.BCRYPT_ROUNDS),
        language=data.language,
        role_id=role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered: user_id=%s", user.id)
    return user, issue_session(db, user, settings)


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; 404 for unknown email, 401 for wrong password."""
    user = find_user_by_email(db, email)
    if user is None:
        logger.warning("Login failed: unknown email")
        raise NotFoundError("Authentication failed. User not found.")
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: wrong password for user_id=%s", user.id)
        raise UnauthorizedError("Authentication failed. Wrong password.")
    return user


def request_password_reset(db: Session, email: str, settings: "Settings") -> tuple[User, str]:
    """
    Issue a short-lived reset token and store its digest on the user.

    A new request replaces any outstanding token. Returns (user, plaintext token)
    so the caller can mail it.
    """
    user = find_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    token, _ = encode_token(
        {"id": user.id},
        settings.PASSWORD_RESET_SECRET.get_secret_value(),
        settings.PASSWORD_RESET_EXPIRE_MINUTES,
        settings.JWT_ALGORITHM,
    )
    user.password_reset_token_hash = hash_token(token)
    db.commit()
    logger.info("Password reset token generated for user_id=%s", user.id)
    return user, token


def reset_password(db: Session, token: str, new_password: str, settings: "Settings") -> User:
    """
    Consume a reset token: set the new password and clear the stored digest.

    The digest is cleared in the same commit as the password change, so the
    token cannot be used a second time. Existing sessions are revoked.
    """
    try:
        payload = decode_token(
            token,
            settings.PASSWORD_RESET_SECRET.get_secret_value(),
            settings.JWT_ALGORITHM,
        )
    except jwt.PyJWTError as e:
        raise UnauthorizedError(INVALID_RESET_TOKEN) from e
    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise UnauthorizedError(INVALID_RESET_TOKEN)

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if not token_matches(token, user.password_reset_token_hash):
        logger.warning("Password reset rejected: token not current for user_id=%s", user.id)
        raise UnauthorizedError(INVALID_RESET_TOKEN)

    user.password_hash = hash_password(new_password, settings.BCRYPT_ROUNDS)
    user.password_reset_token_hash = None
    revoke_all_sessions(db, user.id)
    db.commit()
    logger.info("Password reset for user_id=%s", user.id)
    return user
