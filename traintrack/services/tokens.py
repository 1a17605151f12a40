"""
Session-scoped token issuance, rotation, revocation and verification.

Every login creates a session id (UUID4). The access and refresh tokens both
carry {id, role, session}; the auth_tokens row for (user_id, session_id)
holds SHA-256 digests of the current pair. A token is only accepted while its
digest matches that row, so deleting or rotating the row revokes it before
its expiry.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

import jwt
from sqlalchemy.orm import Session

from traintrack.core.errors import NotFoundError, UnauthorizedError
from traintrack.core.security import decode_token, encode_token, hash_token, token_matches
from traintrack.models import AuthToken, Role, User
from traintrack.services.permissions import Role as RoleName

if TYPE_CHECKING:
    from traintrack.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Invalid token"


@dataclass(frozen=True)
class IssuedTokens:
    """Plaintext token pair handed to the client once; only digests are stored."""

    session_id: str
    access_token: str
    access_token_expires: datetime
    refresh_token: str
    refresh_token_expires: datetime


def resolve_role_name(db: Session, user: User) -> str:
    """Role name embedded in tokens; a missing role row falls back to 'user'."""
    role = db.get(Role, user.role_id) if user.role_id is not None else None
    if role is None:
        logger.warning("Role %s not found for user_id=%s; defaulting to '%s'", user.role_id, user.id, RoleName.USER.value)
        return RoleName.USER.value
    return role.name


def _find_session(db: Session, user_id: int, session_id: str) -> AuthToken | None:
    return (
        db.query(AuthToken)
        .filter(AuthToken.user_id == user_id, AuthToken.session_id == session_id)
        .first()
    )


def _session_claims(payload: dict[str, Any]) -> tuple[int, str]:
    """Extract (user_id, session_id) from a decoded payload or raise 401."""
    user_id = payload.get("id")
    session_id = payload.get("session")
    if not isinstance(user_id, int) or not isinstance(session_id, str) or not session_id:
        raise UnauthorizedError("Invalid token payload")
    return user_id, session_id


def issue_session(
    db: Session,
    user: User,
    settings: "Settings",
    session_id: str | None = None,
) -> IssuedTokens:
    """
    Sign a new access/refresh pair and store their digests for the session.

    With session_id=None a new session is started; otherwise the existing row
    for (user, session_id) is overwritten so the previous pair stops working.
    """
    session_id = session_id or str(uuid.uuid4())
    claims = {"id": user.id, "role": resolve_role_name(db, user), "session": session_id}
    access_token, access_expires = encode_token(
        claims,
        settings.ACCESS_TOKEN_SECRET.get_secret_value(),
        settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        settings.JWT_ALGORITHM,
    )
    refresh_token, refresh_expires = encode_token(
        claims,
        settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        settings.REFRESH_TOKEN_EXPIRE_MINUTES,
        settings.JWT_ALGORITHM,
    )

    record = _find_session(db, user.id, session_id)
    if record is None:
        record = AuthToken(user_id=user.id, session_id=session_id)
        db.add(record)
    record.access_token_hash = hash_token(access_token)
    record.refresh_token_hash = hash_token(refresh_token)
    db.commit()

    logger.info("Tokens issued: user_id=%s session_id=%s", user.id, session_id)
    return IssuedTokens(
        session_id=session_id,
        access_token=access_token,
        access_token_expires=access_expires,
        refresh_token=refresh_token,
        refresh_token_expires=refresh_expires,
    )


def rotate_session(db: Session, refresh_token: str, settings: "Settings") -> IssuedTokens:
    """Exchange the current refresh token of a session for a new pair."""
    try:
        payload = decode_token(
            refresh_token,
            settings.REFRESH_TOKEN_SECRET.get_secret_value(),
            settings.JWT_ALGORITHM,
        )
    except jwt.PyJWTError as e:
        logger.warning("Refresh rejected: %s", e)
        raise UnauthorizedError(INVALID_TOKEN) from e
    user_id, session_id = _session_claims(payload)

    record = _find_session(db, user_id, session_id)
    if record is None:
        logger.warning("Refresh rejected: no session user_id=%s session_id=%s", user_id, session_id)
        raise UnauthorizedError(INVALID_TOKEN)
    if not token_matches(refresh_token, record.refresh_token_hash):
        # Signature is valid but the pair was already rotated away.
        logger.warning("Refresh rejected: stale token user_id=%s session_id=%s", user_id, session_id)
        raise UnauthorizedError(INVALID_TOKEN)

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError(INVALID_TOKEN)
    return issue_session(db, user, settings, session_id=session_id)


def authenticate_access_token(
    db: Session,
    token: str,
    settings: "Settings",
) -> tuple[User, AuthToken, dict[str, Any]]:
    """
    Request-time gate: signature, session lookup, digest comparison.

    Returns (user, session record, payload). Every failure is a 401.
    """
    try:
        payload = decode_token(
            token,
            settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            settings.JWT_ALGORITHM,
        )
    except jwt.PyJWTError as e:
        raise UnauthorizedError("Unauthorized: Invalid token") from e
    user_id, session_id = _session_claims(payload)

    record = _find_session(db, user_id, session_id)
    if record is None:
        raise UnauthorizedError("Unauthorized: Session not found")
    if not token_matches(token, record.access_token_hash):
        raise UnauthorizedError("Unauthorized: Token mismatch")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Unauthorized: User not found")
    return user, record, payload


def revoke_session(db: Session, access_token: str, settings: "Settings") -> None:
    """Delete the session the access token belongs to (logout)."""
    try:
        payload = decode_token(
            access_token,
            settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            settings.JWT_ALGORITHM,
        )
    except jwt.PyJWTError as e:
        raise UnauthorizedError(INVALID_TOKEN) from e
    user_id, session_id = _session_claims(payload)

    record = _find_session(db, user_id, session_id)
    if record is None:
        raise NotFoundError("Session not found")
    if not token_matches(access_token, record.access_token_hash):
        raise UnauthorizedError("Unauthorized: Token mismatch")
    db.delete(record)
    db.commit()
    logger.info("Session revoked: user_id=%s session_id=%s", user_id, session_id)


def revoke_all_sessions(db: Session, user_id: int) -> int:
    """Delete every session of a user; returns the number removed. Caller commits."""
    deleted = (
        db.query(AuthToken)
        .filter(AuthToken.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if deleted:
        logger.info("Sessions revoked: user_id=%s count=%s", user_id, deleted)
    return deleted
