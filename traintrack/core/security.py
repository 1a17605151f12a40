"""Password hashing, token digests and JWT creation/verification."""

import hashlib
import hmac
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

# Min/max lengths for password validation; bcrypt reads at most 72 bytes.
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int = 12) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def hash_token(token: str) -> str:
    """
    Irreversible digest of an issued token for server-side storage.

    SHA-256 rather than bcrypt: JWTs from the same user share a long common
    prefix and bcrypt only reads the first 72 bytes.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def token_matches(token: str, digest: str | None) -> bool:
    """Constant-time comparison of a presented token against a stored digest."""
    if not digest:
        return False
    return hmac.compare_digest(hash_token(token), digest)


def encode_token(
    claims: dict[str, Any],
    secret: str,
    expire_minutes: int,
    algorithm: str = "HS256",
) -> tuple[str, datetime]:
    """
    Sign claims into a JWT with iat, exp and a random jti.

    Returns (token, expires_at). The jti keeps two tokens minted for the same
    claims within one second distinct, so a rotated pair never equals the old one.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=expire_minutes)
    payload: dict[str, Any] = {
        **claims,
        "iat": now,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=algorithm), expire


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    """
    Decode and validate a JWT; return its payload.
    Raises jwt.PyJWTError on invalid signature, malformed token or expiry.
    """
    return jwt.decode(token, secret, algorithms=[algorithm])
