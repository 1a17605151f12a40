"""ORM model for login sessions: hashed copies of the issued token pair."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from traintrack.models.base import Base, TimestampMixin


class AuthToken(TimestampMixin, Base):
    """
    One row per active login session, keyed by (user_id, session_id).

    Only SHA-256 digests are stored; deleting the row revokes both tokens
    even before they expire.
    """

    __tablename__ = "auth_tokens"
    __table_args__ = (
        UniqueConstraint("user_id", "session_id", name="uq_auth_tokens_user_session"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), nullable=False, index=True)
    access_token_hash = Column(String(64), nullable=False)
    refresh_token_hash = Column(String(64), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    user = relationship("User", back_populates="auth_tokens")
