"""ORM models for accounts: roles, users and the user/studio association."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from traintrack.models.base import Base, TimestampMixin

# Studio owners are scoped to the studios listed here.
user_studios = Table(
    "user_studios",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("studio_id", Integer, ForeignKey("studios.id", ondelete="CASCADE"), primary_key=True),
)


class Role(TimestampMixin, Base):
    """Static reference data: admin, studio_owner, user."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), nullable=False, unique=True)

    users = relationship("User", back_populates="role")


class User(TimestampMixin, Base):
    """
    Account used for login and ownership checks.

    password_hash is bcrypt; password_reset_token_hash is the SHA-256 digest of
    the one outstanding reset token, cleared once it has been used.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    language = Column(String(8), nullable=False, default="en")
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    password_reset_token_hash = Column(String(64), nullable=True)

    role = relationship("Role", back_populates="users")
    studios = relationship("Studio", secondary=user_studios, back_populates="owners")
    auth_tokens = relationship(
        "AuthToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions = relationship(
        "TrainingSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role is not None else None

    @property
    def studio_ids(self) -> list[int]:
        return [studio.id for studio in self.studios]
