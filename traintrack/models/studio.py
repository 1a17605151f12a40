"""ORM models for studios and the licences that cap their machine count."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from traintrack.models.base import Base, TimestampMixin
from traintrack.models.user import user_studios


class Licence(TimestampMixin, Base):
    __tablename__ = "licences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True)
    max_machines = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    studios = relationship("Studio", back_populates="licence")


class Studio(TimestampMixin, Base):
    __tablename__ = "studios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    street = Column(String(255), nullable=True)
    house_number = Column(String(32), nullable=True)
    city = Column(String(255), nullable=True)
    zip = Column(String(16), nullable=True)
    licence_id = Column(Integer, ForeignKey("licences.id"), nullable=False)

    licence = relationship("Licence", back_populates="studios")
    owners = relationship("User", secondary=user_studios, back_populates="studios")
    nfc_tags = relationship(
        "NFCTag",
        back_populates="studio",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    machines = relationship(
        "Machine",
        back_populates="studio",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
