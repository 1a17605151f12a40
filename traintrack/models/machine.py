"""ORM models for studio equipment: categories, NFC tags and machines."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from traintrack.models.base import Base, TimestampMixin


class MachineCategory(TimestampMixin, Base):
    __tablename__ = "machine_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)


class NFCTag(TimestampMixin, Base):
    """Physical tag stuck to a machine; scanned to open a training entry."""

    __tablename__ = "nfc_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nfc_id = Column(String(255), nullable=False)
    studio_id = Column(Integer, ForeignKey("studios.id", ondelete="CASCADE"), nullable=False)

    studio = relationship("Studio", back_populates="nfc_tags")
    machine = relationship(
        "Machine",
        back_populates="nfc_tag",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Machine(TimestampMixin, Base):
    __tablename__ = "machines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    machine_category_id = Column(
        Integer, ForeignKey("machine_categories.id", ondelete="CASCADE"), nullable=False
    )
    # A tag identifies exactly one machine.
    nfc_tag_id = Column(
        Integer, ForeignKey("nfc_tags.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    studio_id = Column(Integer, ForeignKey("studios.id", ondelete="CASCADE"), nullable=False)

    machine_category = relationship("MachineCategory")
    nfc_tag = relationship("NFCTag", back_populates="machine")
    studio = relationship("Studio", back_populates="machines")
