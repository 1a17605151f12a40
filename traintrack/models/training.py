"""ORM models for training: units, sessions, per-machine entries and per-category data."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from traintrack.models.base import Base, TimestampMixin


class Unit(TimestampMixin, Base):
    """Measurement unit for a training value (kg, reps, ...)."""

    __tablename__ = "units"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)


class TrainingSession(TimestampMixin, Base):
    """A user's visit to the studio; entries and data hang off it."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_start = Column(DateTime(timezone=True), nullable=False)
    session_end = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="sessions")
    entries = relationship(
        "TrainingEntry",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    data = relationship(
        "TrainingData",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TrainingEntry(TimestampMixin, Base):
    """A value recorded on a specific machine during a session."""

    __tablename__ = "training_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(String(255), nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="CASCADE"), nullable=False)
    machine_id = Column(Integer, ForeignKey("machines.id", ondelete="CASCADE"), nullable=False)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    unit = relationship("Unit")
    machine = relationship("Machine")
    session = relationship("TrainingSession", back_populates="entries")


class TrainingData(TimestampMixin, Base):
    """A value recorded against a machine category rather than a concrete machine."""

    __tablename__ = "training_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    value = Column(String(255), nullable=False)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="CASCADE"), nullable=False)
    machine_category_id = Column(
        Integer, ForeignKey("machine_categories.id", ondelete="CASCADE"), nullable=False
    )
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    unit = relationship("Unit")
    machine_category = relationship("MachineCategory")
    session = relationship("TrainingSession", back_populates="data")
