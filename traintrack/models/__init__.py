"""SQLAlchemy ORM models."""

from traintrack.models.auth_token import AuthToken
from traintrack.models.base import Base
from traintrack.models.machine import Machine, MachineCategory, NFCTag
from traintrack.models.studio import Licence, Studio
from traintrack.models.training import TrainingData, TrainingEntry, TrainingSession, Unit
from traintrack.models.user import Role, User, user_studios

__all__ = [
    "AuthToken",
    "Base",
    "Licence",
    "Machine",
    "MachineCategory",
    "NFCTag",
    "Role",
    "Studio",
    "TrainingData",
    "TrainingEntry",
    "TrainingSession",
    "Unit",
    "User",
    "user_studios",
]
