"""Pydantic request/response schemas."""

from traintrack.schemas.auth import (
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
)
from traintrack.schemas.common import DataResponse, ErrorResponse, MessageResponse, Pagination
from traintrack.schemas.health import HealthResponse
from traintrack.schemas.machine import (
    MachineCategoryCreate,
    MachineCategoryRead,
    MachineCategoryUpdate,
    MachineCreate,
    MachineRead,
    MachineUpdate,
    NFCTagCreate,
    NFCTagRead,
    NFCTagUpdate,
)
from traintrack.schemas.studio import LicenceRead, StudioCreate, StudioRead, StudioUpdate
from traintrack.schemas.training import (
    TrainingDataCreate,
    TrainingDataRead,
    TrainingDataUpdate,
    TrainingEntryCreate,
    TrainingEntryRead,
    TrainingEntryUpdate,
    TrainingSessionCreate,
    TrainingSessionRead,
    TrainingSessionUpdate,
    UnitCreate,
    UnitRead,
    UnitUpdate,
)
from traintrack.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    "CurrentUser",
    "DataResponse",
    "ErrorResponse",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LicenceRead",
    "LoginRequest",
    "MachineCategoryCreate",
    "MachineCategoryRead",
    "MachineCategoryUpdate",
    "MachineCreate",
    "MachineRead",
    "MachineUpdate",
    "MessageResponse",
    "NFCTagCreate",
    "NFCTagRead",
    "NFCTagUpdate",
    "Pagination",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "ResetPasswordRequest",
    "StudioCreate",
    "StudioRead",
    "StudioUpdate",
    "TokenResponse",
    "TrainingDataCreate",
    "TrainingDataRead",
    "TrainingDataUpdate",
    "TrainingEntryCreate",
    "TrainingEntryRead",
    "TrainingEntryUpdate",
    "TrainingSessionCreate",
    "TrainingSessionRead",
    "TrainingSessionUpdate",
    "UnitCreate",
    "UnitRead",
    "UnitUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
