"""API v1 routes. Everything except /health requires a valid access token."""

from fastapi import APIRouter, Depends

from traintrack.api.deps import get_current_user
from traintrack.api.v1 import (
    health,
    licences,
    machine_categories,
    machines,
    nfc_tags,
    sessions,
    studios,
    training_data,
    training_entries,
    units,
    users,
)
from traintrack.schemas.common import ERROR_RESPONSES

protected = [Depends(get_current_user)]

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(
    users.router, prefix="/users", tags=["users"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    studios.router, prefix="/studios", tags=["studios"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    licences.router, prefix="/licences", tags=["licences"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    machine_categories.router,
    prefix="/machinecategories",
    tags=["machine categories"],
    dependencies=protected,
    responses=ERROR_RESPONSES,
)
router.include_router(
    units.router, prefix="/units", tags=["units"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    nfc_tags.router, prefix="/nfctags", tags=["nfc tags"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    machines.router, prefix="/machines", tags=["machines"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    sessions.router, prefix="/sessions", tags=["sessions"], dependencies=protected, responses=ERROR_RESPONSES
)
router.include_router(
    training_entries.router,
    prefix="/trainingEntries",
    tags=["training entries"],
    dependencies=protected,
    responses=ERROR_RESPONSES,
)
router.include_router(
    training_data.router,
    prefix="/trainingData",
    tags=["training data"],
    dependencies=protected,
    responses=ERROR_RESPONSES,
)
