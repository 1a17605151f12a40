"""Schema for the unauthenticated health endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness of the TrainTrack API and reachability of its database."""

    status: Literal["ok"] = Field(default="ok", description="Always 'ok' while the API process answers")
    environment: str = Field(description="APP_ENV the API runs with (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Result of a SELECT 1 against DATABASE_URL",
    )
