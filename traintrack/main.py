"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from traintrack.api.auth import router as auth_router
from traintrack.api.v1 import router as v1_router
from traintrack.core.config import settings
from traintrack.core.database import SessionLocal
from traintrack.core.errors import register_exception_handlers
from traintrack.core.logging_setup import configure_logging
from traintrack.services.seed import seed_all

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    if settings.SEED_ON_STARTUP:
        with SessionLocal() as db:
            inserted = seed_all(db)
        logger.info("Seed data checked: %s", inserted)
    logger.info("TrainTrack API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="TrainTrack API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

if settings.CORS_ORIGINS:
    allow_origins = settings.CORS_ORIGINS
else:
    allow_origins = ["*"] if settings.APP_ENV == "dev" else []

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix=settings.AUTH_PREFIX, tags=["auth"])
app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "TrainTrack API"}
