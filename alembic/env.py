"""Alembic environment: uses traintrack config for DATABASE_URL and Base.metadata for autogenerate."""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

# Import app config and models so target_metadata is set and we use the same DB URL.
os.environ.setdefault("APP_ENV", "dev")
from traintrack.core.config import settings
from traintrack.core.database import build_engine
from traintrack.models import Base

# Import all models so that Base.metadata contains every table.
from traintrack.models import (  # noqa: F401
    AuthToken,
    Licence,
    Machine,
    MachineCategory,
    NFCTag,
    Role,
    Studio,
    TrainingData,
    TrainingEntry,
    TrainingSession,
    Unit,
    User,
)

config = context.config
# alembic.ini carries no logging sections; only load them when present.
if config.config_file_name is not None and config.has_section("formatters"):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """Return the database URL from application settings."""
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (generate SQL only)."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (connect to DB and run)."""
    connectable = build_engine(get_url())
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
