"""Alembic environment for the bazaars database."""

import os
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# Alembic Config object
config = context.config

# bazaars.db refuses to import without DATABASE_URL
if config.get_main_option("sqlalchemy.url"):
    os.environ.setdefault("DATABASE_URL", config.get_main_option("sqlalchemy.url"))

# import models so every table is registered on the metadata
from bazaars.db import Base, normalize_url  # noqa: E402
import bazaars.models  # noqa: E402,F401

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def get_url():
    """An explicit sqlalchemy.url wins, otherwise DATABASE_URL."""
    return normalize_url(config.get_main_option("sqlalchemy.url") or os.environ["DATABASE_URL"])


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()

    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
