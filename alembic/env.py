"""
Alembic environment.

Runs migrations with a synchronous driver derived from the application's
async record store URL.
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from defect_monitor.core.config import get_settings
from defect_monitor.core.database import Base

# Import all models so the metadata is complete
from defect_monitor.models import DefectRecord  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Async driver -> sync driver for Alembic
url = get_settings().store_url()
if url.drivername == "postgresql+asyncpg":
    url = url.set(drivername="postgresql+psycopg2")
elif url.drivername == "sqlite+aiosqlite":
    url = url.set(drivername="sqlite")

# ConfigParser interpolation treats % specially
config.set_main_option(
    "sqlalchemy.url",
    url.render_as_string(hide_password=False).replace("%", "%%"),
)


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Only the URL is configured; the generated SQL is emitted as a script.
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=True,  # SQLite batch mode
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
