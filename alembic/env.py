"""
Alembic environment for the tenant management API.

Connection settings come from the application's Settings, so migrations
and the app always target the same DATABASE_URL.
"""
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from tenant_api.config import settings
from tenant_api.models.base import Base

# Import all model modules so their tables are registered on Base.metadata
from tenant_api.models import (  # noqa: F401
    lease_agreement,
    maintenance_request,
    maintenance_request_file,
    payment,
    property,
    tenant,
    user,
)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to the script output without connecting."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = settings.DATABASE_URL

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
