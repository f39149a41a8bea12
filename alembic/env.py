"""
Alembic environment.

Runs migrations over the application's async engine configuration.
Every model module is imported so autogenerate sees the full schema.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from app.core.config import settings
from app.core.database import Base
from app.modules.attendance import models as attendance_models  # noqa: F401
from app.modules.classes import models as classes_models  # noqa: F401
from app.modules.documents import models as documents_models  # noqa: F401
from app.modules.messages import models as messages_models  # noqa: F401
from app.modules.notifications import models as notifications_models  # noqa: F401
from app.modules.parents import models as parents_models  # noqa: F401
from app.modules.registration_requests import models as registration_models  # noqa: F401
from app.modules.students import models as students_models  # noqa: F401
from app.modules.teachers import models as teachers_models  # noqa: F401
from app.modules.updates import models as updates_models  # noqa: F401
from app.modules.users import models as users_models  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
