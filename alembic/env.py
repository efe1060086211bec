from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import pool
from sqlmodel import SQLModel, create_engine

from association_cms.content.models import ContentEntry  # noqa: F401
from association_cms.core.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def get_url() -> str:
    """An explicit ``-x db_url=...`` wins over the POSTGRES_* settings."""
    return context.get_x_argument(as_dictionary=True).get(
        "db_url", str(settings.SQLALCHEMY_DATABASE_URI)
    )


def _configure(**options: Any) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _configure(
        url=get_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    connectable = create_engine(get_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
