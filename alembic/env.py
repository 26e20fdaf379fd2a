from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from db.base import Base
from db.config import resolve_database_url, to_sqlalchemy_url
from db.models import GisSite  # noqa: F401  import registers gis_sites on Base.metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    """
    `alembic -x db_url=...` targets another database; otherwise migrations
    run against the configured site store.
    """

    override = context.get_x_argument(as_dictionary=True).get("db_url")
    return to_sqlalchemy_url(override) if override else resolve_database_url()


if context.is_offline_mode():
    context.configure(
        url=_migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    connectable = create_engine(_migration_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()
