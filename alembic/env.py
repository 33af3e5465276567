"""
Alembic Environment Configuration

Runs schema migrations for the books table.

The database URL comes from book_catalog settings (DATABASE_URL / .env),
never from alembic.ini, so migrations always target the same database as
the running application.

MIGRATION WORKFLOW:
===================
1. Change the Book model in book_catalog/models/book.py
2. Run: alembic revision --autogenerate -m "description"
3. Review the generated file in alembic/versions/
4. Run: alembic upgrade head

SQLite cannot ALTER most column properties in place, so migrations run in
batch mode there (Alembic copies the table).
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, make_url, pool

from alembic import context

from book_catalog.config import get_settings
from book_catalog.database import Base
from book_catalog.models import Book  # noqa: F401 - registers the books table

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

RENDER_AS_BATCH = make_url(settings.database_url).get_backend_name() == "sqlite"


def run_migrations_offline() -> None:
    """
    Emit migration SQL without connecting.

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=RENDER_AS_BATCH,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a single unpooled connection."""
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
            render_as_batch=RENDER_AS_BATCH,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
