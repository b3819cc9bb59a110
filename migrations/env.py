from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# Import your models here so they register on Base.metadata
from evrecharge import models  # noqa: F401
from evrecharge.config import get_settings
from evrecharge.database import Base

# Load the Alembic configuration
config = context.config

# Set the database URL from the application settings (DATABASE_URL / .env)
config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL)

# Setup logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata

def run_migrations_offline():
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
