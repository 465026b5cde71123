"""Alembic environment configuration."""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from falkordb_integration.database import Model, get_database_url
from falkordb_integration.models.iam.environment_variable import (  # noqa: F401
  SiteEnvironmentVariable,
)
from falkordb_integration.models.iam.site_configuration import (  # noqa: F401
  SiteConfiguration,
)

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

if config.config_file_name is not None:
  fileConfig(config.config_file_name)

database_url = get_database_url()
if database_url:
  config.set_main_option("sqlalchemy.url", database_url)

target_metadata = Model.metadata


def run_migrations_offline() -> None:
  """Run migrations in 'offline' mode.

  This configures the context with just a URL and not an Engine, so no
  DBAPI needs to be available. Calls to context.execute() emit the given
  string to the script output.
  """
  url = config.get_main_option("sqlalchemy.url")
  context.configure(
    url=url,
    target_metadata=target_metadata,
    literal_binds=True,
    dialect_opts={"paramstyle": "named"},
  )

  with context.begin_transaction():
    context.run_migrations()


def run_migrations_online() -> None:
  """Run migrations in 'online' mode."""
  connectable = engine_from_config(
    config.get_section(config.config_ini_section, {}),
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
