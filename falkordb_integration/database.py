from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from falkordb_integration.config import env


def get_database_url() -> str:
  """Get database URL with SSL configuration if needed."""
  database_url = env.DATABASE_URL

  if (
    (env.is_staging() or env.is_production())
    and database_url.startswith("postgresql")
    and "sslmode" not in database_url
  ):
    database_url += "&sslmode=require" if "?" in database_url else "?sslmode=require"

  return database_url


def create_db_engine(database_url: str):
  """Create an engine; SQLite gets no pool sizing and cross-thread access."""
  if database_url.startswith("sqlite"):
    return create_engine(
      database_url,
      connect_args={"check_same_thread": False},
      echo=env.DATABASE_ECHO,
    )
  return create_engine(
    database_url,
    pool_size=env.DATABASE_POOL_SIZE,
    max_overflow=env.DATABASE_MAX_OVERFLOW,
    pool_pre_ping=True,
    echo=env.DATABASE_ECHO,
  )


engine = create_db_engine(get_database_url())
SessionFactory = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
  """Base class for all models."""

  pass


Model = Base


def init_db(bind=None) -> None:
  """Create tables that do not exist yet. Migrations own production schemas."""
  # Register the tables on the metadata before creating them
  from falkordb_integration.models.iam import (  # noqa: F401
    SiteConfiguration,
    SiteEnvironmentVariable,
  )

  Model.metadata.create_all(bind=bind or engine)
