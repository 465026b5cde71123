"""SQLAlchemy-backed site configuration store."""

from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from falkordb_integration.database import SessionFactory
from falkordb_integration.exceptions import ConfigPersistenceError
from falkordb_integration.logger import logger
from falkordb_integration.models.iam import SiteConfiguration
from .interfaces import StoredSiteConfiguration


class SqlSiteConfigurationStore:
  """
  Site configuration persistence.

  Each call runs in its own session and commits on its own. Updates accept
  the version read earlier and fail with ConfigPersistenceError when another
  writer got there first.
  """

  def __init__(self, session_factory: Optional[sessionmaker] = None):
    self.session_factory = session_factory or SessionFactory

  @staticmethod
  def _get(db: Session, team_id: str, site_id: str) -> Optional[SiteConfiguration]:
    return (
      db.query(SiteConfiguration)
      .filter(
        SiteConfiguration.team_id == team_id,
        SiteConfiguration.site_id == site_id,
      )
      .first()
    )

  async def get_site_configuration(
    self, team_id: str, site_id: str
  ) -> Optional[StoredSiteConfiguration]:
    with self.session_factory() as db:
      record = self._get(db, team_id, site_id)
      if record is None:
        return None
      return StoredSiteConfiguration(
        config=dict(record.config or {}), version=record.version
      )

  async def create_site_configuration(
    self, team_id: str, site_id: str, config: Dict[str, Any]
  ) -> None:
    with self.session_factory() as db:
      db.add(SiteConfiguration(team_id=team_id, site_id=site_id, config=config))
      try:
        db.commit()
      except IntegrityError as e:
        db.rollback()
        raise ConfigPersistenceError(
          "Site configuration already exists",
          details={"team_id": team_id, "site_id": site_id},
          cause=e,
        ) from e
      except SQLAlchemyError as e:
        db.rollback()
        raise ConfigPersistenceError(cause=e) from e

  async def update_site_configuration(
    self,
    team_id: str,
    site_id: str,
    config: Dict[str, Any],
    expected_version: Optional[int] = None,
  ) -> None:
    with self.session_factory() as db:
      query = db.query(SiteConfiguration).filter(
        SiteConfiguration.team_id == team_id,
        SiteConfiguration.site_id == site_id,
      )
      if expected_version is not None:
        query = query.filter(SiteConfiguration.version == expected_version)

      try:
        updated = query.update(
          {
            SiteConfiguration.config: config,
            SiteConfiguration.version: SiteConfiguration.version + 1,
          },
          synchronize_session=False,
        )
        db.commit()
      except SQLAlchemyError as e:
        db.rollback()
        raise ConfigPersistenceError(cause=e) from e

      if updated == 0:
        logger.warning(
          f"Site configuration update lost a race for {team_id}/{site_id}",
          extra={"team_id": team_id, "site_id": site_id},
        )
        raise ConfigPersistenceError(
          "Site configuration was modified concurrently or no longer exists",
          details={
            "team_id": team_id,
            "site_id": site_id,
            "expected_version": expected_version,
          },
        )

  async def delete_site_configuration(self, team_id: str, site_id: str) -> None:
    with self.session_factory() as db:
      try:
        db.query(SiteConfiguration).filter(
          SiteConfiguration.team_id == team_id,
          SiteConfiguration.site_id == site_id,
        ).delete(synchronize_session=False)
        db.commit()
      except SQLAlchemyError as e:
        db.rollback()
        raise ConfigPersistenceError(
          "Failed to delete site configuration", cause=e
        ) from e
