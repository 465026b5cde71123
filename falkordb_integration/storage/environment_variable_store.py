"""SQLAlchemy-backed site environment variable store."""

from typing import Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from falkordb_integration.database import SessionFactory
from falkordb_integration.models.iam import SiteEnvironmentVariable


class SqlEnvironmentVariableStore:
  """
  Environment variable persistence.

  Database errors propagate unchanged; the attachment service decides how a
  failed write is retried or compensated.
  """

  def __init__(self, session_factory: Optional[sessionmaker] = None):
    self.session_factory = session_factory or SessionFactory

  async def create_or_update_variables(
    self,
    account_id: str,
    site_id: str,
    variables: Dict[str, str],
    is_secret: bool = False,
  ) -> None:
    with self.session_factory() as db:
      existing = {
        row.key: row
        for row in db.query(SiteEnvironmentVariable).filter(
          SiteEnvironmentVariable.account_id == account_id,
          SiteEnvironmentVariable.site_id == site_id,
          SiteEnvironmentVariable.key.in_(list(variables)),
        )
      }

      for key, value in variables.items():
        row = existing.get(key)
        if row is None:
          db.add(
            SiteEnvironmentVariable(
              account_id=account_id,
              site_id=site_id,
              key=key,
              value=value,
              is_secret=is_secret,
            )
          )
        else:
          row.value = value
          row.is_secret = is_secret

      try:
        db.commit()
      except Exception:
        db.rollback()
        raise

  async def delete_environment_variables(
    self, account_id: str, site_id: str, variables: List[str]
  ) -> None:
    with self.session_factory() as db:
      try:
        db.query(SiteEnvironmentVariable).filter(
          SiteEnvironmentVariable.account_id == account_id,
          SiteEnvironmentVariable.site_id == site_id,
          SiteEnvironmentVariable.key.in_(variables),
        ).delete(synchronize_session=False)
        db.commit()
      except Exception:
        db.rollback()
        raise

  async def list_variables(self, account_id: str, site_id: str) -> Dict[str, str]:
    """All variables of a site, keyed by name."""
    with self.session_factory() as db:
      return {
        row.key: row.value
        for row in db.query(SiteEnvironmentVariable).filter(
          SiteEnvironmentVariable.account_id == account_id,
          SiteEnvironmentVariable.site_id == site_id,
        )
      }
