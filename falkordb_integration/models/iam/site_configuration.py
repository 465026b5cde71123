"""Per-site configuration document."""

import secrets
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from ...database import Model


class SiteConfiguration(Model):
  """
  Configuration record for one (team, site) pair.

  config holds the JSON document (email, password, instances, nextIdx).
  version is bumped on every update and used as an optimistic concurrency
  token so a stale read-modify-write is rejected instead of lost.
  """

  __tablename__ = "site_configurations"
  __table_args__ = (
    UniqueConstraint("team_id", "site_id", name="uq_site_configurations_team_site"),
  )

  id = Column(
    String, primary_key=True, default=lambda: f"sitecfg_{secrets.token_urlsafe(16)}"
  )
  team_id = Column(String, nullable=False, index=True)
  site_id = Column(String, nullable=False, index=True)
  config = Column(JSON, nullable=False, default=dict)
  version = Column(Integer, nullable=False, default=1)

  created_at = Column(
    DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
  )
  updated_at = Column(
    DateTime,
    default=lambda: datetime.now(timezone.utc),
    onupdate=lambda: datetime.now(timezone.utc),
    nullable=False,
  )

  def __repr__(self) -> str:
    return f"<SiteConfiguration {self.team_id}/{self.site_id} v{self.version}>"
