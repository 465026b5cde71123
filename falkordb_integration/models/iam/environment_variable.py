"""Site environment variables as read by the site runtime."""

from datetime import datetime, timezone

from sqlalchemy import (
  Boolean,
  Column,
  DateTime,
  Integer,
  String,
  Text,
  UniqueConstraint,
)

from ...database import Model


class SiteEnvironmentVariable(Model):
  """One environment variable of one site."""

  __tablename__ = "site_environment_variables"
  __table_args__ = (
    UniqueConstraint(
      "account_id", "site_id", "key", name="uq_site_environment_variables_key"
    ),
  )

  id = Column(Integer, primary_key=True, autoincrement=True)
  account_id = Column(String, nullable=False, index=True)
  site_id = Column(String, nullable=False, index=True)
  key = Column(String, nullable=False)
  value = Column(Text, nullable=False, default="")
  is_secret = Column(Boolean, nullable=False, default=False)

  updated_at = Column(
    DateTime,
    default=lambda: datetime.now(timezone.utc),
    onupdate=lambda: datetime.now(timezone.utc),
    nullable=False,
  )

  def __repr__(self) -> str:
    # Values may be secrets and never appear here
    return f"<SiteEnvironmentVariable {self.site_id} {self.key}>"
