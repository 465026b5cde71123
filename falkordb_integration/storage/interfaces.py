"""
Collaborator interfaces consumed by the site settings and attachment services.

The configuration store and the environment-variable store are independent
systems; nothing here offers a transaction spanning both.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol


@dataclass
class StoredSiteConfiguration:
  """A configuration document together with its concurrency token."""

  config: Dict[str, Any] = field(default_factory=dict)
  version: Optional[int] = None


class SiteConfigurationStore(Protocol):
  async def get_site_configuration(
    self, team_id: str, site_id: str
  ) -> Optional[StoredSiteConfiguration]: ...

  async def create_site_configuration(
    self, team_id: str, site_id: str, config: Dict[str, Any]
  ) -> None: ...

  async def update_site_configuration(
    self,
    team_id: str,
    site_id: str,
    config: Dict[str, Any],
    expected_version: Optional[int] = None,
  ) -> None: ...

  async def delete_site_configuration(self, team_id: str, site_id: str) -> None: ...


class EnvironmentVariableStore(Protocol):
  async def create_or_update_variables(
    self,
    account_id: str,
    site_id: str,
    variables: Dict[str, str],
    is_secret: bool = False,
  ) -> None: ...

  async def delete_environment_variables(
    self, account_id: str, site_id: str, variables: List[str]
  ) -> None: ...
