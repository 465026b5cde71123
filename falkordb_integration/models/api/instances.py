"""FalkorDB instance models shared by discovery, storage and the API."""

from pydantic import BaseModel, ConfigDict, Field


class FalkorDBInstance(BaseModel):
  """Canonical instance record recovered from the fleet API."""

  model_config = ConfigDict(populate_by_name=True)

  id: str = Field(..., description="Fleet instance identifier")
  name: str = Field("", description="Instance display name")
  cloud_provider: str = Field("", alias="cloudProvider", description="Cloud provider")
  region: str = Field("", description="Cloud region")
  username: str = Field(
    "", description="Service-assigned default username (informational)"
  )
  hostname: str | None = Field(None, description="Cluster endpoint hostname")
  port: int | None = Field(None, description="Cluster endpoint port")


class AttachedInstance(FalkorDBInstance):
  """
  An instance attached to a site.

  username/password are the per-instance credentials supplied at attach time
  and idx is the slot that names the instance's environment variables.
  """

  password: str = Field("", description="Per-instance database password")
  idx: int = Field(..., ge=0, description="Environment variable slot")


class AddInstanceRequest(BaseModel):
  """Request to attach a discovered instance to the site."""

  model_config = ConfigDict(populate_by_name=True)

  instance_id: str = Field(..., min_length=1, alias="instanceId")
  username: str = Field(..., description="Database username for the site")
  password: str = Field(..., description="Database password for the site")


class InstanceSummary(FalkorDBInstance):
  """Attached instance as returned to callers, without its password."""

  idx: int = Field(..., ge=0)
  env_prefix: str = Field(..., alias="envPrefix")
  env_variables: list[str] = Field(default_factory=list, alias="envVariables")


class ClientCodeResponse(BaseModel):
  """Connection snippet for an attached instance."""

  model_config = ConfigDict(populate_by_name=True)

  instance_id: str = Field(..., alias="instanceId")
  language: str = "python"
  code: str
