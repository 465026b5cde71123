"""Site configuration schema and site-settings request/response models."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .instances import AttachedInstance, InstanceSummary


class SiteSettings(BaseModel):
  """
  Persisted per-site configuration.

  The stored document uses camelCase keys; next_idx is the counter the
  reconciler draws environment variable slots from.
  """

  model_config = ConfigDict(populate_by_name=True)

  email: EmailStr = Field(..., description="FalkorDB Cloud account email")
  password: str = Field(..., min_length=1, description="FalkorDB Cloud password")
  instances: list[AttachedInstance] = Field(default_factory=list)
  next_idx: int | None = Field(None, ge=0, alias="nextIdx")

  def to_document(self) -> dict:
    """Serialize for the configuration store."""
    return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SetAccountRequest(BaseModel):
  """Credentials to store for the site."""

  email: EmailStr
  password: str = Field(..., min_length=1)


class SiteSettingsResponse(BaseModel):
  """Stored settings as shown to the caller; secrets are not echoed back."""

  model_config = ConfigDict(populate_by_name=True)

  email: str | None = None
  instances: list[InstanceSummary] = Field(default_factory=list)
