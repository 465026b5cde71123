"""
Environment variable naming for attached instances.

Slot 0 uses the bare FALKORDB_ prefix so a site with a single database gets
the obvious names; every later slot n uses FALKORDB_{n}_.
"""

from typing import Dict, List

from falkordb_integration.config.constants import EnvVarConstants
from falkordb_integration.models.api import AttachedInstance


def env_prefix(idx: int) -> str:
  """Return the variable prefix for an instance slot."""
  if idx < 0:
    raise ValueError(f"Instance slot must be non-negative, got {idx}")
  if idx == 0:
    return EnvVarConstants.BASE_PREFIX
  return f"{EnvVarConstants.BASE_PREFIX}{idx}_"


def env_variable_names(idx: int) -> List[str]:
  """The four variable names owned by slot idx."""
  prefix = env_prefix(idx)
  return [f"{prefix}{key}" for key in EnvVarConstants.KEYS]


def env_variables_for(instance: AttachedInstance) -> Dict[str, str]:
  """Variable values for an attached instance. Missing endpoint parts are empty."""
  prefix = env_prefix(instance.idx)
  return {
    f"{prefix}{EnvVarConstants.HOSTNAME}": instance.hostname or "",
    f"{prefix}{EnvVarConstants.PORT}": str(instance.port) if instance.port else "",
    f"{prefix}{EnvVarConstants.USERNAME}": instance.username,
    f"{prefix}{EnvVarConstants.PASSWORD}": instance.password,
  }
