"""
Centralized configuration package for the FalkorDB integration service.
"""

from .constants import EnvVarConstants
from .env import EnvConfig, env
from .validation import ConfigValidationError, EnvValidator

__all__ = [
  "ConfigValidationError",
  "EnvConfig",
  "EnvValidator",
  "EnvVarConstants",
  "env",
]
