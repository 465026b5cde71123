"""
Unified logging entry point.

Importing this module configures structured logging once and exposes the
application loggers used across the package.
"""

import logging

from .config import env
from .config.logging import get_logger, log_error, setup_logging

setup_logging()

logger = get_logger("falkordb_integration")
api_logger = get_logger("falkordb_integration.api")
fleet_logger = get_logger("falkordb_integration.fleet")

if env.is_development():
  # httpx logs every request line at INFO, including query strings
  logging.getLogger("httpx").setLevel(logging.WARNING)
  logging.getLogger("httpcore").setLevel(logging.WARNING)

__all__ = ["api_logger", "fleet_logger", "log_error", "logger"]
