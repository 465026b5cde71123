"""
Static constants configuration.

Values here are fixed by the upstream fleet API and by the naming contract
the sites rely on; anything deployment specific belongs in env.py.
"""

# =============================================================================
# FLEET API
# =============================================================================

DEFAULT_AUTH_URL = "https://auth-425012726186.europe-west1.run.app/omnistrate/token"
DEFAULT_API_BASE_URL = "https://api.omnistrate.cloud/2022-09-01-00"
DEFAULT_ACTION_URL = "https://app.falkordb.cloud/api/action"

# Default Timeouts (seconds)
DEFAULT_HTTP_TIMEOUT = 30

# Subscriptions are only listed for this environment class
SUBSCRIPTION_ENVIRONMENT_TYPE = "PROD"

# Only instances in this state are offered for attachment
RUNNING_STATUS = "RUNNING"

# Topology entries for control-plane resources carry this name prefix
RESERVED_RESOURCE_PREFIX = "Omnistrate"

# =============================================================================
# ENVIRONMENT VARIABLE SYNC
# =============================================================================

ENV_SYNC_MAX_RETRIES = 2
ENV_SYNC_RETRY_DELAY = 0.5
ENV_SYNC_RETRY_BACKOFF = 2.0


class EnvVarConstants:
  """Naming contract for the per-instance environment variables."""

  BASE_PREFIX = "FALKORDB_"
  HOSTNAME = "HOSTNAME"
  PORT = "PORT"
  USERNAME = "USERNAME"
  PASSWORD = "PASSWORD"

  KEYS = (HOSTNAME, PORT, USERNAME, PASSWORD)
