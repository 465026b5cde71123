"""
Instance normalization.

Fleet instance records are nested and their network topology is a map keyed
by internal resource ids. The same map holds the user-facing database
endpoint and internal control-plane endpoints, told apart only by the
resource name prefix and whether a cluster endpoint is present. This module
reduces each record to a FalkorDBInstance and makes the endpoint selection
total: zero or several candidates is a NormalizationError.
"""

from typing import Any, Dict, List, Mapping, Optional

from falkordb_integration.config.constants import (
  RESERVED_RESOURCE_PREFIX,
  RUNNING_STATUS,
)
from falkordb_integration.exceptions import NormalizationError, UpstreamError
from falkordb_integration.fleet import FleetAPIError, FleetClient
from falkordb_integration.logger import fleet_logger as logger
from falkordb_integration.models.api import FalkorDBInstance

RESULT_KEY = "consumptionResourceInstanceResult"
TOPOLOGY_KEY = "detailedNetworkTopology"


def _result_of(record: Mapping[str, Any]) -> Dict[str, Any]:
  result = record.get(RESULT_KEY) if isinstance(record, Mapping) else None
  if not isinstance(result, dict):
    raise NormalizationError(None, f"record has no {RESULT_KEY}")
  return result


def is_running(record: Mapping[str, Any]) -> bool:
  """True when the raw record reports the RUNNING status."""
  result = record.get(RESULT_KEY) if isinstance(record, Mapping) else None
  return isinstance(result, dict) and result.get("status") == RUNNING_STATUS


def select_cluster_endpoint(
  topology: Any,
  instance_id: Optional[str],
  reserved_prefix: str = RESERVED_RESOURCE_PREFIX,
) -> Dict[str, Any]:
  """
  Pick the single user-facing entry of a topology map.

  An entry qualifies when it exposes a non-empty clusterEndpoint and its
  resourceName does not start with the reserved infrastructure prefix.

  Raises:
      NormalizationError: If no entry or more than one entry qualifies
  """
  if not isinstance(topology, dict) or not topology:
    raise NormalizationError(instance_id, "network topology is missing")

  matches = [
    (key, value)
    for key, value in topology.items()
    if isinstance(value, dict)
    and value.get("clusterEndpoint")
    and not str(value.get("resourceName") or "").startswith(reserved_prefix)
  ]

  if not matches:
    raise NormalizationError(instance_id, "no user-facing cluster endpoint")
  if len(matches) > 1:
    keys = ", ".join(sorted(key for key, _ in matches))
    raise NormalizationError(
      instance_id, f"{len(matches)} candidate cluster endpoints ({keys})"
    )

  return matches[0][1]


def _first_port(instance_id: str, ports: Any) -> Optional[int]:
  if not ports:
    return None
  try:
    return int(ports[0])
  except (TypeError, ValueError, IndexError, KeyError) as e:
    raise NormalizationError(instance_id, f"unparseable cluster port {ports!r}") from e


def normalize_instance(
  record: Mapping[str, Any],
  reserved_prefix: str = RESERVED_RESOURCE_PREFIX,
) -> FalkorDBInstance:
  """Reduce one raw fleet record to a canonical instance."""
  result = _result_of(record)

  instance_id = result.get("id")
  if not instance_id:
    raise NormalizationError(None, "record has no instance id")

  endpoint = select_cluster_endpoint(
    result.get(TOPOLOGY_KEY), instance_id, reserved_prefix
  )
  params = result.get("result_params") or {}

  return FalkorDBInstance(
    id=str(instance_id),
    name=params.get("name") or "",
    cloud_provider=result.get("cloud_provider") or "",
    region=result.get("region") or "",
    username=params.get("username") or "",
    hostname=endpoint.get("clusterEndpoint"),
    port=_first_port(instance_id, endpoint.get("clusterPorts")),
  )


def normalize_instances(
  records: List[Mapping[str, Any]],
  reserved_prefix: str = RESERVED_RESOURCE_PREFIX,
) -> List[FalkorDBInstance]:
  """
  Normalize the RUNNING records of a listing, preserving their order.

  Non-running records are dropped before their topology is inspected, since
  topology is only resolved once an instance is up.
  """
  return [
    normalize_instance(record, reserved_prefix)
    for record in records
    if is_running(record)
  ]


class InstanceNormalizer:
  """Fetches and normalizes the instances of one subscription."""

  def __init__(self, client: FleetClient):
    self.client = client

  async def list_instances_for_subscription(
    self, admin_token: str, subscription_id: str
  ) -> List[FalkorDBInstance]:
    try:
      records = await self.client.list_resource_instances(
        admin_token, subscription_id
      )
    except FleetAPIError as e:
      raise UpstreamError(
        f"Failed to list instances for subscription {subscription_id}",
        details={"subscription_id": subscription_id, "status_code": e.status_code},
        cause=e,
      ) from e

    instances = normalize_instances(
      records, self.client.config.reserved_resource_prefix
    )
    logger.debug(
      f"Subscription {subscription_id}: {len(instances)} running of "
      f"{len(records)} instances"
    )
    return instances
