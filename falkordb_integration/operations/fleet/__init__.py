"""Fleet discovery operations: tokens, subscriptions and instances."""

from .aggregator import InstanceAggregator
from .discovery import FleetDiscovery
from .normalizer import (
  InstanceNormalizer,
  is_running,
  normalize_instance,
  normalize_instances,
  select_cluster_endpoint,
)
from .subscriptions import SubscriptionEnumerator
from .token_broker import TokenBroker

__all__ = [
  "FleetDiscovery",
  "InstanceAggregator",
  "InstanceNormalizer",
  "SubscriptionEnumerator",
  "TokenBroker",
  "is_running",
  "normalize_instance",
  "normalize_instances",
  "select_cluster_endpoint",
]
