"""Account-wide instance discovery."""

import asyncio
from typing import List

from falkordb_integration.exceptions import UpstreamError
from falkordb_integration.models.api import FalkorDBInstance
from .normalizer import InstanceNormalizer
from .subscriptions import SubscriptionEnumerator


def _leaf_errors(group: BaseExceptionGroup) -> List[BaseException]:
  errors = []
  for error in group.exceptions:
    if isinstance(error, BaseExceptionGroup):
      errors.extend(_leaf_errors(error))
    else:
      errors.append(error)
  return errors


class InstanceAggregator:
  """
  Fans the normalizer out over every subscription of an account.

  All subscriptions are queried concurrently and the results flattened.
  There is no partial-success mode: one failing subscription fails the call
  and cancels the requests still running for the others.
  """

  def __init__(
    self, enumerator: SubscriptionEnumerator, normalizer: InstanceNormalizer
  ):
    self.enumerator = enumerator
    self.normalizer = normalizer

  async def list_all_instances(
    self, admin_token: str, user_token: str
  ) -> List[FalkorDBInstance]:
    subscriptions = await self.enumerator.list_subscriptions(user_token)
    if not subscriptions:
      return []

    try:
      async with asyncio.TaskGroup() as group:
        tasks = [
          group.create_task(
            self.normalizer.list_instances_for_subscription(admin_token, subscription)
          )
          for subscription in subscriptions
        ]
    except ExceptionGroup as e:
      errors = _leaf_errors(e)
      failure = next(
        (error for error in errors if isinstance(error, UpstreamError)), errors[0]
      )
    else:
      return [instance for task in tasks for instance in task.result()]

    if isinstance(failure, UpstreamError):
      raise failure
    raise UpstreamError("Failed to get user instances", cause=failure) from failure
