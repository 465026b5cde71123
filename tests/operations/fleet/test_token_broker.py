"""Tests for the two-tier token exchange."""

from unittest.mock import AsyncMock, Mock

import pytest

from falkordb_integration.exceptions import AuthError
from falkordb_integration.fleet import (
  FleetClientError,
  FleetServerError,
  FleetTransientError,
)
from falkordb_integration.operations.fleet import TokenBroker


@pytest.fixture
def client():
  client = Mock()
  client.get_admin_token = AsyncMock(return_value="admin-token")
  client.sign_in = AsyncMock(return_value="user-token")
  return client


class TestTokenBroker:
  @pytest.mark.asyncio
  async def test_authenticate_returns_both_tokens(self, client):
    broker = TokenBroker(client)

    tokens = await broker.authenticate("a@example.com", "pw")

    assert tokens == ("admin-token", "user-token")
    client.sign_in.assert_awaited_once_with("admin-token", "a@example.com", "pw")

  @pytest.mark.asyncio
  async def test_tokens_are_not_cached(self, client):
    broker = TokenBroker(client)

    await broker.authenticate("a@example.com", "pw")
    await broker.authenticate("a@example.com", "pw")

    assert client.get_admin_token.await_count == 2
    assert client.sign_in.await_count == 2

  @pytest.mark.asyncio
  async def test_rejected_credentials(self, client):
    """A 401 from sign-in is reported as invalid credentials."""
    client.sign_in.side_effect = FleetClientError("Unauthorized", 401)
    broker = TokenBroker(client)

    with pytest.raises(AuthError) as exc_info:
      await broker.authenticate("a@example.com", "wrong")

    assert exc_info.value.message == "Invalid FalkorDB credentials"
    assert exc_info.value.status_code == 400
    assert isinstance(exc_info.value.cause, FleetClientError)

  @pytest.mark.asyncio
  @pytest.mark.parametrize(
    "error",
    [
      FleetTransientError("Request timeout"),
      FleetServerError("boom", 500),
    ],
  )
  async def test_admin_token_failures_are_auth_errors(self, client, error):
    client.get_admin_token.side_effect = error
    broker = TokenBroker(client)

    with pytest.raises(AuthError):
      await broker.authenticate("a@example.com", "pw")

    client.sign_in.assert_not_awaited()

  @pytest.mark.asyncio
  async def test_unexpected_errors_propagate(self, client):
    client.sign_in.side_effect = RuntimeError("bug")
    broker = TokenBroker(client)

    with pytest.raises(RuntimeError):
      await broker.get_user_token("admin-token", "a@example.com", "pw")
