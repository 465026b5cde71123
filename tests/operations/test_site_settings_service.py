"""Tests for site account settings."""

from unittest.mock import patch

import pytest

from fakes import (
  ACCOUNT_EMAIL,
  ACCOUNT_PASSWORD,
  SITE_ID,
  TEAM_ID,
  FakeDiscovery,
  discovery_factory,
)
from falkordb_integration.exceptions import (
  AuthError,
  ConfigPersistenceError,
  MissingContextError,
)
from falkordb_integration.operations import SiteSettingsService

SERVICE_MODULE = "falkordb_integration.operations.site_settings_service"

ATTACHED = {
  "id": "A",
  "name": "graph-A",
  "cloudProvider": "aws",
  "region": "us-east-1",
  "username": "alice",
  "password": "instance-secret",
  "hostname": "a.example",
  "port": 6379,
  "idx": 0,
}


@pytest.fixture
def discovery():
  return FakeDiscovery()


class TestQuery:
  @pytest.mark.asyncio
  async def test_unconfigured_site(self, config_store, discovery):
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    result = await service.query(TEAM_ID, SITE_ID)

    assert result is not None
    assert result.email is None
    assert result.instances == []

  @pytest.mark.asyncio
  async def test_configured_site(self, config_store, account_config, discovery):
    config_store.seed(
      TEAM_ID,
      SITE_ID,
      {**account_config, "instances": [ATTACHED, {**ATTACHED, "id": "B", "idx": 2}]},
    )
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    result = await service.query(TEAM_ID, SITE_ID)

    assert result.email == ACCOUNT_EMAIL
    assert [(i.id, i.env_prefix) for i in result.instances] == [
      ("A", "FALKORDB_"),
      ("B", "FALKORDB_2_"),
    ]
    assert result.instances[0].cloud_provider == "aws"
    dumped = result.model_dump(by_alias=True)
    assert "password" not in dumped
    assert "password" not in dumped["instances"][0]

  @pytest.mark.asyncio
  async def test_invalid_configuration_yields_none(
    self, config_store, discovery
  ):
    config_store.seed(TEAM_ID, SITE_ID, {"email": "not-an-email"})
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    with patch(f"{SERVICE_MODULE}.logger") as mock_logger:
      result = await service.query(TEAM_ID, SITE_ID)

    assert result is None
    message = mock_logger.warning.call_args.args[0]
    assert message == "Failed to parse site settings"
    extra = mock_logger.warning.call_args.kwargs["extra"]
    assert "email" in extra["metadata"]["errors"]

  @pytest.mark.asyncio
  async def test_missing_site(self, config_store, discovery):
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    with pytest.raises(MissingContextError) as exc_info:
      await service.query(TEAM_ID, "")

    assert exc_info.value.details == {"field": "siteId"}
    assert exc_info.value.status_code == 400


class TestSetAccount:
  @pytest.mark.asyncio
  async def test_creates_configuration(self, config_store, discovery):
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    await service.set_account(TEAM_ID, SITE_ID, ACCOUNT_EMAIL, ACCOUNT_PASSWORD)

    assert discovery.validated == [(ACCOUNT_EMAIL, ACCOUNT_PASSWORD)]
    assert config_store.config_of() == {
      "email": ACCOUNT_EMAIL,
      "password": ACCOUNT_PASSWORD,
      "instances": [],
    }

  @pytest.mark.asyncio
  async def test_update_preserves_instances(self, config_store, discovery):
    config_store.seed(
      TEAM_ID,
      SITE_ID,
      {
        "email": "old@example.com",
        "password": "old",
        "instances": [ATTACHED],
        "nextIdx": 4,
      },
    )
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    await service.set_account(TEAM_ID, SITE_ID, ACCOUNT_EMAIL, "new-password")

    config = config_store.config_of()
    assert config["email"] == ACCOUNT_EMAIL
    assert config["password"] == "new-password"
    assert config["instances"] == [ATTACHED]
    assert config["nextIdx"] == 4

  @pytest.mark.asyncio
  async def test_rejected_credentials_are_not_stored(self, config_store):
    discovery = FakeDiscovery(error=AuthError())
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    with pytest.raises(AuthError) as exc_info:
      await service.set_account(TEAM_ID, SITE_ID, ACCOUNT_EMAIL, "wrong")

    assert exc_info.value.message == "Invalid FalkorDB credentials"
    assert config_store.records == {}

  @pytest.mark.asyncio
  async def test_store_failure(self, seeded_config_store, discovery):
    seeded_config_store.fail_updates_after = 0
    service = SiteSettingsService(seeded_config_store, discovery_factory(discovery))

    with pytest.raises(ConfigPersistenceError) as exc_info:
      await service.set_account(TEAM_ID, SITE_ID, ACCOUNT_EMAIL, "pw")

    assert exc_info.value.status_code == 500

  @pytest.mark.asyncio
  async def test_unexpected_store_error_is_wrapped(self, discovery):
    class BrokenStore:
      async def get_site_configuration(self, team_id, site_id):
        raise RuntimeError("connection reset")

    service = SiteSettingsService(BrokenStore(), discovery_factory(discovery))

    with pytest.raises(ConfigPersistenceError) as exc_info:
      await service.set_account(TEAM_ID, SITE_ID, ACCOUNT_EMAIL, "pw")

    assert isinstance(exc_info.value.cause, RuntimeError)

  @pytest.mark.asyncio
  async def test_missing_team(self, config_store, discovery):
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    with pytest.raises(MissingContextError):
      await service.set_account(None, SITE_ID, ACCOUNT_EMAIL, "pw")

    assert discovery.validated == []


class TestDelete:
  @pytest.mark.asyncio
  async def test_removes_configuration(self, seeded_config_store, discovery):
    service = SiteSettingsService(seeded_config_store, discovery_factory(discovery))

    await service.delete(TEAM_ID, SITE_ID)

    assert seeded_config_store.records == {}
    assert await service.query(TEAM_ID, SITE_ID) is not None

  @pytest.mark.asyncio
  async def test_warns_about_leftover_variables(
    self, config_store, account_config, discovery
  ):
    config_store.seed(
      TEAM_ID,
      SITE_ID,
      {**account_config, "instances": [ATTACHED, {**ATTACHED, "id": "B", "idx": 1}]},
    )
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    with patch(f"{SERVICE_MODULE}.logger") as mock_logger:
      await service.delete(TEAM_ID, SITE_ID)

    assert "FALKORDB_, FALKORDB_1_" in mock_logger.warning.call_args.args[0]
    assert config_store.records == {}

  @pytest.mark.asyncio
  async def test_delete_unconfigured_site(self, config_store, discovery):
    service = SiteSettingsService(config_store, discovery_factory(discovery))

    await service.delete(TEAM_ID, SITE_ID)

    assert config_store.records == {}
