"""Tests for the SQLAlchemy-backed configuration and variable stores."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from falkordb_integration.database import Model, init_db
from falkordb_integration.exceptions import ConfigPersistenceError
from falkordb_integration.models.iam import SiteEnvironmentVariable
from falkordb_integration.storage import (
  SqlEnvironmentVariableStore,
  SqlSiteConfigurationStore,
)


@pytest.fixture
def session_factory():
  engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
  )
  init_db(bind=engine)
  yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
  Model.metadata.drop_all(bind=engine)
  engine.dispose()


@pytest.fixture
def config_store(session_factory):
  return SqlSiteConfigurationStore(session_factory)


@pytest.fixture
def variable_store(session_factory):
  return SqlEnvironmentVariableStore(session_factory)


CONFIG = {"email": "owner@example.com", "password": "pw", "instances": []}


class TestSqlSiteConfigurationStore:
  @pytest.mark.asyncio
  async def test_missing_configuration(self, config_store):
    assert await config_store.get_site_configuration("t1", "s1") is None

  @pytest.mark.asyncio
  async def test_create_and_get(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)

    stored = await config_store.get_site_configuration("t1", "s1")

    assert stored.config == CONFIG
    assert stored.version == 1

  @pytest.mark.asyncio
  async def test_sites_are_isolated(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)

    assert await config_store.get_site_configuration("t1", "s2") is None
    assert await config_store.get_site_configuration("t2", "s1") is None

  @pytest.mark.asyncio
  async def test_duplicate_create(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)

    with pytest.raises(ConfigPersistenceError, match="already exists"):
      await config_store.create_site_configuration("t1", "s1", CONFIG)

  @pytest.mark.asyncio
  async def test_update_bumps_version(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)
    updated = {**CONFIG, "nextIdx": 1}

    await config_store.update_site_configuration(
      "t1", "s1", updated, expected_version=1
    )

    stored = await config_store.get_site_configuration("t1", "s1")
    assert stored.config == updated
    assert stored.version == 2

  @pytest.mark.asyncio
  async def test_stale_version_is_rejected(self, config_store):
    """A writer holding an old version cannot overwrite a newer document."""
    await config_store.create_site_configuration("t1", "s1", CONFIG)
    await config_store.update_site_configuration(
      "t1", "s1", {**CONFIG, "password": "first"}, expected_version=1
    )

    with pytest.raises(ConfigPersistenceError) as exc_info:
      await config_store.update_site_configuration(
        "t1", "s1", {**CONFIG, "password": "second"}, expected_version=1
      )

    assert exc_info.value.details["expected_version"] == 1
    stored = await config_store.get_site_configuration("t1", "s1")
    assert stored.config["password"] == "first"

  @pytest.mark.asyncio
  async def test_unversioned_update(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)

    await config_store.update_site_configuration("t1", "s1", {**CONFIG, "x": 1})

    stored = await config_store.get_site_configuration("t1", "s1")
    assert stored.config["x"] == 1

  @pytest.mark.asyncio
  async def test_update_of_missing_configuration(self, config_store):
    with pytest.raises(ConfigPersistenceError):
      await config_store.update_site_configuration("t1", "s1", CONFIG)

  @pytest.mark.asyncio
  async def test_delete(self, config_store):
    await config_store.create_site_configuration("t1", "s1", CONFIG)

    await config_store.delete_site_configuration("t1", "s1")
    await config_store.delete_site_configuration("t1", "s1")

    assert await config_store.get_site_configuration("t1", "s1") is None


class TestSqlEnvironmentVariableStore:
  @pytest.mark.asyncio
  async def test_upsert(self, variable_store):
    await variable_store.create_or_update_variables(
      "t1", "s1", {"FALKORDB_HOSTNAME": "a", "FALKORDB_PORT": "1"}, is_secret=True
    )
    await variable_store.create_or_update_variables(
      "t1", "s1", {"FALKORDB_PORT": "2"}, is_secret=True
    )

    assert await variable_store.list_variables("t1", "s1") == {
      "FALKORDB_HOSTNAME": "a",
      "FALKORDB_PORT": "2",
    }

  @pytest.mark.asyncio
  async def test_secret_flag(self, variable_store, session_factory):
    await variable_store.create_or_update_variables(
      "t1", "s1", {"FALKORDB_PASSWORD": "hunter2"}, is_secret=True
    )

    with session_factory() as db:
      row = db.query(SiteEnvironmentVariable).one()
      assert row.is_secret is True
      assert "hunter2" not in repr(row)

  @pytest.mark.asyncio
  async def test_delete_only_named_keys(self, variable_store):
    await variable_store.create_or_update_variables(
      "t1",
      "s1",
      {"FALKORDB_HOSTNAME": "a", "FALKORDB_1_HOSTNAME": "b", "OTHER": "c"},
    )
    await variable_store.create_or_update_variables(
      "t1", "s2", {"FALKORDB_HOSTNAME": "z"}
    )

    await variable_store.delete_environment_variables(
      "t1", "s1", ["FALKORDB_HOSTNAME", "FALKORDB_PORT"]
    )

    assert await variable_store.list_variables("t1", "s1") == {
      "FALKORDB_1_HOSTNAME": "b",
      "OTHER": "c",
    }
    assert await variable_store.list_variables("t1", "s2") == {
      "FALKORDB_HOSTNAME": "z"
    }
