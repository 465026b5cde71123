import os

# Configuration is read at import time, so these must precede package imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from fakes import (
  ACCOUNT_EMAIL,
  ACCOUNT_PASSWORD,
  SITE_ID,
  TEAM_ID,
  InMemoryConfigStore,
  InMemoryEnvStore,
)


@pytest.fixture
def config_store():
  return InMemoryConfigStore()


@pytest.fixture
def env_store():
  return InMemoryEnvStore()


@pytest.fixture
def account_config():
  return {"email": ACCOUNT_EMAIL, "password": ACCOUNT_PASSWORD, "instances": []}


@pytest.fixture
def seeded_config_store(config_store, account_config):
  config_store.seed(TEAM_ID, SITE_ID, account_config)
  return config_store
