import pytest
from fastapi.testclient import TestClient

from fakes import SITE_ID, TEAM_ID, FakeDiscovery, discovery_factory, make_instance
from falkordb_integration.middleware import (
  get_attachment_service,
  get_site_settings_service,
)
from falkordb_integration.operations import AttachmentService, SiteSettingsService
from main import app

SITE_HEADERS = {"X-Team-Id": TEAM_ID, "X-Site-Id": SITE_ID}


@pytest.fixture
def discovery():
  return FakeDiscovery([make_instance("A"), make_instance("B")])


@pytest.fixture
def client(config_store, env_store, discovery):
  """Test client whose services run against in-memory stores."""
  factory = discovery_factory(discovery)

  app.dependency_overrides[get_site_settings_service] = lambda: SiteSettingsService(
    config_store, factory
  )
  app.dependency_overrides[get_attachment_service] = lambda: AttachmentService(
    config_store, env_store, factory, max_retries=1, retry_delay=0
  )

  # Lifespan is not entered, so no database is created
  yield TestClient(app, raise_server_exceptions=False)

  app.dependency_overrides = {}


@pytest.fixture
def site_headers():
  return dict(SITE_HEADERS)
