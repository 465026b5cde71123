"""Tests for instance discovery and attachment endpoints."""

from fakes import TEAM_ID
from falkordb_integration.exceptions import UpstreamError


def attach(client, headers, instance_id, username="alice", password="s3cret"):
  return client.post(
    "/v1/instances",
    json={"instanceId": instance_id, "username": username, "password": password},
    headers=headers,
  )


class TestDiscoverableInstances:
  def test_lists_running_instances(self, client, seeded_config_store, site_headers):
    response = client.get("/v1/falkordb/instances", headers=site_headers)

    assert response.status_code == 200
    data = response.json()
    assert [i["id"] for i in data] == ["A", "B"]
    assert data[0]["cloudProvider"] == "gcp"
    assert data[0]["port"] == 6379

  def test_unconfigured_site(self, client, site_headers):
    response = client.get("/v1/falkordb/instances", headers=site_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "SITE_CONFIGURATION_NOT_FOUND"

  def test_upstream_failure(self, client, seeded_config_store, discovery, site_headers):
    discovery.error = UpstreamError("Failed to get user instances")

    response = client.get("/v1/falkordb/instances", headers=site_headers)

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to get user instances"


class TestAttachInstance:
  def test_attach(self, client, seeded_config_store, env_store, site_headers):
    response = attach(client, site_headers, "A")

    assert response.status_code == 201
    data = response.json()
    assert data["idx"] == 0
    assert data["envPrefix"] == "FALKORDB_"
    assert data["envVariables"] == [
      "FALKORDB_HOSTNAME",
      "FALKORDB_PORT",
      "FALKORDB_USERNAME",
      "FALKORDB_PASSWORD",
    ]
    assert data["username"] == "alice"
    assert "password" not in data
    assert env_store.of()["FALKORDB_PASSWORD"] == "s3cret"

  def test_second_instance(self, client, seeded_config_store, site_headers):
    attach(client, site_headers, "A")

    response = attach(client, site_headers, "B")

    assert response.json()["envPrefix"] == "FALKORDB_1_"

  def test_duplicate(self, client, seeded_config_store, site_headers):
    attach(client, site_headers, "A")

    response = attach(client, site_headers, "A")

    assert response.status_code == 409
    assert response.json()["detail"] == "Instance already added"

  def test_unknown_instance(self, client, seeded_config_store, site_headers):
    response = attach(client, site_headers, "Z")

    assert response.status_code == 404
    assert response.json()["code"] == "INSTANCE_NOT_FOUND"

  def test_env_sync_failure(self, client, seeded_config_store, env_store, site_headers):
    env_store.write_failures = 10

    response = attach(client, site_headers, "A")

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "Failed to set environment variables"
    assert body["code"] == "ENV_SYNC_FAILED"
    assert body["details"]["compensated"] is True
    assert seeded_config_store.config_of()["instances"] == []

  def test_missing_instance_id(self, client, seeded_config_store, site_headers):
    response = client.post(
      "/v1/instances",
      json={"username": "u", "password": "p"},
      headers=site_headers,
    )

    assert response.status_code == 422

  def test_missing_context(self, client, seeded_config_store):
    response = attach(client, {"X-Team-Id": TEAM_ID}, "A")

    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_CONTEXT"


class TestAttachedInstances:
  def test_list(self, client, seeded_config_store, site_headers):
    attach(client, site_headers, "A")
    attach(client, site_headers, "B")

    response = client.get("/v1/instances", headers=site_headers)

    assert response.status_code == 200
    assert [(i["id"], i["idx"]) for i in response.json()] == [("A", 0), ("B", 1)]

  def test_detach(self, client, seeded_config_store, env_store, site_headers):
    attach(client, site_headers, "A")
    attach(client, site_headers, "B")

    response = client.delete("/v1/instances/A", headers=site_headers)

    assert response.status_code == 200
    assert response.json()["envPrefix"] == "FALKORDB_"
    assert sorted(env_store.of()) == [
      "FALKORDB_1_HOSTNAME",
      "FALKORDB_1_PASSWORD",
      "FALKORDB_1_PORT",
      "FALKORDB_1_USERNAME",
    ]

  def test_detach_unknown(self, client, seeded_config_store, site_headers):
    response = client.delete("/v1/instances/Z", headers=site_headers)

    assert response.status_code == 404

  def test_client_code(self, client, seeded_config_store, site_headers):
    attach(client, site_headers, "A")
    attach(client, site_headers, "B")

    response = client.get("/v1/instances/B/client-code", headers=site_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["instanceId"] == "B"
    assert data["language"] == "python"
    assert 'os.environ["FALKORDB_1_HOSTNAME"]' in data["code"]
