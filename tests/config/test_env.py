import pytest

from falkordb_integration.config import env
from falkordb_integration.config.env import (
  EnvConfig,
  get_bool_env,
  get_float_env,
  get_int_env,
  get_str_env,
)


def test_get_int_env_returns_default_on_invalid(monkeypatch, capsys):
  monkeypatch.setenv("INVALID_INT", "not-a-number")

  value = get_int_env("INVALID_INT", 7)

  captured = capsys.readouterr()
  assert "Invalid INVALID_INT value" in captured.out
  assert value == 7


def test_get_float_env_returns_default(monkeypatch, capsys):
  monkeypatch.setenv("INVALID_FLOAT", "oops")

  value = get_float_env("INVALID_FLOAT", 0.5)

  captured = capsys.readouterr()
  assert "Invalid INVALID_FLOAT value" in captured.out
  assert value == pytest.approx(0.5)


@pytest.mark.parametrize(
  "raw,expected",
  [
    ("true", True),
    ("1", True),
    ("yes", True),
    ("on", True),
    ("false", False),
    ("0", False),
    ("no", False),
    ("off", False),
  ],
)
def test_get_bool_env_parses_truthy_values(monkeypatch, raw, expected):
  monkeypatch.setenv("BOOL_TEST", raw)

  assert get_bool_env("BOOL_TEST", default=not expected) is expected


def test_get_str_env_uses_default_when_missing(monkeypatch):
  monkeypatch.delenv("MISSING_STR", raising=False)

  assert get_str_env("MISSING_STR", "fallback") == "fallback"


def test_environment_helpers(monkeypatch):
  monkeypatch.setattr(EnvConfig, "ENVIRONMENT", "prod")
  assert EnvConfig.is_production()
  assert not EnvConfig.is_development()

  monkeypatch.setattr(EnvConfig, "ENVIRONMENT", "staging")
  assert EnvConfig.is_staging()

  monkeypatch.setattr(EnvConfig, "ENVIRONMENT", "test")
  assert env.is_test()


def test_env_sync_defaults_are_sane():
  assert EnvConfig.ENV_SYNC_MAX_RETRIES >= 0
  assert EnvConfig.ENV_SYNC_RETRY_DELAY >= 0
  assert EnvConfig.ENV_SYNC_RETRY_BACKOFF >= 1
  assert EnvConfig.FALKORDB_HTTP_TIMEOUT > 0
