"""Tests for configuration loading."""

import json

import pytest

from fast_intercom_conversations.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from the developer's environment and config file."""
    for name in [
        "INTERCOM_ACCESS_TOKEN",
        "FASTINTERCOM_LOG_LEVEL",
        "FASTINTERCOM_API_TIMEOUT_SECONDS",
        "INTERCOM_API_VERSION",
        "INTERCOM_API_BASE_URL",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FASTINTERCOM_CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr("fast_intercom_conversations.config.load_dotenv", lambda: None)


def test_load_from_environment(monkeypatch):
    monkeypatch.setenv("INTERCOM_ACCESS_TOKEN", "tok_env")
    monkeypatch.setenv("FASTINTERCOM_API_TIMEOUT_SECONDS", "12")

    config = Config.load()

    assert config.intercom_token == "tok_env"
    assert config.api_timeout_seconds == 12
    assert config.intercom_api_base_url == "https://api.intercom.io"


def test_environment_overrides_file(monkeypatch, tmp_path):
    (tmp_path / "config.json").write_text(
        json.dumps({"intercom_token": "tok_file", "log_level": "WARNING"})
    )
    monkeypatch.setenv("FASTINTERCOM_LOG_LEVEL", "DEBUG")

    config = Config.load()

    assert config.intercom_token == "tok_file"
    assert config.log_level == "DEBUG"


def test_missing_token():
    with pytest.raises(ValueError, match="access token is required"):
        Config.load()


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("INTERCOM_ACCESS_TOKEN", "tok")
    monkeypatch.setenv("FASTINTERCOM_API_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValueError, match="timeout"):
        Config.load()


def test_save_omits_token(tmp_path):
    Config(intercom_token="secret", intercom_api_version="2.11").save()

    saved = json.loads((tmp_path / "config.json").read_text())
    assert "intercom_token" not in saved
    assert saved["intercom_api_version"] == "2.11"
