"""Tests for core.config: settings from the environment and the user .env helpers."""

from __future__ import annotations

import sys

import pytest
from dotenv import dotenv_values

import core.config as config
from core.config import DEFAULT_SERVICE_URL, ServiceSettings, write_user_env_vars
from core.errors import ConfigurationError


def test_defaults_without_credentials() -> None:
    settings = ServiceSettings(_env_file=None)
    assert settings.url == DEFAULT_SERVICE_URL
    assert settings.http_timeout_seconds == 60.0
    assert settings.auth_mode == "none"
    assert settings.default_headers() == {"User-Agent": settings.user_agent}


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPEECH_TO_TEXT_URL", "https://gateway.example/speech-to-text/api")
    monkeypatch.setenv("SPEECH_TO_TEXT_IAM_APIKEY", "key-123")
    monkeypatch.setenv("SPEECH_TO_TEXT_HTTP_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("SPEECH_TO_TEXT_LEARNING_OPT_OUT", "true")

    settings = ServiceSettings(_env_file=None)

    assert settings.url == "https://gateway.example/speech-to-text/api"
    assert settings.auth_mode == "iam"
    assert settings.http_timeout_seconds == 15.0
    assert settings.default_headers()["X-Watson-Learning-Opt-Out"] == "true"


def test_reads_project_env_file(tmp_path) -> None:
    env = tmp_path / ".env"
    env.write_text("SPEECH_TO_TEXT_USERNAME=alice\nSPEECH_TO_TEXT_PASSWORD=pw\n", encoding="utf-8")
    settings = ServiceSettings(_env_file=str(env))
    assert settings.auth_mode == "basic"
    assert settings.username == "alice"


def test_auth_precedence() -> None:
    settings = ServiceSettings(
        _env_file=None, iam_access_token="tok", iam_apikey="key", username="u", password="p"
    )
    assert settings.auth_mode == "bearer"
    assert ServiceSettings(_env_file=None, iam_apikey="key", username="u", password="p").auth_mode == "iam"


def test_basic_auth_requires_both_parts() -> None:
    with pytest.raises(ConfigurationError):
        ServiceSettings(_env_file=None, username="only-user")


def test_write_user_env_vars_merges_existing(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "cfg")

    path = write_user_env_vars({"SPEECH_TO_TEXT_URL": "https://a", "SPEECH_TO_TEXT_IAM_APIKEY": "k1"})
    write_user_env_vars({"SPEECH_TO_TEXT_IAM_APIKEY": "k2", "SPEECH_TO_TEXT_USERNAME": None})

    assert path == tmp_path / "cfg" / ".env"
    assert path.read_text(encoding="utf-8").startswith("#")
    assert dotenv_values(path) == {
        "SPEECH_TO_TEXT_URL": "https://a",
        "SPEECH_TO_TEXT_IAM_APIKEY": "k2",
    }


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG layout")
def test_user_config_dir_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    assert config.get_user_config_dir() == tmp_path / "xdg" / "speech-to-text"
    assert config.get_user_env_file() == tmp_path / "xdg" / "speech-to-text" / ".env"
