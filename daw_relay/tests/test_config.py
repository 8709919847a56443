from __future__ import annotations
import logging

import pytest

from daw_relay import config
from daw_relay.config import load_settings
from daw_relay.errors import ConfigurationError
from daw_relay.main import create_app, run


def test_defaults_with_gemini_key() -> None:
    s = load_settings({"GEMINI_API_KEY": "abc"})
    assert s.provider == "gemini"
    assert s.api_key == "abc"
    assert s.model == "gemini-1.5-flash"
    assert s.port == 3000
    assert s.timeout_seconds == 30.0
    assert s.cors_origins == ("*",)
    assert s.client_keys == ()
    assert "abc" not in str(s.describe())


def test_google_api_key_fallback_and_model_override() -> None:
    s = load_settings({"GOOGLE_API_KEY": "g", "GOOGLE_MODEL": "gemini-2.0-flash"})
    assert s.api_key == "g"
    assert s.model == "gemini-2.0-flash"


def test_missing_credential_is_fatal() -> None:
    with pytest.raises(ConfigurationError) as exc:
        load_settings({})
    assert "GEMINI_API_KEY" in exc.value.message


def test_other_providers_need_their_own_key() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"AI_PROVIDER": "openai", "GEMINI_API_KEY": "abc"})
    s = load_settings({"AI_PROVIDER": "Anthropic", "ANTHROPIC_API_KEY": "k"})
    assert s.provider == "anthropic"
    assert s.model == "claude-3-5-haiku-latest"


def test_unknown_provider() -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"AI_PROVIDER": "llama", "GEMINI_API_KEY": "abc"})


def test_lists_port_and_timeout() -> None:
    s = load_settings({
        "GEMINI_API_KEY": "abc",
        "CORS_ORIGINS": "https://kocodillo.com, http://localhost:5173",
        "RELAY_CLIENT_KEYS": "k1,,k2 ",
        "PORT": "4000",
        "AI_TIMEOUT_SECONDS": "0",
        "LOG_LEVEL": "debug",
    })
    assert s.cors_origins == ("https://kocodillo.com", "http://localhost:5173")
    assert s.client_keys == ("k1", "k2")
    assert s.port == 4000
    assert s.timeout_seconds is None
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"PORT": "http"},
        {"PORT": "70000"},
        {"AI_TIMEOUT_SECONDS": "soon"},
        {"AI_TIMEOUT_SECONDS": "-1"},
        {"LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_values(env) -> None:
    with pytest.raises(ConfigurationError):
        load_settings({"GEMINI_API_KEY": "abc", **env})


@pytest.fixture
def bare_env(monkeypatch):
    monkeypatch.setattr(config, "load_env_file", lambda: None)
    for name in ("AI_PROVIDER", "GEMINI_API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_app_refuses_to_start_without_credential(bare_env) -> None:
    with pytest.raises(ConfigurationError):
        create_app()


def test_run_exits_without_credential(bare_env) -> None:
    with pytest.raises(SystemExit) as exc:
        run()
    assert exc.value.code == 1


def test_run_exits_on_invalid_log_level(bare_env, monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    # start from an unconfigured root logger so basicConfig really applies
    monkeypatch.setattr(logging.root, "handlers", [])
    with pytest.raises(SystemExit) as exc:
        run()
    assert exc.value.code == 1
