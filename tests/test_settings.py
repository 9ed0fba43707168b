from __future__ import annotations

import pytest

from ollama_params.config import DEFAULT_HOST, normalize_host, settings_from_env
from ollama_params.keep_alive import INDEFINITELY, KeepAliveParseError, TimeUnit, Until


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("OLLAMA_HOST", "OLLAMA_MODEL", "OLLAMA_KEEP_ALIVE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = settings_from_env(default_model="llama3.2")
    assert s.host == DEFAULT_HOST
    assert s.model == "llama3.2"
    assert s.keep_alive is None
    assert s.api_url("generate") == "http://127.0.0.1:11434/api/generate"


def test_env_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OLLAMA_HOST", "0.0.0.0:11434/")
    clean_env.setenv("OLLAMA_MODEL", "qwen2.5")
    clean_env.setenv("OLLAMA_KEEP_ALIVE", "30m")

    s = settings_from_env(default_model="llama3.2")
    assert s.host == "http://0.0.0.0:11434"
    assert s.model == "qwen2.5"
    assert s.keep_alive == Until(30, TimeUnit.minutes)
    assert s.api_url("/chat") == "http://0.0.0.0:11434/api/chat"


def test_keep_alive_sentinel_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OLLAMA_KEEP_ALIVE", "-1")
    assert settings_from_env(default_model="m").keep_alive == INDEFINITELY


def test_malformed_keep_alive_raises(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OLLAMA_KEEP_ALIVE", "a while")
    with pytest.raises(KeepAliveParseError):
        settings_from_env(default_model="m")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("localhost:11434", "http://localhost:11434"),
        ("https://ollama.internal/", "https://ollama.internal"),
        (" http://10.0.0.5:11434 ", "http://10.0.0.5:11434"),
    ],
)
def test_normalize_host(raw: str, expected: str) -> None:
    assert normalize_host(raw) == expected
