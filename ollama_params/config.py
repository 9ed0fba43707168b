from __future__ import annotations

import os
from dataclasses import dataclass

from ollama_params.keep_alive import KeepAlive, decode_keep_alive

DEFAULT_HOST = "http://127.0.0.1:11434"


@dataclass(frozen=True, slots=True)
class OllamaSettings:
    host: str
    model: str
    keep_alive: KeepAlive | None = None

    def api_url(self, endpoint: str) -> str:
        return f"{self.host}/api/{endpoint.lstrip('/')}"


def normalize_host(host: str) -> str:
    host = host.strip().rstrip("/")
    if "://" not in host:
        # OLLAMA_HOST is commonly given as bare host:port.
        host = f"http://{host}"
    return host


def settings_from_env(*, default_model: str) -> OllamaSettings:
    """Read OLLAMA_HOST, OLLAMA_MODEL and OLLAMA_KEEP_ALIVE.

    A malformed OLLAMA_KEEP_ALIVE raises KeepAliveParseError rather than being ignored.
    """

    raw_keep_alive = os.environ.get("OLLAMA_KEEP_ALIVE")
    return OllamaSettings(
        host=normalize_host(os.environ.get("OLLAMA_HOST") or DEFAULT_HOST),
        model=os.environ.get("OLLAMA_MODEL", default_model),
        keep_alive=decode_keep_alive(raw_keep_alive) if raw_keep_alive else None,
    )
