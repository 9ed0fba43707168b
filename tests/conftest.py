from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Pick up OLLAMA_HOST / OLLAMA_MODEL from a repo-root `.env`.

    Only the live-server test reads them; every other test clears the
    OLLAMA_* variables it cares about. Under CI the file is ignored unless
    OLLAMA_PARAMS_LOAD_DOTENV_FOR_TESTS=1, so the live test stays skipped.
    """

    if os.environ.get("CI") and os.environ.get("OLLAMA_PARAMS_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        # Variables already exported in the shell win over the file.
        load_dotenv(dotenv_path=env_path, override=False)
