"""
Pytest configuration and fixtures
"""

import pytest

from readygate.config import get_settings
from tests.helpers import FakeServer


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    """Keep the cached Settings free of .env files and READYGATE_* variables."""
    monkeypatch.chdir(tmp_path)
    for key in [
        "READYGATE_DEFAULT_TIMEOUT_MS",
        "READYGATE_GATE_NAME",
        "READYGATE_LOG_LEVEL",
        "READYGATE_LOG_DIR",
        "READYGATE_LOG_JSON",
    ]:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def server():
    """A resource that has not been initialized yet."""
    return FakeServer()


@pytest.fixture
def failing_server():
    """A resource whose initialization raises."""
    return FakeServer(fail_with=RuntimeError("port already in use"))
