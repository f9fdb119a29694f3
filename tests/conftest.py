"""Shared test fixtures for the nsdebug test suite."""

import io

import pytest

from nsdebug import env as _env
from nsdebug.registry import init_registry, reset_registry


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: tests that spawn subprocesses")


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the real DEBUG* variables and the env cache out of every test."""
    for var in (_env.DEBUG_VAR, _env.COLORS_VAR, _env.HIDE_DATE_VAR):
        monkeypatch.delenv(var, raising=False)
    _env.clear_env_cache()
    yield
    _env.clear_env_cache()


@pytest.fixture(autouse=True)
def environ():
    """A private environment mapping backing the registry singleton."""
    env = {}
    init_registry(environ=env)
    yield env
    reset_registry()


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------
@pytest.fixture
def lines():
    """A list sink: each logged line is appended."""
    return []


@pytest.fixture
def buf():
    """A StringIO buffer for capturing stream output."""
    return io.StringIO()
