"""
Pytest configuration and shared fixtures for Porpoise tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

DEFAULT_DEADLINE = _common.DEFAULT_DEADLINE
make_survey = _common.make_survey
make_text_leaves = _common.make_text_leaves
make_clock = _common.make_clock
make_contract = _common.make_contract
make_config = _common.make_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep PORPOISE_* env vars and the default config out of every test."""
    from porpoise.config.runtime import set_default_config

    for name in (
        "PORPOISE_PADDING_VALUE",
        "PORPOISE_HEX_POSITION",
        "PORPOISE_TRACKED_INDEX",
        "PORPOISE_DOMAIN",
        "PORPOISE_LOG_LEVEL",
        "PORPOISE_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def survey():
    """Provide a default Survey for tests."""
    return make_survey()


@pytest.fixture
def config():
    """Provide a default RuntimeConfig for tests."""
    return make_config()


@pytest.fixture
def clock():
    """Provide a FrozenClock set well before DEFAULT_DEADLINE."""
    return make_clock()


@pytest.fixture
def contract(clock):
    """Provide an InMemoryPorpacle bound to the frozen clock."""
    return make_contract(clock=clock)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
