"""Pytest fixtures for test configuration.

Global test safety measures:
 - Block real HTTP by making requests.Session.request raise
 - Keep .env loading off (load_config skips it while PYTEST_CURRENT_TEST is set)
"""
import pytest
from typing import Dict, Any

from .mocks.fixtures import *  # noqa: F401,F403


@pytest.fixture(autouse=True)
def _no_network(monkeypatch):
    def refuse(*args, **kwargs):  # pragma: no cover - only hit on a test bug
        raise RuntimeError("Network access attempted during tests")
    monkeypatch.setattr("requests.sessions.Session.request", refuse)


@pytest.fixture
def test_config() -> Dict[str, Any]:
    """Provide a minimal test configuration as a dict.

    Tests should pass cfg to CLI/modules directly rather than setting
    environment variables.
    """
    return {
        'log_level': 'DEBUG',
        'spotify': {
            'endpoint': 'https://pathfinder.test/v1/query',
            'app_platform': 'WebPlayer',
            'user_agent': 'pytest',
            'client_token': None,
            'timeout_seconds': 5,
            'cover_index': 1,
        },
        'sorting': {
            'reference_l': 100.0,
            'reference_a': 0.0,
            'reference_b': 0.0,
        },
        'profiling': {
            'workers': 1,
            'skip_undecodable': False,
        },
    }
