from __future__ import annotations
import pytest
from .mock_spotify import StubPathfinderClient


@pytest.fixture
def stub_client():
    """Three tracks: dark grey, white, mid grey (remote order T0, T1, T2)."""
    return StubPathfinderClient([
        ("uid-0", "Dark", (30, 30, 30)),
        ("uid-1", "White", (255, 255, 255)),
        ("uid-2", "Grey", (128, 128, 128)),
    ])
