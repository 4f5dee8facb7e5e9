"""Shared fixtures and path setup for tests."""

import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path so 'limbwalk' is importable without installing
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from limbwalk.creature.layouts import hexapod_layout, quadruped_layout, spider_layout  # noqa: E402
from limbwalk.geometry.frames import BodyFrame  # noqa: E402
from limbwalk.terrain.ground import FlatGround  # noqa: E402


@pytest.fixture
def quadruped():
    return quadruped_layout()


@pytest.fixture
def hexapod():
    return hexapod_layout()


@pytest.fixture
def spider():
    return spider_layout()


@pytest.fixture
def flat_ground():
    return FlatGround()


@pytest.fixture
def standing_frame():
    """Body at ride height 1.0 over the origin, facing +Z."""
    return BodyFrame.from_yaw((0.0, 1.0, 0.0), 0.0)
