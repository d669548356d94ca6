"""Pytest configuration for zoomer tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure repository root is available on the Python path for package imports.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zoomer_core import Camera, CameraProfile, ZoomController  # noqa: E402


@pytest.fixture
def camera() -> Camera:
    return Camera((0.25, 500.0), (1.0, 1.0))


@pytest.fixture
def controller() -> ZoomController:
    return ZoomController((1920, 1080), (1920, 1080), CameraProfile(name="test"))
