"""Highlighter tests covering radius smoothing and the disabled state."""
from __future__ import annotations

import math

import pytest

from zoomer_core import Highlighter, LinearInterpolation


def test_disabled_highlighter_has_infinite_radius() -> None:
    highlighter = Highlighter()

    assert not highlighter.is_enabled()
    assert highlighter.radius == math.inf


def test_enabled_highlighter_reports_smoothed_radius() -> None:
    highlighter = Highlighter(radius=50.0, interpolator=LinearInterpolation(1.0))
    highlighter.set_enabled(True)
    highlighter.set_radius(100.0)

    highlighter.update(0.5)

    assert highlighter.radius == 75.0
    assert highlighter.target_radius == 100.0


def test_radius_never_drops_below_one_pixel() -> None:
    highlighter = Highlighter()

    highlighter.set_radius(-20.0)

    assert highlighter.target_radius == 1.0


def test_toggle_flips_state() -> None:
    highlighter = Highlighter()

    assert highlighter.toggle() is True
    assert highlighter.toggle() is False


def test_default_smoothing_converges() -> None:
    highlighter = Highlighter()
    highlighter.set_enabled(True)
    highlighter.set_radius(200.0)

    for _ in range(120):
        highlighter.update(0.016)

    assert highlighter.radius == pytest.approx(200.0, abs=1e-3)
