"""
Highlighter Module
Spotlight around the cursor with a smoothed radius
"""

import math
from typing import Optional

from .interpolators import ExponentialSmoothing, Interpolator
from .interpolated import InterpolatedScalar

MIN_RADIUS = 1.0


class Highlighter:
    """
    Dims everything outside a circle around the cursor.

    The radius is in pixels. A disabled highlighter reports an infinite
    radius so the shader never darkens anything.
    """

    def __init__(self, radius: float = 50.0, interpolator: Optional[Interpolator] = None):
        self._radius = InterpolatedScalar(
            max(radius, MIN_RADIUS),
            interpolator or ExponentialSmoothing(0.25, 1.5)
        )
        self._is_enabled = False

    def update(self, dt: float):
        self._radius.update(dt)

    def set_radius(self, new_radius: float):
        """Set the target radius, never below one pixel."""
        self._radius.set_target(max(new_radius, MIN_RADIUS))

    def set_enabled(self, enabled: bool):
        self._is_enabled = enabled

    def toggle(self) -> bool:
        """Toggle the highlighter and return the new state."""
        self._is_enabled = not self._is_enabled
        return self._is_enabled

    def is_enabled(self) -> bool:
        return self._is_enabled

    @property
    def target_radius(self) -> float:
        return self._radius.target()

    @property
    def radius(self) -> float:
        """Smoothed radius in pixels, or infinity when disabled."""
        if self._is_enabled:
            return self._radius.current()
        return math.inf
