"""
Camera Module
Smoothed 2D pan/zoom camera with screen, camera and world space conversions
"""

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .interpolators import ExponentialSmoothing, Interpolator, clamp
from .interpolated import InterpolatedScalar, InterpolatedVector

DEFAULT_LENGTH_SEC = 0.25
DEFAULT_EXP_RATE = 1.5


class Camera:
    """
    A 2D camera over the captured image.

    Coordinate spaces:
    - Screen space: NDC, [-1, 1] x [-1, 1]
    - Camera space: screen space minus the camera position (already zoomed)
    - World space: camera space divided by the zoom factor

    ``translate``, ``zoom`` and ``clamp_me_daddy`` only move targets. The
    displayed (current) position and zoom chase them in ``update``.
    """

    def __init__(self, zoom_range: Tuple[float, float],
                 position_range: Sequence[float],
                 length_sec: float = DEFAULT_LENGTH_SEC,
                 exp_rate: float = DEFAULT_EXP_RATE,
                 interpolator_factory: Optional[Callable[[], Interpolator]] = None):
        """
        Initialize camera at the origin with a zoom factor of 1.

        Args:
            zoom_range: Inclusive (min, max) bound on the target zoom factor
            position_range: Symmetric world space bound (x, y) on the target position
            length_sec: Smoothing length in seconds (exponential smoothing)
            exp_rate: Smoothing exponential rate (exponential smoothing)
            interpolator_factory: Returns a fresh Interpolator, overrides
                length_sec/exp_rate when given
        """
        zoom_min, zoom_max = float(zoom_range[0]), float(zoom_range[1])
        if not 0 < zoom_min <= zoom_max:
            raise ValueError(f"zoom_range must be a non-empty range of positive floats, got {zoom_range}")
        self._zoom_range = (zoom_min, zoom_max)

        self._position_range = np.zeros(2)
        self.position_range = position_range

        if interpolator_factory is None:
            def interpolator_factory():
                return ExponentialSmoothing(length_sec, exp_rate)

        self._position = InterpolatedVector.zeroed(2, interpolator_factory())
        self._zoom_factor = InterpolatedScalar(1.0, interpolator_factory())

    @property
    def zoom_range(self) -> Tuple[float, float]:
        return self._zoom_range

    @property
    def position_range(self) -> np.ndarray:
        """Symmetric world space bound on the target position."""
        return self._position_range.copy()

    @position_range.setter
    def position_range(self, value: Sequence[float]):
        value = np.array(value, dtype=float).reshape(-1)
        if value.shape != (2,) or np.any(value < 0):
            raise ValueError(f"position_range must be two non-negative floats, got {value.tolist()}")
        self._position_range = value

    @property
    def zoom_factor(self) -> float:
        """Current (smoothed) zoom factor."""
        return self._zoom_factor.current()

    @property
    def target_zoom_factor(self) -> float:
        return self._zoom_factor.target()

    @property
    def camera_position(self) -> np.ndarray:
        """Current (smoothed) position in camera space."""
        return self._position.current()

    @property
    def target_position(self) -> np.ndarray:
        """Target position in camera space."""
        return self._position.target()

    def translate(self, delta: Sequence[float]):
        """
        Move the target position by a camera space delta. Does not clamp.

        Args:
            delta: (dx, dy) in camera space
        """
        self._position.set_target(self._position.target() + np.asarray(delta, dtype=float))

    def clamp_me_daddy(self):
        """
        Clamp the target position into the position range.

        The world space range is scaled into camera space with the current
        zoom factor. Called explicitly once a drag ends, never by translate.
        """
        bound = self._position_range * self._zoom_factor.current()
        self._position.set_target(clamp(self._position.target(), -bound, bound))

    def zoom(self, multiplier: float, screen_point: Sequence[float]):
        """
        Zoom the target by ``multiplier`` keeping ``screen_point`` in place.

        The target zoom factor is clamped to the zoom range, and the
        compensating translation uses the multiplier actually applied.

        Args:
            multiplier: Requested multiplicative zoom change
            screen_point: Zoom anchor in screen space (NDC)
        """
        old_target = self._zoom_factor.target()
        new_target = clamp(old_target * multiplier, *self._zoom_range)
        effective = new_target / old_target

        self._zoom_factor.set_target(new_target)

        point = np.asarray(screen_point, dtype=float) - self._position.target()
        self.translate(point - point * effective)

    def update(self, dt: float):
        """
        Advance the smoothed zoom factor and position.

        Args:
            dt: Time delta since last frame (seconds)
        """
        self._zoom_factor.update(dt)
        self._position.update(dt)

    def reset(self):
        """Snap back to the origin with a zoom factor of 1."""
        self._position.set_current(np.zeros(2))
        self._zoom_factor.set_current(1.0)

    def screen_to_camera_space(self, screen_point: Sequence[float]) -> np.ndarray:
        """Convert from screen space (NDC) to camera space."""
        return np.asarray(screen_point, dtype=float) - self._position.current()

    def screen_to_world_space(self, screen_point: Sequence[float]) -> np.ndarray:
        """Convert from screen space (NDC) to world space."""
        return self.screen_to_camera_space(screen_point) / self._zoom_factor.current()

    def position(self) -> np.ndarray:
        """Current camera position in world space."""
        return self._position.current() / self._zoom_factor.current()

    def to_homogenous(self) -> np.ndarray:
        """
        Convert the camera transform into a homogenous matrix.

        Returns:
            4x4 row-major matrix for column vectors, translation(position) * scaling(zoom)
        """
        x, y = self._position.current()
        translation = np.identity(4)
        translation[0, 3] = x
        translation[1, 3] = y

        zoom = self._zoom_factor.current()
        scaling = np.diag([zoom, zoom, zoom, 1.0])

        return translation @ scaling

    def get_state_info(self) -> dict:
        """Get current camera state for debugging/status."""
        return {
            'position': tuple(self.position().tolist()),
            'camera_position': tuple(self._position.current().tolist()),
            'target_position': tuple(self._position.target().tolist()),
            'zoom_factor': self._zoom_factor.current(),
            'target_zoom_factor': self._zoom_factor.target(),
            'zoom_range': self._zoom_range,
        }
