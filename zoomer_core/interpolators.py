"""
Interpolators Module
Smoothing strategies that move a displayed value towards its target over time
"""

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, Type

import numpy as np


def lerp(start, end, t: float):
    """
    Linear interpolation between two values.

    Works on floats and numpy arrays alike.

    Args:
        start: Start value
        end: End value
        t: Progress (0-1, not clamped)

    Returns:
        Interpolated value
    """
    return start + (end - start) * t


def clamp(value, min_val, max_val):
    """
    Clamp a value between min and max.

    Args:
        value: Value to clamp (float or numpy array)
        min_val: Minimum value
        max_val: Maximum value

    Returns:
        Clamped value
    """
    if isinstance(value, np.ndarray):
        return np.clip(value, min_val, max_val)
    return max(min_val, min(max_val, value))


class Interpolator(ABC):
    """
    Strategy for advancing a current value towards a target value.

    Implementations receive the externally held current value and return the
    next one; they never keep a reference to either array.
    """

    @abstractmethod
    def interpolate(self, current: np.ndarray, target: np.ndarray, dt: float) -> np.ndarray:
        """
        Compute the next current value.

        Args:
            current: Current value
            target: Target value
            dt: Time delta since last update (seconds)

        Returns:
            The new current value
        """

    def reset(self):
        """Clear any accumulated state."""


class ExponentialSmoothing(Interpolator):
    """
    Frame-rate independent exponential smoothing.

    After ``length_sec`` seconds the remaining distance to the target has
    shrunk by a factor of ``10 ** exp_rate``.
    """

    def __init__(self, length_sec: float, exp_rate: float):
        """
        Initialize exponential smoothing.

        Args:
            length_sec: Length of the interpolation in seconds
            exp_rate: Exponential rate of smoothing (10^x)
        """
        if not length_sec > 0:
            raise ValueError(f"length_sec must be positive, got {length_sec}")
        if not exp_rate > 0:
            raise ValueError(f"exp_rate must be positive, got {exp_rate}")

        self.length_sec = float(length_sec)
        self.exp_rate = float(exp_rate)

    def interpolate(self, current: np.ndarray, target: np.ndarray, dt: float) -> np.ndarray:
        remaining = math.pow(10.0, -self.exp_rate) ** (dt / self.length_sec)
        return lerp(current, target, 1.0 - remaining)

    def __repr__(self):
        return f"ExponentialSmoothing(length_sec={self.length_sec}, exp_rate={self.exp_rate})"


class LinearInterpolation(Interpolator):
    """
    Constant-rate interpolation driven by accumulated time.

    Progress is ``elapsed / length_sec`` and is not clamped, so the value
    passes the target once ``elapsed`` exceeds ``length_sec``. Callers stop
    updating (or call ``reset``) when the transition is over.
    """

    def __init__(self, length_sec: float):
        if not length_sec > 0:
            raise ValueError(f"length_sec must be positive, got {length_sec}")

        self.length_sec = float(length_sec)
        self._k = 1.0 / self.length_sec
        self._time = 0.0

    @property
    def elapsed(self) -> float:
        """Time accumulated over all interpolate calls."""
        return self._time

    def interpolate(self, current: np.ndarray, target: np.ndarray, dt: float) -> np.ndarray:
        # No elapsed time means no progress, even with time already accumulated
        if dt == 0:
            return current
        self._time += dt
        return lerp(current, target, self._k * self._time)

    def reset(self):
        self._time = 0.0

    def __repr__(self):
        return f"LinearInterpolation(length_sec={self.length_sec}, elapsed={self._time})"


# Available interpolation strategies by config name
INTERPOLATORS: Dict[str, Type[Interpolator]] = {
    'exponential': ExponentialSmoothing,
    'linear': LinearInterpolation,
}


def create_interpolator(name: str, length_sec: float, exp_rate: float = 1.5) -> Interpolator:
    """
    Create a fresh interpolator by name.

    Every smoothed value needs its own instance since some strategies keep
    state between calls.

    Args:
        name: Name of the strategy ('exponential' or 'linear')
        length_sec: Length of the interpolation in seconds
        exp_rate: Exponential rate, ignored by linear interpolation

    Returns:
        A new Interpolator

    Raises:
        KeyError: If the name is not a known strategy
    """
    if name not in INTERPOLATORS:
        raise KeyError(f"Unknown interpolator '{name}', expected one of {sorted(INTERPOLATORS)}")

    if name == 'exponential':
        return ExponentialSmoothing(length_sec, exp_rate)
    return INTERPOLATORS[name](length_sec)


def interpolator_factory(name: str, length_sec: float,
                         exp_rate: float = 1.5) -> Callable[[], Interpolator]:
    """
    Build a zero-argument factory producing fresh interpolators.

    The name is validated eagerly so configuration errors surface at load time.
    """
    create_interpolator(name, length_sec, exp_rate)
    return lambda: create_interpolator(name, length_sec, exp_rate)
