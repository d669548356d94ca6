"""
Interpolated Values Module
Values that separate what they should become from what is displayed right now
"""

import math
from typing import Sequence, Union

import numpy as np

from .interpolators import Interpolator


def _check_dt(dt: float):
    if not math.isfinite(dt) or dt < 0:
        raise ValueError(f"dt must be a finite, non-negative number of seconds, got {dt}")


class InterpolatedVector:
    """
    An N-dimensional value smoothed towards a target.

    ``set_target`` changes only the target; ``update`` moves the current
    value towards it using the owned interpolator. Accessors return copies.
    """

    def __init__(self, initial: Union[Sequence[float], np.ndarray], interpolator: Interpolator):
        """
        Initialize with current and target both equal to ``initial``.

        Args:
            initial: Starting value, any sequence of floats
            interpolator: Smoothing strategy owned by this value
        """
        self._current = np.array(initial, dtype=float).reshape(-1)
        self._target = self._current.copy()
        self._interpolator = interpolator

    @classmethod
    def zeroed(cls, dim: int, interpolator: Interpolator) -> 'InterpolatedVector':
        """Create a ``dim``-dimensional value starting at the zero vector."""
        return cls(np.zeros(dim), interpolator)

    @property
    def dim(self) -> int:
        return self._current.shape[0]

    @property
    def interpolator(self) -> Interpolator:
        return self._interpolator

    def set_target(self, target: Union[Sequence[float], np.ndarray]):
        """
        Set a new target value.

        Args:
            target: New target, must have the same dimension
        """
        target = np.array(target, dtype=float).reshape(-1)
        if target.shape != self._target.shape:
            raise ValueError(f"Expected a {self.dim}-dimensional target, got {target.shape[0]}")
        self._target = target

    def set_current(self, value: Union[Sequence[float], np.ndarray]):
        """Snap both current and target to ``value`` and reset the interpolator."""
        self.set_target(value)
        self._current = self._target.copy()
        self._interpolator.reset()

    def update(self, dt: float) -> np.ndarray:
        """
        Advance the current value towards the target.

        Args:
            dt: Time delta since last update (seconds)

        Returns:
            The new current value
        """
        _check_dt(dt)
        self._current = np.asarray(
            self._interpolator.interpolate(self._current, self._target, dt), dtype=float
        )
        return self._current.copy()

    def current(self) -> np.ndarray:
        return self._current.copy()

    def target(self) -> np.ndarray:
        return self._target.copy()

    def __repr__(self):
        return (f"InterpolatedVector(current={self._current.tolist()}, "
                f"target={self._target.tolist()}, interpolator={self._interpolator!r})")


class InterpolatedScalar:
    """A single float smoothed towards a target."""

    def __init__(self, initial: float, interpolator: Interpolator):
        self._value = InterpolatedVector([initial], interpolator)

    @classmethod
    def zeroed(cls, interpolator: Interpolator) -> 'InterpolatedScalar':
        return cls(0.0, interpolator)

    @property
    def interpolator(self) -> Interpolator:
        return self._value.interpolator

    def set_target(self, target: float):
        self._value.set_target([target])

    def set_current(self, value: float):
        self._value.set_current([value])

    def update(self, dt: float) -> float:
        return float(self._value.update(dt)[0])

    def current(self) -> float:
        return float(self._value.current()[0])

    def target(self) -> float:
        return float(self._value.target()[0])

    def __repr__(self):
        return f"InterpolatedScalar(current={self.current()}, target={self.target()})"
