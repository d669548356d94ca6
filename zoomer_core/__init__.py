"""
Zoomer - Core Module
Smoothed pan/zoom camera and interpolation engine for the screen magnifier
"""

from .interpolators import (
    Interpolator,
    ExponentialSmoothing,
    LinearInterpolation,
    INTERPOLATORS,
    create_interpolator,
    interpolator_factory,
    lerp,
    clamp,
)
from .interpolated import InterpolatedVector, InterpolatedScalar
from .camera import Camera
from .highlighter import Highlighter
from .zoom_controller import ZoomController, MagnifierState
from .config_manager import ConfigManager, CameraProfile, Config, default_config
from .display_manager import DisplayManager, DisplayInfo, CaptureBounds

__all__ = [
    # Interpolation
    'Interpolator',
    'ExponentialSmoothing',
    'LinearInterpolation',
    'INTERPOLATORS',
    'create_interpolator',
    'interpolator_factory',
    'lerp',
    'clamp',
    'InterpolatedVector',
    'InterpolatedScalar',

    # Camera
    'Camera',
    'Highlighter',

    # Zoom control
    'ZoomController',
    'MagnifierState',

    # Configuration
    'ConfigManager',
    'CameraProfile',
    'Config',
    'default_config',

    # Display management
    'DisplayManager',
    'DisplayInfo',
    'CaptureBounds',
]

__version__ = '1.0.0'
