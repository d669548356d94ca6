"""
Zoom Controller Module
Maps window input events onto the camera and highlighter
"""

import logging
from enum import Enum, auto
from typing import Callable, Optional, Tuple

import numpy as np

from .camera import Camera
from .config_manager import CameraProfile
from .highlighter import Highlighter

logger = logging.getLogger(__name__)

WHEEL_DELTA = 120

KEY_TOGGLE_DEBUG = 'f2'
KEY_TOGGLE_HIGHLIGHTER = 'c'
KEY_HIDE = 'esc'


class MagnifierState(Enum):
    """Visibility of the magnifier window."""
    HIDDEN = auto()
    OPEN = auto()


class ZoomController:
    """
    Controls the magnifier camera from window events.

    Receives pixel coordinates in the client area, converts them to screen
    space and drives the camera and highlighter. Does not talk to any window
    or graphics API; the renderer reads ``view_matrix`` and the uniforms
    after ``update``.

    Input is global, so while the magnifier is hidden every event except
    ``on_hotkey`` is ignored.
    """

    def __init__(self, client_size: Tuple[int, int], screenshot_size: Tuple[int, int],
                 profile: Optional[CameraProfile] = None):
        """
        Initialize zoom controller.

        Args:
            client_size: Window client area (width, height) in pixels
            screenshot_size: Captured image (width, height) in pixels
            profile: Camera profile with settings
        """
        self._profile = profile or CameraProfile()
        self._client_size = self._check_size(client_size)
        self._screenshot_size = self._check_size(screenshot_size)

        self._camera = self._create_camera()
        self._highlighter = Highlighter(
            self._profile.highlighter_radius,
            self._profile.highlighter_interpolator()
        )

        self._state = MagnifierState.OPEN
        self._debug_window_is_open = False

        self._mouse_pos = np.zeros(2)
        self._last_mouse_screen_pos = np.zeros(2)

        # Callbacks
        self._on_state_changed: Optional[Callable[[MagnifierState], None]] = None
        self._on_capture_requested: Optional[Callable[[], Optional[Tuple[int, int]]]] = None

    @staticmethod
    def _check_size(size: Tuple[int, int]) -> Tuple[int, int]:
        width, height = size
        if width <= 0 or height <= 0:
            raise ValueError(f"Size must be positive, got {width}x{height}")
        return (int(width), int(height))

    def _create_camera(self) -> Camera:
        return Camera(
            self._profile.zoom_range,
            (1.0, self.aspect_ratio_ratio),
            interpolator_factory=self._profile.camera_interpolator_factory()
        )

    @property
    def state(self) -> MagnifierState:
        """Current magnifier state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == MagnifierState.OPEN

    @property
    def debug_window_is_open(self) -> bool:
        return self._debug_window_is_open

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def highlighter(self) -> Highlighter:
        return self._highlighter

    @property
    def profile(self) -> CameraProfile:
        """Current camera profile."""
        return self._profile

    @profile.setter
    def profile(self, value: CameraProfile):
        """Set camera profile, rebuilding camera and highlighter from it."""
        self._profile = value
        self._camera = self._create_camera()
        self._highlighter = Highlighter(value.highlighter_radius, value.highlighter_interpolator())

    @property
    def client_size(self) -> Tuple[int, int]:
        return self._client_size

    @property
    def screenshot_size(self) -> Tuple[int, int]:
        return self._screenshot_size

    @property
    def screenshot_aspect_ratio(self) -> float:
        width, height = self._screenshot_size
        return width / height

    @property
    def aspect_ratio_ratio(self) -> float:
        """Ratio of the client aspect ratio to the screenshot aspect ratio."""
        width, height = self._client_size
        return (width / height) / self.screenshot_aspect_ratio

    def set_callbacks(self,
                      on_state_changed: Optional[Callable[[MagnifierState], None]] = None,
                      on_capture_requested: Optional[Callable[[], Optional[Tuple[int, int]]]] = None):
        """
        Set callbacks for state changes.

        Args:
            on_state_changed: Called when the magnifier opens or hides
            on_capture_requested: Called to take a new screenshot, returns its
                (width, height) or None if the size is unchanged
        """
        self._on_state_changed = on_state_changed
        self._on_capture_requested = on_capture_requested

    def _set_state(self, new_state: MagnifierState):
        """Change state and notify callback."""
        if new_state != self._state:
            self._state = new_state
            logger.debug("Magnifier state: %s", new_state.name)
            if self._on_state_changed:
                self._on_state_changed(new_state)

    def _update_position_range(self):
        self._camera.position_range = (1.0, self.aspect_ratio_ratio)

    def on_resize(self, width: int, height: int):
        """Handle a client area resize."""
        self._client_size = self._check_size((width, height))
        self._update_position_range()

    def set_screenshot_size(self, width: int, height: int):
        """Set the size of a newly captured screenshot."""
        self._screenshot_size = self._check_size((width, height))
        self._update_position_range()

    def pixel_to_screen_space(self, x: float, y: float) -> np.ndarray:
        """
        Convert client pixel coordinates to screen space.

        Args:
            x: X in [0, client_width]
            y: Y in [0, client_height], growing downwards

        Returns:
            Point in NDC ([-1, 1] x [-1, 1]) with y growing upwards
        """
        width, height = self._client_size
        return np.array([
            x / width * 2.0 - 1.0,
            -1.0 * (y / height * 2.0 - 1.0),
        ])

    def pixel_to_uv_space(self, x: float, y: float) -> np.ndarray:
        """Convert client pixel coordinates to texture coordinates of the screenshot."""
        uv = self._camera.screen_to_world_space(self.pixel_to_screen_space(x, y))
        uv[1] *= -1.0 / self.aspect_ratio_ratio
        uv += 1.0
        uv /= 2.0
        return uv

    def on_left_mouse_down(self, x: int, y: int):
        """Start a drag at the given pixel."""
        if not self.is_open:
            return
        self._last_mouse_screen_pos = self.pixel_to_screen_space(x, y)

    def on_left_mouse_up(self):
        """End a drag, pulling the camera back into range."""
        if not self.is_open:
            return
        self._camera.clamp_me_daddy()

    def on_mouse_move(self, x: int, y: int, left_mouse_down: bool):
        """
        Track the mouse and pan while dragging.

        Args:
            x: X in client pixels
            y: Y in client pixels
            left_mouse_down: Whether the left button is held
        """
        if not self.is_open:
            return

        self._mouse_pos = np.array([float(x), float(y)])

        if not left_mouse_down:
            return

        mouse_screen_pos = self.pixel_to_screen_space(x, y)
        self._camera.translate(mouse_screen_pos - self._last_mouse_screen_pos)
        self._last_mouse_screen_pos = mouse_screen_pos

    def on_mouse_wheel(self, delta: int, x: int, y: int, ctrl_is_down: bool = False):
        """
        Zoom around the cursor, or resize the highlighter with ctrl held.

        Args:
            delta: Wheel delta, 120 per notch
            x: X in client pixels
            y: Y in client pixels
            ctrl_is_down: Whether ctrl is held
        """
        if not self.is_open:
            return

        step = delta / WHEEL_DELTA / self._profile.wheel_divisor

        if ctrl_is_down and self._highlighter.is_enabled():
            self._highlighter.set_radius(self._highlighter.radius * (1.0 + step * 2.0))
            return

        self._camera.zoom(1.0 + step, self.pixel_to_screen_space(x, y))

    def on_key_down(self, key: str):
        """
        Handle a key press.

        Args:
            key: Lowercase key name ('f2', 'c', 'esc', ...)
        """
        if not self.is_open:
            return

        if key == KEY_TOGGLE_DEBUG:
            self._debug_window_is_open = not self._debug_window_is_open

        if key == KEY_TOGGLE_HIGHLIGHTER:
            enabled = self._highlighter.toggle()
            logger.debug("Highlighter enabled: %s", enabled)

        if key == KEY_HIDE:
            self._set_state(MagnifierState.HIDDEN)

    def on_hotkey(self):
        """Open the magnifier over a fresh screenshot."""
        if self.is_open:
            return

        if self._on_capture_requested:
            size = self._on_capture_requested()
            if size is not None:
                self.set_screenshot_size(*size)

        self._camera.reset()
        self._set_state(MagnifierState.OPEN)

    def update(self, dt: float):
        """
        Advance camera and highlighter smoothing.

        Args:
            dt: Time delta since last frame (seconds)
        """
        self._camera.update(dt)
        self._highlighter.update(dt)

    def view_matrix(self) -> np.ndarray:
        """Camera transform with the screenshot aspect correction applied."""
        aspect = np.diag([1.0, self.aspect_ratio_ratio, 1.0, 1.0])
        return self._camera.to_homogenous() @ aspect

    def mouse_uv(self) -> np.ndarray:
        """Mouse position in texture coordinates."""
        return self.pixel_to_uv_space(*self._mouse_pos)

    def highlighter_radius_uv(self) -> np.ndarray:
        """Highlighter radius in texture coordinates (x, y)."""
        width, height = self._client_size
        radius = self._highlighter.radius
        return np.array([radius / width, radius / height / self.aspect_ratio_ratio])

    def get_debug_info(self) -> dict:
        """Get the readout shown by the debug overlay."""
        screen_space = self.pixel_to_screen_space(*self._mouse_pos)
        return {
            'state': self._state.name,
            'mouse_pixel': tuple(self._mouse_pos.tolist()),
            'mouse_screen': tuple(screen_space.tolist()),
            'mouse_world': tuple(self._camera.screen_to_world_space(screen_space).tolist()),
            'mouse_camera': tuple(self._camera.screen_to_camera_space(screen_space).tolist()),
            'mouse_uv': tuple(self.mouse_uv().tolist()),
            'camera_position': tuple(self._camera.position().tolist()),
            'zoom_factor': self._camera.zoom_factor,
            'highlighter_radius': self._highlighter.radius,
        }
