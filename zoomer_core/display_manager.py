"""
Display Manager Module
Monitor enumeration and capture bounds across all displays
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from screeninfo import get_monitors
from screeninfo.common import ScreenInfoError

logger = logging.getLogger(__name__)


@dataclass
class DisplayInfo:
    """Information about a display/monitor."""

    # Display identifier (enumeration order)
    id: str = ""
    name: str = ""

    # Position (top-left corner in virtual screen coordinates)
    x: int = 0
    y: int = 0

    # Size in pixels
    width: int = 0
    height: int = 0

    # Is this the primary display?
    is_primary: bool = False

    def contains_point(self, x: int, y: int) -> bool:
        """Check if a point is within this display's bounds."""
        return (self.x <= x < self.x + self.width and
                self.y <= y < self.y + self.height)

    def to_local(self, x: int, y: int) -> Tuple[int, int]:
        """Convert global coordinates to display-local coordinates."""
        return (x - self.x, y - self.y)

    def __repr__(self):
        return (f"DisplayInfo(name='{self.name}', "
                f"pos=({self.x}, {self.y}), "
                f"size={self.width}x{self.height})")


@dataclass
class CaptureBounds:
    """Rectangle of the virtual screen that gets captured."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_local(self, x: int, y: int) -> Tuple[int, int]:
        """Convert global coordinates to capture-local coordinates."""
        return (x - self.x, y - self.y)


class DisplayManager:
    """
    Manages display detection.

    Displays are enumerated lazily with screeninfo and cached until
    ``refresh`` is called.
    """

    def __init__(self, monitor_source: Callable[[], Iterable] = get_monitors):
        """
        Initialize display manager.

        Args:
            monitor_source: Returns screeninfo-style monitors (x, y, width,
                height, name, is_primary)
        """
        self._monitor_source = monitor_source
        self._displays: List[DisplayInfo] = []
        self._cached = False

    def refresh(self):
        """Refresh display information."""
        self._displays = self._detect_displays()
        self._cached = True

    def _detect_displays(self) -> List[DisplayInfo]:
        """Detect all connected displays."""
        displays = []

        try:
            monitors = list(self._monitor_source())
        except ScreenInfoError as e:
            logger.error("Display enumeration failed: %s", e)
            return displays

        for i, mon in enumerate(monitors):
            displays.append(DisplayInfo(
                id=str(i),
                name=getattr(mon, 'name', None) or f"Display {i + 1}",
                x=mon.x,
                y=mon.y,
                width=mon.width,
                height=mon.height,
                is_primary=bool(getattr(mon, 'is_primary', False)) or (i == 0 and len(monitors) == 1)
            ))

        logger.debug("Detected displays: %s", displays)
        return displays

    @property
    def displays(self) -> List[DisplayInfo]:
        """Get list of all displays."""
        if not self._cached:
            self.refresh()
        return self._displays

    @property
    def primary_display(self) -> Optional[DisplayInfo]:
        """Get the primary display."""
        for display in self.displays:
            if display.is_primary:
                return display
        return self.displays[0] if self.displays else None

    def get_display_at_point(self, x: int, y: int) -> Optional[DisplayInfo]:
        """
        Get the display containing the given point.

        Args:
            x: X coordinate in virtual screen space
            y: Y coordinate in virtual screen space

        Returns:
            DisplayInfo for the display at that point, or None
        """
        for display in self.displays:
            if display.contains_point(x, y):
                return display
        return None

    def capture_bounds(self) -> CaptureBounds:
        """
        Get the rectangle that covers every display side by side.

        The origin is the smallest monitor origin, the width is the sum of
        all monitor widths and the height is the tallest monitor.

        Raises:
            RuntimeError: If no monitors were found
        """
        displays = self.displays
        if not displays:
            raise RuntimeError("no monitors found")

        return CaptureBounds(
            x=min(0, *(d.x for d in displays)),
            y=min(0, *(d.y for d in displays)),
            width=sum(d.width for d in displays),
            height=max(d.height for d in displays)
        )
