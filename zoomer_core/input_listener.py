"""
Input Listener Module
Global mouse and keyboard input using pynput, delivered on the frame thread
"""

import logging
import queue
import threading
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

WHEEL_DELTA = 120
CTRL_KEYS = ('ctrl', 'ctrl_l', 'ctrl_r')


def key_name(key: Any) -> Optional[str]:
    """
    Get a lowercase name for a pynput key.

    Character keys give their character, special keys their enum name
    ('f2', 'esc', ...).
    """
    char = getattr(key, 'char', None)
    if char:
        return char.lower()
    name = getattr(key, 'name', None)
    return name.lower() if name else None


class InputListener:
    """
    Collects global input events for a ZoomController.

    pynput calls back on its own threads, so events are only queued there.
    ``dispatch`` applies them on the frame thread, before that frame's
    update, in the order they arrived.
    """

    def __init__(self, origin: Tuple[int, int] = (0, 0), hotkey: Optional[str] = "<ctrl>+<alt>+z"):
        """
        Initialize input listener.

        Args:
            origin: Virtual screen position of the client area's top-left pixel
            hotkey: Global hotkey in pynput HotKey syntax, or None to disable
        """
        self._origin = origin
        self._hotkey_combo = hotkey
        self._events: "queue.Queue[Tuple[str, tuple]]" = queue.Queue()
        self._lock = threading.Lock()

        self._left_down = False
        self._ctrl_down = False
        self._position: Tuple[int, int] = (0, 0)

        self._mouse_listener = None
        self._keyboard_listener = None
        self._hotkey = None
        self._running = False

    @property
    def origin(self) -> Tuple[int, int]:
        return self._origin

    @origin.setter
    def origin(self, value: Tuple[int, int]):
        self._origin = value

    @property
    def position(self) -> Tuple[int, int]:
        """Last mouse position in client pixels."""
        with self._lock:
            return self._position

    @property
    def ctrl_is_down(self) -> bool:
        with self._lock:
            return self._ctrl_down

    def _to_client(self, x: int, y: int) -> Tuple[int, int]:
        return (int(x) - self._origin[0], int(y) - self._origin[1])

    def _post(self, name: str, *args):
        self._events.put((name, args))

    def _on_move(self, x: int, y: int, *args):
        """Callback when mouse moves."""
        client = self._to_client(x, y)
        with self._lock:
            self._position = client
            left_down = self._left_down
        self._post('on_mouse_move', client[0], client[1], left_down)

    def _on_click(self, x: int, y: int, button: Any, pressed: bool, *args):
        """Callback when a mouse button changes state."""
        if getattr(button, 'name', None) != 'left':
            return

        client = self._to_client(x, y)
        with self._lock:
            self._left_down = pressed

        if pressed:
            self._post('on_left_mouse_down', client[0], client[1])
        else:
            self._post('on_left_mouse_up')

    def _on_scroll(self, x: int, y: int, dx: int, dy: int, *args):
        """Callback when the wheel scrolls, one notch per step."""
        if not dy:
            return
        client = self._to_client(x, y)
        self._post('on_mouse_wheel', int(dy * WHEEL_DELTA), client[0], client[1], self.ctrl_is_down)

    def _on_press(self, key: Any, *args):
        """Callback when a key is pressed."""
        name = key_name(key)
        if name in CTRL_KEYS:
            with self._lock:
                self._ctrl_down = True
        elif name is not None:
            self._post('on_key_down', name)

        if self._hotkey is not None and self._keyboard_listener is not None:
            self._hotkey.press(self._keyboard_listener.canonical(key))

    def _on_release(self, key: Any, *args):
        """Callback when a key is released."""
        if key_name(key) in CTRL_KEYS:
            with self._lock:
                self._ctrl_down = False

        if self._hotkey is not None and self._keyboard_listener is not None:
            self._hotkey.release(self._keyboard_listener.canonical(key))

    def _on_hotkey(self):
        logger.debug("Hotkey %s pressed", self._hotkey_combo)
        self._post('on_hotkey')

    def pending(self) -> int:
        """Number of events waiting for dispatch."""
        return self._events.qsize()

    def dispatch(self, controller) -> int:
        """
        Apply all queued events to a controller.

        Args:
            controller: ZoomController receiving the events

        Returns:
            Number of events dispatched
        """
        count = 0
        while True:
            try:
                name, args = self._events.get_nowait()
            except queue.Empty:
                return count
            getattr(controller, name)(*args)
            count += 1

    def start(self):
        """Start listening to global input."""
        if self._running:
            return

        from pynput import keyboard, mouse

        if self._hotkey_combo:
            self._hotkey = keyboard.HotKey(keyboard.HotKey.parse(self._hotkey_combo), self._on_hotkey)

        self._mouse_listener = mouse.Listener(
            on_move=self._on_move,
            on_click=self._on_click,
            on_scroll=self._on_scroll
        )
        self._keyboard_listener = keyboard.Listener(
            on_press=self._on_press,
            on_release=self._on_release
        )
        self._mouse_listener.start()
        self._keyboard_listener.start()
        self._running = True
        logger.debug("Input listener started")

    def stop(self):
        """Stop listening to global input."""
        if not self._running:
            return

        self._running = False

        if self._mouse_listener:
            self._mouse_listener.stop()
            self._mouse_listener = None
        if self._keyboard_listener:
            self._keyboard_listener.stop()
            self._keyboard_listener = None
        self._hotkey = None

    def is_running(self) -> bool:
        """Check if listener is running."""
        return self._running
