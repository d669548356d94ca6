"""
Zoomer - screen magnifier driver
Runs the magnifier camera over a capture of every display.

Rendering the captured texture is left to the host renderer, which reads
``zoom_controller.view_matrix()`` and the highlighter uniforms each frame.

Version: 1.0.0
"""

import logging
import sys
import time

from zoomer_core import (
    ConfigManager,
    DisplayManager,
    MagnifierState,
    ZoomController,
)
from zoomer_core.input_listener import InputListener

# Version
VERSION = "1.0.0"

logger = logging.getLogger("zoomer")

# Global state
config_manager = None
display_manager = None
input_listener = None
zoom_controller = None

is_running = False


def log(msg):
    """Log a debug message."""
    logger.debug(msg)


def capture():
    """Refresh display bounds for a new capture, returning its size."""
    timer = time.perf_counter()
    display_manager.refresh()
    bounds = display_manager.capture_bounds()
    if input_listener:
        input_listener.origin = (bounds.x, bounds.y)
    log(f"Screenshot taken in {time.perf_counter() - timer:.4f} seconds")
    return bounds.size


def on_state_changed(state):
    """Callback when the magnifier opens or hides."""
    log(f"Magnifier {state.name.lower()}")


def load(config_path=None):
    """Set up configuration, displays, input and the zoom controller."""
    global config_manager, display_manager, input_listener, zoom_controller

    config_manager = ConfigManager(config_path=config_path, script_path=__file__)
    config = config_manager.load()

    logging.basicConfig(
        level=logging.DEBUG if config.debug_logging else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    )
    log("Loading Zoomer")

    display_manager = DisplayManager()
    bounds = display_manager.capture_bounds()

    profile = config_manager.current_profile
    zoom_controller = ZoomController(bounds.size, bounds.size, profile)
    zoom_controller.set_callbacks(
        on_state_changed=on_state_changed,
        on_capture_requested=capture
    )

    input_listener = InputListener(origin=(bounds.x, bounds.y), hotkey=config.hotkey)
    input_listener.start()

    log(f"Loaded profile '{profile.name}' for {bounds.width}x{bounds.height} capture")


def unload():
    """Stop input and save configuration."""
    global input_listener

    log("Unloading Zoomer")

    if input_listener:
        input_listener.stop()
        input_listener = None

    if config_manager:
        config_manager.save()


def run():
    """Frame loop: apply input, advance smoothing, then publish the frame."""
    global is_running

    frame_interval = 1.0 / max(config_manager.config.frame_rate, 1)
    last_debug = None
    dt_timer = time.perf_counter()
    is_running = True

    while is_running:
        input_listener.dispatch(zoom_controller)

        now = time.perf_counter()
        zoom_controller.update(now - dt_timer)
        dt_timer = now

        if zoom_controller.state == MagnifierState.OPEN and zoom_controller.debug_window_is_open:
            info = zoom_controller.get_debug_info()
            if info != last_debug:
                logger.info("Debug: %s", info)
                last_debug = info

        time.sleep(max(0.0, frame_interval - (time.perf_counter() - now)))


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    load(argv[0] if argv else None)
    try:
        run()
    except KeyboardInterrupt:
        pass
    finally:
        unload()
    return 0


if __name__ == "__main__":
    sys.exit(main())
