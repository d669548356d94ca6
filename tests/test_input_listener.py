"""Input listener tests driving the pynput callbacks with stand-in events."""
from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pytest

from zoomer_core import MagnifierState, ZoomController
from zoomer_core.input_listener import InputListener, key_name

LEFT = SimpleNamespace(name="left")
RIGHT = SimpleNamespace(name="right")


def char_key(char: str):
    return SimpleNamespace(char=char)


def special_key(name: str):
    return SimpleNamespace(name=name)


def test_key_names() -> None:
    assert key_name(char_key("C")) == "c"
    assert key_name(special_key("f2")) == "f2"
    assert key_name(SimpleNamespace(char=None, name=None)) is None


def test_events_wait_for_dispatch(controller: ZoomController) -> None:
    listener = InputListener()

    listener._on_click(960, 540, LEFT, True)
    listener._on_move(1440, 540)

    assert listener.pending() == 2
    assert controller.camera.target_position.tolist() == [0.0, 0.0]

    assert listener.dispatch(controller) == 2
    np.testing.assert_allclose(controller.camera.target_position, [0.5, 0.0])
    assert listener.pending() == 0


def test_global_coordinates_are_made_client_relative() -> None:
    listener = InputListener(origin=(-1920, 0))

    listener._on_move(-960, 540)

    assert listener.position == (960, 540)


def test_release_clamps_after_drag(controller: ZoomController) -> None:
    listener = InputListener()

    listener._on_click(0, 540, LEFT, True)
    listener._on_move(1920, 540)
    listener._on_click(1920, 540, LEFT, False)
    listener.dispatch(controller)

    np.testing.assert_allclose(controller.camera.target_position, [1.0, 0.0])


def test_other_buttons_are_ignored() -> None:
    listener = InputListener()

    listener._on_click(0, 0, RIGHT, True)

    assert listener.pending() == 0


@pytest.mark.parametrize("steps, expected", [(1, 1.1), (-1, 0.9)])
def test_scroll_steps_become_wheel_deltas(controller: ZoomController, steps: int, expected: float) -> None:
    listener = InputListener()

    listener._on_scroll(960, 540, 0, steps)
    listener.dispatch(controller)

    assert controller.camera.target_zoom_factor == pytest.approx(expected)


def test_ctrl_state_reaches_wheel_events(controller: ZoomController) -> None:
    listener = InputListener()

    listener._on_press(char_key("c"))
    listener._on_press(special_key("ctrl_l"))
    listener._on_scroll(960, 540, 0, 1)
    listener._on_release(special_key("ctrl_l"))
    listener.dispatch(controller)

    assert controller.highlighter.is_enabled()
    assert controller.highlighter.target_radius == pytest.approx(60.0)
    assert controller.camera.target_zoom_factor == 1.0
    assert not listener.ctrl_is_down


def test_keys_are_forwarded_in_order(controller: ZoomController) -> None:
    listener = InputListener()

    listener._on_press(special_key("esc"))
    listener._on_hotkey()
    listener.dispatch(controller)

    assert controller.state == MagnifierState.OPEN


def test_typing_elsewhere_does_not_change_hidden_magnifier(controller: ZoomController) -> None:
    listener = InputListener()
    listener._on_press(special_key("esc"))
    listener.dispatch(controller)

    listener._on_press(char_key("c"))
    listener._on_press(special_key("f2"))
    listener._on_scroll(960, 540, 0, 3)
    listener._on_hotkey()
    listener.dispatch(controller)

    assert controller.is_open
    assert not controller.highlighter.is_enabled()
    assert not controller.debug_window_is_open
    assert controller.camera.target_zoom_factor == 1.0


def test_origin_can_follow_a_new_capture() -> None:
    listener = InputListener()

    listener.origin = (-1280, -200)
    listener._on_move(0, 0)

    assert listener.position == (1280, 200)


def test_stop_before_start_is_harmless() -> None:
    listener = InputListener()

    listener.stop()

    assert not listener.is_running()
