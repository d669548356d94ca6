"""Configuration tests covering profile persistence and fallbacks."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from zoomer_core import CameraProfile, Config, ConfigManager, ExponentialSmoothing, LinearInterpolation


def test_missing_file_writes_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    manager = ConfigManager(config_path=str(path))

    config = manager.load()

    assert path.exists()
    assert set(config.profiles) == {"standard", "smooth", "snappy"}
    assert config.get_profile().zoom_range == (0.25, 500.0)
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert "name" not in saved["profiles"]["standard"]


def test_config_sits_beside_the_script(tmp_path: Path) -> None:
    manager = ConfigManager(script_path=str(tmp_path / "zoomer.py"))

    assert manager.path == tmp_path / "config.json"


def test_load_reads_profiles(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "default_profile": "wide",
        "profiles": {"wide": {"zoom_min": 0.5, "zoom_max": 20.0, "interpolator": "linear"}},
        "debug_logging": True,
    }), encoding="utf-8")

    manager = ConfigManager(config_path=str(path))
    manager.load()
    profile = manager.current_profile

    assert profile.name == "wide"
    assert profile.zoom_range == (0.5, 20.0)
    assert profile.length_sec == 0.25
    assert manager.config.debug_logging is True
    assert isinstance(profile.camera_interpolator_factory()(), LinearInterpolation)


@pytest.mark.parametrize("content", ["{not json", "[]", '{"profiles": [1, 2]}', '{"profiles": {"a": 3}}'])
def test_unreadable_file_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture,
                                                content: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        config = ConfigManager(config_path=str(path)).load()

    assert set(config.profiles) == {"standard", "smooth", "snappy"}
    assert "Error loading config" in caplog.text


def test_invalid_profiles_are_dropped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "default_profile": "bouncy",
        "profiles": {
            "bouncy": {"interpolator": "bouncy"},
            "inverted": {"zoom_min": 10.0, "zoom_max": 1.0},
            "frozen": {"length_sec": 0.0},
            "ok": {"zoom_max": 8.0},
        },
    }), encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        config = ConfigManager(config_path=str(path)).load()

    assert list(config.profiles) == ["ok"]
    assert config.default_profile == "ok"
    assert config.get_profile().zoom_max == 8.0
    assert "Ignoring profile 'bouncy'" in caplog.text


def test_no_valid_profile_restores_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"profiles": {"broken": {"wheel_divisor": 0}}}), encoding="utf-8")

    config = ConfigManager(config_path=str(path)).load()

    assert set(config.profiles) == {"standard", "smooth", "snappy"}
    assert config.default_profile == "standard"


def test_unknown_profile_falls_back_to_default() -> None:
    config = Config()

    assert config.get_profile("missing").name == "standard"


def test_save_then_load_keeps_changes(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    manager = ConfigManager(config_path=str(path))
    manager.load()
    manager.config.hotkey = "<ctrl>+<shift>+m"
    manager.config.get_profile("smooth").exp_rate = 3.0

    assert manager.save()
    reloaded = ConfigManager(config_path=str(path)).load()

    assert reloaded.hotkey == "<ctrl>+<shift>+m"
    assert reloaded.get_profile("smooth").exp_rate == 3.0


def test_save_before_load_does_nothing(tmp_path: Path) -> None:
    path = tmp_path / "config.json"

    assert not ConfigManager(config_path=str(path)).save()
    assert not path.exists()


def test_profile_builds_fresh_interpolators() -> None:
    profile = CameraProfile(length_sec=0.4, exp_rate=2.0)
    factory = profile.camera_interpolator_factory()

    first, second = factory(), factory()

    assert first is not second
    assert isinstance(first, ExponentialSmoothing)
    assert (first.length_sec, first.exp_rate) == (0.4, 2.0)
    assert isinstance(profile.highlighter_interpolator(), ExponentialSmoothing)


def test_unknown_interpolator_name_fails_early() -> None:
    with pytest.raises(KeyError):
        CameraProfile(interpolator="bouncy").camera_interpolator_factory()


@pytest.mark.parametrize("settings", [
    {"zoom_min": 0.0},
    {"zoom_min": 4.0, "zoom_max": 2.0},
    {"wheel_divisor": -1.0},
    {"highlighter_radius": 0.0},
    {"highlighter_exp_rate": 0.0},
])
def test_validate_rejects_unusable_settings(settings: dict) -> None:
    with pytest.raises(ValueError):
        CameraProfile(**settings).validate()
