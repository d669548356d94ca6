"""
Config Manager Module
JSON-based configuration with profile support
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Callable, Dict, Optional, Any
from pathlib import Path

from .interpolators import Interpolator, interpolator_factory

logger = logging.getLogger(__name__)


@dataclass
class CameraProfile:
    """Configuration profile for camera and highlighter behavior."""

    name: str = "default"
    zoom_min: float = 0.25
    zoom_max: float = 500.0
    interpolator: str = "exponential"
    length_sec: float = 0.25
    exp_rate: float = 1.5
    wheel_divisor: float = 10.0
    highlighter_radius: float = 50.0
    highlighter_length_sec: float = 0.25
    highlighter_exp_rate: float = 1.5

    @property
    def zoom_range(self):
        return (self.zoom_min, self.zoom_max)

    def camera_interpolator_factory(self) -> Callable[[], Interpolator]:
        """Factory for the camera's position and zoom interpolators."""
        return interpolator_factory(self.interpolator, self.length_sec, self.exp_rate)

    def highlighter_interpolator(self) -> Interpolator:
        """Interpolator for the highlighter radius."""
        return interpolator_factory(
            'exponential', self.highlighter_length_sec, self.highlighter_exp_rate
        )()

    def validate(self):
        """
        Check that the profile can build a camera and highlighter.

        Raises:
            ValueError: For an empty zoom range or a non-positive setting
            KeyError: For an unknown interpolator name
        """
        if not 0 < self.zoom_min <= self.zoom_max:
            raise ValueError(f"zoom range must be positive and non-empty, got {self.zoom_range}")
        if self.wheel_divisor <= 0:
            raise ValueError(f"wheel_divisor must be positive, got {self.wheel_divisor}")
        if self.highlighter_radius <= 0:
            raise ValueError(f"highlighter_radius must be positive, got {self.highlighter_radius}")
        self.camera_interpolator_factory()
        self.highlighter_interpolator()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "default") -> 'CameraProfile':
        """Create from dictionary."""
        return cls(
            name=name,
            zoom_min=data.get('zoom_min', 0.25),
            zoom_max=data.get('zoom_max', 500.0),
            interpolator=data.get('interpolator', 'exponential'),
            length_sec=data.get('length_sec', 0.25),
            exp_rate=data.get('exp_rate', 1.5),
            wheel_divisor=data.get('wheel_divisor', 10.0),
            highlighter_radius=data.get('highlighter_radius', 50.0),
            highlighter_length_sec=data.get('highlighter_length_sec', 0.25),
            highlighter_exp_rate=data.get('highlighter_exp_rate', 1.5)
        )


@dataclass
class Config:
    """Main configuration object."""

    version: str = "1.0.0"
    default_profile: str = "standard"
    profiles: Dict[str, CameraProfile] = field(default_factory=dict)
    hotkey: str = "<ctrl>+<alt>+z"
    frame_rate: int = 60
    debug_logging: bool = False

    def __post_init__(self):
        # Ensure at least a default profile exists
        if not self.profiles:
            self.profiles['standard'] = CameraProfile(name='standard')

    def get_profile(self, name: Optional[str] = None) -> CameraProfile:
        """Get a profile by name, or the default profile."""
        if name is None:
            name = self.default_profile

        if name in self.profiles:
            return self.profiles[name]

        # Return default if requested profile doesn't exist
        if self.default_profile in self.profiles:
            return self.profiles[self.default_profile]

        # Return first available profile
        return list(self.profiles.values())[0]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        profiles_dict = {}
        for name, profile in self.profiles.items():
            profile_data = profile.to_dict()
            del profile_data['name']  # Name is the key
            profiles_dict[name] = profile_data

        return {
            'version': self.version,
            'default_profile': self.default_profile,
            'profiles': profiles_dict,
            'hotkey': self.hotkey,
            'frame_rate': self.frame_rate,
            'debug_logging': self.debug_logging
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        profiles = {}
        for name, profile_data in data.get('profiles', {}).items():
            profiles[name] = CameraProfile.from_dict(profile_data, name)

        return cls(
            version=data.get('version', '1.0.0'),
            default_profile=data.get('default_profile', 'standard'),
            profiles=profiles,
            hotkey=data.get('hotkey', '<ctrl>+<alt>+z'),
            frame_rate=data.get('frame_rate', 60),
            debug_logging=data.get('debug_logging', False)
        )


def default_config() -> Config:
    """Configuration written on first run."""
    return Config(
        profiles={
            'standard': CameraProfile(name='standard'),
            'smooth': CameraProfile(
                name='smooth',
                length_sec=0.6,
                exp_rate=2.0,
                wheel_divisor=15.0,
                highlighter_length_sec=0.5
            ),
            'snappy': CameraProfile(
                name='snappy',
                length_sec=0.1,
                exp_rate=2.5,
                wheel_divisor=6.0,
                highlighter_length_sec=0.1
            )
        }
    )


class ConfigManager:
    """
    Loads and saves the magnifier configuration.

    The file is ``config.json`` beside the entry script unless a path is
    given. A file that cannot be read or has the wrong shape is replaced by
    the defaults in memory. Profiles that would not build a camera are
    dropped with a warning, so one bad entry never stops the magnifier.
    """

    DEFAULT_FILENAME = "config.json"

    def __init__(self, config_path: Optional[str] = None, script_path: Optional[str] = None):
        """
        Initialize config manager.

        Args:
            config_path: Explicit path to config file
            script_path: Path to the script (for locating default config)
        """
        if config_path:
            self._path = Path(config_path)
        elif script_path:
            self._path = Path(script_path).parent / self.DEFAULT_FILENAME
        else:
            self._path = Path.cwd() / self.DEFAULT_FILENAME
        self._config: Optional[Config] = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Config:
        """
        Load configuration from file.

        Returns:
            Config object (creates and saves the defaults if the file doesn't exist)
        """
        if not self._path.exists():
            logger.info("No config at %s, writing defaults", self._path)
            self._config = default_config()
            self.save()
            return self._config

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                config = Config.from_dict(json.load(f))
        except (OSError, AttributeError, TypeError, ValueError) as e:
            logger.error("Error loading config from %s: %s", self._path, e)
            config = default_config()

        self._config = self._drop_invalid_profiles(config)
        return self._config

    def _drop_invalid_profiles(self, config: Config) -> Config:
        for name, profile in list(config.profiles.items()):
            try:
                profile.validate()
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring profile '%s': %s", name, e)
                del config.profiles[name]

        if not config.profiles:
            config.profiles = default_config().profiles
        if config.default_profile not in config.profiles:
            fallback = next(iter(config.profiles))
            logger.warning("Default profile '%s' not found, using '%s'", config.default_profile, fallback)
            config.default_profile = fallback
        return config

    def save(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if saved successfully
        """
        if self._config is None:
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(self._config.to_dict(), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving config to %s: %s", self._path, e)
            return False

    @property
    def config(self) -> Config:
        """Get current configuration (loads if not already loaded)."""
        if self._config is None:
            self.load()
        return self._config

    @property
    def current_profile(self) -> CameraProfile:
        """Get the active camera profile."""
        return self.config.get_profile()
