"""
Runtime Configuration Module

Manages session settings that the host application may adjust at runtime.
Loads default values from config.py and allows runtime modifications.
"""
from dataclasses import dataclass, asdict
from typing import Optional

# Import defaults from config.py
from config import (
    DEFAULT_FPS,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_BACKGROUND_COLOR,
    PLAYBACK_TICK_INTERVAL_MS,
    DEFAULT_SORT_OPTION,
)


@dataclass
class RuntimeConfig:
    """
    Runtime configuration for an editor session.

    New projects take their settings from here at creation time;
    existing projects keep whatever settings they were saved with.
    """
    # New project settings
    fps: int = DEFAULT_FPS
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    background_color: str = DEFAULT_BACKGROUND_COLOR

    # Playback
    playback_tick_interval_ms: int = PLAYBACK_TICK_INTERVAL_MS

    # Project list
    default_sort_option: str = DEFAULT_SORT_OPTION

    def to_dict(self) -> dict:
        """Convert to dictionary for persisting preferences."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RuntimeConfig":
        """Create from dictionary."""
        # Filter only known fields to avoid errors with old/new config versions
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered_data)

    def reset_to_defaults(self):
        """Reset all settings to default values from config.py."""
        self.fps = DEFAULT_FPS
        self.canvas_width = DEFAULT_CANVAS_WIDTH
        self.canvas_height = DEFAULT_CANVAS_HEIGHT
        self.background_color = DEFAULT_BACKGROUND_COLOR
        self.playback_tick_interval_ms = PLAYBACK_TICK_INTERVAL_MS
        self.default_sort_option = DEFAULT_SORT_OPTION


# Global singleton instance
_runtime_config: Optional[RuntimeConfig] = None


def get_config() -> RuntimeConfig:
    """Get the global runtime configuration instance."""
    global _runtime_config
    if _runtime_config is None:
        _runtime_config = RuntimeConfig()
    return _runtime_config


def set_config(config: RuntimeConfig):
    """Set the global runtime configuration instance."""
    global _runtime_config
    _runtime_config = config
