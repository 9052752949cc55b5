"""
Settings management for Apache Index Image Viewer.
Handles loading application settings from the config file.
"""

import json
import os
import traceback
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List, Optional

from constants import (
    CONFIG_FILE,
    IMAGE_EXTENSIONS,
    REQUEST_TIMEOUT,
    USER_AGENT,
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
)


@dataclass
class Settings:
    """Application settings with default values."""

    image_extensions: List[str] = field(default_factory=lambda: list(IMAGE_EXTENSIONS))
    request_timeout: float = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT
    start_url: str = ""  # Pre-filled into the URL field on startup
    subdirs_enabled: bool = False
    fullscreen: bool = False
    window_width: int = SCREEN_WIDTH
    window_height: int = SCREEN_HEIGHT
    prefetch_next: bool = True  # Download the next image while the current one shows
    background_fetch: bool = True  # Fetch listings off the main thread

    def __post_init__(self):
        """Normalize extensions to lowercase dotted suffixes."""
        normalized = []
        for ext in self.image_extensions:
            ext = str(ext).strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in normalized:
                normalized.append(ext)
        self.image_extensions = normalized

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create Settings from dictionary."""
        # Filter out unknown keys
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


def get_default_settings() -> Dict[str, Any]:
    """Get default settings as a dictionary."""
    return Settings().to_dict()


def load_settings(config_file: Optional[str] = None) -> Settings:
    """
    Load settings from config file.

    The file is optional and only ever read; missing keys fall back to
    defaults and unknown keys are ignored.

    Args:
        config_file: Path to the JSON config (default: CONFIG_FILE)

    Returns:
        Settings with defaults for missing values
    """
    path = config_file or CONFIG_FILE
    merged = get_default_settings()

    try:
        if os.path.exists(path):
            with open(path, "r") as f:
                loaded_settings = json.load(f)
            if isinstance(loaded_settings, dict):
                # Merge with defaults to handle new settings
                merged.update(loaded_settings)
            else:
                from utils.logging import log_error

                log_error(f"Ignoring config file {path}: expected a JSON object")
    except (OSError, ValueError) as e:
        from utils.logging import log_error

        log_error(
            "Failed to load settings, using defaults",
            type(e).__name__,
            traceback.format_exc(),
        )
        merged = get_default_settings()

    try:
        return Settings.from_dict(merged)
    except (TypeError, ValueError) as e:
        from utils.logging import log_error

        log_error(
            "Invalid settings values, using defaults",
            type(e).__name__,
            traceback.format_exc(),
        )
        return Settings()
