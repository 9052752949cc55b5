"""
Configuration management for Apache Index Image Viewer.
"""

from .settings import (
    load_settings,
    get_default_settings,
    Settings,
)

__all__ = [
    'load_settings',
    'get_default_settings',
    'Settings',
]
