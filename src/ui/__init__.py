"""
UI components for Apache Index Image Viewer.
Follows Atomic Design methodology: atoms -> molecules -> screens.
"""

from .theme import Theme

__all__ = ["Theme"]
