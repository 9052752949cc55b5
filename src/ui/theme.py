"""
Theme and design tokens for Apache Index Image Viewer.
Centralizes all visual constants for consistent styling.
"""

from dataclasses import dataclass
from typing import Tuple, Optional

# Type alias for colors
Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    """
    Design tokens for the viewer window.

    A dark palette so photos stand out against the chrome around them.
    """

    # ---- Base Colors ---- #
    background: Color = (24, 24, 28)
    surface: Color = (40, 40, 46)
    surface_raised: Color = (56, 56, 64)
    viewport: Color = (12, 12, 14)

    # ---- Accent ---- #
    primary: Color = (66, 133, 244)

    # ---- Text Colors ---- #
    text_primary: Color = (235, 235, 240)
    text_secondary: Color = (160, 160, 170)
    text_disabled: Color = (90, 90, 98)

    # ---- Status Colors ---- #
    warning: Color = (230, 180, 40)
    error: Color = (230, 70, 60)

    # ---- Effects ---- #
    shadow: Color = (8, 8, 10)

    # ---- Spacing ---- #
    padding_sm: int = 8
    padding_md: int = 16

    # ---- Typography ---- #
    font_size_sm: int = 20
    font_size_md: int = 26
    font_size_lg: int = 34
    font_path: Optional[str] = None  # pygame default font

    # ---- Border Radius ---- #
    radius_sm: int = 4
    radius_md: int = 6

    # ---- Component Sizes ---- #
    button_height: int = 36

    # ---- Animation Timing ---- #
    cursor_blink_rate: int = 500  # ms


# Default theme instance
default_theme = Theme()
