"""
Button atom - Rounded box drawn behind every clickable control.
"""

import pygame
from typing import Optional

from ui.theme import Theme, Color, default_theme


def lighten(color: Color, amount: float) -> Color:
    """Move a color `amount` (0..1) of the way towards white."""
    return tuple(min(255, int(c + (255 - c) * amount)) for c in color)


class Button:
    """Filled rounded rectangle with an optional drop shadow and outline."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        color: Optional[Color] = None,
        outline: Optional[Color] = None,
        raised: bool = True,
    ) -> pygame.Rect:
        radius = self.theme.radius_md
        if raised:
            pygame.draw.rect(
                screen, self.theme.shadow, rect.move(0, 2), border_radius=radius
            )
        fill = color or self.theme.primary
        pygame.draw.rect(screen, fill, rect, border_radius=radius)
        if outline:
            pygame.draw.rect(screen, outline, rect, width=2, border_radius=radius)
        return rect
