"""
Spinner atom - Ring of dots shown while something is loading.
"""

import math
import time
import pygame
from typing import Optional, Tuple

from ui.theme import Theme, Color, default_theme


def _blend(color: Color, other: Color, amount: float) -> Color:
    return tuple(int(a + (b - a) * amount) for a, b in zip(color, other))


class Spinner:
    """Dots around a circle; the bright one moves clockwise over time."""

    DOTS = 8
    TURNS_PER_SECOND = 1.0

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme

    def render(
        self,
        screen: pygame.Surface,
        center: Tuple[int, int],
        size: int = 40,
        color: Optional[Color] = None,
    ) -> None:
        color = color or self.theme.primary
        radius = size // 2
        dot_radius = max(2, size // 10)
        lead = int(time.time() * self.TURNS_PER_SECOND * self.DOTS) % self.DOTS

        for i in range(self.DOTS):
            angle = 2 * math.pi * i / self.DOTS - math.pi / 2
            position = (
                round(center[0] + radius * math.cos(angle)),
                round(center[1] + radius * math.sin(angle)),
            )
            # Dots trailing the lead fade into the background
            fade = ((lead - i) % self.DOTS) / self.DOTS
            pygame.draw.circle(
                screen, _blend(color, self.theme.background, fade), position, dot_radius
            )
