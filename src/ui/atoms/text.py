"""
Text atom - Font cache and single-line text drawing.
"""

import pygame
from typing import Dict, Optional, Tuple

from ui.theme import Theme, Color, default_theme

ELLIPSIS = "..."


class Text:
    """Draws one line of text, shortening it to fit when asked."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self._fonts: Dict[int, pygame.font.Font] = {}

    def font(self, size: Optional[int] = None) -> pygame.font.Font:
        size = size or self.theme.font_size_md
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(self.theme.font_path, size)
        return self._fonts[size]

    def measure(self, text: str, size: Optional[int] = None) -> Tuple[int, int]:
        return self.font(size).size(text or " ")

    def fit(self, text: str, size: Optional[int], max_width: int) -> str:
        """
        Shorten text to at most max_width pixels by cutting out its middle.

        Both ends survive, so a long file name keeps its extension.
        """
        font = self.font(size)
        if font.size(text)[0] <= max_width:
            return text

        half = len(text) // 2
        head, tail = text[:half], text[half:]
        while head or tail:
            if len(head) >= len(tail):
                head = head[:-1]
            else:
                tail = tail[1:]
            candidate = head + ELLIPSIS + tail
            if font.size(candidate)[0] <= max_width:
                return candidate
        return ""

    def render(
        self,
        screen: pygame.Surface,
        text: str,
        position: Tuple[int, int],
        anchor: str = "topleft",
        color: Optional[Color] = None,
        size: Optional[int] = None,
        max_width: Optional[int] = None,
    ) -> pygame.Rect:
        """
        Draw text with one of its rect points pinned to `position`.

        Args:
            screen: Surface to render to
            text: Text to draw
            position: Where the anchor point goes
            anchor: pygame.Rect attribute name, e.g. "center" or "midleft"
            color: Text color (default: text_primary)
            size: Font size (default: font_size_md)
            max_width: Shorten the text to this many pixels

        Returns:
            Rect of the drawn text
        """
        if max_width:
            text = self.fit(text, size, max_width)
        surface = self.font(size).render(
            text, True, color or self.theme.text_primary
        )
        rect = surface.get_rect(**{anchor: position})
        screen.blit(surface, rect)
        return rect
