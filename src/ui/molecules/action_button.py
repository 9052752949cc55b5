"""
Action button molecule - Labelled button used in every toolbar row.
"""

import pygame
from typing import Optional

from ui.theme import Theme, Color, default_theme
from ui.atoms.button import Button, lighten
from ui.atoms.text import Text


class ActionButton:
    """
    Button with a centered label.

    Lights up under the mouse pointer. Disabled buttons are drawn flat and
    greyed out.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.button = Button(theme)
        self.text = Text(theme)

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        label: str,
        color: Optional[Color] = None,
        disabled: bool = False,
    ) -> pygame.Rect:
        if disabled:
            self.button.render(screen, rect, self.theme.surface, raised=False)
            text_color = self.theme.text_disabled
        else:
            fill = color or self.theme.primary
            if rect.collidepoint(pygame.mouse.get_pos()):
                fill = lighten(fill, 0.15)
            self.button.render(screen, rect, fill)
            text_color = self.theme.text_primary

        self.text.render(
            screen,
            label,
            rect.center,
            anchor="center",
            color=text_color,
            size=self.theme.font_size_sm,
            max_width=rect.width - self.theme.padding_sm,
        )
        return rect
