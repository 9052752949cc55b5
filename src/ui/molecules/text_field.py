"""
Text field molecule - Single-line input box with placeholder and cursor.
"""

import pygame

from ui.theme import Theme, default_theme
from ui.atoms.text import Text


class TextField:
    """Single-line text input as drawn in the viewer's toolbar rows."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)

    def render(
        self,
        screen: pygame.Surface,
        rect: pygame.Rect,
        value: str,
        placeholder: str,
        focused: bool = False,
        invalid: bool = False,
    ) -> pygame.Rect:
        """
        Render the field.

        Args:
            screen: Surface to render to
            rect: Field rectangle
            value: Current input text
            placeholder: Text shown while the field is empty
            focused: Draw focus border and blinking cursor
            invalid: Tint the border to flag a failed lookup

        Returns:
            Field rect
        """
        padding = self.theme.padding_sm
        size = self.theme.font_size_sm

        pygame.draw.rect(
            screen, self.theme.surface_raised, rect, border_radius=self.theme.radius_sm
        )

        if invalid:
            border_color = self.theme.error
        elif focused:
            border_color = self.theme.primary
        else:
            border_color = None
        if border_color:
            pygame.draw.rect(
                screen, border_color, rect, width=2, border_radius=self.theme.radius_sm
            )

        display_text = value if value else placeholder
        text_color = self.theme.text_primary if value else self.theme.text_disabled
        self.text.render(
            screen,
            display_text,
            (rect.left + padding, rect.centery),
            anchor="midleft",
            color=text_color,
            size=size,
            max_width=rect.width - padding * 2,
        )

        # Draw blinking cursor
        blink_on = (pygame.time.get_ticks() // self.theme.cursor_blink_rate) % 2 == 0
        if focused and blink_on:
            cursor_x = rect.left + padding
            if value:
                cursor_x += min(
                    self.text.measure(value, size)[0] + 2, rect.width - padding * 2
                )
            pygame.draw.line(
                screen,
                self.theme.primary,
                (cursor_x, rect.top + 8),
                (cursor_x, rect.bottom - 8),
                2,
            )

        return rect
