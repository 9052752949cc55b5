"""
Viewer screen - URL bar, navigation controls and the image viewport.
"""

import pygame
from typing import Any, Callable, Dict, Tuple

from constants import APP_TITLE, IMAGE_LOAD_FAILED_MESSAGE
from state import AppState, GalleryView
from services.image_cache import LOADING
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.spinner import Spinner
from ui.molecules.action_button import ActionButton
from ui.molecules.text_field import TextField


class ViewerScreen:
    """
    The single screen of the viewer.

    Draws whatever the gallery view says and returns the rects of every
    clickable element. Disabled buttons are drawn but not returned, so
    clicks on them are ignored.
    """

    BUTTON_WIDTH = 110
    GO_WIDTH = 60
    TOGGLE_WIDTH = 170
    SEEK_WIDTH = 220

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.spinner = Spinner(theme)
        self.action_button = ActionButton(theme)
        self.text_field = TextField(theme)

    def render(
        self,
        screen: pygame.Surface,
        state: AppState,
        view: GalleryView,
        loading: bool,
        message: str,
        has_error: bool,
        empty: bool,
        get_image: Callable[[str, Tuple[int, int]], Any],
    ) -> Dict[str, pygame.Rect]:
        """
        Render the viewer.

        Args:
            screen: Surface to render to
            state: UI state (inputs, focus)
            view: Derived gallery view
            loading: A listing fetch is outstanding
            message: Status text from the controller
            has_error: The last fetch failed
            empty: The gallery loaded but holds no images
            get_image: Returns a surface (or LOADING/FAILED) for a URL
                scaled to fit a box

        Returns:
            Dictionary of clickable rects keyed by control name
        """
        screen.fill(self.theme.background)
        rects: Dict[str, pygame.Rect] = {}
        width, height = screen.get_size()
        pad = self.theme.padding_md
        row_h = self.theme.button_height

        self.text.render(screen, APP_TITLE, (pad, pad), size=self.theme.font_size_lg)
        y = pad + self.theme.font_size_lg + self.theme.padding_sm

        y = self._render_url_row(screen, state, rects, y, width)

        show_gallery = view.has_image and not has_error and not loading
        if view.subdirs_enabled and not has_error:
            y = self._render_subdir_row(screen, state, view, rects, y, width, loading)

        bottom_y = height - pad - row_h
        viewport = pygame.Rect(pad, y, width - pad * 2, bottom_y - y - pad)

        if loading:
            self.spinner.render(screen, viewport.center, size=48)
        elif has_error:
            self._render_banner(screen, viewport, message, self.theme.error)
        elif empty:
            self._render_banner(screen, viewport, message, self.theme.warning)
        elif view.has_image:
            self._render_viewport(screen, viewport, view, get_image)

        if show_gallery:
            self._render_image_row(screen, state, view, rects, bottom_y, width)

        return rects

    def _render_url_row(self, screen, state, rects, y, width) -> int:
        pad = self.theme.padding_md
        gap = self.theme.padding_sm
        row_h = self.theme.button_height

        load_rect = pygame.Rect(width - pad - self.GO_WIDTH, y, self.GO_WIDTH, row_h)
        toggle_rect = pygame.Rect(
            load_rect.left - gap - self.TOGGLE_WIDTH, y, self.TOGGLE_WIDTH, row_h
        )
        field_rect = pygame.Rect(pad, y, toggle_rect.left - gap - pad, row_h)

        rects["url"] = self.text_field.render(
            screen,
            field_rect,
            state.url_input.text,
            "http://example.com/images/",
            focused=state.focus == "url",
        )
        if state.subdirs_enabled:
            toggle_label, toggle_color = "Subfolders: On", self.theme.primary
        else:
            toggle_label, toggle_color = "Subfolders: Off", self.theme.surface_raised
        rects["subdir_toggle"] = self.action_button.render(
            screen,
            toggle_rect,
            toggle_label,
            color=toggle_color,
        )
        rects["load"] = self.action_button.render(screen, load_rect, "Load")
        return y + row_h + pad

    def _render_subdir_row(self, screen, state, view, rects, y, width, loading) -> int:
        label = view.displayed_subdir_name or "(no subfolders)"
        if view.subdir_position:
            label = f"{label}  ({view.subdir_position})"
        self._render_nav_row(
            screen,
            state,
            rects,
            y,
            width,
            label=label,
            prefix="subdir",
            has_prev=view.has_prev_subdir and not loading,
            has_next=view.has_next_subdir and not loading,
            placeholder="Folder name",
        )
        return y + self.theme.button_height + self.theme.padding_md

    def _render_image_row(self, screen, state, view, rects, y, width) -> None:
        label = view.displayed_filename or ""
        if view.image_position:
            label = f"{label}  ({view.image_position})"
        self._render_nav_row(
            screen,
            state,
            rects,
            y,
            width,
            label=label,
            prefix="image",
            has_prev=view.has_prev_image,
            has_next=view.has_next_image,
            placeholder="File name",
        )

    def _render_nav_row(
        self,
        screen,
        state,
        rects,
        y,
        width,
        label,
        prefix,
        has_prev,
        has_next,
        placeholder,
    ) -> None:
        """Prev / label / Next on the left, seek field and Go on the right."""
        pad = self.theme.padding_md
        gap = self.theme.padding_sm
        row_h = self.theme.button_height

        prev_rect = pygame.Rect(pad, y, self.BUTTON_WIDTH, row_h)
        go_rect = pygame.Rect(width - pad - self.GO_WIDTH, y, self.GO_WIDTH, row_h)
        seek_rect = pygame.Rect(
            go_rect.left - gap - self.SEEK_WIDTH, y, self.SEEK_WIDTH, row_h
        )
        next_rect = pygame.Rect(
            seek_rect.left - pad - self.BUTTON_WIDTH, y, self.BUTTON_WIDTH, row_h
        )

        self.action_button.render(screen, prev_rect, "< Prev", disabled=not has_prev)
        self.action_button.render(screen, next_rect, "Next >", disabled=not has_next)
        if has_prev:
            rects[f"prev_{prefix}"] = prev_rect
        if has_next:
            rects[f"next_{prefix}"] = next_rect

        label_left = prev_rect.right + gap
        label_width = next_rect.left - gap - label_left
        self.text.render(
            screen,
            label,
            (label_left + label_width // 2, y + row_h // 2),
            anchor="center",
            color=self.theme.text_secondary,
            size=self.theme.font_size_sm,
            max_width=label_width,
        )

        field_name = f"{prefix}_seek"
        field = state.field_for(field_name)
        rects[field_name] = self.text_field.render(
            screen,
            seek_rect,
            field.text,
            placeholder,
            focused=state.focus == field_name,
            invalid=field.not_found,
        )
        rects[f"{prefix}_go"] = self.action_button.render(screen, go_rect, "Go")

    def _render_viewport(self, screen, viewport, view, get_image) -> None:
        pygame.draw.rect(
            screen, self.theme.viewport, viewport, border_radius=self.theme.radius_sm
        )
        image = get_image(view.displayed_url, viewport.size)

        if isinstance(image, pygame.Surface):
            screen.blit(image, image.get_rect(center=viewport.center))
        elif image == LOADING:
            self.spinner.render(screen, viewport.center, size=40)
        else:
            self._render_banner(
                screen, viewport, IMAGE_LOAD_FAILED_MESSAGE, self.theme.text_secondary
            )

    def _render_banner(self, screen, viewport, message, color) -> None:
        self.text.render(
            screen,
            message,
            viewport.center,
            anchor="center",
            color=color,
            size=self.theme.font_size_md,
            max_width=viewport.width - self.theme.padding_md * 2,
        )
