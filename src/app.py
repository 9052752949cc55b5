"""
Apache Index Image Viewer Application - Main orchestrator.

This module provides the main application class that coordinates
all components: settings, gallery controller, image cache, input and UI.
"""

import traceback
from typing import Any, Optional, Tuple

import pygame

from constants import APP_TITLE, FPS
from state import AppState
from config.settings import Settings, load_settings
from services.gallery_controller import GalleryController, Outcome, build_controller
from services.image_cache import ImageCache
from services.transport import fetch_bytes
from ui.theme import Theme
from ui.screens.viewer_screen import ViewerScreen
from utils.logging import log_error, init_log_file


class ImageViewerApp:
    """
    Main application class for Apache Index Image Viewer.

    Orchestrates all components and runs the main loop.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the application."""
        init_log_file()

        self.settings = settings or load_settings()

        pygame.init()
        pygame.display.set_caption(APP_TITLE)
        if self.settings.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(
                (self.settings.window_width, self.settings.window_height),
                pygame.RESIZABLE,
            )
        self.clock = pygame.time.Clock()
        pygame.key.set_repeat(400, 80)

        self.theme = Theme()
        self.viewer = ViewerScreen(self.theme)

        self.state = AppState()
        self.state.url_input.text = self.settings.start_url
        self.state.subdirs_enabled = self.settings.subdirs_enabled

        self.controller: GalleryController = build_controller(self.settings)
        self.image_cache = ImageCache(fetch=self._fetch_image)

    def _fetch_image(self, url: str) -> bytes:
        return fetch_bytes(
            url,
            timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent,
        )

    def _get_image(self, url: str, box: Tuple[int, int]) -> Any:
        image = self.image_cache.get_scaled(url, box)
        if self.settings.prefetch_next and self.controller.state is not None:
            self.image_cache.prefetch(self.controller.state.next_image_url)
        return image

    def run(self):
        """Run the main application loop."""
        running = True

        if self.state.url_input.text:
            self._submit()

        while running:
            self.clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_event(event)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            # Apply listings and images loaded by background threads
            self._on_outcome(self.controller.update())
            self.image_cache.update()

            self.state.ui_rects = self.viewer.render(
                self.screen,
                self.state,
                self.controller.view(),
                loading=self.controller.loading,
                message=self.controller.message,
                has_error=self.controller.has_error,
                empty=self.controller.is_empty,
                get_image=self._get_image,
            )
            pygame.display.flip()

        pygame.quit()

    # ---- Actions ---- #

    def _submit(self):
        """Load the gallery typed into the URL field."""
        url = self.state.url_input.text.strip()
        if not url:
            return
        self.state.image_seek.not_found = False
        self.state.subdir_seek.not_found = False
        # Images of the previous gallery will not be shown again
        self.image_cache.clear()
        self._on_outcome(self.controller.submit(url, self.state.subdirs_enabled))

    def _toggle_subdirs(self):
        """Flip subdirectory mode; a loaded gallery is reloaded in the new mode."""
        self.state.subdirs_enabled = not self.state.subdirs_enabled
        if not self.state.subdirs_enabled and self.state.focus == "subdir_seek":
            self.state.focus = None
        if self.controller.state is not None:
            self._on_outcome(
                self.controller.set_subdirs_enabled(self.state.subdirs_enabled)
            )

    def _seek(self, field_name: str):
        field = self.state.field_for(field_name)
        if not field.text:
            return
        if field_name == "image_seek":
            outcome = self.controller.request_seek_image(field.text)
        else:
            outcome = self.controller.request_seek_subdir(field.text)
        field.not_found = outcome is Outcome.NOT_FOUND
        self._on_outcome(outcome)

    def _on_outcome(self, outcome: Optional[Outcome]):
        """Keep the UI in step with what the controller reports."""
        if outcome is None:
            return
        if outcome in (Outcome.FETCH_ERROR, Outcome.EMPTY_NO_IMAGES):
            print(self.controller.message)
        if self.controller.state is None and self.state.focus in (
            "image_seek",
            "subdir_seek",
        ):
            self.state.focus = "url"

    # ---- Input ---- #

    def _available_fields(self):
        fields = ["url"]
        view = self.controller.view()
        if view.subdirs_enabled and not self.controller.has_error:
            fields.append("subdir_seek")
        if view.has_image and not self.controller.has_error:
            fields.append("image_seek")
        return fields

    def _handle_key_event(self, event: pygame.event.Event):
        """Handle keyboard events."""
        if event.key == pygame.K_TAB:
            self.state.cycle_focus(self._available_fields())
            return

        if self.state.focus is not None:
            field = self.state.field_for(self.state.focus)
            if event.key == pygame.K_ESCAPE:
                self.state.focus = None
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if self.state.focus == "url":
                    self._submit()
                else:
                    self._seek(self.state.focus)
            elif event.key == pygame.K_BACKSPACE:
                field.backspace()
            elif event.unicode and event.unicode.isprintable():
                field.type_char(event.unicode)
            return

        if event.key == pygame.K_RIGHT:
            self._on_outcome(self.controller.request_next_image())
        elif event.key == pygame.K_LEFT:
            self._on_outcome(self.controller.request_prev_image())
        elif event.key in (pygame.K_DOWN, pygame.K_PAGEDOWN):
            self._on_outcome(self.controller.request_next_subdir())
        elif event.key in (pygame.K_UP, pygame.K_PAGEUP):
            self._on_outcome(self.controller.request_prev_subdir())
        elif event.key == pygame.K_s:
            self._toggle_subdirs()
        elif event.key == pygame.K_RETURN:
            self.state.focus = "url"

    def _handle_click(self, pos: tuple):
        """Handle a left click on one of the rendered controls."""
        clicked = None
        for name, rect in self.state.ui_rects.items():
            if rect.collidepoint(pos):
                clicked = name
                break

        if clicked in ("url", "image_seek", "subdir_seek"):
            self.state.focus = clicked
            return

        self.state.focus = None
        if clicked == "load":
            self._submit()
        elif clicked == "subdir_toggle":
            self._toggle_subdirs()
        elif clicked == "prev_image":
            self._on_outcome(self.controller.request_prev_image())
        elif clicked == "next_image":
            self._on_outcome(self.controller.request_next_image())
        elif clicked == "prev_subdir":
            self._on_outcome(self.controller.request_prev_subdir())
        elif clicked == "next_subdir":
            self._on_outcome(self.controller.request_next_subdir())
        elif clicked == "image_go":
            self._seek("image_seek")
        elif clicked == "subdir_go":
            self._seek("subdir_seek")


def main():
    """Entry point for the application."""
    try:
        app = ImageViewerApp()
        app.run()
    except Exception as e:
        log_error(f"Application error: {e}", type(e).__name__, traceback.format_exc())
        raise


if __name__ == "__main__":
    main()
