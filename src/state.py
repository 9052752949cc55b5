"""
Application state management for Apache Index Image Viewer.
Holds the gallery navigation state machine and the viewer's UI state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any
from urllib.parse import urljoin, quote

from utils.formatting import format_position


class NavResult(Enum):
    """Result of a cursor transition."""

    MOVED = "moved"
    AT_BOUNDARY = "at_boundary"
    NOT_FOUND = "not_found"


def normalize_base_url(url: str) -> str:
    """Strip whitespace and make sure the URL ends with exactly one slash."""
    url = url.strip()
    if not url.endswith("/"):
        url += "/"
    return url


def directory_url(base_url: str, subdir: Optional[str] = None) -> str:
    """URL of a base directory, or of one of its subdirectories."""
    if subdir is None:
        return base_url
    return urljoin(base_url, quote(subdir) + "/")


@dataclass(frozen=True)
class GalleryView:
    """Snapshot of everything the UI draws for a gallery."""

    subdirs_enabled: bool = False
    displayed_url: Optional[str] = None
    displayed_filename: Optional[str] = None
    displayed_subdir_name: Optional[str] = None
    image_position: str = ""
    subdir_position: str = ""
    has_prev_image: bool = False
    has_next_image: bool = False
    has_prev_subdir: bool = False
    has_next_subdir: bool = False

    @property
    def has_image(self) -> bool:
        return self.displayed_url is not None


@dataclass
class GalleryState:
    """
    Navigation state for one browsing session.

    Tracks the subdirectories of the base URL, the images of the directory
    being shown and a cursor into each list. A new instance is created for
    every submitted base URL.
    """

    base_url: str
    subdirs_enabled: bool = False
    subdirectories: List[str] = field(default_factory=list)
    current_subdir_index: Optional[int] = None
    current_images: List[str] = field(default_factory=list)
    current_image_index: Optional[int] = None

    def __post_init__(self):
        self.base_url = normalize_base_url(self.base_url)

    # ---- Transitions ---- #

    def load_base(self, listing, subdirs_enabled: bool) -> None:
        """
        Reset the session from the base directory's listing.

        In subdirectory mode the image list stays empty until the first
        subdirectory is loaded, unless the base has no subdirectories, in
        which case the base images are shown.
        """
        self.subdirs_enabled = subdirs_enabled
        self.subdirectories = list(listing.subdirectories) if subdirs_enabled else []
        self.current_subdir_index = 0 if self.subdirectories else None

        if self.subdirectories:
            self._set_images([])
        else:
            self._set_images(listing.images)

    def load_subdir_images(self, listing) -> None:
        """Replace the image list with a freshly fetched directory listing."""
        self._set_images(listing.images)

    def enter_subdir(self, index: int, listing) -> None:
        """Move the subdirectory cursor and show that directory's images."""
        if not 0 <= index < len(self.subdirectories):
            raise IndexError(f"Subdirectory index {index} out of range")
        self.current_subdir_index = index
        self._set_images(listing.images)

    def next_image(self) -> NavResult:
        """Step to the next image; no-op at the last one."""
        if not self.has_next_image:
            return NavResult.AT_BOUNDARY
        self.current_image_index += 1
        return NavResult.MOVED

    def prev_image(self) -> NavResult:
        """Step to the previous image; no-op at the first one."""
        if not self.has_prev_image:
            return NavResult.AT_BOUNDARY
        self.current_image_index -= 1
        return NavResult.MOVED

    def adjacent_subdir(self, step: int) -> Optional[int]:
        """
        Index of the subdirectory `step` positions away from the cursor.

        Does not move the cursor; the caller enters the directory once its
        listing has been fetched. Returns None past either end.
        """
        if self.current_subdir_index is None:
            return None
        target = self.current_subdir_index + step
        if 0 <= target < len(self.subdirectories):
            return target
        return None

    def seek_image(self, name: str) -> NavResult:
        """Jump to the image called exactly `name`; unchanged on a miss."""
        try:
            self.current_image_index = self.current_images.index(name)
        except ValueError:
            return NavResult.NOT_FOUND
        return NavResult.MOVED

    def find_subdir(self, name: str) -> Optional[int]:
        """Position of the subdirectory called exactly `name`, if any."""
        if not self.subdirs_enabled:
            return None
        try:
            return self.subdirectories.index(name)
        except ValueError:
            return None

    def _set_images(self, images) -> None:
        self.current_images = list(images)
        self.current_image_index = 0 if self.current_images else None

    # ---- URLs ---- #

    def image_url(self, filename: str) -> str:
        """URL of an image inside the directory currently shown."""
        folder = directory_url(self.base_url, self.displayed_subdir_name)
        return urljoin(folder, quote(filename))

    # ---- Derived view ---- #

    @property
    def has_prev_image(self) -> bool:
        return self.current_image_index is not None and self.current_image_index > 0

    @property
    def has_next_image(self) -> bool:
        return (
            self.current_image_index is not None
            and self.current_image_index < len(self.current_images) - 1
        )

    @property
    def has_prev_subdir(self) -> bool:
        return self.current_subdir_index is not None and self.current_subdir_index > 0

    @property
    def has_next_subdir(self) -> bool:
        return (
            self.current_subdir_index is not None
            and self.current_subdir_index < len(self.subdirectories) - 1
        )

    @property
    def displayed_filename(self) -> Optional[str]:
        if self.current_image_index is None:
            return None
        return self.current_images[self.current_image_index]

    @property
    def displayed_subdir_name(self) -> Optional[str]:
        if self.current_subdir_index is None:
            return None
        return self.subdirectories[self.current_subdir_index]

    @property
    def displayed_url(self) -> Optional[str]:
        filename = self.displayed_filename
        if filename is None:
            return None
        return self.image_url(filename)

    @property
    def next_image_url(self) -> Optional[str]:
        """URL of the image after the current one, for prefetching."""
        if not self.has_next_image:
            return None
        return self.image_url(self.current_images[self.current_image_index + 1])

    def view(self) -> GalleryView:
        """Build a fresh snapshot of the derived view."""
        return GalleryView(
            subdirs_enabled=self.subdirs_enabled,
            displayed_url=self.displayed_url,
            displayed_filename=self.displayed_filename,
            displayed_subdir_name=self.displayed_subdir_name,
            image_position=format_position(
                self.current_image_index, len(self.current_images)
            ),
            subdir_position=format_position(
                self.current_subdir_index, len(self.subdirectories)
            ),
            has_prev_image=self.has_prev_image,
            has_next_image=self.has_next_image,
            has_prev_subdir=self.has_prev_subdir,
            has_next_subdir=self.has_next_subdir,
        )


@dataclass
class TextFieldState:
    """State for a single-line text input."""

    text: str = ""
    not_found: bool = False  # Last seek with this text missed

    def type_char(self, char: str) -> None:
        self.text += char
        self.not_found = False

    def backspace(self) -> None:
        self.text = self.text[:-1]
        self.not_found = False


@dataclass
class AppState:
    """
    UI state of the viewer window.

    The gallery itself lives in the controller; this only tracks what the
    user is typing and where the clickable areas were drawn.
    """

    url_input: TextFieldState = field(default_factory=TextFieldState)
    image_seek: TextFieldState = field(default_factory=TextFieldState)
    subdir_seek: TextFieldState = field(default_factory=TextFieldState)
    subdirs_enabled: bool = False
    focus: Optional[str] = "url"  # "url", "image_seek", "subdir_seek" or None
    ui_rects: Dict[str, Any] = field(default_factory=dict)

    def field_for(self, name: str) -> TextFieldState:
        """Get the text field state for a focus name."""
        return {
            "url": self.url_input,
            "image_seek": self.image_seek,
            "subdir_seek": self.subdir_seek,
        }[name]

    def cycle_focus(self, available: List[str]) -> None:
        """Move focus to the next available text field."""
        if not available:
            self.focus = None
            return
        if self.focus not in available:
            self.focus = available[0]
            return
        self.focus = available[(available.index(self.focus) + 1) % len(available)]
