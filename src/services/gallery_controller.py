"""
Gallery controller for Apache Index Image Viewer.
Fetches directory listings, feeds them into the gallery state and reports
what happened.

Fetches can run inline or on a background thread. In background mode the
worker only downloads and parses; results travel back through a queue and
are applied to the state on the main thread by update().
"""

import traceback
from dataclasses import dataclass
from enum import Enum
from queue import Queue, Empty
from threading import Thread
from typing import Any, Callable, Iterable, Optional

from constants import ERROR_LOADING_MESSAGE, NO_IMAGES_MESSAGE, IMAGE_EXTENSIONS
from state import (
    GalleryState,
    GalleryView,
    NavResult,
    directory_url,
    normalize_base_url,
)
from services.index_parser import DirectoryListing, ParseError, parse
from services.transport import NetworkError, fetch_text
from utils.logging import log_error


class Outcome(Enum):
    """What a controller request ended in."""

    LOADED = "loaded"
    EMPTY_NO_IMAGES = "empty_no_images"
    FETCH_ERROR = "fetch_error"
    AT_BOUNDARY = "at_boundary"
    NOT_FOUND = "not_found"
    BUSY = "busy"
    NO_GALLERY = "no_gallery"
    PENDING = "pending"


_NAV_OUTCOMES = {
    NavResult.MOVED: Outcome.LOADED,
    NavResult.AT_BOUNDARY: Outcome.AT_BOUNDARY,
    NavResult.NOT_FOUND: Outcome.NOT_FOUND,
}


@dataclass
class _BaseLoaded:
    base_url: str
    subdirs_enabled: bool
    listing: DirectoryListing
    first_subdir: Optional[DirectoryListing] = None


@dataclass
class _SubdirLoaded:
    index: int
    listing: DirectoryListing


@dataclass
class _FetchFailed:
    error: Exception
    # Failed submits discard the gallery, failed subdirectory moves keep it
    replaces_gallery: bool


class GalleryController:
    """
    Drives a GalleryState from user requests.

    Every fetch carries a request token. Only the result for the newest
    token is applied, so a slow response can never overwrite a newer one.
    While a fetch is outstanding, navigation requests are rejected with
    Outcome.BUSY; a new submit supersedes the outstanding fetch.
    """

    def __init__(
        self,
        fetch: Callable[[str], str] = fetch_text,
        image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
        background: bool = False,
    ):
        self._fetch = fetch
        self._image_extensions = tuple(image_extensions)
        self._background = background

        self.state: Optional[GalleryState] = None
        self.status: Optional[Outcome] = None
        self.message: str = ""

        self._token = 0
        self._pending_token: Optional[int] = None
        self._results: Queue = Queue()
        self._worker: Optional[Thread] = None

    # ---- Read side ---- #

    @property
    def loading(self) -> bool:
        """True while a fetch is outstanding."""
        return self._pending_token is not None

    @property
    def has_error(self) -> bool:
        return self.status is Outcome.FETCH_ERROR

    @property
    def is_empty(self) -> bool:
        return self.status is Outcome.EMPTY_NO_IMAGES

    def view(self) -> GalleryView:
        """Derived view of the current gallery, or an empty one."""
        if self.state is None:
            return GalleryView()
        return self.state.view()

    # ---- Requests ---- #

    def submit(self, url: str, subdirs_enabled: bool = False) -> Outcome:
        """
        Start a new gallery at `url`.

        Fetches the base listing and, in subdirectory mode, the first
        subdirectory's listing too.
        """
        base_url = normalize_base_url(url)
        print(f"Loading gallery {base_url} (subdirectories: {subdirs_enabled})")
        token = self._next_token()
        return self._dispatch(token, self._load_base, base_url, subdirs_enabled)

    def set_subdirs_enabled(self, enabled: bool) -> Outcome:
        """Reload the current base URL with subdirectory mode switched."""
        if self.state is None:
            return Outcome.NO_GALLERY
        return self.submit(self.state.base_url, enabled)

    def request_next_image(self) -> Outcome:
        return self._navigate(lambda state: state.next_image())

    def request_prev_image(self) -> Outcome:
        return self._navigate(lambda state: state.prev_image())

    def request_seek_image(self, name: str) -> Outcome:
        return self._navigate(lambda state: state.seek_image(name))

    def request_next_subdir(self) -> Outcome:
        return self._change_subdir(
            lambda state: state.adjacent_subdir(1), NavResult.AT_BOUNDARY
        )

    def request_prev_subdir(self) -> Outcome:
        return self._change_subdir(
            lambda state: state.adjacent_subdir(-1), NavResult.AT_BOUNDARY
        )

    def request_seek_subdir(self, name: str) -> Outcome:
        return self._change_subdir(
            lambda state: state.find_subdir(name), NavResult.NOT_FOUND
        )

    # ---- Background results ---- #

    def update(self) -> Optional[Outcome]:
        """
        Apply results posted by the background worker.
        Should be called from the main thread each frame.

        Returns:
            Outcome of the last applied result, None if nothing was applied
        """
        outcome = None
        while True:
            try:
                token, result = self._results.get_nowait()
            except Empty:
                break
            applied = self._complete(token, result)
            if applied is not None:
                outcome = applied
        return outcome

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the background worker, if any, to finish."""
        if self._worker is not None:
            self._worker.join(timeout)

    # ---- Internals ---- #

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _navigate(self, move: Callable[[GalleryState], NavResult]) -> Outcome:
        """
        Run a cursor move that needs no fetch.

        Image moves are refused while the error banner hides the images;
        a folder change or a new submit clears the error.
        """
        if self.state is None or self.has_error:
            return Outcome.NO_GALLERY
        if self.loading:
            return Outcome.BUSY
        return _NAV_OUTCOMES[move(self.state)]

    def _change_subdir(
        self, target: Callable[[GalleryState], Optional[int]], miss: NavResult
    ) -> Outcome:
        """Fetch another subdirectory and enter it once it has loaded."""
        if self.state is None:
            return Outcome.NO_GALLERY
        if self.loading:
            return Outcome.BUSY
        index = target(self.state)
        if index is None:
            return _NAV_OUTCOMES[miss]

        url = directory_url(self.state.base_url, self.state.subdirectories[index])
        token = self._next_token()
        return self._dispatch(token, self._load_subdir, index, url)

    def _dispatch(self, token: int, loader: Callable, *args) -> Outcome:
        """Run a loader inline or on the background worker."""
        self._pending_token = token

        if not self._background:
            return self._complete(token, self._run_loader(loader, *args))

        def work():
            self._results.put((token, self._run_loader(loader, *args)))

        self._worker = Thread(target=work, daemon=True)
        self._worker.start()
        return Outcome.PENDING

    def _run_loader(self, loader: Callable, *args) -> Any:
        """Run a loader, turning any unexpected exception into a failed fetch."""
        try:
            return loader(*args)
        except Exception as e:
            log_error("Gallery fetch crashed", type(e).__name__, traceback.format_exc())
            return _FetchFailed(e, replaces_gallery=loader == self._load_base)

    def _fetch_listing(self, url: str) -> DirectoryListing:
        """Fetch and parse one index page (on the worker in background mode)."""
        content = self._fetch(url)
        try:
            return parse(content, self._image_extensions)
        except ParseError as e:
            log_error(f"Could not parse listing at {url}: {e}", type(e).__name__)
            return DirectoryListing()

    def _load_base(self, base_url: str, subdirs_enabled: bool) -> Any:
        try:
            listing = self._fetch_listing(base_url)
            first_subdir = None
            if subdirs_enabled and listing.subdirectories:
                first_subdir = self._fetch_listing(
                    directory_url(base_url, listing.subdirectories[0])
                )
            return _BaseLoaded(base_url, subdirs_enabled, listing, first_subdir)
        except NetworkError as e:
            log_error(
                f"Failed to load gallery {base_url}",
                type(e).__name__,
                traceback.format_exc(),
            )
            return _FetchFailed(e, replaces_gallery=True)

    def _load_subdir(self, index: int, url: str) -> Any:
        try:
            return _SubdirLoaded(index, self._fetch_listing(url))
        except NetworkError as e:
            log_error(
                f"Failed to load subdirectory {url}",
                type(e).__name__,
                traceback.format_exc(),
            )
            return _FetchFailed(e, replaces_gallery=False)

    def _complete(self, token: int, result: Any) -> Optional[Outcome]:
        """Apply a loader result on the main thread; stale tokens are dropped."""
        if token != self._token:
            return None
        self._pending_token = None

        if isinstance(result, _FetchFailed):
            if result.replaces_gallery:
                self.state = None
            return self._set_status(
                Outcome.FETCH_ERROR, f"{ERROR_LOADING_MESSAGE}: {result.error}"
            )

        if isinstance(result, _BaseLoaded):
            state = GalleryState(result.base_url)
            state.load_base(result.listing, result.subdirs_enabled)
            if result.first_subdir is not None:
                state.load_subdir_images(result.first_subdir)
            self.state = state
        elif isinstance(result, _SubdirLoaded):
            self.state.enter_subdir(result.index, result.listing)

        if self.state.current_images:
            return self._set_status(Outcome.LOADED, "")
        return self._set_status(Outcome.EMPTY_NO_IMAGES, NO_IMAGES_MESSAGE)

    def _set_status(self, outcome: Outcome, message: str) -> Outcome:
        self.status = outcome
        self.message = message
        return outcome


def build_controller(settings) -> GalleryController:
    """Create a controller wired to the HTTP transport using app settings."""

    def fetch(url: str) -> str:
        return fetch_text(
            url, timeout=settings.request_timeout, user_agent=settings.user_agent
        )

    controller = GalleryController(
        fetch=fetch,
        image_extensions=settings.image_extensions,
        background=settings.background_fetch,
    )
    return controller
