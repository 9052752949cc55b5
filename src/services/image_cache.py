"""
Image caching service for Apache Index Image Viewer.
Handles async image downloads, decoding and caching for the viewport.
"""

import traceback
from collections import OrderedDict
from io import BytesIO
from queue import Queue, Empty
from threading import Thread
from typing import Any, Callable, Optional, Tuple

import pygame
from PIL import Image, ImageOps

from constants import IMAGE_CACHE_LIMIT
from services.transport import fetch_bytes
from utils.logging import log_error

LOADING = "loading"
FAILED = "failed"


def decode_image(data: bytes) -> Image.Image:
    """
    Decode image bytes into an upright RGBA Pillow image.

    Raises:
        PIL.UnidentifiedImageError / OSError: If the bytes are not an image
    """
    with Image.open(BytesIO(data)) as image:
        image.seek(0)  # First frame of animated GIF/WebP
        upright = ImageOps.exif_transpose(image)
        return upright.convert("RGBA")


def fit_size(size: Tuple[int, int], box: Tuple[int, int]) -> Tuple[int, int]:
    """
    Largest size with the same aspect ratio as `size` that fits in `box`.

    Images are never scaled up.
    """
    width, height = size
    box_w, box_h = box
    if width <= 0 or height <= 0 or box_w <= 0 or box_h <= 0:
        return (0, 0)
    scale = min(box_w / width, box_h / height, 1.0)
    return (max(1, int(width * scale)), max(1, int(height * scale)))


class ImageCache:
    """
    Manages image loading and caching for the displayed image.

    Uses background threads to download and decode images and a queue
    to safely pass them back to the main thread, where they become
    pygame surfaces.
    """

    def __init__(
        self,
        fetch: Callable[[str], bytes] = fetch_bytes,
        limit: int = IMAGE_CACHE_LIMIT,
    ):
        """Initialize the image cache."""
        self._fetch = fetch
        self._limit = limit
        self._cache: "OrderedDict[str, Any]" = OrderedDict()
        self._queue: Queue = Queue()
        self._scaled: dict = {}

    def get(self, url: str) -> Any:
        """
        Get the surface for an image URL, loading it async if not cached.

        Returns:
            pygame.Surface if ready, LOADING while downloading, FAILED if
            the image could not be loaded
        """
        if url in self._cache:
            self._cache.move_to_end(url)
            return self._cache[url]

        self._start(url)
        return LOADING

    def prefetch(self, url: Optional[str]) -> None:
        """Start loading an image that is likely to be shown next."""
        if url and url not in self._cache:
            self._start(url)

    def get_scaled(self, url: str, box: Tuple[int, int]) -> Any:
        """Get the image for `url` scaled down to fit inside `box`."""
        image = self.get(url)
        if not isinstance(image, pygame.Surface):
            return image

        key = (url, box)
        if key not in self._scaled:
            target = fit_size(image.get_size(), box)
            if target == image.get_size():
                self._scaled[key] = image
            else:
                self._scaled[key] = pygame.transform.smoothscale(image, target)
        return self._scaled[key]

    def update(self):
        """
        Process loaded images from background threads.
        Should be called from main thread each frame.
        """
        while True:
            try:
                url, image = self._queue.get_nowait()
            except Empty:
                break

            if image is None:
                self._cache[url] = FAILED
            else:
                self._cache[url] = pygame.image.fromstring(
                    image.tobytes(), image.size, "RGBA"
                )
            self._evict()

    def clear(self):
        """Clear all cached images and drain the queue."""
        self._cache.clear()
        self._scaled.clear()
        while True:
            try:
                self._queue.get_nowait()
            except Empty:
                break

    def _start(self, url: str) -> None:
        self._cache[url] = LOADING
        thread = Thread(target=self._load_image_async, args=(url,))
        thread.daemon = True
        thread.start()

    def _evict(self) -> None:
        """Drop least recently used images beyond the cache limit."""
        while len(self._cache) > self._limit:
            url, _ = self._cache.popitem(last=False)
            for key in [k for k in self._scaled if k[0] == url]:
                del self._scaled[key]

    def _load_image_async(self, url: str):
        """Download and decode an image in a background thread."""
        try:
            image = decode_image(self._fetch(url))
            self._queue.put((url, image))
        except Exception as e:
            log_error(
                f"Failed to load image from {url}",
                type(e).__name__,
                traceback.format_exc(),
            )
            self._queue.put((url, None))
