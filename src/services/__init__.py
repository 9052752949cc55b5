"""
Services layer for Apache Index Image Viewer.
Handles HTTP fetching, index parsing, gallery loading and image caching.
"""

from .transport import (
    NetworkError,
    fetch_text,
    fetch_bytes,
)
from .index_parser import (
    ParseError,
    EntryKind,
    ListingEntry,
    DirectoryListing,
    extract_entries,
    find_page_path,
    parse,
)
from .gallery_controller import (
    GalleryController,
    Outcome,
    build_controller,
)
from .image_cache import (
    ImageCache,
    decode_image,
    fit_size,
)

__all__ = [
    # Transport
    'NetworkError',
    'fetch_text',
    'fetch_bytes',
    # Index parser
    'ParseError',
    'EntryKind',
    'ListingEntry',
    'DirectoryListing',
    'extract_entries',
    'find_page_path',
    'parse',
    # Gallery controller
    'GalleryController',
    'Outcome',
    'build_controller',
    # Image cache
    'ImageCache',
    'decode_image',
    'fit_size',
]
