"""
Apache directory index parsing for Apache Index Image Viewer.
Turns the HTML of a mod_autoindex "Index of /" page into image and
subdirectory names.
"""

import html
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union
from urllib.parse import urlsplit, unquote

from constants import IMAGE_EXTENSIONS
from utils.formatting import decode_filename


class ParseError(Exception):
    """Raised when the input cannot be treated as HTML at all."""


class EntryKind(Enum):
    IMAGE = "image"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class ListingEntry:
    """One anchor found in an index page."""

    name: str
    kind: EntryKind


@dataclass
class DirectoryListing:
    """Images and subdirectories of one index page, in page order."""

    images: List[str] = field(default_factory=list)
    subdirectories: List[str] = field(default_factory=list)


# Matches href="...", href='...' and bare href=... on any <a> tag
_ANCHOR_RE = re.compile(
    r"""<a\b[^>]*?\bhref\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
    re.IGNORECASE | re.DOTALL,
)

# Apache puts the listed path in both <title> and <h1>
_INDEX_OF_RE = re.compile(
    r"<(?:title|h1)[^>]*>\s*Index\s+of\s+([^<]*?)\s*<",
    re.IGNORECASE,
)

_LINK_SCHEMES = ("", "http", "https")


def _coerce_text(content: Union[str, bytes]) -> str:
    """Return content as text, rejecting anything that is clearly not HTML."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    elif not isinstance(content, str):
        raise ParseError(f"Expected HTML text, got {type(content).__name__}")

    if "\x00" in content:
        raise ParseError("Input contains binary data")
    return content


def _normalize_dir_path(path: str) -> str:
    """Unquote a directory path and give it exactly one trailing slash."""
    path = unquote(path).strip()
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") + "/"


def find_page_path(content: str) -> Optional[str]:
    """
    Find the directory an index page describes.

    Args:
        content: HTML of an Apache index page

    Returns:
        Path such as "/photos/2021/" or None when the page has no
        "Index of" heading
    """
    match = _INDEX_OF_RE.search(content)
    if not match:
        return None
    return _normalize_dir_path(html.unescape(match.group(1)))


def _classify(
    href: str, extensions: Iterable[str], page_path: Optional[str]
) -> ListingEntry:
    """Classify one href into an image, a child directory or noise."""
    # Entities are decoded once, per name, by decode_filename
    parts = urlsplit(href.strip())
    path = parts.path

    # Sort bar (?C=N;O=D), in-page anchors, mailto: and friends
    if not path or parts.scheme.lower() not in _LINK_SCHEMES:
        return ListingEntry(href, EntryKind.OTHER)

    segments = [s for s in path.split("/") if s]
    if not segments:
        return ListingEntry(href, EntryKind.OTHER)
    basename = segments[-1]

    if path.endswith("/"):
        if basename in (".", ".."):
            return ListingEntry(href, EntryKind.OTHER)
        if path.startswith("/") or parts.netloc:
            # Absolute links are only children if they sit directly below us
            target = _normalize_dir_path(html.unescape(path))
            if page_path is not None:
                if page_path.startswith(target):
                    # Our own directory or one of its ancestors
                    return ListingEntry(href, EntryKind.OTHER)
                parent = target[: target.rstrip("/").rfind("/") + 1]
                if parent != page_path:
                    return ListingEntry(href, EntryKind.OTHER)
        elif any(s == ".." for s in segments):
            return ListingEntry(href, EntryKind.OTHER)
        return ListingEntry(decode_filename(basename), EntryKind.DIRECTORY)

    name = decode_filename(basename)
    ext = os.path.splitext(name)[1].lower()
    if ext and ext in extensions:
        return ListingEntry(name, EntryKind.IMAGE)
    return ListingEntry(name, EntryKind.OTHER)


def extract_entries(
    content: Union[str, bytes],
    image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
    page_path: Optional[str] = None,
) -> List[ListingEntry]:
    """
    Classify every hyperlink of an index page.

    Args:
        content: HTML of the page
        image_extensions: Dotted suffixes counted as images
        page_path: Path of the page itself; read from its heading when omitted

    Returns:
        One entry per anchor, in page order, OTHER entries included

    Raises:
        ParseError: If the content is not text-like
    """
    content = _coerce_text(content)
    extensions = {e.lower() for e in image_extensions}

    if page_path is None:
        page_path = find_page_path(content)
    else:
        page_path = _normalize_dir_path(page_path)

    entries = []
    for match in _ANCHOR_RE.finditer(content):
        href = next(g for g in match.groups() if g is not None)
        entries.append(_classify(href, extensions, page_path))
    return entries


def parse(
    content: Union[str, bytes],
    image_extensions: Iterable[str] = IMAGE_EXTENSIONS,
    page_path: Optional[str] = None,
) -> DirectoryListing:
    """
    Parse an Apache index page into a DirectoryListing.

    Unknown links are dropped and duplicate names keep their first
    position. Malformed markup never raises; a page without images gives
    an empty listing.

    Raises:
        ParseError: If the content is not text-like
    """
    listing = DirectoryListing()
    seen_images = set()
    seen_dirs = set()

    for entry in extract_entries(content, image_extensions, page_path):
        if entry.kind is EntryKind.IMAGE and entry.name not in seen_images:
            seen_images.add(entry.name)
            listing.images.append(entry.name)
        elif entry.kind is EntryKind.DIRECTORY and entry.name not in seen_dirs:
            seen_dirs.add(entry.name)
            listing.subdirectories.append(entry.name)

    return listing
