"""
Formatting utilities for Apache Index Image Viewer.
Provides functions for decoding listing names and position text.
"""

import html
from urllib.parse import unquote


def decode_filename(raw_filename: str) -> str:
    """
    Decode a name taken from an href attribute in an index page.

    The attribute is HTML-escaped on top of URL-encoding, so entities are
    decoded first (e.g. &amp; -> &) and percent escapes second
    (e.g. %20 -> space, %5B -> [). Each layer is decoded exactly once.

    Args:
        raw_filename: The name exactly as it appears in the markup

    Returns:
        Decoded filename
    """
    return unquote(html.unescape(raw_filename))


def format_position(index, total: int) -> str:
    """
    Format a 0-based cursor as a human readable "n / total" string.

    Returns an empty string when there is no cursor.
    """
    if index is None or total <= 0:
        return ""
    return f"{index + 1} / {total}"
