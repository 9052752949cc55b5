"""
HTTP transport for Apache Index Image Viewer.
Fetches directory listings and image bytes over HTTP.
"""

from typing import Dict, Optional

import requests

from constants import REQUEST_TIMEOUT, USER_AGENT


class NetworkError(Exception):
    """Raised when a URL is unreachable or answers with a non-2xx status."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _get_request_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    """Get request headers for listing and image requests."""
    return {"User-Agent": user_agent or USER_AGENT}


def _get(url: str, timeout: Optional[float], user_agent: Optional[str]):
    """Perform a GET and translate every failure into NetworkError."""
    try:
        r = requests.get(
            url,
            timeout=timeout or REQUEST_TIMEOUT,
            headers=_get_request_headers(user_agent),
        )
    except requests.RequestException as e:
        raise NetworkError(url, f"{type(e).__name__}: {e}") from e

    if not 200 <= r.status_code < 300:
        raise NetworkError(
            url, f"HTTP {r.status_code} for {url}", status_code=r.status_code
        )
    return r


def fetch_text(
    url: str, timeout: Optional[float] = None, user_agent: Optional[str] = None
) -> str:
    """
    Fetch a URL and return its body as text.

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds (default: REQUEST_TIMEOUT)
        user_agent: Optional User-Agent override

    Returns:
        Response body decoded as text

    Raises:
        NetworkError: On connection failure, timeout or non-2xx status
    """
    return _get(url, timeout, user_agent).text


def fetch_bytes(
    url: str, timeout: Optional[float] = None, user_agent: Optional[str] = None
) -> bytes:
    """
    Fetch a URL and return its raw body.

    Raises:
        NetworkError: On connection failure, timeout or non-2xx status
    """
    return _get(url, timeout, user_agent).content
