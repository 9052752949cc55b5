"""
Utility functions for Apache Index Image Viewer.
"""

from .logging import log_error, init_log_file, get_log_file, set_log_file
from .formatting import decode_filename, format_position

__all__ = [
    "log_error",
    "init_log_file",
    "get_log_file",
    "set_log_file",
    "decode_filename",
    "format_position",
]
