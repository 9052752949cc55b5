"""
Error log for Apache Index Image Viewer.
Errors are appended to a plain text file; the console only gets a copy
when the file cannot be written.
"""

import os
import sys
from datetime import datetime
from typing import Optional

from constants import APP_TITLE, APP_VERSION, LOG_FILE

SEPARATOR = "-" * 80

# Module-level log file path
_log_file: str = LOG_FILE


def get_log_file() -> str:
    """Get the current log file path."""
    return _log_file


def set_log_file(path: str) -> None:
    """Send the error log to another file."""
    global _log_file
    _log_file = path


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _write(text: str, mode: str = "a") -> bool:
    """Write to the log file, echoing to the console if that fails."""
    try:
        directory = os.path.dirname(_log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(_log_file, mode) as f:
            f.write(text)
        return True
    except OSError as e:
        print(f"Failed to write to log file {_log_file}: {e}")
        print(text)
        return False


def format_entry(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> str:
    """Build one timestamped log entry, closed by a separator line."""
    lines = [f"[{_timestamp()}] ERROR: {error_msg}"]
    if error_type:
        lines.append(f"Type: {error_type}")
    if traceback_str:
        lines.append("Traceback:")
        lines.append(traceback_str.rstrip("\n"))
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"


def log_error(
    error_msg: str,
    error_type: Optional[str] = None,
    traceback_str: Optional[str] = None,
) -> None:
    """
    Append an error to the log file.

    Args:
        error_msg: What went wrong
        error_type: Optional exception class name
        traceback_str: Optional formatted traceback
    """
    _write(format_entry(error_msg, error_type, traceback_str))


def init_log_file() -> bool:
    """
    Start a fresh log file for this run.

    Returns:
        True if the file could be written
    """
    header = (
        f"{APP_TITLE} {APP_VERSION} - error log started at {_timestamp()}\n"
        f"Python version: {sys.version}\n"
        f"Platform: {sys.platform}\n"
        f"{SEPARATOR}\n"
    )
    if not _write(header, mode="w"):
        return False
    print(f"Log file initialized: {_log_file}")
    return True
