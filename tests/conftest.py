import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from utils.logging import get_log_file, set_log_file


@pytest.fixture(autouse=True)
def tmp_error_log(tmp_path):
    """Send error logs written during a test to a temporary file."""
    previous = get_log_file()
    log_path = tmp_path / "error.log"
    set_log_file(str(log_path))
    yield log_path
    set_log_file(previous)
