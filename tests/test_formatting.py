"""Tests for text formatting helpers."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from utils.formatting import decode_filename, format_position


def test_decode_filename():
    assert decode_filename("my%20photo%5B1%5D.jpg") == "my photo[1].jpg"
    assert decode_filename("a&amp;b&gt;c.png") == "a&b>c.png"
    assert decode_filename("plain.gif") == "plain.gif"


def test_decode_filename_decodes_each_layer_once():
    assert decode_filename("Tom&amp;amp;Jerry.jpg") == "Tom&amp;Jerry.jpg"
    assert decode_filename("50%2525.png") == "50%25.png"


def test_format_position():
    assert format_position(0, 3) == "1 / 3"
    assert format_position(2, 3) == "3 / 3"
    assert format_position(None, 3) == ""
    assert format_position(0, 0) == ""
