"""Tests for the gallery navigation state machine."""

import copy
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from services.index_parser import DirectoryListing
from state import (
    AppState,
    GalleryState,
    NavResult,
    directory_url,
    normalize_base_url,
)


def make_state(images, subdirs=None, subdirs_enabled=False, url="http://host/pics"):
    state = GalleryState(url)
    state.load_base(DirectoryListing(images, subdirs or []), subdirs_enabled)
    return state


def test_base_url_gets_trailing_slash():
    assert normalize_base_url("  http://host/pics ") == "http://host/pics/"
    assert normalize_base_url("http://host/pics/") == "http://host/pics/"
    assert GalleryState("http://host/pics").base_url == "http://host/pics/"


def test_directory_url():
    assert directory_url("http://host/pics/") == "http://host/pics/"
    assert directory_url("http://host/pics/", "2021") == "http://host/pics/2021/"
    assert directory_url("http://host/pics/", "my trip") == (
        "http://host/pics/my%20trip/"
    )


def test_load_base_selects_first_image():
    state = make_state(["a.jpg", "b.jpg", "c.jpg"])

    assert state.displayed_filename == "a.jpg"
    assert state.displayed_url == "http://host/pics/a.jpg"
    assert not state.has_prev_image
    assert state.has_next_image


def test_empty_listing_has_no_cursor():
    state = make_state([])

    assert state.current_image_index is None
    assert state.displayed_filename is None
    assert state.displayed_url is None
    assert state.next_image() is NavResult.AT_BOUNDARY
    assert state.prev_image() is NavResult.AT_BOUNDARY


def test_next_and_prev_are_inverse():
    state = make_state(["a.jpg", "b.jpg", "c.jpg"])

    assert state.next_image() is NavResult.MOVED
    assert state.displayed_filename == "b.jpg"
    assert state.prev_image() is NavResult.MOVED
    assert state.displayed_filename == "a.jpg"


def test_boundaries_are_no_ops():
    state = make_state(["a.jpg", "b.jpg"])

    assert state.prev_image() is NavResult.AT_BOUNDARY
    assert state.current_image_index == 0

    state.next_image()
    assert state.next_image() is NavResult.AT_BOUNDARY
    assert state.current_image_index == 1
    assert state.has_prev_image
    assert not state.has_next_image


def test_single_image_has_no_neighbours():
    state = make_state(["only.png"])

    assert not state.has_prev_image
    assert not state.has_next_image
    assert state.next_image_url is None


def test_seek_image_hit():
    state = make_state(["a.jpg", "b.jpg", "c.jpg"])

    assert state.seek_image("c.jpg") is NavResult.MOVED
    assert state.displayed_filename == "c.jpg"


def test_seek_image_miss_leaves_state_unchanged():
    state = make_state(["a.jpg", "b.jpg", "c.jpg"])
    state.next_image()
    before = copy.deepcopy(state)

    assert state.seek_image("C.JPG") is NavResult.NOT_FOUND
    assert state.seek_image("b") is NavResult.NOT_FOUND
    assert state == before


def test_image_urls_are_quoted():
    state = make_state(["my photo.jpg", "b&c.png"])

    assert state.displayed_url == "http://host/pics/my%20photo.jpg"
    assert state.next_image_url == "http://host/pics/b%26c.png"


def test_literal_entity_name_round_trips_to_url():
    state = make_state(["Tom&amp;Jerry.jpg"])

    assert state.displayed_url == "http://host/pics/Tom%26amp%3BJerry.jpg"


def test_subdirs_ignored_when_mode_disabled():
    state = make_state(["cover.jpg"], ["one", "two"])

    assert state.subdirectories == []
    assert state.current_subdir_index is None
    assert state.displayed_filename == "cover.jpg"
    assert state.find_subdir("one") is None


def test_subdir_mode_waits_for_first_subdir():
    state = make_state(["cover.jpg"], ["one", "two"], subdirs_enabled=True)

    assert state.current_subdir_index == 0
    assert state.displayed_subdir_name == "one"
    assert state.current_images == []

    state.load_subdir_images(DirectoryListing(["x.jpg", "y.jpg"]))

    assert state.displayed_filename == "x.jpg"
    assert state.displayed_url == "http://host/pics/one/x.jpg"


def test_subdir_mode_without_subdirs_shows_base_images():
    state = make_state(["cover.jpg"], [], subdirs_enabled=True)

    assert state.current_subdir_index is None
    assert state.displayed_url == "http://host/pics/cover.jpg"


def test_enter_subdir_resets_image_cursor():
    state = make_state([], ["one", "two"], subdirs_enabled=True)
    state.load_subdir_images(DirectoryListing(["x.jpg", "y.jpg"]))
    state.next_image()

    state.enter_subdir(1, DirectoryListing(["z.png"]))

    assert state.displayed_subdir_name == "two"
    assert state.current_image_index == 0
    assert state.displayed_url == "http://host/pics/two/z.png"
    assert state.has_prev_subdir
    assert not state.has_next_subdir


def test_enter_subdir_out_of_range():
    state = make_state([], ["one"], subdirs_enabled=True)

    with pytest.raises(IndexError):
        state.enter_subdir(3, DirectoryListing(["z.png"]))


def test_adjacent_subdir_does_not_move_cursor():
    state = make_state([], ["one", "two"], subdirs_enabled=True)

    assert state.adjacent_subdir(1) == 1
    assert state.adjacent_subdir(-1) is None
    assert state.current_subdir_index == 0


def test_find_subdir_is_exact():
    state = make_state([], ["one", "two"], subdirs_enabled=True)

    assert state.find_subdir("two") == 1
    assert state.find_subdir("Two") is None
    assert state.find_subdir("tw") is None


def test_view_snapshot():
    state = make_state([], ["one", "two"], subdirs_enabled=True)
    state.load_subdir_images(DirectoryListing(["x.jpg", "y.jpg"]))

    view = state.view()

    assert view.subdirs_enabled
    assert view.has_image
    assert view.displayed_filename == "x.jpg"
    assert view.displayed_subdir_name == "one"
    assert view.image_position == "1 / 2"
    assert view.subdir_position == "1 / 2"
    assert view.has_next_image and not view.has_prev_image
    assert view.has_next_subdir and not view.has_prev_subdir


def test_cycle_focus():
    app_state = AppState()

    app_state.cycle_focus(["url", "image_seek"])
    assert app_state.focus == "image_seek"
    app_state.cycle_focus(["url", "image_seek"])
    assert app_state.focus == "url"

    app_state.focus = "subdir_seek"
    app_state.cycle_focus(["url", "image_seek"])
    assert app_state.focus == "url"


def test_text_field_edits_clear_not_found():
    app_state = AppState()
    field = app_state.field_for("image_seek")
    field.not_found = True

    field.type_char("a")
    assert field.text == "a"
    assert not field.not_found

    field.not_found = True
    field.backspace()
    assert field.text == ""
    assert not field.not_found
