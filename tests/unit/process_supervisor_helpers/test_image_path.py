"""Tests for image path plurality selection."""

from repeater_watcher.process_supervisor_helpers import select_image_path
from tests.helpers.process_test_helper import make_handle


def test_plurality_wins():
    handles = [make_handle(1, "/opt/a/vpn"), make_handle(2, "/opt/a/vpn"), make_handle(3, "/opt/b/vpn")]

    assert select_image_path(handles) == "/opt/a/vpn"


def test_tie_breaks_lexicographically_regardless_of_order():
    forward = [make_handle(1, "/opt/z/vpn"), make_handle(2, "/opt/a/vpn")]
    backward = list(reversed(forward))

    assert select_image_path(forward) == "/opt/a/vpn"
    assert select_image_path(backward) == "/opt/a/vpn"


def test_unresolved_paths_do_not_vote():
    handles = [make_handle(1, None), make_handle(2, None), make_handle(3, "/opt/b/vpn")]

    assert select_image_path(handles) == "/opt/b/vpn"


def test_returns_none_without_any_path():
    assert select_image_path([make_handle(1, None), make_handle(2, "  ")]) is None
    assert select_image_path([]) is None
