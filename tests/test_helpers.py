import pytest

from nri.api.helpers import clear_removal_marker, is_marked_for_removal, mark_for_removal


def test_unmarked_key():
    assert is_marked_for_removal("foo") == ("foo", False)


def test_marked_key():
    assert is_marked_for_removal("-foo") == ("foo", True)


def test_empty_key():
    assert is_marked_for_removal("") == ("", False)


@pytest.mark.parametrize("key", ["foo", "/dev/null", "NET", "PATH", "-x"])
def test_mark_round_trip(key):
    marked = mark_for_removal(key)
    assert marked.startswith("-")
    assert is_marked_for_removal(marked) == (key, True)
    assert clear_removal_marker(marked) == key


def test_clear_only_strips_one_marker():
    assert clear_removal_marker("--x") == "-x"


def test_clear_unmarked_and_empty():
    assert clear_removal_marker("plain") == "plain"
    assert clear_removal_marker("") == ""