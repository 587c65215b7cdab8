import pytest

from player.library_view import DEFAULT_SORT, LibraryView, parse_sort
from player.sorting import MultiColumnSorter, SortKey
from player.track import Track


def test_multi_key_stability():
    rows = [
        {"points": 10, "name": "B"},
        {"points": 12, "name": "A"},
        {"points": 10, "name": "A"},
    ]
    sorted_rows = MultiColumnSorter(rows).sort(
        [SortKey(lambda r: r["points"], False), SortKey(lambda r: r["name"])]
    )
    assert [(r["points"], r["name"]) for r in sorted_rows] == [(12, "A"), (10, "A"), (10, "B")]


def test_missing_values_first_and_case_insensitive():
    rows = [Track("1", artist="beta"), Track("2"), Track("3", artist="Alpha")]
    out = MultiColumnSorter(rows).sort([SortKey(lambda t: t.artist)])
    assert [t.filename for t in out] == ["2", "3", "1"]


def test_parse_sort():
    assert parse_sort(DEFAULT_SORT)[0] == "artist"
    assert parse_sort("  title   date ") == ["title", "date"]
    assert parse_sort("") == []
    with pytest.raises(ValueError):
        parse_sort("artist nope")


def test_default_view_order():
    tracks = [
        Track("b", artist="X", album="A", tracknumber=2),
        Track("a", artist="X", album="A", tracknumber=1),
        Track("c", artist="W", album="Z", tracknumber=9),
    ]
    view = LibraryView(tracks)
    assert view.sort_string == DEFAULT_SORT
    assert [t.filename for t in view.tracks] == ["c", "a", "b"]


def test_rejected_sort_reports_and_keeps_keys():
    errors = []
    view = LibraryView(sort="title", on_error=errors.append)
    assert not view.set_sort("title bogus")
    assert view.sort_string == "title"
    assert errors == ["invalid sort key 'bogus'"]


def test_sort_string_is_normalized():
    view = LibraryView()
    assert view.set_sort("  album\ttitle ")
    assert view.sort_string == "album title"
