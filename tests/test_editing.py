"""Tests for keeping edit segments and polygon paths in sync."""

import logging
import random

import pytest

from editing import PathEditor, find_neighbor
from model import Segment


def chain_points(editor: PathEditor) -> list:
    points = []
    for segment in editor.segments:
        points.extend(segment.get_array()[:-1])
    return points


@pytest.fixture
def polygon(make_polygon):
    # One ring of 10 points: p0.0 .. p0.9
    return make_polygon(10)


@pytest.fixture
def editor(polygon) -> PathEditor:
    # plan_lengths(10, 4) == [4, 4, 3, 3]
    return PathEditor(polygon, polygon.get_path_at(0), max_segment_size=4)


def p(i: int) -> str:
    return f"p0.{i}"


def test_path_is_cut_into_segments_sharing_boundaries(editor: PathEditor) -> None:
    assert [s.get_array() for s in editor.segments] == [
        [p(0), p(1), p(2), p(3)],
        [p(3), p(4), p(5), p(6)],
        [p(6), p(7), p(8)],
        [p(8), p(9), p(0)],
    ]
    assert editor.is_consistent()


def test_short_path_gets_single_closed_segment(make_polygon) -> None:
    polygon = make_polygon(5)
    editor = PathEditor(polygon, polygon.get_path_at(0))

    assert len(editor.segments) == 1
    assert editor.segments[0].get_array() == [p(0), p(1), p(2), p(3), p(4), p(0)]
    assert editor.is_consistent()


def test_empty_path_has_no_segments(make_polygon) -> None:
    polygon = make_polygon(0)
    editor = PathEditor(polygon, polygon.get_path_at(0))

    assert editor.segments == []
    assert editor.is_consistent()


def test_moving_interior_point_updates_path_once(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)
    edited = record(polygon.edited)

    editor.segments[1].set_at(1, "moved")

    assert polygon.get_path_at(0).get_array()[4] == "moved"
    assert polygon.get_path_at(0) is editor.path
    assert recomputed.count == 1
    assert edited.count == 1
    assert editor.is_consistent()


def test_moving_first_point_moves_previous_segment_last_point(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)
    edited = record(polygon.edited)

    editor.segments[1].set_at(0, "moved")

    assert editor.segments[0].get_at(3) == "moved"
    assert polygon.get_path_at(0).get_array()[3] == "moved"
    assert recomputed.count == 1
    assert edited.count == 1
    assert editor.is_consistent()


def test_moving_last_point_moves_next_segment_first_point(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)

    editor.segments[2].set_at(2, "moved")

    assert editor.segments[3].get_at(0) == "moved"
    assert polygon.get_path_at(0).get_array()[8] == "moved"
    assert recomputed.count == 1
    assert editor.is_consistent()


def test_boundary_moves_wrap_around_the_chain(editor, polygon) -> None:
    editor.segments[0].set_at(0, "first")
    assert editor.segments[3].get_at(2) == "first"

    editor.segments[3].set_at(2, "closing")
    assert editor.segments[0].get_at(0) == "closing"
    assert polygon.get_path_at(0).get_array()[0] == "closing"
    assert editor.is_consistent()


def test_single_segment_boundary_move(make_polygon) -> None:
    polygon = make_polygon(4)
    editor = PathEditor(polygon, polygon.get_path_at(0))

    editor.segments[0].set_at(0, "moved")

    assert editor.segments[0].get_array() == ["moved", p(1), p(2), p(3), "moved"]
    assert polygon.get_path_at(0).get_array() == ["moved", p(1), p(2), p(3)]


def test_guard_is_cleared_between_edits(editor, record) -> None:
    recomputed = record(editor.recomputed)

    editor.segments[1].set_at(0, "a")
    editor.segments[2].set_at(0, "b")

    assert editor.segments[0].get_at(3) == "a"
    assert editor.segments[1].get_at(3) == "b"
    assert recomputed.count == 2


def test_insert_and_remove_recompute_path(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)

    editor.segments[2].insert_at(1, "new")
    assert polygon.get_path_at(0).get_array() == [
        p(0), p(1), p(2), p(3), p(4), p(5), p(6), "new", p(7), p(8), p(9)
    ]

    editor.segments[1].remove_at(2)
    assert p(5) not in polygon.get_path_at(0).get_array()
    assert recomputed.count == 2
    assert editor.is_consistent()


def test_random_edits_keep_chain_and_path_in_sync(make_polygon) -> None:
    """Any mix of set/insert/remove through the segments keeps the invariant."""
    rng = random.Random(1234)
    polygon = make_polygon(60)
    editor = PathEditor(polygon, polygon.get_path_at(0), max_segment_size=7)

    for step in range(500):
        segment = rng.choice(editor.segments)
        length = segment.get_length()
        op = rng.choice(["set", "insert", "remove"])
        if op == "set":
            segment.set_at(rng.randrange(length), f"s{step}")
        elif op == "insert":
            segment.insert_at(rng.randrange(1, length), f"i{step}")
        elif length > 2:
            segment.remove_at(rng.randrange(1, length - 1))

        assert chain_points(editor) == polygon.get_path_at(0).get_array()
        assert editor.is_consistent()


def test_delete_interior_point(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)
    edited = record(polygon.edited)

    editor.delete_point(editor.segments[1], 1)

    assert polygon.get_path_at(0).get_array() == [p(i) for i in (0, 1, 2, 3, 5, 6, 7, 8, 9)]
    assert recomputed.count == 1
    assert edited.count == 1
    assert editor.is_consistent()


def test_delete_last_point_of_segment(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)

    editor.delete_point(editor.segments[0], 3)

    assert editor.segments[0].get_array() == [p(0), p(1), p(2)]
    assert editor.segments[1].get_array() == [p(2), p(4), p(5), p(6)]
    assert polygon.get_path_at(0).get_array() == [p(i) for i in (0, 1, 2, 4, 5, 6, 7, 8, 9)]
    assert recomputed.count == 1
    assert editor.is_consistent()


def test_delete_first_point_of_segment(editor, polygon) -> None:
    editor.delete_point(editor.segments[1], 0)

    assert editor.segments[0].get_array() == [p(0), p(1), p(2), p(4)]
    assert editor.segments[1].get_array() == [p(4), p(5), p(6)]
    assert polygon.get_path_at(0).get_array() == [p(i) for i in (0, 1, 2, 4, 5, 6, 7, 8, 9)]
    assert editor.is_consistent()


def test_deleting_from_two_point_segment_removes_it(make_polygon, record) -> None:
    polygon = make_polygon(5)
    # plan_lengths(5, 3) == [3, 3, 2]
    editor = PathEditor(polygon, polygon.get_path_at(0), max_segment_size=3)
    short = editor.segments[2]
    assert short.get_array() == [p(4), p(0)]
    recomputed = record(editor.recomputed)
    edited = record(polygon.edited)
    removed = record(editor.segment_removed)

    editor.delete_point(short, 1)

    assert len(editor.segments) == 2
    assert removed.count == 1
    assert removed.calls[0][0] is short
    assert editor.segments[0].get_array() == [p(4), p(1), p(2)]
    assert polygon.get_path_at(0).get_array() == [p(4), p(1), p(2), p(3)]
    assert recomputed.count == 1
    assert edited.count == 1
    assert editor.is_consistent()


def test_delete_with_no_vertex_is_ignored(editor, polygon, record) -> None:
    recomputed = record(editor.recomputed)

    editor.delete_point(editor.segments[0], None)

    assert recomputed.count == 0
    assert polygon.get_path_at(0).get_length() == 10


def test_ring_below_three_points_is_removed(make_polygon, record) -> None:
    polygon = make_polygon(3, 4)
    first = PathEditor(polygon, polygon.get_path_at(0))
    second = PathEditor(polygon, polygon.get_path_at(1))
    removed = record(polygon.path_removed)
    edited = record(polygon.edited)

    first.delete_point(first.segments[0], 1)

    assert removed.calls == [(0,)]
    assert edited.count == 1
    assert len(polygon.get_paths()) == 1
    assert polygon.get_path_at(0) is second.path

    # The remaining editor finds its path at its new index
    second.segments[0].set_at(1, "moved")
    assert second.path_index() == 0
    assert polygon.get_path_at(0).get_array() == ["p1.0", "moved", "p1.2", "p1.3"]


def test_deleting_points_until_ring_is_gone(make_polygon) -> None:
    polygon = make_polygon(8)
    editor = PathEditor(polygon, polygon.get_path_at(0), max_segment_size=3)

    while polygon.get_paths():
        segment = editor.segments[0]
        editor.delete_point(segment, 1)
        if polygon.get_paths():
            assert editor.is_consistent()

    assert editor.path_index() is None
    assert editor.path.get_length() == 2


def test_update_skipped_when_path_left_polygon(editor, polygon, record, caplog) -> None:
    recomputed = record(editor.recomputed)
    polygon.remove_path_at(0)

    with caplog.at_level(logging.WARNING, logger="editing"):
        editor.segments[1].set_at(1, "moved")

    assert recomputed.count == 0
    assert polygon.get_paths() == []
    assert "no longer part of the polygon" in caplog.text


def test_select_makes_one_segment_editable(editor) -> None:
    segments = editor.segments

    editor.select(segments[2])
    assert [s.get_editable() for s in segments] == [False, False, True, False]

    editor.select(segments[0])
    assert [s.get_editable() for s in segments] == [True, False, False, False]


def test_dispose_releases_segments(editor, polygon, record) -> None:
    segments = editor.segments
    editor.select(segments[0])
    removed = record(editor.segment_removed)

    editor.dispose()

    assert editor.segments == []
    assert removed.count == 4
    assert segments[0].get_editable() is False

    # Released segments no longer drive the polygon
    segments[1].set_at(1, "moved")
    assert "moved" not in polygon.get_path_at(0).get_array()


def test_find_neighbor() -> None:
    segments = [Segment(["a", "b", "c"]), Segment(["c", "d"]), Segment(["d", "e", "a"])]

    previous = find_neighbor(segments, segments[1], 0)
    assert previous.segment is segments[0]
    assert previous.index == 2

    following = find_neighbor(segments, segments[1], 1)
    assert following.segment is segments[2]
    assert following.index == 0

    wrapped_back = find_neighbor(segments, segments[0], 0)
    assert wrapped_back.segment is segments[2]
    assert wrapped_back.index == 2

    wrapped_forward = find_neighbor(segments, segments[2], 2)
    assert wrapped_forward.segment is segments[0]
    assert wrapped_forward.index == 0


def test_find_neighbor_of_single_segment_is_itself() -> None:
    only = Segment(["a", "b", "c", "a"])

    backward = find_neighbor([only], only, 0)
    assert backward.segment is only
    assert backward.index == 3

    forward = find_neighbor([only], only, 3)
    assert forward.segment is only
    assert forward.index == 0


def test_find_neighbor_rejects_foreign_segment() -> None:
    with pytest.raises(ValueError):
        find_neighbor([Segment(["a", "b"])], Segment(["a", "b"]), 0)
