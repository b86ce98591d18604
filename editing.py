"""Keeps a chain of edit segments and the polygon path it was cut from in sync.

A PathEditor cuts one path of a polygon into segments (see
algorithms.plan_lengths). Consecutive segments share their boundary point,
the last segment is closed with the first point of the path. Whenever a
segment changes, the path is rebuilt from the chain and written back into the
polygon. Moving a boundary point first moves the matching point of the
neighbouring segment so the chain never tears apart.
"""
from functools import partial
from typing import NamedTuple
import logging

from PySide6.QtCore import QObject, Signal

from algorithms import plan_lengths
from config import DEFAULT_MAX_SEGMENT_SIZE, MIN_RING_POINTS
from model import ChangeKind, EditOrigin, Path, Polygon, Segment

logger = logging.getLogger(__name__)

class Neighbor(NamedTuple):
    segment: Segment
    index: int

def index_of(items, item) -> int | None:
    # Identity scan; paths and segments may be equal by value
    for i, candidate in enumerate(items):
        if candidate is item:
            return i
    return None

def find_neighbor(segments: list[Segment], segment: Segment, point_index: int) -> Neighbor:
    """Segment and point index matching a boundary point of `segment`.

    The first point (index 0) matches the last point of the previous segment,
    any other index matches the first point of the next segment. The chain
    is cyclic.
    """
    count = len(segments)
    segment_index = index_of(segments, segment)
    if segment_index is None:
        raise ValueError("segment is not part of the chain")

    if point_index == 0:
        neighbor = segments[(segment_index - 1) % count]
        return Neighbor(neighbor, neighbor.get_length() - 1)
    neighbor = segments[(segment_index + 1) % count]
    return Neighbor(neighbor, 0)

class PathEditor(QObject):
    segment_removed = Signal(object)
    recomputed = Signal(object)

    def __init__(self, polygon: Polygon, path: Path,
                 max_segment_size: int = DEFAULT_MAX_SEGMENT_SIZE,
                 fire_edited: bool = True, parent=None):
        super().__init__(parent)
        self.polygon = polygon
        # Not owned; replaced by every recompute
        self.path = path
        self.max_segment_size = max_segment_size
        self.fire_edited = fire_edited
        self._segments: list[Segment] = []

        # EditOrigin.NEIGHBOR while we write a moved boundary point into the
        # neighbouring segment
        self._origin = EditOrigin.USER
        # True while delete_point holds back recomputes
        self._deferred = False

        self.create_segments()

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments)

    def create_segments(self) -> None:
        points = self.path.get_array()
        if not points:
            logger.debug("Empty path, no segments created")
            return

        position = 0
        for length in plan_lengths(len(points), self.max_segment_size):
            # The last slice is shorter by one, the closing point is added below
            self._segments.append(Segment(points[position:position + length]))
            # Next segment starts with the last point of this one
            position += length - 1

        # Close the ring
        self._segments[-1].push(points[0])

        for segment in self._segments:
            segment.point_inserted.connect(partial(self._on_segment_changed, segment, ChangeKind.INSERT))
            segment.point_removed.connect(partial(self._on_segment_changed, segment, ChangeKind.REMOVE))
            segment.point_set.connect(partial(self._on_segment_changed, segment, ChangeKind.SET))

        logger.debug(f"Split path of {len(points)} points into {len(self._segments)} segments")

    def path_index(self) -> int | None:
        """Current index of our path in the polygon.

        Looked up on every call because other paths may be removed while
        editing.
        """
        return index_of(self.polygon.get_paths(), self.path)

    def update_from_segments(self, fire_edited: bool = True) -> None:
        points = []
        for segment in self._segments:
            # The last point of each segment is the first point of the next one
            points.extend(segment.get_array()[:-1])

        path_index = self.path_index()
        if path_index is None:
            logger.warning("Path is no longer part of the polygon, skipping update")
            return

        self.path = Path(points)
        self.polygon.set_path_at(path_index, self.path)
        self.recomputed.emit(self.path)
        if fire_edited:
            self.polygon.edited.emit()

    def _request_update(self) -> None:
        if not self._deferred:
            self.update_from_segments(self.fire_edited)

    def _owns(self, segment: Segment) -> bool:
        return index_of(self._segments, segment) is not None

    @staticmethod
    def _is_boundary(segment: Segment, index: int) -> bool:
        return index == 0 or index == segment.get_length() - 1

    def _write_neighbor(self, segment: Segment, index: int, point) -> None:
        neighbor = find_neighbor(self._segments, segment, index)
        self._origin = EditOrigin.NEIGHBOR
        try:
            neighbor.segment.set_at(neighbor.index, point)
        finally:
            self._origin = EditOrigin.USER

    def _on_segment_changed(self, segment: Segment, kind: ChangeKind, index: int, *_) -> None:
        if not self._owns(segment):
            return

        # A boundary point moved by the user: move the neighbour's copy. That
        # write lands back here as EditOrigin.NEIGHBOR and does the update.
        if (kind is ChangeKind.SET and self._origin is EditOrigin.USER
                and self._is_boundary(segment, index)):
            self._write_neighbor(segment, index, segment.get_at(index))
        else:
            self._request_update()

    def delete_point(self, segment: Segment, index: int | None) -> None:
        """Remove a point from a segment, keeping the chain and path valid.

        The neighbour takes over the new boundary point, a segment left with
        one point is dropped and a ring left with fewer than three points is
        removed from the polygon. The path is rebuilt once at the end.
        """
        if index is None:
            return
        if not self._owns(segment):
            logger.warning("Ignoring delete on a segment that is not part of the chain")
            return

        last_index = segment.get_length() - 1
        self._deferred = True
        try:
            segment.remove_at(index)

            if (index == 0 or index == last_index) and segment.get_length() > 0:
                new_end = 0 if index == 0 else segment.get_length() - 1
                self._write_neighbor(segment, index, segment.get_at(new_end))

            if segment.get_length() <= 1:
                self._remove_segment(segment)
        finally:
            self._deferred = False

        self.update_from_segments(fire_edited=False)

        path_index = self.path_index()
        if path_index is not None and self.path.get_length() < MIN_RING_POINTS:
            logger.info(f"Removing path {path_index}, only {self.path.get_length()} points left")
            self.polygon.remove_path_at(path_index)

        if self.fire_edited:
            self.polygon.edited.emit()

    def _remove_segment(self, segment: Segment) -> None:
        segment_index = index_of(self._segments, segment)
        del self._segments[segment_index]
        logger.debug(f"Removed collapsed segment {segment_index}, {len(self._segments)} left")
        self._release(segment)

    def _release(self, segment: Segment) -> None:
        segment.set_editable(False)
        self.segment_removed.emit(segment)
        # Nothing listens to a released segment any more
        segment.blockSignals(True)

    def select(self, segment: Segment) -> None:
        """Make `segment` the only editable segment of the chain."""
        for s in self._segments:
            s.set_editable(s is segment)

    def dispose(self) -> None:
        segments, self._segments = self._segments, []
        for segment in segments:
            self._release(segment)

    def is_consistent(self) -> bool:
        if not self._segments:
            return self.path.get_length() == 0

        count = len(self._segments)
        for i, segment in enumerate(self._segments):
            following = self._segments[(i + 1) % count]
            if segment.get_length() < 2 or segment[-1] != following[0]:
                return False

        points = []
        for segment in self._segments:
            points.extend(segment.get_array()[:-1])
        return points == self.path.get_array()
