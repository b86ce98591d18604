from enum import Enum
from PySide6.QtCore import QObject, Signal

class ChangeKind(Enum):
    INSERT = 1
    REMOVE = 2
    SET = 3

# Who caused a point_set notification the PathEditor is handling
class EditOrigin(Enum):
    USER = 1
    NEIGHBOR = 2

class PointSequence(QObject):
    """Ordered, mutable list of points.

    Points are opaque values. Every change emits exactly one signal,
    synchronously, before the mutating call returns.
    """
    point_inserted = Signal(int)
    point_removed = Signal(int, object)  # index, removed point
    point_set = Signal(int, object)      # index, previous point

    def __init__(self, points=None, parent=None):
        super().__init__(parent)
        self._points = list(points) if points is not None else []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(list(self._points))

    def __getitem__(self, index: int):
        return self._points[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._points!r})"

    def _check_index(self, index: int, upper: int) -> None:
        if not 0 <= index < upper:
            raise IndexError(f"index {index} out of range for {type(self).__name__} of length {len(self._points)}")

    def get_length(self) -> int:
        return len(self._points)

    def get_array(self) -> list:
        return list(self._points)

    def get_at(self, index: int):
        self._check_index(index, len(self._points))
        return self._points[index]

    def set_at(self, index: int, point) -> None:
        self._check_index(index, len(self._points))
        previous = self._points[index]
        self._points[index] = point
        self.point_set.emit(index, previous)

    def insert_at(self, index: int, point) -> None:
        self._check_index(index, len(self._points) + 1)
        self._points.insert(index, point)
        self.point_inserted.emit(index)

    def remove_at(self, index: int):
        self._check_index(index, len(self._points))
        removed = self._points.pop(index)
        self.point_removed.emit(index, removed)
        return removed

    def push(self, point) -> int:
        self.insert_at(len(self._points), point)
        return len(self._points)

class Path(PointSequence):
    """One ring of a polygon."""

class Segment(PointSequence):
    """One editable chunk of a path."""
    editable_changed = Signal(bool)

    def __init__(self, points=None, parent=None):
        super().__init__(points, parent)
        self._editable = False

    def get_editable(self) -> bool:
        return self._editable

    def set_editable(self, editable: bool) -> None:
        if editable == self._editable:
            return
        self._editable = editable
        self.editable_changed.emit(editable)

class Polygon(QObject):
    path_set = Signal(int)
    path_removed = Signal(int)
    paths_reset = Signal()
    options_changed = Signal()
    edited = Signal()

    def __init__(self, paths=None, options: dict | None = None, parent=None):
        super().__init__(parent)
        self._paths: list[Path] = [self._as_path(p) for p in (paths or [])]
        self._options: dict = dict(options or {})

    @staticmethod
    def _as_path(path) -> Path:
        return path if isinstance(path, Path) else Path(path)

    # The live list; callers compare its members by identity
    def get_paths(self) -> list[Path]:
        return self._paths

    def get_path_at(self, index: int) -> Path:
        return self._paths[index]

    def set_path_at(self, index: int, path) -> None:
        self._paths[index] = self._as_path(path)
        self.path_set.emit(index)

    def remove_path_at(self, index: int) -> Path:
        removed = self._paths.pop(index)
        self.path_removed.emit(index)
        return removed

    def set_paths(self, paths) -> None:
        self._paths = [self._as_path(p) for p in paths]
        self.paths_reset.emit()

    def get(self, key: str, default=None):
        return self._options.get(key, default)

    def set_options(self, options: dict) -> None:
        self._options.update(options)
        self.options_changed.emit()
