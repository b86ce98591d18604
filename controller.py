import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QColor

from config import DEFAULT_HIGHLIGHT_COLOR, DEFAULT_MAX_SEGMENT_SIZE, MIN_SEGMENT_SIZE
from editing import PathEditor
from model import Polygon

logger = logging.getLogger(__name__)

def _is_valid_segment_size(value) -> bool:
    # bool is an int subclass but never a size
    return isinstance(value, int) and not isinstance(value, bool) and value >= MIN_SEGMENT_SIZE

def _is_valid_color(value) -> bool:
    if isinstance(value, QColor):
        return value.isValid()
    return isinstance(value, str) and QColor(value).isValid()

class PolygonEditController(QObject):
    """Editing state of one polygon.

    The polygon itself is never made editable; instead every path gets a
    PathEditor whose segments are edited.
    """
    editors_rebuilt = Signal()

    def __init__(self, polygon: Polygon, options: dict | None = None, parent=None):
        super().__init__(parent)
        self.polygon = polygon
        self._editable = False
        self._max_segment_size = DEFAULT_MAX_SEGMENT_SIZE
        self._highlight_color = DEFAULT_HIGHLIGHT_COLOR
        self.editors: list[PathEditor] = []

        polygon.path_removed.connect(self._on_path_removed)
        polygon.paths_reset.connect(self._on_paths_reset)

        if options:
            self.set_options(options)

    def get_editable(self) -> bool:
        return self._editable

    def set_editable(self, editable) -> None:
        if not isinstance(editable, bool):
            logger.warning(f"Ignoring non-boolean editable value: {editable!r}")
            return
        self._editable = editable
        if editable:
            self.generate_editors()
        else:
            self._discard_editors()
            self.editors_rebuilt.emit()

    def get_max_segment_size(self) -> int:
        return self._max_segment_size

    def set_max_segment_size(self, size) -> None:
        # Applies to the next generate_editors call
        if _is_valid_segment_size(size):
            self._max_segment_size = size
        else:
            logger.warning(f"Ignoring invalid max_segment_size: {size!r}")

    def get_highlight_color(self):
        return self._highlight_color

    def set_highlight_color(self, color) -> None:
        if _is_valid_color(color):
            self._highlight_color = color
        else:
            logger.warning(f"Ignoring invalid highlight_color: {color!r}")

    def set_options(self, options) -> None:
        """Apply options, keeping editable, max_segment_size and
        highlight_color to ourselves and passing the rest to the polygon.

        Editing state is applied last, so an editable polygon gets a fresh
        chain built with the new segment size.
        """
        if not isinstance(options, dict):
            logger.warning(f"Ignoring options that are not a dict: {options!r}")
            return

        options = dict(options)
        editable = options.pop("editable", self._editable)
        max_segment_size = options.pop("max_segment_size", None)
        highlight_color = options.pop("highlight_color", None)

        if options:
            self.polygon.set_options(options)

        if max_segment_size is not None:
            self.set_max_segment_size(max_segment_size)
        if highlight_color is not None:
            self.set_highlight_color(highlight_color)
        self.set_editable(editable)

    def generate_editors(self) -> None:
        self._discard_editors()
        for path in self.polygon.get_paths():
            self.editors.append(PathEditor(self.polygon, path, self._max_segment_size))
        logger.info(f"Editing {len(self.editors)} paths, "
                    f"{sum(len(e.segments) for e in self.editors)} segments")
        self.editors_rebuilt.emit()

    def _discard_editors(self) -> None:
        for editor in self.editors:
            editor.dispose()
        self.editors = []

    def _on_path_removed(self, _index: int) -> None:
        paths = self.polygon.get_paths()
        kept = []
        for editor in self.editors:
            if any(p is editor.path for p in paths):
                kept.append(editor)
            else:
                editor.dispose()
        self.editors = kept

    def _on_paths_reset(self) -> None:
        if self._editable:
            self.generate_editors()
