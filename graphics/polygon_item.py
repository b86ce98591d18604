from functools import partial

from controller import PolygonEditController
from graphics.segment_item import SegmentItem
from PySide6.QtWidgets import QGraphicsItem
from PySide6.QtGui import (
    QBrush,
    QColor,
    QPainterPath,
    QPen,
)
from PySide6.QtCore import QPointF, QRectF, QTimer, Qt

import logging

logger = logging.getLogger(__name__)

# Draws every ring of the polygon. While the controller is editable the rings'
# outlines are drawn by SegmentItem children instead.
class PolygonItem(QGraphicsItem):
    def __init__(self, controller: PolygonEditController):
        super().__init__()
        self.controller = controller
        self.polygon = controller.polygon
        self._painter_path = QPainterPath()
        self.segment_items: list[SegmentItem] = []

        # We disable QGraphics Framework's built-in moving mechanism
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)

        self.polygon.path_set.connect(self._refresh)
        self.polygon.path_removed.connect(self._refresh)
        self.polygon.paths_reset.connect(self._refresh)
        self.polygon.options_changed.connect(self._refresh)
        controller.editors_rebuilt.connect(self._rebuild_segment_items)

        self._refresh()
        self._rebuild_segment_items()

    def _refresh(self, *_):
        self.prepareGeometryChange()
        path = QPainterPath()
        path.setFillRule(Qt.OddEvenFill)
        for ring in self.polygon.get_paths():
            points = [self.mapFromScene(QPointF(p)) for p in ring]
            if not points:
                continue
            path.moveTo(points[0])
            for p in points[1:]:
                path.lineTo(p)
            path.closeSubpath()
        self._painter_path = path
        self.update()

    def boundingRect(self):
        if self._painter_path.isEmpty():
            return QRectF(0, 0, 0, 0)
        # add a small margin so the pen fits
        return self._painter_path.boundingRect().adjusted(-4, -4, 4, 4)

    def shape(self):
        return self._painter_path

    def paint(self, painter, option, widget):
        fill = QColor(self.polygon.get("fill_color", "gray"))
        fill.setAlphaF(float(self.polygon.get("fill_opacity", 0.3)))
        painter.setBrush(QBrush(fill))
        if self.controller.get_editable():
            painter.setPen(Qt.NoPen)
        else:
            pen = QPen(QColor(self.polygon.get("stroke_color", "black")))
            pen.setWidthF(float(self.polygon.get("stroke_weight", 1)))
            painter.setPen(pen)
        painter.drawPath(self._painter_path)

    def _rebuild_segment_items(self):
        for s_item in self.segment_items:
            self._drop_item(s_item)
        self.segment_items.clear()

        for editor in self.controller.editors:
            editor.segment_removed.connect(self._on_segment_removed)
            for segment in editor.segments:
                self.segment_items.append(SegmentItem(segment, editor, self.controller, parent=self))
        logger.debug(f"Showing {len(self.segment_items)} segment items")
        self.update()

    def _on_segment_removed(self, segment):
        for s_item in self.segment_items:
            if s_item.segment is segment:
                self.segment_items.remove(s_item)
                s_item.hide()
                # The segment may be removed from inside one of its handles'
                # event handlers, so the item goes away later
                QTimer.singleShot(0, partial(self._drop_item, s_item))
                break

    def _drop_item(self, s_item: SegmentItem):
        s_item.setParentItem(None)
        sc = self.scene()
        if sc:
            sc.removeItem(s_item)
