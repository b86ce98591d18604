from model import Segment
from graphics.vertex_item import VertexItem
from PySide6.QtWidgets import QGraphicsItem, QMenu
from PySide6.QtGui import (
    QColor,
    QPainterPath,
    QPainterPathStroker,
    QPen,
    QPolygonF,
)
from PySide6.QtCore import QPointF, QRectF, QTimer, Qt

import algorithms

# Polyline drawn for one edit segment. Shows vertex handles while the segment
# is editable and forwards every handle edit to the segment.
class SegmentItem(QGraphicsItem):
    def __init__(self, segment: Segment, editor, controller, parent=None):
        super().__init__(parent)
        self.segment = segment
        self.editor = editor
        self.controller = controller
        self._polyline = QPolygonF()
        self._cached_bounding = QRectF(0, 0, 0, 0)
        self._hovered = False

        # Flag indicating whether the position of vertex handles is being
        # currently updated by this item
        self.updating_from_parent = False
        self.vertex_items: list[VertexItem] = []

        self.setAcceptHoverEvents(True)
        self.setAcceptedMouseButtons(Qt.LeftButton | Qt.RightButton)
        # Setting Z value to be below vertices
        self.setZValue(1.0)

        segment.point_set.connect(self._on_point_set)
        segment.point_inserted.connect(self._on_structure_changed)
        segment.point_removed.connect(self._on_structure_changed)
        segment.editable_changed.connect(self._on_structure_changed)

        self.update_segment()
        self._rebuild_handles()

    def _style(self) -> QPen:
        polygon = self.controller.polygon
        color = self.controller.get_highlight_color() if self._hovered else polygon.get("stroke_color", "black")
        pen = QPen(QColor(color))
        pen.setWidthF(float(polygon.get("stroke_weight", 1)))
        return pen

    def update_segment(self):
        self.prepareGeometryChange()
        self._polyline = QPolygonF([QPointF(p) for p in self.segment])
        # bounding rect slightly expanded to include pen
        margin = float(self.controller.polygon.get("stroke_weight", 1)) + 1.0
        self._cached_bounding = self._polyline.boundingRect().adjusted(-margin, -margin, margin, margin)
        self.update()

    def boundingRect(self):
        return self._cached_bounding

    def shape(self):
        # Provide a stroked path so mouse events (clicks/right-clicks) hit the line
        path = QPainterPath()
        path.addPolygon(self._polyline)
        stroker = QPainterPathStroker()
        stroker.setWidth(6.0)
        return stroker.createStroke(path)

    def paint(self, painter, option, widget):
        painter.setPen(self._style())
        painter.drawPolyline(self._polyline)

    def hoverEnterEvent(self, event):
        self._hovered = True
        self.update()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self._hovered = False
        self.update()
        super().hoverLeaveEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.editor.select(self.segment)
            event.accept()
        else:
            super().mousePressEvent(event)

    def contextMenuEvent(self, event):
        menu = QMenu()
        add_vertex_action = menu.addAction("Add new vertex")
        chosen_action = menu.exec(event.screenPos())
        if chosen_action == add_vertex_action:
            self.add_vertex_near(event.scenePos())
        event.accept()

    def add_vertex_near(self, scene_pos: QPointF):
        points = self.segment.get_array()
        i = algorithms.nearest_edge(points, scene_pos)
        if i < 0:
            return
        a, b = points[i], points[i + 1]
        self.segment.insert_at(i + 1, QPointF((a.x() + b.x()) / 2, (a.y() + b.y()) / 2))

    # Called by VertexItem when user directly drags a handle
    def on_vertex_moved(self, index: int, scene_pos: QPointF):
        self.segment.set_at(index, QPointF(scene_pos))

    # Called by VertexItem when user wants to delete it
    def delete_vertex(self, index: int):
        self.editor.delete_point(self.segment, index)

    def _on_point_set(self, index: int, _previous):
        self.update_segment()
        if index < len(self.vertex_items):
            self.updating_from_parent = True
            try:
                # "updating_from_parent" flag prevents the handle from
                # reporting this setPos back as a user move
                self.vertex_items[index].setPos(self.mapFromScene(QPointF(self.segment.get_at(index))))
            finally:
                self.updating_from_parent = False

    def _on_structure_changed(self, *_):
        self.update_segment()
        # Handles may be in the middle of their own event handler, so they
        # are replaced once control is back in the event loop
        QTimer.singleShot(0, self._rebuild_handles)

    def _rebuild_handles(self):
        for v_item in self.vertex_items:
            v_item.setParentItem(None)
            sc = self.scene()
            if sc:
                sc.removeItem(v_item)
        self.vertex_items.clear()

        if not self.segment.get_editable():
            return

        self.updating_from_parent = True
        try:
            for i, p in enumerate(self.segment):
                v_item = VertexItem(i, parent=self)
                v_item.setPos(self.mapFromScene(QPointF(p)))
                self.vertex_items.append(v_item)
        finally:
            self.updating_from_parent = False
