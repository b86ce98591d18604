from config import VERTEX_DIAMETER, VERTEX_COLOR
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QMenu,
)
from PySide6.QtGui import (
    QBrush,
    QColor,
    QPen,
)

# Draggable handle of a single point of a segment
class VertexItem(QGraphicsEllipseItem):
    def __init__(self, index: int, parent=None):
        radius = VERTEX_DIAMETER / 2
        super().__init__(-radius, -radius, radius * 2, radius * 2, parent)
        self.index = index
        self.setBrush(QBrush(QColor(VERTEX_COLOR)))
        self.setPen(QPen(QColor("black")))
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsScenePositionChanges, True)
        # Setting Z value to be on top of segments
        self.setZValue(2.0)

    # Virtual method which intercepts changes of the item state
    def itemChange(self, change: QGraphicsItem.GraphicsItemChange, value):
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionHasChanged and self.parentItem():
            parent = self.parentItem()
            # We dont inform parent if the position change was caused by parent
            # itself (to avoid infinite loops) - we only inform parent when
            # the user drags the vertex directly
            if not parent.updating_from_parent:
                parent.on_vertex_moved(self.index, parent.mapToScene(value))
        return super().itemChange(change, value)

    def contextMenuEvent(self, event):
        menu = QMenu()
        del_action = menu.addAction("Delete vertex")
        chosen_action = menu.exec(event.screenPos())
        if chosen_action == del_action and self.parentItem():
            self.parentItem().delete_vertex(self.index)
        event.accept()
