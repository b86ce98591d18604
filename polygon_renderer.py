from config import DEFAULT_POLYGON_OPTIONS, DEMO_INNER_VERTICES, DEMO_OUTER_VERTICES, DEMO_RADIUS
from controller import PolygonEditController
from graphics.polygon_item import PolygonItem
from model import Polygon
from PySide6.QtCore import QPointF
from PySide6.QtWidgets import QGraphicsScene

import math

def make_ring(center: QPointF, radius: float, count: int, wobble: float = 0.0, lobes: int = 7) -> list[QPointF]:
    points = []
    for i in range(count):
        a = 2 * math.pi * i / count
        r = radius * (1.0 + wobble * math.sin(lobes * a))
        points.append(QPointF(center.x() + r * math.cos(a), center.y() + r * math.sin(a)))
    return points

def make_demo_polygon() -> Polygon:
    # Outer ring with many vertices and a hole
    center = QPointF(0, 0)
    outer = make_ring(center, DEMO_RADIUS, DEMO_OUTER_VERTICES, wobble=0.12)
    inner = make_ring(center, DEMO_RADIUS * 0.35, DEMO_INNER_VERTICES, wobble=0.2, lobes=5)
    return Polygon([outer, inner], DEFAULT_POLYGON_OPTIONS)

class PolygonRenderer:
    def __init__(self, scene: QGraphicsScene):
        self.scene = scene

    def render(self, options: dict | None = None) -> PolygonItem:
        self.scene.clear()
        controller = PolygonEditController(make_demo_polygon(), options)
        polygon_item = PolygonItem(controller)
        # Rings are given in scene coordinates
        polygon_item.setPos(0, 0)
        self.scene.addItem(polygon_item)
        return polygon_item
