from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QGraphicsScene,
    QGraphicsView,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtGui import QPainter
from config import DEFAULT_MAX_SEGMENT_SIZE, LOG_FORMAT, LOG_LEVEL, MIN_SEGMENT_SIZE
from polygon_renderer import PolygonRenderer

import logging
import sys

logger = logging.getLogger(__name__)

class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Large polygon editor")
        self.resize(900, 750)
        self._edit_count = 0

        # Setting up scene
        self.scene = QGraphicsScene(self)
        self.graphics_view = QGraphicsView(self.scene)
        self.graphics_view.setRenderHint(QPainter.Antialiasing)

        # Rendering predefined polygon
        self.renderer = PolygonRenderer(self.scene)
        self.polygon_item = self.renderer.render()
        self.controller = self.polygon_item.controller
        self.controller.polygon.edited.connect(self._on_edited)

        # Controls
        self.checkbox_editable = QCheckBox("Editable")
        self.spinbox_segment_size = QSpinBox()
        self.spinbox_segment_size.setRange(MIN_SEGMENT_SIZE, 100000)
        self.spinbox_segment_size.setValue(DEFAULT_MAX_SEGMENT_SIZE)
        self.label_status = QLabel()
        self._update_status()

        controls = QHBoxLayout()
        controls.addWidget(self.checkbox_editable)
        controls.addWidget(QLabel("Max segment size"))
        controls.addWidget(self.spinbox_segment_size)
        controls.addStretch(1)
        controls.addWidget(self.label_status)

        layout = QVBoxLayout()
        layout.addLayout(controls)
        layout.addWidget(self.graphics_view)
        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        self.checkbox_editable.toggled.connect(self._on_editable_toggled)
        self.spinbox_segment_size.valueChanged.connect(self._on_segment_size_changed)

    def _on_editable_toggled(self, checked: bool):
        self.controller.set_options({"editable": checked})
        self._update_status()

    def _on_segment_size_changed(self, value: int):
        # Regenerates the segments when editing is on
        self.controller.set_options({"max_segment_size": value})
        self._update_status()

    def _on_edited(self):
        self._edit_count += 1
        self._update_status()

    def _update_status(self):
        paths = self.controller.polygon.get_paths()
        segments = sum(len(e.segments) for e in self.controller.editors)
        self.label_status.setText(
            f"{len(paths)} rings, {sum(len(p) for p in paths)} vertices, "
            f"{segments} segments, {self._edit_count} edits")


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    logger.info("Editor window shown")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
