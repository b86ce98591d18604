"""Shared pytest fixtures for the editing tests."""

from collections.abc import Iterator

import pytest
from PySide6.QtCore import QCoreApplication

from model import Polygon


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> Iterator[QCoreApplication]:
    """Provide a Qt application object for the whole session."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def make_polygon():
    """Build a polygon whose rings are lists of distinct opaque points."""

    def _make(*ring_sizes: int, prefix: str = "p") -> Polygon:
        rings = []
        for r, size in enumerate(ring_sizes):
            rings.append([f"{prefix}{r}.{i}" for i in range(size)])
        return Polygon(rings, {"stroke_color": "#112233"})

    return _make


class SignalRecorder:
    """Collects the arguments of every emission of a signal."""

    def __init__(self, signal) -> None:
        self.calls: list[tuple] = []
        signal.connect(self._record)

    def _record(self, *args) -> None:
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def record():
    return SignalRecorder
