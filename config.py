import os

# Edit segments
DEFAULT_MAX_SEGMENT_SIZE = 100
MIN_SEGMENT_SIZE = 2
DEFAULT_HIGHLIGHT_COLOR = "#000000"

# A ring needs at least this many points to stay in the polygon
MIN_RING_POINTS = 3

# Styling passed through to the polygon
DEFAULT_POLYGON_OPTIONS = {
    "stroke_color": "#3366cc",
    "stroke_opacity": 1.0,
    "stroke_weight": 2,
    "fill_color": "#3366cc",
    "fill_opacity": 0.25,
}

# Vertex handles
VERTEX_DIAMETER = 8
VERTEX_COLOR = "white"

# Demo scene
DEMO_OUTER_VERTICES = 1500
DEMO_INNER_VERTICES = 240
DEMO_RADIUS = 260.0

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = os.environ.get("POLYGON_EDITOR_LOG_LEVEL", "INFO")
