"""A scene graph with render states, rasterisation algorithms and interactive 2D transforms."""

__version__ = "0.1.0"

__all__ = [
    "objects",
    "render_state",
    "tessellation",
    "raster",
    "node",
    "geometry",
    "sphere",
    "events",
]