"""Raster algorithms for lines, circles, arcs and area fills, plus demo scenes."""

from __future__ import annotations

import math
import struct
from enum import Enum
from typing import Iterable, Sequence

RGB = tuple[float, float, float]
Point = tuple[int, int]

BLACK: RGB = (0.0, 0.0, 0.0)
WHITE: RGB = (1.0, 1.0, 1.0)
RED: RGB = (1.0, 0.0, 0.0)
GREEN: RGB = (0.0, 1.0, 0.0)
BLUE: RGB = (0.0, 0.0, 1.0)
YELLOW: RGB = (1.0, 1.0, 0.0)
ORANGE: RGB = (1.0, 0.5, 0.0)

# Height of the edge table used by the scan-line fill.
SCANLINE_LIMIT = 2048


class Primitive(Enum):
    """How a sequence of vertices is assembled into shapes."""

    POINTS = "points"
    LINES = "lines"
    LINE_STRIP = "line_strip"
    LINE_LOOP = "line_loop"
    TRIANGLES = "triangles"
    TRIANGLE_STRIP = "triangle_strip"
    TRIANGLE_FAN = "triangle_fan"
    QUADS = "quads"
    QUAD_STRIP = "quad_strip"
    POLYGON = "polygon"


def _color(value: Iterable[float]) -> RGB:
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError("a color needs three components (r, g, b)")
    return components  # type: ignore[return-value]


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


class Canvas:
    """A grid of RGB pixels addressed by integer ``(x, y)``."""

    def __init__(self, width: int, height: int, background: Iterable[float] = WHITE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        self.width = width
        self.height = height
        self.background = _color(background)
        self._pixels = [[self.background] * width for _ in range(height)]

    def __contains__(self, point: object) -> bool:
        if not isinstance(point, tuple) or len(point) != 2:
            return False
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> RGB:
        """Return the pixel at ``(x, y)``; raise IndexError outside the canvas."""
        if (x, y) not in self:
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return self._pixels[y][x]

    def set(self, x: int, y: int, color: Iterable[float]) -> None:
        """Set the pixel at ``(x, y)``; pixels outside the canvas are clipped."""
        if (x, y) in self:
            self._pixels[y][x] = _color(color)

    def plot(self, points: Iterable[Point], color: Iterable[float]) -> None:
        """Set every point in ``points`` to ``color``."""
        rgb = _color(color)
        for x, y in points:
            self.set(x, y, rgb)


def dda_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Digital differential analyser; a zero-length line yields no points."""
    dx = x_end - x_start
    dy = y_end - y_start
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return []
    x, y = float(x_start), float(y_start)
    x_inc, y_inc = dx / steps, dy / steps
    points = []
    for _ in range(steps + 1):
        points.append((int(x + 0.5), int(y + 0.5)))
        x += x_inc
        y += y_inc
    return points


def midpoint_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Midpoint line algorithm, stepping along the dominant axis."""
    dx = x_end - x_start
    dy = y_end - y_start
    abs_dx, abs_dy = abs(dx), abs(dy)
    x_inc = 1 if dx > 0 else -1
    y_inc = 1 if dy > 0 else -1
    x, y = x_start, y_start
    points = []
    if abs_dx >= abs_dy:
        err = 2 * abs_dy - abs_dx
        for _ in range(abs_dx + 1):
            points.append((x, y))
            if err >= 0:
                y += y_inc
                err -= 2 * abs_dx
            err += 2 * abs_dy
            x += x_inc
    else:
        err = 2 * abs_dx - abs_dy
        for _ in range(abs_dy + 1):
            points.append((x, y))
            if err >= 0:
                x += x_inc
                err -= 2 * abs_dy
            err += 2 * abs_dx
            y += y_inc
    return points


def bresenham_line(x_start: int, y_start: int, x_end: int, y_end: int) -> list[Point]:
    """Bresenham's integer line algorithm; always ends exactly on the end point."""
    dx = abs(x_end - x_start)
    dy = abs(y_end - y_start)
    sx = 1 if x_start < x_end else -1
    sy = 1 if y_start < y_end else -1
    err = dx - dy
    x, y = x_start, y_start
    points = [(x, y)]
    while x != x_end or y != y_end:
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        points.append((x, y))
    return points


def _octants(cx: int, cy: int, x: int, y: int) -> list[Point]:
    return [
        (cx + x, cy + y),
        (cx - x, cy + y),
        (cx + x, cy - y),
        (cx - x, cy - y),
        (cx + y, cy + x),
        (cx - y, cy + x),
        (cx + y, cy - x),
        (cx - y, cy - x),
    ]


def midpoint_circle(center_x: int, center_y: int, radius: int) -> list[Point]:
    """Midpoint circle; eight symmetric points per step, duplicates kept."""
    x, y = 0, radius
    d = 1 - radius
    points: list[Point] = []
    while x <= y:
        points.extend(_octants(center_x, center_y, x, y))
        if d < 0:
            d += 2 * x + 3
        else:
            d += 2 * (x - y) + 5
            y -= 1
        x += 1
    return points


def bresenham_circle(center_x: int, center_y: int, radius: int) -> list[Point]:
    """Bresenham circle; eight symmetric points per step, duplicates kept."""
    x, y = 0, radius
    d = 3 - 2 * radius
    points: list[Point] = []
    while x <= y:
        points.extend(_octants(center_x, center_y, x, y))
        if d < 0:
            d = d + 4 * x + 6
        else:
            d = d + 4 * (x - y) + 10
            y -= 1
        x += 1
    return points


def arc_points(
    center_x: int, center_y: int, radius: int, start_angle: float, end_angle: float
) -> list[Point]:
    """Arc from ``start_angle`` to ``end_angle`` (degrees, counter-clockwise) by incremental rotation."""
    radians_start = _f32(math.radians(start_angle))
    radians_end = _f32(math.radians(end_angle))
    delta = _f32(0.01)
    x, y = math.cos(radians_start), math.sin(radians_start)
    cos_delta, sin_delta = math.cos(delta), math.sin(delta)
    points = []
    angle = radians_start
    while angle <= radians_end:
        points.append((center_x + int(radius * x), center_y + int(radius * y)))
        x, y = x * cos_delta - y * sin_delta, x * sin_delta + y * cos_delta
        angle += delta
    return points


class _Edge:
    __slots__ = ("x", "delta_x", "y_max")

    def __init__(self, x: float, delta_x: float, y_max: int) -> None:
        self.x = x
        self.delta_x = delta_x
        self.y_max = y_max


def scanline_fill(vertices: Sequence[tuple[int, int]]) -> list[Point]:
    """Pixels inside the polygon, found with an edge table and an active edge list.

    Each scanline covers ``ceil(x_left) .. floor(x_right)`` between pairs of
    crossings; an edge spans from its lower y up to, not including, its upper y.
    """
    if not vertices:
        return []
    table: list[list[_Edge]] = [[] for _ in range(SCANLINE_LIMIT)]
    n = len(vertices)
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % n]
        if y1 == y2:
            continue
        y_min, y_max = min(y1, y2), max(y1, y2)
        if not 0 <= y_min < SCANLINE_LIMIT:
            raise ValueError(f"vertex y must lie in [0, {SCANLINE_LIMIT}), got {y_min}")
        x = float(x1 if y1 < y2 else x2)
        edge = _Edge(x, (x1 - x2) / (y1 - y2), y_max)
        bucket = table[y_min]
        position = next((k for k, e in enumerate(bucket) if not e.x < x), len(bucket))
        bucket.insert(position, edge)

    scan_y = next((y for y, bucket in enumerate(table) if bucket), SCANLINE_LIMIT)
    active: list[_Edge] = []
    points: list[Point] = []
    while scan_y < SCANLINE_LIMIT or active:
        if scan_y < SCANLINE_LIMIT:
            active.extend(_Edge(e.x, e.delta_x, e.y_max) for e in table[scan_y])
        active.sort(key=lambda e: e.x)
        for left, right in zip(active[::2], active[1::2]):
            start, end = math.ceil(left.x), math.floor(right.x)
            points.extend((x, scan_y) for x in range(start, end + 1))
        scan_y += 1
        remaining = []
        for edge in active:
            if edge.y_max != scan_y:
                edge.x += edge.delta_x
                remaining.append(edge)
        active = remaining
    return points


def _neighbours(x: int, y: int) -> list[Point]:
    # Pushed in reverse so the left neighbour is visited first.
    return [(x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)]


def boundary_fill(canvas: Canvas, x: int, y: int, fill: Iterable[float], boundary: Iterable[float]) -> None:
    """Four-connected fill from ``(x, y)`` up to pixels of the boundary color."""
    fill_rgb, boundary_rgb = _color(fill), _color(boundary)
    stack = [(x, y)]
    while stack:
        px, py = stack.pop()
        if (px, py) not in canvas:
            continue
        current = canvas.get(px, py)
        if current == boundary_rgb or current == fill_rgb:
            continue
        canvas.set(px, py, fill_rgb)
        stack.extend(_neighbours(px, py))


def flood_fill(canvas: Canvas, x: int, y: int, fill: Iterable[float], old: Iterable[float]) -> None:
    """Four-connected fill replacing the region of color ``old`` that holds ``(x, y)``."""
    fill_rgb, old_rgb = _color(fill), _color(old)
    if fill_rgb == old_rgb:
        raise ValueError("fill color must differ from the color being replaced")
    stack = [(x, y)]
    while stack:
        px, py = stack.pop()
        if (px, py) not in canvas or canvas.get(px, py) != old_rgb:
            continue
        canvas.set(px, py, fill_rgb)
        stack.extend(_neighbours(px, py))


def star_triangles() -> list[tuple[tuple[float, float], ...]]:
    """The ten triangles of the five-pointed star, fanned around its centre."""
    big_r, small_r = 100.0, 40.0
    a, b = 200.0, 300.0
    c, d = a, b - 100
    centre = (200.0, 200.0)
    ring = [
        (200.0, 300.0),
        (c - 0.59 * small_r, d + 0.81 * small_r),
        (a - 0.95 * big_r, b - big_r + 0.31 * big_r),
        (c - 0.95 * small_r, d - 0.31 * small_r),
        (a - 0.59 * big_r, b - big_r - 0.81 * big_r),
        (c, d - small_r),
        (a + 0.59 * big_r, b - big_r - 0.81 * big_r),
        (c + 0.95 * small_r, d - 0.31 * small_r),
        (a + 0.95 * big_r, b - big_r + 0.31 * big_r),
        (c + 0.59 * small_r, d + 0.81 * small_r),
    ]
    return [(centre, ring[i], ring[(i + 1) % len(ring)]) for i in range(len(ring))]


Vertex = tuple[float, float, RGB]
Batch = tuple[Primitive, list[Vertex]]


def _batch(primitive: Primitive, spec: Iterable[tuple[RGB, Iterable[tuple[float, float]]]]) -> Batch:
    return primitive, [(float(x), float(y), color) for color, pts in spec for x, y in pts]


def _star() -> list[Batch]:
    triangles = star_triangles()
    fills = [
        _batch(Primitive.TRIANGLES, [(YELLOW if i % 2 == 0 else ORANGE, tri)])
        for i, tri in enumerate(triangles)
    ]
    outlines = [_batch(Primitive.LINE_LOOP, [(ORANGE, tri)]) for tri in triangles]
    return fills + outlines


_DEMOS = {
    "points": lambda: [_batch(Primitive.POINTS, [(BLACK, [(200, 200), (300, 300), (400, 400)])])],
    "lines": lambda: [
        _batch(
            Primitive.LINES,
            [(BLACK, [(100, 300), (200, 400), (200, 300), (400, 400), (100, 400), (500, 100)])],
        )
    ],
    "strip": lambda: [_batch(Primitive.LINE_STRIP, [(BLACK, [(100, 400), (500, 200), (500, 400)])])],
    "loop": lambda: [
        _batch(Primitive.LINE_LOOP, [(BLACK, [(100, 300), (200, 400), (200, 300), (400, 400)])])
    ],
    "triangles": lambda: [
        _batch(
            Primitive.TRIANGLES,
            [(BLACK, [(100, 300), (200, 400), (200, 300), (50, 50), (100, 100), (200, 100)])],
        )
    ],
    "triangle_strip": lambda: [
        _batch(
            Primitive.TRIANGLE_STRIP,
            [
                (RED, [(200, 200), (200, 100), (300, 200)]),
                (GREEN, [(400, 100)]),
                (BLUE, [(500, 200)]),
            ],
        )
    ],
    "triangle_fan": lambda: [
        _batch(
            Primitive.TRIANGLE_FAN,
            [
                (RED, [(100, 100), (100, 200), (150, 170)]),
                (GREEN, [(170, 130)]),
                (BLUE, [(150, 70)]),
            ],
        )
    ],
    "quads": lambda: [
        _batch(
            Primitive.QUADS,
            [
                (BLACK, [(100, 100), (100, 0), (0, 0), (0, 100)]),
                (RED, [(400, 400), (100, 400), (100, 100), (400, 100)]),
            ],
        )
    ],
    "quad_strip": lambda: [
        _batch(
            Primitive.QUAD_STRIP,
            [
                (RED, [(0, 0), (100, 0), (0, 100), (100, 100)]),
                (GREEN, [(100, 400), (400, 400)]),
            ],
        )
    ],
    "polygon": lambda: [
        _batch(Primitive.POLYGON, [(BLACK, [(100, 100), (200, 130), (170, 70), (70, 40)])])
    ],
    "star": _star,
}


def demo_names() -> tuple[str, ...]:
    """Names accepted by :func:`demo_scene`, in a fixed order."""
    return tuple(_DEMOS)


def demo_scene(name: str) -> list[Batch]:
    """The primitive batches of a demo drawing, each vertex carrying its color.

    Every demo is drawn on a white background.
    """
    try:
        build = _DEMOS[name]
    except KeyError:
        raise ValueError(f"unknown demo {name!r}; choose from {', '.join(_DEMOS)}") from None
    return build()