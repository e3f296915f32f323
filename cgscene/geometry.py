"""Line segments and line strips that can be moved, rotated and scaled in the plane."""

from __future__ import annotations

import math
import struct
from typing import Any, Iterable

from .node import Renderable
from .raster import Primitive
from .render_state import GLState

Vec3 = tuple[float, float, float]

# Value of pi used by the segment's rotation.
_SEGMENT_PI = 3.1415926

_COUNT = struct.Struct("<Q")
_POINT = struct.Struct("<ddd")


def _vec3(point: Iterable[float]) -> Vec3:
    components = tuple(float(c) for c in point)
    if len(components) != 3:
        raise ValueError("a point needs three coordinates (x, y, z)")
    return components  # type: ignore[return-value]


def _scale_about(point: Vec3, sx: float, sy: float, cx: float, cy: float) -> Vec3:
    x, y, z = point
    return (cx + sx * (x - cx), cy + sy * (y - cy), z)


def _draw(context: GLState, primitive: Primitive, vertex_call: str, points: Iterable[Vec3]) -> None:
    context.color = (1.0, 1.0, 1.0, 1.0)
    context.calls.append(("glColor3f", 1.0, 1.0, 1.0))
    context.calls.append(("glBegin", primitive))
    context.calls.extend((vertex_call, *p) for p in points)
    context.calls.append(("glEnd",))


class LineSegment(Renderable):
    """A straight segment between two points."""

    def __init__(self, start: Iterable[float] = (0.0, 0.0, 0.0), end: Iterable[float] = (0.0, 0.0, 0.0)) -> None:
        super().__init__()
        self.start = _vec3(start)
        self.end = _vec3(end)

    def render(self, context: GLState | None, camera: Any) -> bool:
        if context is None or camera is None:
            return False
        _draw(context, Primitive.LINES, "glVertex3f", (self.start, self.end))
        return True

    def translate(self, tx: float, ty: float) -> None:
        self.start = (self.start[0] + tx, self.start[1] + ty, self.start[2])
        self.end = (self.end[0] + tx, self.end[1] + ty, self.end[2])

    def rotate(self, angle: float, cx: float, cy: float) -> None:
        """Rotate counter-clockwise by ``angle`` degrees about ``(cx, cy)``."""
        radians = angle * (_SEGMENT_PI / 180.0)
        cos_t, sin_t = math.cos(radians), math.sin(radians)

        def turn(p: Vec3) -> Vec3:
            rx, ry = p[0] - cx, p[1] - cy
            return (cos_t * rx - sin_t * ry + cx, sin_t * rx + cos_t * ry + cy, p[2])

        self.start = turn(self.start)
        self.end = turn(self.end)

    def scale(self, sx: float, sy: float, cx: float, cy: float) -> None:
        """Scale by ``(sx, sy)`` about ``(cx, cy)``."""
        self.start = _scale_about(self.start, sx, sy, cx, cy)
        self.end = _scale_about(self.end, sx, sy, cx, cy)


class LineStrip(Renderable):
    """An open polyline through a sequence of points."""

    def __init__(self, points: Iterable[Iterable[float]] = ()) -> None:
        super().__init__()
        self.points: list[Vec3] = [_vec3(p) for p in points]

    def add_point(self, point: Iterable[float]) -> None:
        self.points.append(_vec3(point))

    def render(self, context: GLState | None, camera: Any) -> bool:
        """Draw the polyline; it needs at least two points."""
        if len(self.points) < 2 or context is None:
            return False
        _draw(context, Primitive.LINE_STRIP, "glVertex3d", self.points)
        return True

    def translate(self, tx: float, ty: float) -> None:
        self.points = [(x + tx, y + ty, z) for x, y, z in self.points]

    def rotate(self, angle: float, cx: float, cy: float) -> None:
        """Rotate counter-clockwise by ``angle`` degrees.

        The matrix is composed as translate(-c), rotate, translate(c), so the
        fixed point of the rotation is ``(-cx, -cy)``.
        """
        if not self.points:
            return
        radians = math.radians(angle)
        cos_t, sin_t = math.cos(radians), math.sin(radians)
        rotated = []
        for x, y, z in self.points:
            px, py = x + cx, y + cy
            rotated.append((cos_t * px - sin_t * py - cx, sin_t * px + cos_t * py - cy, z))
        self.points = rotated

    def scale(self, sx: float, sy: float, cx: float, cy: float) -> None:
        """Scale by ``(sx, sy)`` about ``(cx, cy)``."""
        self.points = [_scale_about(p, sx, sy, cx, cy) for p in self.points]

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["points"] = [list(p) for p in self.points]
        return data

    def load_dict(self, data: dict[str, Any]) -> None:
        super().load_dict(data)
        try:
            points = [_vec3(p) for p in data["points"]]
        except KeyError:
            raise ValueError("serialized line strip has no 'points'") from None
        except TypeError:
            raise ValueError("serialized 'points' must be a list of coordinates") from None
        self.points = points

    def to_bytes(self) -> bytes:
        """Point count as little-endian uint64, then x, y, z of each point as doubles."""
        return _COUNT.pack(len(self.points)) + b"".join(_POINT.pack(*p) for p in self.points)

    @classmethod
    def from_bytes(cls, data: bytes) -> LineStrip:
        """Read a strip written by :meth:`to_bytes`."""
        if len(data) < _COUNT.size:
            raise ValueError("data too short for a point count")
        (count,) = _COUNT.unpack_from(data)
        body = data[_COUNT.size:]
        if len(body) != count * _POINT.size:
            raise ValueError(f"expected {count} points, got {len(body)} bytes of point data")
        return cls(_POINT.iter_unpack(body))