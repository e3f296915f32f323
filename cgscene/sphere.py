"""A sphere built from quad strips between lines of latitude."""

from __future__ import annotations

import copy as _copy
import math

from .node import Command, Renderable
from .raster import Primitive
from .tessellation import TessellationHints

_DEFAULT_SLICES = 40
_DEFAULT_STACKS = 20


def _normalize(v: tuple[float, float, float]) -> tuple[float, float, float]:
    length = math.sqrt(sum(c * c for c in v))
    if length == 0.0:
        return (math.nan, math.nan, math.nan)
    return (v[0] / length, v[1] / length, v[2] / length)


class Sphere(Renderable):
    """A sphere centred on the origin with its poles on the z axis."""

    def __init__(self, radius: float = 1.0) -> None:
        super().__init__()
        self._radius = float(radius)
        self._hints: TessellationHints | None = None

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self.set_radius(value)

    @property
    def tessellation_hints(self) -> TessellationHints | None:
        return self._hints

    @tessellation_hints.setter
    def tessellation_hints(self, hints: TessellationHints | None) -> None:
        self.set_tessellation_hints(hints)

    def set_radius(self, radius: float) -> None:
        """Change the radius; the display list goes stale only if it really changed."""
        radius = float(radius)
        if radius != self._radius:
            self._radius = radius
            self.display_list_dirty = True

    def set_tessellation_hints(self, hints: TessellationHints | None) -> None:
        """Use ``hints`` for subdivision; a different hints object makes the display list stale."""
        if hints is not self._hints:
            self._hints = hints
            self.display_list_dirty = True

    def build_display_list(self) -> list[Command]:
        """One quad strip per slice, running from pole to pole."""
        hints = self._hints
        normals = hints.create_normals if hints else True
        texture_coords = hints.create_texture_coords if hints else True
        slices = hints.target_slices if hints else _DEFAULT_SLICES
        stacks = hints.target_stacks if hints else _DEFAULT_STACKS
        if slices > 0 and stacks == 0:
            raise ValueError("a sphere needs at least one stack")
        r = self._radius
        commands: list[Command] = []
        for sl in range(slices):
            theta1 = sl * 2.0 * math.pi / slices
            theta2 = (sl + 1) * 2.0 * math.pi / slices
            commands.append(("glBegin", Primitive.QUAD_STRIP))
            for st in range(stacks + 1):
                phi = st * math.pi / stacks
                sin_phi, cos_phi = math.sin(phi), math.cos(phi)
                pos1 = (r * math.cos(theta1) * sin_phi, r * math.sin(theta1) * sin_phi, r * cos_phi)
                pos2 = (r * math.cos(theta2) * sin_phi, r * math.sin(theta2) * sin_phi, r * cos_phi)
                if normals:
                    commands.append(("glNormal3fv", _normalize(pos1)))
                if texture_coords:
                    t = st / stacks
                    commands.append(("glTexCoord2f", sl / slices, t))
                    commands.append(("glVertex3fv", pos1))
                    commands.append(("glTexCoord2f", (sl + 1) / slices, t))
                    commands.append(("glVertex3fv", pos2))
                else:
                    commands.append(("glVertex3fv", pos1))
                    commands.append(("glVertex3fv", pos2))
            commands.append(("glEnd",))
        return commands

    def copy(self) -> Sphere:
        """A copy with the same name, radius and shared hints, and no display list yet."""
        duplicate = _copy.copy(self)
        duplicate.parents = list(self.parents)
        duplicate.display_list_enabled = False
        duplicate.display_list_dirty = True
        duplicate.display_list = None
        return duplicate