"""Render modes and attributes, applied to a recorded graphics state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from .objects import SceneObject


class RenderStateType(IntEnum):
    """Kinds of render attribute; indexed kinds occupy consecutive values."""

    VERTEX_ATTRIB = 0
    VERTEX_ATTRIB0 = 0
    VERTEX_ATTRIB1 = 1
    VERTEX_ATTRIB2 = 2
    VERTEX_ATTRIB3 = 3
    VERTEX_ATTRIB4 = 4
    VERTEX_ATTRIB5 = 5
    VERTEX_ATTRIB6 = 6
    VERTEX_ATTRIB7 = 7

    ALPHA_FUNC = 8
    BLEND_COLOR = 9
    BLEND_EQUATION = 10
    BLEND_FUNC = 11
    COLOR = 12
    COLOR_MASK = 13
    CULL_FACE = 14
    DEPTH_FUNC = 15
    DEPTH_MASK = 16
    DEPTH_RANGE = 17
    FOG = 18
    FRONT_FACE = 19
    POLYGON_MODE = 20
    HINT = 21
    LIGHT_MODEL = 22
    LINE_STIPPLE = 23
    LINE_WIDTH = 24
    LOGIC_OP = 25
    MATERIAL = 26
    NORMAL = 27
    PIXEL_TRANSFER = 28
    POINT_PARAMETER = 29
    POINT_SIZE = 30
    POLYGON_OFFSET = 31
    POLYGON_STIPPLE = 32
    SAMPLE_COVERAGE = 33
    SECONDARY_COLOR = 34
    SHADE_MODEL = 35
    STENCIL_FUNC = 36
    STENCIL_MASK = 37
    STENCIL_OP = 38
    GLSL_PROGRAM = 39

    LIGHT = 40
    LIGHT0 = 40
    LIGHT1 = 41
    LIGHT2 = 42
    LIGHT3 = 43
    LIGHT4 = 44
    LIGHT5 = 45
    LIGHT6 = 46
    LIGHT7 = 47

    CLIP_PLANE = 48
    CLIP_PLANE0 = 48
    CLIP_PLANE1 = 49
    CLIP_PLANE2 = 50
    CLIP_PLANE3 = 51
    CLIP_PLANE4 = 52
    CLIP_PLANE5 = 53

    TEXTURE_IMAGE_UNIT = 54
    TEXTURE_IMAGE_UNIT0 = 54
    TEXTURE_IMAGE_UNIT1 = 55
    TEXTURE_IMAGE_UNIT2 = 56
    TEXTURE_IMAGE_UNIT3 = 57
    TEXTURE_IMAGE_UNIT4 = 58
    TEXTURE_IMAGE_UNIT5 = 59
    TEXTURE_IMAGE_UNIT6 = 60
    TEXTURE_IMAGE_UNIT7 = 61
    TEXTURE_IMAGE_UNIT8 = 62
    TEXTURE_IMAGE_UNIT9 = 63
    TEXTURE_IMAGE_UNIT10 = 64
    TEXTURE_IMAGE_UNIT11 = 65
    TEXTURE_IMAGE_UNIT12 = 66
    TEXTURE_IMAGE_UNIT13 = 67
    TEXTURE_IMAGE_UNIT14 = 68
    TEXTURE_IMAGE_UNIT15 = 69

    TEX_GEN = 86
    TEX_GEN0 = 86
    TEX_GEN1 = 87
    TEX_GEN2 = 88
    TEX_GEN3 = 89
    TEX_GEN4 = 90
    TEX_GEN5 = 91
    TEX_GEN6 = 92
    TEX_GEN7 = 93
    TEX_GEN8 = 94
    TEX_GEN9 = 95
    TEX_GEN10 = 96
    TEX_GEN11 = 97
    TEX_GEN12 = 98
    TEX_GEN13 = 99
    TEX_GEN14 = 100
    TEX_GEN15 = 101

    TEX_ENV = 94
    TEX_ENV0 = 94
    TEX_ENV1 = 95
    TEX_ENV2 = 96
    TEX_ENV3 = 97
    TEX_ENV4 = 98
    TEX_ENV5 = 99
    TEX_ENV6 = 100
    TEX_ENV7 = 101
    TEX_ENV8 = 102
    TEX_ENV9 = 103
    TEX_ENV10 = 104
    TEX_ENV11 = 105
    TEX_ENV12 = 106
    TEX_ENV13 = 107
    TEX_ENV14 = 108
    TEX_ENV15 = 109

    TEXTURE_MATRIX = 102
    TEXTURE_MATRIX0 = 102
    TEXTURE_MATRIX1 = 103
    TEXTURE_MATRIX2 = 104
    TEXTURE_MATRIX3 = 105
    TEXTURE_MATRIX4 = 106
    TEXTURE_MATRIX5 = 107
    TEXTURE_MATRIX6 = 108
    TEXTURE_MATRIX7 = 109
    TEXTURE_MATRIX8 = 110
    TEXTURE_MATRIX9 = 111
    TEXTURE_MATRIX10 = 112
    TEXTURE_MATRIX11 = 113
    TEXTURE_MATRIX12 = 114
    TEXTURE_MATRIX13 = 115
    TEXTURE_MATRIX14 = 116
    TEXTURE_MATRIX15 = 117

    RENDER_STATE_COUNT = 110
    NONE = 111


class Capability(IntEnum):
    """Switchable pipeline capabilities, valued as their GL enumerants."""

    BLEND = 0x0BE2
    CULL_FACE = 0x0B44
    DEPTH_TEST = 0x0B71
    STENCIL_TEST = 0x0B90
    DITHER = 0x0BD0
    POLYGON_OFFSET_FILL = 0x8037
    POLYGON_OFFSET_LINE = 0x2A02
    POLYGON_OFFSET_POINT = 0x2A01
    COLOR_LOGIC_OP = 0x0BF2
    MULTISAMPLE = 0x809D

    POINT_SMOOTH = 0x0B10
    LINE_SMOOTH = 0x0B20
    POLYGON_SMOOTH = 0x0B41

    LINE_STIPPLE = 0x0B24
    POLYGON_STIPPLE = 0x0B42

    POINT_SPRITE = 0x8861
    PROGRAM_POINT_SIZE = 0x8642

    ALPHA_TEST = 0x0BC0
    LIGHTING = 0x0B50
    COLOR_SUM = 0x8458
    FOG = 0x0B60
    NORMALIZE = 0x0BA1
    RESCALE_NORMAL = 0x803A

    VERTEX_PROGRAM_TWO_SIDE = 0x8643

    TEXTURE_CUBE_MAP_SEAMLESS = 0x884F

    CLIP_DISTANCE0 = 0x3000
    CLIP_DISTANCE1 = 0x3001
    CLIP_DISTANCE2 = 0x3002
    CLIP_DISTANCE3 = 0x3003
    CLIP_DISTANCE4 = 0x3004
    CLIP_DISTANCE5 = 0x3005
    CLIP_DISTANCE6 = 0x3006
    CLIP_DISTANCE7 = 0x3007

    SAMPLE_ALPHA_TO_COVERAGE = 0x809E
    SAMPLE_ALPHA_TO_ONE = 0x809F
    SAMPLE_COVERAGE = 0x80A0

    ENABLE_COUNT = 0x80A1
    UNKNOWN_ENABLE = 0x80A2


class PolygonFace(IntEnum):
    FRONT = 0x0404
    BACK = 0x0405
    FRONT_AND_BACK = 0x0408


class ColorMaterial(IntEnum):
    EMISSION = 0x1600
    AMBIENT = 0x1200
    DIFFUSE = 0x1201
    SPECULAR = 0x1202
    AMBIENT_AND_DIFFUSE = 0x1602


class PolygonMode(IntEnum):
    POINT = 0x1B00
    LINE = 0x1B01
    FILL = 0x1B02


class ShadeModel(IntEnum):
    FLAT = 0x1D00
    SMOOTH = 0x1D01


class FrontFace(IntEnum):
    CW = 0x0900
    CCW = 0x0901


def _default_polygon_modes() -> dict[PolygonFace, PolygonMode]:
    return {PolygonFace.FRONT: PolygonMode.FILL, PolygonFace.BACK: PolygonMode.FILL}


@dataclass
class GLState:
    """The graphics state machine that render states are applied to.

    Fields hold the current values; ``calls`` records every state change in
    order as ``(operation, *arguments)`` tuples.
    """

    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    point_size: float = 1.0
    line_width: float = 1.0
    line_stipple: tuple[int, int] = (1, 0xFFFF)
    polygon_mode: dict[PolygonFace, PolygonMode] = field(default_factory=_default_polygon_modes)
    enabled: dict[Capability, bool] = field(default_factory=dict)
    calls: list[tuple] = field(default_factory=list)

    def is_enabled(self, capability: Capability) -> bool:
        return self.enabled.get(capability, False)


class RenderState(SceneObject, ABC):
    """A single render attribute."""

    state_type: ClassVar[RenderStateType] = RenderStateType.NONE

    @abstractmethod
    def apply(self, state: GLState, index: int = 0) -> None:
        """Apply this attribute to ``state``; ``index`` selects a unit such as a light."""


class Color(RenderState):
    state_type = RenderStateType.COLOR

    def __init__(self, value=(1.0, 1.0, 1.0, 1.0)) -> None:
        super().__init__()
        components = tuple(float(c) for c in value)
        if len(components) != 4:
            raise ValueError("a color needs four components (r, g, b, a)")
        self.value = components

    def apply(self, state: GLState, index: int = 0) -> None:
        state.color = self.value
        state.calls.append(("glColor4f", *self.value))


class PointSize(RenderState):
    state_type = RenderStateType.POINT_SIZE

    def __init__(self, point_size: float = 1.0) -> None:
        super().__init__()
        self.point_size = float(point_size)

    def apply(self, state: GLState, index: int = 0) -> None:
        state.point_size = self.point_size
        state.calls.append(("glPointSize", self.point_size))


class LineWidth(RenderState):
    state_type = RenderStateType.LINE_WIDTH

    def __init__(self, line_width: float = 1.0) -> None:
        super().__init__()
        self.line_width = float(line_width)

    def apply(self, state: GLState, index: int = 0) -> None:
        state.line_width = self.line_width
        state.calls.append(("glLineWidth", self.line_width))


class LineStipple(RenderState):
    """Dash pattern of lines; the pattern is a 16-bit mask."""

    state_type = RenderStateType.LINE_STIPPLE

    def __init__(self, factor: int = 1, pattern: int = 0xFFFF) -> None:
        super().__init__()
        self.factor = int(factor)
        self.pattern = pattern

    @property
    def pattern(self) -> int:
        return self._pattern

    @pattern.setter
    def pattern(self, value: int) -> None:
        self._pattern = int(value) & 0xFFFF

    def apply(self, state: GLState, index: int = 0) -> None:
        state.line_stipple = (self.factor, self.pattern)
        state.calls.append(("glLineStipple", self.factor, self.pattern))


class PolygonModeState(RenderState):
    state_type = RenderStateType.POLYGON_MODE

    def __init__(
        self,
        front_face: PolygonMode = PolygonMode.FILL,
        back_face: PolygonMode = PolygonMode.FILL,
    ) -> None:
        super().__init__()
        self.front_face = PolygonMode(front_face)
        self.back_face = PolygonMode(back_face)

    def apply(self, state: GLState, index: int = 0) -> None:
        if self.front_face == self.back_face:
            state.polygon_mode[PolygonFace.FRONT] = self.front_face
            state.polygon_mode[PolygonFace.BACK] = self.front_face
            state.calls.append(("glPolygonMode", PolygonFace.FRONT_AND_BACK, self.front_face))
        else:
            state.polygon_mode[PolygonFace.FRONT] = self.front_face
            state.calls.append(("glPolygonMode", PolygonFace.FRONT, self.front_face))
            state.polygon_mode[PolygonFace.BACK] = self.back_face
            state.calls.append(("glPolygonMode", PolygonFace.BACK, self.back_face))


class EnableSet(SceneObject):
    """A set of capability switches with a list of default enables."""

    def __init__(self) -> None:
        super().__init__()
        self.enables: list[Capability] = [Capability.DITHER, Capability.MULTISAMPLE]
        self.modes: dict[Capability, bool] = {}

    def enable(self, capability: Capability) -> None:
        self.modes[capability] = True

    def disable(self, capability: Capability) -> None:
        self.modes[capability] = False

    def is_enabled(self, capability: Capability) -> bool:
        return self.modes.get(capability, False)

    def disable_all(self) -> None:
        self.modes.clear()
        self.enables.clear()


@dataclass
class RenderStateSlot:
    """A render state bound to a unit index (``-1`` when unbound)."""

    render_state: RenderState
    index: int = -1

    def apply(self, state: GLState) -> None:
        self.render_state.apply(state, self.index)

    def slot_type(self) -> RenderStateType:
        """The state kind offset by the index, e.g. ``LIGHT`` at index 2 is ``LIGHT2``."""
        base = self.render_state.state_type
        if self.index > 0:
            return RenderStateType(int(base) + self.index)
        return base


class RenderStateSet(SceneObject):
    """Capability switches plus render states, applied together."""

    def __init__(self) -> None:
        super().__init__()
        self.slots: list[RenderStateSlot] = []
        self.modes: dict[Capability, bool] = {}

    def __len__(self) -> int:
        return len(self.slots)

    def _find(self, state_type: RenderStateType, index: int) -> RenderStateSlot | None:
        return next(
            (s for s in self.slots if s.render_state.state_type == state_type and s.index == index),
            None,
        )

    def set_render_state(self, render_state: RenderState | None, index: int = 0) -> None:
        """Add ``render_state``, replacing one of the same kind and index; ``None`` is ignored."""
        if render_state is None:
            return
        slot = self._find(render_state.state_type, index)
        if slot is not None:
            slot.render_state = render_state
        else:
            self.slots.append(RenderStateSlot(render_state, index))

    def render_state(self, state_type: RenderStateType, index: int = -1) -> RenderState | None:
        slot = self._find(state_type, index)
        return slot.render_state if slot is not None else None

    def erase_render_state(self, state_type: RenderStateType, index: int) -> None:
        """Remove the state of this kind and index; index ``-1`` removes every index."""
        if index == -1:
            self.slots = [s for s in self.slots if s.render_state.state_type != state_type]
            return
        slot = self._find(state_type, index)
        if slot is not None:
            self.slots.remove(slot)

    def erase_all(self) -> None:
        self.slots.clear()
        self.modes.clear()

    def enable(self, capability: Capability) -> None:
        self.modes[capability] = True

    def disable(self, capability: Capability) -> None:
        self.modes[capability] = False

    def apply(self, state: GLState) -> None:
        """Apply the switches in capability order, then every render state in order."""
        for capability, on in sorted(self.modes.items()):
            state.enabled[capability] = on
            state.calls.append(("glEnable" if on else "glDisable", capability))
        for slot in self.slots:
            slot.apply(state)