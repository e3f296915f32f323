"""Scene-graph nodes and renderable nodes with cached display lists."""

from __future__ import annotations

from typing import Any, ClassVar, Iterable

from .objects import Callback, SceneObject
from .render_state import GLState, RenderStateSet

Matrix4 = tuple[tuple[float, float, float, float], ...]

IDENTITY: Matrix4 = tuple(
    tuple(1.0 if row == col else 0.0 for col in range(4)) for row in range(4)
)

Command = tuple[Any, ...]

_SAVED_FIELDS = ("color", "point_size", "line_width", "line_stipple", "polygon_mode", "enabled")


def _snapshot(state: GLState) -> dict[str, Any]:
    saved = {}
    for name in _SAVED_FIELDS:
        value = getattr(state, name)
        saved[name] = dict(value) if isinstance(value, dict) else value
    return saved


def _restore(state: GLState, saved: dict[str, Any]) -> None:
    for name, value in saved.items():
        setattr(state, name, value)


def _execute(state: GLState, commands: Iterable[Command]) -> None:
    for command in commands:
        state.calls.append(command)
        if command[0] == "glColor3f":
            state.color = (*command[1:4], 1.0)


class Node(SceneObject):
    """A node of the scene graph; it may be shared by several parent groups."""

    is_transform: ClassVar[bool] = False

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self.parents: list[Node] = []
        self.update_callback: Callback | None = None
        self.bounds_dirty = True
        self.render_state_set: RenderStateSet | None = None

    def render(self, context: GLState | None, camera: Any) -> bool:
        """Draw the node into ``context``; ``False`` when context or camera is missing."""
        return context is not None and camera is not None

    def get_parent(self, i: int) -> Node | None:
        """Return the ``i``-th parent, or ``None`` when there is none."""
        if 0 <= i < len(self.parents):
            return self.parents[i]
        return None

    def add_parent(self, parent: Node) -> None:
        self.parents.append(parent)

    def remove_parent(self, parent: Node) -> None:
        """Remove the first occurrence of ``parent``; unknown parents are ignored."""
        for position, candidate in enumerate(self.parents):
            if candidate is parent:
                del self.parents[position]
                return

    def dirty_bound(self) -> None:
        """Mark the bounds stale, propagating up to every parent."""
        if not self.bounds_dirty:
            self.bounds_dirty = True
            for parent in self.parents:
                parent.dirty_bound()

    def world_matrix(self) -> Matrix4:
        """Matrix to world coordinates, taken from a transform in the first parent slot."""
        parent = self.get_parent(0)
        if parent is not None and parent.is_transform:
            return parent.world_matrix()
        return IDENTITY

    def get_or_create_render_state_set(self) -> RenderStateSet:
        if self.render_state_set is None:
            self.render_state_set = RenderStateSet()
        return self.render_state_set

    def translate(self, dx: float, dy: float) -> None:
        """Move the node; a plain node has no geometry, so only its bounds go stale."""
        self.dirty_bound()

    def rotate(self, angle: float, cx: float, cy: float) -> None:
        """Rotate the node; a plain node has no geometry, so only its bounds go stale."""
        self.dirty_bound()

    def scale(self, sx: float, sy: float, cx: float, cy: float) -> None:
        """Scale the node; a plain node has no geometry, so only its bounds go stale."""
        self.dirty_bound()


class Renderable(Node):
    """A node whose drawing commands can be compiled once and replayed."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self.display_list_enabled = False
        self.display_list_dirty = True
        self.display_list: list[Command] | None = None

    def render(self, context: GLState | None, camera: Any) -> bool:
        """Apply the node's render states, then replay (rebuilding if stale) its display list.

        Nothing is drawn while the display list is disabled.
        """
        if context is None or camera is None:
            return False
        states = self.render_state_set
        saved = None
        if states is not None:
            saved = _snapshot(context)
            context.calls.append(("glPushAttrib", "GL_ALL_ATTRIB_BITS"))
            states.apply(context)
        if self.display_list_enabled:
            if self.display_list_dirty or self.display_list is None:
                self.display_list = list(self.build_display_list())
                self.display_list_dirty = False
            _execute(context, self.display_list)
        if saved is not None:
            _restore(context, saved)
            context.calls.append(("glPopAttrib",))
        return True

    def build_display_list(self) -> list[Command]:
        """Return the drawing commands of the node; subclasses provide them."""
        return []

    def delete_display_list(self) -> None:
        self.display_list = None