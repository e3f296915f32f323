"""Interactive commands driven by keyboard and mouse events of a drawing window.

A window handed to these handlers provides ``get_cursor_pos()``, ``focus()``,
``is_key_pressed(key)`` and a ``view`` attribute (or ``None``). A view provides
``dcs_to_wcs(point)``, ``show_prompt(text)``, ``show_coord(x, y)`` and
``refresh()``.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, ClassVar, Protocol

from .node import Node
from .objects import SceneObject

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

MOUSE_BUTTON_LEFT = 0
MOUSE_BUTTON_RIGHT = 1
RELEASE = 0
PRESS = 1
REPEAT = 2
MOD_SHIFT = 0x0001
MOD_CONTROL = 0x0002
KEY_ESCAPE = 256
KEY_LEFT_CONTROL = 341
KEY_RIGHT_CONTROL = 345

# Value of pi used by the interactive rotation.
_PI = 3.1415926
_DISTANCE_FACTOR = 0.5
_SMOOTHING_FACTOR = 0.8
_SCALE_UP = 1.1
_SCALE_DOWN = 0.9


class _View(Protocol):
    def dcs_to_wcs(self, point: Vec3) -> Vec3: ...

    def show_prompt(self, text: str) -> None: ...

    def show_coord(self, x: float, y: float) -> None: ...

    def refresh(self) -> None: ...


class _Window(Protocol):
    view: _View | None

    def get_cursor_pos(self) -> Vec2: ...

    def focus(self) -> None: ...

    def is_key_pressed(self, key: int) -> bool: ...


class EventType(IntEnum):
    """Kinds of interactive command."""

    NONE = 0
    DRAW_2D_POINT = 1
    DRAW_2D_STROKE = 2
    DRAW_2D_SEED_FILL = 3
    DRAW_2D_LINE_SEG = 10
    DRAW_2D_LINE_LEN = 11
    DRAW_2D_LINE_X = 12
    DRAW_2D_LINE_RAY = 13
    DRAW_2D_LINE_STRIP = 14
    DRAW_2D_LINE_LOOP = 15
    DRAW_2D_POLYGON = 20
    DRAW_2D_POLYGON_NC = 21
    DRAW_2D_POLYGON_NR = 22
    DRAW_2D_RECTANGLE = 23
    DRAW_2D_SQUARE = 24
    DRAW_2D_DIAMOND = 25
    DRAW_2D_TRIANGLE = 26
    MODEL_2D_TRANSFORM = 120
    UNKNOWN = 2000


class EventHandler:
    """An interactive command; at most one is current and receives window events.

    Event methods return ``True`` when they handled the event. Events that a
    command does not handle are remembered in ``last_ignored``.
    """

    event_type: ClassVar[EventType] = EventType.NONE
    _current: ClassVar[EventHandler | None] = None

    def __init__(self, window: _Window | None = None) -> None:
        self.window = window
        self.step = 0
        self.owner: SceneObject | None = None
        self.data: SceneObject | None = None
        self.last_ignored: tuple[Any, ...] | None = None

    def _ignore(self, *event: Any) -> bool:
        self.last_ignored = event
        return False

    def cancel(self, window: _Window | None) -> bool:
        """Abort the command."""
        return False

    def on_key(self, window: _Window, key: int, scancode: int, action: int, mods: int) -> bool:
        return self._ignore("key", key, scancode, action, mods)

    def on_char(self, window: _Window, codepoint: int) -> bool:
        return self._ignore("char", codepoint)

    def on_char_mods(self, window: _Window, codepoint: int, mods: int) -> bool:
        return self._ignore("char_mods", codepoint, mods)

    def on_mouse_button(self, window: _Window, button: int, action: int, mods: int) -> bool:
        return self._ignore("mouse_button", button, action, mods)

    def on_cursor_pos(self, window: _Window, xpos: float, ypos: float) -> bool:
        return self._ignore("cursor_pos", xpos, ypos)

    def on_cursor_enter(self, window: _Window, entered: bool) -> bool:
        return self._ignore("cursor_enter", entered)

    def on_mouse_scroll(self, window: _Window, xoffset: float, yoffset: float) -> bool:
        return self._ignore("mouse_scroll", xoffset, yoffset)

    def set_owner_data(self, owner: SceneObject | None, data: SceneObject | None) -> None:
        """Attach an owner and extra data to the command."""
        self.owner = owner
        self.data = data

    @classmethod
    def current_command(cls) -> EventHandler | None:
        return EventHandler._current

    @classmethod
    def set_command(cls, command: EventHandler | None) -> None:
        EventHandler._current = command

    @classmethod
    def delete_command(cls) -> None:
        """Drop the current command, cancelling it on its own window first."""
        command = EventHandler._current
        EventHandler._current = None
        if command is not None and command.window is not None:
            command.cancel(command.window)

    @classmethod
    def key_callback(cls, window: _Window, key: int, scancode: int, action: int, mods: int) -> None:
        """Escape cancels and drops the current command; other keys go to it."""
        if action == PRESS and key == KEY_ESCAPE:
            command = EventHandler._current
            if command is not None:
                command.cancel(window)
                cls.delete_command()
        command = EventHandler._current
        if command is not None:
            command.on_key(window, key, scancode, action, mods)

    @classmethod
    def mouse_button_callback(cls, window: _Window, button: int, action: int, mods: int) -> None:
        command = EventHandler._current
        if command is not None:
            command.on_mouse_button(window, button, action, mods)

    @classmethod
    def cursor_pos_callback(cls, window: _Window, xpos: float, ypos: float) -> None:
        """Show the cursor position in the view, then pass the move to the command."""
        view = getattr(window, "view", None)
        if view is not None:
            view.show_coord(xpos, ypos)
        command = EventHandler._current
        if command is not None:
            command.on_cursor_pos(window, xpos, ypos)

    @classmethod
    def scroll_callback(cls, window: _Window, xoffset: float, yoffset: float) -> None:
        command = EventHandler._current
        if command is not None:
            command.on_mouse_scroll(window, xoffset, yoffset)


def rotation_delta(
    pivot: Vec3 | Vec2,
    last_wcs: Vec3 | Vec2,
    current_wcs: Vec3 | Vec2,
    last_screen: Vec2,
    current_screen: Vec2,
) -> float:
    """Rotation step for a cursor move about ``pivot``.

    Combines the change of angle around the pivot in world coordinates with
    the horizontal screen movement, then smooths and reverses the sign.
    """
    current_angle = math.atan2(current_wcs[1] - pivot[1], current_wcs[0] - pivot[0])
    last_angle = math.atan2(last_wcs[1] - pivot[1], last_wcs[0] - pivot[0])
    by_position = current_angle - last_angle
    if by_position > _PI:
        by_position -= 2.0 * _PI
    elif by_position < -_PI:
        by_position += 2.0 * _PI

    dx = current_screen[0] - last_screen[0]
    if by_position * dx > 0:
        dx = -dx
    by_distance = dx * _DISTANCE_FACTOR

    return -((by_position + by_distance) * _SMOOTHING_FACTOR)


class Model2DTransform(EventHandler):
    """Rotate a node by dragging with the right button and scale it with Ctrl+wheel.

    Shift+left click places the pivot of both operations.
    """

    event_type = EventType.MODEL_2D_TRANSFORM

    def __init__(
        self,
        node: Node | None,
        window: _Window | None,
        scale_x: bool = False,
        scale_y: bool = False,
        pivot: Vec3 = (0.0, 0.0, 0.0),
        show_pivot: bool = False,
    ) -> None:
        super().__init__(window)
        self.node = node
        self.scale_x = scale_x
        self.scale_y = scale_y
        self.pivot: Vec3 = tuple(float(c) for c in pivot)  # type: ignore[assignment]
        if len(self.pivot) != 3:
            raise ValueError("the pivot needs three coordinates (x, y, z)")
        self.show_pivot = show_pivot
        self.rotating = False
        self.dragging = False
        self.last_cursor: Vec2 = (0.0, 0.0)
        if window is not None:
            x, y = window.get_cursor_pos()
            window.focus()
            self.last_cursor = (float(x), float(y))

    def on_mouse_button(self, window: _Window, button: int, action: int, mods: int) -> bool:
        if self.node is None or window is None:
            return False
        if button == MOUSE_BUTTON_LEFT and action == PRESS:
            x, y = window.get_cursor_pos()
            if mods & MOD_SHIFT:
                view = window.view
                if view is not None:
                    self.pivot = tuple(float(c) for c in view.dcs_to_wcs((x, y, 0.0)))  # type: ignore[assignment]
                    self.show_pivot = True
                    px, py, pz = self.pivot
                    view.show_prompt(f"Pivot: ({px:f}, {py:f}, {pz:f})")
                    view.refresh()
        elif button == MOUSE_BUTTON_RIGHT:
            if action == PRESS:
                x, y = window.get_cursor_pos()
                self.rotating = True
                self.last_cursor = (float(x), float(y))
            elif action == RELEASE:
                self.rotating = False
        return True

    def on_cursor_pos(self, window: _Window, xpos: float, ypos: float) -> bool:
        if self.node is None or window is None or not self.rotating:
            return False
        view = window.view
        if view is None:
            return False
        current_wcs = view.dcs_to_wcs((xpos, ypos, 0.0))
        last_wcs = view.dcs_to_wcs((self.last_cursor[0], self.last_cursor[1], 0.0))
        delta = rotation_delta(self.pivot, last_wcs, current_wcs, self.last_cursor, (xpos, ypos))
        view.show_prompt(f"Pivot: ({self.pivot[0]:f}, {self.pivot[1]:f}), angle: ({delta:f})")
        self.node.rotate(delta, self.pivot[0], self.pivot[1])
        view.refresh()
        self.last_cursor = (float(xpos), float(ypos))
        return True

    def on_mouse_scroll(self, window: _Window, xoffset: float, yoffset: float) -> bool:
        view = getattr(window, "view", None) if window is not None else None
        if view is None:
            return False
        ctrl = window.is_key_pressed(KEY_LEFT_CONTROL) or window.is_key_pressed(KEY_RIGHT_CONTROL)
        if ctrl and self.node is not None:
            factor = _SCALE_UP if yoffset > 0 else _SCALE_DOWN
            self.node.scale(
                factor if self.scale_x else 1.0,
                factor if self.scale_y else 1.0,
                self.pivot[0],
                self.pivot[1],
            )
            view.show_prompt("Scaled.")
            view.refresh()
            return True
        return False

    def cancel(self, window: _Window | None) -> bool:
        self.rotating = False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(node={self.node!r}, pivot={self.pivot!r})"