import pytest

from cgscene.events import (
    KEY_ESCAPE,
    KEY_LEFT_CONTROL,
    KEY_RIGHT_CONTROL,
    MOD_SHIFT,
    MOUSE_BUTTON_LEFT,
    MOUSE_BUTTON_RIGHT,
    PRESS,
    RELEASE,
    EventHandler,
    EventType,
    Model2DTransform,
    rotation_delta,
)
from cgscene.node import Node
from cgscene.objects import SceneObject


class FakeView:
    def __init__(self):
        self.prompts = []
        self.coords = []
        self.refreshes = 0

    def dcs_to_wcs(self, point):
        x, y, z = point
        return (x - 100.0, 100.0 - y, z)

    def show_prompt(self, text):
        self.prompts.append(text)

    def show_coord(self, x, y):
        self.coords.append((x, y))

    def refresh(self):
        self.refreshes += 1


class FakeWindow:
    def __init__(self, cursor=(0.0, 0.0), view=None, pressed=()):
        self.cursor = cursor
        self.view = view
        self.pressed = set(pressed)
        self.focused = False

    def get_cursor_pos(self):
        return self.cursor

    def focus(self):
        self.focused = True

    def is_key_pressed(self, key):
        return key in self.pressed


class RecordingNode(Node):
    def __init__(self):
        super().__init__()
        self.rotations = []
        self.scales = []

    def rotate(self, angle, cx, cy):
        self.rotations.append((angle, cx, cy))

    def scale(self, sx, sy, cx, cy):
        self.scales.append((sx, sy, cx, cy))


class RecordingHandler(EventHandler):
    def __init__(self, window=None):
        super().__init__(window)
        self.events = []
        self.cancels = 0

    def cancel(self, window):
        self.cancels += 1
        return True

    def on_key(self, window, key, scancode, action, mods):
        self.events.append(("key", key, action))
        return True

    def on_mouse_button(self, window, button, action, mods):
        self.events.append(("button", button, action))
        return True

    def on_cursor_pos(self, window, xpos, ypos):
        self.events.append(("cursor", xpos, ypos))
        return True

    def on_mouse_scroll(self, window, xoffset, yoffset):
        self.events.append(("scroll", xoffset, yoffset))
        return True


@pytest.fixture(autouse=True)
def clear_command():
    EventHandler.set_command(None)
    yield
    EventHandler.set_command(None)


def test_event_type_values():
    command = Model2DTransform(RecordingNode(), None)
    assert command.event_type is EventType.MODEL_2D_TRANSFORM
    assert int(command.event_type) == 120
    assert EventHandler().event_type is EventType.NONE
    assert int(EventHandler().event_type) == 0


def test_base_handler_handles_nothing():
    handler = EventHandler()
    window = FakeWindow()
    assert handler.cancel(window) is False
    assert handler.on_key(window, KEY_ESCAPE, 0, PRESS, 0) is False
    assert handler.on_char(window, 65) is False
    assert handler.on_char_mods(window, 65, 0) is False
    assert handler.on_mouse_button(window, MOUSE_BUTTON_LEFT, PRESS, 0) is False
    assert handler.on_cursor_pos(window, 1.0, 2.0) is False
    assert handler.on_cursor_enter(window, True) is False
    assert handler.on_mouse_scroll(window, 0.0, 1.0) is False
    assert handler.step == 0


def test_set_owner_data():
    handler = EventHandler()
    owner, data = SceneObject("owner"), SceneObject("data")
    handler.set_owner_data(owner, data)
    assert handler.owner is owner
    assert handler.data is data


def test_set_current_and_delete_command():
    window = FakeWindow()
    handler = RecordingHandler(window)
    EventHandler.set_command(handler)
    assert EventHandler.current_command() is handler
    EventHandler.delete_command()
    assert EventHandler.current_command() is None
    assert handler.cancels == 1


def test_delete_command_without_window_does_not_cancel():
    handler = RecordingHandler(None)
    EventHandler.set_command(handler)
    EventHandler.delete_command()
    assert EventHandler.current_command() is None
    assert handler.cancels == 0


def test_escape_cancels_and_drops_command():
    window = FakeWindow()
    handler = RecordingHandler(window)
    EventHandler.set_command(handler)
    EventHandler.key_callback(window, KEY_ESCAPE, 0, PRESS, 0)
    assert EventHandler.current_command() is None
    assert handler.cancels >= 1
    assert handler.events == []


def test_other_keys_are_forwarded():
    window = FakeWindow()
    handler = RecordingHandler(window)
    EventHandler.set_command(handler)
    EventHandler.key_callback(window, 65, 0, PRESS, 0)
    EventHandler.key_callback(window, KEY_ESCAPE, 0, RELEASE, 0)
    assert handler.events == [("key", 65, PRESS), ("key", KEY_ESCAPE, RELEASE)]
    assert EventHandler.current_command() is handler


def test_mouse_and_scroll_callbacks_forward():
    window = FakeWindow()
    handler = RecordingHandler(window)
    EventHandler.set_command(handler)
    EventHandler.mouse_button_callback(window, MOUSE_BUTTON_RIGHT, PRESS, 0)
    EventHandler.scroll_callback(window, 0.0, -1.0)
    assert handler.events == [("button", MOUSE_BUTTON_RIGHT, PRESS), ("scroll", 0.0, -1.0)]


def test_cursor_pos_callback_shows_coord_and_forwards():
    view = FakeView()
    window = FakeWindow(view=view)
    handler = RecordingHandler(window)
    EventHandler.set_command(handler)
    EventHandler.cursor_pos_callback(window, 12.0, 34.0)
    assert view.coords == [(12.0, 34.0)]
    assert handler.events == [("cursor", 12.0, 34.0)]


def test_cursor_pos_callback_without_command_still_shows_coord():
    view = FakeView()
    window = FakeWindow(view=view)
    EventHandler.cursor_pos_callback(window, 5.0, 6.0)
    EventHandler.cursor_pos_callback(window, 7.0, 8.0)
    assert view.coords == [(5.0, 6.0), (7.0, 8.0)]
    assert EventHandler.current_command() is None


def test_rotation_delta_zero_for_no_motion():
    assert rotation_delta((0.0, 0.0, 0.0), (1.0, 1.0), (1.0, 1.0), (3.0, 4.0), (3.0, 4.0)) == 0.0


def test_rotation_delta_is_antisymmetric():
    pivot = (0.0, 0.0, 0.0)
    forward = rotation_delta(pivot, (1.0, 0.0), (0.0, 1.0), (10.0, 5.0), (7.0, 9.0))
    backward = rotation_delta(pivot, (0.0, 1.0), (1.0, 0.0), (7.0, 9.0), (10.0, 5.0))
    assert backward == pytest.approx(-forward)
    assert forward != 0.0


def test_rotation_delta_wraps_across_pi():
    pivot = (0.0, 0.0, 0.0)
    delta = rotation_delta(pivot, (-1.0, 0.01), (-1.0, -0.01), (0.0, 0.0), (0.0, 0.0))
    assert abs(delta) < 0.1


def test_constructor_reads_cursor_and_focuses():
    window = FakeWindow(cursor=(15.0, 25.0))
    command = Model2DTransform(RecordingNode(), window)
    assert command.last_cursor == (15.0, 25.0)
    assert window.focused is True
    assert command.pivot == (0.0, 0.0, 0.0)
    assert command.rotating is False


def test_constructor_without_window():
    command = Model2DTransform(RecordingNode(), None)
    assert command.last_cursor == (0.0, 0.0)


def test_constructor_rejects_bad_pivot():
    with pytest.raises(ValueError):
        Model2DTransform(RecordingNode(), None, pivot=(1.0, 2.0))


def test_shift_click_sets_pivot_in_world_coordinates():
    view = FakeView()
    window = FakeWindow(cursor=(130.0, 40.0), view=view)
    command = Model2DTransform(RecordingNode(), window)
    assert command.on_mouse_button(window, MOUSE_BUTTON_LEFT, PRESS, MOD_SHIFT) is True
    assert command.pivot == view.dcs_to_wcs((130.0, 40.0, 0.0))
    assert command.show_pivot is True
    assert len(view.prompts) == 1
    assert view.refreshes == 1


def test_plain_left_click_keeps_pivot():
    view = FakeView()
    window = FakeWindow(cursor=(130.0, 40.0), view=view)
    command = Model2DTransform(RecordingNode(), window, pivot=(1.0, 2.0, 3.0))
    assert command.on_mouse_button(window, MOUSE_BUTTON_LEFT, PRESS, 0) is True
    assert command.pivot == (1.0, 2.0, 3.0)
    assert command.show_pivot is False
    assert view.prompts == []


def test_mouse_button_without_node_is_unhandled():
    window = FakeWindow(view=FakeView())
    command = Model2DTransform(None, window)
    assert command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, PRESS, 0) is False
    assert command.rotating is False


def test_right_drag_rotates_node():
    view = FakeView()
    node = RecordingNode()
    window = FakeWindow(cursor=(0.0, 0.0), view=view)
    command = Model2DTransform(node, window, pivot=(0.0, 0.0, 0.0))
    window.cursor = (150.0, 100.0)
    command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, PRESS, 0)
    assert command.rotating is True
    assert command.last_cursor == (150.0, 100.0)

    assert command.on_cursor_pos(window, 100.0, 50.0) is True
    expected = rotation_delta(
        (0.0, 0.0, 0.0),
        view.dcs_to_wcs((150.0, 100.0, 0.0)),
        view.dcs_to_wcs((100.0, 50.0, 0.0)),
        (150.0, 100.0),
        (100.0, 50.0),
    )
    assert node.rotations == [(pytest.approx(expected), 0.0, 0.0)]
    assert command.last_cursor == (100.0, 50.0)
    assert view.refreshes == 1

    command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, RELEASE, 0)
    assert command.rotating is False
    assert command.on_cursor_pos(window, 120.0, 60.0) is False
    assert len(node.rotations) == 1


def test_cursor_move_without_view_is_unhandled():
    node = RecordingNode()
    window = FakeWindow()
    command = Model2DTransform(node, window)
    command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, PRESS, 0)
    assert command.on_cursor_pos(window, 10.0, 10.0) is False
    assert node.rotations == []


def test_ctrl_scroll_up_scales_selected_axes():
    view = FakeView()
    node = RecordingNode()
    window = FakeWindow(view=view, pressed={KEY_LEFT_CONTROL})
    command = Model2DTransform(node, window, scale_x=True, pivot=(4.0, 5.0, 0.0))
    assert command.on_mouse_scroll(window, 0.0, 1.0) is True
    assert node.scales == [(1.1, 1.0, 4.0, 5.0)]
    assert view.refreshes == 1


def test_ctrl_scroll_down_shrinks_both_axes():
    node = RecordingNode()
    window = FakeWindow(view=FakeView(), pressed={KEY_RIGHT_CONTROL})
    command = Model2DTransform(node, window, scale_x=True, scale_y=True)
    assert command.on_mouse_scroll(window, 0.0, -1.0) is True
    assert node.scales == [(0.9, 0.9, 0.0, 0.0)]


def test_scroll_without_ctrl_is_unhandled():
    node = RecordingNode()
    window = FakeWindow(view=FakeView())
    command = Model2DTransform(node, window, scale_x=True)
    assert command.on_mouse_scroll(window, 0.0, 1.0) is False
    assert node.scales == []


def test_scroll_without_view_is_unhandled():
    node = RecordingNode()
    window = FakeWindow(pressed={KEY_LEFT_CONTROL})
    command = Model2DTransform(node, window, scale_x=True)
    assert command.on_mouse_scroll(window, 0.0, 1.0) is False
    assert node.scales == []


def test_cancel_stops_rotation():
    window = FakeWindow(view=FakeView())
    command = Model2DTransform(RecordingNode(), window)
    command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, PRESS, 0)
    assert command.cancel(window) is True
    assert command.rotating is False


def test_escape_stops_current_transform():
    window = FakeWindow(view=FakeView())
    command = Model2DTransform(RecordingNode(), window)
    command.on_mouse_button(window, MOUSE_BUTTON_RIGHT, PRESS, 0)
    EventHandler.set_command(command)
    EventHandler.key_callback(window, KEY_ESCAPE, 0, PRESS, 0)
    assert EventHandler.current_command() is None
    assert command.rotating is False