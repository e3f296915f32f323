import copy

import pytest

from cgscene.objects import Callback, SceneObject


def _counter_of(obj):
    return int(obj.name.removeprefix("SceneObject"))


def test_default_names_are_numbered_consecutively():
    first = SceneObject()
    second = SceneObject()
    assert first.name.startswith("SceneObject")
    assert _counter_of(second) == _counter_of(first) + 1


def test_named_object_still_advances_counter():
    first = SceneObject()
    named = SceneObject("axis")
    third = SceneObject()
    assert named.name == "axis"
    assert _counter_of(third) == _counter_of(first) + 2


def test_copy_keeps_name_and_counter():
    first = SceneObject()
    duplicate = copy.copy(first)
    following = SceneObject()
    assert duplicate.name == first.name
    assert _counter_of(following) == _counter_of(first) + 1


def test_dict_round_trip():
    original = SceneObject("teapot")
    restored = SceneObject()
    restored.load_dict(original.to_dict())
    assert restored.name == "teapot"
    assert original.to_dict() == {"name": "teapot"}


def test_load_dict_without_name_raises():
    obj = SceneObject("kept")
    with pytest.raises(ValueError):
        obj.load_dict({})
    assert obj.name == "kept"


def test_load_dict_with_non_string_name_raises():
    with pytest.raises(ValueError):
        SceneObject().load_dict({"name": 3})


def test_callback_runs_while_enabled():
    cb = Callback()
    assert cb.enabled is True
    assert cb.run(SceneObject(), None) is True


def test_disabled_callback_reports_false():
    cb = Callback()
    cb.enabled = False
    assert cb.run(None, {"x": 1}) is False