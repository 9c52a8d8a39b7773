import pytest

from steply.component import (
    Component,
    ComponentResponse,
    EventContext,
    FocusMode,
    InputChange,
)
from steply.events import BindTarget, Key, KeyModifiers


class GroupComponent(Component):
    def focus_mode(self):
        return FocusMode.GROUP


class StoringComponent(Component):
    def __init__(self, id):
        super().__init__(id)
        self._stored = None

    def value(self):
        return self._stored

    def set_value(self, value):
        self._stored = value

    def bind_target(self):
        return BindTarget.input("source")


def test_fresh_context_is_not_handled():
    response = EventContext().into_response(False)
    assert response.handled is False
    assert response.produced is None
    assert response.changes == []
    assert response.submit_requested is False


def test_produce_marks_handled_and_keeps_value():
    ctx = EventContext()
    ctx.produce(["a", "b"])
    response = ctx.into_response(True)
    assert response.handled is True
    assert response.produced == ["a", "b"]


def test_into_response_overrides_handled_flag():
    ctx = EventContext()
    ctx.produce("x")
    response = ctx.into_response(False)
    assert response.handled is False
    assert response.produced == "x"


def test_submit_requests_submission():
    ctx = EventContext()
    ctx.submit()
    assert ctx.response.handled is True
    assert ctx.response.submit_requested is True


def test_update_and_record_input_differ_in_apply():
    ctx = EventContext()
    ctx.update_input("name", "new")
    ctx.record_input("other", "kept")
    assert ctx.response.changes == [
        InputChange("name", "new", apply=True),
        InputChange("other", "kept", apply=False),
    ]


def test_mark_handled():
    ctx = EventContext()
    ctx.mark_handled()
    assert ctx.into_response(True).handled is True
    assert ctx.response.changes == []


def test_response_constructors():
    assert ComponentResponse.not_handled().handled is False
    assert ComponentResponse.handled_response().handled is True
    produced = ComponentResponse.produced_response(7)
    assert (produced.handled, produced.produced) == (True, 7)
    submit = ComponentResponse.submit_response()
    assert (submit.handled, submit.submit_requested) == (True, True)


def test_push_change_applies():
    response = ComponentResponse.not_handled()
    response.push_change("id1", "v")
    assert response.changes == [InputChange("id1", "v", True)]


def test_response_copy_does_not_share_changes():
    ctx = EventContext()
    ctx.update_input("a", "1")
    response = ctx.into_response(True)
    ctx.update_input("b", "2")
    assert len(response.changes) == 1


def test_component_defaults():
    component = Component("c")
    assert component.id == "c"
    assert component.focused is False
    assert component.children() is None
    assert component.focus_mode() is FocusMode.PASS_THROUGH
    assert component.render_children() is True
    assert component.bind_target() is None
    assert component.value() is None
    assert component.poll() is False
    assert component.render(None) == []


def test_component_default_key_handling_is_unhandled():
    component = Component("c")
    ctx = EventContext()
    assert component.handle_key(Key.ENTER, KeyModifiers.NONE, ctx) is False
    assert component.delete_word(ctx) is False
    assert component.delete_word_forward(ctx) is False
    assert ctx.response.handled is False


def test_group_component_does_not_render_children():
    group = GroupComponent("g")
    assert group.id == "g"
    assert group.focus_mode() is FocusMode.GROUP
    assert Component.render_children(group) is False
    assert Component("plain").render_children() is True


@pytest.mark.parametrize("value", ["text", ["x", "y"], {"k": "v"}, True, 3])
def test_subclass_value_round_trip(value):
    component = StoringComponent("s")
    component.set_value(value)
    assert component.value() == value
    assert component.bind_target() == BindTarget.input("source")