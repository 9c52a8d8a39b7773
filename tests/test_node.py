import pytest

from steply.component import Component, EventContext, FocusMode
from steply.events import Key, KeyModifiers
from steply.node import (
    Input,
    InputError,
    find_component,
    find_input,
    first_input,
    focus_mode,
    handle_node_key,
    is_component,
    is_focusable,
    is_focused,
    is_input,
    node_children,
    node_id,
    poll_components,
    set_focused,
)


class Container(Component):
    def __init__(self, id, nodes, mode=FocusMode.PASS_THROUGH):
        super().__init__(id)
        self._nodes = nodes
        self._mode = mode

    def children(self):
        return self._nodes

    def focus_mode(self):
        return self._mode


class Ticker(Component):
    def __init__(self, id, changes):
        super().__init__(id)
        self.changes = changes
        self.polls = 0

    def poll(self):
        self.polls += 1
        return self.changes


def type_text(node, text):
    ctx = EventContext()
    for ch in text:
        assert handle_node_key(node, ch, KeyModifiers.NONE, ctx) is True
    return ctx


def test_typing_inserts_and_records_changes():
    field = Input("name", "Name")
    ctx = type_text(field, "hi")
    assert field.value == "hi"
    assert field.cursor == len("hi")
    assert [c.value for c in ctx.response.changes] == ["h", "hi"]
    assert all(c.apply is False and c.id == "name" for c in ctx.response.changes)


def test_backspace_and_delete():
    field = Input("f", value="abc")
    ctx = EventContext()
    assert field.handle_key(Key.BACKSPACE, KeyModifiers.NONE, ctx) is True
    assert field.value == "ab"
    field.handle_key(Key.HOME, KeyModifiers.NONE, ctx)
    field.handle_key(Key.DELETE, KeyModifiers.NONE, ctx)
    assert field.value == "b"


def test_cursor_movement_does_not_record_change():
    field = Input("f", value="ab")
    ctx = EventContext()
    assert field.handle_key(Key.LEFT, KeyModifiers.NONE, ctx) is True
    assert field.cursor == 1
    assert ctx.response.handled is True
    assert ctx.response.changes == []
    field.handle_key("x", KeyModifiers.NONE, ctx)
    assert field.value == "axb"


def test_enter_requests_submit():
    ctx = EventContext()
    assert handle_node_key(Input("f"), Key.ENTER, KeyModifiers.NONE, ctx) is True
    assert ctx.response.submit_requested is True


def test_control_chars_and_unknown_keys_are_not_handled():
    field = Input("f", value="a")
    ctx = EventContext()
    assert field.handle_key("w", KeyModifiers.CONTROL, ctx) is False
    assert field.handle_key(Key.PAGE_UP, KeyModifiers.NONE, ctx) is False
    assert field.value == "a"
    assert handle_node_key("text", "a", KeyModifiers.NONE, ctx) is False


def test_delete_word_backward():
    field = Input("f", value="hello world")
    field.delete_word()
    assert field.value == "hello "
    assert field.cursor == len(field.value)


def test_delete_word_forward():
    field = Input("f", value="hello world")
    field.handle_key(Key.HOME, KeyModifiers.NONE, EventContext())
    field.delete_word_forward()
    assert field.value == " world"
    assert field.cursor == 0


def test_typed_value_round_trip():
    field = Input("f")
    field.set_typed_value("text")
    assert field.typed_value() == "text"
    field.set_typed_value(None)
    assert field.typed_value() == ""
    field.set_typed_value(["a", "b"])
    assert field.value == "a, b"


def test_input_error_visibility():
    assert InputError.hidden("m") == InputError("m", visible=False)
    assert InputError.inline("m").visible is True


def test_node_kinds_and_ids():
    field = Input("i")
    component = Component("c")
    assert is_input(field) and not is_input(component)
    assert is_component(component) and not is_component("text")
    assert node_id(field) == "i"
    assert node_id(component) == "c"
    assert node_id("plain") is None
    assert node_children("plain") is None
    assert focus_mode("plain") is FocusMode.PASS_THROUGH


@pytest.mark.parametrize(
    "node, expected",
    [
        (Input("i"), True),
        ("text", False),
        (Component("c"), False),
        (Container("g", [], FocusMode.GROUP), True),
    ],
)
def test_is_focusable(node, expected):
    assert is_focusable(node) is expected


def test_set_focused_round_trip():
    field = Input("i")
    set_focused(field, True)
    assert is_focused(field) is True
    set_focused(field, False)
    assert is_focused(field) is False
    set_focused("text", True)
    assert is_focused("text") is False


def test_find_through_children():
    inner_input = Input("inner")
    inner_component = Component("leaf")
    tree = ["intro", Input("outer"), Container("box", [inner_input, inner_component])]
    assert find_input(tree, "inner") is inner_input
    assert find_component(tree, "leaf") is inner_component
    assert find_component(tree, "box") is tree[2]
    assert find_input(tree, "missing") is None
    assert find_component(tree, "outer") is None


def test_first_input_prefers_tree_order():
    nested = Input("nested")
    tree = ["text", Container("box", [nested]), Input("later")]
    assert first_input(tree) is nested
    assert first_input(["only text"]) is None


def test_poll_components_visits_all():
    quiet = Ticker("quiet", False)
    busy = Ticker("busy", True)
    tree = [Container("box", [quiet, busy]), Input("i")]
    assert poll_components(tree) is True
    assert (quiet.polls, busy.polls) == (1, 1)
    assert poll_components([quiet]) is False