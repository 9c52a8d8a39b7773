import pytest

from steply.events import (
    ActionEvent,
    BindKind,
    BindTarget,
    Cancel,
    ClearErrorMessage,
    FocusChanged,
    InputKey,
    Key,
    KeyEvent,
    KeyModifiers,
    KeyPressed,
    SourceKind,
    Submit,
    TabKey,
    ValueProduced,
    ValueSource,
)


def test_bind_target_constructors():
    target = BindTarget.input("tags")
    assert target.kind is BindKind.INPUT
    assert target.id == "tags"
    other = BindTarget.component("tags")
    assert other.kind is BindKind.COMPONENT
    assert target != other


def test_bind_target_hashable():
    mapping = {BindTarget.input("a"): 1}
    assert mapping[BindTarget.input("a")] == 1


def test_key_event_default_modifiers():
    event = KeyEvent("x")
    assert event.modifiers is KeyModifiers.NONE
    assert event == KeyEvent("x", KeyModifiers.NONE)


def test_modifier_combination():
    event = KeyEvent("c", KeyModifiers.CONTROL | KeyModifiers.SHIFT)
    assert KeyModifiers.CONTROL in event.modifiers
    assert KeyModifiers.SHIFT in event.modifiers
    assert KeyModifiers.ALT not in event.modifiers
    assert event != KeyEvent("c", KeyModifiers.CONTROL)


def test_key_actions_compare_by_key():
    key = KeyEvent(Key.TAB)
    assert TabKey(key) == TabKey(KeyEvent(Key.TAB))
    assert InputKey(key) != TabKey(key)


def test_events_wrap_payloads():
    source = ValueSource(SourceKind.LAYER, "overlay")
    target = BindTarget.input("query")
    event = ValueProduced(source, target, ["a", "b"])
    assert event.value == ["a", "b"]
    assert event.source.kind is SourceKind.LAYER
    assert ActionEvent(ClearErrorMessage("x")).action.id == "x"
    assert KeyPressed(KeyEvent(Key.ENTER)).key.code is Key.ENTER


def test_events_are_immutable():
    event = FocusChanged(None, "a")
    with pytest.raises(AttributeError):
        event.to_id = "b"
    assert event.to_id == "a"


def test_unit_actions_equal():
    assert Submit() == Submit()
    assert Submit() != Cancel()
    assert [Cancel(), Submit()].index(Submit()) == 1