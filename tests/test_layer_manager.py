from steply.component import Component, FocusMode
from steply.events import BindTarget, SourceKind, ValueProduced, ValueSource
from steply.form_engine import FormEngine
from steply.layer import OverlayState
from steply.layer_manager import LayerManager
from steply.node import Input


class GroupBox(Component):
    def focus_mode(self):
        return FocusMode.GROUP


def make_overlay(**kwargs):
    return OverlayState("ov", "Overlay", [Input("q")], **kwargs)


def test_open_binds_to_focused_input_and_moves_focus():
    step = [Input("a"), Input("b")]
    engine = FormEngine(step)
    engine.set_focus(step, 1)
    manager = LayerManager()
    overlay = make_overlay()
    manager.open(overlay, step, engine)
    assert manager.is_active() is True
    assert overlay.bind_target == BindTarget.input("b")
    assert manager.active.saved_focus_id == "b"
    assert engine.focused_node_id() == "q"
    assert overlay.nodes[0].focused is True


def test_open_binds_to_focused_component():
    step = [GroupBox("g"), Input("a")]
    engine = FormEngine(step)
    manager = LayerManager()
    overlay = make_overlay()
    manager.open(overlay, step, engine)
    assert overlay.bind_target == BindTarget.component("g")


def test_open_keeps_existing_bind_target():
    step = [Input("a")]
    engine = FormEngine(step)
    manager = LayerManager()
    target = BindTarget.component("elsewhere")
    overlay = make_overlay(bind_target=target)
    manager.open(overlay, step, engine)
    assert overlay.bind_target == target


def test_open_while_active_is_ignored():
    step = [Input("a")]
    engine = FormEngine(step)
    manager = LayerManager()
    first = make_overlay()
    manager.open(first, step, engine)
    manager.open(OverlayState("other", "Other", [Input("z")]), step, engine)
    assert manager.active.layer is first
    assert engine.focused_node_id() == "q"


def test_close_without_layer_returns_false():
    step = [Input("a")]
    engine = FormEngine(step)
    emitted = []
    assert LayerManager().close(engine, step, emitted.append) is False
    assert emitted == []


def test_close_emits_value_and_restores_focus():
    step = [Input("a"), Input("b")]
    engine = FormEngine(step)
    engine.set_focus(step, 1)
    manager = LayerManager()
    overlay = make_overlay()
    manager.open(overlay, step, engine)
    overlay.nodes[0].value = "found"

    emitted = []
    assert manager.close(engine, step, emitted.append) is True
    assert manager.is_active() is False
    assert engine.focused_node_id() == "b"
    assert emitted == [
        ValueProduced(
            ValueSource(SourceKind.LAYER, "ov"), BindTarget.input("b"), "found"
        )
    ]


def test_toggle_opens_then_closes():
    step = [Input("a")]
    engine = FormEngine(step)
    manager = LayerManager()
    manager.toggle(make_overlay, engine, step)
    assert manager.is_active() is True
    assert engine.focused_node_id() == "q"
    manager.toggle(make_overlay, engine, step)
    assert manager.is_active() is False
    assert engine.focused_node_id() == "a"