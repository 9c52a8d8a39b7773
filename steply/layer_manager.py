"""Opening and closing the single active layer over a step."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from steply.events import AppEvent, BindTarget
from steply.form_engine import FormEngine
from steply.layer import ActiveLayer, Layer
from steply.node import Node, find_component, find_input


def _bind_target_from_id(nodes: Sequence[Node], id: str) -> Optional[BindTarget]:
    if find_input(nodes, id) is not None:
        return BindTarget.input(id)
    if find_component(nodes, id) is not None:
        return BindTarget.component(id)
    return None


class LayerManager:
    """Holds at most one active layer and moves focus in and out of it."""

    def __init__(self) -> None:
        self.active: Optional[ActiveLayer] = None

    def is_active(self) -> bool:
        return self.active is not None

    def open(
        self, layer: Layer, step_nodes: Sequence[Node], engine: FormEngine
    ) -> None:
        """Open ``layer`` unless one is already open.

        An unbound layer is bound to the step node that had focus.
        """
        if self.active is not None:
            return
        saved_focus_id = engine.focused_node_id()
        if layer.bind_target is None and saved_focus_id is not None:
            target = _bind_target_from_id(step_nodes, saved_focus_id)
            if target is not None:
                layer.bind_target = target
        engine.reset_with_nodes(layer.nodes)
        self.active = ActiveLayer(layer, saved_focus_id)

    def close(
        self,
        engine: FormEngine,
        step_nodes: Sequence[Node],
        emit: Callable[[AppEvent], None],
    ) -> bool:
        """Close the active layer and restore focus; False if none was open."""
        active = self.active
        if active is None:
            return False
        self.active = None

        active.layer.emit_close_events(emit)
        engine.reset_with_nodes(step_nodes)
        if active.saved_focus_id is not None:
            index = engine.find_index_by_id(active.saved_focus_id)
            if index is not None:
                engine.set_focus(step_nodes, index)
        return True

    def toggle(
        self,
        layer_factory: Callable[[], Layer],
        engine: FormEngine,
        step_nodes: Sequence[Node],
    ) -> None:
        """Close the active layer, or open a new one from ``layer_factory``."""
        if self.active is not None:
            self.close(engine, step_nodes, lambda event: None)
        else:
            self.open(layer_factory(), step_nodes, engine)