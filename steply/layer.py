"""Layers drawn over a step, with their own nodes, and the demo overlay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from steply.events import AppEvent, BindTarget, SourceKind, ValueProduced, ValueSource
from steply.node import Input, Node, first_input
from steply.value import Value, is_empty


class Layer:
    """A set of nodes shown above the current step.

    A layer may be bound to a node of the step; it can receive that node's
    value and hand a value back when it closes.
    """

    def __init__(
        self,
        id: str,
        label: str,
        nodes: Iterable[Node] = (),
        hint: Optional[str] = None,
        bind_target: Optional[BindTarget] = None,
    ) -> None:
        self.id = id
        self.label = label
        self.hint = hint
        self.nodes: List[Node] = list(nodes)
        self.bind_target = bind_target

    def set_value(self, value: Value) -> None:
        """Receive the bound node's value; the base layer ignores it."""

    def emit_close_events(self, emit: Callable[[AppEvent], None]) -> None:
        """Emit events on close; the base layer emits none."""


@dataclass
class ActiveLayer:
    """An open layer and the id that had focus in the step before it opened."""

    layer: Layer
    saved_focus_id: Optional[str] = None

    @property
    def label(self) -> str:
        return self.layer.label

    @property
    def hint(self) -> Optional[str]:
        return self.layer.hint

    @property
    def nodes(self) -> List[Node]:
        return self.layer.nodes


class OverlayState(Layer):
    """A layer whose first input exchanges its value with the bound node."""

    def __init__(
        self,
        id: str,
        label: str,
        nodes: Iterable[Node],
        hint: Optional[str] = None,
        bind_target: Optional[BindTarget] = None,
    ) -> None:
        super().__init__(id, label, nodes, hint, bind_target)

    @classmethod
    def demo(cls) -> "OverlayState":
        return cls(
            "overlay_demo",
            "Overlay demo: type, Esc to close",
            [Input("overlay_query", "Search")],
        )

    def set_value(self, value: Value) -> None:
        inp = first_input(self.nodes)
        if inp is not None:
            inp.set_typed_value(value)

    def emit_close_events(self, emit: Callable[[AppEvent], None]) -> None:
        """Hand the first input's value to the bound node, if both exist."""
        inp = first_input(self.nodes)
        if inp is None:
            return
        value = inp.typed_value()
        if is_empty(value) or self.bind_target is None:
            return
        emit(
            ValueProduced(
                source=ValueSource(SourceKind.LAYER, self.id),
                target=self.bind_target,
                value=value,
            )
        )