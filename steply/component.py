"""Interactive components and the context through which they report key handling."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from steply.events import BindTarget, KeyCode, KeyModifiers
from steply.value import Value


class FocusMode(enum.Enum):
    """How a component takes part in focus traversal.

    ``PASS_THROUGH`` components let focus reach their children;
    ``GROUP`` components take focus themselves as a single target.
    """

    PASS_THROUGH = "pass_through"
    GROUP = "group"


@dataclass
class InputChange:
    """A change to an input's text reported by a widget.

    When ``apply`` is true the new value still has to be written to the input;
    otherwise the input already holds it.
    """

    id: str
    value: str
    apply: bool = True


@dataclass
class ComponentResponse:
    """The outcome of a widget handling a key or edit."""

    handled: bool = False
    produced: Optional[Value] = None
    changes: List[InputChange] = field(default_factory=list)
    submit_requested: bool = False

    @classmethod
    def not_handled(cls) -> "ComponentResponse":
        return cls()

    @classmethod
    def handled_response(cls) -> "ComponentResponse":
        return cls(handled=True)

    @classmethod
    def produced_response(cls, value: Value) -> "ComponentResponse":
        return cls(handled=True, produced=value)

    @classmethod
    def submit_response(cls) -> "ComponentResponse":
        return cls(handled=True, submit_requested=True)

    def push_change(self, id: str, value: str) -> None:
        """Record a change that still has to be applied to input ``id``."""
        self.changes.append(InputChange(id, value, apply=True))


class EventContext:
    """Collects what a widget did while handling one event."""

    def __init__(self) -> None:
        self.response = ComponentResponse.not_handled()

    def mark_handled(self) -> None:
        self.response.handled = True

    def produce(self, value: Value) -> None:
        self.response.handled = True
        self.response.produced = value

    def submit(self) -> None:
        self.response.handled = True
        self.response.submit_requested = True

    def update_input(self, id: str, value: str) -> None:
        """Ask for input ``id`` to be set to ``value``."""
        self.response.handled = True
        self.response.push_change(id, value)

    def record_input(self, id: str, value: str) -> None:
        """Report that input ``id`` now holds ``value``."""
        self.response.handled = True
        self.response.changes.append(InputChange(id, value, apply=False))

    def into_response(self, handled: bool) -> ComponentResponse:
        """Return the collected response with ``handled`` as given."""
        return dataclasses.replace(
            self.response, handled=handled, changes=list(self.response.changes)
        )


class Component:
    """Base class for components: focusable widgets that may contain other nodes.

    A bare component holds optional child nodes, an optional bind target and
    the last value it was given; keys and word deletions go to a focused child.
    """

    def __init__(self, id: str) -> None:
        self.id = id
        self.focused = False
        self.child_nodes: Optional[List[Any]] = None
        self.bound_to: Optional[BindTarget] = None
        self._value: Optional[Value] = None

    def children(self) -> Optional[List[Any]]:
        """Child nodes, or None for a leaf component."""
        return self.child_nodes

    def focus_mode(self) -> FocusMode:
        return FocusMode.PASS_THROUGH

    def render(self, ctx: Any) -> List[Any]:
        """Lines to draw: the text children, when children are drawn inline."""
        if not self.render_children():
            return []
        return [node for node in self.children() or () if isinstance(node, str)]

    def bind_target(self) -> Optional[BindTarget]:
        return self.bound_to

    def value(self) -> Optional[Value]:
        return self._value

    def set_value(self, value: Value) -> None:
        """Accept a value from a bound node."""
        self._value = value

    def _focused_child(self) -> Optional[Any]:
        return next(
            (
                node
                for node in self.children() or ()
                if not isinstance(node, str) and node.focused
            ),
            None,
        )

    def handle_key(
        self, code: KeyCode, modifiers: KeyModifiers, ctx: EventContext
    ) -> bool:
        """Pass the key to a focused child; False when there is none."""
        child = self._focused_child()
        if child is None:
            return False
        return bool(child.handle_key(code, modifiers, ctx))

    def poll(self) -> bool:
        """Do background work; return True if anything changed."""
        return False

    def _delete_word_in_child(self, ctx: EventContext, forward: bool) -> bool:
        child = self._focused_child()
        if child is None:
            return False
        if isinstance(child, Component):
            if forward:
                return child.delete_word_forward(ctx)
            return child.delete_word(ctx)
        if forward:
            child.delete_word_forward()
        else:
            child.delete_word()
        ctx.record_input(child.id, child.value)
        return True

    def delete_word(self, ctx: EventContext) -> bool:
        return self._delete_word_in_child(ctx, forward=False)

    def delete_word_forward(self, ctx: EventContext) -> bool:
        return self._delete_word_in_child(ctx, forward=True)

    def render_children(self) -> bool:
        return self.focus_mode() is FocusMode.PASS_THROUGH