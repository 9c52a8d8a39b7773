"""Focus traversal, key routing and error handling over a tree of form nodes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from steply.component import Component, EventContext, FocusMode, ComponentResponse
from steply.events import KeyEvent
from steply.node import (
    Input,
    InputError,
    Node,
    find_input,
    handle_node_key,
    node_children,
    set_focused,
)
from steply.validation import FieldError, ValidationError, validate_input
from steply.value import Value


# Form events


@dataclass(frozen=True)
class InputChanged:
    id: str
    value: str


@dataclass(frozen=True)
class FocusChanged:
    from_id: Optional[str]
    to_id: Optional[str]


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class ErrorScheduled:
    id: str


@dataclass(frozen=True)
class ErrorCancelled:
    id: str


FormEvent = Union[InputChanged, FocusChanged, SubmitRequested, ErrorScheduled, ErrorCancelled]


@dataclass
class ComponentValue:
    """A value produced by the component ``id`` while handling a key."""

    id: str
    value: Value


@dataclass
class EngineOutput:
    """Everything that came out of routing one key press."""

    events: List[FormEvent] = field(default_factory=list)
    produced: List[ComponentValue] = field(default_factory=list)
    handled: bool = False


class _FocusKind(enum.Enum):
    INPUT = "input"
    COMPONENT = "component"


@dataclass(frozen=True)
class _FocusTarget:
    path: Tuple[int, ...]
    id: str
    kind: _FocusKind


def _iter_inputs(nodes: Sequence[Node]) -> Iterator[Input]:
    for node in nodes:
        if isinstance(node, Input):
            yield node
        elif isinstance(node, Component):
            yield from _iter_inputs(node.children() or ())


def _collect_focus_targets(
    nodes: Sequence[Node], prefix: Tuple[int, ...] = ()
) -> Iterator[_FocusTarget]:
    for idx, node in enumerate(nodes):
        path = prefix + (idx,)
        if isinstance(node, Input):
            yield _FocusTarget(path, node.id, _FocusKind.INPUT)
        elif isinstance(node, Component):
            if node.focus_mode() is FocusMode.GROUP:
                yield _FocusTarget(path, node.id, _FocusKind.COMPONENT)
            else:
                yield from _collect_focus_targets(node.children() or (), path)


def _node_at_path(nodes: Sequence[Node], path: Sequence[int]) -> Optional[Node]:
    if not path:
        return None
    current: Optional[Sequence[Node]] = nodes
    node: Optional[Node] = None
    for idx in path:
        if current is None or not 0 <= idx < len(current):
            return None
        node = current[idx]
        current = node_children(node)
    return node


class FormEngine:
    """Tracks which node of a form has focus and routes edits to it.

    The first focus target is focused on construction.
    """

    def __init__(self, nodes: Sequence[Node]) -> None:
        self.input_ids: List[str] = []
        self._targets: List[_FocusTarget] = []
        self.focus_index: Optional[int] = None
        self.reset_with_nodes(nodes)

    def reset_with_nodes(self, nodes: Sequence[Node]) -> None:
        """Rebuild the focus targets from ``nodes`` and focus the first one."""
        self.input_ids = [inp.id for inp in _iter_inputs(nodes)]
        self._targets = list(_collect_focus_targets(nodes))
        self.focus_index = None
        if self._targets:
            self._set_focus_internal(nodes, 0)

    def _target_at(self, index: Optional[int]) -> Optional[_FocusTarget]:
        if index is None or not 0 <= index < len(self._targets):
            return None
        return self._targets[index]

    def _focused_target(self) -> Optional[_FocusTarget]:
        return self._target_at(self.focus_index)

    def focused_node_id(self) -> Optional[str]:
        target = self._focused_target()
        return target.id if target else None

    def _focused_input(self, nodes: Sequence[Node]) -> Optional[Input]:
        target = self._focused_target()
        if target is None or target.kind is not _FocusKind.INPUT:
            return None
        return find_input(nodes, target.id)

    def handle_tab_completion(self, nodes: Sequence[Node]) -> bool:
        """Let the focused input complete its text; True if it did."""
        inp = self._focused_input(nodes)
        if inp is None or not inp.supports_tab_completion():
            return False
        return inp.handle_tab_completion()

    def move_focus(self, nodes: Sequence[Node], direction: int) -> List[FormEvent]:
        """Move focus by ``direction`` targets, wrapping around.

        The input being left is validated and gets a hidden error if it fails.
        """
        if not self._targets:
            return []
        inp = self._focused_input(nodes)
        if inp is not None:
            try:
                validate_input(inp)
            except ValidationError as err:
                inp.error = InputError.hidden(str(err))
            else:
                inp.error = None

        current = self.focus_index if self.focus_index is not None else 0
        return self.set_focus(nodes, (current + direction) % len(self._targets))

    def set_focus(
        self, nodes: Sequence[Node], new_index: Optional[int]
    ) -> List[FormEvent]:
        """Focus the target at ``new_index``; no events if the target is unchanged."""
        from_target = self._focused_target()
        to_target = self._target_at(new_index)
        from_id = from_target.id if from_target else None
        to_id = to_target.id if to_target else None
        if from_id == to_id:
            return []

        if from_target is not None:
            self._set_target_focus(nodes, from_target, False)
        if to_target is not None:
            self._set_target_focus(nodes, to_target, True)
        self.focus_index = new_index
        return [FocusChanged(from_id, to_id)]

    def clear_focus(self, nodes: Sequence[Node]) -> None:
        target = self._focused_target()
        if target is not None:
            self._set_target_focus(nodes, target, False)
        self.focus_index = None

    def find_index_by_id(self, id: str) -> Optional[int]:
        return next((i for i, t in enumerate(self._targets) if t.id == id), None)

    def handle_key(self, nodes: Sequence[Node], key: KeyEvent) -> EngineOutput:
        """Route a key press to the focused widget and collect what it did."""
        output = EngineOutput()
        target = self._focused_target()
        if target is None:
            return output
        node = _node_at_path(nodes, target.path)
        if not isinstance(node, (Input, Component)):
            return output

        ctx = EventContext()
        handled = handle_node_key(node, key.code, key.modifiers, ctx)
        response = ctx.into_response(handled)
        output.handled = response.handled
        if response.produced is not None:
            output.produced.append(ComponentValue(target.id, response.produced))
        output.events.extend(self._apply_response(nodes, response))
        return output

    def handle_delete_word(
        self, nodes: Sequence[Node], forward: bool
    ) -> List[FormEvent]:
        """Delete a word in the focused widget, backwards or forwards."""
        target = self._focused_target()
        if target is None:
            return []
        node = _node_at_path(nodes, target.path)

        ctx = EventContext()
        if isinstance(node, Input):
            if forward:
                node.delete_word_forward()
            else:
                node.delete_word()
            ctx.record_input(node.id, node.value)
            handled = True
        elif isinstance(node, Component):
            handled = (
                node.delete_word_forward(ctx) if forward else node.delete_word(ctx)
            )
        else:
            return []

        if not handled:
            return []
        return self._apply_response(nodes, ctx.into_response(handled))

    def validate_focused(self, nodes: Sequence[Node]) -> Optional[FieldError]:
        """Validate the focused input.

        Returns ``(id, message)`` and shows the error inline if it fails,
        otherwise clears its error and returns None.
        """
        target = self._focused_target()
        if target is None or target.kind is not _FocusKind.INPUT:
            return None
        inp = find_input(nodes, target.id)
        if inp is None:
            return None
        try:
            validate_input(inp)
        except ValidationError as err:
            inp.error = InputError.inline(str(err))
            return (target.id, str(err))
        inp.error = None
        return None

    def apply_errors(
        self, nodes: Sequence[Node], errors: Sequence[FieldError]
    ) -> List[str]:
        """Show ``errors`` inline and clear every other input's error.

        Returns the ids of the inputs that now show an error.
        """
        messages = {}
        for eid, message in errors:
            messages.setdefault(eid, message)
        scheduled: List[str] = []
        for id in self.input_ids:
            inp = find_input(nodes, id)
            if inp is None:
                continue
            if id in messages:
                inp.error = InputError.inline(messages[id])
                scheduled.append(id)
            else:
                inp.error = None
        return scheduled

    def clear_error(self, nodes: Sequence[Node], id: str) -> None:
        inp = find_input(nodes, id)
        if inp is not None:
            inp.error = None

    def advance_focus(self, nodes: Sequence[Node]) -> Optional[List[FormEvent]]:
        """Focus the next target; None if focus is unset or already on the last."""
        if self.focus_index is None:
            return None
        nxt = self.focus_index + 1
        if nxt < len(self._targets):
            return self.set_focus(nodes, nxt)
        return None

    def _set_focus_internal(self, nodes: Sequence[Node], new_index: Optional[int]) -> None:
        current = self._focused_target()
        if current is not None:
            self._set_target_focus(nodes, current, False)
        target = self._target_at(new_index)
        if target is not None:
            self._set_target_focus(nodes, target, True)
        self.focus_index = new_index

    def _apply_response(
        self, nodes: Sequence[Node], response: ComponentResponse
    ) -> List[FormEvent]:
        events: List[FormEvent] = []
        for change in response.changes:
            inp = find_input(nodes, change.id)
            if inp is not None:
                events.extend(
                    self._apply_input_change(inp, change.id, change.value, change.apply)
                )
        if response.submit_requested:
            events.append(SubmitRequested())
        return events

    @staticmethod
    def _apply_input_change(
        inp: Input, id: str, value: str, apply: bool
    ) -> List[FormEvent]:
        if apply:
            inp.value = value
        inp.error = None
        try:
            validate_input(inp)
        except ValidationError as err:
            inp.error = InputError.hidden(str(err))
        return [InputChanged(id, value), ErrorCancelled(id)]

    @staticmethod
    def _set_target_focus(
        nodes: Sequence[Node], target: _FocusTarget, focused: bool
    ) -> None:
        node = _node_at_path(nodes, target.path)
        if node is not None:
            set_focused(node, focused)