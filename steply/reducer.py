"""Application state and the reducer that applies actions to it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from steply.events import (
    Action,
    ActionEvent,
    AppEvent,
    Cancel,
    ClearErrorMessage,
    DeleteWord,
    DeleteWordForward,
    Exit,
    FocusChanged as AppFocusChanged,
    InputChanged as AppInputChanged,
    InputKey,
    NextInput,
    PrevInput,
    Submit,
    Submitted,
    TabKey,
)
from steply.flow import Flow
from steply.form_engine import (
    EngineOutput,
    ErrorCancelled,
    ErrorScheduled,
    FocusChanged,
    FormEngine,
    FormEvent,
    InputChanged,
    SubmitRequested,
)
from steply.node import Node
from steply.validation import FieldError, validate_all_inputs
from steply.value import Value

ERROR_TIMEOUT = 2.0


class AppState:
    """The flow of steps, the form engine for the current step, and the exit flag."""

    def __init__(self, flow: Flow) -> None:
        self.flow = flow
        self.engine = FormEngine(flow.current_step().nodes)
        self.should_exit = False

    def reset_engine_for_current_step(self) -> None:
        self.engine.reset_with_nodes(self.flow.current_step().nodes)


@dataclass(frozen=True)
class Emit:
    """Queue ``event`` for immediate delivery."""

    event: AppEvent


@dataclass(frozen=True)
class EmitAfter:
    """Queue ``event`` for delivery after ``delay`` seconds."""

    event: AppEvent
    delay: float


@dataclass(frozen=True)
class CancelClearError:
    """Drop any pending error-clearing for input ``id``."""

    id: str


@dataclass(frozen=True)
class ComponentProduced:
    """Component ``id`` produced ``value`` for its bind target."""

    id: str
    value: Value


Effect = Union[Emit, EmitAfter, CancelClearError, ComponentProduced]


def reduce(
    state: AppState,
    action: Action,
    error_timeout: float = ERROR_TIMEOUT,
    active_nodes: Optional[Sequence[Node]] = None,
) -> List[Effect]:
    """Apply ``action`` to ``state`` and return the effects to carry out.

    Focus and editing actions work on ``active_nodes`` when given (an open
    layer), otherwise on the current step's nodes. Submission always works on
    the current step.
    """
    nodes: Sequence[Node] = (
        active_nodes if active_nodes is not None else state.flow.current_step().nodes
    )

    match action:
        case Exit():
            state.should_exit = True
            return []
        case Cancel():
            state.flow.cancel_current()
            state.should_exit = True
            return []
        case NextInput():
            return _form_events_to_effects(state.engine.move_focus(nodes, 1))
        case PrevInput():
            return _form_events_to_effects(state.engine.move_focus(nodes, -1))
        case Submit():
            return _handle_submit(state, error_timeout)
        case DeleteWord():
            return _form_events_to_effects(state.engine.handle_delete_word(nodes, False))
        case DeleteWordForward():
            return _form_events_to_effects(state.engine.handle_delete_word(nodes, True))
        case InputKey(key):
            output = state.engine.handle_key(nodes, key)
            return _reduce_engine_output(state, output, error_timeout)
        case TabKey(key):
            if state.engine.handle_tab_completion(nodes):
                return []
            output = state.engine.handle_key(nodes, key)
            if output.handled:
                return _reduce_engine_output(state, output, error_timeout)
            return _form_events_to_effects(state.engine.move_focus(nodes, 1))
        case ClearErrorMessage(id):
            state.engine.clear_error(nodes, id)
            return []
    raise TypeError(f"unknown action: {action!r}")


def _form_events_to_effects(events: Sequence[FormEvent]) -> List[Effect]:
    effects: List[Effect] = []
    for event in events:
        match event:
            case InputChanged(id, value):
                effects.append(Emit(AppInputChanged(id, value)))
            case FocusChanged(from_id, to_id):
                effects.append(Emit(AppFocusChanged(from_id, to_id)))
            case ErrorCancelled(id) | ErrorScheduled(id):
                effects.append(CancelClearError(id))
            case SubmitRequested():
                pass
    return effects


def _reduce_engine_output(
    state: AppState, output: EngineOutput, error_timeout: float
) -> List[Effect]:
    has_submit = any(isinstance(e, SubmitRequested) for e in output.events)
    effects = _form_events_to_effects(output.events)
    effects.extend(ComponentProduced(p.id, p.value) for p in output.produced)
    if has_submit:
        effects.extend(_handle_submit(state, error_timeout))
    return effects


def _handle_submit(state: AppState, error_timeout: float) -> List[Effect]:
    nodes = state.flow.current_step().nodes

    failure = state.engine.validate_focused(nodes)
    if failure is not None:
        id, _message = failure
        return [
            CancelClearError(id),
            EmitAfter(ActionEvent(ClearErrorMessage(id)), error_timeout),
        ]

    focus_events = state.engine.advance_focus(nodes)
    if focus_events is not None:
        return _form_events_to_effects(focus_events)

    errors = validate_all_inputs(state.flow.current_step())
    if not errors:
        return _handle_successful_submit(state)

    return _apply_errors_and_focus(state, errors, error_timeout)


def _handle_successful_submit(state: AppState) -> List[Effect]:
    if state.flow.has_next():
        state.engine.clear_focus(state.flow.current_step().nodes)
        state.flow.advance()
        state.reset_engine_for_current_step()
        return []
    state.should_exit = True
    return [Emit(Submitted())]


def _apply_errors_and_focus(
    state: AppState, errors: Sequence[FieldError], error_timeout: float
) -> List[Effect]:
    nodes = state.flow.current_step().nodes
    effects: List[Effect] = [
        EmitAfter(ActionEvent(ClearErrorMessage(id)), error_timeout)
        for id in state.engine.apply_errors(nodes, errors)
    ]
    first_id, _message = errors[0]
    index = state.engine.find_index_by_id(first_id)
    if index is not None:
        effects.extend(_form_events_to_effects(state.engine.set_focus(nodes, index)))
    return effects