# steply

steply is the engine behind multi-step forms in the terminal. A form is a
`Flow` of steps. Each step holds nodes: inputs, components and plain text.
The engine moves focus between the nodes, routes key presses to the focused
one, validates what was entered, and can run an overlay layer on top of the
current step.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a flow

```python
from steply.events import Submit
from steply.flow import Flow
from steply.node import Input
from steply.reducer import AppState, reduce
from steply.validation import StepBuilder, ValidationError


def required(text):
    if not text:
        raise ValidationError("Required")


step = (
    StepBuilder("Please fill the form:")
    .hint("Tab/Shift+Tab to move, Enter to submit")
    .input(Input("username", "Username", validators=[required]))
    .text("Some explanatory text")
    .build()
)

state = AppState(Flow([step]))
effects = reduce(state, Submit(), 2.0, None)
```

Nodes are:

- `steply.node.Input`: a single-line text input with a cursor. It takes an
  id, a label, an initial value, a list of validators and an optional
  `max_length`. A validator is a callable that takes the raw text and raises
  `steply.validation.ValidationError` when the text is not acceptable. The
  input handles printable characters, Backspace, Delete, Left, Right, Home
  and End; Enter asks the form to submit. Subclass it for other kinds of
  input (completeness checks, tab completion, typed values).
- `steply.component.Component`: a widget that may hold child nodes. With
  `FocusMode.PASS_THROUGH` (the default) focus goes to its children; with
  `FocusMode.GROUP` the component itself is one focus target. A component
  can be bound to another node through `bind_target()`.
- a plain `str`: text.

`steply.node` also has helpers that search node trees: `find_input`,
`find_component`, `first_input` and `poll_components`.

Step-level validators are added with `StepBuilder.validator`. They receive a
`ValidationContext` (raw values and completeness of every input, by id) and
return `(id, message)` pairs.

## Actions and effects

`reduce(state, action, error_timeout, active_nodes)` in `steply.reducer`
applies an action from `steply.events` to an `AppState` and returns a list
of effects:

- `Emit(event)`: queue an event now.
- `EmitAfter(event, delay)`: queue an event after `delay` seconds (used to
  clear error messages).
- `CancelClearError(id)`: withdraw a pending error-clear for an input.
- `ComponentProduced(id, value)`: a component produced a value for its bind
  target.

The actions are `Exit`, `Cancel`, `Submit`, `NextInput`, `PrevInput`,
`DeleteWord`, `DeleteWordForward`, `InputKey`, `TabKey` and
`ClearErrorMessage`. Focus and editing actions work on `active_nodes` when
given (for example the nodes of an open layer), otherwise on the current
step.

On `Submit` the reducer:

1. Validates the focused input; on failure the error is shown inline and a
   delayed `ClearErrorMessage` is scheduled.
2. Otherwise moves focus to the next target, if there is one.
3. On the last target, validates the whole step. Errors are shown inline and
   focus moves to the first failing input.
4. If the step is valid, the flow advances to the next step. After the last
   step it emits `Submitted` and sets `should_exit`.

`steply.event_queue.EventQueue` holds events to deliver now and events
scheduled for later; `next_ready(now)` releases due events and pops the next
one. `steply.action_bindings.ActionBindings` maps key presses to actions.
The default bindings are:

| Key | Action |
| --- | --- |
| Ctrl+C, Esc | `Cancel` |
| Tab | `NextInput` |
| Shift+BackTab | `PrevInput` |
| Ctrl+Backspace, Ctrl+W | `DeleteWord` |
| Ctrl+Delete | `DeleteWordForward` |

Use `bind` and `unbind` to change them.

## Overlays

`steply.layer.OverlayState` is a layer with its own nodes;
`OverlayState.demo()` builds one with a single search input. Open and close
it with `steply.layer_manager.LayerManager`:

```python
from steply.layer import OverlayState
from steply.layer_manager import LayerManager

manager = LayerManager()
manager.open(OverlayState.demo(), step.nodes, state.engine)
# pass manager.active.nodes as active_nodes to reduce() while it is open
manager.close(state.engine, step.nodes, emitted.append)
```

When opened without a bind target, the layer is bound to the step node that
had focus. On close, a non-empty value in the layer's first input is handed
to the bound node as a `ValueProduced` event, and focus returns to the node
that had it before.

## Fuzzy search

```python
from steply.autocomplete import suggest
from steply.fuzzy import match_candidates_top

names = ["config.yaml", "plan.yml", "README.md"]
matches = match_candidates_top("pl", names, 5)
completion = suggest("pl", matches, names)  # "plan.yml"
```

`match_candidates`, `match_candidates_limited` and `match_candidates_top`
return `FuzzyMatch` objects holding the candidate's index, its score, the
matched character positions and the ranges they form, best score first.
Matching ignores ASCII case. Matches score higher when they are contiguous,
start the candidate, fall on word boundaries or match at its end.

## What steply does not do

steply does not draw anything and does not read the terminal. There is no
command to run, no renderer and no key reader: you feed it `KeyEvent`s,
apply the effects it returns, and draw the nodes with a renderer of your
choice. Apart from the plain text `Input` and the base `Component`, it ships
no ready-made widgets (selects, checkboxes, file browsers and the like).