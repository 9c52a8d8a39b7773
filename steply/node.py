"""Form nodes: inputs, plain text and components, and lookups over node trees.

A node is an :class:`Input`, a :class:`~steply.component.Component` or a
plain ``str`` of text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

from steply.component import Component, EventContext, FocusMode
from steply.events import Key, KeyCode, KeyModifiers
from steply.value import Value

_WORD_BEFORE = re.compile(r"\S*\s*\Z")
_WORD_AFTER = re.compile(r"\s*\S*")


@dataclass(frozen=True)
class InputError:
    """A validation message attached to an input; shown only when visible."""

    message: str
    visible: bool

    @classmethod
    def hidden(cls, message: str) -> "InputError":
        return cls(message, visible=False)

    @classmethod
    def inline(cls, message: str) -> "InputError":
        return cls(message, visible=True)


Validator = Callable[[str], None]


def _as_text(value: Value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, dict):
        return ", ".join(f"{key}={item}" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(value)
    raise TypeError(f"unsupported value type: {type(value).__name__}")


class Input:
    """A single-line text input with a cursor.

    Validators are callables that take the raw text and raise
    :class:`steply.validation.ValidationError` when it is not acceptable.
    ``max_length``, when given, limits the number of characters.
    """

    def __init__(
        self,
        id: str,
        label: str = "",
        value: str = "",
        validators: Iterable[Validator] = (),
        max_length: Optional[int] = None,
    ) -> None:
        self.id = id
        self.label = label
        self.focused = False
        self.error: Optional[InputError] = None
        self.validators: List[Validator] = list(validators)
        self.max_length = max_length
        self._value = value
        self.cursor = len(value)

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, text: str) -> None:
        self._value = text
        self.cursor = len(text)

    def raw_value(self) -> str:
        """The text that validators see."""
        return self._value

    def typed_value(self) -> Value:
        return self._value

    def set_typed_value(self, value: Value) -> None:
        """Set the text from any value, using its plain text form."""
        self.value = _as_text(value)

    def is_complete(self) -> bool:
        return True

    def validate_internal(self) -> None:
        """Check the input's own length limit, if it has one."""
        if self.max_length is not None and len(self._value) > self.max_length:
            from steply.validation import ValidationError

            raise ValidationError(f"Must be at most {self.max_length} characters")

    def supports_tab_completion(self) -> bool:
        return False

    def handle_tab_completion(self) -> bool:
        return False

    def delete_word(self) -> None:
        """Delete the word before the cursor, with the blanks after it."""
        before = self._value[: self.cursor]
        start = _WORD_BEFORE.search(before).start()
        self._splice(start, self.cursor, "")

    def delete_word_forward(self) -> None:
        """Delete the word after the cursor, with the blanks before it."""
        after = self._value[self.cursor :]
        end = self.cursor + _WORD_AFTER.match(after).end()
        self._splice(self.cursor, end, "")

    def handle_key(
        self, code: KeyCode, modifiers: KeyModifiers, ctx: EventContext
    ) -> bool:
        """Edit the text for one key press; Enter asks for the form to submit."""
        if code is Key.ENTER:
            ctx.submit()
            return True

        before = self._value
        if isinstance(code, str):
            if modifiers & (KeyModifiers.CONTROL | KeyModifiers.ALT):
                return False
            self._splice(self.cursor, self.cursor, code)
        elif code is Key.BACKSPACE:
            if self.cursor > 0:
                self._splice(self.cursor - 1, self.cursor, "")
        elif code is Key.DELETE:
            if self.cursor < len(self._value):
                self._splice(self.cursor, self.cursor + 1, "")
        elif code is Key.LEFT:
            self.cursor = max(self.cursor - 1, 0)
        elif code is Key.RIGHT:
            self.cursor = min(self.cursor + 1, len(self._value))
        elif code is Key.HOME:
            self.cursor = 0
        elif code is Key.END:
            self.cursor = len(self._value)
        else:
            return False

        if self._value != before:
            ctx.record_input(self.id, self._value)
        else:
            ctx.mark_handled()
        return True

    def _splice(self, start: int, end: int, text: str) -> None:
        self._value = self._value[:start] + text + self._value[end:]
        self.cursor = start + len(text)


Node = Union[Input, Component, str]


def is_input(node: Node) -> bool:
    return isinstance(node, Input)


def is_component(node: Node) -> bool:
    return isinstance(node, Component)


def node_id(node: Node) -> Optional[str]:
    """The id of an input or component; text nodes have none."""
    if isinstance(node, (Input, Component)):
        return node.id
    return None


def node_children(node: Node) -> Optional[List[Node]]:
    if isinstance(node, Component):
        return node.children()
    return None


def focus_mode(node: Node) -> FocusMode:
    if isinstance(node, Component):
        return node.focus_mode()
    return FocusMode.PASS_THROUGH


def is_focusable(node: Node) -> bool:
    if isinstance(node, Input):
        return True
    if isinstance(node, Component):
        return node.focus_mode() is FocusMode.GROUP
    return False


def is_focused(node: Node) -> bool:
    if isinstance(node, (Input, Component)):
        return node.focused
    return False


def set_focused(node: Node, focused: bool) -> None:
    if isinstance(node, (Input, Component)):
        node.focused = focused


def handle_node_key(
    node: Node, code: KeyCode, modifiers: KeyModifiers, ctx: EventContext
) -> bool:
    """Pass a key press to the widget behind ``node``."""
    if isinstance(node, (Input, Component)):
        return node.handle_key(code, modifiers, ctx)
    return False


def _walk_inputs(nodes: Sequence[Node]) -> Iterator[Input]:
    for node in nodes:
        if isinstance(node, Input):
            yield node
        elif isinstance(node, Component):
            yield from _walk_inputs(node.children() or ())


def _walk_components(nodes: Sequence[Node]) -> Iterator[Component]:
    for node in nodes:
        if isinstance(node, Component):
            yield node
            yield from _walk_components(node.children() or ())


def find_input(nodes: Sequence[Node], id: str) -> Optional[Input]:
    """The first input with ``id``, searching into component children."""
    return next((inp for inp in _walk_inputs(nodes) if inp.id == id), None)


def find_component(nodes: Sequence[Node], id: str) -> Optional[Component]:
    """The first component with ``id``, searching depth first."""
    return next((c for c in _walk_components(nodes) if c.id == id), None)


def first_input(nodes: Sequence[Node]) -> Optional[Input]:
    return next(_walk_inputs(nodes), None)


def poll_components(nodes: Sequence[Node]) -> bool:
    """Poll every component in the tree; True if any reported a change."""
    updated = False
    for component in _walk_components(nodes):
        if component.poll():
            updated = True
    return updated