"""Keys, bind targets, user actions and application events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from steply.value import Value


class Key(enum.Enum):
    """Named non-character keys. Character keys are plain one-character strings."""

    ESC = "esc"
    TAB = "tab"
    BACK_TAB = "back_tab"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


KeyCode = Union[Key, str]


class KeyModifiers(enum.Flag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


@dataclass(frozen=True)
class KeyEvent:
    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE


class BindKind(enum.Enum):
    INPUT = "input"
    COMPONENT = "component"


@dataclass(frozen=True)
class BindTarget:
    """A node whose value a component or layer is bound to."""

    kind: BindKind
    id: str

    @classmethod
    def input(cls, id: str) -> "BindTarget":
        return cls(BindKind.INPUT, id)

    @classmethod
    def component(cls, id: str) -> "BindTarget":
        return cls(BindKind.COMPONENT, id)


class SourceKind(enum.Enum):
    COMPONENT = "component"
    LAYER = "layer"


@dataclass(frozen=True)
class ValueSource:
    """Where a requested or produced value comes from."""

    kind: SourceKind
    id: str


# Actions


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class NextInput:
    pass


@dataclass(frozen=True)
class PrevInput:
    pass


@dataclass(frozen=True)
class DeleteWord:
    pass


@dataclass(frozen=True)
class DeleteWordForward:
    pass


@dataclass(frozen=True)
class InputKey:
    key: KeyEvent


@dataclass(frozen=True)
class TabKey:
    key: KeyEvent


@dataclass(frozen=True)
class ClearErrorMessage:
    id: str


Action = Union[
    Exit,
    Cancel,
    Submit,
    NextInput,
    PrevInput,
    DeleteWord,
    DeleteWordForward,
    InputKey,
    TabKey,
    ClearErrorMessage,
]


# Application events


@dataclass(frozen=True)
class KeyPressed:
    key: KeyEvent


@dataclass(frozen=True)
class ActionEvent:
    action: Action


@dataclass(frozen=True)
class ValueRequested:
    source: ValueSource
    target: BindTarget


@dataclass(frozen=True)
class ValueProduced:
    source: ValueSource
    target: BindTarget
    value: Value


@dataclass(frozen=True)
class RequestRerender:
    pass


@dataclass(frozen=True)
class InputChanged:
    id: str
    value: str


@dataclass(frozen=True)
class FocusChanged:
    from_id: Optional[str]
    to_id: Optional[str]


@dataclass(frozen=True)
class Submitted:
    pass


AppEvent = Union[
    KeyPressed,
    ActionEvent,
    ValueRequested,
    ValueProduced,
    RequestRerender,
    InputChanged,
    FocusChanged,
    Submitted,
]