"""Mapping from key presses to actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from steply.events import (
    Action,
    Cancel,
    DeleteWord,
    DeleteWordForward,
    Key,
    KeyCode,
    KeyEvent,
    KeyModifiers,
    NextInput,
    PrevInput,
)


@dataclass(frozen=True)
class KeyBinding:
    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE

    @classmethod
    def key(cls, code: KeyCode) -> "KeyBinding":
        return cls(code, KeyModifiers.NONE)

    @classmethod
    def ctrl(cls, code: KeyCode) -> "KeyBinding":
        return cls(code, KeyModifiers.CONTROL)

    @classmethod
    def from_key_event(cls, event: KeyEvent) -> "KeyBinding":
        return cls(event.code, event.modifiers)


class ActionBindings:
    """Key bindings, starting with the default set."""

    def __init__(self) -> None:
        self._bindings: Dict[KeyBinding, Action] = {
            KeyBinding.ctrl("c"): Cancel(),
            KeyBinding.key(Key.ESC): Cancel(),
            KeyBinding.key(Key.TAB): NextInput(),
            KeyBinding(Key.BACK_TAB, KeyModifiers.SHIFT): PrevInput(),
            KeyBinding.ctrl(Key.BACKSPACE): DeleteWord(),
            KeyBinding.ctrl("w"): DeleteWord(),
            KeyBinding.ctrl(Key.DELETE): DeleteWordForward(),
        }

    def bind(self, key: KeyBinding, action: Action) -> None:
        self._bindings[key] = action

    def unbind(self, key: KeyBinding) -> None:
        self._bindings.pop(key, None)

    def handle_key(self, key_event: KeyEvent) -> Optional[Action]:
        return self._bindings.get(KeyBinding.from_key_event(key_event))