"""Ordered sequence of steps with per-step status."""

from __future__ import annotations

import enum
from typing import Any, Iterable, List, Optional


class StepStatus(enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    DONE = "done"
    CANCELLED = "cancelled"


class Flow:
    """Steps walked through in order; the first step starts active."""

    def __init__(self, steps: Iterable[Any]) -> None:
        self._steps: List[Any] = list(steps)
        self._current = 0
        self._statuses = [StepStatus.PENDING] * len(self._steps)
        if self._statuses:
            self._statuses[0] = StepStatus.ACTIVE

    def __len__(self) -> int:
        return len(self._steps)

    def current_index(self) -> int:
        return self._current

    def current_step(self) -> Any:
        """Return the current step; raises IndexError if there are none."""
        return self._steps[self._current]

    def step_at(self, index: int) -> Optional[Any]:
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def current_status(self) -> StepStatus:
        if self._current < len(self._statuses):
            return self._statuses[self._current]
        return StepStatus.ACTIVE

    def status_at(self, index: int) -> StepStatus:
        if 0 <= index < len(self._statuses):
            return self._statuses[index]
        return StepStatus.PENDING

    def has_next(self) -> bool:
        return self._current + 1 < len(self._steps)

    def advance(self) -> None:
        """Mark the current step done and activate the next, if any."""
        if not self.has_next():
            return
        self._statuses[self._current] = StepStatus.DONE
        self._current += 1
        self._statuses[self._current] = StepStatus.ACTIVE

    def cancel_current(self) -> None:
        if self._current < len(self._statuses):
            self._statuses[self._current] = StepStatus.CANCELLED