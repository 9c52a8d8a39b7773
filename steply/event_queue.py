"""FIFO of application events with delayed delivery."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

from steply.events import ActionEvent, AppEvent, ClearErrorMessage


@dataclass
class _ScheduledEvent:
    due: float
    event: AppEvent


def _is_clear_error(event: AppEvent, id: str) -> bool:
    return (
        isinstance(event, ActionEvent)
        and isinstance(event.action, ClearErrorMessage)
        and event.action.id == id
    )


class EventQueue:
    """Events ready now, plus events scheduled for a later time.

    Times are in seconds as returned by ``clock`` (monotonic by default).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: Deque[AppEvent] = deque()
        self._scheduled: List[_ScheduledEvent] = []

    def emit(self, event: AppEvent) -> None:
        self._queue.append(event)

    def emit_after(self, event: AppEvent, delay: float) -> None:
        self._scheduled.append(_ScheduledEvent(self._clock() + delay, event))

    def cancel_clear_error_message(self, id: str) -> None:
        """Drop every pending ClearErrorMessage for ``id``."""
        self._queue = deque(e for e in self._queue if not _is_clear_error(e, id))
        self._scheduled = [
            s for s in self._scheduled if not _is_clear_error(s.event, id)
        ]

    def next_ready(self, now: Optional[float] = None) -> Optional[AppEvent]:
        """Pop the next event, first releasing any that are due at ``now``."""
        if now is None:
            now = self._clock()
        due = [s.event for s in self._scheduled if s.due <= now]
        self._scheduled = [s for s in self._scheduled if s.due > now]
        self._queue.extend(due)
        return self._queue.popleft() if self._queue else None