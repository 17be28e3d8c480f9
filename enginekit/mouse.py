"""Mouse position, button state and buffered mouse events."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

from enginekit.enumset import EnumSet
from enginekit.events import Producer
from enginekit.mathutil import safe_add
from enginekit.ringqueue import RingQueue

MOUSE_BUFFER_LEN = 256


class StateFlags(enum.IntFlag):
    LEFT_DOWN = 1 << 0
    RIGHT_DOWN = 1 << 1
    MIDDLE_DOWN = 1 << 2
    BUTTON_DOWN = LEFT_DOWN | RIGHT_DOWN | MIDDLE_DOWN
    INSIDE_WINDOW = 1 << 3


class MouseEventType(enum.Enum):
    L_PRESS = 0
    L_RELEASE = 1
    L_HELD = 2
    R_PRESS = 3
    R_RELEASE = 4
    R_HELD = 5
    M_PRESS = 6
    M_RELEASE = 7
    M_HELD = 8
    WHEEL = 9
    MOVE = 10
    ENTER = 11
    LEAVE = 12
    INVALID = 13


def _new_state() -> EnumSet:
    return EnumSet(StateFlags, bits=8)


@dataclass
class MouseEvent:
    type: MouseEventType
    state: EnumSet = field(default_factory=_new_state)
    x: int = 0
    y: int = 0
    wheel_delta: int = 0
    dx: int = 0
    dy: int = 0


_HELD = (
    (StateFlags.LEFT_DOWN, MouseEventType.L_HELD),
    (StateFlags.RIGHT_DOWN, MouseEventType.R_HELD),
    (StateFlags.MIDDLE_DOWN, MouseEventType.M_HELD),
)


class Mouse(Producer[MouseEvent]):
    """Accumulates relative motion and button state into queued events."""

    def __init__(self) -> None:
        super().__init__()
        self._buffer: RingQueue[MouseEvent] = RingQueue(MOUSE_BUFFER_LEN)
        self._state = _new_state()
        self._wheel_offset = 0
        self._x = 0
        self._y = 0

    @property
    def state(self) -> EnumSet:
        """A copy of the current state flags."""
        return copy.copy(self._state)

    def _event(self, event_type: MouseEventType, **extra: int) -> MouseEvent:
        return MouseEvent(event_type, copy.copy(self._state), self._x, self._y, **extra)

    def _queue(self, event_type: MouseEventType, **extra: int) -> None:
        self._buffer.push(self._event(event_type, **extra))

    def empty(self) -> bool:
        return not self._buffer

    def clear(self) -> None:
        """Drop queued events; position and button state are kept."""
        self._buffer.clear()

    def point(self) -> Tuple[int, int]:
        return (self._x, self._y)

    def read_event(self) -> Optional[MouseEvent]:
        return None if self.empty() else self._buffer.pop()

    def has_state_flag(self, flag: StateFlags) -> bool:
        return self._state.all(flag)

    def wheel_offset(self) -> int:
        return self._wheel_offset

    def dispatch_input_events(self) -> None:
        """Send queued events, then a HELD event for each button held down."""
        while (event := self.read_event()) is not None:
            self.produce(event)
        for flag, event_type in _HELD:
            if self.has_state_flag(flag):
                self.produce(self._event(event_type))

    def on_mouse_move(self, dx: int, dy: int) -> None:
        self._x += dx
        self._y += dy
        self._queue(MouseEventType.MOVE, dx=dx, dy=dy)

    def on_left_down(self) -> None:
        self._state.set(StateFlags.LEFT_DOWN)
        self._queue(MouseEventType.L_PRESS)

    def on_right_down(self) -> None:
        self._state.set(StateFlags.RIGHT_DOWN)
        self._queue(MouseEventType.R_PRESS)

    def on_middle_down(self) -> None:
        self._state.set(StateFlags.MIDDLE_DOWN)
        self._queue(MouseEventType.M_PRESS)

    def on_left_up(self) -> None:
        self._state.reset(StateFlags.LEFT_DOWN)
        self._queue(MouseEventType.L_RELEASE)

    def on_right_up(self) -> None:
        self._state.reset(StateFlags.RIGHT_DOWN)
        self._queue(MouseEventType.R_RELEASE)

    def on_middle_up(self) -> None:
        self._state.reset(StateFlags.MIDDLE_DOWN)
        self._queue(MouseEventType.M_RELEASE)

    def on_wheel(self, wheel_delta: int) -> None:
        """Queue a wheel event; the offset stays put if adding would overflow."""
        self._queue(MouseEventType.WHEEL, wheel_delta=wheel_delta)
        try:
            self._wheel_offset = safe_add(self._wheel_offset, wheel_delta)
        except OverflowError:
            pass

    def on_mouse_leave(self) -> None:
        self._state.reset(StateFlags.INSIDE_WINDOW)
        self._queue(MouseEventType.LEAVE)

    def on_mouse_enter(self) -> None:
        self._state.set(StateFlags.INSIDE_WINDOW)
        self._queue(MouseEventType.ENTER)