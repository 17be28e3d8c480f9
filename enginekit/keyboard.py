"""Keyboard state and buffered key events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from enginekit.events import Producer
from enginekit.ringqueue import RingQueue

N_KEYS = 256
BUFFER_LEN = 256


class KeyEventType(enum.Enum):
    UP = 0
    PRESSED = 1
    DOWN = 2
    INVALID = 3


@dataclass(frozen=True)
class KeyEvent:
    type: KeyEventType
    code: int


@dataclass(frozen=True)
class CharEvent:
    """A typed character, as a 32-bit code point."""

    ch: int


def utf16_to_utf32(units: Iterable[int], limit: Optional[int] = None) -> List[int]:
    """Decode UTF-16 code units into at most ``limit`` code points.

    A high surrogate is combined with whatever unit follows it; a high
    surrogate at the very end is passed through unchanged.
    """
    result: List[int] = []
    it = iter(units)
    for current in it:
        if limit is not None and len(result) >= limit:
            break
        if 0xD800 <= current <= 0xDBFF:
            low = next(it, None)
            if low is None:
                result.append(current)
                break
            code = ((current - 0xD800) << 10) + (low - 0xDC00) + 0x10000
            result.append(code & 0xFFFFFFFF)
        else:
            result.append(current)
    return result


def _check_keycode(keycode: int) -> int:
    if not 0 <= keycode < N_KEYS:
        raise ValueError(f"keycode {keycode} out of range 0..{N_KEYS - 1}")
    return keycode


class Keyboard(Producer[KeyEvent]):
    """Tracks held keys and queues key and character events."""

    def __init__(self) -> None:
        super().__init__()
        self._key_states = [False] * N_KEYS
        self._key_buffer: RingQueue[KeyEvent] = RingQueue(BUFFER_LEN)
        self._char_buffer: RingQueue[CharEvent] = RingQueue(BUFFER_LEN)

    def is_key_pressed(self, keycode: int) -> bool:
        return self._key_states[_check_keycode(keycode)]

    def clear(self) -> None:
        """Release every key and drop all queued events."""
        self._key_states = [False] * N_KEYS
        self._key_buffer.clear()
        self._char_buffer.clear()

    def dispatch_input_events(self) -> None:
        """Send queued key events, then a PRESSED event for each held key."""
        while (event := self.read_key()) is not None:
            self.produce(event)
        for code, held in enumerate(self._key_states):
            if held:
                self.produce(KeyEvent(KeyEventType.PRESSED, code))

    def read_key(self) -> Optional[KeyEvent]:
        return self._key_buffer.pop() if self._key_buffer else None

    def read_char(self) -> Optional[CharEvent]:
        return self._char_buffer.pop() if self._char_buffer else None

    def on_key_down(self, keycode: int) -> None:
        self._key_states[_check_keycode(keycode)] = True
        self._key_buffer.push(KeyEvent(KeyEventType.DOWN, keycode))

    def on_key_up(self, keycode: int) -> None:
        self._key_states[_check_keycode(keycode)] = False
        self._key_buffer.push(KeyEvent(KeyEventType.UP, keycode))

    def on_char(self, ch: Union[int, str]) -> None:
        code = ord(ch) if isinstance(ch, str) else ch
        self._char_buffer.push(CharEvent(code))