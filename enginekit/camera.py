"""A free-flying first-person camera driven by keyboard and mouse events."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from enginekit.events import Consumer
from enginekit.keyboard import KeyEvent, KeyEventType
from enginekit.mathutil import PI, wrap_angle
from enginekit.mouse import MouseEvent, MouseEventType
from enginekit.transforms import (
    look_at_lh,
    rotation_roll_pitch_yaw,
    scaling,
    transform_point,
)

logger = logging.getLogger(__name__)

TRAVEL_SPEED = 0.4
ROTATION_SPEED = 0.004
PITCH_LIMIT = 0.995 * PI / 2.0
START_POSITION = (0.0, 7.5, -18.0)

KEY_W = 87
KEY_A = 65
KEY_S = 83
KEY_D = 68

_KEY_TRANSLATIONS = {
    KEY_W: (0.0, 0.0, TRAVEL_SPEED),
    KEY_A: (-TRAVEL_SPEED, 0.0, 0.0),
    KEY_S: (0.0, 0.0, -TRAVEL_SPEED),
    KEY_D: (TRAVEL_SPEED, 0.0, 0.0),
}

_ZERO = (0.0, 0.0, 0.0)


class Camera(Consumer):
    """Camera with a position, pitch and yaw; consumes key and mouse events."""

    def __init__(self) -> None:
        self.reset()

    @property
    def position(self) -> tuple:
        return tuple(float(c) for c in self._pos)

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def yaw(self) -> float:
        return self._yaw

    def matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and orientation."""
        look = transform_point(
            (0.0, 0.0, 1.0), rotation_roll_pitch_yaw(self._pitch, self._yaw, 0.0)
        )
        return look_at_lh(self._pos, self._pos + look, (0.0, 1.0, 0.0))

    def reset(self) -> None:
        self._pos = np.array(START_POSITION, dtype=float)
        self._pitch = 0.0
        self._yaw = 0.0

    def rotate(self, dx: float, dy: float) -> None:
        """Turn by mouse deltas; yaw wraps, pitch stops just short of vertical."""
        self._yaw = wrap_angle(self._yaw + dx * ROTATION_SPEED)
        self._pitch = min(max(self._pitch + dy * ROTATION_SPEED, -PITCH_LIMIT), PITCH_LIMIT)

    def translate(self, translation: Sequence[float]) -> None:
        """Move by ``translation`` given in camera space, scaled by travel speed."""
        matrix = rotation_roll_pitch_yaw(self._pitch, self._yaw, 0.0) @ scaling(
            TRAVEL_SPEED, TRAVEL_SPEED, TRAVEL_SPEED
        )
        self._pos = self._pos + transform_point(translation, matrix)

    def consume(self, event: Any, producer: Any) -> None:
        if isinstance(event, KeyEvent):
            self._consume_key(event)
        elif isinstance(event, MouseEvent):
            self._consume_mouse(event)
        else:
            raise TypeError(f"camera cannot consume {type(event).__name__}")

    def _consume_key(self, event: KeyEvent) -> None:
        logger.info("%s", event.code)
        if event.type is not KeyEventType.PRESSED:
            return
        self.translate(_KEY_TRANSLATIONS.get(event.code, _ZERO))

    def _consume_mouse(self, event: MouseEvent) -> None:
        translation = _ZERO
        if event.type is MouseEventType.MOVE:
            self.rotate(float(event.dx), float(event.dy))
        elif event.type is MouseEventType.L_HELD:
            translation = (0.0, TRAVEL_SPEED, 0.0)
        elif event.type is MouseEventType.R_HELD:
            translation = (0.0, -TRAVEL_SPEED, 0.0)
        self.translate(translation)