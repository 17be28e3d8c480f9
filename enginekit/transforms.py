"""4x4 transformation matrices for row vectors (``v' = v @ M``).

Matrices are row-major with the translation in the last row. Angles are
in radians and rotations are clockwise when looking along the rotation
axis towards the origin, as in a left-handed coordinate system.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Vector3 = Sequence[float]


def identity() -> np.ndarray:
    return np.identity(4)


def translation(x: float, y: float, z: float) -> np.ndarray:
    matrix = identity()
    matrix[3, :3] = (x, y, z)
    return matrix


def scaling(x: float, y: float, z: float) -> np.ndarray:
    return np.diag([float(x), float(y), float(z), 1.0])


def rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, s, 0.0],
            [0.0, -s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def _rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [c, 0.0, -s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array(
        [
            [c, s, 0.0, 0.0],
            [-s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """Rotate by roll about Z, then pitch about X, then yaw about Y."""
    return rotation_z(roll) @ rotation_x(pitch) @ _rotation_y(yaw)


def _normalize(vector: np.ndarray, message: str) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        raise ValueError(message)
    return vector / length


def _vector3(value: Vector3, name: str) -> np.ndarray:
    array = np.asarray(value, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"{name} must have exactly three components")
    return array


def look_at_lh(eye: Vector3, target: Vector3, up: Vector3) -> np.ndarray:
    """Build a left-handed view matrix looking from ``eye`` towards ``target``."""
    eye_v = _vector3(eye, "eye")
    target_v = _vector3(target, "target")
    up_v = _vector3(up, "up")
    forward = _normalize(target_v - eye_v, "eye and target coincide")
    right = _normalize(np.cross(up_v, forward), "up is parallel to the view direction")
    upward = np.cross(forward, right)
    matrix = identity()
    matrix[:3, 0] = right
    matrix[:3, 1] = upward
    matrix[:3, 2] = forward
    matrix[3, :3] = (-(right @ eye_v), -(upward @ eye_v), -(forward @ eye_v))
    return matrix


def transform_point(point: Vector3, matrix: np.ndarray) -> np.ndarray:
    """Transform ``point`` as ``(x, y, z, 1)`` and return the first three components."""
    homogeneous = np.append(_vector3(point, "point"), 1.0)
    return (homogeneous @ np.asarray(matrix, dtype=float))[:3]