"""A first-person fly camera driven by keyboard and mouse."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Sequence

import numpy as np

YAW = -90.0
PITCH = 0.0
SPEED = 2.5
SENSITIVITY = 0.1
PITCH_LIMIT = 89.0


class Movement(IntEnum):
    """Directions the camera can move in."""

    FORWARD = 0
    BACKWARD = 1
    LEFT = 2
    RIGHT = 3
    UPWARD = 4
    DOWNWARD = 5


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Return a right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = np.asarray(eye, dtype=np.float64)
    f = _normalize(np.asarray(center, dtype=np.float64) - eye)
    s = _normalize(np.cross(f, np.asarray(up, dtype=np.float64)))
    u = np.cross(s, f)
    view = np.eye(4)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye)
    view[1, 3] = -np.dot(u, eye)
    view[2, 3] = np.dot(f, eye)
    return view


class Camera:
    """Position and orientation of the viewer, updated from input."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        speed: float = SPEED,
        up: Sequence[float] = (0.0, 1.0, 0.0),
        yaw: float = YAW,
        pitch: float = PITCH,
    ) -> None:
        self.position = np.array(position, dtype=np.float64)
        self.world_up = np.array(up, dtype=np.float64)
        self.front = np.array([0.0, 0.0, -1.0])
        self.up = np.zeros(3)
        self.right = np.zeros(3)
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.movement_speed = float(speed)
        self.mouse_sensitivity = SENSITIVITY
        self._update_vectors()

    def view_matrix(self) -> np.ndarray:
        """Return the view matrix for the current position and orientation."""
        return look_at(self.position, self.position + self.front, self.up)

    def process_keyboard(self, direction: Movement, delta_time: float) -> None:
        """Move the camera in ``direction`` for ``delta_time`` seconds."""
        velocity = self.movement_speed * delta_time
        steps = {
            Movement.FORWARD: self.front,
            Movement.BACKWARD: -self.front,
            Movement.LEFT: -self.right,
            Movement.RIGHT: self.right,
            Movement.UPWARD: self.up,
            Movement.DOWNWARD: -self.up,
        }
        self.position = self.position + steps[Movement(direction)] * velocity

    def process_mouse_movement(
        self, x_offset: float, y_offset: float, constrain_pitch: bool = True
    ) -> None:
        """Turn the camera by a mouse offset, optionally keeping pitch in range."""
        self.yaw += x_offset * self.mouse_sensitivity
        self.pitch += y_offset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)
        self._update_vectors()

    def _update_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
        self.front = _normalize(front)
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))