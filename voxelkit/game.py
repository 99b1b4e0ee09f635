"""Game state: the camera, movement speed, toggles driven by keys, and the HUD text."""

from __future__ import annotations

import enum
import math
from typing import Iterable

import numpy as np

from voxelkit.camera import Camera, Movement
from voxelkit.renderer import FAR_PLANE, FOV_DEGREES, NEAR_PLANE, Renderer, perspective

START_POSITION = (0.0, 1.0, 0.0)
WORLD_UP = (0.0, 1.0, 0.0)
START_YAW = -90.0
START_PITCH = 0.0
DEFAULT_SPEED = 25.5
TOGGLE_COOLDOWN = 0.5
RENDER_DISTANCE = 2


class Key(enum.Enum):
    """Keys the game reacts to."""

    W = "w"
    S = "s"
    A = "a"
    D = "d"
    C = "c"
    B = "b"


_MOVES = {
    Key.W: Movement.FORWARD,
    Key.S: Movement.BACKWARD,
    Key.A: Movement.LEFT,
    Key.D: Movement.RIGHT,
}


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Game:
    """Holds the camera and the player-facing settings of a running game."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.speed = DEFAULT_SPEED
        self.render_distance = RENDER_DISTANCE
        self.locked = True
        self.wireframe = False
        self.elapsed = 0.0
        self.renderer: Renderer | None = None
        self._last_b = 0.0
        self._last_c = 0.0
        self._move_speed = self.speed
        # The camera moves one unit per second; the game's speed scales each step.
        self.camera = Camera(
            position=np.array(START_POSITION),
            speed=1.0,
            up=np.array(WORLD_UP),
            yaw=START_YAW,
            pitch=START_PITCH,
        )
        self.projection = self._projection(width, height)

    @staticmethod
    def _projection(width: int, height: int) -> np.ndarray:
        if height == 0:
            raise ValueError("viewport height must not be zero")
        return perspective(math.radians(FOV_DEGREES), width / height, NEAR_PLANE, FAR_PLANE)

    def _camera_position(self) -> np.ndarray:
        view = np.asarray(self.camera.view_matrix(), dtype=np.float64)
        inverse = np.linalg.inv(view)
        if np.allclose(view[3, :3], 0.0):
            return inverse[:3, 3]
        return inverse[3, :3]

    def update(self, delta_time: float) -> None:
        """Advance the game clock and apply the speed setting to movement."""
        self.elapsed += delta_time
        self._move_speed = self.speed

    def handle_input(self, pressed_keys: Iterable[Key], now: float, delta_time: float) -> None:
        """Move the camera for held movement keys; C toggles the cursor lock and
        B wireframe mode, each at most once per half second."""
        keys = set(pressed_keys)
        for key, direction in _MOVES.items():
            if key in keys:
                self.camera.process_keyboard(direction, delta_time * self._move_speed)
        if Key.C in keys and now - self._last_c > TOGGLE_COOLDOWN:
            self.locked = not self.locked
            self._last_c = now
        if Key.B in keys and now - self._last_b > TOGGLE_COOLDOWN:
            self.wireframe = not self.wireframe
            self._last_b = now

    def status_lines(self, framerate: float) -> list[str]:
        """The overlay text: rounded camera position and frame rate."""
        x, y, z = (_round_half_away(float(v)) for v in self._camera_position())
        return [f"XYZ: ({x}, {y}, {z})", f"FPS: {framerate:.1f}"]

    def handle_resize(self, width: int, height: int) -> None:
        """Rebuild the projection for a new window size."""
        self.projection = self._projection(width, height)
        if self.renderer is not None:
            self.renderer.handle_resize(width, height)
        self.width = width
        self.height = height