"""Projection parameters and a free-flying camera driven by input events."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

from .events import (
    Event,
    FrameResizeEvent,
    KeyboardEvent,
    KeyCode,
    MouseMoveEvent,
    PressType,
    ScrollEvent,
)
from .objects import Actor
from .utils import perspective

_MIN_SPEED = 0.000001
_PITCH_LIMIT = 85.0
_MOUSE_SENSITIVITY = 0.1
_SCROLL_STEP = 0.1

# key -> (axis of the move vector, direction when pressed); +y is forward, +x is right
_MOVE_KEYS = {
    KeyCode.W: (1, 1.0),
    KeyCode.S: (1, -1.0),
    KeyCode.A: (0, -1.0),
    KeyCode.D: (0, 1.0),
}


class ProjectMode(enum.Enum):
    ORTHO = 0
    PERSP = 1


@dataclass
class Camera:
    """Field of view in degrees, aspect ratio and clip planes."""

    fov: float
    aspect_ratio: float
    mode: ProjectMode = ProjectMode.PERSP
    near: float = 0.1
    far: float = 100.0

    def projection(self) -> np.ndarray:
        return perspective(math.radians(self.fov), self.aspect_ratio, self.near, self.far)


class FlyCamera(Actor):
    """WASD moves, dragging with the right mouse button looks, scrolling sets speed."""

    def __init__(
        self,
        fov: float,
        aspect_ratio: float,
        mode: ProjectMode = ProjectMode.PERSP,
        near: float = 0.1,
        far: float = 100.0,
    ) -> None:
        super().__init__()
        self.camera = Camera(fov, aspect_ratio, mode, near, far)
        self.speed = 1.0
        self._move = np.zeros(2)
        self._right_pressed = False
        self._mouse_pos = np.zeros(2)

    def tick(self, delta: float) -> None:
        length = np.linalg.norm(self._move)
        if length > 0.1:
            step = self._move / length * self.speed
            self.position += step[1] * self.forward() * delta
            self.position += step[0] * self.right() * delta

    def callback(self, event: Event) -> None:
        if isinstance(event, KeyboardEvent):
            self.move_input(event)
        elif isinstance(event, MouseMoveEvent):
            self.mouse_move(event)
        elif isinstance(event, FrameResizeEvent):
            self.camera.aspect_ratio = event.width / event.height
        elif isinstance(event, ScrollEvent):
            self.speed = max(self.speed * (1.0 + event.yoffset * _SCROLL_STEP), _MIN_SPEED)

    def mouse_move(self, event: MouseMoveEvent) -> None:
        """Turn the camera while the right button is held."""
        pos = np.array([event.xpos, event.ypos], dtype=float)
        if self._right_pressed:
            delta = self._mouse_pos - pos
            self.rotation[0] += delta[1] * _MOUSE_SENSITIVITY
            self.rotation[1] += delta[0] * _MOUSE_SENSITIVITY
            self.rotation[0] = min(max(self.rotation[0], -_PITCH_LIMIT), _PITCH_LIMIT)
            if self.rotation[1] > 360.0:
                self.rotation[1] -= 360.0
            elif self.rotation[1] <= -360.0:
                self.rotation[1] += 360.0
        self._mouse_pos = pos

    def move_input(self, event: KeyboardEvent) -> None:
        """Track movement keys and the right mouse button."""
        if event.code == KeyCode.MouseRight:
            if event.press == PressType.Press:
                self._right_pressed = True
            elif event.press == PressType.Release:
                self._right_pressed = False
            return
        binding = _MOVE_KEYS.get(event.code)
        if binding is None:
            return
        axis, sign = binding
        if event.press == PressType.Press:
            self._move[axis] += sign
        elif event.press == PressType.Release:
            self._move[axis] -= sign