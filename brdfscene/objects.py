"""Scene object base classes: hooks, placed actors and entity handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .events import Event
from .utils import model_matrix, rotation_matrix


class SceneObject:
    """Something that can be ticked and receive events.

    The default hooks only keep track of elapsed time, the last event seen
    and whether the object has been constructed in a scene.
    """

    elapsed: float = 0.0
    last_event: Optional[Event] = None
    constructed: bool = False

    def tick(self, delta: float) -> None:
        """Advance by ``delta`` seconds."""
        self.elapsed += delta

    def callback(self, event: Event) -> None:
        """React to an input or window event."""
        self.last_event = event

    def on_construct(self) -> None:
        """Called once the object has been placed in a scene."""
        self.constructed = True


class Actor(SceneObject):
    """A scene object with a position, a rotation in degrees and a scale."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        scale: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> None:
        self.position = np.array(position, dtype=float)
        self.rotation = np.array(rotation, dtype=float)
        self.scale = np.array(scale, dtype=float)

    def model(self) -> np.ndarray:
        return model_matrix(self.position, self.scale, self.rotation)

    def _direction(self, local) -> np.ndarray:
        return (rotation_matrix(self.rotation) @ np.array(local, dtype=float))[:3]

    def forward(self) -> np.ndarray:
        """Unit vector the actor faces (local -Z)."""
        return self._direction((0.0, 0.0, -1.0, 0.0))

    def right(self) -> np.ndarray:
        """Unit vector to the actor's right (local +X)."""
        return self._direction((1.0, 0.0, 0.0, 0.0))


@dataclass(frozen=True)
class GameObject:
    """Handle to an entity in a scene."""

    id: int