"""Lights that write their parameters into the shared lights block."""

from __future__ import annotations

import abc
import enum
from typing import Optional, Sequence

import numpy as np

from . import uniforms
from .material import Material
from .texture import TextureCube


class LightType(enum.Enum):
    NONE = 0
    POINT = 1
    DIRECT = 2
    SPOT = 3


class Light(abc.ABC):
    """Colour terms common to every light, and the slot it occupies."""

    def __init__(self, light_type: LightType) -> None:
        self.type = LightType(light_type)
        self.ambient = np.full(3, 0.1)
        self.diffuse = np.full(3, 0.75)
        self.specular = np.full(3, 1.0)
        self.index = -1

    @abc.abstractmethod
    def buffer_update(self, position: Sequence[float], direction: Sequence[float]) -> None:
        """Write the light's current state into its uniform block entry."""

    @abc.abstractmethod
    def bind_light(self, material: Material) -> None:
        """Send any light-specific resources to ``material``."""


class PointLight(Light):
    """A point light; creating one claims the next point-light slot."""

    def __init__(self, lights: Optional[uniforms.LightsBlock] = None) -> None:
        super().__init__(LightType.POINT)
        self.lights = uniforms.lights_data if lights is None else lights
        if self.lights.point_num >= uniforms.NR_POINT_LIGHTS_MAX:
            self.lights.point_num -= 1
        self.index = self.lights.point_num
        self.lights.point_num += 1
        self.constant = 1.0
        self.linear = 0.09
        self.quadratic = 0.032
        self.strength = 1.0
        self.render_lightmap = False
        self.lightmap: Optional[TextureCube] = None

    def buffer_update(self, position: Sequence[float], direction: Sequence[float]) -> None:
        entry = self.lights.point_lights[self.index]
        entry.constant = self.constant / self.strength
        entry.linear = self.linear / self.strength
        entry.quadratic = self.quadratic / self.strength
        entry.position = np.array(position, dtype=float)
        entry.ambient = self.ambient.copy()
        entry.diffuse = self.diffuse.copy()
        entry.specular = self.specular.copy()

    def bind_light(self, material: Material) -> None:
        """Point lights are read from the lights block, so nothing is bound here."""
        return None