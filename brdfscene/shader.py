"""Shader stages and the pipelines that combine them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from .shader_param import ShaderParam, ShaderParamList, ShaderParamType

_TEXTURE_TYPES = frozenset({ShaderParamType.TEXTURE2D, ShaderParamType.TEXTURECUBE})


class ShaderType(enum.Enum):
    NONE = 0
    VERTEX_SHADER = 1
    GEOMETRY_SHADER = 2
    FRAGMENT_SHADER = 3


@dataclass(eq=False)
class Shader:
    """One shader stage: its source path, its kind and the parameters it declares."""

    path: str = ""
    shader_type: ShaderType = ShaderType.NONE
    params: ShaderParamList = field(default_factory=ShaderParamList)

    def set(self, path: str, shader_type: ShaderType) -> None:
        self.path = path
        self.shader_type = ShaderType(shader_type)


class Pipeline:
    """Shader stages used together, with the uniform values last sent to them."""

    def __init__(self) -> None:
        self.shaders: List[Shader] = []
        self.uniforms: Dict[str, Any] = {}
        self.texture_units: Dict[str, int] = {}
        self.linked = False
        self.bound = False
        self._next_unit = 0

    def attach_shader(self, shader: Shader) -> None:
        self.shaders.append(shader)

    def bind(self) -> None:
        """Make the pipeline current; texture units are handed out afresh."""
        self.linked = True
        self.bound = True
        self._next_unit = 0

    def set_params(self, params: ShaderParamList) -> None:
        """Send every parameter of ``params`` in name order."""
        for name in params:
            self.set_param(name, params[name])

    def set_param(self, name: str, param: ShaderParam) -> None:
        """Send one parameter; textures take the next free unit, unset ones are skipped."""
        if param.type in _TEXTURE_TYPES:
            if param.value is None:
                return
            self.texture_units[name] = self._next_unit
            self._next_unit += 1
            self.uniforms[name] = param.value
        elif param.type is not ShaderParamType.NONE:
            value = param.value
            self.uniforms[name] = value.copy() if isinstance(value, np.ndarray) else value