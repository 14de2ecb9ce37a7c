"""Registry of named shaders, created lazily on first use."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .shader import Shader, ShaderType
from .shader_param import ShaderParamList

ShaderFactory = Callable[[], Shader]


class ShaderNotFoundError(LookupError):
    """Raised when no shader is registered under a name."""


@dataclass
class ShaderInfo:
    """What is needed to build a shader, and the shader once built."""

    path: str
    shader_type: ShaderType
    params: ShaderParamList = field(default_factory=ShaderParamList)
    shader: Optional[Shader] = None

    def reload(self, factory: ShaderFactory = Shader) -> Shader:
        """Build a fresh shader from the stored description."""
        shader = factory()
        shader.params = self.params
        shader.set(self.path, self.shader_type)
        self.shader = shader
        return shader


class ShaderManager:
    """Named shaders; each is built the first time it is asked for."""

    def __init__(self, factory: ShaderFactory = Shader) -> None:
        self._factory = factory
        self._infos: Dict[str, ShaderInfo] = {}

    def register(self, name: str, path: str, shader_type: ShaderType, params: ShaderParamList) -> None:
        """Record a shader; a name already registered keeps its first entry."""
        self._infos.setdefault(name, ShaderInfo(path, ShaderType(shader_type), params))

    def info(self, name: str) -> ShaderInfo:
        try:
            entry = self._infos[name]
        except KeyError:
            raise ShaderNotFoundError(f"Shader Named {name} Don't Found") from None
        if entry.shader is None:
            entry.reload(self._factory)
        return entry

    def get(self, name: str) -> Shader:
        return self.info(name).shader

    def __contains__(self, name: object) -> bool:
        return name in self._infos