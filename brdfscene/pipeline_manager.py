"""Cache of pipelines keyed by the shader names they combine."""

from __future__ import annotations

from typing import Callable, Dict

from .shader import Pipeline
from .shader_manager import ShaderManager


class PipelineManager:
    """Builds each combination of shaders once and hands back the same pipeline."""

    def __init__(self, shaders: ShaderManager, factory: Callable[[], Pipeline] = Pipeline) -> None:
        self.shaders = shaders
        self._factory = factory
        self._pipelines: Dict[str, Pipeline] = {}

    def get(self, *args: str) -> Pipeline:
        """``get(vs, fs)`` or ``get(vs, gs, fs)``."""
        if len(args) not in (2, 3):
            raise TypeError("get takes (vs, fs) or (vs, gs, fs)")
        key = "&&".join(args)
        cached = self._pipelines.get(key)
        if cached is not None:
            return cached
        pipeline = self._factory()
        for name in args:
            pipeline.attach_shader(self.shaders.get(name))
        self._pipelines[key] = pipeline
        return pipeline