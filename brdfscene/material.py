"""Materials: a pipeline, its parameter values and fixed render state."""

from __future__ import annotations

import enum
from typing import Any, Optional

from . import render_api
from .pipeline_manager import PipelineManager
from .shader import Pipeline
from .shader_param import ShaderParamList


class FaceType(enum.Enum):
    FRONT = 0
    BACK = 1
    DOUBLE_SIDED = 2


class Material:
    """Holds its own copy of every parameter the pipeline's shaders declare."""

    def __init__(
        self,
        pipeline: Pipeline,
        depth_test: bool = True,
        face_type: FaceType = FaceType.FRONT,
    ) -> None:
        self.pipeline = pipeline
        self.depth_test = depth_test
        self.face_type = FaceType(face_type)
        self.params = ShaderParamList()
        for shader in pipeline.shaders:
            self.params += shader.params

    @classmethod
    def from_shaders(
        cls,
        pipelines: PipelineManager,
        vs: str,
        fs: str,
        depth_test: bool,
        face_type: FaceType = FaceType.FRONT,
        gs: Optional[str] = None,
    ) -> "Material":
        """Build a material from shader names, with an optional geometry stage."""
        pipeline = pipelines.get(vs, fs) if gs is None else pipelines.get(vs, gs, fs)
        return cls(pipeline, depth_test, face_type)

    def set_param(self, name: str, value: Any) -> None:
        """Set a declared parameter; unknown names raise ShaderParamError."""
        self.params[name].set(value)

    def bind(self) -> None:
        """Apply render state, make the pipeline current and send the parameters."""
        render_api.depth_test(self.depth_test)
        render_api.face_culling(
            self.face_type is not FaceType.DOUBLE_SIDED,
            self.face_type is FaceType.FRONT,
        )
        self.pipeline.bind()
        self.pipeline.set_params(self.params)