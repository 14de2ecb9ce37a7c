"""Vertex data with a layout, built-in shapes and drawing through a material."""

from __future__ import annotations

import enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .material import Material
from .render_api import ArrayBuffer, RenderAPIError
from .shader_param import ShaderParamType

_FLOAT_SIZE = 4

_COMPONENTS = {
    ShaderParamType.FLOAT: 1,
    ShaderParamType.VEC2: 2,
    ShaderParamType.VEC3: 3,
    ShaderParamType.VEC4: 4,
}

_STANDARD_LAYOUT = (ShaderParamType.VEC3, ShaderParamType.VEC3, ShaderParamType.VEC2)

# position, normal, texcoord
_CUBE_VERTICES = [
    -0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 0.0,
    0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 0.0,
    0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 1.0,
    0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 1.0, 1.0,
    -0.5, 0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 1.0,
    -0.5, -0.5, -0.5, 0.0, 0.0, -1.0, 0.0, 0.0,

    -0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0,
    0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 0.0,
    0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 1.0,
    0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 1.0, 1.0,
    -0.5, 0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 1.0,
    -0.5, -0.5, 0.5, 0.0, 0.0, 1.0, 0.0, 0.0,

    -0.5, 0.5, 0.5, -1.0, 0.0, 0.0, 1.0, 0.0,
    -0.5, 0.5, -0.5, -1.0, 0.0, 0.0, 1.0, 1.0,
    -0.5, -0.5, -0.5, -1.0, 0.0, 0.0, 0.0, 1.0,
    -0.5, -0.5, -0.5, -1.0, 0.0, 0.0, 0.0, 1.0,
    -0.5, -0.5, 0.5, -1.0, 0.0, 0.0, 0.0, 0.0,
    -0.5, 0.5, 0.5, -1.0, 0.0, 0.0, 1.0, 0.0,

    0.5, 0.5, 0.5, 1.0, 0.0, 0.0, 1.0, 0.0,
    0.5, 0.5, -0.5, 1.0, 0.0, 0.0, 1.0, 1.0,
    0.5, -0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 1.0,
    0.5, -0.5, -0.5, 1.0, 0.0, 0.0, 0.0, 1.0,
    0.5, -0.5, 0.5, 1.0, 0.0, 0.0, 0.0, 0.0,
    0.5, 0.5, 0.5, 1.0, 0.0, 0.0, 1.0, 0.0,

    -0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 0.0, 1.0,
    0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 1.0, 1.0,
    0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 1.0, 0.0,
    0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 1.0, 0.0,
    -0.5, -0.5, 0.5, 0.0, -1.0, 0.0, 0.0, 0.0,
    -0.5, -0.5, -0.5, 0.0, -1.0, 0.0, 0.0, 1.0,

    -0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 0.0, 1.0,
    0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 1.0, 1.0,
    0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 1.0, 0.0,
    0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 1.0, 0.0,
    -0.5, 0.5, 0.5, 0.0, 1.0, 0.0, 0.0, 0.0,
    -0.5, 0.5, -0.5, 0.0, 1.0, 0.0, 0.0, 1.0,
]

_QUAD_VERTICES = [
    -1.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 1.0,
    -1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0,
    1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0,
    1.0, 1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0,
    1.0, -1.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0,
    -1.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 1.0,
]


class DrawType(enum.Enum):
    DRAW_ARRAY = 0
    DRAW_ELEMENT = 1


class Shape(enum.Enum):
    NONE = 0
    CUBE = 1
    QUAD = 2


Attribute = Tuple[int, int, int]


class Mesh:
    """Interleaved float vertices, optional indices and the layout of one vertex."""

    def __init__(
        self,
        vertex_buffer: Optional[ArrayBuffer] = None,
        element_buffer: Optional[ArrayBuffer] = None,
        layout: Sequence[ShaderParamType] = (),
    ) -> None:
        self.vertex_buffer: Optional[ArrayBuffer] = None
        self.element_buffer: Optional[ArrayBuffer] = None
        self.layout: List[ShaderParamType] = []
        self.draw_type = DrawType.DRAW_ELEMENT
        self.stride = 0
        self.attributes: List[Attribute] = []
        self.bound = False
        if vertex_buffer is not None:
            self.set_buffer(vertex_buffer, layout, element_buffer)

    def set_buffer(
        self,
        vertex_buffer: ArrayBuffer,
        layout: Sequence[ShaderParamType],
        element_buffer: Optional[ArrayBuffer] = None,
    ) -> None:
        """Replace the buffers; without indices the mesh draws vertices in order."""
        self.vertex_buffer = vertex_buffer
        self.element_buffer = element_buffer
        self.layout = list(layout)
        self.bound = False
        self.draw_type = DrawType.DRAW_ARRAY if element_buffer is None else DrawType.DRAW_ELEMENT
        self.stride = sum(_COMPONENTS.get(kind, 0) for kind in self.layout) * _FLOAT_SIZE

    def as_base_shape(self, shape: Shape) -> None:
        """Fill the mesh with a unit cube or a full-screen quad; NONE leaves it as is."""
        vertices = {Shape.CUBE: _CUBE_VERTICES, Shape.QUAD: _QUAD_VERTICES}.get(Shape(shape))
        if vertices is None:
            return
        vertex_buffer = ArrayBuffer(vertices, dtype=np.float32)
        element_buffer = ArrayBuffer(np.arange(len(vertices) // 8), dtype=np.uint32)
        self.set_buffer(vertex_buffer, _STANDARD_LAYOUT, element_buffer)

    def _bind(self) -> None:
        if self.bound:
            return
        if self.vertex_buffer is None:
            raise RenderAPIError("Vertex Buffer Error")
        attributes = []
        offset = 0
        for index, kind in enumerate(self.layout):
            components = _COMPONENTS.get(kind)
            if components is None:
                raise RenderAPIError("Type Error")
            attributes.append((index, components, offset))
            offset += components * _FLOAT_SIZE
        self.attributes = attributes
        self.bound = True

    def draw(self, material: Material) -> int:
        """Bind ``material`` and the mesh; return how many vertices are drawn."""
        material.bind()
        self._bind()
        if self.draw_type is DrawType.DRAW_ARRAY:
            if self.stride == 0:
                raise RenderAPIError("Vertex layout is empty")
            return len(self.vertex_buffer) * _FLOAT_SIZE // self.stride
        if self.element_buffer is None:
            raise RenderAPIError("Element Buffer Error")
        return len(self.element_buffer)