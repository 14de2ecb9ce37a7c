import numpy as np
import pytest

from brdfscene import render_api
from brdfscene.material import Material
from brdfscene.mesh import DrawType, Mesh, Shape
from brdfscene.render_api import ArrayBuffer, RenderAPIError
from brdfscene.shader import Pipeline
from brdfscene.shader_param import ShaderParamType


class _Recorder(render_api.RenderBackend):
    def __init__(self):
        self.calls = []

    def viewport(self, x, y, width, height):
        self.calls.append("viewport")

    def clear(self, color):
        self.calls.append("clear")

    def depth_test(self, enable):
        self.calls.append("depth_test")

    def face_culling(self, enable, back_culling):
        self.calls.append("face_culling")

    def init(self):
        self.calls.append("init")


@pytest.fixture
def material(monkeypatch):
    recorder = _Recorder()
    monkeypatch.setattr(render_api._state, "backend", recorder)
    return Material(Pipeline())


@pytest.mark.parametrize("shape", [Shape.CUBE, Shape.QUAD])
def test_base_shapes_are_consistent(shape):
    mesh = Mesh()
    mesh.as_base_shape(shape)
    vertices = mesh.vertex_buffer.data
    indices = mesh.element_buffer.data
    assert mesh.draw_type is DrawType.DRAW_ELEMENT
    assert mesh.layout == [ShaderParamType.VEC3, ShaderParamType.VEC3, ShaderParamType.VEC2]
    assert mesh.stride * len(indices) == vertices.size * vertices.itemsize
    assert list(indices) == list(range(len(indices)))
    normals = vertices.reshape(-1, 8)[:, 3:6]
    assert np.allclose(np.linalg.norm(normals, axis=1), 1.0)


def test_cube_has_thirty_six_indices():
    mesh = Mesh()
    mesh.as_base_shape(Shape.CUBE)
    assert len(mesh.element_buffer) == 36
    assert np.allclose(np.abs(mesh.vertex_buffer.data.reshape(-1, 8)[:, :3]), 0.5)


def test_none_shape_leaves_mesh_empty():
    mesh = Mesh()
    mesh.as_base_shape(Shape.NONE)
    assert mesh.vertex_buffer is None


def test_draw_elements_returns_index_count(material):
    mesh = Mesh()
    mesh.as_base_shape(Shape.QUAD)
    assert mesh.draw(material) == len(mesh.element_buffer)
    assert mesh.bound
    assert [attr[0] for attr in mesh.attributes] == [0, 1, 2]
    assert mesh.attributes[1][2] == mesh.attributes[0][1] * 4
    assert render_api._state.backend.calls[:2] == ["depth_test", "face_culling"]


def test_draw_array_counts_vertices(material):
    vertices = ArrayBuffer(np.ones(12), dtype=np.float32)
    mesh = Mesh()
    mesh.set_buffer(vertices, [ShaderParamType.VEC3])
    assert mesh.draw_type is DrawType.DRAW_ARRAY
    assert mesh.draw(material) * 3 == len(vertices)


def test_set_buffer_resets_binding(material):
    mesh = Mesh()
    mesh.as_base_shape(Shape.QUAD)
    mesh.draw(material)
    mesh.as_base_shape(Shape.CUBE)
    assert not mesh.bound


def test_unsupported_layout_type_raises(material):
    mesh = Mesh(ArrayBuffer([0.0] * 16, dtype=np.float32), None, [ShaderParamType.MAT4])
    with pytest.raises(RenderAPIError, match="Type Error"):
        mesh.draw(material)


def test_missing_vertex_buffer_raises(material):
    with pytest.raises(RenderAPIError, match="Vertex Buffer Error"):
        Mesh().draw(material)