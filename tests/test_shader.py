import numpy as np

from brdfscene.shader import Pipeline, Shader, ShaderType
from brdfscene.shader_param import ShaderParamList, ShaderParamType


def test_shader_set_replaces_path_and_type():
    shader = Shader()
    assert shader.shader_type is ShaderType.NONE
    shader.set("a_default.vs", ShaderType.VERTEX_SHADER)
    assert shader.path == "a_default.vs"
    assert shader.shader_type is ShaderType.VERTEX_SHADER


def test_attach_keeps_order():
    pipe = Pipeline()
    vs = Shader("v", ShaderType.VERTEX_SHADER)
    fs = Shader("f", ShaderType.FRAGMENT_SHADER)
    pipe.attach_shader(vs)
    pipe.attach_shader(fs)
    assert pipe.shaders == [vs, fs]


def test_textures_get_units_in_name_order_and_reset_on_bind():
    params = ShaderParamList()
    params.declare("b_tex", ShaderParamType.TEXTURE2D)
    params.declare("a_tex", ShaderParamType.TEXTURECUBE)
    params.declare("unset", ShaderParamType.TEXTURE2D)
    tex_a, tex_b = object(), object()
    params["a_tex"].set(tex_a)
    params["b_tex"].set(tex_b)

    pipe = Pipeline()
    pipe.bind()
    pipe.set_params(params)
    assert pipe.texture_units == {"a_tex": 0, "b_tex": 1}
    assert pipe.uniforms["a_tex"] is tex_a
    assert "unset" not in pipe.uniforms

    pipe.bind()
    pipe.set_param("b_tex", params["b_tex"])
    assert pipe.texture_units["b_tex"] == 0


def test_values_are_copied():
    params = ShaderParamList()
    params.declare("model", ShaderParamType.MAT4)
    params.declare("far_plane", ShaderParamType.FLOAT)
    params["far_plane"].set(20.0)
    pipe = Pipeline()
    pipe.bind()
    pipe.set_params(params)
    params["model"].value[0, 0] = 5.0
    assert np.array_equal(pipe.uniforms["model"], np.identity(4))
    assert pipe.uniforms["far_plane"] == 20.0
    assert pipe.linked and pipe.bound