import pytest

from brdfscene.pipeline_manager import PipelineManager
from brdfscene.shader import ShaderType
from brdfscene.shader_manager import ShaderManager, ShaderNotFoundError
from brdfscene.shader_param import ShaderParamList


@pytest.fixture
def shaders():
    manager = ShaderManager()
    manager.register("vs", "a.vs", ShaderType.VERTEX_SHADER, ShaderParamList())
    manager.register("gs", "a.gs", ShaderType.GEOMETRY_SHADER, ShaderParamList())
    manager.register("fs", "a.fs", ShaderType.FRAGMENT_SHADER, ShaderParamList())
    return manager


def test_two_stage_pipeline_is_cached(shaders):
    pipes = PipelineManager(shaders)
    pipe = pipes.get("vs", "fs")
    assert pipe.shaders == [shaders.get("vs"), shaders.get("fs")]
    assert pipes.get("vs", "fs") is pipe


def test_three_stage_pipeline_order(shaders):
    pipes = PipelineManager(shaders)
    pipe = pipes.get("vs", "gs", "fs")
    assert [s.shader_type for s in pipe.shaders] == [
        ShaderType.VERTEX_SHADER,
        ShaderType.GEOMETRY_SHADER,
        ShaderType.FRAGMENT_SHADER,
    ]
    assert pipe is not pipes.get("vs", "fs")


def test_wrong_arity(shaders):
    with pytest.raises(TypeError):
        PipelineManager(shaders).get("vs")


def test_unknown_shader(shaders):
    pipes = PipelineManager(shaders)
    with pytest.raises(ShaderNotFoundError):
        pipes.get("vs", "missing")
    with pytest.raises(ShaderNotFoundError):
        pipes.get("vs", "missing")