import numpy as np
import pytest

from brdfscene import render_api
from brdfscene.render_api import (
    ArrayBuffer,
    FrameBuffer,
    GraphicsAPI,
    RenderAPIError,
    RenderBackend,
    UniformBuffer,
)
from brdfscene.utils import Channels


class RecordingBackend(RenderBackend):
    def __init__(self):
        self.calls = []

    def viewport(self, x, y, width, height):
        self.calls.append(("viewport", x, y, width, height))

    def clear(self, color):
        self.calls.append(("clear", tuple(color)))

    def depth_test(self, enable):
        self.calls.append(("depth_test", enable))

    def face_culling(self, enable, back_culling):
        self.calls.append(("face_culling", enable, back_culling))

    def init(self):
        self.calls.append(("init",))


class FakeTexture:
    def __init__(self, channels=Channels.RGB, width=1, height=1):
        self.channels = channels
        self.width = width
        self.height = height
        self.resizes = []

    def resize(self, width, height):
        self.width, self.height = width, height
        self.resizes.append((width, height))


@pytest.fixture
def state(monkeypatch):
    monkeypatch.setattr(render_api, "_state", render_api._RenderState())


@pytest.fixture
def backend(state):
    instance = RecordingBackend()
    render_api.register_create("RenderBackend_GL", lambda: instance)
    render_api.init(GraphicsAPI.OPENGL)
    return instance


def test_initial_api_is_none(state):
    assert render_api.current_api() is GraphicsAPI.NONE


def test_create_without_api_raises(state):
    with pytest.raises(RenderAPIError, match="Unknown API"):
        render_api.create("Shader")


def test_init_without_backend_raises(state):
    with pytest.raises(RenderAPIError, match="Create Function Not Founded"):
        render_api.init(GraphicsAPI.OPENGL)


def test_init_initialises_backend(backend):
    assert render_api.current_api() is GraphicsAPI.OPENGL
    assert backend.calls == [("init",)]


def test_viewport_forms(backend):
    render_api.viewport(640, 480)
    render_api.viewport(1, 2, 3, 4)
    assert backend.calls[1:] == [("viewport", 0, 0, 640, 480), ("viewport", 1, 2, 3, 4)]


def test_viewport_bad_arity(backend):
    with pytest.raises(TypeError):
        render_api.viewport(1, 2, 3)


def test_clear_default_and_explicit(backend):
    render_api.clear()
    render_api.clear((1, 0, 0, 1))
    assert backend.calls[1:] == [("clear", (0.0, 0.0, 0.0, 1.0)), ("clear", (1, 0, 0, 1))]


def test_depth_and_culling(backend):
    render_api.depth_test(True)
    render_api.face_culling(False)
    assert backend.calls[1:] == [("depth_test", True), ("face_culling", False, True)]


def test_operations_before_init_raise(state):
    with pytest.raises(RenderAPIError):
        render_api.depth_test(True)


def test_register_keeps_first_factory(backend):
    render_api.register_create("Shader_GL", lambda: "first")
    render_api.register_create("Shader_GL", lambda: "second")
    assert render_api.create("Shader") == "first"


def test_create_accepts_class(backend):
    render_api.register_create("UniformBuffer_GL", UniformBuffer)
    created = render_api.create(UniformBuffer)
    created.reset(4, 3)
    assert created.binding == 3
    assert created.data == b"\x00\x00\x00\x00"


def test_array_buffer_default_and_override(backend):
    assert isinstance(render_api.create(ArrayBuffer), ArrayBuffer)
    marker = ArrayBuffer([1, 2])
    render_api.register_create("ArrayBuffer_GL", lambda: marker)
    assert render_api.create(ArrayBuffer) is marker


def test_array_buffer_copies_data():
    source = [0.5, 1.5, 2.5]
    buffer = ArrayBuffer(dtype=np.float32)
    buffer.set_data(source)
    source.append(3.5)
    assert len(buffer) == 3
    assert buffer.data.dtype == np.float32
    assert np.array_equal(buffer.data, [0.5, 1.5, 2.5])


def test_uniform_buffer_unallocated_errors():
    buffer = UniformBuffer()
    with pytest.raises(RenderAPIError):
        buffer.set_data(0, 1, b"a")
    with pytest.raises(RenderAPIError):
        buffer.bind(1)


def test_uniform_buffer_write():
    buffer = UniformBuffer()
    buffer.reset(8, 1)
    buffer.set_data(2, 3, b"abc")
    assert buffer.binding == 1
    assert buffer.data == b"\x00\x00abc\x00\x00\x00"


def test_uniform_buffer_overflow():
    buffer = UniformBuffer(4, 2)
    assert buffer.binding == 2
    with pytest.raises(RenderAPIError):
        buffer.set_data(2, 3, b"abc")


def test_framebuffer_adopts_first_texture_size():
    fb = FrameBuffer()
    texture = FakeTexture(width=64, height=32)
    fb.attach(texture, 0)
    assert fb.size == (64, 32)
    assert fb.color_attachments[0] is texture
    assert texture.resizes == []


def test_framebuffer_resizes_mismatched_texture():
    fb = FrameBuffer()
    fb.init(100, 50)
    texture = FakeTexture(channels=Channels.DEPTH)
    fb.attach(texture, 0)
    assert fb.depth_attachment is texture
    assert (texture.width, texture.height) == (100, 50)


def test_framebuffer_rejects_bad_index():
    fb = FrameBuffer()
    fb.init(4, 4)
    with pytest.raises(RenderAPIError, match="Attachment Index Error"):
        fb.attach(FakeTexture(width=4, height=4), 32)


def test_framebuffer_resize_propagates_and_skips_same_size():
    fb = FrameBuffer()
    fb.init(4, 4)
    color = FakeTexture(width=4, height=4)
    depth = FakeTexture(channels=Channels.DEPTH, width=4, height=4)
    fb.attach(color, 0)
    fb.attach(depth, 0)
    fb.resize(4, 4)
    assert color.resizes == []
    fb.resize(8, 6)
    assert color.resizes == [(8, 6)]
    assert depth.resizes == [(8, 6)]
    assert fb.size == (8, 6)


def test_framebuffer_bind_and_clear(backend):
    fb = FrameBuffer()
    fb.bind_and_clear((1, 0, 0, 1))
    assert fb.bound
    assert backend.calls[-1] == ("clear", (1, 0, 0, 1))
    fb.unbind()
    assert not fb.bound