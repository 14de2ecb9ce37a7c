"""Backend registry, global render state and device-independent buffers."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from .utils import Channels


class GraphicsAPI(enum.Enum):
    NONE = 0
    OPENGL = 1


class RenderAPIError(RuntimeError):
    """Raised when the render API cannot do what was asked."""


class RenderBackend(abc.ABC):
    """Global drawing state operations a graphics backend provides."""

    @abc.abstractmethod
    def viewport(self, x: int, y: int, width: int, height: int) -> None:
        """Set the drawing rectangle."""

    @abc.abstractmethod
    def clear(self, color: Sequence[float]) -> None:
        """Clear colour and depth to ``color``."""

    @abc.abstractmethod
    def depth_test(self, enable: bool) -> None:
        """Turn depth testing on or off."""

    @abc.abstractmethod
    def face_culling(self, enable: bool, back_culling: bool) -> None:
        """Turn face culling on or off and pick the culled side."""

    @abc.abstractmethod
    def init(self) -> None:
        """Prepare the backend for use."""


Factory = Callable[[], Any]


@dataclass
class _RenderState:
    api: GraphicsAPI = GraphicsAPI.NONE
    backend: Optional[RenderBackend] = None
    factories: Dict[str, Factory] = field(default_factory=dict)


_state = _RenderState()

_DEFAULT_CLEAR = (0.0, 0.0, 0.0, 1.0)


def register_create(name: str, factory: Factory) -> None:
    """Register a factory under ``name``; the first registration wins."""
    _state.factories.setdefault(name, factory)


def _kind_name(kind: Union[str, type]) -> str:
    return kind if isinstance(kind, str) else kind.__name__


def create(kind: Union[str, type]) -> Any:
    """Build the current backend's implementation of ``kind``."""
    name = _kind_name(kind)
    if _state.api is not GraphicsAPI.OPENGL:
        raise RenderAPIError("Unknown API")
    factory = _state.factories.get(f"{name}_GL")
    if factory is None:
        if name == ArrayBuffer.__name__:
            return ArrayBuffer()
        raise RenderAPIError("Create Function Not Founded")
    return factory()


def init(api: GraphicsAPI) -> None:
    """Select the graphics API and create and initialise its backend."""
    _state.api = GraphicsAPI(api)
    _state.backend = create(RenderBackend)
    _state.backend.init()


def current_api() -> GraphicsAPI:
    return _state.api


def _backend() -> RenderBackend:
    if _state.backend is None:
        raise RenderAPIError("Render API is not initialised")
    return _state.backend


def viewport(*args: int) -> None:
    """``viewport(width, height)`` or ``viewport(x, y, width, height)``."""
    if len(args) == 2:
        _backend().viewport(0, 0, *args)
    elif len(args) == 4:
        _backend().viewport(*args)
    else:
        raise TypeError("viewport takes (width, height) or (x, y, width, height)")


def clear(color: Optional[Sequence[float]] = None) -> None:
    _backend().clear(_DEFAULT_CLEAR if color is None else tuple(color))


def depth_test(enable: bool) -> None:
    _backend().depth_test(enable)


def face_culling(enable: bool, back_culling: bool = True) -> None:
    _backend().face_culling(enable, back_culling)


class ArrayBuffer:
    """A flat array of vertex or index data."""

    def __init__(self, data: Optional[Sequence] = None, dtype: Any = None) -> None:
        self.dtype = dtype
        self._data = np.array([], dtype=dtype)
        if data is not None:
            self.set_data(data)

    def set_data(self, data: Sequence) -> None:
        """Replace the contents with a copy of ``data``."""
        self._data = np.array(data, dtype=self.dtype).ravel()

    @property
    def data(self) -> np.ndarray:
        return self._data

    def __len__(self) -> int:
        return int(self._data.size)


class UniformBuffer:
    """A block of bytes shared with shaders at a binding point."""

    def __init__(self, size: Optional[int] = None, binding: Optional[int] = None) -> None:
        self._storage: Optional[bytearray] = None
        self.size = 0
        self.binding = -1
        if size is not None:
            self.resize(size)
            if binding is not None:
                self.bind(binding)

    @property
    def data(self) -> bytes:
        return bytes(self._storage) if self._storage is not None else b""

    def set_data(self, offset: int, size: int, data: bytes) -> None:
        """Copy ``size`` bytes of ``data`` to ``offset``."""
        if self._storage is None or offset < 0 or size < 0 or offset + size > self.size:
            raise RenderAPIError("Uniform Buffer Set Data Error")
        chunk = bytes(memoryview(data).cast("B")[:size])
        if len(chunk) < size:
            raise ValueError("data is shorter than size")
        self._storage[offset:offset + size] = chunk

    def resize(self, size: int) -> None:
        """Allocate ``size`` zeroed bytes, dropping the old contents."""
        if size < 0:
            raise ValueError("size must not be negative")
        self.size = size
        self._storage = bytearray(size)

    def bind(self, binding: int) -> None:
        if self._storage is None:
            raise RenderAPIError("Uniform Buffer Binding Error")
        self.binding = binding

    def reset(self, size: int, binding: int) -> None:
        self.resize(size)
        self.bind(binding)


_MAX_COLOR_ATTACHMENTS = 32


class FrameBuffer:
    """Render target that keeps its attached textures the same size."""

    def __init__(self) -> None:
        self.width = -1
        self.height = -1
        self.color_attachments: Dict[int, Any] = {}
        self.depth_attachment: Any = None
        self.bound = False

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def init(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def attach(self, texture: Any, index: int) -> None:
        """Attach a colour texture at ``index`` or a depth texture."""
        if self.width == -1:
            self.width, self.height = texture.width, texture.height
        if (texture.width, texture.height) != (self.width, self.height):
            texture.resize(self.width, self.height)

        special = int(texture.channels) & Channels.SPECIAL_MASK
        if special == Channels.COLOR:
            if not 0 <= index < _MAX_COLOR_ATTACHMENTS:
                raise RenderAPIError("Attachment Index Error")
            self.color_attachments[index] = texture
        elif special == Channels.DEPTH:
            self.depth_attachment = texture
        self.unbind()

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def resize(self, width: int, height: int) -> None:
        """Resize the target and every attached texture."""
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        for texture in self.color_attachments.values():
            texture.resize(width, height)
        if self.depth_attachment is not None:
            self.depth_attachment.resize(width, height)

    def bind_and_clear(self, clear_color: Sequence[float]) -> None:
        self.bind()
        clear(clear_color)