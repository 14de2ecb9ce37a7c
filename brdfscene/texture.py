"""Two-dimensional and cube textures kept as pixel arrays."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .render_api import RenderAPIError
from .utils import Channels, FilteringMode, Image, WrappingMode

CUBE_FACES = 6


def _components(channels: int) -> int:
    if (channels & Channels.SPECIAL_MASK) == Channels.DEPTH:
        return 1
    count = channels & Channels.CL_MASK
    return count if 1 <= count <= 4 else 3


def _allocate(width: int, height: int, channels: int) -> np.ndarray:
    if width < 0 or height < 0:
        raise ValueError("texture size must not be negative")
    return np.zeros((height, width, _components(channels)), dtype=np.float32)


def _mip_chain(data: np.ndarray) -> List[np.ndarray]:
    """Box-filtered levels, each half the size of the one before, down to 1x1."""
    levels = [data]
    level = np.asarray(data, dtype=np.float64)
    while level.shape[0] > 1 or level.shape[1] > 1:
        if level.shape[0] > 1:
            half = level.shape[0] // 2
            level = (level[0:2 * half:2] + level[1:2 * half:2]) / 2.0
        if level.shape[1] > 1:
            half = level.shape[1] // 2
            level = (level[:, 0:2 * half:2] + level[:, 1:2 * half:2]) / 2.0
        levels.append(level.astype(data.dtype))
    return levels


def _check_image(image: Image) -> None:
    if image.data is None:
        raise RenderAPIError(f"Image Named {image.path} Don't Exist")


def _adopted_channels(current: int, image: Image) -> int:
    if current == Channels.NONE:
        return int(image.channels) & (Channels.CL_MASK | Channels.BIT_MASK)
    return current


class Texture2D:
    """A single image texture."""

    def __init__(self) -> None:
        self.wrapping = WrappingMode.REPEAT
        self.filtering = FilteringMode.LINEAR
        self.channels: int = int(Channels.NONE)
        self.width = 1
        self.height = 1
        self.path = ""
        self.data: Optional[np.ndarray] = None
        self.mipmaps: List[np.ndarray] = []

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def init(
        self,
        wrapping: WrappingMode = WrappingMode.REPEAT,
        filtering: FilteringMode = FilteringMode.LINEAR,
        channels: int = Channels.NONE,
    ) -> None:
        """Set sampling and pixel format in one step."""
        self.set_sample(wrapping, filtering)
        self.set_channels(channels)

    def set_channels(self, channels: int) -> None:
        """Change the pixel format; a concrete format reallocates storage."""
        self.channels = int(channels)
        if self.channels != Channels.NONE:
            self.resize(self.width, self.height)

    def set_sample(self, wrapping: WrappingMode, filtering: FilteringMode) -> None:
        """Set wrapping and filtering, then refresh the mipmaps."""
        self.wrapping = WrappingMode(wrapping)
        self.filtering = FilteringMode(filtering)
        self.gen_mipmap()

    def resize(self, width: int, height: int) -> None:
        """Allocate zeroed storage of the given size."""
        self.data = _allocate(width, height, self.channels)
        self.width, self.height = width, height

    def set_image(self, image: Image) -> None:
        """Upload an image's pixels; raises when the image holds no data."""
        _check_image(image)
        self.path = image.path
        self.channels = _adopted_channels(self.channels, image)
        self.data = image.data
        self.width, self.height = image.width, image.height
        self.set_sample(self.wrapping, self.filtering)

    def gen_mipmap(self) -> None:
        """Build the mip chain when filtering asks for one."""
        if self.filtering is FilteringMode.MIPMAP and self.data is not None:
            self.mipmaps = _mip_chain(self.data)
        else:
            self.mipmaps = []


class TextureCube:
    """Six square faces addressed by index 0 to 5."""

    def __init__(self) -> None:
        self.wrapping = WrappingMode.REPEAT
        self.filtering = FilteringMode.LINEAR
        self.channels: int = int(Channels.NONE)
        self.width = 0
        self.height = 0
        self.faces: List[Optional[np.ndarray]] = [None] * CUBE_FACES
        self.mipmaps: List[List[np.ndarray]] = []

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def init(
        self,
        wrapping: WrappingMode = WrappingMode.REPEAT,
        filtering: FilteringMode = FilteringMode.LINEAR,
        channels: int = Channels.NONE,
    ) -> None:
        """Set sampling and pixel format in one step."""
        self.set_sample(wrapping, filtering)
        self.set_channels(channels)

    def set_channels(self, channels: int) -> None:
        """Change the pixel format; a concrete format reallocates storage."""
        self.channels = int(channels)
        if self.channels != Channels.NONE:
            self.resize(self.width, self.height)

    def set_sample(self, wrapping: WrappingMode, filtering: FilteringMode) -> None:
        """Set wrapping and filtering, then refresh the mipmaps."""
        self.wrapping = WrappingMode(wrapping)
        self.filtering = FilteringMode(filtering)
        self.gen_mipmap()

    def resize(self, width: int, height: int) -> None:
        """Allocate zeroed storage for every face."""
        self.faces = [_allocate(width, height, self.channels) for _ in range(CUBE_FACES)]
        self.width, self.height = width, height

    def set_image(self, index: int, image: Image) -> None:
        """Upload one face; the last face refreshes sampling and mipmaps."""
        if not 0 <= index < CUBE_FACES:
            raise IndexError(f"cube face index {index} out of range")
        _check_image(image)
        self.channels = _adopted_channels(self.channels, image)
        self.faces[index] = image.data
        self.width, self.height = image.width, image.height
        if index == CUBE_FACES - 1:
            self.set_sample(self.wrapping, self.filtering)

    def gen_mipmap(self) -> None:
        """Build a mip chain for every face when filtering asks for one."""
        if self.filtering is FilteringMode.MIPMAP:
            self.mipmaps = [_mip_chain(face) if face is not None else [] for face in self.faces]
        else:
            self.mipmaps = []