"""Uniform blocks shared with shaders, packed with std140 layout."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import ClassVar, List, Sequence

import numpy as np

NR_POINT_LIGHTS_MAX = 4
NR_DIR_LIGHTS_MAX = 1
NR_SPOT_LIGHTS_MAX = 1


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _put_floats(buf: bytearray, offset: int, values: Sequence[float], count: int) -> None:
    array = np.asarray(values, dtype="<f4").ravel()
    if array.size != count:
        raise ValueError(f"expected {count} components, got {array.size}")
    buf[offset:offset + 4 * count] = array.tobytes()


def _put_mat4(buf: bytearray, offset: int, mat) -> None:
    array = np.asarray(mat, dtype="<f4")
    if array.shape != (4, 4):
        raise ValueError("expected a 4x4 matrix")
    # Column-major, as the shader reads it.
    buf[offset:offset + 64] = np.ascontiguousarray(array.T).tobytes()


@dataclass(eq=False)
class BaseInfoBlock:
    """Timing, mouse and resolution data (binding 0)."""

    time: float = 0.0
    time_delta: float = 0.0
    frame: int = 0
    frame_rate: float = 0.0
    mouse: np.ndarray = field(default_factory=lambda: np.zeros(4))
    resolution: np.ndarray = field(default_factory=_zeros3)

    SIZE: ClassVar[int] = 48

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        struct.pack_into("<ffif", buf, 0, self.time, self.time_delta, self.frame, self.frame_rate)
        _put_floats(buf, 16, self.mouse, 4)
        _put_floats(buf, 32, self.resolution, 3)
        return bytes(buf)


@dataclass(eq=False)
class CameraBlock:
    """Viewer position and matrices (binding 1)."""

    view_pos: np.ndarray = field(default_factory=_zeros3)
    projection: np.ndarray = field(default_factory=lambda: np.identity(4))
    view: np.ndarray = field(default_factory=lambda: np.identity(4))

    SIZE: ClassVar[int] = 144

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        _put_floats(buf, 0, self.view_pos, 3)
        _put_mat4(buf, 16, self.projection)
        _put_mat4(buf, 80, self.view)
        return bytes(buf)


@dataclass(eq=False)
class DirLightData:
    direction: np.ndarray = field(default_factory=_zeros3)
    ambient: np.ndarray = field(default_factory=_zeros3)
    diffuse: np.ndarray = field(default_factory=_zeros3)
    specular: np.ndarray = field(default_factory=_zeros3)

    SIZE: ClassVar[int] = 64

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        for offset, vec in zip((0, 16, 32, 48), (self.direction, self.ambient, self.diffuse, self.specular)):
            _put_floats(buf, offset, vec, 3)
        return bytes(buf)


@dataclass(eq=False)
class PointLightData:
    constant: float = 1.0
    linear: float = 0.09
    quadratic: float = 0.032
    have_lightmap: float = 0.0
    position: np.ndarray = field(default_factory=_zeros3)
    ambient: np.ndarray = field(default_factory=_zeros3)
    diffuse: np.ndarray = field(default_factory=_zeros3)
    specular: np.ndarray = field(default_factory=_zeros3)

    SIZE: ClassVar[int] = 80

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        struct.pack_into("<4f", buf, 0, self.constant, self.linear, self.quadratic, self.have_lightmap)
        for offset, vec in zip((16, 32, 48, 64), (self.position, self.ambient, self.diffuse, self.specular)):
            _put_floats(buf, offset, vec, 3)
        return bytes(buf)


@dataclass(eq=False)
class SpotLightData:
    cut_off: float = math.cos(math.radians(12.5))
    outer_cut_off: float = math.cos(math.radians(15.0))
    constant: float = 1.0
    linear: float = 0.09
    quadratic: float = 0.032
    direction: np.ndarray = field(default_factory=_zeros3)
    position: np.ndarray = field(default_factory=_zeros3)
    ambient: np.ndarray = field(default_factory=_zeros3)
    diffuse: np.ndarray = field(default_factory=_zeros3)
    specular: np.ndarray = field(default_factory=_zeros3)

    SIZE: ClassVar[int] = 112

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        struct.pack_into(
            "<5f", buf, 0, self.cut_off, self.outer_cut_off, self.constant, self.linear, self.quadratic
        )
        vectors = (self.direction, self.position, self.ambient, self.diffuse, self.specular)
        for offset, vec in zip((32, 48, 64, 80, 96), vectors):
            _put_floats(buf, offset, vec, 3)
        return bytes(buf)


_POINT_OFFSET = 16
_DIR_OFFSET = _POINT_OFFSET + NR_POINT_LIGHTS_MAX * PointLightData.SIZE
_SPOT_OFFSET = _DIR_OFFSET + NR_DIR_LIGHTS_MAX * DirLightData.SIZE


@dataclass(eq=False)
class LightsBlock:
    """All lights in the scene (binding 2)."""

    point_num: int = 0
    dir_num: int = 0
    spot_num: int = 0
    point_lights: List[PointLightData] = field(
        default_factory=lambda: [PointLightData() for _ in range(NR_POINT_LIGHTS_MAX)]
    )
    dir_lights: List[DirLightData] = field(
        default_factory=lambda: [DirLightData() for _ in range(NR_DIR_LIGHTS_MAX)]
    )
    spot_lights: List[SpotLightData] = field(
        default_factory=lambda: [SpotLightData() for _ in range(NR_SPOT_LIGHTS_MAX)]
    )

    SIZE: ClassVar[int] = _SPOT_OFFSET + NR_SPOT_LIGHTS_MAX * SpotLightData.SIZE

    def pack(self) -> bytes:
        buf = bytearray(self.SIZE)
        struct.pack_into("<3i", buf, 0, self.point_num, self.dir_num, self.spot_num)
        sections = (
            (_POINT_OFFSET, self.point_lights, NR_POINT_LIGHTS_MAX, PointLightData.SIZE),
            (_DIR_OFFSET, self.dir_lights, NR_DIR_LIGHTS_MAX, DirLightData.SIZE),
            (_SPOT_OFFSET, self.spot_lights, NR_SPOT_LIGHTS_MAX, SpotLightData.SIZE),
        )
        for start, entries, limit, size in sections:
            if len(entries) != limit:
                raise ValueError(f"expected {limit} light entries, got {len(entries)}")
            for position, entry in enumerate(entries):
                offset = start + position * size
                buf[offset:offset + size] = entry.pack()
        return bytes(buf)


base_info_data = BaseInfoBlock()
camera_data = CameraBlock()
lights_data = LightsBlock()