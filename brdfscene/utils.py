"""Texture channel flags, image loading and 3D transform helpers."""

from __future__ import annotations

import enum
import io
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
from PIL import Image as _pil

PathLike = Union[str, Path]


class Channels(enum.IntEnum):
    """Bit layout describing the pixel format of a texture or image."""

    CL_MASK = 0xF
    R = 0x1
    RG = 0x2
    RGB = 0x3
    RGBA = 0x4

    BIT_MASK = 0xF0
    BIT8 = 0x00
    BIT16 = 0x10
    BIT32 = 0x20

    TYPE_MASK = 0xF00
    F = 0x000
    I = 0x100  # noqa: E741
    UI = 0x200

    SPECIAL_MASK = 0xF000
    COLOR = 0x0000
    DEPTH = 0x1000

    NONE = 0xF0000


class WrappingMode(enum.Enum):
    REPEAT = 0
    CLAMP = 1


class FilteringMode(enum.Enum):
    NEAREST = 0
    LINEAR = 1
    MIPMAP = 2


@dataclass
class Image:
    """Decoded pixels laid out as (height, width, channels)."""

    width: int = 0
    height: int = 0
    data: Optional[np.ndarray] = None
    channels: int = Channels.NONE
    path: str = ""


# ---------------------------------------------------------------- strings


def vec_to_string(val: Sequence[float]) -> str:
    """Format a vector as ``(x,y,...)`` with six decimals per component."""
    return "(" + ",".join(f"{float(v):f}" for v in val) + ")"


def mat_to_string(mat) -> str:
    """Format a matrix column by column, one column per line."""
    return "\n".join(vec_to_string(col) for col in np.asarray(mat, dtype=float).T)


def read_from_file(path: PathLike) -> str:
    """Return the whole text content of a file."""
    with open(path, encoding="utf-8") as handle:
        return handle.read()


# ---------------------------------------------------------------- images

_RADIANCE_MAGICS = (b"#?RADIANCE\n", b"#?RGBE\n")
_GAMMA = 2.2


def _is_radiance(raw: bytes) -> bool:
    return raw.startswith(_RADIANCE_MAGICS)


def _decode_radiance(raw: bytes) -> np.ndarray:
    stream = io.BytesIO(raw)
    stream.readline()
    valid = False
    while True:
        line = stream.readline()
        if not line:
            raise OSError("truncated Radiance header")
        line = line.rstrip(b"\n")
        if not line:
            break
        if line == b"FORMAT=32-bit_rle_rgbe":
            valid = True
    if not valid:
        raise OSError("unsupported Radiance format")

    parts = stream.readline().split()
    if len(parts) != 4 or parts[0] != b"-Y" or parts[2] != b"+X":
        raise OSError("unsupported Radiance data layout")
    height, width = int(parts[1]), int(parts[3])
    if height <= 0 or width <= 0:
        raise OSError("invalid Radiance dimensions")

    rgbe = _decode_scanlines(stream.read(), width, height)
    mantissa = rgbe[..., :3].astype(np.float32)
    exponent = rgbe[..., 3].astype(np.int32)
    factor = np.where(exponent != 0, np.ldexp(np.float32(1.0), exponent - 136), 0.0)
    return (mantissa * factor[..., None].astype(np.float32)).astype(np.float32)


def _decode_flat(body: bytes, width: int, height: int) -> np.ndarray:
    size = width * height * 4
    if len(body) < size:
        raise OSError("truncated Radiance data")
    return np.frombuffer(body[:size], dtype=np.uint8).reshape(height, width, 4)


def _decode_scanlines(body: bytes, width: int, height: int) -> np.ndarray:
    if width < 8 or width >= 32768:
        return _decode_flat(body, width, height)
    if len(body) >= 3 and (body[0] != 2 or body[1] != 2 or body[2] & 0x80):
        return _decode_flat(body, width, height)

    rows = []
    pos = 0
    for _ in range(height):
        header = body[pos:pos + 4]
        if len(header) < 4:
            raise OSError("truncated Radiance data")
        if header[0] != 2 or header[1] != 2 or header[2] & 0x80:
            raise OSError("invalid Radiance scanline")
        if (header[2] << 8 | header[3]) != width:
            raise OSError("invalid decoded scanline length")
        pos += 4
        line = np.empty((4, width), dtype=np.uint8)
        for component in line:
            filled = 0
            while filled < width:
                count = body[pos]
                pos += 1
                if count > 128:
                    count -= 128
                    if count > width - filled:
                        raise OSError("bad RLE data")
                    component[filled:filled + count] = body[pos]
                    pos += 1
                else:
                    if count == 0 or count > width - filled:
                        raise OSError("bad RLE data")
                    chunk = body[pos:pos + count]
                    if len(chunk) < count:
                        raise OSError("truncated Radiance data")
                    component[filled:filled + count] = np.frombuffer(chunk, dtype=np.uint8)
                    pos += count
                filled += count
        rows.append(line.T)
    return np.stack(rows)


def _target_mode(img) -> str:
    if img.mode in ("L", "LA", "RGB", "RGBA"):
        return img.mode
    if img.mode == "P":
        return "RGBA" if "transparency" in img.info else "RGB"
    if img.mode == "PA":
        return "RGBA"
    if img.mode in ("1", "I", "I;16", "F"):
        return "L"
    return "RGB"


def _load_ldr(raw: bytes) -> np.ndarray:
    with _pil.open(io.BytesIO(raw)) as img:
        img.load()
        mode = _target_mode(img)
        converted = img if img.mode == mode else img.convert(mode)
        pixels = np.array(converted, dtype=np.uint8)
    if pixels.ndim == 2:
        pixels = pixels[..., None]
    return pixels


def _hdr_to_ldr(pixels: np.ndarray) -> np.ndarray:
    scaled = np.power(np.maximum(pixels, 0.0), 1.0 / _GAMMA) * 255.0 + 0.5
    return np.clip(scaled, 0, 255).astype(np.uint8)


def _ldr_to_hdr(pixels: np.ndarray) -> np.ndarray:
    result = pixels.astype(np.float32) / 255.0
    comp = result.shape[-1]
    color = comp if comp % 2 else comp - 1
    result[..., :color] = np.power(result[..., :color], _GAMMA)
    return result.astype(np.float32)


def _load(path: PathLike, flip_vertically: bool, hdr: bool) -> np.ndarray:
    try:
        raw = Path(path).read_bytes()
        if _is_radiance(raw):
            pixels = _decode_radiance(raw)
            if not hdr:
                pixels = _hdr_to_ldr(pixels)
        else:
            pixels = _load_ldr(raw)
            if hdr:
                pixels = _ldr_to_hdr(pixels)
    except (OSError, ValueError, IndexError) as exc:
        raise OSError(f"Image Read Error: {path}") from exc
    if flip_vertically:
        pixels = np.flipud(pixels)
    return np.ascontiguousarray(pixels)


def read_image(path: PathLike, flip_vertically: bool = True) -> Image:
    """Load an 8-bit image; raises OSError when it cannot be decoded."""
    pixels = _load(path, flip_vertically, hdr=False)
    height, width, comp = pixels.shape
    return Image(width, height, pixels, comp | Channels.UI, str(path))


def read_image_hdr(path: PathLike, flip_vertically: bool = True) -> Image:
    """Load an image as 32-bit floats; raises OSError when it cannot be decoded."""
    pixels = _load(path, flip_vertically, hdr=True)
    height, width, comp = pixels.shape
    return Image(width, height, pixels, comp | Channels.BIT32, str(path))


# ---------------------------------------------------------------- transforms


def _vec3(values: Sequence[float]) -> np.ndarray:
    vec = np.asarray(values, dtype=float)
    if vec.shape != (3,):
        raise ValueError("expected a three-component vector")
    return vec


def _mat4(mat) -> np.ndarray:
    if mat is None:
        return np.identity(4)
    result = np.asarray(mat, dtype=float)
    if result.shape != (4, 4):
        raise ValueError("expected a 4x4 matrix")
    return result


def translate(mat, offset: Sequence[float]) -> np.ndarray:
    """Return ``mat`` followed by a translation by ``offset``."""
    transform = np.identity(4)
    transform[:3, 3] = _vec3(offset)
    return _mat4(mat) @ transform


def rotate(mat, angle: float, axis: Sequence[float]) -> np.ndarray:
    """Return ``mat`` followed by a rotation of ``angle`` radians about ``axis``."""
    direction = _vec3(axis)
    length = np.linalg.norm(direction)
    if length == 0:
        raise ValueError("rotation axis must not be zero")
    x, y, z = direction / length
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    transform = np.array(
        [
            [t * x * x + c, t * x * y - s * z, t * x * z + s * y, 0.0],
            [t * x * y + s * z, t * y * y + c, t * y * z - s * x, 0.0],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return _mat4(mat) @ transform


def scale(mat, factors: Sequence[float]) -> np.ndarray:
    """Return ``mat`` followed by a scale by ``factors``."""
    return _mat4(mat) @ np.diag([*_vec3(factors), 1.0])


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0 or near == far:
        raise ValueError("degenerate perspective parameters")
    focal = 1.0 / math.tan(fov_y / 2.0)
    result = np.zeros((4, 4))
    result[0, 0] = focal / aspect
    result[1, 1] = focal
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v, center_v, up_v = _vec3(eye), _vec3(center), _vec3(up)
    forward = center_v - eye_v
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, up_v)
    side /= np.linalg.norm(side)
    upward = np.cross(side, forward)
    result = np.identity(4)
    result[0, :3] = side
    result[1, :3] = upward
    result[2, :3] = -forward
    result[0, 3] = -side @ eye_v
    result[1, 3] = -upward @ eye_v
    result[2, 3] = forward @ eye_v
    return result


def rotation_matrix(degrees: Sequence[float], mat=None) -> np.ndarray:
    """Apply yaw (y), then pitch (x), then roll (z), all given in degrees."""
    pitch, yaw, roll = _vec3(degrees)
    result = rotate(_mat4(mat), math.radians(yaw), (0.0, 1.0, 0.0))
    result = rotate(result, math.radians(pitch), (1.0, 0.0, 0.0))
    return rotate(result, math.radians(roll), (0.0, 0.0, 1.0))


def model_matrix(position, scale_factors, rotation, mat=None) -> np.ndarray:
    """Compose translation, rotation (degrees) and scale into a model matrix."""
    result = translate(_mat4(mat), position)
    result = rotation_matrix(rotation, result)
    return scale(result, scale_factors)


def position_from_model(model) -> np.ndarray:
    """Translation part of a model matrix."""
    return _mat4(model)[:3, 3].copy()


def scale_from_model(model) -> np.ndarray:
    """Length of each basis column of a model matrix."""
    return np.linalg.norm(_mat4(model)[:3, :3], axis=0)


def _quat_from_rotation(rot: np.ndarray):
    m = rot.T  # m[column][row]
    four_x = m[0][0] - m[1][1] - m[2][2]
    four_y = m[1][1] - m[0][0] - m[2][2]
    four_z = m[2][2] - m[0][0] - m[1][1]
    four_w = m[0][0] + m[1][1] + m[2][2]
    candidates = [four_w, four_x, four_y, four_z]
    biggest_index = max(range(4), key=lambda k: (candidates[k], -k))
    biggest = math.sqrt(candidates[biggest_index] + 1.0) * 0.5
    mult = 0.25 / biggest
    if biggest_index == 0:
        return (biggest, (m[1][2] - m[2][1]) * mult, (m[2][0] - m[0][2]) * mult, (m[0][1] - m[1][0]) * mult)
    if biggest_index == 1:
        return ((m[1][2] - m[2][1]) * mult, biggest, (m[0][1] + m[1][0]) * mult, (m[2][0] + m[0][2]) * mult)
    if biggest_index == 2:
        return ((m[2][0] - m[0][2]) * mult, (m[0][1] + m[1][0]) * mult, biggest, (m[1][2] + m[2][1]) * mult)
    return ((m[0][1] - m[1][0]) * mult, (m[2][0] + m[0][2]) * mult, (m[1][2] + m[2][1]) * mult, biggest)


def rotation_from_model(model) -> np.ndarray:
    """Euler angles (pitch, yaw, roll) in radians of a model matrix, multiplied by 180."""
    basis = _mat4(model)[:3, :3]
    rot = basis / np.linalg.norm(basis, axis=0)
    w, x, y, z = _quat_from_rotation(rot)

    py = 2.0 * (y * z + w * x)
    px = w * w - x * x - y * y + z * z
    eps = np.finfo(np.float32).eps
    if abs(px) <= eps and abs(py) <= eps:
        pitch = 2.0 * math.atan2(x, w)
    else:
        pitch = math.atan2(py, px)
    yaw = math.asin(min(max(-2.0 * (x * z - w * y), -1.0), 1.0))
    roll = math.atan2(2.0 * (x * y + w * z), w * w + x * x - y * y - z * z)
    return np.array([pitch, yaw, roll]) * 180.0