"""Typed shader parameters and named collections of them."""

from __future__ import annotations

import enum
from typing import Any, Dict, Iterator

import numpy as np


class ShaderParamType(enum.Enum):
    NONE = 0
    INT = 1
    FLOAT = 2
    VEC2 = 3
    VEC3 = 4
    VEC4 = 5
    MAT2 = 6
    MAT3 = 7
    MAT4 = 8
    TEXTURE2D = 9
    TEXTURECUBE = 10


class ShaderParamError(LookupError):
    """Raised when a parameter name is not part of a list."""


_NAMES = {
    ShaderParamType.NONE: "None",
    ShaderParamType.INT: "ShaderParam_Type::Int",
    ShaderParamType.FLOAT: "ShaderParam_Type::Float",
    ShaderParamType.VEC2: "ShaderParam_Type::Vec2",
    ShaderParamType.VEC3: "ShaderParam_Type::Vec3",
    ShaderParamType.VEC4: "ShaderParam_Type::Vec4",
    ShaderParamType.MAT2: "ShaderParam_Type::Mat2",
    ShaderParamType.MAT3: "ShaderParam_Type::Mat3",
    ShaderParamType.MAT4: "ShaderParam_Type::Mat4",
    ShaderParamType.TEXTURE2D: "ShaderParam_Type::Texture2D",
    ShaderParamType.TEXTURECUBE: "ShaderParam_Type::TextureCube",
}

_VECTOR_SHAPES = {
    ShaderParamType.VEC2: (2,),
    ShaderParamType.VEC3: (3,),
    ShaderParamType.VEC4: (4,),
}

_MATRIX_SIZES = {
    ShaderParamType.MAT2: 2,
    ShaderParamType.MAT3: 3,
    ShaderParamType.MAT4: 4,
}

_TEXTURES = frozenset({ShaderParamType.TEXTURE2D, ShaderParamType.TEXTURECUBE})


def type_name(param_type: ShaderParamType) -> str:
    """Readable name of a parameter type."""
    return _NAMES.get(param_type, "None")


def default_value(param_type: ShaderParamType) -> Any:
    """Fresh value a newly allocated parameter of ``param_type`` holds."""
    if param_type is ShaderParamType.INT:
        return 0
    if param_type is ShaderParamType.FLOAT:
        return 0.0
    if param_type in _VECTOR_SHAPES:
        return np.zeros(_VECTOR_SHAPES[param_type])
    if param_type in _MATRIX_SIZES:
        return np.identity(_MATRIX_SIZES[param_type])
    return None


def _coerce(param_type: ShaderParamType, value: Any) -> Any:
    if param_type is ShaderParamType.INT:
        return int(value)
    if param_type is ShaderParamType.FLOAT:
        return float(value)
    if param_type in _VECTOR_SHAPES or param_type in _MATRIX_SIZES:
        expected = _VECTOR_SHAPES.get(param_type)
        if expected is None:
            size = _MATRIX_SIZES[param_type]
            expected = (size, size)
        array = np.array(value, dtype=float)
        if array.shape != expected:
            raise ValueError(f"{type_name(param_type)} expects shape {expected}, got {array.shape}")
        return array
    return value


_UNSET = object()


class ShaderParam:
    """One typed value that a shader reads."""

    def __init__(self, param_type: ShaderParamType, value: Any = _UNSET) -> None:
        self.type = param_type
        self.value = default_value(param_type)
        if value is not _UNSET:
            self.set(value)

    def set(self, value: Any) -> None:
        """Store a copy of ``value`` converted to this parameter's type."""
        if self.type is ShaderParamType.NONE:
            return
        self.value = _coerce(self.type, value)

    def __repr__(self) -> str:
        return f"ShaderParam({type_name(self.type)}, {self.value!r})"


class ShaderParamList:
    """Parameters by name, iterated in name order.

    Copying and combining lists keeps names and types but gives every
    parameter a fresh default value.
    """

    def __init__(self) -> None:
        self._params: Dict[str, ShaderParam] = {}

    def declare(self, name: str, param_type: ShaderParamType) -> None:
        """Add a parameter; an existing name keeps its current entry."""
        self._params.setdefault(name, ShaderParam(param_type))

    def declare_array(self, name: str, param_type: ShaderParamType, size: int) -> None:
        """Add ``name[0]`` to ``name[size-1]``."""
        for index in range(size):
            self.declare(f"{name}[{index}]", param_type)

    def copy(self) -> "ShaderParamList":
        result = ShaderParamList()
        for name, param in self._params.items():
            result.declare(name, param.type)
        return result

    def __add__(self, other: "ShaderParamList") -> "ShaderParamList":
        if not isinstance(other, ShaderParamList):
            return NotImplemented
        result = self.copy()
        for name, param in other._params.items():
            result.declare(name, param.type)
        return result

    def __iadd__(self, other: "ShaderParamList") -> "ShaderParamList":
        if not isinstance(other, ShaderParamList):
            return NotImplemented
        self._params = (self + other)._params
        return self

    def __getitem__(self, name: str) -> ShaderParam:
        try:
            return self._params[name]
        except KeyError:
            raise ShaderParamError(f"Shader Parameter Named {name} Don't Exist") from None

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._params))

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"ShaderParamList({[(n, type_name(self._params[n].type)) for n in self]})"