"""The shaders the renderer ships with and the parameters each declares."""

from __future__ import annotations

import posixpath
from typing import Dict, Tuple

from .shader import ShaderType
from .shader_manager import ShaderManager, ShaderNotFoundError
from .shader_param import ShaderParamList, ShaderParamType

ROOT_PATH = "../../"
SHADER_DIR = "resource/shaders"

_P = ShaderParamType
_VS = ShaderType.VERTEX_SHADER
_GS = ShaderType.GEOMETRY_SHADER
_FS = ShaderType.FRAGMENT_SHADER

# A parameter is (name, type) or (name, type, array size).
_Param = Tuple
_CATALOG: Dict[str, Tuple[str, ShaderType, Tuple[_Param, ...]]] = {
    "a_default_vs": ("a_default.vs", _VS, (("model", _P.MAT4),)),
    "a_default_fs": ("a_default.fs", _FS, (("texture1", _P.TEXTURE2D), ("texture2", _P.TEXTURE2D))),
    "a_light_fs": ("a_light.fs", _FS, ()),
    "a_skybox_hdr_fs": ("a_skybox_hdr.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "a_skybox_cubemap_fs": ("a_skybox_cubemap.fs", _FS, (("iChannel0", _P.TEXTURECUBE),)),
    "a_Blinn_Phong_BRDF_fs": (
        "a_Blinn_Phong_BRDF.fs",
        _FS,
        (
            ("mt_diffuse", _P.TEXTURE2D),
            ("mt_specular", _P.TEXTURE2D),
            ("mt_shininess", _P.FLOAT),
            ("depthMap", _P.TEXTURECUBE, 1),
            ("far_plane", _P.FLOAT),
            ("lightPos", _P.VEC3),
        ),
    ),
    "a_void_fs": ("a_void.fs", _FS, ()),
    "b_post_vs": ("b_post.vs", _VS, ()),
    "b_luminance_fs": ("b_luminance.fs", _FS, (("texture1", _P.TEXTURE2D),)),
    "b_blackhole_p1_fs": (
        "b_blackhole_p1.fs",
        _FS,
        (("iChannel0", _P.TEXTURE2D), ("iChannel1", _P.TEXTURE2D), ("iChannel2", _P.TEXTURE2D)),
    ),
    "b_blackhole_p2_fs": ("b_blackhole_p2.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "b_blackhole_p3_fs": ("b_blackhole_p3.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "b_blackhole_p4_fs": ("b_blackhole_p4.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "b_blackhole_p5_fs": (
        "b_blackhole_p5.fs",
        _FS,
        (
            ("iChannel0", _P.TEXTURE2D),
            ("iChannel1", _P.TEXTURE2D),
            ("iChannel2", _P.TEXTURE2D),
            ("iChannel3", _P.TEXTURE2D),
        ),
    ),
    "b_through_fs": ("b_through.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "b_depth_test_fs": (
        "b_depth_test.fs",
        _FS,
        (("iChannel0", _P.TEXTURE2D), ("iChannel1", _P.TEXTURE2D), ("depth", _P.FLOAT)),
    ),
    "b_copy_fs": ("b_copy.fs", _FS, (("iChannel0", _P.TEXTURE2D),)),
    "b_boom_fs": ("b_boom.fs", _FS, (("texture1", _P.TEXTURE2D), ("lod", _P.FLOAT))),
    "c_point_shadow_vs": ("c_point_shadow.vs", _VS, (("model", _P.MAT4),)),
    "c_point_shadow_gs": (
        "c_point_shadow.gs",
        _GS,
        tuple((f"shadowMat_{face}", _P.MAT4) for face in range(6)),
    ),
    "c_point_shadow_fs": (
        "c_point_shadow.fs",
        _FS,
        (("lightPos", _P.VEC3), ("far_plane", _P.FLOAT)),
    ),
}

BUILTIN_SHADERS = tuple(_CATALOG)


def builtin_shader_params(name: str) -> ShaderParamList:
    """A fresh parameter list for the named built-in shader."""
    try:
        _, _, declarations = _CATALOG[name]
    except KeyError:
        raise ShaderNotFoundError(f"Shader Named {name} Don't Found") from None
    params = ShaderParamList()
    for declaration in declarations:
        if len(declaration) == 3:
            params.declare_array(*declaration)
        else:
            params.declare(*declaration)
    return params


def register_builtin_shaders(manager: ShaderManager, root: str = ROOT_PATH) -> None:
    """Register every built-in shader, with sources found under ``root``."""
    for name, (filename, shader_type, _) in _CATALOG.items():
        path = posixpath.join(root, SHADER_DIR, filename)
        manager.register(name, path, shader_type, builtin_shader_params(name))