import math

import numpy as np
import pytest
from PIL import Image as PILImage

from brdfscene.utils import (
    Channels,
    look_at,
    mat_to_string,
    model_matrix,
    perspective,
    position_from_model,
    read_from_file,
    read_image,
    read_image_hdr,
    rotate,
    rotation_from_model,
    rotation_matrix,
    scale_from_model,
    translate,
    vec_to_string,
)


def _write_hdr(path, width, height, body):
    header = b"#?RADIANCE\nFORMAT=32-bit_rle_rgbe\n\n" + f"-Y {height} +X {width}\n".encode()
    path.write_bytes(header + body)
    return path


def test_vec_to_string_uses_six_decimals():
    assert vec_to_string((1.5, -2)) == "(1.500000,-2.000000)"


def test_mat_to_string_lists_columns():
    mat = translate(np.identity(4), (1, 2, 3))
    lines = mat_to_string(mat).splitlines()
    assert len(lines) == 4
    assert lines[3] == vec_to_string((1, 2, 3, 1))
    assert lines[0] == vec_to_string((1, 0, 0, 0))


def test_read_from_file_round_trip(tmp_path):
    target = tmp_path / "shader.vs"
    target.write_text("void main() {}\n", encoding="utf-8")
    assert read_from_file(target) == "void main() {}\n"


def test_read_from_file_missing(tmp_path):
    with pytest.raises(OSError):
        read_from_file(tmp_path / "nope.txt")


def _rgb_png(tmp_path):
    img = PILImage.new("RGB", (3, 2), (0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0))
    path = tmp_path / "img.png"
    img.save(path)
    return path


def test_read_image_flips_rows(tmp_path):
    path = _rgb_png(tmp_path)
    flipped = read_image(path, True)
    plain = read_image(path, False)
    assert (flipped.width, flipped.height) == (3, 2)
    assert flipped.data.shape == (2, 3, 3)
    assert tuple(plain.data[0, 0]) == (255, 0, 0)
    assert tuple(flipped.data[-1, 0]) == (255, 0, 0)
    assert np.array_equal(flipped.data, np.flipud(plain.data))


def test_read_image_channels(tmp_path):
    rgb = read_image(_rgb_png(tmp_path))
    assert rgb.channels == Channels.RGB | Channels.UI
    grey_path = tmp_path / "grey.png"
    PILImage.new("L", (2, 2), 7).save(grey_path)
    grey = read_image(grey_path)
    assert grey.channels & Channels.CL_MASK == Channels.R
    rgba_path = tmp_path / "rgba.png"
    PILImage.new("RGBA", (2, 2), (1, 2, 3, 4)).save(rgba_path)
    assert read_image(rgba_path).channels & Channels.CL_MASK == Channels.RGBA


def test_read_image_missing(tmp_path):
    with pytest.raises(OSError):
        read_image(tmp_path / "missing.png")


def test_read_image_garbage(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image")
    with pytest.raises(OSError):
        read_image(path)


def test_read_image_hdr_from_ldr(tmp_path):
    path = tmp_path / "white.png"
    PILImage.new("RGB", (2, 2), (255, 255, 255)).save(path)
    img = read_image_hdr(path)
    assert img.data.dtype == np.float32
    assert img.channels == Channels.RGB | Channels.BIT32
    assert np.allclose(img.data, 1.0)


def test_read_image_hdr_flat_radiance(tmp_path):
    path = _write_hdr(tmp_path / "a.hdr", 2, 1, bytes([128, 64, 0, 129, 0, 0, 0, 0]))
    img = read_image_hdr(path, False)
    assert (img.width, img.height) == (2, 1)
    assert np.allclose(img.data[0, 0], (1.0, 0.5, 0.0))
    assert np.allclose(img.data[0, 1], 0.0)


def test_radiance_rle_matches_flat(tmp_path):
    flat = _write_hdr(tmp_path / "flat.hdr", 8, 1, bytes([128, 128, 128, 129] * 8))
    rle_body = bytes([2, 2, 0, 8]) + bytes([0x88, 128]) * 3 + bytes([0x88, 129])
    rle = _write_hdr(tmp_path / "rle.hdr", 8, 1, rle_body)
    a = read_image_hdr(flat, False).data
    b = read_image_hdr(rle, False).data
    assert np.array_equal(a, b)
    assert np.all(b == b[0, 0])


def test_radiance_flip(tmp_path):
    body = bytes([128, 0, 0, 129, 0, 128, 0, 129])
    path = _write_hdr(tmp_path / "col.hdr", 1, 2, body)
    plain = read_image_hdr(path, False).data
    flipped = read_image_hdr(path, True).data
    assert plain[0, 0, 0] > 0 and plain[1, 0, 1] > 0
    assert np.array_equal(flipped, np.flipud(plain))


def test_radiance_as_ldr(tmp_path):
    path = _write_hdr(tmp_path / "b.hdr", 1, 1, bytes([128, 128, 128, 129]))
    img = read_image(path)
    assert img.data.dtype == np.uint8
    assert img.channels == Channels.RGB | Channels.UI
    assert int(img.data.max()) == 255


def test_radiance_bad_format(tmp_path):
    path = tmp_path / "bad.hdr"
    path.write_bytes(b"#?RADIANCE\nFORMAT=other\n\n-Y 1 +X 1\n\x00\x00\x00\x00")
    with pytest.raises(OSError):
        read_image_hdr(path)


def test_radiance_truncated(tmp_path):
    path = _write_hdr(tmp_path / "short.hdr", 2, 2, bytes([1, 2, 3]))
    with pytest.raises(OSError):
        read_image_hdr(path)


def test_translate_sets_position():
    mat = translate(np.identity(4), (1, 2, 3))
    assert np.allclose(position_from_model(mat), (1, 2, 3))


def test_rotate_quarter_turn_about_z():
    mat = rotate(np.identity(4), math.pi / 2, (0, 0, 2))
    assert np.allclose(mat @ np.array([1, 0, 0, 0]), (0, 1, 0, 0))


def test_rotate_zero_axis():
    with pytest.raises(ValueError):
        rotate(np.identity(4), 1.0, (0, 0, 0))


def test_rotation_matrix_is_orthonormal():
    rot = rotation_matrix((10, 20, 30))
    assert np.allclose(rot[:3, :3].T @ rot[:3, :3], np.identity(3))
    assert np.isclose(np.linalg.det(rot), 1.0)


def test_rotation_matrix_yaw_turns_forward():
    rot = rotation_matrix((0, 90, 0))
    assert np.allclose(rot @ np.array([0, 0, -1, 0]), (-1, 0, 0, 0))


def test_model_matrix_round_trip():
    model = model_matrix((1, -2, 3), (2, 3, 4), (10, 20, 30))
    assert np.allclose(position_from_model(model), (1, -2, 3))
    assert np.allclose(scale_from_model(model), (2, 3, 4))


def test_rotation_from_model_identity():
    model = model_matrix((4, 5, 6), (2, 2, 2), (0, 0, 0))
    assert np.allclose(rotation_from_model(model), 0.0)


@pytest.mark.parametrize("angle", [15.0, 30.0, -40.0])
def test_rotation_from_model_pitch(angle):
    result = rotation_from_model(rotation_matrix((angle, 0, 0)))
    assert np.isclose(result[0], math.radians(angle) * 180.0)
    assert np.allclose(result[1:], 0.0)


def test_look_at_maps_eye_and_center():
    eye, center = (1.0, 2.0, 3.0), (4.0, 2.0, 7.0)
    view = look_at(eye, center, (0, 1, 0))
    assert np.allclose(view @ np.array([*eye, 1.0]), (0, 0, 0, 1))
    mapped = view @ np.array([*center, 1.0])
    assert np.allclose(mapped[:2], 0.0)
    assert np.isclose(mapped[2], -np.linalg.norm(np.subtract(center, eye)))


def test_perspective_depth_range():
    near, far = 0.1, 20.0
    proj = perspective(math.radians(90.0), 1.0, near, far)
    at_near = proj @ np.array([0, 0, -near, 1])
    at_far = proj @ np.array([0, 0, -far, 1])
    assert np.isclose(at_near[2] / at_near[3], -1.0)
    assert np.isclose(at_far[2] / at_far[3], 1.0)


def test_perspective_degenerate():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)