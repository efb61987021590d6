import math

import numpy as np
import pytest

from mazewalk.transforms import look_at, normalize, perspective, rotate, scale, translate

I4 = np.identity(4)


def test_normalize_unit_length():
    assert np.linalg.norm(normalize((3.0, -4.0, 12.0))) == pytest.approx(1.0)


def test_normalize_keeps_direction():
    v = np.array([2.0, 0.5, -1.0])
    n = normalize(v)
    assert np.allclose(np.cross(n, v), 0.0)
    assert np.dot(n, v) > 0


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize((0.0, 0.0, 0.0))


def test_translate_moves_origin():
    m = translate(I4, (1.5, -2.0, 3.0))
    assert np.allclose(m @ [0, 0, 0, 1], [1.5, -2.0, 3.0, 1.0])


def test_scale_diagonal():
    m = scale(I4, (2.0, 3.0, 4.0))
    assert np.allclose(np.diag(m), [2.0, 3.0, 4.0, 1.0])


def test_translate_then_scale_order():
    m = scale(translate(I4, (1.0, 0.0, 0.0)), (2.0, 2.0, 2.0))
    assert np.allclose(m[:3, 3], [1.0, 0.0, 0.0])


def test_rotate_quarter_turn_about_z():
    m = rotate(I4, math.pi / 2, (0.0, 0.0, 1.0))
    assert np.allclose(m @ [1, 0, 0, 1], [0, 1, 0, 1])


@pytest.mark.parametrize("axis", [(1, 0, 0), (0, 1, 0), (1, 1, 1), (0.3, -2.0, 0.5)])
def test_rotation_is_orthonormal(axis):
    r = rotate(I4, 0.7, axis)[:3, :3]
    assert np.allclose(r @ r.T, np.identity(3))
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_rotation_keeps_axis_fixed():
    axis = np.array([1.0, 2.0, 3.0])
    r = rotate(I4, 1.1, axis)
    assert np.allclose((r @ [*axis, 1.0])[:3], axis)


def test_perspective_depth_range():
    near, far = 0.1, 100.0
    p = perspective(math.radians(60.0), 4 / 3, near, far)
    near_clip = p @ [0, 0, -near, 1]
    far_clip = p @ [0, 0, -far, 1]
    assert near_clip[2] / near_clip[3] == pytest.approx(-1.0)
    assert far_clip[2] / far_clip[3] == pytest.approx(1.0)


def test_perspective_aspect():
    p = perspective(1.0, 2.0, 0.1, 10.0)
    assert p[1, 1] == pytest.approx(2.0 * p[0, 0])


def test_perspective_invalid():
    with pytest.raises(ValueError):
        perspective(1.0, 0.0, 0.1, 10.0)
    with pytest.raises(ValueError):
        perspective(1.0, 1.0, 1.0, 1.0)


def test_look_at_eye_to_origin_and_center_ahead():
    eye = np.array([3.0, 1.0, -2.0])
    center = np.array([0.0, 1.0, 5.0])
    view = look_at(eye, center, (0.0, 1.0, 0.0))
    assert np.allclose(view @ [*eye, 1.0], [0, 0, 0, 1])
    ahead = view @ [*center, 1.0]
    assert ahead[0] == pytest.approx(0.0, abs=1e-9)
    assert ahead[1] == pytest.approx(0.0, abs=1e-9)
    assert ahead[2] == pytest.approx(-np.linalg.norm(center - eye))


def test_look_at_rotation_is_orthonormal():
    view = look_at((1, 2, 3), (4, 0, -1), (0, 1, 0))
    r = view[:3, :3]
    assert np.allclose(r @ r.T, np.identity(3))