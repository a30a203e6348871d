import math

import numpy as np
import pytest

from cronoscore.linalg import (
    decompose,
    matrix_to_quat,
    normalize,
    quat_from_euler,
    quat_multiply,
    quat_to_euler,
    quat_to_matrix,
    scale_matrix,
    translate_matrix,
)

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


def _same_rotation(a, b):
    return np.allclose(a, b) or np.allclose(a, -np.asarray(b))


def test_translate_moves_point():
    offset = np.array([1.0, -2.0, 3.5])
    p = np.array([4.0, 5.0, 6.0, 1.0])
    assert np.allclose((translate_matrix(offset) @ p)[:3], p[:3] + offset)


def test_scale_scales_point():
    factors = np.array([2.0, 3.0, 0.5])
    p = np.array([1.0, 1.0, 1.0, 1.0])
    assert np.allclose((scale_matrix(factors) @ p)[:3], factors)


def test_bad_vector_shape():
    with pytest.raises(ValueError):
        translate_matrix([1.0, 2.0])


def test_zero_euler_is_identity():
    assert np.allclose(quat_from_euler([0, 0, 0]), IDENTITY_QUAT)
    assert np.allclose(quat_to_matrix(IDENTITY_QUAT), np.eye(4))


def test_rotation_about_z():
    m = quat_to_matrix(quat_from_euler([0.0, 0.0, math.pi / 2]))
    assert np.allclose(m @ np.array([1.0, 0.0, 0.0, 1.0]), [0.0, 1.0, 0.0, 1.0])


@pytest.mark.parametrize("angles", [(0.3, -0.4, 0.5), (1.0, 0.2, -2.0), (-0.7, 1.2, 0.1)])
def test_euler_round_trip(angles):
    assert np.allclose(quat_to_euler(quat_from_euler(angles)), angles)


@pytest.mark.parametrize("angles", [(0.3, -0.4, 0.5), (3.0, 0.1, 0.2), (0.1, 3.0, -0.2), (0.0, 0.2, 3.1)])
def test_matrix_quat_round_trip(angles):
    q = quat_from_euler(angles)
    original = quat_to_matrix(q)
    recovered = matrix_to_quat(original)
    assert np.linalg.norm(recovered) == pytest.approx(1.0)
    assert np.allclose(quat_to_matrix(recovered), original)


def test_rotation_matrix_is_orthonormal():
    r = quat_to_matrix(quat_from_euler([0.4, -1.1, 2.2]))[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_quat_multiply_identity():
    q = quat_from_euler([0.2, 0.3, 0.4])
    assert np.allclose(quat_multiply(IDENTITY_QUAT, q), q)
    assert np.allclose(quat_multiply(q, IDENTITY_QUAT), q)


def test_quat_multiply_composes_rotations():
    a = quat_from_euler([0.2, 0.0, 0.9])
    b = quat_from_euler([-0.5, 0.4, 0.0])
    assert np.allclose(quat_to_matrix(quat_multiply(a, b)), quat_to_matrix(a) @ quat_to_matrix(b))


def test_decompose_round_trip():
    t = np.array([1.0, 2.0, -3.0])
    q = quat_from_euler([0.3, 0.6, -0.2])
    s = np.array([2.0, 0.5, 1.5])
    m = translate_matrix(t) @ quat_to_matrix(q) @ scale_matrix(s)
    parts = decompose(m)
    assert np.allclose(parts.translation, t)
    assert np.allclose(parts.scale, s)
    assert _same_rotation(parts.rotation, q)


def test_decompose_rejects_zero_w():
    m = np.eye(4)
    m[3, 3] = 0.0
    with pytest.raises(ValueError):
        decompose(m)


def test_decompose_rejects_zero_scale():
    with pytest.raises(ValueError):
        decompose(scale_matrix([1.0, 0.0, 1.0]))


def test_normalize():
    v = normalize([3.0, -4.0, 12.0])
    assert np.linalg.norm(v) == pytest.approx(1.0)
    assert np.allclose(np.cross(v, [3.0, -4.0, 12.0]), 0.0)


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize([0.0, 0.0, 0.0])