"""Vector, quaternion and 4x4 matrix helpers.

Matrices act on column vectors (p' = M @ p). Quaternions are arrays (w, x, y, z).
Euler angles are (pitch, yaw, roll) in radians about x, y and z.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

_EPS = 1e-12


def _vec3(v) -> np.ndarray:
    a = np.asarray(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {a.shape}")
    return a


def normalize(v) -> np.ndarray:
    a = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(a))
    if length < _EPS:
        raise ValueError("cannot normalize a zero-length vector")
    return a / length


def translate_matrix(offset) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = _vec3(offset)
    return m


def scale_matrix(factors) -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = np.diag(_vec3(factors))
    return m


def quat_from_euler(angles) -> np.ndarray:
    pitch, yaw, roll = _vec3(angles)
    cx, cy, cz = math.cos(pitch / 2), math.cos(yaw / 2), math.cos(roll / 2)
    sx, sy, sz = math.sin(pitch / 2), math.sin(yaw / 2), math.sin(roll / 2)
    return np.array([
        cx * cy * cz + sx * sy * sz,
        sx * cy * cz - cx * sy * sz,
        cx * sy * cz + sx * cy * sz,
        cx * cy * sz - sx * sy * cz,
    ])


def quat_multiply(a, b) -> np.ndarray:
    w1, x1, y1, z1 = np.asarray(a, dtype=float)
    w2, x2, y2, z2 = np.asarray(b, dtype=float)
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
        w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
    ])


def quat_to_matrix(q) -> np.ndarray:
    w, x, y, z = np.asarray(q, dtype=float)
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    m = np.eye(4)
    m[:3, :3] = [
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
    ]
    return m


def matrix_to_quat(m) -> np.ndarray:
    """Unit quaternion of the rotation in the upper-left 3x3 block."""
    r = np.asarray(m, dtype=float)[:3, :3]
    trace = r[0, 0] + r[1, 1] + r[2, 2]
    if trace > 0:
        s = math.sqrt(trace + 1.0) * 2
        q = [0.25 * s, (r[2, 1] - r[1, 2]) / s, (r[0, 2] - r[2, 0]) / s, (r[1, 0] - r[0, 1]) / s]
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = math.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2]) * 2
        q = [(r[2, 1] - r[1, 2]) / s, 0.25 * s, (r[0, 1] + r[1, 0]) / s, (r[0, 2] + r[2, 0]) / s]
    elif r[1, 1] > r[2, 2]:
        s = math.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2]) * 2
        q = [(r[0, 2] - r[2, 0]) / s, (r[0, 1] + r[1, 0]) / s, 0.25 * s, (r[1, 2] + r[2, 1]) / s]
    else:
        s = math.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1]) * 2
        q = [(r[1, 0] - r[0, 1]) / s, (r[0, 2] + r[2, 0]) / s, (r[1, 2] + r[2, 1]) / s, 0.25 * s]
    return normalize(q)


def quat_to_euler(q) -> np.ndarray:
    w, x, y, z = np.asarray(q, dtype=float)
    py = 2 * (y * z + w * x)
    px = w * w - x * x - y * y + z * z
    if abs(py) < _EPS and abs(px) < _EPS:
        pitch = 2 * math.atan2(x, w)
    else:
        pitch = math.atan2(py, px)
    yaw = math.asin(max(-1.0, min(1.0, -2 * (x * z - w * y))))
    roll = math.atan2(2 * (x * y + w * z), w * w + x * x - y * y - z * z)
    return np.array([pitch, yaw, roll])


class Decomposition(NamedTuple):
    translation: np.ndarray
    rotation: np.ndarray
    scale: np.ndarray


def decompose(m) -> Decomposition:
    """Split an affine matrix into translation, rotation quaternion and scale."""
    mat = np.array(m, dtype=float)
    if mat.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {mat.shape}")
    if abs(mat[3, 3]) < _EPS:
        raise ValueError("matrix is not decomposable")
    mat /= mat[3, 3]
    translation = mat[:3, 3].copy()
    cols = [mat[:3, i].copy() for i in range(3)]

    def _unit(v):
        length = float(np.linalg.norm(v))
        if length < _EPS:
            raise ValueError("matrix has a zero scale axis")
        return length, v / length

    sx, c0 = _unit(cols[0])
    sy, c1 = _unit(cols[1] - np.dot(c0, cols[1]) * c0)
    c2 = cols[2] - np.dot(c0, cols[2]) * c0
    sz, c2 = _unit(c2 - np.dot(c1, c2) * c1)
    scale = np.array([sx, sy, sz])
    basis = np.column_stack([c0, c1, c2])
    if np.dot(c0, np.cross(c1, c2)) < 0:
        scale = -scale
        basis = -basis
    return Decomposition(translation, matrix_to_quat(basis), scale)