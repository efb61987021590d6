"""4x4 transform helpers on numpy arrays.

Matrices act on column vectors (``m @ v``); translation lives in ``m[:3, 3]``.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

__all__ = ["normalize", "translate", "scale", "rotate", "perspective", "look_at"]


def normalize(v: Sequence[float]) -> np.ndarray:
    """Return ``v`` scaled to unit length."""
    arr = np.asarray(v, dtype=float)
    length = np.linalg.norm(arr)
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def translate(m: np.ndarray, v: Sequence[float]) -> np.ndarray:
    """Return ``m`` multiplied by a translation by ``v``."""
    t = np.identity(4)
    t[:3, 3] = np.asarray(v, dtype=float)
    return np.asarray(m, dtype=float) @ t


def scale(m: np.ndarray, v: Sequence[float]) -> np.ndarray:
    """Return ``m`` multiplied by a per-axis scale by ``v``."""
    s = np.diag([*np.asarray(v, dtype=float), 1.0])
    return np.asarray(m, dtype=float) @ s


def rotate(m: np.ndarray, angle: float, axis: Sequence[float]) -> np.ndarray:
    """Return ``m`` multiplied by a rotation of ``angle`` radians about ``axis``."""
    x, y, z = normalize(axis)
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    r = np.identity(4)
    r[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return np.asarray(m, dtype=float) @ r


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(fovy / 2.0)
    p = np.zeros((4, 4))
    p[0, 0] = f / aspect
    p[1, 1] = f
    p[2, 2] = -(far + near) / (far - near)
    p[2, 3] = -(2.0 * far * near) / (far - near)
    p[3, 2] = -1.0
    return p


def look_at(
    eye: Sequence[float], center: Sequence[float], up: Sequence[float]
) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v = np.asarray(eye, dtype=float)
    f = normalize(np.asarray(center, dtype=float) - eye_v)
    s = normalize(np.cross(f, np.asarray(up, dtype=float)))
    u = np.cross(s, f)
    view = np.identity(4)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[0, 3] = -np.dot(s, eye_v)
    view[1, 3] = -np.dot(u, eye_v)
    view[2, 3] = np.dot(f, eye_v)
    return view