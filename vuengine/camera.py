"""Camera with projection and view matrices in Vulkan conventions.

Matrices are stored as 4x4 numpy arrays indexed ``[row, column]``, so a
point ``p`` in homogeneous coordinates is transformed by ``matrix @ p``.
Clip-space depth runs from 0 at the near plane to 1 at the far plane.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

DEFAULT_UP = (0.0, -1.0, 0.0)

_Vec3 = Sequence[float]


def _vec3(values: _Vec3) -> np.ndarray:
    array = np.asarray(values, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {array.shape}")
    return array


def _normalize(vector: np.ndarray, what: str) -> np.ndarray:
    length = np.linalg.norm(vector)
    if length == 0.0:
        raise ValueError(f"{what} must not be a zero vector")
    return vector / length


class Camera:
    """Holds a projection matrix, a view matrix and the view's inverse."""

    def __init__(self) -> None:
        self.projection = np.identity(4)
        self.view = np.identity(4)
        self.inverse_view = np.identity(4)

    def set_orthographic_projection(
        self,
        left: float,
        right: float,
        top: float,
        bottom: float,
        near: float,
        far: float,
    ) -> None:
        """Map the given box onto the clip-space cube."""
        if right == left or bottom == top or far == near:
            raise ValueError("orthographic box must have non-zero extent on every axis")
        projection = np.identity(4)
        projection[0, 0] = 2.0 / (right - left)
        projection[1, 1] = 2.0 / (bottom - top)
        projection[2, 2] = 1.0 / (far - near)
        projection[0, 3] = -(right + left) / (right - left)
        projection[1, 3] = -(bottom + top) / (bottom - top)
        projection[2, 3] = -near / (far - near)
        self.projection = projection

    def set_perspective_projection(
        self, fovy: float, aspect: float, near: float, far: float
    ) -> None:
        """Set a perspective projection with vertical field of view ``fovy`` in radians."""
        if aspect == 0.0:
            raise ValueError("aspect ratio must not be zero")
        if far == near:
            raise ValueError("near and far planes must differ")
        tan_half_fovy = np.tan(fovy / 2.0)
        projection = np.zeros((4, 4))
        projection[0, 0] = 1.0 / (aspect * tan_half_fovy)
        projection[1, 1] = 1.0 / tan_half_fovy
        projection[2, 2] = far / (far - near)
        projection[3, 2] = 1.0
        projection[2, 3] = -(far * near) / (far - near)
        self.projection = projection

    def _set_basis(
        self, position: np.ndarray, u: np.ndarray, v: np.ndarray, w: np.ndarray
    ) -> None:
        view = np.identity(4)
        view[0, :3] = u
        view[1, :3] = v
        view[2, :3] = w
        view[0, 3] = -np.dot(u, position)
        view[1, 3] = -np.dot(v, position)
        view[2, 3] = -np.dot(w, position)
        self.view = view

        inverse = np.identity(4)
        inverse[:3, 0] = u
        inverse[:3, 1] = v
        inverse[:3, 2] = w
        inverse[:3, 3] = position
        self.inverse_view = inverse

    def set_view_direction(
        self, position: _Vec3, direction: _Vec3, up: _Vec3 = DEFAULT_UP
    ) -> None:
        """Look from ``position`` along ``direction``."""
        position_v = _vec3(position)
        w = _normalize(_vec3(direction), "direction")
        u = _normalize(np.cross(w, _vec3(up)), "direction x up")
        v = np.cross(w, u)
        self._set_basis(position_v, u, v, w)

    def set_view_target(
        self, position: _Vec3, target: _Vec3, up: _Vec3 = DEFAULT_UP
    ) -> None:
        """Look from ``position`` towards ``target``."""
        position_v = _vec3(position)
        self.set_view_direction(position_v, _vec3(target) - position_v, up)

    def set_view_yxz(self, position: _Vec3, rotation: _Vec3) -> None:
        """Orient the camera by Tait-Bryan angles applied in Y, X, Z order."""
        position_v = _vec3(position)
        rx, ry, rz = _vec3(rotation)
        c3, s3 = np.cos(rz), np.sin(rz)
        c2, s2 = np.cos(rx), np.sin(rx)
        c1, s1 = np.cos(ry), np.sin(ry)
        u = np.array([c1 * c3 + s1 * s2 * s3, c2 * s3, c1 * s2 * s3 - c3 * s1])
        v = np.array([c3 * s1 * s2 - c1 * s3, c2 * c3, c1 * c3 * s2 + s1 * s3])
        w = np.array([c2 * s1, -s2, c1 * c2])
        self._set_basis(position_v, u, v, w)

    def position(self) -> np.ndarray:
        """World-space position of the camera."""
        return self.inverse_view[:3, 3].copy()