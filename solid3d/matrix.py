"""4x4 affine transforms for 3-D SDF composition.

A :class:`Mat4` maps points as ``p' = R @ p + t`` (homogeneous row-major
layout, translation in the last column). Points are ``(..., 3)`` arrays,
so a whole sampling grid is transformed in one call.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, InvalidParameter, length

_Array = npt.NDArray[np.floating]
_Vec = Union[Sequence[float], _Array]


class Mat4:
    """Immutable 4x4 affine matrix."""

    __slots__ = ("_m",)

    def __init__(self, m: Union[Sequence[Sequence[float]], _Array]) -> None:
        arr = np.array(m, dtype=float)
        if arr.shape != (4, 4):
            raise InvalidParameter(f"matrix must be 4x4, got shape {arr.shape}")
        arr.setflags(write=False)
        self._m = arr

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls) -> Mat4:
        return cls(np.eye(4))

    @classmethod
    def translate(cls, v: _Vec) -> Mat4:
        m = np.eye(4)
        m[:3, 3] = np.asarray(v, dtype=float)
        return cls(m)

    @classmethod
    def scale(cls, v: _Vec) -> Mat4:
        """Per-axis scale. Distances are only preserved for uniform scale via ``ScaleUniform3D``."""
        m = np.eye(4)
        m[0, 0], m[1, 1], m[2, 2] = np.asarray(v, dtype=float)
        return cls(m)

    @classmethod
    def rotate(cls, axis: _Vec, angle: float) -> Mat4:
        """Right-handed rotation of *angle* radians about *axis*."""
        a = np.asarray(axis, dtype=float)
        n = np.linalg.norm(a)
        if n == 0.0:
            raise InvalidParameter("rotation axis has zero length")
        x, y, z = a / n
        c, s = np.cos(angle), np.sin(angle)
        t = 1.0 - c
        m = np.eye(4)
        m[:3, :3] = [
            [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
            [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
            [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
        ]
        return cls(m)

    @classmethod
    def rotate_x(cls, angle: float) -> Mat4:
        return cls.rotate((1.0, 0.0, 0.0), angle)

    @classmethod
    def rotate_y(cls, angle: float) -> Mat4:
        return cls.rotate((0.0, 1.0, 0.0), angle)

    @classmethod
    def rotate_z(cls, angle: float) -> Mat4:
        return cls.rotate((0.0, 0.0, 1.0), angle)

    @classmethod
    def mirror_xy(cls) -> Mat4:
        return cls.scale((1.0, 1.0, -1.0))

    @classmethod
    def mirror_xz(cls) -> Mat4:
        return cls.scale((1.0, -1.0, 1.0))

    @classmethod
    def mirror_yz(cls) -> Mat4:
        return cls.scale((-1.0, 1.0, 1.0))

    @classmethod
    def rotate_to_vector(cls, a: _Vec, b: _Vec) -> Mat4:
        """Rotation taking the direction of *a* onto the direction of *b*."""
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        la, lb = length(a), length(b)
        if la == 0.0 or lb == 0.0:
            raise InvalidParameter("cannot rotate to or from a zero-length vector")
        a = a / la
        b = b / lb
        axis = np.cross(a, b)
        s = np.linalg.norm(axis)
        c = float(np.dot(a, b))
        if s < 1e-12:
            if c > 0.0:
                return cls.identity()
            # antiparallel: half turn about any axis perpendicular to a
            helper = np.array([1.0, 0.0, 0.0]) if abs(a[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
            return cls.rotate(np.cross(a, helper), np.pi)
        return cls.rotate(axis, np.arctan2(s, c))

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    @property
    def array(self) -> _Array:
        return self._m

    def mul(self, other: Mat4) -> Mat4:
        """Composition ``self @ other`` (apply *other* first)."""
        return Mat4(self._m @ other._m)

    def __matmul__(self, other: Mat4) -> Mat4:
        return self.mul(other)

    def inverse(self) -> Mat4:
        try:
            return Mat4(np.linalg.inv(self._m))
        except np.linalg.LinAlgError as exc:
            raise InvalidParameter("matrix is singular and has no inverse") from exc

    def determinant(self) -> float:
        return float(np.linalg.det(self._m))

    def almost_equal(self, other: Mat4, tol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, atol=tol))

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def mul_position(self, p: _Array) -> _Array:
        """Transform the ``(..., 3)`` points *p*."""
        p = np.asarray(p, dtype=float)
        return p @ self._m[:3, :3].T + self._m[:3, 3]

    def mul_box(self, box: AABB) -> AABB:
        """Axis-aligned box enclosing the transformed corners of *box*."""
        return AABB.from_points(self.mul_position(box.vertices()))

    def __repr__(self) -> str:
        return f"Mat4({self._m.tolist()})"
