"""3D geometry base class and primitive signed distance functions."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, InvalidParameter
from . import sdf_lib as sdf
from .matrix import Mat4

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]


# ===========================================================================
# Base class
# ===========================================================================

class Geometry3D:
    """Base class for 3D signed-distance-function geometries.

    A ``Geometry3D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 3)`` array of 3D points and the return value is a ``(...)``
    array of signed distances (negative inside), together with an
    axis-aligned box computed once at construction that contains every
    point where the distance is ``<= 0``.

    Nodes are immutable after construction (apart from the blend setters
    on boolean nodes) and may be shared between several parents and
    evaluated from many threads at once.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`subtract`, :meth:`intersect`
    - Modifiers:          :meth:`offset`, :meth:`shell`, :meth:`cut`
    - Transforms:         :meth:`translate`, :meth:`scale`, :meth:`elongate`,
                          :meth:`transform`
    - Rotations:          :meth:`rotate_x`, :meth:`rotate_y`, :meth:`rotate_z`
    """

    def __init__(self, func: _SDFFunc, bbox: AABB) -> None:
        self._func = func
        self._bb = bbox

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 3)``)."""
        return self._func(np.asarray(p, dtype=float))

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    def bounding_box(self) -> AABB:
        """Box containing the solid, computed at construction."""
        return self._bb

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, *others: Optional[Geometry3D]) -> Geometry3D:
        """Return the union (min) of this shape and *others*."""
        from .operations import union
        return union(self, *others)

    def subtract(self, other: Optional[Geometry3D]) -> Geometry3D:
        """Subtract *other* from this shape."""
        from .operations import difference
        return difference(self, other)

    def intersect(self, other: Optional[Geometry3D]) -> Optional[Geometry3D]:
        """Return the intersection (max) of this shape and *other*."""
        from .operations import intersect
        return intersect(self, other)

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def offset(self, amount: float) -> Geometry3D:
        """Grow the surface outward by *amount* (shrink when negative)."""
        from .operations import Offset3D
        return Offset3D(self, amount)

    def shell(self, thickness: float) -> Geometry3D:
        """Turn the solid into a hollow wall of *thickness* around its surface."""
        from .operations import Shell3D
        return Shell3D(self, thickness)

    def cut(self, point: Sequence[float], normal: Sequence[float]) -> Geometry3D:
        """Keep the part on the *normal* side of the plane through *point*."""
        from .operations import Cut3D
        return Cut3D(self, point, normal)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def transform(self, matrix: Mat4) -> Geometry3D:
        """Apply an affine *matrix*; distances stay exact only for rigid motions."""
        from .operations import Transform3D
        return Transform3D(self, matrix)

    def translate(self, tx: float, ty: float, tz: float) -> Geometry3D:
        """Translate by ``(tx, ty, tz)``."""
        return self.transform(Mat4.translate((tx, ty, tz)))

    def scale(self, s: float) -> Geometry3D:
        """Uniformly scale by factor *s*, keeping distances exact."""
        from .operations import ScaleUniform3D
        return ScaleUniform3D(self, s)

    def elongate(self, hx: float, hy: float, hz: float) -> Geometry3D:
        """Stretch by ``(hx, hy, hz)`` in total along each axis."""
        from .operations import Elongate3D
        return Elongate3D(self, (hx, hy, hz))

    def rotate_x(self, angle_rad: float) -> Geometry3D:
        """Rotate around the X axis by *angle_rad* radians."""
        return self.transform(Mat4.rotate_x(angle_rad))

    def rotate_y(self, angle_rad: float) -> Geometry3D:
        """Rotate around the Y axis by *angle_rad* radians."""
        return self.transform(Mat4.rotate_y(angle_rad))

    def rotate_z(self, angle_rad: float) -> Geometry3D:
        """Rotate around the Z axis by *angle_rad* radians."""
        return self.transform(Mat4.rotate_z(angle_rad))


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Box3D(Geometry3D):
    """Axis-aligned box of full *size* ``(sx, sy, sz)`` centred at origin.

    A positive *round* rounds edges and corners inside the same outer size.
    The distance is exact everywhere.
    """

    def __init__(self, size: Sequence[float], round: float = 0.0) -> None:
        s = np.array(size, dtype=float)
        if s.shape != (3,) or np.any(s <= 0):
            raise InvalidParameter(f"size must be three positive lengths, got {size}")
        if round < 0:
            raise InvalidParameter(f"round must be >= 0, got {round}")
        half = 0.5 * s
        if round > half.min():
            raise InvalidParameter(f"round {round} exceeds half the smallest side {half.min()}")
        self.round = float(round)
        self._core = half - round
        super().__init__(
            lambda p: sdf.sdBox3D(p, self._core) - self.round,
            AABB(-half, half),
        )


class Sphere3D(Geometry3D):
    """Sphere centred at origin with given *radius*."""

    def __init__(self, radius: float) -> None:
        if radius <= 0:
            raise InvalidParameter(f"radius must be > 0, got {radius}")
        self.radius = float(radius)
        super().__init__(
            lambda p: sdf.length(p) - self.radius,
            AABB((-radius,) * 3, (radius,) * 3),
        )


class Cylinder3D(Geometry3D):
    """Cylinder along Z, centred at origin.

    Parameters
    ----------
    height:
        Full height along Z.
    radius:
        Radius in the XY plane.
    round:
        Edge rounding radius, at most *radius* and at most half the height.

    The distance is a 2-D box distance in ``(radial, axial)`` coordinates
    and is exact.
    """

    def __init__(self, height: float, radius: float, round: float = 0.0) -> None:
        if radius <= 0:
            raise InvalidParameter(f"radius must be > 0, got {radius}")
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        if round < 0:
            raise InvalidParameter(f"round must be >= 0, got {round}")
        if round > radius:
            raise InvalidParameter(f"round {round} exceeds radius {radius}")
        if height < 2.0 * round:
            raise InvalidParameter(f"height {height} is less than 2 * round ({2.0 * round})")
        self.round = float(round)
        self._core = np.array([radius - round, 0.5 * height - round])

        def _sdf(p: _Array) -> _Array:
            q = sdf.vec2(np.hypot(p[..., 0], p[..., 1]), p[..., 2])
            return sdf.sdBox2D(q, self._core) - self.round

        d = np.array([radius, radius, 0.5 * height])
        super().__init__(_sdf, AABB(-d, d))


class Capsule3D(Cylinder3D):
    """Cylinder along Z with fully rounded ends (``round == radius``)."""

    def __init__(self, height: float, radius: float) -> None:
        super().__init__(height, radius, radius)


class Cone3D(Geometry3D):
    """Truncated cone along Z, centred at origin.

    Parameters
    ----------
    height:
        Full height along Z.
    r0:
        Radius at the base (``z = -height/2``).
    r1:
        Radius at the top (``z = +height/2``); zero gives a pointed cone.
    round:
        Edge rounding; the core radii are inset so the rounded surface stays
        tangent to the original slope.

    Evaluation classifies each point (in ``(radial, axial)`` half-plane
    coordinates) as above the top cap, below the base, inside, nearest the
    slope, or nearest one of the two rim vertices, and returns the exact
    distance for that region.
    """

    def __init__(self, height: float, r0: float, r1: float, round: float = 0.0) -> None:
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        if r0 < 0 or r1 < 0:
            raise InvalidParameter(f"radii must be >= 0, got r0={r0}, r1={r1}")
        if r0 == 0 and r1 == 0:
            raise InvalidParameter("at least one cone radius must be > 0")
        if round < 0:
            raise InvalidParameter(f"round must be >= 0, got {round}")
        if height < 2.0 * round:
            raise InvalidParameter(f"height {height} is less than 2 * round ({2.0 * round})")
        h = 0.5 * height
        slope = np.array([r1 - r0, height])
        self._u = slope / np.linalg.norm(slope)
        self._n = np.array([self._u[1], -self._u[0]])
        ofs = round / self._n[0]
        self._r0 = r0 - (1.0 + self._n[1]) * ofs
        self._r1 = r1 - (1.0 - self._n[1]) * ofs
        if min(self._r0, self._r1) < -1e-12:
            raise InvalidParameter(
                f"round {round} leaves no cone core (inset radii {self._r0:g}, {self._r1:g})"
            )
        self._h = h - round
        self._len = float(np.hypot(self._r1 - self._r0, 2.0 * self._h))
        self.round = float(round)

        def _sdf(p: _Array) -> _Array:
            d = sdf.sdCone(p, self._r0, self._r1, self._h, self._u, self._n, self._len)
            return d - self.round

        r = max(self._r0, self._r1) + round
        super().__init__(_sdf, AABB((-r, -r, -h), (r, r, h)))
