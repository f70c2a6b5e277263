"""2D profile shapes consumed by the 3-D revolve and extrude solids."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, runtime_checkable

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, InvalidParameter
from . import sdf_lib as sdf

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]


@runtime_checkable
class SDF2(Protocol):
    """What a 3-D profile solid needs from a 2-D shape.

    The profile is treated as opaque: its distance need not be exact, only
    correctly signed, and its box must contain its negative region.
    """

    def sdf(self, p: _Array) -> _Array:
        ...

    def bounding_box(self) -> AABB:
        ...


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D signed-distance-function geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances, together with a box that contains the
    shape.

    Subclasses override ``__init__`` to pass the appropriate primitive SDF
    and box to ``super().__init__(func, bbox)``.
    """

    def __init__(self, func: _SDFFunc, bbox: AABB) -> None:
        self._func = func
        self._bb = bbox

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(np.asarray(p, dtype=float))

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    def bounding_box(self) -> AABB:
        return self._bb

    def translate(self, tx: float, ty: float) -> Geometry2D:
        """Translate by ``(tx, ty)``."""
        t = np.array([tx, ty], dtype=float)
        return Geometry2D(lambda p: self.sdf(p - t), self._bb.translate(t))

    def union(self, other: Geometry2D) -> Geometry2D:
        """Return the union (min) of this shape and *other*."""
        return Union2D(self, other)


# ===========================================================================
# Primitive shapes
# ===========================================================================

class Circle2D(Geometry2D):
    """Circle centred at origin with given *radius*."""

    def __init__(self, radius: float) -> None:
        if radius <= 0:
            raise InvalidParameter(f"radius must be > 0, got {radius}")
        self.radius = float(radius)
        super().__init__(
            lambda p: sdf.sdCircle(p, self.radius),
            AABB((-radius, -radius), (radius, radius)),
        )


class Box2D(Geometry2D):
    """Axis-aligned rectangle of full *size* ``(sx, sy)`` centred at origin.

    A positive *round* rounds the corners without changing the outer size.
    """

    def __init__(self, size: Sequence[float], round: float = 0.0) -> None:
        s = np.array(size, dtype=float)
        if s.shape != (2,) or np.any(s <= 0):
            raise InvalidParameter(f"size must be two positive lengths, got {size}")
        if round < 0:
            raise InvalidParameter(f"round must be >= 0, got {round}")
        half = 0.5 * s
        if round > half.min():
            raise InvalidParameter(f"round {round} exceeds half the smallest side {half.min()}")
        super().__init__(lambda p: sdf.sdRoundedBox2D(p, half, round), AABB(-half, half))


class Polygon2D(Geometry2D):
    """Closed polygon through *vertices* (either winding)."""

    def __init__(self, vertices: Sequence[Sequence[float]]) -> None:
        v = np.array(vertices, dtype=float)
        if v.ndim != 2 or v.shape[1] != 2 or v.shape[0] < 3:
            raise InvalidParameter("a polygon needs at least three 2-D vertices")
        super().__init__(lambda p: sdf.sdPolygon2D(p, v), AABB.from_points(v))


# ===========================================================================
# Boolean operation classes
# ===========================================================================

class Union2D(Geometry2D):
    """Union of one or more 2-D geometries (minimum SDF)."""

    def __init__(self, *geoms: Geometry2D) -> None:
        if not geoms:
            raise InvalidParameter("Union2D needs at least one shape")

        def _sdf(p: _Array) -> _Array:
            d = geoms[0].sdf(p)
            for g in geoms[1:]:
                d = np.minimum(d, g.sdf(p))
            return d

        super().__init__(_sdf, AABB.union_of(g.bounding_box() for g in geoms))
