"""Replication combinators: grids, rotational patterns and placed copies.

The node classes raise :class:`InvalidParameter` on non-positive counts.
The factories (:func:`array3d`, :func:`rotate_union`, :func:`rotate_copy`,
:func:`line_of`, :func:`multi`, :func:`orient`) return ``None`` instead,
meaning "no geometry".
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, TAU, InvalidParameter
from . import sdf_lib as sdf
from .blend import BlendFunc
from .geometry import Geometry3D
from .matrix import Mat4
from .operations import Transform3D, _blended_box, _require, union

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


class Array3D(Geometry3D):
    """``nx * ny * nz`` grid of copies of *child* spaced by *step*.

    Every evaluation visits every copy, so the cost grows with the total
    count.
    """

    def __init__(
        self,
        child: Geometry3D,
        num: Sequence[int],
        step: Sequence[float],
        min_func: Optional[BlendFunc] = None,
    ) -> None:
        self.child = _require(child, "child")
        self.num = tuple(int(n) for n in num)
        if len(self.num) != 3 or min(self.num) <= 0:
            raise InvalidParameter(f"array counts must be three positive integers, got {num}")
        self.step = np.array(step, dtype=float)
        self._min = min_func or np.minimum
        nx, ny, nz = self.num
        self._offsets = [
            self.step * (i, j, k)
            for i in range(nx)
            for j in range(ny)
            for k in range(nz)
        ]

        def _sdf(p: _Array) -> _Array:
            d = self.child.sdf(p)
            for ofs in self._offsets[1:]:
                d = self._min(d, self.child.sdf(p - ofs))
            return d

        bb = self.child.bounding_box()
        last = self.step * (np.array(self.num) - 1)
        self._child_bb = bb.extend(bb.translate(last))
        super().__init__(_sdf, _blended_box(self._child_bb, self._min))

    def set_min(self, min_func: BlendFunc) -> None:
        """Replace the blend function. Not safe while another thread evaluates."""
        self._min = min_func
        self._bb = _blended_box(self._child_bb, min_func)


class RotateUnion3D(Geometry3D):
    """Union of *num* copies of *child*, each one *step* further on.

    *step* is normally a rotation about Z but any affine matrix works.
    The box follows the child's corners through each step, grown by the
    blend's margin.
    """

    def __init__(
        self,
        child: Geometry3D,
        num: int,
        step: Mat4,
        min_func: Optional[BlendFunc] = None,
    ) -> None:
        self.child = _require(child, "child")
        if num <= 0:
            raise InvalidParameter(f"copy count must be > 0, got {num}")
        self.num = int(num)
        self._min = min_func or np.minimum
        inv = step.inverse()
        rots = [Mat4.identity()]
        for _ in range(self.num - 1):
            rots.append(rots[-1] @ inv)
        self._rotations = rots

        def _sdf(p: _Array) -> _Array:
            d = self.child.sdf(p)
            for rot in self._rotations[1:]:
                d = self._min(d, self.child.sdf(rot.mul_position(p)))
            return d

        v = self.child.bounding_box().vertices()
        lo, hi = v.min(axis=0), v.max(axis=0)
        for _ in range(self.num):
            lo = np.minimum(lo, v.min(axis=0))
            hi = np.maximum(hi, v.max(axis=0))
            v = step.mul_position(v)
        self._child_bb = AABB(lo, hi)
        super().__init__(_sdf, _blended_box(self._child_bb, self._min))

    def set_min(self, min_func: BlendFunc) -> None:
        """Replace the blend function. Not safe while another thread evaluates."""
        self._min = min_func
        self._bb = _blended_box(self._child_bb, min_func)


class RotateCopy3D(Geometry3D):
    """*num* copies of *child* evenly rotated about the Z axis.

    Each query point is folded into the first sector of angle
    ``2*pi/num`` so the child is evaluated once, whatever *num* is. This is
    only right when the copies do not overlap and no blending is wanted;
    use :class:`RotateUnion3D` otherwise.
    """

    def __init__(self, child: Geometry3D, num: int) -> None:
        self.child = _require(child, "child")
        if num <= 0:
            raise InvalidParameter(f"copy count must be > 0, got {num}")
        self.num = int(num)
        self.theta = TAU / self.num

        def _sdf(p: _Array) -> _Array:
            r = np.hypot(p[..., 0], p[..., 1])
            a = sdf.saw_tooth(np.arctan2(p[..., 1], p[..., 0]), self.theta)
            return self.child.sdf(sdf.vec3(r * np.cos(a), r * np.sin(a), p[..., 2]))

        # TODO: use the child's true extent rather than its box corners
        bb = self.child.bounding_box()
        v = bb.vertices()
        rmax = float(np.max(np.hypot(v[:, 0], v[:, 1])))
        super().__init__(_sdf, AABB((-rmax, -rmax, bb.min[2]), (rmax, rmax, bb.max[2])))


# ===========================================================================
# Factories
# ===========================================================================

def array3d(
    child: Optional[Geometry3D],
    num: Sequence[int],
    step: Sequence[float],
    min_func: Optional[BlendFunc] = None,
) -> Optional[Geometry3D]:
    """:class:`Array3D`, or ``None`` if any count is not positive."""
    if child is None or min(num) <= 0:
        logger.debug("array3d with counts %s has no geometry", tuple(num))
        return None
    return Array3D(child, num, step, min_func=min_func)


def rotate_union(
    child: Optional[Geometry3D],
    num: int,
    step: Mat4,
    min_func: Optional[BlendFunc] = None,
) -> Optional[Geometry3D]:
    """:class:`RotateUnion3D`, or ``None`` if *num* is not positive."""
    if child is None or num <= 0:
        logger.debug("rotate_union with %d copies has no geometry", num)
        return None
    return RotateUnion3D(child, num, step, min_func=min_func)


def rotate_copy(child: Optional[Geometry3D], num: int) -> Optional[Geometry3D]:
    """:class:`RotateCopy3D`, or ``None`` if *num* is not positive."""
    if child is None or num <= 0:
        logger.debug("rotate_copy with %d copies has no geometry", num)
        return None
    return RotateCopy3D(child, num)


def line_of(
    child: Optional[Geometry3D],
    p0: Sequence[float],
    p1: Sequence[float],
    pattern: str,
) -> Optional[Geometry3D]:
    """Copies of *child* along the segment *p0* to *p1*.

    The segment is split into ``len(pattern)`` equal steps and a copy is
    placed at the start of every step whose character is ``'x'``, e.g.
    ``"xx.x"``.
    """
    if child is None or not pattern:
        return None
    start = np.array(p0, dtype=float)
    dx = (np.array(p1, dtype=float) - start) / len(pattern)
    copies = [
        Transform3D(child, Mat4.translate(start + i * dx))
        for i, c in enumerate(pattern)
        if c == "x"
    ]
    return union(*copies)


def multi(child: Optional[Geometry3D], positions: Sequence[Sequence[float]]) -> Optional[Geometry3D]:
    """Union of copies of *child* translated to each of *positions*."""
    if child is None or len(positions) == 0:
        return None
    return union(*(Transform3D(child, Mat4.translate(p)) for p in positions))


def orient(
    child: Optional[Geometry3D],
    base: Sequence[float],
    directions: Sequence[Sequence[float]],
) -> Optional[Geometry3D]:
    """Union of copies of *child* rotated so that *base* points along each of *directions*."""
    if child is None or len(directions) == 0:
        return None
    return union(*(Transform3D(child, Mat4.rotate_to_vector(base, d)) for d in directions))
