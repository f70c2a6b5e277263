"""Boolean and geometric combinators for 3D signed distance functions.

Node classes validate their arguments and raise :class:`InvalidParameter`.
The lower-case factories :func:`union`, :func:`difference` and
:func:`intersect` accept ``None`` operands ("no geometry") and propagate
them instead of raising, so that composing with nothing is a no-op.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, InvalidParameter
from . import sdf_lib as sdf
from .blend import BlendFunc, blend_margin
from .geometry import Geometry3D
from .matrix import Mat4

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


def _require(node: Optional[Geometry3D], name: str) -> Geometry3D:
    if node is None:
        raise InvalidParameter(f"{name} is None")
    return node


def _blended_box(bb: AABB, min_func: Optional[BlendFunc]) -> AABB:
    m = blend_margin(min_func)
    if m > 0.0:
        logger.debug("growing union box by blend margin %g", m)
    return bb.enlarge((2.0 * m,) * 3)


# ===========================================================================
# Boolean operation classes
# ===========================================================================

class Union3D(Geometry3D):
    """Union of one or more 3-D geometries.

    Operands are folded left to right with the blend function (``min`` by
    default). ``None`` operands are dropped. The box is the union of the
    operand boxes, grown by the blend's margin.
    """

    def __init__(self, *geoms: Optional[Geometry3D], min_func: Optional[BlendFunc] = None) -> None:
        self.children = [g for g in geoms if g is not None]
        if not self.children:
            raise InvalidParameter("Union3D needs at least one geometry")
        self._min = min_func or np.minimum

        def _sdf(p: _Array) -> _Array:
            d = self.children[0].sdf(p)
            for g in self.children[1:]:
                d = self._min(d, g.sdf(p))
            return d

        self._child_bb = AABB.union_of(g.bounding_box() for g in self.children)
        super().__init__(_sdf, _blended_box(self._child_bb, self._min))

    def set_min(self, min_func: BlendFunc) -> None:
        """Replace the blend function. Not safe while another thread evaluates."""
        self._min = min_func
        self._bb = _blended_box(self._child_bb, min_func)


class Difference3D(Geometry3D):
    """Subtract *cutter* from *base*: ``max(base, -cutter)``.

    The box is the base's box.
    """

    def __init__(
        self,
        base: Geometry3D,
        cutter: Geometry3D,
        max_func: Optional[BlendFunc] = None,
    ) -> None:
        self.base = _require(base, "base")
        self.cutter = _require(cutter, "cutter")
        self._max = max_func or np.maximum
        super().__init__(
            lambda p: self._max(self.base.sdf(p), -self.cutter.sdf(p)),
            self.base.bounding_box(),
        )

    def set_max(self, max_func: BlendFunc) -> None:
        """Replace the blend function. Not safe while another thread evaluates."""
        self._max = max_func


class Intersection3D(Geometry3D):
    """Intersection of two 3-D geometries: ``max(a, b)``.

    The box is the first operand's box, which over-approximates the
    intersection but never cuts into it.
    """

    def __init__(
        self,
        a: Geometry3D,
        b: Geometry3D,
        max_func: Optional[BlendFunc] = None,
    ) -> None:
        self.a = _require(a, "a")
        self.b = _require(b, "b")
        self._max = max_func or np.maximum
        super().__init__(
            lambda p: self._max(self.a.sdf(p), self.b.sdf(p)),
            self.a.bounding_box(),
        )

    def set_max(self, max_func: BlendFunc) -> None:
        """Replace the blend function. Not safe while another thread evaluates."""
        self._max = max_func


def union(*geoms: Optional[Geometry3D], min_func: Optional[BlendFunc] = None) -> Optional[Geometry3D]:
    """Union of *geoms*, ignoring ``None``.

    Returns ``None`` when nothing is left and the sole operand itself when
    only one is left.
    """
    children = [g for g in geoms if g is not None]
    if not children:
        logger.debug("union of %d operands has no geometry", len(geoms))
        return None
    if len(children) == 1:
        logger.debug("union of a single operand returns it unwrapped")
        return children[0]
    return Union3D(*children, min_func=min_func)


def difference(
    base: Optional[Geometry3D],
    cutter: Optional[Geometry3D],
    max_func: Optional[BlendFunc] = None,
) -> Optional[Geometry3D]:
    """``base - cutter``; a ``None`` cutter returns *base* unchanged."""
    if cutter is None:
        return base
    if base is None:
        logger.debug("difference with no base geometry")
        return None
    return Difference3D(base, cutter, max_func=max_func)


def intersect(
    a: Optional[Geometry3D],
    b: Optional[Geometry3D],
    max_func: Optional[BlendFunc] = None,
) -> Optional[Geometry3D]:
    """Intersection of *a* and *b*; ``None`` if either is ``None``."""
    if a is None or b is None:
        logger.debug("intersection with missing operand has no geometry")
        return None
    return Intersection3D(a, b, max_func=max_func)


# ===========================================================================
# Transforms
# ===========================================================================

class Transform3D(Geometry3D):
    """Apply an affine *matrix* to *child*.

    Query points are mapped through the precomputed inverse before the
    child is evaluated; the box is the box around the child's transformed
    corners. Distances are exact for rotations and translations only; a
    scale component is passed through without correction.

    A ``Transform3D`` of a ``Transform3D`` folds into one node holding the
    composed matrix.
    """

    def __init__(self, child: Geometry3D, matrix: Mat4) -> None:
        child = _require(child, "child")
        if isinstance(child, Transform3D):
            logger.debug("folding nested transform into a single matrix")
            matrix = matrix @ child.matrix
            child = child.child
        self.child = child
        self.matrix = matrix
        self.inverse = matrix.inverse()
        super().__init__(
            lambda p: self.child.sdf(self.inverse.mul_position(p)),
            matrix.mul_box(child.bounding_box()),
        )


class ScaleUniform3D(Geometry3D):
    """Scale *child* by *k* on all axes, keeping distances exact.

    ``d(p) = k * child(p / k)``.
    """

    def __init__(self, child: Geometry3D, k: float) -> None:
        self.child = _require(child, "child")
        if k <= 0:
            raise InvalidParameter(f"scale factor must be > 0, got {k}")
        self.k = float(k)
        self._inv_k = 1.0 / self.k
        super().__init__(
            lambda p: self.child.sdf(p * self._inv_k) * self.k,
            Mat4.scale((k, k, k)).mul_box(self.child.bounding_box()),
        )


# ===========================================================================
# Modifiers
# ===========================================================================

class Offset3D(Geometry3D):
    """Grow *child* outward by *offset* (shrink when negative): ``d - offset``."""

    def __init__(self, child: Geometry3D, offset: float) -> None:
        self.child = _require(child, "child")
        self.offset = float(offset)
        bb = self.child.bounding_box()
        size = np.maximum(bb.size() + 2.0 * self.offset, 0.0)
        super().__init__(
            lambda p: self.child.sdf(p) - self.offset,
            AABB.from_center_size(bb.center(), size),
        )


class Shell3D(Geometry3D):
    """Hollow wall of *thickness* centred on the surface of *child*: ``|d| - thickness/2``."""

    def __init__(self, child: Geometry3D, thickness: float) -> None:
        self.child = _require(child, "child")
        if thickness <= 0:
            raise InvalidParameter(f"thickness must be > 0, got {thickness}")
        self.delta = 0.5 * thickness
        super().__init__(
            lambda p: np.abs(self.child.sdf(p)) - self.delta,
            self.child.bounding_box().enlarge((thickness,) * 3),
        )


class Elongate3D(Geometry3D):
    """Stretch *child* by the total lengths *h* ``(hx, hy, hz)``.

    Points are pulled toward the origin by up to ``h/2`` per axis before
    evaluation, so the solid is split at the coordinate planes and the gap
    is bridged with straight extensions of the cross-section.
    """

    def __init__(self, child: Geometry3D, h: Sequence[float]) -> None:
        self.child = _require(child, "child")
        h = np.abs(np.array(h, dtype=float))
        if h.shape != (3,):
            raise InvalidParameter(f"elongation must have three components, got {h.shape}")
        self._hp = 0.5 * h
        self._hn = -0.5 * h
        bb = self.child.bounding_box()
        super().__init__(
            lambda p: self.child.sdf(p - sdf.clamp(p, self._hn, self._hp)),
            bb.translate(self._hp).extend(bb.translate(self._hn)),
        )


class Cut3D(Geometry3D):
    """Planar cut through *child* at *point*; the side *normal* points to remains.

    The box is the child's box, which over-approximates the cut solid.
    """

    def __init__(self, child: Geometry3D, point: Sequence[float], normal: Sequence[float]) -> None:
        self.child = _require(child, "child")
        n = np.array(normal, dtype=float)
        norm = np.linalg.norm(n)
        if n.shape != (3,) or norm == 0.0:
            raise InvalidParameter(f"cut normal must be a non-zero 3-vector, got {normal}")
        self.point = np.array(point, dtype=float)
        self._n = -n / norm
        super().__init__(
            lambda p: np.maximum(sdf.dot(p - self.point, self._n), self.child.sdf(p)),
            self.child.bounding_box(),
        )
