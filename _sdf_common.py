"""Shared SDF helpers used by both profile2d and solid3d.

This module provides:

* **Type alias**: :data:`_F`
* **Constants**: :data:`PI`, :data:`TAU`
* **Errors**: :class:`InvalidParameter`
* **Vector constructors**: :func:`vec2`, :func:`vec3`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`dot2`, :func:`clamp`,
  :func:`mix`, :func:`saw_tooth`
* **Bounding boxes**: :class:`AABB` (any dimension, used as 2-D and 3-D box)

Not meant to be imported directly by end users; import from
``profile2d`` or ``solid3d`` instead.
"""

from __future__ import annotations

import itertools
from typing import Iterable, Sequence, Union

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

PI = np.pi
TAU = 2.0 * np.pi

__all__ = [
    "_F",
    "PI", "TAU",
    "InvalidParameter",
    "vec2", "vec3",
    "length", "dot", "dot2", "clamp", "mix", "saw_tooth",
    "AABB",
]


# ===========================================================================
# Errors
# ===========================================================================

class InvalidParameter(ValueError):
    """A constructor was given a non-physical parameter."""


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


def vec3(x: _F, y: _F, z: _F) -> _F:
    """Stack *x*, *y*, *z* into a ``(..., 3)`` array."""
    x, y, z = np.broadcast_arrays(x, y, z)
    return np.stack([x, y, z], axis=-1)


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def dot2(a: _F) -> _F:
    """Squared length: ``dot(a, a)``."""
    return dot(a, a)


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def mix(x: _F, y: _F, a: float | _F) -> _F:
    """Linear interpolation ``x * (1 - a) + y * a``."""
    return x * (1.0 - a) + y * a


def saw_tooth(x: _F, period: float) -> _F:
    """Sawtooth of *period* with values in ``[-period/2, period/2)``."""
    t = (x + 0.5 * period) / period
    return period * (t - np.floor(t)) - 0.5 * period


# ===========================================================================
# Axis-aligned bounding box
# ===========================================================================

_Vec = Union[Sequence[float], _F]


class AABB:
    """Axis-aligned box given by its ``min`` and ``max`` corners.

    The same class serves as the 2-D profile box and the 3-D solid box;
    the dimension is the length of the corner vectors. Instances are
    immutable: every operation returns a new box and the corner arrays
    are read-only.
    """

    __slots__ = ("min", "max")

    def __init__(self, lo: _Vec, hi: _Vec) -> None:
        lo_arr = np.array(lo, dtype=float)
        hi_arr = np.array(hi, dtype=float)
        if lo_arr.shape != hi_arr.shape or lo_arr.ndim != 1:
            raise InvalidParameter(
                f"box corners must be vectors of equal length, got {lo_arr.shape} and {hi_arr.shape}"
            )
        lo_arr.setflags(write=False)
        hi_arr.setflags(write=False)
        self.min = lo_arr
        self.max = hi_arr

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_center_size(cls, center: _Vec, size: _Vec) -> AABB:
        """Box centred on *center* with edge lengths *size*."""
        c = np.asarray(center, dtype=float)
        half = 0.5 * np.asarray(size, dtype=float)
        return cls(c - half, c + half)

    @classmethod
    def from_points(cls, points: _F) -> AABB:
        """Smallest box containing every row of the ``(n, d)`` *points*."""
        pts = np.asarray(points, dtype=float)
        return cls(pts.min(axis=0), pts.max(axis=0))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def ndim(self) -> int:
        return self.min.shape[0]

    def size(self) -> _F:
        return self.max - self.min

    def center(self) -> _F:
        return 0.5 * (self.min + self.max)

    def vertices(self) -> _F:
        """All ``2**ndim`` corners as a ``(2**ndim, ndim)`` array."""
        corners = zip(self.min, self.max)
        return np.array(list(itertools.product(*corners)), dtype=float)

    def contains(self, p: _F, eps: float = 0.0) -> npt.NDArray[np.bool_]:
        """True where the ``(..., ndim)`` points *p* lie inside the box grown by *eps*."""
        p = np.asarray(p, dtype=float)
        inside = (p >= self.min - eps) & (p <= self.max + eps)
        return np.all(inside, axis=-1)

    def is_valid(self) -> bool:
        return bool(np.all(self.min <= self.max))

    def almost_equal(self, other: AABB, tol: float = 1e-9) -> bool:
        return bool(
            np.allclose(self.min, other.min, atol=tol)
            and np.allclose(self.max, other.max, atol=tol)
        )

    # ------------------------------------------------------------------
    # Derived boxes
    # ------------------------------------------------------------------

    def extend(self, other: AABB) -> AABB:
        """Union of this box and *other*."""
        return AABB(np.minimum(self.min, other.min), np.maximum(self.max, other.max))

    def translate(self, v: _Vec) -> AABB:
        v = np.asarray(v, dtype=float)
        return AABB(self.min + v, self.max + v)

    def enlarge(self, v: _Vec) -> AABB:
        """Grow the edge lengths by *v* (half of *v* on each side)."""
        half = 0.5 * np.asarray(v, dtype=float)
        return AABB(self.min - half, self.max + half)

    def scale(self, k: float | _Vec) -> AABB:
        """Scale the box about its centre by *k*."""
        c = self.center()
        half = 0.5 * self.size() * np.abs(np.asarray(k, dtype=float))
        return AABB(c - half, c + half)

    @staticmethod
    def union_of(boxes: Iterable[AABB]) -> AABB:
        it = iter(boxes)
        bb = next(it)
        for b in it:
            bb = bb.extend(b)
        return bb

    def __repr__(self) -> str:
        return f"AABB(min={self.min.tolist()}, max={self.max.tolist()})"
