"""
profile2d — 2D profiles for 3D solids
=====================================

Small set of 2D signed distance fields with bounding boxes, used as the
cross-sections of :mod:`solid3d` revolutions, extrusions and lofts.
Any object with ``sdf(p)`` and ``bounding_box()`` (see :class:`SDF2`)
can stand in for these.

Implemented features
--------------------
- Primitive shapes: Circle, Box (optionally rounded), Polygon
- Boolean operations: Union
- Transforms: translate

Quick start
-----------

::

    from profile2d import Circle2D
    from solid3d import Revolve3D

    ring  = Circle2D(radius=0.1).translate(0.5, 0.0)
    torus = Revolve3D(ring)
"""

from _sdf_common import AABB, InvalidParameter

from .geometry import (
    SDF2,
    Geometry2D,
    Circle2D,
    Box2D,
    Polygon2D,
    Union2D,
)

__all__ = [
    "AABB",
    "InvalidParameter",
    "SDF2",
    "Geometry2D",
    "Circle2D",
    "Box2D",
    "Polygon2D",
    "Union2D",
]
