"""
solid3d — 3D Signed Distance Function Algebra
=============================================

A library for describing solids implicitly as signed distance fields
(negative inside, zero on the surface, positive outside) and composing
them into arbitrarily nested trees. Every node exposes ``sdf(p)`` over
``(..., 3)`` point arrays and a ``bounding_box()`` computed once at
construction.

Implemented features
--------------------
- Primitive shapes: Box, Sphere, Cylinder, Capsule, truncated Cone
- Profile solids: Revolve, Extrude (linear, twisted, scaled), rounded
  Extrude, Loft, from :mod:`profile2d` shapes or any ``SDF2``
- Boolean operations: Union, Difference, Intersection with pluggable
  blend functions (:mod:`solid3d.blend`)
- Transforms: affine ``Transform3D`` (:class:`Mat4`), exact uniform scale
- Modifiers: offset, shell, elongate, planar cut
- Replication: 3-D array, rotate-union, rotate-copy, line/multi/orient
- Grid sampling: :func:`sample_levelset_3d`
- Example assembly: :func:`~solid3d.examples.RocketAssembly`

Quick start
-----------

::

    from solid3d import Sphere3D, Box3D, union, sample_levelset_3d

    sphere = Sphere3D(radius=0.3)
    box    = Box3D(size=(0.4, 0.4, 0.4)).translate(0.4, 0.0, 0.0)
    shape  = union(sphere, box)

    phi = sample_levelset_3d(shape, None, (64, 64, 64))

Construction failures raise :class:`InvalidParameter`. The lower-case
factories return ``None`` for "no geometry", which the other factories
treat as contributing nothing.
"""

import logging

from _sdf_common import AABB, InvalidParameter, PI, TAU

from .matrix import Mat4
from .blend import BlendFunc, poly_min, poly_max, exp_min, round_min, chamfer_min, blend_margin
from .geometry import (
    Geometry3D,
    Box3D,
    Sphere3D,
    Cylinder3D,
    Capsule3D,
    Cone3D,
)
from .operations import (
    Union3D,
    Difference3D,
    Intersection3D,
    Transform3D,
    ScaleUniform3D,
    Offset3D,
    Shell3D,
    Elongate3D,
    Cut3D,
    union,
    difference,
    intersect,
)
from .replication import (
    Array3D,
    RotateUnion3D,
    RotateCopy3D,
    array3d,
    rotate_union,
    rotate_copy,
    line_of,
    multi,
    orient,
)
from .profiles import (
    Revolve3D,
    Extrude3D,
    TwistExtrude3D,
    ScaleExtrude3D,
    ScaleTwistExtrude3D,
    ExtrudeRounded3D,
    Loft3D,
    revolve,
    normal_extrude,
    twist_extrude,
    scale_extrude,
    scale_twist_extrude,
)
from .grid import sample_levelset_3d, bounds_from_box, save_npy
from .examples import RocketAssembly

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.3.0"

__all__ = [
    # Values and errors
    "AABB",
    "Mat4",
    "InvalidParameter",
    "PI",
    "TAU",

    # Base
    "Geometry3D",

    # Primitives
    "Box3D",
    "Sphere3D",
    "Cylinder3D",
    "Capsule3D",
    "Cone3D",

    # Boolean operations
    "Union3D",
    "Difference3D",
    "Intersection3D",
    "union",
    "difference",
    "intersect",

    # Blend functions
    "BlendFunc",
    "poly_min",
    "poly_max",
    "exp_min",
    "round_min",
    "chamfer_min",
    "blend_margin",

    # Transforms and modifiers
    "Transform3D",
    "ScaleUniform3D",
    "Offset3D",
    "Shell3D",
    "Elongate3D",
    "Cut3D",

    # Replication
    "Array3D",
    "RotateUnion3D",
    "RotateCopy3D",
    "array3d",
    "rotate_union",
    "rotate_copy",
    "line_of",
    "multi",
    "orient",

    # Profile solids
    "Revolve3D",
    "Extrude3D",
    "TwistExtrude3D",
    "ScaleExtrude3D",
    "ScaleTwistExtrude3D",
    "ExtrudeRounded3D",
    "Loft3D",
    "revolve",
    "normal_extrude",
    "twist_extrude",
    "scale_extrude",
    "scale_twist_extrude",

    # Grid utilities
    "sample_levelset_3d",
    "bounds_from_box",
    "save_npy",

    # Complex assemblies
    "RocketAssembly",
]
