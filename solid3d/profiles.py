"""3D solids built from 2D profiles: revolutions, extrusions and lofts.

Profiles are any objects with ``sdf(p)`` over ``(..., 2)`` points and
``bounding_box()`` (see :class:`profile2d.SDF2`). They are treated as
opaque and possibly inexact: the solids here are correctly signed but only
as exact as their profile.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np
import numpy.typing as npt

from _sdf_common import AABB, PI, TAU, InvalidParameter
from profile2d import SDF2
from . import sdf_lib as sdf
from .geometry import Geometry3D

logger = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
ExtrudeFunc = Callable[[_Array], _Array]


def _require_profile(profile: Optional[SDF2], name: str = "profile") -> SDF2:
    if profile is None:
        raise InvalidParameter(f"{name} is None")
    return profile


# ===========================================================================
# Revolution
# ===========================================================================

class Revolve3D(Geometry3D):
    """Solid of revolution of *profile* about the Z axis.

    The profile's x coordinate is the distance from the axis and its y
    coordinate is z. A non-zero *theta* (radians, taken as
    ``|theta| mod 2*pi``) sweeps only the wedge from the +X axis
    counter-clockwise through *theta*; zero sweeps the full turn.
    """

    def __init__(self, profile: SDF2, theta: float = 0.0) -> None:
        self.profile = _require_profile(profile)
        if theta < 0:
            raise InvalidParameter(f"theta must be >= 0, got {theta}")
        self.theta = float(np.fmod(abs(theta), TAU))
        s, c = np.sin(self.theta), np.cos(self.theta)
        # normal to the theta line
        self._norm = np.array([-s, c])

        def _sdf(p: _Array) -> _Array:
            q = sdf.vec2(np.hypot(p[..., 0], p[..., 1]), p[..., 2])
            a = self.profile.sdf(q)
            if self.theta == 0.0:
                return a
            d = p[..., 0] * self._norm[0] + p[..., 1] * self._norm[1]
            if self.theta < PI:
                b = np.maximum(-p[..., 1], d)
            else:
                b = np.minimum(-p[..., 1], d)
            return np.maximum(a, b)

        if self.theta == 0.0:
            vset = [(1.0, 1.0), (-1.0, -1.0)]
        else:
            vset = [(0.0, 0.0), (1.0, 0.0), (c, s)]
            if self.theta > 0.5 * PI:
                vset.append((0.0, 1.0))
            if self.theta > PI:
                vset.append((-1.0, 0.0))
            if self.theta > 1.5 * PI:
                vset.append((0.0, -1.0))
        vset = np.array(vset)
        pb = self.profile.bounding_box()
        l = max(abs(pb.min[0]), abs(pb.max[0]))
        vmin = l * vset.min(axis=0)
        vmax = l * vset.max(axis=0)
        super().__init__(
            _sdf,
            AABB((vmin[0], vmin[1], pb.min[1]), (vmax[0], vmax[1], pb.max[1])),
        )


def revolve(profile: Optional[SDF2], theta: float = 0.0) -> Optional[Geometry3D]:
    """:class:`Revolve3D`, or ``None`` when there is no profile."""
    if profile is None:
        logger.debug("revolve without a profile has no geometry")
        return None
    return Revolve3D(profile, theta)


# ===========================================================================
# Extrusion functions
# ===========================================================================

def normal_extrude(p: _Array) -> _Array:
    """Straight extrusion: drop z."""
    return p[..., :2]


def _rotate2d(q: _Array, angle: _Array) -> _Array:
    c, s = np.cos(angle), np.sin(angle)
    return sdf.vec2(c * q[..., 0] - s * q[..., 1], s * q[..., 0] + c * q[..., 1])


def _scale_factors(height: float, scale: _Array) -> tuple:
    # factor is 1 at z = -height/2 and 1/scale at z = +height/2
    inv = 1.0 / scale
    return (inv - 1.0) / height, 0.5 * inv + 0.5


def twist_extrude(height: float, twist: float) -> ExtrudeFunc:
    """Rotate the profile by *twist* radians over *height*."""
    k = twist / height

    def _extrude(p: _Array) -> _Array:
        return _rotate2d(p[..., :2], p[..., 2] * k)

    return _extrude


def scale_extrude(height: float, scale: Sequence[float]) -> ExtrudeFunc:
    """Scale the profile from 1 at the bottom to *scale* at the top."""
    m, b = _scale_factors(height, np.asarray(scale, dtype=float))

    def _extrude(p: _Array) -> _Array:
        return p[..., :2] * (p[..., 2, None] * m + b)

    return _extrude


def scale_twist_extrude(height: float, twist: float, scale: Sequence[float]) -> ExtrudeFunc:
    """Scale, then twist, the profile over *height*."""
    k = twist / height
    m, b = _scale_factors(height, np.asarray(scale, dtype=float))

    def _extrude(p: _Array) -> _Array:
        q = p[..., :2] * (p[..., 2, None] * m + b)
        return _rotate2d(q, p[..., 2] * k)

    return _extrude


# ===========================================================================
# Extrusions
# ===========================================================================

class Extrude3D(Geometry3D):
    """Extrude *profile* along Z over *height*, centred at origin.

    Each point is projected to the profile plane by the *extrude* function
    and the profile distance is intersected with the slab
    ``|z| <= height/2``. A custom *extrude* keeps the profile's box, so it
    must not move the shape outside it.
    """

    def __init__(
        self,
        profile: SDF2,
        height: float,
        extrude: ExtrudeFunc = normal_extrude,
        *,
        xy_box: Optional[AABB] = None,
    ) -> None:
        self.profile = _require_profile(profile)
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        self.height = 0.5 * height
        self._extrude = extrude

        def _sdf(p: _Array) -> _Array:
            a = self.profile.sdf(self._extrude(p))
            b = np.abs(p[..., 2]) - self.height
            return np.maximum(a, b)

        bb = xy_box if xy_box is not None else self.profile.bounding_box()
        super().__init__(
            _sdf,
            AABB((bb.min[0], bb.min[1], -self.height), (bb.max[0], bb.max[1], self.height)),
        )

    def set_extrude(self, extrude: ExtrudeFunc) -> None:
        """Replace the projection function. Not safe while another thread evaluates."""
        self._extrude = extrude


def _radius_box(bb: AABB) -> AABB:
    # any rotation about the origin stays inside this square
    l = float(np.max(sdf.length(bb.vertices())))
    return AABB((-l, -l), (l, l))


def _check_scale(scale: Sequence[float]) -> _Array:
    s = np.array(scale, dtype=float)
    if s.shape != (2,) or np.any(s <= 0):
        raise InvalidParameter(f"scale must be two positive factors, got {scale}")
    return s


class TwistExtrude3D(Extrude3D):
    """Extrude *profile* while rotating it by *twist* radians over *height*."""

    def __init__(self, profile: SDF2, height: float, twist: float) -> None:
        profile = _require_profile(profile)
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        super().__init__(
            profile,
            height,
            twist_extrude(height, twist),
            xy_box=_radius_box(profile.bounding_box()),
        )


class ScaleExtrude3D(Extrude3D):
    """Extrude *profile* while scaling it to *scale* ``(sx, sy)`` at the top."""

    def __init__(self, profile: SDF2, height: float, scale: Sequence[float]) -> None:
        profile = _require_profile(profile)
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        s = _check_scale(scale)
        bb = profile.bounding_box()
        bb = bb.extend(AABB(bb.min * s, bb.max * s))
        super().__init__(profile, height, scale_extrude(height, s), xy_box=bb)


class ScaleTwistExtrude3D(Extrude3D):
    """Extrude *profile* while scaling it to *scale* and twisting it by *twist*."""

    def __init__(
        self,
        profile: SDF2,
        height: float,
        twist: float,
        scale: Sequence[float],
    ) -> None:
        profile = _require_profile(profile)
        if height <= 0:
            raise InvalidParameter(f"height must be > 0, got {height}")
        s = _check_scale(scale)
        bb = profile.bounding_box()
        bb = bb.extend(AABB(bb.min * s, bb.max * s))
        super().__init__(
            profile,
            height,
            scale_twist_extrude(height, twist, s),
            xy_box=_radius_box(bb),
        )


# ===========================================================================
# Rounded extrusion and loft
# ===========================================================================

def _round_join(a: _Array, b: _Array) -> _Array:
    """Combine profile distance *a* and slab distance *b* with rounded edges.

    Outside the slab the distance is the slab distance over the profile
    and the Euclidean combination beside it; inside the slab it is the
    profile distance beside the profile and the plain intersection within.
    """
    outside_slab = np.where(a < 0.0, b, np.hypot(a, b))
    inside_slab = np.where(a < 0.0, np.maximum(a, b), a)
    return np.where(b > 0.0, outside_slab, inside_slab)


def _check_rounded(height: float, round: float) -> None:
    if height <= 0:
        raise InvalidParameter(f"height must be > 0, got {height}")
    if round < 0:
        raise InvalidParameter(f"round must be >= 0, got {round}")
    if height < 2.0 * round:
        raise InvalidParameter(f"height {height} is less than 2 * round ({2.0 * round})")


class ExtrudeRounded3D(Geometry3D):
    """Straight extrusion of *profile* with edges rounded by *round*.

    The overall height includes the rounding; the profile itself is not
    inset, so the solid is *round* wider than the profile on every side.
    """

    def __init__(self, profile: SDF2, height: float, round: float) -> None:
        self.profile = _require_profile(profile)
        _check_rounded(height, round)
        self.height = 0.5 * height - round
        self.round = float(round)

        def _sdf(p: _Array) -> _Array:
            a = self.profile.sdf(p[..., :2])
            b = np.abs(p[..., 2]) - self.height
            return _round_join(a, b) - self.round

        bb = self.profile.bounding_box()
        super().__init__(
            _sdf,
            AABB(
                (bb.min[0] - round, bb.min[1] - round, -self.height - round),
                (bb.max[0] + round, bb.max[1] + round, self.height + round),
            ),
        )


class Loft3D(Geometry3D):
    """Blend from *profile0* at the bottom to *profile1* at the top.

    The two profile distances are mixed linearly in z and then joined with
    the slab as in :class:`ExtrudeRounded3D`.
    """

    def __init__(self, profile0: SDF2, profile1: SDF2, height: float, round: float = 0.0) -> None:
        self.profile0 = _require_profile(profile0, "profile0")
        self.profile1 = _require_profile(profile1, "profile1")
        _check_rounded(height, round)
        self.height = 0.5 * height - round
        self.round = float(round)

        def _sdf(p: _Array) -> _Array:
            q = p[..., :2]
            if self.height > 0.0:
                k = sdf.clamp(0.5 * p[..., 2] / self.height + 0.5, 0.0, 1.0)
            else:
                k = np.where(p[..., 2] > 0.0, 1.0, 0.0)
            a = sdf.mix(self.profile0.sdf(q), self.profile1.sdf(q), k)
            b = np.abs(p[..., 2]) - self.height
            return _round_join(a, b) - self.round

        bb = self.profile0.bounding_box().extend(self.profile1.bounding_box())
        super().__init__(
            _sdf,
            AABB(
                (bb.min[0] - round, bb.min[1] - round, -self.height - round),
                (bb.max[0] + round, bb.max[1] + round, self.height + round),
            ),
        )
