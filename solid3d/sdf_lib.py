"""3-D SDF numeric kernels for the solid3d package.

Re-exports the shared helpers from :mod:`_sdf_common`, then adds the
distance kernels whose case splits the primitive classes rely on.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions. A "point array" *p*
has shape ``(..., 3)`` (or ``(..., 2)`` for the half-plane kernels);
scalar SDF results have shape ``(...,)``.
"""

import numpy as np

from _sdf_common import *  # noqa: F401, F403  — re-export shared helpers


# ===========================================================================
# Boxes
# ===========================================================================

def sdBox3D(p: _F, s: _F) -> _F:
    """Exact box with half-extents *s*.

    Per point this is the 8-way split on which axes exceed the half-extent:
    the Euclidean norm of the positive penetrations (face, edge or corner
    distance) when any axis is outside, otherwise the largest (least
    negative) axis penetration.
    """
    d = np.abs(p) - s
    outside = np.any(d > 0.0, axis=-1)
    return np.where(outside, length(np.maximum(d, 0.0)), np.max(d, axis=-1))


def sdBox2D(p: _F, s: _F) -> _F:
    """Exact 2-D box with half-extents *s* ``(sx, sy)``.

    Inside the box the nearer edge is picked by comparing ``py - px``
    against ``sy - sx``.
    """
    p = np.abs(p)
    d = p - s
    k = s[1] - s[0]
    corner = (d[..., 0] > 0.0) & (d[..., 1] > 0.0)
    edge = np.where(p[..., 1] - p[..., 0] > k, d[..., 1], d[..., 0])
    return np.where(corner, length(d), edge)


# ===========================================================================
# Truncated cone
# ===========================================================================

def sdCone(
    p: _F,
    r0: float,
    r1: float,
    h: float,
    u: _F,
    n: _F,
    slope_len: float,
) -> _F:
    """Exact truncated cone about Z, unrounded core.

    Parameters
    ----------
    p:
        ``(..., 3)`` query points.
    r0, r1:
        Base and top radii of the (already inset) core.
    h:
        Half height of the core.
    u, n:
        Unit slope direction (base rim to top rim) and its outward normal
        in ``(radial, axial)`` coordinates.
    slope_len:
        Length of the slope segment between the two rims.
    """
    x = np.hypot(p[..., 0], p[..., 1])
    y = p[..., 2]

    vx = x - r0
    vy = y + h
    d_slope = vx * n[0] + vy * n[1]
    t = vx * u[0] + vy * u[1]

    above = (y >= h) & (x <= r1)
    below = (y <= -h) & (x <= r0)
    inside = (d_slope < 0.0) & (np.abs(y) < h)
    on_slope = (t >= 0.0) & (t <= slope_len)
    near_base = t < 0.0

    return np.select(
        [above, below, inside, on_slope, near_base],
        [
            y - h,
            -y - h,
            -np.minimum(-d_slope, h - np.abs(y)),
            d_slope,
            np.hypot(vx, vy),
        ],
        default=np.hypot(x - r1, y - h),
    )
