"""2-D distance kernels behind the profile2d shapes.

Shared helpers from :mod:`_sdf_common` are re-exported so that the shape
classes need a single import. Kernels take ``(..., 2)`` point arrays and
return ``(...)`` distances, negative inside.

Circle and rounded box follow Inigo Quilez's 2-D reference:
https://iquilezles.org/articles/distfunctions2d/
"""

from __future__ import annotations

import numpy as np

from _sdf_common import *  # noqa: F401, F403  — re-export shared helpers


def sdCircle(p: _F, r: float) -> _F:
    """Circle of radius *r* about the origin."""
    return length(p) - r


def sdRoundedBox2D(p: _F, b: _F, r: float) -> _F:
    """Box with half-extents *b* whose corners are rounded by *r* (``r = 0`` is sharp)."""
    q = np.abs(p) - b + r
    outside = length(np.maximum(q, 0.0))
    inside = np.minimum(np.max(q, axis=-1), 0.0)
    return outside + inside - r


def sdPolygon2D(p: _F, v: _F) -> _F:
    """Closed polygon through the ``(N, 2)`` vertices *v*, either winding.

    The magnitude is the distance to the nearest edge; the sign comes from
    an even-odd count of edges crossed by a ray towards +x.
    """
    a = v
    b = np.roll(v, -1, axis=0)
    e = b - a                                   # (N, 2)
    w = p[..., None, :] - a                     # (..., N, 2)
    t = clamp(dot(w, e) / dot2(e), 0.0, 1.0)
    d = np.sqrt(np.min(dot2(w - e * t[..., None]), axis=-1))

    py = p[..., None, 1]
    straddles = (a[:, 1] > py) != (b[:, 1] > py)
    dy = np.where(e[:, 1] == 0.0, 1.0, e[:, 1])
    x_cross = a[:, 0] + e[:, 0] * (py - a[:, 1]) / dy
    crossings = np.sum(straddles & (p[..., None, 0] < x_cross), axis=-1)
    return np.where(crossings % 2 == 1, -d, d)
