"""Parametric rocket assembly geometry.

Usage::

    from solid3d.examples import RocketAssembly

    rocket = RocketAssembly(body_radius=0.15, n_fins=3)
    phi = sample_levelset_3d(rocket, None, (64, 64, 64))
"""

from __future__ import annotations

from solid3d.blend import poly_min
from solid3d.geometry import Box3D, Cone3D, Geometry3D, Sphere3D
from solid3d.operations import union
from solid3d.replication import rotate_copy


def RocketAssembly(
    body_radius: float = 0.15,
    L_extra: float = 0.40,
    nose_len: float = 0.25,
    fin_span: float = 0.12,
    fin_height: float = 0.18,
    fin_thickness: float = 0.03,
    n_fins: int = 4,
    fillet: float = 0.0,
) -> Geometry3D:
    """Build a parametric rocket assembly standing on the Z axis.

    The rocket consists of:

    * A capsule body: a sphere elongated along Z.
    * A nose cone sitting on top of the body.
    * *n_fins* rectangular fins arranged radially around the body base,
      placed with a single rotational copy.

    Parameters
    ----------
    body_radius:
        Sphere radius of the body capsule (m).
    L_extra:
        Elongation length added to the body along Z (m).
    nose_len:
        Length of the nose cone (m).
    fin_span:
        Radial span of each fin (m).
    fin_height:
        Axial height of each fin (m).
    fin_thickness:
        Thickness of each fin (m).
    n_fins:
        Number of fins (default 4, zero for none).
    fillet:
        Blend radius where body, nose and fins meet; zero keeps sharp seams.

    Returns
    -------
    Geometry3D
        The assembled rocket.
    """
    R = body_radius

    body = Sphere3D(R).elongate(0.0, 0.0, L_extra)

    z_body_top = (L_extra / 2.0) + R
    nose = Cone3D(nose_len, R, 0.0).translate(0.0, 0.0, z_body_top + nose_len / 2.0)

    z_fin_center = -L_extra / 2.0
    fin = Box3D((fin_span, fin_thickness, fin_height)).translate(
        R + fin_span / 2.0, 0.0, z_fin_center
    )
    fins = rotate_copy(fin, n_fins)

    min_func = poly_min(fillet) if fillet > 0 else None
    return union(body, nose, fins, min_func=min_func)
