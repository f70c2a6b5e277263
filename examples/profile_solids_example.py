"""Solids built from 2D profiles.

Demonstrates: Revolve3D (partial sweep), TwistExtrude3D, Loft3D,
              union of profile solids
Output:       examples/profile_solids_example.png

Checks:
    3/4 torus: the swept-out quadrant is empty
    twisted bar: every slice has the profile's area
"""
import os

import numpy as np

from profile2d import Box2D, Circle2D, Polygon2D
from solid3d import Loft3D, Revolve3D, TwistExtrude3D, sample_levelset_3d, union

_BOUNDS = ((-1.2, 1.2), (-1.2, 1.2), (-1.2, 1.2))
_RES    = (64, 64, 64)
_OUT    = os.path.join(os.path.dirname(__file__), "profile_solids_example.png")


def _render_png(phi, out_path, title=""):
    try:
        import matplotlib.pyplot as plt
        from mpl_toolkits.mplot3d.art3d import Poly3DCollection
        from skimage import measure
    except ImportError:
        print("  scikit-image / matplotlib not available — skipping PNG")
        return

    lo = _BOUNDS[0][0]
    spacing = (_BOUNDS[0][1] - lo) / phi.shape[0]
    if phi.min() >= 0 or phi.max() <= 0:
        print("  No zero crossing — cannot render isosurface.")
        return

    verts, faces, _, _ = measure.marching_cubes(phi, level=0, spacing=(spacing,) * 3)
    verts = (verts + lo)[:, ::-1]

    tris  = verts[faces]
    norms = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    nlen  = np.linalg.norm(norms, axis=1, keepdims=True)
    norms = norms / np.where(nlen > 0, nlen, 1.0)
    shade = 0.3 + 0.7 * np.clip(np.abs(norms @ np.array([0.577, 0.577, 0.577])), 0, 1)
    fc    = np.column_stack([shade * 0.3, shade * 0.6, shade * 0.9, np.ones_like(shade)])

    fig = plt.figure(figsize=(5, 5), facecolor="#111")
    ax  = fig.add_subplot(111, projection="3d")
    ax.set_facecolor("#111"); ax.set_axis_off(); ax.set_box_aspect([1, 1, 1])
    ax.add_collection3d(Poly3DCollection(tris, facecolors=fc, edgecolors="none"))
    hi = _BOUNDS[0][1]
    ax.set_xlim(lo, hi); ax.set_ylim(lo, hi); ax.set_zlim(lo, hi)
    ax.set_title(title, color="white", fontsize=10)
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    print("=" * 60)
    print("PROFILE SOLIDS")
    print("  3/4 torus      : circle r=0.12 at x=0.8, swept 270 deg")
    print("  twisted bar    : 0.5 x 0.15 rectangle, 1.0 high, 90 deg twist")
    print("  loft           : triangle to circle, 0.6 high")
    print("=" * 60)

    torus = Revolve3D(Circle2D(0.12).translate(0.8, 0.0), 1.5 * np.pi)
    bar   = TwistExtrude3D(Box2D((0.5, 0.15)), 1.0, 0.5 * np.pi)
    tri   = Polygon2D([(-0.25, -0.2), (0.25, -0.2), (0.0, 0.25)])
    loft  = Loft3D(tri, Circle2D(0.15), 0.6, 0.05)
    geom  = union(torus, bar.translate(0.0, 0.0, 0.5), loft.translate(0.0, 0.0, -0.6))

    phi = sample_levelset_3d(geom, _BOUNDS, _RES)
    print(f"\nSDF range : [{phi.min():.4f}, {phi.max():.4f}]")

    # --- the fourth quadrant of the torus is not swept ---
    p = np.array([[0.8 / np.sqrt(2.0), -0.8 / np.sqrt(2.0), 0.0]])
    d_gap = float(torus.sdf(p)[0])
    print(f"torus at the unswept quadrant = {d_gap:.4f}  (should be > 0)")

    # --- twisting keeps the cross-section area ---
    n = 201
    lin = np.linspace(-0.5, 0.5, n)
    Y, X = np.meshgrid(lin, lin, indexing="ij")
    cell = (lin[1] - lin[0]) ** 2
    areas = []
    for z in (-0.4, 0.0, 0.4):
        pts = np.stack([X, Y, np.full_like(X, z)], axis=-1)
        areas.append(float((bar.sdf(pts) <= 0).sum() * cell))
    print("slice areas   = " + ", ".join(f"{a:.4f}" for a in areas) + "  (profile 0.0750)")

    ok = d_gap > 0 and max(abs(a - 0.075) for a in areas) < 0.005 and phi.min() < 0
    print("\n" + ("PASSED PASSED" if ok else "FAILED FAILED"))

    _render_png(phi, _OUT, "Revolve / TwistExtrude / Loft")


if __name__ == "__main__":
    main()
