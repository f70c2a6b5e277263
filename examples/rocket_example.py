"""Filleted rocket assembly.

Demonstrates: RocketAssembly, poly_min blending, rotate_copy, sampling
              bounds taken from the bounding box
Output:       examples/rocket_example.png

Checks:
    every sampled cell with phi <= 0 lies inside the bounding box
    filleted rocket(p) <= sharp rocket(p)
"""
import logging
import os

import numpy as np

from solid3d import RocketAssembly, bounds_from_box, sample_levelset_3d

_RES = (64, 64, 96)
_OUT = os.path.join(os.path.dirname(__file__), "rocket_example.png")


def _render_png(phi, bounds, out_path, title=""):
    try:
        import matplotlib.pyplot as plt
        from mpl_toolkits.mplot3d.art3d import Poly3DCollection
        from skimage import measure
    except ImportError:
        print("  scikit-image / matplotlib not available — skipping PNG")
        return

    if phi.min() >= 0 or phi.max() <= 0:
        print("  No zero crossing — cannot render isosurface.")
        return

    # phi is (nz, ny, nx)
    lo = np.array([b[0] for b in bounds])[::-1]
    hi = np.array([b[1] for b in bounds])[::-1]
    spacing = tuple((hi - lo) / np.array(phi.shape))
    verts, faces, _, _ = measure.marching_cubes(phi, level=0, spacing=spacing)
    verts = (verts + lo)[:, ::-1]

    tris  = verts[faces]
    norms = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    nlen  = np.linalg.norm(norms, axis=1, keepdims=True)
    norms = norms / np.where(nlen > 0, nlen, 1.0)
    shade = 0.3 + 0.7 * np.clip(norms @ np.array([0.577, 0.577, 0.577]), 0, 1)
    fc    = np.column_stack([shade * 0.8, shade * 0.8, shade * 0.85, np.ones_like(shade)])

    fig = plt.figure(figsize=(5, 6), facecolor="#111")
    ax  = fig.add_subplot(111, projection="3d")
    ax.set_facecolor("#111"); ax.set_axis_off()
    ax.add_collection3d(Poly3DCollection(tris, facecolors=fc, edgecolors="none"))
    (x0, x1), (y0, y1), (z0, z1) = bounds
    ax.set_xlim(x0, x1); ax.set_ylim(y0, y1); ax.set_zlim(z0, z1)
    ax.set_box_aspect([x1 - x0, y1 - y0, z1 - z0])
    ax.set_title(title, color="white", fontsize=10)
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("ROCKET: capsule body, nose cone, 3 fins, 2 cm fillet")
    print("=" * 60)

    sharp  = RocketAssembly(n_fins=3)
    rocket = RocketAssembly(n_fins=3, fillet=0.02)

    bounds = bounds_from_box(rocket.bounding_box())
    phi    = sample_levelset_3d(rocket, bounds, _RES)
    phi_s  = sample_levelset_3d(sharp, bounds, _RES)

    print(f"\nBounding box : {rocket.bounding_box()}")
    print(f"SDF range    : [{phi.min():.4f}, {phi.max():.4f}]")

    # --- box soundness: the grid boundary is in the margin ---
    edge = np.concatenate([
        phi[0].ravel(), phi[-1].ravel(),
        phi[:, 0].ravel(), phi[:, -1].ravel(),
        phi[:, :, 0].ravel(), phi[:, :, -1].ravel(),
    ])
    print(f"min phi on grid boundary = {edge.min():.4f}  (should be > 0)")

    # --- blending only ever adds material ---
    max_gain = (phi - phi_s).max()
    print(f"max (filleted - sharp)   = {max_gain:.2e}  (should be <= 0)")

    ok = edge.min() > 0 and max_gain <= 1e-12 and phi.min() < 0
    print("\n" + ("PASSED PASSED" if ok else "FAILED FAILED"))

    _render_png(phi, bounds, _OUT, "RocketAssembly(n_fins=3, fillet=0.02)")


if __name__ == "__main__":
    main()
