"""Blend functions for boolean combinators.

A blend function takes two distance arrays and returns one. ``numpy.minimum``
and ``numpy.maximum`` are the sharp defaults; the factories below return
smooth variants that round or chamfer the seam between the operands.

Try ``k`` around a tenth of the feature size: a bigger ``k`` gives a
bigger fillet. Smooth minimums grow the solid near the seam beyond the
operands; each carries a ``margin`` attribute bounding that growth, which
the union nodes add to their bounding box.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import numpy.typing as npt

from _sdf_common import InvalidParameter, clamp, length, mix, vec2

_Array = npt.NDArray[np.floating]
BlendFunc = Callable[[_Array, _Array], _Array]

_SQRT_HALF = np.sqrt(0.5)


def _check_k(k: float) -> None:
    if k <= 0:
        raise InvalidParameter(f"blend factor k must be > 0, got {k}")


def poly_min(k: float) -> BlendFunc:
    """Polynomial smooth minimum."""
    _check_k(k)

    def _min(a: _Array, b: _Array) -> _Array:
        h = clamp(0.5 + 0.5 * (b - a) / k, 0.0, 1.0)
        return mix(b, a, h) - k * h * (1.0 - h)

    _min.margin = 0.25 * k
    return _min


def poly_max(k: float) -> BlendFunc:
    """Polynomial smooth maximum."""
    _check_k(k)

    def _max(a: _Array, b: _Array) -> _Array:
        h = clamp(0.5 - 0.5 * (b - a) / k, 0.0, 1.0)
        return mix(b, a, h) + k * h * (1.0 - h)

    return _max


def exp_min(k: float) -> BlendFunc:
    """Exponential smooth minimum (``k = 32`` is a good start)."""
    _check_k(k)

    def _min(a: _Array, b: _Array) -> _Array:
        # shift by the sharp minimum so the exponentials stay finite
        m = np.minimum(a, b)
        return m - np.log(np.exp(-k * (a - m)) + np.exp(-k * (b - m))) / k

    _min.margin = np.log(2.0) / k
    return _min


def round_min(k: float) -> BlendFunc:
    """Join the operands with a quarter circle of radius *k*."""
    _check_k(k)

    def _min(a: _Array, b: _Array) -> _Array:
        u = np.maximum(vec2(k - a, k - b), 0.0)
        return np.maximum(k, np.minimum(a, b)) - length(u)

    _min.margin = (1.0 - _SQRT_HALF) * k
    return _min


def chamfer_min(k: float) -> BlendFunc:
    """Join the operands with a 45 degree chamfer of size *k*."""
    _check_k(k)

    def _min(a: _Array, b: _Array) -> _Array:
        return np.minimum(np.minimum(a, b), (a - k + b) * _SQRT_HALF)

    _min.margin = 0.5 * k
    return _min


def blend_margin(min_func: Optional[BlendFunc]) -> float:
    """How far *min_func* can put material outside its operands (0 for sharp ``min``)."""
    return float(getattr(min_func, "margin", 0.0))
