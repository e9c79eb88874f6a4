from __future__ import annotations

from collections.abc import Iterable, Sequence

import numba as nb
import numpy as np

import radixfit.utils as rfu
from radixfit._recover import DET_TOL, SamplePoint
from radixfit.errors import EmptyInput


@rfu.rg
def round_half_away(v: float) -> float:
    """Round to nearest, ties away from zero. ``np.round`` rounds ties to even."""
    if v >= 0.0: return np.floor(v + 0.5)
    return -np.floor(-v + 0.5)


@rfu.rg
def cramer_constant_f64(x1: float, x2: float, x3: float, y1: float, y2: float, y3: float) -> tuple[float, bool]:
    """
    Double precision counterpart of :func:`radixfit.cramer_constant` with the fallback folded in.

    Loses integer exactness once ``|y|`` passes ``2**53``.

    :returns: ``(c, exact)``. ``exact`` is False when the determinant is below tolerance and ``c = y1 - x1**2``.
    """
    det = x1 * x1 * (x2 - x3) + x2 * x2 * (x3 - x1) + x3 * x3 * (x1 - x2)
    if abs(det) < DET_TOL: return y1 - x1 * x1, False
    det_c = y1 * x2 * x3 * (x2 - x3) + y2 * x3 * x1 * (x3 - x1) + y3 * x1 * x2 * (x1 - x2)
    return round_half_away(det_c / det), True


@rfu.jtp_s
def recover_constants(xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Solve many independent three-point systems, one per row.

    :param xs: ``(m, 3)`` float64 x values.
    :param ys: ``(m, 3)`` float64 y values.
    :returns: ``(cs, exact)``, float64 constants and boolean exact-path flags, shape ``(m,)``.
    """
    m = xs.shape[0]
    cs = np.empty(m, dtype=np.float64)
    exact = np.empty(m, dtype=np.bool_)
    for i in nb.prange(m):
        c, e = cramer_constant_f64(xs[i, 0], xs[i, 1], xs[i, 2], ys[i, 0], ys[i, 1], ys[i, 2])
        cs[i] = c
        exact[i] = e
    return cs, exact


def stack_points(point_sets: Iterable[Sequence[SamplePoint]]) -> tuple[np.ndarray, np.ndarray]:
    """
    Pack the first three points of each set into the ``(m, 3)`` arrays :func:`recover_constants` takes.

    Sets shorter than three are padded with their first point, the repeated x makes the row degenerate so it takes the
    fixed-shape fallback, as :func:`radixfit.recover_constant` would.
    """
    rows = []
    for ps in point_sets:
        if not ps: raise EmptyInput()
        head = [SamplePoint(*p) for p in ps[:3]]
        head += [head[0]] * (3 - len(head))
        rows.append(head)
    arr = np.array(rows, dtype=np.float64).reshape(-1, 3, 2)
    return np.ascontiguousarray(arr[:, :, 0]), np.ascontiguousarray(arr[:, :, 1])
