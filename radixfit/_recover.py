"""
Constant-term recovery for ``f(x) = a*x**2 + b*x + c`` from decoded sample points.

Two paths:
- exact: Cramer's rule on the first three points, integer arithmetic throughout, so ``c`` is an exact rational before
  rounding (ties away from zero).
- simple: the fixed shape ``a=1, b=0``, ``c = y1 - x1**2``. Used with fewer than three points, or when the first three
  points don't determine a unique quadratic.

Verification always checks every point against ``x**2 + c``, whatever path produced ``c``. When the exact path finds
``a != 1`` or ``b != 0`` the check flags points that the solved quadratic fits perfectly. Callers that want a real fit
check must evaluate the solved polynomial themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

from radixfit.errors import EmptyInput

logger = logging.getLogger(__name__)

DET_TOL = 1e-10
RESIDUAL_TOL = 1


class SamplePoint(NamedTuple):
    x: int
    y: int

    def __str__(self) -> str: return f"({self.x}, {self.y})"


class Residual(NamedTuple):
    point: SamplePoint
    residual: int
    conforming: bool


@dataclass(frozen=True)
class RecoveryResult:
    """
    Terminal output of one recovery.

    :ivar constant: The recovered ``c``.
    :ivar exact: ``True`` when Cramer's rule produced ``c``, ``False`` for the fixed-shape fallback.
    :ivar residuals: One entry per input point, in input order.
    :ivar determinant: Determinant of the three-point system, ``None`` when fewer than three points were given.
    """

    constant: int
    exact: bool
    residuals: tuple[Residual, ...]
    determinant: int | None = None

    @property
    def nonconforming(self) -> tuple[Residual, ...]:
        return tuple(r for r in self.residuals if not r.conforming)


def div_round_half_away(num: int, den: int) -> int:
    """
    Integer quotient ``num / den`` rounded to nearest, ties away from zero.

    :param num: Numerator.
    :param den: Non-zero denominator.
    :returns: Rounded quotient.
    """
    if den == 0: raise ZeroDivisionError("division by zero")
    neg = (num < 0) != (den < 0)
    q, r = divmod(abs(num), abs(den))
    if 2 * r >= abs(den): q += 1
    return -q if neg else q


def cramer_constant(p1: SamplePoint, p2: SamplePoint, p3: SamplePoint) -> tuple[int, int]:
    """
    Cramer's rule numerator and denominator for ``c`` in the system ``[x**2, x, 1] @ [a, b, c] = y``.

    :returns: ``(det_c, det)``; ``c = det_c / det`` when ``det != 0``.
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    det = x1 * x1 * (x2 - x3) + x2 * x2 * (x3 - x1) + x3 * x3 * (x1 - x2)
    # third column replaced by y
    det_c = y1 * x2 * x3 * (x2 - x3) + y2 * x3 * x1 * (x3 - x1) + y3 * x1 * x2 * (x1 - x2)
    return det_c, det


def simple_constant(point: SamplePoint) -> int:
    """``c = y - x**2`` under the fixed shape ``a=1, b=0``."""
    return point.y - point.x * point.x


def verify(points: Sequence[SamplePoint], constant: int, tol: int = RESIDUAL_TOL) -> tuple[Residual, ...]:
    """
    Residuals ``y - (x**2 + constant)`` for every point, flagged non-conforming when ``|residual| > tol``.

    Advisory only, nothing is raised.
    """
    out = []
    for p in points:
        r = p.y - (p.x * p.x + constant)
        ok = abs(r) <= tol
        if not ok: logger.debug("Point %s has difference %d against x^2 + %d", p, r, constant)
        out.append(Residual(p, r, ok))
    return tuple(out)


def recover_constant(points: Sequence[SamplePoint]) -> RecoveryResult:
    """
    Recover the constant term from decoded sample points.

    With three or more points the first three are solved exactly, later points only take part in verification. With
    fewer points, or a degenerate three-point system, ``c = y1 - x1**2``.

    :param points: Ordered sample points, at least one.
    :returns: The :class:`RecoveryResult`.
    """
    points = tuple(SamplePoint(*p) for p in points)
    if not points: raise EmptyInput()

    det = None
    if len(points) >= 3:
        det_c, det = cramer_constant(*points[:3])
        logger.debug("Using points %s, %s, %s, determinant %d", *points[:3], det)
        if abs(det) >= DET_TOL:
            c = div_round_half_away(det_c, det)
            logger.debug("Exact constant %d (det_c=%d)", c, det_c)
            return RecoveryResult(c, True, verify(points, c), det)
        logger.info("Determinant is zero for %s, %s, %s, using the fixed-shape fallback", *points[:3])

    c = simple_constant(points[0])
    logger.debug("Fallback constant: %d - %d^2 = %d", points[0].y, points[0].x, c)
    return RecoveryResult(c, False, verify(points, c), det)
