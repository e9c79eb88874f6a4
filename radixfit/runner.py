from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from radixfit._recover import RecoveryResult, SamplePoint, recover_constant
from radixfit.errors import RadixfitError
from radixfit.io import TestCase, decode_points

logger = logging.getLogger(__name__)


@dataclass
class CaseReport:
    case: TestCase
    points: tuple[SamplePoint, ...] = ()
    result: RecoveryResult | None = None
    error: RadixfitError | None = None

    @property
    def ok(self) -> bool: return self.result is not None


def solve_case(case: TestCase) -> CaseReport:
    """
    Decode every entry of ``case`` and recover its constant. Errors propagate.

    :param case: Loaded test case.
    :returns: A successful report.
    """
    logger.debug("Solving case %r: n=%d, k=%d", case.name, case.n, case.k)
    points = decode_points(case)
    result = recover_constant(points)
    logger.info(
        "Case %r: c=%d via %s path", case.name, result.constant, "exact" if result.exact else "fallback"
    )
    return CaseReport(case, points, result)


def run_cases(cases: Iterable[TestCase]) -> list[CaseReport]:
    """
    Solve each case independently. A decoding or recovery failure ends only that case, it is stored on its report.

    :param cases: Cases in the order to report them.
    :returns: One report per case.
    """
    reports = []
    for case in cases:
        try:
            reports.append(solve_case(case))
        except RadixfitError as e:
            logger.warning("Case %r failed: %s", case.name, e)
            reports.append(CaseReport(case, error=e))
    return reports
