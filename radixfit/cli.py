from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

import radixfit.utils as rfu
from radixfit.errors import CaseFormatError
from radixfit.io import load_case
from radixfit.runner import CaseReport, run_cases


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="radixfit",
        description="Recover the constant term of a quadratic from base-encoded sample points.",
    )
    p.add_argument("files", nargs="+", metavar="FILE", help="JSON test-case files.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO logs, -vv for DEBUG.")
    p.add_argument("--preview", type=int, default=5, help="Decoded points to print per case (default: 5).")
    return p


def format_report(report: CaseReport, preview: int = 5) -> list[str]:
    case = report.case
    lines = [f"=== {case.name or 'case'} ===", f"n={case.n}, k={case.k}"]
    if not report.ok:
        lines.append(f"Error: {report.error}")
        return lines
    lines.append(f"Found {len(report.points)} roots:")
    shown = report.points[: max(preview, 0)]
    lines.extend(f"  {p}" for p in shown)
    if len(report.points) > len(shown): lines.append(f"  ... and {len(report.points) - len(shown)} more roots")
    res = report.result
    lines.append(f"Constant c: {res.constant} ({'exact' if res.exact else 'fallback a=1, b=0'})")
    for r in res.nonconforming: lines.append(f"  warning: root {r.point} has difference {r.residual}")
    return lines


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)
    rfu.configure_logging(args.verbose)

    failed = False
    cases = []
    for path in args.files:
        try:
            cases.append(load_case(path))
        except CaseFormatError as e:
            print(f"Error: {e}", file=out)
            failed = True

    for report in run_cases(cases):
        print("\n".join(format_report(report, args.preview)), file=out)
        failed = failed or not report.ok
    return 1 if failed else 0
