from __future__ import annotations

import logging

from . import errors, utils
from ._batch import cramer_constant_f64, recover_constants, round_half_away, stack_points
from ._decode import decode, decode_i64, digit_value, encode, parse_base
from ._recover import (
    RecoveryResult,
    Residual,
    SamplePoint,
    cramer_constant,
    recover_constant,
    simple_constant,
    verify,
)
from .errors import (
    CaseFormatError,
    DecodeError,
    DecodeOverflow,
    DigitOutOfRange,
    EmptyInput,
    InvalidBase,
    InvalidCharacter,
    RadixfitError,
    RecoveryError,
)
from .io import TestCase, decode_points, load_case, parse_case
from .runner import CaseReport, run_cases, solve_case

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "errors",
    "utils",
    "decode",
    "decode_i64",
    "digit_value",
    "encode",
    "parse_base",
    "RecoveryResult",
    "Residual",
    "SamplePoint",
    "cramer_constant",
    "recover_constant",
    "simple_constant",
    "verify",
    "cramer_constant_f64",
    "recover_constants",
    "round_half_away",
    "stack_points",
    "TestCase",
    "decode_points",
    "load_case",
    "parse_case",
    "CaseReport",
    "run_cases",
    "solve_case",
    "CaseFormatError",
    "DecodeError",
    "DecodeOverflow",
    "DigitOutOfRange",
    "EmptyInput",
    "InvalidBase",
    "InvalidCharacter",
    "RadixfitError",
    "RecoveryError",
]
