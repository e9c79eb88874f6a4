from __future__ import annotations

import operator
import string
from typing import Any

import numpy as np

import radixfit.utils as rfu
from radixfit.errors import DecodeOverflow, DigitOutOfRange, InvalidBase, InvalidCharacter

MIN_BASE = 2
MAX_BASE = 36
I64_MAX = 2**63 - 1

_ALPHABET = string.digits + string.ascii_lowercase
# both cases map to the same value
_DIGITS = {ch: i for i, ch in enumerate(_ALPHABET)} | {ch.upper(): i for i, ch in enumerate(_ALPHABET) if ch.isalpha()}

# kernel status codes
_OK, _BAD_CHAR, _BAD_DIGIT, _OVERFLOW = 0, 1, 2, 3


def parse_base(base: Any) -> int:
    """
    Validate a radix given as an int or as its decimal string form.

    :param base: Radix, ``int`` or ``str``.
    :returns: The radix as an ``int`` in ``[2, 36]``.
    """
    if isinstance(base, str):
        s = base.strip()
        # ascii decimal digits only, no underscores or non-ascii digits
        if not (s.isascii() and s.lstrip("+").isdigit()): raise InvalidBase(base)
        b = int(s)
    else:
        try:
            b = operator.index(base)
        except TypeError as e:
            raise InvalidBase(base) from e
    if isinstance(base, bool) or not MIN_BASE <= b <= MAX_BASE: raise InvalidBase(base)
    return b


def digit_value(ch: str) -> int:
    """Value of one digit character, ``-1`` when outside ``0-9a-zA-Z``."""
    return _DIGITS.get(ch, -1)


def decode(digits: str, base: int | str) -> int:
    """
    Decode a positional numeral string into an integer.

    Horner's method, left to right. Python integers widen without limit, so a value past ``2**63 - 1`` is returned
    exactly rather than wrapping. See :func:`decode_i64` for the fixed-width variant.

    :param digits: Non-empty string over ``0-9a-zA-Z`` (case-insensitive).
    :param base: Radix in ``[2, 36]``, ``int`` or decimal string.
    :returns: The decoded value.
    """
    b = parse_base(base)
    if not digits: raise InvalidCharacter("", 0)
    acc = 0
    for pos, ch in enumerate(digits):
        d = _DIGITS.get(ch, -1)
        if d < 0: raise InvalidCharacter(ch, pos)
        if d >= b: raise DigitOutOfRange(d, b, pos)
        acc = acc * b + d
    return acc


def encode(value: int, base: int | str) -> str:
    """
    Inverse of :func:`decode` for non-negative integers, lowercase digits.

    :param value: Integer ``>= 0``.
    :param base: Radix in ``[2, 36]``.
    :returns: The digit string, ``"0"`` for zero.
    """
    b = parse_base(base)
    value = operator.index(value)
    if value < 0: raise ValueError(f"Cannot encode negative value {value}")
    if value == 0: return "0"
    out = []
    while value:
        value, d = divmod(value, b)
        out.append(_ALPHABET[d])
    return "".join(reversed(out))


@rfu.rgi
def _code_digit(code: int) -> int:
    c = np.int64(code)
    if 48 <= c <= 57: return c - 48  # 0-9
    if 97 <= c <= 122: return c - 87  # a-z
    if 65 <= c <= 90: return c - 55  # A-Z
    return np.int64(-1)


@rfu.jt
def horner_i64(codes: np.ndarray, base: int) -> tuple[int, int, int]:
    """
    Signed 64-bit Horner accumulation over ASCII digit codes.

    Stops at the first problem instead of wrapping.

    :param codes: uint8 array of ASCII codes.
    :param base: Radix, assumed already validated.
    :returns: ``(value, status, position)``. status 0 ok, 1 illegal character, 2 digit ``>= base`` (value holds the
        digit), 3 overflow.
    """
    acc = np.int64(0)
    b = np.int64(base)
    for i in range(codes.size):
        d = _code_digit(codes[i])
        if d < 0: return np.int64(0), np.int64(_BAD_CHAR), np.int64(i)
        if d >= b: return d, np.int64(_BAD_DIGIT), np.int64(i)
        if acc > (I64_MAX - d) // b: return np.int64(0), np.int64(_OVERFLOW), np.int64(i)
        acc = acc * b + d
    return acc, np.int64(_OK), np.int64(codes.size)


def decode_i64(digits: str, base: int | str) -> int:
    """
    Fixed-width decode, fails with :class:`DecodeOverflow` once the value leaves the signed 64-bit range.

    :param digits: Non-empty string over ``0-9a-zA-Z``.
    :param base: Radix in ``[2, 36]``.
    :returns: The decoded value, guaranteed ``<= 2**63 - 1``.
    """
    b = parse_base(base)
    if not digits: raise InvalidCharacter("", 0)
    try:
        codes = np.frombuffer(digits.encode("ascii"), dtype=np.uint8)
    except UnicodeEncodeError as e:
        raise InvalidCharacter(digits[e.start], e.start) from e

    value, status, pos = horner_i64(codes, b)
    if status == _BAD_CHAR: raise InvalidCharacter(digits[pos], int(pos))
    if status == _BAD_DIGIT: raise DigitOutOfRange(int(value), b, int(pos))
    if status == _OVERFLOW: raise DecodeOverflow(digits, b)
    return int(value)
