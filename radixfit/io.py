"""
JSON test-case loader.

Expected layout::

    {
      "keys": {"n": 4, "k": 3},
      "1": {"base": "10", "value": "4"},
      "2": {"base": "2", "value": "111"},
      "6": {"base": "4", "value": "213"}
    }

Numbered entries may skip indices. The index becomes the point's ``x``.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from radixfit._decode import decode
from radixfit._recover import SamplePoint
from radixfit.errors import CaseFormatError

logger = logging.getLogger(__name__)


class CaseKeys(BaseModel, frozen=True):
    n: StrictInt = Field(ge=0)
    k: StrictInt = Field(ge=0)


class Entry(BaseModel, frozen=True):
    index: StrictInt = Field(ge=1)
    base: StrictStr
    value: StrictStr


class TestCase(BaseModel, frozen=True):
    """
    One loaded case.

    :ivar n: Declared number of entries, not checked against ``entries``.
    :ivar k: Passed through for bookkeeping, the solver doesn't use it.
    """

    __test__: ClassVar[bool] = False  # keep pytest from collecting it

    n: int
    k: int
    entries: tuple[Entry, ...] = ()
    name: str = ""


def parse_case(data: Mapping[str, Any], name: str = "") -> TestCase:
    """
    Build a :class:`TestCase` from an already parsed JSON object.

    Every decimal key ``>= 1`` holding an object is an entry, other keys are ignored.

    :param data: Mapping with a ``keys`` object and numbered entries.
    :param name: Label carried into reports.
    :returns: The case, entries sorted by index.
    """
    if not isinstance(data, Mapping):
        raise CaseFormatError(f"Test case must be a JSON object, got {type(data).__name__}")
    try:
        keys = CaseKeys.model_validate(data.get("keys"))
        entries = [
            Entry.model_validate({**item, "index": int(key)})
            for key, item in data.items()
            if isinstance(key, str) and key.isascii() and key.isdigit() and int(key) >= 1 and isinstance(item, Mapping)
        ]
    except ValidationError as e:
        raise CaseFormatError(f"Invalid test case {name!r}: {e}") from e
    entries.sort(key=lambda e: e.index)

    if len(entries) != keys.n:
        logger.info("Case %r declares n=%d but holds %d entries", name, keys.n, len(entries))
    return TestCase(n=keys.n, k=keys.k, entries=tuple(entries), name=name)


def load_case(path: str | os.PathLike[str]) -> TestCase:
    """
    Read and parse one JSON test-case file.

    :param path: File path, its stem becomes the case name.
    :returns: The parsed case.
    """
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise CaseFormatError(f"Cannot open file: {p}") from e
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CaseFormatError(f"JSON parsing failed for {p}: {e}") from e
    logger.debug("Loaded %s", p)
    return parse_case(data, p.stem)


def decode_points(case: TestCase) -> tuple[SamplePoint, ...]:
    """``x = index``, ``y = decode(value, base)`` for every entry, decoder errors propagate."""
    points = []
    for e in case.entries:
        y = decode(e.value, e.base)
        logger.debug("Index %d: %s (base %s) = %d", e.index, e.value, e.base, y)
        points.append(SamplePoint(e.index, y))
    return tuple(points)
