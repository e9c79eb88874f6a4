from __future__ import annotations

import logging
import os
import re
import warnings
from typing import Any, Callable

import numba as nb
from numba.core.errors import NumbaPerformanceWarning
from numba.extending import register_jitable


def silence_serial_fallback(kernel: str) -> None:
    """Ignore numba's "parallel=True but nothing was parallelized" performance warning for ``kernel`` only."""
    warnings.filterwarnings(
        "ignore", message=rf"(?s)(?=.*parallel=True)(?=.*\b{re.escape(kernel)}\b)", category=NumbaPerformanceWarning
    )


def parallel_jit(**opts: Any) -> Callable[[Callable[..., Any]], Any]:
    """
    ``numba.njit`` with ``parallel=True`` forced on, quiet when a kernel ends up running serially.

    :param opts: Extra ``numba.njit`` options.
    :returns: A decorator.
    """
    compile_ = nb.njit(**(opts | dict(parallel=True)))

    def wrap(func: Callable[..., Any]) -> Any:
        silence_serial_fallback(func.__name__)
        return compile_(func)

    return wrap


def _env_flag(name: str, default: str) -> bool:
    v = os.environ.get(name, default).strip().lower()
    return v not in ("", "0", "false", "no", "off")


# This only changes once at import time.
# --- Global Fastmath : off by default, the half-away-from-zero rounding relies on IEEE semantics for the tie test.
_fm = _env_flag("RF_GLOB_FM", "false")
# --- Global Error Model : 'numpy'|'python'. 'python' raises ZeroDivisionError inside kernels instead of producing inf.
_erm = os.environ.get("RF_GLOB_EM", "numpy").strip().lower() or "numpy"

"""
## Decorators
s|p : Sync or Parallel, the threading strategy.
i : Forced Numba-IR level inline.

jt - Numba jit using the base defaults and extension characters above.
rg - Register Jittable, compiles into the Numba IR when called from a jitted scope but runs as python when called from
the interpreter.
"""

_dft = dict(fastmath=_fm, error_model=_erm)  # base arguments.
jit_s = _dft
jit_si = jit_s | dict(inline="always")
jit_p = _dft | dict(parallel=True)

# --- JIT DECORATORS
jt = nb.njit(**jit_s)  # plain jit
jtp_s = parallel_jit(**jit_p)  # jit parallel, serial fallback stays quiet

# --- REGISTER JITTABLE DECORATORS
_rg = register_jitable
rg = _rg(**jit_s)  # base sync
rgi = _rg(**jit_si)  # inline


_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbosity: int = 0, fmt: str = _LOG_FORMAT) -> int:
    """
    Configure the root logger for application use, the library itself only installs a ``NullHandler``.

    A root logger that already has handlers keeps them, only its level changes.

    :param verbosity: 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG.
    :param fmt: Log record format.
    :returns: The chosen level.
    """
    level = logging.WARNING if verbosity <= 0 else logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(format=fmt)
    logging.getLogger().setLevel(level)
    return level
