# linmath/core/options.py
"""
Process-wide options for linmath.

Options are read once from the environment and may be replaced at
startup with configure(). They are not meant to be toggled while
other threads are doing math.

    LINMATH_DEBUG            enable precondition checks on fast paths
    LINMATH_NUMBER_FORMAT    format numbers in __str__ (default on)
    LINMATH_DECIMALS         decimals used by format_number (default 3)
    LINMATH_SIN_LOOKUP_BITS  table size for LookupTrig (default 14)
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import PreconditionViolation

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class MathOptions:
    debug: bool = False
    use_number_format: bool = True
    number_format_decimals: int = 3
    sin_lookup_bits: int = 14

    def __post_init__(self):
        if self.number_format_decimals < 0:
            raise ValueError(
                f"number_format_decimals must be >= 0, got {self.number_format_decimals}"
            )
        if not 1 <= self.sin_lookup_bits <= 24:
            raise ValueError(
                f"sin_lookup_bits must be in [1, 24], got {self.sin_lookup_bits}"
            )

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> MathOptions:
        """Build options from LINMATH_* environment variables."""
        env = os.environ if environ is None else environ
        kwargs = {}
        if "LINMATH_DEBUG" in env:
            kwargs["debug"] = _parse_bool("LINMATH_DEBUG", env["LINMATH_DEBUG"])
        if "LINMATH_NUMBER_FORMAT" in env:
            kwargs["use_number_format"] = _parse_bool(
                "LINMATH_NUMBER_FORMAT", env["LINMATH_NUMBER_FORMAT"]
            )
        if "LINMATH_DECIMALS" in env:
            kwargs["number_format_decimals"] = int(env["LINMATH_DECIMALS"])
        if "LINMATH_SIN_LOOKUP_BITS" in env:
            kwargs["sin_lookup_bits"] = int(env["LINMATH_SIN_LOOKUP_BITS"])
        return MathOptions(**kwargs)


_options: Optional[MathOptions] = None


def get_options() -> MathOptions:
    """Return the active options, loading them from the environment once."""
    global _options
    if _options is None:
        _options = MathOptions.from_env()
        logger.debug(f"Loaded options from environment: {_options}")
    return _options


def configure(**overrides) -> MathOptions:
    """Replace the active options. Call once at startup."""
    global _options
    _options = replace(get_options(), **overrides)
    logger.debug(f"Options configured: {_options}")
    return _options


def reset_options() -> None:
    """Forget the active options so the next access rereads the environment."""
    global _options
    _options = None


def format_number(value: float) -> str:
    options = get_options()
    if not options.use_number_format:
        return repr(float(value))
    return f"{value: .{options.number_format_decimals}E}"


def require(condition: bool, message: str) -> None:
    """Raise PreconditionViolation when debug checks are on and condition fails."""
    if condition or not get_options().debug:
        return
    logger.error(f"Precondition violated: {message}")
    raise PreconditionViolation(message)
