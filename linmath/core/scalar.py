# linmath/core/scalar.py
"""
Scalar helpers used by every vector, quaternion and matrix type.

Rotation builders take a trig strategy and default to PRECISE, which is
the math module. The approximating strategies at the bottom are opt-in:
pass one as trig= where a caller wants to trade accuracy for speed.
"""

from __future__ import annotations
import math
import struct
from enum import Enum
from typing import Optional

import numpy as np

from .options import get_options

# =============================================================================
# Constants
# =============================================================================

PI = math.pi
PI_TIMES_2 = PI * 2.0
PI_OVER_2 = PI * 0.5
PI_OVER_4 = PI * 0.25
ONE_OVER_PI = 1.0 / PI

sin = math.sin
cos = math.cos
tan = math.tan
acos = math.acos
asin = math.asin
atan2 = math.atan2
sqrt = math.sqrt


# =============================================================================
# Basic functions
# =============================================================================

def fma(a: float, b: float, c: float) -> float:
    """a * b + c (two roundings; math.fma is not available everywhere)."""
    return a * b + c


def invsqrt(r: float) -> float:
    return 1.0 / math.sqrt(r)


def to_radians(angle: float) -> float:
    return angle * (PI / 180.0)


def to_degrees(angle: float) -> float:
    return angle * (180.0 / PI)


def cos_from_sin(sin_value: float, angle: float) -> float:
    """Cosine of angle given its already-computed sine."""
    cos_value = math.sqrt(1.0 - sin_value * sin_value)
    a = angle + PI_OVER_2
    b = a - int(a / PI_TIMES_2) * PI_TIMES_2
    if b < 0.0:
        b = PI_TIMES_2 + b
    if b >= PI:
        return -cos_value
    return cos_value


def safe_asin(r: float) -> float:
    """asin with its input clamped to [-1, 1]."""
    if r <= -1.0:
        return -PI_OVER_2
    if r >= 1.0:
        return PI_OVER_2
    return math.asin(r)


def safe_acos(v: float) -> float:
    """acos with its input clamped to [-1, 1]."""
    if v < -1.0:
        return PI
    if v > 1.0:
        return 0.0
    return math.acos(v)


def clamp(a: float, b: float, value: float) -> float:
    """Clamp value into [a, b]."""
    return max(a, min(b, value))


def lerp(a: float, b: float, t: float) -> float:
    return fma(b - a, t, a)


def bi_lerp(q00: float, q10: float, q01: float, q11: float, tx: float, ty: float) -> float:
    lerp_x1 = lerp(q00, q10, tx)
    lerp_x2 = lerp(q01, q11, tx)
    return lerp(lerp_x1, lerp_x2, ty)


def tri_lerp(q000: float, q100: float, q010: float, q110: float,
             q001: float, q101: float, q011: float, q111: float,
             tx: float, ty: float, tz: float) -> float:
    x00 = lerp(q000, q100, tx)
    x10 = lerp(q010, q110, tx)
    x01 = lerp(q001, q101, tx)
    x11 = lerp(q011, q111, tx)
    y0 = lerp(x00, x10, ty)
    y1 = lerp(x01, x11, ty)
    return lerp(y0, y1, tz)


def signum(value: float) -> float:
    if value > 0.0:
        return 1.0
    if value < 0.0:
        return -1.0
    return value


def is_finite(value: float) -> bool:
    return math.isfinite(value)


def abs_equals_one(value: float) -> bool:
    return abs(value) == 1.0


def equals(a: float, b: float, delta: float) -> bool:
    """True when a and b are identical (NaN and infinities included) or within delta."""
    if a == b or (a != a and b != b):
        return True
    return abs(a - b) <= delta


# =============================================================================
# Rounding
# =============================================================================

class RoundingMode(Enum):
    TRUNCATE = 0
    CEILING = 1
    FLOOR = 2
    HALF_EVEN = 3
    HALF_DOWN = 4
    HALF_UP = 5


def round_half_up(value: float) -> float:
    if value > 0.0:
        return float(math.floor(value + 0.5))
    return float(math.ceil(value - 0.5))


def round_half_down(value: float) -> float:
    if value > 0.0:
        return float(math.ceil(value - 0.5))
    return float(math.floor(value + 0.5))


def round_half_even(value: float) -> float:
    # round() on floats ties to even
    return float(round(value))


def round_using(value: float, mode: RoundingMode) -> float:
    if not math.isfinite(value):
        return value
    if mode is RoundingMode.TRUNCATE:
        return float(math.trunc(value))
    if mode is RoundingMode.CEILING:
        return float(math.ceil(value))
    if mode is RoundingMode.FLOOR:
        return float(math.floor(value))
    if mode is RoundingMode.HALF_DOWN:
        return round_half_down(value)
    if mode is RoundingMode.HALF_UP:
        return round_half_up(value)
    if mode is RoundingMode.HALF_EVEN:
        return round_half_even(value)
    raise ValueError(f"Unknown rounding mode: {mode!r}")


# =============================================================================
# Trig strategies
# =============================================================================

def _longbits(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<q", bits))[0]


class PreciseTrig:
    """Trig straight from the math module."""

    def sin(self, angle: float) -> float:
        return math.sin(angle)

    def cos(self, angle: float) -> float:
        return math.cos(angle)

    def cos_from_sin(self, sin_value: float, angle: float) -> float:
        return cos_from_sin(sin_value, angle)

    def atan2(self, y: float, x: float) -> float:
        return math.atan2(y, x)


class PolynomialTrig(PreciseTrig):
    """Odd polynomial sine folded into [-pi/4, pi/4) and a rational atan2."""

    C1 = _longbits(-4628199217061079772)
    C2 = _longbits(4575957461383582011)
    C3 = _longbits(-4671919876300759001)
    C4 = _longbits(4523617214285661942)
    C5 = _longbits(-4730215272828025532)
    C6 = _longbits(4460272573143870633)
    C7 = _longbits(-4797767418267846529)

    def sin(self, angle: float) -> float:
        xi = math.floor((angle + PI_OVER_4) * ONE_OVER_PI)
        x = angle - xi * PI
        sign = (int(xi) & 1) * -2 + 1
        x2 = x * x
        result = x
        tx = x * x2
        for c in (self.C1, self.C2, self.C3, self.C4, self.C5, self.C6):
            result += tx * c
            tx *= x2
        result += tx * self.C7
        return sign * result

    def cos(self, angle: float) -> float:
        return self.sin(angle + PI_OVER_2)

    def cos_from_sin(self, sin_value: float, angle: float) -> float:
        return self.sin(angle + PI_OVER_2)

    def atan2(self, y: float, x: float) -> float:
        ax = x if x >= 0.0 else -x
        ay = y if y >= 0.0 else -y
        a = min(ax, ay) / max(ax, ay)
        s = a * a
        r = ((-0.0464964749 * s + 0.15931422) * s - 0.327622764) * s * a + a
        if ay > ax:
            r = 1.57079637 - r
        if x < 0.0:
            r = 3.14159274 - r
        return r if y >= 0 else -r


class LookupTrig(PolynomialTrig):
    """Sine by linear interpolation into a precomputed table."""

    def __init__(self, bits: Optional[int] = None):
        if bits is None:
            bits = get_options().sin_lookup_bits
        self.bits = bits
        self.size = 1 << bits
        self._mask = self.size - 1
        self._size_over_2pi = self.size / PI_TIMES_2
        self.table = np.sin(np.arange(self.size + 1, dtype=np.float64) * (PI_TIMES_2 / self.size))

    def sin(self, angle: float) -> float:
        index = angle * self._size_over_2pi
        ii = math.floor(index)
        alpha = index - ii
        i = int(ii) & self._mask
        sin1 = float(self.table[i])
        sin2 = float(self.table[i + 1])
        return sin1 + (sin2 - sin1) * alpha


PRECISE = PreciseTrig()
