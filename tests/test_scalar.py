import math

import pytest
from linmath.core import scalar
from linmath.core.scalar import RoundingMode, round_using, PolynomialTrig, LookupTrig, PRECISE
from linmath import Matrix2d, Matrix3d, Matrix4d, Quaterniond, Vector3d


def test_clamp():
    assert scalar.clamp(10, 20, 0) == 10
    assert scalar.clamp(10, 20, 12) == 12
    assert scalar.clamp(10, 20, 30) == 20

def test_is_finite():
    assert scalar.is_finite(0.0)
    assert scalar.is_finite(-1e308)
    assert not scalar.is_finite(math.nan)
    assert not scalar.is_finite(math.inf)
    assert not scalar.is_finite(-math.inf)

def test_lerp_family():
    assert scalar.lerp(2.0, 4.0, 0.5) == 3.0
    # Corners of the unit square come back unchanged
    assert scalar.bi_lerp(1.0, 2.0, 3.0, 4.0, 0.0, 0.0) == 1.0
    assert scalar.bi_lerp(1.0, 2.0, 3.0, 4.0, 1.0, 1.0) == 4.0
    assert scalar.bi_lerp(1.0, 2.0, 3.0, 4.0, 0.5, 0.5) == 2.5
    assert scalar.tri_lerp(0, 1, 2, 3, 4, 5, 6, 7, 0.5, 0.5, 0.5) == 3.5

def test_signum_and_equals():
    assert scalar.signum(-3.0) == -1.0
    assert scalar.signum(0.0) == 0.0
    assert scalar.signum(2.5) == 1.0
    assert scalar.abs_equals_one(-1.0)
    assert not scalar.abs_equals_one(0.999)
    assert scalar.equals(1.0, 1.0 + 1e-9, 1e-6)
    assert not scalar.equals(1.0, 1.1, 1e-6)

def test_safe_inverse_trig():
    # Slightly out of range from rounding must not raise
    assert scalar.safe_acos(1.0000001) == 0.0
    assert scalar.safe_acos(-1.0000001) == math.pi
    assert scalar.safe_asin(1.0000001) == math.pi / 2

def test_cos_from_sin():
    for angle in [0.3, 2.0, -2.5, 4.0, -0.7]:
        assert abs(scalar.cos_from_sin(math.sin(angle), angle) - math.cos(angle)) < 1e-12

def test_angle_conversion():
    assert abs(scalar.to_radians(180.0) - math.pi) < 1e-15
    assert abs(scalar.to_degrees(math.pi / 2) - 90.0) < 1e-12
    assert abs(scalar.invsqrt(4.0) - 0.5) < 1e-15
    assert scalar.fma(2.0, 3.0, 4.0) == 10.0


@pytest.mark.parametrize("mode, expected", [
    # values:            0.2   0.5   0.9   1.0  -0.2  -0.5  -0.9  -1.0
    (RoundingMode.TRUNCATE,  [0, 0, 0, 1, 0, 0, 0, -1]),
    (RoundingMode.CEILING,   [1, 1, 1, 1, 0, 0, 0, -1]),
    (RoundingMode.FLOOR,     [0, 0, 0, 1, -1, -1, -1, -1]),
    (RoundingMode.HALF_DOWN, [0, 0, 1, 1, 0, 0, -1, -1]),
    (RoundingMode.HALF_UP,   [0, 1, 1, 1, 0, -1, -1, -1]),
    (RoundingMode.HALF_EVEN, [0, 0, 1, 1, 0, 0, -1, -1]),
])
def test_rounding_modes(mode, expected):
    values = [0.2, 0.5, 0.9, 1.0, -0.2, -0.5, -0.9, -1.0]
    assert [round_using(v, mode) for v in values] == expected

def test_half_even_ties():
    assert round_using(1.5, RoundingMode.HALF_EVEN) == 2.0
    assert round_using(2.5, RoundingMode.HALF_EVEN) == 2.0
    assert round_using(-2.5, RoundingMode.HALF_EVEN) == -2.0

def test_rounding_passes_non_finite_through():
    assert round_using(math.inf, RoundingMode.FLOOR) == math.inf
    assert math.isnan(round_using(math.nan, RoundingMode.HALF_UP))


def test_precise_trig_is_math():
    assert PRECISE.sin(0.7) == math.sin(0.7)
    assert PRECISE.cos(0.7) == math.cos(0.7)
    assert PRECISE.atan2(1.0, -2.0) == math.atan2(1.0, -2.0)

def test_polynomial_trig_close_to_math():
    trig = PolynomialTrig()
    for i in range(-50, 51):
        angle = i * 0.13
        assert abs(trig.sin(angle) - math.sin(angle)) < 1e-6
        assert abs(trig.cos(angle) - math.cos(angle)) < 1e-6
    for y, x in [(1.0, 2.0), (-3.0, 1.0), (2.0, -0.5), (-1.0, -1.0)]:
        assert abs(trig.atan2(y, x) - math.atan2(y, x)) < 1e-4

def test_lookup_trig_close_to_math():
    trig = LookupTrig(bits=14)
    assert trig.size == 1 << 14
    for i in range(-50, 51):
        angle = i * 0.13
        assert abs(trig.sin(angle) - math.sin(angle)) < 1e-6
        assert abs(trig.cos(angle) - math.cos(angle)) < 1e-6

def test_lookup_trig_rotations_match_precise():
    trig = LookupTrig(bits=14)
    # linear interpolation over 2pi / 2**14 keeps sin/cos within ~2e-8
    tol = 1e-6
    assert Matrix4d().rotation_xyz(0.3, -1.2, 2.5, trig).equals(Matrix4d().rotation_xyz(0.3, -1.2, 2.5), tol)
    assert Matrix4d().rotate_z(0.9, trig=trig).equals(Matrix4d().rotate_z(0.9), tol)
    assert Matrix3d().rotation(1.1, 0.0, 0.6, 0.8, trig).equals(Matrix3d().rotation(1.1, 0.0, 0.6, 0.8), tol)
    assert Matrix2d().rotation(-0.4, trig).equals(Matrix2d().rotation(-0.4), tol)
    q = Quaterniond().rotation_zyx(0.5, 0.25, -2.0, trig)
    assert q.equals(Quaterniond().rotation_zyx(0.5, 0.25, -2.0), tol)
    v = Vector3d(1, 2, 3).rotate_y(0.8, trig=trig)
    assert v.equals(Vector3d(1, 2, 3).rotate_y(0.8), tol)

def test_lookup_trig_is_used():
    # two samples at 0 and pi turn every sine into zero
    trig = LookupTrig(bits=1)
    m = Matrix3d().rotation_z(0.3, trig)
    assert m.m01 != pytest.approx(math.sin(0.3))
