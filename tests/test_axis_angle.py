import math

import pytest
from linmath import AxisAngle4d, Matrix3d, Matrix4d, Matrix4x3d, Quaterniond, Vector3d, Vector4d


def test_identity_quaternion():
    a = AxisAngle4d().set_quaternion(Quaterniond())
    assert a == AxisAngle4d(0, 0, 0, 1)

def test_almost_identity_quaternion():
    a = AxisAngle4d.from_quaternion(Quaterniond(2.035E-9, 4.715E-10, -9.166E-11, 1.000E+0))
    assert a == AxisAngle4d(0, 0, 0, 1)

def test_angle_wrapping():
    a1 = AxisAngle4d(math.radians(20), 1.0, 0.0, 0.0)
    a2 = AxisAngle4d(math.radians(380), 1.0, 0.0, 0.0)
    assert a1.angle == pytest.approx(a2.angle, abs=1e-5)
    a1 = AxisAngle4d(math.radians(-20), 1.0, 0.0, 0.0)
    a2 = AxisAngle4d(math.radians(-380), 1.0, 0.0, 0.0)
    assert a1.angle == pytest.approx(a2.angle, abs=1e-5)
    a1 = AxisAngle4d(math.radians(-20) * 10.0, 1.0, 0.0, 0.0)
    a2 = AxisAngle4d(math.radians(-380) * 10.0, 1.0, 0.0, 0.0)
    assert a1.angle == pytest.approx(a2.angle, abs=1e-5)

def test_angle_range():
    for angle in (-7.0, -math.pi, 0.0, 1.0, 2 * math.pi, 13.0):
        a = AxisAngle4d(angle)
        assert 0.0 <= a.angle < 2 * math.pi
    a = AxisAngle4d(0.5).rotate(2 * math.pi)
    assert a.angle == pytest.approx(0.5, abs=1e-12)
    a = AxisAngle4d().set(-0.5, 0, 1, 0)
    assert a.angle == pytest.approx(2 * math.pi - 0.5, abs=1e-12)

def test_quaternion_round_trip():
    q = Quaterniond().rotation_axis(1.2, 1, 2, -3)
    a = AxisAngle4d.from_quaternion(q)
    assert a.angle == pytest.approx(1.2, abs=1e-12)
    axis = Vector3d(1, 2, -3).normalize()
    assert Vector3d(a.x, a.y, a.z).equals(axis, 1e-12)
    assert a.get_quaternion(Quaterniond()).equals(q, 1e-12)

def test_set_matrix():
    m = Matrix3d().rotation(0.8, 0, 0.6, 0.8)
    a = AxisAngle4d().set_matrix(m)
    assert a.angle == pytest.approx(0.8, abs=1e-12)
    assert Vector3d(a.x, a.y, a.z).equals(Vector3d(0, 0.6, 0.8), 1e-12)

def test_set_matrix_scaled():
    m = Matrix4d().rotation_y(0.3).scale(2, 3, 4)
    a = AxisAngle4d().set_matrix(m)
    assert a.angle == pytest.approx(0.3, abs=1e-12)
    assert Vector3d(a.x, a.y, a.z).equals(Vector3d(0, 1, 0), 1e-12)

def test_set_matrix_identity():
    a = AxisAngle4d(1.0, 1, 0, 0).set_matrix(Matrix4x3d())
    assert a == AxisAngle4d(0, 0, 0, 1)

def test_set_matrix_half_turn():
    a = AxisAngle4d().set_matrix(Matrix3d().rotation_x(math.pi))
    assert a.angle == pytest.approx(math.pi)
    assert Vector3d(a.x, a.y, a.z).equals(Vector3d(1, 0, 0), 1e-12)

def test_get_matrix():
    a = AxisAngle4d(0.4, 0, 0, 2)
    # the axis is normalized when building matrices
    assert a.get_matrix(Matrix4d()).equals(Matrix4d().rotation_z(0.4), 1e-15)
    assert a.get_matrix(Matrix3d()).equals(Matrix3d().rotation_z(0.4), 1e-15)

def test_normalize():
    a = AxisAngle4d(0.4, 0, 3, 4).normalize()
    assert (a.x, a.y, a.z) == pytest.approx((0, 0.6, 0.8))

def test_transform():
    a = AxisAngle4d(math.pi / 2, 0, 0, 1)
    assert a.transform(Vector3d(1, 0, 0)).equals(Vector3d(0, 1, 0), 1e-15)
    v = a.transform(Vector4d(1, 0, 0, 5))
    assert v.equals(Vector4d(0, 1, 0, 5), 1e-15)

def test_transform_matches_quaternion():
    a = AxisAngle4d(2.1, 0.6, 0, 0.8)
    q = a.get_quaternion(Quaterniond())
    v = Vector3d(0.3, -2, 5)
    assert a.transform(v, Vector3d()).equals(q.transform(v, Vector3d()), 1e-12)

def test_str():
    assert "<|" in str(AxisAngle4d())
