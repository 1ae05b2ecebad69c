import math

import pytest
from linmath import Vector2d, Vector3d, Vector4d, Matrix2d, Matrix3x2d, Matrix4d, Quaterniond, RoundingMode


def test_length_of():
    assert Vector2d.length_of(4, 3) == 5.0
    assert Vector3d.length_of(2, -4, 4) == 6.0
    assert Vector4d.length_of(2, -1, 0, -2) == 3.0

def test_angle_3d():
    v = Vector3d(2, -9.37, 5.892)
    # Same direction is zero, opposite is pi
    assert abs(v.angle(v)) < 1e-12
    assert abs(v.angle(-v) - math.pi) < 1e-12
    assert abs(Vector3d(1, 0, 0).angle(Vector3d(0, 3, 0)) - math.pi / 2) < 1e-15

def test_angle_2d():
    v = Vector2d(-9.37, 5.892)
    assert abs(v.angle(v)) < 1e-12
    assert abs(abs(v.angle(-v)) - math.pi) < 1e-12
    # Signed: counter-clockwise is positive
    assert abs(Vector2d(1, 0).angle(Vector2d(0, 1)) - math.pi / 2) < 1e-15
    assert abs(Vector2d(0, 1).angle(Vector2d(1, 0)) + math.pi / 2) < 1e-15

def test_perpendicular_2d():
    v = Vector2d(-9.37, 5.892).perpendicular()
    assert v.equals(Vector2d(5.892, 9.37), 1e-12)

def test_mutators_write_dest_and_return_it():
    a = Vector3d(1, 2, 3)
    b = Vector3d(4, 5, 6)
    dest = Vector3d()
    result = a.add(b, dest)
    assert result is dest
    assert dest == Vector3d(5, 7, 9)
    # Source untouched when a dest is given
    assert a == Vector3d(1, 2, 3)
    # Without dest the receiver changes
    assert a.sub(b) is a
    assert a == Vector3d(-3, -3, -3)

def test_operators_do_not_mutate():
    a = Vector3d(1, 2, 3)
    b = Vector3d(1, 1, 1)
    c = a + b
    assert c == Vector3d(2, 3, 4)
    assert a == Vector3d(1, 2, 3)
    assert 2 * a == Vector3d(2, 4, 6)
    assert a - b == Vector3d(0, 1, 2)
    assert -Vector4d(1, 2, 3, 4) == Vector4d(-1, -2, -3, -4)

def test_set_scalar_and_components():
    v = Vector3d().set(2.5)
    assert v == Vector3d(2.5, 2.5, 2.5)
    v.set_component(1, 7.0)
    assert v.get(1) == 7.0
    assert v[1] == 7.0
    assert list(v) == [2.5, 7.0, 2.5]
    with pytest.raises(IndexError):
        v.set_component(3, 1.0)

def test_cross_and_dot():
    x = Vector3d(1, 0, 0)
    y = Vector3d(0, 1, 0)
    assert x.cross(y, Vector3d()) == Vector3d(0, 0, 1)
    assert x.dot(y) == 0.0
    assert Vector4d(1, 2, 3, 4).dot(Vector4d(1, 1, 1, 1)) == 10.0

def test_normalize():
    v = Vector3d(3, 0, 4).normalize()
    assert v.equals(Vector3d(0.6, 0, 0.8), 1e-15)
    assert abs(Vector3d(1, 2, 3).normalize(5.0).length() - 5.0) < 1e-12
    with pytest.raises(ZeroDivisionError):
        Vector3d().normalize()

def test_normalize3_keeps_w_ratio():
    v = Vector4d(0, 3, 4, 10).normalize3()
    assert v.equals(Vector4d(0, 0.6, 0.8, 2.0), 1e-15)

def test_min_max_components():
    v = Vector3d(-4, 1, 2)
    assert v.max_component() == 0
    assert v.min_component() == 1
    assert Vector3d(1, 5, 2).min(Vector3d(3, 0, 2), Vector3d()) == Vector3d(1, 0, 2)
    assert Vector3d(1, 5, 2).max(Vector3d(3, 0, 2), Vector3d()) == Vector3d(3, 5, 2)

def test_round():
    v = Vector3d(0.5, -0.5, 1.7)
    assert v.round(RoundingMode.HALF_UP, Vector3d()) == Vector3d(1, -1, 2)
    assert v.round(RoundingMode.TRUNCATE, Vector3d()) == Vector3d(0, 0, 1)

def test_reflect():
    v = Vector3d(1, -1, 0).reflect(Vector3d(0, 1, 0))
    assert v == Vector3d(1, 1, 0)

def test_orthogonalize():
    v = Vector3d(1, 1, 0).orthogonalize(Vector3d(1, 0, 0))
    assert v.equals(Vector3d(0, 1, 0), 1e-15)

def test_rotate_axis_matches_rotate_z():
    a = Vector3d(1, 2, 3).rotate_axis(0.7, 0, 0, 1)
    b = Vector3d(1, 2, 3).rotate_z(0.7)
    assert a.equals(b, 1e-12)

def test_lerp():
    v = Vector2d(0, 0).lerp(Vector2d(2, 4), 0.25)
    assert v == Vector2d(0.5, 1.0)

def test_is_finite():
    assert Vector3d(1, 2, 3).is_finite()
    assert not Vector3d(1, math.nan, 3).is_finite()
    assert not Vector4d(0, 0, 0, math.inf).is_finite()

def test_equals_with_delta():
    assert Vector3d(1, 2, 3).equals(Vector3d(1, 2, 3 + 1e-7), 1e-6)
    assert not Vector3d(1, 2, 3).equals(Vector3d(1, 2, 3.1), 1e-6)

def test_vector2_matrix_products():
    m = Matrix2d().rotation(math.pi / 2)
    v = Vector2d(1, 0).mul_matrix(m)
    assert v.equals(Vector2d(0, 1), 1e-15)
    t = Matrix3x2d().translation(5, -1)
    assert Vector2d(1, 1).mul_position(t) == Vector2d(6, 0)
    # Directions ignore translation
    assert Vector2d(1, 1).mul_direction(t) == Vector2d(1, 1)

def test_vector3_matrix_products():
    m = Matrix4d().translation(1, 2, 3)
    assert Vector3d(1, 1, 1).mul_position(m) == Vector3d(2, 3, 4)
    assert Vector3d(1, 1, 1).mul_direction(m) == Vector3d(1, 1, 1)

def test_vector4_matrix_products():
    m = Matrix4d().translation(1, 2, 3)
    assert Vector4d(1, 1, 1, 1).mul_matrix(m) == Vector4d(2, 3, 4, 1)
    assert Vector4d(1, 1, 1, 0).mul_affine(m) == Vector4d(1, 1, 1, 0)
    p = Vector4d(2, 4, 6, 2).mul_project(Matrix4d())
    assert p == Vector4d(1, 2, 3, 1)

def test_mul_add_2d():
    v = Vector2d(1, 2).mul_add(3.0, Vector2d(1, 1))
    assert v == Vector2d(4, 7)
    v = Vector2d(1, 2).mul_add(Vector2d(2, 3), Vector2d(1, 1), Vector2d())
    assert v == Vector2d(3, 7)

def test_rotation_to_3d():
    q = Vector3d(1, 0, 0).rotation_to(Vector3d(0, 2, 0), Quaterniond())
    assert q.transform(Vector3d(1, 0, 0), Vector3d()).equals(Vector3d(0, 1, 0), 1e-12)
