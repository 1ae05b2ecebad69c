import math

import pytest
from linmath import Matrix3d, Matrix4d, Matrix4x3d, Quaterniond, Vector3d, Vector4d


def test_look_at_matches_rotate_translate():
    m1 = Matrix4x3d().set_look_at(0, 2, 3, 0, 0, 0, 0, 1, 0)
    # pitch down towards the origin, then move the eye to the origin
    m2 = Matrix4x3d().rotate_x(math.atan2(2, 3)).translate(0, -2, -3)
    assert m1.equals(m2, 1e-12)

def test_look_at_maps_eye_and_center():
    m = Matrix4x3d().set_look_at(1, 2, 3, 4, 2, -1, 0, 1, 0)
    assert m.transform_position(Vector3d(1, 2, 3)).equals(Vector3d(0, 0, 0), 1e-12)
    assert m.transform_position(Vector3d(4, 2, -1)).equals(Vector3d(0, 0, -5), 1e-12)

def test_positive_axes_identity():
    m = Matrix4x3d()
    assert m.positive_x(Vector3d()) == Vector3d(1, 0, 0)
    assert m.positive_y(Vector3d()) == Vector3d(0, 1, 0)
    assert m.positive_z(Vector3d()) == Vector3d(0, 0, 1)

def test_positive_axes_rotated():
    m = Matrix4x3d().rotation_y(math.pi / 2)
    # +X after rotation comes from +Z before it
    assert m.positive_x(Vector3d()).equals(Vector3d(0, 0, 1), 1e-12)
    assert m.positive_z(Vector3d()).equals(Vector3d(-1, 0, 0), 1e-12)

def test_positive_axes_match_inverse():
    m = Matrix4x3d().rotation_xyz(0.12, 1.25, -2.56).scale(2, 3, 4).translate(1, 2, 3)
    inv = m.invert(Matrix4x3d())
    for axis, unit in ((m.positive_x(Vector3d()), Vector3d(1, 0, 0)),
                       (m.positive_y(Vector3d()), Vector3d(0, 1, 0)),
                       (m.positive_z(Vector3d()), Vector3d(0, 0, 1))):
        expected = inv.transform_direction(unit).normalize()
        assert axis.equals(expected, 1e-12)

def test_normalized_positive_axes_of_rotation():
    m = Matrix4x3d().rotation_xyz(0.3, -0.7, 1.1)
    assert m.normalized_positive_y(Vector3d()).equals(m.positive_y(Vector3d()), 1e-12)

def test_normal_of_uniform_scale():
    r = Matrix4x3d().rotation_xyz(0.4, 0.5, 0.6)
    m = r.copy().scale(2.0).translate(5, 6, 7)
    n = m.normal(Matrix4x3d())
    # translation is dropped, the 3x3 part is R / 2
    assert (n.m30, n.m31, n.m32) == (0.0, 0.0, 0.0)
    assert n.normalize3x3().equals(r, 1e-12)

def test_normal_into_matrix3():
    m = Matrix4x3d().rotation_z(0.3).scale(1, 2, 3)
    n = m.normal(Matrix3d())
    assert n.equals(Matrix3d().set(m).normal(), 1e-12)

def test_invert_round_trip():
    m = Matrix4x3d().rotation_xyz(0.1, 0.2, 0.3).translate(1, 2, 3).scale(1, 2, 3)
    inv = m.invert(Matrix4x3d())
    assert m.mul(inv, Matrix4x3d()).equals(Matrix4x3d(), 1e-12)
    assert inv.mul(m, Matrix4x3d()).equals(Matrix4x3d(), 1e-12)

def test_invert_singular():
    with pytest.raises(ZeroDivisionError):
        Matrix4x3d().scaling(0, 1, 1).invert()

def test_rotate_order_matches_rotation_xyz():
    a, b, c = 0.12, 1.25, -2.56
    m = Matrix4x3d().rotate_x(a).rotate_y(b).rotate_z(c)
    assert m.equals(Matrix4x3d().rotation_xyz(a, b, c), 1e-12)
    m = Matrix4x3d().rotate_z(c).rotate_y(b).rotate_x(a)
    assert m.equals(Matrix4x3d().rotation_zyx(c, b, a), 1e-12)
    m = Matrix4x3d().rotate_y(b).rotate_x(a).rotate_z(c)
    assert m.equals(Matrix4x3d().rotation_yxz(b, a, c), 1e-12)

def test_rotate_xyz_on_translation():
    t = Matrix4x3d().translation(1, 2, 3)
    m = t.copy().rotate_xyz(0.1, 0.2, 0.3)
    expected = t.mul(Matrix4x3d().rotation_xyz(0.1, 0.2, 0.3), Matrix4x3d())
    assert m.equals(expected, 1e-12)

def test_translate_then_rotate_order():
    m = Matrix4x3d().translate(1, 0, 0).rotate_z(math.pi / 2)
    # rotation applies first, then translation
    p = m.transform_position(Vector3d(1, 0, 0))
    assert p.equals(Vector3d(1, 1, 0), 1e-12)

def test_translate_local():
    m = Matrix4x3d().rotation_z(math.pi / 2).translate_local(1, 0, 0)
    p = m.transform_position(Vector3d(1, 0, 0))
    assert p.equals(Vector3d(1, 1, 0), 1e-12)

def test_transform_direction_ignores_translation():
    m = Matrix4x3d().translation(5, 6, 7)
    assert m.transform_direction(Vector3d(1, 2, 3)) == Vector3d(1, 2, 3)
    v = m.transform(Vector4d(1, 2, 3, 0))
    assert v == Vector4d(1, 2, 3, 0)
    v = m.transform(Vector4d(1, 2, 3, 1))
    assert v == Vector4d(6, 8, 10, 1)

def test_set_quaternion_matches_rotation():
    q = Quaterniond().rotation_xyz(0.3, 0.2, 0.1)
    m = Matrix4x3d().set_quaternion(q)
    assert m.equals(Matrix4x3d().rotation_xyz(0.3, 0.2, 0.1), 1e-12)

def test_euler_angles_round_trip():
    m = Matrix4x3d().rotation_xyz(0.3, -0.4, 1.1)
    angles = m.get_euler_angles_xyz(Vector3d())
    assert angles.equals(Vector3d(0.3, -0.4, 1.1), 1e-12)

def test_get_scale_and_translation():
    m = Matrix4x3d().translation(1, 2, 3).rotate_y(0.7).scale(2, 3, 4)
    assert m.get_scale(Vector3d()).equals(Vector3d(2, 3, 4), 1e-12)
    assert m.get_translation(Vector3d()) == Vector3d(1, 2, 3)

def test_transpose3x3_keeps_translation():
    m = Matrix4x3d(1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12)
    t = m.transpose3x3(Matrix4x3d())
    assert t.to_tuple() == (1, 4, 7, 2, 5, 8, 3, 6, 9, 10, 11, 12)
    t3 = m.transpose3x3(Matrix3d())
    assert t3.to_tuple() == (1, 4, 7, 2, 5, 8, 3, 6, 9)

def test_set_from_matrix4d():
    m4 = Matrix4d().rotation_x(0.3).translate(1, 2, 3)
    m = Matrix4x3d().set(m4)
    assert m.equals(Matrix4x3d().rotation_x(0.3).translate(1, 2, 3), 1e-15)

def test_get_set_element():
    m = Matrix4x3d().set_element(3, 1, 7.0)
    assert m.get(3, 1) == 7.0
    assert m.m31 == 7.0
    with pytest.raises(IndexError):
        m.get(4, 0)
    with pytest.raises(IndexError):
        m.set_element(0, 3, 1.0)

def test_operators():
    a = Matrix4x3d().translation(1, 0, 0)
    b = Matrix4x3d().translation(0, 2, 0)
    c = a @ b
    assert c == Matrix4x3d().translation(1, 2, 0)
    # operators never touch their operands
    assert a == Matrix4x3d().translation(1, 0, 0)
    assert (c @ Vector3d(0, 0, 3)) == Vector3d(1, 2, 3)
    with pytest.raises(TypeError):
        hash(c)

def test_to_bytes():
    m = Matrix4x3d()
    data = m.to_bytes()
    assert len(data) == 12 * 4
