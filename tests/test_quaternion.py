import math
import random

import pytest
from linmath import Matrix3d, Matrix4d, Quaterniond, Vector3d, Vector4d


def test_default_is_identity():
    q = Quaterniond()
    assert q.to_tuple() == (0.0, 0.0, 0.0, 1.0)

def test_mul_by_identity():
    q = Quaterniond().rotation_xyz(0.3, -0.2, 1.1)
    r = q.mul(Quaterniond(), Quaterniond())
    assert r == q
    r = Quaterniond().mul(q, Quaterniond())
    assert r == q

def test_mul_conjugate_is_identity():
    q = Quaterniond().rotation_xyz(0.3, -0.2, 1.1)
    r = q.mul(q.conjugate(Quaterniond()), Quaterniond())
    assert r.equals(Quaterniond(), 1e-12)

def test_mul_conjugate_non_unit():
    q = Quaterniond(1, 2, 3, 4)
    r = q.mul(q.conjugate(Quaterniond()), Quaterniond())
    # (0, 0, 0, q . q)
    assert r.equals(Quaterniond(0, 0, 0, 30), 1e-12)

def test_invert_non_unit():
    q = Quaterniond(1, 2, 3, 4)
    r = q.invert(Quaterniond()).mul(q, Quaterniond())
    assert r.equals(Quaterniond(), 1e-12)

def test_premul():
    a = Quaterniond().rotation_x(0.3)
    b = Quaterniond().rotation_y(0.5)
    assert a.premul(b, Quaterniond()) == b.mul(a, Quaterniond())

def test_difference():
    a = Quaterniond().rotation_xyz(0.1, 0.2, 0.3)
    b = Quaterniond().rotation_zyx(-0.4, 0.5, 0.6)
    d = a.difference(b, Quaterniond())
    # a * d == b
    assert a.mul(d, Quaterniond()).equals(b, 1e-12)

def test_normalize():
    q = Quaterniond(0, 0, 3, 4).normalize()
    assert q.equals(Quaterniond(0, 0, 0.6, 0.8), 1e-15)
    with pytest.raises(ZeroDivisionError):
        Quaterniond(0, 0, 0, 0).normalize()

@pytest.mark.parametrize("angles", [(0.12, 0.0623, 0.95), (-1.3, 0.4, 2.7), (0.0, 1.5, -0.3)])
def test_rotation_xyz_matches_matrix(angles):
    q = Quaterniond().rotation_xyz(*angles)
    m = Matrix4d().set_quaternion(q)
    assert m.equals(Matrix4d().rotation_xyz(*angles), 1e-12)

@pytest.mark.parametrize("angles", [(0.12, 0.0623, 0.95), (-1.3, 0.4, 2.7), (0.0, 1.5, -0.3)])
def test_rotation_zyx_matches_matrix(angles):
    q = Quaterniond().rotation_zyx(*angles)
    m = Matrix4d().set_quaternion(q)
    assert m.equals(Matrix4d().rotation_zyx(*angles), 1e-12)

@pytest.mark.parametrize("angles", [(0.12, 0.0623, 0.95), (-1.3, 0.4, 2.7), (0.0, 1.5, -0.3)])
def test_rotation_yxz_matches_matrix(angles):
    q = Quaterniond().rotation_yxz(*angles)
    m = Matrix4d().set_quaternion(q)
    assert m.equals(Matrix4d().rotation_yxz(*angles), 1e-12)

def test_rotate_sequence_matches_rotation():
    a, b, c = 0.12, 0.0623, 0.95
    q = Quaterniond().rotate_x(a).rotate_y(b).rotate_z(c)
    assert q.equals(Quaterniond().rotation_xyz(a, b, c), 1e-12)
    q = Quaterniond().rotate_z(c).rotate_y(b).rotate_x(a)
    assert q.equals(Quaterniond().rotation_zyx(c, b, a), 1e-12)
    q = Quaterniond().rotate_y(b).rotate_x(a).rotate_z(c)
    assert q.equals(Quaterniond().rotation_yxz(b, a, c), 1e-12)

def test_rotate_same_order_as_matrix():
    q = Quaterniond().rotate_x(0.4).rotate_y(-0.9)
    m = Matrix4d().rotate_x(0.4).rotate_y(-0.9)
    assert Matrix4d().set_quaternion(q).equals(m, 1e-12)

def test_rotate_euler_on_existing_rotation():
    base = Quaterniond().rotation_y(0.7)
    q = base.rotate_xyz(0.1, 0.2, 0.3, Quaterniond())
    expected = base.mul(Quaterniond().rotation_xyz(0.1, 0.2, 0.3), Quaterniond())
    assert q.equals(expected, 1e-12)

def test_rotate_local():
    q = Quaterniond().rotation_y(0.7)
    r = q.rotate_local_x(0.3, Quaterniond())
    assert r.equals(Quaterniond().rotation_x(0.3).mul(q, Quaterniond()), 1e-15)

def test_from_axis_angle():
    q = Quaterniond().from_axis_angle_rad(Vector3d(0, 2, 0), 0.5)
    # the axis does not need to be unit length
    assert q.equals(Quaterniond().rotation_y(0.5), 1e-15)
    q = Quaterniond().from_axis_angle_deg_xyz(0, 0, 1, 90)
    assert q.equals(Quaterniond().rotation_z(math.pi / 2), 1e-15)
    q = Quaterniond().rotation_axis(0.5, 1, 0, 0)
    assert q.equals(Quaterniond().rotation_x(0.5), 1e-15)

def test_angle():
    assert Quaterniond().rotation_x(0.5).angle() == pytest.approx(0.5, abs=1e-12)
    assert Quaterniond().angle() == 0.0

def test_rotate_to():
    src = Vector3d(1, 2, 3)
    dst = Vector3d(-3, 0.5, 1)
    q = Quaterniond().rotation_to(src, dst)
    out = q.transform(src.copy().normalize())
    assert out.equals(dst.copy().normalize(), 1e-12)

def test_rotate_to_returns_dest():
    q = Quaterniond()
    dest = Quaterniond()
    r = q.rotate_to(1, 0, 0, 0, 1, 0, dest)
    assert r is dest
    # self is untouched when a dest is given
    assert q == Quaterniond()
    assert dest.transform(Vector3d(1, 0, 0)).equals(Vector3d(0, 1, 0), 1e-12)

def test_rotate_to_opposite():
    q = Quaterniond().rotation_to(Vector3d(1, 0, 0), Vector3d(-1, 0, 0))
    assert q.transform(Vector3d(1, 0, 0)).equals(Vector3d(-1, 0, 0), 1e-12)
    assert q.length_squared() == pytest.approx(1.0)
    # falls back to another axis when (y, -x, 0) is zero
    q = Quaterniond().rotation_to(Vector3d(0, 0, 2), Vector3d(0, 0, -1))
    assert q.transform(Vector3d(0, 0, 1)).equals(Vector3d(0, 0, -1), 1e-12)

def test_look_along():
    q = Quaterniond().look_along(Vector3d(1, 0, 0), Vector3d(0, 1, 0))
    assert q.transform(Vector3d(1, 0, 0)).equals(Vector3d(0, 0, -1), 1e-12)
    assert q.transform(Vector3d(0, 1, 0)).equals(Vector3d(0, 1, 0), 1e-12)
    m = Matrix3d().set_look_along(Vector3d(1, 0, 0), Vector3d(0, 1, 0))
    assert Matrix3d().set_quaternion(q).equals(m, 1e-12)

def test_set_from_matrix():
    m = Matrix3d().rotation_xyz(0.3, -0.6, 2.9)
    q = Quaterniond().set_from_normalized(m)
    assert Matrix3d().set_quaternion(q).equals(m, 1e-12)
    scaled = m.copy().scale(2, 3, 4)
    q = Quaterniond().set_from_unnormalized(scaled)
    assert Matrix3d().set_quaternion(q).equals(m, 1e-12)

def test_slerp_endpoints():
    a = Quaterniond().rotation_x(0.2)
    b = Quaterniond().rotation_y(1.3)
    assert a.slerp(b, 0.0, Quaterniond()).equals(a, 1e-12)
    assert a.slerp(b, 1.0, Quaterniond()).equals(b, 1e-12)

def test_slerp_midpoint():
    a = Quaterniond().rotation_z(0.0)
    b = Quaterniond().rotation_z(1.0)
    assert a.slerp(b, 0.5, Quaterniond()).equals(Quaterniond().rotation_z(0.5), 1e-12)

def test_slerp_shorter_arc():
    a = Quaterniond().rotation_z(0.2)
    b = -Quaterniond().rotation_z(0.6)
    # b and -b are the same rotation, the result must not swing the long way
    r = a.slerp(b, 0.5, Quaterniond())
    assert Matrix3d().set_quaternion(r).equals(Matrix3d().rotation_z(0.4), 1e-12)

def test_slerp_nearly_parallel():
    a = Quaterniond().rotation_z(0.3)
    b = Quaterniond().rotation_z(0.3 + 1e-9)
    r = a.slerp(b, 0.5, Quaterniond())
    assert r.equals(a, 1e-9)

def test_nlerp():
    a = Quaterniond().rotation_x(0.2)
    b = Quaterniond().rotation_y(1.3)
    assert a.nlerp(b, 0.0, Quaterniond()).equals(a, 1e-12)
    assert a.nlerp(b, 1.0, Quaterniond()).equals(b, 1e-12)
    assert a.nlerp(b, 0.3, Quaterniond()).length_squared() == pytest.approx(1.0)

def test_transform():
    q = Quaterniond().rotation_z(math.pi / 2)
    assert q.transform(Vector3d(1, 0, 0)).equals(Vector3d(0, 1, 0), 1e-15)
    assert q.transform_inverse(Vector3d(0, 1, 0)).equals(Vector3d(1, 0, 0), 1e-15)
    assert q.transform_unit(Vector3d(1, 0, 0)).equals(Vector3d(0, 1, 0), 1e-15)
    v = q.transform(Vector4d(1, 0, 0, 7))
    assert v.equals(Vector4d(0, 1, 0, 7), 1e-15)

def test_transform_non_unit():
    q = Quaterniond().rotation_x(0.8)
    scaled = Quaterniond(q.x * 3, q.y * 3, q.z * 3, q.w * 3)
    v = Vector3d(0.2, -1.0, 4.0)
    assert scaled.transform(v, Vector3d()).equals(q.transform(v, Vector3d()), 1e-12)

def test_transform_positive_axes():
    q = Quaterniond().rotation_xyz(0.3, 0.4, 0.5)
    assert q.transform_positive_x(Vector3d()).equals(q.transform(Vector3d(1, 0, 0)), 1e-12)
    assert q.transform_positive_y(Vector3d()).equals(q.transform(Vector3d(0, 1, 0)), 1e-12)
    assert q.transform_positive_z(Vector3d()).equals(q.transform(Vector3d(0, 0, 1)), 1e-12)

def test_euler_angles_examples():
    q = Quaterniond().rotation_xyz(0.3, -0.4, 1.1)
    assert q.get_euler_angles_xyz(Vector3d()).equals(Vector3d(0.3, -0.4, 1.1), 1e-12)
    q = Quaterniond().rotation_zyx(1.1, -0.4, 0.3)
    assert q.get_euler_angles_zyx(Vector3d()).equals(Vector3d(0.3, -0.4, 1.1), 1e-12)
    q = Quaterniond().rotation_yxz(-0.4, 0.3, 1.1)
    assert q.get_euler_angles_yxz(Vector3d()).equals(Vector3d(0.3, -0.4, 1.1), 1e-12)

def test_euler_angles_zxy():
    # Rz * Rx * Ry
    q = Quaterniond().rotate_z(1.1).rotate_x(0.3).rotate_y(-0.4)
    assert q.get_euler_angles_zxy(Vector3d()).equals(Vector3d(0.3, -0.4, 1.1), 1e-12)

def _round_trip_failure_rate(build, extract, rebuild, trials=20000):
    rnd = random.Random(12345)
    failures = 0
    for _ in range(trials):
        x = rnd.uniform(-math.pi, math.pi)
        y = rnd.uniform(-math.pi, math.pi)
        z = rnd.uniform(-math.pi, math.pi)
        q = build(x, y, z)
        angles = extract(q, Vector3d())
        r = rebuild(angles.x, angles.y, angles.z)
        for _ in range(10):
            v = Vector3d(rnd.uniform(-1, 1), rnd.uniform(-1, 1), rnd.uniform(-1, 1))
            if not q.transform(v, Vector3d()).equals(r.transform(v, Vector3d()), 1e-10):
                failures += 1
                break
    return failures / trials

def test_euler_xyz_round_trip():
    rate = _round_trip_failure_rate(
        lambda x, y, z: Quaterniond().rotate_xyz(x, y, z),
        Quaterniond.get_euler_angles_xyz,
        lambda x, y, z: Quaterniond().rotate_x(x).rotate_y(y).rotate_z(z))
    # only rotations right at gimbal lock may differ
    assert rate <= 0.0001

def test_euler_zyx_round_trip():
    rate = _round_trip_failure_rate(
        lambda x, y, z: Quaterniond().rotate_zyx(z, y, x),
        Quaterniond.get_euler_angles_zyx,
        lambda x, y, z: Quaterniond().rotate_z(z).rotate_y(y).rotate_x(x))
    assert rate <= 0.0001

def test_euler_yxz_round_trip():
    rate = _round_trip_failure_rate(
        lambda x, y, z: Quaterniond().rotate_yxz(y, x, z),
        Quaterniond.get_euler_angles_yxz,
        lambda x, y, z: Quaterniond().rotate_y(y).rotate_x(x).rotate_z(z))
    assert rate <= 0.0001

def test_euler_round_trip_matches_matrix():
    # the rebuilt quaternion and a matrix built the same way agree
    q = Quaterniond().rotate_x(2.5).rotate_y(-3.0).rotate_z(1.7)
    angles = q.get_euler_angles_xyz(Vector3d())
    m = Matrix4d().rotate_x(angles.x).rotate_y(angles.y).rotate_z(angles.z)
    v = Vector3d(0.3, -0.8, 0.5)
    assert m.transform_direction(v, Vector3d()).equals(q.transform(v, Vector3d()), 1e-12)

def test_operators():
    a = Quaterniond().rotation_x(0.3)
    b = Quaterniond().rotation_x(0.4)
    assert (a @ b).equals(Quaterniond().rotation_x(0.7), 1e-15)
    assert a == Quaterniond().rotation_x(0.3)
    v = a @ Vector3d(0, 1, 0)
    assert v.equals(Vector3d(0, math.cos(0.3), math.sin(0.3)), 1e-15)
    assert (-a).to_tuple() == (-a.x, -a.y, -a.z, -a.w)
    with pytest.raises(TypeError):
        a @ 2.0
