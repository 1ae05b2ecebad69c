import math

import pytest
from linmath import FrustumIntersection, Matrix4d, Vector4d
from linmath.geometry import INSIDE, INTERSECT, OUTSIDE


def _perspective():
    return FrustumIntersection(Matrix4d().perspective(math.pi / 2, 1.0, 0.1, 100.0))


def test_sphere_ortho():
    c = FrustumIntersection(Matrix4d().ortho(-1, 1, -1, 1, -1, 1))
    assert c.test_sphere(1, 0, 0, 0.1)
    assert not c.test_sphere(1.2, 0, 0, 0.1)

def test_sphere_perspective():
    c = _perspective()
    assert c.test_sphere(1, 0, -2, 0.1)
    assert not c.test_sphere(4, 0, -2, 1.0)

def test_intersect_sphere():
    c = _perspective()
    assert c.intersect_sphere(0, 0, -10, 1.0) == INSIDE
    # centered on the near plane
    assert c.intersect_sphere(0, 0, -0.1, 0.5) == INTERSECT
    assert c.intersect_sphere(0, 0, 5, 1.0) == OUTSIDE

def test_intersect_aab_ortho():
    c = FrustumIntersection(Matrix4d().ortho(-1, 1, -1, 1, -1, 1))
    assert c.intersect_aab(-20, -2, 0, 20, 2, 0) == INTERSECT
    assert c.intersect_aab(-0.5, -0.5, -0.5, 0.5, 0.5, 0.5) == INSIDE
    assert c.intersect_aab(1.1, 0, 0, 2, 2, 2) == FrustumIntersection.PLANE_PX
    c.set(Matrix4d().ortho(-1, 1, -1, 1, -1, 1))
    assert c.intersect_aab(0, 0, 0, 2, 2, 2) == INTERSECT
    assert c.intersect_aab(1.1, 0, 0, 2, 2, 2) == FrustumIntersection.PLANE_PX

def test_intersect_aab_identity():
    c = FrustumIntersection(Matrix4d())
    assert c.intersect_aab(0.5, 0.5, 0.5, 2, 2, 2) == INTERSECT
    assert c.intersect_aab(1.5, 0.5, 0.5, 2, 2, 2) == FrustumIntersection.PLANE_PX
    assert c.intersect_aab(-2.5, 0.5, 0.5, -1.5, 2, 2) == FrustumIntersection.PLANE_NX
    assert c.intersect_aab(-0.5, -2.5, 0.5, 1.5, -2, 2) == FrustumIntersection.PLANE_NY

def test_intersect_aab_perspective():
    c = _perspective()
    assert c.intersect_aab(0, 0, -7, 1, 1, -5) == INSIDE
    assert c.intersect_aab(1.1, 0, 0, 2, 2, 2) == FrustumIntersection.PLANE_PX
    assert c.intersect_aab(4, 4, -3, 5, 5, -5) == FrustumIntersection.PLANE_PX
    assert c.intersect_aab(-6, -6, -2, -1, -4, -4) == FrustumIntersection.PLANE_NY

def test_point_perspective():
    c = _perspective()
    assert c.test_point(0, 0, -5)
    assert not c.test_point(0, 6, -5)

def test_aab_matches_intersect():
    c = _perspective()
    assert c.test_aab(0, 0, -7, 1, 1, -5)
    assert c.test_aab(-20, -20, -50, 20, 20, -40)
    assert not c.test_aab(1.1, 0, 0, 2, 2, 2)

def test_intersect_aab_mask():
    c = _perspective()
    # the masked-out plane is the only one rejecting these boxes
    assert c.intersect_aab(5.1, 0, -3, 8, 2, -2, ~0 ^ FrustumIntersection.PLANE_MASK_PX) == INTERSECT
    assert c.intersect_aab(-6.1, 0, -3, -5, 2, -2, ~0 ^ FrustumIntersection.PLANE_MASK_NX) == INTERSECT
    assert (c.intersect_aab(-6.1, 0, -3, -5, 2, -2, FrustumIntersection.PLANE_MASK_NX)
            == FrustumIntersection.PLANE_NX)

def test_intersect_aab_start_plane():
    c = _perspective()
    result = c.intersect_aab(-6.1, 0, -3, -5, 2, -2, ~0, start_plane=FrustumIntersection.PLANE_NX)
    assert result == FrustumIntersection.PLANE_NX
    # a start plane that does not reject falls through to the full test
    result = c.intersect_aab(0, 0, -7, 1, 1, -5, ~0, start_plane=FrustumIntersection.PLANE_PY)
    assert result == INSIDE

def test_planes_match_matrix():
    m = Matrix4d().perspective(1.1, 1.5, 0.5, 50.0).look_at(1, 2, 3, 0, 0, 0, 0, 1, 0)
    c = FrustumIntersection(m)
    for which in range(6):
        a, b, cc, d = c.plane(which)
        assert Vector4d(a, b, cc, d).equals(m.frustum_plane(which, Vector4d()), 1e-12)

def test_unnormalized_planes():
    m = Matrix4d().perspective(math.pi / 2, 1.0, 0.1, 100.0)
    c = FrustumIntersection(m, allow_test_spheres=False)
    a, b, cc, d = c.plane(FrustumIntersection.PLANE_NZ)
    assert (a, b) == (0.0, 0.0)
    assert cc == pytest.approx(-200 / 99.9)
    assert d == pytest.approx(-20 / 99.9)
    # culling results do not depend on normalization
    assert c.test_point(0, 0, -5)
    assert c.intersect_aab(1.1, 0, 0, 2, 2, 2) == FrustumIntersection.PLANE_PX

def test_distance_to_plane():
    c = FrustumIntersection(Matrix4d())
    d = c.distance_to_plane(0, 0, 0, 0.5, 0.5, 0.5, FrustumIntersection.PLANE_PX)
    assert d == pytest.approx(0.5)
    d = c.distance_to_plane(2, 0, 0, 3, 0.5, 0.5, FrustumIntersection.PLANE_PX)
    assert d == pytest.approx(-2.0)

def test_plane_xy():
    c = FrustumIntersection(Matrix4d())
    assert c.test_plane_xy(0, 0, 3, 3)
    assert not c.test_plane_xy(2, 2, 3, 3)
    assert c.test_plane_xz(-3, -3, -0.5, -0.5)
    assert not c.test_plane_xz(-3, 2, 3, 3)

def test_line_segment():
    c = _perspective()
    # starts inside and leaves through the far plane
    assert c.test_line_segment(0, 0, -5, 0, 0, -200)
    # crosses the view from left to right
    assert c.test_line_segment(-10, 0, -5, 10, 0, -5)
    # entirely left of the frustum
    assert not c.test_line_segment(-10, 0, -1, -10, 0, -2)
    # behind the camera
    assert not c.test_line_segment(-3, 0, -1, 0, 0, 5)
