import pytest
from linmath import RayAabIntersection

BOX = (-0.5, -0.5, -0.5, 0.5, 0.5, 0.5)


@pytest.mark.parametrize("ray", [
    (-1, 0, 0, 1, 0, 0),
    (0, -1, 0, 0, 1, 0),
    (0, 0, -1, 0, 0, 1),
    (1, 0, 0, -1, 0, 0),
    (0, 1, 0, 0, -1, 0),
    (0, 0, 1, 0, 0, -1),
    (-1, -1, 0, 1, 1, 0),
])
def test_axis_rays_hit(ray):
    r = RayAabIntersection()
    r.set(*ray)
    assert r.test(*BOX)

def test_edges():
    r = RayAabIntersection()
    # faces count as hits
    assert r.set(-1, 0.5, 0, 1, 0, 0).test(*BOX)
    assert not r.set(-1, 0.500001, 0, 1, 0, 0).test(*BOX)
    assert r.set(-1, -0.5, 0, 1, 0, 0).test(*BOX)
    assert not r.set(-1, -0.500001, 0, 1, 0, 0).test(*BOX)

def test_pointing_away():
    r = RayAabIntersection(-1, 0, 0, -1, 0, 0)
    assert not r.test(*BOX)

def test_origin_inside():
    r = RayAabIntersection(0.1, 0.2, 0.3, 0.3, -0.7, 0.2)
    assert r.test(*BOX)

def test_zero_direction():
    r = RayAabIntersection(0, 0, 0, 0, 0, 0)
    assert not r.test(*BOX)

def test_diagonal_miss():
    r = RayAabIntersection(-2, 0, 0, 1, 1, 0)
    # passes above the box: y = x + 2 enters y = 0.5 at x = -1.5
    assert not r.test(*BOX)
    r.set(-1, 0, 0, 1, 1, 0)
    assert r.test(*BOX)
