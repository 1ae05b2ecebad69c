# linmath/geometry/frustum.py
"""
FrustumIntersection - culling against the six planes of a view-projection.

The planes are extracted once by set() and cached; change the camera and
call set() again. With allow_test_spheres the planes are normalized so
plane distances are in world units, which the sphere tests need.
"""

from __future__ import annotations
import math
from typing import List, Optional, Tuple

from ..matrix.properties import (
    PLANE_NX, PLANE_PX, PLANE_NY, PLANE_PY, PLANE_NZ, PLANE_PZ,
)

Plane = Tuple[float, float, float, float]

INTERSECT = -1
INSIDE = -2
OUTSIDE = -3

PLANE_MASK_NX = 1 << PLANE_NX
PLANE_MASK_PX = 1 << PLANE_PX
PLANE_MASK_NY = 1 << PLANE_NY
PLANE_MASK_PY = 1 << PLANE_PY
PLANE_MASK_NZ = 1 << PLANE_NZ
PLANE_MASK_PZ = 1 << PLANE_PZ


class FrustumIntersection:
    """Point, sphere, box and segment tests against a cached frustum."""

    INTERSECT = INTERSECT
    INSIDE = INSIDE
    OUTSIDE = OUTSIDE

    PLANE_NX = PLANE_NX
    PLANE_PX = PLANE_PX
    PLANE_NY = PLANE_NY
    PLANE_PY = PLANE_PY
    PLANE_NZ = PLANE_NZ
    PLANE_PZ = PLANE_PZ

    PLANE_MASK_NX = PLANE_MASK_NX
    PLANE_MASK_PX = PLANE_MASK_PX
    PLANE_MASK_NY = PLANE_MASK_NY
    PLANE_MASK_PY = PLANE_MASK_PY
    PLANE_MASK_NZ = PLANE_MASK_NZ
    PLANE_MASK_PZ = PLANE_MASK_PZ

    def __init__(self, matrix=None, allow_test_spheres: bool = True):
        self._planes: List[Plane] = [(0.0, 0.0, 0.0, 0.0)] * 6
        if matrix is not None:
            self.set(matrix, allow_test_spheres)

    def set(self, m, allow_test_spheres: bool = True) -> FrustumIntersection:
        """Extract the planes of the Matrix4d m (a projection or view-projection)."""
        planes = []
        for row in range(3):
            col = (m.get(0, row), m.get(1, row), m.get(2, row), m.get(3, row))
            for sign in (1.0, -1.0):
                a = m.m03 + sign * col[0]
                b = m.m13 + sign * col[1]
                c = m.m23 + sign * col[2]
                d = m.m33 + sign * col[3]
                if allow_test_spheres:
                    inv = 1.0 / math.sqrt(a * a + b * b + c * c)
                    a, b, c, d = a * inv, b * inv, c * inv, d * inv
                planes.append((a, b, c, d))
        self._planes = planes
        return self

    def plane(self, which: int) -> Plane:
        """Cached plane PLANE_* as (a, b, c, d)."""
        return self._planes[which]

    # =========================================================================
    # Points and spheres
    # =========================================================================

    def test_point(self, x: float, y: float, z: float) -> bool:
        return all(a * x + b * y + c * z + d >= 0 for a, b, c, d in self._planes)

    def test_sphere(self, x: float, y: float, z: float, r: float) -> bool:
        """Whether the sphere is at least partly inside. Conservative near edges."""
        return all(a * x + b * y + c * z + d >= -r for a, b, c, d in self._planes)

    def intersect_sphere(self, x: float, y: float, z: float, r: float) -> int:
        """INSIDE, INTERSECT or OUTSIDE."""
        inside = True
        for a, b, c, d in self._planes:
            dist = a * x + b * y + c * z + d
            if dist < -r:
                return OUTSIDE
            inside = inside and dist >= r
        return INSIDE if inside else INTERSECT

    # =========================================================================
    # Boxes
    # =========================================================================

    def test_aab(self, min_x: float, min_y: float, min_z: float,
                 max_x: float, max_y: float, max_z: float) -> bool:
        """Whether the box is at least partly inside. Conservative near edges."""
        for a, b, c, d in self._planes:
            # corner furthest along the plane normal
            if (a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y)
                    + c * (min_z if c < 0 else max_z)) < -d:
                return False
        return True

    def test_plane_xy(self, min_x: float, min_y: float, max_x: float, max_y: float) -> bool:
        """test_aab for a rectangle in the plane z = 0."""
        for a, b, c, d in self._planes:
            if a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y) < -d:
                return False
        return True

    def test_plane_xz(self, min_x: float, min_z: float, max_x: float, max_z: float) -> bool:
        """test_aab for a rectangle in the plane y = 0."""
        for a, b, c, d in self._planes:
            if a * (min_x if a < 0 else max_x) + c * (min_z if c < 0 else max_z) < -d:
                return False
        return True

    def intersect_aab(self, min_x: float, min_y: float, min_z: float,
                      max_x: float, max_y: float, max_z: float,
                      mask: int = -1, start_plane: Optional[int] = None) -> int:
        """Classify a box against the frustum.

        Returns INSIDE, INTERSECT, or the PLANE_* index of the first plane
        that rejects the box. Only planes whose bit is set in mask can reject;
        all planes still decide between INSIDE and INTERSECT. start_plane is
        tested first, typically the plane that rejected the box last frame.
        """
        if start_plane is not None and mask & (1 << start_plane):
            a, b, c, d = self._planes[start_plane]
            if (a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y)
                    + c * (min_z if c < 0 else max_z)) < -d:
                return start_plane
        inside = True
        for i, (a, b, c, d) in enumerate(self._planes):
            if mask & (1 << i) and (a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y)
                                    + c * (min_z if c < 0 else max_z)) < -d:
                return i
            # nearest corner decides whether the box crosses this plane
            inside = inside and (a * (max_x if a < 0 else min_x) + b * (max_y if b < 0 else min_y)
                                 + c * (max_z if c < 0 else min_z)) >= -d
        return INSIDE if inside else INTERSECT

    def distance_to_plane(self, min_x: float, min_y: float, min_z: float,
                          max_x: float, max_y: float, max_z: float, plane: int) -> float:
        """Signed distance from plane to the box corner nearest to it."""
        a, b, c, d = self._planes[plane]
        return (a * (max_x if a < 0 else min_x) + b * (max_y if b < 0 else min_y)
                + c * (max_z if c < 0 else min_z) + d)

    # =========================================================================
    # Segments
    # =========================================================================

    def test_line_segment(self, a_x: float, a_y: float, a_z: float,
                          b_x: float, b_y: float, b_z: float) -> bool:
        """Whether any part of the segment a-b lies inside.

        The segment is clipped plane by plane; the part outside each plane
        is cut off before the next one is tested.
        """
        last = len(self._planes) - 1
        for i, (a, b, c, d) in enumerate(self._planes):
            da = a * a_x + b * a_y + c * a_z + d
            db = a * b_x + b * b_y + c * b_z + d
            if i == last:
                return da >= 0.0 or db >= 0.0
            if da < 0.0 and db < 0.0:
                return False
            if da * db < 0.0:
                p = abs(da) / abs(db - da)
                cx = a_x + (b_x - a_x) * p
                cy = a_y + (b_y - a_y) * p
                cz = a_z + (b_z - a_z) * p
                if da < 0.0:
                    a_x, a_y, a_z = cx, cy, cz
                else:
                    b_x, b_y, b_z = cx, cy, cz
        return True
