# linmath/geometry/ray_aabb.py
"""
RayAabIntersection - repeated ray vs axis-aligned box tests.

set() stores the ray and precomputes what every box test needs: the
reciprocal of each direction component and its sign. The ray starts at
the origin and extends forward only. Box faces count as hits.
"""

from __future__ import annotations
import math
from typing import Tuple


def _sign(v: float) -> int:
    if v > 0.0:
        return 1
    if v < 0.0:
        return -1
    return 0


class RayAabIntersection:
    """Slab test of one ray against many boxes."""

    def __init__(self, origin_x: float = 0.0, origin_y: float = 0.0, origin_z: float = 0.0,
                 dir_x: float = 0.0, dir_y: float = 0.0, dir_z: float = 0.0):
        self.set(origin_x, origin_y, origin_z, dir_x, dir_y, dir_z)

    def set(self, origin_x: float, origin_y: float, origin_z: float,
            dir_x: float, dir_y: float, dir_z: float) -> RayAabIntersection:
        self.origin: Tuple[float, float, float] = (origin_x, origin_y, origin_z)
        self.direction: Tuple[float, float, float] = (dir_x, dir_y, dir_z)
        self.classification: Tuple[int, int, int] = (_sign(dir_x), _sign(dir_y), _sign(dir_z))
        # Zero components never divide; their slab is checked against the origin
        self.inv_direction: Tuple[float, float, float] = tuple(
            1.0 / d if d != 0.0 else math.inf for d in (dir_x, dir_y, dir_z))
        return self

    def test(self, min_x: float, min_y: float, min_z: float,
             max_x: float, max_y: float, max_z: float) -> bool:
        """Whether the ray hits the box [min, max]."""
        if self.classification == (0, 0, 0):
            return False
        t_near = 0.0
        t_far = math.inf
        for o, inv, s, lo, hi in zip(self.origin, self.inv_direction, self.classification,
                                     (min_x, min_y, min_z), (max_x, max_y, max_z)):
            if s == 0:
                if o < lo or o > hi:
                    return False
                continue
            t0 = (lo - o) * inv
            t1 = (hi - o) * inv
            if s < 0:
                t0, t1 = t1, t0
            t_near = max(t_near, t0)
            t_far = min(t_far, t1)
            if t_near > t_far:
                return False
        return True
