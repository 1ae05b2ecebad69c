# linmath/geometry/__init__.py
"""Frustum culling, ray/box tests and triangle helpers."""

from linmath.geometry.frustum import FrustumIntersection, INTERSECT, INSIDE, OUTSIDE
from linmath.geometry.ray_aabb import RayAabIntersection
from linmath.geometry import utils as geometry_utils

__all__ = [
    "FrustumIntersection", "INTERSECT", "INSIDE", "OUTSIDE",
    "RayAabIntersection", "geometry_utils",
]
