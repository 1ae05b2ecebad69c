# linmath/geometry/utils.py
"""
Triangle and basis helpers: face normals, tangent space from UVs, and
orthonormal vectors perpendicular to a given direction.
"""

from __future__ import annotations
import math
from typing import Tuple

from ..vector.vector2 import Vector2d
from ..vector.vector3 import Vector3d


def normal(v0: Vector3d, v1: Vector3d, v2: Vector3d, dest: Vector3d) -> Vector3d:
    """Unit normal of the counter-clockwise triangle v0, v1, v2."""
    ex, ey, ez = v1.x - v0.x, v1.y - v0.y, v1.z - v0.z
    fx, fy, fz = v2.x - v0.x, v2.y - v0.y, v2.z - v0.z
    return dest.set(ey * fz - ez * fy, ez * fx - ex * fz, ex * fy - ey * fx).normalize()


def tangent(v1: Vector3d, uv1: Vector2d, v2: Vector3d, uv2: Vector2d,
            v3: Vector3d, uv3: Vector2d, dest: Vector3d) -> Vector3d:
    """Unit tangent (direction of increasing u) of a textured triangle."""
    dv1 = uv2.y - uv1.y
    dv2 = uv3.y - uv1.y
    f = 1.0 / ((uv2.x - uv1.x) * dv2 - (uv3.x - uv1.x) * dv1)
    return dest.set(f * (dv2 * (v2.x - v1.x) - dv1 * (v3.x - v1.x)),
                    f * (dv2 * (v2.y - v1.y) - dv1 * (v3.y - v1.y)),
                    f * (dv2 * (v2.z - v1.z) - dv1 * (v3.z - v1.z))).normalize()


def bitangent(v1: Vector3d, uv1: Vector2d, v2: Vector3d, uv2: Vector2d,
              v3: Vector3d, uv3: Vector2d, dest: Vector3d) -> Vector3d:
    """Unit bitangent (direction of increasing v) of a textured triangle."""
    du1 = uv2.x - uv1.x
    du2 = uv3.x - uv1.x
    f = 1.0 / (du1 * (uv3.y - uv1.y) - du2 * (uv2.y - uv1.y))
    return dest.set(f * (-du2 * (v2.x - v1.x) + du1 * (v3.x - v1.x)),
                    f * (-du2 * (v2.y - v1.y) + du1 * (v3.y - v1.y)),
                    f * (-du2 * (v2.z - v1.z) + du1 * (v3.z - v1.z))).normalize()


def tangent_bitangent(v1: Vector3d, uv1: Vector2d, v2: Vector3d, uv2: Vector2d,
                      v3: Vector3d, uv3: Vector2d,
                      dest_tangent: Vector3d, dest_bitangent: Vector3d) -> Tuple[Vector3d, Vector3d]:
    """tangent() and bitangent() sharing the UV determinant."""
    dv1 = uv2.y - uv1.y
    dv2 = uv3.y - uv1.y
    du1 = uv2.x - uv1.x
    du2 = uv3.x - uv1.x
    f = 1.0 / (du1 * dv2 - du2 * dv1)
    ex, ey, ez = v2.x - v1.x, v2.y - v1.y, v2.z - v1.z
    gx, gy, gz = v3.x - v1.x, v3.y - v1.y, v3.z - v1.z
    dest_tangent.set(f * (dv2 * ex - dv1 * gx),
                     f * (dv2 * ey - dv1 * gy),
                     f * (dv2 * ez - dv1 * gz)).normalize()
    dest_bitangent.set(f * (-du2 * ex + du1 * gx),
                       f * (-du2 * ey + du1 * gy),
                       f * (-du2 * ez + du1 * gz)).normalize()
    return dest_tangent, dest_bitangent


def perpendicular(x: float, y: float, z: float,
                  dest1: Vector3d, dest2: Vector3d) -> Tuple[Vector3d, Vector3d]:
    """Two unit vectors perpendicular to the unit vector (x, y, z) and to each other.

    The axis with the largest perpendicular magnitude is used to stay
    away from degenerate cross products.
    """
    mag_x = z * z + y * y
    mag_y = z * z + x * x
    mag_z = y * y + x * x
    if mag_x > mag_y and mag_x > mag_z:
        dest1.set(0.0, z, -y)
        mag = mag_x
    elif mag_y > mag_z:
        dest1.set(-z, 0.0, x)
        mag = mag_y
    else:
        dest1.set(y, -x, 0.0)
        mag = mag_z
    inv = 1.0 / math.sqrt(mag)
    dest1.set(dest1.x * inv, dest1.y * inv, dest1.z * inv)
    dest2.set(y * dest1.z - z * dest1.y,
              z * dest1.x - x * dest1.z,
              x * dest1.y - y * dest1.x)
    return dest1, dest2
