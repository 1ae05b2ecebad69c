# linmath/matrix/rotation3.py
"""
Free functions over 3x3 blocks held as 9-tuples in column-major order:

    (m00, m01, m02, m10, m11, m12, m20, m21, m22)

Matrix3d, Matrix4x3d, Matrix4d and Quaterniond build their rotations
from these so the Euler conventions are defined in one place.
"""

from __future__ import annotations
import math
from typing import Tuple

from ..core.scalar import PRECISE, PreciseTrig

Block3 = Tuple[float, float, float, float, float, float, float, float, float]

IDENTITY3: Block3 = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


def rotation_x(angle: float, trig: PreciseTrig = PRECISE) -> Block3:
    s = trig.sin(angle)
    c = trig.cos(angle)
    return (1.0, 0.0, 0.0,
            0.0, c, s,
            0.0, -s, c)


def rotation_y(angle: float, trig: PreciseTrig = PRECISE) -> Block3:
    s = trig.sin(angle)
    c = trig.cos(angle)
    return (c, 0.0, -s,
            0.0, 1.0, 0.0,
            s, 0.0, c)


def rotation_z(angle: float, trig: PreciseTrig = PRECISE) -> Block3:
    s = trig.sin(angle)
    c = trig.cos(angle)
    return (c, s, 0.0,
            -s, c, 0.0,
            0.0, 0.0, 1.0)


def rotation_axis(angle: float, x: float, y: float, z: float,
                  trig: PreciseTrig = PRECISE) -> Block3:
    """Rotation around the unit axis (x, y, z)."""
    s = trig.sin(angle)
    c = trig.cos(angle)
    k = 1.0 - c
    xy = x * y
    xz = x * z
    yz = y * z
    return (c + x * x * k, xy * k + z * s, xz * k - y * s,
            xy * k - z * s, c + y * y * k, yz * k + x * s,
            xz * k + y * s, yz * k - x * s, c + z * z * k)


def rotation_quaternion(x: float, y: float, z: float, w: float) -> Block3:
    """Rotation of the unit quaternion (x, y, z, w)."""
    w2 = w * w
    x2 = x * x
    y2 = y * y
    z2 = z * z
    zw = z * w
    dzw = zw + zw
    xy = x * y
    dxy = xy + xy
    xz = x * z
    dxz = xz + xz
    yw = y * w
    dyw = yw + yw
    yz = y * z
    dyz = yz + yz
    xw = x * w
    dxw = xw + xw
    return (w2 + x2 - z2 - y2, dxy + dzw, dxz - dyw,
            dxy - dzw, y2 - z2 + w2 - x2, dyz + dxw,
            dyw + dxz, dyz - dxw, z2 - y2 - x2 + w2)


def mul3(a: Block3, b: Block3) -> Block3:
    """a * b."""
    a00, a01, a02, a10, a11, a12, a20, a21, a22 = a
    b00, b01, b02, b10, b11, b12, b20, b21, b22 = b
    return (a00 * b00 + a10 * b01 + a20 * b02,
            a01 * b00 + a11 * b01 + a21 * b02,
            a02 * b00 + a12 * b01 + a22 * b02,
            a00 * b10 + a10 * b11 + a20 * b12,
            a01 * b10 + a11 * b11 + a21 * b12,
            a02 * b10 + a12 * b11 + a22 * b12,
            a00 * b20 + a10 * b21 + a20 * b22,
            a01 * b20 + a11 * b21 + a21 * b22,
            a02 * b20 + a12 * b21 + a22 * b22)


def rotation_xyz(angle_x: float, angle_y: float, angle_z: float,
                 trig: PreciseTrig = PRECISE) -> Block3:
    """Rx * Ry * Rz: rotate about Z first, then Y, then X."""
    return mul3(mul3(rotation_x(angle_x, trig), rotation_y(angle_y, trig)), rotation_z(angle_z, trig))


def rotation_zyx(angle_z: float, angle_y: float, angle_x: float,
                 trig: PreciseTrig = PRECISE) -> Block3:
    """Rz * Ry * Rx: rotate about X first, then Y, then Z."""
    return mul3(mul3(rotation_z(angle_z, trig), rotation_y(angle_y, trig)), rotation_x(angle_x, trig))


def rotation_yxz(angle_y: float, angle_x: float, angle_z: float,
                 trig: PreciseTrig = PRECISE) -> Block3:
    """Ry * Rx * Rz: rotate about Z first, then X, then Y."""
    return mul3(mul3(rotation_y(angle_y, trig), rotation_x(angle_x, trig)), rotation_z(angle_z, trig))


def determinant3(m: Block3) -> float:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return ((m00 * m11 - m01 * m10) * m22
            + (m02 * m10 - m00 * m12) * m21
            + (m01 * m12 - m02 * m11) * m20)


def invert3(m: Block3) -> Block3:
    """Inverse of m. A singular block raises ZeroDivisionError."""
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    s = 1.0 / determinant3(m)
    return ((m11 * m22 - m21 * m12) * s,
            (m21 * m02 - m01 * m22) * s,
            (m01 * m12 - m11 * m02) * s,
            (m20 * m12 - m10 * m22) * s,
            (m00 * m22 - m20 * m02) * s,
            (m10 * m02 - m00 * m12) * s,
            (m10 * m21 - m20 * m11) * s,
            (m20 * m01 - m00 * m21) * s,
            (m00 * m11 - m10 * m01) * s)


def transpose3(m: Block3) -> Block3:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return (m00, m10, m20, m01, m11, m21, m02, m12, m22)


def euler_xyz(m: Block3) -> Tuple[float, float, float]:
    """Angles (x, y, z) such that rotation_xyz(x, y, z) reproduces m."""
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return (math.atan2(-m21, m22),
            math.atan2(m20, math.sqrt(max(0.0, 1.0 - m20 * m20))),
            math.atan2(-m10, m00))


def euler_zyx(m: Block3) -> Tuple[float, float, float]:
    """Angles (x, y, z) such that rotation_zyx(z, y, x) reproduces m."""
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return (math.atan2(m12, m22),
            math.atan2(-m02, math.sqrt(max(0.0, 1.0 - m02 * m02))),
            math.atan2(m01, m00))


def euler_yxz(m: Block3) -> Tuple[float, float, float]:
    """Angles (x, y, z) such that rotation_yxz(y, x, z) reproduces m."""
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return (math.atan2(-m21, math.sqrt(max(0.0, 1.0 - m21 * m21))),
            math.atan2(m20, m22),
            math.atan2(m01, m11))


def normalize_columns(m: Block3) -> Block3:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    inv_x = 1.0 / math.sqrt(m00 * m00 + m01 * m01 + m02 * m02)
    inv_y = 1.0 / math.sqrt(m10 * m10 + m11 * m11 + m12 * m12)
    inv_z = 1.0 / math.sqrt(m20 * m20 + m21 * m21 + m22 * m22)
    return (m00 * inv_x, m01 * inv_x, m02 * inv_x,
            m10 * inv_y, m11 * inv_y, m12 * inv_y,
            m20 * inv_z, m21 * inv_z, m22 * inv_z)


def look_along(dir_x: float, dir_y: float, dir_z: float,
               up_x: float, up_y: float, up_z: float) -> Block3:
    """Rotation that maps dir onto -Z and keeps up in the YZ plane.

    A zero dir, or an up parallel to dir, raises ZeroDivisionError.
    """
    inv = -1.0 / math.sqrt(dir_x * dir_x + dir_y * dir_y + dir_z * dir_z)
    dir_x *= inv
    dir_y *= inv
    dir_z *= inv
    # left = up x dir
    left_x = up_y * dir_z - up_z * dir_y
    left_y = up_z * dir_x - up_x * dir_z
    left_z = up_x * dir_y - up_y * dir_x
    inv = 1.0 / math.sqrt(left_x * left_x + left_y * left_y + left_z * left_z)
    left_x *= inv
    left_y *= inv
    left_z *= inv
    # upn = dir x left
    upn_x = dir_y * left_z - dir_z * left_y
    upn_y = dir_z * left_x - dir_x * left_z
    upn_z = dir_x * left_y - dir_y * left_x
    return (left_x, upn_x, dir_x,
            left_y, upn_y, dir_y,
            left_z, upn_z, dir_z)


def towards(dir_x: float, dir_y: float, dir_z: float,
            up_x: float, up_y: float, up_z: float) -> Block3:
    """Rotation that maps +Z onto dir and keeps +Y in the plane of dir and up.

    A zero dir, or an up parallel to dir, raises ZeroDivisionError.
    """
    inv = 1.0 / math.sqrt(dir_x * dir_x + dir_y * dir_y + dir_z * dir_z)
    dir_x *= inv
    dir_y *= inv
    dir_z *= inv
    left_x = up_y * dir_z - up_z * dir_y
    left_y = up_z * dir_x - up_x * dir_z
    left_z = up_x * dir_y - up_y * dir_x
    inv = 1.0 / math.sqrt(left_x * left_x + left_y * left_y + left_z * left_z)
    left_x *= inv
    left_y *= inv
    left_z *= inv
    upn_x = dir_y * left_z - dir_z * left_y
    upn_y = dir_z * left_x - dir_x * left_z
    upn_z = dir_x * left_y - dir_y * left_x
    return (left_x, left_y, left_z,
            upn_x, upn_y, upn_z,
            dir_x, dir_y, dir_z)


def reflection(nx: float, ny: float, nz: float) -> Block3:
    """Householder reflection about the plane through the origin with unit normal n."""
    da, db, dc = nx + nx, ny + ny, nz + nz
    return (1.0 - da * nx, -da * ny, -da * nz,
            -db * nx, 1.0 - db * ny, -db * nz,
            -dc * nx, -dc * ny, 1.0 - dc * nz)


def transform3(m: Block3, x: float, y: float, z: float) -> Tuple[float, float, float]:
    """m * (x, y, z)."""
    return (m[0] * x + m[3] * y + m[6] * z,
            m[1] * x + m[4] * y + m[7] * z,
            m[2] * x + m[5] * y + m[8] * z)


def scale_columns(m: Block3, x: float, y: float, z: float) -> Block3:
    """m * diag(x, y, z)."""
    return (m[0] * x, m[1] * x, m[2] * x,
            m[3] * y, m[4] * y, m[5] * y,
            m[6] * z, m[7] * z, m[8] * z)


def column_lengths(m: Block3) -> Tuple[float, float, float]:
    return (math.sqrt(m[0] * m[0] + m[1] * m[1] + m[2] * m[2]),
            math.sqrt(m[3] * m[3] + m[4] * m[4] + m[5] * m[5]),
            math.sqrt(m[6] * m[6] + m[7] * m[7] + m[8] * m[8]))


def positive_axes(m: Block3) -> Tuple[Tuple[float, float, float], ...]:
    """Unnormalized directions that m maps onto +X, +Y and +Z.

    These are the rows of the adjugate, so they are valid for any
    invertible m and differ from the inverse only by 1 / det.
    """
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    return ((m11 * m22 - m12 * m21, m02 * m21 - m01 * m22, m01 * m12 - m02 * m11),
            (m12 * m20 - m10 * m22, m00 * m22 - m02 * m20, m02 * m10 - m00 * m12),
            (m10 * m21 - m11 * m20, m20 * m01 - m21 * m00, m00 * m11 - m01 * m10))
