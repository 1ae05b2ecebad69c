# linmath/rotation/quaternion.py
"""
Quaterniond - rotation quaternion (x, y, z, w) of doubles.

q.mul(r) is the Hamilton product q * r: applied to a vector, r acts
first and q second, the same order as Matrix4d.mul. So
q.rotate_x(a).rotate_y(b) matches m.rotate_x(a).rotate_y(b).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union, TYPE_CHECKING

from ..core.scalar import PRECISE, PreciseTrig, safe_asin, safe_acos, to_radians, equals as scalar_equals
from ..core.options import format_number
from ..matrix import rotation3
from ..vector.vector3 import Vector3d
from ..vector.vector4 import Vector4d

if TYPE_CHECKING:
    from .axis_angle import AxisAngle4d


def _from_block(m: rotation3.Block3) -> Tuple[float, float, float, float]:
    """Quaternion components of an orthonormal 3x3 block."""
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m
    tr = m00 + m11 + m22
    if tr >= 0.0:
        t = math.sqrt(tr + 1.0)
        w = t * 0.5
        t = 0.5 / t
        x = (m12 - m21) * t
        y = (m20 - m02) * t
        z = (m01 - m10) * t
    elif m00 >= m11 and m00 >= m22:
        t = math.sqrt(m00 - (m11 + m22) + 1.0)
        x = t * 0.5
        t = 0.5 / t
        y = (m10 + m01) * t
        z = (m02 + m20) * t
        w = (m12 - m21) * t
    elif m11 > m22:
        t = math.sqrt(m11 - (m22 + m00) + 1.0)
        y = t * 0.5
        t = 0.5 / t
        z = (m21 + m12) * t
        x = (m10 + m01) * t
        w = (m20 - m02) * t
    else:
        t = math.sqrt(m22 - (m00 + m11) + 1.0)
        z = t * 0.5
        t = 0.5 / t
        x = (m02 + m20) * t
        y = (m21 + m12) * t
        w = (m01 - m10) * t
    return x, y, z, w


def _hamilton(ax: float, ay: float, az: float, aw: float,
              bx: float, by: float, bz: float, bw: float) -> Tuple[float, float, float, float]:
    return (aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz)


@dataclass
class Quaterniond:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    # =========================================================================
    # Construction and access
    # =========================================================================

    def copy(self) -> Quaterniond:
        return Quaterniond(self.x, self.y, self.z, self.w)

    def set(self, x: Union[float, Quaterniond], y: Optional[float] = None,
            z: Optional[float] = None, w: Optional[float] = None) -> Quaterniond:
        if isinstance(x, Quaterniond):
            self.x, self.y, self.z, self.w = x.x, x.y, x.z, x.w
        else:
            self.x, self.y, self.z, self.w = x, y, z, w
        return self

    def identity(self) -> Quaterniond:
        self.x = self.y = self.z = 0.0
        self.w = 1.0
        return self

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def _write(self, x: float, y: float, z: float, w: float,
               dest: Optional[Quaterniond]) -> Quaterniond:
        dest = self if dest is None else dest
        dest.x, dest.y, dest.z, dest.w = x, y, z, w
        return dest

    def set_axis_angle(self, axis_angle: AxisAngle4d,
                       trig: PreciseTrig = PRECISE) -> Quaterniond:
        """Set from an AxisAngle4d whose axis is unit length."""
        half = axis_angle.angle * 0.5
        s = trig.sin(half)
        return self._write(axis_angle.x * s, axis_angle.y * s, axis_angle.z * s,
                           trig.cos(half), None)

    def from_axis_angle_rad_xyz(self, axis_x: float, axis_y: float, axis_z: float,
                                angle: float,
                                trig: PreciseTrig = PRECISE) -> Quaterniond:
        """Set to a rotation of angle radians around the (not necessarily unit) axis."""
        half = angle / 2.0
        s = trig.sin(half)
        length = math.sqrt(axis_x * axis_x + axis_y * axis_y + axis_z * axis_z)
        return self._write(axis_x / length * s, axis_y / length * s, axis_z / length * s,
                           trig.cos(half), None)

    def from_axis_angle_rad(self, axis: Vector3d, angle: float) -> Quaterniond:
        return self.from_axis_angle_rad_xyz(axis.x, axis.y, axis.z, angle)

    def from_axis_angle_deg_xyz(self, axis_x: float, axis_y: float, axis_z: float,
                                angle: float) -> Quaterniond:
        return self.from_axis_angle_rad_xyz(axis_x, axis_y, axis_z, to_radians(angle))

    def from_axis_angle_deg(self, axis: Vector3d, angle: float) -> Quaterniond:
        return self.from_axis_angle_rad_xyz(axis.x, axis.y, axis.z, to_radians(angle))

    def set_from_normalized(self, mat) -> Quaterniond:
        """Set from the rotation of a matrix whose upper 3x3 columns are unit length.

        Accepts Matrix3d, Matrix4x3d or Matrix4d.
        """
        block = (mat.m00, mat.m01, mat.m02, mat.m10, mat.m11, mat.m12,
                 mat.m20, mat.m21, mat.m22)
        return self._write(*_from_block(block), None)

    def set_from_unnormalized(self, mat) -> Quaterniond:
        """Set from the rotation of a matrix that may carry scale."""
        block = (mat.m00, mat.m01, mat.m02, mat.m10, mat.m11, mat.m12,
                 mat.m20, mat.m21, mat.m22)
        return self._write(*_from_block(rotation3.normalize_columns(block)), None)

    # =========================================================================
    # Algebra
    # =========================================================================

    def mul(self, q: Quaterniond, dest: Optional[Quaterniond] = None) -> Quaterniond:
        """self * q."""
        return self._write(*_hamilton(self.x, self.y, self.z, self.w, q.x, q.y, q.z, q.w), dest)

    def premul(self, q: Quaterniond, dest: Optional[Quaterniond] = None) -> Quaterniond:
        """q * self."""
        return self._write(*_hamilton(q.x, q.y, q.z, q.w, self.x, self.y, self.z, self.w), dest)

    def add(self, q: Quaterniond, dest: Optional[Quaterniond] = None) -> Quaterniond:
        return self._write(self.x + q.x, self.y + q.y, self.z + q.z, self.w + q.w, dest)

    def dot(self, q: Quaterniond) -> float:
        return self.x * q.x + self.y * q.y + self.z * q.z + self.w * q.w

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def normalize(self, dest: Optional[Quaterniond] = None) -> Quaterniond:
        inv = 1.0 / math.sqrt(self.length_squared())
        return self._write(self.x * inv, self.y * inv, self.z * inv, self.w * inv, dest)

    def conjugate(self, dest: Optional[Quaterniond] = None) -> Quaterniond:
        return self._write(-self.x, -self.y, -self.z, self.w, dest)

    def invert(self, dest: Optional[Quaterniond] = None) -> Quaterniond:
        inv = 1.0 / self.length_squared()
        return self._write(-self.x * inv, -self.y * inv, -self.z * inv, self.w * inv, dest)

    def difference(self, other: Quaterniond, dest: Optional[Quaterniond] = None) -> Quaterniond:
        """invert(self) * other: the rotation taking self to other."""
        inv = 1.0 / self.length_squared()
        return self._write(*_hamilton(-self.x * inv, -self.y * inv, -self.z * inv, self.w * inv,
                                      other.x, other.y, other.z, other.w), dest)

    def angle(self) -> float:
        """Rotation angle in [0, 2*pi] of a unit quaternion."""
        return 2.0 * safe_acos(self.w)

    # =========================================================================
    # Rotation builders
    # =========================================================================

    def rotation_x(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        return self._write(trig.sin(half), 0.0, 0.0, trig.cos(half), None)

    def rotation_y(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        return self._write(0.0, trig.sin(half), 0.0, trig.cos(half), None)

    def rotation_z(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        return self._write(0.0, 0.0, trig.sin(half), trig.cos(half), None)

    def rotate_x(self, angle: float, dest: Optional[Quaterniond] = None,
                 trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        s = trig.sin(half)
        c = trig.cos(half)
        return self._write(self.w * s + self.x * c,
                           self.y * c + self.z * s,
                           self.z * c - self.y * s,
                           self.w * c - self.x * s, dest)

    def rotate_y(self, angle: float, dest: Optional[Quaterniond] = None,
                 trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        s = trig.sin(half)
        c = trig.cos(half)
        return self._write(self.x * c - self.z * s,
                           self.w * s + self.y * c,
                           self.x * s + self.z * c,
                           self.w * c - self.y * s, dest)

    def rotate_z(self, angle: float, dest: Optional[Quaterniond] = None,
                 trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        s = trig.sin(half)
        c = trig.cos(half)
        return self._write(self.x * c + self.y * s,
                           self.y * c - self.x * s,
                           self.w * s + self.z * c,
                           self.w * c - self.z * s, dest)

    def rotate_local_x(self, angle: float, dest: Optional[Quaterniond] = None,
                       trig: PreciseTrig = PRECISE) -> Quaterniond:
        """rotation_x(angle) * self."""
        half = angle * 0.5
        return self._write(*_hamilton(trig.sin(half), 0.0, 0.0, trig.cos(half),
                                      self.x, self.y, self.z, self.w), dest)

    def rotate_local_y(self, angle: float, dest: Optional[Quaterniond] = None,
                       trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        return self._write(*_hamilton(0.0, trig.sin(half), 0.0, trig.cos(half),
                                      self.x, self.y, self.z, self.w), dest)

    def rotate_local_z(self, angle: float, dest: Optional[Quaterniond] = None,
                       trig: PreciseTrig = PRECISE) -> Quaterniond:
        half = angle * 0.5
        return self._write(*_hamilton(0.0, 0.0, trig.sin(half), trig.cos(half),
                                      self.x, self.y, self.z, self.w), dest)

    @staticmethod
    def _euler_xyz(angle_x: float, angle_y: float, angle_z: float,
                   trig: PreciseTrig = PRECISE) -> Tuple[float, float, float, float]:
        sx = trig.sin(angle_x * 0.5)
        cx = trig.cos(angle_x * 0.5)
        sy = trig.sin(angle_y * 0.5)
        cy = trig.cos(angle_y * 0.5)
        sz = trig.sin(angle_z * 0.5)
        cz = trig.cos(angle_z * 0.5)
        cycz = cy * cz
        sysz = sy * sz
        sycz = sy * cz
        cysz = cy * sz
        return (sx * cycz + cx * sysz,
                cx * sycz - sx * cysz,
                cx * cysz + sx * sycz,
                cx * cycz - sx * sysz)

    @staticmethod
    def _euler_zyx(angle_z: float, angle_y: float, angle_x: float,
                   trig: PreciseTrig = PRECISE) -> Tuple[float, float, float, float]:
        sx = trig.sin(angle_x * 0.5)
        cx = trig.cos(angle_x * 0.5)
        sy = trig.sin(angle_y * 0.5)
        cy = trig.cos(angle_y * 0.5)
        sz = trig.sin(angle_z * 0.5)
        cz = trig.cos(angle_z * 0.5)
        cycz = cy * cz
        sysz = sy * sz
        sycz = sy * cz
        cysz = cy * sz
        return (sx * cycz - cx * sysz,
                cx * sycz + sx * cysz,
                cx * cysz - sx * sycz,
                cx * cycz + sx * sysz)

    @staticmethod
    def _euler_yxz(angle_y: float, angle_x: float, angle_z: float,
                   trig: PreciseTrig = PRECISE) -> Tuple[float, float, float, float]:
        sx = trig.sin(angle_x * 0.5)
        cx = trig.cos(angle_x * 0.5)
        sy = trig.sin(angle_y * 0.5)
        cy = trig.cos(angle_y * 0.5)
        sz = trig.sin(angle_z * 0.5)
        cz = trig.cos(angle_z * 0.5)
        x = cy * sx
        y = sy * cx
        z = sy * sx
        w = cy * cx
        return (x * cz + y * sz,
                y * cz - x * sz,
                w * sz - z * cz,
                w * cz + z * sz)

    def rotation_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Quaterniond:
        """Same as identity().rotate_x(angle_x).rotate_y(angle_y).rotate_z(angle_z)."""
        return self._write(*self._euler_xyz(angle_x, angle_y, angle_z, trig), None)

    def rotation_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                     trig: PreciseTrig = PRECISE) -> Quaterniond:
        """Same as identity().rotate_z(angle_z).rotate_y(angle_y).rotate_x(angle_x)."""
        return self._write(*self._euler_zyx(angle_z, angle_y, angle_x, trig), None)

    def rotation_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Quaterniond:
        """Same as identity().rotate_y(angle_y).rotate_x(angle_x).rotate_z(angle_z)."""
        return self._write(*self._euler_yxz(angle_y, angle_x, angle_z, trig), None)

    def rotate_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                   dest: Optional[Quaterniond] = None,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        return self._write(*_hamilton(self.x, self.y, self.z, self.w,
                                      *self._euler_xyz(angle_x, angle_y, angle_z, trig)), dest)

    def rotate_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                   dest: Optional[Quaterniond] = None,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        return self._write(*_hamilton(self.x, self.y, self.z, self.w,
                                      *self._euler_zyx(angle_z, angle_y, angle_x, trig)), dest)

    def rotate_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                   dest: Optional[Quaterniond] = None,
                   trig: PreciseTrig = PRECISE) -> Quaterniond:
        return self._write(*_hamilton(self.x, self.y, self.z, self.w,
                                      *self._euler_yxz(angle_y, angle_x, angle_z, trig)), dest)

    def rotation_axis(self, angle: float, axis_x: float, axis_y: float, axis_z: float,
                      trig: PreciseTrig = PRECISE) -> Quaterniond:
        return self.from_axis_angle_rad_xyz(axis_x, axis_y, axis_z, angle, trig)

    def rotate_axis(self, angle: float, axis_x: float, axis_y: float, axis_z: float,
                    dest: Optional[Quaterniond] = None,
                    trig: PreciseTrig = PRECISE) -> Quaterniond:
        q = Quaterniond().from_axis_angle_rad_xyz(axis_x, axis_y, axis_z, angle, trig)
        return self.mul(q, dest)

    def rotate_to(self, from_x: float, from_y: float, from_z: float,
                  to_x: float, to_y: float, to_z: float,
                  dest: Optional[Quaterniond] = None) -> Quaterniond:
        """self * (shortest-arc rotation taking the from direction onto the to direction).

        Anti-parallel directions rotate by pi around an axis perpendicular to
        the from direction: (y, -x, 0), or (0, z, -y) when that is zero.
        """
        fn = 1.0 / math.sqrt(from_x * from_x + from_y * from_y + from_z * from_z)
        tn = 1.0 / math.sqrt(to_x * to_x + to_y * to_y + to_z * to_z)
        fx, fy, fz = from_x * fn, from_y * fn, from_z * fn
        tx, ty, tz = to_x * tn, to_y * tn, to_z * tn
        dot = fx * tx + fy * ty + fz * tz
        if dot < -1.0 + 1e-6:
            x, y, z = fy, -fx, 0.0
            if x * x + y * y == 0.0:
                x, y, z = 0.0, fz, -fy
            inv = 1.0 / math.sqrt(x * x + y * y + z * z)
            x, y, z, w = x * inv, y * inv, z * inv, 0.0
        else:
            sd2 = math.sqrt((1.0 + dot) * 2.0)
            isd2 = 1.0 / sd2
            x = (fy * tz - fz * ty) * isd2
            y = (fz * tx - fx * tz) * isd2
            z = (fx * ty - fy * tx) * isd2
            w = sd2 * 0.5
            n2 = 1.0 / math.sqrt(x * x + y * y + z * z + w * w)
            x, y, z, w = x * n2, y * n2, z * n2, w * n2
        return self._write(*_hamilton(self.x, self.y, self.z, self.w, x, y, z, w), dest)

    def rotation_to(self, from_dir: Vector3d, to_dir: Vector3d) -> Quaterniond:
        self.identity()
        return self.rotate_to(from_dir.x, from_dir.y, from_dir.z, to_dir.x, to_dir.y, to_dir.z)

    def look_along(self, dir: Vector3d, up: Vector3d,
                   dest: Optional[Quaterniond] = None) -> Quaterniond:
        """self * (rotation turning -Z towards dir with +Y towards up)."""
        inv_dir = 1.0 / dir.length()
        dirn_x, dirn_y, dirn_z = -dir.x * inv_dir, -dir.y * inv_dir, -dir.z * inv_dir
        left_x = up.y * dirn_z - up.z * dirn_y
        left_y = up.z * dirn_x - up.x * dirn_z
        left_z = up.x * dirn_y - up.y * dirn_x
        inv_left = 1.0 / math.sqrt(left_x * left_x + left_y * left_y + left_z * left_z)
        left_x, left_y, left_z = left_x * inv_left, left_y * inv_left, left_z * inv_left
        upn_x = dirn_y * left_z - dirn_z * left_y
        upn_y = dirn_z * left_x - dirn_x * left_z
        upn_z = dirn_x * left_y - dirn_y * left_x
        block = (left_x, upn_x, dirn_x, left_y, upn_y, dirn_y, left_z, upn_z, dirn_z)
        return self._write(*_hamilton(self.x, self.y, self.z, self.w, *_from_block(block)), dest)

    # =========================================================================
    # Euler angles
    # =========================================================================

    def get_euler_angles_xyz(self, dest: Vector3d) -> Vector3d:
        """Angles for rotation_xyz; dest.x, dest.y, dest.z."""
        x, y, z, w = self.x, self.y, self.z, self.w
        dest.x = math.atan2(x * w - y * z, 0.5 - x * x - y * y)
        dest.y = safe_asin(2.0 * (x * z + y * w))
        dest.z = math.atan2(z * w - x * y, 0.5 - y * y - z * z)
        return dest

    def get_euler_angles_zxy(self, dest: Vector3d) -> Vector3d:
        """Angles for the Z, then X, then Y order (Rz * Rx * Ry)."""
        x, y, z, w = self.x, self.y, self.z, self.w
        dest.x = safe_asin(2.0 * (w * x + y * z))
        dest.y = math.atan2(w * y - x * z, 0.5 - y * y - x * x)
        dest.z = math.atan2(w * z - x * y, 0.5 - z * z - x * x)
        return dest

    def get_euler_angles_yxz(self, dest: Vector3d) -> Vector3d:
        """Angles for rotation_yxz."""
        x, y, z, w = self.x, self.y, self.z, self.w
        dest.x = safe_asin(-2.0 * (y * z - w * x))
        dest.y = math.atan2(x * z + y * w, 0.5 - y * y - x * x)
        dest.z = math.atan2(y * x + w * z, 0.5 - x * x - z * z)
        return dest

    def get_euler_angles_zyx(self, dest: Vector3d) -> Vector3d:
        """Angles for rotation_zyx."""
        x, y, z, w = self.x, self.y, self.z, self.w
        dest.x = math.atan2(y * z + w * x, 0.5 - x * x - y * y)
        dest.y = safe_asin(-2.0 * (x * z - w * y))
        dest.z = math.atan2(x * y + w * z, 0.5 - y * y - z * z)
        return dest

    # =========================================================================
    # Interpolation
    # =========================================================================

    def slerp(self, target: Quaterniond, alpha: float,
              dest: Optional[Quaterniond] = None) -> Quaterniond:
        """Spherical interpolation along the shorter arc.

        Falls back to linear weights when the quaternions are nearly parallel.
        """
        cosom = self.x * target.x + self.y * target.y + self.z * target.z + self.w * target.w
        abs_cosom = abs(cosom)
        if 1.0 - abs_cosom > 1e-6:
            sin_sqr = 1.0 - abs_cosom * abs_cosom
            sinom = 1.0 / math.sqrt(sin_sqr)
            omega = math.atan2(sin_sqr * sinom, abs_cosom)
            scale0 = math.sin((1.0 - alpha) * omega) * sinom
            scale1 = math.sin(alpha * omega) * sinom
        else:
            scale0 = 1.0 - alpha
            scale1 = alpha
        scale1 = scale1 if cosom >= 0.0 else -scale1
        return self._write(scale0 * self.x + scale1 * target.x,
                           scale0 * self.y + scale1 * target.y,
                           scale0 * self.z + scale1 * target.z,
                           scale0 * self.w + scale1 * target.w, dest)

    def nlerp(self, q: Quaterniond, factor: float,
              dest: Optional[Quaterniond] = None) -> Quaterniond:
        """Linear interpolation along the shorter arc, normalized."""
        cosom = self.dot(q)
        scale0 = 1.0 - factor
        scale1 = factor if cosom >= 0.0 else -factor
        rx = scale0 * self.x + scale1 * q.x
        ry = scale0 * self.y + scale1 * q.y
        rz = scale0 * self.z + scale1 * q.z
        rw = scale0 * self.w + scale1 * q.w
        inv = 1.0 / math.sqrt(rx * rx + ry * ry + rz * rz + rw * rw)
        return self._write(rx * inv, ry * inv, rz * inv, rw * inv, dest)

    # =========================================================================
    # Vector transforms
    # =========================================================================

    def transform(self, v: Union[Vector3d, Vector4d],
                  dest: Optional[Union[Vector3d, Vector4d]] = None) -> Union[Vector3d, Vector4d]:
        """Rotate v. Works for non-unit quaternions; w of a Vector4d is kept."""
        dest = v if dest is None else dest
        x, y, z, w = self.x, self.y, self.z, self.w
        xx, yy, zz, ww = x * x, y * y, z * z, w * w
        xy, xz, yz = x * y, x * z, y * z
        xw, zw, yw = x * w, z * w, y * w
        k = 1.0 / (xx + yy + zz + ww)
        vx, vy, vz = v.x, v.y, v.z
        dest.x = ((xx - yy - zz + ww) * vx + 2.0 * (xy - zw) * vy + 2.0 * (xz + yw) * vz) * k
        dest.y = (2.0 * (xy + zw) * vx + (yy - xx - zz + ww) * vy + 2.0 * (yz - xw) * vz) * k
        dest.z = (2.0 * (xz - yw) * vx + 2.0 * (yz + xw) * vy + (zz - xx - yy + ww) * vz) * k
        if isinstance(dest, Vector4d) and isinstance(v, Vector4d):
            dest.w = v.w
        return dest

    def transform_inverse(self, v: Union[Vector3d, Vector4d],
                          dest: Optional[Union[Vector3d, Vector4d]] = None) -> Union[Vector3d, Vector4d]:
        """Rotate v by the inverse of this rotation."""
        dest = v if dest is None else dest
        x, y, z, w = self.x, self.y, self.z, self.w
        xx, yy, zz, ww = x * x, y * y, z * z, w * w
        xy, xz, yz = x * y, x * z, y * z
        xw, zw, yw = x * w, z * w, y * w
        k = 1.0 / (xx + yy + zz + ww)
        vx, vy, vz = v.x, v.y, v.z
        dest.x = ((xx - yy - zz + ww) * vx + 2.0 * (xy + zw) * vy + 2.0 * (xz - yw) * vz) * k
        dest.y = (2.0 * (xy - zw) * vx + (yy - xx - zz + ww) * vy + 2.0 * (yz + xw) * vz) * k
        dest.z = (2.0 * (xz + yw) * vx + 2.0 * (yz - xw) * vy + (zz - xx - yy + ww) * vz) * k
        if isinstance(dest, Vector4d) and isinstance(v, Vector4d):
            dest.w = v.w
        return dest

    def transform_unit(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """Rotate v, assuming this quaternion is unit length."""
        dest = v if dest is None else dest
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = rotation3.rotation_quaternion(
            self.x, self.y, self.z, self.w)
        vx, vy, vz = v.x, v.y, v.z
        dest.x = m00 * vx + m10 * vy + m20 * vz
        dest.y = m01 * vx + m11 * vy + m21 * vz
        dest.z = m02 * vx + m12 * vy + m22 * vz
        return dest

    def transform_positive_x(self, dest: Vector3d) -> Vector3d:
        m = rotation3.rotation_quaternion(self.x, self.y, self.z, self.w)
        return dest.set(m[0], m[1], m[2])

    def transform_positive_y(self, dest: Vector3d) -> Vector3d:
        m = rotation3.rotation_quaternion(self.x, self.y, self.z, self.w)
        return dest.set(m[3], m[4], m[5])

    def transform_positive_z(self, dest: Vector3d) -> Vector3d:
        m = rotation3.rotation_quaternion(self.x, self.y, self.z, self.w)
        return dest.set(m[6], m[7], m[8])

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def equals(self, q: Quaterniond, delta: float) -> bool:
        return (scalar_equals(self.x, q.x, delta)
                and scalar_equals(self.y, q.y, delta)
                and scalar_equals(self.z, q.z, delta)
                and scalar_equals(self.w, q.w, delta))

    def __matmul__(self, other: Union[Quaterniond, Vector3d, Vector4d]):
        if isinstance(other, Quaterniond):
            return self.mul(other, Quaterniond())
        if isinstance(other, Vector4d):
            return self.transform(other, Vector4d())
        if isinstance(other, Vector3d):
            return self.transform(other, Vector3d())
        raise TypeError(f"Cannot multiply Quaterniond by {type(other)}")

    def __neg__(self) -> Quaterniond:
        return Quaterniond(-self.x, -self.y, -self.z, -self.w)

    def __str__(self) -> str:
        parts = " ".join(format_number(c) for c in (self.x, self.y, self.z, self.w))
        return f"({parts})"
