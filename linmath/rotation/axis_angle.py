# linmath/rotation/axis_angle.py
"""
AxisAngle4d - rotation of angle radians around a unit axis (x, y, z).

The angle is wrapped into [0, 2*pi) whenever it is assigned through the
constructor, set() or rotate().
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Union, TYPE_CHECKING

from ..core.scalar import PI, PI_TIMES_2, safe_acos
from ..core.options import format_number
from ..vector.vector3 import Vector3d
from ..vector.vector4 import Vector4d

if TYPE_CHECKING:
    from .quaternion import Quaterniond


def wrap_angle(angle: float) -> float:
    """Wrap angle into [0, 2*pi)."""
    if angle < 0.0:
        angle = PI_TIMES_2 + math.fmod(angle, PI_TIMES_2)
    return math.fmod(angle, PI_TIMES_2)


@dataclass
class AxisAngle4d:
    angle: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 1.0

    def __post_init__(self):
        self.angle = wrap_angle(self.angle)

    @staticmethod
    def from_vector(angle: float, axis: Vector3d) -> AxisAngle4d:
        return AxisAngle4d(angle, axis.x, axis.y, axis.z)

    @staticmethod
    def from_quaternion(q: Quaterniond) -> AxisAngle4d:
        return AxisAngle4d().set_quaternion(q)

    def copy(self) -> AxisAngle4d:
        return AxisAngle4d(self.angle, self.x, self.y, self.z)

    def set(self, angle: Union[float, AxisAngle4d], x: float = 0.0, y: float = 0.0,
            z: float = 1.0) -> AxisAngle4d:
        if isinstance(angle, AxisAngle4d):
            angle, x, y, z = angle.angle, angle.x, angle.y, angle.z
        self.x, self.y, self.z = x, y, z
        self.angle = wrap_angle(angle)
        return self

    def set_quaternion(self, q: Quaterniond) -> AxisAngle4d:
        """Set from a unit quaternion. The identity rotation maps to angle 0 around +Z."""
        acos = safe_acos(q.w)
        s = 1.0 - q.w * q.w
        if s <= 0.0:
            self.x, self.y, self.z = 0.0, 0.0, 1.0
        else:
            inv = 1.0 / math.sqrt(s)
            self.x, self.y, self.z = q.x * inv, q.y * inv, q.z * inv
        self.angle = acos + acos
        return self

    def set_matrix(self, m) -> AxisAngle4d:
        """Set from the rotation part of a Matrix3d, Matrix4x3d or Matrix4d.

        Columns are normalized first, so scaled matrices are accepted.
        """
        m00, m01, m02 = m.m00, m.m01, m.m02
        m10, m11, m12 = m.m10, m.m11, m.m12
        m20, m21, m22 = m.m20, m.m21, m.m22
        inv_x = 1.0 / math.sqrt(m00 * m00 + m01 * m01 + m02 * m02)
        inv_y = 1.0 / math.sqrt(m10 * m10 + m11 * m11 + m12 * m12)
        inv_z = 1.0 / math.sqrt(m20 * m20 + m21 * m21 + m22 * m22)
        m00, m01, m02 = m00 * inv_x, m01 * inv_x, m02 * inv_x
        m10, m11, m12 = m10 * inv_y, m11 * inv_y, m12 * inv_y
        m20, m21, m22 = m20 * inv_z, m21 * inv_z, m22 * inv_z
        epsilon = 1e-4
        epsilon2 = 1e-3
        if abs(m10 - m01) < epsilon and abs(m20 - m02) < epsilon and abs(m21 - m12) < epsilon:
            # symmetric: either no rotation or a half turn
            if (abs(m10 + m01) < epsilon2 and abs(m20 + m02) < epsilon2
                    and abs(m21 + m12) < epsilon2 and abs(m00 + m11 + m22 - 3) < epsilon2):
                self.x, self.y, self.z = 0.0, 0.0, 1.0
                self.angle = 0.0
                return self
            self.angle = PI
            xx = (m00 + 1) / 2
            yy = (m11 + 1) / 2
            zz = (m22 + 1) / 2
            xy = (m10 + m01) / 4
            xz = (m20 + m02) / 4
            yz = (m21 + m12) / 4
            if xx > yy and xx > zz:
                x = math.sqrt(xx)
                self.x, self.y, self.z = x, xy / x, xz / x
            elif yy > zz:
                y = math.sqrt(yy)
                self.x, self.y, self.z = xy / y, y, yz / y
            else:
                z = math.sqrt(zz)
                self.x, self.y, self.z = xz / z, yz / z, z
            return self
        s = math.sqrt((m12 - m21) * (m12 - m21) + (m20 - m02) * (m20 - m02) + (m01 - m10) * (m01 - m10))
        self.angle = safe_acos((m00 + m11 + m22 - 1) / 2)
        self.x = (m12 - m21) / s
        self.y = (m20 - m02) / s
        self.z = (m01 - m10) / s
        return self

    def get_quaternion(self, q: Quaterniond) -> Quaterniond:
        return q.set_axis_angle(self)

    def get_matrix(self, m):
        """Write this rotation into a Matrix3d, Matrix4x3d or Matrix4d."""
        return m.set_axis_angle(self)

    def normalize(self) -> AxisAngle4d:
        """Normalize the axis."""
        inv = 1.0 / math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        self.x *= inv
        self.y *= inv
        self.z *= inv
        return self

    def rotate(self, angle: float) -> AxisAngle4d:
        self.angle = wrap_angle(self.angle + angle)
        return self

    def transform(self, v: Union[Vector3d, Vector4d],
                  dest: Optional[Union[Vector3d, Vector4d]] = None) -> Union[Vector3d, Vector4d]:
        """Rotate v with Rodrigues' formula; w of a Vector4d is left alone."""
        dest = v if dest is None else dest
        s = math.sin(self.angle)
        c = math.cos(self.angle)
        x, y, z = self.x, self.y, self.z
        vx, vy, vz = v.x, v.y, v.z
        dot = x * vx + y * vy + z * vz
        k = (1.0 - c) * dot
        dest.x = vx * c + s * (y * vz - z * vy) + k * x
        dest.y = vy * c + s * (z * vx - x * vz) + k * y
        dest.z = vz * c + s * (x * vy - y * vx) + k * z
        return dest

    def __str__(self) -> str:
        return (f"({format_number(self.x)} {format_number(self.y)} {format_number(self.z)}"
                f" <| {format_number(self.angle)})")
