# linmath/vector/vector3.py
"""
Vector3d - mutable 3D vector of doubles.

Matrix and quaternion products delegate to the matrix/quaternion type,
so points, directions and projective transforms stay distinct
operations: mul_position (w = 1), mul_direction (w = 0) and
mul_project (divide by w).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union, Iterator, TYPE_CHECKING

from ..core.scalar import PRECISE, PreciseTrig, RoundingMode, round_using, equals as scalar_equals
from ..core.options import format_number

if TYPE_CHECKING:
    from ..rotation.quaternion import Quaterniond


@dataclass
class Vector3d:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # =========================================================================
    # Construction and access
    # =========================================================================

    @staticmethod
    def from_tuple(t: Tuple[float, float, float]) -> Vector3d:
        return Vector3d(t[0], t[1], t[2])

    def copy(self) -> Vector3d:
        return Vector3d(self.x, self.y, self.z)

    def set(self, x: Union[float, Vector3d], y: Optional[float] = None,
            z: Optional[float] = None) -> Vector3d:
        """Set from another vector, from one scalar for all components, or from x, y and z."""
        if isinstance(x, Vector3d):
            self.x, self.y, self.z = x.x, x.y, x.z
        elif y is None:
            self.x = self.y = self.z = x
        else:
            self.x, self.y, self.z = x, y, z
        return self

    def set_component(self, component: int, value: float) -> Vector3d:
        if component == 0:
            self.x = value
        elif component == 1:
            self.y = value
        elif component == 2:
            self.z = value
        else:
            raise IndexError(f"Vector3d component out of range: {component}")
        return self

    def get(self, component: int) -> float:
        if component == 0:
            return self.x
        if component == 1:
            return self.y
        if component == 2:
            return self.z
        raise IndexError(f"Vector3d component out of range: {component}")

    def zero(self) -> Vector3d:
        self.x = self.y = self.z = 0.0
        return self

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, component: int) -> float:
        return self.get(component)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = self.x + v.x
        dest.y = self.y + v.y
        dest.z = self.z + v.z
        return dest

    def sub(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = self.x - v.x
        dest.y = self.y - v.y
        dest.z = self.z - v.z
        return dest

    def mul(self, s: Union[float, Vector3d], dest: Optional[Vector3d] = None) -> Vector3d:
        """Multiply by a scalar or component-wise by a vector."""
        dest = self if dest is None else dest
        if isinstance(s, Vector3d):
            dest.x = self.x * s.x
            dest.y = self.y * s.y
            dest.z = self.z * s.z
        else:
            dest.x = self.x * s
            dest.y = self.y * s
            dest.z = self.z * s
        return dest

    def div(self, s: Union[float, Vector3d], dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        if isinstance(s, Vector3d):
            dest.x = self.x / s.x
            dest.y = self.y / s.y
            dest.z = self.z / s.z
        else:
            inv = 1.0 / s
            dest.x = self.x * inv
            dest.y = self.y * inv
            dest.z = self.z * inv
        return dest

    def fma(self, a: Union[float, Vector3d], b: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self + a * b."""
        dest = self if dest is None else dest
        if isinstance(a, Vector3d):
            dest.x = self.x + a.x * b.x
            dest.y = self.y + a.y * b.y
            dest.z = self.z + a.z * b.z
        else:
            dest.x = self.x + a * b.x
            dest.y = self.y + a * b.y
            dest.z = self.z + a * b.z
        return dest

    def mul_add(self, a: Union[float, Vector3d], b: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self * a + b."""
        dest = self if dest is None else dest
        if isinstance(a, Vector3d):
            dest.x = self.x * a.x + b.x
            dest.y = self.y * a.y + b.y
            dest.z = self.z * a.z + b.z
        else:
            dest.x = self.x * a + b.x
            dest.y = self.y * a + b.y
            dest.z = self.z * a + b.z
        return dest

    def negate(self, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = -self.x
        dest.y = -self.y
        dest.z = -self.z
        return dest

    def absolute(self, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = abs(self.x)
        dest.y = abs(self.y)
        dest.z = abs(self.z)
        return dest

    def floor(self, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = float(math.floor(self.x))
        dest.y = float(math.floor(self.y))
        dest.z = float(math.floor(self.z))
        return dest

    def ceil(self, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = float(math.ceil(self.x))
        dest.y = float(math.ceil(self.y))
        dest.z = float(math.ceil(self.z))
        return dest

    def round(self, mode: RoundingMode = RoundingMode.HALF_UP,
              dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = round_using(self.x, mode)
        dest.y = round_using(self.y, mode)
        dest.z = round_using(self.z, mode)
        return dest

    def min(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x < v.x else v.x
        dest.y = self.y if self.y < v.y else v.y
        dest.z = self.z if self.z < v.z else v.z
        return dest

    def max(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x > v.x else v.x
        dest.y = self.y if self.y > v.y else v.y
        dest.z = self.z if self.z > v.z else v.z
        return dest

    def min_component(self) -> int:
        ax, ay, az = abs(self.x), abs(self.y), abs(self.z)
        if ax < ay and ax < az:
            return 0
        if ay < az:
            return 1
        return 2

    def max_component(self) -> int:
        ax, ay, az = abs(self.x), abs(self.y), abs(self.z)
        if ax >= ay and ax >= az:
            return 0
        if ay >= az:
            return 1
        return 2

    # =========================================================================
    # Geometry
    # =========================================================================

    def dot(self, v: Vector3d) -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        rx = self.y * v.z - self.z * v.y
        ry = self.z * v.x - self.x * v.z
        rz = self.x * v.y - self.y * v.x
        dest.x, dest.y, dest.z = rx, ry, rz
        return dest

    @staticmethod
    def length_of(x: float, y: float, z: float) -> float:
        return math.sqrt(x * x + y * y + z * z)

    @staticmethod
    def length_squared_of(x: float, y: float, z: float) -> float:
        return x * x + y * y + z * z

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def distance(self, v: Vector3d) -> float:
        return math.sqrt(self.distance_squared(v))

    def distance_squared(self, v: Vector3d) -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        dz = self.z - v.z
        return dx * dx + dy * dy + dz * dz

    def normalize(self, length: float = 1.0, dest: Optional[Vector3d] = None) -> Vector3d:
        """Scale to the given length. A zero vector raises ZeroDivisionError."""
        dest = self if dest is None else dest
        inv = length / math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        dest.x = self.x * inv
        dest.y = self.y * inv
        dest.z = self.z * inv
        return dest

    def angle(self, v: Vector3d) -> float:
        """Unsigned angle in [0, pi], atan2(|a x b|, a . b)."""
        cx = self.y * v.z - self.z * v.y
        cy = self.z * v.x - self.x * v.z
        cz = self.x * v.y - self.y * v.x
        cross_length = math.sqrt(cx * cx + cy * cy + cz * cz)
        return math.atan2(cross_length, self.dot(v))

    def angle_cos(self, v: Vector3d) -> float:
        length1_squared = self.length_squared()
        length2_squared = v.length_squared()
        return self.dot(v) / math.sqrt(length1_squared * length2_squared)

    def angle_signed(self, v: Vector3d, n: Vector3d) -> float:
        """Angle from self to v, positive when counter-clockwise around n."""
        tx, ty, tz = v.x, v.y, v.z
        return math.atan2(
            (self.y * tz - self.z * ty) * n.x
            + (self.z * tx - self.x * tz) * n.y
            + (self.x * ty - self.y * tx) * n.z,
            self.x * tx + self.y * ty + self.z * tz,
        )

    def lerp(self, other: Vector3d, t: float, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        dest.x = (other.x - self.x) * t + self.x
        dest.y = (other.y - self.y) * t + self.y
        dest.z = (other.z - self.z) * t + self.z
        return dest

    def reflect(self, normal: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """Reflect about a unit normal."""
        dest = self if dest is None else dest
        d = self.dot(normal)
        dest.x = self.x - (d + d) * normal.x
        dest.y = self.y - (d + d) * normal.y
        dest.z = self.z - (d + d) * normal.z
        return dest

    def half(self, other: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """Normalized half-way vector between self and other."""
        return self.add(other, dest).normalize()

    def orthogonalize(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """Make self orthogonal to v (Gram-Schmidt) and normalize the result."""
        dest = self if dest is None else dest
        s = self.dot(v) / v.length_squared()
        rx = self.x - v.x * s
        ry = self.y - v.y * s
        rz = self.z - v.z * s
        dest.x, dest.y, dest.z = rx, ry, rz
        return dest.normalize()

    def orthogonalize_unit(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """Like orthogonalize, for a unit-length v."""
        dest = self if dest is None else dest
        d = self.dot(v)
        rx = self.x - v.x * d
        ry = self.y - v.y * d
        rz = self.z - v.z * d
        dest.x, dest.y, dest.z = rx, ry, rz
        return dest.normalize()

    def smooth_step(self, v: Vector3d, t: float, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        s = t * t * (3.0 - 2.0 * t)
        dest.x = self.x + (v.x - self.x) * s
        dest.y = self.y + (v.y - self.y) * s
        dest.z = self.z + (v.z - self.z) * s
        return dest

    def hermite(self, t0: Vector3d, v1: Vector3d, t1: Vector3d, t: float,
                dest: Optional[Vector3d] = None) -> Vector3d:
        """Cubic Hermite curve from self (tangent t0) to v1 (tangent t1)."""
        dest = self if dest is None else dest
        t2 = t * t
        t3 = t2 * t
        rx = ((self.x + self.x - v1.x - v1.x + t1.x + t0.x) * t3
              + (3.0 * v1.x - 3.0 * self.x - t0.x - t0.x - t1.x) * t2 + t0.x * t + self.x)
        ry = ((self.y + self.y - v1.y - v1.y + t1.y + t0.y) * t3
              + (3.0 * v1.y - 3.0 * self.y - t0.y - t0.y - t1.y) * t2 + t0.y * t + self.y)
        rz = ((self.z + self.z - v1.z - v1.z + t1.z + t0.z) * t3
              + (3.0 * v1.z - 3.0 * self.z - t0.z - t0.z - t1.z) * t2 + t0.z * t + self.z)
        dest.x, dest.y, dest.z = rx, ry, rz
        return dest

    # =========================================================================
    # Rotation
    # =========================================================================

    def rotate(self, quat: Quaterniond, dest: Optional[Vector3d] = None) -> Vector3d:
        return quat.transform(self, self if dest is None else dest)

    def rotation_to(self, to_dir: Vector3d, dest: Quaterniond) -> Quaterniond:
        """Store the shortest-arc rotation taking self onto to_dir in dest."""
        return dest.rotation_to(self, to_dir)

    def rotate_axis(self, angle: float, ax: float, ay: float, az: float,
                    dest: Optional[Vector3d] = None,
                    trig: PreciseTrig = PRECISE) -> Vector3d:
        """Rotate around the unit axis (ax, ay, az)."""
        dest = self if dest is None else dest
        s = trig.sin(angle)
        c = trig.cos(angle)
        d = ax * self.x + ay * self.y + az * self.z
        k = d * (1.0 - c)
        rx = self.x * c + (ay * self.z - az * self.y) * s + ax * k
        ry = self.y * c + (az * self.x - ax * self.z) * s + ay * k
        rz = self.z * c + (ax * self.y - ay * self.x) * s + az * k
        dest.x, dest.y, dest.z = rx, ry, rz
        return dest

    def rotate_x(self, angle: float, dest: Optional[Vector3d] = None,
                 trig: PreciseTrig = PRECISE) -> Vector3d:
        dest = self if dest is None else dest
        s = trig.sin(angle)
        c = trig.cos(angle)
        ry = self.y * c - self.z * s
        rz = self.y * s + self.z * c
        dest.x, dest.y, dest.z = self.x, ry, rz
        return dest

    def rotate_y(self, angle: float, dest: Optional[Vector3d] = None,
                 trig: PreciseTrig = PRECISE) -> Vector3d:
        dest = self if dest is None else dest
        s = trig.sin(angle)
        c = trig.cos(angle)
        rx = self.x * c + self.z * s
        rz = -self.x * s + self.z * c
        dest.x, dest.y, dest.z = rx, self.y, rz
        return dest

    def rotate_z(self, angle: float, dest: Optional[Vector3d] = None,
                 trig: PreciseTrig = PRECISE) -> Vector3d:
        dest = self if dest is None else dest
        s = trig.sin(angle)
        c = trig.cos(angle)
        rx = self.x * c - self.y * s
        ry = self.x * s + self.y * c
        dest.x, dest.y, dest.z = rx, ry, self.z
        return dest

    # =========================================================================
    # Matrix products
    # =========================================================================

    def mul_matrix(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        """mat * self for a Matrix3d."""
        return mat.transform(self, self if dest is None else dest)

    def mul_transpose(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        """transpose(mat) * self for a Matrix3d."""
        return mat.transform_transpose(self, self if dest is None else dest)

    def mul_position(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        """Transform as a point (w = 1) by a Matrix4d or Matrix4x3d."""
        return mat.transform_position(self, self if dest is None else dest)

    def mul_direction(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        """Transform as a direction (w = 0) by a Matrix4d or Matrix4x3d."""
        return mat.transform_direction(self, self if dest is None else dest)

    def mul_project(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        """Transform as a point by a Matrix4d and divide by the resulting w."""
        return mat.transform_project(self, self if dest is None else dest)

    def mul_position_w(self, mat, dest: Optional[Vector3d] = None) -> float:
        """Transform as a point by a Matrix4d and return the resulting w."""
        dest = self if dest is None else dest
        x, y, z = self.x, self.y, self.z
        w = mat.m03 * x + mat.m13 * y + mat.m23 * z + mat.m33
        mat.transform_position(self, dest)
        return w

    def mul_transpose_position(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        x, y, z = self.x, self.y, self.z
        dest.x = mat.m00 * x + mat.m01 * y + mat.m02 * z + mat.m03
        dest.y = mat.m10 * x + mat.m11 * y + mat.m12 * z + mat.m13
        dest.z = mat.m20 * x + mat.m21 * y + mat.m22 * z + mat.m23
        return dest

    def mul_transpose_direction(self, mat, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = self if dest is None else dest
        x, y, z = self.x, self.y, self.z
        dest.x = mat.m00 * x + mat.m01 * y + mat.m02 * z
        dest.y = mat.m10 * x + mat.m11 * y + mat.m12 * z
        dest.z = mat.m20 * x + mat.m21 * y + mat.m22 * z
        return dest

    # =========================================================================
    # Comparison
    # =========================================================================

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def equals(self, v: Vector3d, delta: float) -> bool:
        return (scalar_equals(self.x, v.x, delta)
                and scalar_equals(self.y, v.y, delta)
                and scalar_equals(self.z, v.z, delta))

    # =========================================================================
    # Operators (return new vectors)
    # =========================================================================

    def __add__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3d:
        return Vector3d(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3d:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector3d:
        return Vector3d(-self.x, -self.y, -self.z)

    def __str__(self) -> str:
        return f"({format_number(self.x)} {format_number(self.y)} {format_number(self.z)})"
