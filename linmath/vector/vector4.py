# linmath/vector/vector4.py
"""
Vector4d - mutable homogeneous 4D vector of doubles.

Also used for plane equations (a, b, c, d), see normalize3.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union, Iterator, TYPE_CHECKING

from ..core.scalar import RoundingMode, round_using, equals as scalar_equals
from ..core.options import format_number

if TYPE_CHECKING:
    from .vector3 import Vector3d
    from ..rotation.quaternion import Quaterniond


@dataclass
class Vector4d:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @staticmethod
    def from_tuple(t: Tuple[float, float, float, float]) -> Vector4d:
        return Vector4d(t[0], t[1], t[2], t[3])

    @staticmethod
    def from_vector3(v: Vector3d, w: float = 1.0) -> Vector4d:
        return Vector4d(v.x, v.y, v.z, w)

    @staticmethod
    def point(x: float, y: float, z: float) -> Vector4d:
        return Vector4d(x, y, z, 1.0)

    @staticmethod
    def direction(x: float, y: float, z: float) -> Vector4d:
        return Vector4d(x, y, z, 0.0)

    def copy(self) -> Vector4d:
        return Vector4d(self.x, self.y, self.z, self.w)

    def set(self, x: Union[float, Vector4d], y: Optional[float] = None,
            z: Optional[float] = None, w: Optional[float] = None) -> Vector4d:
        """Set from another vector, from one scalar for all components, or from x, y, z and w."""
        if isinstance(x, Vector4d):
            self.x, self.y, self.z, self.w = x.x, x.y, x.z, x.w
        elif y is None:
            self.x = self.y = self.z = self.w = x
        else:
            self.x, self.y, self.z, self.w = x, y, z, w
        return self

    def set_component(self, component: int, value: float) -> Vector4d:
        if not 0 <= component <= 3:
            raise IndexError(f"Vector4d component out of range: {component}")
        setattr(self, "xyzw"[component], value)
        return self

    def get(self, component: int) -> float:
        if not 0 <= component <= 3:
            raise IndexError(f"Vector4d component out of range: {component}")
        return getattr(self, "xyzw"[component])

    def zero(self) -> Vector4d:
        self.x = self.y = self.z = self.w = 0.0
        return self

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def xyz(self, dest: Vector3d) -> Vector3d:
        dest.x, dest.y, dest.z = self.x, self.y, self.z
        return dest

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __getitem__(self, component: int) -> float:
        return self.get(component)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = self.x + v.x
        dest.y = self.y + v.y
        dest.z = self.z + v.z
        dest.w = self.w + v.w
        return dest

    def sub(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = self.x - v.x
        dest.y = self.y - v.y
        dest.z = self.z - v.z
        dest.w = self.w - v.w
        return dest

    def mul(self, s: Union[float, Vector4d], dest: Optional[Vector4d] = None) -> Vector4d:
        """Multiply by a scalar or component-wise by a vector."""
        dest = self if dest is None else dest
        if isinstance(s, Vector4d):
            dest.x = self.x * s.x
            dest.y = self.y * s.y
            dest.z = self.z * s.z
            dest.w = self.w * s.w
        else:
            dest.x = self.x * s
            dest.y = self.y * s
            dest.z = self.z * s
            dest.w = self.w * s
        return dest

    def div(self, s: Union[float, Vector4d], dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        if isinstance(s, Vector4d):
            dest.x = self.x / s.x
            dest.y = self.y / s.y
            dest.z = self.z / s.z
            dest.w = self.w / s.w
        else:
            inv = 1.0 / s
            dest.x = self.x * inv
            dest.y = self.y * inv
            dest.z = self.z * inv
            dest.w = self.w * inv
        return dest

    def fma(self, a: Union[float, Vector4d], b: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        """self + a * b."""
        dest = self if dest is None else dest
        if isinstance(a, Vector4d):
            dest.x = self.x + a.x * b.x
            dest.y = self.y + a.y * b.y
            dest.z = self.z + a.z * b.z
            dest.w = self.w + a.w * b.w
        else:
            dest.x = self.x + a * b.x
            dest.y = self.y + a * b.y
            dest.z = self.z + a * b.z
            dest.w = self.w + a * b.w
        return dest

    def negate(self, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = -self.x
        dest.y = -self.y
        dest.z = -self.z
        dest.w = -self.w
        return dest

    def absolute(self, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = abs(self.x)
        dest.y = abs(self.y)
        dest.z = abs(self.z)
        dest.w = abs(self.w)
        return dest

    def floor(self, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = float(math.floor(self.x))
        dest.y = float(math.floor(self.y))
        dest.z = float(math.floor(self.z))
        dest.w = float(math.floor(self.w))
        return dest

    def ceil(self, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = float(math.ceil(self.x))
        dest.y = float(math.ceil(self.y))
        dest.z = float(math.ceil(self.z))
        dest.w = float(math.ceil(self.w))
        return dest

    def round(self, mode: RoundingMode = RoundingMode.HALF_UP,
              dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = round_using(self.x, mode)
        dest.y = round_using(self.y, mode)
        dest.z = round_using(self.z, mode)
        dest.w = round_using(self.w, mode)
        return dest

    def min(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x < v.x else v.x
        dest.y = self.y if self.y < v.y else v.y
        dest.z = self.z if self.z < v.z else v.z
        dest.w = self.w if self.w < v.w else v.w
        return dest

    def max(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x > v.x else v.x
        dest.y = self.y if self.y > v.y else v.y
        dest.z = self.z if self.z > v.z else v.z
        dest.w = self.w if self.w > v.w else v.w
        return dest

    # =========================================================================
    # Geometry
    # =========================================================================

    def dot(self, v: Vector4d) -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z + self.w * v.w

    @staticmethod
    def length_of(x: float, y: float, z: float, w: float) -> float:
        return math.sqrt(x * x + y * y + z * z + w * w)

    @staticmethod
    def length_squared_of(x: float, y: float, z: float, w: float) -> float:
        return x * x + y * y + z * z + w * w

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def length3(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance(self, v: Vector4d) -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        dz = self.z - v.z
        dw = self.w - v.w
        return math.sqrt(dx * dx + dy * dy + dz * dz + dw * dw)

    def normalize(self, length: float = 1.0, dest: Optional[Vector4d] = None) -> Vector4d:
        """Scale to the given length. A zero vector raises ZeroDivisionError."""
        dest = self if dest is None else dest
        inv = length / self.length()
        dest.x = self.x * inv
        dest.y = self.y * inv
        dest.z = self.z * inv
        dest.w = self.w * inv
        return dest

    def normalize3(self, dest: Optional[Vector4d] = None) -> Vector4d:
        """Divide all four components by the length of (x, y, z)."""
        dest = self if dest is None else dest
        inv = 1.0 / self.length3()
        dest.x = self.x * inv
        dest.y = self.y * inv
        dest.z = self.z * inv
        dest.w = self.w * inv
        return dest

    def angle_cos(self, v: Vector4d) -> float:
        return self.dot(v) / math.sqrt(self.length_squared() * v.length_squared())

    def angle(self, v: Vector4d) -> float:
        c = self.angle_cos(v)
        c = c if c < 1.0 else 1.0
        c = c if c > -1.0 else -1.0
        return math.acos(c)

    def lerp(self, other: Vector4d, t: float, dest: Optional[Vector4d] = None) -> Vector4d:
        dest = self if dest is None else dest
        dest.x = (other.x - self.x) * t + self.x
        dest.y = (other.y - self.y) * t + self.y
        dest.z = (other.z - self.z) * t + self.z
        dest.w = (other.w - self.w) * t + self.w
        return dest

    def rotate(self, quat: Quaterniond, dest: Optional[Vector4d] = None) -> Vector4d:
        """Rotate (x, y, z) by quat, keeping w."""
        return quat.transform(self, self if dest is None else dest)

    # =========================================================================
    # Matrix products
    # =========================================================================

    def mul_matrix(self, mat, dest: Optional[Vector4d] = None) -> Vector4d:
        """mat * self for a Matrix4d or Matrix4x3d."""
        return mat.transform(self, self if dest is None else dest)

    def mul_affine(self, mat, dest: Optional[Vector4d] = None) -> Vector4d:
        """mat * self, assuming mat is affine."""
        return mat.transform_affine(self, self if dest is None else dest)

    def mul_project(self, mat, dest: Optional[Vector4d] = None) -> Vector4d:
        """mat * self followed by division by w."""
        return mat.transform_project(self, self if dest is None else dest)

    def mul_transpose(self, mat, dest: Optional[Vector4d] = None) -> Vector4d:
        return mat.transform_transpose(self, self if dest is None else dest)

    # =========================================================================
    # Comparison
    # =========================================================================

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z, self.w))

    def equals(self, v: Vector4d, delta: float) -> bool:
        return (scalar_equals(self.x, v.x, delta)
                and scalar_equals(self.y, v.y, delta)
                and scalar_equals(self.z, v.z, delta)
                and scalar_equals(self.w, v.w, delta))

    # =========================================================================
    # Operators (return new vectors)
    # =========================================================================

    def __add__(self, other: Vector4d) -> Vector4d:
        return Vector4d(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vector4d) -> Vector4d:
        return Vector4d(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, scalar: float) -> Vector4d:
        return Vector4d(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def __rmul__(self, scalar: float) -> Vector4d:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector4d:
        return Vector4d(-self.x, -self.y, -self.z, -self.w)

    def __str__(self) -> str:
        parts = " ".join(format_number(c) for c in (self.x, self.y, self.z, self.w))
        return f"({parts})"
