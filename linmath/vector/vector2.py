# linmath/vector/vector2.py
"""
Vector2d - mutable 2D vector of doubles.

Mutating methods write into self, or into dest when one is given, and
return the object written to.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union, Iterator, TYPE_CHECKING

from ..core.scalar import RoundingMode, round_using, equals as scalar_equals
from ..core.options import format_number

if TYPE_CHECKING:
    from ..matrix.matrix2 import Matrix2d
    from ..matrix.matrix3x2 import Matrix3x2d


@dataclass
class Vector2d:
    x: float = 0.0
    y: float = 0.0

    # =========================================================================
    # Construction and access
    # =========================================================================

    @staticmethod
    def from_tuple(t: Tuple[float, float]) -> Vector2d:
        return Vector2d(t[0], t[1])

    def copy(self) -> Vector2d:
        return Vector2d(self.x, self.y)

    def set(self, x: Union[float, Vector2d], y: Optional[float] = None) -> Vector2d:
        """Set from another vector, from one scalar for both components, or from x and y."""
        if isinstance(x, Vector2d):
            self.x, self.y = x.x, x.y
        elif y is None:
            self.x = self.y = x
        else:
            self.x, self.y = x, y
        return self

    def set_component(self, component: int, value: float) -> Vector2d:
        if component == 0:
            self.x = value
        elif component == 1:
            self.y = value
        else:
            raise IndexError(f"Vector2d component out of range: {component}")
        return self

    def get(self, component: int) -> float:
        if component == 0:
            return self.x
        if component == 1:
            return self.y
        raise IndexError(f"Vector2d component out of range: {component}")

    def zero(self) -> Vector2d:
        self.x = self.y = 0.0
        return self

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, component: int) -> float:
        return self.get(component)

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = self.x + v.x
        dest.y = self.y + v.y
        return dest

    def sub(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = self.x - v.x
        dest.y = self.y - v.y
        return dest

    def mul(self, s: Union[float, Vector2d], dest: Optional[Vector2d] = None) -> Vector2d:
        """Multiply by a scalar or component-wise by a vector."""
        dest = self if dest is None else dest
        if isinstance(s, Vector2d):
            dest.x = self.x * s.x
            dest.y = self.y * s.y
        else:
            dest.x = self.x * s
            dest.y = self.y * s
        return dest

    def div(self, s: Union[float, Vector2d], dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        if isinstance(s, Vector2d):
            dest.x = self.x / s.x
            dest.y = self.y / s.y
        else:
            inv = 1.0 / s
            dest.x = self.x * inv
            dest.y = self.y * inv
        return dest

    def fma(self, a: Union[float, Vector2d], b: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """self + a * b."""
        dest = self if dest is None else dest
        if isinstance(a, Vector2d):
            dest.x = self.x + a.x * b.x
            dest.y = self.y + a.y * b.y
        else:
            dest.x = self.x + a * b.x
            dest.y = self.y + a * b.y
        return dest

    def mul_add(self, a: Union[float, Vector2d], b: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """self * a + b."""
        dest = self if dest is None else dest
        if isinstance(a, Vector2d):
            dest.x = self.x * a.x + b.x
            dest.y = self.y * a.y + b.y
        else:
            dest.x = self.x * a + b.x
            dest.y = self.y * a + b.y
        return dest

    def negate(self, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = -self.x
        dest.y = -self.y
        return dest

    def absolute(self, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = abs(self.x)
        dest.y = abs(self.y)
        return dest

    def floor(self, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = float(math.floor(self.x))
        dest.y = float(math.floor(self.y))
        return dest

    def ceil(self, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = float(math.ceil(self.x))
        dest.y = float(math.ceil(self.y))
        return dest

    def round(self, mode: RoundingMode = RoundingMode.HALF_UP,
              dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = round_using(self.x, mode)
        dest.y = round_using(self.y, mode)
        return dest

    def min(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x < v.x else v.x
        dest.y = self.y if self.y < v.y else v.y
        return dest

    def max(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = self.x if self.x > v.x else v.x
        dest.y = self.y if self.y > v.y else v.y
        return dest

    def min_component(self) -> int:
        return 0 if abs(self.x) < abs(self.y) else 1

    def max_component(self) -> int:
        return 0 if abs(self.x) >= abs(self.y) else 1

    # =========================================================================
    # Geometry
    # =========================================================================

    def dot(self, v: Vector2d) -> float:
        return self.x * v.x + self.y * v.y

    @staticmethod
    def length_of(x: float, y: float) -> float:
        return math.sqrt(x * x + y * y)

    @staticmethod
    def length_squared_of(x: float, y: float) -> float:
        return x * x + y * y

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance(self, v: Vector2d) -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        return math.sqrt(dx * dx + dy * dy)

    def distance_squared(self, v: Vector2d) -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        return dx * dx + dy * dy

    def normalize(self, length: float = 1.0, dest: Optional[Vector2d] = None) -> Vector2d:
        """Scale to the given length. A zero vector raises ZeroDivisionError."""
        dest = self if dest is None else dest
        inv = length / math.sqrt(self.x * self.x + self.y * self.y)
        dest.x = self.x * inv
        dest.y = self.y * inv
        return dest

    def perpendicular(self, dest: Optional[Vector2d] = None) -> Vector2d:
        """Rotate by -90 degrees: (x, y) -> (y, -x)."""
        dest = self if dest is None else dest
        x = self.x
        dest.x = self.y
        dest.y = -x
        return dest

    def angle(self, v: Vector2d) -> float:
        """Signed angle from self to v in (-pi, pi]."""
        dot = self.x * v.x + self.y * v.y
        det = self.x * v.y - self.y * v.x
        return math.atan2(det, dot)

    def angle_cos(self, v: Vector2d) -> float:
        length1_squared = self.x * self.x + self.y * self.y
        length2_squared = v.x * v.x + v.y * v.y
        dot = self.x * v.x + self.y * v.y
        return dot / math.sqrt(length1_squared * length2_squared)

    def lerp(self, other: Vector2d, t: float, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        dest.x = (other.x - self.x) * t + self.x
        dest.y = (other.y - self.y) * t + self.y
        return dest

    # =========================================================================
    # Matrix products
    # =========================================================================

    def mul_matrix(self, mat: Matrix2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """mat * self for a Matrix2d."""
        dest = self if dest is None else dest
        rx = mat.m00 * self.x + mat.m10 * self.y
        ry = mat.m01 * self.x + mat.m11 * self.y
        dest.x, dest.y = rx, ry
        return dest

    def mul_transpose(self, mat: Matrix2d, dest: Optional[Vector2d] = None) -> Vector2d:
        dest = self if dest is None else dest
        rx = mat.m00 * self.x + mat.m01 * self.y
        ry = mat.m10 * self.x + mat.m11 * self.y
        dest.x, dest.y = rx, ry
        return dest

    def mul_position(self, mat: Matrix3x2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """Transform as a point (z = 1) by a Matrix3x2d."""
        dest = self if dest is None else dest
        rx = mat.m00 * self.x + mat.m10 * self.y + mat.m20
        ry = mat.m01 * self.x + mat.m11 * self.y + mat.m21
        dest.x, dest.y = rx, ry
        return dest

    def mul_direction(self, mat: Matrix3x2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """Transform as a direction (z = 0) by a Matrix3x2d."""
        dest = self if dest is None else dest
        rx = mat.m00 * self.x + mat.m10 * self.y
        ry = mat.m01 * self.x + mat.m11 * self.y
        dest.x, dest.y = rx, ry
        return dest

    # =========================================================================
    # Comparison
    # =========================================================================

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def equals(self, v: Vector2d, delta: float) -> bool:
        return scalar_equals(self.x, v.x, delta) and scalar_equals(self.y, v.y, delta)

    # =========================================================================
    # Operators (return new vectors)
    # =========================================================================

    def __add__(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2d:
        return Vector2d(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2d:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector2d:
        return Vector2d(-self.x, -self.y)

    def __str__(self) -> str:
        return f"({format_number(self.x)} {format_number(self.y)})"
