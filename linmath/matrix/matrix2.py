# linmath/matrix/matrix2.py
"""
Matrix2d - 2x2 matrix of doubles, column-major.

    | m00 m10 |
    | m01 m11 |
"""

from __future__ import annotations
import math
from typing import Optional, Tuple, Union

import numpy as np

from ..core.scalar import PRECISE, PreciseTrig, equals as scalar_equals
from ..core.options import format_number
from ..vector.vector2 import Vector2d


class Matrix2d:
    """2x2 matrix for 2D rotation and scale."""

    __slots__ = ('m00', 'm01', 'm10', 'm11')

    def __init__(self, m00: float = 1.0, m01: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0):
        self.m00 = m00
        self.m01 = m01
        self.m10 = m10
        self.m11 = m11

    def _write(self, m00: float, m01: float, m10: float, m11: float,
               dest: Optional[Matrix2d]) -> Matrix2d:
        dest = self if dest is None else dest
        dest.m00, dest.m01, dest.m10, dest.m11 = m00, m01, m10, m11
        return dest

    def copy(self) -> Matrix2d:
        return Matrix2d(self.m00, self.m01, self.m10, self.m11)

    def set(self, m00, m01: Optional[float] = None,
            m10: Optional[float] = None, m11: Optional[float] = None) -> Matrix2d:
        """Set from four values, or from the upper-left 2x2 of any matrix."""
        if m01 is None:
            m = m00
            return self._write(m.m00, m.m01, m.m10, m.m11, None)
        return self._write(m00, m01, m10, m11, None)

    def get(self, column: int, row: int) -> float:
        if not (0 <= column <= 1 and 0 <= row <= 1):
            raise IndexError(f"Matrix2d index out of range: ({column}, {row})")
        return getattr(self, f"m{column}{row}")

    def set_element(self, column: int, row: int, value: float) -> Matrix2d:
        if not (0 <= column <= 1 and 0 <= row <= 1):
            raise IndexError(f"Matrix2d index out of range: ({column}, {row})")
        setattr(self, f"m{column}{row}", value)
        return self

    def zero(self) -> Matrix2d:
        return self._write(0.0, 0.0, 0.0, 0.0, None)

    def identity(self) -> Matrix2d:
        return self._write(1.0, 0.0, 0.0, 1.0, None)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.m00, self.m01, self.m10, self.m11)

    def to_array(self) -> np.ndarray:
        return np.array(self.to_tuple(), dtype=np.float64)

    def to_bytes(self) -> bytes:
        return self.to_array().astype(np.float32).tobytes()

    # =========================================================================
    # Algebra
    # =========================================================================

    def mul(self, right: Matrix2d, dest: Optional[Matrix2d] = None) -> Matrix2d:
        """self * right."""
        return self._write(
            self.m00 * right.m00 + self.m10 * right.m01,
            self.m01 * right.m00 + self.m11 * right.m01,
            self.m00 * right.m10 + self.m10 * right.m11,
            self.m01 * right.m10 + self.m11 * right.m11,
            dest)

    def mul_local(self, left: Matrix2d, dest: Optional[Matrix2d] = None) -> Matrix2d:
        """left * self."""
        return left.mul(self, self if dest is None else dest)

    def determinant(self) -> float:
        return self.m00 * self.m11 - self.m10 * self.m01

    def invert(self, dest: Optional[Matrix2d] = None) -> Matrix2d:
        """A singular matrix raises ZeroDivisionError."""
        s = 1.0 / self.determinant()
        return self._write(self.m11 * s, -self.m01 * s, -self.m10 * s, self.m00 * s, dest)

    def transpose(self, dest: Optional[Matrix2d] = None) -> Matrix2d:
        return self._write(self.m00, self.m10, self.m01, self.m11, dest)

    def normal(self, dest: Optional[Matrix2d] = None) -> Matrix2d:
        """Transpose of the inverse."""
        s = 1.0 / self.determinant()
        return self._write(self.m11 * s, -self.m10 * s, -self.m01 * s, self.m00 * s, dest)

    def add(self, other: Matrix2d, dest: Optional[Matrix2d] = None) -> Matrix2d:
        return self._write(self.m00 + other.m00, self.m01 + other.m01,
                           self.m10 + other.m10, self.m11 + other.m11, dest)

    def sub(self, other: Matrix2d, dest: Optional[Matrix2d] = None) -> Matrix2d:
        return self._write(self.m00 - other.m00, self.m01 - other.m01,
                           self.m10 - other.m10, self.m11 - other.m11, dest)

    def mul_component_wise(self, other: Matrix2d, dest: Optional[Matrix2d] = None) -> Matrix2d:
        return self._write(self.m00 * other.m00, self.m01 * other.m01,
                           self.m10 * other.m10, self.m11 * other.m11, dest)

    def lerp(self, other: Matrix2d, t: float, dest: Optional[Matrix2d] = None) -> Matrix2d:
        """Component-wise self + (other - self) * t."""
        return self._write(
            self.m00 + (other.m00 - self.m00) * t,
            self.m01 + (other.m01 - self.m01) * t,
            self.m10 + (other.m10 - self.m10) * t,
            self.m11 + (other.m11 - self.m11) * t,
            dest)

    # =========================================================================
    # Builders
    # =========================================================================

    def rotation(self, angle: float,
                 trig: PreciseTrig = PRECISE) -> Matrix2d:
        s = trig.sin(angle)
        c = trig.cos(angle)
        return self._write(c, s, -s, c, None)

    def rotate(self, angle: float, dest: Optional[Matrix2d] = None,
               trig: PreciseTrig = PRECISE) -> Matrix2d:
        """self * R(angle)."""
        s = trig.sin(angle)
        c = trig.cos(angle)
        return self._write(
            self.m00 * c + self.m10 * s,
            self.m01 * c + self.m11 * s,
            self.m10 * c - self.m00 * s,
            self.m11 * c - self.m01 * s,
            dest)

    def scaling(self, x: float, y: Optional[float] = None) -> Matrix2d:
        y = x if y is None else y
        return self._write(x, 0.0, 0.0, y, None)

    def scale(self, x: float, y: Optional[float] = None,
              dest: Optional[Matrix2d] = None) -> Matrix2d:
        """self * S(x, y)."""
        y = x if y is None else y
        return self._write(self.m00 * x, self.m01 * x, self.m10 * y, self.m11 * y, dest)

    def rotate_local(self, angle: float, dest: Optional[Matrix2d] = None,
                     trig: PreciseTrig = PRECISE) -> Matrix2d:
        """R(angle) * self."""
        s = trig.sin(angle)
        c = trig.cos(angle)
        return self._write(
            c * self.m00 - s * self.m01,
            s * self.m00 + c * self.m01,
            c * self.m10 - s * self.m11,
            s * self.m10 + c * self.m11,
            dest)

    def scale_local(self, x: float, y: Optional[float] = None,
                    dest: Optional[Matrix2d] = None) -> Matrix2d:
        """S(x, y) * self."""
        y = x if y is None else y
        return self._write(self.m00 * x, self.m01 * y, self.m10 * x, self.m11 * y, dest)

    def get_rotation(self) -> float:
        """Angle of the rotation part, in radians."""
        return math.atan2(self.m01, self.m11)

    # =========================================================================
    # Vectors
    # =========================================================================

    def transform(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        return v.mul_matrix(self, dest)

    def transform_transpose(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        """transpose(self) * v."""
        return v.mul_transpose(self, dest)

    def get_row(self, row: int, dest: Vector2d) -> Vector2d:
        if row == 0:
            return dest.set(self.m00, self.m10)
        if row == 1:
            return dest.set(self.m01, self.m11)
        raise IndexError(f"Matrix2d row out of range: {row}")

    def set_row(self, row: int, x, y: Optional[float] = None) -> Matrix2d:
        """Set a row from two values or a Vector2d."""
        if y is None:
            x, y = x.x, x.y
        if row == 0:
            self.m00, self.m10 = x, y
        elif row == 1:
            self.m01, self.m11 = x, y
        else:
            raise IndexError(f"Matrix2d row out of range: {row}")
        return self

    def get_column(self, column: int, dest: Vector2d) -> Vector2d:
        if column == 0:
            return dest.set(self.m00, self.m01)
        if column == 1:
            return dest.set(self.m10, self.m11)
        raise IndexError(f"Matrix2d column out of range: {column}")

    def set_column(self, column: int, x, y: Optional[float] = None) -> Matrix2d:
        """Set a column from two values or a Vector2d."""
        if y is None:
            x, y = x.x, x.y
        if column == 0:
            self.m00, self.m01 = x, y
        elif column == 1:
            self.m10, self.m11 = x, y
        else:
            raise IndexError(f"Matrix2d column out of range: {column}")
        return self

    def get_scale(self, dest: Vector2d) -> Vector2d:
        dest.x = math.sqrt(self.m00 * self.m00 + self.m01 * self.m01)
        dest.y = math.sqrt(self.m10 * self.m10 + self.m11 * self.m11)
        return dest

    def positive_x(self, dest: Vector2d) -> Vector2d:
        """Direction that this matrix maps onto +X."""
        s = 1.0 / (self.m00 * self.m11 - self.m01 * self.m10)
        dest.x = self.m11 * s
        dest.y = -self.m01 * s
        return dest.normalize()

    def positive_y(self, dest: Vector2d) -> Vector2d:
        s = 1.0 / (self.m00 * self.m11 - self.m01 * self.m10)
        dest.x = -self.m10 * s
        dest.y = self.m00 * s
        return dest.normalize()

    def normalized_positive_x(self, dest: Vector2d) -> Vector2d:
        """positive_x for an orthonormal matrix."""
        return dest.set(self.m00, self.m10)

    def normalized_positive_y(self, dest: Vector2d) -> Vector2d:
        return dest.set(self.m01, self.m11)

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.to_tuple())

    def equals(self, m: Matrix2d, delta: float) -> bool:
        return all(scalar_equals(a, b, delta) for a, b in zip(self.to_tuple(), m.to_tuple()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix2d):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    __hash__ = None

    def __matmul__(self, other: Union[Matrix2d, Vector2d]):
        if isinstance(other, Matrix2d):
            return self.mul(other, Matrix2d())
        if isinstance(other, Vector2d):
            return self.transform(other, Vector2d())
        raise TypeError(f"Cannot multiply Matrix2d by {type(other)}")

    def __repr__(self) -> str:
        return f"Matrix2d{self.to_tuple()}"

    def __str__(self) -> str:
        f = format_number
        return (f"{f(self.m00)} {f(self.m10)}\n"
                f"{f(self.m01)} {f(self.m11)}\n")
