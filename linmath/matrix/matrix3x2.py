# linmath/matrix/matrix3x2.py
"""
Matrix3x2d - affine 2D transform of doubles, column-major.

    | m00 m10 m20 |
    | m01 m11 m21 |
    |  0   0   1  |

The bottom row is implicit. Useful for 2D panels and views: view()
maps a rectangle onto [-1, 1] and test_point/test_circle/test_ar cull
against it.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..core.scalar import PRECISE, PreciseTrig, equals as scalar_equals
from ..core.options import format_number
from ..vector.vector2 import Vector2d
from ..vector.vector3 import Vector3d
from .matrix2 import Matrix2d


class Matrix3x2d:
    """Affine 2D matrix: 2x2 linear part plus translation (m20, m21)."""

    __slots__ = ('m00', 'm01', 'm10', 'm11', 'm20', 'm21')

    def __init__(self, m00: float = 1.0, m01: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0,
                 m20: float = 0.0, m21: float = 0.0):
        self.m00 = m00
        self.m01 = m01
        self.m10 = m10
        self.m11 = m11
        self.m20 = m20
        self.m21 = m21

    def _write(self, m00: float, m01: float, m10: float, m11: float,
               m20: float, m21: float, dest: Optional[Matrix3x2d]) -> Matrix3x2d:
        dest = self if dest is None else dest
        dest.m00, dest.m01 = m00, m01
        dest.m10, dest.m11 = m10, m11
        dest.m20, dest.m21 = m20, m21
        return dest

    def copy(self) -> Matrix3x2d:
        return Matrix3x2d(*self.to_tuple())

    def set(self, m00, m01: Optional[float] = None, m10: Optional[float] = None,
            m11: Optional[float] = None, m20: Optional[float] = None,
            m21: Optional[float] = None) -> Matrix3x2d:
        """Set from six values, from another Matrix3x2d, or from a Matrix2d.

        A Matrix2d replaces the linear part and leaves the translation alone.
        """
        if isinstance(m00, Matrix3x2d):
            return self._write(*m00.to_tuple(), None)
        if isinstance(m00, Matrix2d):
            m = m00
            return self._write(m.m00, m.m01, m.m10, m.m11, self.m20, self.m21, None)
        return self._write(m00, m01, m10, m11, m20, m21, None)

    def get(self, column: int, row: int) -> float:
        if not (0 <= column <= 2 and 0 <= row <= 1):
            raise IndexError(f"Matrix3x2d index out of range: ({column}, {row})")
        return getattr(self, f"m{column}{row}")

    def set_element(self, column: int, row: int, value: float) -> Matrix3x2d:
        if not (0 <= column <= 2 and 0 <= row <= 1):
            raise IndexError(f"Matrix3x2d index out of range: ({column}, {row})")
        setattr(self, f"m{column}{row}", value)
        return self

    def zero(self) -> Matrix3x2d:
        return self._write(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, None)

    def identity(self) -> Matrix3x2d:
        return self._write(1.0, 0.0, 0.0, 1.0, 0.0, 0.0, None)

    def to_tuple(self) -> Tuple[float, ...]:
        return (self.m00, self.m01, self.m10, self.m11, self.m20, self.m21)

    def to_array(self) -> np.ndarray:
        return np.array(self.to_tuple(), dtype=np.float64)

    def to_bytes(self) -> bytes:
        return self.to_array().astype(np.float32).tobytes()

    # =========================================================================
    # Algebra
    # =========================================================================

    def mul(self, right: Matrix3x2d, dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """self * right."""
        return self._write(
            self.m00 * right.m00 + self.m10 * right.m01,
            self.m01 * right.m00 + self.m11 * right.m01,
            self.m00 * right.m10 + self.m10 * right.m11,
            self.m01 * right.m10 + self.m11 * right.m11,
            self.m00 * right.m20 + self.m10 * right.m21 + self.m20,
            self.m01 * right.m20 + self.m11 * right.m21 + self.m21,
            dest)

    def mul_local(self, left: Matrix3x2d, dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """left * self."""
        return left.mul(self, self if dest is None else dest)

    def determinant(self) -> float:
        return self.m00 * self.m11 - self.m01 * self.m10

    def _inverse(self) -> Tuple[float, ...]:
        s = 1.0 / self.determinant()
        return (self.m11 * s,
                -self.m01 * s,
                -self.m10 * s,
                self.m00 * s,
                (self.m10 * self.m21 - self.m20 * self.m11) * s,
                (self.m20 * self.m01 - self.m00 * self.m21) * s)

    def invert(self, dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """A singular linear part raises ZeroDivisionError."""
        return self._write(*self._inverse(), dest)

    # =========================================================================
    # Builders
    # =========================================================================

    def translation(self, x: float, y: float) -> Matrix3x2d:
        return self._write(1.0, 0.0, 0.0, 1.0, x, y, None)

    def translate(self, x: float, y: float, dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """self * T(x, y)."""
        return self._write(
            self.m00, self.m01, self.m10, self.m11,
            self.m00 * x + self.m10 * y + self.m20,
            self.m01 * x + self.m11 * y + self.m21,
            dest)

    def translate_local(self, x: float, y: float,
                        dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """T(x, y) * self."""
        return self._write(self.m00, self.m01, self.m10, self.m11,
                           self.m20 + x, self.m21 + y, dest)

    def rotation(self, angle: float,
                 trig: PreciseTrig = PRECISE) -> Matrix3x2d:
        s = trig.sin(angle)
        c = trig.cos(angle)
        return self._write(c, s, -s, c, 0.0, 0.0, None)

    def rotate(self, angle: float, dest: Optional[Matrix3x2d] = None,
               trig: PreciseTrig = PRECISE) -> Matrix3x2d:
        """self * R(angle)."""
        s = trig.sin(angle)
        c = trig.cos(angle)
        return self._write(
            self.m00 * c + self.m10 * s,
            self.m01 * c + self.m11 * s,
            self.m10 * c - self.m00 * s,
            self.m11 * c - self.m01 * s,
            self.m20, self.m21,
            dest)

    def scaling(self, x: float, y: Optional[float] = None) -> Matrix3x2d:
        y = x if y is None else y
        return self._write(x, 0.0, 0.0, y, 0.0, 0.0, None)

    def scale(self, x: float, y: Optional[float] = None,
              dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """self * S(x, y)."""
        y = x if y is None else y
        return self._write(self.m00 * x, self.m01 * x, self.m10 * y, self.m11 * y,
                           self.m20, self.m21, dest)

    def view(self, left: float, right: float, bottom: float, top: float,
             dest: Optional[Matrix3x2d] = None) -> Matrix3x2d:
        """self * V, where V maps [left, right] x [bottom, top] onto [-1, 1]^2."""
        rm00 = 2.0 / (right - left)
        rm11 = 2.0 / (top - bottom)
        rm20 = (left + right) / (left - right)
        rm21 = (bottom + top) / (bottom - top)
        return self._write(
            self.m00 * rm00,
            self.m01 * rm00,
            self.m10 * rm11,
            self.m11 * rm11,
            self.m00 * rm20 + self.m10 * rm21 + self.m20,
            self.m01 * rm20 + self.m11 * rm21 + self.m21,
            dest)

    def set_view(self, left: float, right: float, bottom: float, top: float) -> Matrix3x2d:
        return self._write(2.0 / (right - left), 0.0,
                           0.0, 2.0 / (top - bottom),
                           (left + right) / (left - right),
                           (bottom + top) / (bottom - top),
                           None)

    # =========================================================================
    # View queries
    # =========================================================================

    def origin(self, dest: Vector2d) -> Vector2d:
        """The point that this matrix maps onto (0, 0)."""
        s = 1.0 / self.determinant()
        dest.x = (self.m10 * self.m21 - self.m20 * self.m11) * s
        dest.y = (self.m20 * self.m01 - self.m00 * self.m21) * s
        return dest

    def view_area(self) -> Tuple[float, float, float, float]:
        """Bounds (min_x, min_y, max_x, max_y) of the region mapped into [-1, 1]^2."""
        rm00, rm01, rm10, rm11, rm20, rm21 = self._inverse()
        xs = (-rm00 - rm10, rm00 - rm10, -rm00 + rm10, rm00 + rm10)
        ys = (-rm01 - rm11, rm01 - rm11, -rm01 + rm11, rm01 + rm11)
        return (min(xs) + rm20, min(ys) + rm21, max(xs) + rm20, max(ys) + rm21)

    def _planes(self) -> Tuple[Tuple[float, float, float], ...]:
        # a * x + b * y + w >= 0 for every point inside the view
        return ((self.m00, self.m10, 1.0 + self.m20),
                (-self.m00, -self.m10, 1.0 - self.m20),
                (self.m01, self.m11, 1.0 + self.m21),
                (-self.m01, -self.m11, 1.0 - self.m21))

    def test_point(self, x: float, y: float) -> bool:
        """Whether (x, y) maps into [-1, 1]^2, boundary included."""
        return all(a * x + b * y + w >= 0 for a, b, w in self._planes())

    def test_circle(self, x: float, y: float, r: float) -> bool:
        for a, b, w in self._planes():
            inv = 1.0 / math.sqrt(a * a + b * b)
            if a * inv * x + b * inv * y + w * inv < -r:
                return False
        return True

    def test_ar(self, min_x: float, min_y: float, max_x: float, max_y: float) -> bool:
        """Whether the axis-aligned rectangle may intersect the view."""
        for a, b, w in self._planes():
            if a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y) < -w:
                return False
        return True

    def unproject(self, win_x: float, win_y: float, viewport: Sequence[float],
                  dest: Vector2d) -> Vector2d:
        """Map window coordinates through viewport (x, y, width, height) back into view space."""
        return self._unproject(self._inverse(), win_x, win_y, viewport, dest)

    def unproject_inv(self, win_x: float, win_y: float, viewport: Sequence[float],
                      dest: Vector2d) -> Vector2d:
        """unproject() where this matrix already is the inverse."""
        return self._unproject(self.to_tuple(), win_x, win_y, viewport, dest)

    @staticmethod
    def _unproject(inv: Tuple[float, ...], win_x: float, win_y: float,
                   viewport: Sequence[float], dest: Vector2d) -> Vector2d:
        im00, im01, im10, im11, im20, im21 = inv
        ndc_x = (win_x - viewport[0]) / viewport[2] * 2.0 - 1.0
        ndc_y = (win_y - viewport[1]) / viewport[3] * 2.0 - 1.0
        dest.x = im00 * ndc_x + im10 * ndc_y + im20
        dest.y = im01 * ndc_x + im11 * ndc_y + im21
        return dest

    # =========================================================================
    # Vectors
    # =========================================================================

    def transform(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self * v with v.z as the homogeneous coordinate."""
        dest = v if dest is None else dest
        x, y, z = v.x, v.y, v.z
        dest.x = self.m00 * x + self.m10 * y + self.m20 * z
        dest.y = self.m01 * x + self.m11 * y + self.m21 * z
        dest.z = z
        return dest

    def transform_position(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        return v.mul_position(self, dest)

    def transform_direction(self, v: Vector2d, dest: Optional[Vector2d] = None) -> Vector2d:
        return v.mul_direction(self, dest)

    def positive_x(self, dest: Vector2d) -> Vector2d:
        """Direction that this matrix maps onto +X."""
        s = 1.0 / self.determinant()
        dest.x = self.m11 * s
        dest.y = -self.m01 * s
        return dest.normalize()

    def positive_y(self, dest: Vector2d) -> Vector2d:
        s = 1.0 / self.determinant()
        dest.x = -self.m10 * s
        dest.y = self.m00 * s
        return dest.normalize()

    def normalized_positive_x(self, dest: Vector2d) -> Vector2d:
        return dest.set(self.m00, self.m10)

    def normalized_positive_y(self, dest: Vector2d) -> Vector2d:
        return dest.set(self.m01, self.m11)

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def equals(self, m: Matrix3x2d, delta: float) -> bool:
        return all(scalar_equals(a, b, delta) for a, b in zip(self.to_tuple(), m.to_tuple()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3x2d):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    __hash__ = None

    def __matmul__(self, other: Union[Matrix3x2d, Vector2d, Vector3d]):
        if isinstance(other, Matrix3x2d):
            return self.mul(other, Matrix3x2d())
        if isinstance(other, Vector3d):
            return self.transform(other, Vector3d())
        if isinstance(other, Vector2d):
            return self.transform_position(other, Vector2d())
        raise TypeError(f"Cannot multiply Matrix3x2d by {type(other)}")

    def __repr__(self) -> str:
        return f"Matrix3x2d{self.to_tuple()}"

    def __str__(self) -> str:
        f = format_number
        return (f"{f(self.m00)} {f(self.m10)} {f(self.m20)}\n"
                f"{f(self.m01)} {f(self.m11)} {f(self.m21)}\n")
