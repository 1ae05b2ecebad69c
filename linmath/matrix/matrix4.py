# linmath/matrix/matrix4.py
"""
Matrix4d - 4x4 matrix of doubles, column-major, with property tracking.

    | m00 m10 m20 m30 |
    | m01 m11 m21 m31 |
    | m02 m12 m22 m32 |
    | m03 m13 m23 m33 |

Each matrix carries MatrixProperty flags describing what is known about
its structure (identity, affine, perspective, pure translation,
orthonormal 3x3). Builders keep the flags conservative and mul()/invert()
use them to pick a cheaper code path. The explicit fast paths
(mul_affine, invert_perspective, ...) trust the caller; with
MathOptions.debug on they verify the flags first.

Projection builders default to OpenGL depth in [-1, 1]; pass
z_zero_to_one=True for Vulkan/Direct3D depth in [0, 1].
"""

from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple, Union, TYPE_CHECKING

import numpy as np

from ..core.scalar import PRECISE, PreciseTrig, equals as scalar_equals
from ..core.options import format_number, require
from ..vector.vector3 import Vector3d
from ..vector.vector4 import Vector4d
from . import rotation3
from .rotation3 import Block3
from .matrix3 import Matrix3d
from .matrix4x3 import _look_at, _ortho
from .properties import MatrixProperty, IDENTITY_PROPERTIES, CORNER_PLANES
from .properties import PLANE_NX, PLANE_PX, PLANE_PY

if TYPE_CHECKING:
    from ..rotation.quaternion import Quaterniond
    from ..rotation.axis_angle import AxisAngle4d

Values = Sequence[float]

_FIELDS = ('m00', 'm01', 'm02', 'm03', 'm10', 'm11', 'm12', 'm13',
           'm20', 'm21', 'm22', 'm23', 'm30', 'm31', 'm32', 'm33')

_IDENTITY = (1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0,
             0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0)

_ZERO3 = (0.0, 0.0, 0.0)

AFFINE = MatrixProperty.AFFINE
PERSPECTIVE = MatrixProperty.PERSPECTIVE
IDENTITY = MatrixProperty.IDENTITY
TRANSLATION = MatrixProperty.TRANSLATION
ORTHONORMAL = MatrixProperty.ORTHONORMAL
NO_PROPERTIES = MatrixProperty.NONE

# Small offset used for infinite near/far planes
_INF_EPSILON = 1e-6


def _mul4(a: Values, b: Values) -> List[float]:
    """a * b on column-major 16-sequences."""
    return [a[r] * b[c] + a[4 + r] * b[c + 1] + a[8 + r] * b[c + 2] + a[12 + r] * b[c + 3]
            for c in (0, 4, 8, 12) for r in range(4)]


def _depth_terms(z_near: float, z_far: float, z_zero_to_one: bool) -> Tuple[float, float]:
    """(m22, m32) of a perspective projection. An infinite plane is approximated."""
    if z_far > 0 and math.isinf(z_far):
        return (_INF_EPSILON - 1.0,
                (_INF_EPSILON - (1.0 if z_zero_to_one else 2.0)) * z_near)
    if z_near > 0 and math.isinf(z_near):
        return ((0.0 if z_zero_to_one else 1.0) - _INF_EPSILON,
                ((1.0 if z_zero_to_one else 2.0) - _INF_EPSILON) * z_far)
    return ((z_far if z_zero_to_one else z_far + z_near) / (z_near - z_far),
            (z_far if z_zero_to_one else z_far + z_far) * z_near / (z_near - z_far))


def _intersect_planes(p1: Values, p2: Values, p3: Values) -> Tuple[float, float, float]:
    """Common point of three planes (a, b, c, d)."""
    n1x, n1y, n1z, d1 = p1
    n2x, n2y, n2z, d2 = p2
    n3x, n3y, n3z, d3 = p3
    c23x = n2y * n3z - n2z * n3y
    c23y = n2z * n3x - n2x * n3z
    c23z = n2x * n3y - n2y * n3x
    c31x = n3y * n1z - n3z * n1y
    c31y = n3z * n1x - n3x * n1z
    c31z = n3x * n1y - n3y * n1x
    c12x = n1y * n2z - n1z * n2y
    c12y = n1z * n2x - n1x * n2z
    c12z = n1x * n2y - n1y * n2x
    inv_dot = 1.0 / (n1x * c23x + n1y * c23y + n1z * c23z)
    return (-(c23x * d1 + c31x * d2 + c12x * d3) * inv_dot,
            -(c23y * d1 + c31y * d2 + c12y * d3) * inv_dot,
            -(c23z * d1 + c31z * d2 + c12z * d3) * inv_dot)


class Matrix4d:
    """4x4 transform and projection matrix."""

    __slots__ = _FIELDS + ('_properties',)

    def __init__(self, m00: float = 1.0, m01: float = 0.0, m02: float = 0.0, m03: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0, m12: float = 0.0, m13: float = 0.0,
                 m20: float = 0.0, m21: float = 0.0, m22: float = 1.0, m23: float = 0.0,
                 m30: float = 0.0, m31: float = 0.0, m32: float = 0.0, m33: float = 1.0):
        self.m00, self.m01, self.m02, self.m03 = m00, m01, m02, m03
        self.m10, self.m11, self.m12, self.m13 = m10, m11, m12, m13
        self.m20, self.m21, self.m22, self.m23 = m20, m21, m22, m23
        self.m30, self.m31, self.m32, self.m33 = m30, m31, m32, m33
        self._properties = NO_PROPERTIES
        self.determine_properties()

    # =========================================================================
    # Storage and properties
    # =========================================================================

    def _values(self) -> Tuple[float, ...]:
        return (self.m00, self.m01, self.m02, self.m03,
                self.m10, self.m11, self.m12, self.m13,
                self.m20, self.m21, self.m22, self.m23,
                self.m30, self.m31, self.m32, self.m33)

    def _block(self) -> Block3:
        return (self.m00, self.m01, self.m02,
                self.m10, self.m11, self.m12,
                self.m20, self.m21, self.m22)

    def _write(self, v: Values, props: MatrixProperty, dest: Optional[Matrix4d]) -> Matrix4d:
        dest = self if dest is None else dest
        (dest.m00, dest.m01, dest.m02, dest.m03,
         dest.m10, dest.m11, dest.m12, dest.m13,
         dest.m20, dest.m21, dest.m22, dest.m23,
         dest.m30, dest.m31, dest.m32, dest.m33) = v
        dest._properties = props
        return dest

    def _write_affine(self, b: Block3, t: Values, props: MatrixProperty,
                      dest: Optional[Matrix4d]) -> Matrix4d:
        return self._write((b[0], b[1], b[2], 0.0,
                            b[3], b[4], b[5], 0.0,
                            b[6], b[7], b[8], 0.0,
                            t[0], t[1], t[2], 1.0), props, dest)

    def properties(self) -> MatrixProperty:
        return self._properties

    def assume(self, properties: MatrixProperty) -> Matrix4d:
        """Declare structure the caller knows the matrix has."""
        self._properties = MatrixProperty(properties)
        return self

    def determine_properties(self) -> Matrix4d:
        """Recompute the property flags from the element values."""
        props = NO_PROPERTIES
        if self.m03 == 0.0 and self.m13 == 0.0:
            if self.m23 == 0.0 and self.m33 == 1.0:
                props |= AFFINE
                if self._block() == rotation3.IDENTITY3:
                    props |= TRANSLATION | ORTHONORMAL
                    if self.m30 == 0.0 and self.m31 == 0.0 and self.m32 == 0.0:
                        props |= IDENTITY
            elif (self.m01 == 0.0 and self.m02 == 0.0 and self.m10 == 0.0
                  and self.m12 == 0.0 and self.m20 == 0.0 and self.m21 == 0.0
                  and self.m30 == 0.0 and self.m31 == 0.0 and self.m33 == 0.0):
                props |= PERSPECTIVE
        self._properties = props
        return self

    def _has(self, flag: MatrixProperty) -> bool:
        return bool(self._properties & flag)

    def copy(self) -> Matrix4d:
        return Matrix4d().set(self)

    def set(self, m00, *values: float) -> Matrix4d:
        """Set from sixteen column-major values or from another matrix.

        Matrix4x3d gets the bottom row (0, 0, 0, 1); Matrix3d fills the
        upper-left 3x3 with identity elsewhere.
        """
        if values:
            self._write((m00,) + values, NO_PROPERTIES, None)
            return self.determine_properties()
        m = m00
        if isinstance(m, Matrix4d):
            return self._write(m._values(), m._properties, None)
        b = (m.m00, m.m01, m.m02, m.m10, m.m11, m.m12, m.m20, m.m21, m.m22)
        t = (m.m30, m.m31, m.m32) if hasattr(m, 'm30') else _ZERO3
        self._write_affine(b, t, NO_PROPERTIES, None)
        return self.determine_properties()

    def get(self, column: int, row: int) -> float:
        if not (0 <= column <= 3 and 0 <= row <= 3):
            raise IndexError(f"Matrix4d index out of range: ({column}, {row})")
        return getattr(self, f"m{column}{row}")

    def set_element(self, column: int, row: int, value: float) -> Matrix4d:
        if not (0 <= column <= 3 and 0 <= row <= 3):
            raise IndexError(f"Matrix4d index out of range: ({column}, {row})")
        setattr(self, f"m{column}{row}", value)
        return self.determine_properties()

    def get_row(self, row: int, dest: Vector4d) -> Vector4d:
        if not 0 <= row <= 3:
            raise IndexError(f"Matrix4d row out of range: {row}")
        return dest.set(*(self.get(c, row) for c in range(4)))

    def set_row(self, row: int, x: float, y: float, z: float, w: float) -> Matrix4d:
        if not 0 <= row <= 3:
            raise IndexError(f"Matrix4d row out of range: {row}")
        for c, value in enumerate((x, y, z, w)):
            setattr(self, f"m{c}{row}", value)
        return self.determine_properties()

    def get_column(self, column: int, dest: Vector4d) -> Vector4d:
        if not 0 <= column <= 3:
            raise IndexError(f"Matrix4d column out of range: {column}")
        return dest.set(*(self.get(column, r) for r in range(4)))

    def set_column(self, column: int, x: float, y: float, z: float, w: float) -> Matrix4d:
        if not 0 <= column <= 3:
            raise IndexError(f"Matrix4d column out of range: {column}")
        for r, value in enumerate((x, y, z, w)):
            setattr(self, f"m{column}{r}", value)
        return self.determine_properties()

    def zero(self) -> Matrix4d:
        return self._write((0.0,) * 16, NO_PROPERTIES, None)

    def identity(self) -> Matrix4d:
        return self._write(_IDENTITY, IDENTITY_PROPERTIES, None)

    def to_tuple(self) -> Tuple[float, ...]:
        return self._values()

    def to_array(self) -> np.ndarray:
        return np.array(self._values(), dtype=np.float64)

    def to_bytes(self) -> bytes:
        return self.to_array().astype(np.float32).tobytes()

    # =========================================================================
    # Multiplication
    # =========================================================================

    def mul(self, right: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * right, using the fastest path the property flags allow."""
        dest = self if dest is None else dest
        if self._has(IDENTITY):
            return dest.set(right)
        if right._has(IDENTITY):
            return dest.set(self)
        if right._has(TRANSLATION):
            return self.translate(right.m30, right.m31, right.m32, dest)
        if self._has(AFFINE) and right._has(AFFINE):
            return self.mul_affine(right, dest)
        if self._has(PERSPECTIVE) and right._has(AFFINE):
            return self.mul_perspective_affine(right, dest)
        if right._has(AFFINE):
            return self.mul_affine_r(right, dest)
        return self.mul0(right, dest)

    def mul0(self, right: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Full 4x4 product self * right, ignoring the property flags."""
        return self._write(_mul4(self._values(), right._values()), NO_PROPERTIES, dest)

    def mul_local(self, left: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """left * self."""
        return left.mul(self, self if dest is None else dest)

    def mul_affine(self, right: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * right where both are affine."""
        require(self._has(AFFINE), "mul_affine: left matrix is not affine")
        require(right._has(AFFINE), "mul_affine: right matrix is not affine")
        a = self._block()
        b = rotation3.mul3(a, right._block())
        tx, ty, tz = rotation3.transform3(a, right.m30, right.m31, right.m32)
        props = AFFINE | (self._properties & right._properties & ORTHONORMAL)
        return self._write_affine(b, (tx + self.m30, ty + self.m31, tz + self.m32), props, dest)

    def mul_affine_r(self, right: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * right where right is affine and self is arbitrary."""
        require(right._has(AFFINE), "mul_affine_r: right matrix is not affine")
        return self._post_affine(right._block(), (right.m30, right.m31, right.m32),
                                 self._properties & AFFINE, dest)

    def mul_perspective_affine(self, view: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * view where self is a symmetric perspective projection and view is affine."""
        require(self._has(PERSPECTIVE), "mul_perspective_affine: left matrix is not a perspective")
        require(view._has(AFFINE), "mul_perspective_affine: right matrix is not affine")
        m00, m11, m22, m23, m32 = self.m00, self.m11, self.m22, self.m23, self.m32
        return self._write((
            m00 * view.m00, m11 * view.m01, m22 * view.m02, m23 * view.m02,
            m00 * view.m10, m11 * view.m11, m22 * view.m12, m23 * view.m12,
            m00 * view.m20, m11 * view.m21, m22 * view.m22, m23 * view.m22,
            m00 * view.m30, m11 * view.m31, m22 * view.m32 + m32, m23 * view.m32,
        ), NO_PROPERTIES, dest)

    def mul_ortho_affine(self, view: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * view where self is an orthographic projection and view is affine."""
        require(self._has(AFFINE), "mul_ortho_affine: left matrix is not affine")
        require(view._has(AFFINE), "mul_ortho_affine: right matrix is not affine")
        m00, m11, m22 = self.m00, self.m11, self.m22
        return self._write((
            m00 * view.m00, m11 * view.m01, m22 * view.m02, 0.0,
            m00 * view.m10, m11 * view.m11, m22 * view.m12, 0.0,
            m00 * view.m20, m11 * view.m21, m22 * view.m22, 0.0,
            m00 * view.m30 + self.m30, m11 * view.m31 + self.m31, m22 * view.m32 + self.m32, 1.0,
        ), AFFINE, dest)

    def _post_affine(self, b: Block3, t: Values, props: MatrixProperty,
                     dest: Optional[Matrix4d]) -> Matrix4d:
        """self * A for the affine A given by its 3x3 block and translation."""
        m = self._values()
        out = []
        for c in (0, 3, 6):
            k0, k1, k2 = b[c], b[c + 1], b[c + 2]
            out.extend(m[r] * k0 + m[4 + r] * k1 + m[8 + r] * k2 for r in range(4))
        tx, ty, tz = t
        out.extend(m[r] * tx + m[4 + r] * ty + m[8 + r] * tz + m[12 + r] for r in range(4))
        return self._write(out, props, dest)

    def _post_projection(self, rm00: float, rm11: float, rm20: float, rm21: float,
                         rm22: float, rm32: float, dest: Optional[Matrix4d]) -> Matrix4d:
        """self * P for a frustum-shaped P (m23 = -1, m33 = 0)."""
        m = self._values()
        col0 = [m[r] * rm00 for r in range(4)]
        col1 = [m[4 + r] * rm11 for r in range(4)]
        col2 = [m[r] * rm20 + m[4 + r] * rm21 + m[8 + r] * rm22 - m[12 + r] for r in range(4)]
        col3 = [m[8 + r] * rm32 for r in range(4)]
        return self._write(col0 + col1 + col2 + col3, NO_PROPERTIES, dest)

    # =========================================================================
    # Inversion and determinants
    # =========================================================================

    def determinant(self) -> float:
        if self._has(AFFINE):
            return self.determinant_affine()
        (m00, m01, m02, m03, m10, m11, m12, m13,
         m20, m21, m22, m23, m30, m31, m32, m33) = self._values()
        return ((m00 * m11 - m01 * m10) * (m22 * m33 - m23 * m32)
                - (m00 * m12 - m02 * m10) * (m21 * m33 - m23 * m31)
                + (m00 * m13 - m03 * m10) * (m21 * m32 - m22 * m31)
                + (m01 * m12 - m02 * m11) * (m20 * m33 - m23 * m30)
                - (m01 * m13 - m03 * m11) * (m20 * m32 - m22 * m30)
                + (m02 * m13 - m03 * m12) * (m20 * m31 - m21 * m30))

    def determinant3x3(self) -> float:
        return rotation3.determinant3(self._block())

    def determinant_affine(self) -> float:
        require(self._has(AFFINE), "determinant_affine: matrix is not affine")
        return rotation3.determinant3(self._block())

    def invert(self, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Inverse, dispatched on the property flags.

        A singular matrix raises ZeroDivisionError.
        """
        if self._has(IDENTITY):
            return (self if dest is None else dest).identity()
        if self._has(AFFINE):
            return self.invert_affine(dest)
        if self._has(PERSPECTIVE):
            return self.invert_perspective(dest)
        return self._invert_generic(dest)

    def _invert_generic(self, dest: Optional[Matrix4d]) -> Matrix4d:
        (m00, m01, m02, m03, m10, m11, m12, m13,
         m20, m21, m22, m23, m30, m31, m32, m33) = self._values()
        a = m00 * m11 - m01 * m10
        b = m00 * m12 - m02 * m10
        c = m00 * m13 - m03 * m10
        d = m01 * m12 - m02 * m11
        e = m01 * m13 - m03 * m11
        f = m02 * m13 - m03 * m12
        g = m20 * m31 - m21 * m30
        h = m20 * m32 - m22 * m30
        i = m20 * m33 - m23 * m30
        j = m21 * m32 - m22 * m31
        k = m21 * m33 - m23 * m31
        l = m22 * m33 - m23 * m32
        det = 1.0 / (a * l - b * k + c * j + d * i - e * h + f * g)
        return self._write((
            (m11 * l - m12 * k + m13 * j) * det,
            (-m01 * l + m02 * k - m03 * j) * det,
            (m31 * f - m32 * e + m33 * d) * det,
            (-m21 * f + m22 * e - m23 * d) * det,
            (-m10 * l + m12 * i - m13 * h) * det,
            (m00 * l - m02 * i + m03 * h) * det,
            (-m30 * f + m32 * c - m33 * b) * det,
            (m20 * f - m22 * c + m23 * b) * det,
            (m10 * k - m11 * i + m13 * g) * det,
            (-m00 * k + m01 * i - m03 * g) * det,
            (m30 * e - m31 * c + m33 * a) * det,
            (-m20 * e + m21 * c - m23 * a) * det,
            (-m10 * j + m11 * h - m12 * g) * det,
            (m00 * j - m01 * h + m02 * g) * det,
            (-m30 * d + m31 * b - m32 * a) * det,
            (m20 * d - m21 * b + m22 * a) * det,
        ), NO_PROPERTIES, dest)

    def invert_affine(self, dest: Optional[Matrix4d] = None) -> Matrix4d:
        require(self._has(AFFINE), "invert_affine: matrix is not affine")
        inv = rotation3.invert3(self._block())
        tx, ty, tz = rotation3.transform3(inv, self.m30, self.m31, self.m32)
        return self._write_affine(inv, (-tx, -ty, -tz),
                                  AFFINE | (self._properties & ORTHONORMAL), dest)

    def invert_perspective(self, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Inverse of a symmetric perspective projection."""
        require(self._has(PERSPECTIVE), "invert_perspective: matrix is not a perspective")
        a = 1.0 / (self.m00 * self.m11)
        l = -1.0 / (self.m23 * self.m32)
        return self._write((
            self.m11 * a, 0.0, 0.0, 0.0,
            0.0, self.m00 * a, 0.0, 0.0,
            0.0, 0.0, 0.0, -self.m23 * l,
            0.0, 0.0, -self.m32 * l, self.m22 * l,
        ), NO_PROPERTIES, dest)

    def invert_ortho(self, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Inverse of an orthographic projection (diagonal 3x3 plus translation)."""
        require(self._has(AFFINE), "invert_ortho: matrix is not affine")
        inv00 = 1.0 / self.m00
        inv11 = 1.0 / self.m11
        inv22 = 1.0 / self.m22
        return self._write_affine((inv00, 0.0, 0.0, 0.0, inv11, 0.0, 0.0, 0.0, inv22),
                                  (-self.m30 * inv00, -self.m31 * inv11, -self.m32 * inv22),
                                  AFFINE | (self._properties & ORTHONORMAL), dest)

    def transpose(self, dest: Optional[Matrix4d] = None) -> Matrix4d:
        v = self._values()
        props = IDENTITY_PROPERTIES if self._has(IDENTITY) else NO_PROPERTIES
        return self._write([v[r * 4 + c] for c in range(4) for r in range(4)], props, dest)

    def transpose3x3(self, dest: Optional[Union[Matrix4d, Matrix3d]] = None):
        """Transpose the upper-left 3x3. Only those nine elements of dest are written."""
        b = rotation3.transpose3(self._block())
        if isinstance(dest, Matrix3d):
            return dest.set(*b)
        target = self if dest is None else dest
        (target.m00, target.m01, target.m02,
         target.m10, target.m11, target.m12,
         target.m20, target.m21, target.m22) = b
        if target is self:
            self._properties &= AFFINE | ORTHONORMAL | PERSPECTIVE
            return self
        return target.determine_properties()

    def normal(self, dest: Optional[Union[Matrix4d, Matrix3d]] = None):
        """Transpose of the inverse 3x3, for transforming surface normals.

        A Matrix4d dest gets identity outside the upper-left 3x3.
        """
        if self._has(ORTHONORMAL):
            b = self._block()
        else:
            b = rotation3.transpose3(rotation3.invert3(self._block()))
        if isinstance(dest, Matrix3d):
            return dest.set(*b)
        return self._write_affine(b, _ZERO3, AFFINE | (self._properties & ORTHONORMAL), dest)

    def normalize3x3(self, dest: Optional[Union[Matrix4d, Matrix3d]] = None):
        """Normalize the three base vectors of the upper-left 3x3."""
        b = rotation3.normalize_columns(self._block())
        if isinstance(dest, Matrix3d):
            return dest.set(*b)
        v = self._values()
        return self._write((b[0], b[1], b[2], v[3], b[3], b[4], b[5], v[7],
                            b[6], b[7], b[8], v[11]) + v[12:],
                           self._properties & AFFINE, dest)

    # =========================================================================
    # Translation and scale
    # =========================================================================

    def translation(self, x: float, y: float, z: float) -> Matrix4d:
        return self._write_affine(rotation3.IDENTITY3, (x, y, z),
                                  AFFINE | TRANSLATION | ORTHONORMAL, None)

    def set_translation(self, x: float, y: float, z: float) -> Matrix4d:
        """Replace m30, m31 and m32, keeping everything else."""
        self.m30, self.m31, self.m32 = x, y, z
        self._properties &= ~(IDENTITY | PERSPECTIVE)
        return self

    def translate(self, x: float, y: float, z: float,
                  dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * T(x, y, z)."""
        if self._has(IDENTITY):
            return (self if dest is None else dest).translation(x, y, z)
        return self._post_affine(rotation3.IDENTITY3, (x, y, z),
                                 self._properties & (AFFINE | TRANSLATION | ORTHONORMAL), dest)

    def translate_local(self, x: float, y: float, z: float,
                        dest: Optional[Matrix4d] = None) -> Matrix4d:
        """T(x, y, z) * self."""
        m = self._values()
        out = []
        for c in (0, 4, 8, 12):
            w = m[c + 3]
            out.extend((m[c] + x * w, m[c + 1] + y * w, m[c + 2] + z * w, w))
        return self._write(out, self._properties & (AFFINE | TRANSLATION | ORTHONORMAL), dest)

    def scaling(self, x: float, y: Optional[float] = None, z: Optional[float] = None) -> Matrix4d:
        y = x if y is None else y
        z = x if z is None else z
        if x == 1.0 and y == 1.0 and z == 1.0:
            return self.identity()
        props = AFFINE
        if abs(x) == 1.0 and abs(y) == 1.0 and abs(z) == 1.0:
            props |= ORTHONORMAL
        return self._write_affine((x, 0.0, 0.0, 0.0, y, 0.0, 0.0, 0.0, z), _ZERO3, props, None)

    def scale(self, x: float, y: Optional[float] = None, z: Optional[float] = None,
              dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * S(x, y, z)."""
        y = x if y is None else y
        z = x if z is None else z
        m = self._values()
        out = ([v * x for v in m[0:4]] + [v * y for v in m[4:8]]
               + [v * z for v in m[8:12]] + list(m[12:16]))
        return self._write(out, self._properties & AFFINE, dest)

    def scale_local(self, x: float, y: Optional[float] = None, z: Optional[float] = None,
                    dest: Optional[Matrix4d] = None) -> Matrix4d:
        """S(x, y, z) * self."""
        y = x if y is None else y
        z = x if z is None else z
        m = self._values()
        out = []
        for c in (0, 4, 8, 12):
            out.extend((m[c] * x, m[c + 1] * y, m[c + 2] * z, m[c + 3]))
        return self._write(out, self._properties & AFFINE, dest)

    # =========================================================================
    # Rotation
    # =========================================================================

    def _set_rotation(self, b: Block3) -> Matrix4d:
        return self._write_affine(b, _ZERO3, AFFINE | ORTHONORMAL, None)

    def _rotate(self, b: Block3, dest: Optional[Matrix4d]) -> Matrix4d:
        if self._has(IDENTITY):
            return (self if dest is None else dest)._set_rotation(b)
        return self._post_affine(b, _ZERO3, self._properties & (AFFINE | ORTHONORMAL), dest)

    def rotation_x(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_x(angle, trig))

    def rotation_y(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_y(angle, trig))

    def rotation_z(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_z(angle, trig))

    def rotation_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig))

    def rotation_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig))

    def rotation_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._set_rotation(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig))

    def rotation(self, angle: float, x: float, y: float, z: float,
                 trig: PreciseTrig = PRECISE) -> Matrix4d:
        """Rotation of angle radians around the unit axis (x, y, z)."""
        return self._set_rotation(rotation3.rotation_axis(angle, x, y, z, trig))

    def rotate_x(self, angle: float, dest: Optional[Matrix4d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_x(angle, trig), dest)

    def rotate_y(self, angle: float, dest: Optional[Matrix4d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_y(angle, trig), dest)

    def rotate_z(self, angle: float, dest: Optional[Matrix4d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_z(angle, trig), dest)

    def rotate_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                   dest: Optional[Matrix4d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), dest)

    def rotate_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                   dest: Optional[Matrix4d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), dest)

    def rotate_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                   dest: Optional[Matrix4d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), dest)

    def rotate_affine_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                          dest: Optional[Matrix4d] = None,
                          trig: PreciseTrig = PRECISE) -> Matrix4d:
        """rotate_xyz for a matrix known to be affine."""
        require(self._has(AFFINE), "rotate_affine_xyz: matrix is not affine")
        return self._rotate(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), dest)

    def rotate_affine_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                          dest: Optional[Matrix4d] = None,
                          trig: PreciseTrig = PRECISE) -> Matrix4d:
        require(self._has(AFFINE), "rotate_affine_zyx: matrix is not affine")
        return self._rotate(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), dest)

    def rotate_affine_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                          dest: Optional[Matrix4d] = None,
                          trig: PreciseTrig = PRECISE) -> Matrix4d:
        require(self._has(AFFINE), "rotate_affine_yxz: matrix is not affine")
        return self._rotate(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), dest)

    def rotate(self, angle: float, x: float, y: float, z: float,
               dest: Optional[Matrix4d] = None,
               trig: PreciseTrig = PRECISE) -> Matrix4d:
        return self._rotate(rotation3.rotation_axis(angle, x, y, z, trig), dest)

    def set_quaternion(self, q: Quaterniond) -> Matrix4d:
        """Set to the rotation of the unit quaternion q."""
        return self._set_rotation(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w))

    def rotate_quaternion(self, q: Quaterniond, dest: Optional[Matrix4d] = None) -> Matrix4d:
        return self._rotate(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w), dest)

    def set_axis_angle(self, axis_angle: AxisAngle4d) -> Matrix4d:
        """Set to the rotation of axis_angle; its axis need not be unit length."""
        x, y, z = axis_angle.x, axis_angle.y, axis_angle.z
        inv = 1.0 / math.sqrt(x * x + y * y + z * z)
        return self._set_rotation(rotation3.rotation_axis(axis_angle.angle, x * inv, y * inv, z * inv))

    def rotate_towards_xy(self, dir_x: float, dir_y: float,
                          dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Rotate about Z by the angle whose sine is dir_x and cosine is dir_y.

        (dir_x, dir_y) must be unit length.
        """
        return self._rotate((dir_y, dir_x, 0.0, -dir_x, dir_y, 0.0, 0.0, 0.0, 1.0), dest)

    # =========================================================================
    # View and projection builders
    # =========================================================================

    def look_along(self, dir: Vector3d, up: Vector3d,
                   dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * L, where L rotates dir onto -Z."""
        return self._rotate(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z), dest)

    def set_look_along(self, dir: Vector3d, up: Vector3d) -> Matrix4d:
        return self._set_rotation(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z))

    def look_at(self, eye_x: float, eye_y: float, eye_z: float,
                center_x: float, center_y: float, center_z: float,
                up_x: float, up_y: float, up_z: float,
                dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * V, where V is a right-handed view from eye towards center."""
        if self._has(IDENTITY):
            return (self if dest is None else dest).set_look_at(
                eye_x, eye_y, eye_z, center_x, center_y, center_z, up_x, up_y, up_z)
        b, t = _look_at(eye_x, eye_y, eye_z, center_x, center_y, center_z, up_x, up_y, up_z)
        return self._post_affine(b, t, self._properties & (AFFINE | ORTHONORMAL), dest)

    def set_look_at(self, eye_x: float, eye_y: float, eye_z: float,
                    center_x: float, center_y: float, center_z: float,
                    up_x: float, up_y: float, up_z: float) -> Matrix4d:
        b, t = _look_at(eye_x, eye_y, eye_z, center_x, center_y, center_z, up_x, up_y, up_z)
        return self._write_affine(b, t, AFFINE | ORTHONORMAL, None)

    def perspective(self, fovy: float, aspect: float, z_near: float, z_far: float,
                    z_zero_to_one: bool = False, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * P for a symmetric perspective projection.

        fovy is the vertical field of view in radians. z_near or z_far may
        be math.inf for an infinite projection.
        """
        if self._has(IDENTITY):
            return (self if dest is None else dest).set_perspective(
                fovy, aspect, z_near, z_far, z_zero_to_one)
        h = math.tan(fovy * 0.5)
        rm22, rm32 = _depth_terms(z_near, z_far, z_zero_to_one)
        return self._post_projection(1.0 / (h * aspect), 1.0 / h, 0.0, 0.0, rm22, rm32, dest)

    def set_perspective(self, fovy: float, aspect: float, z_near: float, z_far: float,
                        z_zero_to_one: bool = False) -> Matrix4d:
        h = math.tan(fovy * 0.5)
        rm22, rm32 = _depth_terms(z_near, z_far, z_zero_to_one)
        return self._write((1.0 / (h * aspect), 0.0, 0.0, 0.0,
                            0.0, 1.0 / h, 0.0, 0.0,
                            0.0, 0.0, rm22, -1.0,
                            0.0, 0.0, rm32, 0.0), PERSPECTIVE, None)

    def frustum(self, left: float, right: float, bottom: float, top: float,
                z_near: float, z_far: float, z_zero_to_one: bool = False,
                dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * F for an arbitrary (possibly off-center) perspective frustum."""
        if self._has(IDENTITY):
            return (self if dest is None else dest).set_frustum(
                left, right, bottom, top, z_near, z_far, z_zero_to_one)
        rm22, rm32 = _depth_terms(z_near, z_far, z_zero_to_one)
        return self._post_projection((z_near + z_near) / (right - left),
                                     (z_near + z_near) / (top - bottom),
                                     (right + left) / (right - left),
                                     (top + bottom) / (top - bottom),
                                     rm22, rm32, dest)

    def set_frustum(self, left: float, right: float, bottom: float, top: float,
                    z_near: float, z_far: float, z_zero_to_one: bool = False) -> Matrix4d:
        rm22, rm32 = _depth_terms(z_near, z_far, z_zero_to_one)
        rm20 = (right + left) / (right - left)
        rm21 = (top + bottom) / (top - bottom)
        props = PERSPECTIVE if rm20 == 0.0 and rm21 == 0.0 else NO_PROPERTIES
        return self._write(((z_near + z_near) / (right - left), 0.0, 0.0, 0.0,
                            0.0, (z_near + z_near) / (top - bottom), 0.0, 0.0,
                            rm20, rm21, rm22, -1.0,
                            0.0, 0.0, rm32, 0.0), props, None)

    def perspective_off_center_fov(self, angle_left: float, angle_right: float,
                                   angle_down: float, angle_up: float,
                                   z_near: float, z_far: float, z_zero_to_one: bool = False,
                                   dest: Optional[Matrix4d] = None) -> Matrix4d:
        """frustum() with the four sides given as angles from the view axis."""
        return self.frustum(math.tan(angle_left) * z_near, math.tan(angle_right) * z_near,
                            math.tan(angle_down) * z_near, math.tan(angle_up) * z_near,
                            z_near, z_far, z_zero_to_one, dest)

    def set_perspective_off_center_fov(self, angle_left: float, angle_right: float,
                                       angle_down: float, angle_up: float,
                                       z_near: float, z_far: float,
                                       z_zero_to_one: bool = False) -> Matrix4d:
        return self.set_frustum(math.tan(angle_left) * z_near, math.tan(angle_right) * z_near,
                                math.tan(angle_down) * z_near, math.tan(angle_up) * z_near,
                                z_near, z_far, z_zero_to_one)

    def ortho(self, left: float, right: float, bottom: float, top: float,
              z_near: float, z_far: float, z_zero_to_one: bool = False,
              dest: Optional[Matrix4d] = None) -> Matrix4d:
        """self * O for an orthographic projection."""
        if self._has(IDENTITY):
            return (self if dest is None else dest).set_ortho(
                left, right, bottom, top, z_near, z_far, z_zero_to_one)
        b, t = _ortho(left, right, bottom, top, z_near, z_far, z_zero_to_one)
        return self._post_affine(b, t, self._properties & AFFINE, dest)

    def set_ortho(self, left: float, right: float, bottom: float, top: float,
                  z_near: float, z_far: float, z_zero_to_one: bool = False) -> Matrix4d:
        b, t = _ortho(left, right, bottom, top, z_near, z_far, z_zero_to_one)
        return self._write_affine(b, t, AFFINE, None)

    def ortho2d(self, left: float, right: float, bottom: float, top: float,
                dest: Optional[Matrix4d] = None) -> Matrix4d:
        """ortho() with z_near = -1 and z_far = 1."""
        return self.ortho(left, right, bottom, top, -1.0, 1.0, False, dest)

    def set_ortho2d(self, left: float, right: float, bottom: float, top: float) -> Matrix4d:
        return self.set_ortho(left, right, bottom, top, -1.0, 1.0)

    def ortho_symmetric(self, width: float, height: float, z_near: float, z_far: float,
                        z_zero_to_one: bool = False, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """ortho() centered on the view axis."""
        half_w = width * 0.5
        half_h = height * 0.5
        return self.ortho(-half_w, half_w, -half_h, half_h, z_near, z_far, z_zero_to_one, dest)

    def ortho_crop(self, view: Matrix4d, dest: Optional[Matrix4d] = None) -> Matrix4d:
        """Orthographic projection in view space that tightly fits the frustum of self.

        self is an inverse view-projection; typically used to fit a light's
        shadow projection around a camera frustum.
        """
        min_x = min_y = min_z = math.inf
        max_x = max_y = max_z = -math.inf
        corner = Vector3d()
        for t in range(8):
            corner.set(((t & 1) << 1) - 1.0, (((t >> 1) & 1) << 1) - 1.0,
                       (((t >> 2) & 1) << 1) - 1.0)
            self.transform_project(corner)
            wx, wy, wz = corner.x, corner.y, corner.z
            inv_w = 1.0 / (view.m03 * wx + view.m13 * wy + view.m23 * wz + view.m33)
            vx = (view.m00 * wx + view.m10 * wy + view.m20 * wz + view.m30) * inv_w
            vy = (view.m01 * wx + view.m11 * wy + view.m21 * wz + view.m31) * inv_w
            vz = (view.m02 * wx + view.m12 * wy + view.m22 * wz + view.m32) * inv_w
            min_x, max_x = min(min_x, vx), max(max_x, vx)
            min_y, max_y = min(min_y, vy), max(max_y, vy)
            min_z, max_z = min(min_z, vz), max(max_z, vz)
        target = Matrix4d() if dest is None else dest
        return target.set_ortho(min_x, max_x, min_y, max_y, -max_z, -min_z)

    # =========================================================================
    # Frustum extraction
    # =========================================================================

    def _plane(self, which: int) -> Tuple[float, float, float, float]:
        """Unnormalized frustum plane (a, b, c, d) with a*x + b*y + c*z + d >= 0 inside."""
        if not 0 <= which <= 5:
            raise ValueError(f"Unknown frustum plane: {which}")
        row = which >> 1
        sign = -1.0 if which & 1 else 1.0
        return (self.m03 + sign * self.get(0, row),
                self.m13 + sign * self.get(1, row),
                self.m23 + sign * self.get(2, row),
                self.m33 + sign * self.get(3, row))

    def frustum_plane(self, which: int, dest: Vector4d) -> Vector4d:
        """Frustum plane PLANE_* in world space, normalized by its normal's length."""
        return dest.set(*self._plane(which)).normalize3()

    def frustum_corner(self, corner: int, dest: Vector3d) -> Vector3d:
        """World-space position of frustum corner CORNER_*."""
        try:
            px, py, pz = CORNER_PLANES[corner]
        except KeyError:
            raise ValueError(f"Unknown frustum corner: {corner}") from None
        return dest.set(*_intersect_planes(self._plane(px), self._plane(py), self._plane(pz)))

    def perspective_origin(self, dest: Vector3d) -> Vector3d:
        """Eye position of a perspective view-projection."""
        return dest.set(*_intersect_planes(self._plane(PLANE_NX), self._plane(PLANE_PX),
                                           self._plane(PLANE_PY)))

    def perspective_fov(self) -> float:
        """Vertical field of view of a perspective view-projection, in radians."""
        n1x = self.m03 + self.m01
        n1y = self.m13 + self.m11
        n1z = self.m23 + self.m21
        n2x = self.m01 - self.m03
        n2y = self.m11 - self.m13
        n2z = self.m21 - self.m23
        n1len = math.sqrt(n1x * n1x + n1y * n1y + n1z * n1z)
        n2len = math.sqrt(n2x * n2x + n2y * n2y + n2z * n2z)
        return math.acos((n1x * n2x + n1y * n2y + n1z * n2z) / (n1len * n2len))

    def perspective_near(self) -> float:
        return self.m32 / (self.m23 + self.m22)

    def perspective_far(self) -> float:
        return self.m32 / (self.m22 - self.m23)

    def frustum_ray_dir(self, x: float, y: float, dest: Vector3d) -> Vector3d:
        """Unit direction of the ray through the frustum at (x, y) in [0, 1]^2.

        (0, 0) is the left-bottom edge and (1, 1) the right-top edge.
        """
        xn = x + x - 1.0
        yn = y + y - 1.0
        ax = self.m00 - xn * self.m03
        ay = self.m10 - xn * self.m13
        az = self.m20 - xn * self.m23
        bx = self.m01 - yn * self.m03
        by = self.m11 - yn * self.m13
        bz = self.m21 - yn * self.m23
        return dest.set(by * az - bz * ay, bz * ax - bx * az, bx * ay - by * ax).normalize()

    def frustum_aabb(self, min_dest: Vector3d, max_dest: Vector3d) -> Tuple[Vector3d, Vector3d]:
        """World-space axis-aligned bounds of the frustum."""
        inv = self.invert(Matrix4d())
        corner = Vector3d()
        min_dest.set(math.inf)
        max_dest.set(-math.inf)
        for t in range(8):
            corner.set(((t & 1) << 1) - 1.0, (((t >> 1) & 1) << 1) - 1.0,
                       (((t >> 2) & 1) << 1) - 1.0)
            inv.transform_project(corner)
            min_dest.min(corner)
            max_dest.max(corner)
        return min_dest, max_dest

    def positive_x(self, dest: Vector3d) -> Vector3d:
        """Direction that this matrix maps onto +X."""
        return dest.set(*rotation3.positive_axes(self._block())[0]).normalize()

    def positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[1]).normalize()

    def positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[2]).normalize()

    def normalized_positive_x(self, dest: Vector3d) -> Vector3d:
        """positive_x for an orthonormal 3x3."""
        return dest.set(self.m00, self.m10, self.m20)

    def normalized_positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m01, self.m11, self.m21)

    def normalized_positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m02, self.m12, self.m22)

    def get_translation(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m30, self.m31, self.m32)

    def get_scale(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.column_lengths(self._block()))

    def get_euler_angles_xyz(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.euler_xyz(self._block()))

    def get_euler_angles_zyx(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.euler_zyx(self._block()))

    def get_normalized_rotation(self, dest: Quaterniond) -> Quaterniond:
        return dest.set_from_unnormalized(self)

    # =========================================================================
    # Vector transforms
    # =========================================================================

    def transform(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        """self * v."""
        dest = v if dest is None else dest
        x, y, z, w = v.x, v.y, v.z, v.w
        dest.x = self.m00 * x + self.m10 * y + self.m20 * z + self.m30 * w
        dest.y = self.m01 * x + self.m11 * y + self.m21 * z + self.m31 * w
        dest.z = self.m02 * x + self.m12 * y + self.m22 * z + self.m32 * w
        dest.w = self.m03 * x + self.m13 * y + self.m23 * z + self.m33 * w
        return dest

    def transform_project(self, v: Union[Vector3d, Vector4d],
                          dest: Optional[Union[Vector3d, Vector4d]] = None):
        """self * v followed by division by w. A Vector4d result has w = 1."""
        dest = v if dest is None else dest
        x, y, z = v.x, v.y, v.z
        w = v.w if isinstance(v, Vector4d) else 1.0
        inv_w = 1.0 / (self.m03 * x + self.m13 * y + self.m23 * z + self.m33 * w)
        dest.x = (self.m00 * x + self.m10 * y + self.m20 * z + self.m30 * w) * inv_w
        dest.y = (self.m01 * x + self.m11 * y + self.m21 * z + self.m31 * w) * inv_w
        dest.z = (self.m02 * x + self.m12 * y + self.m22 * z + self.m32 * w) * inv_w
        if isinstance(dest, Vector4d):
            dest.w = 1.0
        return dest

    def transform_position(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self * (v, 1) without the w division."""
        dest = v if dest is None else dest
        x, y, z = v.x, v.y, v.z
        dest.x = self.m00 * x + self.m10 * y + self.m20 * z + self.m30
        dest.y = self.m01 * x + self.m11 * y + self.m21 * z + self.m31
        dest.z = self.m02 * x + self.m12 * y + self.m22 * z + self.m32
        return dest

    def transform_direction(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self * (v, 0)."""
        dest = v if dest is None else dest
        dest.x, dest.y, dest.z = rotation3.transform3(self._block(), v.x, v.y, v.z)
        return dest

    def transform_affine(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        """self * v assuming the bottom row is (0, 0, 0, 1); w is kept."""
        dest = v if dest is None else dest
        x, y, z, w = v.x, v.y, v.z, v.w
        rx, ry, rz = rotation3.transform3(self._block(), x, y, z)
        dest.x = rx + self.m30 * w
        dest.y = ry + self.m31 * w
        dest.z = rz + self.m32 * w
        dest.w = w
        return dest

    def transform_transpose(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        """transpose(self) * v."""
        dest = v if dest is None else dest
        x, y, z, w = v.x, v.y, v.z, v.w
        dest.x = self.m00 * x + self.m01 * y + self.m02 * z + self.m03 * w
        dest.y = self.m10 * x + self.m11 * y + self.m12 * z + self.m13 * w
        dest.z = self.m20 * x + self.m21 * y + self.m22 * z + self.m23 * w
        dest.w = self.m30 * x + self.m31 * y + self.m32 * z + self.m33 * w
        return dest

    def project(self, position: Vector3d, viewport: Sequence[float], dest: Vector3d) -> Vector3d:
        """Window coordinates of position for viewport (x, y, width, height).

        The resulting z is depth in [0, 1].
        """
        ndc = self.transform_project(position, Vector3d())
        dest.x = (ndc.x * 0.5 + 0.5) * viewport[2] + viewport[0]
        dest.y = (ndc.y * 0.5 + 0.5) * viewport[3] + viewport[1]
        dest.z = (1.0 + ndc.z) * 0.5
        return dest

    def _unproject_ndc(self, inv: Matrix4d, win_x: float, win_y: float, ndc_z: float,
                       viewport: Sequence[float], dest: Vector3d) -> Vector3d:
        ndc_x = (win_x - viewport[0]) / viewport[2] * 2.0 - 1.0
        ndc_y = (win_y - viewport[1]) / viewport[3] * 2.0 - 1.0
        return inv.transform_project(dest.set(ndc_x, ndc_y, ndc_z))

    def unproject(self, window: Vector3d, viewport: Sequence[float], dest: Vector3d) -> Vector3d:
        """Inverse of project(): window coordinates and depth back to world space."""
        inv = self.invert(Matrix4d())
        return self._unproject_ndc(inv, window.x, window.y, window.z + window.z - 1.0,
                                   viewport, dest)

    def unproject_ray(self, win_x: float, win_y: float, viewport: Sequence[float],
                      origin_dest: Vector3d, dir_dest: Vector3d) -> Tuple[Vector3d, Vector3d]:
        """Ray from the near plane through window point (win_x, win_y).

        The direction spans near to far plane and is not normalized.
        """
        inv = self.invert(Matrix4d())
        far = self._unproject_ndc(inv, win_x, win_y, 1.0, viewport, Vector3d())
        self._unproject_ndc(inv, win_x, win_y, -1.0, viewport, origin_dest)
        far.sub(origin_dest, dir_dest)
        return origin_dest, dir_dest

    # =========================================================================
    # Culling
    # =========================================================================

    def _planes(self) -> List[Tuple[float, float, float, float]]:
        return [self._plane(i) for i in range(6)]

    def test_point(self, x: float, y: float, z: float) -> bool:
        """Whether the point lies inside the frustum of this matrix."""
        return all(a * x + b * y + c * z + d >= 0 for a, b, c, d in self._planes())

    def test_sphere(self, x: float, y: float, z: float, r: float) -> bool:
        """Whether the sphere may intersect the frustum (conservative)."""
        for a, b, c, d in self._planes():
            inv = 1.0 / math.sqrt(a * a + b * b + c * c)
            if (a * x + b * y + c * z + d) * inv < -r:
                return False
        return True

    def test_aab(self, min_x: float, min_y: float, min_z: float,
                 max_x: float, max_y: float, max_z: float) -> bool:
        """Whether the axis-aligned box may intersect the frustum (conservative)."""
        for a, b, c, d in self._planes():
            if (a * (min_x if a < 0 else max_x) + b * (min_y if b < 0 else max_y)
                    + c * (min_z if c < 0 else max_z)) < -d:
                return False
        return True

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def equals(self, m: Matrix4d, delta: float) -> bool:
        return all(scalar_equals(a, b, delta) for a, b in zip(self._values(), m._values()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4d):
            return NotImplemented
        return self._values() == other._values()

    __hash__ = None

    def __matmul__(self, other: Union[Matrix4d, Vector4d, Vector3d]):
        if isinstance(other, Matrix4d):
            return self.mul(other, Matrix4d())
        if isinstance(other, Vector4d):
            return self.transform(other, Vector4d())
        if isinstance(other, Vector3d):
            # Treat as point (w=1)
            return self.transform_project(other, Vector3d())
        raise TypeError(f"Cannot multiply Matrix4d by {type(other)}")

    def __repr__(self) -> str:
        return f"Matrix4d{self._values()}"

    def __str__(self) -> str:
        f = format_number
        rows = []
        for r in range(4):
            rows.append(" ".join(f(self.get(c, r)) for c in range(4)))
        return "\n".join(rows) + "\n"
