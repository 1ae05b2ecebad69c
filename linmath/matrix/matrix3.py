# linmath/matrix/matrix3.py
"""
Matrix3d - 3x3 matrix of doubles, column-major.

    | m00 m10 m20 |
    | m01 m11 m21 |
    | m02 m12 m22 |

Rotation builders follow the right-handed convention: rotate_*
post-multiplies (self * R), so R is applied to vectors first.
"""

from __future__ import annotations
import math
from typing import Optional, Union, TYPE_CHECKING

import numpy as np

from ..core.scalar import PRECISE, PreciseTrig, equals as scalar_equals
from ..core.options import format_number
from ..vector.vector3 import Vector3d
from . import rotation3
from .rotation3 import Block3

if TYPE_CHECKING:
    from ..rotation.quaternion import Quaterniond
    from ..rotation.axis_angle import AxisAngle4d

_FIELDS = ('m00', 'm01', 'm02', 'm10', 'm11', 'm12', 'm20', 'm21', 'm22')


class Matrix3d:
    """3x3 matrix for rotation, scale and normal transforms."""

    __slots__ = _FIELDS

    def __init__(self, m00: float = 1.0, m01: float = 0.0, m02: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0, m12: float = 0.0,
                 m20: float = 0.0, m21: float = 0.0, m22: float = 1.0):
        self.m00, self.m01, self.m02 = m00, m01, m02
        self.m10, self.m11, self.m12 = m10, m11, m12
        self.m20, self.m21, self.m22 = m20, m21, m22

    def _block(self) -> Block3:
        return (self.m00, self.m01, self.m02,
                self.m10, self.m11, self.m12,
                self.m20, self.m21, self.m22)

    def _write(self, b: Block3, dest: Optional[Matrix3d]) -> Matrix3d:
        dest = self if dest is None else dest
        (dest.m00, dest.m01, dest.m02,
         dest.m10, dest.m11, dest.m12,
         dest.m20, dest.m21, dest.m22) = b
        return dest

    def copy(self) -> Matrix3d:
        return Matrix3d(*self._block())

    def set(self, m00, m01: Optional[float] = None, m02: Optional[float] = None,
            m10: Optional[float] = None, m11: Optional[float] = None,
            m12: Optional[float] = None, m20: Optional[float] = None,
            m21: Optional[float] = None, m22: Optional[float] = None) -> Matrix3d:
        """Set from nine column-major values or from another matrix.

        A Matrix2d fills the upper-left 2x2 with identity elsewhere;
        Matrix4x3d and Matrix4d contribute their upper-left 3x3.
        """
        if m01 is not None:
            return self._write((m00, m01, m02, m10, m11, m12, m20, m21, m22), None)
        m = m00
        if not hasattr(m, 'm22'):
            return self._write((m.m00, m.m01, 0.0, m.m10, m.m11, 0.0, 0.0, 0.0, 1.0), None)
        return self._write((m.m00, m.m01, m.m02, m.m10, m.m11, m.m12,
                            m.m20, m.m21, m.m22), None)

    def get(self, column: int, row: int) -> float:
        if not (0 <= column <= 2 and 0 <= row <= 2):
            raise IndexError(f"Matrix3d index out of range: ({column}, {row})")
        return getattr(self, f"m{column}{row}")

    def set_element(self, column: int, row: int, value: float) -> Matrix3d:
        if not (0 <= column <= 2 and 0 <= row <= 2):
            raise IndexError(f"Matrix3d index out of range: ({column}, {row})")
        setattr(self, f"m{column}{row}", value)
        return self

    def get_row(self, row: int, dest: Vector3d) -> Vector3d:
        if not 0 <= row <= 2:
            raise IndexError(f"Matrix3d row out of range: {row}")
        return dest.set(self.get(0, row), self.get(1, row), self.get(2, row))

    def set_row(self, row: int, x: float, y: float, z: float) -> Matrix3d:
        if not 0 <= row <= 2:
            raise IndexError(f"Matrix3d row out of range: {row}")
        setattr(self, f"m0{row}", x)
        setattr(self, f"m1{row}", y)
        setattr(self, f"m2{row}", z)
        return self

    def get_column(self, column: int, dest: Vector3d) -> Vector3d:
        if not 0 <= column <= 2:
            raise IndexError(f"Matrix3d column out of range: {column}")
        return dest.set(self.get(column, 0), self.get(column, 1), self.get(column, 2))

    def set_column(self, column: int, x: float, y: float, z: float) -> Matrix3d:
        if not 0 <= column <= 2:
            raise IndexError(f"Matrix3d column out of range: {column}")
        setattr(self, f"m{column}0", x)
        setattr(self, f"m{column}1", y)
        setattr(self, f"m{column}2", z)
        return self

    def zero(self) -> Matrix3d:
        return self._write((0.0,) * 9, None)

    def identity(self) -> Matrix3d:
        return self._write(rotation3.IDENTITY3, None)

    def to_tuple(self) -> Block3:
        return self._block()

    def to_array(self) -> np.ndarray:
        return np.array(self._block(), dtype=np.float64)

    def to_bytes(self) -> bytes:
        return self.to_array().astype(np.float32).tobytes()

    # =========================================================================
    # Algebra
    # =========================================================================

    def mul(self, right: Matrix3d, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """self * right."""
        return self._write(rotation3.mul3(self._block(), right._block()), dest)

    def mul_local(self, left: Matrix3d, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """left * self."""
        return self._write(rotation3.mul3(left._block(), self._block()), dest)

    def determinant(self) -> float:
        return rotation3.determinant3(self._block())

    def invert(self, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """A singular matrix raises ZeroDivisionError."""
        return self._write(rotation3.invert3(self._block()), dest)

    def transpose(self, dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._write(rotation3.transpose3(self._block()), dest)

    def normal(self, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """Transpose of the inverse, for transforming surface normals."""
        return self._write(rotation3.transpose3(rotation3.invert3(self._block())), dest)

    def cofactor(self, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """Matrix of cofactors; equals normal() scaled by the determinant."""
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._block()
        return self._write((m11 * m22 - m21 * m12,
                            m20 * m12 - m10 * m22,
                            m10 * m21 - m20 * m11,
                            m21 * m02 - m01 * m22,
                            m00 * m22 - m20 * m02,
                            m20 * m01 - m00 * m21,
                            m01 * m12 - m11 * m02,
                            m02 * m10 - m12 * m00,
                            m00 * m11 - m10 * m01), dest)

    def add(self, other: Matrix3d, dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._write(tuple(a + b for a, b in zip(self._block(), other._block())), dest)

    def sub(self, other: Matrix3d, dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._write(tuple(a - b for a, b in zip(self._block(), other._block())), dest)

    def mul_component_wise(self, other: Matrix3d, dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._write(tuple(a * b for a, b in zip(self._block(), other._block())), dest)

    def lerp(self, other: Matrix3d, t: float, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """Component-wise self + (other - self) * t."""
        return self._write(tuple(a + (b - a) * t for a, b in zip(self._block(), other._block())),
                           dest)

    def set_skew_symmetric(self, a: float, b: float, c: float) -> Matrix3d:
        """Set to the skew-symmetric matrix

            |  0  a -b |
            | -a  0  c |
            |  b -c  0 |
        """
        return self._write((0.0, -a, b, a, 0.0, -c, -b, c, 0.0), None)

    # =========================================================================
    # Rotation and scale
    # =========================================================================

    def _post(self, r: Block3, dest: Optional[Matrix3d]) -> Matrix3d:
        return self._write(rotation3.mul3(self._block(), r), dest)

    def scaling(self, x: float, y: Optional[float] = None, z: Optional[float] = None) -> Matrix3d:
        y = x if y is None else y
        z = x if z is None else z
        return self._write((x, 0.0, 0.0, 0.0, y, 0.0, 0.0, 0.0, z), None)

    def scale(self, x: float, y: Optional[float] = None, z: Optional[float] = None,
              dest: Optional[Matrix3d] = None) -> Matrix3d:
        """self * S(x, y, z)."""
        y = x if y is None else y
        z = x if z is None else z
        return self._write(rotation3.scale_columns(self._block(), x, y, z), dest)

    def rotation_x(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_x(angle, trig), None)

    def rotation_y(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_y(angle, trig), None)

    def rotation_z(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_z(angle, trig), None)

    def rotation_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), None)

    def rotation_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                     trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), None)

    def rotation_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._write(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), None)

    def rotation(self, angle: float, x: float, y: float, z: float,
                 trig: PreciseTrig = PRECISE) -> Matrix3d:
        """Rotation of angle radians around the unit axis (x, y, z)."""
        return self._write(rotation3.rotation_axis(angle, x, y, z, trig), None)

    def rotate_x(self, angle: float, dest: Optional[Matrix3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_x(angle, trig), dest)

    def rotate_y(self, angle: float, dest: Optional[Matrix3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_y(angle, trig), dest)

    def rotate_z(self, angle: float, dest: Optional[Matrix3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_z(angle, trig), dest)

    def rotate_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                   dest: Optional[Matrix3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), dest)

    def rotate_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                   dest: Optional[Matrix3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), dest)

    def rotate_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                   dest: Optional[Matrix3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), dest)

    def rotate(self, angle: float, x: float, y: float, z: float,
               dest: Optional[Matrix3d] = None,
               trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._post(rotation3.rotation_axis(angle, x, y, z, trig), dest)

    def _pre(self, r: Block3, dest: Optional[Matrix3d]) -> Matrix3d:
        return self._write(rotation3.mul3(r, self._block()), dest)

    def scale_local(self, x: float, y: Optional[float] = None, z: Optional[float] = None,
                    dest: Optional[Matrix3d] = None) -> Matrix3d:
        """S(x, y, z) * self."""
        y = x if y is None else y
        z = x if z is None else z
        return self._pre((x, 0.0, 0.0, 0.0, y, 0.0, 0.0, 0.0, z), dest)

    def rotate_local_x(self, angle: float, dest: Optional[Matrix3d] = None,
                       trig: PreciseTrig = PRECISE) -> Matrix3d:
        """R * self, so the rotation is applied after this matrix."""
        return self._pre(rotation3.rotation_x(angle, trig), dest)

    def rotate_local_y(self, angle: float, dest: Optional[Matrix3d] = None,
                       trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._pre(rotation3.rotation_y(angle, trig), dest)

    def rotate_local_z(self, angle: float, dest: Optional[Matrix3d] = None,
                       trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._pre(rotation3.rotation_z(angle, trig), dest)

    def rotate_local(self, angle: float, x: float, y: float, z: float,
                     dest: Optional[Matrix3d] = None,
                     trig: PreciseTrig = PRECISE) -> Matrix3d:
        return self._pre(rotation3.rotation_axis(angle, x, y, z, trig), dest)

    def rotation_towards(self, dir: Vector3d, up: Vector3d) -> Matrix3d:
        """Set to the rotation that maps +Z onto dir."""
        return self._write(rotation3.towards(dir.x, dir.y, dir.z, up.x, up.y, up.z), None)

    def rotate_towards(self, dir: Vector3d, up: Vector3d,
                       dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._post(rotation3.towards(dir.x, dir.y, dir.z, up.x, up.y, up.z), dest)

    def reflection(self, nx: float, ny: float, nz: float) -> Matrix3d:
        """Set to a reflection about the plane through the origin with unit normal n."""
        return self._write(rotation3.reflection(nx, ny, nz), None)

    def reflect(self, nx: float, ny: float, nz: float,
                dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._post(rotation3.reflection(nx, ny, nz), dest)

    def oblique_z(self, a: float, b: float, dest: Optional[Matrix3d] = None) -> Matrix3d:
        """self * O, where O shears z into x by a and into y by b."""
        return self._post((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, a, b, 1.0), dest)

    def set_quaternion(self, q: Quaterniond) -> Matrix3d:
        """Set to the rotation of the unit quaternion q."""
        return self._write(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w), None)

    def rotate_quaternion(self, q: Quaterniond, dest: Optional[Matrix3d] = None) -> Matrix3d:
        return self._post(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w), dest)

    def set_axis_angle(self, axis_angle: AxisAngle4d) -> Matrix3d:
        """Set to the rotation of axis_angle; its axis need not be unit length."""
        x, y, z = axis_angle.x, axis_angle.y, axis_angle.z
        inv = 1.0 / math.sqrt(x * x + y * y + z * z)
        return self._write(rotation3.rotation_axis(axis_angle.angle, x * inv, y * inv, z * inv), None)

    def look_along(self, dir: Vector3d, up: Vector3d,
                   dest: Optional[Matrix3d] = None) -> Matrix3d:
        """self * L, where L rotates dir onto -Z."""
        return self._post(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z), dest)

    def set_look_along(self, dir: Vector3d, up: Vector3d) -> Matrix3d:
        return self._write(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z), None)

    # =========================================================================
    # Vectors and extraction
    # =========================================================================

    def transform(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        """self * v."""
        dest = v if dest is None else dest
        dest.x, dest.y, dest.z = rotation3.transform3(self._block(), v.x, v.y, v.z)
        return dest

    def transform_transpose(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = v if dest is None else dest
        dest.x, dest.y, dest.z = rotation3.transform3(
            rotation3.transpose3(self._block()), v.x, v.y, v.z)
        return dest

    def get_scale(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.column_lengths(self._block()))

    def get_euler_angles_xyz(self, dest: Vector3d) -> Vector3d:
        """Angles for rotation_xyz; assumes a pure rotation."""
        return dest.set(*rotation3.euler_xyz(self._block()))

    def get_euler_angles_zyx(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.euler_zyx(self._block()))

    def get_normalized_rotation(self, dest: Quaterniond) -> Quaterniond:
        return dest.set_from_unnormalized(self)

    def get_unnormalized_rotation(self, dest: Quaterniond) -> Quaterniond:
        """Rotation part of a matrix whose columns may carry scale."""
        return dest.set_from_unnormalized(self)

    def positive_x(self, dest: Vector3d) -> Vector3d:
        """Direction that this matrix maps onto +X."""
        return dest.set(*rotation3.positive_axes(self._block())[0]).normalize()

    def positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[1]).normalize()

    def positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[2]).normalize()

    def normalized_positive_x(self, dest: Vector3d) -> Vector3d:
        """positive_x for an orthonormal matrix."""
        return dest.set(self.m00, self.m10, self.m20)

    def normalized_positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m01, self.m11, self.m21)

    def normalized_positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m02, self.m12, self.m22)

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self._block())

    def equals(self, m: Matrix3d, delta: float) -> bool:
        return all(scalar_equals(a, b, delta) for a, b in zip(self._block(), m._block()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3d):
            return NotImplemented
        return self._block() == other._block()

    __hash__ = None

    def __matmul__(self, other: Union[Matrix3d, Vector3d]):
        if isinstance(other, Matrix3d):
            return self.mul(other, Matrix3d())
        if isinstance(other, Vector3d):
            return self.transform(other, Vector3d())
        raise TypeError(f"Cannot multiply Matrix3d by {type(other)}")

    def __repr__(self) -> str:
        return f"Matrix3d{self._block()}"

    def __str__(self) -> str:
        f = format_number
        return (f"{f(self.m00)} {f(self.m10)} {f(self.m20)}\n"
                f"{f(self.m01)} {f(self.m11)} {f(self.m21)}\n"
                f"{f(self.m02)} {f(self.m12)} {f(self.m22)}\n")
