# linmath/matrix/matrix4x3.py
"""
Matrix4x3d - affine 3D transform of doubles, column-major.

    | m00 m10 m20 m30 |
    | m01 m11 m21 m31 |
    | m02 m12 m22 m32 |
    |  0   0   0   1  |

The bottom row is implicit, so every product and inverse stays affine.
"""

from __future__ import annotations
import math
from typing import Optional, Tuple, Union, TYPE_CHECKING

import numpy as np

from ..core.scalar import PRECISE, PreciseTrig, equals as scalar_equals
from ..core.options import format_number
from ..vector.vector3 import Vector3d
from ..vector.vector4 import Vector4d
from . import rotation3
from .rotation3 import Block3
from .matrix3 import Matrix3d

if TYPE_CHECKING:
    from ..rotation.quaternion import Quaterniond
    from ..rotation.axis_angle import AxisAngle4d

Vec3 = Tuple[float, float, float]
_ZERO3: Vec3 = (0.0, 0.0, 0.0)


class Matrix4x3d:
    """Affine 3D matrix: upper-left 3x3 plus translation (m30, m31, m32)."""

    __slots__ = ('m00', 'm01', 'm02', 'm10', 'm11', 'm12',
                 'm20', 'm21', 'm22', 'm30', 'm31', 'm32')

    def __init__(self, m00: float = 1.0, m01: float = 0.0, m02: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0, m12: float = 0.0,
                 m20: float = 0.0, m21: float = 0.0, m22: float = 1.0,
                 m30: float = 0.0, m31: float = 0.0, m32: float = 0.0):
        self.m00, self.m01, self.m02 = m00, m01, m02
        self.m10, self.m11, self.m12 = m10, m11, m12
        self.m20, self.m21, self.m22 = m20, m21, m22
        self.m30, self.m31, self.m32 = m30, m31, m32

    def _block(self) -> Block3:
        return (self.m00, self.m01, self.m02,
                self.m10, self.m11, self.m12,
                self.m20, self.m21, self.m22)

    def _translation(self) -> Vec3:
        return (self.m30, self.m31, self.m32)

    def _write(self, b: Block3, t: Vec3, dest: Optional[Matrix4x3d]) -> Matrix4x3d:
        dest = self if dest is None else dest
        (dest.m00, dest.m01, dest.m02,
         dest.m10, dest.m11, dest.m12,
         dest.m20, dest.m21, dest.m22) = b
        dest.m30, dest.m31, dest.m32 = t
        return dest

    def _post(self, b: Block3, t: Vec3, dest: Optional[Matrix4x3d]) -> Matrix4x3d:
        """self * (b, t)."""
        a = self._block()
        tx, ty, tz = rotation3.transform3(a, *t)
        return self._write(rotation3.mul3(a, b),
                           (tx + self.m30, ty + self.m31, tz + self.m32), dest)

    def copy(self) -> Matrix4x3d:
        return Matrix4x3d(*self.to_tuple())

    def set(self, m00, *values: float) -> Matrix4x3d:
        """Set from twelve column-major values or from another matrix.

        Matrix4d drops its bottom row; Matrix3d sets the 3x3 part and
        clears the translation.
        """
        if values:
            v = (m00,) + values
            return self._write(v[:9], v[9:12], None)
        m = m00
        if hasattr(m, 'm30'):
            return self._write(_block_of(m), (m.m30, m.m31, m.m32), None)
        return self._write(_block_of(m), _ZERO3, None)

    def get(self, column: int, row: int) -> float:
        if not (0 <= column <= 3 and 0 <= row <= 2):
            raise IndexError(f"Matrix4x3d index out of range: ({column}, {row})")
        return getattr(self, f"m{column}{row}")

    def set_element(self, column: int, row: int, value: float) -> Matrix4x3d:
        if not (0 <= column <= 3 and 0 <= row <= 2):
            raise IndexError(f"Matrix4x3d index out of range: ({column}, {row})")
        setattr(self, f"m{column}{row}", value)
        return self

    def zero(self) -> Matrix4x3d:
        return self._write((0.0,) * 9, _ZERO3, None)

    def identity(self) -> Matrix4x3d:
        return self._write(rotation3.IDENTITY3, _ZERO3, None)

    def to_tuple(self) -> Tuple[float, ...]:
        return self._block() + self._translation()

    def to_array(self) -> np.ndarray:
        return np.array(self.to_tuple(), dtype=np.float64)

    def to_bytes(self) -> bytes:
        return self.to_array().astype(np.float32).tobytes()

    # =========================================================================
    # Algebra
    # =========================================================================

    def mul(self, right: Matrix4x3d, dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * right."""
        return self._post(right._block(), right._translation(), dest)

    def mul_local(self, left: Matrix4x3d, dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """left * self."""
        return left.mul(self, self if dest is None else dest)

    def determinant(self) -> float:
        return rotation3.determinant3(self._block())

    def invert(self, dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """A singular 3x3 part raises ZeroDivisionError."""
        inv = rotation3.invert3(self._block())
        tx, ty, tz = rotation3.transform3(inv, *self._translation())
        return self._write(inv, (-tx, -ty, -tz), dest)

    def transpose3x3(self, dest: Optional[Union[Matrix4x3d, Matrix3d]] = None):
        """Transpose the 3x3 part; a Matrix4x3d dest receives this translation."""
        b = rotation3.transpose3(self._block())
        if isinstance(dest, Matrix3d):
            return dest.set(*b)
        return self._write(b, self._translation(), dest)

    def normal(self, dest: Optional[Union[Matrix4x3d, Matrix3d]] = None):
        """Transpose of the inverse 3x3 part, for transforming surface normals.

        A Matrix4x3d dest gets a zero translation.
        """
        b = rotation3.transpose3(rotation3.invert3(self._block()))
        if isinstance(dest, Matrix3d):
            return dest.set(*b)
        return self._write(b, _ZERO3, dest)

    def normalize3x3(self, dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """Normalize the three base vectors of the 3x3 part."""
        return self._write(rotation3.normalize_columns(self._block()), self._translation(), dest)

    # =========================================================================
    # Builders
    # =========================================================================

    def translation(self, x: float, y: float, z: float) -> Matrix4x3d:
        return self._write(rotation3.IDENTITY3, (x, y, z), None)

    def set_translation(self, x: float, y: float, z: float) -> Matrix4x3d:
        """Replace the translation, keeping the 3x3 part."""
        self.m30, self.m31, self.m32 = x, y, z
        return self

    def translate(self, x: float, y: float, z: float,
                  dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * T(x, y, z)."""
        return self._post(rotation3.IDENTITY3, (x, y, z), dest)

    def translate_local(self, x: float, y: float, z: float,
                        dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """T(x, y, z) * self."""
        return self._write(self._block(), (self.m30 + x, self.m31 + y, self.m32 + z), dest)

    def scaling(self, x: float, y: Optional[float] = None,
                z: Optional[float] = None) -> Matrix4x3d:
        y = x if y is None else y
        z = x if z is None else z
        return self._write((x, 0.0, 0.0, 0.0, y, 0.0, 0.0, 0.0, z), _ZERO3, None)

    def scale(self, x: float, y: Optional[float] = None, z: Optional[float] = None,
              dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * S(x, y, z)."""
        y = x if y is None else y
        z = x if z is None else z
        return self._write(rotation3.scale_columns(self._block(), x, y, z),
                           self._translation(), dest)

    def rotation_x(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_x(angle, trig), _ZERO3, None)

    def rotation_y(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_y(angle, trig), _ZERO3, None)

    def rotation_z(self, angle: float,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_z(angle, trig), _ZERO3, None)

    def rotation_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), _ZERO3, None)

    def rotation_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), _ZERO3, None)

    def rotation_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                     trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._write(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), _ZERO3, None)

    def rotation(self, angle: float, x: float, y: float, z: float,
                 trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        """Rotation of angle radians around the unit axis (x, y, z)."""
        return self._write(rotation3.rotation_axis(angle, x, y, z, trig), _ZERO3, None)

    def rotate_x(self, angle: float, dest: Optional[Matrix4x3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_x(angle, trig), _ZERO3, dest)

    def rotate_y(self, angle: float, dest: Optional[Matrix4x3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_y(angle, trig), _ZERO3, dest)

    def rotate_z(self, angle: float, dest: Optional[Matrix4x3d] = None,
                 trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_z(angle, trig), _ZERO3, dest)

    def rotate_xyz(self, angle_x: float, angle_y: float, angle_z: float,
                   dest: Optional[Matrix4x3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_xyz(angle_x, angle_y, angle_z, trig), _ZERO3, dest)

    def rotate_zyx(self, angle_z: float, angle_y: float, angle_x: float,
                   dest: Optional[Matrix4x3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_zyx(angle_z, angle_y, angle_x, trig), _ZERO3, dest)

    def rotate_yxz(self, angle_y: float, angle_x: float, angle_z: float,
                   dest: Optional[Matrix4x3d] = None,
                   trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_yxz(angle_y, angle_x, angle_z, trig), _ZERO3, dest)

    def rotate(self, angle: float, x: float, y: float, z: float,
               dest: Optional[Matrix4x3d] = None,
               trig: PreciseTrig = PRECISE) -> Matrix4x3d:
        return self._post(rotation3.rotation_axis(angle, x, y, z, trig), _ZERO3, dest)

    def set_quaternion(self, q: Quaterniond) -> Matrix4x3d:
        """Set to the rotation of the unit quaternion q, without translation."""
        return self._write(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w), _ZERO3, None)

    def rotate_quaternion(self, q: Quaterniond, dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        return self._post(rotation3.rotation_quaternion(q.x, q.y, q.z, q.w), _ZERO3, dest)

    def set_axis_angle(self, axis_angle: AxisAngle4d) -> Matrix4x3d:
        x, y, z = axis_angle.x, axis_angle.y, axis_angle.z
        inv = 1.0 / math.sqrt(x * x + y * y + z * z)
        return self._write(rotation3.rotation_axis(axis_angle.angle, x * inv, y * inv, z * inv),
                           _ZERO3, None)

    def look_along(self, dir: Vector3d, up: Vector3d,
                   dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * L, where L rotates dir onto -Z."""
        return self._post(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z),
                          _ZERO3, dest)

    def set_look_along(self, dir: Vector3d, up: Vector3d) -> Matrix4x3d:
        return self._write(rotation3.look_along(dir.x, dir.y, dir.z, up.x, up.y, up.z),
                           _ZERO3, None)

    def look_at(self, eye_x: float, eye_y: float, eye_z: float,
                center_x: float, center_y: float, center_z: float,
                up_x: float, up_y: float, up_z: float,
                dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * V, where V is a right-handed view from eye towards center."""
        b, t = _look_at(eye_x, eye_y, eye_z, center_x, center_y, center_z, up_x, up_y, up_z)
        return self._post(b, t, dest)

    def set_look_at(self, eye_x: float, eye_y: float, eye_z: float,
                    center_x: float, center_y: float, center_z: float,
                    up_x: float, up_y: float, up_z: float) -> Matrix4x3d:
        b, t = _look_at(eye_x, eye_y, eye_z, center_x, center_y, center_z, up_x, up_y, up_z)
        return self._write(b, t, None)

    def ortho(self, left: float, right: float, bottom: float, top: float,
              z_near: float, z_far: float, z_zero_to_one: bool = False,
              dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """self * O for an orthographic projection."""
        b, t = _ortho(left, right, bottom, top, z_near, z_far, z_zero_to_one)
        return self._post(b, t, dest)

    def set_ortho(self, left: float, right: float, bottom: float, top: float,
                  z_near: float, z_far: float, z_zero_to_one: bool = False) -> Matrix4x3d:
        b, t = _ortho(left, right, bottom, top, z_near, z_far, z_zero_to_one)
        return self._write(b, t, None)

    def ortho2d(self, left: float, right: float, bottom: float, top: float,
                dest: Optional[Matrix4x3d] = None) -> Matrix4x3d:
        """ortho() with z_near = -1 and z_far = 1."""
        return self.ortho(left, right, bottom, top, -1.0, 1.0, False, dest)

    def set_ortho2d(self, left: float, right: float, bottom: float, top: float) -> Matrix4x3d:
        return self.set_ortho(left, right, bottom, top, -1.0, 1.0)

    # =========================================================================
    # Vectors and extraction
    # =========================================================================

    def transform(self, v: Vector4d, dest: Optional[Vector4d] = None) -> Vector4d:
        """self * v; w is kept."""
        dest = v if dest is None else dest
        x, y, z, w = v.x, v.y, v.z, v.w
        rx, ry, rz = rotation3.transform3(self._block(), x, y, z)
        dest.x = rx + self.m30 * w
        dest.y = ry + self.m31 * w
        dest.z = rz + self.m32 * w
        dest.w = w
        return dest

    def transform_position(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = v if dest is None else dest
        rx, ry, rz = rotation3.transform3(self._block(), v.x, v.y, v.z)
        dest.x = rx + self.m30
        dest.y = ry + self.m31
        dest.z = rz + self.m32
        return dest

    def transform_direction(self, v: Vector3d, dest: Optional[Vector3d] = None) -> Vector3d:
        dest = v if dest is None else dest
        dest.x, dest.y, dest.z = rotation3.transform3(self._block(), v.x, v.y, v.z)
        return dest

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

    def positive_x(self, dest: Vector3d) -> Vector3d:
        """Direction that this matrix maps onto +X."""
        return dest.set(*rotation3.positive_axes(self._block())[0]).normalize()

    def positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[1]).normalize()

    def positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(*rotation3.positive_axes(self._block())[2]).normalize()

    def normalized_positive_x(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m00, self.m10, self.m20)

    def normalized_positive_y(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m01, self.m11, self.m21)

    def normalized_positive_z(self, dest: Vector3d) -> Vector3d:
        return dest.set(self.m02, self.m12, self.m22)

    # =========================================================================
    # Comparison and operators
    # =========================================================================

    def equals(self, m: Matrix4x3d, delta: float) -> bool:
        return all(scalar_equals(a, b, delta) for a, b in zip(self.to_tuple(), m.to_tuple()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4x3d):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    __hash__ = None

    def __matmul__(self, other: Union[Matrix4x3d, Vector3d, Vector4d]):
        if isinstance(other, Matrix4x3d):
            return self.mul(other, Matrix4x3d())
        if isinstance(other, Vector4d):
            return self.transform(other, Vector4d())
        if isinstance(other, Vector3d):
            return self.transform_position(other, Vector3d())
        raise TypeError(f"Cannot multiply Matrix4x3d by {type(other)}")

    def __repr__(self) -> str:
        return f"Matrix4x3d{self.to_tuple()}"

    def __str__(self) -> str:
        f = format_number
        return (f"{f(self.m00)} {f(self.m10)} {f(self.m20)} {f(self.m30)}\n"
                f"{f(self.m01)} {f(self.m11)} {f(self.m21)} {f(self.m31)}\n"
                f"{f(self.m02)} {f(self.m12)} {f(self.m22)} {f(self.m32)}\n")


def _block_of(m) -> Block3:
    return (m.m00, m.m01, m.m02, m.m10, m.m11, m.m12, m.m20, m.m21, m.m22)


def _look_at(eye_x: float, eye_y: float, eye_z: float,
             center_x: float, center_y: float, center_z: float,
             up_x: float, up_y: float, up_z: float) -> Tuple[Block3, Vec3]:
    b = rotation3.look_along(center_x - eye_x, center_y - eye_y, center_z - eye_z,
                             up_x, up_y, up_z)
    tx, ty, tz = rotation3.transform3(b, eye_x, eye_y, eye_z)
    return b, (-tx, -ty, -tz)


def _ortho(left: float, right: float, bottom: float, top: float,
           z_near: float, z_far: float, z_zero_to_one: bool) -> Tuple[Block3, Vec3]:
    rm00 = 2.0 / (right - left)
    rm11 = 2.0 / (top - bottom)
    rm22 = (1.0 if z_zero_to_one else 2.0) / (z_near - z_far)
    rm30 = (left + right) / (left - right)
    rm31 = (top + bottom) / (bottom - top)
    rm32 = (z_near if z_zero_to_one else z_far + z_near) / (z_near - z_far)
    return (rm00, 0.0, 0.0, 0.0, rm11, 0.0, 0.0, 0.0, rm22), (rm30, rm31, rm32)
