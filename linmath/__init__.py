# linmath/__init__.py
"""
linmath - double-precision linear algebra for real-time graphics

Vectors, quaternions and matrices use column-vector conventions and
column-major storage, so to_bytes() output goes straight into GLSL.
Key components:

- Vector2d, Vector3d, Vector4d: mutable vectors
- Quaterniond, AxisAngle4d: rotations
- Matrix2d, Matrix3x2d, Matrix3d, Matrix4x3d, Matrix4d: transforms and projections
- FrustumIntersection, RayAabIntersection: culling and picking

Mutating methods take an optional dest. Without one they modify the
object in place; either way they return the object written:

    from linmath import Matrix4d, Vector3d

    proj = Matrix4d().perspective(math.radians(60), 16 / 9, 0.1, 100.0)
    view = Matrix4d().set_look_at(0, 2, 5, 0, 0, 0, 0, 1, 0)
    view_proj = proj.mul(view, Matrix4d())

    p = view_proj.transform_project(Vector3d(1, 0, 0))

Operators (+, -, *, @) never mutate and return new objects.
"""

# Scalars and configuration
from linmath.core import scalar
from linmath.core.errors import LinmathError, PreconditionViolation
from linmath.core.options import (
    MathOptions,
    get_options,
    configure,
    reset_options,
    format_number,
)
from linmath.core.scalar import RoundingMode, PreciseTrig, PolynomialTrig, LookupTrig, PRECISE

# Vectors
from linmath.vector import Vector2d, Vector3d, Vector4d

# Rotations
from linmath.rotation import Quaterniond, AxisAngle4d

# Matrices
from linmath.matrix import (
    Matrix2d,
    Matrix3x2d,
    Matrix3d,
    Matrix4x3d,
    Matrix4d,
    MatrixProperty,
)

# Geometry
from linmath.geometry import FrustumIntersection, RayAabIntersection, geometry_utils

__all__ = [
    "scalar", "LinmathError", "PreconditionViolation",
    "MathOptions", "get_options", "configure", "reset_options", "format_number",
    "RoundingMode", "PreciseTrig", "PolynomialTrig", "LookupTrig", "PRECISE",
    "Vector2d", "Vector3d", "Vector4d",
    "Quaterniond", "AxisAngle4d",
    "Matrix2d", "Matrix3x2d", "Matrix3d", "Matrix4x3d", "Matrix4d", "MatrixProperty",
    "FrustumIntersection", "RayAabIntersection", "geometry_utils",
]
