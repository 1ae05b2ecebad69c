# linmath/matrix/__init__.py
"""Column-major double-precision matrices and the Matrix4d property flags."""

from linmath.matrix.properties import (
    MatrixProperty, IDENTITY_PROPERTIES,
    PLANE_NX, PLANE_PX, PLANE_NY, PLANE_PY, PLANE_NZ, PLANE_PZ,
    CORNER_NXNYNZ, CORNER_PXNYNZ, CORNER_PXPYNZ, CORNER_NXPYNZ,
    CORNER_PXNYPZ, CORNER_NXNYPZ, CORNER_NXPYPZ, CORNER_PXPYPZ,
)
from linmath.matrix.matrix2 import Matrix2d
from linmath.matrix.matrix3x2 import Matrix3x2d
from linmath.matrix.matrix3 import Matrix3d
from linmath.matrix.matrix4x3 import Matrix4x3d
from linmath.matrix.matrix4 import Matrix4d

__all__ = [
    "Matrix2d", "Matrix3x2d", "Matrix3d", "Matrix4x3d", "Matrix4d",
    "MatrixProperty", "IDENTITY_PROPERTIES",
    "PLANE_NX", "PLANE_PX", "PLANE_NY", "PLANE_PY", "PLANE_NZ", "PLANE_PZ",
    "CORNER_NXNYNZ", "CORNER_PXNYNZ", "CORNER_PXPYNZ", "CORNER_NXPYNZ",
    "CORNER_PXNYPZ", "CORNER_NXNYPZ", "CORNER_NXPYPZ", "CORNER_PXPYPZ",
]
