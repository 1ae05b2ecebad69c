# linmath/matrix/properties.py
"""
Structural property flags tracked by Matrix4d, and the plane / corner
indices shared by the frustum extraction and culling code.
"""

from enum import IntFlag


class MatrixProperty(IntFlag):
    """What is known about a Matrix4d. Flags are only ever conservative:
    a missing flag means "unknown", never "false"."""
    NONE = 0
    PERSPECTIVE = 1 << 0
    AFFINE = 1 << 1
    IDENTITY = 1 << 2
    TRANSLATION = 1 << 3
    ORTHONORMAL = 1 << 4


# Identity is affine, a translation and orthonormal at the same time
IDENTITY_PROPERTIES = (MatrixProperty.IDENTITY | MatrixProperty.AFFINE
                       | MatrixProperty.TRANSLATION | MatrixProperty.ORTHONORMAL)

# Frustum planes
PLANE_NX = 0
PLANE_PX = 1
PLANE_NY = 2
PLANE_PY = 3
PLANE_NZ = 4
PLANE_PZ = 5

# Frustum corners
CORNER_NXNYNZ = 0
CORNER_PXNYNZ = 1
CORNER_PXPYNZ = 2
CORNER_NXPYNZ = 3
CORNER_PXNYPZ = 4
CORNER_NXNYPZ = 5
CORNER_NXPYPZ = 6
CORNER_PXPYPZ = 7

# (x plane, y plane, z plane) meeting at each corner
CORNER_PLANES = {
    CORNER_NXNYNZ: (PLANE_NX, PLANE_NY, PLANE_NZ),
    CORNER_PXNYNZ: (PLANE_PX, PLANE_NY, PLANE_NZ),
    CORNER_PXPYNZ: (PLANE_PX, PLANE_PY, PLANE_NZ),
    CORNER_NXPYNZ: (PLANE_NX, PLANE_PY, PLANE_NZ),
    CORNER_PXNYPZ: (PLANE_PX, PLANE_NY, PLANE_PZ),
    CORNER_NXNYPZ: (PLANE_NX, PLANE_NY, PLANE_PZ),
    CORNER_NXPYPZ: (PLANE_NX, PLANE_PY, PLANE_PZ),
    CORNER_PXPYPZ: (PLANE_PX, PLANE_PY, PLANE_PZ),
}
