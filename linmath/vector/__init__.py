# linmath/vector/__init__.py
"""Double-precision 2D, 3D and 4D vectors."""

from linmath.vector.vector2 import Vector2d
from linmath.vector.vector3 import Vector3d
from linmath.vector.vector4 import Vector4d

__all__ = ["Vector2d", "Vector3d", "Vector4d"]
