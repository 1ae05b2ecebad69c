# linmath/rotation/__init__.py
"""Rotation representations: quaternions and axis-angle pairs."""

from linmath.rotation.quaternion import Quaterniond
from linmath.rotation.axis_angle import AxisAngle4d, wrap_angle

__all__ = ["Quaterniond", "AxisAngle4d", "wrap_angle"]
