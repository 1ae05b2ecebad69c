# linmath/core/errors.py
"""
Exceptions raised by linmath.

Numerical degeneration (zero-length normalize, singular inversion) is not
reported through these; Python's own ZeroDivisionError surfaces instead.
"""


class LinmathError(Exception):
    """Base class for library errors."""


class PreconditionViolation(LinmathError, ValueError):
    """A fast path was called on a matrix without the structure it assumes.

    Only raised while MathOptions.debug is enabled.
    """
