# linmath/render/uniforms.py
"""
GPU upload helpers for linmath values.

Everything in linmath stores matrices column-major, which is what GLSL
expects, so packing is a flat copy of to_tuple() converted to float32.

std140 layout pads every matrix column to a vec4; pass std140=True when
the target is a uniform block and the matrices have fewer than four rows
(Matrix3d, Matrix4x3d, Matrix3x2d).

The helpers take moderngl Program and Buffer objects but never import
moderngl themselves; install it with the `render` extra.
"""

from __future__ import annotations
import logging
from typing import Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import moderngl

logger = logging.getLogger(__name__)

# rows per column for each matrix type
_ROWS = {
    'Matrix2d': 2,
    'Matrix3x2d': 2,
    'Matrix3d': 3,
    'Matrix4x3d': 3,
    'Matrix4d': 4,
}


def _pack_one(value, std140: bool) -> np.ndarray:
    flat = np.asarray(value.to_tuple(), dtype=np.float64)
    rows = _ROWS.get(type(value).__name__)
    if not std140 or rows is None or rows == 4:
        return flat
    cols = flat.reshape(-1, rows)
    padded = np.zeros((cols.shape[0], 4), dtype=np.float64)
    padded[:, :rows] = cols
    return padded.ravel()


def pack_matrices(matrices: Sequence, dtype=np.float32, std140: bool = False) -> np.ndarray:
    """Pack matrices (or vectors) into one contiguous 1D array, column-major."""
    if not matrices:
        return np.array([], dtype=dtype)
    return np.concatenate([_pack_one(m, std140) for m in matrices]).astype(dtype)


def write_uniform(program: 'moderngl.Program', name: str, value) -> bool:
    """Write a linmath value into a shader uniform.

    Returns False without raising when the program has no such uniform;
    drivers drop uniforms the shader does not use.
    """
    if name not in program:
        logger.debug(f"Uniform {name!r} not active, skipping")
        return False
    program[name].write(pack_matrices([value]).tobytes())
    return True


def write_buffer(buffer: 'moderngl.Buffer', matrices: Sequence,
                 offset: int = 0, std140: bool = False) -> int:
    """Upload packed matrices into a buffer. Returns the number of bytes written."""
    data = pack_matrices(matrices, std140=std140).tobytes()
    if offset + len(data) > buffer.size:
        raise ValueError(f"Buffer too small: need {offset + len(data)} bytes, have {buffer.size}")
    buffer.write(data, offset=offset)
    return len(data)
