# linmath/render/__init__.py
"""Packing linmath values for moderngl uniforms and buffers."""

from linmath.render.uniforms import pack_matrices, write_uniform, write_buffer

__all__ = ["pack_matrices", "write_uniform", "write_buffer"]
