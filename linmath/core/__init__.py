# linmath/core/__init__.py
"""Scalar math, configuration and errors shared by every linmath type."""
