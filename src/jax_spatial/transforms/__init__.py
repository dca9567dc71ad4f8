"""
Spatial value types for robotics, as JAX pytrees.

This module provides immutable, JIT-compatible implementations of:
- 3D vectors (vec module)
- quaternions and slerp (quat module)
- rigid transforms (transf module)

All operations are pure and work on scalars as well as batched leaves.
"""

from . import vec
from . import quat
from . import transf
from .vec import Vec
from .quat import Quat
from .transf import Transf
from .ops import apply, compose, conj, cross, dot, index, norm, slerp, stack, unit

__all__ = [
    "vec",
    "quat",
    "transf",
    "Vec",
    "Quat",
    "Transf",
    "apply",
    "compose",
    "conj",
    "cross",
    "dot",
    "index",
    "norm",
    "slerp",
    "stack",
    "unit",
]
