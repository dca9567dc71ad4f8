"""
JAX Spatial: vectors, quaternions and rigid transforms for kinematic chains.

The value types are immutable pytrees, so compositions of transforms can be
traced through jit, vmap and grad.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from .transforms import Vec, Quat, Transf

__version__ = "0.1.0"
__all__ = ["transforms", "core", "Vec", "Quat", "Transf"]
