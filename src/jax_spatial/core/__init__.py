"""Core kinematic chain data structures for JAX Spatial.

This module provides the immutable, pytree-compatible description of a
serial chain consumed by the forward kinematics in `jax_spatial.chain`.
"""

from .serial_chain import SerialChain

__all__ = ["SerialChain"]
