"""Free-function spelling of the spatial operations.

Every function dispatches to the method of the same name on its first
argument, so `dot`, `norm`, `unit` and `conj` accept Vec and Quat alike.
"""

from typing import Sequence, TypeVar

import jax
import jax.numpy as jnp

from .quat import Quat, slerp
from .transf import Transf
from .vec import Array, Scalar, Vec

T = TypeVar("T", Vec, Quat, Transf)


def dot(a, b) -> Scalar:
    return a.dot(b)


def cross(a: Vec, b: Vec) -> Vec:
    return a.cross(b)


def norm(a) -> Array:
    return a.norm()


def unit(a):
    return a.unit()


def conj(a):
    return a.conj()


def compose(*transforms: Transf) -> Transf:
    """Compose left to right: compose(a, b, c) == a + b + c."""
    result = Transf.identity()
    for t in transforms:
        result = result + t
    return result


def apply(t: Transf, p: Vec) -> Vec:
    return t.apply(p)


def stack(items: Sequence[T]) -> T:
    """
    Stack equally shaped values into one batched value.

    Args:
        items: non-empty sequence of Vec, Quat or Transf

    Returns:
        Value of the same type whose leaves gain a leading axis of len(items)
    """
    if len(items) == 0:
        raise ValueError("cannot stack an empty sequence")
    return jax.tree_util.tree_map(lambda *leaves: jnp.stack(leaves), *items)


def index(batched: T, i) -> T:
    """Select entry *i* along the leading axis of a batched value."""
    return jax.tree_util.tree_map(lambda leaf: leaf[i], batched)


__all__ = [
    "dot",
    "cross",
    "norm",
    "unit",
    "conj",
    "slerp",
    "compose",
    "apply",
    "stack",
    "index",
]
