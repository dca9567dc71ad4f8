"""Three dimensional vectors as JAX pytrees.

Components may be Python numbers or JAX arrays. Arrays sharing a leading
batch axis describe a batch of vectors and every operation broadcasts over it.
"""

from typing import Union

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct

Array = jax.Array
Scalar = Union[float, Array]


def is_scalar(value) -> bool:
    """True for real numbers and arrays, False for the spatial value types."""
    return isinstance(value, (int, float, np.number, np.ndarray, jax.Array)) and not isinstance(value, bool)


@struct.dataclass
class Vec:
    """Immutable 3D vector.

    Examples:
        >>> Vec(1, 0, 0) + Vec(0, 1, 0) == Vec(1, 1, 0)
        True
        >>> Vec(1, 0, 0) ^ Vec(0, 1, 0) == Vec(0, 0, 1)
        True
    """
    x: Scalar = 0.0
    y: Scalar = 0.0
    z: Scalar = 0.0

    # Constructors
    @classmethod
    def from_array(cls, array: Array) -> "Vec":
        """Build a vector from a (..., 3) array."""
        array = jnp.asarray(array)
        if array.shape[-1:] != (3,):
            raise ValueError(f"array must have shape (..., 3), got {array.shape}")
        return cls(array[..., 0], array[..., 1], array[..., 2])

    def to_array(self) -> Array:
        """Stack the components into a (..., 3) array."""
        return jnp.stack(jnp.broadcast_arrays(self.x, self.y, self.z), axis=-1)

    # Arithmetic
    def __add__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vec":
        return Vec(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if not is_scalar(other):
            return NotImplemented
        return Vec(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other):
        if not is_scalar(other):
            return NotImplemented
        return Vec(other * self.x, other * self.y, other * self.z)

    def __truediv__(self, other):
        if not is_scalar(other):
            return NotImplemented
        # jnp.divide keeps IEEE semantics for a zero divisor
        return Vec(jnp.divide(self.x, other), jnp.divide(self.y, other), jnp.divide(self.z, other))

    def __xor__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return self.cross(other)

    def __round__(self, ndigits=None) -> "Vec":
        """Round each component to the nearest integral value (ties to even)."""
        decimals = 0 if ndigits is None else ndigits
        return Vec(
            jnp.round(self.x, decimals),
            jnp.round(self.y, decimals),
            jnp.round(self.z, decimals),
        )

    def equals(self, other: "Vec") -> Array:
        """Exact component-wise comparison as a traceable boolean array."""
        return (
            jnp.all(self.x == other.x)
            & jnp.all(self.y == other.y)
            & jnp.all(self.z == other.z)
        )

    def __eq__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        # exact comparison, no tolerance
        return bool(self.equals(other))

    # Products and lengths
    def dot(self, other: "Vec") -> Scalar:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec") -> "Vec":
        """Right-handed cross product."""
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> Array:
        """Euclidean length."""
        return jnp.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def unit(self) -> "Vec":
        """Vector of unit length colinear with this one. NaN for the zero vector."""
        return self / self.norm()
