"""Quaternions as JAX pytrees.

Unit quaternions represent rotations. Components are stored in (w, x, y, z)
order, the same order used by `to_array` and `from_array`.
"""

import jax
import jax.numpy as jnp
from flax import struct

from .vec import Array, Scalar, Vec, is_scalar

# Above this dot product slerp falls back to normalized linear interpolation
SLERP_DOT_THRESHOLD = 0.9995


@struct.dataclass
class Quat:
    """Immutable quaternion, identity by default.

    Examples:
        >>> # 120° counterclockwise rotation around the (1, 1, 1) axis
        >>> q = Quat.from_axis_angle(2 * jnp.pi / 3, Vec(1, 1, 1))
        >>> round(q * Vec(1, 2, 3)) == Vec(3, 1, 2)
        True
    """
    w: Scalar = 1.0
    x: Scalar = 0.0
    y: Scalar = 0.0
    z: Scalar = 0.0

    # Constructors
    @classmethod
    def from_axis_angle(cls, angle: Scalar, axis: Vec) -> "Quat":
        """
        Rotation by *angle* radians around *axis* (right-hand rule).

        The axis is normalized here, so a zero axis gives NaN components.
        """
        half = angle / 2
        xyz = axis.unit() * jnp.sin(half)
        return cls(jnp.cos(half), xyz.x, xyz.y, xyz.z)

    @classmethod
    def from_vec(cls, v: Vec) -> "Quat":
        """Pure quaternion (0, v)."""
        return cls(0.0, v.x, v.y, v.z)

    @classmethod
    def from_array(cls, array: Array) -> "Quat":
        """Build a quaternion from a (..., 4) array in (w, x, y, z) order."""
        array = jnp.asarray(array)
        if array.shape[-1:] != (4,):
            raise ValueError(f"array must have shape (..., 4), got {array.shape}")
        return cls(array[..., 0], array[..., 1], array[..., 2], array[..., 3])

    def to_array(self) -> Array:
        return jnp.stack(jnp.broadcast_arrays(self.w, self.x, self.y, self.z), axis=-1)

    @property
    def vec(self) -> Vec:
        """Vector part."""
        return Vec(self.x, self.y, self.z)

    # Arithmetic
    def __add__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self.w + other.w, self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(self.w - other.w, self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Quat":
        return Quat(-self.w, -self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, Quat):
            return self._hamilton(other)
        if isinstance(other, Vec):
            return self.rotate(other)
        if is_scalar(other):
            return Quat(self.w * other, self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        if not is_scalar(other):
            return NotImplemented
        return Quat(other * self.w, other * self.x, other * self.y, other * self.z)

    def __truediv__(self, other):
        if not is_scalar(other):
            return NotImplemented
        return Quat(
            jnp.divide(self.w, other),
            jnp.divide(self.x, other),
            jnp.divide(self.y, other),
            jnp.divide(self.z, other),
        )

    def equals(self, other: "Quat") -> Array:
        """Exact component-wise comparison as a traceable boolean array."""
        return (
            jnp.all(self.w == other.w)
            & jnp.all(self.x == other.x)
            & jnp.all(self.y == other.y)
            & jnp.all(self.z == other.z)
        )

    def __eq__(self, other):
        if not isinstance(other, Quat):
            return NotImplemented
        return bool(self.equals(other))

    def _hamilton(self, b: "Quat") -> "Quat":
        a = self
        return Quat(
            a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
            a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
            a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
            a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
        )

    def rotate(self, v: Vec) -> Vec:
        """
        Compute q * (0, v) * conj(q) and return its vector part.

        This is a rigid rotation only when the quaternion has unit length.
        """
        return (self._hamilton(Quat.from_vec(v))._hamilton(self.conj())).vec

    # Products and lengths
    def dot(self, other: "Quat") -> Scalar:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def conj(self) -> "Quat":
        """
        Quaternion conjugate.

        For a unit quaternion this is the reverse rotation.
        """
        return Quat(self.w, -self.x, -self.y, -self.z)

    def norm(self) -> Array:
        return jnp.sqrt(self.w ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2)

    def unit(self) -> "Quat":
        """Unit quaternion colinear with this one. NaN when the norm is zero."""
        return self / self.norm()


def slerp(a: Quat, b: Quat, t: Scalar) -> Quat:
    """
    Spherical linear interpolation from *a* (t=0) to *b* (t=1).

    Takes the shorter arc. Nearly parallel inputs use normalized linear
    interpolation, since sin(theta0) vanishes there. That fallback moves from
    *a* toward *b*, a + (b - a) * t, and always returns a unit quaternion.
    Both branches are evaluated and selected with jnp.where so the function
    stays JIT-able.

    Args:
        a: start quaternion
        b: end quaternion
        t: interpolation parameter, values outside [0, 1] extrapolate

    Returns:
        Interpolated quaternion
    """
    d = a.dot(b)

    # q and -q are the same rotation
    flip = d < 0
    b = jax.tree_util.tree_map(lambda c: jnp.where(flip, -c, c), b)
    d = jnp.where(flip, -d, d)

    nearly_parallel = d > SLERP_DOT_THRESHOLD

    theta0 = jnp.arccos(jnp.clip(d, -1.0, 1.0))
    theta = theta0 * t
    sin_theta0 = jnp.where(nearly_parallel, 1.0, jnp.sin(theta0))

    s1 = jnp.sin(theta) / sin_theta0
    s0 = jnp.cos(theta) - d * s1
    spherical = a * s0 + b * s1

    linear = (a + (b - a) * t).unit()

    return jax.tree_util.tree_map(
        lambda lin, sph: jnp.where(nearly_parallel, lin, sph), linear, spherical
    )
