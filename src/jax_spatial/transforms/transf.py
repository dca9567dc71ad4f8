"""Rigid transforms (translation + rotation) built from Vec and Quat."""

from __future__ import annotations

from flax import struct

from .quat import Quat
from .vec import Vec


@struct.dataclass
class Transf:
    """
    Immutable rigid transform: rotate by `q`, then translate by `v`.

    `a + p` maps a point, `a + b` composes (apply *b* first, then *a*).
    `t + t.conj()` is the identity up to rounding.
    """
    v: Vec = struct.field(default_factory=Vec)
    q: Quat = struct.field(default_factory=Quat)

    # Constructors
    @classmethod
    def identity(cls) -> "Transf":
        return cls(Vec(), Quat())

    @classmethod
    def from_translation(cls, v: Vec) -> "Transf":
        return cls(v, Quat())

    @classmethod
    def from_rotation(cls, q: Quat) -> "Transf":
        return cls(Vec(), q)

    # Basic operations
    def compose(self, other: "Transf") -> "Transf":
        """Self ∘ other (apply *other* first, then self)."""
        return Transf(self.v + self.q * other.v, self.q * other.q)

    def apply(self, p: Vec) -> Vec:
        """Map point *p*: rotate, then translate."""
        return self.v + self.q * p

    def conj(self) -> "Transf":
        """
        Inverse transform, `self + self.conj()` is the identity.

        Exact for unit rotations up to floating point rounding.
        """
        q = self.q.conj()
        return Transf(q * (-self.v), q)

    inverse = conj

    def __add__(self, other):
        if isinstance(other, Transf):
            return self.compose(other)
        if isinstance(other, Vec):
            return self.apply(other)
        return NotImplemented

    def equals(self, other: "Transf"):
        """Exact comparison as a traceable boolean array."""
        return self.v.equals(other.v) & self.q.equals(other.q)

    def __eq__(self, other):
        if not isinstance(other, Transf):
            return NotImplemented
        return bool(self.equals(other))
