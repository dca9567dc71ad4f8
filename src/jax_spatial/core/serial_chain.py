"""SerialChain PyTree data structure for JAX-native kinematic chains.

This module defines the data structure for an unbranched chain of revolute
joints in a stateless, immutable format that is fully compatible with JAX
transformations.
"""

import logging
from typing import Sequence, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from ..transforms import Transf, Vec, stack

logger = logging.getLogger(__name__)


@struct.dataclass
class SerialChain:
    """Immutable PyTree representation of a serial kinematic chain.

    Link i hangs off link i-1 (the world frame for i = 0) through the fixed
    transform offsets[i] followed by a rotation of q[i] radians around
    axes[i].

    Attributes:
        link_names: Tuple of all link names. Index corresponds to link ID.
                    Marked as a static field for JIT compilation.
        offsets: Transf batched over links, leaves of shape (num_links,).
                 Fixed transform from the previous link to the joint frame.
        axes: Vec batched over links, leaves of shape (num_links,).
              Joint rotation axis expressed in the joint frame.
    """
    link_names: Tuple[str, ...] = struct.field(pytree_node=False)
    offsets: Transf
    axes: Vec

    @classmethod
    def from_links(
        cls,
        link_names: Sequence[str],
        offsets: Sequence[Transf],
        axes: Sequence[Vec],
    ) -> "SerialChain":
        """Build a chain from per-link offsets and joint axes."""
        link_names = tuple(link_names)
        if not link_names:
            raise ValueError("A serial chain needs at least one link")
        if not (len(link_names) == len(offsets) == len(axes)):
            raise ValueError(
                f"Expected one offset and one axis per link, got {len(link_names)} links, "
                f"{len(offsets)} offsets and {len(axes)} axes"
            )
        if len(set(link_names)) != len(link_names):
            raise ValueError(f"Link names must be unique, got {link_names}")

        def as_float(leaf):
            return jnp.asarray(leaf, dtype=jnp.float64)

        chain = cls(
            link_names=link_names,
            offsets=jax.tree_util.tree_map(as_float, stack(list(offsets))),
            axes=jax.tree_util.tree_map(as_float, stack(list(axes))),
        )
        logger.debug("Built serial chain with %d links: %s", chain.num_links, link_names)
        return chain

    @property
    def num_links(self) -> int:
        return len(self.link_names)
