"""Forward kinematics and Jacobian computation for serial chains.

Link poses are accumulated as Transf compositions inside `jax.lax.scan`, and
the Jacobian comes from JAX automatic differentiation through that scan.
"""

from typing import Dict

import jax
import jax.numpy as jnp
from jax import Array

from .core import SerialChain
from .transforms import Quat, Transf, Vec, index


def forward_kinematics(chain: SerialChain, q: Array) -> Dict[str, Transf]:
    """Compute forward kinematics for all links in the chain.

    Args:
        chain: SerialChain describing the kinematic structure
        q: Joint angles array of shape (num_links,)

    Returns:
        Dictionary mapping link names to their world poses
    """
    world_transforms = forward_kinematics_world(chain, q)
    return {name: index(world_transforms, i) for i, name in enumerate(chain.link_names)}


def forward_kinematics_world(chain: SerialChain, q: Array) -> Transf:
    """Internal FK function returning the batched world transforms.

    Args:
        chain: SerialChain describing the kinematic structure
        q: Joint angles array of shape (num_links,)

    Returns:
        Transf whose leaves have shape (num_links,), one world pose per link
    """
    q = jnp.asarray(q, dtype=jnp.float64)
    if q.shape != (chain.num_links,):
        raise ValueError(f"Expected joint angles of shape ({chain.num_links},), got {q.shape}")

    # The carry starts at the world frame
    world = jax.tree_util.tree_map(lambda leaf: jnp.asarray(leaf, dtype=q.dtype), Transf.identity())

    def scan_body(carry: Transf, link):
        """Processes one link using its parent's world pose from `carry`."""
        offset, axis, angle = link
        joint_motion = Transf.from_rotation(Quat.from_axis_angle(angle, axis))
        world_to_child = carry + offset + joint_motion
        return world_to_child, world_to_child

    _, world_transforms = jax.lax.scan(scan_body, world, (chain.offsets, chain.axes, q))
    return world_transforms


def link_index(chain: SerialChain, link_name: str) -> int:
    try:
        return chain.link_names.index(link_name)
    except ValueError:
        raise ValueError(f"Link '{link_name}' not found in chain")


def position_jacobian(chain: SerialChain, q: Array, link_name: str) -> Array:
    """Compute the positional Jacobian of a link origin w.r.t. joint angles.

    Args:
        chain: SerialChain describing the kinematic structure
        q: Joint angles array of shape (num_links,)
        link_name: Name of the target link

    Returns:
        3x(num_links) Jacobian matrix relating joint velocities to the linear
        velocity of the link origin
    """
    link_idx = link_index(chain, link_name)

    def link_position(joint_angles: Array) -> Array:
        world_transforms = forward_kinematics_world(chain, joint_angles)
        return index(world_transforms.v, link_idx).to_array()

    J = jax.jacrev(link_position)(jnp.asarray(q, dtype=jnp.float64))  # (3, num_links)
    # Replace NaNs/Infs with 0 so downstream math stays finite
    return jnp.nan_to_num(J, nan=0.0, posinf=0.0, neginf=0.0)
