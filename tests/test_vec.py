"""Tests for the Vec value type."""

import hypothesis
import jax
import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_spatial.transforms import Vec, cross, dot, norm, unit

# Use hypothesis profile for CI
hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)

finite = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False)
vecs = st.builds(Vec, finite, finite, finite)


# Basic tests
def test_default_is_zero():
    """Test the default constructor gives the zero vector."""
    assert Vec() == Vec(0, 0, 0)


def test_add_sub_neg():
    """Test component-wise addition, subtraction and negation."""
    assert Vec(1, 0, 0) + Vec(0, 1, 0) == Vec(1, 1, 0)
    assert Vec(1, 2, 3) - Vec(3, 2, 1) == Vec(-2, 0, 2)
    assert -Vec(1, -2, 3) == Vec(-1, 2, -3)


def test_cross_basis():
    """Test the cross product follows the right-hand rule."""
    assert cross(Vec(1, 0, 0), Vec(0, 1, 0)) == Vec(0, 0, 1)
    assert cross(Vec(0, 1, 0), Vec(0, 0, 1)) == Vec(1, 0, 0)
    assert Vec(0, 0, 1) ^ Vec(1, 0, 0) == Vec(0, 1, 0)


def test_dot():
    """Test the dot product."""
    assert dot(Vec(1, 2, 3), Vec(4, -5, 6)) == 12


def test_scale_and_divide():
    """Test scaling in both operand orders and division."""
    assert Vec(1, 2, 3) * 2 == Vec(2, 4, 6)
    assert 2 * Vec(1, 2, 3) == Vec(2, 4, 6)
    assert Vec(2, 4, 6) / 2 == Vec(1, 2, 3)


def test_divide_by_zero_propagates_ieee():
    """Test division by zero gives inf/nan instead of raising."""
    v = Vec(1.0, -1.0, 0.0) / 0
    assert jnp.isposinf(v.x)
    assert jnp.isneginf(v.y)
    assert jnp.isnan(v.z)


def test_norm_and_unit():
    """Test the Euclidean norm and normalization."""
    assert norm(Vec(3, 4, 0)) == 5
    np.testing.assert_allclose(unit(Vec(0, 3, 4)).to_array(), [0.0, 0.6, 0.8], rtol=1e-12)


def test_unit_of_zero_is_nan():
    """Test normalizing the zero vector propagates NaN."""
    assert jnp.isnan(unit(Vec()).to_array()).all()


def test_round_ties_to_even():
    """Test rounding to the nearest integral value."""
    assert round(Vec(0.4, 1.6, -2.2)) == Vec(0, 2, -2)
    assert round(Vec(0.5, 1.5, -2.5)) == Vec(0, 2, -2)


def test_equality_is_exact():
    """Test equality does not apply a tolerance."""
    assert Vec(0.1 + 0.2, 0, 0) != Vec(0.3, 0, 0)
    assert Vec(1, 2, 3) != Vec(1, 2, 3 + 1e-12)


def test_unsupported_operands():
    """Test undefined operand combinations raise TypeError."""
    with pytest.raises(TypeError):
        Vec(1, 2, 3) * Vec(1, 2, 3)
    with pytest.raises(TypeError):
        Vec(1, 2, 3) + 1.0


def test_array_roundtrip():
    """Test conversion to and from (..., 3) arrays."""
    arr = jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    v = Vec.from_array(arr)
    np.testing.assert_array_equal(v.x, [1.0, 4.0])
    np.testing.assert_array_equal(v.to_array(), arr)

    with pytest.raises(ValueError, match="shape"):
        Vec.from_array(jnp.zeros(4))


# Batched and JAX transformation tests
def test_batched_cross():
    """Test the cross product broadcasts over a batch axis."""
    a = Vec.from_array(jnp.tile(jnp.array([1.0, 0.0, 0.0]), (5, 1)))
    b = Vec.from_array(jnp.tile(jnp.array([0.0, 1.0, 0.0]), (5, 1)))
    c = a ^ b
    np.testing.assert_array_equal(c.to_array(), jnp.tile(jnp.array([0.0, 0.0, 1.0]), (5, 1)))


def test_norm_grad():
    """Test gradients flow through Vec pytrees."""
    g = jax.grad(norm)(Vec(jnp.array(3.0), jnp.array(4.0), jnp.array(0.0)))
    assert isinstance(g, Vec)
    np.testing.assert_allclose(g.to_array(), [0.6, 0.8, 0.0], rtol=1e-12)


def test_cross_jit():
    """Test cross product under JIT."""
    c = jax.jit(cross)(Vec(1.0, 0.0, 0.0), Vec(0.0, 1.0, 0.0))
    assert c == Vec(0, 0, 1)


def test_equals_jit_vmap():
    """Test exact comparison is traceable under JIT and vmap."""
    a, b = Vec(1.0, 2.0, 3.0), Vec(1.0, 2.0, 3.0 + 1e-12)
    equals = jax.jit(lambda u, w: u.equals(w))
    assert bool(equals(a, a))
    assert not bool(equals(a, b))

    batch_a = Vec.from_array(jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]))
    batch_b = Vec.from_array(jnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 7.0]]))
    np.testing.assert_array_equal(jax.vmap(Vec.equals)(batch_a, batch_b), [True, False])
    assert not batch_a.equals(batch_b)


# Property-based tests with hypothesis
@given(vecs, vecs)
@settings(deadline=None)
def test_cross_anticommutative(a, b):
    """Test cross(a, b) == -cross(b, a)."""
    assert cross(a, b) == -cross(b, a)


@given(vecs, vecs)
@settings(deadline=None)
def test_dot_symmetric(a, b):
    """Test dot(a, b) == dot(b, a)."""
    assert dot(a, b) == dot(b, a)


@given(vecs, vecs)
@settings(deadline=None)
def test_cross_orthogonal(a, b):
    """Test the cross product is orthogonal to both operands."""
    c = cross(a, b)
    tol = 1e-12 * (1.0 + float(norm(a))) ** 2 * (1.0 + float(norm(b)))
    assert abs(float(dot(c, a))) <= tol
    assert abs(float(dot(c, b))) <= 1e-12 * (1.0 + float(norm(b))) ** 2 * (1.0 + float(norm(a)))


@given(vecs)
@settings(deadline=None)
def test_unit_has_norm_one(a):
    """Test norm(unit(a)) is one for non-zero vectors."""
    hypothesis.assume(float(norm(a)) > 1e-3)
    np.testing.assert_allclose(norm(unit(a)), 1.0, rtol=1e-12)
