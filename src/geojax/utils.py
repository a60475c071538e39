"""Shared angle helpers."""

from jax import Array
import jax.numpy as jnp
from jax.typing import ArrayLike


def wrap_longitude(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Wrap a longitude into the half-open interval ``[-180, 180)``.

    Args:
        angle (ArrayLike): Longitude in *rad* (or *deg*).
        use_degrees (bool): If ``True``, ``angle`` is in degrees.

    Returns:
        Wrapped longitude in the input unit.
    """
    half_turn = 180.0 if use_degrees else jnp.pi
    return jnp.mod(jnp.asarray(angle) + half_turn, 2.0 * half_turn) - half_turn
