"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout geojax.  The default is ``jnp.float64``: the UTM projection is
accurate to nanometres and datum shifts are sub-millimetre, neither of
which survives float32 arithmetic on ~6.4e6 m magnitudes.  Importing this
module therefore enables JAX's 64-bit mode (``jax_enable_x64``).

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

jax.config.update("jax_enable_x64", True)
_dtype = jnp.float64


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for geojax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.  Under JIT, ``get_dtype()`` runs
    during tracing and its value is baked into the compiled program.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is (re-)enabled via
    ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    if dtype != _dtype:
        logger.info("geojax float dtype set to %s", jnp.dtype(dtype).name)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_iteration_tolerance() -> float:
    """Return the dtype-adaptive convergence threshold for Newton iterations.

    Used by the inverse UTM projection when recovering ``tan(lat)`` from
    the conformal latitude.  The threshold scales with the precision of the
    configured float dtype:

    - ``float64``:  1e-12
    - ``float32``:  1e-6
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Absolute convergence threshold on ``tan(lat)``.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-6
    # float16 and bfloat16
    return 1e-3


def get_angle_tolerance() -> float:
    """Return the dtype-adaptive tolerance for angle comparisons in degrees.

    - ``float64``:  1e-9 deg (~0.1 mm on the ground)
    - ``float32``:  1e-4 deg (~10 m)
    - ``float16``:  1e-1 deg
    - ``bfloat16``: 1e-1 deg

    Returns:
        float: Tolerance in degrees.
    """
    if _dtype == jnp.float64:
        return 1e-9
    if _dtype == jnp.float32:
        return 1e-4
    # float16 and bfloat16
    return 1e-1
