import jax.numpy as jnp
import pytest

from geojax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches precision inside its tests; this fixture puts
    every other test back on float64 regardless of execution order.
    """
    set_dtype(jnp.float64)
