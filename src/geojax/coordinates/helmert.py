"""Seven-parameter Helmert transformation of ECEF coordinates.

Datum rotations and scale changes are sub-arc-second and sub-ppm, so the
similarity transform is applied in its linearized (small-angle) form:

.. math::

    \\begin{bmatrix} x' \\\\ y' \\\\ z' \\end{bmatrix} =
    \\begin{bmatrix} t_x \\\\ t_y \\\\ t_z \\end{bmatrix} +
    \\begin{bmatrix} 1+s & -r_z & r_y \\\\
                     r_z & 1+s & -r_x \\\\
                     -r_y & r_x & 1+s \\end{bmatrix}
    \\begin{bmatrix} x \\\\ y \\\\ z \\end{bmatrix}

The matching inverse negates every parameter, which is exact only to first
order.  A forward/inverse pair leaves a residual of ``-M t - M^2 x``,
where ``M`` holds the rotation and scale terms; for the packaged datums it
is dominated by ``s |t|`` and stays at the centimetre level.  Datum
parameter sets are published against this linearization, so neither side
is replaced by an exact rotation matrix.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geojax.config import get_dtype
from geojax.constants import AS2RAD, PPM2RATIO
from geojax.datums import RotationSpec, Transformation, Translation


def helmert_transform(x_ecef: ArrayLike, transformation: Transformation) -> Array:
    """Apply a linearized Helmert transformation to ECEF coordinates.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*, or a batch ``(..., 3)``.
        transformation: Translation [m], rotations [arc-seconds] and scale
            [ppm].

    Returns:
        jax.Array: Transformed ECEF position ``[x, y, z]`` in *m*.

    Examples:
        ```python
        import jax.numpy as jnp
        from geojax.coordinates import helmert_transform
        from geojax.datums import get_datum
        r = jnp.array([3980581.210, -111.159, 4966824.522])
        r_osgb = helmert_transform(r, get_datum("OSGB36").transform)
        ```
    """
    _float = get_dtype()
    x_ecef = jnp.asarray(x_ecef, dtype=_float)

    x1 = x_ecef[..., 0]
    y1 = x_ecef[..., 1]
    z1 = x_ecef[..., 2]

    tx, ty, tz = transformation.translation
    rotation = transformation.rotation

    rx = rotation.rx * AS2RAD
    ry = rotation.ry * AS2RAD
    rz = rotation.rz * AS2RAD
    s1 = 1.0 + rotation.scale * PPM2RATIO

    x2 = tx + x1 * s1 - y1 * rz + z1 * ry
    y2 = ty + x1 * rz + y1 * s1 - z1 * rx
    z2 = tz - x1 * ry + y1 * rx + z1 * s1

    return jnp.stack([x2, y2, z2], axis=-1)


def helmert_inverse(transformation: Transformation) -> Transformation:
    """Return the first-order inverse of a Helmert transformation.

    Every translation, rotation and scale component is negated.  This is
    not the matrix inverse of the linearized transform; composing the two
    recovers the input only to second order in the rotation and scale.

    Args:
        transformation: Parameters to invert.

    Returns:
        Transformation: New parameter set with every component negated.
    """
    t = transformation.translation
    r = transformation.rotation
    return Transformation(
        Translation(-t.x, -t.y, -t.z),
        RotationSpec(-r.rx, -r.ry, -r.rz, -r.scale),
    )
