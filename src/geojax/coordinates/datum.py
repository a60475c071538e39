"""Datum-to-datum conversion of geodetic coordinates.

Every packaged datum carries a single Helmert transformation relative to
WGS84, so conversions are routed through WGS84:

- from WGS84: apply the target datum's transformation,
- to WGS84: apply the first-order inverse of the source datum's
  transformation,
- between two other datums: convert to WGS84 first, then apply the target
  datum's transformation.

Each leg is geodetic -> ECEF on the source ellipsoid, Helmert, then
ECEF -> geodetic on the target ellipsoid.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geojax.config import get_dtype
from geojax.coordinates.geodetic import (
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from geojax.coordinates.helmert import helmert_inverse, helmert_transform
from geojax.datums import REFERENCE_DATUM, Datum, Transformation


def datum_transform(from_datum: Datum, to_datum: Datum) -> Transformation | None:
    """Select the direct Helmert transformation between two datums.

    Args:
        from_datum: Source datum.
        to_datum: Target datum.

    Returns:
        Transformation | None: The transformation taking ECEF coordinates
            of *from_datum* into *to_datum*, or ``None`` when neither datum
            is the WGS84 reference and the conversion must be routed
            through it.
    """
    if from_datum.is_reference:
        return to_datum.transform
    if to_datum.is_reference:
        return helmert_inverse(from_datum.transform)
    return None


def position_convert_datum(
    x_geod: ArrayLike,
    from_datum: Datum,
    to_datum: Datum,
    use_degrees: bool = False,
) -> Array:
    """Convert geodetic coordinates from one datum to another.

    When *from_datum* equals *to_datum* the coordinates are returned
    unchanged.  Otherwise the conversion costs one or two Helmert legs;
    routing through WGS84 adds a second leg's linearization error.

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]`` on *from_datum*.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            altitude in *m* above the source ellipsoid.
        from_datum: Datum the input is expressed in.  Static under
            ``jax.jit``.
        to_datum: Datum to convert to.  Static under ``jax.jit``.
        use_degrees: If ``True``, longitude and latitude are in degrees on
            input and output.

    Returns:
        jax.Array: Geodetic coordinates ``[lon, lat, alt]`` on *to_datum*.

    Examples:
        ```python
        import jax.numpy as jnp
        from geojax.coordinates import position_convert_datum
        from geojax.datums import get_datum
        x = jnp.array([-0.0016, 51.4778, 0.0])
        x_osgb = position_convert_datum(
            x, get_datum("WGS84"), get_datum("OSGB36"), use_degrees=True
        )
        ```
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    if from_datum == to_datum:
        return x_geod

    source = from_datum
    transform = datum_transform(from_datum, to_datum)
    if transform is None:
        x_geod = position_convert_datum(x_geod, from_datum, REFERENCE_DATUM, use_degrees)
        source = REFERENCE_DATUM
        transform = to_datum.transform

    x_ecef = position_geodetic_to_ecef(x_geod, use_degrees, source.ellipsoid)
    x_ecef = helmert_transform(x_ecef, transform)
    return position_ecef_to_geodetic(x_ecef, use_degrees, to_datum.ellipsoid)
