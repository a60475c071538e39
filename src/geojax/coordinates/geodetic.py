"""Geodetic (ellipsoidal) coordinate transformations.

Converts between geodetic coordinates ``[longitude, latitude, altitude]``
and Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates ``[x, y, z]``
on any reference ellipsoid (WGS84 by default).

Both directions are closed-form.  The inverse uses Bowring's 1985
formulation through the parametric latitude, which gives micrometre
precision for terrestrial heights without iteration.

All inputs and outputs use SI base units (metres, radians).  Inputs may be
a single ``(3,)`` vector or a batch of shape ``(..., 3)``.

References:
    1. B. R. Bowring, *The accuracy of geodetic latitude and height
       equations*, Survey Review 28(218), 1985.
    2. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geojax.config import get_dtype
from geojax.datums import WGS84_ELLIPSOID, Ellipsoid


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    use_degrees: bool = False,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID,
) -> Array:
    """Convert geodetic position to ECEF Cartesian coordinates.

    Uses the prime vertical radius of curvature of *ellipsoid*:

    .. math::

        \\nu = \\frac{a}{\\sqrt{1 - e^2 \\sin^2 \\phi}}

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]``.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            altitude in *m* above the ellipsoid.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.
        ellipsoid: Reference ellipsoid.  Static under ``jax.jit``.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.

    Example:
        >>> import jax.numpy as jnp
        >>> from geojax.coordinates import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        >>> float(x_ecef[0])  # semi-major axis on the equator
        6378137.0
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    lon = x_geod[..., 0]
    lat = x_geod[..., 1]
    alt = x_geod[..., 2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    e2 = ellipsoid.e2
    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    nu = ellipsoid.a / jnp.sqrt(1.0 - e2 * sin_lat * sin_lat)

    x = (nu + alt) * cos_lat * jnp.cos(lon)
    y = (nu + alt) * cos_lat * jnp.sin(lon)
    z = (nu * (1.0 - e2) + alt) * sin_lat

    return jnp.stack([x, y, z], axis=-1)


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    use_degrees: bool = False,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID,
) -> Array:
    """Convert ECEF Cartesian coordinates to geodetic position.

    Bowring's closed form: the parametric latitude ``beta`` is estimated
    from ``tan(beta) = (b z)/(a p) (1 + e'^2 b / R)`` and the geodetic
    latitude follows in one step,

    .. math::

        \\phi = \\operatorname{atan2}(z + e'^2 b \\sin^3\\beta,\\;
                                     p - e^2 a \\cos^3\\beta)

    Points on the polar axis (``p = 0``) have no defined parametric
    latitude; they are assigned ``lat = +/-90 deg`` by the sign of ``z``
    (``0`` at the geocentre) and height ``|z| - b``.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.
        use_degrees: If ``True``, return longitude and latitude in degrees.
        ellipsoid: Reference ellipsoid.  Static under ``jax.jit``.

    Returns:
        jax.Array: Geodetic coordinates ``[lon, lat, alt]``.
            Longitude and latitude in *rad* (or *deg*), altitude in *m*
            above the ellipsoid.

    Example:
        >>> import jax.numpy as jnp
        >>> from geojax.coordinates import position_ecef_to_geodetic
        >>> geod = position_ecef_to_geodetic(jnp.array([6378137.0, 0.0, 0.0]))
        >>> float(geod[2])  # altitude
        0.0
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())

    x = x_ecef[..., 0]
    y = x_ecef[..., 1]
    z = x_ecef[..., 2]

    a = ellipsoid.a
    b = ellipsoid.b
    e2 = ellipsoid.e2
    ep2 = ellipsoid.ep2

    p = jnp.sqrt(x * x + y * y)  # distance from minor axis
    R = jnp.sqrt(p * p + z * z)  # polar radius

    on_axis = p == 0.0
    p_safe = jnp.where(on_axis, 1.0, p)
    R_safe = jnp.where(R == 0.0, 1.0, R)

    # parametric latitude (Bowring eqn 17)
    tan_beta = (b * z) / (a * p_safe) * (1.0 + ep2 * b / R_safe)
    cos_beta = 1.0 / jnp.sqrt(1.0 + tan_beta * tan_beta)
    sin_beta = tan_beta * cos_beta

    # geodetic latitude (Bowring eqn 18)
    lat = jnp.arctan2(
        z + ep2 * b * sin_beta**3,
        p - e2 * a * cos_beta**3,
    )
    lat = jnp.where(on_axis, jnp.sign(z) * (jnp.pi / 2.0), lat)

    lon = jnp.arctan2(y, x)

    # height above ellipsoid (Bowring eqn 7)
    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    nu = a / jnp.sqrt(1.0 - e2 * sin_lat * sin_lat)
    alt = p * cos_lat + z * sin_lat - (a * a / nu)

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return jnp.stack([lon, lat, alt], axis=-1)
