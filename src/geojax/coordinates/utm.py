"""Universal Transverse Mercator (UTM) projection.

Implements Karney's transverse Mercator method with the Krüger series
carried to sixth order in the third flattening ``n``, which is accurate to
5 nm within 3900 km of the central meridian.

The module is split the same way as the other coordinate transforms:

- :func:`utm_zone` is plain Python and resolves the zone number, MGRS
  latitude band and central meridian of a point, including the
  Norway/Svalbard exceptions.  It validates its input and raises.
- :func:`position_geodetic_to_utm` and :func:`position_utm_to_geodetic` are
  the JAX-traceable projection kernels for a given central meridian.  They
  work on grid coordinates relative to the true origin (no false easting
  or northing), return grid convergence and point scale alongside the
  coordinates, and never raise.

References:
    1. C. F. F. Karney, *Transverse Mercator with an accuracy of a few
       nanometers*, J. Geodesy 85(8), 475-485, 2011.
    2. NGA Standardization Document NGA.SIG.0012, *The Universal Grids*,
       2014.
"""

from __future__ import annotations

import logging
import math

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geojax.config import get_dtype, get_iteration_tolerance
from geojax.constants import (
    MGRS_LAT_BANDS,
    UTM_K0,
    UTM_LAT_MAX,
    UTM_LAT_MIN,
    UTM_ZONE_WIDTH,
)
from geojax.datums import WGS84_ELLIPSOID, Ellipsoid
from geojax.exceptions import OutOfRangeError
from geojax.utils import wrap_longitude

logger = logging.getLogger(__name__)

# Newton iterations allowed when recovering tan(lat) from the conformal
# latitude.  Convergence is quadratic; four steps reach float64 precision.
_MAX_TAU_ITERATIONS = 10

# (zone, band) -> longitude at which the zone splits.  Points west of the
# split move one zone west, points east of it one zone east; "None" keeps
# the western half in place (Norway, 31V).
_ZONE_EXCEPTIONS = {
    (31, "V"): (3.0, None, 1),
    (32, "X"): (9.0, -1, 1),
    (34, "X"): (21.0, -1, 1),
    (36, "X"): (33.0, -1, 1),
}


def central_meridian(zone: int) -> float:
    """Longitude of the central meridian of a regular UTM zone [deg].

    Args:
        zone: UTM zone number, 1-60.

    Returns:
        float: Central meridian in degrees.

    Raises:
        OutOfRangeError: If *zone* is outside ``1..60``.
    """
    if not 1 <= zone <= 60:
        raise OutOfRangeError(f"UTM zone must be in 1..60, got {zone}")
    return (zone - 1) * UTM_ZONE_WIDTH - 180.0 + UTM_ZONE_WIDTH / 2.0


def latitude_band(lat: float) -> str:
    """MGRS latitude band letter for a latitude in degrees.

    Args:
        lat: Geodetic latitude [deg].

    Returns:
        str: Band letter ``C``..``X`` (``X`` covers 72-84N).

    Raises:
        OutOfRangeError: If *lat* is outside the UTM limits.
    """
    if not UTM_LAT_MIN <= lat <= UTM_LAT_MAX:
        raise OutOfRangeError(
            f"Latitude {lat} deg is outside UTM limits "
            f"[{UTM_LAT_MIN}, {UTM_LAT_MAX}]"
        )
    return MGRS_LAT_BANDS[math.floor(lat / 8.0 + 10.0)]


def utm_zone(lat: float, lon: float) -> tuple[int, str, float]:
    """Resolve the UTM zone, latitude band and central meridian of a point.

    The regular 6 deg grid is overridden for south-west Norway (zone 32
    widened over 31V east of 3E) and for Svalbard (zones 32X, 34X and 36X
    removed and their halves given to the neighbouring odd zones).

    Args:
        lat: Geodetic latitude [deg], within ``[-80, 84]``.
        lon: Longitude [deg]; wrapped into ``[-180, 180)``.

    Returns:
        tuple[int, str, float]: Zone number, band letter, and central
            meridian of the (possibly adjusted) zone in degrees.

    Raises:
        OutOfRangeError: If *lat* is outside the UTM limits.

    Examples:
        ```python
        from geojax.coordinates import utm_zone
        utm_zone(61.0, 4.0)  # (32, 'V', 9.0)
        ```
    """
    band = latitude_band(lat)
    lon = (lon + 180.0) % 360.0 - 180.0

    zone = math.floor((lon + 180.0) / UTM_ZONE_WIDTH) + 1
    cm = central_meridian(zone)

    exception = _ZONE_EXCEPTIONS.get((zone, band))
    if exception is not None:
        split, west_shift, east_shift = exception
        shift = east_shift if lon >= split else west_shift
        if shift is not None:
            logger.debug(
                "Zone %d%s exception at lon %.6f: moved to zone %d",
                zone,
                band,
                lon,
                zone + shift,
            )
            zone += shift
            cm += shift * UTM_ZONE_WIDTH

    return zone, band, cm


def _krueger_alpha(n: float) -> tuple[float, ...]:
    """Forward Krüger series coefficients alpha_1..alpha_6 (Karney 2011 Eq 35)."""
    n2 = n * n
    n3 = n * n2
    n4 = n * n3
    n5 = n * n4
    n6 = n * n5
    return (
        1 / 2 * n - 2 / 3 * n2 + 5 / 16 * n3 + 41 / 180 * n4
        - 127 / 288 * n5 + 7891 / 37800 * n6,
        13 / 48 * n2 - 3 / 5 * n3 + 557 / 1440 * n4
        + 281 / 630 * n5 - 1983433 / 1935360 * n6,
        61 / 240 * n3 - 103 / 140 * n4 + 15061 / 26880 * n5
        + 167603 / 181440 * n6,
        49561 / 161280 * n4 - 179 / 168 * n5 + 6601661 / 7257600 * n6,
        34729 / 80640 * n5 - 3418889 / 1995840 * n6,
        212378941 / 319334400 * n6,
    )


def _krueger_beta(n: float) -> tuple[float, ...]:
    """Inverse Krüger series coefficients beta_1..beta_6 (Karney 2011 Eq 36)."""
    n2 = n * n
    n3 = n * n2
    n4 = n * n3
    n5 = n * n4
    n6 = n * n5
    return (
        1 / 2 * n - 2 / 3 * n2 + 37 / 96 * n3 - 1 / 360 * n4
        - 81 / 512 * n5 + 96199 / 604800 * n6,
        1 / 48 * n2 + 1 / 15 * n3 - 437 / 1440 * n4
        + 46 / 105 * n5 - 1118711 / 3870720 * n6,
        17 / 480 * n3 - 37 / 840 * n4 - 209 / 4480 * n5 + 5569 / 90720 * n6,
        4397 / 161280 * n4 - 11 / 504 * n5 - 830251 / 7257600 * n6,
        4583 / 161280 * n5 - 108847 / 3991680 * n6,
        20648693 / 638668800 * n6,
    )


def _rectifying_radius(ellipsoid: Ellipsoid) -> float:
    """Radius A of the rectifying sphere; 2*pi*A is the meridian length."""
    n = ellipsoid.n
    n2 = n * n
    return ellipsoid.a / (1.0 + n) * (1.0 + n2 / 4.0 + n2 * n2 / 64.0 + n2**3 / 256.0)


def _tau_prime(tau: Array, e: float) -> Array:
    """Conformal-sphere tan(lat') for geodetic tan(lat) (Karney 2011 Eq 7-9)."""
    sigma = jnp.sinh(e * jnp.arctanh(e * tau / jnp.sqrt(1.0 + tau * tau)))
    return tau * jnp.sqrt(1.0 + sigma * sigma) - sigma * jnp.sqrt(1.0 + tau * tau)


def position_geodetic_to_utm(
    x_geod: ArrayLike,
    central_meridian: ArrayLike,
    use_degrees: bool = False,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID,
) -> Array:
    """Project geodetic coordinates onto a transverse Mercator grid.

    Karney 2011 Eq 7-14 for the conformal sphere and Gauss-Schreiber
    coordinates, Eq 11-12 for the Krüger series, Eq 23-25 for convergence
    and scale.  The grid scale on the central meridian is ``k0 = 0.9996``.

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]`` (altitude ignored)
            or ``[lon, lat]``, or a batch of either.  Angles in *rad* (or
            *deg* if ``use_degrees=True``).
        central_meridian: Longitude of the zone's central meridian in *rad*
            (or *deg*).
        use_degrees: If ``True``, angles are in degrees on input and the
            returned convergence is in degrees.
        ellipsoid: Reference ellipsoid.  Static under ``jax.jit``.

    Returns:
        jax.Array: ``[x, y, convergence, scale]`` where ``x`` and ``y`` are
            grid easting and northing in *m* relative to the central
            meridian and the equator (no false origin), ``convergence`` is
            the grid convergence in *rad* (or *deg*), and ``scale`` is the
            point scale factor.

    Examples:
        ```python
        import jax.numpy as jnp
        from geojax.coordinates import position_geodetic_to_utm
        x = jnp.array([19.51728, 47.51292])
        utm = position_geodetic_to_utm(x, 21.0, use_degrees=True)
        ```
    """
    _float = get_dtype()
    x_geod = jnp.asarray(x_geod, dtype=_float)

    lon = x_geod[..., 0]
    lat = x_geod[..., 1]
    lon0 = jnp.asarray(central_meridian, dtype=_float)

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)
        lon0 = jnp.deg2rad(lon0)

    lam = wrap_longitude(lon - lon0)

    e = ellipsoid.e
    A = _rectifying_radius(ellipsoid)
    alpha = jnp.asarray(_krueger_alpha(ellipsoid.n), dtype=_float)
    two_j = 2.0 * jnp.arange(1, 7, dtype=_float)

    cos_lam = jnp.cos(lam)
    sin_lam = jnp.sin(lam)

    tau = jnp.tan(lat)
    tau_p = _tau_prime(tau, e)

    xi_p = jnp.arctan2(tau_p, cos_lam)
    eta_p = jnp.arcsinh(sin_lam / jnp.sqrt(tau_p * tau_p + cos_lam * cos_lam))

    xi_j = two_j * xi_p[..., None]
    eta_j = two_j * eta_p[..., None]
    sin_xi_j = jnp.sin(xi_j)
    cos_xi_j = jnp.cos(xi_j)
    cosh_eta_j = jnp.cosh(eta_j)
    sinh_eta_j = jnp.sinh(eta_j)

    xi = xi_p + jnp.sum(alpha * sin_xi_j * cosh_eta_j, axis=-1)
    eta = eta_p + jnp.sum(alpha * cos_xi_j * sinh_eta_j, axis=-1)

    x = UTM_K0 * A * eta
    y = UTM_K0 * A * xi

    # convergence: Karney 2011 Eq 23, 24
    p_p = 1.0 + jnp.sum(two_j * alpha * cos_xi_j * cosh_eta_j, axis=-1)
    q_p = jnp.sum(two_j * alpha * sin_xi_j * sinh_eta_j, axis=-1)

    gamma_p = jnp.arctan(tau_p / jnp.sqrt(1.0 + tau_p * tau_p) * jnp.tan(lam))
    gamma_pp = jnp.arctan2(q_p, p_p)
    gamma = gamma_p + gamma_pp

    # scale: Karney 2011 Eq 25
    sin_lat = jnp.sin(lat)
    k_p = (
        jnp.sqrt(1.0 - e * e * sin_lat * sin_lat)
        * jnp.sqrt(1.0 + tau * tau)
        / jnp.sqrt(tau_p * tau_p + cos_lam * cos_lam)
    )
    k_pp = A / ellipsoid.a * jnp.sqrt(p_p * p_p + q_p * q_p)
    k = UTM_K0 * k_p * k_pp

    if use_degrees:
        gamma = jnp.rad2deg(gamma)

    return jnp.stack([x, y, gamma, k], axis=-1)


def position_utm_to_geodetic(
    x_utm: ArrayLike,
    central_meridian: ArrayLike,
    use_degrees: bool = False,
    ellipsoid: Ellipsoid = WGS84_ELLIPSOID,
) -> Array:
    """Invert the transverse Mercator projection.

    The inverse Krüger series (Karney 2011 Eq 15-16) recovers the
    Gauss-Schreiber coordinates ``(xi', eta')``; the conformal latitude is
    then mapped back to geodetic latitude by Newton's method on
    ``tau = tan(lat)`` (Eq 19-21), run in a ``jax.lax.while_loop`` until the
    step drops below :func:`~geojax.config.get_iteration_tolerance`.

    Args:
        x_utm: Grid coordinates ``[x, y]`` in *m* relative to the central
            meridian and the equator (false easting and northing already
            removed), or a batch ``(..., 2)``.
        central_meridian: Longitude of the zone's central meridian in *rad*
            (or *deg*).
        use_degrees: If ``True``, *central_meridian* is in degrees and the
            returned angles are in degrees.
        ellipsoid: Reference ellipsoid.  Static under ``jax.jit``.

    Returns:
        jax.Array: ``[lon, lat, convergence, scale]``, longitude wrapped to
            ``[-180, 180)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from geojax.coordinates import position_utm_to_geodetic
        x = jnp.array([388360.123 - 500e3, 5263231.456])
        geod = position_utm_to_geodetic(x, 21.0, use_degrees=True)
        ```
    """
    _float = get_dtype()
    x_utm = jnp.asarray(x_utm, dtype=_float)

    lon0 = jnp.asarray(central_meridian, dtype=_float)
    if use_degrees:
        lon0 = jnp.deg2rad(lon0)

    e = ellipsoid.e
    e2 = ellipsoid.e2
    A = _rectifying_radius(ellipsoid)
    beta = jnp.asarray(_krueger_beta(ellipsoid.n), dtype=_float)
    two_j = 2.0 * jnp.arange(1, 7, dtype=_float)

    eta = x_utm[..., 0] / (UTM_K0 * A)
    xi = x_utm[..., 1] / (UTM_K0 * A)

    xi_j = two_j * xi[..., None]
    eta_j = two_j * eta[..., None]
    sin_xi_j = jnp.sin(xi_j)
    cos_xi_j = jnp.cos(xi_j)
    cosh_eta_j = jnp.cosh(eta_j)
    sinh_eta_j = jnp.sinh(eta_j)

    xi_p = xi - jnp.sum(beta * sin_xi_j * cosh_eta_j, axis=-1)
    eta_p = eta - jnp.sum(beta * cos_xi_j * sinh_eta_j, axis=-1)

    sinh_eta_p = jnp.sinh(eta_p)
    sin_xi_p = jnp.sin(xi_p)
    cos_xi_p = jnp.cos(xi_p)

    tau_p = sin_xi_p / jnp.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)

    tol = get_iteration_tolerance()

    def cond(state):
        _, d_tau, i = state
        return jnp.any(jnp.abs(d_tau) > tol) & (i < _MAX_TAU_ITERATIONS)

    def body(state):
        tau_i, _, i = state
        tau_i_p = _tau_prime(tau_i, e)
        d_tau = (
            (tau_p - tau_i_p)
            / jnp.sqrt(1.0 + tau_i_p * tau_i_p)
            * (1.0 + (1.0 - e2) * tau_i * tau_i)
            / ((1.0 - e2) * jnp.sqrt(1.0 + tau_i * tau_i))
        )
        return (tau_i + d_tau, d_tau, i + 1)

    init_state = (tau_p, jnp.ones_like(tau_p), jnp.int32(0))
    tau, _, _ = jax.lax.while_loop(cond, body, init_state)

    lat = jnp.arctan(tau)
    lon = wrap_longitude(jnp.arctan2(sinh_eta_p, cos_xi_p) + lon0)

    # convergence: Karney 2011 Eq 26, 27
    p = 1.0 - jnp.sum(two_j * beta * cos_xi_j * cosh_eta_j, axis=-1)
    q = jnp.sum(two_j * beta * sin_xi_j * sinh_eta_j, axis=-1)

    gamma_p = jnp.arctan(jnp.tan(xi_p) * jnp.tanh(eta_p))
    gamma_pp = jnp.arctan2(q, p)
    gamma = gamma_p + gamma_pp

    # scale: Karney 2011 Eq 28
    sin_lat = jnp.sin(lat)
    k_p = (
        jnp.sqrt(1.0 - e2 * sin_lat * sin_lat)
        * jnp.sqrt(1.0 + tau * tau)
        * jnp.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)
    )
    k_pp = A / ellipsoid.a / jnp.sqrt(p * p + q * q)
    k = UTM_K0 * k_p * k_pp

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)
        gamma = jnp.rad2deg(gamma)

    return jnp.stack([lon, lat, gamma, k], axis=-1)
