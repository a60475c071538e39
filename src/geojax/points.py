"""Immutable coordinate value types and the operations between them.

- :class:`Cartesian`: ECEF position ``x, y, z`` in metres.
- :class:`Geodetic`: latitude/longitude in degrees, ellipsoidal height in
  metres, and the datum the point is expressed in.
- :class:`UTMCoordinate`: zone, hemisphere (and optionally MGRS latitude
  band), easting and northing, with grid convergence and point scale when
  produced by a projection.

These are plain Python dataclasses (not JAX pytrees) holding Python
floats.  Each operation validates its input, delegates the numerics to the
array functions in :mod:`geojax.coordinates`, and returns a new value;
inputs are never modified.  For batched or traced work, call the array
functions directly.

Examples:
    ```python
    from geojax.points import Geodetic

    p = Geodetic(47.51292, 19.51728)
    utm = p.to_utm()               # 34 T 388360 5263231
    p_osgb = Geodetic(51.4778, -0.0016).convert_datum("OSGB36")
    ```
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field

import jax.numpy as jnp
from jax import Array

from geojax.config import get_dtype
from geojax.constants import (
    MGRS_LAT_BANDS,
    UTM_FALSE_EASTING,
    UTM_FALSE_NORTHING,
)
from geojax.coordinates.datum import position_convert_datum
from geojax.coordinates.geodetic import (
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from geojax.coordinates.helmert import helmert_transform
from geojax.coordinates.utm import (
    central_meridian,
    position_geodetic_to_utm,
    position_utm_to_geodetic,
    utm_zone,
)
from geojax.datums import REFERENCE_DATUM, Datum, Transformation, get_datum
from geojax.dms import AngleFormat, parse_dms, to_lat, to_lon
from geojax.exceptions import OutOfRangeError

logger = logging.getLogger(__name__)

_UTM_PATTERN = re.compile(r"^\s*(\d{1,2})\s*([A-Za-z])\s+(\S+)\s+(\S+)\s*$")


@dataclass(frozen=True)
class Cartesian:
    """Earth-centered Earth-fixed position.

    Attributes:
        x: Towards 0N 0E [m].
        y: Towards 0N 90E [m].
        z: Towards 90N [m].
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def from_array(cls, arr) -> Cartesian:
        """Build from an ``[x, y, z]`` array."""
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> Array:
        """Return ``[x, y, z]`` as a JAX array in the configured dtype."""
        return jnp.array([self.x, self.y, self.z], dtype=get_dtype())

    def to_geodetic(self, datum: Datum | str = REFERENCE_DATUM) -> Geodetic:
        return to_geodetic(self, datum)

    def apply_transform(self, transformation: Transformation) -> Cartesian:
        return apply_transform(self, transformation)

    def to_string(self, dp: int = 0) -> str:
        return f"[{self.x:.{dp}f},{self.y:.{dp}f},{self.z:.{dp}f}]"

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Geodetic:
    """Geodetic position on a datum.

    Latitude and longitude ranges are not enforced; height may be negative.

    Args:
        lat: Geodetic latitude [deg].
        lon: Longitude [deg].
        height: Height above the datum's ellipsoid [m].
        datum: Datum, or the name of a packaged datum.

    Raises:
        UnknownDatumError: If *datum* is a name that is not packaged.
    """

    lat: float
    lon: float
    height: float = 0.0
    datum: Datum = field(default=REFERENCE_DATUM)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lon", float(self.lon))
        object.__setattr__(self, "height", float(self.height))
        object.__setattr__(self, "datum", get_datum(self.datum))

    @classmethod
    def from_dms(
        cls,
        lat: str | float,
        lon: str | float,
        height: float = 0.0,
        datum: Datum | str = REFERENCE_DATUM,
    ) -> Geodetic:
        """Build from degrees/minutes/seconds text.

        Args:
            lat: Latitude text, e.g. ``"51° 28′ 40.12″ N"``.
            lon: Longitude text, e.g. ``"000° 00′ 05.31″ W"``.
            height: Height above the ellipsoid [m].
            datum: Datum or datum name.

        Raises:
            MalformedAngleTextError: If either text cannot be parsed.
        """
        return cls(parse_dms(lat), parse_dms(lon), height, datum)

    @classmethod
    def from_array(cls, arr, datum: Datum | str = REFERENCE_DATUM) -> Geodetic:
        """Build from a ``[lon, lat, alt]`` array in degrees."""
        return cls(float(arr[1]), float(arr[0]), float(arr[2]), datum)

    def to_array(self) -> Array:
        """Return ``[lon, lat, alt]`` (degrees, metres) as a JAX array."""
        return jnp.array([self.lon, self.lat, self.height], dtype=get_dtype())

    def to_cartesian(self) -> Cartesian:
        return to_cartesian(self)

    def convert_datum(self, to_datum: Datum | str) -> Geodetic:
        return convert_datum(self, to_datum)

    def to_utm(self) -> UTMCoordinate:
        return to_utm(self)

    def to_string(
        self,
        fmt: AngleFormat | str = AngleFormat.DMS,
        dp: int | None = None,
        height_dp: int | None = None,
    ) -> str:
        """Format as ``"51°28′40″N, 000°00′05″W"``, optionally with height.

        Args:
            fmt: Angle layout (``"d"``, ``"dm"``, ``"dms"``).
            dp: Decimal places of the smallest angle unit.
            height_dp: Decimal places for the height; ``None`` omits it.
        """
        text = f"{to_lat(self.lat, fmt, dp)}, {to_lon(self.lon, fmt, dp)}"
        if height_dp is not None:
            sign = " +" if self.height >= 0 else " "
            text += f"{sign}{self.height:.{height_dp}f}m"
        return text

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class UTMCoordinate:
    """UTM grid coordinate.

    Args:
        zone: Longitudinal zone, 1-60.
        hemisphere: ``"N"`` or ``"S"``.
        easting: Easting including the 500 km false easting [m].
        northing: Northing, including the 10 000 km false northing in the
            southern hemisphere [m].
        band: MGRS latitude band letter, if known.  Must agree with
            *hemisphere* (``C``-``M`` south, ``N``-``X`` north).
        datum: Datum whose ellipsoid the grid is projected from.
        convergence: Grid convergence [deg], set by projections.
        scale: Point scale factor, set by projections.

    Raises:
        OutOfRangeError: If *zone* is outside ``1..60``.
        ValueError: If *hemisphere* or *band* is invalid.
    """

    zone: int
    hemisphere: str
    easting: float
    northing: float
    band: str | None = None
    datum: Datum = field(default=REFERENCE_DATUM)
    convergence: float | None = None
    scale: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.zone, bool) or int(self.zone) != self.zone:
            raise ValueError(f"UTM zone must be an integer, got {self.zone!r}")
        zone = int(self.zone)
        if not 1 <= zone <= 60:
            raise OutOfRangeError(f"UTM zone must be in 1..60, got {zone}")
        hemisphere = str(self.hemisphere).upper()
        if hemisphere not in ("N", "S"):
            raise ValueError(f"Hemisphere must be 'N' or 'S', got {self.hemisphere!r}")
        band = self.band.upper() if self.band is not None else None
        if band is not None:
            if len(band) != 1 or band not in MGRS_LAT_BANDS:
                raise ValueError(f"Invalid MGRS latitude band {self.band!r}")
            if (band >= "N") != (hemisphere == "N"):
                raise ValueError(
                    f"Latitude band {band!r} is not in hemisphere {hemisphere!r}"
                )

        object.__setattr__(self, "zone", zone)
        object.__setattr__(self, "hemisphere", hemisphere)
        object.__setattr__(self, "band", band)
        object.__setattr__(self, "easting", float(self.easting))
        object.__setattr__(self, "northing", float(self.northing))
        object.__setattr__(self, "datum", get_datum(self.datum))

    @classmethod
    def parse(cls, text: str, datum: Datum | str = REFERENCE_DATUM) -> UTMCoordinate:
        """Parse ``"zone letter easting northing"``.

        The letter is read as a hemisphere when it is ``N`` or ``S`` and as
        an MGRS latitude band otherwise (``"31 N 448251 5411932"``,
        ``"34 T 388360.123 5263231.456"``).

        Raises:
            ValueError: If the text does not have that shape.
        """
        match = _UTM_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Invalid UTM coordinate: {text!r}")
        zone, letter, easting, northing = match.groups()
        letter = letter.upper()
        try:
            easting_m = float(easting)
            northing_m = float(northing)
        except ValueError as exc:
            raise ValueError(f"Invalid UTM coordinate: {text!r}") from exc

        if letter in ("N", "S"):
            return cls(int(zone), letter, easting_m, northing_m, datum=datum)
        hemisphere = "N" if letter >= "N" else "S"
        return cls(int(zone), hemisphere, easting_m, northing_m, band=letter, datum=datum)

    def to_latlon(self, datum: Datum | str | None = None) -> Geodetic:
        return to_latlon(self, datum)

    def to_string(self, dp: int = 0) -> str:
        letter = self.band if self.band is not None else self.hemisphere
        return f"{self.zone} {letter} {self.easting:.{dp}f} {self.northing:.{dp}f}"

    def __str__(self) -> str:
        return self.to_string()


def to_cartesian(point: Geodetic) -> Cartesian:
    """Convert a geodetic point to ECEF on its datum's ellipsoid."""
    x_ecef = position_geodetic_to_ecef(
        point.to_array(), use_degrees=True, ellipsoid=point.datum.ellipsoid
    )
    return Cartesian.from_array(x_ecef)


def to_geodetic(cartesian: Cartesian, datum: Datum | str = REFERENCE_DATUM) -> Geodetic:
    """Convert an ECEF position to a geodetic point on *datum*.

    Points on the polar axis come back at latitude +/-90.
    """
    datum = get_datum(datum)
    x_geod = position_ecef_to_geodetic(
        cartesian.to_array(), use_degrees=True, ellipsoid=datum.ellipsoid
    )
    return Geodetic.from_array(x_geod, datum)


def apply_transform(cartesian: Cartesian, transformation: Transformation) -> Cartesian:
    """Apply a linearized Helmert transformation to an ECEF position."""
    return Cartesian.from_array(helmert_transform(cartesian.to_array(), transformation))


def convert_datum(point: Geodetic, to_datum: Datum | str) -> Geodetic:
    """Convert a geodetic point to another datum.

    Conversions between two datums other than WGS84 are routed through
    WGS84.  A point already on *to_datum* is returned as is.

    Args:
        point: Point to convert.
        to_datum: Target datum or datum name.

    Returns:
        Geodetic: New point on *to_datum*; height is ellipsoidal on the
            target ellipsoid.

    Raises:
        UnknownDatumError: If *to_datum* is a name that is not packaged.
    """
    to_datum = get_datum(to_datum)
    if point.datum == to_datum:
        logger.debug("Point already on %s; no conversion", to_datum.name)
        return point

    if point.datum.is_reference or to_datum.is_reference:
        logger.debug("Converting %s -> %s", point.datum.name, to_datum.name)
    else:
        logger.debug(
            "Converting %s -> %s via %s",
            point.datum.name,
            to_datum.name,
            REFERENCE_DATUM.name,
        )

    x_geod = position_convert_datum(
        point.to_array(), point.datum, to_datum, use_degrees=True
    )
    return Geodetic.from_array(x_geod, to_datum)


def to_utm(point: Geodetic) -> UTMCoordinate:
    """Project a geodetic point to UTM on its datum's ellipsoid.

    Args:
        point: Point with latitude in ``[-80, 84]`` degrees.

    Returns:
        UTMCoordinate: Zone, band, false-origin easting and northing, grid
            convergence [deg] and point scale.

    Raises:
        OutOfRangeError: If the latitude is outside the UTM limits.

    Examples:
        ```python
        from geojax.points import Geodetic, to_utm
        str(to_utm(Geodetic(48.8582, 2.2945)))  # '31 U 448252 5411933'
        ```
    """
    zone, band, cm = utm_zone(point.lat, point.lon)

    x_utm = position_geodetic_to_utm(
        jnp.array([point.lon, point.lat], dtype=get_dtype()),
        cm,
        use_degrees=True,
        ellipsoid=point.datum.ellipsoid,
    )
    x, y, convergence, scale = (float(v) for v in x_utm)

    hemisphere = "S" if point.lat < 0.0 else "N"
    easting = x + UTM_FALSE_EASTING
    northing = y + UTM_FALSE_NORTHING if hemisphere == "S" else y

    return UTMCoordinate(
        zone,
        hemisphere,
        easting,
        northing,
        band=band,
        datum=point.datum,
        convergence=convergence,
        scale=scale,
    )


def to_latlon(
    coord: UTMCoordinate,
    datum: Datum | str | None = None,
    height: float = 0.0,
) -> Geodetic:
    """Convert a UTM coordinate back to a geodetic point.

    Args:
        coord: UTM coordinate.
        datum: Datum to interpret the grid on; defaults to ``coord.datum``.
        height: Ellipsoidal height to attach to the result [m].

    Returns:
        Geodetic: Point on *datum*.

    Raises:
        OutOfRangeError: If the zone is outside ``1..60``.
    """
    datum = coord.datum if datum is None else get_datum(datum)
    cm = central_meridian(coord.zone)

    x = coord.easting - UTM_FALSE_EASTING
    y = coord.northing - UTM_FALSE_NORTHING if coord.hemisphere == "S" else coord.northing

    x_geod = position_utm_to_geodetic(
        jnp.array([x, y], dtype=get_dtype()),
        cm,
        use_degrees=True,
        ellipsoid=datum.ellipsoid,
    )
    lat = float(x_geod[1])
    if not math.isfinite(lat):
        raise OutOfRangeError(f"UTM coordinate {coord} does not map to a latitude")
    return Geodetic(lat, float(x_geod[0]), height, datum)
