"""Coordinate transformations.

This sub-module provides array functions for converting between the
coordinate representations used in terrestrial geodesy:

- **Geodetic**: ellipsoidal ``[lon, lat, alt]`` ↔ ECEF ``[x, y, z]``
- **Helmert**: seven-parameter similarity transform between ECEF frames
- **Datum**: geodetic coordinates on one datum → another, via WGS84
- **UTM**: geodetic ``[lon, lat]`` ↔ transverse Mercator grid ``[x, y]``
"""

from .geodetic import (
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from .helmert import (
    helmert_inverse,
    helmert_transform,
)
from .datum import (
    datum_transform,
    position_convert_datum,
)
from .utm import (
    central_meridian,
    latitude_band,
    position_geodetic_to_utm,
    position_utm_to_geodetic,
    utm_zone,
)

__all__ = [
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "helmert_transform",
    "helmert_inverse",
    "datum_transform",
    "position_convert_datum",
    "central_meridian",
    "latitude_band",
    "utm_zone",
    "position_geodetic_to_utm",
    "position_utm_to_geodetic",
]
