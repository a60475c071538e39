"""
geojax is a small geodetic coordinate conversion library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    RAD2AS,
    WGS84_a,
    WGS84_b,
    WGS84_f,
    UTM_K0,
)

from .config import set_dtype, get_dtype

from .exceptions import (
    GeojaxError,
    InvalidEllipsoidError,
    UnknownEllipsoidError,
    UnknownDatumError,
    OutOfRangeError,
    MalformedAngleTextError,
)

from .datums import (
    Ellipsoid,
    Datum,
    Translation,
    RotationSpec,
    Transformation,
    ELLIPSOIDS,
    DATUMS,
    REFERENCE_DATUM,
    get_ellipsoid,
    get_datum,
)

from .coordinates import (
    position_geodetic_to_ecef,
    position_ecef_to_geodetic,
    helmert_transform,
    helmert_inverse,
    position_convert_datum,
    utm_zone,
    position_geodetic_to_utm,
    position_utm_to_geodetic,
)

from .points import (
    Cartesian,
    Geodetic,
    UTMCoordinate,
    to_cartesian,
    to_geodetic,
    apply_transform,
    convert_datum,
    to_utm,
    to_latlon,
)

from .dms import (
    AngleFormat,
    CompassPrecision,
    parse_dms,
    to_dms,
    to_lat,
    to_lon,
    to_brng,
    compass_point,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "RAD2AS",
    "WGS84_a",
    "WGS84_b",
    "WGS84_f",
    "UTM_K0",
    # Config
    "set_dtype",
    "get_dtype",
    # Exceptions
    "GeojaxError",
    "InvalidEllipsoidError",
    "UnknownEllipsoidError",
    "UnknownDatumError",
    "OutOfRangeError",
    "MalformedAngleTextError",
    # Datums
    "Ellipsoid",
    "Datum",
    "Translation",
    "RotationSpec",
    "Transformation",
    "ELLIPSOIDS",
    "DATUMS",
    "REFERENCE_DATUM",
    "get_ellipsoid",
    "get_datum",
    # Coordinates
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "helmert_transform",
    "helmert_inverse",
    "position_convert_datum",
    "utm_zone",
    "position_geodetic_to_utm",
    "position_utm_to_geodetic",
    # Points
    "Cartesian",
    "Geodetic",
    "UTMCoordinate",
    "to_cartesian",
    "to_geodetic",
    "apply_transform",
    "convert_datum",
    "to_utm",
    "to_latlon",
    # Angle text
    "AngleFormat",
    "CompassPrecision",
    "parse_dms",
    "to_dms",
    "to_lat",
    "to_lon",
    "to_brng",
    "compass_point",
]
