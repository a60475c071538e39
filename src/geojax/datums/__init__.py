"""Reference ellipsoids and geodetic datums.

This sub-module provides the immutable ellipsoid and datum types and the
packaged tables:

- **Ellipsoids**: WGS84, GRS80, Airy1830, AiryModified, Bessel1841,
  Clarke1866, Intl1924, WGS72
- **Datums**: WGS84 (reference), NAD83, OSGB36, ED50, Irl1975,
  TokyoJapan, NAD27, WGS72, each carrying the Helmert parameters that
  take WGS84 coordinates into it
"""

from ._types import (
    Datum,
    Ellipsoid,
    RotationSpec,
    Transformation,
    Translation,
)
from ._tables import (
    DATUMS,
    ELLIPSOIDS,
    REFERENCE_DATUM,
    WGS84_ELLIPSOID,
    get_datum,
    get_ellipsoid,
)

__all__ = [
    "Datum",
    "Ellipsoid",
    "RotationSpec",
    "Transformation",
    "Translation",
    "DATUMS",
    "ELLIPSOIDS",
    "REFERENCE_DATUM",
    "WGS84_ELLIPSOID",
    "get_datum",
    "get_ellipsoid",
]
