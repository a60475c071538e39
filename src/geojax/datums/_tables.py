"""Packaged ellipsoid and datum tables with lookup by name.

The tables are built once at import and exposed through read-only
``MappingProxyType`` views.  Helmert parameters take WGS84 coordinates
into the named datum; sources for each parameter set are noted inline.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from geojax.constants import WGS84_a, WGS84_b, WGS84_f
from geojax.datums._types import (
    Datum,
    Ellipsoid,
    RotationSpec,
    Transformation,
    Translation,
)
from geojax.exceptions import UnknownDatumError, UnknownEllipsoidError

logger = logging.getLogger(__name__)


_ELLIPSOIDS = {
    e.name: e
    for e in (
        Ellipsoid("WGS84", WGS84_a, WGS84_b, WGS84_f),
        Ellipsoid("GRS80", 6378137.0, 6356752.314140, 1 / 298.257222101),
        Ellipsoid("Airy1830", 6377563.396, 6356256.909, 1 / 299.3249646),
        Ellipsoid("AiryModified", 6377340.189, 6356034.448, 1 / 299.3249646),
        Ellipsoid("Bessel1841", 6377397.155, 6356078.962818, 1 / 299.1528128),
        Ellipsoid("Clarke1866", 6378206.4, 6356583.8, 1 / 294.978698214),
        # aka Hayford
        Ellipsoid("Intl1924", 6378388.0, 6356911.946, 1 / 297.0),
        Ellipsoid("WGS72", 6378135.0, 6356750.5, 1 / 298.26),
    )
}


def _helmert(tx, ty, tz, rx, ry, rz, s) -> Transformation:
    return Transformation(Translation(tx, ty, tz), RotationSpec(rx, ry, rz, s))


_DATUMS = {
    d.name: d
    for d in (
        Datum("WGS84", _ELLIPSOIDS["WGS84"], _helmert(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)),
        # functionally equivalent to WGS84 at the metre level (2009)
        Datum(
            "NAD83",
            _ELLIPSOIDS["GRS80"],
            _helmert(1.004, -1.910, -0.515, 0.0267, 0.00034, 0.011, -0.0015),
        ),
        # Ordnance Survey, guide to coordinate systems in Great Britain
        Datum(
            "OSGB36",
            _ELLIPSOIDS["Airy1830"],
            _helmert(-446.448, 125.157, -542.060, -0.1502, -0.2470, -0.8421, 20.4894),
        ),
        # UK offshore (DECC PON4)
        Datum(
            "ED50",
            _ELLIPSOIDS["Intl1924"],
            _helmert(89.5, 93.8, 123.1, 0.0, 0.0, 0.156, -1.2),
        ),
        # Ordnance Survey Ireland transformations booklet
        Datum(
            "Irl1975",
            _ELLIPSOIDS["AiryModified"],
            _helmert(-482.530, 130.596, -564.557, -1.042, -0.214, -0.631, -8.150),
        ),
        Datum(
            "TokyoJapan",
            _ELLIPSOIDS["Bessel1841"],
            _helmert(148.0, -507.0, -685.0, 0.0, 0.0, 0.0, 0.0),
        ),
        Datum(
            "NAD27",
            _ELLIPSOIDS["Clarke1866"],
            _helmert(8.0, -160.0, -176.0, 0.0, 0.0, 0.0, 0.0),
        ),
        # Eurocontrol WGS84 implementation manual
        Datum(
            "WGS72",
            _ELLIPSOIDS["WGS72"],
            _helmert(0.0, 0.0, -4.5, 0.0, 0.0, 0.554, -0.22),
        ),
    )
}

_ALIASES = {
    "OED50": "ED50",
    "HAYFORD": "Intl1924",
}

ELLIPSOIDS = MappingProxyType(_ELLIPSOIDS)
DATUMS = MappingProxyType(_DATUMS)

WGS84_ELLIPSOID = _ELLIPSOIDS["WGS84"]
REFERENCE_DATUM = _DATUMS["WGS84"]


def _resolve(name: str, table, kind: str) -> str | None:
    if name in table:
        return name
    folded = {key.casefold(): key for key in table}
    key = folded.get(name.casefold())
    if key is None:
        alias = _ALIASES.get(name.upper())
        if alias in table:
            key = alias
    if key is not None:
        logger.debug("Resolved %s name %r to %r", kind, name, key)
    return key


def get_ellipsoid(name: str) -> Ellipsoid:
    """Look up a packaged ellipsoid by name.

    Matching is exact first, then case-insensitive, then through the alias
    table (``"Hayford"`` resolves to ``"Intl1924"``).

    Args:
        name: Ellipsoid name, e.g. ``"WGS84"`` or ``"Airy1830"``.

    Returns:
        Ellipsoid: The packaged ellipsoid.

    Raises:
        UnknownEllipsoidError: If the name is not recognized.
    """
    key = _resolve(name, _ELLIPSOIDS, "ellipsoid")
    if key is None:
        raise UnknownEllipsoidError(
            f"Unknown ellipsoid: {name!r}. Available: {list(_ELLIPSOIDS)}"
        )
    return _ELLIPSOIDS[key]


def get_datum(name: str | Datum) -> Datum:
    """Look up a packaged datum by name.

    Matching is exact first, then case-insensitive, then through the alias
    table (``"OED50"`` resolves to ``"ED50"``).  A :class:`Datum` instance
    is returned unchanged so callers can accept either form.

    Args:
        name: Datum name, e.g. ``"OSGB36"``, or a ``Datum``.

    Returns:
        Datum: The packaged datum.

    Raises:
        UnknownDatumError: If the name is not recognized.
    """
    if isinstance(name, Datum):
        return name
    key = _resolve(name, _DATUMS, "datum")
    if key is None:
        raise UnknownDatumError(
            f"Unknown datum: {name!r}. Available: {list(_DATUMS)}"
        )
    return _DATUMS[key]
