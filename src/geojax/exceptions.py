"""Exception types raised by geojax.

Every error derives from :class:`GeojaxError` and from the built-in
exception a caller would otherwise expect (``ValueError`` for bad values,
``KeyError`` for failed name lookups), so ``except ValueError`` keeps
working for code that does not know about geojax.
"""

from __future__ import annotations


class GeojaxError(Exception):
    """Base class for all geojax errors."""


class InvalidEllipsoidError(GeojaxError, ValueError):
    """Semi-axes or flattening outside physically valid ranges."""


class UnknownEllipsoidError(GeojaxError, KeyError):
    """Ellipsoid name not present in the ellipsoid table."""


class UnknownDatumError(GeojaxError, KeyError):
    """Datum name not present in the datum table."""


class OutOfRangeError(GeojaxError, ValueError):
    """Coordinate outside the domain of the requested operation.

    Raised for latitudes outside the UTM limits and for UTM zones outside
    ``1..60``.
    """


class MalformedAngleTextError(GeojaxError, ValueError):
    """Angle text that does not decompose into 1-3 numeric tokens."""
