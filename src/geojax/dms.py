"""Parsing and formatting of degrees / minutes / seconds text.

Latitudes and longitudes may be written as signed decimal degrees or
split into sexagesimal minutes and seconds, optionally followed by a
compass letter (``51° 28′ 40.12″ N``, ``-0.0015``, ``000 00 05.31W``).
This module converts between that text and decimal degrees, and maps a
bearing onto a 4, 8 or 16 point compass rose.

Plain Python, not traced: these helpers sit at the presentation boundary
around the JAX coordinate functions.
"""

from __future__ import annotations

import enum
import math
import re

from geojax.exceptions import MalformedAngleTextError

_SEPARATOR = re.compile(r"[^0-9.,]+")
_LEADING_SIGN = re.compile(r"^-")
_TRAILING_COMPASS = re.compile(r"[NSEW]$", re.IGNORECASE)
_NEGATIVE = re.compile(r"^-|[WS]$", re.IGNORECASE)

_COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


class AngleFormat(enum.Enum):
    """Text layout for formatted angles.

    Attributes:
        D: Decimal degrees, ``51.4778°``.
        DM: Degrees and decimal minutes, ``51°28.67′``.
        DMS: Degrees, minutes and seconds, ``51°28′40″``.
    """

    D = "d"
    DM = "dm"
    DMS = "dms"


_FORMAT_ALIASES = {
    "d": AngleFormat.D,
    "deg": AngleFormat.D,
    "dm": AngleFormat.DM,
    "deg_min": AngleFormat.DM,
    "dms": AngleFormat.DMS,
    "deg_min_sec": AngleFormat.DMS,
}

# Default decimal places per format.
_DEFAULT_DP = {AngleFormat.D: 4, AngleFormat.DM: 2, AngleFormat.DMS: 0}


class CompassPrecision(enum.Enum):
    """Number of compass points used by :func:`compass_point`.

    Attributes:
        CARDINAL: 4 points (N, E, S, W).
        INTERCARDINAL: 8 points (adds NE, SE, SW, NW).
        SECONDARY_INTERCARDINAL: 16 points (adds NNE, ENE, ...).
    """

    CARDINAL = 1
    INTERCARDINAL = 2
    SECONDARY_INTERCARDINAL = 3

    @property
    def points(self) -> int:
        return 2 ** (self.value + 1)


def parse_dms(dms: str | float | int) -> float:
    """Parse degrees or degrees/minutes/seconds text into decimal degrees.

    Accepts signed decimal degrees, or one to three numbers separated by any
    non-numeric characters (degrees, degrees+minutes,
    degrees+minutes+seconds), optionally suffixed by a compass letter.  A
    leading ``-`` or a trailing ``W``/``S`` makes the result negative.
    ``,`` is accepted as a decimal separator.  Numbers are returned as
    floats unchanged.

    Args:
        dms: Angle text, or a number already in degrees.

    Returns:
        float: Angle in decimal degrees.

    Raises:
        MalformedAngleTextError: If the text does not split into one to
            three numbers.

    Examples:
        ```python
        from geojax.dms import parse_dms
        parse_dms("51° 28′ 40.12″ N")   # 51.4778...
        parse_dms("000° 00′ 05.31″ W")  # -0.001475
        ```
    """
    if isinstance(dms, (int, float)) and not isinstance(dms, bool):
        return float(dms)
    if not isinstance(dms, str):
        raise TypeError(f"parse_dms expects str or number, got {type(dms).__name__}")

    text = dms.strip()
    body = _TRAILING_COMPASS.sub("", _LEADING_SIGN.sub("", text))
    tokens = [token for token in _SEPARATOR.split(body) if token]

    if not 1 <= len(tokens) <= 3:
        raise MalformedAngleTextError(
            f"Expected 1-3 numeric fields in angle text, got {len(tokens)}: {dms!r}"
        )

    try:
        values = [float(token.replace(",", ".")) for token in tokens]
    except ValueError as exc:
        raise MalformedAngleTextError(f"Invalid number in angle text: {dms!r}") from exc

    deg = sum(value / 60.0**i for i, value in enumerate(values))
    if _NEGATIVE.search(text):
        deg = -deg
    return deg


def _coerce_format(fmt: AngleFormat | str) -> AngleFormat:
    if isinstance(fmt, AngleFormat):
        return fmt
    try:
        return _FORMAT_ALIASES[fmt.lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown angle format {fmt!r}. Must be one of: {list(_FORMAT_ALIASES)}"
        ) from None


def _pad(value: float, int_digits: int, dp: int) -> str:
    width = int_digits + (dp + 1 if dp > 0 else 0)
    return f"{value:0{width}.{dp}f}"


def to_dms(
    deg: float,
    fmt: AngleFormat | str = AngleFormat.DMS,
    dp: int | None = None,
) -> str:
    """Format decimal degrees as unsigned degrees/minutes/seconds text.

    The sign is dropped so a compass letter can be appended by the caller.
    Degrees are zero-padded to three digits, minutes and seconds to two.
    The value is rounded to *dp* places in the smallest unit before being
    split, so ``60″`` or ``60′`` never appear.

    Args:
        deg: Angle in degrees.
        fmt: Output layout (``"d"``, ``"dm"`` or ``"dms"``).
        dp: Decimal places of the smallest unit.  Defaults to 4 for
            degrees, 2 for minutes, 0 for seconds.

    Returns:
        str: Formatted angle, e.g. ``"051°28′40″"``.

    Raises:
        ValueError: If *fmt* is not a known format or *deg* is not finite.
    """
    fmt = _coerce_format(fmt)
    if dp is None:
        dp = _DEFAULT_DP[fmt]
    if not math.isfinite(deg):
        raise ValueError(f"Cannot format non-finite angle {deg}")

    deg = abs(deg)

    if fmt is AngleFormat.D:
        return _pad(deg, 3, dp) + "°"

    if fmt is AngleFormat.DM:
        minutes = float(f"{deg * 60.0:.{dp}f}")
        d = int(minutes // 60)
        m = minutes - d * 60
        return f"{d:03d}°" + _pad(m, 2, dp) + "′"

    seconds = float(f"{deg * 3600.0:.{dp}f}")
    d = int(seconds // 3600)
    m = int(seconds // 60) % 60
    s = seconds % 60
    return f"{d:03d}°{m:02d}′" + _pad(s, 2, dp) + "″"


def to_lat(
    deg: float,
    fmt: AngleFormat | str = AngleFormat.DMS,
    dp: int | None = None,
) -> str:
    """Format a latitude with two-digit degrees and an ``N``/``S`` suffix.

    Args:
        deg: Latitude in degrees.
        fmt: Output layout.
        dp: Decimal places of the smallest unit.

    Returns:
        str: e.g. ``"51°28′40″N"``.
    """
    return to_dms(deg, fmt, dp)[1:] + ("S" if deg < 0 else "N")


def to_lon(
    deg: float,
    fmt: AngleFormat | str = AngleFormat.DMS,
    dp: int | None = None,
) -> str:
    """Format a longitude with three-digit degrees and an ``E``/``W`` suffix.

    Args:
        deg: Longitude in degrees.
        fmt: Output layout.
        dp: Decimal places of the smallest unit.

    Returns:
        str: e.g. ``"000°00′05″W"``.
    """
    return to_dms(deg, fmt, dp) + ("W" if deg < 0 else "E")


def to_brng(
    deg: float,
    fmt: AngleFormat | str = AngleFormat.DMS,
    dp: int | None = None,
) -> str:
    """Format a bearing normalized to ``[0, 360)`` degrees.

    Args:
        deg: Bearing in degrees; negative values wrap to 180..360.
        fmt: Output layout.
        dp: Decimal places of the smallest unit.

    Returns:
        str: e.g. ``"193°34′47″"``.
    """
    brng = to_dms(deg % 360.0, fmt, dp)
    # rounding may carry 359.99999 up to 360
    if brng.startswith("360"):
        brng = "000" + brng[3:]
    return brng


def compass_point(
    bearing: float,
    precision: CompassPrecision | int = CompassPrecision.SECONDARY_INTERCARDINAL,
) -> str:
    """Return the compass point nearest to a bearing.

    Args:
        bearing: Bearing in degrees from north.
        precision: 4, 8 or 16 point rose, as a :class:`CompassPrecision` or
            its value 1, 2, 3.

    Returns:
        str: Compass point, e.g. ``"NNE"``.

    Examples:
        ```python
        from geojax.dms import CompassPrecision, compass_point
        compass_point(24)                            # 'NNE'
        compass_point(24, CompassPrecision.CARDINAL)  # 'N'
        ```
    """
    precision = CompassPrecision(precision)
    k = precision.points
    bearing = bearing % 360.0
    index = math.floor(bearing * k / 360.0 + 0.5) % k
    return _COMPASS_POINTS[index * (16 // k)]
