"""Type definitions for reference ellipsoids, Helmert parameters and datums.

- :class:`Ellipsoid`: semi-axes and flattening of a reference ellipsoid.
- :class:`Translation`, :class:`RotationSpec`, :class:`Transformation`:
  the seven Helmert parameters relating a datum to WGS84.
- :class:`Datum`: an ellipsoid bound to its Helmert transformation.

``Ellipsoid`` and ``Datum`` are frozen dataclasses (not JAX pytrees): they
are static configuration, hashable, and may be passed to ``jax.jit`` as
static arguments.  The Helmert parameter types are
:class:`~typing.NamedTuple` instances, which JAX treats as pytrees
automatically, so a ``Transformation`` can also be traced.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from geojax.exceptions import InvalidEllipsoidError

# Largest accepted disagreement between ``f`` and ``(a - b) / a``.  Tabulated
# ellipsoids publish rounded axes; WGS72 is the loosest at ~3e-8.
_FLATTENING_TOL = 1e-7


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid of revolution.

    Args:
        name: Human-readable ellipsoid name.
        a: Semi-major axis [m].
        b: Semi-minor axis [m].
        f: Flattening [dimensionless].

    Raises:
        InvalidEllipsoidError: If ``a > b > 0`` and ``0 < f < 1`` do not
            hold, or if ``f`` disagrees with ``(a - b) / a``.

    Examples:
        ```python
        from geojax.datums import Ellipsoid
        sphere_ish = Ellipsoid.from_axes("custom", 6378000.0, 6356000.0)
        sphere_ish.n
        ```
    """

    name: str
    a: float
    b: float
    f: float

    def __post_init__(self) -> None:
        values = (self.a, self.b, self.f)
        if not all(math.isfinite(v) for v in values):
            raise InvalidEllipsoidError(
                f"Ellipsoid {self.name!r} parameters must be finite, got "
                f"a={self.a}, b={self.b}, f={self.f}"
            )
        if not self.a > self.b > 0.0:
            raise InvalidEllipsoidError(
                f"Ellipsoid {self.name!r} requires a > b > 0, "
                f"got a={self.a}, b={self.b}"
            )
        if not 0.0 < self.f < 1.0:
            raise InvalidEllipsoidError(
                f"Ellipsoid {self.name!r} requires 0 < f < 1, got f={self.f}"
            )
        f_axes = (self.a - self.b) / self.a
        if abs(self.f - f_axes) > _FLATTENING_TOL:
            raise InvalidEllipsoidError(
                f"Ellipsoid {self.name!r} flattening f={self.f} is inconsistent "
                f"with its axes ((a-b)/a={f_axes})"
            )

    @classmethod
    def from_axes(cls, name: str, a: float, b: float) -> Ellipsoid:
        """Build an ellipsoid from its semi-axes, deriving the flattening.

        Args:
            name: Ellipsoid name.
            a: Semi-major axis [m].
            b: Semi-minor axis [m].

        Returns:
            Ellipsoid: Validated ellipsoid with ``f = (a - b) / a``.
        """
        if a == 0.0:
            raise InvalidEllipsoidError(f"Ellipsoid {name!r} requires a > 0")
        return cls(name, float(a), float(b), (a - b) / a)

    @property
    def e2(self) -> float:
        """First eccentricity squared, ``f(2 - f)``."""
        return self.f * (2.0 - self.f)

    @property
    def e(self) -> float:
        """First eccentricity."""
        return math.sqrt(self.e2)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared, ``e2 / (1 - e2)``."""
        return self.e2 / (1.0 - self.e2)

    @property
    def n(self) -> float:
        """Third flattening, ``f / (2 - f)``."""
        return self.f / (2.0 - self.f)


class Translation(NamedTuple):
    """Helmert translation components [m]."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class RotationSpec(NamedTuple):
    """Helmert rotation [arc-seconds] and scale [ppm] components."""

    rx: float = 0.0
    ry: float = 0.0
    rz: float = 0.0
    scale: float = 0.0


class Transformation(NamedTuple):
    """Seven-parameter Helmert transformation.

    Despite the split into two fields, this is one parameter set: the
    translation, and the small rotations plus scale change applied in the
    linearized form by :func:`~geojax.coordinates.helmert.helmert_transform`.

    Attributes:
        translation: Shift of the origin [m].
        rotation: Rotations about x, y, z [arc-seconds] and scale [ppm].
    """

    translation: Translation = Translation()
    rotation: RotationSpec = RotationSpec()

    @property
    def is_identity(self) -> bool:
        """Whether every parameter is zero."""
        return not any(self.translation) and not any(self.rotation)


@dataclass(frozen=True)
class Datum:
    """Geodetic datum: an ellipsoid plus its Helmert link to WGS84.

    Args:
        name: Datum name.
        ellipsoid: Reference ellipsoid of the datum.
        transform: Helmert parameters taking WGS84 ECEF coordinates into
            this datum's ECEF frame.  All zeros for WGS84 itself.
    """

    name: str
    ellipsoid: Ellipsoid
    transform: Transformation = Transformation()

    @property
    def is_reference(self) -> bool:
        """Whether this datum is the WGS84 reference datum."""
        return self.name == "WGS84" and self.transform.is_identity
