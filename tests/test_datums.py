"""Tests for the geojax.datums module.

Covers ellipsoid validation and derived quantities, the packaged ellipsoid
and datum tables, and name lookup (exact, case-insensitive, aliases).
"""

import dataclasses
import logging

import pytest

from geojax.constants import WGS84_a, WGS84_b, WGS84_f
from geojax.datums import (
    DATUMS,
    ELLIPSOIDS,
    REFERENCE_DATUM,
    WGS84_ELLIPSOID,
    Datum,
    Ellipsoid,
    RotationSpec,
    Transformation,
    Translation,
    get_datum,
    get_ellipsoid,
)
from geojax.exceptions import (
    GeojaxError,
    InvalidEllipsoidError,
    UnknownDatumError,
    UnknownEllipsoidError,
)

_ELLIPSOID_NAMES = [
    "WGS84",
    "GRS80",
    "Airy1830",
    "AiryModified",
    "Bessel1841",
    "Clarke1866",
    "Intl1924",
    "WGS72",
]

_DATUM_ELLIPSOIDS = {
    "WGS84": "WGS84",
    "NAD83": "GRS80",
    "OSGB36": "Airy1830",
    "ED50": "Intl1924",
    "Irl1975": "AiryModified",
    "TokyoJapan": "Bessel1841",
    "NAD27": "Clarke1866",
    "WGS72": "WGS72",
}


# ──────────────────────────────────────────────
# Ellipsoid
# ──────────────────────────────────────────────


class TestEllipsoid:
    def test_wgs84_values(self):
        assert WGS84_ELLIPSOID.a == WGS84_a
        assert WGS84_ELLIPSOID.b == WGS84_b
        assert WGS84_ELLIPSOID.f == WGS84_f

    def test_wgs84_derived(self):
        """e^2 = f(2 - f), n = f / (2 - f)."""
        assert WGS84_ELLIPSOID.e2 == pytest.approx(6.69437999014e-3, rel=1e-10)
        assert WGS84_ELLIPSOID.n == pytest.approx(1.679220386383705e-3, rel=1e-10)
        assert WGS84_ELLIPSOID.e == pytest.approx(WGS84_ELLIPSOID.e2**0.5)

    def test_second_eccentricity(self):
        e = WGS84_ELLIPSOID
        assert e.ep2 == pytest.approx((e.a**2 - e.b**2) / e.b**2, rel=1e-9)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            WGS84_ELLIPSOID.a = 1.0

    def test_from_axes(self):
        e = Ellipsoid.from_axes("custom", 6378000.0, 6356000.0)
        assert e.f == pytest.approx(22000.0 / 6378000.0)

    def test_a_not_greater_than_b_raises(self):
        with pytest.raises(InvalidEllipsoidError, match="a > b > 0"):
            Ellipsoid("bad", 6356752.0, 6378137.0, 0.003)

    def test_negative_axis_raises(self):
        with pytest.raises(InvalidEllipsoidError):
            Ellipsoid("bad", 6378137.0, -1.0, 0.003)

    def test_flattening_out_of_range_raises(self):
        with pytest.raises(InvalidEllipsoidError, match="0 < f < 1"):
            Ellipsoid("bad", 6378137.0, 6356752.0, 0.0)

    def test_inconsistent_flattening_raises(self):
        with pytest.raises(InvalidEllipsoidError, match="inconsistent"):
            Ellipsoid("bad", 6378137.0, 6356752.314245, 1 / 290.0)

    def test_non_finite_raises(self):
        with pytest.raises(InvalidEllipsoidError, match="finite"):
            Ellipsoid("bad", float("nan"), 6356752.0, 0.003)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            Ellipsoid.from_axes("bad", 1.0, 2.0)


# ──────────────────────────────────────────────
# Tables and lookup
# ──────────────────────────────────────────────


class TestEllipsoidTable:
    def test_all_packaged(self):
        assert sorted(ELLIPSOIDS) == sorted(_ELLIPSOID_NAMES)

    @pytest.mark.parametrize("name", _ELLIPSOID_NAMES)
    def test_lookup(self, name):
        e = get_ellipsoid(name)
        assert e.name == name
        assert e.a > e.b > 0.0

    def test_case_insensitive(self):
        assert get_ellipsoid("airy1830") is ELLIPSOIDS["Airy1830"]

    def test_alias(self):
        assert get_ellipsoid("Hayford") is ELLIPSOIDS["Intl1924"]

    def test_unknown_raises(self):
        with pytest.raises(UnknownEllipsoidError, match="Unknown ellipsoid"):
            get_ellipsoid("Everest1830")

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            get_ellipsoid("Everest1830")

    def test_read_only(self):
        with pytest.raises(TypeError):
            ELLIPSOIDS["Sphere"] = WGS84_ELLIPSOID


class TestDatumTable:
    def test_all_packaged(self):
        assert sorted(DATUMS) == sorted(_DATUM_ELLIPSOIDS)

    @pytest.mark.parametrize("name,ellipsoid", list(_DATUM_ELLIPSOIDS.items()))
    def test_datum_ellipsoid(self, name, ellipsoid):
        assert get_datum(name).ellipsoid is ELLIPSOIDS[ellipsoid]

    def test_reference_datum(self):
        assert REFERENCE_DATUM is DATUMS["WGS84"]
        assert REFERENCE_DATUM.is_reference
        assert REFERENCE_DATUM.transform.is_identity

    @pytest.mark.parametrize("name", [n for n in _DATUM_ELLIPSOIDS if n != "WGS84"])
    def test_non_reference(self, name):
        assert not get_datum(name).is_reference

    def test_osgb36_parameters(self):
        t = get_datum("OSGB36").transform
        assert t.translation == Translation(-446.448, 125.157, -542.060)
        assert t.rotation == RotationSpec(-0.1502, -0.2470, -0.8421, 20.4894)

    def test_case_insensitive(self):
        assert get_datum("osgb36") is DATUMS["OSGB36"]

    def test_oed50_alias(self):
        assert get_datum("OED50") is DATUMS["ED50"]

    def test_alias_lookup_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="geojax.datums._tables"):
            get_datum("OED50")
        assert "ED50" in caplog.text

    def test_datum_passthrough(self):
        d = DATUMS["NAD27"]
        assert get_datum(d) is d

    def test_unknown_raises(self):
        with pytest.raises(UnknownDatumError, match="Unknown datum"):
            get_datum("GDA94")

    def test_unknown_is_geojax_and_key_error(self):
        with pytest.raises(GeojaxError):
            get_datum("GDA94")
        with pytest.raises(KeyError):
            get_datum("GDA94")

    def test_custom_wgs84_name_with_shift_is_not_reference(self):
        d = Datum(
            "WGS84",
            WGS84_ELLIPSOID,
            Transformation(Translation(1.0, 0.0, 0.0)),
        )
        assert not d.is_reference


class TestTransformation:
    def test_defaults_are_identity(self):
        assert Transformation().is_identity

    def test_nonzero_scale_not_identity(self):
        t = Transformation(rotation=RotationSpec(scale=1.0))
        assert not t.is_identity
