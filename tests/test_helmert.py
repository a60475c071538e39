"""Tests for the linearized Helmert transformation.

Covers single-parameter effects, the identity transformation, the
negation-based inverse and its second-order residual, batching, and JAX
compatibility (jit, vmap).
"""

import jax
import jax.numpy as jnp
import pytest

from geojax.constants import AS2RAD, WGS84_a
from geojax.coordinates import helmert_inverse, helmert_transform
from geojax.datums import (
    DATUMS,
    RotationSpec,
    Transformation,
    Translation,
    get_datum,
)

_POS_TOL = 1e-6  # metres

# Royal Observatory Greenwich, WGS84 ECEF
_R_GREENWICH = jnp.array([3980581.210, -111.159, 4966824.522])


class TestHelmertTransform:
    def test_identity_is_exact(self):
        """The all-zero transformation leaves the position bit-identical."""
        out = helmert_transform(_R_GREENWICH, Transformation())
        assert jnp.array_equal(out, _R_GREENWICH)

    def test_reference_datum_is_exact(self):
        out = helmert_transform(_R_GREENWICH, DATUMS["WGS84"].transform)
        assert jnp.array_equal(out, _R_GREENWICH)

    def test_translation_only(self):
        t = Transformation(Translation(10.0, -20.0, 30.0))
        out = helmert_transform(_R_GREENWICH, t)
        assert jnp.allclose(
            out, _R_GREENWICH + jnp.array([10.0, -20.0, 30.0]), atol=_POS_TOL
        )

    def test_scale_only(self):
        """1 ppm stretches the position by one millionth."""
        t = Transformation(rotation=RotationSpec(scale=1.0))
        out = helmert_transform(jnp.array([WGS84_a, 0.0, 0.0]), t)
        assert jnp.abs(out[0] - WGS84_a * (1.0 + 1e-6)) < _POS_TOL

    def test_rz_rotates_x_into_y(self):
        """A 1″ rotation about z moves an x-axis point along +y by a·rz."""
        t = Transformation(rotation=RotationSpec(rz=1.0))
        out = helmert_transform(jnp.array([WGS84_a, 0.0, 0.0]), t)

        assert jnp.abs(out[0] - WGS84_a) < _POS_TOL
        assert jnp.abs(out[1] - WGS84_a * AS2RAD) < _POS_TOL
        assert jnp.abs(out[2]) < _POS_TOL

    def test_rx_rotates_y_into_z(self):
        t = Transformation(rotation=RotationSpec(rx=2.0))
        out = helmert_transform(jnp.array([0.0, WGS84_a, 0.0]), t)
        assert jnp.abs(out[2] - 2.0 * WGS84_a * AS2RAD) < _POS_TOL

    def test_ry_rotates_z_into_x(self):
        t = Transformation(rotation=RotationSpec(ry=-1.5))
        out = helmert_transform(jnp.array([0.0, 0.0, WGS84_a]), t)
        assert jnp.abs(out[0] + 1.5 * WGS84_a * AS2RAD) < _POS_TOL

    def test_linearized_form(self):
        """The full seven-parameter formula, written out term by term."""
        t = get_datum("OSGB36").transform
        x, y, z = (float(v) for v in _R_GREENWICH)
        tx, ty, tz = t.translation
        rx, ry, rz = (v * AS2RAD for v in t.rotation[:3])
        s1 = 1.0 + t.rotation.scale * 1e-6

        expected = jnp.array(
            [
                tx + x * s1 - y * rz + z * ry,
                ty + x * rz + y * s1 - z * rx,
                tz - x * ry + y * rx + z * s1,
            ]
        )
        out = helmert_transform(_R_GREENWICH, t)
        assert jnp.allclose(out, expected, atol=_POS_TOL)

    def test_osgb36_shift_magnitude(self):
        """The WGS84 → OSGB36 shift is a few hundred metres."""
        out = helmert_transform(_R_GREENWICH, get_datum("OSGB36").transform)
        shift = jnp.linalg.norm(out - _R_GREENWICH)
        assert 100.0 < shift < 1000.0

    def test_batched(self):
        batch = jnp.stack([_R_GREENWICH, 2.0 * _R_GREENWICH, -_R_GREENWICH])
        t = get_datum("ED50").transform
        out = helmert_transform(batch, t)

        assert out.shape == (3, 3)
        for i in range(3):
            assert jnp.allclose(out[i], helmert_transform(batch[i], t), atol=_POS_TOL)


class TestHelmertInverse:
    def test_negates_every_component(self):
        t = get_datum("OSGB36").transform
        inv = helmert_inverse(t)

        assert inv.translation == Translation(446.448, -125.157, 542.060)
        assert inv.rotation == RotationSpec(0.1502, 0.2470, 0.8421, -20.4894)

    def test_double_inverse(self):
        t = get_datum("Irl1975").transform
        assert helmert_inverse(helmert_inverse(t)) == t

    def test_inverse_of_identity(self):
        assert helmert_inverse(Transformation()).is_identity

    def test_rotation_scale_roundtrip_second_order(self):
        """Without translation the residual is -M²x: millimetres for OSGB36."""
        t = get_datum("OSGB36").transform
        t_rot = Transformation(rotation=t.rotation)
        back = helmert_transform(helmert_transform(_R_GREENWICH, t_rot), helmert_inverse(t_rot))

        assert jnp.linalg.norm(back - _R_GREENWICH) < 5e-3

    @pytest.mark.parametrize("name", [n for n in DATUMS if n != "WGS84"])
    def test_roundtrip_approximate(self, name):
        """Forward then inverse recovers the point to a few centimetres."""
        t = get_datum(name).transform
        back = helmert_transform(helmert_transform(_R_GREENWICH, t), helmert_inverse(t))

        assert jnp.linalg.norm(back - _R_GREENWICH) < 0.05

    def test_roundtrip_is_not_exact(self):
        """The negated parameters are not the matrix inverse."""
        t = get_datum("OSGB36").transform
        back = helmert_transform(helmert_transform(_R_GREENWICH, t), helmert_inverse(t))

        assert jnp.linalg.norm(back - _R_GREENWICH) > 1e-3

    def test_translation_only_roundtrip_exact(self):
        t = get_datum("TokyoJapan").transform
        back = helmert_transform(helmert_transform(_R_GREENWICH, t), helmert_inverse(t))
        assert jnp.allclose(back, _R_GREENWICH, atol=_POS_TOL)


class TestJAXCompatibility:
    def test_jit(self):
        t = get_datum("OSGB36").transform
        eager = helmert_transform(_R_GREENWICH, t)
        jitted = jax.jit(lambda x: helmert_transform(x, t))(_R_GREENWICH)
        assert jnp.allclose(eager, jitted, atol=_POS_TOL)

    def test_transformation_as_pytree(self):
        """Transformation is a NamedTuple, so it can be a traced argument."""
        t = get_datum("NAD83").transform
        eager = helmert_transform(_R_GREENWICH, t)
        jitted = jax.jit(helmert_transform)(_R_GREENWICH, t)
        assert jnp.allclose(eager, jitted, atol=_POS_TOL)

    def test_vmap(self):
        t = get_datum("NAD27").transform
        batch = jnp.stack([_R_GREENWICH, 0.5 * _R_GREENWICH])
        vmapped = jax.vmap(lambda x: helmert_transform(x, t))(batch)
        assert jnp.allclose(vmapped, helmert_transform(batch, t), atol=_POS_TOL)
