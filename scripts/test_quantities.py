import math

import numpy as np
import pytest
from astropy import units as u

from skypath.constants import AU_KM
from skypath.errors import IncompatibleArgumentsError, UnsupportedFormatError
from skypath.quantities import Angle, AngularVelocity, Distance, Velocity
from skypath.vector import Vector3


def test_distance_conversions():
    d = Distance.from_au(1.0)
    assert d.km == pytest.approx(AU_KM)
    assert Distance.from_km(1.5).meters == 1500.0
    assert Distance.from_parsecs(1.0).au == pytest.approx(206264.806, rel=1e-8)


def test_velocity_conversions():
    v = Velocity.from_kmpd(86400.0)
    assert v.kmps == pytest.approx(1.0)
    assert Velocity.from_aupd(1.0).kmpd == pytest.approx(AU_KM)
    assert Velocity.light_speed().kmps == pytest.approx(299792.458)


def test_angle_conversions_and_trig():
    a = Angle.from_degrees(90.0)
    assert a.radians == pytest.approx(math.pi / 2)
    assert a.hours == pytest.approx(6.0)
    assert Angle.from_degree_arcseconds(3600.0).degrees == pytest.approx(1.0)
    assert Angle.from_dms(-1, 30, 0).degrees == pytest.approx(-1.5)
    assert Angle.from_degrees(30.0).sin() == pytest.approx(0.5)
    assert Angle.from_degrees(-30.0).normalized().degrees == pytest.approx(330.0)


def test_angular_velocity_mas_per_year():
    w = AngularVelocity.from_milliarcseconds_per_year(1000.0)
    assert w.mas_per_year == pytest.approx(1000.0)
    assert w.radians_per_second > 0.0


def test_arithmetic_and_ordering_within_one_type():
    a = Distance(3.0)
    b = Distance(1.0)
    assert a + b == Distance(4.0)
    assert a - b == Distance(2.0)
    assert -a == Distance(-3.0)
    assert a * 2 == Distance(6.0)
    assert 2 * a == Distance(6.0)
    assert a / 3 == Distance(1.0)
    assert b < a
    assert sorted([a, b]) == [b, a]
    assert hash(Distance(1.0)) == hash(Distance(1.0))


def test_mixing_types_is_rejected():
    with pytest.raises(TypeError):
        Distance(1.0) + Velocity(1.0)
    with pytest.raises(TypeError):
        Distance(1.0) < Velocity(2.0)
    assert Distance(1.0) != Velocity(1.0)


def test_non_numeric_raises():
    with pytest.raises(UnsupportedFormatError):
        Distance("12")
    with pytest.raises(UnsupportedFormatError):
        Angle.from_degrees(None)
    with pytest.raises(UnsupportedFormatError):
        Distance(1.0).to("furlong")


def test_astropy_interop():
    q = Distance.from_km(2.0).to_quantity()
    assert q.to_value(u.km) == pytest.approx(2.0)
    assert Angle.from_quantity(180.0 * u.deg).radians == pytest.approx(math.pi)
    assert Velocity.from_quantity(1.0 * u.km / u.s).mps == pytest.approx(1000.0)


def test_vector_components_and_arithmetic():
    v = Vector3(Distance.from_km(1.0), Distance.from_km(2.0), Distance.from_km(2.0))
    assert v.x == Distance.from_km(1.0)
    assert v.magnitude.km == pytest.approx(3.0)
    np.testing.assert_allclose(v.to_array("km"), [1.0, 2.0, 2.0])

    w = Vector3.from_array([1.0, 1.0, 1.0], Distance, "km")
    np.testing.assert_allclose((v + w).to_array("km"), [2.0, 3.0, 3.0])
    np.testing.assert_allclose((v - w).to_array("km"), [0.0, 1.0, 1.0])
    np.testing.assert_allclose((v * 2).to_array("km"), [2.0, 4.0, 4.0])
    np.testing.assert_allclose((v / 2).to_array("km"), [0.5, 1.0, 1.0])
    assert v.dot(w) == pytest.approx(5.0e6)


def test_vector_is_immutable():
    v = Vector3.from_array([1.0, 2.0, 3.0], Distance)
    with pytest.raises(ValueError):
        v.values[0] = 5.0
    assert v.to_array()[0] == 1.0


def test_vector_rejects_mixed_kinds():
    with pytest.raises(IncompatibleArgumentsError):
        Vector3(Distance(1.0), Velocity(1.0), Distance(1.0))
    d = Vector3.zero(Distance)
    s = Vector3.zero(Velocity)
    with pytest.raises(IncompatibleArgumentsError):
        d + s


def test_vector_rotation_and_zero():
    v = Vector3.from_array([1.0, 0.0, 0.0], Distance)
    quarter = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(v.rotate(quarter).to_array(), [0.0, 1.0, 0.0])
    assert Vector3.zero(Distance).is_zero()
    assert Vector3.zero(Distance).magnitude == Distance.zero()
    with pytest.raises(IncompatibleArgumentsError):
        v.rotate(np.eye(2))


def test_sign_predicates_and_milliarcseconds():
    assert Distance(2.0).is_positive()
    assert Velocity(-1.0).is_negative()
    assert not Angle.zero().is_positive()
    assert Angle.zero().is_zero()
    assert Angle.from_degree_milliarcseconds(1000.0).arcseconds == pytest.approx(1.0)
