import pytest

from skypath.coordinates import Horizontal
from skypath.observer import Observer
from skypath.quantities import Angle
from skypath.refraction import DEFAULT_PRESSURE_MBAR, DEFAULT_TEMPERATURE_K, Refraction


def _horizontal(altitude):
    return Horizontal(
        azimuth=Angle.from_dms(283, 16, 15.70),
        altitude=altitude,
        latitude=Angle.from_degrees(52.0),
        longitude=Angle.zero(),
    )


def test_high_altitude_uses_zenith_tangent():
    # Duffett-Smith & Zwart worked example: 1008 mbar, 13 C
    true = _horizontal(Angle.from_dms(19, 20, 3.64))
    refraction = Refraction(true, pressure=1008.0, temperature=273.15 + 13.0)
    assert refraction.refraction_angle().arcseconds == pytest.approx(163.3668, abs=0.05)

    apparent = refraction.refract()
    assert apparent.altitude.degrees == pytest.approx(19.0 + 22.0 / 60.0 + 47.0068 / 3600.0, abs=2e-5)
    assert apparent.azimuth == true.azimuth
    assert apparent.latitude == true.latitude
    assert apparent.longitude == true.longitude


def test_high_altitude_default_conditions():
    apparent = Refraction.correct_horizontal_coordinates(_horizontal(Angle.from_degrees(45.0)))
    expected = 0.00452 * DEFAULT_PRESSURE_MBAR / DEFAULT_TEMPERATURE_K
    assert apparent.altitude.degrees - 45.0 == pytest.approx(expected, rel=1e-9)


@pytest.mark.parametrize("altitude", [0.0, 5.0, 15.0, -0.5])
def test_low_altitude_uses_rational_form(altitude):
    pressure, temperature = 1013.25, 283.15
    true = _horizontal(Angle.from_degrees(altitude))
    numerator = pressure * (0.1594 + 0.0196 * altitude + 0.00002 * altitude**2)
    denominator = temperature * (1.0 + 0.505 * altitude + 0.0845 * altitude**2)
    angle = Refraction(true, pressure, temperature).refraction_angle()
    assert angle.degrees == pytest.approx(numerator / denominator, rel=1e-12)


def test_refraction_near_horizon_is_about_half_a_degree():
    angle = Refraction(_horizontal(Angle.zero())).refraction_angle()
    assert angle.degrees == pytest.approx(0.5346, abs=1e-4)
    # the two forms roughly agree where they meet
    above = Refraction(_horizontal(Angle.from_degrees(15.0 + 1e-9))).refraction_angle()
    below = Refraction(_horizontal(Angle.from_degrees(15.0))).refraction_angle()
    assert above.arcseconds == pytest.approx(below.arcseconds, abs=5.0)


def test_angle_uses_observer_conditions():
    observer = Observer.from_degrees(52.0, 0.0, 1500.0)
    true = _horizontal(Angle.from_degrees(30.0))
    expected = Refraction(true, observer.pressure, observer.temperature).refraction_angle()
    assert Refraction.angle(true, observer) == expected
    assert observer.pressure < 1013.25
    assert expected < Refraction(true, 1013.25, observer.temperature).refraction_angle()


def test_non_positive_temperature_is_rejected():
    with pytest.raises(ValueError, match="Kelvin"):
        Refraction(_horizontal(Angle.zero()), temperature=0.0)
