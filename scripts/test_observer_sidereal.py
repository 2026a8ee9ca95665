import math

import erfa
import numpy as np
import pytest

from skypath.bodies import Mars
from skypath.frames import Apparent, Topocentric
from skypath.instant import Instant
from skypath.observer import Observer
from skypath.quantities import Angle, Distance, Velocity
from skypath.sidereal import (
    equation_of_the_equinoxes,
    greenwich_apparent_sidereal_time,
    greenwich_mean_sidereal_time,
    local_apparent_sidereal_time,
    local_mean_sidereal_time,
)
from skypath.vector import Vector3


def _wrapped(a, b):
    return math.remainder(a - b, 2.0 * math.pi)


def test_equator_site_geocentric_state():
    site = Observer.from_degrees(0.0, 0.0)
    np.testing.assert_allclose(site.geocentric_position.to_array(), [6378137.0, 0.0, 0.0], rtol=0.0, atol=1e-6)
    speed = site.geocentric_velocity.magnitude.mps
    assert speed == pytest.approx(465.10, abs=0.01)
    # eastward motion
    assert site.geocentric_velocity.to_array()[1] > 0.0


def test_polar_site_does_not_move():
    pole = Observer.from_degrees(90.0, 0.0)
    assert pole.geocentric_velocity.magnitude.mps == pytest.approx(0.0, abs=1e-6)
    assert pole.geocentric_position.magnitude.km == pytest.approx(6356.752, abs=1e-3)


def test_latitude_is_validated():
    with pytest.raises(ValueError):
        Observer.from_degrees(91.0, 0.0)


def test_pressure_from_elevation():
    assert Observer.from_degrees(0.0, 0.0).pressure == pytest.approx(1013.25)
    assert Observer.from_degrees(0.0, 0.0, 1000.0).pressure == pytest.approx(898.08, abs=0.05)
    explicit = Observer(Angle.zero(), Angle.zero(), Distance(1000.0), pressure_mbar=850.0)
    assert explicit.pressure == 850.0


def test_earth_fixed_rotation_is_orthonormal(instant):
    m = Observer.from_degrees(40.0, -75.0).earth_fixed_rotation_matrix_for(instant)
    np.testing.assert_allclose(m @ m.T, np.eye(3), rtol=0.0, atol=1e-15)
    assert np.linalg.det(m) == pytest.approx(1.0)


@pytest.mark.parametrize("tt", [2451545.0, 2460714.0, 2455197.5])
def test_sidereal_times_match_erfa(tt):
    instant = Instant(tt)
    gmst = greenwich_mean_sidereal_time(instant)
    gast = greenwich_apparent_sidereal_time(instant)
    assert _wrapped(gmst.radians, erfa.gmst06(instant.ut1, 0.0, tt, 0.0)) == pytest.approx(0.0, abs=1e-12)
    assert _wrapped(gast.radians, erfa.gst06a(instant.ut1, 0.0, tt, 0.0)) == pytest.approx(0.0, abs=5e-8)
    assert 0.0 <= gast.radians < 2.0 * math.pi


def test_equation_of_the_equinoxes_is_small(instant):
    eqeq = equation_of_the_equinoxes(instant)
    assert 0.0 < abs(eqeq.arcseconds) < 18.0
    gast = greenwich_apparent_sidereal_time(instant)
    gmst = greenwich_mean_sidereal_time(instant)
    assert _wrapped(gast.radians, gmst.radians) == pytest.approx(eqeq.radians, abs=1e-12)


def test_local_sidereal_time_adds_east_longitude(instant):
    east = Angle.from_degrees(90.0)
    lmst = local_mean_sidereal_time(instant, east)
    gmst = greenwich_mean_sidereal_time(instant)
    assert _wrapped(lmst.radians, gmst.radians) == pytest.approx(math.pi / 2.0, abs=1e-12)
    last = local_apparent_sidereal_time(instant, east)
    gast = greenwich_apparent_sidereal_time(instant)
    assert _wrapped(last.radians, gast.radians) == pytest.approx(math.pi / 2.0, abs=1e-12)


def test_target_along_local_vertical_is_at_zenith(instant):
    site = Observer.from_degrees(0.0, 0.0)
    matrix = site.earth_fixed_rotation_matrix_for(instant)
    up = site.geocentric_position.rotate(matrix).unit()
    apparent = Apparent(
        position=Vector3.from_array(up, Distance, "au"),
        velocity=Vector3.zero(Velocity),
        instant=instant,
        target_body=Mars,
    )
    topocentric = Topocentric.from_apparent(apparent, observer=site)

    assert topocentric.equatorial.declination.degrees == pytest.approx(0.0, abs=1e-9)
    assert topocentric.horizontal.altitude.degrees == pytest.approx(90.0, abs=1e-6)
    assert _wrapped(topocentric.hour_angle.radians, 0.0) == pytest.approx(0.0, abs=1e-12)
