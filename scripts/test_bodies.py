import math

import pytest

from skypath.bodies import BODIES, Earth, Mars, Moon, Neptune, Sun, Venus, body_for
from skypath.config import Configuration, Context
from skypath.ephem import BodyId
from skypath.frames import Apparent, Astrometric, Geometric
from skypath.observer import Observer


def test_geometric_sums_segments(linear_ephem, instant):
    earth = Earth.geometric_at(instant, linear_ephem)
    emb = linear_ephem[BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.EARTH_MOON_BARYCENTER]
    offset = linear_ephem[BodyId.EARTH_MOON_BARYCENTER, BodyId.EARTH]
    expected = emb.compute_and_differentiate(instant.tt)[0] + offset.compute_and_differentiate(instant.tt)[0]
    assert isinstance(earth, Geometric)
    assert earth.target_body is Earth
    assert earth.position.to_array("km") == pytest.approx(expected, rel=1e-12)


def test_geometric_is_cached_when_enabled(linear_ephem, instant):
    ctx = Context.create(Configuration(cache_enabled=True))
    first = Mars.geometric_at(instant, linear_ephem, context=ctx)
    calls = linear_ephem.calls
    assert Mars.geometric_at(instant, linear_ephem, context=ctx) is first
    assert linear_ephem.calls == calls

    Mars.geometric_at(instant, linear_ephem)
    assert linear_ephem.calls == calls + 1


def test_earth_astrometric_is_zero(linear_ephem, instant):
    earth = Earth(instant, linear_ephem)
    assert earth.astrometric.position.is_zero()
    assert earth.astrometric.distance.meters == 0.0
    assert earth.apparent.equatorial.right_ascension.radians == 0.0
    assert earth.apparent.ecliptic.longitude.radians == 0.0
    assert earth.phase_angle is None
    assert earth.illuminated_fraction is None
    assert earth.apparent_magnitude is None


def test_body_stages(linear_ephem, instant):
    mars = Mars(instant, linear_ephem)
    assert isinstance(mars.astrometric, Astrometric)
    assert isinstance(mars.apparent, Apparent)
    assert mars.apparent is mars.apparent
    assert mars.mean_of_date.distance.meters == pytest.approx(mars.astrometric.distance.meters, rel=1e-12)
    assert mars.apparent.center_identifier == BodyId.EARTH


def test_observed_by_is_memoised_per_observer(linear_ephem, instant):
    venus = Venus(instant, linear_ephem)
    greenwich = Observer.from_degrees(51.4769, 0.0, 46.0)
    first = venus.observed_by(greenwich)
    assert venus.observed_by(greenwich) is first
    assert venus.observed_by(Observer.from_degrees(-33.9, 18.4)) is not first
    assert first.observer is greenwich


def test_auxiliary_quantities(linear_ephem, instant):
    mars = Mars(instant, linear_ephem)
    assert 0.0 <= mars.phase_angle.degrees <= 180.0
    assert 0.0 <= mars.illuminated_fraction <= 1.0
    assert mars.angular_diameter.arcseconds > 0.0
    assert math.isfinite(mars.apparent_magnitude)
    assert mars.approaching_primary != mars.receding_from_primary


def test_sun_magnitude_and_diameter(linear_ephem, instant):
    sun = Sun(instant, linear_ephem)
    assert sun.phase_angle is None
    assert sun.apparent_magnitude == pytest.approx(-26.74, abs=0.05)
    # about 32 arcminutes at 1 AU
    assert sun.angular_diameter.degrees == pytest.approx(0.53, abs=0.02)
    assert not sun.approaching_primary
    assert not sun.receding_from_primary


def test_moon_radial_motion_is_relative_to_earth(linear_ephem, instant):
    moon = Moon(instant, linear_ephem)
    assert moon.PRIMARY == "earth"
    assert moon.receding_from_primary
    assert not moon.approaching_primary


def test_outer_planet_is_faint_and_small(linear_ephem, instant):
    neptune = Neptune(instant, linear_ephem)
    assert 7.0 < neptune.apparent_magnitude < 8.5
    assert neptune.angular_diameter.arcseconds < 3.0


def test_body_for():
    assert body_for(" Mars ") is Mars
    assert body_for("EARTH") is Earth
    assert set(BODIES) >= {"sun", "moon", "neptune"}
    with pytest.raises(ValueError, match="unknown body"):
        body_for("pluto")
