from __future__ import annotations

import math
from functools import cached_property
from typing import ClassVar, Optional

import numpy as np

from .config import Context, resolve
from .constants import ASTRONOMICAL_UNIT_IN_METERS
from .ephem import BodyId
from .errors import CalculationError
from .frames import Apparent, Astrometric, Geometric, MeanOfDate, Topocentric, zero_state
from .instant import Instant
from .quantities import Angle, Distance, Velocity
from .vector import Vector3

__all__ = [
    "BODIES",
    "BodyId",
    "Earth",
    "Jupiter",
    "Mars",
    "Mercury",
    "Moon",
    "Neptune",
    "Saturn",
    "SolarSystemBody",
    "Sun",
    "Uranus",
    "Venus",
    "body_for",
]

Segments = tuple[tuple[int, int], ...]


class SolarSystemBody:
    """A body whose barycentric state comes from one or two ephemeris segments."""

    NAME: ClassVar[str] = ""
    EPHEMERIS_SEGMENTS: ClassVar[Segments] = ()
    EQUATORIAL_RADIUS: ClassVar[Distance] = Distance.zero()
    # V(1, 0) followed by coefficients of the phase angle in degrees
    MAGNITUDE_COEFFICIENTS: ClassVar[tuple[float, ...]] = ()
    PRIMARY: ClassVar[Optional[str]] = "sun"

    def __init__(self, instant: Instant, ephem, context: Context | None = None) -> None:
        self.instant = instant
        self.ephem = ephem
        self.context = resolve(context)
        self.geometric = type(self).geometric_at(instant, ephem, context=self.context)
        self.astrometric = self._compute_astrometric()
        self._topocentric: dict = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tt={self.instant.tt!r})"

    @classmethod
    def geometric_at(cls, instant: Instant, ephem, context: Context | None = None) -> Geometric:
        """Barycentric state summed over ``EPHEMERIS_SEGMENTS``, cached per instant."""
        ctx = resolve(context)
        key = ctx.key("geometric", instant, *cls.EPHEMERIS_SEGMENTS)
        return ctx.cache.fetch(key, lambda: cls._compute_geometric(instant, ephem))

    @classmethod
    def _compute_geometric(cls, instant: Instant, ephem) -> Geometric:
        if not cls.EPHEMERIS_SEGMENTS:
            raise NotImplementedError(f"{cls.__name__} declares no ephemeris segments")
        position = np.zeros(3)
        velocity = np.zeros(3)
        for center, target in cls.EPHEMERIS_SEGMENTS:
            pos, vel = ephem[center, target].compute_and_differentiate(instant.tt)
            position = position + np.asarray(pos, dtype=float)
            velocity = velocity + np.asarray(vel, dtype=float)
        if not (np.all(np.isfinite(position)) and np.all(np.isfinite(velocity))):
            raise CalculationError(f"non-finite ephemeris state for {cls.__name__} at JD {instant.tt}")
        return Geometric(
            position=Vector3.from_array(position, Distance, "km"),
            velocity=Vector3.from_array(velocity, Velocity, "kmpd"),
            instant=instant,
            target_body=cls,
        )

    @cached_property
    def earth_geometric(self) -> Geometric:
        return Earth.geometric_at(self.instant, self.ephem, context=self.context)

    def _compute_astrometric(self) -> Astrometric:
        return Astrometric.from_geometric(
            self.geometric,
            ephem=self.ephem,
            earth_geometric=self.earth_geometric,
            context=self.context,
        )

    @cached_property
    def mean_of_date(self) -> MeanOfDate:
        return MeanOfDate.from_astrometric(self.astrometric, context=self.context)

    @cached_property
    def apparent(self) -> Apparent:
        return Apparent.from_astrometric(
            self.astrometric, earth_geometric=self.earth_geometric, context=self.context
        )

    def observed_by(self, observer) -> Topocentric:
        if observer not in self._topocentric:
            self._topocentric[observer] = Topocentric.from_apparent(
                self.apparent, observer=observer, context=self.context
            )
        return self._topocentric[observer]

    # auxiliary quantities

    @cached_property
    def _sun_astrometric(self) -> Astrometric:
        sun_geometric = Sun.geometric_at(self.instant, self.ephem, context=self.context)
        return Astrometric.from_geometric(
            sun_geometric, ephem=self.ephem, earth_geometric=self.earth_geometric, context=self.context
        )

    @cached_property
    def phase_angle(self) -> Optional[Angle]:
        """Sun-target-Earth angle; None where it is undefined."""
        target = self.astrometric.position.values
        if not target.any():
            return None
        to_sun = self._sun_astrometric.position.values - target
        to_earth = -target
        norm = np.linalg.norm(to_sun) * np.linalg.norm(to_earth)
        if norm == 0.0:
            return None
        cos_alpha = float(np.dot(to_sun, to_earth) / norm)
        return Angle.acos(max(-1.0, min(1.0, cos_alpha)))

    @cached_property
    def illuminated_fraction(self) -> Optional[float]:
        alpha = self.phase_angle
        if alpha is None:
            return None
        return (1.0 + alpha.cos()) / 2.0

    @cached_property
    def angular_diameter(self) -> Angle:
        distance = self.astrometric.distance
        radius = self.EQUATORIAL_RADIUS
        if distance.is_zero() or radius.is_zero():
            return Angle.zero()
        return Angle.asin(min(1.0, radius.meters / distance.meters)) * 2.0

    @cached_property
    def apparent_magnitude(self) -> Optional[float]:
        alpha = self.phase_angle
        if not self.MAGNITUDE_COEFFICIENTS or alpha is None:
            return None
        heliocentric_au = np.linalg.norm(
            self.astrometric.position.values - self._sun_astrometric.position.values
        ) / ASTRONOMICAL_UNIT_IN_METERS
        geocentric_au = self.astrometric.distance.au
        absolute, *coeffs = self.MAGNITUDE_COEFFICIENTS
        a = alpha.degrees
        phase_term = sum(c * a ** (i + 1) for i, c in enumerate(coeffs))
        return absolute + 5.0 * math.log10(heliocentric_au * geocentric_au) + phase_term

    def _radial_velocity_from_primary(self) -> Optional[float]:
        primary = BODIES.get(self.PRIMARY) if self.PRIMARY else None
        if primary is None:
            return None
        origin = primary.geometric_at(self.instant, self.ephem, context=self.context)
        relative = self.geometric.position - origin.position
        if relative.is_zero():
            return None
        relative_velocity = self.geometric.velocity - origin.velocity
        return relative_velocity.dot(relative) / relative.magnitude.meters

    @cached_property
    def approaching_primary(self) -> bool:
        rv = self._radial_velocity_from_primary()
        return rv is not None and rv < 0.0

    @cached_property
    def receding_from_primary(self) -> bool:
        rv = self._radial_velocity_from_primary()
        return rv is not None and rv > 0.0


class Sun(SolarSystemBody):
    NAME = "sun"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.SUN),)
    EQUATORIAL_RADIUS = Distance.from_km(695_700.0)
    ABSOLUTE_MAGNITUDE = -26.74  # at 1 AU
    PRIMARY = None

    @cached_property
    def _sun_astrometric(self) -> Astrometric:
        return self.astrometric

    @cached_property
    def phase_angle(self) -> Optional[Angle]:
        return None

    @cached_property
    def apparent_magnitude(self) -> Optional[float]:
        distance = self.astrometric.distance
        if distance.is_zero():
            return None
        return self.ABSOLUTE_MAGNITUDE + 5.0 * math.log10(distance.au)


class Mercury(SolarSystemBody):
    NAME = "mercury"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.MERCURY_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(2_440.53)
    MAGNITUDE_COEFFICIENTS = (
        -0.613, 6.3280e-02, -1.6336e-03, 3.3644e-05, -3.4265e-07, 1.6893e-09, -3.0334e-12,
    )


class Venus(SolarSystemBody):
    NAME = "venus"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.VENUS_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(6_051.8)
    MAGNITUDE_COEFFICIENTS = (-4.384, -1.044e-03, 3.687e-04, -2.814e-06, 8.938e-09)


class Earth(SolarSystemBody):
    NAME = "earth"
    EPHEMERIS_SEGMENTS = (
        (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.EARTH_MOON_BARYCENTER),
        (BodyId.EARTH_MOON_BARYCENTER, BodyId.EARTH),
    )
    EQUATORIAL_RADIUS = Distance.from_km(6_378.137)

    @cached_property
    def earth_geometric(self) -> Geometric:
        return self.geometric

    def _compute_astrometric(self) -> Astrometric:
        position, velocity = zero_state()
        return Astrometric(
            position=position,
            velocity=velocity,
            instant=self.instant,
            target_body=type(self),
        )


class Moon(SolarSystemBody):
    NAME = "moon"
    EPHEMERIS_SEGMENTS = (
        (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.EARTH_MOON_BARYCENTER),
        (BodyId.EARTH_MOON_BARYCENTER, BodyId.MOON),
    )
    EQUATORIAL_RADIUS = Distance.from_km(1_737.4)
    MAGNITUDE_COEFFICIENTS = (0.23, 0.026, 0.0, 0.0, 4.0e-09)
    PRIMARY = "earth"


class Mars(SolarSystemBody):
    NAME = "mars"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.MARS_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(3_396.19)
    MAGNITUDE_COEFFICIENTS = (-1.601, 2.267e-02, -1.302e-04)


class Jupiter(SolarSystemBody):
    NAME = "jupiter"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.JUPITER_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(71_492.0)
    MAGNITUDE_COEFFICIENTS = (-9.395, -3.7e-04, 6.16e-04)


class Saturn(SolarSystemBody):
    NAME = "saturn"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.SATURN_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(60_268.0)
    # globe only, rings ignored
    MAGNITUDE_COEFFICIENTS = (-8.95, -3.7e-04, 6.16e-04)


class Uranus(SolarSystemBody):
    NAME = "uranus"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.URANUS_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(25_559.0)
    MAGNITUDE_COEFFICIENTS = (-7.110, 6.587e-03, 1.045e-04)


class Neptune(SolarSystemBody):
    NAME = "neptune"
    EPHEMERIS_SEGMENTS = ((BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.NEPTUNE_BARYCENTER),)
    EQUATORIAL_RADIUS = Distance.from_km(24_764.0)
    MAGNITUDE_COEFFICIENTS = (-7.00, 7.944e-03, 9.617e-05)


BODIES: dict[str, type[SolarSystemBody]] = {
    cls.NAME: cls for cls in (Sun, Mercury, Venus, Earth, Moon, Mars, Jupiter, Saturn, Uranus, Neptune)
}


def body_for(name: str) -> type[SolarSystemBody]:
    try:
        return BODIES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown body '{name}'; expected one of {sorted(BODIES)}") from None
