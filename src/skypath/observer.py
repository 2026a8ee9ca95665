from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

import numpy as np
from astropy import units as u
from astropy.coordinates import EarthLocation

from .config import Context
from .constants import EARTH_ANGULAR_VELOCITY_RAD_S
from .instant import Instant
from .quantities import Angle, Distance, Velocity
from .rotations import r3
from .sidereal import greenwich_apparent_sidereal_time
from .vector import Vector3

DEFAULT_TEMPERATURE_K = 283.15
PRESSURE_AT_SEA_LEVEL_MBAR = 1013.25
EARTH_GRAVITATIONAL_ACCELERATION = 9.80665  # m / s^2
MOLAR_MASS_OF_AIR = 0.0289644  # kg / mol
UNIVERSAL_GAS_CONSTANT = 8.31432  # J / (mol K)


@dataclass(frozen=True)
class Observer:
    """A site on the WGS84 ellipsoid; longitude positive east."""

    latitude: Angle
    longitude: Angle
    elevation: Distance = field(default_factory=Distance.zero)
    temperature: float = DEFAULT_TEMPERATURE_K
    pressure_mbar: Optional[float] = None

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude.degrees <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude.degrees} deg")

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float, elevation_m: float = 0.0) -> "Observer":
        return cls(Angle.from_degrees(latitude), Angle.from_degrees(longitude), Distance(elevation_m))

    @property
    def pressure(self) -> float:
        """Barometric pressure in millibar, from the isothermal atmosphere if not given."""
        if self.pressure_mbar is not None:
            return self.pressure_mbar
        exponent = (
            EARTH_GRAVITATIONAL_ACCELERATION * MOLAR_MASS_OF_AIR * self.elevation.meters
        ) / (UNIVERSAL_GAS_CONSTANT * self.temperature)
        return PRESSURE_AT_SEA_LEVEL_MBAR * math.exp(-exponent)

    @cached_property
    def earth_location(self) -> EarthLocation:
        return EarthLocation.from_geodetic(
            lon=self.longitude.degrees * u.deg,
            lat=self.latitude.degrees * u.deg,
            height=self.elevation.meters * u.m,
            ellipsoid="WGS84",
        )

    @cached_property
    def geocentric_position(self) -> Vector3:
        """Earth-fixed (ITRS) position of the site."""
        xyz = [c.to_value(u.m) for c in self.earth_location.geocentric]
        return Vector3.from_array(xyz, Distance)

    @cached_property
    def geocentric_velocity(self) -> Vector3:
        """Velocity from the Earth's rotation, omega x r, in the rotating frame's axes."""
        x, y, _ = self.geocentric_position.values
        omega = EARTH_ANGULAR_VELOCITY_RAD_S
        return Vector3.from_array([-omega * y, omega * x, 0.0], Velocity)

    def earth_fixed_rotation_matrix_for(self, instant: Instant, context: Context | None = None) -> np.ndarray:
        """Rotation from Earth-fixed axes to the true equator and equinox of date."""
        gast = greenwich_apparent_sidereal_time(instant, context)
        return r3(-gast.radians)
