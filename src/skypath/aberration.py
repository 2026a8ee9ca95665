from __future__ import annotations

import math

import numpy as np

from .constants import ARCSECONDS_PER_DEGREE
from .coordinates import Ecliptic
from .quantities import Angle, Distance, Velocity
from .vector import Vector3

# constant of annual aberration, arcseconds
ABERRATION_CONSTANT_ARCSEC = 20.5


class Aberration:
    """Classical annual aberration in ecliptic coordinates (Meeus ch. 23, low precision)."""

    def __init__(self, coordinates: Ecliptic, sun_longitude: Angle) -> None:
        self.coordinates = coordinates
        self.sun_longitude = sun_longitude

    @classmethod
    def for_ecliptic_coordinates(cls, coordinates: Ecliptic, sun_longitude: Angle) -> Ecliptic:
        return cls(coordinates, sun_longitude).apply()

    def apply(self) -> Ecliptic:
        lon = self.coordinates.longitude
        lat = self.coordinates.latitude
        elongation = self.sun_longitude - lon

        delta_longitude = Angle.from_degrees(
            -ABERRATION_CONSTANT_ARCSEC * elongation.cos() / lat.cos() / ARCSECONDS_PER_DEGREE
        )
        delta_latitude = Angle.from_degrees(
            -ABERRATION_CONSTANT_ARCSEC * elongation.sin() * lat.sin() / ARCSECONDS_PER_DEGREE
        )
        return Ecliptic(latitude=lat + delta_latitude, longitude=lon + delta_longitude)


class Aberration2:
    """Relativistic annual aberration of an astrometric position vector.

    ``observer_velocity`` is the barycentric velocity of the observer (Earth).
    Arithmetic runs in AU and AU/day.
    """

    def __init__(self, astrometric_position: Vector3, observer_velocity: Vector3) -> None:
        self.position_au = astrometric_position.to_array("au")
        self.velocity_aupd = observer_velocity.to_array("aupd")
        self.distance_au = float(np.linalg.norm(self.position_au))
        self.observer_speed = float(np.linalg.norm(self.velocity_aupd))

    @property
    def light_speed(self) -> float:
        return Velocity.light_speed().aupd

    def _cos_aberration_angle(self) -> float:
        denom = max(self.distance_au * self.observer_speed, 1e-20)
        return float(np.dot(self.position_au, self.velocity_aupd)) / denom

    @property
    def corrected_position(self) -> Vector3:
        c = self.light_speed
        beta = self.observer_speed / c
        projected = beta * self._cos_aberration_angle()
        gamma_inv = math.sqrt(1.0 - beta * beta)

        factor = (1.0 + projected / (1.0 + gamma_inv)) * (self.distance_au / c)
        corrected = (self.position_au * gamma_inv + factor * self.velocity_aupd) / (1.0 + projected)
        return Vector3.from_array(corrected, Distance, "au")
