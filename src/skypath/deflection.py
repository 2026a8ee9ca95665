from __future__ import annotations

import numpy as np

from .config import Context, resolve
from .constants import ASTRONOMICAL_UNIT_IN_METERS, GM_SUN, LIGHT_SPEED_M_PER_S
from .instant import Instant
from .quantities import Distance, Velocity
from .vector import Vector3

# beyond this |cos| the target sits on the observer-Sun line and the formula degenerates
COLLINEAR_LIMIT = 0.99999999999


def _unit(vec: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vec))
    return vec / norm if norm > 0.0 else vec


class Deflection:
    """Gravitational light bending by the Sun for an astrometric position."""

    def __init__(
        self,
        instant: Instant,
        target_astrometric_position: Vector3,
        ephem,
        context: Context | None = None,
    ) -> None:
        self.instant = instant
        self.target_position = target_astrometric_position.to_array("au")
        self.ephem = ephem
        self.context = resolve(context)

    def _sun_au(self, instant: Instant) -> np.ndarray:
        from .bodies import Sun

        return Sun.geometric_at(instant, self.ephem, context=self.context).position.to_array("au")

    def _earth_au(self) -> np.ndarray:
        from .bodies import Earth

        return Earth.geometric_at(self.instant, self.ephem, context=self.context).position.to_array("au")

    def time_at_closest_approach(self, observer: np.ndarray) -> float:
        c = Velocity.light_speed().aupd
        tt = self.instant.tt
        light_time = float(np.linalg.norm(self.target_position)) / c
        dlt = float(np.dot(_unit(self.target_position), self._sun_au(self.instant) - observer)) / c
        if light_time < dlt:
            return tt - light_time
        if dlt > 0.0:
            return tt - dlt
        return tt

    def deflection_vector(self) -> np.ndarray:
        observer = self._earth_au()
        target = self.target_position
        distance = float(np.linalg.norm(target))
        if distance == 0.0:
            return np.zeros(3)

        sun = self._sun_au(Instant(self.time_at_closest_approach(observer)))
        sun_to_target = observer + target - sun
        sun_to_observer = observer - sun

        u_target = target / distance
        u_sun_target = _unit(sun_to_target)
        u_sun_observer = _unit(sun_to_observer)

        cos_observer = float(np.dot(u_sun_observer, u_target))
        if abs(cos_observer) > COLLINEAR_LIMIT:
            return np.zeros(3)
        cos_target = float(np.dot(u_target, u_sun_target))
        cos_deflector = float(np.dot(u_sun_target, u_sun_observer))

        observer_distance_m = float(np.linalg.norm(sun_to_observer)) * ASTRONOMICAL_UNIT_IN_METERS
        factor = 2.0 * GM_SUN / (LIGHT_SPEED_M_PER_S**2 * observer_distance_m)
        return (
            factor
            * (cos_target * u_sun_observer - cos_observer * u_sun_target)
            / (1.0 + cos_deflector)
            * distance
        )

    @property
    def corrected_position(self) -> Vector3:
        return Vector3.from_array(self.target_position + self.deflection_vector(), Distance, "au")
