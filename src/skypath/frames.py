"""Reference-frame snapshots of a body's state.

The pipeline runs in one direction only::

    Geometric -> Astrometric -> (Apparent | MeanOfDate) -> Topocentric

Each builder takes the previous snapshot as its only positional argument.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, ClassVar, Optional

import numpy as np

from .aberration import Aberration2
from .config import Context, resolve
from .constants import J2000
from .coordinates import Ecliptic, Equatorial, Horizontal, adjustment_for_arctangent
from .deflection import Deflection
from .ephem import BodyId
from .instant import Instant
from .light_time import LightTimeDelay
from .nutation import Nutation
from .precession import Precession
from .quantities import Angle, Distance, Velocity
from .refraction import Refraction
from .vector import Vector3


@dataclass(frozen=True)
class ReferenceFrame:
    position: Vector3
    velocity: Vector3
    instant: Instant
    center_identifier: Optional[BodyId]
    target_body: Any

    # frames fixed to the J2000 equator report ecliptic coordinates at J2000
    OF_DATE: ClassVar[bool] = True

    @property
    def epoch(self) -> float:
        return self.instant.tt if self.OF_DATE else J2000

    @cached_property
    def distance(self) -> Distance:
        if self.position.is_zero():
            return Distance.zero()
        return self.position.magnitude

    @cached_property
    def equatorial(self) -> Equatorial:
        if self.distance.is_zero():
            return Equatorial.zero(epoch=self.epoch)
        x, y, z = self.position.values
        r = self.distance.meters
        right_ascension = adjustment_for_arctangent(y, x)
        declination = Angle.asin(max(-1.0, min(1.0, z / r)))
        return Equatorial(right_ascension=right_ascension, declination=declination, epoch=self.epoch)

    @cached_property
    def ecliptic(self) -> Ecliptic:
        if self.distance.is_zero():
            return Ecliptic.zero()
        return self.equatorial.to_ecliptic(epoch=self.epoch)

    def _rotated(self, matrix: np.ndarray) -> tuple[Vector3, Vector3]:
        return self.position.rotate(matrix), self.velocity.rotate(matrix)


@dataclass(frozen=True)
class Geometric(ReferenceFrame):
    """Barycentric state straight from the ephemeris."""

    center_identifier: Optional[BodyId] = BodyId.SOLAR_SYSTEM_BARYCENTER
    target_body: Any = None

    OF_DATE: ClassVar[bool] = False


@dataclass(frozen=True)
class Astrometric(ReferenceFrame):
    """Geocentric position corrected for light time, J2000 equator."""

    center_identifier: Optional[BodyId] = BodyId.EARTH
    target_body: Any = None

    OF_DATE: ClassVar[bool] = False

    @classmethod
    def from_geometric(
        cls,
        geometric: Geometric,
        *,
        ephem,
        earth_geometric: Optional[Geometric] = None,
        context: Context | None = None,
    ) -> "Astrometric":
        ctx = resolve(context)
        if earth_geometric is None:
            from .bodies import Earth  # local import to avoid cycles

            earth_geometric = Earth.geometric_at(geometric.instant, ephem, context=ctx)
        position, velocity = LightTimeDelay(earth_geometric, geometric, ephem, ctx).compute()
        return cls(
            position=position - earth_geometric.position,
            velocity=velocity - earth_geometric.velocity,
            instant=geometric.instant,
            target_body=geometric.target_body,
        )

    def deflected(self, *, ephem, context: Context | None = None) -> "Astrometric":
        """Same snapshot with solar light deflection applied to the position."""
        if self.position.is_zero():
            return self
        corrected = Deflection(self.instant, self.position, ephem, context).corrected_position
        return replace(self, position=corrected)


@dataclass(frozen=True)
class MeanOfDate(ReferenceFrame):
    """Astrometric state precessed to the mean equator and equinox of date."""

    center_identifier: Optional[BodyId] = BodyId.EARTH
    target_body: Any = None

    @classmethod
    def from_astrometric(cls, astrometric: Astrometric, *, context: Context | None = None) -> "MeanOfDate":
        matrix = Precession.matrix_for(astrometric.instant, context)
        position, velocity = astrometric._rotated(matrix)
        return cls(
            position=position,
            velocity=velocity,
            instant=astrometric.instant,
            target_body=astrometric.target_body,
        )


@dataclass(frozen=True)
class Apparent(ReferenceFrame):
    """True equator and equinox of date, corrected for annual aberration."""

    center_identifier: Optional[BodyId] = BodyId.EARTH
    target_body: Any = None

    @classmethod
    def from_astrometric(
        cls,
        astrometric: Astrometric,
        *,
        earth_geometric: Geometric,
        context: Context | None = None,
    ) -> "Apparent":
        ctx = resolve(context)
        instant = astrometric.instant
        # precession first, then nutation
        matrix = Nutation.matrix_for(instant, ctx) @ Precession.matrix_for(instant, ctx)
        position, velocity = astrometric._rotated(matrix)
        if not position.is_zero():
            # Earth's velocity goes into the same frame as the position
            earth_velocity = earth_geometric.velocity.rotate(matrix)
            position = Aberration2(position, earth_velocity).corrected_position
        return cls(
            position=position,
            velocity=velocity,
            instant=instant,
            target_body=astrometric.target_body,
        )


@dataclass(frozen=True)
class Topocentric(ReferenceFrame):
    """Apparent state seen from a site on the Earth's surface."""

    center_identifier: Optional[BodyId] = None
    target_body: Any = None
    observer: Any = None

    @classmethod
    def from_apparent(cls, apparent: Apparent, *, observer, context: Context | None = None) -> "Topocentric":
        instant = apparent.instant
        matrix = observer.earth_fixed_rotation_matrix_for(instant, context=context)
        observer_position = observer.geocentric_position.rotate(matrix)
        observer_velocity = observer.geocentric_velocity.rotate(matrix)
        return cls(
            position=apparent.position - observer_position,
            velocity=apparent.velocity - observer_velocity,
            instant=instant,
            target_body=apparent.target_body,
            observer=observer,
        )

    def _require_observer(self, what: str) -> None:
        if self.observer is None:
            raise ValueError(f"{what} requires an observer")

    @cached_property
    def horizontal(self) -> Horizontal:
        self._require_observer("horizontal coordinates")
        return self.equatorial.to_horizontal(self.instant, self.observer.latitude, self.observer.longitude)

    @cached_property
    def refracted_horizontal(self) -> Horizontal:
        """Horizontal position lifted by refraction at the observer's pressure and temperature."""
        self._require_observer("refraction")
        return Refraction.correct_horizontal_coordinates(
            self.horizontal,
            pressure=self.observer.pressure,
            temperature=self.observer.temperature,
        )

    @property
    def hour_angle(self) -> Angle:
        self._require_observer("the hour angle")
        return self.equatorial.compute_hour_angle(self.instant, self.observer.longitude)


def zero_state() -> tuple[Vector3, Vector3]:
    return Vector3.zero(Distance), Vector3.zero(Velocity)


def angular_separation(a: ReferenceFrame, b: ReferenceFrame) -> Angle:
    """Angle between two position vectors; zero if either is the zero vector."""
    ua, ub = a.position.unit(), b.position.unit()
    if not ua.any() or not ub.any():
        return Angle.zero()
    return Angle(math.atan2(float(np.linalg.norm(np.cross(ua, ub))), float(np.dot(ua, ub))))
