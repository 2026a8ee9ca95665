from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .constants import DEGREES_PER_CIRCLE, J2000
from .obliquity import MeanObliquity
from .quantities import Angle


def _as_float(value) -> float:
    return value.radians if isinstance(value, Angle) else float(value)


def adjustment_for_arctangent(y, x, angle: Optional[Angle] = None) -> Angle:
    """Put ``atan(y / x)`` into the quadrant of ``(x, y)``; result in [0, 360)."""
    y = _as_float(y)
    x = _as_float(x)
    if x == 0.0:
        if y > 0.0:
            return Angle.from_degrees(90.0)
        if y < 0.0:
            return Angle.from_degrees(270.0)
        return Angle.zero()
    if angle is None:
        angle = Angle.atan(y / x)
    if y >= 0.0 and x > 0.0:
        return angle
    if y < 0.0 and x > 0.0:
        return Angle.from_degrees(angle.degrees + DEGREES_PER_CIRCLE)
    return Angle.from_degrees(angle.degrees + DEGREES_PER_CIRCLE / 2)


@dataclass(frozen=True)
class Equatorial:
    right_ascension: Angle
    declination: Angle
    epoch: float = J2000
    hour_angle: Optional[Angle] = None

    @classmethod
    def zero(cls, epoch: float = J2000) -> "Equatorial":
        return cls(right_ascension=Angle.zero(), declination=Angle.zero(), epoch=epoch)

    def compute_hour_angle(self, instant, longitude: Angle) -> Angle:
        from .sidereal import local_apparent_sidereal_time

        lst = local_apparent_sidereal_time(instant, longitude)
        return Angle.from_hours((lst.hours - self.right_ascension.hours) % 24.0)

    def to_horizontal(self, instant, latitude: Angle, longitude: Angle) -> "Horizontal":
        ha = self.hour_angle if self.hour_angle is not None else self.compute_hour_angle(instant, longitude)
        sin_alt = self.declination.sin() * latitude.sin() + self.declination.cos() * latitude.cos() * ha.cos()
        altitude = Angle.asin(max(-1.0, min(1.0, sin_alt)))

        denom = latitude.cos() * altitude.cos()
        if denom == 0.0:
            # zenith, nadir or a pole: azimuth is undefined
            azimuth = Angle.zero()
        else:
            cos_az = (self.declination.sin() - latitude.sin() * altitude.sin()) / denom
            azimuth = Angle.acos(max(-1.0, min(1.0, cos_az)))
            if ha.sin() > 0.0:
                azimuth = Angle.from_degrees(DEGREES_PER_CIRCLE - azimuth.degrees)
        return Horizontal(azimuth=azimuth, altitude=altitude, latitude=latitude, longitude=longitude)

    def to_ecliptic(self, epoch: Optional[float] = None) -> "Ecliptic":
        epoch = self.epoch if epoch is None else epoch
        eps = MeanObliquity.for_epoch(epoch)
        ra = self.right_ascension
        dec = self.declination

        y = ra.sin() * eps.cos() + dec.tan() * eps.sin()
        x = ra.cos()
        longitude = adjustment_for_arctangent(y, x)
        latitude = Angle.asin(
            max(-1.0, min(1.0, dec.sin() * eps.cos() - dec.cos() * eps.sin() * ra.sin()))
        )
        return Ecliptic(latitude=latitude, longitude=longitude)

    def to_epoch(self, epoch: float) -> "Equatorial":
        from .precession import Precession

        return Precession.for_equatorial_coordinates(self, epoch)


@dataclass(frozen=True)
class Ecliptic:
    latitude: Angle
    longitude: Angle

    @classmethod
    def zero(cls) -> "Ecliptic":
        return cls(latitude=Angle.zero(), longitude=Angle.zero())

    def to_equatorial(self, epoch: float = J2000) -> Equatorial:
        eps = MeanObliquity.for_epoch(epoch)
        lon = self.longitude
        lat = self.latitude

        y = lon.sin() * eps.cos() - lat.tan() * eps.sin()
        x = lon.cos()
        right_ascension = adjustment_for_arctangent(y, x)
        declination = Angle.asin(
            max(-1.0, min(1.0, lat.sin() * eps.cos() + lat.cos() * eps.sin() * lon.sin()))
        )
        return Equatorial(right_ascension=right_ascension, declination=declination, epoch=epoch)


@dataclass(frozen=True)
class Horizontal:
    azimuth: Angle
    altitude: Angle
    latitude: Angle
    longitude: Angle

    def to_equatorial(self, instant) -> Equatorial:
        from .sidereal import local_apparent_sidereal_time

        lat = self.latitude
        sin_dec = self.altitude.sin() * lat.sin() + self.altitude.cos() * lat.cos() * self.azimuth.cos()
        declination = Angle.asin(max(-1.0, min(1.0, sin_dec)))

        denom = lat.cos() * declination.cos()
        if denom == 0.0:
            ha_deg = 0.0
        else:
            cos_ha = (self.altitude.sin() - lat.sin() * declination.sin()) / denom
            ha_deg = math.degrees(math.acos(max(-1.0, min(1.0, cos_ha))))
            if self.azimuth.sin() > 0.0:
                ha_deg = DEGREES_PER_CIRCLE - ha_deg

        lst = local_apparent_sidereal_time(instant, self.longitude)
        ra_hours = (lst.hours - ha_deg / 15.0) % 24.0
        return Equatorial(
            right_ascension=Angle.from_hours(ra_hours),
            declination=declination,
            epoch=instant.tt,
        )
