"""Immutable physical quantities with a single canonical unit.

Distance is stored in meters, Velocity in meters per second, AngularVelocity in
radians per second and Angle in radians. Conversions always build a new value.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import ClassVar, Mapping

from astropy import units as u

from .constants import (
    ARCSECONDS_PER_DEGREE,
    ASTRONOMICAL_UNIT_IN_METERS,
    KILOMETER_IN_METERS,
    LIGHT_SPEED_M_PER_S,
    PARSEC_IN_METERS,
    SECONDS_PER_DAY,
    SECONDS_PER_JULIAN_YEAR,
)
from .errors import UnsupportedFormatError

__all__ = ["Angle", "AngularVelocity", "Distance", "Velocity"]


def _check_number(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise UnsupportedFormatError(f"{name} must be a real number, got {type(value).__name__}")
    return float(value)


class _Quantity:
    # canonical-units-per-unit, e.g. {"km": 1000.0} for Distance
    UNITS: ClassVar[Mapping[str, float]] = {}
    ASTROPY_UNIT: ClassVar[u.UnitBase]

    @property
    def value(self) -> float:
        return getattr(self, self._field)

    @classmethod
    def zero(cls):
        return cls(0.0)

    @classmethod
    def from_unit(cls, amount: float, unit: str):
        try:
            factor = cls.UNITS[unit]
        except KeyError:
            raise UnsupportedFormatError(f"Unknown {cls.__name__} unit '{unit}'") from None
        return cls(_check_number(amount, unit) * factor)

    def to(self, unit: str) -> float:
        try:
            factor = self.UNITS[unit]
        except KeyError:
            raise UnsupportedFormatError(
                f"Unknown {type(self).__name__} unit '{unit}'"
            ) from None
        return self.value / factor

    @classmethod
    def from_quantity(cls, quantity: u.Quantity):
        return cls(float(quantity.to(cls.ASTROPY_UNIT).value))

    def to_quantity(self) -> u.Quantity:
        return self.value * self.ASTROPY_UNIT

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.value + other.value)

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.value - other.value)

    def __neg__(self):
        return type(self)(-self.value)

    def __abs__(self):
        return type(self)(abs(self.value))

    def __mul__(self, factor):
        if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
            return NotImplemented
        return type(self)(self.value * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if isinstance(divisor, bool) or not isinstance(divisor, numbers.Real):
            return NotImplemented
        return type(self)(self.value / float(divisor))

    def is_zero(self) -> bool:
        return self.value == 0.0

    def is_positive(self) -> bool:
        return self.value > 0.0

    def is_negative(self) -> bool:
        return self.value < 0.0


@dataclass(frozen=True, order=True)
class Distance(_Quantity):
    meters: float

    _field: ClassVar[str] = "meters"
    UNITS: ClassVar[Mapping[str, float]] = {
        "m": 1.0,
        "km": KILOMETER_IN_METERS,
        "au": ASTRONOMICAL_UNIT_IN_METERS,
        "pc": PARSEC_IN_METERS,
    }
    ASTROPY_UNIT: ClassVar[u.UnitBase] = u.m

    def __post_init__(self) -> None:
        object.__setattr__(self, "meters", _check_number(self.meters, "meters"))

    @classmethod
    def from_meters(cls, meters: float) -> "Distance":
        return cls(meters)

    @classmethod
    def from_km(cls, kilometers: float) -> "Distance":
        return cls.from_unit(kilometers, "km")

    @classmethod
    def from_au(cls, astronomical_units: float) -> "Distance":
        return cls.from_unit(astronomical_units, "au")

    @classmethod
    def from_parsecs(cls, parsecs: float) -> "Distance":
        return cls.from_unit(parsecs, "pc")

    @property
    def m(self) -> float:
        return self.meters

    @property
    def km(self) -> float:
        return self.to("km")

    @property
    def au(self) -> float:
        return self.to("au")

    @property
    def pc(self) -> float:
        return self.to("pc")


@dataclass(frozen=True, order=True)
class Velocity(_Quantity):
    meters_per_second: float

    _field: ClassVar[str] = "meters_per_second"
    UNITS: ClassVar[Mapping[str, float]] = {
        "mps": 1.0,
        "kmps": KILOMETER_IN_METERS,
        "kmpd": KILOMETER_IN_METERS / SECONDS_PER_DAY,
        "aupd": ASTRONOMICAL_UNIT_IN_METERS / SECONDS_PER_DAY,
    }
    ASTROPY_UNIT: ClassVar[u.UnitBase] = u.m / u.s

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "meters_per_second", _check_number(self.meters_per_second, "meters_per_second")
        )

    @classmethod
    def light_speed(cls) -> "Velocity":
        return cls(LIGHT_SPEED_M_PER_S)

    @classmethod
    def from_mps(cls, meters_per_second: float) -> "Velocity":
        return cls(meters_per_second)

    @classmethod
    def from_kmps(cls, kilometers_per_second: float) -> "Velocity":
        return cls.from_unit(kilometers_per_second, "kmps")

    @classmethod
    def from_kmpd(cls, kilometers_per_day: float) -> "Velocity":
        return cls.from_unit(kilometers_per_day, "kmpd")

    @classmethod
    def from_aupd(cls, astronomical_units_per_day: float) -> "Velocity":
        return cls.from_unit(astronomical_units_per_day, "aupd")

    @property
    def mps(self) -> float:
        return self.meters_per_second

    @property
    def kmps(self) -> float:
        return self.to("kmps")

    @property
    def kmpd(self) -> float:
        return self.to("kmpd")

    @property
    def aupd(self) -> float:
        return self.to("aupd")


_MAS_PER_YEAR = math.radians(1.0 / ARCSECONDS_PER_DEGREE / 1000.0) / SECONDS_PER_JULIAN_YEAR


@dataclass(frozen=True, order=True)
class AngularVelocity(_Quantity):
    radians_per_second: float

    _field: ClassVar[str] = "radians_per_second"
    UNITS: ClassVar[Mapping[str, float]] = {
        "rps": 1.0,
        "mas_per_year": _MAS_PER_YEAR,
    }
    ASTROPY_UNIT: ClassVar[u.UnitBase] = u.rad / u.s

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "radians_per_second", _check_number(self.radians_per_second, "radians_per_second")
        )

    @classmethod
    def from_radians_per_second(cls, radians_per_second: float) -> "AngularVelocity":
        return cls(radians_per_second)

    @classmethod
    def from_milliarcseconds_per_year(cls, mas_per_year: float) -> "AngularVelocity":
        return cls.from_unit(mas_per_year, "mas_per_year")

    @property
    def rps(self) -> float:
        return self.radians_per_second

    @property
    def mas_per_year(self) -> float:
        return self.to("mas_per_year")


@dataclass(frozen=True, order=True)
class Angle(_Quantity):
    radians: float

    _field: ClassVar[str] = "radians"
    UNITS: ClassVar[Mapping[str, float]] = {
        "rad": 1.0,
        "deg": math.pi / 180.0,
        "hours": math.pi / 12.0,
        "arcsec": math.pi / 180.0 / ARCSECONDS_PER_DEGREE,
        "mas": math.pi / 180.0 / ARCSECONDS_PER_DEGREE / 1000.0,
    }
    ASTROPY_UNIT: ClassVar[u.UnitBase] = u.rad

    def __post_init__(self) -> None:
        object.__setattr__(self, "radians", _check_number(self.radians, "radians"))

    @classmethod
    def from_radians(cls, radians: float) -> "Angle":
        return cls(radians)

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        return cls.from_unit(degrees, "deg")

    @classmethod
    def from_hours(cls, hours: float) -> "Angle":
        return cls.from_unit(hours, "hours")

    @classmethod
    def from_degree_arcseconds(cls, arcseconds: float) -> "Angle":
        return cls.from_unit(arcseconds, "arcsec")

    @classmethod
    def from_degree_milliarcseconds(cls, milliarcseconds: float) -> "Angle":
        return cls.from_unit(milliarcseconds, "mas")

    @classmethod
    def from_dms(cls, degrees: float, minutes: float, seconds: float) -> "Angle":
        sign = -1.0 if degrees < 0 or (degrees == 0 and (minutes < 0 or seconds < 0)) else 1.0
        total = abs(degrees) + abs(minutes) / 60.0 + abs(seconds) / ARCSECONDS_PER_DEGREE
        return cls.from_degrees(sign * total)

    @classmethod
    def asin(cls, ratio: float) -> "Angle":
        return cls(math.asin(ratio))

    @classmethod
    def acos(cls, ratio: float) -> "Angle":
        return cls(math.acos(ratio))

    @classmethod
    def atan(cls, ratio: float) -> "Angle":
        return cls(math.atan(ratio))

    @property
    def degrees(self) -> float:
        return self.to("deg")

    @property
    def hours(self) -> float:
        return self.to("hours")

    @property
    def arcseconds(self) -> float:
        return self.to("arcsec")

    @property
    def milliarcseconds(self) -> float:
        return self.to("mas")

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)

    def normalized(self) -> "Angle":
        """Wrap into [0, 360) degrees."""
        return Angle(math.fmod(math.fmod(self.radians, 2.0 * math.pi) + 2.0 * math.pi, 2.0 * math.pi))

    def to_astropy(self):
        from astropy.coordinates import Angle as AstropyAngle

        return AstropyAngle(self.radians, unit=u.rad)

