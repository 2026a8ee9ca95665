from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import datetime, timezone

import erfa
from astropy.time import Time

from .constants import SECONDS_PER_DAY, TT_TAI_OFFSET_S
from .deltat import delta_t, leap_seconds_for
from .errors import UnsupportedFormatError
from .quantities import Angle


@dataclass(frozen=True, order=True)
class Instant:
    """A moment on the Terrestrial Time scale, stored as a Julian date."""

    tt: float

    def __post_init__(self) -> None:
        if isinstance(self.tt, bool) or not isinstance(self.tt, numbers.Real):
            raise UnsupportedFormatError(
                f"Terrestrial time must be a real number, got {type(self.tt).__name__}"
            )
        object.__setattr__(self, "tt", float(self.tt))

    @classmethod
    def from_terrestrial_time(cls, tt: float) -> "Instant":
        return cls(tt)

    @classmethod
    def from_time(cls, when: datetime) -> "Instant":
        """Civil time is taken as UT; TT = JD(UT) + ΔT."""
        if not isinstance(when, datetime):
            raise UnsupportedFormatError(f"Expected a datetime, got {type(when).__name__}")
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc).replace(tzinfo=None)
        jd_ut = float(Time(when, scale="utc").jd)
        return cls(jd_ut + delta_t(jd_ut) / SECONDS_PER_DAY)

    @classmethod
    def from_astropy(cls, time: Time) -> "Instant":
        return cls(float(time.tt.jd))

    @property
    def terrestrial_time(self) -> float:
        return self.tt

    @property
    def julian_date(self) -> float:
        return self.tt

    @property
    def delta_t(self) -> float:
        """TT - UT1 in seconds."""
        return delta_t(self.tt)

    @property
    def ut1(self) -> float:
        return self.tt - self.delta_t / SECONDS_PER_DAY

    @property
    def tai(self) -> float:
        return self.tt - TT_TAI_OFFSET_S / SECONDS_PER_DAY

    @property
    def tdb(self) -> float:
        # TT - TDB stays under 2 ms; not modelled
        return self.tt

    @property
    def utc(self) -> float:
        tai = self.tai
        estimate = tai - leap_seconds_for(tai) / SECONDS_PER_DAY
        # the offset steps at UTC midnight, so look it up again on the UTC side
        return tai - leap_seconds_for(estimate) / SECONDS_PER_DAY

    @property
    def gmst(self) -> Angle:
        return Angle(float(erfa.gmst06(self.ut1, 0.0, self.tt, 0.0)))

    def diff(self, other: "Instant") -> float:
        """Difference in days."""
        return self.tt - other.tt

    def to_datetime(self) -> datetime:
        """UT civil time (the inverse of from_time), timezone-aware."""
        return Time(self.ut1, format="jd", scale="utc").to_datetime(timezone=timezone.utc)

    def to_astropy(self) -> Time:
        return Time(self.tt, format="jd", scale="tt")

    def __repr__(self) -> str:
        return f"Instant(tt={self.tt!r})"
