from __future__ import annotations

from .config import Context
from .instant import Instant
from .nutation import Nutation
from .obliquity import MeanObliquity
from .quantities import Angle


def greenwich_mean_sidereal_time(instant: Instant) -> Angle:
    return instant.gmst.normalized()


def equation_of_the_equinoxes(instant: Instant, context: Context | None = None) -> Angle:
    nutation = Nutation(instant, context)
    true_obliquity = MeanObliquity.for_epoch(instant.tt) + nutation.nutation_in_obliquity
    return nutation.nutation_in_longitude * true_obliquity.cos()


def greenwich_apparent_sidereal_time(instant: Instant, context: Context | None = None) -> Angle:
    return (instant.gmst + equation_of_the_equinoxes(instant, context)).normalized()


def local_mean_sidereal_time(instant: Instant, longitude: Angle) -> Angle:
    """East longitudes are positive."""
    return (instant.gmst + longitude).normalized()


def local_apparent_sidereal_time(instant: Instant, longitude: Angle, context: Context | None = None) -> Angle:
    return (greenwich_apparent_sidereal_time(instant, context) + longitude).normalized()
