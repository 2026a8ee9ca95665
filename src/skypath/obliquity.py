from __future__ import annotations

from .constants import DAYS_PER_JULIAN_CENTURY, J2000
from .quantities import Angle

# IAU 2006 obliquity of the ecliptic at J2000, arcseconds
OBLIQUITY_OF_REFERENCE_ARCSEC = 84381.406

_COEFFS_ARCSEC = (-46.836769, -0.0001831, 0.00200340, -0.000000576, -0.0000000434)


class MeanObliquity:
    """IAU 2006 mean obliquity of the ecliptic."""

    @staticmethod
    def obliquity_of_reference() -> Angle:
        return Angle.from_degree_arcseconds(OBLIQUITY_OF_REFERENCE_ARCSEC)

    @classmethod
    def for_epoch(cls, tt: float) -> Angle:
        if tt == J2000:
            return cls.obliquity_of_reference()
        t = (tt - J2000) / DAYS_PER_JULIAN_CENTURY
        c1, c2, c3, c4, c5 = _COEFFS_ARCSEC
        arcsec = OBLIQUITY_OF_REFERENCE_ARCSEC + t * (c1 + t * (c2 + t * (c3 + t * (c4 + t * c5))))
        return Angle.from_degree_arcseconds(arcsec)


class TrueObliquity:
    """Mean obliquity plus nutation in obliquity."""

    @classmethod
    def for_epoch(cls, tt: float, context=None) -> Angle:
        from .instant import Instant
        from .nutation import Nutation  # local import to avoid cycles

        nutation = Nutation(Instant(tt), context=context)
        return MeanObliquity.for_epoch(tt) + nutation.nutation_in_obliquity
