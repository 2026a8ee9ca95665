from __future__ import annotations

import math

import numpy as np

from .config import Context, resolve
from .constants import DAYS_PER_JULIAN_CENTURY, J2000
from .coordinates import Equatorial, adjustment_for_arctangent
from .instant import Instant
from .obliquity import MeanObliquity
from .quantities import Angle
from .rotations import chain, r1, r3


def _centuries(tt: float) -> float:
    return (tt - J2000) / DAYS_PER_JULIAN_CENTURY


class Precession:
    """Precession of the equator and ecliptic."""

    def __init__(self, instant: Instant, context: Context | None = None) -> None:
        self.instant = instant
        self.context = resolve(context)

    @classmethod
    def matrix_for(cls, instant: Instant, context: Context | None = None) -> np.ndarray:
        return cls(instant, context).matrix

    @property
    def matrix(self) -> np.ndarray:
        """IAU 2006 (P03) matrix from GCRS/J2000 to the mean equator of date."""
        ctx = self.context
        return ctx.cache.fetch(ctx.key("precession", self.instant), self._compute_matrix)

    def _compute_matrix(self) -> np.ndarray:
        t = _centuries(self.instant.tdb)
        eps0 = MeanObliquity.obliquity_of_reference()

        psi_a = ((((-0.0000000951 * t + 0.000132851) * t - 0.00114045) * t - 1.0790069) * t + 5038.481507) * t
        omega_a = (
            (((0.0000003337 * t - 0.000000467) * t - 0.00772503) * t + 0.0512623) * t - 0.025754
        ) * t + eps0.arcseconds
        chi_a = ((((-0.0000000560 * t + 0.000170663) * t - 0.00121197) * t - 2.3814292) * t + 10.556403) * t

        psi_a = Angle.from_degree_arcseconds(psi_a)
        omega_a = Angle.from_degree_arcseconds(omega_a)
        chi_a = Angle.from_degree_arcseconds(chi_a)

        matrix = chain(r3(chi_a.radians), r1(-omega_a.radians), r3(-psi_a.radians), r1(eps0.radians))
        matrix.setflags(write=False)
        return matrix

    @staticmethod
    def matrix_for_epoch(epoch: float) -> np.ndarray:
        """Classical zeta/z/theta matrix taking the equator of ``epoch`` back to J2000."""
        t = _centuries(epoch)
        zeta = math.radians(0.6406161 * t + 0.0000839 * t * t + 0.000005 * t**3)
        z = math.radians(0.6406161 * t + 0.0003041 * t * t + 0.0000051 * t**3)
        theta = math.radians(0.5567530 * t - 0.0001185 * t * t - 0.0000116 * t**3)

        cx, sx = math.cos(zeta), math.sin(zeta)
        cz, sz = math.cos(z), math.sin(z)
        ct, st = math.cos(theta), math.sin(theta)
        return np.array(
            [
                [cx * ct * cz - sx * sz, cx * ct * sz + sx * cz, cx * st],
                [-sx * ct * cz - cx * sz, -sx * ct * sz + cx * cz, -sx * st],
                [-st * cz, -st * sz, ct],
            ]
        )

    @classmethod
    def for_equatorial_coordinates(cls, coordinates: Equatorial, epoch: float) -> Equatorial:
        """Precess ``coordinates`` from their own epoch to ``epoch``."""
        source = cls.matrix_for_epoch(coordinates.epoch)
        target = cls.matrix_for_epoch(epoch).T

        ra = coordinates.right_ascension
        dec = coordinates.declination
        vec = np.array([ra.cos() * dec.cos(), ra.sin() * dec.cos(), dec.sin()])
        w = target @ (source @ vec)

        right_ascension = adjustment_for_arctangent(w[1], w[0])
        return Equatorial(
            right_ascension=right_ascension,
            declination=Angle.asin(float(np.clip(w[2], -1.0, 1.0))),
            epoch=epoch,
        )
