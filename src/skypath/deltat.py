"""Time scale offsets: ΔT (TT - UT1) and leap seconds (TAI - UTC)."""
from __future__ import annotations

import bisect
import warnings
from typing import Sequence

import erfa

from .constants import DAYS_PER_JULIAN_YEAR, J2000

# 1960-01-01, where ERFA's TAI - UTC table starts
ERFA_FIRST_UTC_JD = 2436934.5

# (decimal year, ΔT seconds)
DELTA_T_TABLE: tuple[tuple[float, float], ...] = (
    (1900.0, -2.72),
    (1905.0, 3.86),
    (1910.0, 10.46),
    (1915.0, 17.20),
    (1920.0, 21.16),
    (1925.0, 23.62),
    (1930.0, 24.02),
    (1935.0, 23.93),
    (1940.0, 24.33),
    (1945.0, 26.77),
    (1950.0, 29.15),
    (1955.0, 31.1),
    (1960.0, 33.15),
    (1965.0, 35.73),
    (1970.0, 40.18),
    (1975.0, 45.48),
    (1980.0, 50.54),
    (1985.0, 54.34),
    (1990.0, 56.86),
    (1995.0, 60.78),
    (2000.0, 63.83),
    (2005.0, 64.69),
    (2010.0, 66.07),
    (2015.0, 67.64),
    (2020.0, 69.36),
    (2022.0, 69.29),
    (2023.0, 69.20),
    (2024.0, 69.18),
    (2025.0, 69.14),
)


def decimal_year(jd: float) -> float:
    return 2000.0 + (jd - J2000) / DAYS_PER_JULIAN_YEAR


def delta_t(jd: float, table: Sequence[tuple[float, float]] = DELTA_T_TABLE) -> float:
    """ΔT in seconds, linearly interpolated and clamped to the table's ends."""
    if not table:
        return 0.0
    year = decimal_year(jd)
    years = [row[0] for row in table]
    if year <= years[0]:
        return float(table[0][1])
    if year >= years[-1]:
        return float(table[-1][1])
    idx = bisect.bisect_right(years, year)
    (y0, v0), (y1, v1) = table[idx - 1], table[idx]
    frac = (year - y0) / (y1 - y0)
    return float(v0 + frac * (v1 - v0))


def leap_seconds_for(jd: float) -> float:
    """TAI - UTC in seconds for a UTC Julian date, from ERFA; 0.0 before 1960."""
    if jd < ERFA_FIRST_UTC_JD:
        return 0.0
    year, month, day, fraction = erfa.jd2cal(jd, 0.0)
    with warnings.catch_warnings():
        # past the end of ERFA's table the year is flagged dubious but still answered
        warnings.simplefilter("ignore", erfa.ErfaWarning)
        return float(erfa.dat(year, month, day, fraction))
