from __future__ import annotations

import astropy.constants as const
from astropy import units as u

KILOMETER_IN_METERS = 1000.0
ASTRONOMICAL_UNIT_IN_METERS = float(const.au.to(u.m).value)
PARSEC_IN_METERS = float(const.pc.to(u.m).value)
AU_KM = ASTRONOMICAL_UNIT_IN_METERS / KILOMETER_IN_METERS

LIGHT_SPEED_M_PER_S = float(const.c.to(u.m / u.s).value)
C_KM_S = LIGHT_SPEED_M_PER_S / KILOMETER_IN_METERS
GM_SUN = float(const.GM_sun.to(u.m**3 / u.s**2).value)  # m^3 / s^2

SECONDS_PER_DAY = 86400.0
DAY_S = SECONDS_PER_DAY
DAYS_PER_JULIAN_CENTURY = 36525.0
DAYS_PER_JULIAN_YEAR = 365.25
SECONDS_PER_JULIAN_YEAR = DAYS_PER_JULIAN_YEAR * SECONDS_PER_DAY

DEGREES_PER_CIRCLE = 360.0
ARCSECONDS_PER_DEGREE = 3600.0

J2000 = 2451545.0
TT_TAI_OFFSET_S = 32.184

EARTH_ANGULAR_VELOCITY_RAD_S = 7.2921159e-5
