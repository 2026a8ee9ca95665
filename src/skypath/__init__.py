from .bodies import BODIES, Earth, Jupiter, Mars, Mercury, Moon, Neptune, Saturn, SolarSystemBody, Sun, Uranus, Venus
from .cache import LRUCache, NullCache
from .config import Configuration, Context
from .constants import AU_KM, C_KM_S, DAY_S, GM_SUN
from .coordinates import Ecliptic, Equatorial, Horizontal
from .ephem import BodyId, HorizonsEphemeris, SpkEphemeris, download_ephem, load_ephem
from .errors import (
    CalculationError,
    EphemerisError,
    IncompatibleArgumentsError,
    SkypathError,
    UnsupportedFormatError,
)
from .frames import Apparent, Astrometric, Geometric, MeanOfDate, ReferenceFrame, Topocentric
from .instant import Instant
from .observer import Observer
from .quantities import Angle, AngularVelocity, Distance, Velocity
from .refraction import Refraction
from .vector import Vector3

__all__ = [
    "AU_KM",
    "Angle",
    "AngularVelocity",
    "Apparent",
    "Astrometric",
    "BODIES",
    "BodyId",
    "C_KM_S",
    "CalculationError",
    "Configuration",
    "Context",
    "DAY_S",
    "Distance",
    "Earth",
    "Ecliptic",
    "EphemerisError",
    "Equatorial",
    "GM_SUN",
    "Geometric",
    "Horizontal",
    "HorizonsEphemeris",
    "IncompatibleArgumentsError",
    "Instant",
    "Jupiter",
    "LRUCache",
    "Mars",
    "MeanOfDate",
    "Mercury",
    "Moon",
    "Neptune",
    "NullCache",
    "Observer",
    "ReferenceFrame",
    "Refraction",
    "Saturn",
    "SkypathError",
    "SolarSystemBody",
    "SpkEphemeris",
    "Sun",
    "Topocentric",
    "UnsupportedFormatError",
    "Uranus",
    "Vector3",
    "Velocity",
    "Venus",
    "download_ephem",
    "load_ephem",
]
