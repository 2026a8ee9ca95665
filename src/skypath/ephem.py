"""Ephemeris sources.

Every source answers ``ephem[center, target]`` with a segment whose
``compute_and_differentiate(tt)`` returns position in km and velocity in
km/day, both as length-3 arrays.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import NamedTuple, Protocol, Union

import numpy as np
import requests
from astroquery.jplhorizons import Horizons
from jplephem.exceptions import OutOfRangeError
from jplephem.spk import SPK

from .constants import AU_KM
from .errors import EphemerisError

logger = logging.getLogger(__name__)

NAIF_SPK_URL = "https://naif.jpl.nasa.gov/pub/naif/generic_kernels/spk/planets/{name}"
SUPPORTED_DATA_TYPES = (2, 3)
DOWNLOAD_TIMEOUT_S = 60
_CHUNK_SIZE = 1 << 20


class BodyId(IntEnum):
    """NAIF integer codes of the bodies the pipeline knows."""

    SOLAR_SYSTEM_BARYCENTER = 0
    MERCURY_BARYCENTER = 1
    VENUS_BARYCENTER = 2
    EARTH_MOON_BARYCENTER = 3
    MARS_BARYCENTER = 4
    JUPITER_BARYCENTER = 5
    SATURN_BARYCENTER = 6
    URANUS_BARYCENTER = 7
    NEPTUNE_BARYCENTER = 8
    SUN = 10
    MERCURY = 199
    VENUS = 299
    MOON = 301
    EARTH = 399


class SegmentState(NamedTuple):
    position_km: np.ndarray
    velocity_km_per_day: np.ndarray


class Segment(Protocol):
    def compute_and_differentiate(self, tt: float) -> tuple[np.ndarray, np.ndarray]: ...


class Ephemeris(Protocol):
    def __getitem__(self, pair: tuple[int, int]) -> Segment: ...


class SpkSegment:
    """One (center, target) segment of an SPK kernel."""

    def __init__(self, segment) -> None:
        self._segment = segment
        self.center = int(segment.center)
        self.target = int(segment.target)
        self.data_type = int(segment.data_type)

    def compute_and_differentiate(self, tt: float) -> tuple[np.ndarray, np.ndarray]:
        try:
            position, velocity = self._segment.compute_and_differentiate(tt)
        except OutOfRangeError as exc:
            raise EphemerisError(
                f"segment {self.center}->{self.target} does not cover JD {tt}"
            ) from exc
        return np.asarray(position, dtype=float), np.asarray(velocity, dtype=float)

    def state_at(self, tt: float) -> SegmentState:
        return SegmentState(*self.compute_and_differentiate(tt))

    def __repr__(self) -> str:
        return f"SpkSegment({self.center}->{self.target}, type {self.data_type})"


class SpkEphemeris:
    """A JPL SPK kernel opened through jplephem."""

    def __init__(self, spk: SPK, path: Union[str, Path, None] = None) -> None:
        self._spk = spk
        self.path = Path(path) if path is not None else None
        self._segments = {
            (int(seg.center), int(seg.target)): SpkSegment(seg) for seg in spk.segments
        }

    @classmethod
    def open(cls, path: Union[str, Path]) -> "SpkEphemeris":
        return cls(SPK.open(str(path)), path)

    @property
    def pairs(self) -> list[tuple[int, int]]:
        return list(self._segments)

    @property
    def data_types(self) -> set[int]:
        return {seg.data_type for seg in self._segments.values()}

    def __getitem__(self, pair: tuple[int, int]) -> SpkSegment:
        center, target = pair
        try:
            return self._segments[(int(center), int(target))]
        except KeyError:
            raise EphemerisError(f"no SPK segment for center {center} and target {target}") from None

    def __contains__(self, pair: object) -> bool:
        return pair in self._segments

    def close(self) -> None:
        self._spk.close()

    def __enter__(self) -> "SpkEphemeris":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def load_ephem(path: Union[str, Path]) -> SpkEphemeris:
    """Open an SPK kernel, accepting only Chebyshev data types 2 and 3."""
    try:
        ephem = SpkEphemeris.open(path)
    except (OSError, ValueError) as exc:
        raise EphemerisError(f"{path} is not a readable SPK kernel: {exc}") from exc
    unsupported = ephem.data_types - set(SUPPORTED_DATA_TYPES)
    if not ephem.pairs or unsupported:
        ephem.close()
        accepted = ", ".join(str(t) for t in SUPPORTED_DATA_TYPES)
        raise EphemerisError(f"{path} is not a valid type. Accepted: {accepted}")
    logger.info("loaded SPK kernel %s with %d segments", path, len(ephem.pairs))
    return ephem


def download_ephem(name: str, target: Union[str, Path], *, session: requests.Session | None = None) -> bool:
    """Fetch a planetary kernel (e.g. ``de440s.bsp``) from NAIF into ``target``."""
    url = NAIF_SPK_URL.format(name=name)
    target = Path(target)
    http = session or requests
    logger.info("downloading %s to %s", url, target)
    try:
        resp = http.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_S)
        resp.raise_for_status()
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as fh:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                fh.write(chunk)
    except requests.RequestException as exc:
        logger.warning("download of %s failed: %s", url, exc)
        return False
    return True


@lru_cache(maxsize=2048)
def _horizons_state(center: int, target: int, tt: float) -> tuple[tuple[float, ...], tuple[float, ...]]:
    obj = Horizons(id=str(target), location=f"500@{center}", epochs=tt)
    vec = obj.vectors(refplane="earth")
    row = vec[0]
    position = tuple(float(row[k]) * AU_KM for k in ("x", "y", "z"))
    velocity = tuple(float(row[k]) * AU_KM for k in ("vx", "vy", "vz"))
    return position, velocity


class HorizonsSegment:
    def __init__(self, center: int, target: int) -> None:
        self.center = int(center)
        self.target = int(target)

    def compute_and_differentiate(self, tt: float) -> tuple[np.ndarray, np.ndarray]:
        try:
            position, velocity = _horizons_state(self.center, self.target, float(tt))
        except (requests.RequestException, ValueError) as exc:
            raise EphemerisError(
                f"Horizons query {self.center}->{self.target} at JD {tt} failed: {exc}"
            ) from exc
        return np.array(position), np.array(velocity)

    def state_at(self, tt: float) -> SegmentState:
        return SegmentState(*self.compute_and_differentiate(tt))


class HorizonsEphemeris:
    """Vectors from JPL Horizons, ICRF/equatorial axes, km and km/day."""

    def __getitem__(self, pair: tuple[int, int]) -> HorizonsSegment:
        center, target = pair
        return HorizonsSegment(center, target)
