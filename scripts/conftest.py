from __future__ import annotations

import numpy as np
import pytest

from skypath.constants import AU_KM
from skypath.ephem import BodyId
from skypath.instant import Instant

# 2025-02-07 12:00 TT; the linear fixtures are anchored here
EPOCH_TT = 2460714.0


class LinearSegment:
    """State moving in a straight line from ``position_km`` at ``epoch``."""

    def __init__(self, position_km, velocity_km_per_day=(0.0, 0.0, 0.0), epoch=EPOCH_TT):
        self.position_km = np.asarray(position_km, dtype=float)
        self.velocity_km_per_day = np.asarray(velocity_km_per_day, dtype=float)
        self.epoch = epoch

    def compute_and_differentiate(self, tt):
        return self.position_km + self.velocity_km_per_day * (tt - self.epoch), self.velocity_km_per_day.copy()


class LinearEphemeris:
    def __init__(self, segments):
        self.segments = {(int(c), int(t)): seg for (c, t), seg in segments.items()}
        self.calls = 0

    def __getitem__(self, pair):
        center, target = pair
        self.calls += 1
        return self.segments[(int(center), int(target))]


class FixedSegment:
    def __init__(self, position_km, velocity_km_per_day):
        self.state = (np.asarray(position_km, dtype=float), np.asarray(velocity_km_per_day, dtype=float))

    def compute_and_differentiate(self, tt):
        return self.state


class SequenceEphemeris:
    """Hands out the given states in order, repeating the last one."""

    def __init__(self, states):
        self.states = list(states)
        self.index = 0

    def __getitem__(self, pair):
        state = self.states[min(self.index, len(self.states) - 1)]
        self.index += 1
        return FixedSegment(*state)


def _au(*xyz):
    return [v * AU_KM for v in xyz]


@pytest.fixture
def linear_ephem():
    return LinearEphemeris(
        {
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.SUN): LinearSegment(
                [-1.1e6, -4.0e5, -1.5e5], [5.0e2, -1.1e3, -4.8e2]
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.EARTH_MOON_BARYCENTER): LinearSegment(
                _au(-0.18, 0.89, 0.39), _au(-0.0172, -0.0029, -0.00126)
            ),
            (BodyId.EARTH_MOON_BARYCENTER, BodyId.EARTH): LinearSegment(
                [-1.2e3, -4.2e3, -1.6e3], [9.0e1, -2.0e1, -1.0e1]
            ),
            (BodyId.EARTH_MOON_BARYCENTER, BodyId.MOON): LinearSegment(
                [1.0e5, 3.4e5, 1.3e5], [-8.0e4, 2.0e4, 1.0e4]
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.MERCURY_BARYCENTER): LinearSegment(
                _au(-0.13, -0.40, -0.20), _au(0.021, -0.004, -0.004)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.VENUS_BARYCENTER): LinearSegment(
                _au(-0.72, -0.03, 0.03), _au(0.0006, -0.0185, -0.0084)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.MARS_BARYCENTER): LinearSegment(
                _au(1.39, -0.01, -0.04), _au(0.0007, 0.0138, 0.0063)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.JUPITER_BARYCENTER): LinearSegment(
                _au(4.00, 2.74, 1.08), _au(-0.0046, 0.0059, 0.0026)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.SATURN_BARYCENTER): LinearSegment(
                _au(6.41, 6.57, 2.44), _au(-0.0046, 0.0035, 0.0016)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.URANUS_BARYCENTER): LinearSegment(
                _au(14.43, -12.51, -5.68), _au(0.0027, 0.0024, 0.0010)
            ),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.NEPTUNE_BARYCENTER): LinearSegment(
                _au(16.81, -22.98, -9.83), _au(0.0026, 0.0016, 0.0006)
            ),
        }
    )


@pytest.fixture
def static_sun_earth_ephem():
    """Sun fixed at the barycenter, Earth fixed 1 AU along +x."""
    return LinearEphemeris(
        {
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.SUN): LinearSegment([0.0, 0.0, 0.0]),
            (BodyId.SOLAR_SYSTEM_BARYCENTER, BodyId.EARTH_MOON_BARYCENTER): LinearSegment([AU_KM, 0.0, 0.0]),
            (BodyId.EARTH_MOON_BARYCENTER, BodyId.EARTH): LinearSegment([0.0, 0.0, 0.0]),
        }
    )


@pytest.fixture
def instant():
    return Instant(EPOCH_TT)


@pytest.fixture
def neptune_sequence_ephem():
    """Neptune states around 2025-02-07 12:00 UTC as a DE kernel reports them."""
    velocity = (1.0, 2.0, 3.0)
    return SequenceEphemeris(
        [
            ((4469342279.707888, -31213424.580853883, -124046256.6991955), velocity),
            ((4469342279.707446, -31213424.61872705, -124046256.7146862), velocity),
        ]
    )
