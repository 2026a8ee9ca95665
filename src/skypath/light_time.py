from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import Context, resolve
from .constants import SECONDS_PER_DAY
from .instant import Instant
from .quantities import Velocity
from .vector import Vector3

logger = logging.getLogger(__name__)


class LightTimeDelay:
    """Iterative light-time solution between two barycentric snapshots.

    ``center`` and ``target`` are Geometric snapshots at the same instant; the
    target body is re-evaluated at the retarded time until the delay settles.
    """

    def __init__(self, center, target, ephem, context: Context | None = None) -> None:
        self.center = center
        self.target = target
        self.ephem = ephem
        self.context = resolve(context)
        self.iterations = 0
        self.converged = False
        self.residual: Optional[float] = None
        self._delay: Optional[float] = None
        self._result: Optional[tuple[Vector3, Vector3]] = None

    @classmethod
    def compute_for(cls, center, target, ephem, context: Context | None = None) -> tuple[Vector3, Vector3]:
        return cls(center, target, ephem, context).compute()

    @property
    def delay(self) -> float:
        """Light time in seconds."""
        if self._delay is None:
            self.compute()
        return self._delay

    def _distance_km(self, position: Vector3) -> float:
        return float(np.linalg.norm(position.to_array("km") - self.center.position.to_array("km")))

    def compute(self) -> tuple[Vector3, Vector3]:
        if self._result is not None:
            return self._result

        config = self.context.config
        c_kmps = Velocity.light_speed().kmps
        tt = self.center.instant.tt
        body = self.target.target_body

        delay = self._distance_km(self.target.position) / c_kmps
        position, velocity = self.target.position, self.target.velocity
        for _ in range(config.light_time_max_iterations):
            retarded = body.geometric_at(
                Instant(tt - delay / SECONDS_PER_DAY), self.ephem, context=self.context
            )
            position, velocity = retarded.position, retarded.velocity
            new_delay = self._distance_km(position) / c_kmps
            self.iterations += 1
            self.residual = abs(new_delay - delay)
            delay = new_delay
            if self.residual < config.light_time_precision:
                self.converged = True
                break

        if not self.converged:
            logger.debug(
                "light time for %s did not converge after %d iterations (residual %.3e s)",
                getattr(body, "__name__", body),
                self.iterations,
                self.residual,
            )
        self._delay = delay
        self._result = (position, velocity)
        return self._result
