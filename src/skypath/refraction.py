from __future__ import annotations

from .coordinates import Horizontal
from .quantities import Angle

DEFAULT_PRESSURE_MBAR = 1000.0
DEFAULT_TEMPERATURE_K = 298.15

# above this altitude the zenith-angle tangent form is used
HIGH_ALTITUDE_DEGREES = 15.0


class Refraction:
    """Atmospheric refraction of a horizontal position (Duffett-Smith & Zwart ch. 37).

    Pressure is in millibar and temperature in Kelvin, the units `Observer` carries.
    """

    def __init__(
        self,
        coordinates: Horizontal,
        pressure: float = DEFAULT_PRESSURE_MBAR,
        temperature: float = DEFAULT_TEMPERATURE_K,
    ) -> None:
        if temperature <= 0.0:
            raise ValueError(f"temperature must be positive Kelvin, got {temperature}")
        self.coordinates = coordinates
        self.pressure = pressure
        self.temperature = temperature

    @classmethod
    def for_observer(cls, coordinates: Horizontal, observer) -> "Refraction":
        return cls(coordinates, observer.pressure, observer.temperature)

    @classmethod
    def angle(cls, coordinates: Horizontal, observer) -> Angle:
        return cls.for_observer(coordinates, observer).refraction_angle()

    @classmethod
    def correct_horizontal_coordinates(
        cls,
        coordinates: Horizontal,
        pressure: float = DEFAULT_PRESSURE_MBAR,
        temperature: float = DEFAULT_TEMPERATURE_K,
    ) -> Horizontal:
        return cls(coordinates, pressure, temperature).refract()

    def refraction_angle(self) -> Angle:
        altitude = self.coordinates.altitude.degrees
        if altitude > HIGH_ALTITUDE_DEGREES:
            zenith = Angle.from_degrees(90.0 - altitude)
            degrees = 0.00452 * self.pressure * zenith.tan() / self.temperature
        else:
            numerator = self.pressure * (0.1594 + 0.0196 * altitude + 0.00002 * altitude * altitude)
            denominator = self.temperature * (1.0 + 0.505 * altitude + 0.0845 * altitude * altitude)
            degrees = numerator / denominator
        return Angle.from_degrees(degrees)

    def refract(self) -> Horizontal:
        """The apparent (refracted) position; only the altitude changes."""
        return Horizontal(
            azimuth=self.coordinates.azimuth,
            altitude=self.coordinates.altitude + self.refraction_angle(),
            latitude=self.coordinates.latitude,
            longitude=self.coordinates.longitude,
        )
