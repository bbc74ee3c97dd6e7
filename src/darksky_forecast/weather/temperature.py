"""Temperature value type stored canonically in Kelvin."""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from darksky_forecast.exceptions import MalformedForecastError
from darksky_forecast.weather.units import (
    LEGACY_DEFAULT_UNIT, UnitLike,
    from_celsius, from_fahrenheit, from_kelvin, to_celsius, to_fahrenheit, to_kelvin
)

logger = logging.getLogger(__name__)


class Temperature(BaseModel):
    """A temperature measurement held in Kelvin.

    Any float is accepted; conversions never clamp. Absence of a
    measurement is expressed with ``None`` at the field level, so 0 K is an
    ordinary value.
    """
    model_config = ConfigDict(frozen=True)

    kelvin: float = Field(..., description="Temperature in Kelvin")

    @classmethod
    def from_celsius(cls, value: float) -> "Temperature":
        """Create a temperature from degrees Celsius."""
        return cls(kelvin=from_celsius(value))

    @classmethod
    def from_fahrenheit(cls, value: float) -> "Temperature":
        """Create a temperature from degrees Fahrenheit."""
        return cls(kelvin=from_fahrenheit(value))

    @property
    def celsius(self) -> float:
        return to_celsius(self.kelvin)

    @property
    def fahrenheit(self) -> float:
        return to_fahrenheit(self.kelvin)

    @classmethod
    def decode(cls, raw: Any, unit: Optional[UnitLike] = None) -> "Temperature":
        """Decode a raw wire scalar.

        Args:
            raw: JSON number as found on the wire
            unit: Unit the scalar is expressed in; Celsius when omitted

        Returns:
            Temperature in canonical form

        Raises:
            MalformedForecastError: If ``raw`` is not a number or does not fit a float
            UnrecognizedUnitError: If ``unit`` is not a known token
        """
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise MalformedForecastError(f"expected a number, got {type(raw).__name__}")
        try:
            value = float(raw)
        except OverflowError:
            raise MalformedForecastError("number out of range for a float") from None
        if unit is None:
            unit = LEGACY_DEFAULT_UNIT
        return cls(kelvin=to_kelvin(value, unit))

    def encode(self, unit: Optional[UnitLike] = None) -> float:
        """Encode to a wire scalar in ``unit``.

        Without a unit the scalar is written in Celsius, matching ``decode``,
        so a bare scalar round trips. This differs from the Fahrenheit
        output the service's own US profile uses.

        Raises:
            UnrecognizedUnitError: If ``unit`` is not a known token
        """
        if unit is None:
            unit = LEGACY_DEFAULT_UNIT
        value = from_kelvin(self.kelvin, unit)
        logger.debug(f"Encoding temperature {self.kelvin} K as {value} ({unit})")
        return value

    def __str__(self) -> str:
        return f"{self.fahrenheit:f}"
