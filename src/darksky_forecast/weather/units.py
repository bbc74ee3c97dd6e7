"""Temperature units, conversions and the decode/encode context."""

from enum import Enum
from typing import Final, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from darksky_forecast.exceptions import UnrecognizedUnitError

ABSOLUTE_ZERO_CELSIUS: Final[float] = 273.15

# Selector emitted by the service for Fahrenheit-based documents
US_UNITS_FLAG: Final[str] = "us"


class TemperatureUnit(str, Enum):
    """Wire tokens for the supported temperature units."""

    KELVIN = "kelvin"
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @classmethod
    def parse(cls, token: Union["TemperatureUnit", str]) -> "TemperatureUnit":
        """Resolve a unit token.

        Args:
            token: Unit member or its string token

        Returns:
            The matching TemperatureUnit

        Raises:
            UnrecognizedUnitError: If the token is not a known unit
        """
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            raise UnrecognizedUnitError(token) from None


UnitLike = Union[TemperatureUnit, str]

# Unit a bare scalar is read as when no context reaches the call site
LEGACY_DEFAULT_UNIT: Final[TemperatureUnit] = TemperatureUnit.CELSIUS


def from_celsius(value: float) -> float:
    """Convert degrees Celsius to Kelvin."""
    return value + ABSOLUTE_ZERO_CELSIUS


def to_celsius(kelvin: float) -> float:
    """Convert Kelvin to degrees Celsius."""
    return kelvin - ABSOLUTE_ZERO_CELSIUS


def from_fahrenheit(value: float) -> float:
    """Convert degrees Fahrenheit to Kelvin."""
    return (value - 32) * 5. / 9. + ABSOLUTE_ZERO_CELSIUS


def to_fahrenheit(kelvin: float) -> float:
    """Convert Kelvin to degrees Fahrenheit."""
    return (kelvin - ABSOLUTE_ZERO_CELSIUS) * 9. / 5. + 32


def to_kelvin(value: float, unit: UnitLike) -> float:
    """Convert a scalar expressed in ``unit`` to Kelvin.

    Raises:
        UnrecognizedUnitError: If ``unit`` is not a known token
    """
    unit = TemperatureUnit.parse(unit)
    if unit is TemperatureUnit.CELSIUS:
        return from_celsius(value)
    if unit is TemperatureUnit.FAHRENHEIT:
        return from_fahrenheit(value)
    return value


def from_kelvin(kelvin: float, unit: UnitLike) -> float:
    """Convert a Kelvin value to a scalar expressed in ``unit``.

    Raises:
        UnrecognizedUnitError: If ``unit`` is not a known token
    """
    unit = TemperatureUnit.parse(unit)
    if unit is TemperatureUnit.CELSIUS:
        return to_celsius(kelvin)
    if unit is TemperatureUnit.FAHRENHEIT:
        return to_fahrenheit(kelvin)
    return kelvin


class CodecContext(BaseModel):
    """Document-wide settings carried into every nested decode/encode call.

    The context is derived once at the document root and passed down
    explicitly; nothing below the root derives or overrides it.
    """
    model_config = ConfigDict(frozen=True)

    temperature_unit: TemperatureUnit = Field(
        TemperatureUnit.KELVIN,
        description="Unit of every temperature scalar in the subtree"
    )

    def __init__(self, temperature_unit: UnitLike = TemperatureUnit.KELVIN, **data):
        # Unknown tokens raise UnrecognizedUnitError, not a ValidationError
        super().__init__(temperature_unit=TemperatureUnit.parse(temperature_unit), **data)

    @classmethod
    def from_units_flag(cls, units: Optional[str]) -> "CodecContext":
        """Derive the context from a document's ``flags.units`` selector.

        ``"us"`` selects Fahrenheit; anything else, including a missing
        selector, selects Celsius.
        """
        if units == US_UNITS_FLAG:
            return cls(temperature_unit=TemperatureUnit.FAHRENHEIT)
        return cls(temperature_unit=TemperatureUnit.CELSIUS)
