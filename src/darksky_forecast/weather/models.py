"""Data models for Dark Sky forecasts."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from darksky_forecast.weather.temperature import Temperature
from darksky_forecast.weather.units import CodecContext

# Fields decoded in the second stage, once the context is known
TEMPERATURE_FIELDS = (
    "temperature",
    "apparent_temperature",
    "temperature_low",
    "temperature_high",
    "dew_point",
)
TIME_FIELDS = (
    "time",
    "temperature_high_time",
    "temperature_low_time",
)


class WireModel(BaseModel):
    """Base for models read from the wire with camelCase field names."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ObservationFields(WireModel):
    """Observation fields that need no decoding context."""
    summary: Optional[str] = Field(None, description="Human readable summary")
    icon: Optional[str] = Field(None, description="Icon identifier")
    nearest_storm_distance: Optional[float] = Field(None, description="Distance to nearest storm")
    precip_intensity: Optional[float] = Field(None, description="Precipitation intensity")
    precip_probability: Optional[float] = Field(None, description="Precipitation probability (0-1)")
    precip_type: Optional[str] = Field(None, description="Precipitation type")
    humidity: Optional[float] = Field(None, description="Relative humidity (0-1)")
    pressure: Optional[float] = Field(None, description="Sea-level air pressure")
    wind_speed: Optional[float] = Field(None, description="Wind speed")
    wind_gust: Optional[float] = Field(None, description="Wind gust speed")
    wind_bearing: Optional[float] = Field(None, description="Wind bearing in degrees")
    cloud_cover: Optional[float] = Field(None, description="Cloud cover (0-1)")
    uv_index: Optional[float] = Field(None, description="UV index")
    visibility: Optional[float] = Field(None, description="Visibility distance")
    ozone: Optional[float] = Field(None, description="Columnar ozone density")


class Observation(ObservationFields):
    """A single weather snapshot.

    ``Observation()`` with every field unset is the zero-valued record.
    """
    time: Optional[datetime] = Field(None, description="Observation time (UTC)")
    temperature: Optional[Temperature] = Field(None, description="Air temperature")
    apparent_temperature: Optional[Temperature] = Field(None, description="Feels-like temperature")
    temperature_low: Optional[Temperature] = Field(None, description="Daily low")
    temperature_low_time: Optional[datetime] = Field(None, description="Time of the daily low (UTC)")
    temperature_high: Optional[Temperature] = Field(None, description="Daily high")
    temperature_high_time: Optional[datetime] = Field(None, description="Time of the daily high (UTC)")
    dew_point: Optional[Temperature] = Field(None, description="Dew point")


class GroupFields(WireModel):
    """Observation group fields that need no decoding context."""
    summary: Optional[str] = Field(None, description="Summary of the period")
    icon: Optional[str] = Field(None, description="Icon identifier")


class ObservationGroup(GroupFields):
    """A named, chronologically ordered collection of observations."""
    data: Optional[List[Observation]] = Field(None, description="Observations in source order")


class Flags(WireModel):
    """Metadata block of a forecast document."""
    sources: Optional[List[str]] = Field(None, description="Data sources")
    nearest_station: Optional[float] = Field(
        None, alias="nearest-station", description="Distance to the nearest station"
    )
    units: Optional[str] = Field(None, description="Unit-system selector")

    def context(self) -> CodecContext:
        """Context to decode and encode this document's temperatures with."""
        return CodecContext.from_units_flag(self.units)


class ForecastFields(WireModel):
    """Forecast document fields that need no decoding context."""
    latitude: float = Field(0.0, ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(0.0, ge=-180, le=180, description="Longitude in decimal degrees")
    timezone: Optional[str] = Field(None, description="IANA timezone identifier")
    offset: Optional[float] = Field(None, description="UTC offset in hours")
    flags: Flags = Field(default_factory=Flags, description="Document metadata")


class Forecast(ForecastFields):
    """Root of a Dark Sky forecast document.

    A payload slot missing from the wire stays ``None``.
    """
    currently: Optional[Observation] = Field(None, description="Current conditions")
    minutely: Optional[ObservationGroup] = Field(None, description="Minute-by-minute group")
    hourly: Optional[ObservationGroup] = Field(None, description="Hour-by-hour group")
    daily: Optional[ObservationGroup] = Field(None, description="Day-by-day group")
