"""Forecast service wrapping the Dark Sky client."""

import logging
from typing import Optional

import httpx

from darksky_forecast.exceptions import ForecastError
from darksky_forecast.weather.client import DarkSkyClient
from darksky_forecast.weather.models import Forecast

logger = logging.getLogger(__name__)


class ForecastService:
    """Service for retrieving forecasts in a requested unit system."""

    def __init__(self, client: Optional[DarkSkyClient] = None):
        """Initialize the forecast service.

        Args:
            client: Forecast client instance (creates default if None)
        """
        self.client = client or DarkSkyClient()

    async def get_forecast(
        self,
        lat: float,
        lon: float,
        units: Optional[str] = None
    ) -> Forecast:
        """Get the forecast for given coordinates.

        Temperatures are held in Kelvin regardless of ``units``; the
        selector only changes how the forecast is encoded afterwards.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            units: Optional unit-system selector to encode the result with

        Returns:
            Decoded forecast

        Raises:
            ValueError: If coordinates are invalid
            httpx.RequestError: If the service cannot be reached
            ForecastError: If the response cannot be used
        """
        try:
            forecast = await self.client.get_forecast(lat, lon)
        except (ValueError, httpx.RequestError, ForecastError) as e:
            logger.error(f"Error getting forecast for lat={lat}, lon={lon}: {e}")
            raise

        if units is not None and units != forecast.flags.units:
            logger.info(f"Switching unit system from {forecast.flags.units!r} to {units!r}")
            flags = forecast.flags.model_copy(update={"units": units})
            forecast = forecast.model_copy(update={"flags": flags})

        return forecast

    async def aclose(self):
        """Close the forecast client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing forecast client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
