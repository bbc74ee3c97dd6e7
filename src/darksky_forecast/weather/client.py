"""HTTP client for the Dark Sky forecast API."""

import logging
from typing import Optional

import httpx

from darksky_forecast.config import (
    DARKSKY_API_KEY, DARKSKY_URL_TEMPLATE, KEEPALIVE_SECONDS, REQUEST_TIMEOUT_SECONDS
)
from darksky_forecast.exceptions import ForecastError, UnsuccessfulStatusError
from darksky_forecast.weather.codec import decode_forecast
from darksky_forecast.weather.models import Forecast

logger = logging.getLogger(__name__)


class DarkSkyClient:
    """Async client for fetching forecasts from the Dark Sky API."""

    def __init__(
        self,
        api_key: str = DARKSKY_API_KEY,
        url_template: str = DARKSKY_URL_TEMPLATE,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        keepalive: float = KEEPALIVE_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the forecast client.

        Args:
            api_key: Dark Sky access key
            url_template: Request URL template with ``key``, ``lat`` and ``lon`` fields
            timeout: Request timeout in seconds
            keepalive: Idle connection keep-alive in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.url_template = url_template
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(keepalive_expiry=keepalive),
            transport=transport
        )

    def build_url(self, lat: float, lon: float) -> str:
        """Fill the URL template for the given coordinates."""
        return self.url_template.format(key=self.api_key, lat=lat, lon=lon)

    async def get_forecast(self, lat: float, lon: float) -> Forecast:
        """Fetch and decode the forecast for given coordinates.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            Decoded forecast document

        Raises:
            ValueError: If coordinates are invalid
            httpx.RequestError: If the service cannot be reached
            UnsuccessfulStatusError: If the response status is not 2xx
            MalformedForecastError: If the response body has an unexpected shape
            UnrecognizedUnitError: If a temperature unit is unknown
        """
        # Validate coordinates
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise ValueError(f"Invalid coordinates: lat={lat}, lon={lon}")

        url = self.build_url(lat, lon)

        logger.info(f"Fetching forecast for lat={lat}, lon={lon}")

        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.error(f"Request error to Dark Sky API: {e}")
            raise

        if response.status_code // 100 != 2:
            logger.error(f"HTTP error from Dark Sky API: {response.status_code}")
            raise UnsuccessfulStatusError(response.status_code)

        try:
            forecast = decode_forecast(response.content)
        except ForecastError as e:
            logger.error(f"Invalid API response format: {e}")
            raise

        hours = len(forecast.hourly.data or []) if forecast.hourly else 0
        logger.info(f"Successfully fetched forecast with {hours} hourly entries")
        return forecast

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
