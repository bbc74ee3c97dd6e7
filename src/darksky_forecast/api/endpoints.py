"""API endpoints for the forecast service."""

import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from darksky_forecast.config import DEFAULT_LAT, DEFAULT_LON
from darksky_forecast.exceptions import (
    MalformedForecastError, UnrecognizedUnitError, UnsuccessfulStatusError
)
from darksky_forecast.weather.codec import encode_forecast
from darksky_forecast.weather.service import ForecastService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/forecast", tags=["forecast"])


def get_forecast_service() -> ForecastService:
    """Dependency to get forecast service instance."""
    return ForecastService()


@router.get("/")
async def get_forecast(
    lat: Optional[float] = Query(
        None,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees (use with lon)"
    ),
    lon: Optional[float] = Query(
        None,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees (use with lat)"
    ),
    units: Optional[str] = Query(
        None,
        description="Unit-system selector for the response ('us' for Fahrenheit, anything else for Celsius)"
    ),
    forecast_service: ForecastService = Depends(get_forecast_service)
) -> Dict[str, Any]:
    """Get the forecast encoded in the Dark Sky wire format.

    Args:
        lat: Latitude in decimal degrees (must provide with lon)
        lon: Longitude in decimal degrees (must provide with lat)
        units: Optional unit-system selector for the response

    Returns:
        Forecast document

    Raises:
        HTTPException: If parameters are invalid or the upstream request fails
    """
    try:
        async with forecast_service:
            lat, lon = validate_coordinates(lat, lon)
            forecast = await forecast_service.get_forecast(lat=lat, lon=lon, units=units)

        logger.info(f"Successfully retrieved forecast for lat={lat}, lon={lon}")
        return encode_forecast(forecast)

    except (UnsuccessfulStatusError, MalformedForecastError, UnrecognizedUnitError) as e:
        logger.error(f"Upstream forecast error: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    except httpx.RequestError as e:
        logger.error(f"Forecast service unreachable: {e}")
        raise HTTPException(status_code=503, detail="Forecast service temporarily unavailable")

    except ValueError as e:
        logger.error(f"Error getting forecast: {e}")
        raise HTTPException(status_code=400, detail=str(e))


def validate_coordinates(
    lat: Optional[float],
    lon: Optional[float]
) -> tuple[float, float]:
    """
    Validate and normalize coordinate parameters.

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        Tuple of (latitude, longitude)

    Raises:
        HTTPException: If only one coordinate is provided
    """
    if lat is None and lon is None:
        logger.info(f"Using default location: ({DEFAULT_LAT}, {DEFAULT_LON})")
        return DEFAULT_LAT, DEFAULT_LON

    if lat is None or lon is None:
        raise HTTPException(
            status_code=400,
            detail="Both latitude and longitude must be provided when using coordinates."
        )

    return lat, lon


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "darksky-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including default location and features
    """
    return {
        "service": "Dark Sky Forecast Client",
        "version": "0.1.0",
        "default_location": {
            "latitude": DEFAULT_LAT,
            "longitude": DEFAULT_LON
        },
        "features": [
            "Current, hourly and daily forecasts",
            "Temperatures re-encoded in Fahrenheit or Celsius"
        ],
        "data_source": "Dark Sky API"
    }
