from __future__ import annotations

import copy
from typing import Any, Callable, Dict

import httpx
import pytest

from darksky_forecast.weather.client import DarkSkyClient

TEST_URL_TEMPLATE = "https://darksky.test/forecast/{key}/{lat:f},{lon:f}"

US_DOCUMENT: Dict[str, Any] = {
    "latitude": 37.8267,
    "longitude": -122.4233,
    "timezone": "America/Los_Angeles",
    "offset": -8,
    "currently": {
        "time": 1509993277,
        "summary": "Drizzle",
        "icon": "rain",
        "nearestStormDistance": 0,
        "precipIntensity": 0.0089,
        "precipProbability": 0.9,
        "precipType": "rain",
        "temperature": 72,
        "apparentTemperature": 70.5,
        "dewPoint": 50,
        "humidity": 0.83,
        "pressure": 1010.34,
        "windSpeed": 5.59,
        "windGust": 12.03,
        "windBearing": 246,
        "cloudCover": 0.7,
        "uvIndex": 1,
        "visibility": 9.84,
        "ozone": 267.44,
    },
    "hourly": {
        "summary": "Rain starting later this afternoon.",
        "icon": "rain",
        "data": [
            {"time": 1509991200, "temperature": 65.76, "apparentTemperature": 66.01},
            {"time": 1509994800, "temperature": 66.7, "dewPoint": 60.1},
        ],
    },
    "daily": {
        "summary": "Mixed precipitation throughout the week.",
        "icon": "rain",
        "data": [
            {
                "time": 1509955200,
                "temperatureHigh": 66.35,
                "temperatureHighTime": 1509994800,
                "temperatureLow": 41.28,
                "temperatureLowTime": 1510056000,
            },
        ],
    },
    "flags": {
        "sources": ["nwspa", "cmc", "gfs"],
        "nearest-station": 1.835,
        "units": "us",
    },
}


@pytest.fixture
def us_document() -> Dict[str, Any]:
    return copy.deepcopy(US_DOCUMENT)


@pytest.fixture
def ca_document() -> Dict[str, Any]:
    return {
        "latitude": 45.5017,
        "longitude": -73.5673,
        "timezone": "America/Toronto",
        "offset": -5,
        "currently": {"time": 1509993277, "temperature": 22, "dewPoint": 10.5},
        "flags": {"sources": ["cmc"], "nearest-station": 3.1, "units": "ca"},
    }


@pytest.fixture
def make_client() -> Callable[..., DarkSkyClient]:
    """Build a client whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> DarkSkyClient:
        return DarkSkyClient(
            api_key="secret",
            url_template=TEST_URL_TEMPLATE,
            transport=httpx.MockTransport(handler),
        )

    return factory
