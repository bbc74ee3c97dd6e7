"""Configuration settings for the Dark Sky forecast client."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# API Configuration
DARKSKY_URL_TEMPLATE: str = os.getenv(
    "DARKSKY_URL_TEMPLATE",
    "https://api.darksky.net/forecast/{key}/{lat:f},{lon:f}?exclude=minutely&units=us"
)
DARKSKY_API_KEY: str = os.getenv("DARKSKY_API_KEY", "")

# Transport settings
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
KEEPALIVE_SECONDS: float = float(os.getenv("KEEPALIVE_SECONDS", "30"))

# Default location (Berkeley)
DEFAULT_LAT: Final[float] = 37.8267
DEFAULT_LON: Final[float] = -122.4233

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
